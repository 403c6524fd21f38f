"""Test data factories for deterministic test data generation."""

from tests.factories.content import (
    make_collection,
    make_collection_file,
    make_id_factory,
    make_markdown,
    make_raw_file,
    make_registry,
    make_site_config,
)

__all__ = [
    "make_collection",
    "make_collection_file",
    "make_id_factory",
    "make_markdown",
    "make_raw_file",
    "make_registry",
    "make_site_config",
]
