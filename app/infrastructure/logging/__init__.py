"""Structured logging infrastructure.

This package provides centralized logging configuration and utilities
for the content ingestion engine using structlog.

Public API:
    - configure_logging(): Initialize logging for the application
    - get_module_logger(): Get a logger for the calling module
    - bind_batch_context(): Context manager for batch-scoped logging
    - get_batch_id(): Get current batch ID from context
    - clear_batch_context(): Clear all batch context

Example:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("module_initialized")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)
from infrastructure.logging.context import (
    bind_batch_context,
    get_batch_id,
    clear_batch_context,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_batch_context",
    "get_batch_id",
    "clear_batch_context",
]
