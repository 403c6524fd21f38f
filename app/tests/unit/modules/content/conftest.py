"""Feature-level fixtures for content ingestion tests.

Provides registries for the common collection layouts and a sample
repository checkout on disk.
"""

import pytest

from tests.factories.content import (
    make_collection,
    make_collection_file,
    make_id_factory,
    make_registry,
    make_site_config,
)

SITE_I18N = {"structure": "multiple_files", "locales": ["en", "fr"]}


@pytest.fixture
def plain_registry():
    """Registry with an i18n-disabled ``posts`` collection under content/posts."""
    return make_registry(make_site_config(collections=[make_collection(i18n=False)]))


@pytest.fixture
def multi_file_registry():
    """Registry whose ``posts`` collection stores one file per locale (hello.en.md)."""
    return make_registry(make_site_config(collections=[make_collection()], i18n=SITE_I18N))


@pytest.fixture
def multi_folder_registry():
    """Registry whose ``posts`` collection stores one folder per locale (en/hello.md)."""
    return make_registry(
        make_site_config(
            collections=[make_collection()],
            i18n={"structure": "multiple_folders", "locales": ["en", "fr"]},
        )
    )


@pytest.fixture
def single_file_registry():
    """Registry whose ``posts`` collection keeps every locale in one file."""
    return make_registry(
        make_site_config(
            collections=[make_collection()],
            i18n={"structure": "single_file", "locales": ["en", "fr"]},
        )
    )


@pytest.fixture
def file_collection_registry():
    """Registry with a ``pages`` file collection holding a locale-split about page."""
    return make_registry(
        make_site_config(
            collections=[
                make_collection(
                    name="pages",
                    files=[make_collection_file(i18n=True).model_dump(exclude_unset=True)],
                )
            ],
            i18n=SITE_I18N,
        )
    )


@pytest.fixture
def id_factory():
    """Deterministic entry ID factory."""
    return make_id_factory()


@pytest.fixture
def sample_repository(tmp_path):
    """Create a small content repository.

    Layout:
    - config.yml
    - content/posts/hello.en.md
    - content/posts/hello.fr.md
    - content/about.en.md
    - content/about.fr.md
    - static/logo.svg
    """
    (tmp_path / "content" / "posts").mkdir(parents=True)
    (tmp_path / "static").mkdir()

    (tmp_path / "config.yml").write_text(
        "i18n:\n"
        "  structure: multiple_files\n"
        "  locales: [en, fr]\n"
        "collections:\n"
        "  - name: posts\n"
        "    folder: content/posts\n"
        "    i18n: true\n"
        "  - divider: true\n"
        "  - name: pages\n"
        "    i18n: true\n"
        "    files:\n"
        "      - name: about\n"
        "        file: content/about.{{locale}}.md\n"
        "        i18n: true\n",
        encoding="utf-8",
    )
    (tmp_path / "content" / "posts" / "hello.en.md").write_text(
        "---\ntitle: Hello\n---\nHi", encoding="utf-8"
    )
    (tmp_path / "content" / "posts" / "hello.fr.md").write_text(
        "---\ntitle: Bonjour\n---\nSalut", encoding="utf-8"
    )
    (tmp_path / "content" / "about.en.md").write_text("---\ntitle: About\n---\n", encoding="utf-8")
    (tmp_path / "content" / "about.fr.md").write_text(
        "---\ntitle: À propos\n---\n", encoding="utf-8"
    )
    (tmp_path / "static" / "logo.svg").write_text("<svg/>", encoding="utf-8")

    return tmp_path
