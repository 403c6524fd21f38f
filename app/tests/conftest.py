import sys
from pathlib import Path

# Ensure the application package root is on sys.path so importing application
# modules (e.g. `infrastructure.configuration`) works during pytest collection.
# Pytest may import `conftest` before the project root is on sys.path
# depending on invocation; add it explicitly here.
project_root = str(Path(__file__).resolve().parents[1])
if project_root not in sys.path:
    sys.path.insert(0, project_root)

import pytest  # noqa: E402
import structlog  # noqa: E402

from tests.factories.content import (  # noqa: E402
    make_collection,
    make_registry,
    make_site_config,
)


@pytest.fixture(autouse=True)
def _clear_logging_context():
    """Keep structlog context variables from leaking between tests."""
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.fixture
def i18n_site_config():
    """Site config with English (default) and French locales."""
    return make_site_config(
        collections=[make_collection()],
        i18n={"structure": "multiple_files", "locales": ["en", "fr"]},
    )


@pytest.fixture
def i18n_registry(i18n_site_config):
    """Registry built from the English/French site config."""
    return make_registry(i18n_site_config)
