"""Infrastructure configuration module - public API.

This module provides centralized configuration management using
Pydantic BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    IngestionSettings: Content ingestion settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    max_workers = settings.ingestion.max_workers
    log_level = settings.LOG_LEVEL
    ```
"""

from infrastructure.configuration.ingestion import IngestionSettings
from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "IngestionSettings", "settings"]
