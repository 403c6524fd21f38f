"""Content ingestion feature settings."""

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings


class IngestionSettings(FeatureSettings):
    """Content ingestion configuration.

    Controls where the site configuration and repository live when the
    engine is run from the command line, and how many worker threads are
    used to decode files in a batch.

    Environment Variables:
        INGEST_SITE_CONFIG_PATH: Path to the YAML site configuration (default: config.yml)
        INGEST_REPOSITORY_ROOT: Root directory of the content repository (default: .)
        INGEST_MAX_WORKERS: Decoder threads per batch; 1 disables the pool (default: 4)

    Example:
        ```python
        from infrastructure.configuration import settings

        workers = settings.ingestion.max_workers
        config_path = settings.ingestion.site_config_path
        ```
    """

    site_config_path: str = Field(
        default="config.yml",
        alias="INGEST_SITE_CONFIG_PATH",
        description="Path to the YAML site configuration file",
    )
    repository_root: str = Field(
        default=".",
        alias="INGEST_REPOSITORY_ROOT",
        description="Root directory of the content repository",
    )
    max_workers: int = Field(
        default=4,
        alias="INGEST_MAX_WORKERS",
        description="Number of decoder threads per batch (1 disables the pool)",
    )
    encoding: str = Field(
        default="utf-8",
        alias="INGEST_FILE_ENCODING",
        description="Text encoding used when reading repository files",
    )

    @field_validator("max_workers", mode="before")
    @classmethod
    def validate_max_workers(cls, v):
        """Clamp the worker count to at least one thread."""
        try:
            value = int(v)
        except (TypeError, ValueError):
            return 1
        return max(value, 1)
