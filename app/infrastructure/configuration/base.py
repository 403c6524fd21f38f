"""Shared base class for settings modules."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class FeatureSettings(BaseSettings):
    """Base class for feature module settings.

    Feature settings read their values from the environment or a local
    ``.env`` file; variable names are case sensitive and unknown variables
    are ignored.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )
