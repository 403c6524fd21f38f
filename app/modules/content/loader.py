"""Site configuration loading.

Reads the YAML site configuration and validates it into a ``SiteConfig``.
"""

from pathlib import Path
from typing import Any, Dict

import yaml
from pydantic import ValidationError

from infrastructure.logging import get_module_logger
from modules.content.domain.errors import SiteConfigError
from modules.content.domain.schemas import SiteConfig

logger = get_module_logger()


def parse_site_config(data: Any, source: str = "<memory>") -> SiteConfig:
    """Validate already-parsed configuration data.

    Args:
        data: Parsed configuration mapping.
        source: Where the data came from (for error messages).

    Returns:
        Validated SiteConfig.

    Raises:
        SiteConfigError: If the data is not a mapping or fails validation.
    """
    if data is None:
        data = {}

    if not isinstance(data, dict):
        logger.error("invalid_site_config_format", source=source, expected="dict")
        raise SiteConfigError(f"{source} must contain a mapping at the root")

    try:
        return SiteConfig.model_validate(data)
    except ValidationError as e:
        logger.error("site_config_validation_failed", source=source, error_count=e.error_count())
        raise SiteConfigError(f"Invalid site configuration in {source}: {e}") from e


def load_site_config(config_path: Path) -> SiteConfig:
    """Load the site configuration from a YAML file.

    Args:
        config_path: Path to the configuration file.

    Returns:
        Validated SiteConfig.

    Raises:
        SiteConfigError: If the file is missing, unreadable or invalid.
    """
    config_path = Path(config_path)

    if not config_path.is_file():
        raise SiteConfigError(f"Site configuration not found: {config_path}")

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data: Dict[str, Any] = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error("yaml_parse_error", file=str(config_path), error=str(e))
        raise SiteConfigError(f"Failed to parse {config_path}: {e}") from e

    config = parse_site_config(data, source=str(config_path))

    logger.info(
        "site_config_loaded",
        file=str(config_path),
        collection_count=len(config.collections),
        singleton_count=len(config.singletons or []),
    )

    return config
