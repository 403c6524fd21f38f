"""I18n configuration normalizer.

Merges the site-wide, collection-level and file-level ``i18n`` settings into
one ``NormalizedI18nOptions`` per collection or collection file. The
collection registry calls this once per collection/file while it is built.
"""

import re
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Sequence, Union

from infrastructure.logging import get_module_logger
from modules.content.domain.schemas import (
    CollectionConfig,
    CollectionFileConfig,
    I18nOptions,
)
from modules.content.i18n.models import (
    DEFAULT_I18N_OPTIONS,
    DEFAULT_LOCALE_KEY,
    CanonicalSlug,
    I18nStructure,
    NormalizedI18nOptions,
    StructureMap,
)

logger = get_module_logger()

LOCALE_PLACEHOLDER = "{{locale}}"

# A file path that carries the locale as a dedicated extension segment,
# e.g. ``content/about.{{locale}}.md``.
LOCALE_IN_FILE_NAME_REGEX = re.compile(r"\.\{\{locale\}\}\.[a-zA-Z0-9]+$")

I18nSource = Union[I18nOptions, Mapping, None]


def _as_options_dict(value: Any) -> Dict[str, Any]:
    """Return only the explicitly configured options of an i18n block."""
    if isinstance(value, I18nOptions):
        return value.model_dump(exclude_unset=True, exclude_none=True)
    if isinstance(value, Mapping):
        return {key: item for key, item in value.items() if item is not None}
    return {}


def _is_options_block(value: Any) -> bool:
    return isinstance(value, (I18nOptions, Mapping))


def merge_i18n_configs(
    collection: CollectionConfig,
    file: Optional[CollectionFileConfig] = None,
    site_i18n: I18nSource = None,
) -> Optional[Dict[str, Any]]:
    """Merge site, collection and file i18n blocks, later levels winning.

    Args:
        collection: Developer-defined collection.
        file: Developer-defined collection file, for file collections.
        site_i18n: Global ``i18n`` block of the site configuration.

    Returns:
        Merged options, or None if i18n does not apply at some level.
    """
    if not _is_options_block(site_i18n):
        return None

    # Singletons have no i18n block of their own and inherit the global one.
    if not (collection.i18n or collection.is_singleton):
        return None

    config = _as_options_dict(site_i18n)

    if _is_options_block(collection.i18n):
        config.update(_as_options_dict(collection.i18n))

    if file is not None:
        if not file.i18n:
            return None
        if _is_options_block(file.i18n):
            config.update(_as_options_dict(file.i18n))

    return config


def determine_structure(
    configured: Optional[str], file: Optional[CollectionFileConfig] = None
) -> I18nStructure:
    """Resolve the i18n structure; a file's own path shape is authoritative."""
    if file is not None:
        if LOCALE_PLACEHOLDER in file.file:
            return I18nStructure.MULTIPLE_FILES
        return I18nStructure.SINGLE_FILE

    if not configured:
        return I18nStructure.SINGLE_FILE

    try:
        return I18nStructure.from_string(configured)
    except ValueError:
        logger.warning("unsupported_i18n_structure", structure=configured)
        return I18nStructure.SINGLE_FILE


def determine_default_locale(
    i18n_enabled: bool, all_locales: Sequence[str], specified: Optional[str] = None
) -> str:
    """Return the configured default locale if valid, else the first locale."""
    if not i18n_enabled:
        return DEFAULT_LOCALE_KEY
    if specified and specified in all_locales:
        return specified
    return all_locales[0]


def determine_initial_locales(
    configured: Union[str, List[str], None],
    all_locales: Sequence[str],
    default_locale: str,
) -> List[str]:
    """Resolve the locales enabled for new entries.

    ``"all"`` keeps every locale, ``"default"`` only the default locale, and a
    list filters the configured locales. The default locale cannot be disabled.
    """
    if configured == "all":
        return list(all_locales)

    if configured == "default":
        return [default_locale]

    if isinstance(configured, list):
        return [
            locale
            for locale in all_locales
            if locale == default_locale or locale in configured
        ]

    return list(all_locales)


def normalize_i18n_config(
    collection: CollectionConfig,
    file: Optional[CollectionFileConfig] = None,
    *,
    site_i18n: I18nSource = None,
) -> NormalizedI18nOptions:
    """Get the normalized i18n configuration for a collection or collection file.

    Args:
        collection: Developer-defined collection.
        file: Developer-defined collection file.
        site_i18n: Global ``i18n`` block of the site configuration.

    Returns:
        NormalizedI18nOptions. When no level enables i18n, the disabled
        default with the ``_default`` pseudo-locale.
    """
    config = merge_i18n_configs(collection, file, site_i18n)

    if config is None or not config.get("locales"):
        return DEFAULT_I18N_OPTIONS

    all_locales = tuple(dict.fromkeys(config["locales"]))
    default_locale = determine_default_locale(True, all_locales, config.get("default_locale"))
    structure = determine_structure(config.get("structure"), file)
    structure_map = StructureMap.create(True, structure)
    initial_locales_config = config.get("initial_locales")

    save_all_locales = (
        config.get("save_all_locales", True) is True and initial_locales_config is None
    )

    canonical_slug_config = config.get("canonical_slug") or {}
    if isinstance(canonical_slug_config, Mapping):
        canonical_slug = CanonicalSlug(
            key=canonical_slug_config.get("key") or CanonicalSlug.key,
            value=canonical_slug_config.get("value") or CanonicalSlug.value,
        )
    else:
        canonical_slug = CanonicalSlug()

    if file is not None:
        separates_locale = bool(LOCALE_IN_FILE_NAME_REGEX.search(file.file))
    else:
        separates_locale = structure_map.i18n_multi_file

    omit_default_locale_from_filename = (
        bool(config.get("omit_default_locale_from_filename")) and separates_locale
    )

    options = NormalizedI18nOptions(
        i18n_enabled=True,
        structure=structure,
        structure_map=structure_map,
        all_locales=all_locales,
        default_locale=default_locale,
        initial_locales=tuple(
            determine_initial_locales(initial_locales_config, all_locales, default_locale)
        ),
        save_all_locales=save_all_locales,
        canonical_slug=canonical_slug,
        omit_default_locale_from_filename=omit_default_locale_from_filename,
    )

    logger.debug(
        "i18n_config_normalized",
        collection=collection.name,
        file=file.name if file is not None else None,
        structure=structure.value,
        locale_count=len(all_locales),
    )

    return options
