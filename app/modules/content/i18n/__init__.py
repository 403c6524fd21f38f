"""i18n configuration for content collections.

Main components:
- models: NormalizedI18nOptions, I18nStructure, StructureMap, CanonicalSlug
- normalizer: normalize_i18n_config and its merge/resolution helpers
"""

from modules.content.i18n.models import (
    DEFAULT_I18N_OPTIONS,
    DEFAULT_LOCALE_KEY,
    CanonicalSlug,
    I18nStructure,
    NormalizedI18nOptions,
    StructureMap,
)
from modules.content.i18n.normalizer import normalize_i18n_config

__all__ = [
    "DEFAULT_I18N_OPTIONS",
    "DEFAULT_LOCALE_KEY",
    "CanonicalSlug",
    "I18nStructure",
    "NormalizedI18nOptions",
    "StructureMap",
    "normalize_i18n_config",
]
