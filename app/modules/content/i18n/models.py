"""Normalized i18n option models.

Defines the resolved, per collection-or-file view of internationalization
settings that every other part of the engine consumes.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple

DEFAULT_LOCALE_KEY = "_default"


class I18nStructure(str, Enum):
    """How a collection's files are laid out across locales."""

    SINGLE_FILE = "single_file"
    MULTIPLE_FILES = "multiple_files"
    MULTIPLE_FOLDERS = "multiple_folders"
    MULTIPLE_FOLDERS_I18N_ROOT = "multiple_folders_i18n_root"

    @classmethod
    def from_string(cls, value: str) -> "I18nStructure":
        """Convert a configured structure string to the enum.

        Raises:
            ValueError: If the structure name is not supported.
        """
        try:
            return cls(value)
        except ValueError as e:
            raise ValueError(f"Unsupported i18n structure: {value}") from e


@dataclass(frozen=True)
class StructureMap:
    """Mutually exclusive flags derived from the structure and i18n status.

    At most one flag is true; all are false when i18n is disabled.
    """

    i18n_single_file: bool = False
    i18n_multi_file: bool = False
    i18n_multi_folder: bool = False
    i18n_root_multi_folder: bool = False

    @classmethod
    def create(cls, i18n_enabled: bool, structure: I18nStructure) -> "StructureMap":
        return cls(
            i18n_single_file=i18n_enabled and structure is I18nStructure.SINGLE_FILE,
            i18n_multi_file=i18n_enabled and structure is I18nStructure.MULTIPLE_FILES,
            i18n_multi_folder=i18n_enabled and structure is I18nStructure.MULTIPLE_FOLDERS,
            i18n_root_multi_folder=i18n_enabled
            and structure is I18nStructure.MULTIPLE_FOLDERS_I18N_ROOT,
        )

    @property
    def is_locale_split(self) -> bool:
        """True when each locale of an entry lives in its own file."""
        return self.i18n_multi_file or self.i18n_multi_folder or self.i18n_root_multi_folder


@dataclass(frozen=True)
class CanonicalSlug:
    """Canonical slug configuration.

    Attributes:
        key: Content field that links the locale-split files of one entry.
        value: Template used by writers to populate that field for the default locale.
    """

    key: str = "translationKey"
    value: str = "{{slug}}"


@dataclass(frozen=True)
class NormalizedI18nOptions:
    """Resolved i18n options for a collection or a collection file.

    Attributes:
        i18n_enabled: Whether at least one locale is configured.
        structure: File layout across locales.
        structure_map: Flags derived from structure and i18n_enabled.
        all_locales: Configured locales, or the ``_default`` pseudo-locale.
        default_locale: Member of all_locales used as the authoritative locale.
        initial_locales: Locales enabled for new entries; always has default_locale.
        save_all_locales: Whether every locale is written on save.
        canonical_slug: Canonical slug key and value template.
        omit_default_locale_from_filename: Whether default locale files carry no locale suffix.
    """

    i18n_enabled: bool = False
    structure: I18nStructure = I18nStructure.SINGLE_FILE
    structure_map: StructureMap = field(default_factory=StructureMap)
    all_locales: Tuple[str, ...] = (DEFAULT_LOCALE_KEY,)
    default_locale: str = DEFAULT_LOCALE_KEY
    initial_locales: Tuple[str, ...] = (DEFAULT_LOCALE_KEY,)
    save_all_locales: bool = True
    canonical_slug: CanonicalSlug = field(default_factory=CanonicalSlug)
    omit_default_locale_from_filename: bool = False


DEFAULT_I18N_OPTIONS = NormalizedI18nOptions()
