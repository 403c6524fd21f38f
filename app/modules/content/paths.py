"""File path helpers for collections.

Detects file extensions and formats, builds the full-path pattern that
recognizes an entry collection's files, and extracts the sub-path and
locale of a raw file.
"""

import posixpath
import re
from collections.abc import Mapping
from typing import List, Optional, Pattern, Tuple, Union

from modules.content.domain.models import PathInfo, RawFileItem
from modules.content.i18n.models import NormalizedI18nOptions
from modules.content.templates import template_to_pattern

MARKDOWN_EXTENSIONS = frozenset({"md", "mkd", "mkdn", "mdwn", "mdown", "markdown"})

_DEFAULT_LOCALE_IN_FILE_NAME = re.compile(r"\.\{\{locale\}\}\.(\w+)$")


def detect_file_extension(
    extension: Optional[str] = None,
    format: Optional[str] = None,
    custom_extensions: Optional[Mapping] = None,
) -> str:
    """Detect the file extension from the configured extension and format.

    Args:
        extension: Developer-defined extension.
        format: Developer-defined format.
        custom_extensions: Extension declared by each custom format.

    Returns:
        Extension without the leading dot. Markdown by default.
    """
    if format and custom_extensions and custom_extensions.get(format):
        return custom_extensions[format]

    if extension:
        return extension

    if format in ("yaml", "yml"):
        return "yml"

    if format in ("toml", "json"):
        return format

    return "md"


def detect_file_format(extension: str, format: Optional[str] = None) -> str:
    """Detect the file format from the configured format and the extension."""
    if format:
        return format

    if extension in ("yaml", "yml"):
        return "yaml"

    if extension in ("toml", "json"):
        return extension

    if extension in MARKDOWN_EXTENSIONS:
        # Front matter flavour is detected from the file text
        return "frontmatter"

    return "yaml-frontmatter"


def get_front_matter_delimiters(
    format: str, delimiter: Union[str, List[str], None] = None
) -> Optional[Tuple[str, str]]:
    """Return the start and end front matter delimiters.

    None means the decoder detects them from the text.
    """
    if isinstance(delimiter, str) and delimiter.strip():
        return (delimiter, delimiter)

    if isinstance(delimiter, list) and len(delimiter) == 2:
        return (delimiter[0], delimiter[1])

    if format == "json-frontmatter":
        return ("{", "}")

    if format == "toml-frontmatter":
        return ("+++", "+++")

    if format == "yaml-frontmatter":
        return ("---", "---")

    return None


def _locale_alternation(locales) -> str:
    return "|".join(re.escape(locale) for locale in locales)


def get_entry_path_regex(
    *,
    extension: str,
    base_path: str,
    i18n: NormalizedI18nOptions,
    sub_path: Optional[str] = None,
    index_file_name: Optional[str] = None,
) -> Pattern[str]:
    """Build the pattern matching the file paths of an entry collection.

    The pattern exposes a ``sub_path`` group and, for locale-split
    structures, a ``locale`` group.

    Args:
        extension: File extension of the collection.
        base_path: Collection folder without surrounding slashes.
        i18n: Normalized i18n options of the collection.
        sub_path: Collection ``path`` template, if any.
        index_file_name: Name of the included index file, if any.
    """
    structure_map = i18n.structure_map

    if sub_path:
        sub_path_pattern = template_to_pattern(sub_path)
        if index_file_name:
            sub_path_pattern = f"{sub_path_pattern}|{re.escape(index_file_name)}"
    else:
        # A slug may contain slashes, so this cannot be limited to one segment
        sub_path_pattern = ".+?"

    locale_pattern = f"(?P<locale>{_locale_alternation(i18n.all_locales)})"
    parts = ["^"]

    if structure_map.i18n_root_multi_folder:
        parts.append(f"{locale_pattern}/")

    if base_path:
        parts.append(f"{re.escape(base_path)}/")

    if structure_map.i18n_multi_folder:
        parts.append(f"{locale_pattern}/")

    parts.append(f"(?P<sub_path>{sub_path_pattern})")

    if structure_map.i18n_multi_file:
        if i18n.omit_default_locale_from_filename:
            others = [
                locale for locale in i18n.all_locales if locale != i18n.default_locale
            ]
            parts.append(f"(?:\\.(?P<locale>{_locale_alternation(others)}))?")
        else:
            parts.append(f"\\.{locale_pattern}")

    parts.append(f"\\.{re.escape(extension)}$")

    return re.compile("".join(parts))


def get_locale_path(i18n: NormalizedI18nOptions, locale: str, path: str) -> str:
    """Fill the ``{{locale}}`` placeholders of a file path.

    When the default locale is omitted from file names, ``about.{{locale}}.md``
    becomes ``about.md`` for the default locale.
    """
    if i18n.omit_default_locale_from_filename and locale == i18n.default_locale:
        path = _DEFAULT_LOCALE_IN_FILE_NAME.sub(r".\1", path)

    return path.replace("{{locale}}", locale)


def get_base_name(path: str) -> str:
    """Return the last segment of a repository path."""
    return posixpath.basename(path)


def extract_path_info(
    file: RawFileItem,
    *,
    file_name: Optional[str] = None,
    full_path_regex: Optional[Pattern[str]] = None,
    default_locale: Optional[str] = None,
    is_multi_file_structure: bool = False,
) -> PathInfo:
    """Extract the sub-path and locale of a raw file.

    Args:
        file: Raw file item.
        file_name: Collection file name, for file collection items.
        full_path_regex: Entry collection path pattern.
        default_locale: Default locale of the collection.
        is_multi_file_structure: Whether the locale-split i18n structure applies.

    Returns:
        PathInfo; ``sub_path`` is None when the file does not belong here.
    """
    if file_name:
        if not is_multi_file_structure:
            return PathInfo(sub_path=file.path, locale=None)

        path_map = file.folder.file_path_map or {}
        for locale, locale_path in path_map.items():
            if locale_path == file.path:
                return PathInfo(sub_path=file.path, locale=locale or None)
        return PathInfo()

    if full_path_regex is None:
        return PathInfo()

    found = full_path_regex.match(file.path)
    if found is None:
        return PathInfo()

    groups = found.groupdict()
    locale = groups.get("locale")

    # Only the default locale's file lacks a locale segment (omitted from the file name)
    if locale is None and is_multi_file_structure:
        locale = default_locale

    return PathInfo(sub_path=groups.get("sub_path"), locale=locale)
