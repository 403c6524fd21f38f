"""Provider-agnostic data models for content ingestion.

Lightweight dataclasses (not Pydantic) used internally by the engine:

  - RawFileItem / FileFolder: a file handed over by the file source
  - PathInfo: sub-path and locale extracted from a file path
  - LocalizedEntry / Entry: the assembled, locale-aware entry
  - BatchResult: terminal output of a batch

Developer-written configuration is validated separately in schemas.py.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Pattern, Tuple

from modules.content.domain.content_map import FlattenedContent


@dataclass(frozen=True)
class FileFolder:
    """Descriptor of the collection (and file) a raw file belongs to.

    Attributes:
        collection_name: Name of the owning collection.
        file_name: Name of the collection file, for file collections only.
        file_path_map: Locale to path map of a file collection item.
    """

    collection_name: str
    file_name: Optional[str] = None
    file_path_map: Optional[Dict[str, str]] = None


@dataclass
class RawFileItem:
    """A raw file supplied by the file source.

    Attributes:
        name: Base name of the file.
        path: Repository path of the file.
        text: Undecoded file text.
        content_id: Content identity, e.g. a git blob SHA-1.
        size: Size in bytes.
        folder: Owning collection descriptor.
        meta: Extra attributes copied onto the entry (e.g. commit info).
    """

    name: str
    path: str
    text: str
    content_id: str
    size: int
    folder: FileFolder
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class PathInfo:
    """Sub-path and locale extracted from a file path.

    ``sub_path`` is None when the path does not belong to the collection.
    """

    sub_path: Optional[str] = None
    locale: Optional[str] = None


@dataclass(frozen=True)
class IndexFileConfig:
    """Index file inclusion settings of an entry collection."""

    name: str = "_index"
    label: Optional[str] = None


@dataclass
class LocalizedEntry:
    """One locale's view of an entry."""

    slug: str
    path: str
    content_id: str
    content: FlattenedContent


@dataclass
class Entry:
    """A logical content entry assembled from one or more files.

    Attributes:
        id: Correlation ID during a batch; a fresh opaque ID after the final sweep.
        slug: Canonical short name, authoritative from the default locale.
        sub_path: Template-relative path fragment identifying the entry.
        content_id: Content identity of the authoritative file.
        locales: Locale code (or ``_default``) to LocalizedEntry.
        meta: Extra attributes copied from the file item.
    """

    id: str = ""
    slug: str = ""
    sub_path: str = ""
    content_id: str = ""
    locales: Dict[str, LocalizedEntry] = field(default_factory=dict)
    meta: Dict[str, Any] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True when the entry has a slug and at least one locale."""
        return bool(self.slug) and bool(self.locales)


class AssemblyOutcome(str, Enum):
    """What the assembler did with one decoded file."""

    NEW = "new"
    MERGED = "merged"
    SKIPPED = "skipped"


@dataclass
class BatchResult:
    """Terminal output of a batch: usable entries plus recoverable errors."""

    entries: List[Entry] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)


@dataclass(frozen=True)
class FileConfig:
    """Resolved file settings of a collection or a collection file.

    Attributes:
        extension: File extension without the leading dot.
        format: Content format, e.g. ``yaml``, ``frontmatter``, ``toml-frontmatter``.
        base_path: Collection folder (entry collections only).
        sub_path: Collection ``path`` template (entry collections only).
        full_path_regex: Pattern matching the collection's file paths (entry collections only).
        full_path: Default locale path of a collection file (file collections only).
        fm_delimiters: Front matter delimiters, or None to detect them from the text.
    """

    extension: str
    format: str
    base_path: Optional[str] = None
    sub_path: Optional[str] = None
    full_path_regex: Optional[Pattern[str]] = None
    full_path: Optional[str] = None
    fm_delimiters: Optional[Tuple[str, str]] = None
