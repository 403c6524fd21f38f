"""Domain models, schemas and errors for content ingestion."""

from modules.content.domain.content_map import FlattenedContent, flatten, unflatten
from modules.content.domain.errors import ContentError, ContentParseError, SiteConfigError
from modules.content.domain.models import (
    AssemblyOutcome,
    BatchResult,
    Entry,
    FileConfig,
    FileFolder,
    IndexFileConfig,
    LocalizedEntry,
    PathInfo,
    RawFileItem,
)
from modules.content.domain.schemas import (
    SINGLETON_COLLECTION_NAME,
    CanonicalSlugOptions,
    CollectionConfig,
    CollectionFileConfig,
    FieldConfig,
    I18nOptions,
    IndexFileOptions,
    SiteConfig,
)

__all__ = [
    "AssemblyOutcome",
    "BatchResult",
    "CanonicalSlugOptions",
    "CollectionConfig",
    "CollectionFileConfig",
    "ContentError",
    "ContentParseError",
    "Entry",
    "FieldConfig",
    "FileConfig",
    "FileFolder",
    "FlattenedContent",
    "I18nOptions",
    "IndexFileConfig",
    "IndexFileOptions",
    "LocalizedEntry",
    "PathInfo",
    "RawFileItem",
    "SINGLETON_COLLECTION_NAME",
    "SiteConfig",
    "SiteConfigError",
    "flatten",
    "unflatten",
]
