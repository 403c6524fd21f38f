"""Content ingestion module.

Reads the raw files of a content repository and assembles them into
locale-aware entries according to the site's collection and i18n
configuration.

Main components:
- registry: CollectionRegistry resolving collections and their i18n options
- decoder: FrontMatterDecoder for data files and front matter documents
- assembler: EntryAssembler building entries from decoded files
- service: prepare_entries / EntryIngestionService batch driver
- sources: collect_local_files for a repository checkout
"""

from modules.content.accumulator import EntryAccumulator
from modules.content.assembler import AssemblyTarget, EntryAssembler
from modules.content.decoder import ContentDecoder, FrontMatterDecoder
from modules.content.domain import (
    AssemblyOutcome,
    BatchResult,
    ContentError,
    ContentParseError,
    Entry,
    FileFolder,
    LocalizedEntry,
    RawFileItem,
    SiteConfig,
    SiteConfigError,
)
from modules.content.loader import load_site_config, parse_site_config
from modules.content.registry import CollectionRegistry
from modules.content.service import EntryIngestionService, prepare_entries
from modules.content.sources import collect_local_files

__all__ = [
    "AssemblyOutcome",
    "AssemblyTarget",
    "BatchResult",
    "CollectionRegistry",
    "ContentDecoder",
    "ContentError",
    "ContentParseError",
    "Entry",
    "EntryAccumulator",
    "EntryAssembler",
    "EntryIngestionService",
    "FileFolder",
    "FrontMatterDecoder",
    "LocalizedEntry",
    "RawFileItem",
    "SiteConfig",
    "SiteConfigError",
    "collect_local_files",
    "load_site_config",
    "parse_site_config",
    "prepare_entries",
]
