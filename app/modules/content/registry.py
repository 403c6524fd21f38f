"""Collection registry.

Resolves the developer-defined collections of a site configuration into the
engine's internal view: normalized i18n options, file settings (extension,
format, full-path pattern) and per-file settings for file collections. The
i18n normalizer runs here, once per collection and collection file.
"""

import posixpath
from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Optional, Sequence

from infrastructure.logging import get_module_logger
from modules.content.domain.models import FileConfig, FileFolder, IndexFileConfig
from modules.content.domain.schemas import (
    SINGLETON_COLLECTION_NAME,
    CollectionConfig,
    CollectionFileConfig,
    FieldConfig,
    SiteConfig,
)
from modules.content.i18n.models import DEFAULT_LOCALE_KEY, NormalizedI18nOptions
from modules.content.i18n.normalizer import LOCALE_PLACEHOLDER, normalize_i18n_config
from modules.content.index_file import get_index_file
from modules.content.paths import (
    detect_file_extension,
    detect_file_format,
    get_entry_path_regex,
    get_front_matter_delimiters,
    get_locale_path,
)

logger = get_module_logger()


@dataclass(frozen=True)
class ResolvedCollectionFile:
    """A collection file with its resolved i18n and file settings."""

    config: CollectionFileConfig
    i18n: NormalizedI18nOptions
    file: FileConfig

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def fields(self) -> List[FieldConfig]:
        return self.config.fields


@dataclass(frozen=True)
class ResolvedCollection:
    """A collection with its resolved i18n and file settings.

    Attributes:
        config: Developer-defined collection.
        i18n: Normalized i18n options of the collection.
        file: File settings; None for file collections, whose files carry their own.
        files: Resolved collection files keyed by name (file collections only).
        index_file: Index file inclusion settings (entry collections only).
    """

    config: CollectionConfig
    i18n: NormalizedI18nOptions
    file: Optional[FileConfig] = None
    files: Dict[str, ResolvedCollectionFile] = field(default_factory=dict)
    index_file: Optional[IndexFileConfig] = None

    @property
    def name(self) -> str:
        return self.config.name

    @property
    def fields(self) -> List[FieldConfig]:
        return self.config.fields

    @property
    def is_entry_collection(self) -> bool:
        return self.config.is_entry_collection


@dataclass(frozen=True)
class EntryFolderInfo:
    """Where the files of a collection, or of one collection file, live.

    Attributes:
        folder: Descriptor attached to every raw file found here.
        folder_path_map: Locale to folder path (entry collections only).
    """

    folder: FileFolder
    folder_path_map: Dict[str, str] = field(default_factory=dict)


def get_file_config(
    collection: CollectionConfig,
    i18n: NormalizedI18nOptions,
    file: Optional[CollectionFileConfig] = None,
    custom_extensions: Optional[Mapping[str, str]] = None,
) -> FileConfig:
    """Resolve the file settings of a collection or a collection file.

    Args:
        collection: Developer-defined collection.
        i18n: Normalized i18n options for the collection or file.
        file: Developer-defined collection file.
        custom_extensions: Extension declared by each custom format.

    Returns:
        FileConfig for the collection (entry collections) or the file.
    """
    file_path = file.file if file is not None else None

    if file_path:
        configured_extension = posixpath.splitext(file_path)[1].lstrip(".") or None
    else:
        configured_extension = collection.extension

    configured_format = (file.format if file is not None else None) or collection.format
    extension = detect_file_extension(configured_extension, configured_format, custom_extensions)
    format = detect_file_format(extension, configured_format)

    delimiter = collection.frontmatter_delimiter
    if file is not None and file.frontmatter_delimiter is not None:
        delimiter = file.frontmatter_delimiter

    base_path = collection.folder if collection.is_entry_collection else None
    full_path_regex = None

    if base_path is not None:
        index_file = get_index_file(collection)
        full_path_regex = get_entry_path_regex(
            extension=extension,
            base_path=base_path,
            i18n=i18n,
            sub_path=collection.path,
            index_file_name=index_file.name if index_file else None,
        )

    return FileConfig(
        extension=extension,
        format=format,
        base_path=base_path,
        sub_path=collection.path if collection.is_entry_collection else None,
        full_path_regex=full_path_regex,
        full_path=get_locale_path(i18n, i18n.default_locale, file_path) if file_path else None,
        fm_delimiters=get_front_matter_delimiters(format, delimiter),
    )


def get_file_path_map(file: CollectionFileConfig, i18n: NormalizedI18nOptions) -> Dict[str, str]:
    """Map every locale of a collection file to its repository path."""
    if LOCALE_PLACEHOLDER not in file.file:
        return {DEFAULT_LOCALE_KEY: file.file}

    return {locale: get_locale_path(i18n, locale, file.file) for locale in i18n.all_locales}


class CollectionRegistry:
    """Resolved collections of a site, looked up by name.

    Usage:
        registry = CollectionRegistry(load_site_config(Path("config.yml")))
        collection = registry.get_collection("posts")
    """

    def __init__(
        self,
        site_config: SiteConfig,
        custom_extensions: Optional[Mapping[str, str]] = None,
    ):
        self.site_config = site_config
        self.custom_extensions = dict(custom_extensions or {})
        self._collections: Dict[str, ResolvedCollection] = {}

        for collection in self._valid_collections():
            self._collections[collection.name] = self._resolve(collection)

        logger.info(
            "collection_registry_built",
            collection_count=len(self._collections),
            i18n_enabled=site_config.i18n is not None,
        )

    def _valid_collections(self) -> List[CollectionConfig]:
        collections = [
            collection
            for collection in self.site_config.collections
            if collection.is_entry_collection or collection.is_file_collection
        ]

        skipped = len(self.site_config.collections) - len(collections)
        if skipped:
            logger.warning("invalid_collections_ignored", count=skipped)

        if self.site_config.singletons:
            collections.append(
                CollectionConfig(
                    name=SINGLETON_COLLECTION_NAME,
                    files=list(self.site_config.singletons),
                )
            )

        return collections

    def _resolve(self, collection: CollectionConfig) -> ResolvedCollection:
        site_i18n = self.site_config.i18n
        i18n = normalize_i18n_config(collection, site_i18n=site_i18n)

        if collection.is_entry_collection:
            return ResolvedCollection(
                config=collection,
                i18n=i18n,
                file=get_file_config(collection, i18n, custom_extensions=self.custom_extensions),
                index_file=get_index_file(collection),
            )

        files: Dict[str, ResolvedCollectionFile] = {}
        for file in collection.files or []:
            file_i18n = normalize_i18n_config(collection, file, site_i18n=site_i18n)
            files[file.name] = ResolvedCollectionFile(
                config=file,
                i18n=file_i18n,
                file=get_file_config(collection, file_i18n, file, self.custom_extensions),
            )

        return ResolvedCollection(config=collection, i18n=i18n, files=files)

    def get_collection(self, name: str) -> Optional[ResolvedCollection]:
        """Get a resolved collection by name, or None if it is not defined."""
        return self._collections.get(name)

    def get_collection_file(
        self, collection: ResolvedCollection, file_name: str
    ) -> Optional[ResolvedCollectionFile]:
        """Get a resolved file of a file collection, or None if it is not defined."""
        return collection.files.get(file_name)

    @property
    def collections(self) -> Sequence[ResolvedCollection]:
        return list(self._collections.values())

    def folders(self) -> List[EntryFolderInfo]:
        """List where every collection's files live, entry collections first."""
        entry_folders: List[EntryFolderInfo] = []
        file_folders: List[EntryFolderInfo] = []

        for collection in self._collections.values():
            if collection.config.hide:
                continue

            if collection.is_entry_collection:
                folder_path = collection.config.folder or ""
                root_multi_folder = collection.i18n.structure_map.i18n_root_multi_folder
                entry_folders.append(
                    EntryFolderInfo(
                        folder=FileFolder(collection_name=collection.name),
                        folder_path_map={
                            locale: (
                                posixpath.join(locale, folder_path).rstrip("/")
                                if root_multi_folder
                                else folder_path
                            )
                            for locale in collection.i18n.all_locales
                        },
                    )
                )
                continue

            for resolved_file in collection.files.values():
                file_folders.append(
                    EntryFolderInfo(
                        folder=FileFolder(
                            collection_name=collection.name,
                            file_name=resolved_file.name,
                            file_path_map=get_file_path_map(
                                resolved_file.config, resolved_file.i18n
                            ),
                        )
                    )
                )

        entry_folders.sort(key=lambda info: next(iter(info.folder_path_map.values()), ""))
        file_folders.sort(
            key=lambda info: next(iter((info.folder.file_path_map or {}).values()), "")
        )

        return entry_folders + file_folders
