"""Developer-defined site configuration schemas.

These Pydantic models validate the site configuration file (collections,
singletons and the global ``i18n`` block). They mirror what a site author
writes; resolved, engine-internal views live in ``modules.content.registry``.
"""

from typing import Any, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

SINGLETON_COLLECTION_NAME = "_singletons"


def strip_slashes(value: str) -> str:
    """Remove leading and trailing slashes from a repository path."""
    return value.strip("/")


class CanonicalSlugOptions(BaseModel):
    """Canonical slug settings used to link locale-split files."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    key: Optional[str] = None
    value: Optional[str] = None


class I18nOptions(BaseModel):
    """Internationalization options at site, collection or file level.

    Only explicitly set values take part in the level merge, so every
    field is optional here and defaults are applied by the normalizer.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    structure: Optional[str] = None
    locales: Optional[List[str]] = None
    default_locale: Optional[str] = None
    initial_locales: Optional[Union[Literal["all", "default"], List[str]]] = None
    save_all_locales: Optional[bool] = None
    canonical_slug: Optional[CanonicalSlugOptions] = None
    omit_default_locale_from_filename: Optional[bool] = None


class FieldConfig(BaseModel):
    """Field definition; only the keys the engine inspects are typed."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    widget: str = "string"
    root: Optional[bool] = None


class IndexFileOptions(BaseModel):
    """Options for including a generator's special index file in a collection."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: Optional[str] = None
    label: Optional[str] = None


class CollectionFileConfig(BaseModel):
    """One named file of a file collection (or a singleton)."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    file: str
    label: Optional[str] = None
    format: Optional[str] = None
    frontmatter_delimiter: Optional[Union[str, List[str]]] = None
    fields: List[FieldConfig] = Field(default_factory=list)
    i18n: Optional[Union[bool, I18nOptions]] = None

    @field_validator("file")
    @classmethod
    def normalize_file_path(cls, v: str) -> str:
        """Strip leading and trailing slashes from the file path."""
        return strip_slashes(v)


class CollectionConfig(BaseModel):
    """A logical content bucket: an entry (folder) or a file collection."""

    model_config = ConfigDict(frozen=True, extra="allow")

    name: str
    label: Optional[str] = None
    folder: Optional[str] = None
    files: Optional[List[CollectionFileConfig]] = None
    path: Optional[str] = None
    extension: Optional[str] = None
    format: Optional[str] = None
    frontmatter_delimiter: Optional[Union[str, List[str]]] = None
    fields: List[FieldConfig] = Field(default_factory=list)
    i18n: Optional[Union[bool, I18nOptions]] = None
    index_file: Optional[Union[bool, IndexFileOptions]] = None
    hide: bool = False

    @field_validator("folder")
    @classmethod
    def normalize_folder(cls, v: Optional[str]) -> Optional[str]:
        """Strip leading and trailing slashes from the folder path."""
        return strip_slashes(v) if v is not None else None

    @property
    def is_entry_collection(self) -> bool:
        """True when the collection lists a folder of entries."""
        return self.folder is not None and self.files is None

    @property
    def is_file_collection(self) -> bool:
        """True when the collection lists explicitly named files."""
        return self.folder is None and self.files is not None

    @property
    def is_singleton(self) -> bool:
        """True for the pseudo collection holding the site's singletons."""
        return self.is_file_collection and self.name == SINGLETON_COLLECTION_NAME


class SiteConfig(BaseModel):
    """Root of the site configuration file."""

    model_config = ConfigDict(frozen=True, extra="allow")

    collections: List[CollectionConfig] = Field(default_factory=list)
    singletons: Optional[List[CollectionFileConfig]] = None
    i18n: Optional[I18nOptions] = None

    @field_validator("collections", mode="before")
    @classmethod
    def drop_dividers(cls, v: Any) -> Any:
        """Remove UI dividers, which are not collections."""
        if isinstance(v, list):
            return [item for item in v if not (isinstance(item, dict) and "divider" in item)]
        return v
