"""Entry assembler.

Turns one decoded file into an entry, or merges it into an entry created
from another locale's file. Files that do not belong to any recognized
entry are skipped silently; only decoding problems count as errors, and
those are handled by the batch driver.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from infrastructure.logging import get_module_logger
from modules.content.accumulator import EntryAccumulator
from modules.content.domain.content_map import FlattenedContent
from modules.content.domain.models import (
    AssemblyOutcome,
    Entry,
    FileConfig,
    LocalizedEntry,
    RawFileItem,
)
from modules.content.domain.schemas import FieldConfig
from modules.content.fields import has_root_list_field
from modules.content.i18n.models import DEFAULT_LOCALE_KEY, NormalizedI18nOptions
from modules.content.index_file import IndexFileLookup, get_index_file, should_skip_index_file
from modules.content.paths import extract_path_info
from modules.content.registry import (
    CollectionRegistry,
    ResolvedCollection,
    ResolvedCollectionFile,
)
from modules.content.templates import TemplateCompiler, get_slug

logger = get_module_logger()

RootListDetector = Callable[[Sequence[FieldConfig]], bool]


@dataclass(frozen=True)
class AssemblyTarget:
    """The collection (and collection file) a raw file resolves to."""

    collection: ResolvedCollection
    collection_file: Optional[ResolvedCollectionFile] = None

    @property
    def i18n(self) -> NormalizedI18nOptions:
        if self.collection_file is not None:
            return self.collection_file.i18n
        return self.collection.i18n

    @property
    def fields(self) -> List[FieldConfig]:
        if self.collection_file is not None:
            return self.collection_file.fields
        return self.collection.fields

    @property
    def file_config(self) -> FileConfig:
        if self.collection_file is not None:
            return self.collection_file.file
        # Entry collections always resolve a file config
        return self.collection.file  # type: ignore[return-value]


def wrap_root_list(
    content: Any, fields: Sequence[FieldConfig], i18n: NormalizedI18nOptions
) -> Optional[Any]:
    """Wrap a bare root-level list as ``{<field name>: list}``.

    For the single-file i18n structure the wrapping applies to each locale.

    Returns:
        The wrapped content, or None when the content shape does not match.
    """
    field_name = fields[0].name

    if i18n.structure_map.i18n_single_file:
        if not isinstance(content, Mapping) or not all(
            isinstance(value, list) for value in content.values()
        ):
            return None
        return {locale: {field_name: value} for locale, value in content.items()}

    if not isinstance(content, list):
        return None

    return {field_name: content}


class EntryAssembler:
    """Assembles entries from decoded files.

    Attributes:
        registry: Collection registry used to resolve files.
        template_compiler: Compiler for slug templates (default: regex compiler).
        index_file_lookup: Resolves a collection's index file inclusion.
        root_list_detector: Detects the root-level list field exception.
    """

    def __init__(
        self,
        registry: CollectionRegistry,
        *,
        template_compiler: Optional[TemplateCompiler] = None,
        index_file_lookup: IndexFileLookup = get_index_file,
        root_list_detector: RootListDetector = has_root_list_field,
    ):
        self.registry = registry
        self.template_compiler = template_compiler
        self.index_file_lookup = index_file_lookup
        self.root_list_detector = root_list_detector

    def resolve_target(self, file: RawFileItem) -> Optional[AssemblyTarget]:
        """Resolve the collection and collection file of a raw file.

        Returns:
            AssemblyTarget, or None when either is not configured.
        """
        collection = self.registry.get_collection(file.folder.collection_name)
        if collection is None:
            self._skip(file, "collection_not_found")
            return None

        file_name = file.folder.file_name
        if not file_name:
            if collection.file is None:
                self._skip(file, "collection_file_not_found")
                return None
            return AssemblyTarget(collection=collection)

        collection_file = self.registry.get_collection_file(collection, file_name)
        if collection_file is None:
            self._skip(file, "collection_file_not_found")
            return None

        return AssemblyTarget(collection=collection, collection_file=collection_file)

    def assemble(
        self,
        file: RawFileItem,
        content: Any,
        accumulator: EntryAccumulator,
        *,
        target: Optional[AssemblyTarget] = None,
    ) -> AssemblyOutcome:
        """Create or merge the entry for one decoded file.

        Args:
            file: Raw file item.
            content: Decoded content of the file.
            accumulator: Entries of the current batch.
            target: Resolved collection and collection file; resolved from the
                file when omitted.

        Returns:
            AssemblyOutcome describing what happened to the file.
        """
        if target is None:
            target = self.resolve_target(file)
            if target is None:
                return AssemblyOutcome.SKIPPED

        i18n = target.i18n
        collection = target.collection
        file_name = file.folder.file_name

        if self.root_list_detector(target.fields):
            content = wrap_root_list(content, target.fields, i18n)
            if content is None:
                return self._skip(file, "root_list_shape_mismatch")

        if not isinstance(content, Mapping):
            return self._skip(file, "unexpected_content_shape")

        if should_skip_index_file(
            file.path,
            file_name,
            collection.config,
            collection.config.path,
            target.file_config.extension,
            index_file_lookup=self.index_file_lookup,
        ):
            return self._skip(file, "index_file")

        path_info = extract_path_info(
            file,
            file_name=file_name,
            full_path_regex=target.file_config.full_path_regex,
            default_locale=i18n.default_locale,
            is_multi_file_structure=i18n.structure_map.is_locale_split,
        )

        if not path_info.sub_path:
            return self._skip(file, "path_mismatch")

        slug = file_name or get_slug(
            path_info.sub_path,
            collection.config.path,
            compiler=self.template_compiler,
        )

        if not i18n.i18n_enabled:
            entry = Entry(
                slug=slug,
                sub_path=path_info.sub_path,
                content_id=file.content_id,
                locales={
                    DEFAULT_LOCALE_KEY: self._localize(file, slug, content),
                },
                meta=dict(file.meta),
            )
            accumulator.add(entry)
            return AssemblyOutcome.NEW

        if i18n.structure_map.i18n_single_file:
            locales = {}
            for locale in i18n.all_locales:
                if locale not in content:
                    continue
                locale_content = content[locale]
                if locale_content is None:
                    locale_content = {}
                if not isinstance(locale_content, Mapping):
                    logger.debug("locale_content_ignored", path=file.path, locale=locale)
                    continue
                locales[locale] = self._localize(file, slug, locale_content)

            accumulator.add(
                Entry(
                    slug=slug,
                    sub_path=path_info.sub_path,
                    content_id=file.content_id,
                    locales=locales,
                    meta=dict(file.meta),
                )
            )
            return AssemblyOutcome.NEW

        locale = path_info.locale
        if not locale:
            return self._skip(file, "locale_undetermined")

        canonical_slug = content.get(i18n.canonical_slug.key)
        if not isinstance(canonical_slug, str) or not canonical_slug:
            canonical_slug = slug

        entry_id = f"{collection.name}/{canonical_slug}"
        outcome = accumulator.merge_locale(
            entry_id,
            locale,
            self._localize(file, slug, content),
            is_default_locale=locale == i18n.default_locale,
            sub_path=path_info.sub_path,
            meta=file.meta,
        )

        logger.debug(
            "locale_file_assembled",
            path=file.path,
            entry_id=entry_id,
            locale=locale,
            outcome=outcome.value,
        )

        return outcome

    @staticmethod
    def _localize(file: RawFileItem, slug: str, content: Mapping) -> LocalizedEntry:
        return LocalizedEntry(
            slug=slug,
            path=file.path,
            content_id=file.content_id,
            content=FlattenedContent.from_nested(content),
        )

    @staticmethod
    def _skip(file: RawFileItem, reason: str) -> AssemblyOutcome:
        logger.debug(
            "file_skipped",
            path=file.path,
            collection=file.folder.collection_name,
            reason=reason,
        )
        return AssemblyOutcome.SKIPPED
