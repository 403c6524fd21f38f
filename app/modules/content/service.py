"""Batch driver for content ingestion.

Turns a batch of raw files into entries:

  1. resolve each file's collection and decode it (in parallel when
     ``max_workers > 1``);
  2. assemble the decoded files one by one, in input order, into a single
     accumulator;
  3. once every file is processed, give each entry a fresh ID and drop the
     entries that are not usable.

Per-file problems never abort the batch. Decoding failures are collected in
``BatchResult.errors``; files that do not belong to any entry are skipped.
"""

import contextvars
import uuid
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Sequence

from infrastructure.configuration import IngestionSettings, settings
from infrastructure.logging import bind_batch_context, get_module_logger
from modules.content.accumulator import EntryAccumulator
from modules.content.assembler import AssemblyTarget, EntryAssembler
from modules.content.decoder import ContentDecoder, FrontMatterDecoder
from modules.content.domain.errors import ContentParseError
from modules.content.domain.models import AssemblyOutcome, BatchResult, Entry, RawFileItem
from modules.content.registry import CollectionRegistry

logger = get_module_logger()

IdFactory = Callable[[], str]


def generate_entry_id() -> str:
    """Generate an opaque entry identifier."""
    return str(uuid.uuid4())


@dataclass
class _DecodedFile:
    file: RawFileItem
    target: Optional[AssemblyTarget] = None
    content: Any = None
    error: Optional[ContentParseError] = None


def _decode(
    file: RawFileItem, assembler: EntryAssembler, decoder: ContentDecoder
) -> _DecodedFile:
    target = assembler.resolve_target(file)
    if target is None:
        return _DecodedFile(file=file)

    try:
        content = decoder.decode(file, target.file_config)
    except ContentParseError as e:
        return _DecodedFile(file=file, target=target, error=e)
    except Exception as e:
        # Injected decoders may raise anything
        error = ContentParseError(file.path, f"{type(e).__name__}: {e}", e)
        error.__cause__ = e
        return _DecodedFile(file=file, target=target, error=error)

    return _DecodedFile(file=file, target=target, content=content)


def _decode_all(
    files: Sequence[RawFileItem],
    assembler: EntryAssembler,
    decoder: ContentDecoder,
    max_workers: int,
) -> List[_DecodedFile]:
    if max_workers <= 1 or len(files) <= 1:
        return [_decode(file, assembler, decoder) for file in files]

    # Workers inherit the batch logging context
    with ThreadPoolExecutor(max_workers=max_workers) as executor:
        futures = [
            executor.submit(contextvars.copy_context().run, _decode, file, assembler, decoder)
            for file in files
        ]
        return [future.result() for future in futures]


def _sweep(entries: Sequence[Entry], id_factory: IdFactory) -> List[Entry]:
    prepared = []
    for entry in entries:
        if not entry.is_valid:
            logger.debug("invalid_entry_dropped", entry_id=entry.id, slug=entry.slug)
            continue
        entry.id = id_factory()
        prepared.append(entry)
    return prepared


def prepare_entries(
    files: Sequence[RawFileItem],
    *,
    registry: CollectionRegistry,
    decoder: Optional[ContentDecoder] = None,
    id_factory: Optional[IdFactory] = None,
    max_workers: Optional[int] = None,
    assembler: Optional[EntryAssembler] = None,
) -> BatchResult:
    """Prepare entries from a batch of raw files.

    Args:
        files: Raw files supplied by the file source.
        registry: Resolved collections of the site.
        decoder: Content decoder (default: FrontMatterDecoder).
        id_factory: Zero-argument callable producing entry IDs (default: UUID4 string).
        max_workers: Decode concurrency (default: ``INGEST_MAX_WORKERS``).
        assembler: Entry assembler (default: built from the registry).

    Returns:
        BatchResult with the usable entries, in first-seen order, and the
        decoding errors.
    """
    decoder = decoder or FrontMatterDecoder()
    id_factory = id_factory or generate_entry_id
    assembler = assembler or EntryAssembler(registry)
    if max_workers is None:
        max_workers = settings.ingestion.max_workers

    accumulator = EntryAccumulator()
    errors: List[Exception] = []
    skipped = 0

    with bind_batch_context(file_count=len(files)):
        decoded_files = _decode_all(files, assembler, decoder, max_workers)

        for decoded in decoded_files:
            if decoded.error is not None:
                logger.warning(
                    "file_parse_failed",
                    path=decoded.file.path,
                    reason=decoded.error.reason,
                )
                errors.append(decoded.error)
                continue

            if decoded.target is None:
                skipped += 1
                continue

            outcome = assembler.assemble(
                decoded.file, decoded.content, accumulator, target=decoded.target
            )
            if outcome is AssemblyOutcome.SKIPPED:
                skipped += 1

        assembled = accumulator.snapshot()
        entries = _sweep(assembled, id_factory)

        logger.info(
            "batch_prepared",
            file_count=len(files),
            entry_count=len(entries),
            dropped_count=len(assembled) - len(entries),
            error_count=len(errors),
            skipped_count=skipped,
        )

    return BatchResult(entries=entries, errors=errors)


class EntryIngestionService:
    """Prepares entries for a site with a fixed registry and decoder.

    Usage:
        service = EntryIngestionService(registry)
        result = service.prepare(files)
    """

    def __init__(
        self,
        registry: CollectionRegistry,
        decoder: Optional[ContentDecoder] = None,
        ingestion_settings: Optional[IngestionSettings] = None,
        id_factory: Optional[IdFactory] = None,
    ):
        self.registry = registry
        self.decoder = decoder or FrontMatterDecoder()
        self.settings = ingestion_settings or settings.ingestion
        self.id_factory = id_factory or generate_entry_id
        self.assembler = EntryAssembler(registry)

    def prepare(self, files: Sequence[RawFileItem]) -> BatchResult:
        """Prepare entries from a batch of raw files."""
        return prepare_entries(
            files,
            registry=self.registry,
            decoder=self.decoder,
            id_factory=self.id_factory,
            max_workers=self.settings.max_workers,
            assembler=self.assembler,
        )
