"""Tests for modules.content.service module."""

import uuid
from unittest.mock import Mock, patch

import pytest
import structlog

from infrastructure.configuration import IngestionSettings
from modules.content.domain import ContentParseError
from modules.content.i18n import DEFAULT_LOCALE_KEY
from modules.content.service import EntryIngestionService, prepare_entries
from tests.factories.content import make_id_factory, make_markdown, make_raw_file


def _hello_files():
    return [
        make_raw_file("content/posts/hello.en.md", make_markdown({"title": "Hello"}, "Hi")),
        make_raw_file("content/posts/hello.fr.md", make_markdown({"title": "Bonjour"}, "Salut")),
    ]


def _summary(result):
    return sorted(
        (
            entry.slug,
            entry.sub_path,
            entry.content_id,
            tuple(sorted((locale, dict(value.content)) for locale, value in entry.locales.items())),
        )
        for entry in result.entries
    )


@pytest.mark.unit
class TestPrepareEntries:
    """Tests for prepare_entries."""

    def test_merges_locale_files_into_one_entry(self, multi_file_registry, id_factory):
        result = prepare_entries(
            _hello_files(), registry=multi_file_registry, id_factory=id_factory, max_workers=1
        )

        assert result.errors == []
        (entry,) = result.entries
        assert entry.id == "entry-1"
        assert entry.slug == "hello"
        assert entry.sub_path == "hello"
        assert entry.locales["en"].content == {"title": "Hello", "body": "Hi"}
        assert entry.locales["fr"].content == {"title": "Bonjour", "body": "Salut"}
        assert entry.content_id == entry.locales["en"].content_id

    def test_input_order_does_not_matter(self, multi_file_registry):
        forward = prepare_entries(_hello_files(), registry=multi_file_registry, max_workers=1)
        backward = prepare_entries(
            list(reversed(_hello_files())), registry=multi_file_registry, max_workers=1
        )

        assert _summary(forward) == _summary(backward)

    def test_default_ids_are_uuids(self, multi_file_registry):
        result = prepare_entries(_hello_files(), registry=multi_file_registry, max_workers=1)

        uuid.UUID(result.entries[0].id)

    def test_ids_are_unique(self, plain_registry):
        files = [
            make_raw_file(f"content/posts/post-{index}.md", "---\ntitle: x\n---")
            for index in range(5)
        ]

        result = prepare_entries(files, registry=plain_registry, max_workers=1)

        assert len({entry.id for entry in result.entries}) == 5

    def test_index_file_is_excluded(self, plain_registry):
        files = [
            make_raw_file("content/posts/_index.md", "---\ntitle: Section\n---"),
            make_raw_file("content/posts/hello.md", "---\ntitle: Hello\n---"),
        ]

        result = prepare_entries(files, registry=plain_registry, max_workers=1)

        assert [entry.slug for entry in result.entries] == ["hello"]
        assert result.errors == []

    def test_i18n_disabled_uses_default_locale(self, plain_registry):
        result = prepare_entries(
            [make_raw_file("content/posts/hello.md", "---\ntitle: Hello\n---")],
            registry=plain_registry,
            max_workers=1,
        )

        assert list(result.entries[0].locales) == [DEFAULT_LOCALE_KEY]

    def test_parse_errors_are_collected(self, plain_registry):
        files = [
            make_raw_file("content/posts/broken.md", "---\ntitle: [unclosed\n---"),
            make_raw_file("content/posts/hello.md", "---\ntitle: Hello\n---"),
        ]

        result = prepare_entries(files, registry=plain_registry, max_workers=1)

        assert [entry.slug for entry in result.entries] == ["hello"]
        (error,) = result.errors
        assert isinstance(error, ContentParseError)
        assert error.path == "content/posts/broken.md"

    @pytest.mark.parametrize("max_workers", [1, 4])
    def test_unexpected_decoder_errors_are_collected(self, plain_registry, max_workers):
        def decode(file, file_config):
            if file.name == "broken.md":
                raise ValueError("bad bytes")
            return {"title": "ok"}

        decoder = Mock()
        decoder.decode.side_effect = decode
        files = [
            make_raw_file("content/posts/broken.md", "broken"),
            make_raw_file("content/posts/hello.md", "hello"),
        ]

        result = prepare_entries(
            files, registry=plain_registry, decoder=decoder, max_workers=max_workers
        )

        assert [entry.slug for entry in result.entries] == ["hello"]
        (error,) = result.errors
        assert isinstance(error, ContentParseError)
        assert error.path == "content/posts/broken.md"
        assert error.reason == "ValueError: bad bytes"
        assert isinstance(error.__cause__, ValueError)

    def test_decode_workers_see_batch_context(self, plain_registry):
        seen = []

        def decode(file, file_config):
            seen.append(structlog.contextvars.get_contextvars().get("batch_id"))
            return {"title": file.name}

        decoder = Mock()
        decoder.decode.side_effect = decode
        files = [make_raw_file(f"content/posts/post-{index}.md", "x") for index in range(4)]

        prepare_entries(files, registry=plain_registry, decoder=decoder, max_workers=4)

        assert len(seen) == 4
        assert all(batch_id for batch_id in seen)
        assert len(set(seen)) == 1

    def test_files_without_collection_are_skipped(self, plain_registry):
        files = [make_raw_file("content/news/a.md", "---\ntitle: x\n---", collection_name="news")]

        result = prepare_entries(files, registry=plain_registry, max_workers=1)

        assert result.entries == []
        assert result.errors == []

    def test_entries_without_default_locale_are_dropped(self, multi_file_registry):
        """An entry whose default locale file is missing never gets a slug."""
        files = [make_raw_file("content/posts/hello.fr.md", "---\ntitle: Bonjour\n---")]

        result = prepare_entries(files, registry=multi_file_registry, max_workers=1)

        assert result.entries == []

    def test_every_entry_is_valid(self, multi_file_registry):
        files = _hello_files() + [
            make_raw_file("content/posts/other.fr.md", "---\ntitle: Autre\n---"),
            make_raw_file("content/posts/other.de.md", "---\ntitle: Andere\n---"),
        ]

        result = prepare_entries(files, registry=multi_file_registry, max_workers=1)

        assert all(entry.slug and entry.locales for entry in result.entries)
        assert [entry.slug for entry in result.entries] == ["hello"]

    def test_parallel_and_sequential_are_equivalent(self, multi_file_registry):
        files = []
        for index in range(20):
            files.extend(
                [
                    make_raw_file(
                        f"content/posts/post-{index}.{locale}.md", f"---\ntitle: {index}\n---"
                    )
                    for locale in ("fr", "en")
                ]
            )

        sequential = prepare_entries(files, registry=multi_file_registry, max_workers=1)
        parallel = prepare_entries(files, registry=multi_file_registry, max_workers=8)

        assert len(parallel.entries) == 20
        assert _summary(sequential) == _summary(parallel)
        assert [entry.slug for entry in sequential.entries] == [
            entry.slug for entry in parallel.entries
        ]

    def test_uses_injected_decoder(self, plain_registry):
        decoder = Mock()
        decoder.decode.return_value = {"title": "Mocked"}
        file = make_raw_file("content/posts/hello.md", "ignored")

        result = prepare_entries([file], registry=plain_registry, decoder=decoder, max_workers=1)

        decoder.decode.assert_called_once()
        assert decoder.decode.call_args.args[0] is file
        assert result.entries[0].locales[DEFAULT_LOCALE_KEY].content == {"title": "Mocked"}

    def test_max_workers_defaults_to_settings(self, plain_registry):
        with patch("modules.content.service.settings") as mock_settings:
            mock_settings.ingestion.max_workers = 1
            result = prepare_entries([], registry=plain_registry)

        assert result.entries == []
        assert result.errors == []


@pytest.mark.unit
class TestEntryIngestionService:
    """Tests for EntryIngestionService."""

    def test_prepare(self, multi_file_registry):
        service = EntryIngestionService(
            multi_file_registry,
            ingestion_settings=IngestionSettings(INGEST_MAX_WORKERS=2),
            id_factory=make_id_factory("post"),
        )

        result = service.prepare(_hello_files())

        assert service.settings.max_workers == 2
        assert [entry.id for entry in result.entries] == ["post-1"]
