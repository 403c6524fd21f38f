"""Tests for modules.content.i18n.normalizer module."""

import pytest

from modules.content.domain import I18nOptions
from modules.content.i18n import (
    DEFAULT_I18N_OPTIONS,
    DEFAULT_LOCALE_KEY,
    I18nStructure,
    normalize_i18n_config,
)
from modules.content.i18n.normalizer import (
    determine_default_locale,
    determine_initial_locales,
    determine_structure,
    merge_i18n_configs,
)
from tests.factories.content import make_collection, make_collection_file

SITE_I18N = I18nOptions(locales=["en", "fr", "de"])


@pytest.mark.unit
class TestMergeI18nConfigs:
    """Tests for merging site, collection and file i18n blocks."""

    def test_site_block_missing_disables(self):
        """No site-level block means i18n does not apply."""
        assert merge_i18n_configs(make_collection(i18n=True), site_i18n=None) is None

    def test_collection_without_i18n_disables(self):
        """A collection that does not opt in gets no i18n config."""
        assert merge_i18n_configs(make_collection(i18n=False), site_i18n=SITE_I18N) is None

    def test_collection_overrides_site(self):
        """Collection-level options win over site-level options."""
        collection = make_collection(i18n={"structure": "multiple_folders", "default_locale": "fr"})

        merged = merge_i18n_configs(collection, site_i18n=SITE_I18N)

        assert merged == {
            "locales": ["en", "fr", "de"],
            "structure": "multiple_folders",
            "default_locale": "fr",
        }

    def test_file_without_i18n_disables(self):
        """A collection file that does not opt in is not localized."""
        collection = make_collection(name="pages", files=[{"name": "about", "file": "a.md"}])
        file = collection.files[0]

        assert merge_i18n_configs(collection, file, SITE_I18N) is None

    def test_file_options_win(self):
        """File-level options override collection-level options."""
        collection = make_collection(
            name="pages",
            i18n={"locales": ["en", "fr"]},
            files=[{"name": "about", "file": "a.md", "i18n": {"locales": ["ja"]}}],
        )

        merged = merge_i18n_configs(collection, collection.files[0], SITE_I18N)

        assert merged["locales"] == ["ja"]

    def test_singleton_inherits_site_block(self):
        """Singletons take the site block without opting in at collection level."""
        collection = make_collection(
            name="_singletons",
            i18n=None,
            files=[{"name": "home", "file": "home.yml", "i18n": True}],
        )

        merged = merge_i18n_configs(collection, collection.files[0], SITE_I18N)

        assert merged == {"locales": ["en", "fr", "de"]}

    def test_accepts_plain_mapping_site_block(self):
        """The site block may be a plain mapping."""
        merged = merge_i18n_configs(make_collection(), site_i18n={"locales": ["en"]})
        assert merged == {"locales": ["en"]}


@pytest.mark.unit
class TestDetermineHelpers:
    """Tests for the structure, default locale and initial locale helpers."""

    def test_structure_defaults_to_single_file(self):
        assert determine_structure(None) is I18nStructure.SINGLE_FILE

    def test_structure_from_string(self):
        assert determine_structure("multiple_folders_i18n_root") is (
            I18nStructure.MULTIPLE_FOLDERS_I18N_ROOT
        )

    def test_unknown_structure_falls_back(self):
        """An unsupported structure name falls back to single_file."""
        assert determine_structure("per_locale_repo") is I18nStructure.SINGLE_FILE

    def test_file_path_decides_structure(self):
        """A file path with a locale placeholder always uses multiple_files."""
        localized = make_collection_file(file="content/about.{{locale}}.md")
        plain = make_collection_file(file="content/about.md")

        assert determine_structure("multiple_folders", localized) is I18nStructure.MULTIPLE_FILES
        assert determine_structure("multiple_folders", plain) is I18nStructure.SINGLE_FILE

    def test_default_locale_falls_back_to_first(self):
        assert determine_default_locale(True, ["en", "fr"], "de") == "en"
        assert determine_default_locale(True, ["en", "fr"], "fr") == "fr"
        assert determine_default_locale(False, ["en"], "en") == DEFAULT_LOCALE_KEY

    @pytest.mark.parametrize(
        "configured,expected",
        [
            (None, ["en", "fr", "de"]),
            ("all", ["en", "fr", "de"]),
            ("default", ["fr"]),
            (["de"], ["fr", "de"]),
            (["ja"], ["fr"]),
        ],
    )
    def test_initial_locales(self, configured, expected):
        """The default locale is always part of the initial locales."""
        assert determine_initial_locales(configured, ["en", "fr", "de"], "fr") == expected


@pytest.mark.unit
class TestNormalizeI18nConfig:
    """Tests for normalize_i18n_config."""

    def test_disabled_when_no_locales(self):
        """Without locales the disabled defaults are returned."""
        options = normalize_i18n_config(make_collection(), site_i18n=I18nOptions())

        assert options == DEFAULT_I18N_OPTIONS
        assert options.i18n_enabled is False
        assert options.all_locales == (DEFAULT_LOCALE_KEY,)
        assert options.default_locale == DEFAULT_LOCALE_KEY

    def test_disabled_structure_map_is_all_false(self):
        options = normalize_i18n_config(make_collection(i18n=False), site_i18n=SITE_I18N)
        structure_map = options.structure_map

        assert not any(
            [
                structure_map.i18n_single_file,
                structure_map.i18n_multi_file,
                structure_map.i18n_multi_folder,
                structure_map.i18n_root_multi_folder,
            ]
        )

    def test_enabled_defaults(self):
        options = normalize_i18n_config(make_collection(), site_i18n=SITE_I18N)

        assert options.i18n_enabled is True
        assert options.structure is I18nStructure.SINGLE_FILE
        assert options.structure_map.i18n_single_file is True
        assert options.all_locales == ("en", "fr", "de")
        assert options.default_locale == "en"
        assert options.initial_locales == ("en", "fr", "de")
        assert options.save_all_locales is True
        assert options.canonical_slug.key == "translationKey"
        assert options.canonical_slug.value == "{{slug}}"
        assert options.omit_default_locale_from_filename is False

    def test_locales_are_deduplicated(self):
        options = normalize_i18n_config(
            make_collection(), site_i18n={"locales": ["en", "fr", "en"]}
        )
        assert options.all_locales == ("en", "fr")

    def test_exactly_one_structure_flag(self):
        """Enabled configs have exactly one structure flag set."""
        for structure in I18nStructure:
            options = normalize_i18n_config(
                make_collection(i18n={"structure": structure.value}), site_i18n=SITE_I18N
            )
            flags = [
                options.structure_map.i18n_single_file,
                options.structure_map.i18n_multi_file,
                options.structure_map.i18n_multi_folder,
                options.structure_map.i18n_root_multi_folder,
            ]
            assert flags.count(True) == 1

    def test_initial_locales_disable_save_all_locales(self):
        options = normalize_i18n_config(
            make_collection(i18n={"initial_locales": "default"}), site_i18n=SITE_I18N
        )

        assert options.initial_locales == ("en",)
        assert options.save_all_locales is False

    def test_save_all_locales_false(self):
        options = normalize_i18n_config(
            make_collection(i18n={"save_all_locales": False}), site_i18n=SITE_I18N
        )
        assert options.save_all_locales is False

    def test_custom_canonical_slug(self):
        options = normalize_i18n_config(
            make_collection(i18n={"canonical_slug": {"key": "ref"}}), site_i18n=SITE_I18N
        )

        assert options.canonical_slug.key == "ref"
        assert options.canonical_slug.value == "{{slug}}"

    def test_omit_default_locale_requires_multi_file(self):
        """The omit option only applies where the locale is part of the file name."""
        multi_file = normalize_i18n_config(
            make_collection(
                i18n={"structure": "multiple_files", "omit_default_locale_from_filename": True}
            ),
            site_i18n=SITE_I18N,
        )
        multi_folder = normalize_i18n_config(
            make_collection(
                i18n={"structure": "multiple_folders", "omit_default_locale_from_filename": True}
            ),
            site_i18n=SITE_I18N,
        )

        assert multi_file.omit_default_locale_from_filename is True
        assert multi_folder.omit_default_locale_from_filename is False

    def test_file_level_normalization(self):
        """A collection file with a locale placeholder uses multiple_files."""
        collection = make_collection(
            name="pages",
            files=[
                {
                    "name": "about",
                    "file": "content/about.{{locale}}.md",
                    "i18n": {"omit_default_locale_from_filename": True},
                }
            ],
        )

        options = normalize_i18n_config(collection, collection.files[0], site_i18n=SITE_I18N)

        assert options.structure is I18nStructure.MULTIPLE_FILES
        assert options.omit_default_locale_from_filename is True

    def test_default_locale_is_member(self):
        options = normalize_i18n_config(
            make_collection(i18n={"default_locale": "ja"}), site_i18n=SITE_I18N
        )

        assert options.default_locale == "en"
        assert options.default_locale in options.all_locales
        assert options.default_locale in options.initial_locales
