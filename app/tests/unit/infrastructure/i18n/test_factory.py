"""Unit tests for the translator factory."""

from pathlib import Path

import pytest

from infrastructure.i18n import Translator, create_translator

pytestmark = pytest.mark.unit


class TestCreateTranslator:
    """Tests for create_translator."""

    def test_uses_given_settings(self, i18n_settings_factory, tmp_path):
        i18n_settings = i18n_settings_factory(
            I18N_FALLBACK_LANG="de",
            I18N_MERGE_FALLBACK=True,
            I18N_PREFIX="T",
            I18N_FORCED_LANG="fr",
            I18N_SECTION_SEPARATOR="__",
            I18N_STATIC_MAP={"SHOP": "ACME"},
        )

        translator = create_translator(i18n_settings)

        assert isinstance(translator, Translator)
        assert translator.file_paths == [str(tmp_path / "lang" / "lang_{LANGUAGE}.ini")]
        assert translator.cache_path == tmp_path / "langcache"
        assert translator.fallback_lang == "de"
        assert translator.merge_fallback is True
        assert translator.prefix == "T"
        assert translator.forced_lang == "fr"
        assert translator.section_separator == "__"
        assert translator.static_map == {"SHOP": "ACME"}
        assert not translator.is_initialized

    def test_overrides_replace_settings(self, i18n_settings_factory):
        translator = create_translator(
            i18n_settings_factory(), cache_path="/var/cache/langcache", merge_fallback=True
        )
        assert translator.cache_path == Path("/var/cache/langcache")
        assert translator.merge_fallback is True

    def test_unknown_override_raises(self, i18n_settings_factory):
        with pytest.raises(TypeError):
            create_translator(i18n_settings_factory(), cache_dir="/tmp")

    def test_defaults_to_application_settings(self):
        translator = create_translator()
        assert translator.fallback_lang == "en"
        assert translator.prefix == "L"

    def test_created_translator_initializes(self, i18n_settings_factory, lang_dir):
        translator = create_translator(
            i18n_settings_factory(I18N_STATIC_MAP={"SHOP": "ACME"})
        )
        translator.init(accept_language="de")

        assert translator.applied_language == "de"
        assert translator.get("title") == "Laden"

    def test_each_call_returns_new_translator(self, i18n_settings_factory):
        i18n_settings = i18n_settings_factory()
        assert create_translator(i18n_settings) is not create_translator(i18n_settings)
