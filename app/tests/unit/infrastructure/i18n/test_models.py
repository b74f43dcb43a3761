"""Tests for infrastructure.i18n.models module."""

import pytest

from infrastructure.i18n.models import CacheArtifact, TranslationCatalog, is_valid_locale
from tests.factories.i18n import make_cache_artifact, make_translation_catalog


class TestIsValidLocale:
    """Tests for is_valid_locale."""

    @pytest.mark.parametrize("locale", ["en", "de_DE", "pt-BR", "zh-Hant-TW", "123"])
    def test_valid(self, locale):
        assert is_valid_locale(locale)

    @pytest.mark.parametrize(
        "locale", ["../en", "en/..", "fr fr", "en\n", "*;", "é", None, 42, ["en"]]
    )
    def test_invalid(self, locale):
        assert not is_valid_locale(locale)


class TestTranslationCatalog:
    """Tests for TranslationCatalog."""

    def test_get_message(self):
        catalog = make_translation_catalog()
        assert catalog.get_message("title") == "Shop"
        assert catalog.get_message("missing") is None

    def test_has_message(self):
        catalog = make_translation_catalog()
        assert catalog.has_message("cart_items")
        assert "cart_items" in catalog
        assert not catalog.has_message("missing")

    def test_len(self):
        assert len(make_translation_catalog()) == 3

    def test_format_without_args_returns_raw_message(self):
        """Without args, % sequences are left untouched."""
        catalog = make_translation_catalog()
        assert catalog.format("cart_items") == "%d items in your cart"

    def test_format_with_args(self):
        catalog = make_translation_catalog()
        assert catalog.format("welcomepage_greeting", ["Bob"]) == "Hello Bob"
        assert catalog("cart_items", [3]) == "3 items in your cart"

    def test_format_ignores_surplus_args(self):
        catalog = make_translation_catalog()
        assert catalog.format("welcomepage_greeting", ["Bob", "Eve"]) == "Hello Bob"

    def test_format_message_without_placeholders_with_args(self):
        catalog = make_translation_catalog()
        assert catalog.format("title", ["Bob"]) == "Shop"

    def test_format_numbered_placeholders(self):
        catalog = make_translation_catalog(messages={"sent": "%2$s sent %1$d files"})
        assert catalog("sent", [3, "Ann"]) == "Ann sent 3 files"

    def test_format_empty_args_keep_escaped_percent(self):
        catalog = make_translation_catalog(messages={"done": "100%% done"})
        assert catalog.format("done", []) == "100% done"
        assert catalog.format("done") == "100%% done"

    def test_format_too_few_args_raises(self):
        with pytest.raises(TypeError):
            make_translation_catalog().format("welcomepage_greeting", [])

    def test_format_missing_raises_key_error(self):
        with pytest.raises(KeyError):
            make_translation_catalog().format("missing")

    def test_getitem(self):
        catalog = make_translation_catalog()
        assert catalog["title"] == "Shop"
        with pytest.raises(KeyError):
            catalog["missing"]

    def test_attribute_access(self):
        """Identifiers are readable as attributes."""
        catalog = make_translation_catalog()
        assert catalog.welcomepage_greeting == "Hello %s"

    def test_attribute_access_missing_raises(self):
        with pytest.raises(AttributeError):
            make_translation_catalog().missing_identifier

    def test_identifier_shadowed_by_field(self):
        """Dataclass fields take precedence over identifiers."""
        catalog = make_translation_catalog(messages={"locale": "Sprache"})
        assert catalog.locale == "en"
        assert catalog["locale"] == "Sprache"

    def test_messages_are_read_only(self):
        catalog = make_translation_catalog()
        with pytest.raises(TypeError):
            catalog.messages["title"] = "Changed"

    def test_messages_copied_from_input(self):
        messages = {"title": "Shop"}
        catalog = make_translation_catalog(messages=messages)
        messages["title"] = "Changed"
        assert catalog.title == "Shop"

    def test_catalog_is_frozen(self):
        catalog = make_translation_catalog()
        with pytest.raises(AttributeError):
            catalog.locale = "de"


class TestCacheArtifact:
    """Tests for CacheArtifact."""

    def test_to_dict_from_dict(self):
        artifact = make_cache_artifact(messages={"title": "Shop", "cart_items": "%d"})
        assert CacheArtifact.from_dict(artifact.to_dict()) == artifact

    def test_created_at_defaults_to_now(self):
        artifact = CacheArtifact(
            engine_version="v1", fingerprint="f", namespace="L", locale="en", messages={}
        )
        assert artifact.created_at.endswith("+00:00")

    @pytest.mark.parametrize(
        "data",
        [
            [],
            {},
            {"engine_version": 1, "fingerprint": "f", "namespace": "L",
             "locale": "en", "created_at": "t", "messages": {}},
            {"engine_version": "v", "fingerprint": "f", "namespace": "L",
             "locale": "en", "created_at": "t", "messages": []},
            {"engine_version": "v", "fingerprint": "f", "namespace": "L",
             "locale": "en", "created_at": "t", "messages": {"a": None}},
        ],
    )
    def test_from_dict_rejects_bad_structure(self, data):
        with pytest.raises(ValueError):
            CacheArtifact.from_dict(data)

    def test_matches(self):
        artifact = make_cache_artifact()
        assert artifact.matches("engine1", "abc123", "L", "en")
        assert not artifact.matches("engine2", "abc123", "L", "en")
        assert not artifact.matches("engine1", "other", "L", "en")
        assert not artifact.matches("engine1", "abc123", "T", "en")
        assert not artifact.matches("engine1", "abc123", "L", "de")

    def test_to_catalog(self):
        artifact = make_cache_artifact(messages={"title": "Shop"})
        catalog = artifact.to_catalog(loaded_at="2024-02-02T00:00:00+00:00")

        assert isinstance(catalog, TranslationCatalog)
        assert catalog.locale == "en"
        assert catalog.namespace == "L"
        assert catalog.title == "Shop"
        assert catalog.loaded_at == "2024-02-02T00:00:00+00:00"
