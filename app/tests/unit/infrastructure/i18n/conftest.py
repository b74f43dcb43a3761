"""Feature-level fixtures for i18n system tests.

Provides translation directories and translator builders for locale
resolution, compilation and caching scenarios.
"""

import pytest

from infrastructure.i18n import Translator
from tests.factories.i18n import write_translation_file


@pytest.fixture
def lang_dir(tmp_path):
    """Create a directory with INI translation files.

    Returns a directory structure like:
    - lang/lang_en.ini (complete)
    - lang/lang_de.ini (missing welcomepage.subtitle and cart)
    """
    lang = tmp_path / "lang"
    write_translation_file(
        lang / "lang_en.ini",
        {
            "title": "Shop",
            "welcomepage": {
                "greeting": "Hello %s",
                "subtitle": "Welcome to {SHOP}",
            },
            "cart": {"items": "%d items in your cart"},
        },
    )
    write_translation_file(
        lang / "lang_de.ini",
        {
            "title": "Laden",
            "welcomepage": {"greeting": "Hallo %s"},
        },
    )
    return lang


@pytest.fixture
def cache_dir(tmp_path):
    """Cache directory that does not exist yet."""
    return tmp_path / "langcache"


@pytest.fixture
def make_translator(lang_dir, cache_dir):
    """Factory for translators reading lang_dir and caching into cache_dir."""

    def _make(templates=None, **options):
        translator = Translator(
            file_paths=templates or [str(lang_dir / "lang_{LANGUAGE}.ini")],
            cache_path=cache_dir,
        )
        for name, value in options.items():
            setattr(translator, name, value)
        return translator

    return _make


@pytest.fixture
def accept_language_headers():
    """Collection of Accept-Language headers for testing."""
    return {
        "simple_en": "en",
        "specific_en_us": "en-US",
        "with_quality": "en-US,en;q=0.9,fr;q=0.8",
        "multiple": "fr-FR,fr;q=0.9,en-US;q=0.8,en;q=0.7",
        "spaced": "de-CH, de;q=0.9, en;q=0.8",
        "wildcard": "en-US,en;q=0.9,*;q=0.8",
    }
