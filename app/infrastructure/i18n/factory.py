"""Factory functions for creating i18n components.

Provides a convenience function for building a Translator from the
application settings.
"""

from typing import Any, Optional

import structlog
from infrastructure.configuration import I18nSettings, settings
from infrastructure.i18n.translator import Translator

logger = structlog.get_logger()


def create_translator(
    i18n_settings: Optional[I18nSettings] = None,
    **overrides: Any,
) -> Translator:
    """Create and configure a Translator instance.

    The returned translator is not initialized; call init() with the
    request's language inputs once per process.

    Args:
        i18n_settings: Translation settings (default: settings.i18n).
        **overrides: Values replacing individual settings fields
            (e.g. cache_path="/tmp/langcache", merge_fallback=True).

    Returns:
        Translator: Configured translator instance

    Raises:
        TypeError: If an override does not name a settings field.

    Usage:
        # Use application settings
        translator = create_translator()
        translator.init(accept_language="fr-CH, fr;q=0.9")

        # Custom cache directory
        translator = create_translator(cache_path="/var/cache/langcache")
    """
    if i18n_settings is None:
        i18n_settings = settings.i18n

    values = i18n_settings.model_dump()
    unknown = set(overrides) - set(values)
    if unknown:
        raise TypeError(f"Unknown translator settings: {sorted(unknown)}")
    values.update(overrides)

    translator = Translator(
        file_paths=values["file_paths"],
        cache_path=values["cache_path"],
        fallback_lang=values["fallback_lang"],
        prefix=values["prefix"],
    )
    translator.merge_fallback = values["merge_fallback"]
    translator.forced_lang = values["forced_lang"]
    translator.section_separator = values["section_separator"]
    translator.static_map = values["static_map"]

    logger.info(
        "translator_created",
        file_paths=translator.file_paths,
        cache_path=str(translator.cache_path),
        fallback_lang=translator.fallback_lang,
        merge_fallback=translator.merge_fallback,
    )
    return translator
