"""Infrastructure configuration module - public API.

This module provides centralized configuration management using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    I18nSettings: Translation feature settings class (for testing)

Example:
    ```python
    from infrastructure.configuration import settings

    cache_dir = settings.i18n.cache_path
    fallback = settings.i18n.fallback_lang
    ```
"""

from infrastructure.configuration.features import I18nSettings
from infrastructure.configuration.settings import Settings, settings

__all__ = ["Settings", "I18nSettings", "settings"]
