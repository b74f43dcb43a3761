"""Infrastructure modules for the translation engine.

Centralized infrastructure components:
- configuration: Settings management (settings, I18nSettings)
- logging: Structured logging setup (configure_logging, get_module_logger)
- i18n: Translation resolution, compilation and caching
"""

# Configuration
from infrastructure.configuration import settings

__all__ = ["settings"]
