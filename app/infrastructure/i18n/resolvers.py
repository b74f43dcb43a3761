"""Locale resolution logic for determining the user's preferred language.

Builds the ordered candidate list from explicitly supplied sources (forced
locale, request parameter, session value, Accept-Language header) and
picks the first candidate that has translation files on disk.
"""

from typing import Any, List, Optional, Sequence

import structlog
from infrastructure.i18n.errors import NoLanguageFileFoundError
from infrastructure.i18n.models import is_valid_locale
from infrastructure.i18n.paths import PathResolver

logger = structlog.get_logger().bind(component="i18n.resolver")


class LanguageNegotiator:
    """Negotiates the applied language for one initialization.

    Candidate priority:
    1. Forced locale
    2. Request parameter (e.g. ?lang=)
    3. Session value
    4. Accept-Language header, each entry reduced to its primary subtag
    5. Fallback locale
    """

    def __init__(self, path_resolver: Optional[PathResolver] = None):
        self.path_resolver = path_resolver or PathResolver()

    @staticmethod
    def parse_accept_language(accept_language: Optional[str]) -> List[str]:
        """Reduce an Accept-Language header to primary subtags in header order.

        Quality values are ignored: "fr-CH, fr;q=0.9, en;q=0.8" -> ["fr", "fr", "en"].

        Args:
            accept_language: Accept-Language header value.

        Returns:
            Lower-cased two-character prefixes of each comma-separated entry.
        """
        if not accept_language or not isinstance(accept_language, str):
            return []
        return [part.strip()[:2].lower() for part in accept_language.split(",")]

    def negotiate(
        self,
        *,
        fallback: str,
        forced: Optional[str] = None,
        request_lang: Optional[Any] = None,
        session_lang: Optional[Any] = None,
        accept_language: Optional[str] = None,
    ) -> List[str]:
        """Build the ordered, deduplicated and validated candidate list.

        Args:
            fallback: Lowest priority locale, always appended.
            forced: Locale that overrides every user preference.
            request_lang: Locale supplied as a request parameter.
            session_lang: Locale stored in the user session.
            accept_language: Raw Accept-Language header value.

        Returns:
            Candidate locales, highest priority first. Invalid codes are dropped.
        """
        raw: List[Any] = []
        for value in (forced, request_lang, session_lang):
            if isinstance(value, str) and value:
                raw.append(value)
        raw.extend(self.parse_accept_language(accept_language))
        raw.append(fallback)

        candidates: List[str] = []
        for value in raw:
            if not value or value in candidates:
                continue
            if not is_valid_locale(value):
                logger.debug("dropped_invalid_locale", locale=repr(value))
                continue
            candidates.append(value)

        logger.info("negotiated_user_languages", candidates=candidates)
        return candidates

    def resolve_applied(
        self, candidates: Sequence[str], path_templates: Sequence[str]
    ) -> str:
        """Pick the first candidate with at least one existing source file.

        Args:
            candidates: Negotiated locales, highest priority first.
            path_templates: Path templates containing the locale placeholder.

        Returns:
            The applied locale.

        Raises:
            NoLanguageFileFoundError: If no candidate has any existing file.
        """
        for locale in candidates:
            for path in self.path_resolver.expand(path_templates, locale):
                if path.is_file():
                    logger.info(
                        "resolved_applied_language", locale=locale, path=str(path)
                    )
                    return locale

        logger.error(
            "no_language_file_found",
            candidates=list(candidates),
            templates=list(path_templates),
        )
        raise NoLanguageFileFoundError(candidates, path_templates)
