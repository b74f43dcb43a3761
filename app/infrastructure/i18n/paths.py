"""Path template expansion for translation source files.

Templates contain a {LANGUAGE} placeholder that is replaced with a locale
code. The order of the produced paths is the merge priority order: index 0
has the highest priority.

Merge order:
    no fallback:   t0/LC > t1/LC > ... > tN/LC
    with fallback: t0/LC > t0/FB > t1/LC > t1/FB > ... > tN/LC > tN/FB
"""

from pathlib import Path
from typing import List, Optional, Sequence

import structlog
from infrastructure.i18n.errors import PathListMismatchError
from infrastructure.i18n.models import LANGUAGE_PLACEHOLDER

logger = structlog.get_logger().bind(component="i18n.paths")


class PathResolver:
    """Expands path templates per locale and filters them by existence."""

    def __init__(self, placeholder: str = LANGUAGE_PLACEHOLDER):
        self.placeholder = placeholder

    def expand(self, templates: Sequence[str], locale: str) -> List[Path]:
        """Substitute locale into every template, preserving template order.

        Args:
            templates: Path templates containing the locale placeholder.
            locale: Locale code to substitute.

        Returns:
            One path per template.
        """
        return [Path(str(template).replace(self.placeholder, locale)) for template in templates]

    def expand_with_fallback(
        self, templates: Sequence[str], locale: str, fallback: str
    ) -> List[Path]:
        """Expand templates for locale and fallback, interleaved per template.

        Args:
            templates: Path templates containing the locale placeholder.
            locale: Applied locale code.
            fallback: Fallback locale code.

        Returns:
            [t0/locale, t0/fallback, t1/locale, t1/fallback, ...]
        """
        return self.interleave(
            self.expand(templates, locale), self.expand(templates, fallback)
        )

    @staticmethod
    def interleave(primary: Sequence[Path], fallback: Sequence[Path]) -> List[Path]:
        """Interleave two equally long path lists.

        Raises:
            PathListMismatchError: If the lists differ in length.
        """
        if len(primary) != len(fallback):
            raise PathListMismatchError(
                f"Cannot interleave {len(primary)} primary paths with "
                f"{len(fallback)} fallback paths"
            )
        interleaved: List[Path] = []
        for primary_path, fallback_path in zip(primary, fallback):
            interleaved.append(primary_path)
            interleaved.append(fallback_path)
        return interleaved

    def active_paths(
        self,
        templates: Sequence[str],
        locale: str,
        fallback: Optional[str] = None,
    ) -> List[Path]:
        """Return the existing source files for locale in merge priority order.

        Args:
            templates: Path templates containing the locale placeholder.
            locale: Applied locale code.
            fallback: Fallback locale to merge in, or None to skip merging.

        Returns:
            Existing paths; filtering never reorders.
        """
        if fallback is not None and fallback != locale:
            candidates = self.expand_with_fallback(templates, locale, fallback)
        else:
            candidates = self.expand(templates, locale)

        active = [path for path in candidates if path.is_file()]
        logger.debug(
            "resolved_active_paths",
            locale=locale,
            fallback=fallback,
            candidate_count=len(candidates),
            active_paths=[str(path) for path in active],
        )
        return active
