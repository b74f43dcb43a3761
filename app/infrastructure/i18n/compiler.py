"""Compiles a merged translation tree into a flat identifier mapping.

Nested sections are joined with a configurable separator, e.g. the key
"greeting" in section "welcomepage" becomes "welcomepage_greeting" with the
default "_" separator. Static placeholders such as "{NAME}" are replaced
at compile time.
"""

import re
from typing import Any, Dict, Mapping, Optional, Pattern

import structlog
from infrastructure.i18n.errors import DuplicateIdentifierError, InvalidIdentifierError
from infrastructure.i18n.models import IDENTIFIER_PATTERN, CompiledMapping, TranslationTree

logger = structlog.get_logger().bind(component="i18n.compiler")


def placeholder_token(placeholder: str) -> str:
    """Wrap a static map key in its delimiters ("NAME" -> "{NAME}")."""
    return "{" + placeholder + "}"


def render_leaf(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return ""
    return str(value)


class StaticSubstitution:
    """Replaces static placeholder tokens in a single pass.

    All tokens are matched by one regular expression, so the result does
    not depend on the order of the static map and replacement text is never
    expanded again.
    """

    def __init__(self, static_map: Optional[Mapping[str, Any]] = None):
        self.replacements: Dict[str, str] = {
            placeholder_token(str(placeholder)): render_leaf(replacement)
            for placeholder, replacement in (static_map or {}).items()
        }
        self._pattern: Optional[Pattern[str]] = None
        if self.replacements:
            # Longest first so that overlapping tokens resolve predictably.
            tokens = sorted(self.replacements, key=lambda t: (-len(t), t))
            self._pattern = re.compile("|".join(re.escape(t) for t in tokens))

    def apply(self, value: str) -> str:
        if self._pattern is None:
            return value
        return self._pattern.sub(lambda m: self.replacements[m.group(0)], value)


class Compiler:
    """Flattens, validates and substitutes a merged translation tree.

    Attributes:
        section_separator: String placed between section and key names.
    """

    def __init__(self, section_separator: str = "_"):
        self.section_separator = section_separator

    def compile(
        self,
        tree: TranslationTree,
        static_map: Optional[Mapping[str, Any]] = None,
    ) -> CompiledMapping:
        """Compile a merged tree into {identifier: message}.

        Args:
            tree: Merged translation tree.
            static_map: Placeholder name -> replacement, applied to every leaf.

        Returns:
            Flat mapping in depth-first tree order.

        Raises:
            InvalidIdentifierError: If a flattened key is not a bare identifier.
            DuplicateIdentifierError: If two keys flatten to the same identifier.
        """
        compiled: CompiledMapping = {}
        self._compile_node(tree, "", StaticSubstitution(static_map), compiled)
        logger.debug("compiled_translations", identifier_count=len(compiled))
        return compiled

    def _compile_node(
        self,
        node: TranslationTree,
        prefix: str,
        substitution: StaticSubstitution,
        compiled: CompiledMapping,
    ) -> None:
        for key, value in node.items():
            if isinstance(value, dict):
                self._compile_node(
                    value, f"{prefix}{key}{self.section_separator}", substitution, compiled
                )
                continue

            identifier = f"{prefix}{key}"
            if not IDENTIFIER_PATTERN.fullmatch(identifier):
                logger.error("invalid_translation_identifier", identifier=identifier)
                raise InvalidIdentifierError(identifier)
            if identifier in compiled:
                logger.error("duplicate_translation_identifier", identifier=identifier)
                raise DuplicateIdentifierError(identifier)

            compiled[identifier] = substitution.apply(render_leaf(value))


def compile_tree(
    tree: TranslationTree,
    static_map: Optional[Mapping[str, Any]] = None,
    section_separator: str = "_",
) -> CompiledMapping:
    """Functional shortcut for Compiler(section_separator).compile(...)."""
    return Compiler(section_separator).compile(tree, static_map)
