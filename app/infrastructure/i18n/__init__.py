"""i18n system - translation resolution and compilation.

Resolves the applied language for a process, merges its translation files
and compiles them into a cached flat lookup table.

Main components:
- resolvers: LanguageNegotiator for candidate ordering and language selection
- paths: PathResolver for path template expansion
- loader: ConfigLoader and the INI/YAML/JSON translation parsers
- merger: priority-ordered deep merge of translation trees
- compiler: Compiler flattening trees into identifiers
- formatting: printf-style argument substitution for compiled messages
- cache: CacheStore persisting compiled artifacts
- translator: Translator, the initialization entry point and read accessor
- factory: create_translator() from application settings
"""

from infrastructure.i18n.cache import CacheStore, engine_version_tag
from infrastructure.i18n.compiler import Compiler, compile_tree
from infrastructure.i18n.errors import (
    CacheReadError,
    CacheWriteError,
    DoubleInitializationError,
    DuplicateIdentifierError,
    I18nError,
    InvalidIdentifierError,
    NoLanguageFileFoundError,
    NotInitializedError,
    PathListMismatchError,
    PostInitMutationError,
    TranslationParseError,
    UnsupportedFormatError,
)
from infrastructure.i18n.factory import create_translator
from infrastructure.i18n.formatting import format_message
from infrastructure.i18n.loader import (
    ConfigLoader,
    IniTranslationParser,
    JSONTranslationParser,
    TranslationParser,
    YAMLTranslationParser,
)
from infrastructure.i18n.merger import deep_merge, merge
from infrastructure.i18n.models import CacheArtifact, TranslationCatalog
from infrastructure.i18n.paths import PathResolver
from infrastructure.i18n.resolvers import LanguageNegotiator
from infrastructure.i18n.translator import Translator

__all__ = [
    "CacheArtifact",
    "TranslationCatalog",
    "LanguageNegotiator",
    "PathResolver",
    "ConfigLoader",
    "TranslationParser",
    "IniTranslationParser",
    "YAMLTranslationParser",
    "JSONTranslationParser",
    "merge",
    "deep_merge",
    "Compiler",
    "compile_tree",
    "format_message",
    "CacheStore",
    "engine_version_tag",
    "Translator",
    "create_translator",
    "I18nError",
    "NoLanguageFileFoundError",
    "UnsupportedFormatError",
    "TranslationParseError",
    "InvalidIdentifierError",
    "DuplicateIdentifierError",
    "CacheWriteError",
    "CacheReadError",
    "PathListMismatchError",
    "DoubleInitializationError",
    "PostInitMutationError",
    "NotInitializedError",
]
