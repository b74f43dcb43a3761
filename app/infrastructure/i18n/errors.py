"""Custom exceptions for the i18n system.

Every failure of the resolve/merge/compile pass is fatal for the
initialization it happens in. There is no degraded mode: callers either
get a compiled catalog or one of these exceptions.
"""

from pathlib import Path
from typing import Optional, Sequence


class I18nError(Exception):
    """Base exception for all i18n errors.

    Example:
        try:
            translator.init(accept_language=header)
        except I18nError as e:
            logger.error("i18n_init_failed", error=str(e))
            raise
    """

    pass


class NoLanguageFileFoundError(I18nError):
    """Raised when no candidate locale has a single existing source file."""

    def __init__(self, candidates: Sequence[str], templates: Sequence[str]):
        self.candidates = list(candidates)
        self.templates = list(templates)
        super().__init__(
            f"No language file was found for candidates {self.candidates} "
            f"using path templates {self.templates}"
        )


class UnsupportedFormatError(I18nError):
    """Raised when a translation file has an extension with no registered parser.

    Example:
        >>> loader.load(Path("lang/lang_en.xml"))
        Traceback (most recent call last):
        ...
        UnsupportedFormatError: 'xml' is not a supported translation file extension
    """

    def __init__(self, path: Path, extension: str):
        self.path = Path(path)
        self.extension = extension
        super().__init__(
            f"'{extension}' is not a supported translation file extension ({self.path})"
        )


class TranslationParseError(I18nError):
    """Raised when a translation file cannot be parsed."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to parse {self.path}: {reason}")


class InvalidIdentifierError(I18nError):
    """Raised when a flattened translation key is not a valid bare identifier."""

    def __init__(self, identifier: str, message: Optional[str] = None):
        self.identifier = identifier
        super().__init__(
            message
            or f"Cannot compile translation key '{identifier}' because it is not a valid identifier"
        )


class DuplicateIdentifierError(InvalidIdentifierError):
    """Raised when two tree paths flatten to the same identifier.

    Example:
        {"a_b": "x", "a": {"b": "y"}} with separator "_" yields "a_b" twice.
    """

    def __init__(self, identifier: str):
        super().__init__(
            identifier,
            f"Translation key '{identifier}' is defined more than once after flattening",
        )


class CacheWriteError(I18nError):
    """Raised when the compiled artifact cannot be written."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        super().__init__(
            f"Could not write cache file to path '{self.path}'. Is it writable? ({reason})"
        )


class CacheReadError(I18nError):
    """Raised when a compiled artifact exists but cannot be loaded."""

    def __init__(self, path: Path, reason: str):
        self.path = Path(path)
        super().__init__(f"Could not read cache file '{self.path}': {reason}")


class PathListMismatchError(I18nError):
    """Raised when primary and fallback path lists cannot be interleaved."""

    pass


class DoubleInitializationError(I18nError):
    """Raised when init() is called on an already initialized translator."""

    pass


class PostInitMutationError(I18nError):
    """Raised when configuration is changed after init()."""

    pass


class NotInitializedError(I18nError):
    """Raised when compiled translations are accessed before init()."""

    pass
