"""Translator: one resolve/merge/compile pass and read access afterwards.

Configuration is mutable until init() runs. init() negotiates the applied
language, loads and merges the active translation files, compiles them and
persists the result in the cache directory. Later processes with the same
inputs read the cached artifact instead of re-parsing the sources.
"""

from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from infrastructure.i18n.cache import CacheStore, engine_version_tag
from infrastructure.i18n.compiler import Compiler
from infrastructure.i18n.errors import (
    CacheReadError,
    DoubleInitializationError,
    NotInitializedError,
    PostInitMutationError,
)
from infrastructure.i18n.loader import ConfigLoader
from infrastructure.i18n.merger import merge
from infrastructure.i18n.models import CacheArtifact, TranslationCatalog
from infrastructure.i18n.paths import PathResolver
from infrastructure.i18n.resolvers import LanguageNegotiator
from infrastructure.logging import get_module_logger

logger = get_module_logger()

DEFAULT_FILE_PATHS = ["./lang/lang_{LANGUAGE}.ini"]
DEFAULT_CACHE_PATH = "./langcache/"
DEFAULT_FALLBACK_LANG = "en"
DEFAULT_PREFIX = "L"
DEFAULT_SECTION_SEPARATOR = "_"


class Translator:
    """Resolves, compiles and serves translations for one process.

    Usage:
        translator = Translator(["./lang/lang_{LANGUAGE}.yml"], "./langcache/")
        translator.merge_fallback = True
        translator.init(accept_language=request.headers.get("Accept-Language"))

        translator.get("welcomepage_greeting")
        translator.get("cart_items", [3])
        translator.catalog.welcomepage_greeting

    Attributes:
        loader: ConfigLoader used to parse translation files.
        negotiator: LanguageNegotiator picking the applied language.
        path_resolver: PathResolver expanding path templates.
        store: CacheStore persisting compiled artifacts.
    """

    def __init__(
        self,
        file_paths: Optional[Union[str, Sequence[str]]] = None,
        cache_path: Optional[Union[str, Path]] = None,
        fallback_lang: Optional[str] = None,
        prefix: Optional[str] = None,
        loader: Optional[ConfigLoader] = None,
        store: Optional[CacheStore] = None,
    ):
        """Initialize Translator.

        Args:
            file_paths: Path template or list of templates containing {LANGUAGE}.
            cache_path: Directory for compiled artifacts.
            fallback_lang: Lowest priority language (default: en).
            prefix: Namespace tag of the compiled catalog (default: L).
            loader: Optional ConfigLoader with a custom parser registry.
            store: Optional CacheStore.
        """
        self._file_paths: List[str] = self._as_list(file_paths or DEFAULT_FILE_PATHS)
        self._cache_path = Path(cache_path or DEFAULT_CACHE_PATH)
        self._fallback_lang = fallback_lang or DEFAULT_FALLBACK_LANG
        self._prefix = prefix or DEFAULT_PREFIX
        self._merge_fallback = False
        self._forced_lang: Optional[str] = None
        self._section_separator = DEFAULT_SECTION_SEPARATOR
        self._static_map: Dict[str, Any] = {}

        self.path_resolver = PathResolver()
        self.negotiator = LanguageNegotiator(self.path_resolver)
        self.loader = loader or ConfigLoader()
        self.store = store or CacheStore()

        self._is_initialized = False
        self._user_langs: List[str] = []
        self._applied_lang: Optional[str] = None
        self._active_paths: List[Path] = []
        self._artifact_path: Optional[Path] = None
        self._catalog: Optional[TranslationCatalog] = None

    @staticmethod
    def _as_list(file_paths: Union[str, Sequence[str]]) -> List[str]:
        if isinstance(file_paths, (str, Path)):
            return [str(file_paths)]
        return [str(path) for path in file_paths]

    def _fail_after_init(self) -> None:
        if self._is_initialized:
            raise PostInitMutationError(
                "This Translator is already initialized, so its settings cannot be changed"
            )

    # Configuration (writable until init)

    @property
    def file_paths(self) -> List[str]:
        return list(self._file_paths)

    @file_paths.setter
    def file_paths(self, value: Union[str, Sequence[str]]) -> None:
        self._fail_after_init()
        self._file_paths = self._as_list(value)

    @property
    def cache_path(self) -> Path:
        return self._cache_path

    @cache_path.setter
    def cache_path(self, value: Union[str, Path]) -> None:
        self._fail_after_init()
        self._cache_path = Path(value)

    @property
    def fallback_lang(self) -> str:
        return self._fallback_lang

    @fallback_lang.setter
    def fallback_lang(self, value: str) -> None:
        self._fail_after_init()
        self._fallback_lang = value

    @property
    def fallback_language(self) -> str:
        return self._fallback_lang

    @property
    def merge_fallback(self) -> bool:
        return self._merge_fallback

    @merge_fallback.setter
    def merge_fallback(self, value: bool) -> None:
        self._fail_after_init()
        self._merge_fallback = bool(value)

    @property
    def prefix(self) -> str:
        return self._prefix

    @prefix.setter
    def prefix(self, value: str) -> None:
        self._fail_after_init()
        self._prefix = value

    @property
    def forced_lang(self) -> Optional[str]:
        return self._forced_lang

    @forced_lang.setter
    def forced_lang(self, value: Optional[str]) -> None:
        self._fail_after_init()
        self._forced_lang = value

    @property
    def section_separator(self) -> str:
        return self._section_separator

    @section_separator.setter
    def section_separator(self, value: str) -> None:
        self._fail_after_init()
        self._section_separator = value

    @property
    def static_map(self) -> Dict[str, Any]:
        return dict(self._static_map)

    @static_map.setter
    def static_map(self, value: Optional[Dict[str, Any]]) -> None:
        self._fail_after_init()
        self._static_map = dict(value or {})

    # Initialization

    @property
    def is_initialized(self) -> bool:
        return self._is_initialized

    def init(
        self,
        request_lang: Optional[Any] = None,
        session_lang: Optional[Any] = None,
        accept_language: Optional[str] = None,
    ) -> TranslationCatalog:
        """Run the resolve/merge/compile pass.

        Args:
            request_lang: Language requested through a request parameter.
            session_lang: Language stored in the user's session.
            accept_language: Accept-Language header value.

        Returns:
            The compiled TranslationCatalog.

        Raises:
            DoubleInitializationError: If called more than once.
            NoLanguageFileFoundError: If no candidate language has a source file.
            UnsupportedFormatError: If a source file has an unknown extension.
            TranslationParseError: If a source file is malformed.
            InvalidIdentifierError: If a translation key cannot be compiled.
            CacheWriteError: If the artifact cannot be written.
        """
        if self._is_initialized:
            raise DoubleInitializationError(
                "This Translator is already initialized; it cannot be initialized twice"
            )
        # Marked first: a failed pass leaves the instance unusable.
        self._is_initialized = True

        self._user_langs = self.negotiator.negotiate(
            fallback=self._fallback_lang,
            forced=self._forced_lang,
            request_lang=request_lang,
            session_lang=session_lang,
            accept_language=accept_language,
        )
        self._applied_lang = self.negotiator.resolve_applied(
            self._user_langs, self._file_paths
        )
        self._active_paths = self.path_resolver.active_paths(
            self._file_paths,
            self._applied_lang,
            self._fallback_lang if self._merge_fallback else None,
        )

        engine_version = engine_version_tag()
        fingerprint = self.store.fingerprint(self._static_map, self._active_paths)
        self._artifact_path = self.store.locate(
            self._cache_path, engine_version, fingerprint, self._prefix, self._applied_lang
        )

        artifact = None
        if not self.store.is_stale(self._artifact_path, self._active_paths):
            artifact = self._read_artifact(engine_version, fingerprint)
        else:
            logger.info("translation_cache_stale", artifact=str(self._artifact_path))

        if artifact is None:
            artifact = self._build_artifact(engine_version, fingerprint)
            self.store.write(self._artifact_path, artifact)

        self._catalog = artifact.to_catalog()
        logger.info(
            "translator_initialized",
            applied_language=self._applied_lang,
            active_paths=[str(path) for path in self._active_paths],
            identifier_count=len(self._catalog),
        )
        return self._catalog

    def _read_artifact(
        self, engine_version: str, fingerprint: str
    ) -> Optional[CacheArtifact]:
        try:
            artifact = self.store.read(self._artifact_path)
        except CacheReadError as e:
            logger.warning("unreadable_translation_cache", error=str(e))
            return None

        if not artifact.matches(
            engine_version, fingerprint, self._prefix, self._applied_lang
        ):
            logger.warning(
                "mismatched_translation_cache", artifact=str(self._artifact_path)
            )
            return None
        return artifact

    def _build_artifact(self, engine_version: str, fingerprint: str) -> CacheArtifact:
        trees = [self.loader.load(path) for path in self._active_paths]
        merged = merge(trees, priority_ascending=False)
        messages = Compiler(self._section_separator).compile(merged, self._static_map)
        return CacheArtifact(
            engine_version=engine_version,
            fingerprint=fingerprint,
            namespace=self._prefix,
            locale=self._applied_lang,
            messages=messages,
        )

    # Read access (after init)

    def _require_init(self) -> TranslationCatalog:
        if self._catalog is None:
            raise NotInitializedError("Translator.init() has not completed")
        return self._catalog

    @property
    def catalog(self) -> TranslationCatalog:
        return self._require_init()

    @property
    def applied_language(self) -> str:
        self._require_init()
        return self._applied_lang

    @property
    def user_languages(self) -> List[str]:
        self._require_init()
        return list(self._user_langs)

    @property
    def active_paths(self) -> List[Path]:
        self._require_init()
        return list(self._active_paths)

    @property
    def artifact_path(self) -> Path:
        self._require_init()
        return self._artifact_path

    def get(self, identifier: str, args: Optional[Sequence[Any]] = None) -> str:
        """Return a compiled message.

        Args:
            identifier: Flattened identifier (e.g. "welcomepage_greeting").
            args: Optional positional values for printf-style placeholders.

        Returns:
            Message string.

        Raises:
            NotInitializedError: If init() has not completed.
            KeyError: If identifier is unknown.
        """
        catalog = self._require_init()
        try:
            return catalog.format(identifier, args)
        except KeyError:
            logger.error(
                "translation_not_found",
                identifier=identifier,
                locale=self._applied_lang,
            )
            raise

    def __call__(self, identifier: str, args: Optional[Sequence[Any]] = None) -> str:
        return self.get(identifier, args)
