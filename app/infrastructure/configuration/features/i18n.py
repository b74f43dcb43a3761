"""Translation (i18n) feature settings."""

import re
from typing import Dict, List, Optional

from pydantic import Field, field_validator

from infrastructure.configuration.base import FeatureSettings

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"

_LOCALE_RE = re.compile(r"[a-zA-Z0-9_-]*")


class I18nSettings(FeatureSettings):
    """Configuration for resolving and compiling translation files.

    Set once before the translator is initialized; the translator copies
    these values and rejects changes after init().

    Environment Variables:
        I18N_FILE_PATHS: JSON list of path templates containing {LANGUAGE}
        I18N_CACHE_PATH: Directory for compiled translation artifacts
        I18N_FALLBACK_LANG: Lowest priority language (default: en)
        I18N_MERGE_FALLBACK: Merge fallback strings under the applied language
        I18N_PREFIX: Namespace tag of the compiled catalog (default: L)
        I18N_FORCED_LANG: Language that overrides every user preference
        I18N_SECTION_SEPARATOR: Separator between section and key names
        I18N_STATIC_MAP: JSON object of {PLACEHOLDER: replacement}

    Example:
        ```python
        from infrastructure.configuration import settings

        templates = settings.i18n.file_paths
        cache_dir = settings.i18n.cache_path
        ```
    """

    file_paths: List[str] = Field(
        default_factory=lambda: ["./lang/lang_{LANGUAGE}.ini"],
        alias="I18N_FILE_PATHS",
        description="Translation file path templates, highest priority first",
    )
    cache_path: str = Field(
        default="./langcache/",
        alias="I18N_CACHE_PATH",
        description="Directory for compiled translation artifacts",
    )
    fallback_lang: str = Field(
        default="en",
        alias="I18N_FALLBACK_LANG",
        description="Language used when no user language has translation files",
    )
    merge_fallback: bool = Field(
        default=False,
        alias="I18N_MERGE_FALLBACK",
        description="Fill missing strings of the applied language from the fallback",
    )
    prefix: str = Field(
        default="L",
        alias="I18N_PREFIX",
        description="Namespace tag embedded in artifact names",
    )
    forced_lang: Optional[str] = Field(
        default=None,
        alias="I18N_FORCED_LANG",
        description="Language that takes precedence over all user preferences",
    )
    section_separator: str = Field(
        default="_",
        alias="I18N_SECTION_SEPARATOR",
        description="Separator between section and key in compiled identifiers",
    )
    static_map: Dict[str, str] = Field(
        default_factory=dict,
        alias="I18N_STATIC_MAP",
        description="Placeholders replaced at compile time",
    )

    @field_validator("file_paths", mode="before")
    @classmethod
    def validate_file_paths_type(cls, v):
        """Accept a single template string as a one-element list."""
        if isinstance(v, str):
            return [v]
        return v

    @field_validator("file_paths")
    @classmethod
    def validate_file_paths(cls, v: List[str]) -> List[str]:
        if not v:
            raise ValueError("at least one translation file path template is required")
        missing = [path for path in v if LANGUAGE_PLACEHOLDER not in path]
        if missing:
            raise ValueError(
                f"translation file path templates must contain {LANGUAGE_PLACEHOLDER}: {missing}"
            )
        return v

    @field_validator("fallback_lang", "forced_lang")
    @classmethod
    def validate_language_code(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not _LOCALE_RE.fullmatch(v):
            raise ValueError(f"invalid language code: {v!r}")
        return v

    @field_validator("forced_lang", mode="before")
    @classmethod
    def validate_forced_lang_empty(cls, v):
        if v == "":
            return None
        return v
