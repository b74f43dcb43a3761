"""Translation models for i18n system.

Defines the data structures that flow through the resolve/merge/compile
pass: raw translation trees, the flat compiled mapping, the read-only
catalog served at runtime and the persisted cache artifact.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

from infrastructure.i18n.formatting import format_message

# Nested {section: {key: leaf}} structure produced by a parser.
TranslationTree = Dict[str, Any]

# Flat {identifier: message} structure produced by the compiler.
CompiledMapping = Dict[str, str]

LANGUAGE_PLACEHOLDER = "{LANGUAGE}"

LOCALE_PATTERN = re.compile(r"[a-zA-Z0-9_-]*")

IDENTIFIER_PATTERN = re.compile(r"[a-zA-Z_][a-zA-Z0-9_]*")


def is_valid_locale(locale: Any) -> bool:
    """Check that a locale code is safe to substitute into a file path.

    Args:
        locale: Candidate locale code.

    Returns:
        True if locale is a string made of letters, digits, "_" and "-".
    """
    return isinstance(locale, str) and LOCALE_PATTERN.fullmatch(locale) is not None


@dataclass(frozen=True)
class TranslationCatalog:
    """Read-only lookup table of compiled translations for one locale.

    Identifiers are flattened section paths (e.g. "welcomepage_greeting").
    Since every identifier is a bare identifier, messages can also be read
    as attributes:

        catalog.welcomepage_greeting
        catalog("welcomepage_greeting", ["Bob"])

    Attributes:
        locale: The applied locale.
        namespace: Namespace tag the catalog was compiled under (e.g. "L").
        messages: Read-only {identifier: message} mapping.
        loaded_at: Timestamp (ISO 8601) when the catalog was built or read.
    """

    locale: str
    namespace: str
    messages: Mapping[str, str] = field(default_factory=dict)
    loaded_at: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "messages", MappingProxyType(dict(self.messages)))

    def get_message(self, identifier: str) -> Optional[str]:
        """Retrieve a compiled message by identifier.

        Args:
            identifier: Flattened identifier.

        Returns:
            Message string, or None if not found.
        """
        return self.messages.get(identifier)

    def has_message(self, identifier: str) -> bool:
        return identifier in self.messages

    def format(self, identifier: str, args: Optional[Sequence[Any]] = None) -> str:
        """Return a message, applying printf-style positional arguments.

        Args:
            identifier: Flattened identifier.
            args: Optional values for "%s" or "%1$s" style placeholders.
                Surplus values are ignored.

        Returns:
            The message, formatted when args is not None.

        Raises:
            KeyError: If identifier is not in the catalog.
            TypeError: If the message needs more arguments than given.
        """
        if identifier not in self.messages:
            raise KeyError(
                f"Translation not found for identifier {identifier} in {self.locale}"
            )
        message = self.messages[identifier]
        if args is None:
            return message
        return format_message(message, args)

    def __getitem__(self, identifier: str) -> str:
        return self.format(identifier)

    def __contains__(self, identifier: object) -> bool:
        return identifier in self.messages

    def __len__(self) -> int:
        return len(self.messages)

    def __getattr__(self, identifier: str) -> str:
        # messages may be absent from __dict__ on a half-built instance.
        messages = self.__dict__.get("messages")
        if identifier.startswith("__") or messages is None:
            raise AttributeError(identifier)
        try:
            return messages[identifier]
        except KeyError:
            raise AttributeError(
                f"'{self.__dict__.get('namespace')}' has no translation '{identifier}'"
            ) from None

    def __call__(self, identifier: str, args: Optional[Sequence[Any]] = None) -> str:
        return self.format(identifier, args)


@dataclass(frozen=True)
class CacheArtifact:
    """Persisted form of a compiled catalog.

    Artifacts are never modified in place; a stale artifact is replaced
    wholesale by a newly written one.

    Attributes:
        engine_version: Tag of the engine that produced the artifact.
        fingerprint: Hash of the static map and active source paths.
        namespace: Namespace tag (prefix) the messages were compiled under.
        locale: Applied locale.
        messages: Compiled {identifier: message} mapping.
        created_at: Timestamp (ISO 8601) of compilation.
    """

    engine_version: str
    fingerprint: str
    namespace: str
    locale: str
    messages: CompiledMapping
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "engine_version": self.engine_version,
            "fingerprint": self.fingerprint,
            "namespace": self.namespace,
            "locale": self.locale,
            "created_at": self.created_at,
            "messages": dict(self.messages),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "CacheArtifact":
        """Build an artifact from its serialized form.

        Args:
            data: Mapping as produced by to_dict().

        Returns:
            CacheArtifact instance.

        Raises:
            ValueError: If a field is missing or has the wrong type.
        """
        if not isinstance(data, Mapping):
            raise ValueError("artifact root must be an object")

        values = {}
        for name in ("engine_version", "fingerprint", "namespace", "locale", "created_at"):
            value = data.get(name)
            if not isinstance(value, str):
                raise ValueError(f"artifact field '{name}' must be a string")
            values[name] = value

        messages = data.get("messages")
        if not isinstance(messages, Mapping) or not all(
            isinstance(k, str) and isinstance(v, str) for k, v in messages.items()
        ):
            raise ValueError("artifact field 'messages' must map strings to strings")

        return cls(messages=dict(messages), **values)

    def matches(
        self, engine_version: str, fingerprint: str, namespace: str, locale: str
    ) -> bool:
        """Check whether the artifact was compiled from the given inputs."""
        return (
            self.engine_version == engine_version
            and self.fingerprint == fingerprint
            and self.namespace == namespace
            and self.locale == locale
        )

    def to_catalog(self, loaded_at: Optional[str] = None) -> TranslationCatalog:
        return TranslationCatalog(
            locale=self.locale,
            namespace=self.namespace,
            messages=self.messages,
            loaded_at=loaded_at or datetime.now(timezone.utc).isoformat(),
        )
