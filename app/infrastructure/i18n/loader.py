"""Translation file parsing interface and implementations.

Defines the contract for parsing a single translation file into a nested
tree and provides INI/properties, YAML and JSON parsers. ConfigLoader
dispatches on file extension through a registry of parsers.
"""

import configparser
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

import structlog
from infrastructure.i18n.errors import TranslationParseError, UnsupportedFormatError
from infrastructure.i18n.models import TranslationTree

logger = structlog.get_logger().bind(component="i18n.loader")

# Section name used for keys that appear before the first INI section.
_INI_ROOT_SECTION = "__i18n_root__"


class TranslationParser(ABC):
    """Abstract base for translation file parsers.

    Implementations turn one file into a nested {section: {key: value}}
    tree and raise TranslationParseError for malformed content.
    """

    @abstractmethod
    def parse(self, path: Path) -> TranslationTree:
        """Parse a translation file.

        Args:
            path: File to parse.

        Returns:
            Nested translation tree.

        Raises:
            TranslationParseError: If the file content is malformed.
        """
        pass


class IniTranslationParser(TranslationParser):
    """Parser for INI and .properties files.

    Sections become nested trees. Keys declared before the first section
    are top-level leaves. Key case is preserved and values are not
    interpolated. A double-quoted value keeps everything inside the quotes;
    in an unquoted value ";" starts a trailing comment.
    """

    def parse(self, path: Path) -> TranslationTree:
        # [DEFAULT] is an ordinary section here; later duplicate keys win.
        parser = configparser.ConfigParser(
            interpolation=None,
            default_section="__i18n_defaults__",
            strict=False,
        )
        parser.optionxform = str  # type: ignore[assignment]

        try:
            text = path.read_text(encoding="utf-8")
            parser.read_string(f"[{_INI_ROOT_SECTION}]\n{text}", source=str(path))
        except (configparser.Error, UnicodeDecodeError) as e:
            raise TranslationParseError(path, str(e)) from e

        tree: TranslationTree = {}
        for section in parser.sections():
            values = {
                key: self._clean_value(value)
                for key, value in parser.items(section, raw=True)
            }
            if section == _INI_ROOT_SECTION:
                tree.update(values)
            else:
                tree[section] = values
        return tree

    @staticmethod
    def _clean_value(value: str) -> str:
        if value.startswith('"'):
            end = value.find('"', 1)
            return value[1:end] if end != -1 else value
        comment = value.find(";")
        if comment != -1:
            return value[:comment].rstrip()
        return value


class YAMLTranslationParser(TranslationParser):
    """Parser for YAML translation files (yaml.safe_load)."""

    def parse(self, path: Path) -> TranslationTree:
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (yaml.YAMLError, UnicodeDecodeError) as e:
            raise TranslationParseError(path, str(e)) from e
        return _require_mapping(path, data)


class JSONTranslationParser(TranslationParser):
    """Parser for JSON translation files."""

    def parse(self, path: Path) -> TranslationTree:
        try:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
            data = json.loads(text) if text.strip() else None
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise TranslationParseError(path, str(e)) from e
        return _require_mapping(path, data)


def _require_mapping(path: Path, data: Any) -> TranslationTree:
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise TranslationParseError(
            path, f"expected a mapping at the document root, got {type(data).__name__}"
        )
    return data


def normalize_tree(node: Any) -> Any:
    """Normalize parsed data so that every branch is a str-keyed dict.

    Lists become index-keyed dicts ("0", "1", ...) and non-string keys are
    converted to strings. Leaves are returned unchanged.
    """
    if isinstance(node, dict):
        return {str(key): normalize_tree(value) for key, value in node.items()}
    if isinstance(node, (list, tuple)):
        return {str(index): normalize_tree(value) for index, value in enumerate(node)}
    return node


def default_parsers() -> Dict[str, TranslationParser]:
    ini = IniTranslationParser()
    yml = YAMLTranslationParser()
    return {
        "ini": ini,
        "properties": ini,
        "yml": yml,
        "yaml": yml,
        "json": JSONTranslationParser(),
    }


class ConfigLoader:
    """Loads translation files by dispatching on their extension.

    Attributes:
        parsers: Registry of lower-case extension -> TranslationParser.
    """

    def __init__(self, parsers: Optional[Dict[str, TranslationParser]] = None):
        """Initialize the loader.

        Args:
            parsers: Optional registry overriding the default parsers.
        """
        self.parsers: Dict[str, TranslationParser] = (
            dict(parsers) if parsers is not None else default_parsers()
        )

    def register_parser(self, extension: str, parser: TranslationParser) -> None:
        """Register or replace the parser for an extension.

        Args:
            extension: File extension, with or without the leading dot.
            parser: Parser instance.
        """
        self.parsers[extension.lstrip(".").lower()] = parser

    def load(self, path: Path) -> TranslationTree:
        """Parse one translation file into a normalized tree.

        Args:
            path: Translation file.

        Returns:
            Nested translation tree with str keys.

        Raises:
            UnsupportedFormatError: If no parser handles the file extension.
            TranslationParseError: If the file cannot be parsed.
        """
        path = Path(path)
        extension = path.suffix.lstrip(".").lower()
        parser = self.parsers.get(extension)
        if parser is None:
            logger.error("unsupported_translation_format", file=str(path), extension=extension)
            raise UnsupportedFormatError(path, extension)

        try:
            tree = parser.parse(path)
        except TranslationParseError as e:
            logger.error("translation_parse_error", file=str(path), error=e.reason)
            raise
        except OSError as e:
            logger.error("translation_read_error", file=str(path), error=str(e))
            raise TranslationParseError(path, str(e)) from e

        tree = normalize_tree(tree)
        logger.info(
            "loaded_translation_file",
            file=str(path),
            format=extension,
            top_level_keys=len(tree),
        )
        return tree
