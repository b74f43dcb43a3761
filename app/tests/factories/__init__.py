"""Test data factories for deterministic test data generation."""

from tests.factories.i18n import (
    make_cache_artifact,
    make_translation_catalog,
    make_translation_tree,
    write_translation_file,
)

__all__ = [
    "make_cache_artifact",
    "make_translation_catalog",
    "make_translation_tree",
    "write_translation_file",
]
