"""Tests for infrastructure.i18n.cache module."""

import os
from pathlib import Path

import pytest

from infrastructure.i18n import (
    CacheReadError,
    CacheStore,
    CacheWriteError,
    engine_version_tag,
)
from tests.factories.i18n import make_cache_artifact


def _touch(path: Path, mtime: float) -> None:
    os.utime(path, (mtime, mtime))


class TestFingerprint:
    """Tests for CacheStore.fingerprint."""

    def test_static_map_order_does_not_matter(self):
        paths = [Path("lang/lang_en.ini")]
        assert CacheStore.fingerprint({"A": "1", "B": "2"}, paths) == CacheStore.fingerprint(
            {"B": "2", "A": "1"}, paths
        )

    def test_static_map_values_matter(self):
        paths = [Path("lang/lang_en.ini")]
        assert CacheStore.fingerprint({"A": "1"}, paths) != CacheStore.fingerprint(
            {"A": "2"}, paths
        )

    def test_path_order_matters(self):
        a, b = Path("lang/a.ini"), Path("lang/b.ini")
        assert CacheStore.fingerprint({}, [a, b]) != CacheStore.fingerprint({}, [b, a])

    def test_path_set_matters(self):
        a, b = Path("lang/a.ini"), Path("lang/b.ini")
        assert CacheStore.fingerprint(None, [a]) != CacheStore.fingerprint(None, [a, b])

    def test_entries_are_delimited(self):
        """Concatenated entries cannot alias each other."""
        assert CacheStore.fingerprint({"A": "1B"}, []) != CacheStore.fingerprint(
            {"A": "1", "B": ""}, []
        )

    def test_deterministic(self):
        paths = [Path("lang/lang_en.ini")]
        assert CacheStore.fingerprint({"A": "1"}, paths) == CacheStore.fingerprint(
            {"A": "1"}, paths
        )


class TestLocate:
    """Tests for CacheStore.locate."""

    def test_name_includes_every_input(self, cache_dir):
        path = CacheStore.locate(cache_dir, "v1", "ff00", "L", "de")
        assert path == cache_dir / "i18n_v1_ff00_L_de.cache.json"

    def test_different_namespaces_do_not_collide(self, cache_dir):
        assert CacheStore.locate(cache_dir, "v1", "ff", "L", "en") != CacheStore.locate(
            cache_dir, "v1", "ff", "T", "en"
        )


def test_engine_version_tag_is_stable():
    tag = engine_version_tag()
    assert tag == engine_version_tag()
    assert len(tag) == 12
    assert all(c in "0123456789abcdef" for c in tag)


class TestIsStale:
    """Tests for CacheStore.is_stale."""

    def test_missing_artifact_is_stale(self, lang_dir, cache_dir):
        assert CacheStore.is_stale(cache_dir / "missing.cache.json", [lang_dir / "lang_en.ini"])

    def test_fresh_artifact(self, lang_dir, cache_dir):
        artifact_path = cache_dir / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact())
        source = lang_dir / "lang_en.ini"
        _touch(source, 1_000_000)
        _touch(artifact_path, 2_000_000)

        assert not CacheStore.is_stale(artifact_path, [source])

    def test_same_mtime_is_fresh(self, lang_dir, cache_dir):
        artifact_path = cache_dir / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact())
        source = lang_dir / "lang_en.ini"
        _touch(source, 2_000_000)
        _touch(artifact_path, 2_000_000)

        assert not CacheStore.is_stale(artifact_path, [source])

    def test_any_newer_source_is_stale(self, lang_dir, cache_dir):
        artifact_path = cache_dir / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact())
        en, de = lang_dir / "lang_en.ini", lang_dir / "lang_de.ini"
        _touch(en, 1_000_000)
        _touch(artifact_path, 2_000_000)
        _touch(de, 3_000_000)

        assert CacheStore.is_stale(artifact_path, [en, de])


class TestWriteRead:
    """Tests for CacheStore.write and CacheStore.read."""

    def test_round_trip_preserves_special_characters(self, cache_dir):
        """Quotes, backslashes, newlines and non-ASCII text survive."""
        messages = {
            "quote": 'He said "hi" and \'bye\'',
            "backslash": "C:\\path\\to\\file",
            "multiline": "line one\nline two",
            "unicode": "Grüße, 你好 🌍",
            "dollar": "$var {NAME} %s",
        }
        artifact = make_cache_artifact(messages=messages)
        artifact_path = cache_dir / "artifact.cache.json"

        CacheStore.write(artifact_path, artifact)

        assert CacheStore.read(artifact_path) == artifact

    def test_creates_cache_directory(self, tmp_path):
        artifact_path = tmp_path / "nested" / "cache" / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact())
        assert artifact_path.is_file()

    def test_replaces_existing_artifact(self, cache_dir):
        artifact_path = cache_dir / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact(messages={"title": "Old"}))
        CacheStore.write(artifact_path, make_cache_artifact(messages={"title": "New"}))

        assert CacheStore.read(artifact_path).messages == {"title": "New"}

    def test_no_temporary_files_left(self, cache_dir):
        artifact_path = cache_dir / "artifact.cache.json"
        CacheStore.write(artifact_path, make_cache_artifact())
        assert [p.name for p in cache_dir.iterdir()] == ["artifact.cache.json"]

    def test_unwritable_location_raises(self, tmp_path):
        """A cache path blocked by a regular file cannot be written."""
        blocker = tmp_path / "langcache"
        blocker.write_text("not a directory", encoding="utf-8")

        with pytest.raises(CacheWriteError) as exc_info:
            CacheStore.write(blocker / "artifact.cache.json", make_cache_artifact())
        assert exc_info.value.path == blocker / "artifact.cache.json"

    def test_missing_artifact_raises(self, cache_dir):
        with pytest.raises(CacheReadError):
            CacheStore.read(cache_dir / "missing.cache.json")

    @pytest.mark.parametrize(
        "content",
        [
            "{not json",
            "[]",
            '{"engine_version": "v1"}',
            '{"engine_version": "v1", "fingerprint": "f", "namespace": "L",'
            ' "locale": "en", "created_at": "t", "messages": {"a": 1}}',
        ],
    )
    def test_corrupt_artifact_raises(self, cache_dir, content):
        artifact_path = cache_dir / "artifact.cache.json"
        cache_dir.mkdir()
        artifact_path.write_text(content, encoding="utf-8")

        with pytest.raises(CacheReadError):
            CacheStore.read(artifact_path)
