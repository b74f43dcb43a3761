"""Persistent store for compiled translation artifacts.

Artifacts are flat JSON files named after the engine version, the input
fingerprint, the namespace tag and the applied locale, so unrelated
configurations never share a file. An artifact is valid only while its
fingerprint matches the current inputs and it is at least as new as every
source file it was compiled from.
"""

import hashlib
import json
import os
import tempfile
from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping, Optional, Sequence

import structlog
from infrastructure.i18n.compiler import placeholder_token
from infrastructure.i18n.errors import CacheReadError, CacheWriteError
from infrastructure.i18n.models import CacheArtifact

logger = structlog.get_logger().bind(component="i18n.cache")

ARTIFACT_PREFIX = "i18n"
ARTIFACT_SUFFIX = ".cache.json"

# Modules whose source determines the artifact content.
_ENGINE_SOURCES = ("compiler.py", "cache.py", "models.py")


@lru_cache(maxsize=1)
def engine_version_tag() -> str:
    """Short hash of the engine sources.

    Any change to how artifacts are compiled or serialized produces a new
    tag, which in turn produces new artifact file names.
    """
    digest = hashlib.sha256()
    package_dir = Path(__file__).resolve().parent
    for name in _ENGINE_SOURCES:
        digest.update((package_dir / name).read_bytes())
    return digest.hexdigest()[:12]


class CacheStore:
    """Locates, validates, reads and writes compiled artifacts."""

    @staticmethod
    def fingerprint(
        static_map: Optional[Mapping[str, Any]], active_paths: Sequence[Path]
    ) -> str:
        """Hash the compilation inputs.

        Static map entries are hashed sorted by placeholder, so insertion
        order does not matter. Paths are hashed in the given order, so a
        change of merge order produces a different fingerprint.

        Args:
            static_map: Placeholder name -> replacement.
            active_paths: Existing source paths in merge priority order.

        Returns:
            Hex digest.
        """
        digest = hashlib.sha256()
        for placeholder, replacement in sorted(
            (str(k), str(v)) for k, v in (static_map or {}).items()
        ):
            digest.update(f"{placeholder_token(placeholder)}{replacement}\0".encode("utf-8"))
        for path in active_paths:
            digest.update(f"{path}\0".encode("utf-8"))
        return digest.hexdigest()

    @staticmethod
    def locate(
        cache_dir: Path,
        engine_version: str,
        fingerprint: str,
        namespace: str,
        locale: str,
    ) -> Path:
        """Derive the artifact file path for a set of inputs.

        Example:
            >>> CacheStore.locate(Path("langcache"), "1a2b", "ff00", "L", "en")
            PosixPath('langcache/i18n_1a2b_ff00_L_en.cache.json')
        """
        name = f"{ARTIFACT_PREFIX}_{engine_version}_{fingerprint}_{namespace}_{locale}{ARTIFACT_SUFFIX}"
        return Path(cache_dir) / name

    @staticmethod
    def is_stale(artifact_path: Path, active_paths: Sequence[Path]) -> bool:
        """Check whether an artifact must be rebuilt.

        Args:
            artifact_path: Artifact file.
            active_paths: Source files the artifact is compiled from.

        Returns:
            True if the artifact is missing or any source was modified after it.
        """
        try:
            artifact_mtime = Path(artifact_path).stat().st_mtime
        except FileNotFoundError:
            return True

        for path in active_paths:
            if Path(path).stat().st_mtime > artifact_mtime:
                logger.info(
                    "translation_source_newer_than_cache",
                    artifact=str(artifact_path),
                    source=str(path),
                )
                return True
        return False

    @staticmethod
    def write(artifact_path: Path, artifact: CacheArtifact) -> None:
        """Atomically write an artifact.

        The content goes to a temporary file in the destination directory
        which then replaces the artifact, so readers see either the old or
        the new file, never a partial one.

        Raises:
            CacheWriteError: If the directory or file cannot be written.
        """
        artifact_path = Path(artifact_path)
        payload = json.dumps(artifact.to_dict(), ensure_ascii=False, indent=1)

        tmp_name: Optional[str] = None
        try:
            artifact_path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                mode="w",
                encoding="utf-8",
                dir=artifact_path.parent,
                prefix=f".{artifact_path.name}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_name = f.name
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_name, 0o644)
            os.replace(tmp_name, artifact_path)
            tmp_name = None
        except OSError as e:
            logger.error(
                "translation_cache_write_error", artifact=str(artifact_path), error=str(e)
            )
            raise CacheWriteError(artifact_path, str(e)) from e
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except FileNotFoundError:
                    pass

        logger.info(
            "wrote_translation_cache",
            artifact=str(artifact_path),
            identifier_count=len(artifact.messages),
        )

    @staticmethod
    def read(artifact_path: Path) -> CacheArtifact:
        """Load a previously written artifact.

        Raises:
            CacheReadError: If the file is unreadable or not a valid artifact.
        """
        artifact_path = Path(artifact_path)
        try:
            with open(artifact_path, "r", encoding="utf-8") as f:
                data = json.load(f)
            artifact = CacheArtifact.from_dict(data)
        except (OSError, ValueError) as e:
            # json.JSONDecodeError and UnicodeDecodeError are ValueErrors.
            raise CacheReadError(artifact_path, str(e)) from e

        logger.info(
            "loaded_translation_cache",
            artifact=str(artifact_path),
            identifier_count=len(artifact.messages),
        )
        return artifact
