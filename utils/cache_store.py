"""Filesystem-backed cache store.

Maps ``(namespace, key)`` pairs to files under a single cache root::

    <cache_root>/Decks/<deck_id>.json
    <cache_root>/Cards/<card_id>.png

Keys are plain file names. There is no index or manifest: a key exists
exactly when its file does, so files dropped into a namespace by hand are
treated like any other entry.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from utils.atomic_io import atomic_write_bytes
from utils.constants import default_cache_root
from utils.errors import (
    CacheEntryNotFound,
    CacheReadError,
    CacheUnavailable,
    CacheWriteError,
)


class CacheStore:
    """Owns the on-disk directory layout of the cache."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir is not None else default_cache_root()

    @property
    def base_dir(self) -> Path:
        return self._base_dir

    # ------------------------------------------------------------------
    # Namespace provisioning
    # ------------------------------------------------------------------

    def ensure_namespace(self, name: str) -> Path:
        """Create (if needed) and return the directory for ``name``.

        Raises:
            CacheUnavailable: the root or namespace directory cannot be created.
        """
        directory = self._base_dir / name
        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            logger.error(f"Failed to create cache namespace {directory}: {exc}")
            raise CacheUnavailable(f"Cache directory unavailable: {directory}") from exc
        return directory

    def path_for(self, namespace: str, key: str) -> Path:
        return self.ensure_namespace(namespace) / key

    # ------------------------------------------------------------------
    # Entry access
    # ------------------------------------------------------------------

    def exists(self, namespace: str, key: str) -> bool:
        return self.path_for(namespace, key).is_file()

    def read(self, namespace: str, key: str) -> bytes:
        path = self.path_for(namespace, key)
        try:
            return path.read_bytes()
        except FileNotFoundError as exc:
            raise CacheEntryNotFound(f"{namespace}/{key}") from exc
        except OSError as exc:
            raise CacheReadError(f"Failed to read {path}: {exc}") from exc

    def write(self, namespace: str, key: str, data: bytes) -> Path:
        path = self.path_for(namespace, key)
        try:
            atomic_write_bytes(path, data)
        except OSError as exc:
            raise CacheWriteError(f"Failed to write {path}: {exc}") from exc
        return path

    def remove(self, namespace: str, key: str) -> None:
        """Delete an entry; absent entries are ignored."""
        path = self.path_for(namespace, key)
        try:
            path.unlink(missing_ok=True)
        except OSError as exc:
            raise CacheWriteError(f"Failed to delete {path}: {exc}") from exc

    def modified_at(self, namespace: str, key: str) -> float:
        """Return the entry's modification time as a POSIX timestamp."""
        path = self.path_for(namespace, key)
        try:
            return path.stat().st_mtime
        except FileNotFoundError as exc:
            raise CacheEntryNotFound(f"{namespace}/{key}") from exc
        except OSError as exc:
            raise CacheReadError(f"Failed to stat {path}: {exc}") from exc


# Singleton instance
_store_instance: CacheStore | None = None


def get_cache_store() -> CacheStore:
    """Get singleton CacheStore instance."""
    global _store_instance
    if _store_instance is None:
        _store_instance = CacheStore()
    return _store_instance


def reset_cache_store() -> None:
    """Reset the global cache store (used by tests)."""
    global _store_instance
    _store_instance = None


__all__ = ["CacheStore", "get_cache_store", "reset_cache_store"]
