"""Atomic file writes with in-process locking."""

from __future__ import annotations

import json
import os
import tempfile
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

_lock_registry: dict[Path, threading.RLock] = {}
_lock_registry_lock = threading.Lock()


def _get_path_lock(path: Path) -> threading.RLock:
    resolved = path.resolve()
    with _lock_registry_lock:
        lock = _lock_registry.get(resolved)
        if lock is None:
            lock = threading.RLock()
            _lock_registry[resolved] = lock
        return lock


@contextmanager
def locked_path(path: Path) -> Iterator[None]:
    """Serialize access to ``path`` within this process."""
    lock = _get_path_lock(path)
    with lock:
        yield


def atomic_write_bytes(path: Path, data: bytes) -> None:
    """Write ``data`` to a sibling temp file, then rename it over ``path``.

    Readers never observe a half-written cache entry; concurrent writers to
    the same path are serialized and the last one wins.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    with locked_path(path):
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix=".tmp", dir=path.parent)
        tmp_file = Path(tmp_name)
        try:
            with os.fdopen(fd, "wb") as fh:
                fh.write(data)
                fh.flush()
                os.fsync(fh.fileno())
            os.replace(tmp_file, path)
        finally:
            if tmp_file.exists():
                try:
                    tmp_file.unlink()
                except OSError:
                    pass


def atomic_write_json(path: Path, payload: Any) -> None:
    """Write ``payload`` as indented UTF-8 JSON through ``atomic_write_bytes``."""
    atomic_write_bytes(path, json.dumps(payload, indent=2, ensure_ascii=False).encode("utf-8"))
