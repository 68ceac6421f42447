"""Card image cache lookups.

Card faces live in the ``Cards`` namespace of the cache store under
conventional names::

    <card_id>.png | <card_id>.jpg     front face
    <card_id>b.png | <card_id>b.jpg   back face (optional)

The filesystem is the only source of truth. Once a front face exists it
is valid forever; there is no freshness check for images.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from utils.cache_store import CacheStore, get_cache_store
from utils.constants import BACK_FACE_SUFFIX, CARDS_NAMESPACE, IMAGE_EXTENSIONS


@dataclass(frozen=True)
class CachedImageRecord:
    """Local image files for one card."""

    front_path: Path
    back_path: Path | None = None

    @property
    def is_double_sided(self) -> bool:
        return self.back_path is not None


def front_filename(card_id: str, ext: str) -> str:
    return f"{card_id}.{ext}"


def back_filename(card_id: str, ext: str) -> str:
    return f"{card_id}{BACK_FACE_SUFFIX}.{ext}"


class CardImageCache:
    """Read-side view of the Cards namespace."""

    def __init__(self, store: CacheStore | None = None) -> None:
        self.store = store or get_cache_store()

    @property
    def cache_dir(self) -> Path:
        """Directory holding card images, created on first access."""
        return self.store.ensure_namespace(CARDS_NAMESPACE)

    def front_path(self, card_id: str, ext: str) -> Path:
        return self.cache_dir / front_filename(card_id, ext)

    def back_path(self, card_id: str, ext: str) -> Path:
        return self.cache_dir / back_filename(card_id, ext)

    def _first_existing(self, names: list[str]) -> Path | None:
        for name in names:
            if self.store.exists(CARDS_NAMESPACE, name):
                return self.store.path_for(CARDS_NAMESPACE, name)
        return None

    def cached_images(self, card_id: str) -> CachedImageRecord | None:
        """Return the cached faces for ``card_id``, or None without a front face.

        Raises:
            CacheUnavailable: the Cards namespace cannot be created.
        """
        front = self._first_existing([front_filename(card_id, ext) for ext in IMAGE_EXTENSIONS])
        if front is None:
            return None
        back = self._first_existing([back_filename(card_id, ext) for ext in IMAGE_EXTENSIONS])
        logger.debug(f"Cache hit for card {card_id}: front={front.name}, back={back}")
        return CachedImageRecord(front_path=front, back_path=back)

    def is_cached(self, card_id: str) -> bool:
        return self.cached_images(card_id) is not None


__all__ = [
    "CachedImageRecord",
    "CardImageCache",
    "back_filename",
    "front_filename",
]
