"""
Image Service - Business logic for resolving card images.

This module handles:
- Cache-first card image lookup
- Metadata fetch and concurrent front/back downloads on a miss
- Background resolution with per-card de-duplication
- Resolving every unique card of a deck
"""

import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any

from loguru import logger

from services.deck_parser import CardEntry
from utils.card_image_downloader import CardImageDownloader
from utils.card_images import CachedImageRecord, CardImageCache
from utils.errors import CacheUnavailable, DecodeError, NetworkError

ResolvedCallback = Callable[[str, CachedImageRecord | None], None]


class ImageService:
    """Service resolving card ids to cached image files."""

    _MAX_CONCURRENT_RESOLUTIONS = 8

    def __init__(
        self,
        image_cache: CardImageCache | None = None,
        downloader: CardImageDownloader | None = None,
        call_after: Callable[..., Any] | None = None,
    ):
        """
        Initialize the image service.

        Args:
            image_cache: CardImageCache over the Cards namespace
            downloader: CardImageDownloader writing into ``image_cache``
            call_after: Dispatcher used to run callbacks (e.g. on a UI thread)
        """
        self.image_cache = image_cache or CardImageCache()
        self.downloader = downloader or CardImageDownloader(self.image_cache)
        self._call_after = call_after or _call_direct
        self._executor = ThreadPoolExecutor(
            max_workers=self._MAX_CONCURRENT_RESOLUTIONS,
            thread_name_prefix="card-image-resolve",
        )
        self._lock = threading.Lock()
        self._waiters: dict[str, list[ResolvedCallback]] = {}

    def shutdown(self, wait: bool = True) -> None:
        """Stop the background executor. Running downloads finish first when ``wait``."""
        self._executor.shutdown(wait=wait)

    # ============= Synchronous Resolution =============

    def cached_images(self, card_id: str) -> CachedImageRecord | None:
        """Probe the cache only; never touches the network."""
        try:
            return self.image_cache.cached_images(card_id)
        except CacheUnavailable as exc:
            logger.error(f"Card image cache unavailable: {exc}")
            return None

    def resolve_images(self, card_id: str) -> CachedImageRecord | None:
        """
        Resolve a card id to local image files.

        Args:
            card_id: ArkhamDB card code

        Returns:
            CachedImageRecord when a front image is on disk after the lookup,
            otherwise None. Callers show a placeholder for None and do not
            retry automatically.
        """
        try:
            cached = self.image_cache.cached_images(card_id)
        except CacheUnavailable as exc:
            logger.error(f"Card image cache unavailable: {exc}")
            return None
        if cached is not None:
            return cached

        try:
            metadata = self.downloader.fetch_metadata(card_id)
        except (NetworkError, DecodeError) as exc:
            logger.warning(f"Error fetching card data for {card_id}: {exc}")
            return None

        outcomes = self.downloader.download_faces(card_id, metadata)
        logger.debug(f"Download results for card {card_id}: {outcomes}")

        # Re-probe so the result reflects what actually landed on disk
        resolved = self.cached_images(card_id)
        if resolved is None:
            logger.warning(f"No front image available for card {card_id}")
        return resolved

    def resolve_deck_images(
        self, entries: Iterable[CardEntry]
    ) -> dict[str, CachedImageRecord | None]:
        """Resolve each unique card id once, concurrently, preserving first-seen order."""
        card_ids = list(dict.fromkeys(entry.card_id for entry in entries))
        futures = {
            card_id: self._executor.submit(self.resolve_images, card_id) for card_id in card_ids
        }
        results: dict[str, CachedImageRecord | None] = {}
        for card_id, future in futures.items():
            try:
                results[card_id] = future.result()
            except Exception:
                logger.exception(f"Card image resolution failed for {card_id}")
                results[card_id] = None
        return results

    # ============= Background Resolution =============

    def resolve_images_async(self, card_id: str, on_resolved: ResolvedCallback) -> bool:
        """
        Resolve a card in the background and report through ``on_resolved``.

        Concurrent requests for the same card share one resolution. A caller
        that loses interest cannot cancel it; the downloads still complete
        and warm the cache.

        Returns:
            True if a new resolution was started, False if one was already running
        """
        with self._lock:
            waiters = self._waiters.get(card_id)
            if waiters is not None:
                waiters.append(on_resolved)
                return False
            self._waiters[card_id] = [on_resolved]

        try:
            future = self._executor.submit(self.resolve_images, card_id)
        except RuntimeError:
            with self._lock:
                self._waiters.pop(card_id, None)
            raise
        future.add_done_callback(lambda completed: self._handle_resolved(card_id, completed))
        return True

    def _handle_resolved(self, card_id: str, completed: Future) -> None:
        record: CachedImageRecord | None = None
        try:
            record = completed.result()
        except Exception:
            logger.exception(f"Card image resolution failed for {card_id}")
        with self._lock:
            waiters = self._waiters.pop(card_id, [])
        for callback in waiters:
            self._call_after(callback, card_id, record)

    def is_resolving(self, card_id: str) -> bool:
        with self._lock:
            return card_id in self._waiters


def _call_direct(callback: Callable[..., Any], *args: Any) -> None:
    callback(*args)


# Global instance for backward compatibility
_default_service = None


def get_image_service() -> ImageService:
    """Get the default image service instance."""
    global _default_service
    if _default_service is None:
        _default_service = ImageService()
    return _default_service


def reset_image_service() -> None:
    """
    Reset the global image service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_service
    if _default_service is not None:
        _default_service.shutdown(wait=False)
    _default_service = None


__all__ = [
    "ImageService",
    "get_image_service",
    "reset_image_service",
]
