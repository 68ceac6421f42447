"""
Deck Service - Business logic for deck retrieval.

This module handles:
- Cache-first deck lookup with a 24 hour freshness window
- Network fetch from ArkhamDB on miss or expiry
- Persisting fetched decks to the Decks cache namespace
- Background fetches for the presentation layer
"""

import threading
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from typing import Any

from loguru import logger

from services.deck_parser import CardEntry, DeckDocument, DeckParser
from utils.arkhamdb_client import ArkhamDBClient
from utils.cache_store import CacheStore, get_cache_store
from utils.constants import DECK_CACHE_TTL_SECONDS, DECKS_NAMESPACE
from utils.errors import (
    CacheError,
    DecodeError,
    EmptyResponse,
    InvalidDeckId,
)


@dataclass(frozen=True)
class DeckFetchResult:
    """Outcome of a successful deck fetch."""

    deck_id: str
    document: DeckDocument
    entries: list[CardEntry]
    raw: bytes
    from_cache: bool

    @property
    def deck_text(self) -> str:
        return self.raw.decode("utf-8", errors="replace")


class DeckService:
    """Service for deck retrieval and caching."""

    def __init__(
        self,
        cache_store: CacheStore | None = None,
        client: ArkhamDBClient | None = None,
        deck_parser: DeckParser | None = None,
        ttl_seconds: float = DECK_CACHE_TTL_SECONDS,
    ):
        """
        Initialize the deck service.

        Args:
            cache_store: CacheStore owning the Decks namespace
            client: ArkhamDB HTTP client
            deck_parser: DeckParser instance
            ttl_seconds: Maximum age of a cached deck before it is refetched
        """
        self.cache_store = cache_store or get_cache_store()
        self.client = client or ArkhamDBClient()
        self.deck_parser = deck_parser or DeckParser()
        self.ttl_seconds = ttl_seconds

    # ============= Synchronous Fetch =============

    def fetch_deck(self, deck_id: str) -> DeckDocument:
        """Return the parsed deck for ``deck_id``, from cache when fresh."""
        return self.fetch_deck_result(deck_id).document

    def fetch_deck_result(self, deck_id: str) -> DeckFetchResult:
        """
        Resolve a deck id to a parsed deck.

        Args:
            deck_id: ArkhamDB public deck id

        Returns:
            DeckFetchResult with the parsed document and flattened entries

        Raises:
            InvalidDeckId: deck_id is empty or padded with whitespace
            CacheUnavailable: the Decks namespace cannot be created
            NetworkError: the HTTP request failed
            EmptyResponse: ArkhamDB returned no body
            DecodeError: the payload is not a valid deck
        """
        # Used verbatim as the cache key and URL path segment
        if not deck_id or deck_id != deck_id.strip():
            raise InvalidDeckId(f"Invalid deck id: {deck_id!r}")

        key = self._cache_key(deck_id)
        self.cache_store.ensure_namespace(DECKS_NAMESPACE)

        cached = self._load_fresh_cached(deck_id, key)
        if cached is not None:
            return cached

        data = self.client.get_deck_json(deck_id)
        if not data:
            raise EmptyResponse(f"No data received for deck {deck_id}")

        try:
            self.cache_store.write(DECKS_NAMESPACE, key, data)
        except CacheError as exc:
            logger.warning(f"Failed to write deck {deck_id} to cache: {exc}")

        return self._build_result(deck_id, data, from_cache=False)

    def _load_fresh_cached(self, deck_id: str, key: str) -> DeckFetchResult | None:
        """Return the cached deck when it is younger than the TTL, evicting it otherwise."""
        try:
            modified_at = self.cache_store.modified_at(DECKS_NAMESPACE, key)
        except CacheError:
            return None

        age_seconds = datetime.now().timestamp() - modified_at
        if age_seconds < self.ttl_seconds:
            try:
                data = self.cache_store.read(DECKS_NAMESPACE, key)
                result = self._build_result(deck_id, data, from_cache=True)
            except CacheError as exc:
                logger.warning(f"Failed to read cached deck {deck_id}: {exc}")
            except DecodeError as exc:
                logger.warning(f"Discarding unreadable cached deck {deck_id}: {exc}")
            else:
                logger.debug(f"Using cached deck {deck_id} ({age_seconds:.0f}s old)")
                return result
        else:
            logger.info(f"Cached deck {deck_id} expired ({age_seconds:.0f}s old)")

        try:
            self.cache_store.remove(DECKS_NAMESPACE, key)
        except CacheError as exc:
            logger.warning(f"Failed to delete old cached deck {deck_id}: {exc}")
        return None

    def _build_result(self, deck_id: str, data: bytes, *, from_cache: bool) -> DeckFetchResult:
        document = self.deck_parser.parse(data)
        return DeckFetchResult(
            deck_id=deck_id,
            document=document,
            entries=self.deck_parser.to_entries(document),
            raw=data,
            from_cache=from_cache,
        )

    @staticmethod
    def _cache_key(deck_id: str) -> str:
        return f"{deck_id}.json"

    # ============= Background Fetch =============

    def fetch_deck_async(
        self,
        deck_id: str,
        on_success: Callable[[DeckFetchResult], None],
        on_error: Callable[[Exception], None],
        call_after: Callable[..., Any] | None = None,
    ) -> threading.Thread:
        """
        Fetch a deck in a background thread.

        Args:
            deck_id: ArkhamDB public deck id
            on_success: Callback receiving the DeckFetchResult
            on_error: Callback receiving the raised exception
            call_after: Dispatcher used to run callbacks (e.g. on a UI thread)

        Returns:
            The started worker thread
        """
        dispatch = call_after or _call_direct

        def worker() -> None:
            try:
                result = self.fetch_deck_result(deck_id)
            except Exception as exc:
                logger.error(f"Failed to fetch deck {deck_id}: {exc}")
                dispatch(on_error, exc)
                return
            dispatch(on_success, result)

        thread = threading.Thread(target=worker, name=f"deck-fetch-{deck_id}", daemon=True)
        thread.start()
        return thread


def _call_direct(callback: Callable[..., Any], *args: Any) -> None:
    callback(*args)


# Global instance for backward compatibility
_default_service = None


def get_deck_service() -> DeckService:
    """Get the default deck service instance."""
    global _default_service
    if _default_service is None:
        _default_service = DeckService()
    return _default_service


def reset_deck_service() -> None:
    """
    Reset the global deck service instance.

    This is primarily useful for testing to ensure test isolation
    and prevent state leakage between tests.
    """
    global _default_service
    _default_service = None


__all__ = [
    "DeckFetchResult",
    "DeckService",
    "get_deck_service",
    "reset_deck_service",
]
