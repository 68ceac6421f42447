"""View state for the deck screen and the controller that updates it.

The presentation layer owns a ``DeckViewState`` and redraws from it.
``DeckSessionController`` is the only writer: it turns deck fetch results
and errors into discrete state updates and notifies ``on_change``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from loguru import logger

from services.deck_parser import CardEntry
from services.deck_service import DeckFetchResult, DeckService, get_deck_service
from utils.errors import (
    CacheUnavailable,
    DecodeError,
    EmptyResponse,
    InvalidDeckId,
    NetworkError,
)


@dataclass
class DeckViewState:
    deck_id: str = ""
    deck_data: str = ""
    is_loading: bool = False
    error_message: str | None = None
    cards: list[CardEntry] = field(default_factory=list)

    @property
    def can_fetch(self) -> bool:
        return bool(self.deck_id.strip()) and not self.is_loading

    @property
    def can_print(self) -> bool:
        return bool(self.deck_data)


def describe_error(exc: Exception) -> str:
    """Return the single user-facing message for a deck fetch failure."""
    if isinstance(exc, CacheUnavailable):
        return "Deck cache directory unavailable."
    if isinstance(exc, EmptyResponse):
        return "No data received."
    if isinstance(exc, DecodeError):
        return f"Failed to decode deck JSON: {exc}"
    if isinstance(exc, InvalidDeckId):
        return "Enter a deck id."
    if isinstance(exc, NetworkError):
        return str(exc) or "Network request failed."
    return f"Unexpected error: {exc}"


class DeckSessionController:
    """Drive a ``DeckViewState`` from deck service results."""

    def __init__(
        self,
        state: DeckViewState | None = None,
        deck_service: DeckService | None = None,
        *,
        on_change: Callable[[DeckViewState], None] | None = None,
        on_loaded: Callable[[DeckFetchResult], None] | None = None,
        call_after: Callable[..., Any] | None = None,
    ) -> None:
        self.state = state or DeckViewState()
        self.deck_service = deck_service or get_deck_service()
        self.on_change = on_change
        self.on_loaded = on_loaded
        self.call_after = call_after

    def set_deck_id(self, deck_id: str) -> None:
        self.state.deck_id = deck_id
        self._notify()

    def fetch(self) -> bool:
        """Start fetching the current deck id. Returns False when nothing was started."""
        if not self.state.can_fetch:
            return False
        self.state.is_loading = True
        self.state.error_message = None
        self.state.deck_data = ""
        self._notify()
        self.deck_service.fetch_deck_async(
            self.state.deck_id.strip(),
            on_success=self.apply_result,
            on_error=self.apply_error,
            call_after=self.call_after,
        )
        return True

    def apply_result(self, result: DeckFetchResult) -> None:
        self.state.is_loading = False
        self.state.error_message = None
        self.state.cards = list(result.entries)
        self.state.deck_data = result.deck_text
        source = "cache" if result.from_cache else "ArkhamDB"
        logger.info(f"Loaded deck {result.deck_id} from {source} ({len(result.entries)} entries)")
        if self.on_loaded:
            self.on_loaded(result)
        self._notify()

    def apply_error(self, exc: Exception) -> None:
        self.state.is_loading = False
        self.state.error_message = describe_error(exc)
        self._notify()

    def cache_root(self) -> Path:
        """Directory a user can open to seed missing card images by hand."""
        return self.deck_service.cache_store.base_dir

    def _notify(self) -> None:
        if self.on_change:
            self.on_change(self.state)


__all__ = ["DeckSessionController", "DeckViewState", "describe_error"]
