"""
App Controller - Application logic for the deck proxy window.

Wires settings, cache, HTTP client and services together and gives the
presentation layer one object to drive: fetch a deck, request card images
for the rows it shows, and plan the print layout.
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger

from services.deck_service import DeckFetchResult, DeckService
from services.deck_session import DeckSessionController, DeckViewState
from services.image_service import ImageService, ResolvedCallback
from services.print_layout import LayoutPage, plan_print_layout
from services.state_service import StateService
from utils.arkhamdb_client import ArkhamDBClient
from utils.cache_store import CacheStore
from utils.card_image_downloader import CardImageDownloader
from utils.card_images import CardImageCache
from utils.logging_config import configure_logging


class AppController:

    def __init__(
        self,
        *,
        state_service: StateService | None = None,
        cache_store: CacheStore | None = None,
        client: ArkhamDBClient | None = None,
        deck_service: DeckService | None = None,
        image_service: ImageService | None = None,
        on_change: Callable[[DeckViewState], None] | None = None,
        call_after: Callable[..., Any] | None = None,
        logs_dir: Path | None = None,
    ):
        if logs_dir is not None:
            configure_logging(logs_dir)
        self.state_service = state_service or StateService()

        # Services
        self.cache_store = cache_store or CacheStore()
        self.client = client or ArkhamDBClient(timeout=self.state_service.request_timeout())
        self.deck_service = deck_service or DeckService(
            cache_store=self.cache_store, client=self.client
        )
        if image_service is None:
            image_cache = CardImageCache(self.cache_store)
            image_service = ImageService(
                image_cache=image_cache,
                downloader=CardImageDownloader(image_cache, client=self.client),
                call_after=call_after,
            )
        self.image_service = image_service

        # Application state
        self.session = DeckSessionController(
            DeckViewState(deck_id=self.state_service.last_deck_id()),
            self.deck_service,
            on_change=on_change,
            on_loaded=self._remember_deck,
            call_after=call_after,
        )

    @property
    def state(self) -> DeckViewState:
        return self.session.state

    def _remember_deck(self, result: DeckFetchResult) -> None:
        self.state_service.update(last_deck_id=result.deck_id)

    # ============= Deck =============

    def set_deck_id(self, deck_id: str) -> None:
        self.session.set_deck_id(deck_id)

    def fetch_deck(self) -> bool:
        started = self.session.fetch()
        if not started:
            logger.debug("Deck fetch skipped (empty deck id or fetch in progress)")
        return started

    # ============= Images =============

    def request_card_images(self, on_resolved: ResolvedCallback) -> int:
        """Start background image resolution for every card row. Returns how many started."""
        started = 0
        for card_id in dict.fromkeys(entry.card_id for entry in self.state.cards):
            if self.image_service.resolve_images_async(card_id, on_resolved):
                started += 1
        return started

    def cache_directory(self) -> Path:
        return self.session.cache_root()

    # ============= Printing =============

    def plan_print_layout(self) -> list[LayoutPage]:
        pages = plan_print_layout(self.state.cards, self.image_service.cached_images)
        logger.info(f"Planned {len(pages)} print pages")
        return pages

    def shutdown(self) -> None:
        self.image_service.shutdown(wait=False)


__all__ = ["AppController"]
