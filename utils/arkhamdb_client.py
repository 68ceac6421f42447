"""Thin HTTP client for the ArkhamDB public API."""

from __future__ import annotations

import requests
from loguru import logger

from utils.constants import (
    CARD_URL_TEMPLATE,
    DECK_URL_TEMPLATE,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from utils.errors import NetworkError


class ArkhamDBClient:
    """Single-attempt GET requests against ArkhamDB.

    Every transport failure, including non-2xx status codes, is reported as
    ``NetworkError`` carrying the underlying message. There is no retry.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        timeout: float = REQUEST_TIMEOUT,
    ) -> None:
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"User-Agent": USER_AGENT})

    def get_bytes(self, url: str) -> bytes:
        logger.debug(f"GET {url}")
        try:
            resp = self.session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as exc:
            raise NetworkError(str(exc)) from exc
        return resp.content

    def get_deck_json(self, deck_id: str) -> bytes:
        return self.get_bytes(DECK_URL_TEMPLATE.format(deck_id=deck_id))

    def get_card_json(self, card_id: str) -> bytes:
        return self.get_bytes(CARD_URL_TEMPLATE.format(card_id=card_id))


__all__ = ["ArkhamDBClient"]
