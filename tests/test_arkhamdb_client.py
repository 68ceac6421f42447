"""Tests for the ArkhamDB HTTP client, using a fake requests session."""

from __future__ import annotations

import pytest
import requests

from utils.arkhamdb_client import ArkhamDBClient
from utils.constants import CARD_URL_TEMPLATE, DECK_URL_TEMPLATE, USER_AGENT
from utils.errors import NetworkError


def _response(url: str, status: int, body: bytes) -> requests.Response:
    resp = requests.Response()
    resp.status_code = status
    resp._content = body
    resp.url = url
    resp.reason = "OK" if status < 400 else "Not Found"
    return resp


class FakeSession(requests.Session):
    def __init__(self, outcome):
        super().__init__()
        self.outcome = outcome
        self.requests: list[tuple[str, float]] = []

    def get(self, url, **kwargs):
        self.requests.append((url, kwargs.get("timeout")))
        if isinstance(self.outcome, Exception):
            raise self.outcome
        status, body = self.outcome
        return _response(url, status, body)


def test_sets_user_agent_and_timeout():
    session = FakeSession((200, b"{}"))
    client = ArkhamDBClient(session=session, timeout=12)

    assert client.get_deck_json("42") == b"{}"
    assert session.headers["User-Agent"] == USER_AGENT
    assert session.requests == [(DECK_URL_TEMPLATE.format(deck_id="42"), 12)]


def test_card_json_url():
    session = FakeSession((200, b"{}"))
    ArkhamDBClient(session=session).get_card_json("01001")

    assert session.requests[0][0] == CARD_URL_TEMPLATE.format(card_id="01001")


def test_http_error_becomes_network_error():
    client = ArkhamDBClient(session=FakeSession((404, b"")))

    with pytest.raises(NetworkError, match="404"):
        client.get_deck_json("42")


def test_transport_error_becomes_network_error():
    error = requests.ConnectionError("The Internet connection appears to be offline.")
    client = ArkhamDBClient(session=FakeSession(error))

    with pytest.raises(NetworkError, match="offline"):
        client.get_bytes("https://arkhamdb.com/bad")


def test_single_attempt_without_retry():
    session = FakeSession(requests.Timeout("timed out"))
    client = ArkhamDBClient(session=session)

    with pytest.raises(NetworkError):
        client.get_bytes("https://arkhamdb.com/slow")
    assert len(session.requests) == 1
