"""Tests for AppController wiring."""

from __future__ import annotations

import threading

import pytest
from test_helpers import FakeClient

from controllers.app_controller import AppController
from services.deck_parser import CardEntry
from services.state_service import StateService
from utils.constants import CARD_URL_TEMPLATE, DECK_URL_TEMPLATE

DECK_JSON = b'{"investigator_code":"01001","slots":{"01006":1,"01001":1},"sideSlots":{}}'


@pytest.fixture
def make_controller(tmp_path, cache_store):
    created: list[AppController] = []

    def factory(responses=None, **kwargs) -> AppController:
        loaded = threading.Event()

        def on_change(state):
            if not state.is_loading and (state.deck_data or state.error_message):
                loaded.set()

        controller = AppController(
            state_service=StateService(tmp_path / "settings.json"),
            cache_store=cache_store,
            client=FakeClient(responses or {}),
            on_change=on_change,
            **kwargs,
        )
        controller.loaded = loaded
        created.append(controller)
        return controller

    yield factory
    for controller in created:
        controller.shutdown()


def test_restores_last_deck_id(tmp_path, make_controller):
    StateService(tmp_path / "settings.json").update(last_deck_id="77")

    controller = make_controller()

    assert controller.state.deck_id == "77"


def test_fetch_deck_remembers_deck_id(tmp_path, make_controller):
    controller = make_controller({DECK_URL_TEMPLATE.format(deck_id="42"): DECK_JSON})

    controller.set_deck_id("42")
    assert controller.fetch_deck() is True
    assert controller.loaded.wait(timeout=5)

    assert controller.state.cards == [
        CardEntry("01001", 1),
        CardEntry("01006", 1),
        CardEntry("01001", 1),
    ]
    assert StateService(tmp_path / "settings.json").last_deck_id() == "42"


def test_fetch_deck_without_id_is_skipped(make_controller):
    controller = make_controller()

    assert controller.fetch_deck() is False


def test_request_card_images_starts_one_per_unique_card(make_controller):
    controller = make_controller()
    controller.state.cards = [CardEntry("01001", 1), CardEntry("01006", 1), CardEntry("01001", 1)]
    done = threading.Event()
    results = []

    def on_resolved(card_id, record):
        results.append((card_id, record))
        if len(results) == 2:
            done.set()

    assert controller.request_card_images(on_resolved) == 2
    assert done.wait(timeout=5)
    assert sorted(card_id for card_id, _ in results) == ["01001", "01006"]
    assert all(record is None for _, record in results)


def test_plan_print_layout_uses_cached_images(cache_store, make_controller):
    cache_store.write("Cards", "01001.png", b"front")
    cache_store.write("Cards", "01001b.png", b"back")
    controller = make_controller()
    controller.state.cards = [CardEntry("01001", 1), CardEntry("01006", 2)]

    pages = controller.plan_print_layout()

    assert len(pages) == 1
    assert [tile.image_path.name for tile in pages[0].tiles] == ["01001.png", "01001b.png"]


def test_cache_directory_is_store_root(cache_store, make_controller):
    assert make_controller().cache_directory() == cache_store.base_dir


def test_card_metadata_urls_are_requested_through_shared_client(make_controller):
    controller = make_controller()
    controller.state.cards = [CardEntry("01001", 1)]
    done = threading.Event()

    controller.request_card_images(lambda card_id, record: done.set())

    assert done.wait(timeout=5)
    assert controller.client.calls == [CARD_URL_TEMPLATE.format(card_id="01001")]
