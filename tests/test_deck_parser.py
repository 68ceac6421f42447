"""Tests for DeckParser decoding and flattening."""

import json

import pytest

from services.deck_parser import CardEntry, DeckDocument, DeckParser
from utils.errors import DecodeError


@pytest.fixture
def parser() -> DeckParser:
    return DeckParser()


def test_parse_and_flatten_basic_deck(parser):
    payload = b'{"investigator_code":"01001","slots":{"02001":2},"sideSlots":{}}'

    entries = parser.parse_entries(payload)

    assert entries == [CardEntry("01001", 1), CardEntry("02001", 2)]


def test_investigator_is_first_with_quantity_one(parser):
    payload = {
        "investigator_code": "01001",
        "slots": {"01001": 3, "01030": 2},
        "sideSlots": {"01001": 1},
    }

    entries = parser.parse_entries(json.dumps(payload))

    assert entries[0] == CardEntry("01001", 1)
    assert entries[1:] == [
        CardEntry("01001", 3),
        CardEntry("01030", 2),
        CardEntry("01001", 1),
    ]


def test_duplicate_ids_across_groups_are_not_merged(parser):
    payload = {
        "investigator_code": "02003",
        "slots": {"01088": 2},
        "sideSlots": {"01088": 1},
    }

    entries = parser.parse_entries(json.dumps(payload))

    assert [e for e in entries if e.card_id == "01088"] == [
        CardEntry("01088", 2),
        CardEntry("01088", 1),
    ]


def test_side_slots_empty_list_is_treated_as_empty(parser):
    payload = b'{"investigator_code":"01001","slots":{"01006":1},"sideSlots":[]}'

    document = parser.parse(payload)

    assert document.side_slots == {}
    assert parser.to_entries(document) == [CardEntry("01001", 1), CardEntry("01006", 1)]


@pytest.mark.parametrize("side_slots", ['"oops"', "null", '{"01001": "two"}', "3"])
def test_malformed_side_slots_fall_back_to_empty(parser, side_slots):
    payload = '{"investigator_code":"01001","slots":{},"sideSlots":%s}' % side_slots

    assert parser.parse(payload).side_slots == {}


def test_missing_optional_groups_default_to_empty(parser):
    document = parser.parse('{"investigator_code":"01001"}')

    assert document == DeckDocument(investigator_code="01001", slots={}, side_slots={})


def test_unknown_fields_are_ignored(parser):
    payload = '{"investigator_code":"01001","name":"Roland","tags":["x"],"slots":{}}'

    assert parser.parse(payload).investigator_code == "01001"


@pytest.mark.parametrize(
    "payload",
    [
        '{"slots":{"02001":2}}',
        '{"investigator_code":1001}',
        '{"investigator_code":null}',
    ],
)
def test_bad_investigator_code_fails(parser, payload):
    with pytest.raises(DecodeError):
        parser.parse(payload)


def test_investigator_only_deck_with_list_slots(parser):
    entries = parser.parse_entries('{"investigator_code":"01001","slots":[]}')

    assert entries == [CardEntry("01001", 1)]


@pytest.mark.parametrize("slots", ['"oops"', "3", '{"02001": true}', '{"02001": "two"}'])
def test_malformed_slots_fall_back_to_empty(parser, slots):
    payload = '{"investigator_code":"01001","slots":%s,"sideSlots":{"02001":1}}' % slots

    document = parser.parse(payload)

    assert document.slots == {}
    assert document.side_slots == {"02001": 1}


def test_non_positive_quantities_are_skipped(parser):
    payload = '{"investigator_code":"01001","slots":{"02001":0,"02002":-1,"02003":2}}'

    assert parser.parse_entries(payload) == [CardEntry("01001", 1), CardEntry("02003", 2)]


@pytest.mark.parametrize("payload", [b"", b"<html>", b"[1, 2]", b'"deck"'])
def test_invalid_json_fails(parser, payload):
    with pytest.raises(DecodeError):
        parser.parse(payload)
