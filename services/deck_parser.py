"""Parsing helpers for ArkhamDB deck documents."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

from utils.errors import DecodeError


@dataclass(frozen=True)
class CardEntry:
    card_id: str
    quantity: int


@dataclass(frozen=True)
class DeckDocument:
    investigator_code: str
    slots: dict[str, int] = field(default_factory=dict)
    side_slots: dict[str, int] = field(default_factory=dict)


class DeckParser:
    """Decode deck JSON into a ``DeckDocument`` and flatten it for display."""

    def parse(self, data: bytes | str) -> DeckDocument:
        """
        Decode a deck payload.

        Args:
            data: Raw JSON as returned by ``/api/public/deck/<id>.json``

        Returns:
            DeckDocument with ``slots`` and ``side_slots`` defaulted to empty

        Raises:
            DecodeError: payload is not a JSON object, ``investigator_code``
                is missing or not a string
        """
        try:
            payload = json.loads(data)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Invalid deck JSON: {exc}") from exc

        if not isinstance(payload, dict):
            raise DecodeError("Deck JSON must be an object")

        investigator_code = payload.get("investigator_code")
        if not isinstance(investigator_code, str):
            raise DecodeError("Deck JSON is missing a string 'investigator_code'")

        # Empty groups arrive as [] instead of {} upstream
        slots = self._decode_group(payload, "slots")
        side_slots = self._decode_group(payload, "sideSlots")

        return DeckDocument(
            investigator_code=investigator_code,
            slots=slots,
            side_slots=side_slots,
        )

    def to_entries(self, document: DeckDocument) -> list[CardEntry]:
        """
        Flatten a deck into display entries.

        The investigator always comes first with quantity 1, followed by
        ``slots`` and then ``side_slots`` in document order. Ids repeated
        across groups are kept as separate entries.
        """
        entries = [CardEntry(card_id=document.investigator_code, quantity=1)]
        for group in (document.slots, document.side_slots):
            entries.extend(
                CardEntry(card_id=card_id, quantity=quantity) for card_id, quantity in group.items()
            )
        return entries

    def parse_entries(self, data: bytes | str) -> list[CardEntry]:
        return self.to_entries(self.parse(data))

    @classmethod
    def _decode_group(cls, payload: dict[str, Any], field_name: str) -> dict[str, int]:
        """Decode an optional card group, falling back to empty when malformed."""
        value = payload.get(field_name)
        if value is None:
            return {}
        try:
            return cls._decode_slots(value, field_name)
        except DecodeError:
            return {}

    @staticmethod
    def _decode_slots(value: Any, field_name: str) -> dict[str, int]:
        if not isinstance(value, dict):
            raise DecodeError(f"'{field_name}' must be an object of card id to quantity")
        slots: dict[str, int] = {}
        for card_id, quantity in value.items():
            if isinstance(quantity, bool) or not isinstance(quantity, int):
                raise DecodeError(f"'{field_name}' has a non-integer quantity for {card_id}")
            if quantity < 1:
                continue
            slots[card_id] = quantity
        return slots


__all__ = ["CardEntry", "DeckDocument", "DeckParser"]
