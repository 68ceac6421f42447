from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from loguru import logger

from utils import constants
from utils.atomic_io import atomic_write_json, locked_path


class StateService:
    """Load and persist user settings (last deck id, request timeout)."""

    def __init__(self, settings_path: Path | None = None) -> None:
        self.settings_path = settings_path or constants.SETTINGS_FILE

    def load(self) -> dict[str, Any]:
        if not self.settings_path.exists():
            return {}
        try:
            with locked_path(self.settings_path):
                with self.settings_path.open("r", encoding="utf-8") as fh:
                    data = json.load(fh)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning(f"Failed to load settings: {exc}")
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring settings file without a JSON object")
            return {}
        return data

    def save(self, data: dict[str, Any]) -> None:
        try:
            atomic_write_json(self.settings_path, data)
        except OSError as exc:
            logger.warning(f"Unable to persist settings: {exc}")

    def update(self, **values: Any) -> dict[str, Any]:
        data = self.load()
        data.update(values)
        self.save(data)
        return data

    def last_deck_id(self) -> str:
        value = self.load().get("last_deck_id")
        return value.strip() if isinstance(value, str) else ""

    def request_timeout(self) -> float:
        return self.coerce_timeout(
            self.load().get("request_timeout"),
            default=constants.REQUEST_TIMEOUT,
            minimum=1,
            maximum=300,
        )

    @staticmethod
    def coerce_timeout(value: Any, *, default: float, minimum: float, maximum: float) -> float:
        if isinstance(value, bool):
            return default
        try:
            seconds = float(value)
        except (TypeError, ValueError):
            return default
        return max(minimum, min(seconds, maximum))


__all__ = ["StateService"]
