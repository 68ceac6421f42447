"""Tests for atomic file writes."""

from __future__ import annotations

import json
import threading

from utils.atomic_io import atomic_write_bytes, atomic_write_json


def test_write_bytes_creates_parents_and_leaves_no_temp(tmp_path):
    target = tmp_path / "nested" / "entry.bin"

    atomic_write_bytes(target, b"payload")

    assert target.read_bytes() == b"payload"
    assert [p.name for p in target.parent.iterdir()] == ["entry.bin"]


def test_write_json_round_trips(tmp_path):
    target = tmp_path / "settings.json"

    atomic_write_json(target, {"last_deck_id": "42"})

    assert json.loads(target.read_text(encoding="utf-8")) == {"last_deck_id": "42"}


def test_concurrent_writers_leave_one_complete_file(tmp_path):
    target = tmp_path / "shared.bin"
    payloads = [bytes([i]) * 4096 for i in range(8)]
    threads = [threading.Thread(target=atomic_write_bytes, args=(target, p)) for p in payloads]

    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert target.read_bytes() in payloads
    assert [p.name for p in tmp_path.iterdir()] == ["shared.bin"]
