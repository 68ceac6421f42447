"""Filesystem paths and config/cache locations."""

import os
import sys
from pathlib import Path

APP_NAMESPACE = "arkham_proxies"
CACHE_DIR_ENV_VAR = "ARKHAM_PROXIES_CACHE_DIR"

DECKS_NAMESPACE = "Decks"
CARDS_NAMESPACE = "Cards"


def _default_base_dir() -> Path:
    """Return the writable base directory for config/cache/logging."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(__file__).resolve().parent.parent.parent


def default_cache_root() -> Path:
    """Return the cache root, honoring the environment override."""
    override = os.environ.get(CACHE_DIR_ENV_VAR, "").strip()
    if override:
        return Path(override).expanduser() / APP_NAMESPACE
    return BASE_DATA_DIR / "cache" / APP_NAMESPACE


BASE_DATA_DIR = _default_base_dir()
CONFIG_DIR = BASE_DATA_DIR / "config"
LOGS_DIR = BASE_DATA_DIR / "logs"

SETTINGS_FILE = CONFIG_DIR / "settings.json"
