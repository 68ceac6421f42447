"""Project-wide constants."""

from utils.constants.api import (
    ARKHAMDB_BASE_URL,
    BACK_FACE_SUFFIX,
    CARD_URL_TEMPLATE,
    DECK_CACHE_TTL_SECONDS,
    DECK_URL_TEMPLATE,
    DEFAULT_IMAGE_EXTENSION,
    IMAGE_EXTENSIONS,
    ONE_HOUR_SECONDS,
    REQUEST_TIMEOUT,
    USER_AGENT,
)
from utils.constants.paths import (
    APP_NAMESPACE,
    BASE_DATA_DIR,
    CACHE_DIR_ENV_VAR,
    CARDS_NAMESPACE,
    CONFIG_DIR,
    DECKS_NAMESPACE,
    LOGS_DIR,
    SETTINGS_FILE,
    default_cache_root,
)

__all__ = [
    "APP_NAMESPACE",
    "ARKHAMDB_BASE_URL",
    "BACK_FACE_SUFFIX",
    "BASE_DATA_DIR",
    "CACHE_DIR_ENV_VAR",
    "CARDS_NAMESPACE",
    "CARD_URL_TEMPLATE",
    "CONFIG_DIR",
    "DECKS_NAMESPACE",
    "DECK_CACHE_TTL_SECONDS",
    "DECK_URL_TEMPLATE",
    "DEFAULT_IMAGE_EXTENSION",
    "IMAGE_EXTENSIONS",
    "LOGS_DIR",
    "ONE_HOUR_SECONDS",
    "REQUEST_TIMEOUT",
    "SETTINGS_FILE",
    "USER_AGENT",
    "default_cache_root",
]
