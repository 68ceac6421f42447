"""ArkhamDB endpoints and network/cache policy constants."""

ARKHAMDB_BASE_URL = "https://arkhamdb.com"
DECK_URL_TEMPLATE = ARKHAMDB_BASE_URL + "/api/public/deck/{deck_id}.json"
CARD_URL_TEMPLATE = ARKHAMDB_BASE_URL + "/api/public/card/{card_id}.json"

USER_AGENT = "ArkhamProxies/1.0"
REQUEST_TIMEOUT = 30  # Seconds per HTTP request, single attempt

ONE_HOUR_SECONDS = 60 * 60
DECK_CACHE_TTL_SECONDS = 24 * ONE_HOUR_SECONDS

# Probe order for cached card faces
IMAGE_EXTENSIONS = ("png", "jpg")
DEFAULT_IMAGE_EXTENSION = "png"
BACK_FACE_SUFFIX = "b"
