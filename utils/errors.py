"""Exception hierarchy for deck fetching and card image caching.

Deck-path errors propagate to the caller and carry a human-readable
message. Image-path errors are absorbed by the resolver and only ever
surface as a missing image.
"""


class ArkhamProxiesError(Exception):
    """Base exception for all project errors."""


class CacheError(ArkhamProxiesError):
    """Filesystem cache errors."""


class CacheUnavailable(CacheError):
    """The cache root or a namespace directory cannot be established."""


class CacheEntryNotFound(CacheError):
    """A cache key has no file on disk."""


class CacheReadError(CacheError):
    """A cache entry exists but cannot be read."""


class CacheWriteError(CacheError):
    """Writing a cache entry failed."""


class InvalidDeckId(ArkhamProxiesError):
    """The supplied deck id is empty or padded with whitespace."""


class NetworkError(ArkhamProxiesError):
    """Transport-level failure talking to ArkhamDB."""


class EmptyResponse(ArkhamProxiesError):
    """ArkhamDB answered without a body."""


class DecodeError(ArkhamProxiesError):
    """A payload could not be decoded into the expected shape."""


class DownloadFailure(ArkhamProxiesError):
    """A single image asset could not be downloaded or written."""


__all__ = [
    "ArkhamProxiesError",
    "CacheEntryNotFound",
    "CacheError",
    "CacheReadError",
    "CacheUnavailable",
    "CacheWriteError",
    "DecodeError",
    "DownloadFailure",
    "EmptyResponse",
    "InvalidDeckId",
    "NetworkError",
]
