"""Card metadata lookup and face image downloads.

Fetches ``/api/public/card/<id>.json`` from ArkhamDB, derives the front and
optional back image URLs, and downloads both faces concurrently into the
Cards cache namespace.
"""

from __future__ import annotations

import json
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass
from pathlib import PurePosixPath
from urllib.parse import urlsplit

from loguru import logger

from utils.arkhamdb_client import ArkhamDBClient
from utils.card_images import CardImageCache, back_filename, front_filename
from utils.constants import ARKHAMDB_BASE_URL, CARDS_NAMESPACE, DEFAULT_IMAGE_EXTENSION
from utils.errors import ArkhamProxiesError, DecodeError, DownloadFailure

MAX_FACES = 2  # front + back


@dataclass(frozen=True)
class CardMetadata:
    image_src: str
    back_image_src: str | None = None

    @classmethod
    def from_json(cls, data: bytes | str) -> CardMetadata:
        try:
            payload = json.loads(data)
        except (TypeError, ValueError) as exc:
            raise DecodeError(f"Invalid card JSON: {exc}") from exc
        if not isinstance(payload, dict):
            raise DecodeError("Card JSON must be an object")

        image_src = payload.get("imagesrc")
        if not isinstance(image_src, str) or not image_src:
            raise DecodeError("Card JSON has no 'imagesrc'")

        back_src = payload.get("backimagesrc")
        if not isinstance(back_src, str) or not back_src:
            back_src = None
        return cls(image_src=image_src, back_image_src=back_src)


@dataclass(frozen=True)
class FaceDownload:
    url: str
    filename: str


def image_url(src: str) -> str:
    return ARKHAMDB_BASE_URL + src


def extension_for(url: str) -> str:
    """Return the file extension of ``url``'s path, defaulting to png."""
    suffix = PurePosixPath(urlsplit(url).path).suffix
    return suffix[1:] if len(suffix) > 1 else DEFAULT_IMAGE_EXTENSION


class CardImageDownloader:
    """Downloads card faces into the image cache."""

    def __init__(self, cache: CardImageCache, client: ArkhamDBClient | None = None) -> None:
        self.cache = cache
        self.client = client or ArkhamDBClient()

    def fetch_metadata(self, card_id: str) -> CardMetadata:
        """Fetch image sources for a card.

        Raises:
            NetworkError: the request failed
            DecodeError: the response is not usable card JSON
        """
        return CardMetadata.from_json(self.client.get_card_json(card_id))

    def plan_downloads(self, card_id: str, metadata: CardMetadata) -> list[FaceDownload]:
        """Return the front download and, for double-sided cards, the back download."""
        front_url = image_url(metadata.image_src)
        faces = [FaceDownload(front_url, front_filename(card_id, extension_for(front_url)))]
        if metadata.back_image_src:
            back_url = image_url(metadata.back_image_src)
            faces.append(FaceDownload(back_url, back_filename(card_id, extension_for(back_url))))
        return faces

    def download_faces(self, card_id: str, metadata: CardMetadata) -> dict[str, bool]:
        """
        Download all faces of a card concurrently and wait for every one.

        Args:
            card_id: ArkhamDB card code
            metadata: Image sources for the card

        Returns:
            Mapping of cache filename to whether it was written. A failed
            face is logged and simply left out of the cache.
        """
        faces = self.plan_downloads(card_id, metadata)
        outcomes: dict[str, bool] = {}
        with ThreadPoolExecutor(max_workers=MAX_FACES) as executor:
            futures = {executor.submit(self._download_face, face): face for face in faces}
            wait(futures)
            for future, face in futures.items():
                try:
                    future.result()
                    outcomes[face.filename] = True
                except DownloadFailure as exc:
                    logger.warning(f"Image download failed for card {card_id}: {exc}")
                    outcomes[face.filename] = False
        return outcomes

    def _download_face(self, face: FaceDownload) -> None:
        try:
            data = self.client.get_bytes(face.url)
        except ArkhamProxiesError as exc:
            raise DownloadFailure(f"{face.url}: {exc}") from exc
        if not data:
            raise DownloadFailure(f"{face.url}: empty response")
        try:
            self.cache.store.write(CARDS_NAMESPACE, face.filename, data)
        except ArkhamProxiesError as exc:
            raise DownloadFailure(f"{face.filename}: {exc}") from exc
        logger.debug(f"Downloaded {face.url} -> {face.filename}")


__all__ = [
    "CardImageDownloader",
    "CardMetadata",
    "FaceDownload",
    "extension_for",
    "image_url",
]
