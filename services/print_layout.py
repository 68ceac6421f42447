"""Print layout planning for proxy sheets.

Builds the ordered list of images to print for a deck and splits it into
pages of a fixed 3x3 grid. Rectangles use PDF coordinates: origin at the
bottom-left of the page, first row at the top. Drawing the pages is left
to the presentation layer.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path

from services.deck_parser import CardEntry
from utils.card_images import CachedImageRecord

TILES_PER_ROW = 3
ROWS_PER_PAGE = 3
TILE_WIDTH = 300
TILE_HEIGHT = 419
PAGE_WIDTH = TILE_WIDTH * TILES_PER_ROW
PAGE_HEIGHT = TILE_HEIGHT * ROWS_PER_PAGE


@dataclass(frozen=True)
class LayoutTile:
    image_path: Path
    row: int
    column: int
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class LayoutPage:
    number: int
    width: float
    height: float
    tiles: tuple[LayoutTile, ...]


def collect_print_images(
    entries: Iterable[CardEntry],
    lookup: Callable[[str], CachedImageRecord | None],
) -> list[Path]:
    """
    Expand deck entries into the sequence of images to print.

    Each copy of a card contributes its front and then, for double-sided
    cards, its back. Cards without a cached front image are skipped.

    Args:
        entries: Flattened deck entries
        lookup: Cache-only image lookup, e.g. ``ImageService.cached_images``
    """
    images: list[Path] = []
    for entry in entries:
        record = lookup(entry.card_id)
        if record is None:
            continue
        for _ in range(entry.quantity):
            images.append(record.front_path)
            if record.back_path is not None:
                images.append(record.back_path)
    return images


def paginate(
    images: list[Path],
    *,
    tiles_per_row: int = TILES_PER_ROW,
    rows_per_page: int = ROWS_PER_PAGE,
    tile_width: float = TILE_WIDTH,
    tile_height: float = TILE_HEIGHT,
) -> list[LayoutPage]:
    """Split ``images`` into pages of ``tiles_per_row`` x ``rows_per_page`` tiles."""
    if tiles_per_row < 1 or rows_per_page < 1:
        raise ValueError("Grid must have at least one row and one column")

    page_width = tile_width * tiles_per_row
    page_height = tile_height * rows_per_page
    per_page = tiles_per_row * rows_per_page

    pages: list[LayoutPage] = []
    for start in range(0, len(images), per_page):
        tiles = []
        for offset, image_path in enumerate(images[start : start + per_page]):
            row, column = divmod(offset, tiles_per_row)
            tiles.append(
                LayoutTile(
                    image_path=image_path,
                    row=row,
                    column=column,
                    x=column * tile_width,
                    y=page_height - (row + 1) * tile_height,
                    width=tile_width,
                    height=tile_height,
                )
            )
        pages.append(
            LayoutPage(
                number=len(pages) + 1,
                width=page_width,
                height=page_height,
                tiles=tuple(tiles),
            )
        )
    return pages


def needs_rotation(width: float, height: float) -> bool:
    """Landscape images are turned a quarter clockwise to fit portrait tiles."""
    return width > height


def plan_print_layout(
    entries: Iterable[CardEntry],
    lookup: Callable[[str], CachedImageRecord | None],
) -> list[LayoutPage]:
    return paginate(collect_print_images(entries, lookup))


__all__ = [
    "LayoutPage",
    "LayoutTile",
    "PAGE_HEIGHT",
    "PAGE_WIDTH",
    "collect_print_images",
    "needs_rotation",
    "paginate",
    "plan_print_layout",
]
