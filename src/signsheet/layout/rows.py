"""Bucketing of positioned text items into horizontal rows."""

import math
from collections import defaultdict

from .models import PositionedTextItem

DEFAULT_BAND_HEIGHT = 12.0


def row_key(y: float, band_height: float = DEFAULT_BAND_HEIGHT) -> float:
    """Quantize a y coordinate to its row band.

    Halves round up (towards +inf), so y=6 with a 12pt band maps to 12.
    """
    return math.floor(y / band_height + 0.5) * band_height


def group_into_rows(
    items: list[PositionedTextItem], band_height: float = DEFAULT_BAND_HEIGHT
) -> dict[float, list[PositionedTextItem]]:
    """Group items into rows keyed by quantized y.

    Items whose y values are within half a band of each other usually land
    in the same row, but may fall on either side of a band boundary.
    Neither key order nor bucket order is meaningful; sort by x if needed.

    Args:
        items: Positioned text items from one page.
        band_height: Height of a row band in points.

    Returns:
        Mapping of band key to the items in that band.
    """
    if band_height <= 0:
        raise ValueError("band_height must be positive")

    rows: dict[float, list[PositionedTextItem]] = defaultdict(list)
    for item in items:
        rows[row_key(item.y, band_height)].append(item)
    return dict(rows)
