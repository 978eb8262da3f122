"""Locating attendee names in the row grid."""

import re
import statistics

from ..config import AnalyzerSettings
from ..logger import logger
from .headers import detect_header_deltas
from .models import AttendeeLocation, HeaderDelta, NamePosition, PositionedTextItem
from .rows import group_into_rows
from .text import normalize_text

# Typical gap between a single name column and its signature column
DEFAULT_OFFSET_X = 140.0


def fuzzy_name_pattern(clean_name: str) -> re.Pattern:
    """Build a pattern matching the characters of ``clean_name`` in order.

    Anything may appear between the characters, so index numbers, stray
    glyphs or honorifics mixed into the row do not prevent a match.
    """
    return re.compile(".*".join(re.escape(ch) for ch in clean_name))


def _bounding_box(items: list[PositionedTextItem]) -> tuple[float, float, float]:
    min_x = min(item.x for item in items)
    max_x = max(item.x + item.width for item in items)
    avg_y = statistics.fmean(item.y for item in items)
    return min_x, avg_y, max_x - min_x


def resolve_offset(
    x: float, header_deltas: list[HeaderDelta], default_offset: float = DEFAULT_OFFSET_X
) -> float:
    """Pick the delta of the header anchored closest to ``x``."""
    if not header_deltas:
        return default_offset
    best = min(header_deltas, key=lambda delta: abs(delta.name_anchor_x - x))
    return best.delta_x


def find_name_position(
    target_name: str,
    rows: dict[float, list[PositionedTextItem]],
    header_deltas: list[HeaderDelta],
    default_offset: float = DEFAULT_OFFSET_X,
) -> NamePosition | None:
    """Find where ``target_name`` is printed and where its signature goes.

    Rows are visited from the top of the page down; the first row whose
    concatenated text contains the name as a character subsequence wins.
    Within that row the box covers only the items that match on their own,
    or the whole row when the name is split across items.

    Args:
        target_name: Attendee name as entered by the host.
        rows: Row map from ``group_into_rows``.
        header_deltas: Header pairs from ``detect_header_deltas``.
        default_offset: Signature offset used when no header pair exists.

    Returns:
        The name's bounding box and signature offset, or None if not found.
    """
    clean_target = normalize_text(target_name)
    if not clean_target:
        return None

    pattern = fuzzy_name_pattern(clean_target)

    for key in sorted(rows, reverse=True):
        row_items = sorted(rows[key], key=lambda item: item.x)
        row_clean = "".join(normalize_text(item.text) for item in row_items)
        if not pattern.search(row_clean):
            continue

        matching = [item for item in row_items if pattern.search(normalize_text(item.text))]
        target_items = matching or row_items

        x, y, width = _bounding_box(target_items)
        return NamePosition(
            x=x,
            y=y,
            width=width,
            offset_x=resolve_offset(x, header_deltas, default_offset),
        )

    return None


def locate_attendees(
    names: list[str],
    items: list[PositionedTextItem],
    settings: AnalyzerSettings | None = None,
    header_deltas: list[HeaderDelta] | None = None,
) -> list[AttendeeLocation]:
    """Locate every attendee on one page.

    Rows and header deltas are computed once and shared across names. Pass
    ``header_deltas`` when the caller has already detected them. A location
    with ``position=None`` means the name needs manual placement.
    """
    settings = settings or AnalyzerSettings()
    rows = group_into_rows(items, settings.band_height)
    if header_deltas is None:
        header_deltas = detect_header_deltas(
            items,
            keywords=settings.keywords,
            y_tolerance=settings.header_y_tolerance,
            fallback_width=settings.header_fallback_width,
        )

    locations = [
        AttendeeLocation(
            name=name,
            position=find_name_position(
                name, rows, header_deltas, settings.default_offset_x
            ),
        )
        for name in names
    ]

    missing = [loc.name for loc in locations if loc.position is None]
    logger.debug(
        "attendees located",
        rows=len(rows),
        header_pairs=len(header_deltas),
        located=len(locations) - len(missing),
        missing=missing,
    )
    return locations
