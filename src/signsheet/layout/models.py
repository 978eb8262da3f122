"""Data models for the layout analysis engine.

All coordinates are unscaled PDF points with the origin at the bottom-left
of the page (y grows upward).
"""

from pydantic import BaseModel, ConfigDict, Field


class PositionedTextItem(BaseModel):
    """One run of text extracted from a PDF page."""

    model_config = ConfigDict(frozen=True)

    text: str
    x: float
    y: float
    width: float = Field(ge=0)


class HeaderDelta(BaseModel):
    """Offset from a name column header to its paired signature column header."""

    model_config = ConfigDict(frozen=True)

    name_anchor_x: float  # left edge of the name header
    delta_x: float  # center-to-center distance, signed


class NamePosition(BaseModel):
    """Bounding box of a located attendee name and its signature offset."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float
    width: float
    offset_x: float


class AttendeeLocation(BaseModel):
    """A requested attendee name and where it was found, if anywhere."""

    name: str
    position: NamePosition | None = None


class PageText(BaseModel):
    """Positioned text of a single page plus the page size in points."""

    page_number: int
    width: float
    height: float
    items: list[PositionedTextItem]
