"""Data models for signature placement and stamping."""

from pydantic import BaseModel, Field


class CanvasPoint(BaseModel):
    """A point on the rendered canvas, in pixels from the top-left corner."""

    x: float
    y: float


class StampPlacement(BaseModel):
    """Rectangle in PDF point space (bottom-left origin) for one signature."""

    x: float
    y: float
    width: float = Field(gt=0)
    height: float = Field(gt=0)


class StampRequest(BaseModel):
    """A collected signature image and, optionally, where the host dragged it."""

    name: str
    image: bytes
    canvas_position: CanvasPoint | None = None


class SignedDocument(BaseModel):
    """Output of stamping: the new PDF and its fingerprint."""

    content: bytes
    sha256: str
    stamped: list[str] = Field(default_factory=list)
    skipped: list[str] = Field(default_factory=list)
