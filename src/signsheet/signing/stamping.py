"""Compositing collected signature images onto the attendance PDF."""

import hashlib
import time
from pathlib import Path

import fitz  # PyMuPDF

from ..config import RenderSettings
from ..layout.extraction import PDFExtractionError, open_pdf
from ..layout.models import AttendeeLocation
from ..logger import logger
from .models import CanvasPoint, SignedDocument, StampPlacement, StampRequest
from .projection import (
    fallback_canvas_position,
    initial_canvas_position,
    placement_from_canvas,
)


class StampingError(Exception):
    """Raised when the PDF cannot be opened or a signature cannot be drawn."""


def compute_sha256(data: bytes) -> str:
    """Hex SHA-256 digest used as the signed document's fingerprint."""
    return hashlib.sha256(data).hexdigest()


def to_fitz_rect(placement: StampPlacement, page_height: float) -> fitz.Rect:
    """Flip a bottom-left-origin placement into PyMuPDF's top-left rectangle."""
    return fitz.Rect(
        placement.x,
        page_height - (placement.y + placement.height),
        placement.x + placement.width,
        page_height - placement.y,
    )


def resolve_canvas_position(
    index: int,
    request: StampRequest,
    positions: dict[str, AttendeeLocation],
    page_height: float,
    render: RenderSettings,
) -> CanvasPoint:
    """Where a signature box starts on the canvas.

    A position dragged by the host wins, then the located name, then the
    fallback grid slot for the request's index.
    """
    if request.canvas_position is not None:
        return request.canvas_position

    location = positions.get(request.name)
    if location is not None and location.position is not None:
        return initial_canvas_position(location.position, page_height, render)

    return fallback_canvas_position(index, render)


def stamp_signatures(
    pdf: str | Path | bytes,
    requests: list[StampRequest],
    locations: list[AttendeeLocation],
    render: RenderSettings | None = None,
) -> SignedDocument:
    """Draw every signature onto page 1 and return the signed PDF.

    Args:
        pdf: Path to the original PDF or its raw bytes.
        requests: Signature images in attendee order.
        locations: Located names from ``locate_attendees``.
        render: Canvas parameters the positions were computed with.

    Returns:
        SignedDocument with the new PDF bytes and their SHA-256 digest.
    """
    render = render or RenderSettings()
    positions = {location.name: location for location in locations}
    start = time.perf_counter()

    try:
        doc = open_pdf(pdf)
    except PDFExtractionError as e:
        raise StampingError(str(e)) from e

    stamped: list[str] = []
    skipped: list[str] = []
    try:
        if doc.page_count == 0:
            raise StampingError("PDF has no pages")

        page = doc[0]
        page_height = page.rect.height

        for index, request in enumerate(requests):
            if not request.image:
                skipped.append(request.name)
                continue

            point = resolve_canvas_position(index, request, positions, page_height, render)
            placement = placement_from_canvas(point, page_height, render)
            try:
                page.insert_image(to_fitz_rect(placement, page_height), stream=request.image)
            except Exception as e:
                raise StampingError(
                    f"Could not draw signature for {request.name!r}: {e}"
                ) from e
            stamped.append(request.name)

        content = doc.tobytes()
    finally:
        doc.close()

    digest = compute_sha256(content)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "signatures stamped",
        stamped=len(stamped),
        skipped=len(skipped),
        sha256=digest,
        duration_ms=round(duration_ms, 2),
    )
    if skipped:
        logger.warn("signatures skipped without image", names=skipped)

    return SignedDocument(content=content, sha256=digest, stamped=stamped, skipped=skipped)
