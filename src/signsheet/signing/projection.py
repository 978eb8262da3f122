"""Conversions between PDF point space and the rendered canvas.

PDF space: points, origin bottom-left, y grows upward.
Canvas space: pixels at ``scale`` pixels per point, origin top-left, y grows
downward. The flip uses the unscaled page height.
"""

from ..config import RenderSettings
from ..layout.models import NamePosition
from .models import CanvasPoint, StampPlacement

# Top-left corner of the fallback grid, in canvas pixels
FALLBACK_ORIGIN = (50.0, 100.0)
FALLBACK_GAP = 10.0


def pdf_to_canvas(x: float, y: float, page_height: float, scale: float) -> CanvasPoint:
    return CanvasPoint(x=x * scale, y=(page_height - y) * scale)


def canvas_to_pdf(point: CanvasPoint, page_height: float, scale: float) -> tuple[float, float]:
    return point.x / scale, page_height - point.y / scale


def signature_anchor(position: NamePosition) -> tuple[float, float]:
    """PDF point where the center of the signature belongs.

    The name's center shifted by the header delta, on the name's baseline.
    """
    return position.x + position.width / 2 + position.offset_x, position.y


def initial_canvas_position(
    position: NamePosition, page_height: float, render: RenderSettings | None = None
) -> CanvasPoint:
    """Top-left canvas corner of the stamp box for a located name.

    The box is centered on the signature anchor, then moved by the user's
    nudge offsets.
    """
    render = render or RenderSettings()
    anchor_x, anchor_y = signature_anchor(position)
    anchor = pdf_to_canvas(anchor_x, anchor_y, page_height, render.scale)
    return CanvasPoint(
        x=anchor.x - render.stamp_width / 2 + render.nudge_x,
        y=anchor.y + render.nudge_y,
    )


def fallback_canvas_position(index: int, render: RenderSettings | None = None) -> CanvasPoint:
    """Grid slot for the ``index``-th attendee whose name was not found."""
    render = render or RenderSettings()
    col = index % render.fallback_columns
    row = index // render.fallback_columns
    return CanvasPoint(
        x=FALLBACK_ORIGIN[0] + col * (render.stamp_width + FALLBACK_GAP),
        y=FALLBACK_ORIGIN[1] + row * (render.stamp_height + FALLBACK_GAP),
    )


def placement_from_canvas(
    point: CanvasPoint, page_height: float, render: RenderSettings | None = None
) -> StampPlacement:
    """Convert a canvas stamp box (top-left corner) into a PDF rectangle.

    The returned ``y`` is the bottom edge, as PDF drawing expects.
    """
    render = render or RenderSettings()
    pdf_x, pdf_top = canvas_to_pdf(point, page_height, render.scale)
    width = render.stamp_width / render.scale
    height = render.stamp_height / render.scale
    return StampPlacement(x=pdf_x, y=pdf_top - height, width=width, height=height)
