from .models import CanvasPoint, SignedDocument, StampPlacement, StampRequest
from .projection import (
    canvas_to_pdf,
    fallback_canvas_position,
    initial_canvas_position,
    pdf_to_canvas,
    placement_from_canvas,
    signature_anchor,
)
from .stamping import (
    StampingError,
    compute_sha256,
    resolve_canvas_position,
    stamp_signatures,
    to_fitz_rect,
)

__all__ = [
    # Models
    "CanvasPoint",
    "SignedDocument",
    "StampPlacement",
    "StampRequest",
    # Projection
    "canvas_to_pdf",
    "fallback_canvas_position",
    "initial_canvas_position",
    "pdf_to_canvas",
    "placement_from_canvas",
    "signature_anchor",
    # Stamping
    "StampingError",
    "compute_sha256",
    "resolve_canvas_position",
    "stamp_signatures",
    "to_fitz_rect",
]
