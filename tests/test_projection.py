"""Tests for PDF/canvas coordinate conversions."""

import pytest

from signsheet.config import RenderSettings
from signsheet.layout.models import NamePosition
from signsheet.signing.models import CanvasPoint
from signsheet.signing.projection import (
    canvas_to_pdf,
    fallback_canvas_position,
    initial_canvas_position,
    pdf_to_canvas,
    placement_from_canvas,
    signature_anchor,
)

PAGE_HEIGHT = 842.0


class TestPdfCanvasConversion:
    """Tests for pdf_to_canvas and canvas_to_pdf."""

    def test_pdf_to_canvas(self):
        """Test scaling and the y-axis flip."""
        point = pdf_to_canvas(100, 700, PAGE_HEIGHT, 1.2)
        assert point.x == pytest.approx(120)
        assert point.y == pytest.approx(170.4)

    def test_canvas_to_pdf(self):
        """Test the inverse conversion."""
        x, y = canvas_to_pdf(CanvasPoint(x=120, y=170.4), PAGE_HEIGHT, 1.2)
        assert x == pytest.approx(100)
        assert y == pytest.approx(700)

    def test_page_corners(self):
        """Test that the PDF origin maps to the canvas bottom-left."""
        assert pdf_to_canvas(0, 0, PAGE_HEIGHT, 2.0) == CanvasPoint(x=0, y=1684)
        assert pdf_to_canvas(0, PAGE_HEIGHT, PAGE_HEIGHT, 2.0) == CanvasPoint(x=0, y=0)


class TestSignatureAnchor:
    """Tests for signature_anchor function."""

    def test_name_center_plus_offset(self):
        """Test that the anchor is the name center shifted by the header delta."""
        pos = NamePosition(x=100, y=500, width=60, offset_x=140)
        assert signature_anchor(pos) == (270, 500)

    def test_negative_offset(self):
        """Test a signature column left of the name center."""
        pos = NamePosition(x=100, y=500, width=60, offset_x=-50)
        assert signature_anchor(pos) == (80, 500)


class TestInitialCanvasPosition:
    """Tests for initial_canvas_position function."""

    def test_default_render(self):
        """Test the box centered on the anchor and raised by the default nudge."""
        pos = NamePosition(x=100, y=500, width=60, offset_x=140)
        point = initial_canvas_position(pos, PAGE_HEIGHT)
        # anchor (270, 500) -> canvas (324, 410.4); box 140px wide, nudge y -35
        assert point.x == pytest.approx(254)
        assert point.y == pytest.approx(375.4)

    def test_user_nudge(self):
        """Test that user offsets move the box."""
        render = RenderSettings(scale=1.0, nudge_x=10, nudge_y=0, stamp_width=100)
        pos = NamePosition(x=100, y=500, width=40, offset_x=100)
        point = initial_canvas_position(pos, PAGE_HEIGHT, render)
        assert point.x == pytest.approx(220 - 50 + 10)
        assert point.y == pytest.approx(342)


class TestFallbackCanvasPosition:
    """Tests for fallback_canvas_position function."""

    def test_first_slot(self):
        """Test the grid origin."""
        assert fallback_canvas_position(0) == CanvasPoint(x=50, y=100)

    def test_wraps_to_next_row(self):
        """Test that the fifth attendee starts the second grid row."""
        assert fallback_canvas_position(4) == CanvasPoint(x=50, y=160)
        assert fallback_canvas_position(5) == CanvasPoint(x=200, y=160)

    def test_custom_columns(self):
        """Test a narrower grid."""
        render = RenderSettings(fallback_columns=2)
        assert fallback_canvas_position(3, render) == CanvasPoint(x=200, y=160)


class TestPlacementFromCanvas:
    """Tests for placement_from_canvas function."""

    def test_converts_box_to_pdf_rect(self):
        """Test that the canvas top-left becomes a bottom-left PDF rectangle."""
        placement = placement_from_canvas(CanvasPoint(x=120, y=240), PAGE_HEIGHT)
        assert placement.x == pytest.approx(100)
        assert placement.width == pytest.approx(140 / 1.2)
        assert placement.height == pytest.approx(50 / 1.2)
        # top edge at 842 - 200 = 642
        assert placement.y + placement.height == pytest.approx(642)

    def test_round_trip_with_initial_position(self):
        """Test that the stamp box top sits at the projected point."""
        render = RenderSettings(scale=1.5, nudge_x=0, nudge_y=0)
        pos = NamePosition(x=100, y=500, width=60, offset_x=140)
        point = initial_canvas_position(pos, PAGE_HEIGHT, render)
        placement = placement_from_canvas(point, PAGE_HEIGHT, render)
        # Box is centered on the anchor x and its top edge is on the name baseline
        assert placement.x + placement.width / 2 == pytest.approx(270)
        assert placement.y + placement.height == pytest.approx(500)
