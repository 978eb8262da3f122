"""Positioned text extraction from PDF pages using PyMuPDF."""

from pathlib import Path

import fitz  # PyMuPDF

from ..logger import logger
from .models import PageText, PositionedTextItem


class PDFExtractionError(Exception):
    """Raised when a PDF cannot be opened or the requested page is missing."""


def open_pdf(source: str | Path | bytes) -> fitz.Document:
    """Open a PDF from a path or from raw bytes.

    Raises:
        FileNotFoundError: If a path is given and does not exist.
        PDFExtractionError: If the data is not a readable PDF.
    """
    if isinstance(source, (bytes, bytearray)):
        try:
            return fitz.open(stream=bytes(source), filetype="pdf")
        except Exception as e:
            raise PDFExtractionError(f"Unreadable PDF data: {e}") from e

    file_path = Path(source)
    if not file_path.exists():
        raise FileNotFoundError(f"PDF file not found: {file_path}")
    try:
        return fitz.open(file_path)
    except Exception as e:
        raise PDFExtractionError(f"Unreadable PDF file {file_path}: {e}") from e


def _span_to_item(span: dict, page_height: float) -> PositionedTextItem | None:
    """Convert a PyMuPDF span into an item in bottom-left-origin PDF space.

    PyMuPDF reports the baseline origin with y measured from the top of the
    page, so y is flipped against the page height.
    """
    text = span.get("text", "").strip()
    if not text:
        return None

    bbox = span.get("bbox") or (0.0, 0.0, 0.0, 0.0)
    origin = span.get("origin") or (bbox[0], bbox[3])
    return PositionedTextItem(
        text=text,
        x=origin[0],
        y=page_height - origin[1],
        width=max(0.0, bbox[2] - bbox[0]),
    )


def page_items(page: fitz.Page) -> list[PositionedTextItem]:
    """Extract the positioned text spans of one page in reading order."""
    page_height = page.rect.height
    items: list[PositionedTextItem] = []

    page_dict = page.get_text("dict")
    for block in page_dict.get("blocks", []):
        if block.get("type") != 0:  # Skip images
            continue
        for line in block.get("lines", []):
            for span in line.get("spans", []):
                item = _span_to_item(span, page_height)
                if item is not None:
                    items.append(item)

    return items


def extract_page_text(source: str | Path | bytes, page_number: int = 1) -> PageText:
    """Extract positioned text from one page of a PDF.

    Args:
        source: Path to the PDF or its raw bytes.
        page_number: 1-based page number. Only page 1 is used for analysis.

    Returns:
        PageText with page size and items in PDF point space.
    """
    doc = open_pdf(source)
    try:
        if not 1 <= page_number <= doc.page_count:
            raise PDFExtractionError(
                f"Page {page_number} out of range (document has {doc.page_count} pages)"
            )

        page = doc[page_number - 1]
        items = page_items(page)

        logger.info(
            "page text extracted",
            page_number=page_number,
            page_width=round(page.rect.width, 1),
            page_height=round(page.rect.height, 1),
            items=len(items),
        )

        return PageText(
            page_number=page_number,
            width=page.rect.width,
            height=page.rect.height,
            items=items,
        )
    finally:
        doc.close()
