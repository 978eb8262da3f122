from .models import (
    AttendeeLocation,
    HeaderDelta,
    NamePosition,
    PageText,
    PositionedTextItem,
)
from .text import normalize_text
from .rows import group_into_rows, row_key
from .headers import classify_headers, detect_header_deltas, matches_keyword
from .locator import (
    DEFAULT_OFFSET_X,
    find_name_position,
    fuzzy_name_pattern,
    locate_attendees,
    resolve_offset,
)
from .names import extract_candidate_names, is_plausible_name, names_in_text
from .extraction import PDFExtractionError, extract_page_text, open_pdf, page_items

__all__ = [
    # Models
    "AttendeeLocation",
    "HeaderDelta",
    "NamePosition",
    "PageText",
    "PositionedTextItem",
    # Analysis
    "normalize_text",
    "group_into_rows",
    "row_key",
    "classify_headers",
    "detect_header_deltas",
    "matches_keyword",
    "DEFAULT_OFFSET_X",
    "find_name_position",
    "fuzzy_name_pattern",
    "locate_attendees",
    "resolve_offset",
    # Name discovery
    "extract_candidate_names",
    "is_plausible_name",
    "names_in_text",
    # Extraction
    "PDFExtractionError",
    "extract_page_text",
    "open_pdf",
    "page_items",
]
