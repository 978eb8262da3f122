"""Detection of name/signature column header pairs."""

from ..config import HeaderKeywords
from .models import HeaderDelta, PositionedTextItem
from .text import normalize_text

DEFAULT_Y_TOLERANCE = 30.0
DEFAULT_FALLBACK_WIDTH = 40.0


def matches_keyword(item: PositionedTextItem, keywords: list[str]) -> bool:
    """Check whether an item's text names a header from ``keywords``.

    A keyword matches when its normalized form equals the item's normalized
    text, or when the raw keyword occurs anywhere in the raw item text.
    """
    clean = normalize_text(item.text)
    return any(
        normalize_text(keyword) == clean or keyword in item.text for keyword in keywords
    )


def classify_headers(
    items: list[PositionedTextItem], keywords: HeaderKeywords | None = None
) -> tuple[list[PositionedTextItem], list[PositionedTextItem]]:
    """Split out name headers and signature headers, keeping input order.

    The two checks are independent, so one item can appear in both lists.
    """
    keywords = keywords or HeaderKeywords()
    name_headers = [item for item in items if matches_keyword(item, keywords.name)]
    sign_headers = [item for item in items if matches_keyword(item, keywords.sign)]
    return name_headers, sign_headers


def detect_header_deltas(
    items: list[PositionedTextItem],
    keywords: HeaderKeywords | None = None,
    y_tolerance: float = DEFAULT_Y_TOLERANCE,
    fallback_width: float = DEFAULT_FALLBACK_WIDTH,
) -> list[HeaderDelta]:
    """Pair each name header with the nearest signature header to its right.

    A signature header qualifies when it lies within ``y_tolerance`` points
    vertically and strictly to the right of the name header. Among those the
    leftmost wins. Name headers without a qualifying partner are skipped.

    Args:
        items: Positioned text items from one page.
        keywords: Header keyword lists; defaults to the built-in lists.
        y_tolerance: Maximum vertical distance between paired headers.
        fallback_width: Width used for a header whose extracted width is 0.

    Returns:
        One HeaderDelta per paired name header, in input order.
    """
    name_headers, sign_headers = classify_headers(items, keywords)

    deltas: list[HeaderDelta] = []
    for name_header in name_headers:
        candidates = [
            sign
            for sign in sign_headers
            if abs(sign.y - name_header.y) < y_tolerance and sign.x > name_header.x
        ]
        if not candidates:
            continue

        # min() keeps the first of equal x values
        closest = min(candidates, key=lambda sign: sign.x)
        name_center = name_header.x + (name_header.width or fallback_width) / 2
        sign_center = closest.x + (closest.width or fallback_width) / 2
        deltas.append(
            HeaderDelta(name_anchor_x=name_header.x, delta_x=sign_center - name_center)
        )

    return deltas
