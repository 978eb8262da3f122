"""Discovery of attendee names printed on an attendance sheet.

The sheet usually has one or more name columns headed by an anchor such as
"성명" or "교사명". Short Hangul runs below each anchor are collected until
the table ends. If that finds too few names, every short item on the page is
considered. Candidates then pass through a stopword filter tuned on school
meeting minutes.
"""

import re

from .models import PositionedTextItem

ANCHOR_TEXTS = frozenset({"교사명", "성명", "성 명", "참석자", "명단", "교직원"})

# Column scan window below an anchor, in points
COLUMN_MAX_DEPTH = 600.0
COLUMN_X_TOLERANCE = 60.0

# Below this many names the whole page is scanned as well
MIN_COLUMN_NAMES = 5

# Text that marks the end of the attendee table
_STOP_MARKERS = ("상정", "안건", "결정", "202")
_MAX_CELL_LENGTH = 8

_NAME_RE = re.compile(r"[가-힣]{2,4}")
_WHITESPACE_RE = re.compile(r"\s+")

STOPWORDS = frozenset({
    "참석자", "참석", "회의록", "위원회", "페이지", "입니다", "합니다", "결재", "담당",
    "회의실", "위원장", "발언자", "불참자", "진행자", "기록자", "서기",
    "회장", "총무", "감사", "교장", "교감", "부장", "선생님", "교사",
    "학교", "학년", "번호", "날짜", "일시", "장소", "안건", "내용", "결과",
    "없음", "이상", "개회", "폐회", "동의", "재청", "가결", "부결",
    "전원", "찬성", "반대", "기권", "서명", "날인", "확인", "작성", "작성자",
    "법정위", "학운위", "교권보호", "선도위", "학폭위", "내용이", "기록되", "개조식", "서명본",
    "학년도", "교직원", "교사명", "학교장", "담당자", "비고", "연번", "행정실", "명렬", "고등학",
    "디지털", "선도학", "동의서", "법령", "학교명", "교육부", "교육청", "본인은", "해당사",
    "관련", "정보가", "성명", "소속", "직위", "연락처",
    "상정", "대기중", "대기", "하도록", "획이", "없는", "기자재를", "지난", "기자재는",
    "기자재", "진행하게", "혹시", "추가로", "모두", "없습니다", "참조해", "주시기",
    "결정사항", "모니터", "점검때", "지적", "바랍니다", "기존", "받은", "노후", "하는",
    "기자재가", "있는", "실습실에", "점이", "폐기를", "사용하지", "사용하던", "재구조화",
    "실습실이", "있나요", "폐기", "자세한", "같이", "결정함", "프로젝터", "케이블",
    "폐기에", "관한", "협의", "회의를", "않거나", "추후", "사용계", "내용연수",
    "인해", "이제", "내용은", "첨부된", "거치대",
})

# Fragments of consent-form boilerplate that look like names once split
FORBIDDEN_SUBSTRINGS = (
    "취지와", "운용내", "이해하", "교원으", "자발적", "참여할",
    "동의합", "사업운", "필요한", "범위내", "소속부", "학번학", "연락처", "기본인", "사항사",
    "수업연", "활동내", "결과물", "정보가", "관련법", "개인정", "처리지", "따라수", "집이용",
    "학기말", "방학중", "학기중", "상정안", "결정사",
)

# Department, team and school-level suffixes
FORBIDDEN_SUFFIXES = ("실", "팀", "과", "고", "중", "초")


def names_in_text(text: str) -> list[str]:
    """Return every run of 2-4 Hangul syllables in ``text``."""
    return _NAME_RE.findall(text)


def _is_short_cell(item: PositionedTextItem) -> bool:
    return 2 <= len(item.text) <= 4


def _ends_table(item: PositionedTextItem) -> bool:
    compact = _WHITESPACE_RE.sub("", item.text)
    return any(marker in compact for marker in _STOP_MARKERS) or len(compact) > _MAX_CELL_LENGTH


def _column_items(
    anchor: PositionedTextItem, items: list[PositionedTextItem]
) -> list[PositionedTextItem]:
    below = [
        item
        for item in items
        if item.y < anchor.y
        and anchor.y - item.y < COLUMN_MAX_DEPTH
        and abs(item.x - anchor.x) < COLUMN_X_TOLERANCE
    ]
    # Top of the page first
    return sorted(below, key=lambda item: -item.y)


def _reading_order_key(item: PositionedTextItem) -> tuple[float, float]:
    # Rows 10pt apart or more count as different lines
    return (-round(item.y / 10), item.x)


def is_plausible_name(name: str) -> bool:
    """Reject stopwords, boilerplate fragments and organization names."""
    clean = _WHITESPACE_RE.sub("", name)
    if clean in STOPWORDS:
        return False
    if not 2 <= len(clean) <= 4:
        return False
    if any(fragment in clean for fragment in FORBIDDEN_SUBSTRINGS):
        return False
    if clean.endswith(FORBIDDEN_SUFFIXES):
        return False
    return True


def extract_candidate_names(
    items: list[PositionedTextItem], anchors: frozenset[str] | None = None
) -> list[str]:
    """Guess the attendee names printed on a page.

    Args:
        items: Positioned text items from one page.
        anchors: Header texts that start a name column.

    Returns:
        Candidate names in the order they were first seen.
    """
    anchors = ANCHOR_TEXTS if anchors is None else anchors
    found: dict[str, None] = {}

    anchor_items = sorted((item for item in items if item.text in anchors), key=lambda i: i.x)
    for anchor in anchor_items:
        for item in _column_items(anchor, items):
            if _ends_table(item):
                break
            if _is_short_cell(item):
                found.update(dict.fromkeys(names_in_text(item.text)))

    if len(found) < MIN_COLUMN_NAMES:
        for item in sorted(items, key=_reading_order_key):
            if _is_short_cell(item):
                found.update(dict.fromkeys(names_in_text(item.text)))

    return [name for name in found if is_plausible_name(name)]
