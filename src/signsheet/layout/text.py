"""Text normalization for keyword and name comparison."""

import re

# Everything outside ASCII letters, digits and Hangul syllables (U+AC00-U+D7A3)
_STRIP_RE = re.compile(r"[^a-zA-Z0-9가-힣]")


def normalize_text(text: str) -> str:
    """Strip every character that is not an ASCII letter, digit or Hangul syllable.

    No case folding is applied. Whitespace and punctuation are removed.

    Args:
        text: Any string, including the empty string.

    Returns:
        The string with only the allowed characters, possibly empty.
    """
    return _STRIP_RE.sub("", text)
