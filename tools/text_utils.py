"""Rich-text utilities: markup stripping, word counting, similarity."""

import math
import re
from typing import Optional

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(html: Optional[str]) -> str:
    """Remove every tag-shaped run (``<...>``) from markup, keeping the text between."""
    if not html:
        return ""
    return _TAG_RE.sub("", html)


def split_words(text: Optional[str]) -> list[str]:
    """Split plain text on whitespace, dropping empty tokens."""
    if not text:
        return []
    return text.split()


def count_words(html: Optional[str]) -> int:
    """Count whitespace-separated words in markup after stripping tags.

    Tags are removed without inserting a separator, so ``<p>a</p><p>b</p>``
    counts as one word. This matches how word deltas are computed.
    """
    return len(split_words(strip_html(html)))


def calculate_similarity(old_content: Optional[str], new_content: Optional[str]) -> int:
    """Character-position similarity of two contents as a rounded percentage.

    Compares the stripped texts position by position up to the shorter length
    and divides matches by the longer length. Two empty texts are 100% similar.
    """
    old_text = strip_html(old_content)
    new_text = strip_html(new_content)

    total_length = max(len(old_text), len(new_text))
    if total_length == 0:
        return 100

    matches = sum(1 for a, b in zip(old_text, new_text) if a == b)
    # Half-up rounding; round() would send 62.5 to 62
    return math.floor(matches / total_length * 100 + 0.5)
