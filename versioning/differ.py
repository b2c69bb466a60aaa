"""Word-count delta between two chapter contents."""

from typing import Optional

from models.chapter import ContentDiff
from tools.text_utils import split_words, strip_html


def diff(old_content: Optional[str], new_content: Optional[str]) -> ContentDiff:
    """Return how many words were added or removed between two contents.

    Only the word counts are compared: a rewrite that keeps the same number of
    words reports no change, and growth never reports removals.
    """
    old_words = split_words(strip_html(old_content))
    new_words = split_words(strip_html(new_content))

    added = max(0, len(new_words) - len(old_words))
    removed = max(0, len(old_words) - len(new_words))
    return ContentDiff(added=added, removed=removed)
