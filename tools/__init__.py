"""Tools package — text helpers shared by versioning and the CLI."""

from tools.text_utils import (
    strip_html,
    split_words,
    count_words,
    calculate_similarity,
)

__all__ = [
    "strip_html",
    "split_words",
    "count_words",
    "calculate_similarity",
]
