"""Tests for markup stripping, word counting and similarity."""

import pytest


class TestStripHtml:
    def test_removes_tags(self):
        from tools.text_utils import strip_html
        assert strip_html("<p>Hello <b>world</b></p>") == "Hello world"

    def test_none_and_empty(self):
        from tools.text_utils import strip_html
        assert strip_html(None) == ""
        assert strip_html("") == ""

    def test_tags_with_attributes(self):
        from tools.text_utils import strip_html
        assert strip_html('<span class="mention" data-id="7">@Aiko</span>') == "@Aiko"

    def test_adjacent_blocks_are_not_separated(self):
        from tools.text_utils import strip_html
        assert strip_html("<p>end</p><p>start</p>") == "endstart"


class TestCountWords:
    def test_plain_text(self):
        from tools.text_utils import count_words
        assert count_words("one two  three") == 3

    def test_markup_is_ignored(self):
        from tools.text_utils import count_words
        assert count_words("<p>one <em>two</em></p>\n<p>three</p>") == 3

    def test_whitespace_only(self):
        from tools.text_utils import count_words
        assert count_words("  \n\t ") == 0

    def test_none(self):
        from tools.text_utils import count_words
        assert count_words(None) == 0


class TestCalculateSimilarity:
    def test_both_empty_is_100(self):
        from tools.text_utils import calculate_similarity
        assert calculate_similarity("", "<p></p>") == 100

    def test_identical(self):
        from tools.text_utils import calculate_similarity
        assert calculate_similarity("<p>abc</p>", "abc") == 100

    def test_positional_comparison(self):
        from tools.text_utils import calculate_similarity
        # a/b match, c != x, longer text has 4 chars -> 2/4
        assert calculate_similarity("abc", "abxd") == 50

    def test_one_side_empty(self):
        from tools.text_utils import calculate_similarity
        assert calculate_similarity("", "abc") == 0

    @pytest.mark.parametrize("old, new, expected", [
        ("abcdefgh", "abcdexxx", 63),  # 5/8 = 62.5 rounds half up
        ("abc", "abd", 67),
    ])
    def test_rounding(self, old, new, expected):
        from tools.text_utils import calculate_similarity
        assert calculate_similarity(old, new) == expected
