"""Tests for change classification."""

import pytest

from versioning.classifier import classify, has_content_changed, percent_change


class TestPercentChange:
    def test_zero_old_count_is_100(self):
        assert percent_change(0, 0) == 100
        assert percent_change(0, 50) == 100

    def test_relative_change(self):
        assert percent_change(100, 119) == pytest.approx(19)
        assert percent_change(100, 80) == pytest.approx(20)


class TestClassify:
    @pytest.mark.parametrize("new_count, label", [
        (119, "Moderate edit"),
        (121, "Major edit"),
        (104, "Minor edit"),
        (105, "Minor edit"),
        (106, "Moderate edit"),
        (120, "Moderate edit"),
        (79, "Major edit"),
        (100, "Minor edit"),
    ])
    def test_content_only_boundaries(self, chapter_factory, new_count, label):
        old = chapter_factory(content="old", word_count=100)
        new = chapter_factory(content="new", word_count=new_count)
        result = classify(old, new)
        assert result.label == label
        assert result.changed_fields == ["content"]

    def test_content_change_from_empty_chapter_is_major(self, chapter_factory):
        old = chapter_factory(content="", word_count=0)
        new = chapter_factory(content="<p>first words</p>", word_count=2)
        assert classify(old, new).label == "Major edit"

    def test_title_only(self, chapter_factory):
        old = chapter_factory(title="A")
        new = chapter_factory(title="B")
        result = classify(old, new)
        assert result.label == "Title changed"
        assert result.changed_fields == ["title"]

    def test_title_and_content(self, chapter_factory):
        old = chapter_factory(title="A", content="x")
        new = chapter_factory(title="B", content="y")
        result = classify(old, new)
        assert result.label == "Title and content changed"
        assert result.changed_fields == ["title", "content"]

    def test_nothing_changed_defaults_to_manual_save(self, chapter_factory):
        result = classify(chapter_factory(), chapter_factory())
        assert result.label == "Manual save"
        assert result.changed_fields == []

    def test_uses_stored_word_counts_not_content(self, chapter_factory):
        # Content grows a lot but stored counts say otherwise
        old = chapter_factory(content="a", word_count=100)
        new = chapter_factory(content="a b c d e f g h", word_count=101)
        assert classify(old, new).label == "Minor edit"

    def test_markup_only_change_is_a_content_change(self, chapter_factory):
        old = chapter_factory(content="<p>same</p>", word_count=1)
        new = chapter_factory(content="<p><b>same</b></p>", word_count=1)
        assert classify(old, new).changed_fields == ["content"]


class TestHasContentChanged:
    def test_identical(self, chapter_factory):
        assert not has_content_changed(chapter_factory(), chapter_factory())

    def test_ignores_other_fields(self, chapter_factory):
        old = chapter_factory(word_count=3, notes="a")
        new = chapter_factory(word_count=9, notes="b", updated_at="2030-01-01T00:00:00.000Z")
        assert not has_content_changed(old, new)

    def test_title_or_content(self, chapter_factory):
        assert has_content_changed(chapter_factory(title="x"), chapter_factory(title="y"))
        assert has_content_changed(chapter_factory(content="x"), chapter_factory(content="y"))
