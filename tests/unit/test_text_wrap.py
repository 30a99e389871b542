"""Unit tests for wrap_text."""

import pytest

from speech2text.ui.text_wrap import wrap_text


SAMPLE = (
    "So today we are going to talk about transcription pipelines, which take "
    "media files of arbitrary length and turn them into text that a person can "
    "read and scroll through supercalifragilisticexpialidocious."
)


@pytest.mark.unit
class TestWrapText:
    """Test cases for wrap_text."""

    def test_quick_brown_fox(self):
        assert wrap_text("the quick brown fox", 10) == ["the quick", "brown fox"]

    def test_empty_text(self):
        assert wrap_text("", 10) == []

    def test_whitespace_only_text(self):
        assert wrap_text("  \n\t  ", 10) == []

    def test_non_positive_width_returns_text_unchanged(self):
        assert wrap_text("keep  this\nas is", 0) == ["keep  this\nas is"]
        assert wrap_text("keep this", -3) == ["keep this"]

    def test_non_positive_width_empty_text(self):
        assert wrap_text("", 0) == []

    def test_overlong_word_gets_its_own_line(self):
        assert wrap_text("a extraordinarily b", 5) == ["a", "extraordinarily", "b"]

    def test_exact_fit(self):
        assert wrap_text("abc def", 7) == ["abc def"]
        assert wrap_text("abc def", 6) == ["abc", "def"]

    def test_whitespace_runs_collapse(self):
        assert wrap_text("one\n\ntwo   three\tfour", 40) == ["one two three four"]

    def test_wide_characters_measured_in_cells(self):
        # Each CJK character takes two terminal cells
        assert wrap_text("日本 語", 4) == ["日本", "語"]

    @pytest.mark.parametrize("width", [1, 5, 12, 20, 33, 80])
    def test_lines_within_width_except_single_long_words(self, width):
        for line in wrap_text(SAMPLE, width):
            assert len(line) <= width or " " not in line

    @pytest.mark.parametrize("width", [3, 8, 15, 40, 72])
    def test_rewrapping_is_a_no_op(self, width):
        wrapped = wrap_text(SAMPLE, width)
        assert wrap_text(" ".join(wrapped), width) == wrapped

    @pytest.mark.parametrize("width", [4, 10, 25])
    def test_words_are_preserved_in_order(self, width):
        wrapped = wrap_text(SAMPLE, width)
        assert " ".join(wrapped).split() == SAMPLE.split()

    def test_deterministic(self):
        assert wrap_text(SAMPLE, 17) == wrap_text(SAMPLE, 17)
