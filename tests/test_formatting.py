"""Tests for nscli/formatting.py - column width and padding helpers."""

from __future__ import annotations

import datetime as dt

from nscli.formatting import (
    format_date,
    join_columns,
    left_aligned,
    left_aligned_or_spaces,
    max_width,
    right_aligned,
    right_aligned_or_spaces,
    spaces,
)


class TestMaxWidth:
    """Tests for max_width."""

    def test_widest_projection(self):
        """Returns the longest projected string length."""
        assert max_width(["a", "abc", "ab"], lambda s: s) == 3

    def test_empty_collection(self):
        """No items means no width."""
        assert max_width([], lambda s: s) is None

    def test_projection_undefined_everywhere(self):
        """None for every item means no width."""
        assert max_width([1, 2, 3], lambda _: None) is None

    def test_skips_none(self):
        """Items projecting to None are ignored."""
        assert max_width([None, "xy", None], lambda s: s) == 2

    def test_empty_string_counts(self):
        """An empty string is a defined projection of width 0."""
        assert max_width(["", None], lambda s: s) == 0


class TestPadding:
    """Tests for left/right alignment."""

    def test_left_aligned_pads_right(self):
        assert left_aligned("ab", 5) == "ab   "

    def test_right_aligned_pads_left(self):
        assert right_aligned("ab", 5) == "   ab"

    def test_exact_width_unchanged(self):
        assert left_aligned("abc", 3) == "abc"
        assert right_aligned("abc", 3) == "abc"

    def test_truncates_trailing_characters(self):
        """Content wider than the field loses trailing characters."""
        assert left_aligned("abcdef", 3) == "abc"
        assert right_aligned("abcdef", 3) == "abc"

    def test_zero_width(self):
        assert left_aligned("abc", 0) == ""
        assert right_aligned("", 0) == ""

    def test_none_becomes_blank_field(self):
        """None pads to a same-width blank, not an empty string."""
        assert left_aligned_or_spaces(None, 4) == "    "
        assert right_aligned_or_spaces(None, 4) == "    "

    def test_or_spaces_with_value(self):
        assert left_aligned_or_spaces("x", 3) == "x  "
        assert right_aligned_or_spaces("x", 3) == "  x"

    def test_spaces(self):
        assert spaces(3) == "   "
        assert spaces(-1) == ""


class TestMisc:
    """Tests for date formatting and column joining."""

    def test_format_date_shape(self):
        """Dates render as 'Mon DD HH:MM'."""
        ts = dt.datetime(2026, 3, 21, 14, 5, tzinfo=dt.UTC)
        text = format_date(ts)
        assert len(text) == 12
        assert text == ts.astimezone().strftime("%b %d %H:%M")

    def test_join_columns(self):
        """Cells are joined with two spaces."""
        assert join_columns(["a", "b", "c"]) == "a  b  c"
