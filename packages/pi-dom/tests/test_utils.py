"""Tests for ANSI-aware width measurement, wrapping, truncation and slicing."""

from __future__ import annotations

from pi.dom.utils import (
    AnsiCodeTracker,
    extract_ansi_code,
    pad_to_width,
    slice_by_column,
    slice_with_width,
    strip_ansi,
    truncate_to_width,
    visible_width,
    wrap_text_with_ansi,
)

FAMILY = "\U0001F468\u200d\U0001F469\u200d\U0001F467"


class TestVisibleWidth:
    def test_ascii(self) -> None:
        assert visible_width("hello") == 5

    def test_empty(self) -> None:
        assert visible_width("") == 0

    def test_ignores_sgr(self) -> None:
        assert visible_width("\x1b[1;31mred\x1b[0m") == 3

    def test_ignores_osc_hyperlinks(self) -> None:
        link = "\x1b]8;;https://example.com\x07link\x1b]8;;\x07"
        assert visible_width(link) == 4

    def test_wide_chars(self) -> None:
        assert visible_width("日本") == 4

    def test_combining_marks(self) -> None:
        assert visible_width("é") == 1

    def test_emoji(self) -> None:
        assert visible_width("🎉") == 2

    def test_tab_counts_as_three(self) -> None:
        assert visible_width("\t") == 3


class TestStripAnsi:
    def test_strip(self) -> None:
        assert strip_ansi("\x1b[32mok\x1b[0m done") == "ok done"

    def test_extract_code(self) -> None:
        assert extract_ansi_code("\x1b[31mx", 0) == ("\x1b[31m", 5)
        assert extract_ansi_code("\x1b[31mx", 5) is None


class TestAnsiCodeTracker:
    def test_tracks_and_resets(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[1;31m")
        assert tracker.get_active_codes() == "\x1b[1m\x1b[31m"
        tracker.process("\x1b[0m")
        assert not tracker.has_active_codes()

    def test_truecolor(self) -> None:
        tracker = AnsiCodeTracker()
        tracker.process("\x1b[38;2;1;2;3m")
        assert tracker.get_active_codes() == "\x1b[38;2;1;2;3m"


class TestWrap:
    def test_wraps_at_words(self) -> None:
        assert wrap_text_with_ansi("hello world", 5) == ["hello", "world"]

    def test_long_word_is_split(self) -> None:
        assert wrap_text_with_ansi("abcdefgh", 3) == ["abc", "def", "gh"]

    def test_zwj_sequences_stay_whole(self) -> None:
        assert wrap_text_with_ansi(FAMILY * 3, 4) == [FAMILY * 2, FAMILY]

    def test_keeps_newlines(self) -> None:
        assert wrap_text_with_ansi("a\nb", 10) == ["a", "b"]

    def test_styles_carry_over(self) -> None:
        lines = wrap_text_with_ansi("\x1b[31mhello world\x1b[0m", 5)
        assert [strip_ansi(line) for line in lines] == ["hello", "world"]
        assert lines[1].startswith("\x1b[31m")


class TestTruncate:
    def test_short_text_untouched(self) -> None:
        assert truncate_to_width("abc", 5) == "abc"

    def test_ellipsis(self) -> None:
        assert truncate_to_width("hello world", 8) == "hello..."

    def test_no_ellipsis_with_pad(self) -> None:
        assert truncate_to_width("abcdef", 4, ellipsis="", pad=True) == "abcd"
        assert truncate_to_width("ab", 4, ellipsis="", pad=True) == "ab  "

    def test_closes_open_style(self) -> None:
        out = truncate_to_width("\x1b[31mabcdef", 3, ellipsis="")
        assert out == "\x1b[31mabc\x1b[0m"

    def test_cuts_between_clusters(self) -> None:
        assert truncate_to_width(FAMILY + "abc", 3, ellipsis="") == FAMILY + "a"
        assert truncate_to_width("e\u0301xyz", 2, ellipsis="") == "e\u0301x"

    def test_zero_width(self) -> None:
        assert truncate_to_width("abc", 0) == ""


class TestSlice:
    def test_plain(self) -> None:
        assert slice_by_column("abcdef", 2, 3) == "cde"

    def test_carries_earlier_codes(self) -> None:
        text, width = slice_with_width("\x1b[32mabcdef", 2, 2)
        assert text == "\x1b[32mcd"
        assert width == 2

    def test_strict_replaces_cut_wide_chars(self) -> None:
        assert slice_with_width("日本", 1, 2, strict=True) == ("  ", 2)

    def test_keeps_clusters_whole(self) -> None:
        assert slice_with_width(FAMILY + "ab", 0, 3) == (FAMILY + "a", 3)
        assert slice_with_width("a" + FAMILY + "b", 1, 3) == (FAMILY + "b", 3)

    def test_strict_replaces_cut_clusters(self) -> None:
        assert slice_with_width(FAMILY + "b", 1, 2, strict=True) == (" b", 2)

    def test_pad_to_width(self) -> None:
        assert pad_to_width("\x1b[1mab\x1b[0m", 4) == "\x1b[1mab\x1b[0m  "
        assert pad_to_width("abcd", 2) == "abcd"
