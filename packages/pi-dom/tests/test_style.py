"""Tests for the style engine and themes."""

from __future__ import annotations

from pi.dom.style import (
    NORMAL_BORDER,
    Style,
    StyleSpec,
    Theme,
    apply_style,
    color_sgr,
    merge_style,
)
from pi.dom.utils import strip_ansi, visible_width


class TestColors:
    def test_hex(self) -> None:
        assert color_sgr("#FF0080") == "38;2;255;0;128"

    def test_short_hex(self) -> None:
        assert color_sgr("#fff", background=True) == "48;2;255;255;255"

    def test_ansi_256(self) -> None:
        assert color_sgr("8") == "38;5;8"

    def test_unknown(self) -> None:
        assert color_sgr("purple") == ""
        assert color_sgr("") == ""


class TestStyleSpecRender:
    def test_plain_is_identity(self) -> None:
        assert StyleSpec().render("hello") == "hello"

    def test_empty_text(self) -> None:
        assert StyleSpec().render("") == ""

    def test_bold_wraps_in_sgr(self) -> None:
        assert StyleSpec(bold=True).render("hi") == "\x1b[1mhi\x1b[0m"

    def test_lines_padded_to_common_width(self) -> None:
        out = StyleSpec().render("a\nabc")
        assert out.split("\n") == ["a  ", "abc"]

    def test_padding(self) -> None:
        out = StyleSpec(padding=(1, 1, 0, 2)).render("x")
        assert out.split("\n") == ["    ", "  x "]

    def test_margin(self) -> None:
        out = StyleSpec(margin=(0, 1, 1, 1)).render("x")
        assert out.split("\n") == [" x ", "   "]

    def test_border(self) -> None:
        out = StyleSpec(border=NORMAL_BORDER).render("ab")
        assert out.split("\n") == ["┌──┐", "│ab│", "└──┘"]

    def test_width_wraps(self) -> None:
        out = StyleSpec(width=5).render("hello world")
        assert out.split("\n") == ["hello", "world"]

    def test_nested_reset_reopens_style(self) -> None:
        out = StyleSpec(bold=True).render("a\x1b[0mb")
        assert out == "\x1b[1ma\x1b[0m\x1b[1mb\x1b[0m"

    def test_output_is_rectangular(self) -> None:
        spec = StyleSpec(bold=True, background="#123456", padding=(0, 2, 0, 2), border=NORMAL_BORDER)
        lines = spec.render("one\nthree").split("\n")
        assert len({visible_width(line) for line in lines}) == 1


class TestMergeStyle:
    def test_none_keeps_base(self) -> None:
        base = StyleSpec(bold=True)
        assert merge_style(base, None) is base

    def test_overrides_apply(self) -> None:
        spec = merge_style(StyleSpec(), Style(color="#FF0000", italic=True, padding_left=3))
        assert spec.foreground == "#FF0000"
        assert spec.italic
        assert spec.padding == (0, 0, 0, 3)

    def test_unset_sides_keep_base(self) -> None:
        spec = merge_style(StyleSpec(padding=(1, 2, 3, 4)), Style(padding_top=0))
        assert spec.padding == (0, 2, 3, 4)

    def test_border_color_adds_border(self) -> None:
        spec = merge_style(StyleSpec(), Style(border_color="#874BFD"))
        assert spec.border == NORMAL_BORDER
        assert spec.border_foreground == "#874BFD"

    def test_no_default(self) -> None:
        spec = merge_style(StyleSpec(bold=True, padding=(0, 2, 0, 2)), Style(no_default=True))
        assert spec == StyleSpec()

    def test_apply_style_returns_renderer(self) -> None:
        render = apply_style(StyleSpec(), Style(padding_left=1))
        assert render("x") == " x"


class TestTheme:
    def test_plain_theme_adds_nothing(self) -> None:
        theme = Theme.plain()
        assert theme.title.render("T") == "T"
        assert theme.input.render("x") == "x"

    def test_default_theme(self) -> None:
        theme = Theme.default()
        assert strip_ansi(theme.button.render("OK")) == "   OK   "
        assert theme.input.border == NORMAL_BORDER
        assert theme.text == StyleSpec()
        assert theme.container == StyleSpec()
