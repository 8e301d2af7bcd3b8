"""Style model and the style engine that turns text into styled blocks.

``Style`` is the flat, user-facing set of overrides a node carries in its
props.  ``StyleSpec`` is the resolved rendering recipe (colours, weight,
padding, border, margin, width).  ``apply_style`` merges the two and
returns a ``render(text) -> str`` function whose output may contain ANSI
escape sequences; every width the renderer measures afterwards goes
through :func:`pi.dom.utils.visible_width`.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass, field, replace
from typing import Callable

from pi.dom.utils import RESET, pad_to_width, visible_width, wrap_text_with_ansi

logger = logging.getLogger(__name__)

_HEX_RE = re.compile(r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$")


# ---------------------------------------------------------------------------
# User-facing overrides
# ---------------------------------------------------------------------------


@dataclass
class Style:
    """Flat style overrides carried in node props.

    Colours are ``#RRGGBB`` / ``#RGB`` strings or ANSI-256 indices such as
    ``"8"``.  A non-empty ``border_color`` draws a border.  Per-side padding
    and margin left as ``None`` keep the value of the kind's base style.
    """

    color: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False

    background_color: str = ""

    border_color: str = ""
    border_rounded: bool = False

    padding_left: int | None = None
    padding_right: int | None = None
    padding_top: int | None = None
    padding_bottom: int | None = None

    margin_left: int | None = None
    margin_right: int | None = None
    margin_top: int | None = None
    margin_bottom: int | None = None

    width: int = 0

    no_default: bool = False


# ---------------------------------------------------------------------------
# Borders
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Border:
    top: str
    bottom: str
    left: str
    right: str
    top_left: str
    top_right: str
    bottom_left: str
    bottom_right: str


NORMAL_BORDER = Border("─", "─", "│", "│", "┌", "┐", "└", "┘")
ROUNDED_BORDER = Border("─", "─", "│", "│", "╭", "╮", "╰", "╯")


# ---------------------------------------------------------------------------
# Colours
# ---------------------------------------------------------------------------


def color_sgr(color: str, background: bool = False) -> str:
    """Return the SGR parameters for *color*, or ``""`` if it is not usable."""
    if not color:
        return ""
    base = 48 if background else 38
    if _HEX_RE.match(color):
        digits = color[1:]
        if len(digits) == 3:
            digits = "".join(c * 2 for c in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return f"{base};2;{r};{g};{b}"
    if color.isdigit() and int(color) < 256:
        return f"{base};5;{int(color)}"
    logger.debug("ignoring unrecognised colour %r", color)
    return ""


# ---------------------------------------------------------------------------
# StyleSpec
# ---------------------------------------------------------------------------

Sides = tuple[int, int, int, int]  # top, right, bottom, left


@dataclass(frozen=True)
class StyleSpec:
    """A resolved style: how a block of text is decorated and boxed."""

    foreground: str = ""
    background: str = ""
    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    padding: Sides = (0, 0, 0, 0)
    margin: Sides = (0, 0, 0, 0)
    border: Border | None = None
    border_foreground: str = ""
    width: int = 0

    def sgr(self) -> str:
        params: list[str] = []
        if self.bold:
            params.append("1")
        if self.italic:
            params.append("3")
        if self.underline:
            params.append("4")
        if self.strikethrough:
            params.append("9")
        fg = color_sgr(self.foreground)
        if fg:
            params.append(fg)
        bg = color_sgr(self.background, background=True)
        if bg:
            params.append(bg)
        if not params:
            return ""
        return f"\x1b[{';'.join(params)}m"

    def render(self, text: str) -> str:
        """Render *text* as a rectangular block.

        Lines are padded to a common width, so every output line has the
        same visible width.
        """
        top, right, bottom, left = self.padding
        if self.width > 0:
            content_width = max(1, self.width - left - right)
            lines = wrap_text_with_ansi(text, content_width)
        else:
            lines = text.split("\n")
            content_width = max((visible_width(line) for line in lines), default=0)

        sgr = self.sgr()
        inner_width = content_width + left + right

        def paint(line: str) -> str:
            if not sgr:
                return line
            # Re-open our styling after resets emitted by nested content.
            return sgr + line.replace(RESET, RESET + sgr) + RESET

        body: list[str] = []
        blank = " " * inner_width
        body.extend(paint(blank) for _ in range(top))
        for line in lines:
            body.append(paint(" " * left + pad_to_width(line, content_width) + " " * right))
        body.extend(paint(blank) for _ in range(bottom))

        if text == "" and inner_width == 0 and self.border is None:
            body = [""]

        if self.border is not None:
            body = self._draw_border(self.border, body, inner_width)

        m_top, m_right, m_bottom, m_left = self.margin
        if any(self.margin):
            block_width = max((visible_width(line) for line in body), default=0)
            full = block_width + m_left + m_right
            body = (
                [" " * full] * m_top
                + [" " * m_left + pad_to_width(line, block_width) + " " * m_right for line in body]
                + [" " * full] * m_bottom
            )

        return "\n".join(body)

    def _draw_border(self, border: Border, body: list[str], inner_width: int) -> list[str]:
        fg = color_sgr(self.border_foreground)

        def ink(s: str) -> str:
            return f"\x1b[{fg}m{s}{RESET}" if fg else s

        result = [ink(border.top_left + border.top * inner_width + border.top_right)]
        for line in body:
            result.append(ink(border.left) + pad_to_width(line, inner_width) + ink(border.right))
        result.append(ink(border.bottom_left + border.bottom * inner_width + border.bottom_right))
        return result


def merge_style(base: StyleSpec, override: Style | None) -> StyleSpec:
    """Apply node-level overrides on top of a kind's base spec."""
    if override is None:
        return base
    spec = StyleSpec() if override.no_default else base

    changes: dict[str, object] = {}
    if override.color:
        changes["foreground"] = override.color
    if override.background_color:
        changes["background"] = override.background_color
    for flag in ("bold", "italic", "underline", "strikethrough"):
        if getattr(override, flag):
            changes[flag] = True
    if override.border_color:
        changes["border"] = ROUNDED_BORDER if override.border_rounded else NORMAL_BORDER
        changes["border_foreground"] = override.border_color
    if override.width > 0:
        changes["width"] = override.width

    changes["padding"] = _override_sides(
        spec.padding,
        override.padding_top,
        override.padding_right,
        override.padding_bottom,
        override.padding_left,
    )
    changes["margin"] = _override_sides(
        spec.margin,
        override.margin_top,
        override.margin_right,
        override.margin_bottom,
        override.margin_left,
    )
    return replace(spec, **changes)


def _override_sides(base: Sides, *values: int | None) -> Sides:
    top, right, bottom, left = (
        v if v is not None else b for v, b in zip(values, base)
    )
    return (top, right, bottom, left)


def apply_style(base: StyleSpec, override: Style | None = None) -> Callable[[str], str]:
    """Return the render function for *base* with *override* applied."""
    return merge_style(base, override).render


# ---------------------------------------------------------------------------
# Theme
# ---------------------------------------------------------------------------


@dataclass
class Theme:
    """Base style per element kind."""

    title: StyleSpec = field(default_factory=StyleSpec)
    subtitle: StyleSpec = field(default_factory=StyleSpec)
    text: StyleSpec = field(default_factory=StyleSpec)
    container: StyleSpec = field(default_factory=StyleSpec)
    button: StyleSpec = field(default_factory=StyleSpec)
    input: StyleSpec = field(default_factory=StyleSpec)
    prompt: StyleSpec = field(default_factory=StyleSpec)
    input_text: StyleSpec = field(default_factory=StyleSpec)
    placeholder: StyleSpec = field(default_factory=StyleSpec)
    list_item: StyleSpec = field(default_factory=StyleSpec)
    list_item_selected: StyleSpec = field(default_factory=StyleSpec)

    @classmethod
    def default(cls) -> Theme:
        return cls(
            title=StyleSpec(
                bold=True,
                foreground="#FAFAFA",
                background="#7D56F4",
                padding=(0, 2, 0, 2),
            ),
            subtitle=StyleSpec(
                bold=True,
                foreground="#FFF7DB",
                background="#F25D94",
                padding=(0, 1, 0, 1),
            ),
            button=StyleSpec(
                bold=True,
                foreground="#FFF",
                background="#04B575",
                padding=(0, 3, 0, 3),
            ),
            input=StyleSpec(border=NORMAL_BORDER, padding=(0, 1, 0, 1)),
            prompt=StyleSpec(bold=True, foreground="#FFFF00"),
            placeholder=StyleSpec(italic=True, foreground="#626262"),
            list_item=StyleSpec(foreground="#626262"),
            list_item_selected=StyleSpec(bold=True, foreground="#00FF00"),
        )

    @classmethod
    def plain(cls) -> Theme:
        """A theme that adds no escape codes and no decoration."""
        return cls()
