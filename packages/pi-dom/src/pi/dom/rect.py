"""Rectangles: fixed grids of rendered terminal lines, and how they compose.

A ``Rectangle`` knows its visual ``width`` (escape codes excluded) and its
``height``.  Lines may be shorter than ``width`` while a layout is being
built; :meth:`Rectangle.normalized` and :meth:`Rectangle.to_string` pad or
cut them to exactly ``width`` columns.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from pi.dom.props import Align
from pi.dom.utils import (
    apply_line_reset,
    pad_to_width,
    slice_with_width,
    truncate_to_width,
    visible_width,
)


@dataclass
class Rectangle:
    width: int = 0
    height: int = 0
    lines: list[str] = field(default_factory=list)

    @classmethod
    def from_string(cls, content: str) -> Rectangle:
        """Measure rendered *content*; one trailing newline is ignored."""
        if content.endswith("\n"):
            content = content[:-1]
        lines = content.split("\n")
        width = max((visible_width(line) for line in lines), default=0)
        return cls(width=width, height=len(lines), lines=lines)

    @classmethod
    def blank(cls, width: int, height: int) -> Rectangle:
        return cls(width=width, height=height, lines=[" " * width for _ in range(height)])

    @property
    def is_empty(self) -> bool:
        return self.width == 0 and self.height == 0

    def _fit(self, index: int) -> str:
        line = self.lines[index] if index < len(self.lines) else ""
        line_width = visible_width(line)
        if line_width > self.width:
            return truncate_to_width(line, self.width, ellipsis="", pad=True)
        if line_width < self.width:
            return line + " " * (self.width - line_width)
        return line

    def normalized(self) -> Rectangle:
        """Return a copy with exactly ``height`` lines of ``width`` columns."""
        return Rectangle(
            width=self.width,
            height=self.height,
            lines=[self._fit(i) for i in range(self.height)],
        )

    def to_string(self) -> str:
        """Exactly ``height`` lines, each exactly ``width`` visible columns.

        Missing lines are blank, long lines are cut (escape codes kept),
        short lines are padded with spaces.
        """
        return "\n".join(self._fit(i) for i in range(self.height))

    def __str__(self) -> str:
        return self.to_string()


EMPTY = Rectangle()


# ---------------------------------------------------------------------------
# Overlay
# ---------------------------------------------------------------------------


def overlay(parent: Rectangle, child: Rectangle) -> Rectangle:
    """Composite *child* on top of *parent*, both anchored at (0, 0).

    The result is as wide and tall as the larger of the two.  On rows where
    the child has a line, the child covers columns ``[0, child.width)``;
    padding added to reach the result width never covers the parent.
    """
    width = max(parent.width, child.width)
    height = max(parent.height, child.height)

    lines = [
        pad_to_width(parent.lines[i] if i < len(parent.lines) else "", width)
        for i in range(height)
    ]
    for i in range(min(len(child.lines), height)):
        child_line = pad_to_width(child.lines[i], width)
        lines[i] = overlay_line(lines[i], child_line, width, child.width)

    return Rectangle(width=width, height=height, lines=lines)


def overlay_line(parent: str, child: str, width: int, child_width: int) -> str:
    """Merge one row: child columns ``[0, child_width)``, then the parent's rest.

    Both segments keep their own styling; wide characters cut by the
    boundary become spaces.
    """
    if child_width <= 0:
        return parent

    head, head_width = slice_with_width(child, 0, child_width, strict=True)
    head = apply_line_reset(head) + " " * (child_width - head_width)

    rest = width - child_width
    if rest <= 0:
        return head

    tail, tail_width = slice_with_width(parent, child_width, rest, strict=True)
    return head + apply_line_reset(tail) + " " * (rest - tail_width)


# ---------------------------------------------------------------------------
# Stacking
# ---------------------------------------------------------------------------


def stack_vertically(rects: list[Rectangle]) -> Rectangle:
    if not rects:
        return Rectangle()

    width = max(r.width for r in rects)
    lines: list[str] = []
    for rect in rects:
        lines.extend(rect.lines[: rect.height])
        lines.extend("" for _ in range(rect.height - len(rect.lines)))
    return Rectangle(width=width, height=len(lines), lines=lines)


def pad_rectangle_vertically(rect: Rectangle, target_height: int, align: Align | str = Align.TOP) -> Rectangle:
    """Grow *rect* to *target_height* rows with blank lines placed per *align*.

    top pads below, bottom pads above, center splits the padding with the
    odd row going below.
    """
    if rect.height >= target_height:
        return rect

    missing = target_height - rect.height
    if align == Align.BOTTOM:
        above = missing
    elif align == Align.CENTER:
        above = missing // 2
    else:
        above = 0

    blank = " " * rect.width
    lines = [blank] * above + list(rect.lines) + [blank] * (missing - above)
    return Rectangle(width=rect.width, height=target_height, lines=lines)


def stack_horizontally(rects: list[Rectangle], align: Align | str = Align.TOP) -> Rectangle:
    """Place *rects* side by side, aligned vertically to the tallest one."""
    if not rects:
        return Rectangle()

    height = max(r.height for r in rects)
    columns = [pad_rectangle_vertically(r.normalized(), height, align) for r in rects]
    lines = ["".join(col.lines[i] for col in columns) for i in range(height)]
    return Rectangle(width=sum(r.width for r in rects), height=height, lines=lines)


def distribute_spacers(remaining: int, max_sizes: list[int]) -> list[int]:
    """Split *remaining* columns across spacers.

    Every spacer gets ``remaining // n``, the last one also takes the
    remainder.  With fewer columns than spacers each spacer gets one
    column.  A positive max size clamps a spacer.
    """
    count = len(max_sizes)
    if count == 0:
        return []

    if remaining < count:
        widths = [1] * count
    else:
        widths = [remaining // count] * count
        widths[-1] += remaining % count

    return [min(w, cap) if cap > 0 else w for w, cap in zip(widths, max_sizes)]
