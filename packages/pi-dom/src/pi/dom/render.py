"""Rectangle renderer: lays a node tree out into a fixed grid of lines.

Every node kind has a rule that turns it into a :class:`Rectangle` given a
width and height budget.  Containers render their children against the
remaining budget and compose the results (vertically, horizontally or in
z-order); leaves go through the style engine and are measured with the
ANSI-aware width functions.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

import grapheme

from pi.dom.config import RenderConfig
from pi.dom.node import Node, NodeKind, Window, kind_name
from pi.dom.props import (
    Align,
    FixedSpacerProps,
    InputProps,
    ListItemProps,
    SpacerProps,
    extract_props,
    get_typed,
)
from pi.dom.rect import (
    Rectangle,
    distribute_spacers,
    overlay,
    stack_horizontally,
    stack_vertically,
)
from pi.dom.style import Style, StyleSpec, Theme, merge_style
from pi.dom.utils import slice_by_column, strip_ansi, truncate_to_width, visible_width

logger = logging.getLogger(__name__)

CURSOR_ON = "\x1b[7m"
CURSOR_OFF = "\x1b[27m"
PROMPT = "> "

_TEXT_KINDS = frozenset({NodeKind.SPAN, NodeKind.P, NodeKind.H1, NodeKind.H2})
_VERTICAL_KINDS = frozenset({NodeKind.DIV, NodeKind.FRAGMENT, NodeKind.UL})


@dataclass
class RenderContext:
    """Everything one frame of rendering needs besides the tree itself."""

    window: Window = field(default_factory=Window)
    logger: logging.Logger = logger
    config: RenderConfig = field(default_factory=RenderConfig)
    theme: Theme = field(default_factory=Theme.default)

    def size(self) -> tuple[int, int]:
        """The window size, falling back to the configured default per axis."""
        width, height = self.window.get()
        return (
            width if width > 0 else self.config.default_width,
            height if height > 0 else self.config.default_height,
        )


class Renderer:
    def __init__(self, context: RenderContext | None = None) -> None:
        self.context = context if context is not None else RenderContext()

    @property
    def theme(self) -> Theme:
        return self.context.theme

    @property
    def config(self) -> RenderConfig:
        return self.context.config

    def render_to_rect(self, node: Node | None, width: int, height: int) -> Rectangle:
        """Render *node* within a ``width`` x ``height`` budget."""
        if node is None:
            return Rectangle()

        kind = node.kind
        if kind == NodeKind.TEXT:
            return self._render_text_node(node)
        if kind in _VERTICAL_KINDS:
            return self._render_vertical(node, width, height)
        if kind == NodeKind.HDIV:
            return self._render_hdiv(node, width, height)
        if kind == NodeKind.ZDIV:
            return self._render_zdiv(node, width, height)
        if kind in _TEXT_KINDS:
            return self._render_text_block(node)
        if kind == NodeKind.BUTTON:
            return self._render_button(node)
        if kind == NodeKind.LI:
            return self._render_list_item(node)
        if kind == NodeKind.INPUT:
            return self._render_input(node, width)
        if kind == NodeKind.BR:
            return Rectangle(width=0, height=1, lines=[""])
        if kind == NodeKind.SPACER:
            return self._render_spacer(node)
        if kind == NodeKind.FIXED_SPACER:
            return self._fixed_spacer_horizontal(node)

        self.context.logger.debug("render: unknown node kind %r", kind_name(kind))
        return self._render_unknown(node, width, height)

    # ------------------------------------------------------------------
    # Styles
    # ------------------------------------------------------------------

    def _base_style(self, node: Node) -> StyleSpec:
        theme = self.theme
        kind = node.kind
        if kind == NodeKind.H1:
            return theme.title
        if kind == NodeKind.H2:
            return theme.subtitle
        if kind in (NodeKind.TEXT, NodeKind.P, NodeKind.SPAN):
            return theme.text
        if kind == NodeKind.BUTTON:
            return theme.button
        if kind == NodeKind.INPUT:
            return theme.input
        if kind == NodeKind.LI:
            return theme.list_item
        return theme.container

    def node_style(self, node: Node) -> StyleSpec:
        """The kind's base style with the node's ``style`` prop applied."""
        return merge_style(self._base_style(node), get_typed(node.props, "style", Style))

    def extract_text(self, node: Node) -> str:
        """Concatenate the styled text of every descendant text node."""
        parts: list[str] = []
        for child in node.iter_children():
            if child.kind == NodeKind.TEXT:
                if child.text:
                    parts.append(self.node_style(child).render(child.text))
            else:
                parts.append(self.extract_text(child))
        return "".join(parts)

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _render_text_node(self, node: Node) -> Rectangle:
        if not node.text:
            return Rectangle()
        return Rectangle.from_string(self.node_style(node).render(node.text))

    def _render_text_block(self, node: Node) -> Rectangle:
        return Rectangle.from_string(self.node_style(node).render(self.extract_text(node)))

    def _render_button(self, node: Node) -> Rectangle:
        label = get_typed(node.props, "text", str) or self.extract_text(node)
        return Rectangle.from_string(self.node_style(node).render(label))

    def _render_list_item(self, node: Node) -> Rectangle:
        props = extract_props(node.props, ListItemProps)
        if props.item_prefix is not None:
            prefix = props.item_prefix
        elif props.selected:
            prefix = self.config.list_selected_prefix
        else:
            prefix = self.config.list_bullet

        base = self.theme.list_item_selected if props.selected else self.theme.list_item
        spec = merge_style(base, props.style)
        return Rectangle.from_string(spec.render(prefix + self.extract_text(node)))

    def _render_input(self, node: Node, width: int) -> Rectangle:
        props = extract_props(node.props, InputProps)
        config = self.config

        value = props.value[: config.input_char_limit]
        if props.input_type == "password":
            value = config.password_echo * len(value)

        if props.width > 0:
            field_width = props.width
        elif width > config.input_margin:
            field_width = max(width - config.input_margin, config.input_min_width)
        else:
            field_width = config.input_default_width

        line = self.input_line(
            value,
            props.cursor_position,
            props.focused,
            field_width,
            props.placeholder or config.placeholder,
        )
        prompt = self.theme.prompt.render(PROMPT)
        spec = merge_style(self.theme.input, props.style)
        return Rectangle.from_string(spec.render(prompt + line))

    def input_line(self, value: str, cursor: int, focused: bool, width: int, placeholder: str) -> str:
        """Render the editable part of an input, exactly *width* columns wide.

        Long values scroll horizontally so the cursor stays visible; the
        scroll window is measured in columns, so wide characters scroll
        like any other.  The cursor cell is shown in reverse video while
        the input is focused.
        """
        cursor = max(0, min(cursor, len(value)))

        if not value:
            hint = self.theme.placeholder
            if focused and placeholder:
                first = next(grapheme.graphemes(placeholder))
                text = CURSOR_ON + first + CURSOR_OFF + hint.render(placeholder[len(first) :])
            elif focused:
                text = CURSOR_ON + " " + CURSOR_OFF
            else:
                text = hint.render(placeholder)
            return truncate_to_width(text, width, ellipsis="", pad=True)

        before, after = value[:cursor], value[cursor:]
        before_width = visible_width(before)
        total_width = visible_width(value)

        start_col = 0
        if total_width >= width:
            scroll_width = width if after else width - 1
            half_width = scroll_width // 2
            if before_width < half_width:
                start_col = 0
            elif before_width > total_width - half_width:
                start_col = max(0, total_width - scroll_width)
            else:
                start_col = before_width - half_width
        before = slice_by_column(before, start_col, before_width - start_col, strict=True)

        text_style = self.theme.input_text
        if focused:
            at_cursor = next(grapheme.graphemes(after), "")
            rest = after[len(at_cursor) :]
            text = (
                text_style.render(before)
                + CURSOR_ON
                + (at_cursor or " ")
                + CURSOR_OFF
                + text_style.render(rest)
            )
        else:
            text = text_style.render(before + after)

        return truncate_to_width(text, width, ellipsis="", pad=True)

    def _render_spacer(self, node: Node) -> Rectangle:
        props = extract_props(node.props, SpacerProps)
        size = props.min_size if props.min_size > 0 else 1
        return Rectangle(width=size, height=1, lines=[" " * size])

    def _fixed_spacer_horizontal(self, node: Node) -> Rectangle:
        props = extract_props(node.props, FixedSpacerProps)
        space = props.space if props.space > 0 else 1
        return Rectangle(width=space, height=1, lines=[" " * space])

    def _fixed_spacer_vertical(self, node: Node) -> Rectangle:
        props = extract_props(node.props, FixedSpacerProps)
        space = props.space if props.space > 0 else 1
        return Rectangle(width=0, height=space, lines=[""] * space)

    # ------------------------------------------------------------------
    # Containers
    # ------------------------------------------------------------------

    def _render_vertical(self, node: Node, width: int, height: int) -> Rectangle:
        """div, fragment and ul: children top to bottom, sharing the width."""
        rects: list[Rectangle] = []
        remaining = height
        for child in node.iter_children():
            if remaining <= 0:
                break
            if child.kind == NodeKind.FIXED_SPACER:
                rect = self._fixed_spacer_vertical(child)
            else:
                rect = self.render_to_rect(child, width, remaining)
            if rect.height > 0:
                rects.append(rect)
                remaining -= rect.height

        content = stack_vertically(rects)
        if node.kind == NodeKind.DIV:
            return self._decorate(node, content)
        return content

    def _render_hdiv(self, node: Node, width: int, height: int) -> Rectangle:
        """Children left to right; spacers share whatever width is left."""
        rects: list[Rectangle | None] = []
        spacers: list[tuple[int, SpacerProps]] = []
        remaining = width

        for child in node.iter_children():
            if remaining <= 0:
                break
            if child.kind == NodeKind.FIXED_SPACER:
                rect = self._fixed_spacer_horizontal(child)
            elif child.kind == NodeKind.SPACER:
                spacers.append((len(rects), extract_props(child.props, SpacerProps)))
                rects.append(None)
                continue
            else:
                rect = self.render_to_rect(child, remaining, height)
            if rect.width > 0:
                rects.append(rect)
                remaining -= rect.width

        if not rects:
            return Rectangle()

        if spacers:
            sizes = distribute_spacers(remaining, [props.max_size for _, props in spacers])
            self.context.logger.debug(
                "render: hdiv remaining=%d spacers=%d sizes=%s", remaining, len(spacers), sizes
            )
            row_height = max((r.height for r in rects if r is not None), default=1)
            for (index, _), size in zip(spacers, sizes):
                rects[index] = Rectangle.blank(size, row_height)

        align = _align_of(node)
        content = stack_horizontally([r for r in rects if r is not None], align)
        return self._decorate(node, content)

    def _render_zdiv(self, node: Node, width: int, height: int) -> Rectangle:
        """Children share one budget; later children are drawn over earlier ones."""
        rects: list[Rectangle] = []
        for child in node.iter_children():
            if child.kind == NodeKind.FIXED_SPACER:
                continue
            rect = self.render_to_rect(child, width, height)
            if rect.height > 0 or rect.width > 0:
                rects.append(rect)

        if not rects:
            return Rectangle()

        result = rects[0]
        for rect in rects[1:]:
            result = overlay(result, rect)
        return result

    def _render_unknown(self, node: Node, width: int, height: int) -> Rectangle:
        name = kind_name(node.kind)
        lines = [f"<{name}>"]
        remaining = height - 2
        for child in node.iter_children():
            if remaining <= 0:
                break
            rect = self.render_to_rect(child, width, remaining)
            lines.extend(rect.lines)
            remaining -= rect.height
        lines.append(f"</{name}>")
        return Rectangle.from_string("\n".join(lines))

    def _decorate(self, node: Node, content: Rectangle) -> Rectangle:
        """Run a container's content through its style (border, padding, ...)."""
        spec = self.node_style(node)
        if spec == StyleSpec():
            return content
        return Rectangle.from_string(spec.render(content.to_string()))


def _align_of(node: Node) -> Align:
    value = get_typed(node.props, "align", str)
    if not value:
        return Align.TOP
    try:
        return Align(value)
    except ValueError:
        logger.debug("unknown align %r, using top", value)
        return Align.TOP


# ---------------------------------------------------------------------------
# Convenience entry points
# ---------------------------------------------------------------------------


def render_to_rect(
    node: Node | None,
    width: int | None = None,
    height: int | None = None,
    context: RenderContext | None = None,
) -> Rectangle:
    """Render *node* into a Rectangle; the size defaults to the context's window."""
    renderer = Renderer(context)
    default_width, default_height = renderer.context.size()
    return renderer.render_to_rect(
        node,
        width if width is not None else default_width,
        height if height is not None else default_height,
    )


def render_to_string(
    node: Node | None,
    width: int | None = None,
    height: int | None = None,
    context: RenderContext | None = None,
) -> str:
    return render_to_rect(node, width, height, context).to_string()


def strip_color(text: str) -> str:
    return strip_ansi(text)
