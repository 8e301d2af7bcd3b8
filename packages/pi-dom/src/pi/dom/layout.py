"""Size estimates for unrendered nodes, and helpers that build aligned rows.

The estimates look at the tree only; they never run the style engine.
Widths are measured like the renderer measures them: visible columns,
escape codes excluded.
"""

from __future__ import annotations

from typing import Iterable

from pi.dom.elements import hdiv, text
from pi.dom.node import Node, NodeKind
from pi.dom.props import get_typed
from pi.dom.utils import visible_width

_ROW_KINDS = frozenset({NodeKind.HDIV, NodeKind.SPAN, NodeKind.P, NodeKind.H1, NodeKind.H2, NodeKind.BUTTON, NodeKind.LI})
_COLUMN_KINDS = frozenset({NodeKind.DIV, NodeKind.FRAGMENT, NodeKind.UL})


def node_width(node: Node | None) -> int:
    """Estimated visible width of *node*.

    Text counts its widest line; rows add their children up; columns and
    layers take their widest child.
    """
    if node is None:
        return 0
    if node.kind == NodeKind.TEXT:
        return max((visible_width(line) for line in node.text.split("\n")), default=0)
    if node.kind == NodeKind.FIXED_SPACER:
        return get_typed(node.props, "space", int) or 0
    if node.kind in _ROW_KINDS:
        return sum(node_width(child) for child in node.iter_children())
    if node.kind in _COLUMN_KINDS or node.kind == NodeKind.ZDIV:
        return max_node_width(node.iter_children())
    return 0


def max_node_width(nodes: Iterable[Node | None]) -> int:
    return max((node_width(node) for node in nodes), default=0)


def node_height(node: Node | None) -> int:
    """Estimated number of lines *node* occupies."""
    if node is None:
        return 0
    kind = node.kind
    if kind == NodeKind.TEXT:
        return node.text.count("\n") + 1 if node.text else 0
    if kind == NodeKind.BR:
        return 1
    if kind == NodeKind.FIXED_SPACER:
        return max(get_typed(node.props, "space", int) or 0, 1)
    if kind in (NodeKind.HDIV, NodeKind.ZDIV):
        return max((node_height(child) for child in node.iter_children()), default=0)
    if kind in _COLUMN_KINDS:
        return total_nodes_height(node.iter_children())
    return 1


def total_nodes_height(nodes: Iterable[Node | None]) -> int:
    return sum(node_height(node) for node in nodes)


def _merge_rows(a: list[Node], b: list[Node], space_width: int, align_width: bool) -> list[list[Node]]:
    """Pair up *a* and *b* from the bottom; the shorter list gets empty rows on top."""
    if not a or not b:
        return [[node] for node in (a or b)]

    max_width_a = max_node_width(a) if align_width else 0
    rows = max(len(a), len(b))
    a_offset = rows - len(a)
    b_offset = rows - len(b)

    result: list[list[Node]] = []
    for i in range(rows):
        node_a = a[i - a_offset] if i >= a_offset else None
        node_b = b[i - b_offset] if i >= b_offset else None

        if node_a is not None and node_b is not None:
            gap = space_width
            if align_width:
                gap = max(max_width_a - node_width(node_a) + space_width, space_width)
            result.append([node_a, text(" " * gap), node_b])
        elif node_a is not None:
            result.append([node_a])
        elif node_b is not None:
            if align_width:
                result.append([text(" " * (max_width_a + space_width)), node_b])
            else:
                result.append([node_b])
    return result


def merge_align_bottom(a: list[Node], b: list[Node], space_width: int) -> list[Node]:
    """Place *a* and *b* side by side, bottom-aligned, one row node per line.

    Rows holding both an ``a`` and a ``b`` node separate them with
    *space_width* columns.
    """
    return [hdiv(*row) for row in _merge_rows(a, b, space_width, align_width=False)]


def merge_align_bottom_fragment(a: list[Node], b: list[Node], space_width: int) -> list[Node]:
    """Like :func:`merge_align_bottom`, but the ``a`` column is padded to its
    widest entry so every ``b`` node starts in the same column."""
    return [hdiv(*row) for row in _merge_rows(a, b, space_width, align_width=True)]
