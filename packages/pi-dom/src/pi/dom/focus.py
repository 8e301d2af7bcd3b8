"""Focus flags and focus searches over a node tree.

Focus state lives in the application: a node is focused when its props
say ``focused=True``.  Searches run in pre-order, which is also the tab
order of the focus chain.
"""

from __future__ import annotations

from pi.dom.node import Node, NodeKind
from pi.dom.props import get_callable, get_typed

# Kinds that are focusable unless their props say otherwise.
_FOCUSABLE_BY_DEFAULT = frozenset({NodeKind.INPUT})


def is_focused(node: Node) -> bool:
    return get_typed(node.props, "focused", bool) is True


def is_focusable(node: Node) -> bool:
    focusable = get_typed(node.props, "focusable", bool)
    if focusable is None:
        return node.kind in _FOCUSABLE_BY_DEFAULT
    return focusable


def set_focused(node: Node, focused: bool) -> None:
    """Notify *node* that it gained or lost focus (``on_focus`` / ``on_blur``)."""
    handler = get_callable(node.props, "on_focus" if focused else "on_blur")
    if handler is not None:
        handler()


def find_focused(root: Node) -> Node | None:
    for node in root.walk():
        if is_focused(node):
            return node
    return None


def find_focusable(root: Node) -> Node | None:
    for node in root.walk():
        if is_focusable(node):
            return node
    return None


def find_all_focusable(root: Node) -> list[Node]:
    return [node for node in root.walk() if is_focusable(node)]
