"""DOM engine: tree setup, focus chain, event dispatch and default behaviour.

A ``DOM`` wraps one freshly built tree for one frame.  Setup walks the tree
once in pre-order and records it in an arena: ``_nodes[i]`` is the i-th
node in tab order and ``_parents[i]`` the arena index of its parent
(``-1`` for the root).  Bubbling walks parent indices; nodes themselves
carry no parent pointer, so a node can never be linked into two trees.
"""

from __future__ import annotations

import logging

from pi.dom.events import DOMEvent, EventType, Key, KeyEvent, ResizeEvent, get_event_handler
from pi.dom.focus import find_focused, is_focusable, is_focused, set_focused
from pi.dom.input import update_input_value
from pi.dom.node import Node, NodeKind, Window
from pi.dom.props import get_callable, get_typed

logger = logging.getLogger(__name__)


class DOM:
    """A node tree with event handling and keyboard focus tracking."""

    def __init__(self, root: Node, window: Window | None = None) -> None:
        self.root = root
        self.window = window if window is not None else Window()

        self.first_focusable: Node | None = None
        self.last_focusable: Node | None = None

        self.focused_node: Node | None = None
        self.previous_focusable: Node | None = None
        self.next_focusable: Node | None = None

        self._nodes: list[Node] = []
        self._parents: list[int] = []
        self._index: dict[int, int] = {}
        self._focusables: list[int] = []

        self._setup(root, -1)

    # ------------------------------------------------------------------
    # Setup
    # ------------------------------------------------------------------

    def _setup(self, node: Node, parent: int) -> None:
        if id(node) in self._index:
            logger.warning("node %r appears twice in the tree; keeping its first position", node)
            return

        index = len(self._nodes)
        self._nodes.append(node)
        self._parents.append(parent)
        self._index[id(node)] = index
        node.window = self.window

        focusable = is_focusable(node)

        if focusable and self.first_focusable is None:
            self.first_focusable = node

        if self.focused_node is None and is_focused(node):
            self.focused_node = node
            self.previous_focusable = self.last_focusable

        if (
            focusable
            and self.focused_node is not None
            and self.next_focusable is None
            and node is not self.focused_node
        ):
            self.next_focusable = node

        if focusable:
            self.last_focusable = node
            self._focusables.append(index)

        for child in node.iter_children():
            self._setup(child, index)

    def parent_of(self, node: Node) -> Node | None:
        """Return the parent of *node* in this tree (``None`` for the root)."""
        index = self._index.get(id(node))
        if index is None or self._parents[index] < 0:
            return None
        return self._nodes[self._parents[index]]

    def nodes(self) -> list[Node]:
        """All nodes in tab (pre-)order."""
        return list(self._nodes)

    # ------------------------------------------------------------------
    # Key events
    # ------------------------------------------------------------------

    def dispatch_key_down(self, key: KeyEvent) -> DOMEvent:
        """Deliver *key* to the focused node (or the root) and bubble it up.

        Built-in behaviour runs afterwards unless a handler called
        ``prevent_default``.
        """
        target = find_focused(self.root)
        if target is None:
            target = self.root
        logger.debug("DOM: keydown %r -> %r", str(key), target)

        event = DOMEvent(
            type=EventType.KEYDOWN,
            target=target,
            current_target=target,
            key_event=key,
        )
        self.handle_bubbling(target, event)
        if not event.default_prevented:
            self.apply_default(target, event)
        return event

    def handle_bubbling(self, node: Node | None, event: DOMEvent) -> None:
        while node is not None and not event.propagation_stopped:
            event.current_target = node
            event.bubble_phase = node is not event.target
            handler = get_event_handler(node, event.type)
            if handler is not None:
                handler(event)
            node = self.parent_of(node)

    def apply_default(self, node: Node, event: DOMEvent) -> None:
        if event.type != EventType.KEYDOWN or event.default_prevented:
            return
        key = event.key_event
        if key is None:
            return

        if key.type in (Key.up, Key.down):
            if self.move_focus(-1 if key.type == Key.up else 1):
                event.prevent_default()
                event.stop_propagation()
            return

        if node.kind != NodeKind.INPUT:
            return

        value = get_typed(node.props, "value", str) or ""
        pos = get_typed(node.props, "cursor_position", int) or 0
        on_cursor_move = get_callable(node.props, "on_cursor_move")

        if key.type in (Key.left, Key.right):
            if on_cursor_move is not None:
                delta = -1 if key.type == Key.left else 1
                on_cursor_move(delta, max(0, min(pos + delta, len(value))))
            return

        new_value, new_pos = update_input_value(value, pos, key)
        if new_value != value:
            on_change = get_callable(node.props, "on_change")
            if on_change is not None:
                on_change(new_value)
        if new_pos != pos and on_cursor_move is not None:
            on_cursor_move(new_pos - pos, new_pos)

    # ------------------------------------------------------------------
    # Focus
    # ------------------------------------------------------------------

    def move_focus(self, direction: int) -> bool:
        """Move focus one step along the tab order, wrapping at the ends.

        Returns ``False`` only when the tree has no focusable node.
        """
        if direction > 0:
            candidate = self.next_focusable or self.first_focusable
        else:
            candidate = self.previous_focusable or self.last_focusable
        if candidate is None:
            return False

        current = self.focused_node
        if candidate is current:
            return True

        logger.debug("DOM: focus %r -> %r", current, candidate)
        if current is not None:
            set_focused(current, False)
        set_focused(candidate, True)
        self._relink_focus(candidate)
        return True

    def _relink_focus(self, node: Node) -> None:
        """Recompute previous/next around *node* so repeated moves keep going."""
        position = self._index[id(node)]
        self.focused_node = node
        self.previous_focusable = None
        self.next_focusable = None
        for index in self._focusables:
            if index < position:
                self.previous_focusable = self._nodes[index]
            elif index > position:
                self.next_focusable = self._nodes[index]
                break

    # ------------------------------------------------------------------
    # Window events
    # ------------------------------------------------------------------

    def dispatch_resize(self, width: int, height: int) -> DOMEvent:
        """Update the window size and broadcast a resize event to every node."""
        logger.debug("DOM: resize %dx%d", width, height)
        self.window.update(width, height)

        event = DOMEvent(
            type=EventType.RESIZE,
            target=self.root,
            current_target=self.root,
            window_event=ResizeEvent(width, height),
        )
        for node in self._nodes:
            event.current_target = node
            handler = get_event_handler(node, event.type)
            if handler is not None:
                handler(event)
        return event
