"""Tests for focus flags, focus searches and event handler lookup."""

from __future__ import annotations

from pi.dom.elements import button, div, hdiv, input_, li, text
from pi.dom.events import DOMEvent, EventType, Key, KeyEvent, get_event_handler
from pi.dom.focus import (
    find_all_focusable,
    find_focusable,
    find_focused,
    is_focusable,
    is_focused,
    set_focused,
)
from pi.dom.node import Node, NodeKind
from pi.dom.props import MapProps


class TestFocusFlags:
    def test_inputs_focusable_by_default(self) -> None:
        assert is_focusable(input_())
        assert not is_focusable(text("a"))
        assert not is_focusable(div())

    def test_explicit_focusable(self) -> None:
        assert is_focusable(button(text("OK"), focusable=True))
        assert is_focusable(li(text("x"), focusable=True))
        assert not is_focusable(input_(focusable=False))

    def test_mistyped_flags_fall_back(self) -> None:
        node = Node(kind=NodeKind.INPUT, props=MapProps(focusable="no", focused=1))
        assert is_focusable(node)
        assert not is_focused(node)

    def test_is_focused(self) -> None:
        assert is_focused(input_(focused=True))
        assert not is_focused(input_())

    def test_set_focused_calls_callbacks(self) -> None:
        calls: list[str] = []
        node = input_(on_focus=lambda: calls.append("focus"), on_blur=lambda: calls.append("blur"))
        set_focused(node, True)
        set_focused(node, False)
        assert calls == ["focus", "blur"]

    def test_set_focused_without_callbacks(self) -> None:
        set_focused(text("a"), True)


class TestFocusSearch:
    def test_find_focused_is_preorder(self) -> None:
        first = input_(focused=True)
        second = input_(focused=True)
        root = div(hdiv(div(first)), second)
        assert find_focused(root) is first

    def test_find_focused_none(self) -> None:
        assert find_focused(div(input_())) is None

    def test_find_focusable(self) -> None:
        target = input_()
        assert find_focusable(div(text("a"), div(target), input_())) is target

    def test_find_all_focusable_in_tab_order(self) -> None:
        a = input_()
        b = button(text("b"), focusable=True)
        c = input_()
        root = div(hdiv(a, text("x")), b, None, div(c))
        assert find_all_focusable(root) == [a, b, c]


class TestEvents:
    def test_key_string(self) -> None:
        assert str(KeyEvent(Key.ctrl("c"))) == "ctrl+c"
        assert str(KeyEvent.from_runes("a")) == "a"
        assert str(KeyEvent.from_runes("a", alt=True)) == "alt+a"
        assert str(KeyEvent.from_runes(" ")) == " "

    def test_space_has_its_own_type(self) -> None:
        assert KeyEvent.from_runes(" ").type == Key.space

    def test_event_flags(self) -> None:
        event = DOMEvent(type=EventType.KEYDOWN)
        event.prevent_default()
        event.stop_propagation()
        assert event.default_prevented
        assert event.propagation_stopped
        assert event.key == ""

    def test_handler_lookup_prefers_generic_name(self) -> None:
        generic = lambda e: None  # noqa: E731
        alias = lambda e: None  # noqa: E731
        node = Node(kind=NodeKind.DIV, props=MapProps(on_keydown=generic, on_key_down=alias))
        assert get_event_handler(node, EventType.KEYDOWN) is generic

    def test_handler_lookup_aliases(self) -> None:
        handler = lambda e: None  # noqa: E731
        assert get_event_handler(div(on_key_down=handler), EventType.KEYDOWN) is handler
        assert get_event_handler(div(on_window_resize=handler), "resize") is handler

    def test_no_handler(self) -> None:
        assert get_event_handler(text("a"), EventType.RESIZE) is None
        assert get_event_handler(Node(kind=NodeKind.BR), EventType.KEYDOWN) is None
