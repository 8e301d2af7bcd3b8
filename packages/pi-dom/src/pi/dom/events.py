"""DOM events: key and resize payloads and the event record passed to handlers.

Key events arrive already decoded from the host (key kind, the runes the
key produced, modifier flags); nothing here parses terminal byte streams.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

from pi.dom.props import get_callable

if TYPE_CHECKING:
    from pi.dom.node import Node


class EventType(str, Enum):
    KEYDOWN = "keydown"
    RESIZE = "resize"


# ---------------------------------------------------------------------------
# Key helper object
# ---------------------------------------------------------------------------


class Key:
    """Named key kinds and modifier combinators."""

    # Printable input: the text is carried in ``KeyEvent.runes``
    runes = "runes"
    space = "space"

    # Special keys
    enter = "enter"
    tab = "tab"
    shift_tab = "shift+tab"
    escape = "esc"
    backspace = "backspace"
    delete = "delete"
    insert = "insert"
    home = "home"
    end = "end"
    page_up = "pgup"
    page_down = "pgdown"
    up = "up"
    down = "down"
    left = "left"
    right = "right"

    @staticmethod
    def ctrl(key: str) -> str:
        return f"ctrl+{key}"

    @staticmethod
    def alt(key: str) -> str:
        return f"alt+{key}"


@dataclass(frozen=True)
class KeyEvent:
    """A decoded key press.

    ``type`` is a ``Key`` name (``"backspace"``, ``"ctrl+w"`` ...) or
    ``Key.runes`` for plain text input.  ``runes`` holds the characters the
    key produced, if any.
    """

    type: str
    runes: str = ""
    alt: bool = False
    paste: bool = False

    @classmethod
    def from_runes(cls, text: str, alt: bool = False, paste: bool = False) -> KeyEvent:
        if text == " ":
            return cls(Key.space, " ", alt=alt, paste=paste)
        return cls(Key.runes, text, alt=alt, paste=paste)

    def __str__(self) -> str:
        if self.type == Key.runes:
            name = f"[{self.runes}]" if self.paste else self.runes
        elif self.type == Key.space:
            name = " "
        else:
            name = self.type
        if self.alt:
            return f"alt+{name}"
        return name


@dataclass(frozen=True)
class ResizeEvent:
    width: int
    height: int


# ---------------------------------------------------------------------------
# DOMEvent
# ---------------------------------------------------------------------------


@dataclass(eq=False)
class DOMEvent:
    """A DOM-like event.

    ``current_target`` moves while the event bubbles.  Handlers may call
    :meth:`prevent_default` to skip built-in key handling and
    :meth:`stop_propagation` to stop bubbling.
    """

    type: EventType | str
    target: Node | None = None
    current_target: Node | None = None
    key_event: KeyEvent | None = None
    window_event: ResizeEvent | None = None
    default_prevented: bool = False
    propagation_stopped: bool = False
    bubble_phase: bool = False

    @property
    def key(self) -> str:
        """The key as a string, e.g. ``"enter"``, ``"ctrl+c"`` or ``"a"``."""
        if self.key_event is None:
            return ""
        return str(self.key_event)

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


EventHandler = Callable[[DOMEvent], Any]

_ALIASES: dict[str, str] = {
    EventType.KEYDOWN.value: "on_key_down",
    EventType.RESIZE.value: "on_window_resize",
}


def get_event_handler(node: Node, event_type: EventType | str) -> EventHandler | None:
    """Find the handler *node* registered for *event_type*.

    Looks up ``on_<type>`` first, then the kind-specific alias
    (``on_key_down`` / ``on_window_resize``).  A property that is not
    callable counts as no handler.
    """
    name = event_type.value if isinstance(event_type, EventType) else str(event_type)
    handler = get_callable(node.props, f"on_{name}")
    if handler is not None:
        return handler
    alias = _ALIASES.get(name)
    if alias is not None:
        return get_callable(node.props, alias)
    return None
