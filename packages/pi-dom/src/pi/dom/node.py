"""Virtual node tree: node kinds, the ``Node`` record and the shared window."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from pi.dom.props import PropertyBag


class NodeKind(str, Enum):
    """Element kinds understood by the DOM engine and the renderer."""

    TEXT = "text"
    DIV = "div"
    HDIV = "hdiv"  # children placed left to right
    ZDIV = "zdiv"  # children stacked in z-order
    SPAN = "span"
    BR = "br"
    H1 = "h1"
    H2 = "h2"
    P = "p"
    INPUT = "input"
    BUTTON = "button"
    UL = "ul"
    LI = "li"
    FRAGMENT = "fragment"
    SPACER = "spacer"
    FIXED_SPACER = "fixed-spacer"


def kind_name(kind: NodeKind | str) -> str:
    """Return the tag name for *kind*, also for kinds outside ``NodeKind``."""
    if isinstance(kind, NodeKind):
        return kind.value
    return str(kind)


class Window:
    """Current terminal dimensions, shared by every node of a tree."""

    def __init__(self, width: int = 0, height: int = 0) -> None:
        self.width = width
        self.height = height

    def update(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    def get(self) -> tuple[int, int]:
        return self.width, self.height

    def __repr__(self) -> str:
        return f"Window({self.width}x{self.height})"


@dataclass(eq=False)
class Node:
    """One element of the UI tree.

    Nodes compare by identity.  ``children`` may hold ``None`` entries so
    tree functions can inline optional sections; every traversal skips them.
    """

    kind: NodeKind | str
    props: PropertyBag | None = None
    children: list[Node | None] = field(default_factory=list)
    text: str = ""
    key: str = ""
    window: Window | None = None

    def get_prop(self, key: str) -> tuple[Any, bool]:
        if self.props is None:
            return None, False
        return self.props.get(key)

    def iter_children(self) -> Iterator[Node]:
        for child in self.children:
            if child is not None:
                yield child

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants in pre-order."""
        yield self
        for child in self.iter_children():
            yield from child.walk()

    def clone(self) -> Node:
        """Deep-copy the subtree; props are cloned, the window is shared."""
        from pi.dom.props import clone_props

        return Node(
            kind=self.kind,
            props=clone_props(self.props),
            children=[c.clone() if c is not None else None for c in self.children],
            text=self.text,
            key=self.key,
            window=self.window,
        )

    def __repr__(self) -> str:
        name = kind_name(self.kind)
        if self.text:
            return f"Node({name}, {self.text!r})"
        return f"Node({name}, children={len(self.children)})"
