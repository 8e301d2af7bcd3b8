"""Tree-construction helpers.

Each helper builds one node with typed props.  Props can be passed as a
ready-made dataclass (``props=DivProps(...)``) or as keyword arguments for
that dataclass::

    div(
        h1(text("Settings")),
        hdiv(text("Name"), spacer(), input_(value=name, focused=True)),
        style=Style(border_color="#874BFD"),
    )
"""

from __future__ import annotations

import dataclasses
from typing import Any, TypeVar

from pi.dom.node import Node, NodeKind
from pi.dom.props import (
    ButtonProps,
    DivProps,
    EmptyProps,
    FixedSpacerProps,
    InputProps,
    ListItemProps,
    MapProps,
    PropertyBag,
    SpacerProps,
    StructProps,
    TextProps,
)
from pi.dom.style import Style

P = TypeVar("P")

Child = Node | None


def create_node(kind: NodeKind | str, props: Any = None, *children: Child, key: str = "") -> Node:
    """Build a node of *kind*.

    *props* may be a props dataclass instance, a ``dict`` or any object with
    a ``get(key) -> (value, found)`` method.

    Raises:
        ValueError: *props* is none of the above.
    """
    if props is None:
        bag: PropertyBag = StructProps(EmptyProps())
    elif isinstance(props, dict):
        bag = MapProps(props)
    elif dataclasses.is_dataclass(props):
        bag = StructProps(props)
    elif isinstance(props, PropertyBag):
        bag = props
    else:
        bag = StructProps(props)
    return Node(kind=kind, props=bag, children=list(children), key=key)


def _props(cls: type[P], props: P | None, kwargs: dict[str, Any]) -> P:
    if props is not None:
        if kwargs:
            return dataclasses.replace(props, **kwargs)
        return props
    return cls(**kwargs)


def text(content: str, style: Style | None = None, **kwargs: Any) -> Node:
    props = TextProps(style=style if style is not None else Style(), **kwargs)
    return Node(kind=NodeKind.TEXT, props=StructProps(props), text=content)


def div(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.DIV, _props(DivProps, props, kwargs), *children)


def hdiv(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    """A row: children are laid out left to right."""
    return create_node(NodeKind.HDIV, _props(DivProps, props, kwargs), *children)


def zdiv(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    """Layers: each child is drawn on top of the ones before it."""
    return create_node(NodeKind.ZDIV, _props(DivProps, props, kwargs), *children)


def span(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.SPAN, _props(DivProps, props, kwargs), *children)


def br() -> Node:
    return create_node(NodeKind.BR)


def h1(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.H1, _props(DivProps, props, kwargs), *children)


def h2(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.H2, _props(DivProps, props, kwargs), *children)


def p(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.P, _props(DivProps, props, kwargs), *children)


def input_(*children: Child, props: InputProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.INPUT, _props(InputProps, props, kwargs), *children)


def button(*children: Child, props: ButtonProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.BUTTON, _props(ButtonProps, props, kwargs), *children)


def ul(*children: Child, props: DivProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.UL, _props(DivProps, props, kwargs), *children)


def li(*children: Child, props: ListItemProps | None = None, **kwargs: Any) -> Node:
    return create_node(NodeKind.LI, _props(ListItemProps, props, kwargs), *children)


def fragment(*children: Child) -> Node:
    return create_node(NodeKind.FRAGMENT, None, *children)


def spacer(min_size: int = 0, max_size: int = 0) -> Node:
    """Flexible horizontal space; shares what a row has left over."""
    return create_node(NodeKind.SPACER, SpacerProps(min_size=min_size, max_size=max_size))


def fixed_spacer(space: int) -> Node:
    """*space* columns in a row, *space* blank lines in a column."""
    return create_node(NodeKind.FIXED_SPACER, FixedSpacerProps(space=space))
