"""Tests for property bags, typed props and the element helpers."""

from __future__ import annotations

import pytest

from pi.dom.elements import create_node, div, fixed_spacer, hdiv, input_, spacer, text
from pi.dom.node import Node, NodeKind
from pi.dom.props import (
    Align,
    DivProps,
    EmptyProps,
    InputProps,
    MapProps,
    PropsTypeError,
    SpacerProps,
    StructProps,
    TextProps,
    clone_props,
    extract_props,
    get_callable,
    get_typed,
)
from pi.dom.style import Style


# ---------------------------------------------------------------------------
# Property bags
# ---------------------------------------------------------------------------


class TestStructProps:
    def test_get_known_field(self) -> None:
        props = StructProps(InputProps(value="abc"))
        assert props.get("value") == ("abc", True)

    def test_get_unknown_field(self) -> None:
        assert StructProps(InputProps()).get("nope") == (None, False)

    def test_rejects_non_dataclass(self) -> None:
        with pytest.raises(ValueError):
            StructProps({"value": 1})

    def test_rejects_dataclass_type(self) -> None:
        with pytest.raises(ValueError):
            StructProps(InputProps)

    def test_range_stops_on_false(self) -> None:
        seen: list[str] = []

        def visit(key: str, value: object) -> bool:
            seen.append(key)
            return key != "min_size"

        StructProps(SpacerProps()).range(visit)
        assert seen == ["min_size"]

    def test_clone_is_independent(self) -> None:
        props = StructProps(InputProps(value="a"))
        copy = props.clone()
        copy.value.value = "b"
        assert props.value.value == "a"

    def test_clone_copies_nested_style(self) -> None:
        props = StructProps(TextProps(style=Style(color="#FF0000")))
        copy = props.clone()
        copy.value.style.bold = True
        copy.value.style.color = "#00FF00"
        assert props.value.style == Style(color="#FF0000")

    def test_clone_shares_callbacks(self) -> None:
        calls: list[str] = []

        class Owner:
            def changed(self, value: str) -> None:
                calls.append(value)

        owner = Owner()
        props = StructProps(InputProps(on_change=owner.changed))
        props.clone().value.on_change("x")
        assert calls == ["x"]
        assert props.clone().value.on_change == owner.changed


class TestMapProps:
    def test_get(self) -> None:
        props = MapProps({"a": 1}, b=2)
        assert props.get("a") == (1, True)
        assert props.get("b") == (2, True)
        assert props.get("c") == (None, False)

    def test_range(self) -> None:
        items: list[tuple[str, object]] = []
        MapProps(a=1, b=2).range(lambda k, v: items.append((k, v)))
        assert items == [("a", 1), ("b", 2)]

    def test_clone(self) -> None:
        props = MapProps(a=1)
        assert clone_props(props).get("a") == (1, True)
        assert clone_props(None) is None

    def test_clone_copies_nested_values(self) -> None:
        style = Style(bold=True)
        props = MapProps(style=style, items=["a"])
        copy = props.clone()
        copy.get("style")[0].bold = False
        copy.get("items")[0].append("b")
        assert style.bold
        assert props.get("items")[0] == ["a"]


class TestExtractProps:
    def test_returns_typed_value(self) -> None:
        value = InputProps(value="x")
        assert extract_props(StructProps(value), InputProps) is value

    def test_wrong_dataclass_is_fatal(self) -> None:
        with pytest.raises(PropsTypeError, match="InputProps"):
            extract_props(StructProps(DivProps()), InputProps)

    def test_map_props_is_fatal(self) -> None:
        with pytest.raises(PropsTypeError):
            extract_props(MapProps(value="x"), InputProps)

    def test_is_a_type_error(self) -> None:
        assert issubclass(PropsTypeError, TypeError)


class TestTypedReads:
    def test_wrong_type_is_absent(self) -> None:
        props = MapProps(focused="yes", width=3)
        assert get_typed(props, "focused", bool) is None
        assert get_typed(props, "width", int) == 3

    def test_missing_props(self) -> None:
        assert get_typed(None, "focused", bool) is None
        assert get_callable(None, "on_change") is None

    def test_non_callable_is_absent(self) -> None:
        props = MapProps(on_change=42, on_blur=print)
        assert get_callable(props, "on_change") is None
        assert get_callable(props, "on_blur") is print


# ---------------------------------------------------------------------------
# Elements
# ---------------------------------------------------------------------------


class TestElements:
    def test_text(self) -> None:
        node = text("hi", Style(bold=True))
        assert node.kind == NodeKind.TEXT
        assert node.text == "hi"
        assert extract_props(node.props, TextProps).style.bold

    def test_keyword_props(self) -> None:
        node = hdiv(text("a"), align=Align.CENTER)
        props = extract_props(node.props, DivProps)
        assert props.align == Align.CENTER
        assert len(node.children) == 1

    def test_props_object_with_overrides(self) -> None:
        base = InputProps(value="a", width=10)
        node = input_(props=base, value="b")
        props = extract_props(node.props, InputProps)
        assert (props.value, props.width) == ("b", 10)
        assert base.value == "a"

    def test_spacers(self) -> None:
        assert extract_props(spacer(max_size=4).props, SpacerProps).max_size == 4
        assert fixed_spacer(2).kind == NodeKind.FIXED_SPACER

    def test_create_node_accepts_dicts_and_bags(self) -> None:
        assert isinstance(create_node("x", {"a": 1}).props, MapProps)
        bag = MapProps(a=1)
        assert create_node("x", bag).props is bag
        assert isinstance(create_node("x").props.value, EmptyProps)

    def test_create_node_rejects_other_values(self) -> None:
        with pytest.raises(ValueError):
            create_node(NodeKind.DIV, 42)

    def test_clone_is_deep(self) -> None:
        child = text("a")
        root = div(child, None)
        copy = root.clone()
        assert copy is not root
        assert copy.children[0] is not child
        assert copy.children[0].text == "a"
        assert copy.children[1] is None
        assert copy.props is not root.props

    def test_walk_is_preorder(self) -> None:
        a, b = text("a"), text("b")
        inner = div(a)
        root = div(inner, b)
        assert list(root.walk()) == [root, inner, a, b]

    def test_get_prop(self) -> None:
        node = input_(value="v")
        assert node.get_prop("value") == ("v", True)
        assert Node(kind=NodeKind.BR).get_prop("value") == (None, False)
