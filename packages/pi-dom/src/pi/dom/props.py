"""Property bags and the typed props carried by each node kind.

Every node holds a ``PropertyBag``: a narrow ``get(key) -> (value, found)``
interface.  Generic lookups (style, focus flags, event handlers) go through
it; kind-specific code pulls the concrete dataclass out with
:func:`extract_props` as early as possible.
"""

from __future__ import annotations

import copy
import dataclasses
import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Generic, Protocol, TypeVar, runtime_checkable

from pi.dom.style import Style

logger = logging.getLogger(__name__)

T = TypeVar("T")


class PropsTypeError(TypeError):
    """Props of one type were read as another -- a construction-time bug."""


@runtime_checkable
class PropertyBag(Protocol):
    def get(self, key: str) -> tuple[Any, bool]:
        ...


class StructProps(Generic[T]):
    """A property bag backed by a props dataclass instance."""

    __slots__ = ("value",)

    def __init__(self, value: T) -> None:
        if not dataclasses.is_dataclass(value) or isinstance(value, type):
            raise ValueError(f"StructProps expects a dataclass instance, got {type(value).__name__}")
        self.value = value

    def get(self, key: str) -> tuple[Any, bool]:
        if key in _field_names(type(self.value)):
            return getattr(self.value, key), True
        return None, False

    def range(self, fn: Callable[[str, Any], bool]) -> None:
        """Call ``fn(key, value)`` per field until it returns ``False``."""
        for name in _field_names(type(self.value)):
            if fn(name, getattr(self.value, name)) is False:
                return

    def clone(self) -> StructProps[T]:
        """Deep copy; callbacks are shared, nested values such as ``style`` are not."""
        values = {
            name: _copy_value(getattr(self.value, name))
            for name in _field_names(type(self.value))
        }
        return StructProps(dataclasses.replace(self.value, **values))

    def __repr__(self) -> str:
        return f"StructProps({self.value!r})"


class MapProps:
    """A property bag backed by a plain dict."""

    __slots__ = ("_values",)

    def __init__(self, values: dict[str, Any] | None = None, **kwargs: Any) -> None:
        self._values: dict[str, Any] = dict(values or {}, **kwargs)

    def get(self, key: str) -> tuple[Any, bool]:
        if key in self._values:
            return self._values[key], True
        return None, False

    def range(self, fn: Callable[[str, Any], bool]) -> None:
        for key, value in list(self._values.items()):
            if fn(key, value) is False:
                return

    def clone(self) -> MapProps:
        return MapProps({key: _copy_value(value) for key, value in self._values.items()})

    def __repr__(self) -> str:
        return f"MapProps({self._values!r})"


def _copy_value(value: Any) -> Any:
    # Callables (bound methods included) keep pointing at the same target.
    if callable(value):
        return value
    return copy.deepcopy(value)


_FIELD_CACHE: dict[type, tuple[str, ...]] = {}


def _field_names(cls: type) -> tuple[str, ...]:
    names = _FIELD_CACHE.get(cls)
    if names is None:
        names = tuple(f.name for f in dataclasses.fields(cls))
        _FIELD_CACHE[cls] = names
    return names


def extract_props(props: PropertyBag | None, cls: type[T]) -> T:
    """Return the typed props dataclass stored in *props*.

    Raises:
        PropsTypeError: *props* does not hold a ``cls`` instance.
    """
    if isinstance(props, StructProps) and isinstance(props.value, cls):
        return props.value
    held = type(props.value).__name__ if isinstance(props, StructProps) else type(props).__name__
    raise PropsTypeError(f"extract_props[{cls.__name__}]: props hold {held}")


def clone_props(props: PropertyBag | None) -> PropertyBag | None:
    if props is None:
        return None
    clone = getattr(props, "clone", None)
    if callable(clone):
        return clone()
    return copy.copy(props)


def get_typed(props: PropertyBag | None, key: str, expected: type | tuple[type, ...]) -> Any:
    """Read *key* from *props*, treating a value of the wrong type as absent."""
    if props is None:
        return None
    value, found = props.get(key)
    if not found or value is None:
        return None
    if not isinstance(value, expected):
        logger.debug("prop %r has type %s, treating as absent", key, type(value).__name__)
        return None
    return value


def get_callable(props: PropertyBag | None, key: str) -> Callable[..., Any] | None:
    """Read a callback from *props*; non-callables are treated as absent."""
    if props is None:
        return None
    value, found = props.get(key)
    if not found or value is None:
        return None
    if not callable(value):
        logger.debug("prop %r is not callable (%s), treating as absent", key, type(value).__name__)
        return None
    return value


# ---------------------------------------------------------------------------
# Typed props per node kind
# ---------------------------------------------------------------------------


class Align(str, Enum):
    """Vertical alignment of children inside a horizontal container."""

    TOP = "top"
    BOTTOM = "bottom"
    CENTER = "center"


Handler = Callable[[Any], Any]


@dataclass
class EmptyProps:
    pass


@dataclass
class TextProps:
    style: Style = field(default_factory=Style)
    focused: bool = False
    focusable: bool = False

    on_key_down: Handler | None = None


@dataclass
class DivProps:
    style: Style = field(default_factory=Style)

    on_key_down: Handler | None = None
    on_window_resize: Handler | None = None

    focused: bool = False
    focusable: bool = False

    width: int = 0
    align: Align = Align.TOP


@dataclass
class InputProps:
    placeholder: str = ""
    value: str = ""

    cursor_position: int = 0
    on_cursor_move: Callable[[int, int], Any] | None = None

    on_key_down: Handler | None = None
    on_change: Callable[[str], Any] | None = None
    on_focus: Callable[[], Any] | None = None
    on_blur: Callable[[], Any] | None = None

    focused: bool = False
    focusable: bool | None = None  # None: default (inputs are focusable)

    width: int = 0
    input_type: str = "text"
    style: Style = field(default_factory=Style)


@dataclass
class ButtonProps:
    text: str = ""
    on_click: Callable[[], Any] | None = None
    style: Style = field(default_factory=Style)

    focused: bool = False
    focusable: bool | None = None
    on_key_down: Handler | None = None
    on_focus: Callable[[], Any] | None = None
    on_blur: Callable[[], Any] | None = None


@dataclass
class ListItemProps:
    style: Style = field(default_factory=Style)
    index: int = 0
    selected: bool = False
    item_prefix: str | None = None

    focused: bool = False
    focusable: bool | None = None
    on_focus: Callable[[], Any] | None = None
    on_blur: Callable[[], Any] | None = None
    on_key_down: Handler | None = None


@dataclass
class SpacerProps:
    min_size: int = 0
    max_size: int = 0


@dataclass
class FixedSpacerProps:
    space: int = 0
