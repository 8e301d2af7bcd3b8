"""pi-dom: Virtual DOM with event bubbling, focus management and rectangle layout for terminals."""

import logging

# Application bridge
from pi.dom.app import App

# Configuration
from pi.dom.config import RenderConfig

# DOM engine
from pi.dom.dom import DOM

# Tree construction
from pi.dom.elements import (
    br,
    button,
    create_node,
    div,
    fixed_spacer,
    fragment,
    h1,
    h2,
    hdiv,
    input_,
    li,
    p,
    span,
    spacer,
    text,
    ul,
    zdiv,
)

# Events
from pi.dom.events import DOMEvent, EventType, Key, KeyEvent, ResizeEvent, get_event_handler

# Focus
from pi.dom.focus import find_all_focusable, find_focusable, find_focused, is_focusable, is_focused, set_focused

# Input editing
from pi.dom.input import delete_back_word, update_input_value

# Layout helpers
from pi.dom.layout import (
    max_node_width,
    merge_align_bottom,
    merge_align_bottom_fragment,
    node_height,
    node_width,
    total_nodes_height,
)

# Nodes
from pi.dom.node import Node, NodeKind, Window

# Props
from pi.dom.props import (
    Align,
    ButtonProps,
    DivProps,
    EmptyProps,
    FixedSpacerProps,
    InputProps,
    ListItemProps,
    MapProps,
    PropertyBag,
    PropsTypeError,
    SpacerProps,
    StructProps,
    TextProps,
    clone_props,
    extract_props,
)

# Rectangles
from pi.dom.rect import Rectangle, distribute_spacers, overlay, stack_horizontally, stack_vertically

# Rendering
from pi.dom.render import RenderContext, Renderer, render_to_rect, render_to_string, strip_color

# Styles
from pi.dom.style import Style, StyleSpec, Theme, apply_style

# Utilities
from pi.dom.utils import strip_ansi, truncate_to_width, visible_width, wrap_text_with_ansi

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # App
    "App",
    # Config
    "RenderConfig",
    # DOM
    "DOM",
    # Elements
    "br",
    "button",
    "create_node",
    "div",
    "fixed_spacer",
    "fragment",
    "h1",
    "h2",
    "hdiv",
    "input_",
    "li",
    "p",
    "span",
    "spacer",
    "text",
    "ul",
    "zdiv",
    # Events
    "DOMEvent",
    "EventType",
    "Key",
    "KeyEvent",
    "ResizeEvent",
    "get_event_handler",
    # Focus
    "find_all_focusable",
    "find_focusable",
    "find_focused",
    "is_focusable",
    "is_focused",
    "set_focused",
    # Input editing
    "delete_back_word",
    "update_input_value",
    # Layout
    "max_node_width",
    "merge_align_bottom",
    "merge_align_bottom_fragment",
    "node_height",
    "node_width",
    "total_nodes_height",
    # Nodes
    "Node",
    "NodeKind",
    "Window",
    # Props
    "Align",
    "ButtonProps",
    "DivProps",
    "EmptyProps",
    "FixedSpacerProps",
    "InputProps",
    "ListItemProps",
    "MapProps",
    "PropertyBag",
    "PropsTypeError",
    "SpacerProps",
    "StructProps",
    "TextProps",
    "clone_props",
    "extract_props",
    # Rectangles
    "Rectangle",
    "distribute_spacers",
    "overlay",
    "stack_horizontally",
    "stack_vertically",
    # Rendering
    "RenderContext",
    "Renderer",
    "render_to_rect",
    "render_to_string",
    "strip_color",
    # Styles
    "Style",
    "StyleSpec",
    "Theme",
    "apply_style",
    # Utilities
    "strip_ansi",
    "truncate_to_width",
    "visible_width",
    "wrap_text_with_ansi",
]
