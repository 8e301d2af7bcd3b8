"""Bridge between a host event loop and the DOM engine.

The host owns the terminal: it decodes input into :class:`KeyEvent` /
:class:`ResizeEvent` values, passes them to :meth:`App.update`, and
prints whatever :meth:`App.render` returns.
"""

from __future__ import annotations

import logging
from typing import Callable, Generic, TypeVar

from pi.dom.config import RenderConfig
from pi.dom.dom import DOM
from pi.dom.events import DOMEvent, KeyEvent, ResizeEvent
from pi.dom.node import Node, Window
from pi.dom.rect import Rectangle
from pi.dom.render import RenderContext, Renderer
from pi.dom.style import Theme

logger = logging.getLogger(__name__)

S = TypeVar("S")

RootFn = Callable[[S, Window], Node]


class App(Generic[S]):
    """Application state plus the function that turns it into a tree.

    The tree is rebuilt from state on every :meth:`render`; events are
    dispatched against the tree of the last frame.
    """

    def __init__(
        self,
        state: S,
        root: RootFn[S],
        config: RenderConfig | None = None,
        theme: Theme | None = None,
    ) -> None:
        self.state = state
        self.root = root
        self.config = config if config is not None else RenderConfig.from_env()
        self.window = Window()
        self.context = RenderContext(
            window=self.window,
            config=self.config,
            theme=theme if theme is not None else Theme.default(),
        )
        self.renderer = Renderer(self.context)
        self.dom: DOM | None = None

    def build(self) -> DOM:
        self.dom = DOM(self.root(self.state, self.window), self.window)
        return self.dom

    def update(self, msg: object) -> DOMEvent | None:
        """Route one host message into the current tree.

        Messages other than key and resize events are ignored.
        """
        logger.debug("App: update %s", type(msg).__name__)
        dom = self.dom if self.dom is not None else self.build()

        if isinstance(msg, KeyEvent):
            return dom.dispatch_key_down(msg)
        if isinstance(msg, ResizeEvent):
            return dom.dispatch_resize(msg.width, msg.height)
        return None

    def render(self) -> str:
        """Rebuild the tree from state and render one window-sized frame."""
        dom = self.build()
        width, height = self.context.size()
        content = self.renderer.render_to_rect(dom.root, width, height)
        return Rectangle(width=width, height=height, lines=content.lines).to_string()
