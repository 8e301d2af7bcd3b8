import pytest

from pi.dom.node import Window
from pi.dom.render import RenderContext, Renderer
from pi.dom.style import Theme


@pytest.fixture
def plain_context() -> RenderContext:
    """A render context that adds no colours or decoration."""
    return RenderContext(window=Window(80, 24), theme=Theme.plain())


@pytest.fixture
def renderer(plain_context: RenderContext) -> Renderer:
    return Renderer(plain_context)


@pytest.fixture
def styled_renderer() -> Renderer:
    return Renderer(RenderContext(window=Window(80, 24), theme=Theme.default()))
