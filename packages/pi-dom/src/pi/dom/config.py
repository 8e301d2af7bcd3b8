"""Renderer configuration."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class RenderConfig:
    """Sizes and defaults used when a node does not say otherwise."""

    default_width: int = 80
    default_height: int = 24

    input_char_limit: int = 156
    input_default_width: int = 50
    input_min_width: int = 20
    input_margin: int = 10
    placeholder: str = "Enter text..."
    password_echo: str = "•"

    list_bullet: str = "• "
    list_selected_prefix: str = "> "

    @classmethod
    def from_env(cls) -> RenderConfig:
        """Build a config, taking the default size from ``PI_DOM_WIDTH`` / ``PI_DOM_HEIGHT``."""
        config = cls()
        width = _env_int("PI_DOM_WIDTH")
        if width is not None:
            config.default_width = width
        height = _env_int("PI_DOM_HEIGHT")
        if height is not None:
            config.default_height = height
        return config


def _env_int(name: str) -> int | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        logger.warning("ignoring %s=%r: not an integer", name, raw)
        return None
    if value <= 0:
        logger.warning("ignoring %s=%r: must be positive", name, raw)
        return None
    return value
