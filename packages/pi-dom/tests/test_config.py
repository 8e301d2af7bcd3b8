"""Tests for RenderConfig."""

from __future__ import annotations

import logging

import pytest

from pi.dom.config import RenderConfig


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("PI_DOM_WIDTH", raising=False)
    monkeypatch.delenv("PI_DOM_HEIGHT", raising=False)


class TestRenderConfig:
    def test_defaults(self) -> None:
        config = RenderConfig.from_env()
        assert (config.default_width, config.default_height) == (80, 24)
        assert config.input_char_limit == 156

    def test_size_from_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PI_DOM_WIDTH", "120")
        monkeypatch.setenv("PI_DOM_HEIGHT", "40")
        config = RenderConfig.from_env()
        assert (config.default_width, config.default_height) == (120, 40)

    @pytest.mark.parametrize("raw", ["wide", "0", "-5"])
    def test_invalid_values_are_ignored(
        self, monkeypatch: pytest.MonkeyPatch, caplog: pytest.LogCaptureFixture, raw: str
    ) -> None:
        monkeypatch.setenv("PI_DOM_WIDTH", raw)
        with caplog.at_level(logging.WARNING, logger="pi.dom.config"):
            config = RenderConfig.from_env()
        assert config.default_width == 80
        assert "PI_DOM_WIDTH" in caplog.text

    def test_empty_value_is_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("PI_DOM_HEIGHT", "")
        assert RenderConfig.from_env().default_height == 24
