"""Tests for settings loading."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from treeweaver.config import Settings, load_settings
from treeweaver.logging import _ContextFilter, session_context
from treeweaver.models import TextType


def test_layout_config_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TREEWEAVER_LAYOUT_NODE_HEIGHT", "60")
    monkeypatch.setenv("TREEWEAVER_TEXT_TYPE", "POETRY")

    settings = Settings()
    config = settings.layout_config()

    assert config.node_height == 60
    assert config.level_width == 280
    assert settings.text_type is TextType.POETRY


def test_load_settings_from_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    env_file = tmp_path / "custom.env"
    env_file.write_text("TREEWEAVER_LAYOUT_BASE_X=5\n", encoding="utf-8")
    monkeypatch.setenv("TREEWEAVER_ENV_FILE", str(env_file))

    assert load_settings().layout_config().base_x == 5


def test_session_context_is_injected_into_records() -> None:
    record = logging.LogRecord("t", logging.INFO, __file__, 1, "msg", None, None)

    with session_context(session_id="abc", op="indent"):
        _ContextFilter().filter(record)

    assert (record.session, record.op) == ("abc", "indent")  # type: ignore[attr-defined]


def test_viewport_uses_zoom_limits(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TREEWEAVER_ZOOM_MAX", "2.0")

    viewport = Settings().viewport()

    assert viewport.zoom_by(5).scale == 2.0
