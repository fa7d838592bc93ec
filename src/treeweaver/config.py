"""Application configuration.

Configuration is loaded from environment variables. For local development, you can provide a
`.env` file and set `TREEWEAVER_ENV_FILE` to point to it.
"""

from __future__ import annotations

import os
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from treeweaver.layout import LayoutConfig
from treeweaver.models import TextType
from treeweaver.viewport import Viewport


class Settings(BaseSettings):
    """treeweaver settings.

    All fields are environment-configurable. Prefix is `TREEWEAVER_`.
    """

    model_config = SettingsConfigDict(
        env_prefix="TREEWEAVER_",
        env_file=None,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    log_level: str = Field(default="INFO")
    text_type: TextType = Field(default=TextType.GENERAL)

    # Layout
    layout_base_x: float = Field(default=50.0)
    layout_start_y: float = Field(default=50.0)
    layout_level_width: float = Field(default=280.0, gt=0)
    layout_node_height: float = Field(default=100.0, gt=0)

    # Viewport
    node_width: float = Field(default=200.0, gt=0)
    zoom_min: float = Field(default=0.1, gt=0)
    zoom_max: float = Field(default=3.0, gt=0)

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000, ge=1, le=65535)

    def layout_config(self) -> LayoutConfig:
        """Build the layout parameters from settings."""

        return LayoutConfig(
            base_x=self.layout_base_x,
            start_y=self.layout_start_y,
            level_width=self.layout_level_width,
            node_height=self.layout_node_height,
        )

    def viewport(self) -> Viewport:
        """Build an initial viewport with the configured zoom limits."""

        return Viewport(min_scale=self.zoom_min, max_scale=self.zoom_max)


def load_settings() -> Settings:
    """Load settings from env.

    Returns:
        Settings: Parsed settings.
    """

    env_file_override = os.getenv("TREEWEAVER_ENV_FILE")
    if env_file_override:
        env_path = Path(env_file_override)
        return Settings(_env_file=env_path)

    default_env = Path.cwd() / ".env"
    if default_env.exists():
        return Settings(_env_file=default_env)

    return Settings()
