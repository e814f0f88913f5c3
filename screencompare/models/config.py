"""Configuration models for screen comparison."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field

from screencompare.models.geometry import Rectangle

DEFAULT_FORMAT_IMAGE_NAME = "{tag}-{browserName}-{width}x{height}-dpr-{dpr}"


class ViewportConfig(BaseModel):
    width: int = 1366
    height: int = 768


class SessionCapabilities(BaseModel):
    """Capabilities a session reports about itself."""
    browser_name: str = ""
    platform_name: str = ""
    device_name: str = ""
    name: str = ""
    log_name: str = ""
    native_web_screenshot: bool = False


class CompareConfig(BaseModel):
    # Folders
    baseline_folder: str = ""
    screenshot_path: str = ""

    # Baseline handling
    auto_save_baseline: bool = False
    debug: bool = False

    # Page preparation
    disable_css_animation: bool = False
    hide_scrollbars: bool = True
    native_web_screenshot: bool = False
    address_bar_shadow_padding: int = 6
    tool_bar_shadow_padding: int = 6
    resize_dimensions: int = 0

    # File naming
    format_image_name: str = DEFAULT_FORMAT_IMAGE_NAME
    format_options: dict[str, str] = Field(default_factory=dict)

    # Comparison
    ignore_antialiasing: bool = False
    ignore_colors: bool = False
    ignore_alpha: bool = False
    ignore_less: bool = False
    ignore_nothing: bool = False
    ignore_transparent_pixel: bool = False
    save_above_tolerance: float = 0.0
    block_out: list[Rectangle] = Field(default_factory=list)

    # Used by the command line only
    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    capabilities: Optional[SessionCapabilities] = None

    @property
    def actual_folder(self) -> Path:
        return Path(self.screenshot_path) / "actual"

    @property
    def diff_folder(self) -> Path:
        return Path(self.screenshot_path) / "diff"

    @classmethod
    def load(cls, path: str | Path) -> "CompareConfig":
        """Load config from a JSON file."""
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with open(path) as f:
            data = json.load(f)
        return cls(**data)

    def save(self, path: str | Path) -> None:
        """Save config to a JSON file."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            json.dump(self.model_dump(), f, indent=2)
