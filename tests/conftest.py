"""Pytest configuration and shared fixtures."""

import pytest

from helpers import make_png, to_b64
from screencompare.models.config import CompareConfig
from screencompare.models.geometry import EnvironmentProfile


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def compare_config(tmp_path) -> CompareConfig:
    """Create a config with folders inside tmp_path."""
    return CompareConfig(
        baseline_folder=str(tmp_path / "baseline"),
        screenshot_path=str(tmp_path / "screenshots"),
    )


# ============================================================================
# Environment Fixtures
# ============================================================================


@pytest.fixture
def desktop_profile() -> EnvironmentProfile:
    """Create a desktop Chrome profile at DPR 1."""
    return EnvironmentProfile(
        browser_name="chrome",
        device_pixel_ratio=1,
        viewport_width=1366,
        viewport_height=768,
        browser_width=1366,
        browser_height=768,
        full_page_width=1366,
        full_page_height=2000,
    )


@pytest.fixture
def white_screen() -> str:
    """A 100x80 white screenshot, base64 encoded."""
    return to_b64(make_png(100, 80))
