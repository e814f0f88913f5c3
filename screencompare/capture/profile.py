"""Environment profile resolver: gathers the session facts every stage needs."""

from __future__ import annotations

import logging

from screencompare.capture.page_scripts import GET_SCREEN_DIMENSIONS
from screencompare.errors import SessionUnavailable
from screencompare.models.config import CompareConfig
from screencompare.models.geometry import (
    PLATFORM_ANDROID,
    PLATFORM_IOS,
    BrowserData,
    EnvironmentProfile,
)
from screencompare.session.base import Session

logger = logging.getLogger(__name__)


def _lower(value) -> str:
    return str(value).lower() if value else ""


def parse_browser_data(raw: dict) -> BrowserData:
    """Turn the raw dimension probe result into BrowserData."""
    viewport_height = int(raw.get("viewPortHeight") or 0)
    viewport_width = int(raw.get("viewPortWidth") or 0)
    height = int(raw.get("height") or 0)
    width = int(raw.get("width") or 0)
    pixel_ratio = raw.get("pixelRatio") or 1

    return BrowserData(
        browser_height=height if height != 0 else viewport_height,
        browser_width=width if width != 0 else viewport_width,
        device_pixel_ratio=max(float(pixel_ratio), 1.0),
        full_page_height=int(raw.get("fullPageHeight") or 0),
        full_page_width=int(raw.get("fullPageWidth") or 0),
        viewport_height=viewport_height,
        viewport_width=viewport_width,
    )


def build_profile(
    instance_data: dict,
    browser_data: BrowserData,
    config: CompareConfig,
) -> EnvironmentProfile:
    """Combine session metadata, page measurements and config into a profile."""
    browser_name = _lower(instance_data.get("browserName"))
    platform_name = _lower(instance_data.get("platformName"))

    # The session can switch native screenshots on, never off.
    native_web_screenshot = config.native_web_screenshot or bool(
        instance_data.get("nativeWebScreenshot")
    )

    is_mobile_browser = platform_name != "" and browser_name != ""
    is_android = platform_name == PLATFORM_ANDROID
    is_ios = platform_name == PLATFORM_IOS

    address_bar = 0
    if is_mobile_browser and ((native_web_screenshot and is_android) or is_ios):
        address_bar = config.address_bar_shadow_padding
    tool_bar = config.tool_bar_shadow_padding if is_mobile_browser and is_ios else 0

    return EnvironmentProfile(
        browser_name=browser_name,
        platform_name=platform_name,
        device_name=_lower(instance_data.get("deviceName")),
        name=instance_data.get("name") or "",
        log_name=instance_data.get("logName") or "",
        native_web_screenshot=native_web_screenshot,
        device_pixel_ratio=browser_data.device_pixel_ratio,
        viewport_width=browser_data.viewport_width,
        viewport_height=browser_data.viewport_height,
        full_page_width=browser_data.full_page_width,
        full_page_height=browser_data.full_page_height,
        browser_width=browser_data.browser_width,
        browser_height=browser_data.browser_height,
        address_bar_shadow_padding=address_bar,
        tool_bar_shadow_padding=tool_bar,
    )


async def resolve_profile(session: Session, config: CompareConfig) -> EnvironmentProfile:
    """Resolve a fresh EnvironmentProfile from the session."""
    try:
        instance_data = await session.get_instance_data()
        raw = await session.execute_script(GET_SCREEN_DIMENSIONS)
    except SessionUnavailable:
        raise
    except Exception as e:
        raise SessionUnavailable(f"Could not resolve session data: {e}") from e

    if not isinstance(raw, dict):
        raise SessionUnavailable(f"Unexpected screen dimensions result: {raw!r}")

    profile = build_profile(instance_data or {}, parse_browser_data(raw), config)
    logger.debug("Resolved environment profile: %s", profile.model_dump())
    return profile
