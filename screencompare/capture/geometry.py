"""Geometry normalizer: turns logical boxes into physical-pixel crop rectangles."""

from __future__ import annotations

import logging

from screencompare.models.geometry import ElementBox, EnvironmentProfile, Rectangle

logger = logging.getLogger(__name__)


def scale_rectangle(rect: Rectangle, device_pixel_ratio: float) -> Rectangle:
    """Multiply every field by the device pixel ratio and round to whole pixels."""
    return Rectangle(
        x=round(rect.x * device_pixel_ratio),
        y=round(rect.y * device_pixel_ratio),
        width=round(rect.width * device_pixel_ratio),
        height=round(rect.height * device_pixel_ratio),
    )


def clamp_rectangle(rect: Rectangle, image_width: int, image_height: int) -> Rectangle:
    """Intersect a physical rectangle with the image bounds."""
    left = min(max(int(rect.x), 0), image_width)
    top = min(max(int(rect.y), 0), image_height)
    right = min(max(int(rect.x + rect.width), left), image_width)
    bottom = min(max(int(rect.y + rect.height), top), image_height)
    return Rectangle(x=left, y=top, width=right - left, height=bottom - top)


def uses_page_origin(profile: EnvironmentProfile, screenshot_height: float) -> bool:
    """True when the driver returned a full-page image instead of the viewport.

    Element positions must then be taken from the top of the page rather than
    from the top of the visible window.
    """
    return screenshot_height > profile.viewport_height


def screen_rectangle(profile: EnvironmentProfile, screenshot_height: float) -> Rectangle:
    """Rectangle for a whole-screen capture, in physical pixels."""
    height = max(screenshot_height, profile.viewport_height)
    height += profile.address_bar_shadow_padding + profile.tool_bar_shadow_padding
    rect = Rectangle(x=0, y=0, width=profile.viewport_width, height=height)
    return scale_rectangle(rect, profile.device_pixel_ratio)


def element_rectangle(
    box: ElementBox,
    profile: EnvironmentProfile,
    screenshot_height: float,
    resize_dimensions: int = 0,
) -> tuple[Rectangle, list[str]]:
    """Rectangle for an element capture, in physical pixels.

    ``resize_dimensions`` grows the element on every side. An axis is only
    grown when the result stays inside the browser width (x) or the
    screenshot height (y); skipped axes are reported as warnings.
    """
    warnings: list[str] = []
    x = round(box.x)
    y = round(box.y)
    width = box.width
    height = box.height
    grow = resize_dimensions

    if grow:
        if x < grow:
            warnings.append("The x-coordinate may not be negative. No width resizing of the element has been executed")
        elif (x - grow) + width + 2 * grow > profile.browser_width:
            warnings.append("The new coordinate may not be outside the screen. No width resizing of the element has been executed")
        else:
            x -= grow
            width += 2 * grow

        if y < grow:
            warnings.append("The y-coordinate may not be negative. No height resizing of the element has been executed")
        elif (y - grow) + height + 2 * grow > screenshot_height:
            warnings.append("The new coordinate may not be outside the screen. No height resizing of the element has been executed")
        else:
            y -= grow
            height += 2 * grow

    for warning in warnings:
        logger.warning(warning)

    y += profile.address_bar_shadow_padding
    rect = Rectangle(x=x, y=y, width=width, height=height)
    return scale_rectangle(rect, profile.device_pixel_ratio), warnings
