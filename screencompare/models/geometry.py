"""Geometry and session-environment data structures."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

PLATFORM_ANDROID = "android"
PLATFORM_IOS = "ios"


class Rectangle(BaseModel):
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = Field(default=0, ge=0)
    height: float = Field(default=0, ge=0)

    def as_box(self) -> tuple[int, int, int, int]:
        """Return the (left, upper, right, lower) box Pillow expects."""
        x, y = int(self.x), int(self.y)
        return (x, y, x + int(self.width), y + int(self.height))


class ElementBox(BaseModel):
    """Raw element position and size as reported by the page."""
    model_config = ConfigDict(frozen=True)

    x: float = 0
    y: float = 0
    width: float = 0
    height: float = 0


class BrowserData(BaseModel):
    """Page-context measurements returned by the dimension probe."""
    model_config = ConfigDict(frozen=True)

    browser_height: int = 0
    browser_width: int = 0
    device_pixel_ratio: float = 1
    full_page_height: int = 0
    full_page_width: int = 0
    viewport_height: int = 0
    viewport_width: int = 0


class EnvironmentProfile(BaseModel):
    """Everything the pipeline knows about the session for a single call."""
    model_config = ConfigDict(frozen=True)

    browser_name: str = ""
    platform_name: str = ""
    device_name: str = ""
    name: str = ""
    log_name: str = ""
    native_web_screenshot: bool = False

    device_pixel_ratio: float = Field(default=1, ge=1)
    viewport_width: int = Field(default=0, ge=0)
    viewport_height: int = Field(default=0, ge=0)
    full_page_width: int = Field(default=0, ge=0)
    full_page_height: int = Field(default=0, ge=0)
    browser_width: int = Field(default=0, ge=0)
    browser_height: int = Field(default=0, ge=0)

    address_bar_shadow_padding: int = 0
    tool_bar_shadow_padding: int = 0

    @property
    def is_mobile(self) -> bool:
        return self.platform_name != ""

    @property
    def is_android(self) -> bool:
        return self.platform_name == PLATFORM_ANDROID

    @property
    def is_ios(self) -> bool:
        return self.platform_name == PLATFORM_IOS

    @property
    def test_in_browser(self) -> bool:
        return self.browser_name != ""

    @property
    def test_in_mobile_browser(self) -> bool:
        return self.is_mobile and self.test_in_browser
