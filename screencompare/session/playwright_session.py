"""Playwright adapter for the session capability set."""

from __future__ import annotations

import base64
import logging
from typing import Any, Optional

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Page

from screencompare.errors import SessionUnavailable
from screencompare.models.config import SessionCapabilities

logger = logging.getLogger(__name__)


class PlaywrightSession:
    """Runs the pipeline's remote calls against a Playwright page.

    Args:
        capabilities: What the session reports about itself. An empty
            ``browser_name`` is filled in from the page's browser type.
        full_page: Take full-page screenshots instead of viewport ones.
    """

    def __init__(
        self,
        page: Page,
        capabilities: Optional[SessionCapabilities] = None,
        full_page: bool = False,
    ):
        self.page = page
        self.capabilities = capabilities or SessionCapabilities()
        self.full_page = full_page

    async def execute_script(self, script: str, *args: Any) -> Any:
        # page.evaluate takes a single argument; several are passed as a list.
        try:
            if not args:
                return await self.page.evaluate(script)
            arg = args[0] if len(args) == 1 else list(args)
            return await self.page.evaluate(script, arg)
        except PlaywrightError as e:
            raise SessionUnavailable(f"Script execution failed: {e}") from e

    async def get_instance_data(self) -> dict[str, Any]:
        browser_name = self.capabilities.browser_name
        if not browser_name:
            browser = self.page.context.browser
            if browser is None:
                raise SessionUnavailable("Page is not attached to a browser")
            browser_name = browser.browser_type.name

        return {
            "browserName": browser_name,
            "platformName": self.capabilities.platform_name,
            "deviceName": self.capabilities.device_name,
            "name": self.capabilities.name,
            "logName": self.capabilities.log_name,
            "nativeWebScreenshot": self.capabilities.native_web_screenshot,
        }

    async def take_screenshot(self) -> str:
        try:
            png = await self.page.screenshot(full_page=self.full_page, type="png")
        except PlaywrightError as e:
            raise SessionUnavailable(f"Screenshot failed: {e}") from e
        logger.debug("Took %s screenshot (%d bytes)", "full page" if self.full_page else "viewport", len(png))
        return base64.b64encode(png).decode("ascii")
