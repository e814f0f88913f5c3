"""Capture and crop pipeline: prepares the page, takes a stable screenshot, crops and stores it."""

from __future__ import annotations

import base64
import io
import itertools
import logging
from pathlib import Path
from typing import Any, Optional

from PIL import Image, UnidentifiedImageError

from screencompare.capture.geometry import (
    clamp_rectangle,
    element_rectangle,
    screen_rectangle,
    uses_page_origin,
)
from screencompare.capture.page_scripts import (
    ADD_SHADOW_PADDING,
    DISABLE_CSS_ANIMATIONS,
    GET_CANVAS_DATA_URL,
    GET_ELEMENT_POSITION_TOP_PAGE,
    GET_ELEMENT_POSITION_TOP_WINDOW,
    HIDE_SCROLLBARS,
)
from screencompare.capture.profile import resolve_profile
from screencompare.compare.filename import format_file_name
from screencompare.errors import ElementOutOfView, ScreenCompareError, SessionUnavailable
from screencompare.models.config import CompareConfig
from screencompare.models.geometry import ElementBox, EnvironmentProfile
from screencompare.models.options import CompareOptions, ResolvedOptions, merge_options
from screencompare.models.result import CaptureResult
from screencompare.session.base import Session

logger = logging.getLogger(__name__)

# Maximum number of screenshots taken to find two identical ones.
DEFLAKE_ATTEMPTS = 3


def find_matching_pair(shots: list[str]) -> Optional[str]:
    """Return the first shot of the first byte-identical pair (1-2, 1-3, 2-3)."""
    for first, second in itertools.combinations(shots, 2):
        if first == second:
            return first
    return None


def decode_screenshot(encoded: str) -> Image.Image:
    try:
        image = Image.open(io.BytesIO(base64.b64decode(encoded)))
        image.load()
    except (ValueError, UnidentifiedImageError, OSError) as e:
        raise SessionUnavailable(f"Screenshot could not be decoded: {e}") from e
    return image


def decode_data_url(data_url) -> bytes:
    """Return the payload of a base64 ``data:`` URL."""
    if not isinstance(data_url, str) or "," not in data_url:
        raise SessionUnavailable(f"Canvas did not return a data URL: {data_url!r}")
    try:
        return base64.b64decode(data_url.split(",", 1)[1], validate=True)
    except ValueError as e:
        raise SessionUnavailable(f"Canvas data URL could not be decoded: {e}") from e


class CapturePipeline:
    """Produces the "actual" image for a tag."""

    def __init__(self, session: Session, config: CompareConfig):
        self.session = session
        self.config = config

    async def capture(
        self,
        tag: str,
        options: Optional[CompareOptions] = None,
        element: Any = None,
    ) -> CaptureResult:
        profile = await resolve_profile(self.session, self.config)
        resolved = merge_options(self.config, options)
        file_name = format_file_name(
            tag, profile, self.config.format_image_name, self.config.format_options
        )

        if resolved.debug:
            logger.info("Capturing '%s' with profile %s", tag, profile.model_dump())
            logger.info("Capture options: %s", resolved.model_dump())

        try:
            await self._prepare_page(profile, resolved)
            result = await self._capture_image(tag, file_name, profile, resolved, element)
        except Exception:
            # Keep the capture failure when the reset fails too.
            try:
                await self._reset_scrollbars()
            except ScreenCompareError as e:
                logger.warning("Could not restore scrollbars after a failed capture: %s", e)
            raise

        await self._reset_scrollbars()
        return result

    async def _capture_image(
        self,
        tag: str,
        file_name: str,
        profile: EnvironmentProfile,
        resolved: ResolvedOptions,
        element: Any,
    ) -> CaptureResult:
        actual_path = self.config.actual_folder / file_name

        if element is not None and resolved.canvas_screenshot:
            data_url = await self._remote(self.session.execute_script(GET_CANVAS_DATA_URL, element))
            self._write(actual_path, decode_data_url(data_url))
            return CaptureResult(
                tag=tag,
                file_name=file_name,
                actual_image=str(actual_path),
                device_pixel_ratio=profile.device_pixel_ratio,
            )

        encoded, stable = await self._take_stable_screenshot()
        image = decode_screenshot(encoded)
        screenshot_height = image.height / profile.device_pixel_ratio

        warnings: list[str] = []
        if element is None:
            rect = screen_rectangle(profile, screenshot_height)
        else:
            box = await self._element_box(element, profile, screenshot_height)
            rect, warnings = element_rectangle(
                box, profile, screenshot_height, resolved.resize_dimensions
            )

        crop = clamp_rectangle(rect, image.width, image.height)
        if crop.width == 0 or crop.height == 0:
            raise ElementOutOfView(tag, rect.model_dump())
        logger.debug("Cropping '%s' to %s", tag, crop.model_dump())

        buffer = io.BytesIO()
        image.crop(crop.as_box()).save(buffer, format="PNG")
        self._write(actual_path, buffer.getvalue())

        return CaptureResult(
            tag=tag,
            file_name=file_name,
            actual_image=str(actual_path),
            rectangle=crop,
            screenshot_stable=stable,
            geometry_warnings=warnings,
            device_pixel_ratio=profile.device_pixel_ratio,
        )

    async def _reset_scrollbars(self) -> None:
        await self._remote(self.session.execute_script(HIDE_SCROLLBARS, False))

    async def _prepare_page(self, profile: EnvironmentProfile, resolved: ResolvedOptions) -> None:
        if resolved.hide_scrollbars:
            await self._remote(self.session.execute_script(HIDE_SCROLLBARS, True))

        if profile.test_in_mobile_browser and (
            profile.address_bar_shadow_padding or profile.tool_bar_shadow_padding
        ):
            await self._remote(self.session.execute_script(
                ADD_SHADOW_PADDING,
                profile.address_bar_shadow_padding,
                profile.tool_bar_shadow_padding,
            ))

        if resolved.disable_css_animation:
            await self._remote(self.session.execute_script(DISABLE_CSS_ANIMATIONS))

    async def _take_stable_screenshot(self) -> tuple[str, bool]:
        """Take a screenshot, cross-checking it when baselines are auto-saved.

        Some drivers occasionally return a corrupted image, which must not end
        up as a new baseline.
        """
        first = await self._remote(self.session.take_screenshot())
        if not self.config.auto_save_baseline:
            return first, True

        shots = [first]
        for _ in range(DEFLAKE_ATTEMPTS - 1):
            shots.append(await self._remote(self.session.take_screenshot()))
            match = find_matching_pair(shots)
            if match is not None:
                return match, True

        logger.warning(
            "No two of %d screenshots were identical, continuing with the first one",
            DEFLAKE_ATTEMPTS,
        )
        return first, False

    async def _element_box(
        self, element: Any, profile: EnvironmentProfile, screenshot_height: float
    ) -> ElementBox:
        if uses_page_origin(profile, screenshot_height):
            script = GET_ELEMENT_POSITION_TOP_PAGE
        else:
            script = GET_ELEMENT_POSITION_TOP_WINDOW
        raw = await self._remote(self.session.execute_script(script, element))
        return ElementBox(**raw)

    @staticmethod
    async def _remote(call):
        try:
            return await call
        except ScreenCompareError:
            raise
        except Exception as e:
            raise SessionUnavailable(str(e)) from e

    @staticmethod
    def _write(path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
