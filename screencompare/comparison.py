"""Image comparison entry points: coordinates capture, baseline and diff stages."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

from screencompare.capture.pipeline import CapturePipeline
from screencompare.compare.baseline import ensure_baseline
from screencompare.compare.diff_adapter import DiffAdapter
from screencompare.compare.pixel_diff import PixelDiff
from screencompare.errors import ConfigurationError
from screencompare.models.config import CompareConfig
from screencompare.models.options import CompareOptions, merge_options
from screencompare.models.result import ArtifactPaths, CaptureResult, ComparisonResult
from screencompare.session.base import Session

logger = logging.getLogger(__name__)


class ImageComparison:
    """Saves and checks screenshots of a single session.

    Calls must not overlap on the same session: page styles and the
    screenshot sequence of one call would interfere with the other.
    """

    def __init__(
        self,
        session: Session,
        config: CompareConfig,
        pixel_diff: Optional[PixelDiff] = None,
    ):
        if not config.baseline_folder:
            raise ConfigurationError("Image baseline_folder not given.")
        if not config.screenshot_path:
            raise ConfigurationError("Image screenshot_path not given.")

        self.session = session
        self.config = config
        self.baseline_folder = Path(config.baseline_folder)
        self.actual_folder = config.actual_folder
        self.diff_folder = config.diff_folder
        for folder in (self.actual_folder, self.baseline_folder, self.diff_folder):
            folder.mkdir(parents=True, exist_ok=True)

        self.pipeline = CapturePipeline(session, config)
        self.diff_adapter = DiffAdapter(pixel_diff)

    def artifact_paths(self, file_name: str) -> ArtifactPaths:
        return ArtifactPaths(
            actual_image=str(self.actual_folder / file_name),
            baseline_image=str(self.baseline_folder / file_name),
            diff_image=str(self.diff_folder / Path(file_name).name),
        )

    async def save_screen(self, tag: str, options: Optional[CompareOptions] = None) -> CaptureResult:
        """Save a screenshot of the screen as the actual image for ``tag``."""
        return await self.pipeline.capture(tag, options)

    async def save_element(
        self, element: Any, tag: str, options: Optional[CompareOptions] = None
    ) -> CaptureResult:
        """Save a screenshot of ``element`` as the actual image for ``tag``."""
        return await self.pipeline.capture(tag, options, element=element)

    async def check_screen_result(
        self, tag: str, options: Optional[CompareOptions] = None
    ) -> ComparisonResult:
        capture = await self.save_screen(tag, options)
        return self._compare(capture, options)

    async def check_element_result(
        self, element: Any, tag: str, options: Optional[CompareOptions] = None
    ) -> ComparisonResult:
        capture = await self.save_element(element, tag, options)
        return self._compare(capture, options)

    async def check_screen(self, tag: str, options: Optional[CompareOptions] = None) -> float:
        """Compare the screen against its baseline and return the mismatch percentage."""
        result = await self.check_screen_result(tag, options)
        return result.mismatch_percentage

    async def check_element(
        self, element: Any, tag: str, options: Optional[CompareOptions] = None
    ) -> float:
        """Compare ``element`` against its baseline and return the mismatch percentage."""
        result = await self.check_element_result(element, tag, options)
        return result.mismatch_percentage

    def _compare(self, capture: CaptureResult, options: Optional[CompareOptions]) -> ComparisonResult:
        paths = self.artifact_paths(capture.file_name)
        logger.debug("Comparing '%s' against %s", capture.tag, paths.baseline_image)
        baseline_saved = ensure_baseline(paths, self.config.auto_save_baseline)
        resolved = merge_options(self.config, options)
        return self.diff_adapter.compare(
            capture.tag,
            paths,
            resolved,
            capture.device_pixel_ratio,
            baseline_saved=baseline_saved,
        )
