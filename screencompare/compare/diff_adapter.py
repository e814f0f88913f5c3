"""Diff engine adapter: feeds the pixel-diff primitive and applies the tolerance decision."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from screencompare.capture.geometry import scale_rectangle
from screencompare.compare.pixel_diff import DiffOptions, PixelDiff, PillowPixelDiff
from screencompare.errors import ImageReadError
from screencompare.models.options import ResolvedOptions
from screencompare.models.result import ArtifactPaths, ComparisonResult

logger = logging.getLogger(__name__)


def build_diff_options(resolved: ResolvedOptions, device_pixel_ratio: float) -> DiffOptions:
    """Translate resolved options into primitive options with physical block-outs."""
    return DiffOptions(
        ignore_antialiasing=resolved.ignore_antialiasing,
        ignore_colors=resolved.ignore_colors,
        ignore_alpha=resolved.ignore_alpha,
        ignore_less=resolved.ignore_less,
        ignore_nothing=resolved.ignore_nothing,
        ignore_transparent_pixel=resolved.ignore_transparent_pixel,
        ignore_rectangles=[
            scale_rectangle(rect, device_pixel_ratio) for rect in resolved.block_out
        ],
    )


def should_save_diff(mismatch: float, save_above_tolerance: float, debug: bool) -> bool:
    return mismatch > save_above_tolerance or debug


class DiffAdapter:
    def __init__(self, pixel_diff: Optional[PixelDiff] = None):
        self.pixel_diff = pixel_diff or PillowPixelDiff()

    def compare(
        self,
        tag: str,
        paths: ArtifactPaths,
        resolved: ResolvedOptions,
        device_pixel_ratio: float,
        baseline_saved: bool = False,
    ) -> ComparisonResult:
        baseline = self._read(paths.baseline_image)
        actual = self._read(paths.actual_image)

        diff_options = build_diff_options(resolved, device_pixel_ratio)
        if resolved.debug:
            logger.info("Diff options for '%s': %s", tag, diff_options.model_dump())

        outcome = self.pixel_diff.diff(baseline, actual, diff_options)
        mismatch = float(outcome.mismatch_percentage)

        diff_image = None
        if should_save_diff(mismatch, resolved.save_above_tolerance, resolved.debug):
            diff_path = Path(paths.diff_image)
            diff_path.parent.mkdir(parents=True, exist_ok=True)
            diff_path.write_bytes(outcome.diff_bytes)
            diff_image = str(diff_path)
            logger.info("Saved diff for '%s' (%.2f%% mismatch) to %s", tag, mismatch, diff_path)
        else:
            logger.debug("Mismatch for '%s' is %.2f%%, no diff saved", tag, mismatch)

        return ComparisonResult(
            tag=tag,
            mismatch_percentage=mismatch,
            diff_image=diff_image,
            baseline_saved=baseline_saved,
        )

    @staticmethod
    def _read(path: str) -> bytes:
        try:
            return Path(path).read_bytes()
        except OSError as e:
            raise ImageReadError(f"Image could not be read: {path}") from e
