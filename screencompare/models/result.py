"""Result data structures produced by the capture and comparison stages."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field

from screencompare.models.geometry import Rectangle


class ArtifactPaths(BaseModel):
    actual_image: str
    baseline_image: str
    diff_image: str


class CaptureResult(BaseModel):
    """Outcome of writing an actual image."""
    tag: str
    file_name: str
    actual_image: str
    rectangle: Optional[Rectangle] = None  # None for canvas captures, which are not cropped
    screenshot_stable: bool = True
    geometry_warnings: list[str] = Field(default_factory=list)
    device_pixel_ratio: float = 1


class ComparisonResult(BaseModel):
    tag: str
    mismatch_percentage: float = 0.0
    diff_image: Optional[str] = None
    baseline_saved: bool = False
