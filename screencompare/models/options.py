"""Per-call comparison options and their merge with instance defaults."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from screencompare.models.config import CompareConfig
from screencompare.models.geometry import Rectangle

# Fields a call may override; each has a same-named default on CompareConfig.
OVERRIDABLE_FIELDS = (
    "resize_dimensions",
    "ignore_antialiasing",
    "ignore_colors",
    "ignore_alpha",
    "ignore_less",
    "ignore_nothing",
    "ignore_transparent_pixel",
    "save_above_tolerance",
    "disable_css_animation",
    "hide_scrollbars",
)


class CompareOptions(BaseModel):
    """Options for a single save/check call.

    Only fields that were explicitly passed override the instance defaults,
    so ``CompareOptions(hide_scrollbars=False)`` switches scrollbar hiding
    off even though the default is on.
    """

    block_out: Optional[list[Rectangle]] = None
    resize_dimensions: Optional[int] = None
    ignore_antialiasing: Optional[bool] = None
    ignore_colors: Optional[bool] = None
    ignore_alpha: Optional[bool] = None
    ignore_less: Optional[bool] = None
    ignore_nothing: Optional[bool] = None
    ignore_transparent_pixel: Optional[bool] = None
    save_above_tolerance: Optional[float] = None
    disable_css_animation: Optional[bool] = None
    hide_scrollbars: Optional[bool] = None
    canvas_screenshot: Optional[bool] = None


class ResolvedOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    block_out: list[Rectangle] = Field(default_factory=list)
    resize_dimensions: int = 0
    ignore_antialiasing: bool = False
    ignore_colors: bool = False
    ignore_alpha: bool = False
    ignore_less: bool = False
    ignore_nothing: bool = False
    ignore_transparent_pixel: bool = False
    save_above_tolerance: float = 0.0
    disable_css_animation: bool = False
    hide_scrollbars: bool = True
    canvas_screenshot: bool = False
    debug: bool = False


def merge_options(
    config: CompareConfig,
    options: Optional[CompareOptions] = None,
) -> ResolvedOptions:
    """Merge instance defaults with call overrides.

    Call-level fields win whenever they were set, even to a falsy value.
    Block-out rectangles are the union of the instance and call lists.
    """
    options = options or CompareOptions()
    explicit = options.model_fields_set

    merged: dict = {"debug": config.debug}
    for field in OVERRIDABLE_FIELDS:
        if field in explicit and getattr(options, field) is not None:
            merged[field] = getattr(options, field)
        else:
            merged[field] = getattr(config, field)

    merged["block_out"] = list(config.block_out) + list(options.block_out or [])
    merged["canvas_screenshot"] = bool(options.canvas_screenshot)
    return ResolvedOptions(**merged)
