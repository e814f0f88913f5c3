"""Pixel-diff primitive.

The diff adapter only relies on the ``PixelDiff`` protocol; ``PillowPixelDiff``
is the default implementation. It follows the tolerance presets of
resemble.js: a pixel is a mismatch when any channel differs by more than the
active tolerance, with optional brightness-only comparison (ignore colors),
edge-based anti-aliasing suppression, transparent-pixel exclusion and
ignore rectangles.
"""

from __future__ import annotations

import io
from typing import Protocol

from PIL import Image, ImageChops, ImageDraw, ImageFilter
from pydantic import BaseModel, Field

from screencompare.models.geometry import Rectangle

MISMATCH_COLOR = (255, 0, 255, 255)

# Edge strength above which a differing pixel is treated as anti-aliasing.
ANTIALIASING_EDGE_THRESHOLD = 32


class Tolerance(BaseModel):
    rgb: int = 16
    alpha: int = 16
    brightness: int = 16


TOLERANCE_NOTHING = Tolerance(rgb=0, alpha=0, brightness=0)
TOLERANCE_LESS = Tolerance(rgb=16, alpha=16, brightness=16)
TOLERANCE_ANTIALIASING = Tolerance(rgb=32, alpha=32, brightness=64)


class DiffOptions(BaseModel):
    ignore_antialiasing: bool = False
    ignore_colors: bool = False
    ignore_alpha: bool = False
    ignore_less: bool = False
    ignore_nothing: bool = False
    ignore_transparent_pixel: bool = False
    ignore_rectangles: list[Rectangle] = Field(default_factory=list)  # physical pixels

    def tolerance(self) -> Tolerance:
        # Later flags override earlier ones.
        tolerance = Tolerance()
        if self.ignore_nothing:
            tolerance = TOLERANCE_NOTHING
        if self.ignore_less:
            tolerance = TOLERANCE_LESS
        if self.ignore_antialiasing:
            tolerance = TOLERANCE_ANTIALIASING
        if self.ignore_alpha:
            tolerance = tolerance.model_copy(update={"alpha": 255})
        return tolerance


class DiffOutcome(BaseModel):
    mismatch_percentage: float
    diff_bytes: bytes = b""


class PixelDiff(Protocol):
    def diff(self, baseline: bytes, actual: bytes, options: DiffOptions) -> DiffOutcome:
        ...


def _threshold(band: Image.Image, tolerance: int) -> Image.Image:
    return band.point(lambda p: 255 if p > tolerance else 0)


def _on_canvas(image: Image.Image, size: tuple[int, int]) -> Image.Image:
    if image.size == size:
        return image
    canvas = Image.new("RGBA", size, (0, 0, 0, 0))
    canvas.paste(image, (0, 0))
    return canvas


class PillowPixelDiff:
    """Default pixel-diff primitive built on Pillow."""

    def diff(self, baseline: bytes, actual: bytes, options: DiffOptions) -> DiffOutcome:
        base_img = Image.open(io.BytesIO(baseline)).convert("RGBA")
        actual_img = Image.open(io.BytesIO(actual)).convert("RGBA")

        width = max(base_img.width, actual_img.width)
        height = max(base_img.height, actual_img.height)
        total = width * height
        if total == 0:
            return DiffOutcome(mismatch_percentage=0.0)

        mismatch = self._mismatch_mask(base_img, actual_img, (width, height), options)
        mismatched = mismatch.histogram()[255]

        diff_image = self._render(_on_canvas(actual_img, (width, height)), mismatch)
        buffer = io.BytesIO()
        diff_image.save(buffer, format="PNG")

        return DiffOutcome(
            mismatch_percentage=mismatched / total * 100,
            diff_bytes=buffer.getvalue(),
        )

    def _mismatch_mask(
        self,
        base_img: Image.Image,
        actual_img: Image.Image,
        size: tuple[int, int],
        options: DiffOptions,
    ) -> Image.Image:
        tolerance = options.tolerance()
        base = _on_canvas(base_img, size)
        current = _on_canvas(actual_img, size)

        if options.ignore_colors:
            brightness = ImageChops.difference(base.convert("L"), current.convert("L"))
            mask = _threshold(brightness, tolerance.brightness)
            alpha = ImageChops.difference(base.getchannel("A"), current.getchannel("A"))
            mask = ImageChops.lighter(mask, _threshold(alpha, tolerance.alpha))
        else:
            r, g, b, a = ImageChops.difference(base, current).split()
            mask = _threshold(r, tolerance.rgb)
            for band in (g, b):
                mask = ImageChops.lighter(mask, _threshold(band, tolerance.rgb))
            mask = ImageChops.lighter(mask, _threshold(a, tolerance.alpha))

        if options.ignore_antialiasing:
            edges = ImageChops.lighter(
                base.convert("L").filter(ImageFilter.FIND_EDGES),
                current.convert("L").filter(ImageFilter.FIND_EDGES),
            )
            mask = ImageChops.subtract(mask, _threshold(edges, ANTIALIASING_EDGE_THRESHOLD))

        if options.ignore_transparent_pixel:
            opaque = ImageChops.darker(
                base.getchannel("A").point(lambda p: 255 if p == 255 else 0),
                current.getchannel("A").point(lambda p: 255 if p == 255 else 0),
            )
            mask = ImageChops.darker(mask, opaque)

        if base_img.size != actual_img.size:
            # Area covered by only one of the images always counts as mismatch.
            overlap_width = min(base_img.width, actual_img.width)
            overlap_height = min(base_img.height, actual_img.height)
            outside = Image.new("L", size, 255)
            if overlap_width and overlap_height:
                ImageDraw.Draw(outside).rectangle(
                    [0, 0, overlap_width - 1, overlap_height - 1], fill=0
                )
            mask = ImageChops.lighter(mask, outside)

        draw = ImageDraw.Draw(mask)
        for rect in options.ignore_rectangles:
            if rect.width > 0 and rect.height > 0:
                left, top, right, bottom = rect.as_box()
                draw.rectangle([left, top, right - 1, bottom - 1], fill=0)

        return mask

    @staticmethod
    def _render(actual: Image.Image, mismatch: Image.Image) -> Image.Image:
        """Fade the actual image and paint the mismatched pixels."""
        gray = actual.convert("L").convert("RGBA")
        faded = Image.blend(gray, Image.new("RGBA", actual.size, (255, 255, 255, 255)), 0.6)
        highlight = Image.new("RGBA", actual.size, MISMATCH_COLOR)
        return Image.composite(highlight, faded, mismatch)
