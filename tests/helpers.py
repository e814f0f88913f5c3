"""Image builders and an in-memory session shared by the tests."""

import base64
import io
from typing import Any

from PIL import Image

from screencompare.capture.page_scripts import (
    GET_CANVAS_DATA_URL,
    GET_ELEMENT_POSITION_TOP_PAGE,
    GET_ELEMENT_POSITION_TOP_WINDOW,
    GET_SCREEN_DIMENSIONS,
    HIDE_SCROLLBARS,
)


def make_png(width: int, height: int, color=(255, 255, 255, 255)) -> bytes:
    """Create a solid PNG image."""
    buffer = io.BytesIO()
    Image.new("RGBA", (width, height), color).save(buffer, format="PNG")
    return buffer.getvalue()


def make_png_with_box(
    width: int,
    height: int,
    box: tuple[int, int, int, int],
    color=(255, 0, 0, 255),
    background=(255, 255, 255, 255),
) -> bytes:
    """Create a PNG with a filled (left, upper, right, lower) box."""
    image = Image.new("RGBA", (width, height), background)
    image.paste(Image.new("RGBA", (box[2] - box[0], box[3] - box[1]), color), box[:2])
    buffer = io.BytesIO()
    image.save(buffer, format="PNG")
    return buffer.getvalue()


def to_b64(png: bytes) -> str:
    return base64.b64encode(png).decode("ascii")


def open_png(path) -> Image.Image:
    with open(path, "rb") as f:
        image = Image.open(io.BytesIO(f.read()))
        image.load()
    return image


class FakeSession:
    """In-memory session that records every remote call."""

    def __init__(
        self,
        screenshots: list[str],
        instance_data: dict | None = None,
        dimensions: dict | None = None,
        element_box: dict | None = None,
        canvas_png: bytes | None = None,
        canvas_data_url: str | None = None,
        fail_on_reset: bool = False,
    ):
        self.screenshots = list(screenshots)
        self.instance_data = instance_data if instance_data is not None else {"browserName": "chrome"}
        self.dimensions = dimensions or {
            "fullPageHeight": 80,
            "fullPageWidth": 100,
            "height": 80,
            "pixelRatio": 1,
            "viewPortHeight": 80,
            "viewPortWidth": 100,
            "width": 100,
        }
        self.element_box = element_box or {"x": 10, "y": 10, "width": 20, "height": 20}
        self.canvas_png = canvas_png
        self.canvas_data_url = canvas_data_url
        self.fail_on_reset = fail_on_reset
        self.scripts: list[tuple[str, tuple]] = []
        self.screenshot_calls = 0

    async def execute_script(self, script: str, *args: Any) -> Any:
        self.scripts.append((script, args))
        if script == GET_SCREEN_DIMENSIONS:
            return dict(self.dimensions)
        if script in (GET_ELEMENT_POSITION_TOP_PAGE, GET_ELEMENT_POSITION_TOP_WINDOW):
            return dict(self.element_box)
        if script == GET_CANVAS_DATA_URL:
            if self.canvas_data_url is not None:
                return self.canvas_data_url
            return "data:image/png;base64," + to_b64(self.canvas_png)
        if script == HIDE_SCROLLBARS and args == (False,) and self.fail_on_reset:
            raise RuntimeError("Target page, context or browser has been closed")
        return None

    async def get_instance_data(self) -> dict:
        return dict(self.instance_data)

    async def take_screenshot(self) -> str:
        self.screenshot_calls += 1
        if len(self.screenshots) > 1:
            return self.screenshots.pop(0)
        return self.screenshots[0]

    def calls_to(self, script: str) -> list[tuple]:
        return [args for s, args in self.scripts if s == script]
