"""Filename template resolver shared by every stage that touches disk."""

from __future__ import annotations

import re
from typing import Optional

from screencompare.models.config import DEFAULT_FORMAT_IMAGE_NAME
from screencompare.models.geometry import EnvironmentProfile

IMAGE_EXTENSION = ".png"


def camel_case(value: str) -> str:
    """``"Chrome latest - Desktop"`` -> ``"chromeLatestDesktop"``."""
    words = re.findall(r"[A-Za-z0-9]+", value)
    if not words:
        return ""
    return words[0].lower() + "".join(w[:1].upper() + w[1:].lower() for w in words[1:])


def _format_dpr(ratio: float) -> str:
    return str(int(ratio)) if float(ratio).is_integer() else str(ratio)


def format_file_name(
    tag: str,
    profile: EnvironmentProfile,
    template: str = DEFAULT_FORMAT_IMAGE_NAME,
    format_options: Optional[dict] = None,
) -> str:
    """Substitute the known tokens in ``template`` and append the extension.

    Only the first occurrence of each token is replaced; unknown tokens are
    left as they are.
    """
    values = {
        "browserName": profile.browser_name,
        "deviceName": profile.device_name,
        "dpr": _format_dpr(profile.device_pixel_ratio),
        "height": str(profile.browser_height),
        "logName": camel_case(profile.log_name),
        "name": profile.name,
        "tag": tag,
        "width": str(profile.browser_width),
    }
    for key, value in (format_options or {}).items():
        if key in values:
            values[key] = str(value)

    file_name = template
    for key, value in values.items():
        file_name = file_name.replace(f"{{{key}}}", value, 1)
    return file_name + IMAGE_EXTENSION
