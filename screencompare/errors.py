"""Error types raised by the capture and comparison pipeline."""

from __future__ import annotations


class ScreenCompareError(Exception):
    """Base class for all errors raised by screencompare."""


class ConfigurationError(ScreenCompareError):
    """A required setting (baseline folder, screenshot path) is missing."""


class SessionUnavailable(ScreenCompareError):
    """The remote session could not execute a script, report metadata or take a screenshot."""


class BaselineMissing(ScreenCompareError):
    """No baseline image exists and auto-saving is disabled."""

    def __init__(self, baseline_path: str):
        self.baseline_path = baseline_path
        super().__init__(f"Baseline image not found: {baseline_path}")


class BaselineCopyFailed(ScreenCompareError):
    """The actual image could not be copied into the baseline folder."""

    def __init__(self, source: str, destination: str):
        self.source = source
        self.destination = destination
        super().__init__(f"Image could not be copied from {source} to {destination}")


class ImageReadError(ScreenCompareError):
    """An actual or baseline image could not be read for comparison."""


class ElementOutOfView(ScreenCompareError):
    """The element to capture lies wholly outside the screenshot."""

    def __init__(self, tag: str, rectangle: dict):
        self.tag = tag
        self.rectangle = rectangle
        super().__init__(f"Element for '{tag}' is outside the screenshot: {rectangle}")
