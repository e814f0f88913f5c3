"""Capability set every remote session adapter provides to the pipeline."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class Session(Protocol):
    async def execute_script(self, script: str, *args: Any) -> Any:
        """Run ``script`` in the page context and return its value.

        ``script`` is either a function source (``"(arg) => ..."``) or a plain
        expression. Element handles may be passed as arguments.
        """
        ...

    async def get_instance_data(self) -> dict[str, Any]:
        """Return ``browserName``, ``platformName``, ``deviceName``, ``name``,
        ``logName`` and ``nativeWebScreenshot`` for the session."""
        ...

    async def take_screenshot(self) -> str:
        """Return a base64-encoded PNG screenshot."""
        ...
