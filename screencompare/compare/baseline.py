"""Baseline manager: gates comparisons on the existence of a baseline image."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from screencompare.errors import BaselineCopyFailed, BaselineMissing
from screencompare.models.result import ArtifactPaths

logger = logging.getLogger(__name__)


def ensure_baseline(paths: ArtifactPaths, auto_save: bool) -> bool:
    """Make sure a baseline exists for ``paths``.

    Returns True when the actual image was copied in as the new baseline.
    """
    baseline = Path(paths.baseline_image)
    if baseline.exists():
        return False

    if not auto_save:
        raise BaselineMissing(str(baseline))

    try:
        baseline.parent.mkdir(parents=True, exist_ok=True)
        shutil.copy2(paths.actual_image, baseline)
    except OSError as e:
        raise BaselineCopyFailed(paths.actual_image, str(baseline)) from e

    logger.info("Autosaved the image to %s", baseline)
    return True
