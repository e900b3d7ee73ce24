"""Centralized path constants for ProCam."""

from __future__ import annotations

import os
from pathlib import Path


def _user_data_dir() -> Path:
    xdg = os.environ.get("XDG_DATA_HOME")
    if xdg:
        return Path(xdg) / "procam"
    return Path.home() / ".procam"


USER_DATA_DIR = _user_data_dir()
USER_CAPTURES_DIR = USER_DATA_DIR / "captures"


__all__ = [
    "USER_DATA_DIR",
    "USER_CAPTURES_DIR",
]
