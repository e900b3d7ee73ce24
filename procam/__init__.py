"""ProCam: a virtual camera that captures a transformed still or a live frame."""

from __future__ import annotations

from importlib import metadata
from typing import Optional, Sequence

try:
    __version__ = metadata.version("procam")
except metadata.PackageNotFoundError:  # pragma: no cover - local dev
    __version__ = "0.0.0"


def run(argv: Optional[Sequence[str]] = None) -> int:
    """Run the virtual camera command line."""
    from .modules.VirtualCamera.main_virtual_camera import main

    return main(list(argv) if argv is not None else None)


__all__ = ["__version__", "run"]
