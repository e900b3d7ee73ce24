"""Virtual camera: transformable still image or live device feed, captured to JPEG."""

from .app import VirtualCameraApp
from .config import VirtualCameraConfig

__all__ = ["VirtualCameraApp", "VirtualCameraConfig"]
