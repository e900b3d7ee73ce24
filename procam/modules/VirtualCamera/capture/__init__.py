from .device import (
    CameraAcquisitionError,
    CameraCapability,
    CameraError,
    CameraPermissionError,
    CameraUnsupportedError,
    ENVIRONMENT_FACING,
    MediaStream,
    UNCONSTRAINED,
    VideoConstraints,
)
from .device_manager import CameraDeviceManager
from .frame import LiveFrame
from .opencv_camera import OpenCVCamera, OpenCVStream

__all__ = [
    "CameraAcquisitionError",
    "CameraCapability",
    "CameraDeviceManager",
    "CameraError",
    "CameraPermissionError",
    "CameraUnsupportedError",
    "ENVIRONMENT_FACING",
    "LiveFrame",
    "MediaStream",
    "OpenCVCamera",
    "OpenCVStream",
    "UNCONSTRAINED",
    "VideoConstraints",
]
