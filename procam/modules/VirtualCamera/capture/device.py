"""Camera capability interface and the errors acquisition may raise."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Protocol, runtime_checkable

from .frame import LiveFrame


class CameraError(Exception):
    """Base class for camera acquisition failures."""


class CameraPermissionError(CameraError):
    """Access to the camera was refused. Never retried."""


class CameraAcquisitionError(CameraError):
    """The camera could not be opened for a reason other than permission."""


class CameraUnsupportedError(CameraError):
    """The platform has no usable camera capability."""


@dataclass(frozen=True)
class VideoConstraints:
    facing_mode: Optional[str] = None

    @property
    def is_constrained(self) -> bool:
        return self.facing_mode is not None


ENVIRONMENT_FACING = VideoConstraints(facing_mode="environment")
UNCONSTRAINED = VideoConstraints()


@runtime_checkable
class MediaStream(Protocol):
    @property
    def frame_size(self) -> Optional[tuple[int, int]]: ...

    def latest_frame(self) -> Optional[LiveFrame]: ...

    def stop(self) -> None: ...


class CameraCapability(Protocol):
    def is_supported(self) -> bool: ...

    async def acquire(self, constraints: VideoConstraints) -> MediaStream: ...

    def release(self, stream: MediaStream) -> None: ...


__all__ = [
    "CameraError",
    "CameraPermissionError",
    "CameraAcquisitionError",
    "CameraUnsupportedError",
    "VideoConstraints",
    "ENVIRONMENT_FACING",
    "UNCONSTRAINED",
    "MediaStream",
    "CameraCapability",
]
