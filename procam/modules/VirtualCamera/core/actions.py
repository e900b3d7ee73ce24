from dataclasses import dataclass

from .state import CaptureResult, ImageSource
from .transform import Transform


@dataclass(frozen=True)
class SelectImage:
    image: ImageSource
    activate: bool = False


@dataclass(frozen=True)
class ClearImage:
    pass


@dataclass(frozen=True)
class ToggleActive:
    pass


@dataclass(frozen=True)
class VirtualToggleRequested:
    pass


@dataclass(frozen=True)
class ToggleAspectRatio:
    pass


@dataclass(frozen=True)
class PreviewTransform:
    transform: Transform


@dataclass(frozen=True)
class CommitTransform:
    transform: Transform


@dataclass(frozen=True)
class Undo:
    pass


@dataclass(frozen=True)
class Redo:
    pass


@dataclass(frozen=True)
class ResetTransform:
    pass


@dataclass(frozen=True)
class ViewportResized:
    width: int
    height: int
    device_pixel_ratio: float = 1.0


@dataclass(frozen=True)
class CameraViewMounted:
    pass


@dataclass(frozen=True)
class CameraViewUnmounted:
    pass


@dataclass(frozen=True)
class CameraLive:
    frame_size: tuple[int, int] | None = None


@dataclass(frozen=True)
class CameraPermissionDenied:
    message: str = ""


@dataclass(frozen=True)
class CameraUnavailable:
    message: str = ""


@dataclass(frozen=True)
class CaptureRequested:
    pass


@dataclass(frozen=True)
class FlashEnded:
    pass


@dataclass(frozen=True)
class CaptureCompleted:
    result: CaptureResult


@dataclass(frozen=True)
class CaptureFailed:
    message: str


@dataclass(frozen=True)
class ToastDismissed:
    toast_id: int


@dataclass(frozen=True)
class Shutdown:
    pass


Action = (
    SelectImage | ClearImage | ToggleActive | VirtualToggleRequested | ToggleAspectRatio |
    PreviewTransform | CommitTransform | Undo | Redo | ResetTransform |
    ViewportResized |
    CameraViewMounted | CameraViewUnmounted |
    CameraLive | CameraPermissionDenied | CameraUnavailable |
    CaptureRequested | FlashEnded | CaptureCompleted | CaptureFailed | ToastDismissed |
    Shutdown
)
