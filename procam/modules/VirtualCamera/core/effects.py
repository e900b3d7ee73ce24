from dataclasses import dataclass

from .state import CaptureRequest, CaptureResult


@dataclass(frozen=True)
class AcquireCamera:
    pass


@dataclass(frozen=True)
class ReleaseCamera:
    pass


@dataclass(frozen=True)
class RenderCapture:
    request: CaptureRequest


@dataclass(frozen=True)
class ScheduleFlashEnd:
    delay: float


@dataclass(frozen=True)
class ScheduleToastDismiss:
    toast_id: int
    delay: float


@dataclass(frozen=True)
class DeliverOutput:
    result: CaptureResult


@dataclass(frozen=True)
class OpenImagePicker:
    pass


@dataclass(frozen=True)
class CleanupResources:
    pass


Effect = (
    AcquireCamera | ReleaseCamera |
    RenderCapture | ScheduleFlashEnd | ScheduleToastDismiss | DeliverOutput |
    OpenImagePicker |
    CleanupResources
)
