from .transform import Transform, IDENTITY, SCALE_MIN, SCALE_MAX, clamp_scale
from .history import HistoryStack
from .rotation import rotation_from_slider, slider_position, display_degrees
from .state import (
    AppState, CameraDeviceStatus, CaptureMode, CaptureRequest, CaptureResult,
    CaptureSettings, Toast, Viewport, ImageSource,
    initial_state
)
from .actions import (
    Action, SelectImage, ClearImage, ToggleActive, VirtualToggleRequested, ToggleAspectRatio,
    PreviewTransform, CommitTransform, Undo, Redo, ResetTransform,
    ViewportResized,
    CameraViewMounted, CameraViewUnmounted,
    CameraLive, CameraPermissionDenied, CameraUnavailable,
    CaptureRequested, FlashEnded, CaptureCompleted, CaptureFailed, ToastDismissed,
    Shutdown
)
from .effects import (
    Effect, AcquireCamera, ReleaseCamera,
    RenderCapture, ScheduleFlashEnd, ScheduleToastDismiss, DeliverOutput,
    OpenImagePicker, CleanupResources
)
from .update import update, capture_mode, capture_request
from .store import Store, create_store

__all__ = [
    "Transform", "IDENTITY", "SCALE_MIN", "SCALE_MAX", "clamp_scale",
    "HistoryStack",
    "rotation_from_slider", "slider_position", "display_degrees",
    "AppState", "CameraDeviceStatus", "CaptureMode", "CaptureRequest", "CaptureResult",
    "CaptureSettings", "Toast", "Viewport", "ImageSource",
    "initial_state",
    "Action", "SelectImage", "ClearImage", "ToggleActive", "VirtualToggleRequested",
    "ToggleAspectRatio",
    "PreviewTransform", "CommitTransform", "Undo", "Redo", "ResetTransform",
    "ViewportResized",
    "CameraViewMounted", "CameraViewUnmounted",
    "CameraLive", "CameraPermissionDenied", "CameraUnavailable",
    "CaptureRequested", "FlashEnded", "CaptureCompleted", "CaptureFailed", "ToastDismissed",
    "Shutdown",
    "Effect", "AcquireCamera", "ReleaseCamera",
    "RenderCapture", "ScheduleFlashEnd", "ScheduleToastDismiss", "DeliverOutput",
    "OpenImagePicker", "CleanupResources",
    "update", "capture_mode", "capture_request",
    "Store", "create_store",
]
