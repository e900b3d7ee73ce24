from dataclasses import replace

from .state import (
    AppState, CameraDeviceStatus, CaptureMode, CaptureRequest, Toast, Viewport,
)
from .history import HistoryStack
from .transform import IDENTITY
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

VIRTUAL_TOAST_MESSAGE = "Virtual image saved"
CAMERA_TOAST_MESSAGE = "Image saved"


def capture_mode(state: AppState) -> CaptureMode:
    if state.is_virtual:
        return CaptureMode.VIRTUAL
    if state.device_status == CameraDeviceStatus.LIVE:
        return CaptureMode.LIVE
    return CaptureMode.PLACEHOLDER


def capture_request(state: AppState) -> CaptureRequest:
    mode = capture_mode(state)
    if mode is not CaptureMode.VIRTUAL:
        return CaptureRequest(mode=mode, viewport=state.viewport)
    return CaptureRequest(
        mode=mode,
        image=state.selected_image,
        transform=state.transform,
        maintain_aspect_ratio=state.maintain_aspect_ratio,
        viewport=state.viewport,
    )


def update(state: AppState, action: Action) -> tuple[AppState, list[Effect]]:
    match action:
        case SelectImage(image, activate):
            return (
                replace(
                    state,
                    selected_image=image,
                    is_active=state.is_active or activate,
                    transform=IDENTITY,
                    history=HistoryStack.reset(),
                ),
                []
            )

        case ClearImage():
            return (
                replace(
                    state,
                    selected_image=None,
                    is_active=False,
                    transform=IDENTITY,
                    history=HistoryStack.reset(),
                ),
                []
            )

        case ToggleActive():
            if state.selected_image is None:
                return state, []
            return replace(state, is_active=not state.is_active), []

        case VirtualToggleRequested():
            if state.selected_image is None:
                return state, [OpenImagePicker()]
            return replace(state, is_active=not state.is_active), []

        case ToggleAspectRatio():
            return replace(state, maintain_aspect_ratio=not state.maintain_aspect_ratio), []

        case PreviewTransform(transform):
            return replace(state, transform=transform.clamped()), []

        case CommitTransform(transform):
            clamped = transform.clamped()
            return replace(state, transform=clamped, history=state.history.push(clamped)), []

        case Undo():
            if not state.history.can_undo:
                return state, []
            history = state.history.undo()
            return replace(state, history=history, transform=history.current), []

        case Redo():
            if not state.history.can_redo:
                return state, []
            history = state.history.redo()
            return replace(state, history=history, transform=history.current), []

        case ResetTransform():
            return (
                replace(state, transform=IDENTITY, history=state.history.push(IDENTITY)),
                []
            )

        case ViewportResized(width, height, device_pixel_ratio):
            if width <= 0 or height <= 0:
                return state, []
            return replace(state, viewport=Viewport(width, height, device_pixel_ratio)), []

        case CameraViewMounted():
            if state.device_status is not None:
                return state, []
            return (
                replace(
                    state,
                    device_status=CameraDeviceStatus.INITIALIZING,
                    frame_size=None,
                    error_message=None,
                ),
                [AcquireCamera()]
            )

        case CameraViewUnmounted():
            if state.device_status is None:
                return state, []
            return replace(state, device_status=None, frame_size=None), [ReleaseCamera()]

        case CameraLive(frame_size):
            if state.device_status != CameraDeviceStatus.INITIALIZING:
                return state, []
            return (
                replace(state, device_status=CameraDeviceStatus.LIVE, frame_size=frame_size),
                []
            )

        case CameraPermissionDenied(message):
            if state.device_status != CameraDeviceStatus.INITIALIZING:
                return state, []
            return (
                replace(
                    state,
                    device_status=CameraDeviceStatus.PERMISSION_DENIED,
                    error_message=message or "Camera permission denied",
                ),
                []
            )

        case CameraUnavailable(message):
            if state.device_status != CameraDeviceStatus.INITIALIZING:
                return state, []
            return (
                replace(
                    state,
                    device_status=CameraDeviceStatus.SIMULATED,
                    error_message=message or None,
                ),
                []
            )

        case CaptureRequested():
            return (
                replace(state, flash=True),
                [
                    ScheduleFlashEnd(state.settings.flash_duration),
                    RenderCapture(capture_request(state)),
                ]
            )

        case FlashEnded():
            return replace(state, flash=False), []

        case CaptureCompleted(result):
            toast_id = state.capture_count + 1
            toast = Toast(
                toast_id=toast_id,
                message=VIRTUAL_TOAST_MESSAGE if result.is_virtual else CAMERA_TOAST_MESSAGE,
                virtual=result.is_virtual,
            )
            return (
                replace(
                    state,
                    toast=toast,
                    last_capture=result,
                    capture_count=state.capture_count + 1,
                ),
                [
                    DeliverOutput(result),
                    ScheduleToastDismiss(toast_id, state.settings.toast_duration),
                ]
            )

        case CaptureFailed(message):
            return replace(state, error_message=message), []

        case ToastDismissed(toast_id):
            if state.toast is None or state.toast.toast_id != toast_id:
                return state, []
            return replace(state, toast=None), []

        case Shutdown():
            effects_list: list[Effect] = [CleanupResources()]
            if state.device_status is not None:
                effects_list = [ReleaseCamera()] + effects_list
            return (
                replace(state, device_status=None, frame_size=None, flash=False, toast=None),
                effects_list
            )

        case _:
            return state, []
