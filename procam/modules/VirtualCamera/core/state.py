from dataclasses import dataclass, field
from enum import Enum, auto
from pathlib import Path

from .history import HistoryStack
from .transform import IDENTITY, Transform

# Encoded image bytes, a "data:" URI, or a filesystem path.
ImageSource = bytes | str | Path

DEFAULT_VIEWPORT = (390, 844)


class CameraDeviceStatus(Enum):
    INITIALIZING = auto()
    LIVE = auto()
    PERMISSION_DENIED = auto()
    SIMULATED = auto()


class CaptureMode(Enum):
    VIRTUAL = "virtual"
    LIVE = "live"
    PLACEHOLDER = "placeholder"


@dataclass(frozen=True)
class CaptureSettings:
    flash_duration: float = 0.15
    toast_duration: float = 3.0


@dataclass(frozen=True)
class Viewport:
    width: int = DEFAULT_VIEWPORT[0]
    height: int = DEFAULT_VIEWPORT[1]
    device_pixel_ratio: float = 1.0

    @property
    def output_size(self) -> tuple[int, int]:
        return (
            int(self.width * self.device_pixel_ratio),
            int(self.height * self.device_pixel_ratio),
        )


@dataclass(frozen=True)
class CaptureRequest:
    """Inputs of one capture, frozen at the moment the shutter was pressed."""
    mode: CaptureMode
    image: ImageSource | None = None
    transform: Transform = IDENTITY
    maintain_aspect_ratio: bool = True
    viewport: Viewport = field(default_factory=Viewport)


@dataclass(frozen=True)
class CaptureResult:
    mode: CaptureMode
    data: bytes
    size: tuple[int, int]
    quality: float
    captured_at: float

    @property
    def is_virtual(self) -> bool:
        return self.mode is CaptureMode.VIRTUAL


@dataclass(frozen=True)
class Toast:
    toast_id: int
    message: str
    virtual: bool


@dataclass(frozen=True)
class AppState:
    is_active: bool = False
    selected_image: ImageSource | None = None
    transform: Transform = IDENTITY
    maintain_aspect_ratio: bool = True
    history: HistoryStack = field(default_factory=HistoryStack)
    device_status: CameraDeviceStatus | None = None
    frame_size: tuple[int, int] | None = None
    viewport: Viewport = field(default_factory=Viewport)
    settings: CaptureSettings = field(default_factory=CaptureSettings)
    flash: bool = False
    toast: Toast | None = None
    last_capture: CaptureResult | None = None
    capture_count: int = 0
    error_message: str | None = None

    @property
    def is_virtual(self) -> bool:
        return self.is_active and self.selected_image is not None

    @property
    def can_undo(self) -> bool:
        return self.history.can_undo

    @property
    def can_redo(self) -> bool:
        return self.history.can_redo


def initial_state(
    viewport_width: int = DEFAULT_VIEWPORT[0],
    viewport_height: int = DEFAULT_VIEWPORT[1],
    device_pixel_ratio: float = 1.0,
    maintain_aspect_ratio: bool = True,
    flash_duration: float = 0.15,
    toast_duration: float = 3.0,
) -> AppState:
    return AppState(
        maintain_aspect_ratio=maintain_aspect_ratio,
        viewport=Viewport(viewport_width, viewport_height, device_pixel_ratio),
        settings=CaptureSettings(flash_duration=flash_duration, toast_duration=toast_duration),
    )
