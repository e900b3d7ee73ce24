"""Translate drag/pinch streams and button presses into transform writes."""

from dataclasses import dataclass, replace

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from ..core import IDENTITY, Transform, clamp_scale, rotation_from_slider
from .transform_state import TransformState

ZOOM_STEP = 0.1
ROTATE_STEP = 90.0


@dataclass(frozen=True)
class DragEvent:
    """Cumulative movement since the drag started."""
    dx: float
    dy: float
    last: bool = False


@dataclass(frozen=True)
class PinchEvent:
    """Cumulative scale factor and rotation (degrees) since the pinch started."""
    scale: float
    angle: float = 0.0
    last: bool = False


class GestureInterpreter:
    def __init__(self, transform_state: TransformState, *, logger: LoggerLike = None):
        self._state = transform_state
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._drag_origin: Transform | None = None
        self._pinch_origin: Transform | None = None

    @property
    def gesture_active(self) -> bool:
        return self._drag_origin is not None or self._pinch_origin is not None

    # ------------------------------------------------------------------
    # Continuous gestures

    def on_drag(self, event: DragEvent) -> Transform:
        if self._drag_origin is None:
            self._drag_origin = self._state.read()
        origin = self._drag_origin
        transform = replace(self._state.read(), x=origin.x + event.dx, y=origin.y + event.dy)
        return self._apply(transform, event.last, "drag")

    def on_pinch(self, event: PinchEvent) -> Transform:
        if self._pinch_origin is None:
            self._pinch_origin = self._state.read()
        origin = self._pinch_origin
        transform = replace(
            self._state.read(),
            scale=clamp_scale(origin.scale * event.scale),
            rotation=origin.rotation + event.angle,
        )
        return self._apply(transform, event.last, "pinch")

    def _apply(self, transform: Transform, last: bool, kind: str) -> Transform:
        self._state.preview(transform)
        if last:
            self._state.commit(transform)
            if kind == "drag":
                self._drag_origin = None
            else:
                self._pinch_origin = None
            self._logger.debug("%s committed: %s", kind, transform)
        return self._state.read()

    # ------------------------------------------------------------------
    # Discrete controls

    def _step(self, transform: Transform) -> Transform:
        self._state.preview(transform)
        self._state.commit(transform)
        return self._state.read()

    def adjust_zoom(self, delta: float) -> Transform:
        current = self._state.read()
        return self._step(replace(current, scale=clamp_scale(current.scale + delta)))

    def zoom_in(self) -> Transform:
        return self.adjust_zoom(ZOOM_STEP)

    def zoom_out(self) -> Transform:
        return self.adjust_zoom(-ZOOM_STEP)

    def rotate(self, degrees: float) -> Transform:
        current = self._state.read()
        return self._step(replace(current, rotation=current.rotation + degrees))

    def rotate_cw(self) -> Transform:
        return self.rotate(ROTATE_STEP)

    def rotate_ccw(self) -> Transform:
        return self.rotate(-ROTATE_STEP)

    def reset(self) -> Transform:
        return self._step(IDENTITY)

    def slider_input(self, value: float) -> Transform:
        current = self._state.read()
        self._state.preview(replace(current, rotation=rotation_from_slider(current.rotation, value)))
        return self._state.read()

    def slider_release(self) -> Transform:
        current = self._state.read()
        self._state.commit(current)
        return current
