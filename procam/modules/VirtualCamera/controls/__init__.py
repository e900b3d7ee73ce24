from .transform_state import TransformState
from .gestures import DragEvent, GestureInterpreter, PinchEvent

__all__ = ["TransformState", "GestureInterpreter", "DragEvent", "PinchEvent"]
