"""Mapping between the unbounded rotation and the -180..180 slider.

The slider only shows the phase of the rotation; full turns accumulated by
gestures or the 90 degree buttons are kept when the slider is moved.
"""

import math

SLIDER_MIN = -180.0
SLIDER_MAX = 180.0


def phase(rotation: float) -> float:
    return ((rotation % 360) + 540) % 360 - 180


def turns(rotation: float) -> int:
    return round((rotation - phase(rotation)) / 360)


def clamp_slider(value: float) -> float:
    return max(SLIDER_MIN, min(SLIDER_MAX, value))


def rotation_from_slider(current_rotation: float, slider_value: float) -> float:
    """Replace the phase of ``current_rotation`` with ``slider_value``."""
    return turns(current_rotation) * 360 + clamp_slider(slider_value)


def slider_position(rotation: float) -> float:
    return phase(rotation)


def display_degrees(rotation: float) -> int:
    # Sign follows the rotation, so -450 reads as -90.
    return round(math.fmod(rotation, 360))
