from dataclasses import dataclass, replace

SCALE_MIN = 0.5
SCALE_MAX = 5.0

# Commits closer than this to the current history entry are dropped.
DEDUPE_OFFSET = 0.1
DEDUPE_SCALE = 0.001
DEDUPE_ROTATION = 0.1


def clamp_scale(scale: float) -> float:
    return max(SCALE_MIN, min(SCALE_MAX, scale))


@dataclass(frozen=True)
class Transform:
    """Affine placement of the selected image: offset in logical pixels,
    uniform scale and rotation in degrees (never wrapped)."""

    scale: float = 1.0
    x: float = 0.0
    y: float = 0.0
    rotation: float = 0.0

    def clamped(self) -> "Transform":
        scale = clamp_scale(self.scale)
        if scale == self.scale:
            return self
        return replace(self, scale=scale)

    def is_near(self, other: "Transform") -> bool:
        return (
            abs(self.x - other.x) < DEDUPE_OFFSET
            and abs(self.y - other.y) < DEDUPE_OFFSET
            and abs(self.scale - other.scale) < DEDUPE_SCALE
            and abs(self.rotation - other.rotation) < DEDUPE_ROTATION
        )


IDENTITY = Transform()
