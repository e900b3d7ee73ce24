"""Affine geometry for re-rendering the on-screen preview.

Coordinates are continuous: pixel ``i`` covers ``[i, i + 1)`` and its centre
is ``i + 0.5``. Matrices are 3x3 homogeneous and compose right to left.
"""

from __future__ import annotations

import math

import numpy as np

from ..core import Transform, Viewport

# Slack for float error when testing whether a pixel centre lands on the image.
COVERAGE_EPSILON = 1e-6


def translate(tx: float, ty: float) -> np.ndarray:
    return np.array([[1.0, 0.0, tx], [0.0, 1.0, ty], [0.0, 0.0, 1.0]])


def scale(sx: float, sy: float | None = None) -> np.ndarray:
    sy = sx if sy is None else sy
    return np.array([[sx, 0.0, 0.0], [0.0, sy, 0.0], [0.0, 0.0, 1.0]])


def rotate(degrees: float) -> np.ndarray:
    theta = math.radians(degrees)
    c, s = math.cos(theta), math.sin(theta)
    return np.array([[c, -s, 0.0], [s, c, 0.0], [0.0, 0.0, 1.0]])


def render_size(
    image_size: tuple[int, int],
    view_size: tuple[float, float],
    maintain_aspect_ratio: bool,
) -> tuple[float, float]:
    """Size the image is drawn at before the user transform.

    With the aspect ratio kept the image covers the view (the short side
    fits, the other overflows); otherwise it is stretched to the view.
    """
    img_w, img_h = image_size
    view_w, view_h = view_size
    if not maintain_aspect_ratio:
        return float(view_w), float(view_h)
    if img_w / img_h > view_w / view_h:
        return img_w * (view_h / img_h), float(view_h)
    return float(view_w), img_h * (view_w / img_w)


def forward_matrix(
    image_size: tuple[int, int],
    viewport: Viewport,
    transform: Transform,
    maintain_aspect_ratio: bool,
) -> np.ndarray:
    """Map source image coordinates to output raster coordinates."""
    img_w, img_h = image_size
    view_w, view_h = viewport.width, viewport.height
    render_w, render_h = render_size(image_size, (view_w, view_h), maintain_aspect_ratio)
    return (
        scale(viewport.device_pixel_ratio)
        @ translate(view_w / 2, view_h / 2)
        @ translate(transform.x, transform.y)
        @ rotate(transform.rotation)
        @ scale(transform.scale)
        @ translate(-render_w / 2, -render_h / 2)
        @ scale(render_w / img_w, render_h / img_h)
    )


def inverse_index_matrix(forward: np.ndarray) -> np.ndarray:
    """2x3 matrix taking output pixel indices to source pixel indices.

    Suitable for ``cv2.warpAffine`` with ``WARP_INVERSE_MAP``.
    """
    inverse = translate(-0.5, -0.5) @ np.linalg.inv(forward) @ translate(0.5, 0.5)
    return inverse[:2, :]


def coverage_mask(
    forward: np.ndarray,
    image_size: tuple[int, int],
    output_size: tuple[int, int],
) -> np.ndarray:
    """Boolean mask of output pixels whose centre falls on the image."""
    img_w, img_h = image_size
    out_w, out_h = output_size
    inverse = np.linalg.inv(forward)
    xs = np.arange(out_w, dtype=np.float64) + 0.5
    ys = np.arange(out_h, dtype=np.float64) + 0.5
    grid_x, grid_y = np.meshgrid(xs, ys)
    u = inverse[0, 0] * grid_x + inverse[0, 1] * grid_y + inverse[0, 2]
    v = inverse[1, 0] * grid_x + inverse[1, 1] * grid_y + inverse[1, 2]
    eps = COVERAGE_EPSILON
    return (u >= -eps) & (u <= img_w + eps) & (v >= -eps) & (v <= img_h + eps)
