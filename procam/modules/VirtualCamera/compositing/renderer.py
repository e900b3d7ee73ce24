"""Re-render what the camera view shows into an encoded still."""

from __future__ import annotations

import asyncio
import time
from typing import Callable, Optional

import cv2
import numpy as np

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from ..capture.frame import LiveFrame
from ..core import CaptureMode, CaptureRequest, CaptureResult
from . import geometry
from .image_io import decode_image, encode_jpeg, solid_image

FrameSource = Callable[[], Optional[LiveFrame]]

VIRTUAL_QUALITY = 0.92
LIVE_QUALITY = 0.85
PLACEHOLDER_QUALITY = 0.80
PLACEHOLDER_SIZE = (640, 480)
PLACEHOLDER_COLOR = "#101010"


class CompositingError(Exception):
    """Raised when a capture cannot be produced from its inputs."""


def composite_virtual(image: np.ndarray, request: CaptureRequest) -> np.ndarray:
    """Draw ``image`` as the camera view shows it, over opaque black."""
    out_w, out_h = request.viewport.output_size
    if out_w <= 0 or out_h <= 0:
        raise CompositingError(f"Viewport has no area: {request.viewport}")
    img_h, img_w = image.shape[:2]
    image_size = (img_w, img_h)

    forward = geometry.forward_matrix(
        image_size, request.viewport, request.transform, request.maintain_aspect_ratio
    )
    warped = cv2.warpAffine(
        image,
        geometry.inverse_index_matrix(forward),
        (out_w, out_h),
        flags=cv2.INTER_LINEAR | cv2.WARP_INVERSE_MAP,
        borderMode=cv2.BORDER_REPLICATE,
    )
    mask = geometry.coverage_mask(forward, image_size, (out_w, out_h))
    return np.where(mask[..., None], warped, 0).astype(np.uint8)


def frame_to_rgb(frame: LiveFrame) -> np.ndarray:
    data = frame.data
    if data.ndim == 2:
        return cv2.cvtColor(data, cv2.COLOR_GRAY2RGB)
    channels = data.shape[2]
    if frame.color_format == "RGB":
        return data[..., :3]
    if channels == 4:
        return cv2.cvtColor(data, cv2.COLOR_BGRA2RGB)
    return cv2.cvtColor(data, cv2.COLOR_BGR2RGB)


class CompositingRenderer:
    def __init__(
        self,
        *,
        virtual_quality: float = VIRTUAL_QUALITY,
        live_quality: float = LIVE_QUALITY,
        placeholder_quality: float = PLACEHOLDER_QUALITY,
        placeholder_size: tuple[int, int] = PLACEHOLDER_SIZE,
        placeholder_color: str = PLACEHOLDER_COLOR,
        clock: Callable[[], float] = time.time,
        logger: LoggerLike = None,
    ) -> None:
        self.virtual_quality = virtual_quality
        self.live_quality = live_quality
        self.placeholder_quality = placeholder_quality
        self.placeholder_size = placeholder_size
        self.placeholder_color = placeholder_color
        self._clock = clock
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    async def render(
        self,
        request: CaptureRequest,
        frame_source: FrameSource | None = None,
    ) -> CaptureResult | None:
        """Produce the capture for ``request``; failures are logged, never raised."""
        try:
            frame = None
            if request.mode is CaptureMode.LIVE and frame_source is not None:
                frame = frame_source()
            return await asyncio.to_thread(self.render_sync, request, frame)
        except Exception:
            self._logger.exception("Capture failed (%s)", request.mode.value)
            return None

    def render_sync(self, request: CaptureRequest, frame: LiveFrame | None = None) -> CaptureResult:
        match request.mode:
            case CaptureMode.VIRTUAL:
                if request.image is None:
                    raise CompositingError("Virtual capture without an image")
                image = decode_image(request.image)
                raster = composite_virtual(image, request)
                return self._result(CaptureMode.VIRTUAL, raster, self.virtual_quality)

            case CaptureMode.LIVE:
                if frame is None:
                    self._logger.info("No live frame yet; capturing placeholder")
                    return self._placeholder()
                return self._result(CaptureMode.LIVE, frame_to_rgb(frame), self.live_quality)

            case _:
                return self._placeholder()

    def _placeholder(self) -> CaptureResult:
        raster = solid_image(self.placeholder_size, self.placeholder_color)
        return self._result(CaptureMode.PLACEHOLDER, raster, self.placeholder_quality)

    def _result(self, mode: CaptureMode, raster: np.ndarray, quality: float) -> CaptureResult:
        data = encode_jpeg(raster, quality)
        size = (int(raster.shape[1]), int(raster.shape[0]))
        self._logger.debug("Encoded %s capture %dx%d (%d bytes)", mode.value, size[0], size[1], len(data))
        return CaptureResult(
            mode=mode,
            data=data,
            size=size,
            quality=quality,
            captured_at=self._clock(),
        )


__all__ = [
    "CompositingError",
    "CompositingRenderer",
    "FrameSource",
    "composite_virtual",
    "frame_to_rgb",
]
