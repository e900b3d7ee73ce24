"""Camera capability backed by ``cv2.VideoCapture``."""

from __future__ import annotations

import asyncio
import os
import sys
import threading
import time
from pathlib import Path
from typing import Optional

import cv2

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from .device import (
    CameraAcquisitionError,
    CameraPermissionError,
    CameraUnsupportedError,
    MediaStream,
    VideoConstraints,
)
from .frame import LiveFrame


def _device_node(index: int) -> Path:
    return Path(f"/dev/video{index}")


class OpenCVStream:
    """Reads frames on a daemon thread and keeps only the newest one."""

    def __init__(self, cap, device: int, *, logger: LoggerLike = None) -> None:
        self.device = device
        self._cap = cap
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._lock = threading.Lock()
        self._latest: Optional[LiveFrame] = None
        self._frame_number = 0
        self._running = False
        self._thread: Optional[threading.Thread] = None
        width = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        height = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        self._frame_size: Optional[tuple[int, int]] = (width, height) if width and height else None

    def start(self) -> None:
        if self._running:
            return
        self._running = True
        self._thread = threading.Thread(
            target=self._capture_loop, name=f"opencv-camera-{self.device}", daemon=True
        )
        self._thread.start()

    def stop(self) -> None:
        self._running = False
        if self._thread and self._thread.is_alive() and self._thread is not threading.current_thread():
            self._thread.join(timeout=2.0)
        self._thread = None
        if self._cap is not None:
            self._cap.release()
            self._cap = None
            self._logger.debug("Released camera %s", self.device)

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def frame_size(self) -> Optional[tuple[int, int]]:
        return self._frame_size

    def latest_frame(self) -> Optional[LiveFrame]:
        with self._lock:
            return self._latest

    def _capture_loop(self) -> None:
        while self._running and self._cap is not None and self._cap.isOpened():
            ret, data = self._cap.read()
            if not ret or data is None:
                time.sleep(0.005)
                continue
            self._frame_number += 1
            frame = LiveFrame(data=data, frame_number=self._frame_number, timestamp=time.time())
            with self._lock:
                self._latest = frame
                self._frame_size = frame.size


class OpenCVCamera:
    """Maps browser-style constraints onto local video devices.

    Environment-facing requests open the configured device index; an
    unconstrained request takes the first index that opens.
    """

    def __init__(
        self,
        *,
        environment_device: int = 0,
        max_probe_devices: int = 4,
        logger: LoggerLike = None,
    ) -> None:
        self.environment_device = environment_device
        self.max_probe_devices = max(1, max_probe_devices)
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

    def is_supported(self) -> bool:
        if not hasattr(cv2, "VideoCapture"):
            return False
        if sys.platform.startswith("linux"):
            return any(Path("/dev").glob("video*"))
        return True

    async def acquire(self, constraints: VideoConstraints) -> MediaStream:
        stream = await asyncio.to_thread(self._open, constraints)
        stream.start()
        return stream

    def release(self, stream: MediaStream) -> None:
        stream.stop()

    def _candidates(self, constraints: VideoConstraints) -> list[int]:
        if constraints.is_constrained:
            return [self.environment_device]
        return list(range(self.max_probe_devices))

    def _check_access(self, index: int) -> None:
        if not sys.platform.startswith("linux"):
            return
        node = _device_node(index)
        if node.exists() and not os.access(node, os.R_OK | os.W_OK):
            raise CameraPermissionError(f"Permission denied opening {node}")

    def _open(self, constraints: VideoConstraints) -> OpenCVStream:
        if not self.is_supported():
            raise CameraUnsupportedError("No video devices available")

        denied: Optional[CameraPermissionError] = None
        for index in self._candidates(constraints):
            try:
                self._check_access(index)
            except CameraPermissionError as exc:
                denied = exc
                continue

            cap = cv2.VideoCapture(index)
            if cap is not None and cap.isOpened():
                self._logger.info("Opened camera %d (%s)", index, constraints.facing_mode or "any")
                return OpenCVStream(cap, index, logger=self._logger)
            if cap is not None:
                cap.release()

        if denied is not None:
            raise denied
        raise CameraAcquisitionError(
            f"No camera matched constraints (facing_mode={constraints.facing_mode})"
        )


__all__ = ["OpenCVCamera", "OpenCVStream"]
