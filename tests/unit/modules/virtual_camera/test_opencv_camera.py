import time

import cv2
import numpy as np
import pytest

from procam.modules.VirtualCamera.capture import (
    CameraAcquisitionError,
    CameraUnsupportedError,
    ENVIRONMENT_FACING,
    OpenCVCamera,
    UNCONSTRAINED,
)
from procam.modules.VirtualCamera.capture import opencv_camera


class FakeVideoCapture:
    opened_indexes: set[int] = set()

    def __init__(self, index: int):
        self.index = index
        self.released = False
        self._opened = index in self.opened_indexes

    def isOpened(self) -> bool:
        return self._opened and not self.released

    def get(self, prop: int) -> float:
        if prop == cv2.CAP_PROP_FRAME_WIDTH:
            return 64.0
        if prop == cv2.CAP_PROP_FRAME_HEIGHT:
            return 48.0
        return 0.0

    def read(self):
        time.sleep(0.001)
        return True, np.full((48, 64, 3), 127, dtype=np.uint8)

    def release(self) -> None:
        self.released = True


@pytest.fixture
def fake_devices(monkeypatch):
    def install(*indexes: int):
        FakeVideoCapture.opened_indexes = set(indexes)
        monkeypatch.setattr(opencv_camera.cv2, "VideoCapture", FakeVideoCapture)
        monkeypatch.setattr(OpenCVCamera, "is_supported", lambda self: True)
        monkeypatch.setattr(OpenCVCamera, "_check_access", lambda self, index: None)
    return install


class TestOpenCVCamera:
    @pytest.mark.asyncio
    async def test_unconstrained_takes_first_open_device(self, fake_devices):
        fake_devices(2)
        camera = OpenCVCamera(max_probe_devices=4)

        stream = await camera.acquire(UNCONSTRAINED)
        try:
            assert stream.device == 2
            assert stream.frame_size == (64, 48)
        finally:
            camera.release(stream)
        assert not stream.is_running

    @pytest.mark.asyncio
    async def test_environment_uses_configured_index(self, fake_devices):
        fake_devices(0)
        camera = OpenCVCamera(environment_device=1)

        with pytest.raises(CameraAcquisitionError):
            await camera.acquire(ENVIRONMENT_FACING)

    @pytest.mark.asyncio
    async def test_stream_publishes_frames(self, fake_devices):
        fake_devices(0)
        camera = OpenCVCamera()
        stream = await camera.acquire(ENVIRONMENT_FACING)
        try:
            deadline = time.monotonic() + 2.0
            while stream.latest_frame() is None and time.monotonic() < deadline:
                time.sleep(0.01)
            frame = stream.latest_frame()
            assert frame is not None
            assert frame.size == (64, 48)
            assert frame.color_format == "BGR"
        finally:
            camera.release(stream)

    def test_unsupported_platform(self, monkeypatch):
        monkeypatch.setattr(OpenCVCamera, "is_supported", lambda self: False)
        with pytest.raises(CameraUnsupportedError):
            OpenCVCamera()._open(UNCONSTRAINED)


@pytest.mark.hardware
class TestOpenCVCameraHardware:
    @pytest.mark.asyncio
    async def test_real_camera_delivers_frames(self):
        camera = OpenCVCamera()
        assert camera.is_supported()
        stream = await camera.acquire(UNCONSTRAINED)
        try:
            deadline = time.monotonic() + 5.0
            while stream.latest_frame() is None and time.monotonic() < deadline:
                time.sleep(0.05)
            assert stream.latest_frame() is not None
        finally:
            camera.release(stream)
