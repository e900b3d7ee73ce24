import asyncio

import pytest

from procam.modules.VirtualCamera.capture import CameraPermissionError
from procam.modules.VirtualCamera.controls import PinchEvent, DragEvent
from procam.modules.VirtualCamera.core import CameraDeviceStatus, CaptureMode, Transform
from tests.infrastructure.helpers import open_jpeg
from tests.infrastructure.mocks import MockCameraCapability, MockStream


class TestTransformEditing:
    @pytest.mark.asyncio
    async def test_pinch_then_undo(self, app_factory, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)

        app.gestures.on_pinch(PinchEvent(scale=1.5))
        assert app.state.transform.scale == 1.5
        assert not app.state.can_undo

        app.gestures.on_pinch(PinchEvent(scale=2.0, angle=30.0, last=True))
        assert app.state.transform == Transform(scale=2.0, rotation=30.0)
        assert app.state.can_undo

        app.transform.undo()
        assert app.state.transform == Transform()
        app.transform.redo()
        assert app.state.transform.scale == 2.0

    @pytest.mark.asyncio
    async def test_drag_and_reset(self, app_factory, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)

        app.gestures.on_drag(DragEvent(dx=5.0, dy=-3.0))
        app.gestures.on_drag(DragEvent(dx=12.0, dy=4.0, last=True))
        assert (app.state.transform.x, app.state.transform.y) == (12.0, 4.0)

        await app.reset_transform()
        assert app.state.transform == Transform()
        app.transform.undo()
        assert app.state.transform.x == 12.0

    @pytest.mark.asyncio
    async def test_new_image_resets_history(self, app_factory, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)
        app.gestures.zoom_in()
        await app.select_image(white_png)

        assert app.state.transform == Transform()
        assert not app.state.can_undo
        assert app.state.is_active


class TestVirtualCapture:
    @pytest.mark.asyncio
    async def test_capture_matches_viewport(self, app_factory, memory_sink, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)

        result = await app.capture()

        assert result.mode is CaptureMode.VIRTUAL
        assert result.size == (60, 80)
        assert result.quality == 0.92
        assert open_jpeg(result.data).size == (60, 80)
        assert memory_sink.delivered == [result]
        assert app.state.toast.message == "Virtual image saved"

    @pytest.mark.asyncio
    async def test_inactive_image_is_not_captured(self, app_factory, white_png):
        app = app_factory(capability=MockCameraCapability(supported=False))
        await app.select_image(white_png)
        await app.mount_camera_view()
        await app.wait_for_camera()

        result = await app.capture()

        assert result.mode is CaptureMode.PLACEHOLDER

    @pytest.mark.asyncio
    async def test_undecodable_image_fails_quietly(self, app_factory, memory_sink):
        app = app_factory()
        await app.select_image(b"not an image", activate=True)

        assert await app.capture() is None
        assert app.state.capture_count == 0
        assert app.state.toast is None
        assert memory_sink.delivered == []

    @pytest.mark.asyncio
    async def test_picker_selects_and_activates(self, app_factory, white_png):
        async def picker():
            return white_png

        app = app_factory(image_picker=picker)
        await app.toggle_virtual()

        assert app.state.selected_image == white_png
        assert app.state.is_virtual

        await app.toggle_virtual()
        assert not app.state.is_virtual
        assert app.state.selected_image == white_png


class TestCameraCapture:
    @pytest.mark.asyncio
    async def test_simulated_camera_captures_placeholder(self, app_factory):
        app = app_factory(capability=MockCameraCapability(supported=False))
        await app.mount_camera_view()
        await app.wait_for_camera()

        assert app.state.device_status == CameraDeviceStatus.SIMULATED
        result = await app.capture()

        assert result.mode is CaptureMode.PLACEHOLDER
        assert result.size == (640, 480)
        assert result.quality == 0.80
        assert app.state.toast.message == "Image saved"

    @pytest.mark.asyncio
    async def test_live_camera_captures_frame(self, app_factory):
        stream = MockStream(size=(320, 240), color=(0, 0, 255))
        app = app_factory(capability=MockCameraCapability([stream]))
        await app.mount_camera_view()
        await app.wait_for_camera()

        assert app.state.device_status == CameraDeviceStatus.LIVE
        assert app.state.frame_size == (320, 240)

        result = await app.capture()
        assert result.mode is CaptureMode.LIVE
        assert result.size == (320, 240)
        assert result.quality == 0.85
        red, green, blue = open_jpeg(result.data).convert("RGB").getpixel((160, 120))
        assert red > 200 and green < 60 and blue < 60

    @pytest.mark.asyncio
    async def test_frame_grab_error_fails_capture_quietly(self, app_factory, memory_sink):
        stream = MockStream(frame_error=RuntimeError("frame grab failed"))
        app = app_factory(capability=MockCameraCapability([stream]))
        await app.mount_camera_view()
        await app.wait_for_camera()

        assert await app.capture() is None
        assert app.state.capture_count == 0
        assert app.state.error_message == "live capture failed"
        assert memory_sink.delivered == []

        await asyncio.sleep(0.1)
        assert app.state.flash is False

    @pytest.mark.asyncio
    async def test_permission_denied_then_retry(self, app_factory):
        capability = MockCameraCapability([CameraPermissionError("denied"), MockStream()])
        app = app_factory(capability=capability)
        await app.mount_camera_view()
        await app.wait_for_camera()

        assert app.state.device_status == CameraDeviceStatus.PERMISSION_DENIED
        assert (await app.capture()).mode is CaptureMode.PLACEHOLDER

        await app.retry_camera()
        await app.wait_for_camera()
        assert app.state.device_status == CameraDeviceStatus.LIVE

    @pytest.mark.asyncio
    async def test_shutdown_stops_stream(self, app_factory):
        stream = MockStream()
        capability = MockCameraCapability([stream])
        app = app_factory(capability=capability)
        await app.mount_camera_view()
        await app.wait_for_camera()

        await app.shutdown()

        assert stream.stopped
        assert capability.released == [stream]
        assert app.state.device_status is None


class TestFeedback:
    @pytest.mark.asyncio
    async def test_flash_and_toast_clear_themselves(self, app_factory, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)
        await app.capture()

        assert app.state.flash is True
        assert app.state.toast is not None

        await asyncio.sleep(0.2)
        assert app.state.flash is False
        assert app.state.toast is None

    @pytest.mark.asyncio
    async def test_second_capture_keeps_newest_toast(self, app_factory, white_png):
        app = app_factory()
        await app.select_image(white_png, activate=True)
        await app.capture()
        await app.capture()

        assert app.state.toast.toast_id == 2
        assert app.state.capture_count == 2


class TestFileOutput:
    @pytest.mark.asyncio
    async def test_capture_is_written_to_output_dir(self, app_factory, fast_config, white_png):
        app = app_factory(output_sink=None)
        await app.select_image(white_png, activate=True)
        await app.capture()

        path = app.last_output_path
        assert path is not None
        assert path.parent == fast_config.output_dir
        assert path.name.startswith("vcam_capture_")
        assert open_jpeg(path.read_bytes()).size == (60, 80)
