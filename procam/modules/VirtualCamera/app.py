"""Application root wiring the store to devices, rendering and output."""

from __future__ import annotations

from typing import Optional

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from .capture import CameraCapability, CameraDeviceManager, OpenCVCamera
from .compositing import CompositingRenderer
from .config import VirtualCameraConfig
from .controls import GestureInterpreter, TransformState
from .core import (
    AppState, CaptureResult, ImageSource, Store, create_store, initial_state,
    SelectImage, ClearImage, ToggleActive, VirtualToggleRequested, ToggleAspectRatio,
    ResetTransform, ViewportResized,
    CameraViewMounted, CameraViewUnmounted, CaptureRequested, Shutdown,
)
from .infra import EffectExecutor, FileOutputSink, ImagePicker, OutputSink


class VirtualCameraApp:
    """One virtual camera session.

    Owns the store and the collaborators its effects need. UI code calls
    the methods here (or the ``transform``/``gestures`` handles) and reads
    ``state``; it never mutates state directly.
    """

    def __init__(
        self,
        config: VirtualCameraConfig | None = None,
        *,
        capability: Optional[CameraCapability] = None,
        output_sink: OutputSink | None = None,
        image_picker: ImagePicker | None = None,
        renderer: CompositingRenderer | None = None,
        logger: LoggerLike = None,
    ) -> None:
        self.config = config or VirtualCameraConfig()
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)

        self.store: Store = create_store(
            initial_state(
                viewport_width=self.config.viewport_width,
                viewport_height=self.config.viewport_height,
                device_pixel_ratio=self.config.device_pixel_ratio,
                maintain_aspect_ratio=self.config.maintain_aspect_ratio,
                flash_duration=self.config.flash_duration,
                toast_duration=self.config.toast_duration,
            ),
            logger=self._logger.getChild("Store"),
        )

        if capability is None:
            capability = OpenCVCamera(
                environment_device=self.config.environment_device,
                max_probe_devices=self.config.max_probe_devices,
                logger=self._logger.getChild("OpenCVCamera"),
            )
        self.devices = CameraDeviceManager(capability, logger=self._logger.getChild("Devices"))
        self.renderer = renderer or CompositingRenderer(
            virtual_quality=self.config.virtual_quality,
            live_quality=self.config.live_quality,
            placeholder_quality=self.config.placeholder_quality,
            placeholder_size=self.config.placeholder_size,
            placeholder_color=self.config.placeholder_color,
            logger=self._logger.getChild("Renderer"),
        )
        if output_sink is None:
            output_sink = FileOutputSink(self.config.output_dir, logger=self._logger.getChild("Output"))

        self.executor = EffectExecutor(
            self.devices,
            self.renderer,
            output_sink=output_sink,
            image_picker=image_picker,
            logger=self._logger.getChild("Effects"),
        )
        self.store.set_effect_handler(self.executor)

        self.transform = TransformState(self.store)
        self.gestures = GestureInterpreter(self.transform, logger=self._logger.getChild("Gestures"))

    @property
    def state(self) -> AppState:
        return self.store.state

    # ------------------------------------------------------------------
    # Image selection

    async def select_image(self, image: ImageSource, *, activate: bool = False) -> None:
        await self.store.dispatch(SelectImage(image, activate=activate))

    async def clear_image(self) -> None:
        await self.store.dispatch(ClearImage())

    async def set_active(self, active: bool) -> None:
        if self.state.is_active != active:
            await self.store.dispatch(ToggleActive())

    async def toggle_virtual(self) -> None:
        """Virtual toggle on the camera screen; asks for an image if none is set."""
        await self.store.dispatch(VirtualToggleRequested())

    async def toggle_aspect_ratio(self) -> None:
        await self.store.dispatch(ToggleAspectRatio())

    async def reset_transform(self) -> None:
        await self.store.dispatch(ResetTransform())

    async def resize_viewport(self, width: int, height: int, device_pixel_ratio: float = 1.0) -> None:
        await self.store.dispatch(ViewportResized(width, height, device_pixel_ratio))

    # ------------------------------------------------------------------
    # Camera view

    async def mount_camera_view(self) -> None:
        await self.store.dispatch(CameraViewMounted())

    async def unmount_camera_view(self) -> None:
        await self.store.dispatch(CameraViewUnmounted())

    async def retry_camera(self) -> None:
        await self.unmount_camera_view()
        await self.mount_camera_view()

    async def wait_for_camera(self) -> None:
        await self.devices.wait_idle()

    # ------------------------------------------------------------------
    # Capture

    async def capture(self) -> CaptureResult | None:
        """Capture what the camera view shows now; None when capture failed."""
        count = self.state.capture_count
        await self.store.dispatch(CaptureRequested())
        if self.state.capture_count == count:
            return None
        return self.state.last_capture

    @property
    def last_output_path(self):
        return self.executor.last_output_path

    async def shutdown(self) -> None:
        await self.store.dispatch(Shutdown())
