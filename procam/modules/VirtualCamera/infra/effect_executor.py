import asyncio
from pathlib import Path
from typing import Awaitable, Callable, Optional

from procam.core.asyncio_utils import cancel_tasks, create_logged_task
from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from ..capture import CameraDeviceManager
from ..compositing import CompositingRenderer
from ..core import (
    Action, Effect,
    SelectImage, FlashEnded, CaptureCompleted, CaptureFailed, ToastDismissed,
    AcquireCamera, ReleaseCamera,
    RenderCapture, ScheduleFlashEnd, ScheduleToastDismiss, DeliverOutput,
    OpenImagePicker, CleanupResources,
    CaptureResult, ImageSource,
)
from .output_sink import OutputSink

Dispatch = Callable[[Action], Awaitable[None]]
ImagePicker = Callable[[], Awaitable[Optional[ImageSource]]]


class EffectExecutor:
    def __init__(
        self,
        devices: CameraDeviceManager,
        renderer: CompositingRenderer,
        output_sink: OutputSink | None = None,
        image_picker: ImagePicker | None = None,
        logger: LoggerLike = None,
    ):
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._devices = devices
        self._renderer = renderer
        self._output_sink = output_sink
        self._image_picker = image_picker
        self._timers: set[asyncio.Task] = set()
        self._toast_timer: asyncio.Task | None = None
        self.last_output_path: Path | None = None

    def set_image_picker(self, picker: ImagePicker | None) -> None:
        self._image_picker = picker

    async def __call__(
        self,
        effect: Effect,
        dispatch: Dispatch
    ) -> None:
        match effect:
            case AcquireCamera():
                self._devices.mount(dispatch)

            case ReleaseCamera():
                await self._devices.unmount()

            case RenderCapture(request):
                await self._render(request, dispatch)

            case ScheduleFlashEnd(delay):
                self._schedule(delay, FlashEnded(), dispatch, "flash end")

            case ScheduleToastDismiss(toast_id, delay):
                if self._toast_timer is not None and not self._toast_timer.done():
                    self._toast_timer.cancel()
                self._toast_timer = self._schedule(
                    delay, ToastDismissed(toast_id), dispatch, f"toast {toast_id} dismiss"
                )

            case DeliverOutput(result):
                await self._deliver(result)

            case OpenImagePicker():
                await self._pick_image(dispatch)

            case CleanupResources():
                await self._cleanup()

    async def _render(self, request, dispatch: Dispatch) -> None:
        result = await self._renderer.render(request, self._devices.snapshot)
        if result is None:
            await dispatch(CaptureFailed(f"{request.mode.value} capture failed"))
            return
        await dispatch(CaptureCompleted(result))

    def _schedule(self, delay: float, action: Action, dispatch: Dispatch, context: str) -> asyncio.Task:
        async def _fire() -> None:
            await asyncio.sleep(delay)
            await dispatch(action)

        return create_logged_task(_fire(), logger=self._logger, context=context, pending=self._timers)

    async def _deliver(self, result: CaptureResult) -> None:
        if self._output_sink is None:
            self._logger.debug("No output sink configured; capture kept in memory only")
            return
        try:
            self.last_output_path = await self._output_sink.deliver(result)
        except Exception as e:
            self._logger.error("Output sink failed: %s", e, exc_info=True)
            self.last_output_path = None

    async def _pick_image(self, dispatch: Dispatch) -> None:
        if self._image_picker is None:
            self._logger.info("Image requested but no picker is configured")
            return
        try:
            image = await self._image_picker()
        except Exception as e:
            self._logger.error("Image picker failed: %s", e, exc_info=True)
            return
        if image is None:
            self._logger.debug("Image picker cancelled")
            return
        await dispatch(SelectImage(image, activate=True))

    async def _cleanup(self) -> None:
        await cancel_tasks(self._timers)
        self._toast_timer = None
        await self._devices.shutdown()
        self._logger.info("Virtual camera resources released")
