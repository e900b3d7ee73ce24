"""Camera acquisition lifecycle for the camera view.

Acquisition runs as a background task started on mount. Its outcome is
reported to the store as ``CameraLive``, ``CameraPermissionDenied`` or
``CameraUnavailable``. Every continuation checks the mount generation so a
result that arrives after unmount is dropped and its stream stopped.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Optional

from procam.core.asyncio_utils import cancel_tasks, create_logged_task
from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from ..core import Action, CameraLive, CameraPermissionDenied, CameraUnavailable
from .device import (
    ENVIRONMENT_FACING,
    UNCONSTRAINED,
    CameraAcquisitionError,
    CameraCapability,
    CameraError,
    CameraPermissionError,
    CameraUnsupportedError,
    MediaStream,
    VideoConstraints,
)
from .frame import LiveFrame

Dispatch = Callable[[Action], Awaitable[None]]


class CameraDeviceManager:
    def __init__(
        self,
        capability: Optional[CameraCapability],
        *,
        preferred: VideoConstraints = ENVIRONMENT_FACING,
        fallback: VideoConstraints = UNCONSTRAINED,
        logger: LoggerLike = None,
    ) -> None:
        self._capability = capability
        self._preferred = preferred
        self._fallback = fallback
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._stream: Optional[MediaStream] = None
        self._generation = 0
        self._mounted = False
        self._pending: set[asyncio.Task] = set()
        self._orphans: set[asyncio.Task] = set()

    @property
    def mounted(self) -> bool:
        return self._mounted

    @property
    def has_stream(self) -> bool:
        return self._stream is not None

    def _alive(self, generation: int) -> bool:
        return self._mounted and generation == self._generation

    def mount(self, dispatch: Dispatch) -> asyncio.Task:
        if self._mounted:
            self._logger.debug("Camera view already mounted")
        self._generation += 1
        self._mounted = True
        generation = self._generation
        return create_logged_task(
            self._acquire(generation, dispatch),
            logger=self._logger,
            context=f"camera acquisition #{generation}",
            pending=self._pending,
        )

    async def unmount(self) -> None:
        self._mounted = False
        self._generation += 1
        stream, self._stream = self._stream, None
        if stream is not None:
            await self._release(stream)

    async def wait_idle(self) -> None:
        """Wait for in-flight acquisitions to settle."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    async def shutdown(self) -> None:
        await self.unmount()
        await cancel_tasks(self._pending)

    def snapshot(self) -> Optional[LiveFrame]:
        """Copy of the newest live frame, or None when nothing is streaming."""
        stream = self._stream
        if stream is None:
            return None
        frame = stream.latest_frame()
        return frame.copy() if frame is not None else None

    # ------------------------------------------------------------------
    # Acquisition

    async def _attempt(self, constraints: VideoConstraints) -> MediaStream:
        # A backend may still return a stream after the caller is cancelled.
        inner = asyncio.ensure_future(self._capability.acquire(constraints))
        try:
            return await asyncio.shield(inner)
        except asyncio.CancelledError:
            inner.add_done_callback(self._release_orphan)
            raise
        except CameraError:
            raise
        except Exception as exc:
            raise CameraAcquisitionError(str(exc)) from exc

    async def _acquire(self, generation: int, dispatch: Dispatch) -> None:
        capability = self._capability
        if capability is None or not capability.is_supported():
            self._logger.info("Camera capability unavailable; using simulated feed")
            if self._alive(generation):
                await dispatch(CameraUnavailable("Camera not supported"))
            return

        try:
            stream = await self._attempt(self._preferred)
        except CameraPermissionError as exc:
            await self._report_denied(generation, dispatch, exc)
            return
        except CameraUnsupportedError as exc:
            await self._report_unavailable(generation, dispatch, exc)
            return
        except CameraError as exc:
            self._logger.warning("Preferred camera failed (%s); retrying without constraints", exc)
            if not self._alive(generation):
                return
            try:
                stream = await self._attempt(self._fallback)
            except CameraPermissionError as fallback_exc:
                await self._report_denied(generation, dispatch, fallback_exc)
                return
            except CameraError as fallback_exc:
                await self._report_unavailable(generation, dispatch, fallback_exc)
                return

        if not self._alive(generation):
            self._logger.debug("Camera acquired after unmount; stopping late stream")
            await self._release(stream)
            return

        self._stream = stream
        self._logger.info("Camera live (%s)", stream.frame_size)
        await dispatch(CameraLive(stream.frame_size))

    async def _report_denied(self, generation: int, dispatch: Dispatch, exc: CameraError) -> None:
        self._logger.warning("Camera permission denied: %s", exc)
        if self._alive(generation):
            await dispatch(CameraPermissionDenied(str(exc)))

    async def _report_unavailable(self, generation: int, dispatch: Dispatch, exc: CameraError) -> None:
        self._logger.warning("Camera unavailable, falling back to simulated feed: %s", exc)
        if self._alive(generation):
            await dispatch(CameraUnavailable(str(exc)))

    def _release_orphan(self, inner: asyncio.Future) -> None:
        if inner.cancelled() or inner.exception() is not None:
            return
        self._logger.debug("Camera acquired after shutdown; stopping orphaned stream")
        create_logged_task(
            self._release(inner.result()),
            logger=self._logger,
            context="orphaned stream release",
            pending=self._orphans,
        )

    async def _release(self, stream: MediaStream) -> None:
        try:
            if self._capability is not None:
                await asyncio.to_thread(self._capability.release, stream)
            else:
                await asyncio.to_thread(stream.stop)
        except Exception:
            self._logger.exception("Failed to stop camera stream")


__all__ = ["CameraDeviceManager"]
