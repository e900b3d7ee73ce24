"""Destinations for finished captures."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional, Protocol

import aiofiles

from procam.core.logging_utils import LoggerLike, ensure_structured_logger

from ..core import CaptureResult

CAPTURE_PREFIX = "vcam_capture_"


class OutputSink(Protocol):
    async def deliver(self, result: CaptureResult) -> Optional[Path]: ...


def capture_filename(result: CaptureResult) -> str:
    return f"{CAPTURE_PREFIX}{int(round(result.captured_at * 1000))}.jpg"


class FileOutputSink:
    """Writes each capture as a JPEG file into ``output_dir``."""

    def __init__(self, output_dir: Path, *, logger: LoggerLike = None) -> None:
        self.output_dir = Path(output_dir)
        self._logger = ensure_structured_logger(logger, fallback_name=__name__)
        self._write_lock = asyncio.Lock()

    def _target_path(self, result: CaptureResult) -> Path:
        path = self.output_dir / capture_filename(result)
        counter = 1
        while path.exists():
            path = self.output_dir / f"{Path(capture_filename(result)).stem}_{counter}.jpg"
            counter += 1
        return path

    async def deliver(self, result: CaptureResult) -> Optional[Path]:
        async with self._write_lock:
            try:
                await asyncio.to_thread(self.output_dir.mkdir, parents=True, exist_ok=True)
                path = await asyncio.to_thread(self._target_path, result)
                async with aiofiles.open(path, 'wb') as f:
                    await f.write(result.data)
            except OSError as e:
                self._logger.error("Failed to save capture to %s: %s", self.output_dir, e)
                return None

        self._logger.info(
            "Saved %s capture %dx%d to %s", result.mode.value, result.size[0], result.size[1], path
        )
        return path


__all__ = ["OutputSink", "FileOutputSink", "capture_filename", "CAPTURE_PREFIX"]
