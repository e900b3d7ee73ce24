"""VirtualCamera module entry point.

``capture`` renders a transformed still headlessly; ``camera`` opens the
device camera, lets it settle and captures one frame (or the placeholder
when no camera is usable).
"""

from __future__ import annotations

import argparse
import asyncio
from pathlib import Path
from typing import Optional

from procam.cli.common import (
    add_common_cli_arguments,
    install_exception_handlers,
    install_signal_handlers,
    non_negative_float,
    parse_viewport,
    positive_float,
    setup_logging_from_args,
)
from procam.core.logging_utils import get_module_logger

from .app import VirtualCameraApp
from .config import VirtualCameraConfig
from .core import Transform

DISPLAY_NAME = "VirtualCamera"

logger = get_module_logger(__name__)


def parse_args(argv: Optional[list[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(prog="procam", description=f"{DISPLAY_NAME} module")
    subparsers = parser.add_subparsers(dest="command", required=True)

    capture = subparsers.add_parser("capture", help="Render a transformed image to JPEG")
    add_common_cli_arguments(capture)
    capture.add_argument("--image", type=Path, required=True, help="Image file to place in the view")
    capture.add_argument("--scale", type=float, default=1.0, help="Zoom factor (clamped to 0.5-5)")
    capture.add_argument("--x", type=float, default=0.0, help="Horizontal offset in logical pixels")
    capture.add_argument("--y", type=float, default=0.0, help="Vertical offset in logical pixels")
    capture.add_argument("--rotation", type=float, default=0.0, help="Rotation in degrees")
    capture.add_argument(
        "--fill",
        action="store_true",
        default=False,
        help="Stretch the image to the view instead of covering it",
    )
    capture.add_argument("--viewport", type=parse_viewport, default=None, help="View size as WIDTHxHEIGHT")
    capture.add_argument("--dpr", type=positive_float, default=None, help="Device pixel ratio")

    camera = subparsers.add_parser("camera", help="Capture one frame from the device camera")
    add_common_cli_arguments(camera)
    camera.add_argument(
        "--settle",
        type=non_negative_float,
        default=1.0,
        help="Seconds to let the camera deliver frames before capturing",
    )
    camera.add_argument("--device", type=int, default=None, help="Device index for the environment camera")

    args = parser.parse_args(argv)
    if args.command == "capture" and not args.image.exists():
        parser.error(f"image not found: {args.image}")
    return args


async def _run_capture(app: VirtualCameraApp, args: argparse.Namespace) -> bool:
    await app.select_image(args.image, activate=True)
    app.transform.commit(Transform(scale=args.scale, x=args.x, y=args.y, rotation=args.rotation))
    result = await app.capture()
    return result is not None


async def _run_camera(app: VirtualCameraApp, args: argparse.Namespace) -> bool:
    await app.mount_camera_view()
    await app.wait_for_camera()
    logger.info("Camera status: %s", app.state.device_status.name if app.state.device_status else "unmounted")
    if args.settle:
        await asyncio.sleep(args.settle)
    result = await app.capture()
    return result is not None


async def main_async(argv: Optional[list[str]] = None) -> int:
    args = parse_args(argv)
    config = await VirtualCameraConfig.load_async(args.config, args)
    setup_logging_from_args(args, default_level=config.log_level)

    loop = asyncio.get_running_loop()
    install_exception_handlers(logger.logger, loop)

    app = VirtualCameraApp(config, logger=logger)
    install_signal_handlers(app.shutdown, loop)
    logger.info("Starting %s %s (output: %s)", DISPLAY_NAME, args.command, config.output_dir)

    try:
        if args.command == "capture":
            ok = await _run_capture(app, args)
        else:
            ok = await _run_camera(app, args)
    finally:
        await app.shutdown()

    if not ok:
        logger.error("Capture failed")
        return 1
    if app.last_output_path is not None:
        print(app.last_output_path)
    return 0


def main(argv: Optional[list[str]] = None) -> int:
    return asyncio.run(main_async(argv))


if __name__ == "__main__":
    raise SystemExit(main())
