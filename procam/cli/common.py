from __future__ import annotations

import argparse
import asyncio
import contextlib
import logging
import signal
import sys
from pathlib import Path
from typing import Any, Awaitable, Callable, Optional, Tuple

from procam.core.logging_config import configure_logging
from procam.core.logging_utils import get_module_logger


LOG_LEVELS: dict[str, int] = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}


def add_common_cli_arguments(
    parser: argparse.ArgumentParser,
    *,
    default_output: Path | str | None = None,
    include_config: bool = True,
) -> None:
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path(default_output) if default_output is not None else None,
        help="Directory where captures will be written",
    )

    parser.add_argument(
        "--log-level",
        choices=sorted(LOG_LEVELS.keys()),
        default=None,
        help="Logging verbosity (default: from config, else info)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Optional path to write logs to (rotated)",
    )

    if include_config:
        parser.add_argument(
            "--config",
            type=Path,
            default=None,
            help="Configuration file (key = value) to load instead of the module default",
        )


def _positive_number(value: str, typ: type, name: str):
    """Generic positive number validator for argparse."""
    try:
        parsed = typ(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Value must be a {name}") from exc
    if parsed <= 0:
        raise argparse.ArgumentTypeError("Value must be positive")
    return parsed

def positive_int(value: str) -> int:
    return _positive_number(value, int, "integer")

def positive_float(value: str) -> float:
    return _positive_number(value, float, "number")


def non_negative_float(value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("Value must be a number") from exc
    if parsed < 0:
        raise argparse.ArgumentTypeError("Value must not be negative")
    return parsed


def parse_viewport(value: str) -> Tuple[int, int]:
    """Parse ``WIDTHxHEIGHT`` (e.g. ``390x844``)."""
    parts = value.lower().split("x")
    if len(parts) != 2:
        raise argparse.ArgumentTypeError("Viewport must look like WIDTHxHEIGHT, e.g. 390x844")
    width, height = (positive_int(part.strip()) for part in parts)
    return width, height


def setup_logging_from_args(args: Any, default_level: str = "info") -> logging.Logger:
    level = getattr(args, "log_level", None) or default_level
    configure_logging(
        level,
        console=True,
        log_file=getattr(args, "log_file", None),
    )
    return get_module_logger("cli")


def install_exception_handlers(
    logger: logging.Logger,
    loop: Optional[asyncio.AbstractEventLoop] = None
) -> None:
    def handle_exception(exc_type, exc_value, exc_traceback):
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_traceback)
            return
        logger.critical(
            "Uncaught exception",
            exc_info=(exc_type, exc_value, exc_traceback)
        )

    sys.excepthook = handle_exception

    if loop is not None:
        def handle_asyncio_exception(loop, context):
            exception = context.get('exception')
            message = context.get('message', 'Unhandled asyncio exception')
            if exception:
                logger.error("Asyncio exception: %s", message, exc_info=exception)
            else:
                logger.error("Asyncio error: %s, context: %s", message, context)

        loop.set_exception_handler(handle_asyncio_exception)


def install_signal_handlers(
    shutdown: Callable[[], Awaitable[None]],
    loop: asyncio.AbstractEventLoop,
) -> asyncio.Event:
    """Register SIGINT/SIGTERM handlers that run ``shutdown`` once."""

    stop_event = asyncio.Event()

    def signal_handler():
        if stop_event.is_set():
            return
        stop_event.set()
        loop.create_task(shutdown())

    for sig in (signal.SIGINT, signal.SIGTERM):
        with contextlib.suppress(NotImplementedError):
            loop.add_signal_handler(sig, signal_handler)

    return stop_event
