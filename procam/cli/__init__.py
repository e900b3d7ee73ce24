"""Command line helpers shared by ProCam entry points."""

from .common import (
    LOG_LEVELS,
    add_common_cli_arguments,
    install_exception_handlers,
    install_signal_handlers,
    non_negative_float,
    parse_viewport,
    positive_float,
    positive_int,
    setup_logging_from_args,
)

__all__ = [
    "LOG_LEVELS",
    "add_common_cli_arguments",
    "install_exception_handlers",
    "install_signal_handlers",
    "non_negative_float",
    "parse_viewport",
    "positive_float",
    "positive_int",
    "setup_logging_from_args",
]
