"""Helpers shared by ProCam modules."""

from .config_loader import ConfigLoader
from .typed_config import (
    ModuleConfig,
    get_pref_bool,
    get_pref_float,
    get_pref_int,
    get_pref_path,
    get_pref_str,
    load_typed_config,
)

__all__ = [
    "ConfigLoader",
    "ModuleConfig",
    "get_pref_bool",
    "get_pref_float",
    "get_pref_int",
    "get_pref_path",
    "get_pref_str",
    "load_typed_config",
]
