"""Typed configuration protocol for module configs with type coercion helpers."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping, Protocol, TypeVar, runtime_checkable


@runtime_checkable
class ModuleConfig(Protocol):
    """Protocol for typed module configuration classes.

    Module config dataclasses implement:
    - from_mapping(): Build config from loaded ``key = value`` data
    - to_dict(): Export config as dict (for logging and CLI echo)
    """

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], args: Any = None) -> "ModuleConfig":
        """Construct config from loaded values with optional CLI args override."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        ...


T = TypeVar("T", bound=ModuleConfig)


def load_typed_config(
    config_cls: type[T],
    values: Mapping[str, Any],
    args: Any = None,
) -> T:
    return config_cls.from_mapping(values, args)


# ---------------------------------------------------------------------------
# Type coercion helpers for from_mapping() implementations
# ---------------------------------------------------------------------------


def get_pref_str(values: Mapping[str, Any], key: str, default: str) -> str:
    val = values.get(key)
    return str(val) if val is not None else default


def get_pref_int(values: Mapping[str, Any], key: str, default: int) -> int:
    val = values.get(key)
    if val is None:
        return default
    try:
        return int(val)
    except (ValueError, TypeError):
        return default


def get_pref_float(values: Mapping[str, Any], key: str, default: float) -> float:
    val = values.get(key)
    if val is None:
        return default
    try:
        return float(val)
    except (ValueError, TypeError):
        return default


def get_pref_bool(values: Mapping[str, Any], key: str, default: bool) -> bool:
    val = values.get(key)
    if val is None:
        return default
    if isinstance(val, bool):
        return val
    return str(val).strip().lower() in {"true", "1", "yes", "on"}


def get_pref_path(values: Mapping[str, Any], key: str, default: Path) -> Path:
    val = values.get(key)
    if val is None:
        return default
    text = str(val).strip()
    return Path(text).expanduser() if text else default


__all__ = [
    "ModuleConfig",
    "load_typed_config",
    "get_pref_str",
    "get_pref_int",
    "get_pref_float",
    "get_pref_bool",
    "get_pref_path",
]
