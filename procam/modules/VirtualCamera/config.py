"""Typed configuration for the VirtualCamera module."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Mapping

from procam.core.paths import USER_CAPTURES_DIR
from procam.modules.base.config_loader import ConfigLoader
from procam.modules.base.typed_config import (
    get_pref_bool,
    get_pref_float,
    get_pref_int,
    get_pref_path,
    get_pref_str,
    load_typed_config,
)

DEFAULT_CONFIG_PATH = Path(__file__).resolve().parent / "config.txt"


@dataclass(slots=True)
class VirtualCameraConfig:
    """Typed configuration for the virtual camera."""

    # Output settings
    output_dir: Path = field(default_factory=lambda: USER_CAPTURES_DIR)
    log_level: str = "info"

    # Capture surface
    viewport_width: int = 390
    viewport_height: int = 844
    device_pixel_ratio: float = 1.0
    maintain_aspect_ratio: bool = True

    # Encoding
    virtual_quality: float = 0.92
    live_quality: float = 0.85
    placeholder_quality: float = 0.80
    placeholder_width: int = 640
    placeholder_height: int = 480
    placeholder_color: str = "#101010"

    # Feedback timing (seconds)
    flash_duration: float = 0.15
    toast_duration: float = 3.0

    # Device settings
    environment_device: int = 0
    max_probe_devices: int = 4

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any], args: Any = None) -> "VirtualCameraConfig":
        """Build config from loaded values with optional CLI overrides."""
        defaults = cls()

        config = cls(
            # Output settings
            output_dir=get_pref_path(values, "output_dir", defaults.output_dir),
            log_level=get_pref_str(values, "log_level", defaults.log_level),
            # Capture surface
            viewport_width=get_pref_int(values, "viewport_width", defaults.viewport_width),
            viewport_height=get_pref_int(values, "viewport_height", defaults.viewport_height),
            device_pixel_ratio=get_pref_float(values, "device_pixel_ratio", defaults.device_pixel_ratio),
            maintain_aspect_ratio=get_pref_bool(values, "maintain_aspect_ratio", defaults.maintain_aspect_ratio),
            # Encoding
            virtual_quality=get_pref_float(values, "virtual_quality", defaults.virtual_quality),
            live_quality=get_pref_float(values, "live_quality", defaults.live_quality),
            placeholder_quality=get_pref_float(values, "placeholder_quality", defaults.placeholder_quality),
            placeholder_width=get_pref_int(values, "placeholder_width", defaults.placeholder_width),
            placeholder_height=get_pref_int(values, "placeholder_height", defaults.placeholder_height),
            placeholder_color=get_pref_str(values, "placeholder_color", defaults.placeholder_color),
            # Feedback timing
            flash_duration=get_pref_float(values, "flash_duration", defaults.flash_duration),
            toast_duration=get_pref_float(values, "toast_duration", defaults.toast_duration),
            # Device settings
            environment_device=get_pref_int(values, "environment_device", defaults.environment_device),
            max_probe_devices=get_pref_int(values, "max_probe_devices", defaults.max_probe_devices),
        )

        if args is not None:
            config = config._apply_args_override(args)

        return config

    @classmethod
    def load(cls, config_path: Path | None = None, args: Any = None) -> "VirtualCameraConfig":
        values = ConfigLoader.load(config_path or DEFAULT_CONFIG_PATH)
        return load_typed_config(cls, values, args)

    @classmethod
    async def load_async(cls, config_path: Path | None = None, args: Any = None) -> "VirtualCameraConfig":
        values = await ConfigLoader.load_async(config_path or DEFAULT_CONFIG_PATH)
        return load_typed_config(cls, values, args)

    def _apply_args_override(self, args: Any) -> "VirtualCameraConfig":
        """Apply CLI argument overrides to config values."""
        values = asdict(self)

        arg_mappings = {
            "output_dir": "output_dir",
            "log_level": "log_level",
            "dpr": "device_pixel_ratio",
            "device": "environment_device",
        }

        for arg_name, config_key in arg_mappings.items():
            if hasattr(args, arg_name):
                val = getattr(args, arg_name)
                if val is not None:
                    values[config_key] = val

        viewport = getattr(args, "viewport", None)
        if viewport is not None:
            values["viewport_width"], values["viewport_height"] = viewport

        if getattr(args, "fill", False):
            values["maintain_aspect_ratio"] = False

        values["output_dir"] = Path(values["output_dir"]).expanduser()
        return VirtualCameraConfig(**values)

    @property
    def placeholder_size(self) -> tuple[int, int]:
        return (self.placeholder_width, self.placeholder_height)

    def to_dict(self) -> dict[str, Any]:
        """Export config values as dictionary."""
        return asdict(self)


__all__ = ["VirtualCameraConfig", "DEFAULT_CONFIG_PATH"]
