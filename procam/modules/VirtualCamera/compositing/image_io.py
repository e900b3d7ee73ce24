from __future__ import annotations

import base64
import io
from pathlib import Path

import numpy as np
from PIL import Image, ImageColor, ImageOps

from ..core import ImageSource


class ImageDecodeError(ValueError):
    pass


def _read_source(source: ImageSource) -> bytes:
    if isinstance(source, (bytes, bytearray, memoryview)):
        return bytes(source)
    if isinstance(source, str) and source.startswith("data:"):
        header, _, payload = source.partition(",")
        if not payload:
            raise ImageDecodeError("Empty data URI")
        if header.endswith(";base64"):
            try:
                return base64.b64decode(payload, validate=False)
            except ValueError as exc:
                raise ImageDecodeError(f"Invalid base64 payload: {exc}") from exc
        raise ImageDecodeError("Only base64 data URIs are supported")
    path = Path(source).expanduser()
    try:
        return path.read_bytes()
    except OSError as exc:
        raise ImageDecodeError(f"Cannot read image {path}: {exc}") from exc


def _flatten(image: Image.Image) -> Image.Image:
    if image.mode == "P" and "transparency" in image.info:
        image = image.convert("RGBA")
    if image.mode in ("RGBA", "LA", "PA"):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (0, 0, 0))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def decode_image(source: ImageSource) -> np.ndarray:
    """Decode an image handle to an upright RGB array (transparency on black)."""
    data = _read_source(source)
    try:
        with Image.open(io.BytesIO(data)) as image:
            image.load()
            upright = ImageOps.exif_transpose(image)
            rgb = _flatten(upright)
    except (OSError, Image.DecompressionBombError) as exc:
        raise ImageDecodeError(f"Unsupported image data: {exc}") from exc
    if rgb.width == 0 or rgb.height == 0:
        raise ImageDecodeError("Image has no pixels")
    return np.asarray(rgb, dtype=np.uint8)


def jpeg_quality(quality: float) -> int:
    return max(1, min(100, int(round(quality * 100))))


def encode_jpeg(rgb: np.ndarray, quality: float) -> bytes:
    buffer = io.BytesIO()
    Image.fromarray(np.ascontiguousarray(rgb, dtype=np.uint8)).save(
        buffer, format="JPEG", quality=jpeg_quality(quality)
    )
    return buffer.getvalue()


def parse_color(color: str) -> tuple[int, int, int]:
    try:
        return ImageColor.getrgb(color)[:3]
    except ValueError as exc:
        raise ValueError(f"Invalid colour '{color}'") from exc


def solid_image(size: tuple[int, int], color: str) -> np.ndarray:
    width, height = size
    frame = np.empty((height, width, 3), dtype=np.uint8)
    frame[:, :] = parse_color(color)
    return frame
