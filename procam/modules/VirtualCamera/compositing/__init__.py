from .image_io import ImageDecodeError, decode_image, encode_jpeg
from .renderer import (
    CompositingError,
    CompositingRenderer,
    FrameSource,
    LIVE_QUALITY,
    PLACEHOLDER_COLOR,
    PLACEHOLDER_QUALITY,
    PLACEHOLDER_SIZE,
    VIRTUAL_QUALITY,
    composite_virtual,
)

__all__ = [
    "CompositingError",
    "CompositingRenderer",
    "FrameSource",
    "ImageDecodeError",
    "LIVE_QUALITY",
    "PLACEHOLDER_COLOR",
    "PLACEHOLDER_QUALITY",
    "PLACEHOLDER_SIZE",
    "VIRTUAL_QUALITY",
    "composite_virtual",
    "decode_image",
    "encode_jpeg",
]
