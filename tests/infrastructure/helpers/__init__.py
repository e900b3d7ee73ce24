"""Test helpers for the ProCam test suite.

Usage:
    from tests.infrastructure.helpers import make_image_bytes, open_jpeg

    data = make_image_bytes((40, 20), (255, 0, 0))
"""

from tests.infrastructure.helpers.images import make_data_uri, make_image_bytes, open_jpeg

__all__ = [
    "make_data_uri",
    "make_image_bytes",
    "open_jpeg",
]
