import numpy as np
import pytest

from procam.modules.VirtualCamera.compositing.image_io import (
    ImageDecodeError,
    decode_image,
    encode_jpeg,
    jpeg_quality,
    parse_color,
    solid_image,
)
from tests.infrastructure.helpers import make_data_uri, make_image_bytes, open_jpeg


class TestDecodeImage:
    def test_bytes(self):
        pixels = decode_image(make_image_bytes((40, 20), (255, 0, 0)))
        assert pixels.shape == (20, 40, 3)
        assert pixels.dtype == np.uint8
        assert tuple(pixels[0, 0]) == (255, 0, 0)

    def test_data_uri(self):
        uri = make_data_uri(make_image_bytes((8, 6), (0, 255, 0)))
        pixels = decode_image(uri)
        assert pixels.shape == (6, 8, 3)
        assert tuple(pixels[3, 3]) == (0, 255, 0)

    def test_path(self, tmp_path):
        path = tmp_path / "photo.png"
        path.write_bytes(make_image_bytes((5, 9)))
        assert decode_image(path).shape == (9, 5, 3)
        assert decode_image(str(path)).shape == (9, 5, 3)

    def test_exif_orientation_is_applied(self):
        # Orientation 6 means the stored image must be rotated 90 degrees to display.
        data = make_image_bytes((40, 20), (200, 200, 200), fmt="JPEG", orientation=6)
        assert decode_image(data).shape == (40, 20, 3)

    def test_transparency_flattens_to_black(self):
        data = make_image_bytes((4, 4), (255, 255, 255, 0), mode="RGBA")
        pixels = decode_image(data)
        assert pixels.shape == (4, 4, 3)
        assert pixels.max() == 0

    def test_garbage_raises(self):
        with pytest.raises(ImageDecodeError):
            decode_image(b"not an image")

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(ImageDecodeError):
            decode_image(tmp_path / "missing.png")

    def test_non_base64_data_uri_raises(self):
        with pytest.raises(ImageDecodeError):
            decode_image("data:image/png,rawbytes")


class TestEncode:
    @pytest.mark.parametrize("quality, expected", [(0.92, 92), (0.85, 85), (0.80, 80), (2.0, 100)])
    def test_quality_mapping(self, quality, expected):
        assert jpeg_quality(quality) == expected

    def test_encode_produces_jpeg_of_same_size(self):
        data = encode_jpeg(solid_image((64, 48), "#101010"), 0.8)
        assert data[:2] == b"\xff\xd8"
        image = open_jpeg(data)
        assert image.format == "JPEG"
        assert image.size == (64, 48)


class TestColors:
    def test_parse_hex(self):
        assert parse_color("#101010") == (16, 16, 16)

    def test_parse_invalid(self):
        with pytest.raises(ValueError):
            parse_color("not-a-colour")

    def test_solid_image(self):
        frame = solid_image((3, 2), "#ff0000")
        assert frame.shape == (2, 3, 3)
        assert (frame == np.array([255, 0, 0], dtype=np.uint8)).all()
