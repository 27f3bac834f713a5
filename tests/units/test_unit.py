"""
Unit tests for Unit decode/release lifecycle.
"""

import pytest

from pdf_toolkit.common.errors import DecodeFailure
from pdf_toolkit.units import Unit


class TestUnitDecode:

    def test_decode_when_valid_png_then_reports_natural_size(self, make_png):
        # Arrange
        unit = Unit(make_png(2000, 1000), "wide.png")
        assert unit.natural_size is None

        # Act
        image = unit.decode()

        # Assert
        assert image.size == (2000, 1000)
        assert unit.natural_size == (2000, 1000)
        assert unit.is_decoded

    def test_decode_is_cached(self, make_png):
        unit = Unit(make_png(), "a.png")
        assert unit.decode() is unit.decode()

    def test_decode_when_garbage_then_decode_failure(self):
        unit = Unit(b"definitely not an image", "broken.png")

        with pytest.raises(DecodeFailure, match="broken.png"):
            unit.decode()
        assert not unit.is_decoded

    def test_decode_when_truncated_then_decode_failure(self, make_png):
        data = make_png(300, 300, color="red")
        unit = Unit(data[: len(data) // 2], "half.png")

        with pytest.raises(DecodeFailure):
            unit.decode()


class TestUnitRelease:

    def test_release_drops_decoded_image(self, make_png):
        unit = Unit(make_png(), "a.png")
        unit.decode()

        unit.release()

        assert not unit.is_decoded
        assert unit.natural_size is None

    def test_release_is_idempotent(self, make_png):
        unit = Unit(make_png(), "a.png")
        unit.release()
        unit.decode()
        unit.release()
        unit.release()
        assert not unit.is_decoded

    def test_decode_after_release_reacquires(self, make_png):
        unit = Unit(make_png(40, 20), "a.png")
        unit.decode()
        unit.release()

        assert unit.decode().size == (40, 20)


class TestUnitScopedImage:

    def test_open_image_yields_decoded_pixels(self, make_png):
        unit = Unit(make_png(30, 20), "a.png")

        with unit.open_image() as image:
            assert image.size == (30, 20)
            assert image.getpixel((0, 0)) == (255, 255, 255)
        assert not unit.is_decoded

    def test_open_image_leaves_cache_alone(self, make_png):
        unit = Unit(make_png(), "a.png")

        with unit.open_image():
            assert not unit.is_decoded
        assert not unit.is_decoded

    def test_read_size_from_header(self, make_png):
        unit = Unit(make_png(2000, 1000), "wide.png")

        assert unit.read_size() == (2000, 1000)
        assert not unit.is_decoded

    def test_open_image_when_truncated_then_decode_failure(self, make_png):
        data = make_png(300, 300, color="red")
        unit = Unit(data[: len(data) // 2], "half.png")

        with pytest.raises(DecodeFailure, match="half.png"):
            with unit.open_image():
                pass

    def test_read_size_when_garbage_then_decode_failure(self):
        with pytest.raises(DecodeFailure):
            Unit(b"junk", "bad.png").read_size()
