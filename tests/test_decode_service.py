"""
Декодирование пиксельных данных: типы BITPIX, BZERO/BSCALE, переворот строк
"""
import struct

import numpy as np
import pytest

from conftest import build_fits, card, image_cards

from fits_viewer.errors import TruncatedDataError, UnsupportedEncodingError
from fits_viewer.services.decode_service import PixelDecoder
from fits_viewer.services.header_service import HeaderParser, HeaderValidator


def decode(buffer: bytes):
    header, length = HeaderParser().parse(buffer)
    offset = HeaderValidator().validate(header, length)
    return PixelDecoder().decode(header, offset, buffer)


class TestPixelDecoder:
    """Физические значения для каждого BITPIX"""

    def test_bitpix_8_unsigned(self):
        data = bytes([0, 1, 128, 255])
        image = decode(build_fits(image_cards(4, 1, 8, [card("BZERO", "10.0"), card("BSCALE", "2.0")]), data))

        assert image.pixels.tolist() == [10.0, 12.0, 266.0, 520.0]

    def test_bitpix_16_signed(self):
        data = struct.pack(">4h", -32768, -1, 0, 32767)
        image = decode(build_fits(image_cards(4, 1, 16), data))

        assert image.pixels.tolist() == [-32768.0, -1.0, 0.0, 32767.0]

    def test_bitpix_16_unsigned_convention(self):
        """BZERO=32768 переводит int16 в диапазон uint16"""
        data = struct.pack(">3h", -32768, 0, 32767)
        image = decode(build_fits(image_cards(3, 1, 16, [card("BZERO", "32768.0")]), data))

        assert image.pixels.tolist() == [0.0, 32768.0, 65535.0]

    def test_bitpix_32_signed(self):
        data = struct.pack(">3i", -2147483648, -5, 2147483647)
        image = decode(build_fits(image_cards(3, 1, 32, [card("BSCALE", "0.5")]), data))

        assert image.pixels.tolist() == [-1073741824.0, -2.5, 1073741823.5]

    def test_bitpix_minus_32_float(self):
        data = struct.pack(">3f", 0.1, -2.5, 1e30)
        image = decode(build_fits(image_cards(3, 1, -32, [card("BZERO", "1.0"), card("BSCALE", "2.0")]), data))

        expected = [1.0 + 2.0 * float(np.float32(v)) for v in (0.1, -2.5, 1e30)]
        assert image.pixels.tolist() == expected
        assert image.pixels[0] != 1.2  # float32 rounding is visible

    def test_nan_float_passes_through(self):
        data = struct.pack(">2f", float("nan"), 1.0)
        image = decode(build_fits(image_cards(2, 1, -32), data))

        assert np.isnan(image.pixels[0])
        assert image.pixels[1] == 1.0

    def test_zero_bscale_treated_as_one(self):
        image = decode(build_fits(image_cards(1, 1, 8, [card("BSCALE", "0.0")]), bytes([7])))

        assert image.pixels.tolist() == [7.0]

    @pytest.mark.parametrize("bitpix", [64, -64, 12])
    def test_unsupported_bitpix(self, bitpix):
        with pytest.raises(UnsupportedEncodingError) as exc_info:
            decode(build_fits(image_cards(1, 1, bitpix), b"\0" * 8))
        assert exc_info.value.bitpix == bitpix

    def test_truncated_data(self):
        buffer = build_fits(image_cards(10, 10, 16), b"\0" * 50, pad_data=False)
        with pytest.raises(TruncatedDataError) as exc_info:
            decode(buffer)
        assert exc_info.value.expected == 2880 + 200
        assert exc_info.value.actual == 2880 + 50

    def test_vertical_flip(self):
        """Строка 0 результата — последняя строка на диске"""
        width, height = 3, 4
        disk = np.arange(width * height, dtype=np.uint8).reshape(height, width)
        image = decode(build_fits(image_cards(width, height, 8), disk.tobytes()))

        assert image.grid.shape == (height, width)
        assert image.grid[0].tolist() == disk[height - 1].tolist()
        for r in range(height):
            assert image.grid[height - 1 - r].tolist() == disk[r].tolist()

    def test_pixels_are_read_only(self, tiny_fits_bytes):
        image = decode(tiny_fits_bytes)
        with pytest.raises(ValueError):
            image.pixels[0] = 0.0

    def test_required_bytes(self, minimal_header_bytes):
        header, _ = HeaderParser().parse(minimal_header_bytes)
        assert PixelDecoder().required_bytes(header) == 12
