"""Декодирование пиксельных данных FITS в физические значения.

Данные на диске идут снизу вверх; декодер переворачивает их по вертикали,
чтобы строка 0 результата была верхней строкой кадра.
"""
from __future__ import annotations

import logging

import numpy as np

from fits_viewer.errors import TruncatedDataError, UnsupportedEncodingError
from fits_viewer.models.header_model import FitsHeader
from fits_viewer.models.image_model import FitsImage

logger = logging.getLogger(__name__)

# FITS is big-endian
BITPIX_DTYPES = {
    8: np.dtype(">u1"),
    16: np.dtype(">i2"),
    32: np.dtype(">i4"),
    -32: np.dtype(">f4"),
}


class PixelDecoder:
    def required_bytes(self, header: FitsHeader) -> int:
        """Сколько байт пиксельных данных описывает заголовок."""
        return header.width * header.height * abs(header.bitpix) // 8

    def decode(self, header: FitsHeader, offset: int, buffer: bytes) -> FitsImage:
        """Декодирует буфер в `FitsImage`.

        Args:
            header: Проверенный заголовок.
            offset: Начало данных (кратно 2880).
            buffer: Весь файл.

        Raises:
            UnsupportedEncodingError: BITPIX не 8, 16, 32 или -32.
            TruncatedDataError: буфер короче offset + требуемого числа байт.
        """
        bitpix = header.bitpix
        dtype = BITPIX_DTYPES.get(bitpix)
        if dtype is None:
            raise UnsupportedEncodingError(bitpix)

        width, height = header.width, header.height
        nbytes = self.required_bytes(header)
        if len(buffer) < offset + nbytes:
            raise TruncatedDataError(expected=offset + nbytes, actual=len(buffer))

        raw = np.frombuffer(buffer, dtype=dtype, count=width * height, offset=offset)
        bzero, bscale = header.bzero, header.bscale
        physical = bzero + bscale * raw.astype(np.float64)

        flipped = np.flipud(physical.reshape(height, width))
        pixels = np.ascontiguousarray(flipped).reshape(-1)

        logger.debug(
            "Декодировано %d × %d, BITPIX=%d, BZERO=%g, BSCALE=%g", width, height, bitpix, bzero, bscale
        )
        return FitsImage(header=header, width=width, height=height, pixels=pixels)
