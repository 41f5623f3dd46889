"""
Pytest configuration and fixtures: синтетические FITS-буферы и изображения
"""
import os
import sys
from typing import Iterable, Optional, Sequence

import numpy as np
import pytest

# Add project root to path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if project_root not in sys.path:
    sys.path.insert(0, project_root)

from fits_viewer.models.header_model import FitsHeader
from fits_viewer.models.image_model import FitsImage


def card(key: str, value: Optional[str] = None, comment: Optional[str] = None) -> str:
    """Одна 80-символьная карточка: KEY = value / comment."""
    if value is None:
        text = key.ljust(8)
    elif value.startswith("'"):
        text = f"{key:<8}= {value:<20}"
    else:
        text = f"{key:<8}= {value:>20}"
    if value is not None and comment:
        text += f" / {comment}"
    return text.ljust(80)[:80]


def build_fits(cards: Iterable[str], data: bytes = b"", pad_data: bool = True) -> bytes:
    """Заголовок из карточек + END, выровненный по 2880, затем данные."""
    header = "".join(cards) + "END".ljust(80)
    header += " " * (-len(header) % 2880)
    if pad_data:
        data += b"\0" * (-len(data) % 2880)
    return header.encode("ascii") + data


def image_cards(width: int, height: int, bitpix: int, extra: Sequence[str] = ()) -> list:
    return [
        card("SIMPLE", "T"),
        card("BITPIX", str(bitpix)),
        card("NAXIS", "2"),
        card("NAXIS1", str(width)),
        card("NAXIS2", str(height)),
        *extra,
    ]


def make_image(rows) -> FitsImage:
    """FitsImage из списка строк (строка 0 — верх кадра)."""
    grid = np.asarray(rows, dtype=np.float64)
    height, width = grid.shape
    return FitsImage(header=FitsHeader(), width=width, height=height, pixels=grid.reshape(-1).copy())


@pytest.fixture
def minimal_header_bytes():
    """SIMPLE=T, NAXIS1=4, NAXIS2=3, BITPIX=8, END"""
    return build_fits(
        [card("SIMPLE", "T"), card("NAXIS1", "4"), card("NAXIS2", "3"), card("BITPIX", "8")],
        data=bytes(range(12)),
    )


@pytest.fixture
def tiny_fits_bytes():
    """8-битное изображение 2×2, на диске [10, 20, 30, 40] (нижняя строка первой)."""
    return build_fits(image_cards(2, 2, 8), data=bytes([10, 20, 30, 40]))


@pytest.fixture
def tiny_fits_file(tmp_path, tiny_fits_bytes):
    path = tmp_path / "tiny.fits"
    path.write_bytes(tiny_fits_bytes)
    return path
