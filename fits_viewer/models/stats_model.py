"""Производные величины: статистика области и параметры тоновой кривой.

Объекты пересчитываются по запросу и нигде не сохраняются.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from fits_viewer.models.image_model import PixelLocation

HISTOGRAM_BINS = 128


@dataclass(frozen=True)
class RegionStats:
    """Статистика области интереса.

    Fields:
        count: Число пикселей в области.
        min, max: Экстремумы и координаты их первого вхождения (min_at, max_at).
        sum, mean, stddev: Сумма, среднее и СКО по накопителям первого прохода.
        median: Медиана, приближённая по гистограмме.
        range: max(1, max - min).
        histogram: 128 корзин на отрезке [min, max].
        histogram_peak: Наибольшее заполнение корзины.
    """
    count: int
    min: float
    min_at: PixelLocation
    max: float
    max_at: PixelLocation
    sum: float
    mean: float
    median: float
    stddev: float
    range: float
    histogram: Tuple[int, ...]
    histogram_peak: int


@dataclass(frozen=True)
class ToneParams:
    black: float
    white: float
    range: float


@dataclass(frozen=True)
class PixelSample:
    """Значение под курсором: координаты изображения и FITS, физическое значение, яркость."""
    x: int
    y: int
    fits_x: int
    fits_y: int
    value: float
    gray: int
