"""Преобразования координат: устройство ↔ изображение ↔ FITS.

Чистые функции без общего состояния. Координаты изображения отсчитываются
от левого верхнего угла с нуля; координаты FITS — от левого нижнего с единицы.
"""
from __future__ import annotations

import math
from typing import Optional, Tuple

from fits_viewer.models.image_model import Region


def fit_scale(display_width: float, display_height: float, image_width: int, image_height: int) -> float:
    """Масштаб, при котором изображение целиком входит в область с сохранением пропорций."""
    if image_width <= 0 or image_height <= 0 or display_width <= 0 or display_height <= 0:
        return 1.0
    if display_width / display_height > image_width / image_height:
        # full height
        return display_height / image_height
    # full width
    return display_width / image_width


def device_to_image(
    device_x: float, device_y: float, origin_x: float, origin_y: float, scale: float
) -> Tuple[int, int]:
    return (
        math.floor((device_x - origin_x) / scale),
        math.floor((device_y - origin_y) / scale),
    )


def image_to_fits(
    image_x: int, image_y: int, height: int, region_height: Optional[int] = None
) -> Tuple[int, int]:
    """Координаты изображения -> FITS.

    Если задана `region_height`, преобразуется якорь области: результат
    указывает на её нижнюю строку в системе FITS.
    """
    fits_x = image_x + 1
    fits_y = height - image_y
    if region_height:
        fits_y -= region_height - 1
    return fits_x, fits_y


def fits_to_image(fits_x: int, fits_y: int, height: int) -> Tuple[int, int]:
    return fits_x - 1, height - fits_y


def region_to_fits(region: Region, height: int) -> Tuple[int, int]:
    return image_to_fits(region.x, region.y, height, region_height=region.height)
