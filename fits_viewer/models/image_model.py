"""Модели данных для изображений.

Принципы:
- SRP: только структура данных, без логики декодирования и статистики.
- Чистый код: неизменяемость (`frozen=True`, read-only массивы) для предсказуемости.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np

from fits_viewer.models.header_model import FitsHeader


@dataclass(frozen=True)
class FitsImage:
    """Неизменяемое декодированное изображение и его метаданные.

    Fields:
        header: Разобранный заголовок.
        width: Ширина, px (NAXIS1).
        height: Высота, px (NAXIS2).
        pixels: Плоский массив физических значений float64, индекс row*width+col,
            строка 0 — верх отображаемого кадра.
        path: Путь к исходному файлу, если изображение загружено с диска.
        size_bytes: Размер файла, если доступен.
    """
    header: FitsHeader
    width: int
    height: int
    pixels: np.ndarray
    path: Optional[Path] = None
    size_bytes: Optional[int] = None

    def __post_init__(self) -> None:
        if self.pixels.shape != (self.width * self.height,):
            raise ValueError(
                f"ожидалось {self.width * self.height} пикселей, получено {self.pixels.shape}"
            )
        self.pixels.flags.writeable = False

    @property
    def grid(self) -> np.ndarray:
        """Двумерное представление (height, width) без копирования."""
        return self.pixels.reshape(self.height, self.width)

    def value_at(self, x: int, y: int) -> float:
        return float(self.pixels[y * self.width + x])

    def contains(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height


@dataclass(frozen=True)
class PixelLocation:
    x: int
    y: int


@dataclass(frozen=True)
class Region:
    """Прямоугольная область интереса в координатах изображения."""
    x: int
    y: int
    width: int
    height: int

    @classmethod
    def full(cls, image: FitsImage) -> "Region":
        return cls(0, 0, image.width, image.height)

    @property
    def count(self) -> int:
        return max(0, self.width) * max(0, self.height)

    def fits_within(self, parent_width: int, parent_height: int) -> bool:
        return (
            self.x >= 0
            and self.y >= 0
            and self.width >= 0
            and self.height >= 0
            and self.x + self.width <= parent_width
            and self.y + self.height <= parent_height
        )

    def clipped(self, parent_width: int, parent_height: int) -> "Region":
        """Пересечение с прямоугольником [0, parent_width) × [0, parent_height)."""
        x0 = min(max(0, self.x), parent_width)
        y0 = min(max(0, self.y), parent_height)
        x1 = min(max(x0, self.x + self.width), parent_width)
        y1 = min(max(y0, self.y + self.height), parent_height)
        return Region(x0, y0, x1 - x0, y1 - y0)
