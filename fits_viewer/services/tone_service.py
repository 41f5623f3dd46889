"""Тоновое отображение: точки чёрного/белого, функции растяжки, RGBA-растр.

Функции растяжки векторизованы и возвращают «сырую» яркость без ограничения
диапазона; обрезка до [0, 255] происходит только при сборке растра.
"""
from __future__ import annotations

import logging
from typing import Callable, Dict, Optional

import numpy as np
from PIL import Image

from fits_viewer.errors import UnsupportedStretchError
from fits_viewer.models.image_model import FitsImage, Region
from fits_viewer.models.stats_model import RegionStats, ToneParams

logger = logging.getLogger(__name__)

StretchFunction = Callable[[np.ndarray, ToneParams], np.ndarray]

CONTRAST_SIGMAS = 6.0


def stretch_linear(pixels: np.ndarray, params: ToneParams) -> np.ndarray:
    return 255.0 * (pixels - params.black) / params.range


def stretch_square(pixels: np.ndarray, params: ToneParams) -> np.ndarray:
    v = (pixels - params.black) / params.range
    return 255.0 * v * v


def stretch_sqrt(pixels: np.ndarray, params: ToneParams) -> np.ndarray:
    # NaN below black
    with np.errstate(invalid="ignore"):
        return 255.0 * np.sqrt((pixels - params.black) / params.range)


STRETCHES: Dict[str, StretchFunction] = {
    "linear": stretch_linear,
    "square": stretch_square,
    "sqrt": stretch_sqrt,
}


class ToneMapper:
    def find_black_and_white(self, contrast: float, stats: Optional[RegionStats]) -> ToneParams:
        """Точки чёрного и белого вокруг среднего: ±6σ при contrast=0, сжимаются к среднему при росте контраста.

        Без статистики возвращает вырожденную «всё тёмное» пару (255, 0).
        """
        if stats is None:
            return ToneParams(black=255.0, white=0.0, range=1.0)
        contrast = float(np.clip(contrast, 0.0, 1.0))
        spread = CONTRAST_SIGMAS * stats.stddev * (1.0 - contrast)
        black = max(stats.min, stats.mean - spread)
        white = min(stats.max, stats.mean + spread)
        return ToneParams(black=black, white=white, range=max(1.0, white - black))

    def stretch_function(self, name: str) -> StretchFunction:
        try:
            return STRETCHES[name]
        except KeyError:
            raise UnsupportedStretchError(name, tuple(STRETCHES)) from None

    def stretch(self, pixels: np.ndarray | float, params: ToneParams, name: str = "linear") -> np.ndarray:
        """Яркость для значений пикселей без ограничения диапазона."""
        func = self.stretch_function(name)
        return func(np.asarray(pixels, dtype=np.float64), params)

    def render_region(
        self,
        image: FitsImage,
        region: Region,
        params: ToneParams,
        stretch: str = "linear",
        clamp: bool = True,
    ) -> np.ndarray:
        """Собирает RGBA-растр (height, width, 4) uint8 для области.

        Args:
            clamp: Округлить и ограничить яркость диапазоном [0, 255], NaN -> 0.
                При False значения округляются и берутся по модулю 256.
        """
        func = self.stretch_function(stretch)
        region = region.clipped(image.width, image.height)
        values = image.grid[region.y:region.y + region.height, region.x:region.x + region.width]
        gray = np.nan_to_num(np.rint(func(values, params)), nan=0.0, posinf=255.0, neginf=0.0)
        if clamp:
            luma = np.clip(gray, 0, 255).astype(np.uint8)
        else:
            luma = (gray.astype(np.int64) & 0xFF).astype(np.uint8)

        raster = np.empty(values.shape + (4,), dtype=np.uint8)
        raster[..., 0] = luma  # red
        raster[..., 1] = luma  # green
        raster[..., 2] = luma  # blue
        raster[..., 3] = 255   # alpha
        logger.debug("Растр %s, растяжка %s, black=%g white=%g", region, stretch, params.black, params.white)
        return raster

    def to_pil(self, raster: np.ndarray) -> Image.Image:
        return Image.fromarray(raster)
