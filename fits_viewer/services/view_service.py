"""Сеанс просмотра: текущее изображение, контраст, растяжка, область интереса.

Единственное состояние конвейера живёт здесь. Новое изображение сначала
полностью декодируется и только потом заменяет текущее, поэтому читатели
никогда не видят частично загруженный кадр.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import numpy as np
from PIL import Image

from fits_viewer.config import DEFAULT_SETTINGS, ViewerSettings
from fits_viewer.models.image_model import FitsImage, Region
from fits_viewer.models.stats_model import PixelSample, RegionStats, ToneParams
from fits_viewer.services.coordinate_service import image_to_fits
from fits_viewer.services.image_service import ImageService
from fits_viewer.services.stats_service import StatisticsEngine
from fits_viewer.services.tone_service import ToneMapper

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RenderResult:
    """Растр области и производные величины, по которым он построен."""
    region: Region
    raster: np.ndarray
    stats: RegionStats
    tone: ToneParams
    stretch: str

    def to_pil(self) -> Image.Image:
        return Image.fromarray(self.raster)


class ViewService:
    def __init__(self, settings: ViewerSettings = DEFAULT_SETTINGS, image_service: Optional[ImageService] = None) -> None:
        self.settings = settings
        self._image_service = image_service or ImageService(settings)
        self._stats_engine = StatisticsEngine(
            exclude_zero_pixels=settings.exclude_zero_pixels, strict_bounds=settings.strict_bounds
        )
        self._tone_mapper = ToneMapper()

        self._image: Optional[FitsImage] = None
        self._region: Optional[Region] = None
        self._contrast: float = settings.contrast
        self._stretch: str = settings.stretch

    # ---- Состояние ----
    @property
    def image(self) -> Optional[FitsImage]:
        return self._image

    @property
    def contrast(self) -> float:
        return self._contrast

    @property
    def stretch(self) -> str:
        return self._stretch

    @property
    def region(self) -> Optional[Region]:
        """Текущая область; по умолчанию — весь кадр."""
        if self._region is None and self._image is not None:
            return Region.full(self._image)
        return self._region

    # ---- Загрузка ----
    def open_file(self, file_path: str | Path) -> FitsImage:
        image = self._image_service.load_image(file_path)
        self._replace_image(image)
        return image

    def open_bytes(self, buffer: bytes) -> FitsImage:
        image = self._image_service.load_bytes(buffer)
        self._replace_image(image)
        return image

    def _replace_image(self, image: FitsImage) -> None:
        self._image = image
        self._region = None

    # ---- Параметры ----
    def set_contrast(self, contrast: float) -> None:
        self._contrast = float(np.clip(contrast, 0.0, 1.0))

    def set_stretch(self, name: str) -> None:
        """Меняет функцию растяжки.

        Raises:
            UnsupportedStretchError: если имя неизвестно; текущая растяжка не меняется.
        """
        self._tone_mapper.stretch_function(name)
        self._stretch = name

    def set_region(self, region: Optional[Region]) -> None:
        self._region = region

    # ---- Вычисления ----
    def stats(self) -> Optional[RegionStats]:
        if self._image is None:
            return None
        return self._stats_engine.compute(self._image, self.region)

    def tone(self, stats: Optional[RegionStats] = None) -> ToneParams:
        if stats is None:
            stats = self.stats()
        return self._tone_mapper.find_black_and_white(self._contrast, stats)

    def render(self) -> Optional[RenderResult]:
        """Статистика, точки чёрного/белого и RGBA-растр текущей области."""
        if self._image is None:
            return None
        region = self.region
        stats = self._stats_engine.compute(self._image, region)
        tone = self._tone_mapper.find_black_and_white(self._contrast, stats)
        raster = self._tone_mapper.render_region(
            self._image, region, tone, self._stretch, clamp=self.settings.clamp_output
        )
        return RenderResult(region=region, raster=raster, stats=stats, tone=tone, stretch=self._stretch)

    def sample(self, x: int, y: int, tone: Optional[ToneParams] = None) -> Optional[PixelSample]:
        """Значение пикселя (x, y) в координатах изображения или None вне кадра."""
        image = self._image
        if image is None or not image.contains(x, y):
            return None
        if tone is None:
            tone = self.tone()
        value = image.value_at(x, y)
        luma = float(self._tone_mapper.stretch(value, tone, self._stretch))
        gray = 0 if np.isnan(luma) else int(np.clip(np.rint(luma), 0, 255))
        fits_x, fits_y = image_to_fits(x, y, image.height)
        return PixelSample(x=x, y=y, fits_x=fits_x, fits_y=fits_y, value=value, gray=gray)
