"""Статистика области интереса: экстремумы, среднее, СКО, гистограмма, медиана.

СКО считается по двум накопителям первого прохода (sum, sum²),
медиана приближается по гистограмме из 128 корзин.
"""
from __future__ import annotations

import logging
import math
from typing import Optional

import numpy as np

from fits_viewer.errors import RegionError
from fits_viewer.models.image_model import FitsImage, PixelLocation, Region
from fits_viewer.models.stats_model import HISTOGRAM_BINS, RegionStats

logger = logging.getLogger(__name__)


class StatisticsEngine:
    """Считает `RegionStats` для прямоугольной области.

    Args:
        exclude_zero_pixels: В sum и sum² попадают только «истинные» значения:
            нули и NaN пропускаются, но учитываются в count.
        strict_bounds: Область за пределами кадра — ошибка, а не предупреждение.
    """

    def __init__(self, exclude_zero_pixels: bool = True, strict_bounds: bool = False) -> None:
        self.exclude_zero_pixels = exclude_zero_pixels
        self.strict_bounds = strict_bounds

    def compute(
        self,
        image: FitsImage,
        region: Optional[Region] = None,
        parent_width: Optional[int] = None,
        parent_height: Optional[int] = None,
    ) -> RegionStats:
        """Статистика области `region` (по умолчанию весь кадр).

        Raises:
            RegionError: только при `strict_bounds=True`, если область вне родителя.
        """
        if region is None:
            region = Region.full(image)
        parent_width = image.width if parent_width is None else parent_width
        parent_height = image.height if parent_height is None else parent_height

        if not region.fits_within(parent_width, parent_height):
            if self.strict_bounds:
                raise RegionError(region, parent_width, parent_height)
            logger.warning(
                "Область %s выходит за пределы %d × %d, будет обрезана", region, parent_width, parent_height
            )
        region = region.clipped(min(parent_width, image.width), min(parent_height, image.height))

        values = image.grid[region.y:region.y + region.height, region.x:region.x + region.width]
        flat = values.reshape(-1)
        count = int(flat.size)
        if count == 0:
            return self._empty(region)

        finite = np.isfinite(flat)
        if finite.any():
            imin = int(np.argmin(np.where(finite, flat, np.inf)))
            imax = int(np.argmax(np.where(finite, flat, -np.inf)))
            vmin, vmax = float(flat[imin]), float(flat[imax])
        else:
            imin = imax = 0
            vmin = vmax = math.nan

        # ---- Pass 1: накопители ----
        if self.exclude_zero_pixels:
            used = flat[(flat != 0) & ~np.isnan(flat)]
        else:
            used = flat
        total = float(used.sum())
        total_sq = float(np.square(used).sum())
        mean = total / count
        radicand = count * total_sq - total * total
        if radicand < 0:
            # rounding only
            radicand = 0.0
        stddev = math.sqrt(radicand) / count if not math.isnan(radicand) else math.nan
        value_range = max(1.0, vmax - vmin) if finite.any() else 1.0

        # ---- Pass 2: гистограмма ----
        histogram = np.zeros(HISTOGRAM_BINS, dtype=np.int64)
        if finite.any():
            bins = np.floor((HISTOGRAM_BINS - 1) * (flat[finite] - vmin) / value_range).astype(np.int64)
            histogram = np.bincount(bins, minlength=HISTOGRAM_BINS)
        peak = int(histogram.max())

        # NaN samples are in count but not in the histogram
        median = self._median(histogram, int(finite.sum()), vmin, value_range)

        width = region.width
        stats = RegionStats(
            count=count,
            min=vmin,
            min_at=PixelLocation(region.x + imin % width, region.y + imin // width),
            max=vmax,
            max_at=PixelLocation(region.x + imax % width, region.y + imax // width),
            sum=total,
            mean=mean,
            median=median,
            stddev=stddev,
            range=value_range,
            histogram=tuple(int(c) for c in histogram),
            histogram_peak=peak,
        )
        logger.debug(
            "Статистика %s: min=%g max=%g mean=%g stddev=%g median=%g",
            region, stats.min, stats.max, stats.mean, stats.stddev, stats.median,
        )
        return stats

    @staticmethod
    def _median(histogram: np.ndarray, binned: int, vmin: float, value_range: float) -> float:
        """Медиана по гистограмме: проходим корзины, пока не наберём половину
        попавших в неё (конечных) пикселей."""
        if math.isnan(vmin):
            return math.nan
        cumulative = np.cumsum(histogram)
        walked = int(np.searchsorted(cumulative, binned / 2, side="left")) + 1
        walked = min(walked, len(histogram))
        return float(math.floor(vmin + value_range * walked / len(histogram)))

    @staticmethod
    def _empty(region: Region) -> RegionStats:
        anchor = PixelLocation(region.x, region.y)
        return RegionStats(
            count=0,
            min=math.nan,
            min_at=anchor,
            max=math.nan,
            max_at=anchor,
            sum=0.0,
            mean=math.nan,
            median=math.nan,
            stddev=math.nan,
            range=1.0,
            histogram=(0,) * HISTOGRAM_BINS,
            histogram_peak=0,
        )
