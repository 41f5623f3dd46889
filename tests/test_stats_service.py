"""
Статистика области интереса
"""
import math

import numpy as np
import pytest

from conftest import make_image

from fits_viewer.errors import RegionError
from fits_viewer.models.image_model import PixelLocation, Region
from fits_viewer.models.stats_model import HISTOGRAM_BINS
from fits_viewer.services.stats_service import StatisticsEngine


class TestRegionStats:
    """Основные величины"""

    def test_uniform_image(self):
        image = make_image(np.full((3, 4), 7.0))
        stats = StatisticsEngine().compute(image)

        assert stats.count == 12
        assert stats.min == stats.max == stats.mean == 7.0
        assert stats.stddev == 0.0
        assert stats.range == 1.0
        assert stats.median == 7.0
        assert stats.histogram[0] == 12
        assert stats.histogram_peak == 12

    def test_two_by_two(self):
        image = make_image([[30, 40], [10, 20]])
        stats = StatisticsEngine().compute(image)

        assert stats.count == 4
        assert stats.sum == 100.0
        assert stats.mean == 25.0
        assert stats.min == 10.0 and stats.min_at == PixelLocation(0, 1)
        assert stats.max == 40.0 and stats.max_at == PixelLocation(1, 0)
        assert stats.range == 30.0
        assert stats.stddev == pytest.approx(math.sqrt(4 * 3000 - 100 ** 2) / 4)
        assert stats.median == 20.0

    def test_first_occurrence_of_extremes(self):
        image = make_image([[5, 1, 9], [1, 9, 5]])
        stats = StatisticsEngine().compute(image)

        assert stats.min_at == PixelLocation(1, 0)
        assert stats.max_at == PixelLocation(2, 0)

    def test_sub_region_coordinates_are_image_coordinates(self):
        image = make_image(np.arange(25, dtype=float).reshape(5, 5))
        stats = StatisticsEngine().compute(image, Region(2, 1, 2, 3))

        assert stats.count == 6
        assert stats.min == 7.0 and stats.min_at == PixelLocation(2, 1)
        assert stats.max == 18.0 and stats.max_at == PixelLocation(3, 3)

    def test_histogram_total_equals_count(self):
        rng = np.random.default_rng(42)
        image = make_image(rng.normal(1000.0, 50.0, size=(40, 30)))
        engine = StatisticsEngine()
        for region in (Region(0, 0, 30, 40), Region(3, 5, 11, 7), Region(29, 39, 1, 1)):
            stats = engine.compute(image, region)
            assert len(stats.histogram) == HISTOGRAM_BINS
            assert sum(stats.histogram) == region.count
            assert stats.histogram_peak == max(stats.histogram)

    def test_histogram_extremes_land_in_end_bins(self):
        image = make_image([[0, 50, 100]])
        stats = StatisticsEngine().compute(image)

        assert stats.histogram[0] == 1
        assert stats.histogram[63] == 1
        assert stats.histogram[127] == 1


class TestZeroExclusion:
    """Нули и NaN не попадают в накопители в режиме по умолчанию"""

    def test_zeros_counted_but_not_summed(self):
        image = make_image([[0, 0], [4, 4]])
        stats = StatisticsEngine().compute(image)

        assert stats.count == 4
        assert stats.sum == 8.0
        assert stats.mean == 2.0
        assert stats.stddev == pytest.approx(math.sqrt(4 * 32 - 64) / 4)

    def test_nan_skipped_by_default(self):
        """NaN входит в count, но не в гистограмму: её сумма равна числу конечных пикселей"""
        image = make_image([[1.0, np.nan], [3.0, 0.0]])
        stats = StatisticsEngine().compute(image)

        assert stats.sum == 4.0
        assert stats.mean == 1.0
        assert stats.min == 0.0
        assert stats.max == 3.0
        assert sum(stats.histogram) == 3
        assert stats.median == 1.0

    def test_median_with_mostly_nan_blanks(self):
        image = make_image([[np.nan, np.nan], [np.nan, 5.0]])
        stats = StatisticsEngine().compute(image)

        assert stats.min == stats.max == 5.0
        assert stats.median == 5.0

    def test_median_stays_within_finite_range(self):
        grid = np.full((10, 10), np.nan)
        grid[0, :] = np.arange(10, dtype=float)
        stats = StatisticsEngine().compute(make_image(grid))

        assert stats.min <= stats.median <= stats.max
        assert stats.median == 4.0

    def test_all_nan_region(self):
        stats = StatisticsEngine().compute(make_image(np.full((2, 2), np.nan)))

        assert stats.count == 4
        assert math.isnan(stats.median)
        assert sum(stats.histogram) == 0

    def test_nan_poisons_sums_when_flag_off(self):
        image = make_image([[1.0, np.nan], [3.0, 0.0]])
        stats = StatisticsEngine(exclude_zero_pixels=False).compute(image)

        assert math.isnan(stats.sum)
        assert math.isnan(stats.mean)


class TestRegionBounds:
    """Область за пределами кадра"""

    def test_outside_region_warns_and_clips(self, caplog):
        image = make_image(np.ones((4, 4)))
        stats = StatisticsEngine().compute(image, Region(2, 2, 5, 5))

        assert stats.count == 4
        assert "выходит за пределы" in caplog.text

    def test_strict_bounds_raises(self):
        image = make_image(np.ones((4, 4)))
        with pytest.raises(RegionError):
            StatisticsEngine(strict_bounds=True).compute(image, Region(-1, 0, 2, 2))

    def test_empty_region(self):
        image = make_image(np.ones((4, 4)))
        stats = StatisticsEngine().compute(image, Region(1, 1, 0, 3))

        assert stats.count == 0
        assert math.isnan(stats.mean)
        assert sum(stats.histogram) == 0
        assert stats.histogram_peak == 0
