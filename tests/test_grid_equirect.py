# -*- coding: utf-8 -*-
"""
EquirectangularWindow Tests - Snapping bounds to the ISIN grid.

Dependencies
------------
pytest
rasterio

Author
------
Duane Smalley, PhD
duane.d.smalley@gmail.com

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-10-19

Modified
--------
2026-10-19
"""

import dataclasses

import pytest
import numpy as np

from rasterio.transform import Affine

from isinraster.grid import EquirectangularWindow, SinusoidalGrid


@pytest.fixture
def global_window(small_grid):
    return EquirectangularWindow.from_bounds(small_grid)


class TestFromBounds:
    """Test window construction."""

    def test_global_shape(self, global_window):
        assert global_window.shape == (36, 72)
        assert global_window.min_row == 0
        assert global_window.max_row == 35
        assert global_window.min_col == 0
        assert global_window.true_scale_row == 18

    def test_global_steps(self, global_window):
        assert global_window.lat_step == pytest.approx(5.0)
        assert global_window.lon_step == pytest.approx(5.0)
        assert global_window.origin_lat == pytest.approx(-90.0)
        assert global_window.origin_lon == pytest.approx(-180.0)

    def test_regional_window(self, small_grid):
        window = EquirectangularWindow.from_bounds(
            small_grid, min_lat=10.0, max_lat=29.0, min_lon=-20.0, max_lon=4.0
        )
        assert window.min_row == 20
        assert window.max_row == 23
        assert window.row_count == 4
        assert window.min_col == 32
        assert window.col_count == 5
        assert window.origin_lat == pytest.approx(10.0)
        assert window.origin_lon == pytest.approx(-20.0)

    def test_reversed_bounds_swapped(self, small_grid):
        forward = EquirectangularWindow.from_bounds(
            small_grid, min_lat=-30, max_lat=30, min_lon=-60, max_lon=60
        )
        reverse = EquirectangularWindow.from_bounds(
            small_grid, min_lat=30, max_lat=-30, min_lon=60, max_lon=-60
        )
        assert forward == reverse

    def test_bounds_outside_grid_clamped(self, small_grid):
        window = EquirectangularWindow.from_bounds(
            small_grid, min_lat=95.0, max_lat=120.0, min_lon=200, max_lon=300
        )
        assert window.row_count == 1
        assert window.col_count == 1
        assert window.min_row == small_grid.max_row

    def test_tiny_window_straddling_equator_and_meridian(self):
        grid = SinusoidalGrid()
        window = EquirectangularWindow.from_bounds(
            grid, min_lat=-1, max_lat=1, min_lon=-1, max_lon=1
        )
        assert window.row_count >= 1
        assert window.col_count >= 1
        assert window.min_row <= 2159 < 2160 <= window.max_row

    def test_true_scale_latitude_sets_column_density(self, small_grid):
        window = EquirectangularWindow.from_bounds(
            small_grid, latitude_of_true_scale=60.0
        )
        assert window.true_scale_row == 30
        assert window.col_count == small_grid.col_count(30)
        assert window.lon_step == pytest.approx(small_grid.lon_step(30))

    def test_bounds_on_cell_edges_do_not_grow_window(self):
        grid = SinusoidalGrid()
        window = EquirectangularWindow.from_bounds(
            grid,
            min_lat=grid.lat_south(2),
            max_lat=grid.lat_center(4),
            min_lon=grid.lon_west(2160, 10),
            max_lon=grid.lon_west(2160, 12) + grid.lon_step(2160) / 2,
        )
        assert window.min_row == 2
        assert window.row_count == 3
        assert window.origin_lat == grid.lat_south(2)
        assert window.min_col == 10
        assert window.col_count == 3

    def test_frozen(self, global_window):
        with pytest.raises(dataclasses.FrozenInstanceError):
            global_window.row_count = 10


class TestPixelMapping:
    """Output pixels to ISIN rows, columns and coordinates."""

    def test_row_zero_is_north(self, global_window):
        assert global_window.isin_row(0) == 35
        assert global_window.isin_row(35) == 0
        assert global_window.index_slot(0) == 35

    def test_pixel_centres(self, global_window):
        assert global_window.lat_at(0) == pytest.approx(87.5)
        assert global_window.lat_at(35) == pytest.approx(-87.5)
        assert global_window.lon_at(0) == pytest.approx(-177.5)
        assert global_window.lon_at(71) == pytest.approx(177.5)

    def test_centres_fall_in_sampled_row(self, small_grid, global_window):
        ys = np.arange(global_window.row_count)
        np.testing.assert_array_equal(
            small_grid.row_of(global_window.lat_at(ys)),
            global_window.isin_row(ys),
        )

    def test_isin_cols_on_true_scale_row(self, global_window):
        cols = global_window.isin_cols(18, 0, 72)
        np.testing.assert_array_equal(cols, np.arange(72))

    def test_isin_cols_near_pole(self, small_grid, global_window):
        cols = global_window.isin_cols(35, 0, 72)
        assert cols.dtype == np.int64
        assert np.all(np.diff(cols) >= 0)
        assert cols[0] == 0
        assert cols[-1] == small_grid.col_count(35) - 1

    def test_isin_cols_offset(self, global_window):
        np.testing.assert_array_equal(
            global_window.isin_cols(18, 10, 5), np.arange(10, 15)
        )


class TestGeoreference:
    """Bounds and affine transform."""

    def test_bounds(self, global_window):
        assert global_window.bounds == pytest.approx((-180.0, -90.0, 180.0, 90.0))

    def test_transform(self, global_window):
        t = global_window.transform
        assert isinstance(t, Affine)
        assert t.a == pytest.approx(5.0)
        assert t.e == pytest.approx(-5.0)
        assert t.c == pytest.approx(-180.0)
        assert t.f == pytest.approx(90.0)

    def test_transform_maps_pixel_centre(self, global_window):
        lon, lat = global_window.transform * (0.5, 0.5)
        assert lat == pytest.approx(global_window.lat_at(0))
        assert lon == pytest.approx(global_window.lon_at(0))
