# -*- coding: utf-8 -*-
"""
Tiler Tests - Tile regions and tile-by-tile reads of binned archives.

Dependencies
------------
pytest
h5py

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
2026-02-06

Modified
--------
2026-10-19
"""

import pytest
import numpy as np

from isinraster.data_prep import ChipBase, ChipRegion, Tiler, iter_tiles
from isinraster.IO import BinnedReader


class TestTilerInit:
    """Test Tiler constructor validation."""

    def test_defaults(self):
        tiler = Tiler(nrows=36, ncols=72, tile_size=16)
        assert tiler.shape == (36, 72)
        assert tiler.tile_size == (16, 16)
        assert tiler.stride == (16, 16)
        assert isinstance(tiler, ChipBase)

    def test_tuple_sizes(self):
        tiler = Tiler(nrows=36, ncols=72, tile_size=(8, 24), stride=(4, 12))
        assert tiler.tile_size == (8, 24)
        assert tiler.stride == (4, 12)

    def test_stride_exceeds_tile_size_raises(self):
        with pytest.raises(ValueError, match="must not exceed"):
            Tiler(nrows=36, ncols=72, tile_size=8, stride=16)

    def test_non_int_dimensions_raise(self):
        with pytest.raises(TypeError, match="must be int"):
            Tiler(nrows=36.0, ncols=72, tile_size=8)

    def test_non_positive_tile_raises(self):
        with pytest.raises(ValueError, match="must be positive"):
            Tiler(nrows=36, ncols=72, tile_size=0)

    def test_bad_tile_type_raises(self):
        with pytest.raises(TypeError, match="tile_size"):
            Tiler(nrows=36, ncols=72, tile_size=[8, 8])

    def test_repr(self):
        tiler = Tiler(nrows=36, ncols=72, tile_size=16, stride=8)
        assert repr(tiler) == (
            "Tiler(nrows=36, ncols=72, tile_size=(16, 16), stride=(8, 8))"
        )


class TestTilePositions:
    """Test region layout."""

    def test_even_division(self):
        regions = Tiler(nrows=36, ncols=72, tile_size=(18, 36)).tile_positions()
        assert regions == [
            ChipRegion(0, 0, 18, 36),
            ChipRegion(0, 36, 18, 72),
            ChipRegion(18, 0, 36, 36),
            ChipRegion(18, 36, 36, 72),
        ]

    def test_edge_tiles_snap_inward(self):
        regions = Tiler(nrows=36, ncols=72, tile_size=16).tile_positions()
        assert len(regions) == 3 * 5
        assert all(r.shape == (16, 16) for r in regions)
        assert regions[-1] == ChipRegion(20, 56, 36, 72)

    def test_tile_larger_than_raster(self):
        regions = Tiler(nrows=5, ncols=7, tile_size=64).tile_positions()
        assert regions == [ChipRegion(0, 0, 5, 7)]

    def test_full_coverage_with_overlap(self):
        tiler = Tiler(nrows=36, ncols=72, tile_size=10, stride=7)
        covered = np.zeros(tiler.shape, dtype=int)
        for r in tiler.tile_positions():
            covered[r.row_start:r.row_end, r.col_start:r.col_end] += 1
        assert np.all(covered >= 1)
        assert covered.max() > 1

    def test_snap_region_clamps(self):
        tiler = Tiler(nrows=36, ncols=72, tile_size=16)
        assert tiler._snap_region(-5, 70, 16, 16) == ChipRegion(0, 56, 16, 72)


class TestIterTiles:
    """Tile-by-tile reads reassemble the full raster."""

    def test_reassembles_band(self, full_grid_archive, small_options):
        with BinnedReader(full_grid_archive, options=small_options) as reader:
            mosaic = np.full((36, 72), np.nan)
            count = 0
            for region, data in iter_tiles(reader, 'CHL1_mean', tile_size=16):
                assert data.shape == region.shape
                mosaic[region.row_start:region.row_end,
                       region.col_start:region.col_end] = data
                count += 1
            full = reader.read_full(bands=['CHL1_mean'])
        assert count == 15
        np.testing.assert_array_equal(mosaic, full)

    def test_scaled_tiles(self, full_grid_archive, small_options):
        with BinnedReader(full_grid_archive, options=small_options) as reader:
            tiles = list(iter_tiles(reader, 1, tile_size=(36, 72),
                                    scaled=True))
        assert len(tiles) == 1
        region, data = tiles[0]
        assert region == ChipRegion(0, 0, 36, 72)
        assert data.dtype == np.float64


class TestChipRegion:
    """Region conversions."""

    def test_window_matches_read_region_arguments(self):
        region = ChipRegion(4, 10, 12, 30)
        assert region.shape == (8, 20)
        assert region.window() == (10, 4, 20, 8)

    def test_bool_extent_rejected(self):
        with pytest.raises(TypeError, match="must be int"):
            Tiler(nrows=True, ncols=72, tile_size=8)
