# -*- coding: utf-8 -*-
"""
Equirectangular Window - Geographic footprint of the resampled raster.

An ``EquirectangularWindow`` is the dense output raster a binned archive
is re-projected onto: a plate carree grid whose rows are ISIN grid rows
and whose columns have a single fixed width. The window is derived by
snapping a lat/lon bounding box to ISIN cell boundaries.

Column width approximation
--------------------------
ISIN column width varies from row to row. The window instead uses the
column width of one reference row (the row containing the latitude of
true scale) for its whole extent. Output columns are therefore exact at
the reference latitude and increasingly oversample the archive toward the
poles, where each ISIN cell is repeated across several output columns.
This keeps one affine transform for the whole raster.

Pixel convention: ``(x, y) = (0, 0)`` is the north-west corner, ``y``
grows southward, sample positions are pixel centres.

Dependencies
------------
numpy
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

# Standard library
import logging
from dataclasses import dataclass
from typing import Tuple, Union, TYPE_CHECKING

# Third-party
import numpy as np

# isinraster internal
from isinraster.grid.isin import SinusoidalGrid

if TYPE_CHECKING:
    from rasterio.transform import Affine

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class EquirectangularWindow:
    """Immutable geometry of the equirectangular output raster.

    Parameters
    ----------
    grid : SinusoidalGrid
        ISIN grid the archive is binned on.
    row_count : int
        Number of output rows (one per ISIN row in the window).
    col_count : int
        Number of output columns.
    origin_lat : float
        Latitude of the southern edge of the window.
    origin_lon : float
        Longitude of the western edge of the window.
    lat_step : float
        Row height in degrees.
    lon_step : float
        Column width in degrees (width of the true-scale row's columns).
    min_row : int
        ISIN row of the southernmost output row.
    min_col : int
        Column of the true-scale row at the western edge.
    true_scale_row : int
        ISIN row whose column density defines ``lon_step``.
    """

    grid: SinusoidalGrid
    row_count: int
    col_count: int
    origin_lat: float
    origin_lon: float
    lat_step: float
    lon_step: float
    min_row: int
    min_col: int
    true_scale_row: int

    @classmethod
    def from_bounds(
        cls,
        grid: SinusoidalGrid,
        min_lat: float = -90.0,
        max_lat: float = 90.0,
        min_lon: float = -180.0,
        max_lon: float = 180.0,
        latitude_of_true_scale: float = 0.0,
    ) -> 'EquirectangularWindow':
        """Snap a bounding box to ISIN cell boundaries.

        Bounds outside the grid are clamped and reversed bounds are
        swapped, so this never raises and always yields at least one row
        and one column.

        Parameters
        ----------
        grid : SinusoidalGrid
            ISIN grid of the archive.
        min_lat, max_lat : float
            Southern and northern bounds in degrees.
        min_lon, max_lon : float
            Western and eastern bounds in degrees.
        latitude_of_true_scale : float
            Latitude whose ISIN row sets the column width of the whole
            window. Default is the equator.

        Returns
        -------
        EquirectangularWindow
        """
        if min_lat > max_lat:
            min_lat, max_lat = max_lat, min_lat
        if min_lon > max_lon:
            min_lon, max_lon = max_lon, min_lon

        min_row = grid.row_of(min_lat)
        max_row = grid.row_of(max_lat)
        true_scale_row = grid.row_of(latitude_of_true_scale)

        min_col = grid.col_of(true_scale_row, min_lon)
        max_col = grid.col_of(true_scale_row, max_lon)

        window = cls(
            grid=grid,
            row_count=max_row - min_row + 1,
            col_count=max_col - min_col + 1,
            origin_lat=grid.lat_south(min_row),
            origin_lon=grid.lon_west(true_scale_row, min_col),
            lat_step=grid.lat_step,
            lon_step=grid.lon_step(true_scale_row),
            min_row=min_row,
            min_col=min_col,
            true_scale_row=true_scale_row,
        )
        logger.debug(
            "Window rows %d..%d cols %d..%d (true scale row %d): %dx%d",
            min_row, max_row, min_col, max_col, true_scale_row,
            window.row_count, window.col_count,
        )
        return window

    @property
    def max_row(self) -> int:
        """ISIN row of the northernmost output row."""
        return self.min_row + self.row_count - 1

    @property
    def shape(self) -> Tuple[int, int]:
        """Raster shape ``(rows, cols)``."""
        return (self.row_count, self.col_count)

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Geographic bounds ``(min_lon, min_lat, max_lon, max_lat)``."""
        return (
            self.origin_lon,
            self.origin_lat,
            self.origin_lon + self.col_count * self.lon_step,
            self.origin_lat + self.row_count * self.lat_step,
        )

    @property
    def transform(self) -> 'Affine':
        """Pixel-to-lon/lat affine transform of the raster.

        Pixel ``(col=0, row=0)`` is the north-west corner at
        ``(origin_lon, origin_lat + row_count * lat_step)``; pixel size
        is ``(lon_step, -lat_step)``.
        """
        from rasterio.transform import Affine

        return Affine(
            self.lon_step, 0.0, self.origin_lon,
            0.0, -self.lat_step, self.origin_lat + self.row_count * self.lat_step,
        )

    def isin_row(self, y: Union[int, np.ndarray]) -> Union[int, np.ndarray]:
        """ISIN row sampled by output row ``y``."""
        return self.max_row - y

    def index_slot(self, y: int) -> int:
        """Row index slot (south-to-north position) of output row ``y``."""
        return self.row_count - 1 - y

    def lat_at(self, y: Union[int, np.ndarray]) -> Union[float, np.ndarray]:
        """Latitude of the centre of output row ``y``."""
        return self.origin_lat + (self.row_count - y - 0.5) * self.lat_step

    def lon_at(self, x: Union[int, np.ndarray]) -> Union[float, np.ndarray]:
        """Longitude of the centre of output column ``x``."""
        return self.origin_lon + (x + 0.5) * self.lon_step

    def isin_cols(self, row: int, x_start: int, width: int) -> np.ndarray:
        """ISIN columns of ``row`` sampled by output columns ``x_start..``.

        Parameters
        ----------
        row : int
            ISIN row.
        x_start : int
            First output column.
        width : int
            Number of output columns.

        Returns
        -------
        np.ndarray
            Non-decreasing ``int64`` array of length ``width``.
        """
        lons = self.lon_at(np.arange(x_start, x_start + width))
        return np.asarray(self.grid.col_of(row, lons), dtype=np.int64)
