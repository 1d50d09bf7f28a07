# -*- coding: utf-8 -*-
"""
ISIN Grid - Integerized sinusoidal equal-area global grid.

The ISIN grid divides the globe into ``row_count`` latitude rows of equal
height. Each row is divided into columns of (nearly) equal area, so the
number of columns shrinks toward the poles following the cosine of the
row's centre latitude. Row 0 is the southernmost row; column 0 of every
row starts at 180 degrees West.

Every mapping clamps into the valid index range instead of raising, so
callers can pass arbitrary coordinates (bounding boxes that overshoot the
poles or the antimeridian, pixel centres at the raster edge).

All methods accept either scalars or numpy arrays. Scalar inputs return
Python ``int``/``float``; array inputs return arrays of the same shape.

Dependencies
------------
numpy

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
from typing import Any, Union

# Third-party
import numpy as np

ArrayLike = Union[int, float, np.ndarray]

#: Row count of the GlobColour ISIN grid (1/24 degree, ~4.63 km bins).
GLOBCOLOUR_ROW_COUNT = 4320


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))



def _floor_cell(value: np.ndarray, origin: float, step) -> np.ndarray:
    """Index ``i`` with ``origin + i * step <= value < origin + (i + 1) * step``.

    The edges are evaluated with the same expression the grid uses for
    ``lat_south`` and ``lon_west``. The rounded quotient alone can land one
    cell low or high when ``value`` sits exactly on an edge.
    """
    idx = np.floor((value - origin) / step)
    idx = np.where(value >= origin + (idx + 1) * step, idx + 1, idx)
    idx = np.where(value < origin + idx * step, idx - 1, idx)
    return idx


class SinusoidalGrid:
    """Global ISIN grid with latitude-dependent column counts.

    Parameters
    ----------
    row_count : int
        Number of latitude rows covering 90S to 90N. Default is the
        GlobColour grid with 4320 rows (8640 columns at the equator).

    Raises
    ------
    ValueError
        If ``row_count`` is not a positive integer.

    Examples
    --------
    >>> grid = SinusoidalGrid()
    >>> grid.row_of(0.01)
    2160
    >>> grid.col_count(2160)
    8640
    >>> grid.col_of(2160, 0.01)
    4320
    """

    def __init__(self, row_count: int = GLOBCOLOUR_ROW_COUNT) -> None:
        if not isinstance(row_count, (int, np.integer)) or row_count <= 0:
            raise ValueError(
                f"row_count must be a positive int, got {row_count!r}"
            )
        self._row_count = int(row_count)
        self._lat_step = 180.0 / self._row_count

        centers = -90.0 + (np.arange(self._row_count) + 0.5) * self._lat_step
        counts = np.rint(
            2.0 * self._row_count * np.cos(np.radians(centers))
        ).astype(np.int64)
        self._col_counts = np.maximum(counts, 1)
        self._lon_steps = 360.0 / self._col_counts

    @property
    def row_count(self) -> int:
        """Total number of grid rows."""
        return self._row_count

    @property
    def max_row(self) -> int:
        """Index of the northernmost row."""
        return self._row_count - 1

    @property
    def lat_step(self) -> float:
        """Row height in degrees of latitude (identical for every row)."""
        return self._lat_step

    def _clamp_row(self, row: ArrayLike) -> np.ndarray:
        return np.clip(np.asarray(row, dtype=np.int64), 0, self.max_row)

    def row_of(self, lat: ArrayLike) -> ArrayLike:
        """Row containing latitude ``lat``, clamped to ``[0, max_row]``.

        The row is the floor of the grid cell, not the nearest row, so
        ``lat_south(row_of(lat)) <= lat < lat_south(row_of(lat) + 1)``
        for every latitude inside the grid.
        """
        rows = _floor_cell(np.asarray(lat, dtype=np.float64), -90.0,
                           self._lat_step)
        rows = np.clip(rows, 0, self.max_row).astype(np.int64)
        if _is_scalar(lat):
            return int(rows)
        return rows

    def col_count(self, row: ArrayLike) -> ArrayLike:
        """Number of columns in ``row`` (row is clamped first)."""
        counts = self._col_counts[self._clamp_row(row)]
        if _is_scalar(row):
            return int(counts)
        return counts

    def lon_step(self, row: ArrayLike) -> ArrayLike:
        """Column width of ``row`` in degrees of longitude."""
        steps = self._lon_steps[self._clamp_row(row)]
        if _is_scalar(row):
            return float(steps)
        return steps

    def col_of(self, row: ArrayLike, lon: ArrayLike) -> ArrayLike:
        """Column of ``row`` containing longitude ``lon``.

        Clamped to ``[0, col_count(row) - 1]``. ``row`` and ``lon``
        broadcast against each other.
        """
        rows = self._clamp_row(row)
        cols = _floor_cell(np.asarray(lon, dtype=np.float64), -180.0,
                           self._lon_steps[rows])
        cols = np.clip(cols, 0, self._col_counts[rows] - 1).astype(np.int64)
        if _is_scalar(row) and _is_scalar(lon):
            return int(cols)
        return cols

    def lat_south(self, row: ArrayLike) -> ArrayLike:
        """Latitude of the southern edge of ``row``."""
        lats = -90.0 + self._clamp_row(row) * self._lat_step
        if _is_scalar(row):
            return float(lats)
        return lats

    def lat_center(self, row: ArrayLike) -> ArrayLike:
        """Latitude of the centre of ``row``."""
        lats = -90.0 + (self._clamp_row(row) + 0.5) * self._lat_step
        if _is_scalar(row):
            return float(lats)
        return lats

    def lon_west(self, row: ArrayLike, col: ArrayLike) -> ArrayLike:
        """Longitude of the western edge of cell ``(row, col)``."""
        rows = self._clamp_row(row)
        lons = -180.0 + np.asarray(col, dtype=np.int64) * self._lon_steps[rows]
        if _is_scalar(row) and _is_scalar(col):
            return float(lons)
        return lons

    def __repr__(self) -> str:
        return f"SinusoidalGrid(row_count={self._row_count})"

    def __eq__(self, other) -> bool:
        if not isinstance(other, SinusoidalGrid):
            return False
        return self._row_count == other._row_count

    def __hash__(self) -> int:
        return hash(self._row_count)
