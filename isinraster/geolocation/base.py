# -*- coding: utf-8 -*-
"""
Geolocation Base Classes - Abstract interface for coordinate transformations.

Defines the abstract base class for transforming between raster pixel
coordinates and geographic coordinates (latitude/longitude).

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
2026-01-30

Modified
--------
2026-10-19
"""

from abc import ABC, abstractmethod
from typing import Any, Tuple, Union

import numpy as np


def _is_scalar(val: Any) -> bool:
    """Check if a value is a scalar (not array-like)."""
    if isinstance(val, np.ndarray):
        return val.ndim == 0
    return isinstance(val, (int, float, np.integer, np.floating))


def _to_array(val: Any) -> np.ndarray:
    """Convert scalar, list, or array to 1D numpy array of float64."""
    arr = np.asarray(val, dtype=np.float64)
    if arr.ndim == 0:
        arr = arr.reshape(1)
    return arr


class Geolocation(ABC):
    """
    Abstract base class for geolocation transformations.

    ``image_to_latlon`` and ``latlon_to_image`` accept scalars or
    separate row/col (lat/lon) arrays.

    Coordinate Conventions
    ----------------------
    - **Image coordinates:** (row, col) with (0, 0) at the top-left
      corner of the top-left pixel.
    - **Geographic coordinates:** (lat, lon) in WGS84 degrees.

    Subclasses implement ``_image_to_latlon_array`` and
    ``_latlon_to_image_array`` on 1D numpy arrays; the public methods
    handle scalar/array dispatch.
    """

    def __init__(self, shape: Tuple[int, int], crs: str = 'WGS84') -> None:
        self.shape = shape
        self.crs = crs

    @abstractmethod
    def _image_to_latlon_array(
        self, rows: np.ndarray, cols: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Transform pixel coordinate arrays to ``(lats, lons)``."""

    @abstractmethod
    def _latlon_to_image_array(
        self, lats: np.ndarray, lons: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        """Transform geographic coordinate arrays to ``(rows, cols)``."""

    def image_to_latlon(
        self,
        row: Union[float, list, np.ndarray],
        col: Union[float, list, np.ndarray],
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray]]:
        """
        Transform image coordinates to geographic coordinates.

        Parameters
        ----------
        row : float, list or np.ndarray
            Row coordinate(s). Use ``row + 0.5`` for pixel centres.
        col : float, list or np.ndarray
            Column coordinate(s).

        Returns
        -------
        Tuple[float, float] or Tuple[np.ndarray, np.ndarray]
            ``(lat, lon)``; floats for scalar input, arrays otherwise.
        """
        lats, lons = self._image_to_latlon_array(_to_array(row), _to_array(col))
        if _is_scalar(row) and _is_scalar(col):
            return float(lats[0]), float(lons[0])
        return lats, lons

    def latlon_to_image(
        self,
        lat: Union[float, list, np.ndarray],
        lon: Union[float, list, np.ndarray],
    ) -> Union[Tuple[float, float], Tuple[np.ndarray, np.ndarray]]:
        """
        Transform geographic coordinates to (fractional) image coordinates.

        Returns
        -------
        Tuple[float, float] or Tuple[np.ndarray, np.ndarray]
            ``(row, col)``; floats for scalar input, arrays otherwise.
        """
        rows, cols = self._latlon_to_image_array(_to_array(lat), _to_array(lon))
        if _is_scalar(lat) and _is_scalar(lon):
            return float(rows[0]), float(cols[0])
        return rows, cols

    def get_bounds(self) -> Tuple[float, float, float, float]:
        """
        Geographic bounds of the raster.

        Returns
        -------
        Tuple[float, float, float, float]
            ``(min_lon, min_lat, max_lon, max_lat)`` of the four corners.
        """
        rows, cols = self.shape
        lats, lons = self._image_to_latlon_array(
            np.array([0.0, 0.0, rows, rows]),
            np.array([0.0, cols, 0.0, cols]),
        )
        return (float(lons.min()), float(lats.min()),
                float(lons.max()), float(lats.max()))

    def contains(self, lat: float, lon: float) -> bool:
        """Whether ``(lat, lon)`` falls inside the raster."""
        row, col = self.latlon_to_image(lat, lon)
        return 0.0 <= row < self.shape[0] and 0.0 <= col < self.shape[1]

