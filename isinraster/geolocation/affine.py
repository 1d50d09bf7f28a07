# -*- coding: utf-8 -*-
"""
Affine Geolocation - Coordinate transforms for the equirectangular raster.

Provides ``AffineGeolocation``, a concrete ``Geolocation`` for rasters
whose pixel-to-map relationship is a six-parameter affine transform in a
geographic coordinate reference system, which is what every binned
archive is re-projected onto.

Coordinate flow:

    pixel (row, col)  --affine-->  (lon, lat)

Dependencies
------------
rasterio
pyproj

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
2026-02-11

Modified
--------
2026-10-19
"""

# Standard library
from typing import Tuple, TYPE_CHECKING

# Third-party
import numpy as np
import pyproj
from rasterio.transform import Affine

# isinraster internal
from isinraster.exceptions import PreconditionError
from isinraster.geolocation.base import Geolocation

if TYPE_CHECKING:
    from isinraster.IO.base import ImageReader


class AffineGeolocation(Geolocation):
    """Geolocation for a raster with an affine transform and geographic CRS.

    The affine transform maps pixel ``(col, row)`` to ``(lon, lat)`` as::

        lon = c + col * a + row * b
        lat = f + col * d + row * e

    Parameters
    ----------
    transform : rasterio.transform.Affine
        Pixel to lon/lat transform.
    shape : Tuple[int, int]
        Raster shape ``(rows, cols)``.
    crs : str
        Geographic CRS string. Default ``'EPSG:4326'``.

    Raises
    ------
    TypeError
        If ``transform`` is not a ``rasterio.transform.Affine``.
    PreconditionError
        If ``crs`` is not a geographic CRS.

    Examples
    --------
    >>> with BinnedReader('L3b.nc') as reader:
    ...     geo = AffineGeolocation.from_reader(reader)
    ...     lat, lon = geo.image_to_latlon(0.5, 0.5)
    """

    def __init__(
        self,
        transform: Affine,
        shape: Tuple[int, int],
        crs: str = 'EPSG:4326',
    ) -> None:
        if not isinstance(transform, Affine):
            raise TypeError(
                f"transform must be a rasterio.transform.Affine instance, "
                f"got {type(transform).__name__}"
            )
        if not pyproj.CRS(crs).is_geographic:
            raise PreconditionError(
                f"Only geographic coordinate reference systems are "
                f"supported, got {crs!r}"
            )

        self._transform = transform
        self._inverse = ~transform
        super().__init__(shape, crs='WGS84')
        self.native_crs = crs

    @property
    def transform(self) -> Affine:
        return self._transform

    def _image_to_latlon_array(
        self, rows: np.ndarray, cols: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        t = self._transform
        lons = t.c + cols * t.a + rows * t.b
        lats = t.f + cols * t.d + rows * t.e
        return lats, lons

    def _latlon_to_image_array(
        self, lats: np.ndarray, lons: np.ndarray
    ) -> Tuple[np.ndarray, np.ndarray]:
        inv = self._inverse
        cols = inv.c + lons * inv.a + lats * inv.b
        rows = inv.f + lons * inv.d + lats * inv.e
        return rows, cols

    @classmethod
    def from_reader(cls, reader: 'ImageReader') -> 'AffineGeolocation':
        """Create an AffineGeolocation from a reader's metadata.

        Raises
        ------
        ValueError
            If the reader's metadata lacks ``transform`` or ``crs``.
        """
        transform = reader.metadata.get('transform')
        if transform is None:
            raise ValueError(
                "Reader metadata does not contain an affine transform."
            )
        crs = reader.metadata.get('crs')
        if crs is None:
            raise ValueError("Reader metadata does not contain a CRS.")
        shape = (reader.metadata['rows'], reader.metadata['cols'])
        return cls(transform=transform, shape=shape, crs=crs)
