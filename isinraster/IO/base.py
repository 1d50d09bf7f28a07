# -*- coding: utf-8 -*-
"""
IO Base Classes - Abstract interface for raster readers.

Every isinraster reader presents a file as a banded raster in image
coordinates: metadata is loaded on construction, pixels are produced on
request through ``read_region`` (one band, ``x``/``y`` origin, optional
destination buffer) or ``read_chip`` (row/column ranges, several bands).
Shape, dtype and geolocation derive from the typed metadata.

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
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

import numpy as np

from isinraster.IO.models import ImageMetadata

BandKey = Union[int, str]


class ImageReader(ABC):
    """Base class for readers exposing a file as a banded raster.

    Subclasses fill ``metadata`` in ``_load_metadata`` and implement the
    two pixel paths, ``read_region`` and ``read_chip``.

    Parameters
    ----------
    filepath : str or Path
        Path to the file.

    Attributes
    ----------
    filepath : Path
        Path to the file.
    metadata : ImageMetadata
        Raster metadata, available as soon as the constructor returns.

    Raises
    ------
    FileNotFoundError
        If ``filepath`` is not an existing file.
    """

    def __init__(self, filepath: Union[str, Path]) -> None:
        path = Path(filepath)
        if not path.is_file():
            raise FileNotFoundError(f"File not found: {path}")
        self.filepath = path
        self.metadata: Optional[ImageMetadata] = None
        self._load_metadata()

    @abstractmethod
    def _load_metadata(self) -> None:
        """Open the file and populate ``self.metadata``."""

    @abstractmethod
    def read_region(
        self,
        band: BandKey,
        x: int,
        y: int,
        width: int,
        height: int,
        step_x: int = 1,
        step_y: int = 1,
        out: Optional[np.ndarray] = None,
        **kwargs: Any,
    ) -> np.ndarray:
        """Read ``width x height`` pixels of one band with origin ``(x, y)``.

        ``x`` counts columns and ``y`` rows from the top-left pixel.
        ``out``, when given, receives exactly ``width * height`` samples.
        Readers that cannot sub-sample reject steps other than 1.
        """

    @abstractmethod
    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[BandKey]] = None,
    ) -> np.ndarray:
        """Read rows ``[row_start, row_end)`` and columns ``[col_start, col_end)``.

        Returns ``(rows, cols)`` for a single band, ``(bands, rows, cols)``
        otherwise. ``bands=None`` reads every band.
        """

    def read_full(self, bands: Optional[List[BandKey]] = None) -> np.ndarray:
        """Read the entire raster.

        Holds the whole raster in memory; ``isinraster.data_prep.iter_tiles``
        reads it piecewise instead.
        """
        return self.read_chip(0, self.metadata.rows, 0, self.metadata.cols,
                              bands=bands)

    def get_shape(self) -> Tuple[int, ...]:
        """``(rows, cols)`` for one band, ``(rows, cols, bands)`` for several."""
        meta = self.metadata
        if not meta.bands or meta.bands == 1:
            return (meta.rows, meta.cols)
        return (meta.rows, meta.cols, meta.bands)

    def get_dtype(self) -> np.dtype:
        """Stored sample type recorded in the metadata."""
        return np.dtype(self.metadata.dtype)

    def get_geolocation(self) -> Optional[Dict[str, Any]]:
        """``crs``, ``transform`` and ``bounds`` of the raster.

        Returns
        -------
        Optional[Dict[str, Any]]
            None when the metadata carries no world transform.
        """
        transform = self.metadata.get('transform')
        if transform is None:
            return None
        return {
            'crs': self.metadata.crs,
            'transform': transform,
            'bounds': self.metadata.get('bounds'),
        }

    def close(self) -> None:
        """Release file handles. Safe to call more than once."""

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
