# -*- coding: utf-8 -*-
"""
isinraster - Equirectangular raster access to ISIN-binned archives.

Reads sparse, row-sorted binned geophysical products (GlobColour-style
Level-3 "binned" NetCDF-4 files on the Integerized Sinusoidal grid) and
re-projects them on demand into a dense latitude/longitude raster that
can be read region by region or tile by tile.

Dependencies
------------
numpy
h5py
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
2026-10-19

Modified
--------
2026-10-19
"""

__version__ = "0.1.0"
__author__ = "Duane Smalley"

from isinraster.exceptions import (
    IsinRasterError,
    ArchiveFormatError,
    ArchiveReadError,
    PreconditionError,
    ReaderClosedError,
    CancelledError,
)
from isinraster.vocabulary import ProductType, DatasetState
from isinraster.config import ReaderOptions
from isinraster.grid import SinusoidalGrid, EquirectangularWindow
from isinraster.IO import BinnedReader, open_binned

__all__ = [
    'IsinRasterError',
    'ArchiveFormatError',
    'ArchiveReadError',
    'PreconditionError',
    'ReaderClosedError',
    'CancelledError',
    'ProductType',
    'DatasetState',
    'ReaderOptions',
    'SinusoidalGrid',
    'EquirectangularWindow',
    'BinnedReader',
    'open_binned',
]
