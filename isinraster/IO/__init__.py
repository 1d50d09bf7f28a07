# -*- coding: utf-8 -*-
"""
IO Module - Reading ISIN-binned archives as equirectangular rasters.

The archive layer (``BinArchiveReader``) gives range access to the
parallel ``row``/``col``/measurement arrays; ``RowIndex`` maps output
rows to record ranges; ``BinnedReader`` ties both to the resampler
behind the ``ImageReader`` interface.

Dependencies
------------
h5py
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

from isinraster.IO.base import ImageReader
from isinraster.IO.models import ImageMetadata, BandInfo, BinnedMetadata
from isinraster.IO.archive import BinArchiveReader
from isinraster.IO.row_index import RowIndex
from isinraster.IO.binned import BinnedReader, open_binned

__all__ = [
    'ImageReader',
    'ImageMetadata',
    'BandInfo',
    'BinnedMetadata',
    'BinArchiveReader',
    'RowIndex',
    'BinnedReader',
    'open_binned',
]
