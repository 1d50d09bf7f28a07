# -*- coding: utf-8 -*-
"""
Data Preparation Module - Tiling for region-by-region raster reads.

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

from isinraster.data_prep.base import ChipBase, ChipRegion
from isinraster.data_prep.tiler import Tiler, iter_tiles

__all__ = ['ChipBase', 'ChipRegion', 'Tiler', 'iter_tiles']
