# -*- coding: utf-8 -*-
"""
Resampling Module - Sparse-bin to dense-raster resampling.

Holds the row-wise merge-join resampler and the progress/cancellation
capability it reports through.

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

from isinraster.resampling.progress import (
    ProgressMonitor,
    CallbackProgressMonitor,
)
from isinraster.resampling.resampler import RasterResampler, merge_join

__all__ = [
    'ProgressMonitor',
    'CallbackProgressMonitor',
    'RasterResampler',
    'merge_join',
]
