# -*- coding: utf-8 -*-
"""
Grid Module - ISIN sinusoidal grid and equirectangular output windows.

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

from isinraster.grid.isin import GLOBCOLOUR_ROW_COUNT, SinusoidalGrid
from isinraster.grid.equirect import EquirectangularWindow

__all__ = ['GLOBCOLOUR_ROW_COUNT', 'SinusoidalGrid', 'EquirectangularWindow']
