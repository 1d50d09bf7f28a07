# -*- coding: utf-8 -*-
"""
Geolocation Module - Pixel to geographic coordinate transforms.

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

from isinraster.geolocation.base import Geolocation
from isinraster.geolocation.affine import AffineGeolocation

__all__ = ['Geolocation', 'AffineGeolocation']
