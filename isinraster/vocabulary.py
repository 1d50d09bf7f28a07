# -*- coding: utf-8 -*-
"""
Vocabulary - Enumerations shared across isinraster.

Product classification for opened archives and the lifecycle states of
a dataset reader.

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
2026-02-10

Modified
--------
2026-10-19
"""

from enum import Enum


class ProductType(Enum):
    """Kind of binned product held by an archive.

    ``BINNED_DDS`` marks a diagnostic data set: a small regional extract
    around a ground site, recognised by its ``site_*`` global attributes.
    Every other binned archive is ``BINNED_GLOBAL``.
    """

    BINNED_GLOBAL = "GlobColour-L3b"
    BINNED_DDS = "GlobColour-L3b-DDS"


class DatasetState(Enum):
    """Lifecycle states of a ``BinnedReader``.

    A reader moves ``CLOSED -> OPENING -> OPEN -> CLOSED`` exactly once.
    Reopening requires a new reader instance.
    """

    CLOSED = "closed"
    OPENING = "opening"
    OPEN = "open"
