# -*- coding: utf-8 -*-
"""
Data Preparation Base - Raster regions for piecewise reads.

A dense raster produced from a binned archive can be far larger than the
archive itself (a global 4320-row window is 8640 x 4320 pixels per band),
so callers read it in pieces. ``ChipRegion`` names one piece in the
row/column terms of ``read_chip`` and converts it to the ``x``/``y``
origin of ``read_region``. ``ChipBase`` holds the raster extent shared by
every layout strategy and keeps regions inside it.

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
2026-02-09

Modified
--------
2026-10-19
"""

# Standard library
from abc import ABC
from typing import NamedTuple, Tuple, Union

Pair = Tuple[int, int]


class ChipRegion(NamedTuple):
    """Half-open pixel rectangle ``[row_start, row_end) x [col_start, col_end)``.

    Row 0 is the northern edge of the equirectangular raster.
    """

    row_start: int
    col_start: int
    row_end: int
    col_end: int

    @property
    def shape(self) -> Pair:
        """``(rows, cols)`` of the region."""
        return (self.row_end - self.row_start, self.col_end - self.col_start)

    def window(self) -> Tuple[int, int, int, int]:
        """``(x, y, width, height)`` arguments for ``read_region``."""
        rows, cols = self.shape
        return (self.col_start, self.row_start, cols, rows)


def _check_extent(nrows, ncols) -> None:
    for label, value in (('nrows', nrows), ('ncols', ncols)):
        # bool is an int subclass but never a valid extent
        if isinstance(value, bool) or not isinstance(value, int):
            raise TypeError(
                f"{label} must be int, got {type(value).__name__}"
            )
        if value <= 0:
            raise ValueError(f"{label} must be positive, got {value}")


class ChipBase(ABC):
    """Raster extent shared by region layout strategies.

    Parameters
    ----------
    nrows, ncols : int
        Raster height and width in pixels, usually
        ``reader.metadata.rows`` and ``reader.metadata.cols``.

    Raises
    ------
    TypeError
        If an extent is not an ``int``.
    ValueError
        If an extent is zero or negative.
    """

    def __init__(self, nrows: int, ncols: int) -> None:
        _check_extent(nrows, ncols)
        self._nrows = nrows
        self._ncols = ncols

    @property
    def nrows(self) -> int:
        return self._nrows

    @property
    def ncols(self) -> int:
        return self._ncols

    @property
    def shape(self) -> Pair:
        return (self._nrows, self._ncols)

    def _snap_region(
        self,
        row_start: int,
        col_start: int,
        row_width: int,
        col_width: int,
    ) -> ChipRegion:
        """Place a ``row_width x col_width`` region at or inside the raster.

        A region hanging over an edge is moved back inside without
        shrinking. Only a region wider or taller than the raster itself is
        cut down to the raster extent.
        """
        height = min(row_width, self._nrows)
        width = min(col_width, self._ncols)
        top = min(max(row_start, 0), self._nrows - height)
        left = min(max(col_start, 0), self._ncols - width)
        return ChipRegion(top, left, top + height, left + width)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(nrows={self._nrows}, ncols={self._ncols})"


def _normalize_pair(value: Union[int, Pair], name: str) -> Pair:
    """Expand ``value`` to a ``(rows, cols)`` pair of positive ints.

    Raises
    ------
    TypeError
        If ``value`` is neither an int nor a tuple of two ints.
    ValueError
        If a component is not positive.
    """
    if isinstance(value, int):
        pair = (value, value)
    elif isinstance(value, tuple) and len(value) == 2 and \
            all(isinstance(v, int) for v in value):
        pair = value
    else:
        raise TypeError(
            f"{name} must be an int or a (rows, cols) tuple of ints, "
            f"got {value!r}"
        )
    if min(pair) <= 0:
        raise ValueError(f"{name} must be positive, got {value!r}")
    return pair
