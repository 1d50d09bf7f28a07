# -*- coding: utf-8 -*-
"""
Tiler - Partition a raster into tiles and read it tile by tile.

``Tiler`` computes row-major tile regions over a raster of known size;
``iter_tiles`` drives a reader through those regions so display or
analysis code can consume a global binned archive without materializing
the whole raster.

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
2026-02-06

Modified
--------
2026-10-19
"""

# Standard library
import logging
from typing import Iterator, List, Optional, Tuple, Union, TYPE_CHECKING

# Third-party
import numpy as np

# isinraster internal
from isinraster.data_prep.base import ChipBase, ChipRegion, _normalize_pair

if TYPE_CHECKING:
    from isinraster.IO.binned import BinnedReader

logger = logging.getLogger(__name__)


class Tiler(ChipBase):
    """Split a raster into tiles with configurable stride.

    Tiles are ordered row-major from the top-left. Edge tiles are snapped
    inward so every tile keeps the full tile size (unless the raster is
    smaller than a tile).

    Parameters
    ----------
    nrows : int
        Number of raster rows.
    ncols : int
        Number of raster columns.
    tile_size : int or Tuple[int, int]
        ``(tile_rows, tile_cols)``. If int, square tiles.
    stride : int or Tuple[int, int], optional
        ``(stride_rows, stride_cols)``. Defaults to ``tile_size``.

    Raises
    ------
    ValueError
        If a stride exceeds the tile size.

    Examples
    --------
    >>> tiler = Tiler(nrows=100, ncols=100, tile_size=50)
    >>> tiler.tile_positions()[1]
    ChipRegion(row_start=0, col_start=50, row_end=50, col_end=100)
    """

    def __init__(
        self,
        nrows: int,
        ncols: int,
        tile_size: Union[int, Tuple[int, int]],
        stride: Optional[Union[int, Tuple[int, int]]] = None,
    ) -> None:
        super().__init__(nrows, ncols)
        self._tile_size = _normalize_pair(tile_size, 'tile_size')
        if stride is None:
            self._stride = self._tile_size
        else:
            self._stride = _normalize_pair(stride, 'stride')
        if self._stride[0] > self._tile_size[0] or \
                self._stride[1] > self._tile_size[1]:
            raise ValueError(
                f"stride {self._stride} must not exceed "
                f"tile_size {self._tile_size}"
            )

    @property
    def tile_size(self) -> Tuple[int, int]:
        return self._tile_size

    @property
    def stride(self) -> Tuple[int, int]:
        return self._stride

    @staticmethod
    def _starts(extent: int, tile: int, stride: int) -> np.ndarray:
        if extent <= tile:
            return np.zeros(1, dtype=int)
        count = 1 + int(np.ceil((extent - tile) / stride))
        return np.arange(count) * stride

    def tile_positions(self) -> List[ChipRegion]:
        """Tile regions in row-major order.

        Returns
        -------
        List[ChipRegion]
        """
        tr, tc = self._tile_size
        sr, sc = self._stride
        regions = []
        for rs in self._starts(self._nrows, tr, sr):
            for cs in self._starts(self._ncols, tc, sc):
                regions.append(self._snap_region(int(rs), int(cs), tr, tc))
        return regions

    def __repr__(self) -> str:
        return (f"Tiler(nrows={self._nrows}, ncols={self._ncols}, "
                f"tile_size={self._tile_size}, stride={self._stride})")


def iter_tiles(
    reader: 'BinnedReader',
    band: Union[int, str],
    tile_size: Union[int, Tuple[int, int]] = 512,
    scaled: bool = False,
) -> Iterator[Tuple[ChipRegion, np.ndarray]]:
    """Read one band of a binned reader tile by tile.

    Parameters
    ----------
    reader : BinnedReader
        Open reader.
    band : int or str
        Band index or name.
    tile_size : int or Tuple[int, int]
        Tile size in pixels. Default 512.
    scaled : bool
        Yield geophysical values.

    Yields
    ------
    Tuple[ChipRegion, np.ndarray]
        Tile region and its ``(rows, cols)`` samples.
    """
    tiler = Tiler(reader.metadata.rows, reader.metadata.cols, tile_size)
    regions = tiler.tile_positions()
    logger.debug("Reading band %r in %d tiles of %s", band, len(regions),
                 tiler.tile_size)
    for region in regions:
        x, y, width, height = region.window()
        data = reader.read_region(band, x, y, width, height, scaled=scaled)
        yield region, data
