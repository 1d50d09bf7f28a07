# -*- coding: utf-8 -*-
"""
Raster Resampler - Bin records to dense equirectangular samples.

For each requested output row the resampler looks up the row's record
range in the ``RowIndex``, range-reads the ``col`` ids and band values of
that row, and matches them against the ISIN columns sampled by the output
pixels. Both sequences are ascending (records by archive order, targets
because output columns are scanned west to east), so matching is a
sorted-sequence merge join: no per-pixel search over the whole row.

Output rows without records, and pixels whose ISIN column has no record,
receive the band's no-data value.

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

# Standard library
import logging
from typing import Optional

# Third-party
import numpy as np

# isinraster internal
from isinraster.exceptions import CancelledError, PreconditionError
from isinraster.grid.equirect import EquirectangularWindow
from isinraster.IO.archive import COL, BinArchiveReader
from isinraster.IO.models import BandInfo
from isinraster.IO.row_index import RowIndex
from isinraster.resampling.progress import ProgressMonitor

logger = logging.getLogger(__name__)


def merge_join(
    cols: np.ndarray,
    values: np.ndarray,
    targets: np.ndarray,
    nodata: float,
    out: Optional[np.ndarray] = None,
) -> np.ndarray:
    """Pick the value of the record matching each target column.

    Parameters
    ----------
    cols : np.ndarray
        Ascending column ids of one row's records.
    values : np.ndarray
        Record values, same length as ``cols``.
    targets : np.ndarray
        Non-decreasing column ids wanted, one per output pixel.
    nodata : float
        Value for targets without a matching record.
    out : np.ndarray, optional
        Destination of length ``len(targets)``. Allocated with the dtype
        of ``values`` when omitted.

    Returns
    -------
    np.ndarray
        ``out``, holding the first record value whose column equals the
        target, or ``nodata``.

    Examples
    --------
    >>> merge_join(np.array([2, 5, 9]), np.array([20, 50, 90]),
    ...            np.array([0, 2, 4, 5, 9, 11]), -1)
    array([-1, 20, -1, 50, 90, -1])
    """
    cols = np.asarray(cols)
    values = np.asarray(values)
    targets = np.asarray(targets)
    if cols.shape != values.shape:
        raise ValueError(
            f"cols and values differ in shape: {cols.shape} != {values.shape}"
        )
    if out is None:
        out = np.empty(targets.shape, dtype=values.dtype)

    out[...] = nodata
    if cols.size == 0 or targets.size == 0:
        return out

    # Both sides are sorted: the cursor of each target into cols is
    # non-decreasing, which is the two-pointer merge done in one pass.
    cursor = np.searchsorted(cols, targets, side='left')
    inside = cursor < cols.size
    matched = np.zeros(targets.shape, dtype=bool)
    matched[inside] = cols[cursor[inside]] == targets[inside]
    out[matched] = values[cursor[matched]]
    return out


class RasterResampler:
    """Materialize output pixels of one window from a bin archive.

    Parameters
    ----------
    window : EquirectangularWindow
        Output raster geometry.
    archive : BinArchiveReader
        Open archive to range-read.
    row_index : RowIndex
        Index of ``window``'s rows into ``archive``.

    Notes
    -----
    Not thread-safe: the archive handle is shared mutable state. The
    owning reader serializes calls.
    """

    def __init__(
        self,
        window: EquirectangularWindow,
        archive: BinArchiveReader,
        row_index: RowIndex,
    ) -> None:
        if row_index.row_count != window.row_count:
            raise ValueError(
                f"Row index covers {row_index.row_count} rows, "
                f"window has {window.row_count}"
            )
        self._window = window
        self._archive = archive
        self._row_index = row_index

    @property
    def window(self) -> EquirectangularWindow:
        return self._window

    @property
    def row_index(self) -> RowIndex:
        return self._row_index

    def _check_region(self, x: int, y: int, width: int, height: int) -> None:
        if width <= 0 or height <= 0:
            raise PreconditionError(
                f"Region size must be positive, got {width}x{height}"
            )
        if x < 0 or y < 0 or x + width > self._window.col_count \
                or y + height > self._window.row_count:
            raise PreconditionError(
                f"Region ({x}, {y}, {width}, {height}) exceeds raster "
                f"{self._window.col_count}x{self._window.row_count}"
            )

    def resample_row(
        self,
        band: BandInfo,
        y: int,
        x: int,
        width: int,
        out: np.ndarray,
        scaled: bool = False,
    ) -> np.ndarray:
        """Fill ``out`` with ``width`` samples of output row ``y`` from ``x``.

        Parameters
        ----------
        band : BandInfo
            Band to sample.
        y : int
            Output row (0 is the northern edge).
        x : int
            First output column.
        width : int
            Number of samples.
        out : np.ndarray
            One-dimensional destination of length ``width``.
        scaled : bool
            Apply the band's scale factor and offset to matched samples.

        Returns
        -------
        np.ndarray
            ``out``.

        Raises
        ------
        ArchiveReadError
            If range-reading the row's records fails.
        """
        start, count = self._row_index.range(self._window.index_slot(y))
        if count == 0:
            out[...] = band.nodata
            return out

        cols = self._archive.read_range(COL, start, count)
        values = self._archive.read_range(band.name, start, count)
        if scaled and band.is_scaled:
            values = values * band.scale_factor + band.add_offset

        targets = self._window.isin_cols(self._window.isin_row(y), x, width)
        return merge_join(cols, values, targets, band.nodata, out=out)

    def resample(
        self,
        band: BandInfo,
        x: int,
        y: int,
        width: int,
        height: int,
        out: np.ndarray,
        progress: Optional[ProgressMonitor] = None,
        scaled: bool = False,
    ) -> np.ndarray:
        """Fill ``out`` with the ``height x width`` region at ``(x, y)``.

        Parameters
        ----------
        band : BandInfo
            Band to sample.
        x, y : int
            Upper-left output pixel of the region.
        width, height : int
            Region size in pixels.
        out : np.ndarray
            Destination of shape ``(height, width)``.
        progress : ProgressMonitor, optional
            Receives one work unit per row and is polled for
            cancellation after each row.
        scaled : bool
            Apply the band's scale factor and offset.

        Returns
        -------
        np.ndarray
            ``out``.

        Raises
        ------
        PreconditionError
            If the region lies outside the window or ``out`` has the
            wrong shape.
        CancelledError
            If ``progress`` reports cancellation. Rows already written to
            ``out`` must be discarded by the caller.
        ArchiveReadError
            If a range read fails.
        """
        self._check_region(x, y, width, height)
        if out.shape != (height, width):
            raise PreconditionError(
                f"Destination shape {out.shape} != region {(height, width)}"
            )
        progress = progress or ProgressMonitor()

        progress.begin(f"Resampling data from band '{band.name}'", height)
        try:
            for i in range(height):
                self.resample_row(band, y + i, x, width, out[i], scaled=scaled)
                progress.worked(1)
                if progress.is_cancelled():
                    raise CancelledError(
                        f"Resampling of band '{band.name}' cancelled after "
                        f"{i + 1} of {height} rows"
                    )
        finally:
            progress.done()

        logger.debug("Resampled %s region x=%d y=%d %dx%d",
                     band.name, x, y, width, height)
        return out
