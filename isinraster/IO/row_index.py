# -*- coding: utf-8 -*-
"""
Row Index - Per-row record offsets into a row-sorted bin archive.

The archive's records are sorted by ISIN row but carry no index, so the
only way to find where a row starts is to scan the ``row`` variable. The
``RowIndex`` does that once, in a single forward pass over fixed-size
chunks, and stores compressed-sparse-row style offsets for the rows of an
equirectangular window. Afterwards every window row maps to a contiguous,
possibly empty, record range in O(1).

Layout: ``offsets`` has ``row_count + 1`` entries. ``offsets[i]`` is the
first record whose row id is ``>= min_row + i``; ``offsets[row_count]``
is the end of the window's last row. Rows without records get the same
offset as the next populated row, giving empty ranges.

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
from typing import Iterable, Tuple

# Third-party
import numpy as np

logger = logging.getLogger(__name__)


class RowIndex:
    """Record offsets for a contiguous block of ISIN rows.

    Parameters
    ----------
    min_row : int
        ISIN row of slot 0.
    offsets : np.ndarray
        Non-decreasing ``int64`` array of ``row_count + 1`` offsets.
    total : int
        Total number of records in the archive.

    Raises
    ------
    ValueError
        If ``offsets`` is empty, decreasing, or exceeds ``total``.
    """

    def __init__(self, min_row: int, offsets: np.ndarray, total: int) -> None:
        offsets = np.asarray(offsets, dtype=np.int64)
        if offsets.ndim != 1 or offsets.size < 2:
            raise ValueError("offsets must hold at least two entries")
        if np.any(np.diff(offsets) < 0):
            raise ValueError("offsets must be non-decreasing")
        if offsets[0] < 0 or offsets[-1] > total:
            raise ValueError(
                f"offsets must lie within [0, {total}], "
                f"got [{offsets[0]}, {offsets[-1]}]"
            )
        self._min_row = int(min_row)
        self._offsets = offsets
        self._total = int(total)

    @classmethod
    def build(
        cls,
        chunks: Iterable[Tuple[int, np.ndarray]],
        min_row: int,
        row_count: int,
        total: int,
    ) -> 'RowIndex':
        """Scan row-id chunks once and build the index.

        Parameters
        ----------
        chunks : Iterable[Tuple[int, np.ndarray]]
            ``(offset, row_ids)`` chunks covering the archive's ``row``
            variable from offset 0 in ascending order, as yielded by
            ``BinArchiveReader.iter_chunks('row')``.
        min_row : int
            ISIN row of the first slot.
        row_count : int
            Number of rows in the window.
        total : int
            Total number of records; the offset carried into every slot
            the scan did not reach.

        Returns
        -------
        RowIndex

        Notes
        -----
        Consumption stops as soon as the first record beyond the window's
        last row is seen, so archives whose data lies mostly north of the
        window are not read to the end.
        """
        if row_count <= 0:
            raise ValueError(f"row_count must be positive, got {row_count}")

        # Slot i wants the first record with row id >= min_row + i.
        targets = min_row + np.arange(row_count + 1, dtype=np.int64)
        offsets = np.empty(row_count + 1, dtype=np.int64)
        filled = 0
        scanned = 0

        for front, row_ids in chunks:
            if row_ids.size == 0:
                continue
            scanned = front + row_ids.size
            # Chunks are sorted, so the slots resolved inside this chunk
            # are a prefix of the pending ones.
            pos = np.searchsorted(row_ids, targets[filled:], side='left')
            hit = int(np.count_nonzero(pos < row_ids.size))
            offsets[filled:filled + hit] = front + pos[:hit]
            filled += hit
            logger.debug("Indexed records up to %d, %d/%d slots filled",
                         scanned, filled, row_count + 1)
            if filled == row_count + 1:
                break

        offsets[filled:] = total
        index = cls(min_row, offsets, total)
        logger.info(
            "Built row index for ISIN rows %d..%d: %d records in window, "
            "%d of %d records scanned",
            min_row, min_row + row_count - 1, index.window_bin_count,
            scanned, total,
        )
        return index

    @property
    def min_row(self) -> int:
        """ISIN row of slot 0."""
        return self._min_row

    @property
    def row_count(self) -> int:
        """Number of indexed rows."""
        return self._offsets.size - 1

    @property
    def total(self) -> int:
        """Total number of records in the archive."""
        return self._total

    @property
    def offsets(self) -> np.ndarray:
        """Read-only view of the ``row_count + 1`` offsets."""
        view = self._offsets.view()
        view.flags.writeable = False
        return view

    @property
    def window_bin_count(self) -> int:
        """Number of records belonging to indexed rows."""
        return int(self._offsets[-1] - self._offsets[0])

    def offset(self, slot: int) -> int:
        """First record of slot ``slot``."""
        return int(self._offsets[slot])

    def count(self, slot: int) -> int:
        """Number of records of slot ``slot`` (0 for rows without data)."""
        return int(self._offsets[slot + 1] - self._offsets[slot])

    def range(self, slot: int) -> Tuple[int, int]:
        """``(start, count)`` record range of slot ``slot``."""
        if not 0 <= slot < self.row_count:
            raise IndexError(
                f"slot {slot} outside [0, {self.row_count})"
            )
        return self.offset(slot), self.count(slot)

    def slot_of(self, row: int) -> int:
        """Slot of ISIN row ``row``."""
        return row - self._min_row

    def __len__(self) -> int:
        return self.row_count

    def __repr__(self) -> str:
        return (f"RowIndex(min_row={self._min_row}, "
                f"row_count={self.row_count}, total={self._total})")
