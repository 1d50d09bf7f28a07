# -*- coding: utf-8 -*-
"""
Bin Archive - Sequential range access to ISIN-binned record tables.

A binned archive is a NetCDF-4 (HDF5) file holding one-dimensional
variables over a shared record dimension: ``row`` and ``col`` address each
record on the ISIN grid, every other numeric variable of the same length
holds one measurement per record. Records are sorted by ``row`` and, within
a row, by ``col``.

``BinArchiveReader`` exposes only two access patterns, both backed by HDF5
hyperslab selection so no variable is ever loaded whole:

- ``read_range``: contiguous records ``[start, start + count)``.
- ``iter_chunks``: a forward-only sequence of fixed-size chunks.

Dependencies
------------
h5py

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

# Standard library
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union

# Third-party
import h5py
import numpy as np

# isinraster internal
from isinraster.config import DEFAULT_CHUNK_SIZE
from isinraster.exceptions import ArchiveFormatError, ArchiveReadError
from isinraster.IO.attributes import normalize_value

logger = logging.getLogger(__name__)

ROW = 'row'
COL = 'col'

# NAME attribute netCDF-C writes on dimensions that have no variable.
_NETCDF_BARE_DIMENSION = 'This is a netCDF dimension but not a netCDF variable'


def _is_bare_dimension(ds: 'h5py.Dataset') -> bool:
    """Whether ``ds`` is a netCDF dimension placeholder, not a variable."""
    if not h5py.h5ds.is_scale(ds.id):
        return False
    name = normalize_value(ds.attrs.get('NAME', b''))
    return isinstance(name, str) and name.startswith(_NETCDF_BARE_DIMENSION)



def _dimension_of(ds: 'h5py.Dataset') -> Optional[str]:
    """HDF5 path of the dimension scale behind the first axis of ``ds``.

    A dimension scale is its own dimension. None when no scale is
    attached (plain HDF5 files).
    """
    if h5py.h5ds.is_scale(ds.id):
        return ds.name
    if ds.ndim == 0 or len(ds.dims[0]) == 0:
        return None
    return ds.dims[0][0].name


def _attrs_to_dict(attrs: Any) -> Dict[str, Any]:
    """Copy an h5py attribute manager into a plain dict.

    Attributes h5py cannot decode (e.g. netCDF-internal references) are
    skipped.
    """
    result: Dict[str, Any] = {}
    for key in attrs.keys():
        if key in ('DIMENSION_LIST', 'REFERENCE_LIST', 'CLASS', 'NAME',
                   '_Netcdf4Dimid', '_Netcdf4Coordinates', '_NCProperties'):
            continue
        try:
            result[key] = normalize_value(attrs[key])
        except (OSError, TypeError, ValueError):
            logger.debug("Skipping undecodable attribute %r", key)
    return result


class BinArchiveReader:
    """Chunked, forward-only reader over the record variables of an archive.

    Parameters
    ----------
    h5file : h5py.File
        Open archive. Ownership passes to this reader; ``close`` closes it.
    chunk_size : int
        Records per chunk yielded by ``iter_chunks``.

    Raises
    ------
    ArchiveFormatError
        If ``row`` or ``col`` is missing, not one-dimensional, not
        integer-typed, or the two differ in length.

    Examples
    --------
    >>> with BinArchiveReader.open('L3b_20080101.nc') as archive:
    ...     for offset, rows in archive.iter_chunks('row'):
    ...         ...
    ...     cols = archive.read_range('col', 1200, 35)
    """

    def __init__(
        self,
        h5file: 'h5py.File',
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        if chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {chunk_size}")
        self._file = h5file
        self._chunk_size = int(chunk_size)

        lengths = []
        for name in (ROW, COL):
            obj = h5file.get(name)
            if not isinstance(obj, h5py.Dataset):
                raise ArchiveFormatError(
                    f"Required variable '{name}' not found in {h5file.filename}"
                )
            if obj.ndim != 1:
                raise ArchiveFormatError(
                    f"Variable '{name}' must be one-dimensional, "
                    f"got {obj.ndim} dimensions"
                )
            if not np.issubdtype(obj.dtype, np.integer):
                raise ArchiveFormatError(
                    f"Variable '{name}' must be integer-typed, got {obj.dtype}"
                )
            lengths.append(obj.shape[0])
        if lengths[0] != lengths[1]:
            raise ArchiveFormatError(
                f"Variables '{ROW}' and '{COL}' differ in length: "
                f"{lengths[0]} != {lengths[1]}"
            )
        self._length = int(lengths[0])

    @classmethod
    def open(
        cls,
        filepath: Union[str, Path],
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> 'BinArchiveReader':
        """Open an archive file read-only.

        Raises
        ------
        ArchiveFormatError
            If the file is not a readable HDF5/NetCDF-4 file or lacks the
            required variables.
        """
        try:
            h5file = h5py.File(str(filepath), 'r')
        except OSError as e:
            raise ArchiveFormatError(
                f"Failed to open binned archive {filepath}: {e}"
            ) from e
        try:
            return cls(h5file, chunk_size=chunk_size)
        except Exception:
            h5file.close()
            raise

    @property
    def bin_count(self) -> int:
        """Total number of bin records."""
        return self._length

    @property
    def chunk_size(self) -> int:
        """Records per chunk yielded by ``iter_chunks``."""
        return self._chunk_size

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def _root(self) -> 'h5py.File':
        if self._file is None:
            raise ArchiveReadError("Archive is closed")
        return self._file

    def _dataset(self, name: str) -> 'h5py.Dataset':
        obj = self._root().get(name)
        if not isinstance(obj, h5py.Dataset):
            raise KeyError(name)
        return obj

    @property
    def attrs(self) -> Dict[str, Any]:
        """Global (root group) attributes as plain Python values."""
        return _attrs_to_dict(self._root().attrs)

    def variable_attrs(self, name: str) -> Dict[str, Any]:
        """Attributes of variable ``name`` as plain Python values."""
        return _attrs_to_dict(self._dataset(name).attrs)

    def dtype(self, name: str) -> np.dtype:
        """Stored data type of variable ``name``."""
        return self._dataset(name).dtype

    def variables(self) -> List[str]:
        """Names of all record variables, in archive order.

        A record variable is a numeric, one-dimensional root-level
        dataset with exactly ``bin_count`` elements. When the archive
        attaches dimension scales (netCDF-4), it must also share the
        dimension of ``row``; a variable of another dimension with the
        same length is not a record variable. ``row`` and ``col`` are
        included.
        """
        record_dim = _dimension_of(self._dataset(ROW))
        names = []
        for name, obj in self._root().items():
            if not isinstance(obj, h5py.Dataset):
                continue
            if obj.ndim != 1 or obj.shape[0] != self._length:
                continue
            if not np.issubdtype(obj.dtype, np.number):
                continue
            if _is_bare_dimension(obj):
                continue
            if record_dim is not None:
                dim = _dimension_of(obj)
                if dim is not None and dim != record_dim:
                    continue
            names.append(name)
        return names

    def read_range(self, name: str, start: int, count: int) -> np.ndarray:
        """Read records ``[start, start + count)`` of variable ``name``.

        Raises
        ------
        KeyError
            If the variable does not exist.
        ValueError
            If the range falls outside ``[0, bin_count]``.
        ArchiveReadError
            If the underlying read fails.
        """
        if start < 0 or count < 0 or start + count > self._length:
            raise ValueError(
                f"Record range [{start}, {start + count}) outside "
                f"[0, {self._length})"
            )
        ds = self._dataset(name)
        try:
            return ds[start:start + count]
        except (OSError, RuntimeError) as e:
            raise ArchiveReadError(
                f"Failed to read '{name}' records [{start}, {start + count}): {e}"
            ) from e

    def iter_chunks(
        self, name: str, start: int = 0
    ) -> Iterator[Tuple[int, np.ndarray]]:
        """Yield ``(offset, values)`` chunks of ``name`` from ``start`` on.

        Chunks are contiguous, in ascending offset order, and at most
        ``chunk_size`` records long.
        """
        offset = start
        while offset < self._length:
            count = min(self._chunk_size, self._length - offset)
            yield offset, self.read_range(name, offset, count)
            offset += count

    def close(self) -> None:
        """Close the archive file. Safe to call more than once."""
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
