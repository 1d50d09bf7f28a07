# -*- coding: utf-8 -*-
"""
Shared Test Fixtures - Synthetic ISIN-binned archives written with h5py.

Archives mimic the NetCDF-4 layout of GlobColour binned products: parallel
one-dimensional ``row``/``col``/measurement variables sorted by row then
column, with global and per-variable attributes.

Dependencies
------------
pytest
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
2026-10-19

Modified
--------
2026-10-19
"""

import h5py
import numpy as np
import pytest

from isinraster.config import ReaderOptions
from isinraster.grid.isin import SinusoidalGrid

# Name netCDF-C gives a dimension scale that has no coordinate variable.
BARE_DIMENSION_NAME = (
    "This is a netCDF dimension but not a netCDF variable.         0"
)

SMALL_GRID_ROWS = 36


def grid_records(grid, skip_rows=()):
    """One record per cell of ``grid``, sorted by row then column."""
    rows, cols = [], []
    for r in range(grid.row_count):
        if r in skip_rows:
            continue
        n = grid.col_count(r)
        rows.append(np.full(n, r, dtype=np.int32))
        cols.append(np.arange(n, dtype=np.int32))
    if not rows:
        return np.empty(0, dtype=np.int32), np.empty(0, dtype=np.int32)
    return np.concatenate(rows), np.concatenate(cols)


def write_archive(
    filepath,
    rows,
    cols,
    variables=None,
    global_attrs=None,
    var_attrs=None,
    bare_dimension=False,
):
    """Write a binned archive.

    Parameters
    ----------
    filepath : Path
        Destination file.
    rows, cols : np.ndarray
        Row and column ids of the records.
    variables : Dict[str, np.ndarray], optional
        Measurement variables, one value per record.
    global_attrs : Dict[str, Any], optional
        Root attributes.
    var_attrs : Dict[str, Dict[str, Any]], optional
        Attributes per variable name.
    bare_dimension : bool
        Also write the ``bin`` dimension scale netCDF-C creates for a
        dimension without a coordinate variable, attached to every
        record-length 1-D variable.
    """
    variables = variables or {}
    var_attrs = var_attrs or {}
    with h5py.File(str(filepath), "w") as f:
        for key, val in (global_attrs or {}).items():
            f.attrs[key] = val
        f.create_dataset("row", data=np.asarray(rows))
        f.create_dataset("col", data=np.asarray(cols))
        for name, data in variables.items():
            f.create_dataset(name, data=np.asarray(data))
        for name, attrs in var_attrs.items():
            for key, val in attrs.items():
                f[name].attrs[key] = val
        if bare_dimension:
            dim = f.create_dataset("bin", data=np.zeros(len(rows), np.float32))
            dim.make_scale(BARE_DIMENSION_NAME)
            for name, obj in f.items():
                if name == "bin" or obj.shape != (len(rows),):
                    continue
                obj.dims[0].attach_scale(dim)
    return filepath


@pytest.fixture
def small_grid():
    """36-row ISIN grid: 5 degree rows, 72 columns at the equator."""
    return SinusoidalGrid(SMALL_GRID_ROWS)


@pytest.fixture
def small_options():
    """Options matching ``small_grid`` with chunks far smaller than the data."""
    return ReaderOptions(chunk_size=100, grid_rows=SMALL_GRID_ROWS)


@pytest.fixture
def make_archive(tmp_path):
    """Factory writing archives into ``tmp_path``."""
    def _make(name="L3b_test.nc", **kwargs):
        return write_archive(tmp_path / name, **kwargs)
    return _make


def _grid_archive(make_archive, grid, name, skip_rows=()):
    rows, cols = grid_records(grid, skip_rows=skip_rows)
    return make_archive(
        name,
        rows=rows,
        cols=cols,
        variables={
            "CHL1_mean": rows.astype(np.float64) * 10000 + cols,
            "CHL1_count": np.ones(rows.size, dtype=np.int16),
        },
        global_attrs={"title": "GlobColour synthetic L3b"},
        var_attrs={
            "CHL1_mean": {
                "_FillValue": -1.0,
                "units": "mg/m3",
                "long_name": "Chlorophyll-a concentration",
            },
        },
        bare_dimension=True,
    )


@pytest.fixture
def full_grid_archive(make_archive, small_grid):
    """Every cell of ``small_grid`` holds ``row * 10000 + col``."""
    return _grid_archive(make_archive, small_grid, "L3b_full.nc")


@pytest.fixture
def gappy_archive(make_archive, small_grid):
    """Like ``full_grid_archive`` without rows 10, 11 and 30 and above."""
    skip = {10, 11} | set(range(30, SMALL_GRID_ROWS))
    return _grid_archive(make_archive, small_grid, "L3b_gappy.nc",
                         skip_rows=skip)
