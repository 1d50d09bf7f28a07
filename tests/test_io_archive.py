# -*- coding: utf-8 -*-
"""
BinArchiveReader Tests - Validation and range access on synthetic archives.

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
import pytest
import numpy as np

from isinraster.exceptions import ArchiveFormatError, ArchiveReadError
from isinraster.IO.archive import BinArchiveReader


@pytest.fixture
def simple_archive(make_archive):
    rows = np.array([0, 0, 1, 3, 3], dtype=np.int32)
    cols = np.array([1, 4, 0, 2, 3], dtype=np.int32)
    return make_archive(
        rows=rows,
        cols=cols,
        variables={"value": np.arange(5, dtype=np.float32)},
        global_attrs={
            "title": "simple",
            "max_north_grid": np.array([10.0]),
            "product_level": np.bytes_(b"L3b"),
        },
        var_attrs={"value": {"units": "mg/m3", "_FillValue": np.array([-9.0])}},
        bare_dimension=True,
    )


class TestOpen:
    """Test archive validation at open time."""

    def test_open(self, simple_archive):
        with BinArchiveReader.open(simple_archive, chunk_size=2) as archive:
            assert archive.is_open
            assert archive.bin_count == 5
            assert archive.chunk_size == 2

    def test_not_hdf5_raises(self, tmp_path):
        bogus = tmp_path / "bogus.nc"
        bogus.write_text("not an archive")
        with pytest.raises(ArchiveFormatError, match="Failed to open"):
            BinArchiveReader.open(bogus)

    def test_missing_col_raises(self, tmp_path):
        path = tmp_path / "nocol.nc"
        with h5py.File(str(path), "w") as f:
            f.create_dataset("row", data=np.zeros(3, dtype=np.int32))
        with pytest.raises(ArchiveFormatError, match="'col' not found"):
            BinArchiveReader.open(path)

    def test_two_dimensional_row_raises(self, tmp_path):
        path = tmp_path / "2d.nc"
        with h5py.File(str(path), "w") as f:
            f.create_dataset("row", data=np.zeros((2, 3), dtype=np.int32))
            f.create_dataset("col", data=np.zeros(6, dtype=np.int32))
        with pytest.raises(ArchiveFormatError, match="one-dimensional"):
            BinArchiveReader.open(path)

    def test_float_col_raises(self, make_archive):
        path = make_archive(rows=np.zeros(3, np.int32), cols=np.zeros(3))
        with pytest.raises(ArchiveFormatError, match="integer-typed"):
            BinArchiveReader.open(path)

    def test_length_mismatch_raises(self, make_archive):
        path = make_archive(rows=np.zeros(3, np.int32),
                            cols=np.zeros(4, np.int32))
        with pytest.raises(ArchiveFormatError, match="differ in length"):
            BinArchiveReader.open(path)

    def test_bad_chunk_size(self, simple_archive):
        with pytest.raises(ValueError, match="chunk_size"):
            BinArchiveReader.open(simple_archive, chunk_size=0)


class TestMetadata:
    """Test attribute and variable discovery."""

    def test_global_attrs_unwrapped(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            attrs = archive.attrs
        assert attrs["title"] == "simple"
        assert attrs["max_north_grid"] == 10.0
        assert attrs["product_level"] == "L3b"

    def test_variable_attrs(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            attrs = archive.variable_attrs("value")
        assert attrs == {"units": "mg/m3", "_FillValue": -9.0}

    def test_variables_skip_bare_dimension(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            assert archive.variables() == ["col", "row", "value"]

    def test_variables_skip_other_dimension_of_same_length(self,
                                                            simple_archive):
        with h5py.File(str(simple_archive), "a") as f:
            lat = f.create_dataset("lat", data=np.linspace(-10, 10, 5))
            lat.make_scale("lat")
            bnds = f.create_dataset("lat_bnds", data=np.ones(5))
            bnds.dims[0].attach_scale(lat)
        with BinArchiveReader.open(simple_archive) as archive:
            assert archive.variables() == ["col", "row", "value"]

    def test_variables_without_dimension_scales(self, make_archive):
        path = make_archive(
            rows=np.zeros(3, np.int32),
            cols=np.zeros(3, np.int32),
            variables={"value": np.ones(3)},
        )
        with BinArchiveReader.open(path) as archive:
            assert archive.variables() == ["col", "row", "value"]

    def test_variables_skip_other_shapes(self, make_archive):
        path = make_archive(
            rows=np.zeros(3, np.int32),
            cols=np.zeros(3, np.int32),
            variables={
                "good": np.ones(3),
                "short": np.ones(2),
                "image": np.ones((3, 3)),
            },
        )
        with BinArchiveReader.open(path) as archive:
            assert archive.variables() == ["col", "good", "row"]

    def test_dtype(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            assert archive.dtype("value") == np.float32
            assert archive.dtype("row") == np.int32


class TestReading:
    """Test range reads and chunk iteration."""

    def test_read_range(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            np.testing.assert_array_equal(
                archive.read_range("col", 1, 3), [4, 0, 2]
            )
            assert archive.read_range("value", 5, 0).size == 0

    def test_read_range_out_of_bounds(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            with pytest.raises(ValueError, match="outside"):
                archive.read_range("col", 3, 5)
            with pytest.raises(ValueError, match="outside"):
                archive.read_range("col", -1, 2)

    def test_read_unknown_variable(self, simple_archive):
        with BinArchiveReader.open(simple_archive) as archive:
            with pytest.raises(KeyError):
                archive.read_range("missing", 0, 1)

    def test_iter_chunks(self, simple_archive):
        with BinArchiveReader.open(simple_archive, chunk_size=2) as archive:
            chunks = list(archive.iter_chunks("row"))
        assert [offset for offset, _ in chunks] == [0, 2, 4]
        assert [len(values) for _, values in chunks] == [2, 2, 1]
        np.testing.assert_array_equal(
            np.concatenate([values for _, values in chunks]), [0, 0, 1, 3, 3]
        )

    def test_iter_chunks_from_offset(self, simple_archive):
        with BinArchiveReader.open(simple_archive, chunk_size=2) as archive:
            chunks = list(archive.iter_chunks("row", start=3))
        assert [offset for offset, _ in chunks] == [3]

    def test_closed_archive_raises(self, simple_archive):
        archive = BinArchiveReader.open(simple_archive)
        archive.close()
        archive.close()
        assert not archive.is_open
        with pytest.raises(ArchiveReadError, match="closed"):
            archive.read_range("row", 0, 1)
        with pytest.raises(ArchiveReadError, match="closed"):
            archive.attrs
