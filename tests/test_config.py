# -*- coding: utf-8 -*-
"""
ReaderOptions Tests - Defaults, validation and environment overrides.

Dependencies
------------
pytest

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

import pytest

from isinraster.config import (
    DEFAULT_CHUNK_SIZE,
    DEFAULT_GRID_ROWS,
    ReaderOptions,
)


class TestReaderOptions:
    """Test option construction."""

    def test_defaults(self):
        options = ReaderOptions()
        assert options.chunk_size == DEFAULT_CHUNK_SIZE == 50000
        assert options.grid_rows == DEFAULT_GRID_ROWS == 4320

    @pytest.mark.parametrize("kwargs", [
        {"chunk_size": 0},
        {"chunk_size": -3},
        {"grid_rows": 0},
        {"grid_rows": 2.5},
    ])
    def test_invalid_values_raise(self, kwargs):
        with pytest.raises(ValueError, match="positive int"):
            ReaderOptions(**kwargs)


class TestFromEnv:
    """Test environment overrides."""

    def test_empty_environment(self):
        assert ReaderOptions.from_env({}) == ReaderOptions()

    def test_overrides(self):
        options = ReaderOptions.from_env({
            "ISINRASTER_CHUNK_SIZE": "1000",
            "ISINRASTER_GRID_ROWS": "2160",
        })
        assert options == ReaderOptions(chunk_size=1000, grid_rows=2160)

    def test_blank_value_ignored(self):
        options = ReaderOptions.from_env({"ISINRASTER_CHUNK_SIZE": ""})
        assert options.chunk_size == DEFAULT_CHUNK_SIZE

    def test_not_an_integer(self):
        with pytest.raises(ValueError, match="ISINRASTER_CHUNK_SIZE"):
            ReaderOptions.from_env({"ISINRASTER_CHUNK_SIZE": "lots"})

    def test_negative(self):
        with pytest.raises(ValueError, match="must be positive"):
            ReaderOptions.from_env({"ISINRASTER_GRID_ROWS": "-1"})

    def test_reads_os_environ(self, monkeypatch):
        monkeypatch.setenv("ISINRASTER_GRID_ROWS", "36")
        monkeypatch.delenv("ISINRASTER_CHUNK_SIZE", raising=False)
        assert ReaderOptions.from_env().grid_rows == 36
