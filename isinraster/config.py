# -*- coding: utf-8 -*-
"""
Reader Options - Runtime tuning for binned archive readers.

Options are plain constructor arguments with environment-variable
fallbacks, so deployments can tune chunking without code changes:

- ``ISINRASTER_CHUNK_SIZE``: records per sequential chunk when scanning
  the archive's row-id variable (default 50000).
- ``ISINRASTER_GRID_ROWS``: number of rows of the ISIN grid the archive
  was binned on (default 4320, the 1/24 degree grid).

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
import os
from dataclasses import dataclass
from typing import Mapping, Optional

DEFAULT_CHUNK_SIZE = 50000
DEFAULT_GRID_ROWS = 4320

_ENV_CHUNK_SIZE = "ISINRASTER_CHUNK_SIZE"
_ENV_GRID_ROWS = "ISINRASTER_GRID_ROWS"


def _positive_int(raw: str, name: str) -> int:
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


@dataclass(frozen=True)
class ReaderOptions:
    """Tuning options for ``BinnedReader``.

    Parameters
    ----------
    chunk_size : int
        Number of records read per chunk while building the row index.
        Bounds peak memory of the indexing pass.
    grid_rows : int
        Row count of the ISIN grid used when no explicit grid is given.

    Raises
    ------
    ValueError
        If either option is not a positive integer.
    """

    chunk_size: int = DEFAULT_CHUNK_SIZE
    grid_rows: int = DEFAULT_GRID_ROWS

    def __post_init__(self) -> None:
        if not isinstance(self.chunk_size, int) or self.chunk_size <= 0:
            raise ValueError(
                f"chunk_size must be a positive int, got {self.chunk_size!r}"
            )
        if not isinstance(self.grid_rows, int) or self.grid_rows <= 0:
            raise ValueError(
                f"grid_rows must be a positive int, got {self.grid_rows!r}"
            )

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None
    ) -> 'ReaderOptions':
        """Build options from environment variables, falling back to defaults.

        Parameters
        ----------
        environ : Mapping[str, str], optional
            Environment to read. Defaults to ``os.environ``.

        Returns
        -------
        ReaderOptions
        """
        env = os.environ if environ is None else environ
        chunk_size = DEFAULT_CHUNK_SIZE
        grid_rows = DEFAULT_GRID_ROWS
        if env.get(_ENV_CHUNK_SIZE):
            chunk_size = _positive_int(env[_ENV_CHUNK_SIZE], _ENV_CHUNK_SIZE)
        if env.get(_ENV_GRID_ROWS):
            grid_rows = _positive_int(env[_ENV_GRID_ROWS], _ENV_GRID_ROWS)
        return cls(chunk_size=chunk_size, grid_rows=grid_rows)
