# -*- coding: utf-8 -*-
"""
Binned Reader - Dense raster access to ISIN-binned archives.

``BinnedReader`` opens a sparse, row-sorted archive of ISIN grid bins
(GlobColour-style level-3 binned NetCDF-4) and exposes it as a dense
equirectangular raster with one band per record variable. Pixel values
are produced on demand, region by region, by the ``RasterResampler``.

Lifecycle::

    CLOSED --open--> OPENING --> OPEN --close()--> CLOSED

Opening reads the global attributes, snaps the declared bounding box to
an ``EquirectangularWindow`` and registers the bands. The ``RowIndex`` is
built on the first pixel read and cached until ``close()``. A closed
reader cannot be reopened; create a new instance.

Thread safety: pixel reads on one reader are serialized by an internal
lock, because the archive handle and the lazily built index are shared
mutable state. Reads on one reader from several threads are therefore
safe but do not run in parallel; use one reader per thread for parallel
reads (readers share nothing). ``close()`` must not race an active read.

Dependencies
------------
h5py
numpy
rasterio

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
import threading
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Union

# Third-party
import numpy as np

# isinraster internal
from isinraster.config import ReaderOptions
from isinraster.exceptions import (
    ArchiveFormatError,
    PreconditionError,
    ReaderClosedError,
)
from isinraster.grid.equirect import EquirectangularWindow
from isinraster.grid.isin import SinusoidalGrid
from isinraster.IO.archive import COL, ROW, BinArchiveReader
from isinraster.IO.attributes import (
    BAND_RULES,
    DDS_MARKERS,
    GLOBAL_RULES,
    has_any,
    resolve_all,
    resolve_nodata,
)
from isinraster.IO.base import ImageReader
from isinraster.IO.models import BandInfo, BinnedMetadata
from isinraster.IO.row_index import RowIndex
from isinraster.resampling.progress import (
    CallbackProgressMonitor,
    ProgressMonitor,
)
from isinraster.resampling.resampler import RasterResampler
from isinraster.vocabulary import DatasetState, ProductType

logger = logging.getLogger(__name__)

FORMAT_NAME = 'ISIN-L3b'
CRS = 'EPSG:4326'

BandKey = Union[int, str, BandInfo]


def _output_dtype(band: BandInfo, scaled: bool) -> np.dtype:
    """Sample dtype able to hold both band values and the no-data value."""
    dtype = np.dtype(band.dtype)
    if scaled and band.is_scaled:
        return np.dtype(np.float64)
    if np.issubdtype(dtype, np.integer):
        nodata = band.nodata
        info = np.iinfo(dtype)
        if not float(nodata).is_integer() or not info.min <= nodata <= info.max:
            return np.dtype(np.float64)
    return dtype


class BinnedReader(ImageReader):
    """Read an ISIN-binned archive as a dense equirectangular raster.

    Parameters
    ----------
    filepath : str or Path
        Path to the binned archive (.nc, .h5).
    grid : SinusoidalGrid, optional
        ISIN grid the archive was binned on. Defaults to a grid of
        ``options.grid_rows`` rows.
    options : ReaderOptions, optional
        Tuning options. Defaults to ``ReaderOptions.from_env()``.

    Attributes
    ----------
    filepath : Path
        Path to the archive.
    metadata : BinnedMetadata
        Raster metadata: shape, bands, transform, product type and all
        archive attributes (``file_<name>`` extras for global attributes,
        ``variables`` for per-variable attributes).

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ArchiveFormatError
        If the file is not a readable archive or lacks ``row``/``col``.

    Examples
    --------
    >>> with BinnedReader('L3b_20080101_CHL1.nc') as reader:
    ...     print(reader.band_names)
    ['CHL1_flags', 'CHL1_mean', 'col', 'row']
    ...     chip = reader.read_chip(0, 256, 0, 256, bands=['CHL1_mean'])
    """

    def __init__(
        self,
        filepath: Union[str, Path],
        grid: Optional[SinusoidalGrid] = None,
        options: Optional[ReaderOptions] = None,
    ) -> None:
        self._options = options if options is not None else ReaderOptions.from_env()
        self._grid = grid if grid is not None else SinusoidalGrid(
            self._options.grid_rows
        )
        self._state = DatasetState.CLOSED
        self._archive: Optional[BinArchiveReader] = None
        self._window: Optional[EquirectangularWindow] = None
        self._row_index: Optional[RowIndex] = None
        self._resampler: Optional[RasterResampler] = None
        self._lock = threading.Lock()
        super().__init__(filepath)

    # ------------------------------------------------------------------
    # Opening
    # ------------------------------------------------------------------

    def _load_metadata(self) -> None:
        """Open the archive, build the window and register bands."""
        self._state = DatasetState.OPENING
        try:
            archive = BinArchiveReader.open(
                self.filepath, chunk_size=self._options.chunk_size
            )
        except Exception:
            self._state = DatasetState.CLOSED
            raise

        try:
            self.metadata = self._build_metadata(archive)
        except OSError as e:
            archive.close()
            self._state = DatasetState.CLOSED
            raise ArchiveFormatError(
                f"Unreadable archive header in {self.filepath}: {e}"
            ) from e
        except Exception:
            archive.close()
            self._state = DatasetState.CLOSED
            raise

        self._archive = archive
        self._window = self.metadata.window
        self._state = DatasetState.OPEN
        logger.info(
            "Opened %s: %d bins, %d bands, raster %dx%d (%s)",
            self.filepath.name, archive.bin_count, len(self.metadata.band_info),
            self.metadata.rows, self.metadata.cols,
            self.metadata.product_type.name,
        )

    def _build_metadata(self, archive: BinArchiveReader) -> BinnedMetadata:
        file_attrs = archive.attrs
        settings = resolve_all(file_attrs, GLOBAL_RULES)

        window = EquirectangularWindow.from_bounds(
            self._grid,
            min_lat=settings['min_lat'],
            max_lat=settings['max_lat'],
            min_lon=settings['min_lon'],
            max_lon=settings['max_lon'],
            latitude_of_true_scale=settings['latitude_of_true_scale'],
        )

        variable_attrs: Dict[str, Dict[str, Any]] = {}
        band_info: List[BandInfo] = []
        for name in archive.variables():
            attrs = archive.variable_attrs(name)
            variable_attrs[name] = attrs
            band_info.append(self._band_info(name, archive.dtype(name), attrs))

        if has_any(file_attrs, DDS_MARKERS):
            product_type = ProductType.BINNED_DDS
        else:
            product_type = ProductType.BINNED_GLOBAL

        measurement = [b for b in band_info if b.name not in (ROW, COL)]
        first = (measurement or band_info)[0]

        extras: Dict[str, Any] = {
            'transform': window.transform,
            'bounds': window.bounds,
            'latitude_of_true_scale': settings['latitude_of_true_scale'],
            'variables': variable_attrs,
        }
        for key, val in file_attrs.items():
            extras[f'file_{key}'] = val

        return BinnedMetadata(
            format=FORMAT_NAME,
            rows=window.row_count,
            cols=window.col_count,
            dtype=first.dtype,
            bands=len(band_info),
            crs=CRS,
            extras=extras,
            product_type=product_type,
            title=str(settings['title']),
            bin_count=archive.bin_count,
            band_info=band_info,
            window=window,
        )

    @staticmethod
    def _band_info(name: str, dtype: np.dtype, attrs: Dict[str, Any]) -> BandInfo:
        resolved = resolve_all(attrs, BAND_RULES)
        return BandInfo(
            name=name,
            dtype=str(np.dtype(dtype)),
            nodata=resolve_nodata(name, attrs),
            scale_factor=resolved['scale_factor'],
            add_offset=resolved['add_offset'],
            units=str(resolved['units']),
            description=str(resolved['description']),
        )

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------

    @property
    def state(self) -> DatasetState:
        """Current lifecycle state."""
        return self._state

    @property
    def is_open(self) -> bool:
        return self._state is DatasetState.OPEN

    @property
    def grid(self) -> SinusoidalGrid:
        """ISIN grid of the archive."""
        return self._grid

    @property
    def window(self) -> EquirectangularWindow:
        """Geometry of the produced raster."""
        self._require_open()
        return self._window

    @property
    def bands(self) -> List[BandInfo]:
        """Logical bands in archive order."""
        return list(self.metadata.band_info)

    @property
    def band_names(self) -> List[str]:
        return self.metadata.band_names

    @property
    def product_type(self) -> ProductType:
        return self.metadata.product_type

    @property
    def row_index(self) -> RowIndex:
        """Row index of the window, built on first access."""
        with self._lock:
            return self._ensure_resampler().row_index

    def _require_open(self) -> None:
        if self._state is not DatasetState.OPEN:
            raise ReaderClosedError(
                f"Reader for {self.filepath} is {self._state.value}"
            )

    def _ensure_resampler(self) -> RasterResampler:
        """Build the row index and resampler once. Caller holds the lock."""
        self._require_open()
        if self._resampler is None:
            window = self._window
            self._row_index = RowIndex.build(
                self._archive.iter_chunks(ROW),
                min_row=window.min_row,
                row_count=window.row_count,
                total=self._archive.bin_count,
            )
            self._resampler = RasterResampler(
                window, self._archive, self._row_index
            )
        return self._resampler

    def _resolve_band(self, band: BandKey) -> BandInfo:
        if isinstance(band, BandInfo):
            band = band.name
        infos = self.metadata.band_info
        if isinstance(band, (int, np.integer)) and not isinstance(band, bool):
            if not 0 <= band < len(infos):
                raise PreconditionError(
                    f"Band index {band} outside [0, {len(infos)})"
                )
            return infos[band]
        try:
            return self.metadata.band(band)
        except KeyError:
            raise PreconditionError(
                f"Unknown band {band!r}; available: {self.band_names}"
            ) from None

    # ------------------------------------------------------------------
    # Pixel access
    # ------------------------------------------------------------------

    def read_region(
        self,
        band: BandKey,
        x: int,
        y: int,
        width: int,
        height: int,
        step_x: int = 1,
        step_y: int = 1,
        out: Optional[np.ndarray] = None,
        progress: Optional[ProgressMonitor] = None,
        progress_callback: Optional[Callable[[float], None]] = None,
        scaled: bool = False,
    ) -> np.ndarray:
        """Read a ``width x height`` region of one band at ``(x, y)``.

        Parameters
        ----------
        band : int, str or BandInfo
            Band index, name or descriptor.
        x, y : int
            Column and row of the region's upper-left pixel.
        width, height : int
            Region size in pixels.
        step_x, step_y : int
            Sub-sampling steps. Only 1 is supported.
        out : np.ndarray, optional
            Destination buffer of exactly ``width * height`` samples,
            flat or ``(height, width)``. Allocated when omitted.
        progress : ProgressMonitor, optional
            Progress/cancellation capability.
        progress_callback : Callable[[float], None], optional
            Shortcut for ``CallbackProgressMonitor(progress_callback)``.
        scaled : bool
            Return geophysical values (scale factor and offset applied).

        Returns
        -------
        np.ndarray
            ``out`` when given, otherwise a new ``(height, width)`` array.

        Raises
        ------
        ReaderClosedError
            If the reader is closed.
        PreconditionError
            If a step is not 1, ``out`` has the wrong size or a dtype the
            samples cannot be cast to, the region exceeds the raster or
            the band is unknown.
        CancelledError
            If the progress monitor cancelled the read.
        ArchiveReadError
            If reading the archive failed. The reader stays usable.
        """
        self._require_open()
        if step_x != 1 or step_y != 1:
            raise PreconditionError(
                f"Sub-sampling is not supported, got step ({step_x}, {step_y})"
            )
        if width <= 0 or height <= 0:
            raise PreconditionError(
                f"Region size must be positive, got {width}x{height}"
            )
        info = self._resolve_band(band)

        dtype = _output_dtype(info, scaled)
        if out is None:
            target = np.empty((height, width), dtype=dtype)
            result = target
        else:
            if not isinstance(out, np.ndarray) or out.size != width * height:
                raise PreconditionError(
                    f"Destination holds {getattr(out, 'size', None)} samples, "
                    f"region needs {width * height}"
                )
            if not np.can_cast(dtype, out.dtype, 'same_kind'):
                raise PreconditionError(
                    f"Destination dtype {out.dtype} cannot hold "
                    f"{dtype} samples of band {info.name!r}"
                )
            target = out.reshape(height, width)
            result = out

        if progress is None and progress_callback is not None:
            progress = CallbackProgressMonitor(progress_callback)

        with self._lock:
            resampler = self._ensure_resampler()
            resampler.resample(info, x, y, width, height, target,
                               progress=progress, scaled=scaled)

        if target is not result and not np.shares_memory(target, result):
            result[...] = target.reshape(result.shape)
        return result

    def read_chip(
        self,
        row_start: int,
        row_end: int,
        col_start: int,
        col_end: int,
        bands: Optional[List[BandKey]] = None,
        scaled: bool = False,
    ) -> np.ndarray:
        """Read a spatial chip of one or more bands.

        Parameters
        ----------
        row_start, row_end : int
            Row range ``[row_start, row_end)``.
        col_start, col_end : int
            Column range ``[col_start, col_end)``.
        bands : List[int or str], optional
            Bands to read. If None, read all bands.
        scaled : bool
            Return geophysical values.

        Returns
        -------
        np.ndarray
            ``(rows, cols)`` for one band, ``(bands, rows, cols)`` for
            several.
        """
        self._require_open()
        if row_start < 0 or col_start < 0:
            raise PreconditionError("Start indices must be non-negative")
        if row_end > self.metadata.rows or col_end > self.metadata.cols:
            raise PreconditionError("End indices exceed raster dimensions")

        infos = [self._resolve_band(b) for b in (
            bands if bands is not None else range(len(self.metadata.band_info))
        )]
        if not infos:
            raise PreconditionError("No bands requested")

        height = row_end - row_start
        width = col_end - col_start
        dtype = np.result_type(*[_output_dtype(i, scaled) for i in infos])
        data = np.empty((len(infos), height, width), dtype=dtype)
        for k, info in enumerate(infos):
            self.read_region(info, col_start, row_start, width, height,
                             out=data[k], scaled=scaled)

        if data.shape[0] == 1:
            return data[0]
        return data

    def close(self) -> None:
        """Release the archive handle and the cached index.

        Idempotent. Any later read raises ``ReaderClosedError``.
        """
        if self._archive is not None:
            self._archive.close()
            self._archive = None
            logger.debug("Closed %s", self.filepath)
        self._resampler = None
        self._row_index = None
        self._window = None
        self._state = DatasetState.CLOSED

    def __repr__(self) -> str:
        return (f"BinnedReader('{self.filepath.name}', "
                f"state={self._state.value})")


def open_binned(
    filepath: Union[str, Path],
    grid: Optional[SinusoidalGrid] = None,
    options: Optional[ReaderOptions] = None,
) -> BinnedReader:
    """Open a binned archive.

    Convenience wrapper around ``BinnedReader`` for use as a context
    manager::

        with open_binned('L3b.nc') as reader:
            data = reader.read_full(bands=['CHL1_mean'])
    """
    return BinnedReader(filepath, grid=grid, options=options)
