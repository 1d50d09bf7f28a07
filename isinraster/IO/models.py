# -*- coding: utf-8 -*-
"""
IO Models - Typed metadata containers for binned archive readers.

Provides ``ImageMetadata``, a dataclass that stores universal raster
metadata (format, rows, cols, dtype) as typed attributes while supporting
dict-like access, ``BandInfo`` describing one logical band, and
``BinnedMetadata`` adding the typed fields of an opened ISIN-binned
archive.

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
from dataclasses import dataclass, field, fields as dc_fields
from typing import Any, Dict, Iterator, List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from isinraster.grid.equirect import EquirectangularWindow
    from isinraster.vocabulary import ProductType


@dataclass
class ImageMetadata:
    """Typed metadata for rasters exposed by isinraster readers.

    Typed attributes hold the universal fields; ``extras`` holds
    format-specific ones. Dict-like access (``metadata['rows']``,
    ``'crs' in metadata``, ``metadata.get('transform')``) searches typed
    fields first, then extras, so subclasses' typed fields are reachable
    the same way.

    Parameters
    ----------
    format : str
        Format identifier (e.g. ``'ISIN-L3b'``).
    rows : int
        Number of raster rows.
    cols : int
        Number of raster columns.
    dtype : str
        NumPy dtype string of the first band.
    bands : int, optional
        Number of bands.
    crs : str, optional
        Coordinate reference system string (e.g. ``'EPSG:4326'``).
    nodata : float, optional
        No-data value shared by all bands, if any.
    extras : Dict[str, Any]
        Format-specific metadata.
    """

    format: str
    rows: int
    cols: int
    dtype: str

    bands: Optional[int] = None
    crs: Optional[str] = None
    nodata: Optional[float] = None

    extras: Dict[str, Any] = field(default_factory=dict)

    def _typed_names(self) -> List[str]:
        return [f.name for f in dc_fields(self) if f.name != 'extras']

    def __getitem__(self, key: str) -> Any:
        if key in self._typed_names():
            return getattr(self, key)
        if key in self.extras:
            return self.extras[key]
        raise KeyError(key)

    def __setitem__(self, key: str, value: Any) -> None:
        if key in self._typed_names():
            setattr(self, key, value)
        else:
            self.extras[key] = value

    def __contains__(self, key: str) -> bool:
        """``True`` for typed fields that are not ``None`` and extras keys."""
        if key in self._typed_names():
            return getattr(self, key) is not None
        return key in self.extras

    def get(self, key: str, default: Any = None) -> Any:
        """Get value by key with a default, like ``dict.get()``."""
        try:
            val = self[key]
        except KeyError:
            return default
        return default if val is None else val

    def keys(self) -> List[str]:
        """Typed fields with non-None values plus all extras keys."""
        result = [k for k in self._typed_names() if getattr(self, k) is not None]
        result.extend(self.extras.keys())
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Flatten typed fields (non-None) and extras into one dict."""
        return {k: self[k] for k in self.keys()}

    def __iter__(self) -> Iterator[str]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self.keys())


@dataclass(frozen=True)
class BandInfo:
    """One logical band backed by a one-dimensional archive variable.

    Parameters
    ----------
    name : str
        Variable name in the archive; also the band name.
    dtype : str
        NumPy dtype string of the stored values.
    nodata : float
        Value written to output pixels without a matching bin.
    scale_factor : float
        Multiplier converting stored to geophysical values.
    add_offset : float
        Offset converting stored to geophysical values.
    units : str
        Unit string of the geophysical values.
    description : str
        Human-readable description.
    """

    name: str
    dtype: str
    nodata: float
    scale_factor: float = 1.0
    add_offset: float = 0.0
    units: str = ''
    description: str = ''

    @property
    def is_scaled(self) -> bool:
        """Whether stored values need scaling to become geophysical."""
        return self.scale_factor != 1.0 or self.add_offset != 0.0


@dataclass
class BinnedMetadata(ImageMetadata):
    """Metadata of an opened ISIN-binned archive.

    Parameters
    ----------
    product_type : ProductType, optional
        Global product or diagnostic data set.
    title : str
        Free-text title from the archive, empty if absent.
    bin_count : int
        Total number of bin records in the archive.
    band_info : List[BandInfo]
        Logical bands in archive order.
    window : EquirectangularWindow, optional
        Geometry of the produced raster.
    """

    product_type: Optional['ProductType'] = None
    title: str = ''
    bin_count: int = 0
    band_info: List[BandInfo] = field(default_factory=list)
    window: Optional['EquirectangularWindow'] = None

    @property
    def band_names(self) -> List[str]:
        """Names of all bands in archive order."""
        return [b.name for b in self.band_info]

    def band(self, name: str) -> BandInfo:
        """Look up a band by name.

        Raises
        ------
        KeyError
            If no band has that name.
        """
        for info in self.band_info:
            if info.name == name:
                return info
        raise KeyError(name)
