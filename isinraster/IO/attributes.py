# -*- coding: utf-8 -*-
"""
Attribute Rules - Declarative lookup of archive and variable attributes.

Every optional attribute the binned reader consumes is described once as
an ``AttributeRule``: the attribute to look for, an alternative attribute
to try when the first is absent, and the default used when neither is
present or usable. Missing or malformed attributes are never errors; the
default is taken and the substitution logged at DEBUG level.

Attribute names are matched case-insensitively, as producers disagree on
capitalisation (``Max_North_Grid`` vs ``max_north_grid``).

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
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

# Third-party
import numpy as np

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AttributeRule:
    """One optional attribute with its fallback chain.

    Parameters
    ----------
    name : str
        Preferred attribute name.
    fallback : str, optional
        Attribute tried when ``name`` is absent or unusable.
    default : Any
        Value used when neither attribute yields a usable value.
    numeric : bool
        Whether the value must be a number. Non-numeric values are
        treated as absent.
    """

    name: str
    fallback: Optional[str]
    default: Any
    numeric: bool = True


#: Global attributes consumed when opening an archive.
GLOBAL_RULES: Dict[str, AttributeRule] = {
    'min_lat': AttributeRule('max_south_grid', 'geospatial_lat_min', -90.0),
    'max_lat': AttributeRule('max_north_grid', 'geospatial_lat_max', 90.0),
    'min_lon': AttributeRule('max_west_grid', 'geospatial_lon_min', -180.0),
    'max_lon': AttributeRule('max_east_grid', 'geospatial_lon_max', 180.0),
    'latitude_of_true_scale': AttributeRule('site_latitude', None, 0.0),
    'title': AttributeRule('title', None, '', numeric=False),
}

#: Per-variable attributes consumed when registering a band. A ``None``
#: no-data default defers to ``NODATA_FALLBACK`` in ``resolve_nodata``.
BAND_RULES: Dict[str, AttributeRule] = {
    'nodata': AttributeRule('_FillValue', 'missing_value', None),
    'scale_factor': AttributeRule('scale_factor', None, 1.0),
    'add_offset': AttributeRule('add_offset', None, 0.0),
    'units': AttributeRule('units', None, '', numeric=False),
    'description': AttributeRule('long_name', 'description', '',
                                 numeric=False),
}

#: No-data values fixed by variable name, overriding any declared value.
#: The ISIN row/column pseudo-bands can never legitimately be negative.
NODATA_OVERRIDES: Dict[str, float] = {
    'row': -1.0,
    'col': -1.0,
}

#: No-data value when a variable declares neither fill nor missing value.
NODATA_FALLBACK = 0.0

#: Global attributes whose presence marks a diagnostic data set.
DDS_MARKERS = ('site_name', 'site_latitude', 'site_longitude')


def normalize_value(value: Any) -> Any:
    """Convert an HDF5 attribute value into a plain Python value.

    NetCDF-4 stores scalar attributes as one-element arrays and strings
    as bytes; both are unwrapped here.

    Parameters
    ----------
    value : Any
        Raw attribute value as returned by h5py.

    Returns
    -------
    Any
        ``str``, ``int``, ``float``, ``list`` or the value unchanged.
    """
    if isinstance(value, bytes):
        return value.decode('utf-8', errors='replace')
    if isinstance(value, np.ndarray):
        if value.size == 1:
            return normalize_value(value.reshape(()).item())
        return [normalize_value(v) for v in value.tolist()]
    if isinstance(value, (np.integer, np.floating, np.bool_)):
        return value.item()
    return value


def _find(attrs: Mapping[str, Any], name: str) -> Any:
    if name in attrs:
        return attrs[name]
    lowered = name.lower()
    for key in attrs:
        if key.lower() == lowered:
            return attrs[key]
    return None


def _usable(value: Any, rule: AttributeRule) -> bool:
    if value is None:
        return False
    if rule.numeric:
        return isinstance(value, numbers.Real) and not isinstance(value, bool)
    return True


def lookup(attrs: Mapping[str, Any], rule: AttributeRule) -> Any:
    """Resolve one attribute through its rule.

    Parameters
    ----------
    attrs : Mapping[str, Any]
        Attribute mapping (an h5py ``AttributeManager`` or a dict).
    rule : AttributeRule
        Rule describing the attribute.

    Returns
    -------
    Any
        The first usable value of ``rule.name`` / ``rule.fallback``, or
        ``rule.default``.
    """
    for name in (rule.name, rule.fallback):
        if name is None:
            continue
        value = normalize_value(_find(attrs, name))
        if _usable(value, rule):
            if rule.numeric:
                return float(value)
            return value
    logger.debug("Attribute %r absent, using default %r",
                 rule.name, rule.default)
    return rule.default


def resolve_all(
    attrs: Mapping[str, Any], rules: Mapping[str, AttributeRule]
) -> Dict[str, Any]:
    """Resolve every rule of a table against one attribute mapping."""
    return {key: lookup(attrs, rule) for key, rule in rules.items()}


def resolve_nodata(name: str, attrs: Mapping[str, Any]) -> float:
    """No-data value of variable ``name``.

    Resolution order: fixed pseudo-band value, declared fill value,
    declared missing value, ``NODATA_FALLBACK``.
    """
    if name in NODATA_OVERRIDES:
        return NODATA_OVERRIDES[name]
    value = lookup(attrs, BAND_RULES['nodata'])
    if value is None:
        return NODATA_FALLBACK
    return value


def has_any(attrs: Mapping[str, Any], names) -> bool:
    """Whether any of ``names`` is present (case-insensitive)."""
    return any(_find(attrs, name) is not None for name in names)
