# -*- coding: utf-8 -*-
"""
isinraster Exception Hierarchy - Domain-specific exceptions for binned reads.

Provides a small exception hierarchy that lets callers (display code,
tile schedulers) catch isinraster errors distinctly from Python built-in
exceptions. Every error class subclasses both ``IsinRasterError`` and the
appropriate built-in exception so existing ``except ValueError`` /
``except IOError`` handlers keep working.

``CancelledError`` deliberately derives from ``IsinRasterError`` only: a
cancelled read is an outcome requested by the caller, not a failure.

Author
------
Steven Siebert

License
-------
MIT License
Copyright (c) 2024 geoint.org
See LICENSE file for full text.

Created
-------
2026-02-06

Modified
--------
2026-10-19
"""


class IsinRasterError(Exception):
    """Base exception for all isinraster errors."""


class ArchiveFormatError(IsinRasterError, ValueError):
    """The archive is unreadable or lacks required variables.

    Raised at open time only. A reader that raises this never reaches
    the ``OPEN`` state.
    """


class ArchiveReadError(IsinRasterError, IOError):
    """A range read against the archive failed.

    Aborts the request that triggered it. The reader stays usable for
    subsequent reads.
    """


class PreconditionError(IsinRasterError, ValueError):
    """A read request violates the read contract.

    Raised for sub-sampling steps other than 1, destination buffers whose
    size does not match the requested region, regions outside the raster
    and unknown band names. These are programming errors and are never
    retried.
    """


class ReaderClosedError(IsinRasterError, RuntimeError):
    """A read was attempted on a reader that has been closed."""


class CancelledError(IsinRasterError):
    """A long-running read was cancelled by the caller's progress monitor."""
