# -*- coding: utf-8 -*-
"""
Progress Monitors - Progress reporting and cooperative cancellation.

Long reads report progress and poll for cancellation through a small
capability object supplied by the host (display framework, tile
scheduler, CLI). The resampler only calls the four methods of
``ProgressMonitor``; it never decides how progress is shown.

``CallbackProgressMonitor`` adapts the plain ``progress_callback(fraction)``
convention used elsewhere in the library, optionally paired with a
``threading.Event`` that requests cancellation when set.

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
import threading
from typing import Callable, Optional


class ProgressMonitor:
    """Progress and cancellation capability. The base class does nothing.

    Subclass and override what the host needs. ``worked`` is called once
    per finished output row; ``is_cancelled`` is polled right after.
    """

    def begin(self, task: str, total: int) -> None:
        """Start a task of ``total`` work units."""

    def worked(self, units: int) -> None:
        """Report ``units`` more work units done."""

    def done(self) -> None:
        """Finish the current task, whether it succeeded or not."""

    def is_cancelled(self) -> bool:
        """Whether the caller asked to abort the current task."""
        return False


class CallbackProgressMonitor(ProgressMonitor):
    """Report progress as a fraction in ``[0.0, 1.0]`` to a callback.

    Parameters
    ----------
    progress_callback : Callable[[float], None], optional
        Called with the fraction of work done after every work unit.
    cancel_event : threading.Event, optional
        When set, the running task is cancelled at the next poll.

    Examples
    --------
    >>> stop = threading.Event()
    >>> pm = CallbackProgressMonitor(lambda f: print(f"{f:.0%}"), stop)
    >>> reader.read_region('CHL1_mean', 0, 0, 512, 512, progress=pm)
    """

    def __init__(
        self,
        progress_callback: Optional[Callable[[float], None]] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self._callback = progress_callback
        self._cancel_event = cancel_event
        self._total = 0
        self._done = 0

    def begin(self, task: str, total: int) -> None:
        self._total = max(int(total), 0)
        self._done = 0
        if self._callback is not None:
            self._callback(0.0)

    def worked(self, units: int) -> None:
        self._done += units
        if self._callback is not None and self._total:
            self._callback(min(self._done / self._total, 1.0))

    def is_cancelled(self) -> bool:
        return self._cancel_event is not None and self._cancel_event.is_set()
