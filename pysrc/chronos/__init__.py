from __future__ import annotations

import logging as _logging
from contextlib import contextmanager as _contextmanager
from dataclasses import dataclass as _dataclass
from typing import Iterator as _Iterator, Optional as _Optional, Union as _Union

from . import _clock
from ._clock import reset_system_tz
from ._pychronos import *
from ._pychronos import (  # for pickling and the docs
    __all__,
    __version__,
    _unpkl_dt,
    _unpkl_duration,
    _unpkl_ts,
)

# The library doesn't configure logging; that's up to the application
_logging.getLogger("chronos").addHandler(_logging.NullHandler())

__all__ = [*__all__, "patch_current_time", "reset_system_tz"]


def _to_timestamp(pin: _Union[Timestamp, DateTime]) -> Timestamp:
    return pin if isinstance(pin, Timestamp) else pin.to_timestamp()


@_dataclass
class _TimePatch:
    _pin: "Timestamp | DateTime"
    _keep_ticking: bool
    _offset: _Optional[int]

    def shift(self, delta: _Optional[Duration] = None, /, **kwargs) -> None:
        """Move the patched time by a :class:`Duration` and/or by the
        keyword arguments accepted by :meth:`DateTime.add`"""
        if self._keep_ticking:
            now = Timestamp.now()
            base = (
                DateTime.from_timestamp_utc(now)
                if isinstance(self._pin, DateTime)
                else now
            )
        else:
            base = self._pin
        if isinstance(base, DateTime):
            new = base.add(**kwargs)
        else:
            new = base.add(Duration(**kwargs))
        if delta is not None:
            new = new + delta
        self._pin = new
        _clock._patch(
            _to_timestamp(new).to_nanoseconds(),
            self._keep_ticking,
            self._offset,
        )


@_contextmanager
def patch_current_time(
    dt: "Timestamp | DateTime",
    /,
    *,
    keep_ticking: bool,
    local_offset: _Optional[int] = None,
) -> _Iterator[_TimePatch]:
    """Patch the current time to a fixed value (for testing purposes).
    Behaves as a context manager or decorator, with similar semantics to
    ``unittest.mock.patch``.

    A :class:`DateTime` is taken as UTC. Unless ``local_offset`` is given,
    the system's local UTC offset is still used for local conversions.

    Important
    ---------

    * This function should be used only for testing purposes. It is not
      thread-safe or part of the stable API.
    * This function only affects functions that use the default clock,
      i.e. those called without an explicit ``clock=`` argument.
      Use the ``time_machine`` package if you also want to patch other
      libraries.

    Example
    -------

    >>> from chronos import DateTime, patch_current_time
    >>> dt = DateTime(1980, 3, 2, hour=2)
    >>> with patch_current_time(dt, keep_ticking=False) as p:
    ...     assert DateTime.now_utc() == dt
    ...     p.shift(hours=4)
    ...     assert DateTime.now_utc() == dt.add(hours=4)
    ...
    >>> assert DateTime.now_utc() != dt
    """
    _clock._patch(
        _to_timestamp(dt).to_nanoseconds(), keep_ticking, local_offset
    )
    try:
        yield _TimePatch(dt, keep_ticking, local_offset)
    finally:
        _clock._unpatch()
