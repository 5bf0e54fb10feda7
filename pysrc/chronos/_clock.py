"""The clock capability: the only place where chronos touches the system.

Everything else in the library is a pure computation. Functions that need
the current time or the local UTC offset take a :class:`Clock`, falling back
to the process-wide default (normally :class:`SystemClock`).
"""

from __future__ import annotations

import logging
import time
from time import localtime, time_ns
from typing import Optional, Protocol

_log = logging.getLogger("chronos")

_NS_PER_SEC = 1_000_000_000


class ClockError(OSError):
    """The wall clock time or local UTC offset could not be read"""


class Clock(Protocol):
    """Source of the current time and the local UTC offset.

    Both methods are single blocking calls. They either return a value
    or raise :class:`ClockError`; there is no retrying.
    """

    def wall_clock_time(self) -> tuple[int, int]:
        """Seconds and nanoseconds since the UNIX epoch.
        The nanoseconds should be in the range [0, 1_000_000_000);
        any excess is carried into the seconds by the caller."""
        ...

    def local_offset_seconds(self) -> int:
        """The local UTC offset in seconds, positive east of UTC"""
        ...


class SystemClock:
    """Reads the operating system's realtime clock and local timezone.

    The local timezone is determined by the system configuration or the
    ``TZ`` environment variable. Call :func:`chronos.reset_system_tz` after
    changing ``TZ`` at runtime.
    """

    __slots__ = ()

    def wall_clock_time(self) -> tuple[int, int]:
        try:
            return divmod(time_ns(), _NS_PER_SEC)
        except OSError as e:
            _log.debug("Reading the system clock failed: %s", e)
            raise ClockError("Could not read the system clock") from e

    def local_offset_seconds(self) -> int:
        try:
            return localtime().tm_gmtoff
        except (OSError, OverflowError, ValueError) as e:
            _log.debug("Reading the local UTC offset failed: %s", e)
            raise ClockError("Could not read the local UTC offset") from e

    def __repr__(self) -> str:
        return "SystemClock()"


class FixedClock:
    """A clock that always returns the same time and offset.

    Example
    -------
    >>> clock = FixedClock(1_700_000_000, offset=3600)
    >>> DateTime.now_local(clock)
    DateTime(2023-11-14 23:13:20)
    """

    __slots__ = ("_secs", "_nanos", "_offset")

    def __init__(
        self, seconds: int, nanoseconds: int = 0, *, offset: int = 0
    ) -> None:
        if not 0 <= nanoseconds < _NS_PER_SEC:
            raise ValueError(f"nanoseconds out of range: {nanoseconds}")
        self._secs = seconds
        self._nanos = nanoseconds
        self._offset = offset

    def wall_clock_time(self) -> tuple[int, int]:
        return (self._secs, self._nanos)

    def local_offset_seconds(self) -> int:
        return self._offset

    def __repr__(self) -> str:
        return (
            f"FixedClock({self._secs}, {self._nanos}, offset={self._offset})"
        )


class _PatchedClock:
    # Replaces the default clock while time is patched.
    # Without an explicit offset, the system's local offset is used.

    __slots__ = ("_pin_ns", "_patched_at", "_offset")

    def __init__(
        self, pin_ns: int, keep_ticking: bool, offset: Optional[int]
    ) -> None:
        self._pin_ns = pin_ns
        self._patched_at = time_ns() if keep_ticking else None
        self._offset = offset

    def wall_clock_time(self) -> tuple[int, int]:
        if self._patched_at is None:
            return divmod(self._pin_ns, _NS_PER_SEC)
        return divmod(
            self._pin_ns + time_ns() - self._patched_at, _NS_PER_SEC
        )

    def local_offset_seconds(self) -> int:
        if self._offset is None:
            return _SYSTEM_CLOCK.local_offset_seconds()
        return self._offset


_SYSTEM_CLOCK = SystemClock()
_default_clock: Clock = _SYSTEM_CLOCK


def default_clock() -> Clock:
    return _default_clock


def resolve(clock: Optional[Clock]) -> Clock:
    return _default_clock if clock is None else clock


def _patch(pin_ns: int, keep_ticking: bool, offset: Optional[int]) -> None:
    global _default_clock
    _log.debug(
        "Patching the current time to %d ns (keep_ticking=%s)",
        pin_ns,
        keep_ticking,
    )
    _default_clock = _PatchedClock(pin_ns, keep_ticking, offset)


def _unpatch() -> None:
    global _default_clock
    _log.debug("Restoring the system clock")
    _default_clock = _SYSTEM_CLOCK


def reset_system_tz() -> None:
    """Re-read the system timezone, e.g. after changing the ``TZ``
    environment variable. Has no effect on platforms without
    :func:`time.tzset`."""
    if hasattr(time, "tzset"):  # not available on Windows
        time.tzset()
