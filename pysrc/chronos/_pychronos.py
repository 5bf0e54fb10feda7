# The MIT License (MIT)
#
# Copyright (c) Arie Bovenberg
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all
# copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Maintainer's notes:
#
# - The value classes live in one file so they can 'know' about each other
#   without circular imports. Pure calendar math and text parsing are kept
#   in separate helper modules, since they don't depend on these classes.
# - Nothing here reads the system clock directly. All 'now' functionality
#   goes through the Clock capability in _clock.py.
from __future__ import annotations

__version__ = "0.1.0"

import enum
from struct import pack, unpack
from typing import TYPE_CHECKING, Any, ClassVar, Optional, no_type_check, overload

from . import _clock
from ._clock import Clock, ClockError, FixedClock, SystemClock
from ._math import (
    civil_from_days,
    day_of_year as _day_of_year,
    days_from_civil,
    days_in_month,
    is_leap_year,
    iso_week_number,
    split_seconds,
    weekday_number,
)
from ._parse import (
    ParseError,
    date_from_iso,
    datetime_from_iso,
    time_from_iso,
)

__all__ = [
    # Values
    "Duration",
    "Timestamp",
    "DateTime",
    "Weekday",
    # Duration shortcuts
    "days",
    "hours",
    "minutes",
    "seconds",
    "milliseconds",
    "microseconds",
    "nanoseconds",
    # Calendar math
    "is_leap_year",
    "days_in_month",
    "days_from_civil",
    "civil_from_days",
    # Parsing
    "parse_iso8601",
    "parse_date",
    "parse_time",
    # Clock capability
    "Clock",
    "SystemClock",
    "FixedClock",
    # Exceptions
    "ParseError",
    "ClockError",
    # Constants
    "SUNDAY",
    "MONDAY",
    "TUESDAY",
    "WEDNESDAY",
    "THURSDAY",
    "FRIDAY",
    "SATURDAY",
]


class Weekday(enum.Enum):
    """The days of the week; ``.value`` counts from Sunday (0)
    to Saturday (6)."""

    SUNDAY = 0
    MONDAY = 1
    TUESDAY = 2
    WEDNESDAY = 3
    THURSDAY = 4
    FRIDAY = 5
    SATURDAY = 6

    def is_weekend(self) -> bool:
        """Whether this is a Saturday or Sunday"""
        return self is Weekday.SATURDAY or self is Weekday.SUNDAY

    def is_weekday(self) -> bool:
        """Whether this is a day from Monday through Friday"""
        return not self.is_weekend()

    def __lt__(self, other: Weekday) -> bool:
        if not isinstance(other, Weekday):
            return NotImplemented
        return self.value < other.value

    def __le__(self, other: Weekday) -> bool:
        if not isinstance(other, Weekday):
            return NotImplemented
        return self.value <= other.value

    def __gt__(self, other: Weekday) -> bool:
        if not isinstance(other, Weekday):
            return NotImplemented
        return self.value > other.value

    def __ge__(self, other: Weekday) -> bool:
        if not isinstance(other, Weekday):
            return NotImplemented
        return self.value >= other.value


SUNDAY = Weekday.SUNDAY
MONDAY = Weekday.MONDAY
TUESDAY = Weekday.TUESDAY
WEDNESDAY = Weekday.WEDNESDAY
THURSDAY = Weekday.THURSDAY
FRIDAY = Weekday.FRIDAY
SATURDAY = Weekday.SATURDAY

# Helpers that pre-compute/lookup as much as possible
_object_new = object.__new__
_NS_PER_SEC = 1_000_000_000
_NS_PER_MIN = 60 * _NS_PER_SEC
_NS_PER_HOUR = 60 * _NS_PER_MIN
_NS_PER_DAY = 24 * _NS_PER_HOUR
# Durations are limited to what fits in a signed 64-bit nanosecond count.
# The range is symmetric, so negation and abs() can't overflow.
_MAX_DURATION_NANOS = (1 << 63) - 1


class _ImmutableBase:
    __slots__ = ()

    # Immutable classes don't need to be copied
    @no_type_check
    def __copy__(self):
        return self

    @no_type_check
    def __deepcopy__(self, _):
        return self


if TYPE_CHECKING:
    from typing import final
else:

    def final(cls):

        def init_subclass_not_allowed(cls, **kwargs):  # pragma: no cover
            raise TypeError("Subclassing not allowed")

        cls.__init_subclass__ = init_subclass_not_allowed
        return cls


def _check_int(value: object, name: str) -> int:
    # bool is an int subclass, but never a sensible amount of time
    if type(value) is not int:
        raise TypeError(f"{name} must be an int, got {type(value).__name__}")
    return value


def _trunc_div(a: int, b: int) -> int:
    # Integer division rounding toward zero, unlike Python's //
    q = abs(a) // abs(b)
    return q if (a < 0) == (b < 0) else -q


@final
class Duration(_ImmutableBase):
    """A signed, exact amount of time with nanosecond precision

    The inputs are normalized, so 90 minutes becomes 1 hour and 30 minutes,
    for example.

    Example
    -------
    >>> d = Duration(hours=1, minutes=30)
    Duration(01:30:00)
    >>> d.to_minutes()
    90
    >>> d.to_human_string()
    '1h 30m'

    Note
    ----
    Durations are limited to a signed 64-bit count of nanoseconds
    (roughly ±292 years). Going beyond this raises a :class:`ValueError`.
    """

    __slots__ = ("_total_ns",)

    ZERO: ClassVar[Duration]
    """A duration of zero"""
    MAX: ClassVar[Duration]
    """The largest possible duration"""
    MIN: ClassVar[Duration]
    """The smallest (most negative) possible duration"""

    def __init__(
        self,
        *,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
        nanoseconds: int = 0,
    ) -> None:
        self._total_ns = _check_range(
            _check_int(days, "days") * _NS_PER_DAY
            + _check_int(hours, "hours") * _NS_PER_HOUR
            + _check_int(minutes, "minutes") * _NS_PER_MIN
            + _check_int(seconds, "seconds") * _NS_PER_SEC
            + _check_int(milliseconds, "milliseconds") * 1_000_000
            + _check_int(microseconds, "microseconds") * 1_000
            + _check_int(nanoseconds, "nanoseconds")
        )

    @classmethod
    def from_nanoseconds(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "nanoseconds"))

    @classmethod
    def from_microseconds(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "microseconds") * 1_000)

    @classmethod
    def from_milliseconds(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "milliseconds") * 1_000_000)

    @classmethod
    def from_seconds(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "seconds") * _NS_PER_SEC)

    @classmethod
    def from_minutes(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "minutes") * _NS_PER_MIN)

    @classmethod
    def from_hours(cls, n: int, /) -> Duration:
        return cls._from_nanos(_check_int(n, "hours") * _NS_PER_HOUR)

    @classmethod
    def from_days(cls, n: int, /) -> Duration:
        """Create a duration of ``n`` days of exactly 24 hours each"""
        return cls._from_nanos(_check_int(n, "days") * _NS_PER_DAY)

    def is_zero(self) -> bool:
        return self._total_ns == 0

    def is_positive(self) -> bool:
        return self._total_ns > 0

    def is_negative(self) -> bool:
        return self._total_ns < 0

    def to_nanoseconds(self) -> int:
        """The total size in nanoseconds

        >>> Duration(seconds=2, nanoseconds=50).to_nanoseconds()
        2_000_000_050
        """
        return self._total_ns

    def to_milliseconds(self) -> int:
        return _trunc_div(self._total_ns, 1_000_000)

    def to_seconds(self) -> int:
        """The number of whole seconds, truncated toward zero

        >>> Duration(milliseconds=-1_500).to_seconds()
        -1
        """
        return _trunc_div(self._total_ns, _NS_PER_SEC)

    def to_minutes(self) -> int:
        return _trunc_div(self._total_ns, _NS_PER_MIN)

    def to_hours(self) -> int:
        return _trunc_div(self._total_ns, _NS_PER_HOUR)

    def to_days(self) -> int:
        """The number of whole days (of 24 hours), truncated toward zero"""
        return _trunc_div(self._total_ns, _NS_PER_DAY)

    def to_human_string(self) -> str:
        """Format as a short, human-readable string

        Whole days, hours, minutes, and seconds are shown, leaving out
        any zero components. Durations under a second are shown
        in milliseconds or nanoseconds instead.

        Example
        -------
        >>> Duration(hours=25).to_human_string()
        '1d 1h'
        >>> Duration(milliseconds=-500).to_human_string()
        '-500ms'
        >>> Duration.ZERO.to_human_string()
        '0s'
        """
        ns = abs(self._total_ns)
        if ns == 0:
            return "0s"

        sign = "-" * (self._total_ns < 0)
        if ns < _NS_PER_SEC:
            if ns >= 1_000_000:
                return f"{sign}{ns // 1_000_000}ms"
            return f"{sign}{ns}ns"

        days, rem = divmod(ns // _NS_PER_SEC, 86_400)
        hrs, rem = divmod(rem, 3_600)
        mins, secs = divmod(rem, 60)
        return sign + " ".join(
            f"{value}{unit}"
            for value, unit in ((days, "d"), (hrs, "h"), (mins, "m"), (secs, "s"))
            if value
        )

    def __add__(self, other: Duration) -> Duration:
        """Add two durations together

        Example
        -------
        >>> Duration(hours=1, minutes=30) + Duration(minutes=30)
        Duration(02:00:00)
        """
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos(self._total_ns + other._total_ns)

    def __sub__(self, other: Duration) -> Duration:
        if not isinstance(other, Duration):
            return NotImplemented
        return Duration._from_nanos(self._total_ns - other._total_ns)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns == other._total_ns

    def __hash__(self) -> int:
        return hash(self._total_ns)

    def __lt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns < other._total_ns

    def __le__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns <= other._total_ns

    def __gt__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns > other._total_ns

    def __ge__(self, other: Duration) -> bool:
        if not isinstance(other, Duration):
            return NotImplemented
        return self._total_ns >= other._total_ns

    def __bool__(self) -> bool:
        """True if the value is non-zero"""
        return bool(self._total_ns)

    def __mul__(self, other: int) -> Duration:
        """Scale by an integer

        Example
        -------
        >>> Duration(hours=1, minutes=30) * 2
        Duration(03:00:00)
        """
        if type(other) is not int:
            return NotImplemented
        return Duration._from_nanos(self._total_ns * other)

    def __rmul__(self, other: int) -> Duration:
        return self * other

    def __neg__(self) -> Duration:
        return Duration._from_nanos_unchecked(-self._total_ns)

    def __pos__(self) -> Duration:
        return self

    @overload
    def __truediv__(self, other: int) -> Duration: ...

    @overload
    def __truediv__(self, other: Duration) -> float: ...

    def __truediv__(self, other: int | Duration) -> Duration | float:
        """Divide by an integer or another duration

        Division by an integer truncates toward zero, at nanosecond
        precision. Division by a duration gives their ratio.

        Example
        -------
        >>> Duration(nanoseconds=-7) / 2
        Duration(-00:00:00.000000003)
        >>> Duration(hours=1, minutes=30) / Duration(minutes=30)
        3.0
        """
        if isinstance(other, Duration):
            return self._total_ns / other._total_ns
        elif type(other) is int:
            if other == 0:
                raise ZeroDivisionError("Duration division by zero")
            return Duration._from_nanos(_trunc_div(self._total_ns, other))
        return NotImplemented

    def __abs__(self) -> Duration:
        return Duration._from_nanos_unchecked(abs(self._total_ns))

    __str__ = to_human_string

    def __repr__(self) -> str:
        hrs, rem = divmod(abs(self._total_ns), _NS_PER_HOUR)
        mins, rem = divmod(rem, _NS_PER_MIN)
        secs, ns = divmod(rem, _NS_PER_SEC)
        return (
            f"Duration({'-'*(self._total_ns < 0)}{hrs:02}:{mins:02}:{secs:02}"
            + f".{ns:0>9}".rstrip("0") * bool(ns)
            + ")"
        )

    @no_type_check
    def __reduce__(self):
        return _unpkl_duration, (pack("<q", self._total_ns),)

    @classmethod
    def _from_nanos(cls, ns: int) -> Duration:
        return cls._from_nanos_unchecked(_check_range(ns))

    @classmethod
    def _from_nanos_unchecked(cls, ns: int) -> Duration:
        new = _object_new(cls)
        new._total_ns = ns
        return new


def _check_range(ns: int) -> int:
    if not -_MAX_DURATION_NANOS <= ns <= _MAX_DURATION_NANOS:
        raise ValueError("Duration out of range")
    return ns


Duration.ZERO = Duration()
Duration.MAX = Duration(nanoseconds=_MAX_DURATION_NANOS)
Duration.MIN = Duration(nanoseconds=-_MAX_DURATION_NANOS)


# A separate unpickling function allows us to make backwards-compatible changes
# to the pickling format in the future
@no_type_check
def _unpkl_duration(data: bytes) -> Duration:
    (ns,) = unpack("<q", data)
    return Duration._from_nanos_unchecked(ns)


@final
class Timestamp(_ImmutableBase):
    """A point in time, as seconds and nanoseconds since the UNIX epoch
    (1970-01-01T00:00:00 UTC)

    The nanoseconds are always in the range [0, 1_000_000_000),
    also for instants before the epoch.

    Example
    -------
    >>> t = Timestamp.from_nanoseconds(-1)
    Timestamp(-1, 999999999)
    >>> t.seconds, t.nanoseconds
    (-1, 999_999_999)
    """

    __slots__ = ("_secs", "_nanos")

    EPOCH: ClassVar[Timestamp]
    """The UNIX epoch: 1970-01-01T00:00:00 UTC"""

    def __init__(self, seconds: int, nanoseconds: int = 0) -> None:
        _check_int(seconds, "seconds")
        _check_int(nanoseconds, "nanoseconds")
        if not 0 <= nanoseconds < _NS_PER_SEC:
            raise ValueError(f"nanoseconds out of range: {nanoseconds}")
        self._secs = seconds
        self._nanos = nanoseconds

    @property
    def seconds(self) -> int:
        return self._secs

    @property
    def nanoseconds(self) -> int:
        return self._nanos

    @classmethod
    def from_seconds(cls, i: int, /) -> Timestamp:
        return cls._from_unchecked(_check_int(i, "seconds"), 0)

    @classmethod
    def from_milliseconds(cls, i: int, /) -> Timestamp:
        """Create from a count of milliseconds since the epoch.

        The inverse of :meth:`to_milliseconds`.
        """
        secs, millis = divmod(_check_int(i, "milliseconds"), 1_000)
        return cls._from_unchecked(secs, millis * 1_000_000)

    @classmethod
    def from_nanoseconds(cls, i: int, /) -> Timestamp:
        """Create from a count of nanoseconds since the epoch.

        The inverse of :meth:`to_nanoseconds`.
        """
        return cls._from_unchecked(
            *divmod(_check_int(i, "nanoseconds"), _NS_PER_SEC)
        )

    @classmethod
    def now(cls, clock: Optional[Clock] = None) -> Timestamp:
        """The current time, read from the given clock
        (or the default system clock).

        Raises :class:`ClockError` if the clock can't be read.
        Nanoseconds outside [0, 1_000_000_000) are carried into the seconds.
        """
        secs, nanos = _clock.resolve(clock).wall_clock_time()
        extra_secs, nanos = divmod(
            _check_int(nanos, "nanoseconds"), _NS_PER_SEC
        )
        return cls(secs + extra_secs, nanos)

    def to_milliseconds(self) -> int:
        """Milliseconds since the epoch, rounded toward negative infinity"""
        return self._secs * 1_000 + self._nanos // 1_000_000

    def to_nanoseconds(self) -> int:
        return self._secs * _NS_PER_SEC + self._nanos

    def add(self, d: Duration, /) -> Timestamp:
        """Shift forward by a duration (or backward, if it's negative)"""
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d).__name__}")
        return self + d

    def subtract(self, d: Duration, /) -> Timestamp:
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d).__name__}")
        return self - d

    def difference(self, other: Timestamp, /) -> Duration:
        """The duration from ``other`` to this timestamp.
        Negative if ``other`` is later.

        Example
        -------
        >>> Timestamp(10).difference(Timestamp(25, 500))
        Duration(-00:00:15.0000005)
        """
        if not isinstance(other, Timestamp):
            raise TypeError(f"Expected Timestamp, got {type(other).__name__}")
        return Duration._from_nanos(
            (self._secs - other._secs) * _NS_PER_SEC
            + self._nanos
            - other._nanos
        )

    def __add__(self, d: Duration) -> Timestamp:
        if isinstance(d, Duration):
            delta_secs, nanos = divmod(self._nanos + d._total_ns, _NS_PER_SEC)
            return self._from_unchecked(self._secs + delta_secs, nanos)
        return NotImplemented

    @overload
    def __sub__(self, other: Timestamp) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> Timestamp: ...

    def __sub__(self, other: Duration | Timestamp) -> Timestamp | Duration:
        """Subtract a duration, or another timestamp

        Example
        -------
        >>> Timestamp(100) - seconds(5)
        Timestamp(95)
        >>> Timestamp(100) - Timestamp(40)
        Duration(00:01:00)
        """
        if isinstance(other, Timestamp):
            return self.difference(other)
        elif isinstance(other, Duration):
            return self + -other
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self._secs, self._nanos) == (other._secs, other._nanos)

    def __hash__(self) -> int:
        return hash((self._secs, self._nanos))

    def __lt__(self, other: Timestamp) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self._secs, self._nanos) < (other._secs, other._nanos)

    def __le__(self, other: Timestamp) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self._secs, self._nanos) <= (other._secs, other._nanos)

    def __gt__(self, other: Timestamp) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self._secs, self._nanos) > (other._secs, other._nanos)

    def __ge__(self, other: Timestamp) -> bool:
        if not isinstance(other, Timestamp):
            return NotImplemented
        return (self._secs, self._nanos) >= (other._secs, other._nanos)

    def __repr__(self) -> str:
        if self._nanos:
            return f"Timestamp({self._secs}, {self._nanos})"
        return f"Timestamp({self._secs})"

    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_ts, (self._secs, self._nanos)

    @classmethod
    def _from_unchecked(cls, secs: int, nanos: int) -> Timestamp:
        new = _object_new(cls)
        new._secs = secs
        new._nanos = nanos
        return new


Timestamp.EPOCH = Timestamp(0)


def _unpkl_ts(secs: int, nanos: int) -> Timestamp:
    return Timestamp._from_unchecked(secs, nanos)


@final
class DateTime(_ImmutableBase):
    """A date and time on the proleptic Gregorian calendar,
    without a timezone

    Conversion to and from :class:`Timestamp` interprets the fields as UTC,
    unless a ``_local`` variant is used.

    Example
    -------
    >>> dt = DateTime(2024, 1, 31, hour=9, minute=30)
    DateTime(2024-01-31 09:30:00)
    >>> dt.add_months(1)
    DateTime(2024-02-29 09:30:00)
    >>> dt.to_iso8601()
    '2024-01-31T09:30:00'

    Note
    ----
    Years may be zero or negative: year 0 is 1 BCE, year -1 is 2 BCE, etc.
    Leap seconds are not supported.
    """

    __slots__ = (
        "_year",
        "_month",
        "_day",
        "_hour",
        "_minute",
        "_second",
        "_nanos",
    )

    def __init__(
        self,
        year: int,
        month: int,
        day: int,
        hour: int = 0,
        minute: int = 0,
        second: int = 0,
        *,
        nanosecond: int = 0,
    ) -> None:
        _check_int(year, "year")
        if not 1 <= _check_int(month, "month") <= 12:
            raise ValueError(f"month must be in 1..12, got {month}")
        if not 1 <= _check_int(day, "day") <= days_in_month(year, month):
            raise ValueError(f"day is out of range for month: {day}")
        if not 0 <= _check_int(hour, "hour") <= 23:
            raise ValueError(f"hour must be in 0..23, got {hour}")
        if not 0 <= _check_int(minute, "minute") <= 59:
            raise ValueError(f"minute must be in 0..59, got {minute}")
        if not 0 <= _check_int(second, "second") <= 59:
            raise ValueError(f"second must be in 0..59, got {second}")
        if not 0 <= _check_int(nanosecond, "nanosecond") < _NS_PER_SEC:
            raise ValueError(f"nanosecond out of range: {nanosecond}")
        self._year = year
        self._month = month
        self._day = day
        self._hour = hour
        self._minute = minute
        self._second = second
        self._nanos = nanosecond

    @property
    def year(self) -> int:
        return self._year

    @property
    def month(self) -> int:
        return self._month

    @property
    def day(self) -> int:
        return self._day

    @property
    def hour(self) -> int:
        return self._hour

    @property
    def minute(self) -> int:
        return self._minute

    @property
    def second(self) -> int:
        return self._second

    @property
    def nanosecond(self) -> int:
        return self._nanos

    # --- conversion ---

    @classmethod
    def from_timestamp_utc(cls, ts: Timestamp, /) -> DateTime:
        """The UTC date and time of a timestamp

        Example
        -------
        >>> DateTime.from_timestamp_utc(Timestamp(-1))
        DateTime(1969-12-31 23:59:59)
        """
        return cls._from_epoch_secs(ts._secs, ts._nanos)

    @classmethod
    def from_timestamp_local(
        cls, ts: Timestamp, /, *, clock: Optional[Clock] = None
    ) -> DateTime:
        """The local date and time of a timestamp, using the clock's
        current local UTC offset.

        Raises :class:`ClockError` if the offset can't be read.
        """
        offset = _clock.resolve(clock).local_offset_seconds()
        return cls._from_epoch_secs(ts._secs + offset, ts._nanos)

    def to_timestamp(self) -> Timestamp:
        """The timestamp of this date and time, taken as UTC"""
        return Timestamp._from_unchecked(self._epoch_secs(), self._nanos)

    def to_timestamp_local(self, *, clock: Optional[Clock] = None) -> Timestamp:
        """The timestamp of this date and time, taken as local time
        at the clock's current local UTC offset.

        Raises :class:`ClockError` if the offset can't be read.
        """
        offset = _clock.resolve(clock).local_offset_seconds()
        return Timestamp._from_unchecked(
            self._epoch_secs() - offset, self._nanos
        )

    @classmethod
    def now_utc(cls, clock: Optional[Clock] = None) -> DateTime:
        """The current date and time in UTC"""
        return cls.from_timestamp_utc(Timestamp.now(clock))

    @classmethod
    def now_local(cls, clock: Optional[Clock] = None) -> DateTime:
        """The current local date and time"""
        clock = _clock.resolve(clock)
        return cls.from_timestamp_local(Timestamp.now(clock), clock=clock)

    # --- arithmetic ---

    def add_days(self, n: int, /) -> DateTime:
        """Add a number of calendar days. The time of day is unchanged.

        Example
        -------
        >>> DateTime(2025, 12, 25).add_days(10)
        DateTime(2026-01-04 00:00:00)
        """
        y, m, d = civil_from_days(
            days_from_civil(self._year, self._month, self._day)
            + _check_int(n, "days")
        )
        return self._with_date(y, m, d)

    def add_months(self, n: int, /) -> DateTime:
        """Add a number of months. If the day doesn't exist in the
        resulting month, it is clamped to the month's last day.

        Example
        -------
        >>> DateTime(2025, 1, 31).add_months(1)
        DateTime(2025-02-28 00:00:00)
        >>> DateTime(2025, 3, 31).add_months(-1)
        DateTime(2025-02-28 00:00:00)
        """
        year, month0 = divmod(
            self._year * 12 + self._month - 1 + _check_int(n, "months"), 12
        )
        month = month0 + 1
        return self._with_date(
            year, month, min(self._day, days_in_month(year, month))
        )

    def add_years(self, n: int, /) -> DateTime:
        """Add a number of years. February 29 becomes February 28
        if the resulting year isn't a leap year.

        Example
        -------
        >>> DateTime(2024, 2, 29).add_years(1)
        DateTime(2025-02-28 00:00:00)
        """
        year = self._year + _check_int(n, "years")
        return self._with_date(
            year, self._month, min(self._day, days_in_month(year, self._month))
        )

    def add_hours(self, n: int, /) -> DateTime:
        return self.add_duration(Duration.from_hours(n))

    def add_minutes(self, n: int, /) -> DateTime:
        return self.add_duration(Duration.from_minutes(n))

    def add_seconds(self, n: int, /) -> DateTime:
        """Add a number of seconds, rolling over into the next
        minute, day, month, etc. where needed."""
        return self.add_duration(Duration.from_seconds(n))

    def add_duration(self, d: Duration, /) -> DateTime:
        """Add an exact duration, as if on the UTC timeline"""
        if not isinstance(d, Duration):
            raise TypeError(f"Expected Duration, got {type(d).__name__}")
        delta_secs, nanos = divmod(self._nanos + d._total_ns, _NS_PER_SEC)
        return self._from_epoch_secs(self._epoch_secs() + delta_secs, nanos)

    def add(
        self,
        *,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
        nanoseconds: int = 0,
    ) -> DateTime:
        """Add several components at once.

        Years and months are added first (clamping the day as in
        :meth:`add_months`), then weeks and days, then the exact
        time units.

        Example
        -------
        >>> DateTime(2024, 1, 31, 22).add(months=1, days=1, hours=3)
        DateTime(2024-03-02 01:00:00)
        """
        return (
            self.add_months(
                _check_int(years, "years") * 12 + _check_int(months, "months")
            )
            .add_days(_check_int(weeks, "weeks") * 7 + _check_int(days, "days"))
            .add_duration(
                Duration(
                    hours=hours,
                    minutes=minutes,
                    seconds=seconds,
                    milliseconds=milliseconds,
                    microseconds=microseconds,
                    nanoseconds=nanoseconds,
                )
            )
        )

    def subtract(
        self,
        *,
        years: int = 0,
        months: int = 0,
        weeks: int = 0,
        days: int = 0,
        hours: int = 0,
        minutes: int = 0,
        seconds: int = 0,
        milliseconds: int = 0,
        microseconds: int = 0,
        nanoseconds: int = 0,
    ) -> DateTime:
        """Subtract several components at once.
        The inverse of :meth:`add`, following the same ordering."""
        return self.add(
            years=-years,
            months=-months,
            weeks=-weeks,
            days=-days,
            hours=-hours,
            minutes=-minutes,
            seconds=-seconds,
            milliseconds=-milliseconds,
            microseconds=-microseconds,
            nanoseconds=-nanoseconds,
        )

    def __add__(self, d: Duration) -> DateTime:
        if isinstance(d, Duration):
            return self.add_duration(d)
        return NotImplemented

    @overload
    def __sub__(self, other: DateTime) -> Duration: ...

    @overload
    def __sub__(self, other: Duration) -> DateTime: ...

    def __sub__(self, other: Duration | DateTime) -> DateTime | Duration:
        """Subtract a duration, or get the exact duration between
        two datetimes (both taken as UTC)

        Example
        -------
        >>> DateTime(2024, 3, 1) - DateTime(2024, 2, 28)
        Duration(48:00:00)
        """
        if isinstance(other, DateTime):
            return Duration._from_nanos(
                (self._epoch_secs() - other._epoch_secs()) * _NS_PER_SEC
                + self._nanos
                - other._nanos
            )
        elif isinstance(other, Duration):
            return self.add_duration(-other)
        return NotImplemented

    def replace(self, **kwargs: Any) -> DateTime:
        """Create a new instance with the given fields replaced

        Example
        -------
        >>> DateTime(2021, 1, 2, 8).replace(day=4, hour=13)
        DateTime(2021-01-04 13:00:00)
        """
        fields = {
            "year": self._year,
            "month": self._month,
            "day": self._day,
            "hour": self._hour,
            "minute": self._minute,
            "second": self._second,
            "nanosecond": self._nanos,
        }
        if not fields.keys() >= kwargs.keys():
            raise TypeError(
                f"Invalid field(s): {', '.join(kwargs.keys() - fields.keys())}"
            )
        fields.update(kwargs)
        return DateTime(**fields)

    # --- calendar queries ---

    def weekday(self) -> Weekday:
        """The day of the week

        Example
        -------
        >>> DateTime(1970, 1, 1).weekday()
        Weekday.THURSDAY
        """
        return Weekday(
            weekday_number(
                days_from_civil(self._year, self._month, self._day)
            )
        )

    def is_weekend(self) -> bool:
        return self.weekday().is_weekend()

    def is_weekday(self) -> bool:
        return self.weekday().is_weekday()

    def day_of_year(self) -> int:
        """The day of the year, starting at 1 for January 1st"""
        return _day_of_year(self._year, self._month, self._day)

    def week_of_year(self) -> int:
        """The ISO 8601 week number, in the range 1..53

        Note
        ----
        Following ISO 8601, the first days of January may fall in
        week 52 or 53 (of the previous year), and the last days of
        December may fall in week 1 (of the next year).
        """
        return iso_week_number(self._year, self._month, self._day)

    # --- formatting and parsing ---

    def to_date_string(self) -> str:
        """Format the date as ``YYYY-MM-DD``

        Years outside 0..9999 get an explicit sign, e.g. ``-0044-03-15``.
        """
        year = self._year
        if 0 <= year < 10_000:
            return f"{year:04d}-{self._month:02d}-{self._day:02d}"
        return f"{year:+05d}-{self._month:02d}-{self._day:02d}"

    def to_time_string(self) -> str:
        """Format the time as ``HH:MM:SS``, without fractional seconds"""
        return f"{self._hour:02d}:{self._minute:02d}:{self._second:02d}"

    def to_iso8601(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS``"""
        return f"{self.to_date_string()}T{self.to_time_string()}"

    def to_iso8601_full(self) -> str:
        """Format as ``YYYY-MM-DDTHH:MM:SS.fffffffff``, always with
        nine fractional digits.

        The inverse of :meth:`parse_iso8601`.
        """
        return f"{self.to_iso8601()}.{self._nanos:09d}"

    @classmethod
    def parse_iso8601(cls, s: str, /) -> DateTime:
        """Parse ``YYYY-MM-DD[(T| )HH:MM:SS[.fffffffff]]``

        The fraction may have 1 to 9 digits. A date without a time
        is taken as midnight.

        Raises :class:`ParseError` on malformed input or invalid fields.

        Example
        -------
        >>> DateTime.parse_iso8601("2024-02-29T12:30:00.1")
        DateTime(2024-02-29 12:30:00.1)
        >>> DateTime.parse_iso8601("2025-02-29")
        Traceback (most recent call last):
          ...
        chronos.ParseError: Invalid day in '2025-02-29': 29
        """
        return cls._from_fields_unchecked(*datetime_from_iso(s))

    @classmethod
    def parse_date(cls, s: str, /) -> DateTime:
        """Parse a ``YYYY-MM-DD`` date, with the time set to midnight"""
        return cls._from_fields_unchecked(*date_from_iso(s))

    @classmethod
    def parse_time(cls, s: str, /) -> DateTime:
        """Parse a ``HH:MM:SS[.fffffffff]`` time, placed on 1970-01-01"""
        return cls._from_fields_unchecked(*time_from_iso(s))

    __str__ = to_iso8601_full

    def __repr__(self) -> str:
        return (
            f"DateTime({self.to_date_string()} {self.to_time_string()}"
            + f".{self._nanos:09d}".rstrip("0") * bool(self._nanos)
            + ")"
        )

    # --- comparison ---

    def _fields(self) -> tuple[int, int, int, int, int, int, int]:
        return (
            self._year,
            self._month,
            self._day,
            self._hour,
            self._minute,
            self._second,
            self._nanos,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() == other._fields()

    def __hash__(self) -> int:
        return hash(self._fields())

    def __lt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() < other._fields()

    def __le__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() <= other._fields()

    def __gt__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() > other._fields()

    def __ge__(self, other: DateTime) -> bool:
        if not isinstance(other, DateTime):
            return NotImplemented
        return self._fields() >= other._fields()

    def __reduce__(self) -> tuple[object, ...]:
        return _unpkl_dt, self._fields()

    # --- internals ---

    def _epoch_secs(self) -> int:
        return (
            days_from_civil(self._year, self._month, self._day) * 86_400
            + self._hour * 3_600
            + self._minute * 60
            + self._second
        )

    def _with_date(self, year: int, month: int, day: int) -> DateTime:
        return self._from_fields_unchecked(
            year,
            month,
            day,
            self._hour,
            self._minute,
            self._second,
            self._nanos,
        )

    @classmethod
    def _from_epoch_secs(cls, secs: int, nanos: int) -> DateTime:
        days, secs_of_day = split_seconds(secs)
        hour, rem = divmod(secs_of_day, 3_600)
        minute, second = divmod(rem, 60)
        return cls._from_fields_unchecked(
            *civil_from_days(days), hour, minute, second, nanos
        )

    @classmethod
    def _from_fields_unchecked(
        cls,
        year: int,
        month: int,
        day: int,
        hour: int,
        minute: int,
        second: int,
        nanos: int,
    ) -> DateTime:
        new = _object_new(cls)
        new._year = year
        new._month = month
        new._day = day
        new._hour = hour
        new._minute = minute
        new._second = second
        new._nanos = nanos
        return new


def _unpkl_dt(
    year: int,
    month: int,
    day: int,
    hour: int,
    minute: int,
    second: int,
    nanos: int,
) -> DateTime:
    return DateTime._from_fields_unchecked(
        year, month, day, hour, minute, second, nanos
    )


def parse_iso8601(s: str, /) -> DateTime:
    """Alias for :meth:`DateTime.parse_iso8601`"""
    return DateTime.parse_iso8601(s)


def parse_date(s: str, /) -> DateTime:
    """Alias for :meth:`DateTime.parse_date`"""
    return DateTime.parse_date(s)


def parse_time(s: str, /) -> DateTime:
    """Alias for :meth:`DateTime.parse_time`"""
    return DateTime.parse_time(s)


def days(i: int, /) -> Duration:
    """Create a :class:`Duration` of whole 24-hour days"""
    return Duration.from_days(i)


def hours(i: int, /) -> Duration:
    return Duration.from_hours(i)


def minutes(i: int, /) -> Duration:
    return Duration.from_minutes(i)


def seconds(i: int, /) -> Duration:
    return Duration.from_seconds(i)


def milliseconds(i: int, /) -> Duration:
    return Duration.from_milliseconds(i)


def microseconds(i: int, /) -> Duration:
    return Duration.from_microseconds(i)


def nanoseconds(i: int, /) -> Duration:
    return Duration.from_nanoseconds(i)


for name in __all__:
    member = locals()[name]
    if getattr(member, "__module__", "").startswith("chronos."):
        member.__module__ = "chronos"

# clear up loop variables so they don't leak into the namespace
del name
del member

for _unpkl in (_unpkl_duration, _unpkl_ts, _unpkl_dt):
    _unpkl.__module__ = "chronos"
