import re
from typing import NoReturn

from ._math import days_in_month

# year, month, day, hour, minute, second, nanosecond
Fields = tuple[int, int, int, int, int, int, int]
Nanos = int  # 0-999_999_999


class ParseError(ValueError):
    """A string could not be parsed as an ISO 8601 date and/or time"""


_DATE_RE = r"([+-]\d{4,}|\d{4})-(\d{2})-(\d{2})"
_TIME_RE = r"(\d{2}):(\d{2}):(\d{2})(?:\.(\d{1,9}))?"
_match_datetime = re.compile(
    rf"{_DATE_RE}(?:[T ]{_TIME_RE})?", re.ASCII
).fullmatch
_match_date = re.compile(_DATE_RE, re.ASCII).fullmatch
_match_time = re.compile(_TIME_RE, re.ASCII).fullmatch


def _parse_err(s: str) -> NoReturn:
    raise ParseError(f"Invalid format: {s!r}")


def _ints(s: str, *groups: str) -> list[int]:
    try:
        return [int(g) for g in groups]
    except ValueError:  # e.g. more digits than int() accepts
        _parse_err(s)


def _parse_nanos(s: str | None) -> Nanos:
    return int(s.ljust(9, "0")) if s else 0


def _check_type(s: object) -> None:
    if not isinstance(s, str):
        raise TypeError(f"Expected a string, got {type(s).__name__}")


def _check_date(s: str, year: int, month: int, day: int) -> None:
    if not 1 <= month <= 12:
        raise ParseError(f"Invalid month in {s!r}: {month}")
    if not 1 <= day <= days_in_month(year, month):
        raise ParseError(f"Invalid day in {s!r}: {day}")


def _check_time(s: str, hour: int, minute: int, second: int) -> None:
    if hour > 23:
        raise ParseError(f"Invalid hour in {s!r}: {hour}")
    if minute > 59:
        raise ParseError(f"Invalid minute in {s!r}: {minute}")
    if second > 59:
        raise ParseError(f"Invalid second in {s!r}: {second}")


def datetime_from_iso(s: str) -> Fields:
    """Parse ``YYYY-MM-DD[(T| )HH:MM:SS[.fffffffff]]``"""
    _check_type(s)
    if (match := _match_datetime(s)) is None:
        _parse_err(s)

    year, month, day = _ints(s, *match.group(1, 2, 3))
    _check_date(s, year, month, day)
    if match.group(4) is None:
        return (year, month, day, 0, 0, 0, 0)

    hour, minute, second = map(int, match.group(4, 5, 6))
    _check_time(s, hour, minute, second)
    return (year, month, day, hour, minute, second, _parse_nanos(match[7]))


def date_from_iso(s: str) -> Fields:
    """Parse ``YYYY-MM-DD``, with the time fields set to zero"""
    _check_type(s)
    if (match := _match_date(s)) is None:
        _parse_err(s)

    year, month, day = _ints(s, *match.groups())
    _check_date(s, year, month, day)
    return (year, month, day, 0, 0, 0, 0)


def time_from_iso(s: str) -> Fields:
    """Parse ``HH:MM:SS[.fffffffff]``, placed on 1970-01-01"""
    _check_type(s)
    if (match := _match_time(s)) is None:
        _parse_err(s)

    hour, minute, second = map(int, match.group(1, 2, 3))
    _check_time(s, hour, minute, second)
    return (1970, 1, 1, hour, minute, second, _parse_nanos(match[4]))
