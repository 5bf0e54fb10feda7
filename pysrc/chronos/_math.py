"""Calendar arithmetic helpers for the proleptic Gregorian calendar.

Day counts are relative to 1970-01-01 (day 0). All functions use floor
division, so they are exact for negative years and negative day counts.
"""

# 1-indexed days per month
_MONTHDAYS = [0, 31, 28, 31, 30, 31, 30, 31, 31, 30, 31, 30, 31]

# Day count of 0000-03-01, the start of the first 400-year era
_ERA_OFFSET = 719_468
_DAYS_PER_ERA = 146_097
SECS_PER_DAY = 86_400


def is_leap_year(year: int) -> bool:
    return year % 4 == 0 and (year % 100 != 0 or year % 400 == 0)


def days_in_month(year: int, month: int) -> int:
    """The number of days in the given month, or 0 if the month is invalid"""
    if not 1 <= month <= 12:
        return 0
    return _MONTHDAYS[month] + (month == 2 and is_leap_year(year))


def days_from_civil(year: int, month: int, day: int) -> int:
    """Convert a civil date to the number of days since 1970-01-01.

    This is Howard Hinnant's ``days_from_civil``. Years are shifted so
    they start in March, putting the leap day at the end of the year.
    """
    year -= month <= 2
    era = year // 400
    yoe = year - era * 400  # [0, 399]
    doy = (153 * (month + (-3 if month > 2 else 9)) + 2) // 5 + day - 1
    doe = yoe * 365 + yoe // 4 - yoe // 100 + doy  # [0, 146096]
    return era * _DAYS_PER_ERA + doe - _ERA_OFFSET


def civil_from_days(days: int) -> tuple[int, int, int]:
    """Inverse of :func:`days_from_civil`"""
    days += _ERA_OFFSET
    era = days // _DAYS_PER_ERA
    doe = days - era * _DAYS_PER_ERA  # [0, 146096]
    yoe = (doe - doe // 1460 + doe // 36524 - doe // 146096) // 365
    doy = doe - (365 * yoe + yoe // 4 - yoe // 100)  # [0, 365]
    mp = (5 * doy + 2) // 153  # [0, 11], March is 0
    day = doy - (153 * mp + 2) // 5 + 1
    month = mp + 3 if mp < 10 else mp - 9
    return (yoe + era * 400 + (month <= 2), month, day)


def split_seconds(secs: int) -> tuple[int, int]:
    """Split epoch seconds into (day count, seconds of day).
    The seconds of day are always in [0, 86400), even for negative input."""
    return divmod(secs, SECS_PER_DAY)


def day_of_year(year: int, month: int, day: int) -> int:
    return days_from_civil(year, month, day) - days_from_civil(year, 1, 1) + 1


def weekday_number(days: int) -> int:
    """Weekday of a day count, with Sunday as 0. Day 0 was a Thursday."""
    return (days + 4) % 7


def _iso_weeks_in_year(year: int) -> int:
    jan1 = weekday_number(days_from_civil(year, 1, 1))
    # Years starting on a Thursday (or Wednesday, if leap) have 53 weeks
    return 53 if jan1 == 4 or (jan1 == 3 and is_leap_year(year)) else 52


def iso_week_number(year: int, month: int, day: int) -> int:
    """The ISO 8601 week number, in [1, 53].

    Weeks start on Monday; week 1 contains the year's first Thursday.
    Early January days may belong to the last week of the previous year,
    and late December days to week 1 of the next year.
    """
    iso_weekday = weekday_number(days_from_civil(year, month, day)) or 7
    week = (day_of_year(year, month, day) - iso_weekday + 10) // 7
    if week < 1:
        return _iso_weeks_in_year(year - 1)
    elif week > _iso_weeks_in_year(year):
        return 1
    return week
