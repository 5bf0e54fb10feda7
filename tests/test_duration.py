import pickle
from copy import copy, deepcopy

import pytest
from hypothesis import given
from hypothesis.strategies import integers

from chronos import (
    Duration,
    days,
    hours,
    microseconds,
    milliseconds,
    minutes,
    nanoseconds,
    seconds,
)

from .common import AlwaysEqual, AlwaysLarger, AlwaysSmaller, NeverEqual

MAX_NANOS = (1 << 63) - 1


class TestInit:

    @pytest.mark.parametrize(
        "kwargs, expected_nanos",
        [
            (dict(), 0),
            (dict(days=1), 86_400_000_000_000),
            (dict(hours=2), 2 * 3_600_000_000_000),
            (dict(minutes=3), 3 * 60_000_000_000),
            (dict(seconds=4), 4 * 1_000_000_000),
            (dict(milliseconds=5), 5 * 1_000_000),
            (dict(microseconds=6), 6 * 1_000),
            (dict(nanoseconds=7), 7),
            # all components
            (
                dict(
                    days=1,
                    hours=1,
                    minutes=2,
                    seconds=90,
                    milliseconds=9,
                    microseconds=4,
                    nanoseconds=5,
                ),
                86_400_000_000_000
                + 3_600_000_000_000
                + 2 * 60_000_000_000
                + 90 * 1_000_000_000
                + 9 * 1_000_000
                + 4 * 1_000
                + 5,
            ),
            # mixed signs
            (
                dict(hours=1, minutes=-2),
                3_600_000_000_000 - 2 * 60_000_000_000,
            ),
            (dict(nanoseconds=MAX_NANOS), MAX_NANOS),
            (dict(nanoseconds=-MAX_NANOS), -MAX_NANOS),
        ],
    )
    def test_valid(self, kwargs, expected_nanos):
        assert Duration(**kwargs).to_nanoseconds() == expected_nanos

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(nanoseconds=MAX_NANOS + 1),
            dict(nanoseconds=-MAX_NANOS - 1),
            dict(days=106_752),
            dict(days=-106_752),
            dict(hours=1 << 70),
        ],
    )
    def test_out_of_range(self, kwargs):
        with pytest.raises(ValueError, match="range"):
            Duration(**kwargs)

    @pytest.mark.parametrize(
        "kwargs",
        [
            dict(hours=1.5),
            dict(seconds="3"),
            dict(minutes=True),
        ],
    )
    def test_invalid_types(self, kwargs):
        with pytest.raises(TypeError, match="int"):
            Duration(**kwargs)

    def test_no_positional_args(self):
        with pytest.raises(TypeError):
            Duration(1)  # type: ignore[misc]


class TestFactories:

    @pytest.mark.parametrize(
        "factory, arg, expected",
        [
            (Duration.from_nanoseconds, 3, 3),
            (Duration.from_microseconds, 3, 3_000),
            (Duration.from_milliseconds, 3, 3_000_000),
            (Duration.from_seconds, -3, -3_000_000_000),
            (Duration.from_minutes, 3, 180_000_000_000),
            (Duration.from_hours, 3, 10_800_000_000_000),
            (Duration.from_days, 3, 259_200_000_000_000),
            (nanoseconds, 3, 3),
            (microseconds, 3, 3_000),
            (milliseconds, 3, 3_000_000),
            (seconds, 3, 3_000_000_000),
            (minutes, -3, -180_000_000_000),
            (hours, 3, 10_800_000_000_000),
            (days, 3, 259_200_000_000_000),
        ],
    )
    def test_valid(self, factory, arg, expected):
        assert factory(arg).to_nanoseconds() == expected

    def test_bounds(self):
        assert Duration.from_days(106_751) < Duration.MAX
        with pytest.raises(ValueError, match="range"):
            Duration.from_days(106_752)
        with pytest.raises(ValueError, match="range"):
            Duration.from_hours(-(1 << 60))

    def test_float(self):
        with pytest.raises(TypeError):
            Duration.from_seconds(1.5)  # type: ignore[arg-type]


def test_constants():
    assert Duration.ZERO == Duration()
    assert Duration.MAX.to_nanoseconds() == MAX_NANOS
    assert Duration.MIN == -Duration.MAX
    assert abs(Duration.MIN) == Duration.MAX


def test_sign():
    assert Duration.ZERO.is_zero()
    assert not Duration.ZERO.is_positive()
    assert not Duration.ZERO.is_negative()
    assert seconds(1).is_positive()
    assert not seconds(1).is_zero()
    assert nanoseconds(-1).is_negative()
    assert not nanoseconds(-1).is_positive()


def test_boolean():
    assert not Duration()
    assert not Duration(hours=1, minutes=-60)
    assert Duration(nanoseconds=1)


class TestConversions:

    @pytest.mark.parametrize(
        "d, expected",
        [
            (Duration(milliseconds=1_500), 1),
            (Duration(milliseconds=-1_500), -1),
            (Duration(milliseconds=999), 0),
            (Duration(milliseconds=-999), 0),
            (Duration(hours=1), 3_600),
        ],
    )
    def test_to_seconds(self, d, expected):
        assert d.to_seconds() == expected

    def test_other_units(self):
        d = Duration(days=2, hours=3, minutes=4, seconds=5, nanoseconds=6)
        assert d.to_days() == 2
        assert d.to_hours() == 51
        assert d.to_minutes() == 51 * 60 + 4
        assert d.to_milliseconds() == (((51 * 60) + 4) * 60 + 5) * 1_000
        assert (-d).to_days() == -2
        assert (-d).to_hours() == -51
        assert (-d).to_minutes() == -(51 * 60 + 4)
        assert Duration(hours=-47).to_days() == -1
        assert Duration(seconds=-119).to_minutes() == -1


class TestHumanString:

    @pytest.mark.parametrize(
        "d, expected",
        [
            (Duration.ZERO, "0s"),
            (seconds(3661), "1h 1m 1s"),
            (days(2), "2d"),
            (hours(25), "1d 1h"),
            (milliseconds(500), "500ms"),
            (Duration(days=1, minutes=1), "1d 1m"),
            (Duration(minutes=1, seconds=30), "1m 30s"),
            (seconds(59), "59s"),
            # sub-second remainder is dropped above one second
            (Duration(seconds=1, milliseconds=500), "1s"),
            # below one second: a single ms or ns token
            (nanoseconds(1_500_000), "1ms"),
            (nanoseconds(999_999), "999999ns"),
            (nanoseconds(1), "1ns"),
            (nanoseconds(999_999_999), "999ms"),
            # negative values
            (seconds(-90), "-1m 30s"),
            (milliseconds(-500), "-500ms"),
            (nanoseconds(-1), "-1ns"),
            (Duration.MAX, "106751d 23h 47m 16s"),
        ],
    )
    def test_examples(self, d, expected):
        assert d.to_human_string() == expected
        assert str(d) == expected

    @given(integers(1, MAX_NANOS))
    def test_negative_is_prefixed(self, ns):
        assert (
            nanoseconds(-ns).to_human_string()
            == "-" + nanoseconds(ns).to_human_string()
        )


def test_equality():
    d = Duration(hours=1, minutes=2, seconds=3, microseconds=4)
    same = Duration(hours=1, minutes=2, seconds=3, microseconds=4)
    same_total = Duration(hours=0, minutes=62, seconds=3, microseconds=4)
    different = Duration(hours=1, minutes=2, seconds=3, microseconds=5)
    assert d == same
    assert d == same_total
    assert not d == different
    assert not d == NeverEqual()
    assert d == AlwaysEqual()
    assert not d != same
    assert d != different
    assert d != NeverEqual()
    assert not d != AlwaysEqual()

    assert hash(d) == hash(same)
    assert hash(d) == hash(same_total)
    assert hash(d) != hash(different)


def test_comparison():
    d = Duration(hours=1, minutes=2, seconds=3, microseconds=4)
    same = Duration(hours=0, minutes=62, seconds=3, microseconds=4)
    bigger = Duration(hours=1, minutes=2, seconds=3, microseconds=5)
    smaller = Duration(hours=1, minutes=2, seconds=3, microseconds=3)

    assert d <= same
    assert d <= bigger
    assert not d <= smaller
    assert d <= AlwaysLarger()
    assert not d <= AlwaysSmaller()

    assert not d < same
    assert d < bigger
    assert not d < smaller
    assert d < AlwaysLarger()
    assert not d < AlwaysSmaller()

    assert d >= same
    assert d >= smaller
    assert not d >= bigger
    assert not d >= AlwaysLarger()
    assert d >= AlwaysSmaller()

    assert not d > same
    assert d > smaller
    assert not d > bigger
    assert not d > AlwaysLarger()
    assert d > AlwaysSmaller()

    assert Duration.MIN < -seconds(1) < Duration.ZERO < seconds(1)

    with pytest.raises(TypeError):
        d < 3  # type: ignore[operator]


def test_addition():
    d = Duration(hours=1, minutes=2, seconds=3)
    assert d + Duration() == d
    assert d + hours(1) == Duration(hours=2, minutes=2, seconds=3)
    assert d + minutes(-1) == Duration(hours=1, minutes=1, seconds=3)

    with pytest.raises(ValueError, match="range"):
        Duration.MAX + nanoseconds(1)

    with pytest.raises(TypeError, match="unsupported operand"):
        d + Ellipsis  # type: ignore[operator]

    with pytest.raises(TypeError, match="unsupported operand"):
        Ellipsis + d  # type: ignore[operator]


def test_subtraction():
    d = Duration(hours=1, minutes=2, seconds=3)
    assert d - Duration() == d
    assert d - hours(1) == Duration(minutes=2, seconds=3)
    assert d - minutes(-1) == Duration(hours=1, minutes=3, seconds=3)
    assert Duration.ZERO - d == -d

    with pytest.raises(ValueError, match="range"):
        Duration.MIN - nanoseconds(1)

    with pytest.raises(TypeError, match="unsupported operand"):
        d - Ellipsis  # type: ignore[operator]


def test_negate():
    assert -Duration.ZERO == Duration.ZERO
    assert -hours(1) == hours(-1)
    assert -(-hours(1)) == hours(1)
    assert +hours(1) == hours(1)


def test_multiply():
    d = Duration(hours=1, minutes=2, seconds=3, microseconds=4)
    assert d * 2 == Duration(hours=2, minutes=4, seconds=6, microseconds=8)
    assert d * 2 == 2 * d
    assert d * 0 == Duration.ZERO
    assert d * -1 == -d

    with pytest.raises(ValueError, match="range"):
        d * 1_000_000_000

    with pytest.raises(TypeError, match="unsupported operand"):
        d * 1.5  # type: ignore[operator]

    with pytest.raises(TypeError, match="unsupported operand"):
        Ellipsis * d  # type: ignore[operator]


class TestDivision:

    @pytest.mark.parametrize(
        "ns, divisor, expected",
        [
            (7, 2, 3),
            (-7, 2, -3),
            (7, -2, -3),
            (-7, -2, 3),
            (6, 3, 2),
            (1, 2, 0),
            (-1, 2, 0),
        ],
    )
    def test_truncates_toward_zero(self, ns, divisor, expected):
        assert nanoseconds(ns) / divisor == nanoseconds(expected)

    def test_no_float_rounding(self):
        assert Duration.MAX / 1 == Duration.MAX
        assert Duration.MAX / 3 == nanoseconds(MAX_NANOS // 3)

    def test_by_duration(self):
        assert hours(3) / hours(2) == 1.5
        assert hours(-1) / minutes(30) == -2.0

    def test_by_zero(self):
        with pytest.raises(ZeroDivisionError):
            hours(1) / 0
        with pytest.raises(ZeroDivisionError):
            hours(1) / Duration.ZERO

    def test_invalid(self):
        with pytest.raises(TypeError, match="unsupported operand"):
            hours(1) / 1.5  # type: ignore[operator]
        with pytest.raises(TypeError, match="unsupported operand"):
            1 / hours(1)  # type: ignore[operator]


def test_abs():
    assert abs(Duration()) == Duration()
    assert abs(Duration(hours=-1, minutes=-2)) == Duration(hours=1, minutes=2)
    assert abs(hours(1)) == hours(1)


@pytest.mark.parametrize(
    "d, expected",
    [
        (Duration(), "Duration(00:00:00)"),
        (Duration(hours=1, minutes=30), "Duration(01:30:00)"),
        (
            Duration(hours=-1, minutes=-2, seconds=-3, milliseconds=-500),
            "Duration(-01:02:03.5)",
        ),
        (days(2), "Duration(48:00:00)"),
        (nanoseconds(1), "Duration(00:00:00.000000001)"),
    ],
)
def test_repr(d, expected):
    assert repr(d) == expected


def test_copy():
    d = Duration(hours=1, minutes=2)
    assert copy(d) is d
    assert deepcopy(d) is d


def test_pickling():
    d = Duration(hours=1, minutes=2, seconds=3, microseconds=4)
    assert pickle.loads(pickle.dumps(d)) == d
    assert pickle.loads(pickle.dumps(Duration.MAX)) == Duration.MAX
    assert pickle.loads(pickle.dumps(Duration.MIN)) == Duration.MIN


def test_cannot_subclass():
    with pytest.raises(TypeError):

        class Subclass(Duration):  # type: ignore[misc]
            pass
