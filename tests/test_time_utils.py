#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime
from zoneinfo import ZoneInfo

import pytest

from icalendar_occurrence.exceptions import UnsupportedRuleShape
from icalendar_occurrence.rrule import Frequency, Weekday
from icalendar_occurrence.time_utils import (
    compare,
    earliest,
    move_to_date,
    next_occurrence_of,
    shift,
    to_instant,
    utc_now,
)
from tests.occurrence_utils import utc


@pytest.mark.parametrize(
    "frequency, expected",
    [
        (Frequency.SECONDLY, utc(2016, 1, 31, 10, 0, 3)),
        (Frequency.MINUTELY, utc(2016, 1, 31, 10, 3)),
        (Frequency.HOURLY, utc(2016, 1, 31, 13)),
        (Frequency.DAILY, utc(2016, 2, 3, 10)),
        (Frequency.WEEKLY, utc(2016, 2, 21, 10)),
        (Frequency.MONTHLY, utc(2016, 4, 30, 10)),
    ],
)
def test_shift(frequency: Frequency, expected: datetime.datetime):
    assert shift(utc(2016, 1, 31, 10), frequency, 3) == expected


def test_shift_defaults_to_one_step():
    assert shift(utc(2016, 1, 31, 10), Frequency.MONTHLY) == utc(2016, 2, 29, 10)


def test_shift_yearly_unsupported():
    with pytest.raises(UnsupportedRuleShape):
        shift(utc(2016, 1, 31, 10), Frequency.YEARLY)


def test_next_occurrence_of():
    monday = datetime.date(2016, 6, 6)

    assert next_occurrence_of(Weekday.MONDAY, monday) == monday
    assert next_occurrence_of(Weekday.THURSDAY, monday) == datetime.date(2016, 6, 9)
    assert next_occurrence_of(Weekday.SUNDAY, monday) == datetime.date(2016, 6, 12)
    assert next_occurrence_of(Weekday.MONDAY, datetime.date(2016, 6, 7)) == (
        datetime.date(2016, 6, 13)
    )


def test_move_to_date():
    tz = datetime.timezone(datetime.timedelta(hours=-5))
    dt = datetime.datetime(2016, 6, 6, 6, 6, 6, tzinfo=tz)

    assert move_to_date(dt, datetime.date(2016, 7, 1)) == datetime.datetime(
        2016, 7, 1, 6, 6, 6, tzinfo=tz
    )


def test_to_instant():
    naive = datetime.datetime(2016, 6, 6, 6)
    plus_two = datetime.timezone(datetime.timedelta(hours=2))

    assert to_instant(naive) == utc(2016, 6, 6, 6)
    assert to_instant(naive).tzinfo == datetime.timezone.utc
    assert to_instant(datetime.datetime(2016, 6, 6, 8, tzinfo=plus_two)) == utc(
        2016, 6, 6, 6
    )


def test_compare_mixes_naive_and_aware():
    assert compare(datetime.datetime(2016, 6, 6, 6), utc(2016, 6, 6, 6)) == 0
    assert compare(utc(2016, 6, 6, 5), datetime.datetime(2016, 6, 6, 6)) == -1
    assert compare(utc(2016, 6, 6, 7), utc(2016, 6, 6, 6)) == 1


def test_earliest():
    assert earliest(utc(2016, 6, 7), datetime.datetime(2016, 6, 6)) == (
        datetime.datetime(2016, 6, 6)
    )


def test_utc_now_is_aware():
    assert utc_now().tzinfo == datetime.timezone.utc


def test_sub_daily_shift_is_absolute_across_fall_back():
    new_york = ZoneInfo("America/New_York")
    first_one_thirty = datetime.datetime(2016, 11, 6, 1, 30, tzinfo=new_york)

    shifted = shift(first_one_thirty, Frequency.HOURLY)

    assert to_instant(shifted) == utc(2016, 11, 6, 6, 30)
    assert shifted.utcoffset() == datetime.timedelta(hours=-5)


def test_daily_shift_keeps_wall_clock_across_fall_back():
    new_york = ZoneInfo("America/New_York")
    shifted = shift(datetime.datetime(2016, 11, 5, 9, tzinfo=new_york), Frequency.DAILY)

    assert shifted == datetime.datetime(2016, 11, 6, 9, tzinfo=new_york)
    assert to_instant(shifted) == utc(2016, 11, 6, 14)
