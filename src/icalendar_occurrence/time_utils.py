#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""A light wrapper around `datetime` and `dateutil`, containing the calendar
arithmetic needed to step through a recurring series."""

import datetime
from collections.abc import Callable

from dateutil.relativedelta import relativedelta

from icalendar_occurrence.exceptions import UnsupportedRuleShape
from icalendar_occurrence.rrule import Frequency, Weekday

TimeGetter = Callable[[], datetime.datetime]

_SHIFT_UNITS = {
    Frequency.SECONDLY: "seconds",
    Frequency.MINUTELY: "minutes",
    Frequency.HOURLY: "hours",
    Frequency.DAILY: "days",
    Frequency.WEEKLY: "weeks",
    Frequency.MONTHLY: "months",
}
_ABSOLUTE_FREQUENCIES = (Frequency.SECONDLY, Frequency.MINUTELY, Frequency.HOURLY)


def utc_now() -> datetime.datetime:
    """Return the current time as a timezone-aware UTC datetime."""
    return datetime.datetime.now(datetime.timezone.utc)


def to_instant(dt: datetime.datetime) -> datetime.datetime:
    """Normalise `dt` to an absolute UTC instant. Naive datetimes are read as UTC."""
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt.replace(tzinfo=datetime.timezone.utc)
    return dt.astimezone(datetime.timezone.utc)


def compare(left: datetime.datetime, right: datetime.datetime) -> int:
    """Compare two datetimes by instant. Returns -1, 0 or 1."""
    left, right = to_instant(left), to_instant(right)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def earliest(*datetimes: datetime.datetime) -> datetime.datetime:
    return min(datetimes, key=to_instant)


def shift_options(frequency: Frequency, interval: int | None = None) -> relativedelta:
    """The step separating two occurrences of a rule with the given
    `frequency` and `interval`.

    Raises
    ------
    UnsupportedRuleShape if `frequency` cannot be stepped through.
    """
    try:
        unit = _SHIFT_UNITS[frequency]
    except KeyError:
        raise UnsupportedRuleShape(
            f"{frequency} frequency not supported yet", field="frequency"
        )
    return relativedelta(**{unit: interval or 1})


def shift(
    dt: datetime.datetime, frequency: Frequency, interval: int | None = None
) -> datetime.datetime:
    """Move `dt` forward by one step of the rule.

    Notes
    -----
    1. Month arithmetic is calendar aware: shifting January 31st by a month
    lands on the last day of February.
    2. Steps shorter than a day are taken in absolute time, so an hourly
    series stays one hour apart across daylight saving changes. Daily and
    longer steps keep the wall-clock time.
    """
    delta = shift_options(frequency, interval)
    if frequency in _ABSOLUTE_FREQUENCIES and dt.tzinfo is not None:
        return (to_instant(dt) + delta).astimezone(dt.tzinfo)
    return dt + delta


def next_occurrence_of(weekday: Weekday, date: datetime.date) -> datetime.date:
    """Return the first date on or after `date` falling on `weekday`."""
    while Weekday.from_date(date) != weekday:
        date += datetime.timedelta(days=1)
    return date


def move_to_date(dt: datetime.datetime, date: datetime.date) -> datetime.datetime:
    """Return `dt` with its calendar date replaced, keeping the time of day
    and timezone."""
    return dt.replace(year=date.year, month=date.month, day=date.day)
