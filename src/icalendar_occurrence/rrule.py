#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""The recurrence rule attached to a calendar event, as produced by an
iCalendar parser."""

import datetime
from enum import StrEnum, auto
from typing import Any, Self

from pydantic import BaseModel, field_validator, model_validator

EXPANDABLE_BY_FIELDS = ("by_day", "by_month_day")
UNSUPPORTED_BY_FIELDS = (
    "by_month",
    "by_year_day",
    "by_week_number",
    "by_hour",
    "by_minute",
    "by_second",
    "by_set_pos",
)


class Frequency(StrEnum):
    SECONDLY = auto()
    MINUTELY = auto()
    HOURLY = auto()
    DAILY = auto()
    WEEKLY = auto()
    MONTHLY = auto()
    YEARLY = auto()


class Weekday(StrEnum):
    """Days of the week, ordered so that `list(Weekday).index(day)` matches
    `datetime.date.weekday()`."""

    MONDAY = auto()
    TUESDAY = auto()
    WEDNESDAY = auto()
    THURSDAY = auto()
    FRIDAY = auto()
    SATURDAY = auto()
    SUNDAY = auto()

    @classmethod
    def from_date(cls, date: datetime.date) -> Self:
        return list(cls)[date.weekday()]

    @property
    def ordinal(self) -> int:
        """Index in the range [0, 6], Monday being 0."""
        return list(Weekday).index(self)


class RRULE(BaseModel, frozen=True):
    """A recurrence rule.

    Parameters
    ----------
    frequency
        The unit of time by which the series advances.
    interval
        How many `frequency` units separate two occurrences. For example, a
        WEEKLY rule with an interval of 2 recurs every other week.
    count
        Total number of occurrences in the series, the first event included.
        Must not be set if `until` is set.
    until
        The last occurrence is the greatest start time that is less than or
        equal to `until`.
    by_day
        Days of the week on which a WEEKLY series occurs.
    by_month_day
        Days of the month (1-indexed) on which a MONTHLY series occurs.

    Notes
    -----
    1. The remaining `by_*` fields and `week_start` are accepted so that parsed
    rules round trip, but the expander rejects rules that set them.
    2. Rules derived during expansion are built with `model_copy` and are not
    re-validated, so their `count` may be fractional or smaller than one.
    """

    frequency: Frequency
    interval: int = 1
    count: int | float | None = None
    until: datetime.datetime | None = None
    by_day: list[Weekday] = []
    by_month_day: list[int] = []
    by_month: list[int] = []
    by_year_day: list[int] = []
    by_week_number: list[int] = []
    by_hour: list[int] = []
    by_minute: list[int] = []
    by_second: list[int] = []
    by_set_pos: list[int] = []
    week_start: Weekday | None = None

    @field_validator("interval", mode="before")
    @classmethod
    def default_interval(cls, interval: Any) -> Any:
        if interval is None:
            return 1
        return interval

    @field_validator("interval")
    @classmethod
    def positive_interval(cls, interval: int) -> int:
        if interval < 1:
            raise ValueError("The interval of a recurrence rule must be positive.")
        return interval

    @field_validator("count")
    @classmethod
    def positive_count(cls, count: int | float | None) -> int | float | None:
        if count is not None and count <= 0:
            raise ValueError("The count of a recurrence rule must be positive.")
        return count

    @field_validator(*EXPANDABLE_BY_FIELDS, *UNSUPPORTED_BY_FIELDS, mode="before")
    @classmethod
    def as_ordered_set(cls, values: list[Any] | None) -> list[Any]:
        if values is None:
            return []
        return list(dict.fromkeys(values))

    @model_validator(mode="after")
    def single_bound(self) -> Self:
        if self.count is not None and self.until is not None:
            raise ValueError("Both 'count' and 'until' cannot be set. Choose one.")
        return self

    def constrained_fields(self) -> list[str]:
        """Names of the `by_*` fields holding at least one value."""
        return [
            f
            for f in (*EXPANDABLE_BY_FIELDS, *UNSUPPORTED_BY_FIELDS)
            if getattr(self, f)
        ]

    def __str__(self) -> str:
        parts = [f"FREQ={self.frequency.upper()}"]
        if self.interval != 1:
            parts.append(f"INTERVAL={self.interval}")
        if self.count is not None:
            parts.append(f"COUNT={self.count}")
        if self.until is not None:
            parts.append(f"UNTIL={self.until.strftime('%Y%m%dT%H%M%S')}")
        for f in self.constrained_fields():
            values = ",".join(str(v).upper() for v in getattr(self, f))
            parts.append(f"{f.replace('_', '').upper()}={values}")
        return ";".join(parts)
