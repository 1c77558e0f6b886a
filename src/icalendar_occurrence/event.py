#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""A calendar event, possibly recurring."""

import datetime
from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from icalendar_occurrence.rrule import RRULE
from icalendar_occurrence.time_utils import compare, shift


class Event(BaseModel):
    """A calendar event.

    Parameters
    ----------
    start
        When the event starts. Also accepted as `dtstart`.
    end
        When the event finishes, if known. Also accepted as `dtend`.
    rule
        The recurrence rule of the event. Also accepted as `rrule`. Events
        without a rule occur once.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    start: datetime.datetime = Field(alias="dtstart")
    end: datetime.datetime | None = Field(default=None, alias="dtend")
    rule: RRULE | None = Field(default=None, alias="rrule")

    @model_validator(mode="after")
    def ends_after_start(self) -> Self:
        if self.end is not None and compare(self.end, self.start) < 0:
            raise ValueError("An event cannot end before it starts.")
        return self

    @property
    def duration(self) -> datetime.timedelta | None:
        if self.end is None:
            return None
        return self.end - self.start

    def with_rule(self, rule: RRULE | None) -> Self:
        return self.model_copy(update={"rule": rule})

    def moved_to(self, start: datetime.datetime) -> Self:
        """Return a copy starting at `start`, with the same duration."""
        duration = self.duration
        end = None if duration is None else start + duration
        return self.model_copy(update={"start": start, "end": end})

    def shifted(self) -> Self:
        """Return the next instance of the series, one rule step later.

        Only the start follows the calendar (eg month lengths); the end is
        placed so that the duration is unchanged.
        """
        assert self.rule is not None
        frequency, interval = self.rule.frequency, self.rule.interval
        return self.moved_to(shift(self.start, frequency, interval))

    def __str__(self) -> str:
        start_str = self.start.strftime("%Y-%m-%d %H:%M:%S")
        end_str = self.end.strftime("%Y-%m-%d %H:%M:%S") if self.end else "N/A"
        display = f"Event starting at: {start_str}, ending at {end_str}"
        if self.rule is not None:
            display += f" (repeats: {self.rule})"
        return display
