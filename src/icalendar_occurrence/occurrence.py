#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
"""Expand recurring calendar events into the concrete occurrences they represent.

A rule constrained by several weekdays or days of the month is expanded by
splitting it into one simpler series per constrained value. For example, a
WEEKLY rule with `by_day=[MONDAY, FRIDAY]` becomes a series recurring every
Monday and a series recurring every Friday. The two series are expanded
separately, merged and sorted by start time.

Notes
-----
1. When such a rule is bounded by `count`, each simpler series is given
`count / number_of_values - 1` occurrences. This is a rough estimate chosen
to produce at least as many occurrences as needed; the merged result is cut
down to exactly `count` from its latest end.
"""

import datetime
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from icalendar_occurrence.event import Event
from icalendar_occurrence.exceptions import InvalidBound, UnsupportedRuleShape
from icalendar_occurrence.rrule import RRULE, Frequency, Weekday
from icalendar_occurrence.time_utils import (
    TimeGetter,
    compare,
    earliest,
    move_to_date,
    next_occurrence_of,
    to_instant,
    utc_now,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class NoRule:
    pass


@dataclass(frozen=True)
class CountBounded:
    count: int | float


@dataclass(frozen=True)
class UntilBounded:
    until: datetime.datetime


Bound = NoRule | CountBounded | UntilBounded


def resolve_bound(event: Event, horizon: datetime.datetime | None) -> Bound:
    """Decide how the series started by `event` ends.

    Rules with neither `count` nor `until` run up to `horizon`.

    Raises
    ------
    InvalidBound if the rule is open-ended and no `horizon` is given.
    """
    match event.rule:
        case None:
            return NoRule()
        case RRULE(count=count) if count is not None:
            return CountBounded(count)
        case RRULE(until=until) if until is not None:
            return UntilBounded(until)
    if horizon is None:
        raise InvalidBound(
            f"Cannot expand open-ended rule {event.rule} without a horizon."
        )
    return UntilBounded(horizon)


def _rebase(event: Event, **bound) -> Event:
    return event.with_rule(event.rule.model_copy(update=bound))


def expand_until(
    event: Event,
    until: datetime.datetime | None,
    horizon: datetime.datetime | None = None,
) -> list[Event]:
    """Step through the series started by `event` up to `until` or `horizon`,
    whichever comes first.

    Returns
    -------
    The shifted instances, in order. `event` itself is not included. An
    instance starting exactly at the bound is the last one returned.
    """
    bounds = [b for b in (until, horizon) if b is not None]
    if not bounds:
        raise InvalidBound("Either `until` or `horizon` is required.")
    bound = earliest(*bounds)

    instances = []
    current = event
    while True:
        current = _rebase(current.shifted(), until=bound)
        match compare(current.start, bound):
            case -1:
                instances.append(current)
            case 0:
                instances.append(current)
                break
            case _:
                break
    return instances


def expand_count(
    event: Event,
    count: int | float,
    horizon: datetime.datetime | None = None,
) -> list[Event]:
    """Step through the series started by `event`, producing one instance for
    each unit of `count`.

    Every instance carries the count still remaining at its position. Stepping
    stops early once an instance starts after `horizon`; that instance is
    still returned.

    Notes
    -----
    1. `event` is not included but is not subtracted from `count` either, so
    at least one instance is always returned. Callers wanting exactly `count`
    occurrences including `event` drop the last one.
    """
    instances = []
    current, remaining = event, count
    while True:
        current = _rebase(current.shifted(), count=remaining)
        instances.append(current)
        if remaining <= 1:
            break
        if horizon is not None and compare(current.start, horizon) > 0:
            break
        remaining -= 1
    return instances


def is_compound(rule: RRULE) -> bool:
    """Whether any `by_*` constraint of `rule` holds a value."""
    return bool(rule.constrained_fields())


def simplify(rule: RRULE, remove_field: str, values: Sequence) -> RRULE:
    """Derive a rule without the `remove_field` constraint, sharing `count`
    evenly between the `values` series."""
    update = {remove_field: []}
    if rule.count is not None:
        update["count"] = rule.count / len(values) - 1
        logger.debug(
            f"Rescaled count {rule.count} to {update['count']} "
            f"across {len(values)} series"
        )
    return rule.model_copy(update=update)


def simplify_to_base_events(event: Event) -> list[Event]:
    """Split an event with a compound rule into events with simple rules.

    If the event does not itself fall on one of the constrained values, it is
    kept as an extra, non-recurring occurrence.

    Raises
    ------
    UnsupportedRuleShape if the rule has negative `by_month_day` values or
    combines constraints in a way that cannot be split.
    """
    rule = event.rule
    if any(day < 0 for day in rule.by_month_day):
        logger.warning(f"Rejecting rule {rule}: negative day of the month")
        raise UnsupportedRuleShape(
            "negative values for by_month_day not supported yet",
            field="by_month_day",
        )
    fields = rule.constrained_fields()
    match rule.frequency, fields:
        case Frequency.MONTHLY, ["by_month_day"]:
            events = _events_for_month_days(event)
        case Frequency.WEEKLY, ["by_day"]:
            events = _events_for_weekdays(event)
        case _:
            logger.warning(f"Rejecting rule {rule}: unsupported constraints {fields}")
            raise UnsupportedRuleShape(
                f"{rule} complex rule pattern not supported yet",
                field=",".join(fields),
            )
    logger.debug(f"Split {event} into {len(events)} base events")
    return events


def _events_for_month_days(event: Event) -> list[Event]:
    days = event.rule.by_month_day
    rule = simplify(event.rule, "by_month_day", days)
    events = []
    if event.start.day not in days:
        events.append(event.with_rule(None))
    for day in days:
        try:
            start = event.start.replace(day=day)
        except ValueError:
            raise UnsupportedRuleShape(
                f"Day {day} does not exist in {event.start:%B %Y}",
                field="by_month_day",
            )
        events.append(event.moved_to(start).with_rule(rule))
    return events


def _events_for_weekdays(event: Event) -> list[Event]:
    days = event.rule.by_day
    rule = simplify(event.rule, "by_day", days)
    anchor_day = Weekday.from_date(event.start.date())
    events = []
    if anchor_day not in days:
        events.append(event.with_rule(None))
    for day in days:
        if day == anchor_day:
            events.append(event.with_rule(rule))
            continue
        next_date = next_occurrence_of(day, event.start.date())
        start = move_to_date(event.start, next_date)
        events.append(event.moved_to(start).with_rule(rule))
    return events


def _bounded_and_sorted(
    events: list[Event], horizon: datetime.datetime
) -> list[Event]:
    events = [e for e in events if compare(e.start, horizon) <= 0]
    return sorted(events, key=lambda e: to_instant(e.start))


class OccurrenceExpander:
    """Expands events into occurrences up to a horizon.

    Parameters
    ----------
    time_getter
        Returns the current time, used as horizon when none is given.
        Defaults to the UTC wall clock.
    """

    def __init__(self, time_getter: TimeGetter | None = None) -> None:
        self._time_getter: TimeGetter = (
            utc_now if time_getter is None else time_getter
        )

    def now(self) -> datetime.datetime:
        return self._time_getter()

    def occurrences(
        self,
        events: Event | Sequence[Event],
        horizon: datetime.datetime | None = None,
    ) -> list[Event]:
        """Return the occurrences of `events` starting at or before `horizon`,
        sorted by start time.

        Parameters
        ----------
        events
            A single event or a list of events. The events themselves are
            always part of the result, subject to `horizon`.
        horizon
            Occurrences starting after this are dropped. Defaults to now.

        Notes
        -----
        1. A single event without a rule is returned as is when no `horizon`
        is given, whether or not it is in the future.
        2. For rules bounded by `count`, at most `count` occurrences are
        returned for each event, the event itself included.

        Raises
        ------
        UnsupportedRuleShape if the rule of any event cannot be expanded.
        """
        if isinstance(events, Event):
            if events.rule is None and horizon is None:
                return [events]
            events = [events]
        if horizon is None:
            horizon = self.now()
            logger.debug(f"No horizon given, expanding up to {horizon}")
        occurrences = []
        for event in events:
            occurrences.extend(self._occurrences_of(event, horizon))
        return _bounded_and_sorted(occurrences, horizon)

    def _occurrences_of(self, event: Event, horizon: datetime.datetime) -> list[Event]:
        bound = resolve_bound(event, horizon)
        if isinstance(bound, NoRule):
            return [event]
        if is_compound(event.rule):
            base_events = simplify_to_base_events(event)
        else:
            base_events = [event]
        occurrences = self._merge(base_events, horizon)
        if isinstance(bound, CountBounded):
            # the anchor counts towards `count`, so the chains overshoot
            return occurrences[: int(bound.count)]
        return occurrences

    def _merge(self, events: list[Event], horizon: datetime.datetime) -> list[Event]:
        """Expand simple-rule events and merge them with their instances."""
        occurrences = list(events)
        for event in events:
            match resolve_bound(event, horizon):
                case NoRule():
                    continue
                case CountBounded(count=count):
                    occurrences.extend(expand_count(event, count, horizon))
                case UntilBounded(until=until):
                    occurrences.extend(expand_until(event, until, horizon))
        return _bounded_and_sorted(occurrences, horizon)


_default_expander = OccurrenceExpander()


def occurrences(
    events: Event | Sequence[Event], horizon: datetime.datetime | None = None
) -> list[Event]:
    """Expand `events` into their occurrences up to `horizon` (default: now).

    See `OccurrenceExpander.occurrences`.
    """
    return _default_expander.occurrences(events, horizon)
