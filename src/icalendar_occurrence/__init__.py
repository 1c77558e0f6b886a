#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
from importlib.metadata import PackageNotFoundError, version  # pragma: no cover

from icalendar_occurrence.event import Event
from icalendar_occurrence.exceptions import (
    InvalidBound,
    OccurrenceError,
    UnsupportedRuleShape,
)
from icalendar_occurrence.occurrence import OccurrenceExpander, occurrences
from icalendar_occurrence.rrule import RRULE, Frequency, Weekday

try:
    # Change here if project is renamed and does not equal the package name
    dist_name = "icalendar-occurrence"
    __version__ = version(dist_name)
except PackageNotFoundError:  # pragma: no cover
    __version__ = "unknown"
finally:
    del version, PackageNotFoundError

__all__ = [
    "Event",
    "Frequency",
    "InvalidBound",
    "OccurrenceError",
    "OccurrenceExpander",
    "RRULE",
    "UnsupportedRuleShape",
    "Weekday",
    "occurrences",
]
