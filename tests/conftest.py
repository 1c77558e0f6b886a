#
# For licensing see accompanying LICENSE file.
# Copyright © 2025 Apple Inc. All Rights Reserved.
#
import datetime

import pytest

from icalendar_occurrence.event import Event
from icalendar_occurrence.occurrence import OccurrenceExpander
from tests.occurrence_utils import NOW, utc


@pytest.fixture
def expander() -> OccurrenceExpander:
    return OccurrenceExpander(time_getter=lambda: NOW)


@pytest.fixture
def event() -> Event:
    start = utc(2016, 6, 6, 6, 6, 6)  # Monday
    return Event(start=start, end=start + datetime.timedelta(hours=1))
