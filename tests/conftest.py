import json
from datetime import date, timedelta

import pytest

from schedule_cache import MemoryStore, ScheduleCacheReader
from widget import DayOffsetState, WidgetEnvironment

MONDAY = date(2024, 10, 14)
WEDNESDAY = date(2024, 10, 16)
SUNDAY = date(2024, 10, 20)


def build_week_days(monday, today=None):
    """Seven weekDayList entries starting at ``monday``."""
    days = []
    for i in range(7):
        day = monday + timedelta(days=i)
        days.append({
            "weekDay": str(i + 1),
            "weekDate": f"{day.month}.{day.day}",
            "today": day == today,
        })
    return days


def build_document(week_num="5", monday=MONDAY, today=None, events=()):
    return {
        "weekNum": week_num,
        "yearTerm": "2024-1",
        "weekDayList": build_week_days(monday, today),
        "eventList": list(events),
    }


@pytest.fixture
def store():
    return MemoryStore()


@pytest.fixture
def reader(store):
    return ScheduleCacheReader(store)


@pytest.fixture
def week_days():
    return build_week_days


@pytest.fixture
def document():
    return build_document


@pytest.fixture
def put_schedule(store):
    """Write a cached document and point the current user at it."""

    def _put(document, user="u1", term="2024-1", week="5", pointers=True):
        raw = document if isinstance(document, str) else json.dumps(document, ensure_ascii=False)
        store.set_string(f"flutter.schedule_{user}_{term}_{week}", raw)
        if pointers:
            store.set_string("flutter.account", user)
            store.set_string(f"flutter.schedule_last_term_{user}", term)
            store.set_string(f"flutter.schedule_last_week_{user}", week)

    return _put


@pytest.fixture
def env(store, reader):
    return WidgetEnvironment(
        reader=reader,
        prefs=store,
        offsets=DayOffsetState(MemoryStore()),
    )
