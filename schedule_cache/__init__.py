"""Schedule cache module for reading the timetable cached by the app shell."""

from .models import CourseItem, Event, Header, ParseFailure, ScheduleDocument, WeekDayEntry
from .parser import parse_schedule_document
from .reader import ScheduleCacheReader, courses_for_weekday, format_time_range, today_events
from .store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "CourseItem",
    "Event",
    "Header",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "ParseFailure",
    "ScheduleCacheReader",
    "ScheduleDocument",
    "WeekDayEntry",
    "courses_for_weekday",
    "format_time_range",
    "parse_schedule_document",
    "today_events",
]
