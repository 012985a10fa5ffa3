"""Parser for schedule documents cached as JSON strings."""

import json
import logging
from typing import Any, Optional, Union

from .models import Event, ParseFailure, ScheduleDocument, WeekDayEntry

logger = logging.getLogger(__name__)


def _opt_string(value: Any) -> str:
    """Coerce a JSON scalar to a string; null, objects and arrays become empty."""
    if value is None or isinstance(value, (dict, list)):
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _opt_int(value: Any) -> Optional[int]:
    """Coerce a JSON number or numeric string to an int."""
    if isinstance(value, bool) or value is None:
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if isinstance(value, float):
        try:
            return int(value)
        except (OverflowError, ValueError):  # inf, nan
            return None
    return None


def _opt_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return False


def _string_list(value: Any) -> list[str]:
    if not isinstance(value, list):
        return []
    items = [_opt_string(item) for item in value]
    return [item for item in items if item]


def _parse_week_day(obj: dict[str, Any]) -> WeekDayEntry:
    return WeekDayEntry(
        week_day=_opt_string(obj.get("weekDay")),
        week_date=_opt_string(obj.get("weekDate")),
        is_today=_opt_bool(obj.get("today")),
    )


def _parse_event(obj: dict[str, Any]) -> Event:
    event_id = _opt_string(obj.get("eventID", obj.get("eventId"))).strip()
    return Event(
        week_day=_opt_string(obj.get("weekDay")),
        session_start=_opt_int(obj.get("sessionStart")),
        session_last=_opt_int(obj.get("sessionLast")),
        session_list=_string_list(obj.get("sessionList")),
        event_name=_opt_string(obj.get("eventName")),
        address=_opt_string(obj.get("address")),
        member_name=_opt_string(obj.get("memberName")),
        event_id=event_id or None,
        week_num=_opt_string(obj.get("weekNum")),
    )


def parse_schedule_document(raw: str) -> Union[ScheduleDocument, ParseFailure]:
    """Parse a cached schedule JSON string.

    Args:
        raw: JSON text as stored by the application shell.

    Returns:
        The parsed document, or a ParseFailure describing why the text
        could not be used. Entries of ``weekDayList`` and ``eventList``
        that are not objects are skipped.
    """
    try:
        obj = json.loads(raw)
    except (TypeError, ValueError, RecursionError) as e:
        return ParseFailure(f"Invalid JSON: {e}")

    if not isinstance(obj, dict):
        return ParseFailure(f"Expected a JSON object, got {type(obj).__name__}")

    week_days = obj.get("weekDayList")
    events = obj.get("eventList")

    return ScheduleDocument(
        week_number=_opt_string(obj.get("weekNum")),
        year_term=_opt_string(obj.get("yearTerm")),
        week_list=_string_list(obj.get("weekList")),
        week_day_list=[
            _parse_week_day(item)
            for item in (week_days if isinstance(week_days, list) else [])
            if isinstance(item, dict)
        ],
        event_list=[
            _parse_event(item)
            for item in (events if isinstance(events, list) else [])
            if isinstance(item, dict)
        ],
    )


def load_schedule_document(raw: Optional[str]) -> Optional[ScheduleDocument]:
    """Parse ``raw`` and collapse every failure to None."""
    if raw is None:
        return None
    result = parse_schedule_document(raw)
    if isinstance(result, ParseFailure):
        logger.warning("Ignoring cached schedule: %s", result.reason)
        return None
    return result
