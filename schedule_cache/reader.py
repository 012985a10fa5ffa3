"""Read-only queries over the schedule cache written by the app shell."""

import logging
from datetime import date, timedelta
from typing import Optional

from .dates import date_text, monday_based_weekday, parse_int, week_label
from .models import CourseItem, Event, Header, ScheduleDocument
from .palette import pick_color
from .parser import load_schedule_document
from .store import KeyValueStore

logger = logging.getLogger(__name__)

DEFAULT_COURSE_NAME = "课程"
BLANK_FIELD = " "


def course_time_text(event: Event) -> str:
    """Render the period range of an event, e.g. "第3-4节"."""
    end = event.session_end
    if end is not None:
        return f"第{event.session_start}-{end}节"

    if event.session_list:
        periods = [p for p in (parse_int(s) for s in event.session_list) if p and p > 0]
        return f"第{','.join(str(p) for p in periods)}节"
    return ""


def format_time_range(event: Event) -> str:
    """Render the displayed time range of an event.

    Uses the first and last ``session_list`` labels (e.g. "08:00-09:40")
    and falls back to the start and end periods.
    """
    if event.session_list:
        first = event.session_list[0].strip()
        last = event.session_list[-1].strip()
        if first and last:
            return f"{first}-{last}"

    end = event.session_end
    if end is not None:
        return f"{event.session_start}-{end}"
    if event.session_start is not None:
        return str(event.session_start)
    return ""


def courses_for_weekday(document: ScheduleDocument, week_day: str) -> list[CourseItem]:
    """Build the course rows of ``document`` held on ``week_day``.

    Args:
        document: Parsed schedule document.
        week_day: Monday-based weekday string, "1".."7".

    Returns:
        Course items sorted by their rendered time string.
    """
    items: list[CourseItem] = []

    for event in document.event_list:
        if event.week_day != week_day:
            continue

        name = event.event_name if event.event_name.strip() else DEFAULT_COURSE_NAME
        items.append(
            CourseItem(
                name=name,
                location=event.address if event.address.strip() else BLANK_FIELD,
                teacher=event.member_name if event.member_name.strip() else BLANK_FIELD,
                time=course_time_text(event),
                indicator_color=pick_color(name),
                event_id=event.event_id,
            )
        )

    items.sort(key=lambda item: item.time)
    return items


def today_events(document: ScheduleDocument, today: date) -> list[Event]:
    """Return the raw events held on the calendar weekday of ``today``."""
    week_day = str(monday_based_weekday(today))

    def sort_key(event: Event) -> str:
        if event.session_list:
            return event.session_list[0].strip()
        if event.session_start is not None:
            return str(event.session_start)
        return ""

    return sorted(
        (e for e in document.event_list if e.week_day == week_day),
        key=sort_key,
    )


class ScheduleCacheReader:
    """Stateless query layer over the schedule cache.

    Every query re-reads the store; the store itself is the cache. No
    query raises: missing keys, missing documents and unparsable JSON all
    collapse to an absent document or an empty result.
    """

    KEY_PREFIX = "flutter."
    SCHEDULE_NAME = "课表"

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize the reader.

        Args:
            store: Preferences store written by the application shell.
        """
        self._store = store

    def _get(self, raw_key: str) -> Optional[str]:
        value = self._store.get_string(self.KEY_PREFIX + raw_key)
        if value is None or not value.strip():
            return None
        return value

    @staticmethod
    def _today(now: Optional[date]) -> date:
        return now if now is not None else date.today()

    def resolve_user(self) -> Optional[str]:
        """Return the logged-in user id, or None when logged out."""
        return self._get("account")

    def _pointers(self, user: str) -> Optional[tuple[str, str]]:
        term = self._get(f"schedule_last_term_{user}")
        week = self._get(f"schedule_last_week_{user}")
        if term is None or week is None:
            return None
        return term, week

    def _load(self, user: str, term: str, week: str) -> Optional[ScheduleDocument]:
        return load_schedule_document(self._get(f"schedule_{user}_{term}_{week}"))

    def load_latest_document(self, user: Optional[str] = None) -> Optional[ScheduleDocument]:
        """Load the document of the last viewed term and week.

        Args:
            user: User id; resolved from the store when omitted.

        Returns:
            The parsed document or None.
        """
        if user is None:
            user = self.resolve_user()
            if user is None:
                return None

        pointers = self._pointers(user)
        if pointers is None:
            return None
        return self._load(user, *pointers)

    def load_week_document(self, week_offset: int, user: Optional[str] = None) -> Optional[ScheduleDocument]:
        """Load the document ``week_offset`` weeks after the last viewed one."""
        if user is None:
            user = self.resolve_user()
            if user is None:
                return None

        pointers = self._pointers(user)
        if pointers is None:
            return None
        term, week = pointers
        week_index = parse_int(week)
        if week_index is None:
            return None
        return self._load(user, term, str(week_index + week_offset))

    def load_header(self, now: Optional[date] = None) -> Header:
        """Return today's header, preferring the cached today entry when fresh."""
        today = self._today(now)
        today_text = date_text(today)
        header_date = today_text
        header_week = week_label(monday_based_weekday(today))

        document = self.load_latest_document()
        entry = document.today_entry(today_text) if document else None
        if entry is not None:
            header_date = entry.week_date
            # A blank weekDay keeps the calendar label.
            if entry.week_day.strip():
                header_week = week_label(parse_int(entry.week_day) or 1)

        return Header(
            schedule_name=self.SCHEDULE_NAME,
            date_text=header_date,
            week_text=header_week,
        )

    def load_header_by_day_offset(self, now: Optional[date] = None, offset: int = 0) -> Header:
        """Return the calendar header for the day ``offset`` days from today."""
        target = self._today(now) + timedelta(days=offset)
        return Header(
            schedule_name=self.SCHEDULE_NAME,
            date_text=date_text(target),
            week_text=week_label(monday_based_weekday(target)),
        )

    def load_week_count_text(self, now: Optional[date] = None) -> str:
        """Return "第N周" when the cached week is the live week, else ""."""
        document = self.load_latest_document()
        if document is None or not document.contains_date(date_text(self._today(now))):
            return ""
        if not document.week_number.strip():
            return ""
        return f"第{document.week_number}周"

    @staticmethod
    def load_courses_for_weekday(document: ScheduleDocument, week_day: str) -> list[CourseItem]:
        return courses_for_weekday(document, week_day)

    def load_courses_by_day_offset(self, now: Optional[date] = None, offset: int = 0) -> list[CourseItem]:
        """Return the courses ``offset`` days from today.

        Offsets that leave the cached week switch to the next or previous
        week's document; when that document is not cached the wrapped
        weekday is looked up in the current one.
        """
        today = self._today(now)
        today_text = date_text(today)

        document = self.load_latest_document()
        if document is None or not document.contains_date(today_text):
            return []

        entry = document.today_entry(today_text)
        base = parse_int(entry.week_day) if entry is not None else None
        if base is None:
            base = monday_based_weekday(today)

        raw_target = base + offset
        target = raw_target
        target_document = document

        if raw_target > 7 and offset > 0:
            target = raw_target - 7
            target_document = self._adjacent_or(document, 1)
        elif raw_target < 1 and offset < 0:
            target = raw_target + 7
            target_document = self._adjacent_or(document, -1)

        target = min(max(target, 1), 7)
        return courses_for_weekday(target_document, str(target))

    def _adjacent_or(self, document: ScheduleDocument, week_offset: int) -> ScheduleDocument:
        adjacent = self.load_week_document(week_offset)
        if adjacent is None:
            logger.debug("No cached document %+d week(s) away, using the current week", week_offset)
            return document
        return adjacent

    def load_today_courses(self, now: Optional[date] = None) -> list[CourseItem]:
        """Return today's courses without requiring the cached week to be live."""
        today = self._today(now)
        document = self.load_latest_document()
        if document is None:
            return []

        entry = document.today_entry(date_text(today))
        if entry is not None and entry.week_day.strip():
            week_day = entry.week_day
        else:
            week_day = str(monday_based_weekday(today))
        return courses_for_weekday(document, week_day)
