"""iCalendar transformer for cached schedule weeks."""

import hashlib
import logging
import re
from datetime import date, datetime, time, timedelta
from typing import Optional
from zoneinfo import ZoneInfo

from icalendar import Calendar, Event

from schedule_cache.dates import parse_int
from schedule_cache.models import Event as ScheduleEvent
from schedule_cache.models import ScheduleDocument
from schedule_cache.reader import DEFAULT_COURSE_NAME, course_time_text
from .base import BaseTransformer

logger = logging.getLogger(__name__)

CLOCK_PATTERN = re.compile(r"^(\d{1,2}):(\d{2})$")


class ICalTransformer(BaseTransformer):
    """Transformer that converts a cached week to iCalendar format."""

    EXTENSION = ".ics"
    TIMEZONE = ZoneInfo("Asia/Shanghai")
    PERIOD_MINUTES = 45
    # Start of each numbered period, period 1 first
    PERIOD_STARTS = (
        time(8, 20), time(9, 10), time(10, 20), time(11, 10),
        time(14, 0), time(14, 50), time(16, 0), time(16, 50),
        time(19, 0), time(19, 50), time(20, 40), time(21, 30),
    )

    def __init__(self, period_starts: Optional[tuple[time, ...]] = None) -> None:
        """Initialize the iCalendar transformer.

        Args:
            period_starts: Start time of each numbered period; the default
                table is used when omitted.
        """
        self._calendar: Optional[Calendar] = None
        self._period_starts = period_starts or self.PERIOD_STARTS

    @staticmethod
    def resolve_date(week_date: str, today: date) -> Optional[date]:
        """Place an "M.d" date in the year that puts it nearest to ``today``.

        Args:
            week_date: Month and day such as "10.16".
            today: Reference date.

        Returns:
            The full date, or None if ``week_date`` is not a valid "M.d".
        """
        parts = week_date.strip().split(".")
        if len(parts) != 2:
            return None
        month, day = parse_int(parts[0]), parse_int(parts[1])
        if month is None or day is None:
            return None

        candidates = []
        for year in (today.year - 1, today.year, today.year + 1):
            try:
                candidates.append(date(year, month, day))
            except ValueError:
                continue
        if not candidates:
            return None
        return min(candidates, key=lambda d: abs((d - today).days))

    def _period_range(self, first: int, last: int) -> Optional[tuple[time, time]]:
        if not 1 <= first <= last <= len(self._period_starts):
            return None
        start = self._period_starts[first - 1]
        last_start = datetime.combine(date.min, self._period_starts[last - 1])
        return start, (last_start + timedelta(minutes=self.PERIOD_MINUTES)).time()

    def resolve_times(self, event: ScheduleEvent) -> Optional[tuple[time, time]]:
        """Find the clock start and end of an event.

        Args:
            event: The cached event.

        Returns:
            Tuple of (start, end), or None if the event carries no usable time.
        """
        end_period = event.session_end
        if end_period is not None and event.session_start is not None:
            return self._period_range(event.session_start, end_period)

        if not event.session_list:
            return None

        clocks = [CLOCK_PATTERN.match(s.strip()) for s in event.session_list]
        if all(clocks):
            try:
                start = time(*map(int, clocks[0].groups()))
                end = time(*map(int, clocks[-1].groups()))
            except ValueError:
                return None
            if end <= start:
                end = (datetime.combine(date.min, start) + timedelta(minutes=self.PERIOD_MINUTES)).time()
            return start, end

        periods = [parse_int(s) for s in event.session_list]
        if all(p is not None and p > 0 for p in periods):
            return self._period_range(min(periods), max(periods))
        return None

    def _generate_uid(self, event: ScheduleEvent, event_date: date, start: time) -> str:
        """Generate a unique identifier for an event occurrence."""
        unique_string = (
            f"{event.event_id or ''}-{event.event_name}-"
            f"{event_date}-{start}-{event.address}"
        )
        return hashlib.md5(unique_string.encode()).hexdigest() + "@wing.cqut"

    def transform(self, document: ScheduleDocument, today: date) -> Calendar:
        """Transform a cached week into iCalendar format.

        Args:
            document: The cached week to export.
            today: Reference date used to resolve the week's dates.

        Returns:
            iCalendar Calendar object.
        """
        self._calendar = Calendar()
        self._calendar.add("prodid", "-//Wing CQUT//schedule widgets//CN")
        self._calendar.add("version", "2.0")
        self._calendar.add("calscale", "GREGORIAN")
        self._calendar.add("method", "PUBLISH")
        week_name = f"第{document.week_number}周" if document.week_number else "课表"
        self._calendar.add("x-wr-calname", week_name)
        self._calendar.add("x-wr-timezone", "Asia/Shanghai")

        dates: dict[str, date] = {}
        for entry in document.week_day_list:
            resolved = self.resolve_date(entry.week_date, today)
            if entry.week_day and resolved is not None:
                dates[entry.week_day] = resolved

        for schedule_event in document.event_list:
            event_date = dates.get(schedule_event.week_day)
            times = self.resolve_times(schedule_event)
            if event_date is None or times is None:
                logger.warning(
                    "Skipping event without a resolvable date or time: %s",
                    schedule_event.event_name or DEFAULT_COURSE_NAME,
                )
                continue

            start, end = times
            ical_event = Event()
            ical_event.add("uid", self._generate_uid(schedule_event, event_date, start))
            ical_event.add("dtstart", datetime.combine(event_date, start, tzinfo=self.TIMEZONE))
            ical_event.add("dtend", datetime.combine(event_date, end, tzinfo=self.TIMEZONE))
            ical_event.add("dtstamp", datetime.now(self.TIMEZONE))
            ical_event.add("summary", schedule_event.event_name.strip() or DEFAULT_COURSE_NAME)

            if schedule_event.address.strip():
                ical_event.add("location", schedule_event.address.strip())

            # Description: instructor and period label, one per line
            description = "\n".join(
                part for part in (schedule_event.member_name.strip(), course_time_text(schedule_event)) if part
            )
            if description:
                ical_event.add("description", description)

            self._calendar.add_component(ical_event)

        return self._calendar

    def save(self, output_path: str) -> None:
        """Save the calendar to an .ics file.

        Args:
            output_path: Path to the output file.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._calendar is None:
            raise RuntimeError("No calendar data. Call transform() first.")

        with open(output_path, "wb") as f:
            f.write(self._calendar.to_ical())
