"""Data models for cached schedule documents."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class WeekDayEntry:
    """One calendar day descriptor of a cached week."""

    week_day: str = ""  # "1".."7", Monday-based
    week_date: str = ""  # "M.d", no leading zeros
    is_today: bool = False


@dataclass(frozen=True)
class Event:
    """A single class session occurrence in a cached week."""

    week_day: str = ""
    session_start: Optional[int] = None
    session_last: Optional[int] = None  # count of periods, not the end period
    session_list: list[str] = field(default_factory=list)
    event_name: str = ""
    address: str = ""
    member_name: str = ""
    event_id: Optional[str] = None
    week_num: str = ""

    @property
    def session_end(self) -> Optional[int]:
        """Last period covered by the event, if start and count are known."""
        if self.session_start and self.session_last:
            if self.session_start > 0 and self.session_last > 0:
                return self.session_start + self.session_last - 1
        return None


@dataclass(frozen=True)
class ScheduleDocument:
    """One cached snapshot for a (user, term, week) triple."""

    week_number: str = ""
    week_day_list: list[WeekDayEntry] = field(default_factory=list)
    event_list: list[Event] = field(default_factory=list)
    year_term: str = ""
    week_list: list[str] = field(default_factory=list)

    def contains_date(self, date_text: str) -> bool:
        """Return True if some weekday entry is dated ``date_text``."""
        return any(
            entry.week_date.strip() and entry.week_date == date_text
            for entry in self.week_day_list
        )

    def today_entry(self, date_text: str) -> Optional[WeekDayEntry]:
        """Return the entry flagged as today whose date matches ``date_text``."""
        for entry in self.week_day_list:
            if entry.is_today and entry.week_date == date_text:
                return entry
        return None


@dataclass(frozen=True)
class ParseFailure:
    """Result of parsing a cached document that is not valid."""

    reason: str


@dataclass(frozen=True)
class Header:
    """Widget title line: schedule name, date and weekday label."""

    schedule_name: str
    date_text: str
    week_text: str


@dataclass(frozen=True)
class CourseItem:
    """A course row as shown in the widget lists."""

    name: str
    location: str
    teacher: str
    time: str
    indicator_color: int
    event_id: Optional[str] = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Course name must not be empty")
        if not 0 <= self.indicator_color <= 0xFFFFFFFF:
            raise ValueError(f"Indicator color must be a 32-bit ARGB value, got {self.indicator_color}")
