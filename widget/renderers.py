"""Renderers turning cached schedule queries into widget view models."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Optional

from schedule_cache.dates import monday_based_weekday, week_label
from schedule_cache.models import CourseItem, Event, Header
from schedule_cache.reader import (
    DEFAULT_COURSE_NAME,
    ScheduleCacheReader,
    course_time_text,
    format_time_range,
    today_events,
)
from schedule_cache.store import KeyValueStore

from .state import DayOffsetState
from .theme import ThemeColors, ThemeMode, load_theme_mode, resolve_colors

SYNC_PLACEHOLDER = "请先打开应用同步课表"
NO_COURSES_TODAY = "今日无课"


@dataclass
class WidgetEnvironment:
    """Everything a renderer reads: the cache, the widget state and the host theme."""

    reader: ScheduleCacheReader
    prefs: KeyValueStore
    offsets: DayOffsetState
    system_dark: bool = False

    def theme_mode(self) -> ThemeMode:
        return load_theme_mode(self.prefs)

    def colors(self) -> ThemeColors:
        return resolve_colors(self.theme_mode(), self.system_dark)


@dataclass(frozen=True)
class TodayCourseView:
    header: Header
    week_count: str
    courses: list[CourseItem]
    day_offset: int
    toggle_rotation: float
    colors: ThemeColors


@dataclass(frozen=True)
class TodayAndNextView:
    header: Header
    week_count: str
    today_courses: list[CourseItem]
    next_day_courses: list[CourseItem]
    colors: Optional[ThemeColors]  # None leaves the host's default styling


@dataclass(frozen=True)
class TodayListView:
    header: Header
    courses: list[CourseItem]
    colors: ThemeColors


@dataclass(frozen=True)
class SummaryRow:
    title: str
    time_range: str
    location: str
    detail: str

    @property
    def time_start(self) -> str:
        return self.time_range.split("-", 1)[0].strip()

    @property
    def time_end(self) -> str:
        parts = self.time_range.split("-", 1)
        return parts[1].strip() if len(parts) > 1 else ""


@dataclass(frozen=True)
class SummaryView:
    header_left: str
    week_text: str
    rows: list[SummaryRow] = field(default_factory=list)
    message: str = ""
    footer: str = ""


class BaseRenderer(ABC):
    """Abstract base class for widget renderers.

    Extend this class to add a widget layout; ``render`` must be a pure
    function of the environment's stores and ``now``.
    """

    kind: str = ""

    @abstractmethod
    def render(self, env: WidgetEnvironment, widget_id: int, now: Optional[date] = None) -> Any:
        """Build the view model shown by one widget instance.

        Args:
            env: Stores and host theme.
            widget_id: Host-assigned widget instance id.
            now: Current date; today when omitted.

        Returns:
            The view model of the widget.
        """
        pass


class TodayCourseRenderer(BaseRenderer):
    """Single list widget that toggles between today and tomorrow."""

    kind = "today-course"

    def render(self, env: WidgetEnvironment, widget_id: int, now: Optional[date] = None) -> TodayCourseView:
        day_offset = env.offsets.get(widget_id)
        week_count = env.reader.load_week_count_text(now)

        return TodayCourseView(
            header=env.reader.load_header_by_day_offset(now, day_offset),
            week_count=f" | {week_count}    " if week_count.strip() else " | ",
            courses=env.reader.load_courses_by_day_offset(now, day_offset),
            day_offset=day_offset,
            toggle_rotation=180.0 if day_offset == 0 else 0.0,
            colors=env.colors(),
        )


class TodayAndNextRenderer(BaseRenderer):
    """Two lists side by side: today and the next day."""

    kind = "today-and-next"

    def render(self, env: WidgetEnvironment, widget_id: int, now: Optional[date] = None) -> TodayAndNextView:
        mode = env.theme_mode()
        colors = resolve_colors(mode, env.system_dark) if mode is not ThemeMode.SYSTEM else None

        return TodayAndNextView(
            header=env.reader.load_header(now),
            week_count=env.reader.load_week_count_text(now),
            today_courses=env.reader.load_courses_by_day_offset(now, 0),
            next_day_courses=env.reader.load_courses_by_day_offset(now, 1),
            colors=colors,
        )


class TodayListRenderer(BaseRenderer):
    kind = "today-list"

    def render(self, env: WidgetEnvironment, widget_id: int, now: Optional[date] = None) -> TodayListView:
        return TodayListView(
            header=env.reader.load_header(now),
            courses=env.reader.load_courses_by_day_offset(now, 0),
            colors=env.colors(),
        )


class SummaryRenderer(BaseRenderer):
    """Compact widgets listing the first courses of today.

    ``rows`` is 1 for the 2x2 widget, 2 for 4x2 and 4 for the 4x4 list.
    """

    SIZES = {1: "summary-2x2", 2: "summary-4x2", 4: "summary-4x4"}

    def __init__(self, rows: int = 1) -> None:
        if rows not in self.SIZES:
            raise ValueError(f"Summary widgets show 1, 2 or 4 rows, got {rows}")
        self._rows = rows
        self.kind = self.SIZES[rows]

    @property
    def rows(self) -> int:
        return self._rows

    @staticmethod
    def _row(event: Event) -> SummaryRow:
        detail_parts = [course_time_text(event), event.address.strip(), event.member_name.strip()]
        return SummaryRow(
            title=event.event_name if event.event_name.strip() else DEFAULT_COURSE_NAME,
            time_range=format_time_range(event),
            location=event.address,
            detail=" | ".join(part for part in detail_parts if part),
        )

    def _footer(self, rest: int) -> str:
        if rest <= 0:
            return ""
        if self._rows == 1:
            return f"其他{rest}节课程"
        return f"其他{rest}节课程・・・"

    def render(self, env: WidgetEnvironment, widget_id: int, now: Optional[date] = None) -> SummaryView:
        today = now if now is not None else date.today()
        header_left = f"今天 / {week_label(monday_based_weekday(today))}"

        document = env.reader.load_latest_document()
        if document is None:
            return SummaryView(header_left=header_left, week_text="", message=SYNC_PLACEHOLDER)

        events = today_events(document, today)
        return SummaryView(
            header_left=header_left,
            week_text=f"第{document.week_number or '?'}周",
            rows=[self._row(event) for event in events[:self._rows]],
            message="" if events else NO_COURSES_TODAY,
            footer=self._footer(len(events) - self._rows),
        )


RENDERERS: dict[str, BaseRenderer] = {
    renderer.kind: renderer
    for renderer in (
        TodayCourseRenderer(),
        TodayAndNextRenderer(),
        TodayListRenderer(),
        SummaryRenderer(1),
        SummaryRenderer(2),
        SummaryRenderer(4),
    )
}


def get_renderer(kind: str) -> BaseRenderer:
    """Return the renderer registered for ``kind``."""
    try:
        return RENDERERS[kind]
    except KeyError:
        raise ValueError(
            f"Unknown widget kind: '{kind}'. Expected one of: {', '.join(sorted(RENDERERS))}"
        ) from None
