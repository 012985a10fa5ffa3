"""Widget module for rendering home-screen schedule widgets."""

from .hub import WidgetHub
from .renderers import (
    BaseRenderer,
    SummaryRenderer,
    TodayAndNextRenderer,
    TodayCourseRenderer,
    TodayListRenderer,
    WidgetEnvironment,
    get_renderer,
)
from .state import DayOffsetState
from .theme import ThemeColors, ThemeMode, resolve_colors

__all__ = [
    "BaseRenderer",
    "DayOffsetState",
    "SummaryRenderer",
    "ThemeColors",
    "ThemeMode",
    "TodayAndNextRenderer",
    "TodayCourseRenderer",
    "TodayListRenderer",
    "WidgetEnvironment",
    "WidgetHub",
    "get_renderer",
    "resolve_colors",
]
