"""Widget theme resolution and text colors."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from schedule_cache.store import KeyValueStore

THEME_MODE_KEY = "flutter.theme_mode"

PRIMARY_TEXT_DARK = 0xFFFFFFFF
PRIMARY_TEXT_LIGHT = 0xFF111111
SECONDARY_TEXT_DARK = 0xFFB0B0B0
SECONDARY_TEXT_LIGHT = 0xFF666666
ACCENT = 0xFF3F51B5


class ThemeMode(Enum):
    SYSTEM = "system"
    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_setting(cls, value: Optional[str]) -> "ThemeMode":
        """Map the app's stored ``ThemeMode`` name to a mode."""
        if value == "ThemeMode.dark":
            return cls.DARK
        if value == "ThemeMode.light":
            return cls.LIGHT
        return cls.SYSTEM


@dataclass(frozen=True)
class ThemeColors:
    dark: bool
    primary_text: int
    secondary_text: int
    accent: int


def load_theme_mode(store: KeyValueStore) -> ThemeMode:
    return ThemeMode.from_setting(store.get_string(THEME_MODE_KEY))


def is_dark(mode: ThemeMode, system_dark: bool = False) -> bool:
    if mode is ThemeMode.DARK:
        return True
    if mode is ThemeMode.LIGHT:
        return False
    return system_dark


def primary_text_color(dark: bool) -> int:
    return PRIMARY_TEXT_DARK if dark else PRIMARY_TEXT_LIGHT


def secondary_text_color(dark: bool) -> int:
    return SECONDARY_TEXT_DARK if dark else SECONDARY_TEXT_LIGHT


def accent_color() -> int:
    return ACCENT


def resolve_colors(mode: ThemeMode, system_dark: bool = False) -> ThemeColors:
    """Return the text colors for ``mode``, following the system when unset."""
    dark = is_dark(mode, system_dark)
    return ThemeColors(
        dark=dark,
        primary_text=primary_text_color(dark),
        secondary_text=secondary_text_color(dark),
        accent=accent_color(),
    )
