import pytest

from schedule_cache import MemoryStore
from widget.theme import ThemeMode, accent_color, is_dark, load_theme_mode, resolve_colors


@pytest.mark.parametrize("setting, mode", [
    ("ThemeMode.dark", ThemeMode.DARK),
    ("ThemeMode.light", ThemeMode.LIGHT),
    ("ThemeMode.system", ThemeMode.SYSTEM),
    (None, ThemeMode.SYSTEM),
])
def test_mode_from_setting(setting, mode):
    assert ThemeMode.from_setting(setting) is mode


def test_load_theme_mode_reads_prefixed_key():
    assert load_theme_mode(MemoryStore({"flutter.theme_mode": "ThemeMode.dark"})) is ThemeMode.DARK
    assert load_theme_mode(MemoryStore({"theme_mode": "ThemeMode.dark"})) is ThemeMode.SYSTEM


def test_system_mode_follows_host():
    assert is_dark(ThemeMode.SYSTEM, system_dark=True) is True
    assert is_dark(ThemeMode.SYSTEM, system_dark=False) is False
    assert is_dark(ThemeMode.LIGHT, system_dark=True) is False
    assert is_dark(ThemeMode.DARK, system_dark=False) is True


def test_resolve_colors():
    dark = resolve_colors(ThemeMode.DARK)
    light = resolve_colors(ThemeMode.LIGHT)

    assert dark.primary_text == 0xFFFFFFFF
    assert dark.secondary_text == 0xFFB0B0B0
    assert light.primary_text == 0xFF111111
    assert light.secondary_text == 0xFF666666
    assert dark.accent == light.accent == accent_color() == 0xFF3F51B5
