from __future__ import annotations

from film_essays_site.theme import Theme, ThemePreference, initial_theme, reading_progress


def test_platform_dark_then_toggle_persists_light() -> None:
    storage: dict[str, str] = {}
    pref = ThemePreference(storage, prefers_dark=True)
    assert pref.state is Theme.DARK
    assert pref.css_class == "dark"

    assert pref.toggle() is Theme.LIGHT
    assert storage == {"theme": "light"}
    assert pref.css_class == ""


def test_stored_preference_wins_over_platform_signal() -> None:
    assert ThemePreference({"theme": "light"}, prefers_dark=True).state is Theme.LIGHT
    assert ThemePreference({"theme": "dark"}, prefers_dark=False).state is Theme.DARK


def test_defaults_to_light() -> None:
    assert initial_theme(None, prefers_dark=None) is Theme.LIGHT
    assert initial_theme("sepia", prefers_dark=False) is Theme.LIGHT


def test_construction_does_not_write_storage() -> None:
    storage: dict[str, str] = {}
    ThemePreference(storage, prefers_dark=True)
    assert storage == {}


def test_each_toggle_writes_back() -> None:
    storage: dict[str, str] = {}
    pref = ThemePreference(storage)
    pref.toggle()
    assert storage["theme"] == "dark"
    pref.toggle()
    assert storage["theme"] == "light"


def test_reading_progress_is_clamped() -> None:
    assert reading_progress(0, 2000, 1000) == 0.0
    assert reading_progress(500, 2000, 1000) == 50.0
    assert reading_progress(1500, 2000, 1000) == 100.0
    assert reading_progress(-20, 2000, 1000) == 0.0
    assert reading_progress(0, 800, 1000) == 100.0
