from __future__ import annotations

from collections.abc import MutableMapping
from enum import Enum

THEME_STORAGE_KEY = "theme"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


def initial_theme(stored: str | None, *, prefers_dark: bool | None) -> Theme:
    """Stored preference, else the platform's color-scheme signal, else light."""
    if stored in (Theme.LIGHT.value, Theme.DARK.value):
        return Theme(stored)
    if prefers_dark:
        return Theme.DARK
    return Theme.LIGHT


class ThemePreference:
    """
    Light/dark state machine with one persisted field.

    Reads `storage["theme"]` once at construction and writes it back on every toggle.
    The page script (THEME_SCRIPT) runs the same machine against localStorage.
    """

    def __init__(self, storage: MutableMapping[str, str], *, prefers_dark: bool | None = None) -> None:
        self._storage = storage
        self._state = initial_theme(storage.get(THEME_STORAGE_KEY), prefers_dark=prefers_dark)

    @property
    def state(self) -> Theme:
        return self._state

    @property
    def css_class(self) -> str:
        return "dark" if self._state is Theme.DARK else ""

    def toggle(self) -> Theme:
        self._state = Theme.LIGHT if self._state is Theme.DARK else Theme.DARK
        self._storage[THEME_STORAGE_KEY] = self._state.value
        return self._state


def reading_progress(scroll_top: float, scroll_height: float, viewport_height: float) -> float:
    """Percent of the page scrolled past, clamped to [0, 100]."""
    scrollable = scroll_height - viewport_height
    if scrollable <= 0:
        return 100.0
    return max(0.0, min(100.0, scroll_top / scrollable * 100.0))


# Inlined into <head> so the class is set before first paint.
THEME_SCRIPT = """\
(function () {
  var root = document.documentElement;
  var stored = null;
  try { stored = localStorage.getItem("theme"); } catch (e) {}
  var dark = stored === "dark" || stored === "light"
    ? stored === "dark"
    : window.matchMedia("(prefers-color-scheme: dark)").matches;
  root.classList.toggle("dark", dark);
  window.toggleTheme = function () {
    dark = !root.classList.contains("dark");
    root.classList.toggle("dark", dark);
    try { localStorage.setItem("theme", dark ? "dark" : "light"); } catch (e) {}
  };
})();
"""

READING_PROGRESS_SCRIPT = """\
(function () {
  var bar = document.getElementById("reading-progress");
  if (!bar) return;
  function update() {
    var el = document.documentElement;
    var scrollable = el.scrollHeight - el.clientHeight;
    var pct = scrollable <= 0 ? 100 : Math.min(100, Math.max(0, el.scrollTop / scrollable * 100));
    bar.style.width = pct + "%";
  }
  window.addEventListener("scroll", update, { passive: true });
  update();
})();
"""
