# theme.py
"""
Light/dark theme handling.

Holds the theme flag, maps it to the particle palette, and persists the
user's choice to a small JSON key-value file. The palette is looked up on
every draw, so a toggle takes effect on the very next frame.
"""
import enum
import json
import logging
import os
from typing import NamedTuple, Optional, Tuple

from constants import (
    DARK_DOT_COLOR, DARK_LINE_COLOR, LIGHT_DOT_COLOR, LIGHT_LINE_COLOR,
    DARK_BACKGROUND_COLOR, LIGHT_BACKGROUND_COLOR
)

# --- Data Contracts ---
#
# get_particle_colors(theme: Theme) -> ParticleColors:
#   - Pure. Returns the (dot, line) RGB pair for the theme.
#
# class ThemeStore:
#   - load(self) -> Optional[Theme]: the saved theme, or None if nothing
#     valid is stored. Never raises for a missing or corrupt file.
#   - save(self, theme: Theme) -> bool: writes {"theme": "<value>"}.
#     Returns False (and logs) if the file could not be written.
#
# class ThemeState:
#   - current: the live Theme. Mutated only by toggle().
#   - toggle(self) -> Theme: flips the theme, persists it, returns it.

Color = Tuple[int, int, int]

THEME_KEY = 'theme'


class Theme(enum.Enum):
    DARK = 'dark'
    LIGHT = 'light'

    def opposite(self) -> "Theme":
        return Theme.LIGHT if self is Theme.DARK else Theme.DARK


class ParticleColors(NamedTuple):
    dot: Color
    line: Color


_PALETTES = {
    Theme.DARK: ParticleColors(dot=DARK_DOT_COLOR, line=DARK_LINE_COLOR),
    Theme.LIGHT: ParticleColors(dot=LIGHT_DOT_COLOR, line=LIGHT_LINE_COLOR),
}

_BACKGROUNDS = {
    Theme.DARK: DARK_BACKGROUND_COLOR,
    Theme.LIGHT: LIGHT_BACKGROUND_COLOR,
}


def get_particle_colors(theme: Theme) -> ParticleColors:
    """Returns the dot and line colors for the given theme."""
    return _PALETTES[theme]


def get_background_color(theme: Theme) -> Color:
    return _BACKGROUNDS[theme]


def parse_theme(value, default: Optional[Theme] = None) -> Optional[Theme]:
    """Converts a stored string to a Theme, returning `default` if it is unknown."""
    try:
        return Theme(value)
    except ValueError:
        logging.warning(f"Unknown theme value {value!r}.")
        return default


class ThemeStore:
    """
    Reads and writes the theme preference to a JSON file.
    """
    def __init__(self, path: str):
        self.path = path

    def load(self) -> Optional[Theme]:
        if not os.path.exists(self.path):
            logging.info(f"No saved theme at {self.path}.")
            return None
        try:
            with open(self.path, 'r') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logging.warning(f"Could not read theme file {self.path}: {e}")
            return None
        if not isinstance(data, dict) or THEME_KEY not in data:
            logging.warning(f"Theme file {self.path} has no '{THEME_KEY}' entry.")
            return None
        return parse_theme(data[THEME_KEY])

    def save(self, theme: Theme) -> bool:
        directory = os.path.dirname(self.path)
        try:
            if directory:
                os.makedirs(directory, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump({THEME_KEY: theme.value}, f)
        except OSError as e:
            logging.error(f"Could not save theme to {self.path}: {e}")
            return False
        logging.debug(f"Theme '{theme.value}' saved to {self.path}.")
        return True


class ThemeState:
    """
    The process-wide theme flag.

    Renderers read `current` every time they need a color instead of
    caching the palette.
    """
    def __init__(self, current: Theme = Theme.DARK, store: Optional[ThemeStore] = None):
        self.current = current
        self.store = store

    @classmethod
    def from_store(cls, store: ThemeStore, default: Theme = Theme.DARK) -> "ThemeState":
        """Restores the saved theme, falling back to `default`."""
        saved = store.load()
        if saved is None:
            logging.info(f"Using default theme '{default.value}'.")
            return cls(default, store)
        logging.info(f"Restored saved theme '{saved.value}'.")
        return cls(saved, store)

    @property
    def colors(self) -> ParticleColors:
        return get_particle_colors(self.current)

    @property
    def background(self) -> Color:
        return get_background_color(self.current)

    def toggle(self) -> Theme:
        self.current = self.current.opposite()
        logging.info(f"Theme switched to '{self.current.value}'.")
        if self.store is not None:
            self.store.save(self.current)
        return self.current
