# constants.py
"""
Application-level constants.

These values are static and do not change between runs. They cover the
rendering framework (window title, background colors, palettes, toggle
button geometry) rather than the tunable parts of the particle model,
which live in config.json.
"""

# Window settings
TITLE = "Particle Network"
DEFAULT_WINDOW_SIZE = (1280, 720)
FPS = 60

# Background color per theme (RGB)
DARK_BACKGROUND_COLOR = (18, 12, 28)
LIGHT_BACKGROUND_COLOR = (244, 240, 250)

# --- Particle Palettes ---
# Dot and line colors per theme. Line opacity is applied per segment.
DARK_DOT_COLOR = (223, 196, 255)   # Pastel lavender
DARK_LINE_COLOR = (194, 182, 209)
LIGHT_DOT_COLOR = (69, 50, 92)     # Deep violet, readable on a light background
LIGHT_LINE_COLOR = (43, 25, 66)

# --- Particle Model Defaults ---
# Used when config.json omits a value.
AREA_PER_PARTICLE = 10000          # Square pixels per particle (~100x100)
MAX_DISTANCE = 100.0               # Pixels. Proximity lines fade out at this distance.
MAX_LINE_ALPHA = 0.2               # Opacity of a line between coincident particles.
INTERACTION_RADIUS = 100.0         # Pixels. Pointer influence radius.
MAX_ZOOM_SIZE = 5.0                # Radius a particle reaches under the pointer.
MIN_INTERACTION_DISTANCE = 1.0     # Pixels. Lower bound for the repel force distance.
REPEL_STRENGTH = 0.05
SIZE_DECAY = 0.9                   # Fraction of size kept per frame when relaxing.
VELOCITY_DECAY = 0.99              # Fraction of velocity kept per frame when relaxing.
SCROLL_IMPULSE = 5.0               # Max velocity kick per component on scroll.
BASE_SIZE_RANGE = (0.5, 2.0)
BASE_SPEED = 0.25                  # Base velocity components lie in [-BASE_SPEED, BASE_SPEED).
LINE_WIDTH = 1

# --- Theme Toggle Button ---
TOGGLE_BUTTON_SIZE = 36
TOGGLE_BUTTON_MARGIN = 16
TOGGLE_BUTTON_ALPHA = 150
