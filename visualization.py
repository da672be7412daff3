# visualization.py
"""
Handles the pygame window and all drawing for the particle network.
"""
import logging
import math
from typing import Any, Dict, Optional, Tuple

import pygame
import pygame.gfxdraw

from constants import (
    TITLE, DEFAULT_WINDOW_SIZE, TOGGLE_BUTTON_SIZE, TOGGLE_BUTTON_MARGIN,
    TOGGLE_BUTTON_ALPHA
)
from theme import Theme, ThemeState

# --- Data Contracts ---
#
# class DrawingSurface:
#   - retarget(self, target: pygame.Surface) -> None: draws onto a new surface
#     from now on (window resize).
#   - clear(self, color) -> None: fills the whole target.
#   - draw_line(self, start, end, color, alpha: float, width: int) -> None:
#     - Inputs: alpha in [0, 1]. Zero-length and fully transparent segments
#       are no-ops.
#     - Side Effects: the segment is alpha-blended straight onto the target,
#       so crossing lines stack like canvas strokes.
#   - fill_circle(self, center, radius: float, color) -> None:
#     - Side Effects: an opaque filled circle on the target. Radii below one
#       pixel are drawn at one pixel.
#
# class Visualizer:
#   - __init__(self, vis_params: Dict[str, Any]):
#     - Side Effects: initializes pygame and opens a resizable window.
#     - Raises: RenderSurfaceError if no display surface can be created.
#   - resize(self, width, height) -> None: resets the window's pixel size.
#   - present(self, theme: ThemeState) -> None: draws the theme toggle and
#     flips the display.

Color = Tuple[int, int, int]
Point = Tuple[float, float]


class RenderSurfaceError(RuntimeError):
    """Raised when the window or its drawing surface cannot be created."""


class DrawingSurface:
    """
    A 2D drawing context over a pygame surface.

    Lines go through gfxdraw, which blends each segment's alpha with the
    pixels already on the target.
    """
    def __init__(self, target: pygame.Surface):
        self.retarget(target)

    def retarget(self, target: pygame.Surface) -> None:
        """Points the context at a new (e.g. resized) surface."""
        self.target = target

    @property
    def size(self) -> Tuple[int, int]:
        return self.target.get_size()

    def clear(self, color: Color) -> None:
        self.target.fill(color)

    def draw_line(self, start: Point, end: Point, color: Color, alpha: float, width: int = 1) -> None:
        if start[0] == end[0] and start[1] == end[1]:
            return
        a = int(round(max(0.0, min(alpha, 1.0)) * 255))
        if a == 0:
            return
        rgba = (color[0], color[1], color[2], a)
        x1, y1 = int(round(start[0])), int(round(start[1]))
        x2, y2 = int(round(end[0])), int(round(end[1]))
        # gfxdraw lines are one pixel wide; thicker lines are stacked
        # side by side across the minor axis.
        steep = abs(y2 - y1) > abs(x2 - x1)
        for offset in range(-(width // 2), width - width // 2):
            if steep:
                pygame.gfxdraw.line(self.target, x1 + offset, y1, x2 + offset, y2, rgba)
            else:
                pygame.gfxdraw.line(self.target, x1, y1 + offset, x2, y2 + offset, rgba)

    def fill_circle(self, center: Point, radius: float, color: Color) -> None:
        pygame.draw.circle(self.target, color, center, max(radius, 1.0))


class ThemeToggleButton:
    """
    A round button in the top-right corner showing a sun in the dark theme
    and a moon in the light theme.
    """
    def __init__(self, window_width: int):
        self.rect = pygame.Rect(0, 0, TOGGLE_BUTTON_SIZE, TOGGLE_BUTTON_SIZE)
        self.place(window_width)

    def place(self, window_width: int) -> None:
        self.rect.topright = (window_width - TOGGLE_BUTTON_MARGIN, TOGGLE_BUTTON_MARGIN)

    def contains(self, pos: Tuple[int, int]) -> bool:
        return self.rect.collidepoint(pos)

    def draw(self, screen: pygame.Surface, theme: ThemeState) -> None:
        colors = theme.colors
        background = theme.background
        radius = self.rect.width // 2
        center = self.rect.center

        plate = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.circle(plate, (*colors.line, TOGGLE_BUTTON_ALPHA), (radius, radius), radius)
        screen.blit(plate, self.rect.topleft)

        icon_radius = radius * 0.45
        if theme.current is Theme.DARK:
            # Sun: a disc with eight rays
            pygame.draw.circle(screen, background, center, icon_radius * 0.7)
            for i in range(8):
                angle = i * math.pi / 4
                inner = icon_radius * 0.95
                outer = icon_radius * 1.45
                pygame.draw.line(
                    screen, background,
                    (center[0] + math.cos(angle) * inner, center[1] + math.sin(angle) * inner),
                    (center[0] + math.cos(angle) * outer, center[1] + math.sin(angle) * outer),
                    2
                )
        else:
            # Moon: a disc with an offset disc cut out of it
            pygame.draw.circle(screen, background, center, icon_radius * 1.2)
            pygame.draw.circle(
                screen, colors.line,
                (center[0] + icon_radius * 0.6, center[1] - icon_radius * 0.4),
                icon_radius
            )


class Visualizer:
    """
    Owns the pygame window, its drawing surface and the theme toggle.
    """
    def __init__(self, vis_params: Optional[Dict[str, Any]] = None):
        vis_params = vis_params or {}
        self.fullscreen = bool(vis_params.get('fullscreen', False))

        try:
            pygame.init()
            if self.fullscreen:
                display_info = pygame.display.Info()
                size = (display_info.current_w, display_info.current_h)
                screen = pygame.display.set_mode(size, pygame.FULLSCREEN)
            else:
                size = (
                    int(vis_params.get('window_width', DEFAULT_WINDOW_SIZE[0])),
                    int(vis_params.get('window_height', DEFAULT_WINDOW_SIZE[1]))
                )
                screen = pygame.display.set_mode(size, pygame.RESIZABLE)
        except pygame.error as e:
            msg = f"Drawing surface could not be created: {e}"
            logging.critical(msg)
            raise RenderSurfaceError(msg) from e

        if screen is None or screen.get_width() <= 0 or screen.get_height() <= 0:
            msg = "Drawing surface could not be created: display returned an empty surface."
            logging.critical(msg)
            raise RenderSurfaceError(msg)

        pygame.display.set_caption(TITLE)
        self.screen = screen
        self.surface = DrawingSurface(screen)
        self.toggle_button = ThemeToggleButton(screen.get_width())

        logging.info(f"Visualizer initialized with pygame display ({screen.get_width()}x{screen.get_height()}).")

    @property
    def size(self) -> Tuple[int, int]:
        return self.screen.get_size()

    def resize(self, width: int, height: int) -> None:
        flags = pygame.FULLSCREEN if self.fullscreen else pygame.RESIZABLE
        self.screen = pygame.display.set_mode((width, height), flags)
        self.surface.retarget(self.screen)
        self.toggle_button.place(width)
        logging.info(f"Drawing surface resized to {width}x{height}.")

    def present(self, theme: ThemeState) -> None:
        self.toggle_button.draw(self.screen, theme)
        pygame.display.flip()

    def close(self) -> None:
        """Shuts down pygame."""
        pygame.quit()
