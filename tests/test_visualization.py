"""
Tests for the pygame drawing surface and window.

Runs headless through SDL's dummy video driver.
"""

import os
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")

import unittest
from unittest import mock

import pygame

from theme import Theme, ThemeState
from visualization import DrawingSurface, RenderSurfaceError, ThemeToggleButton, Visualizer


class TestDrawingSurface(unittest.TestCase):

    def setUp(self):
        self.target = pygame.Surface((50, 50))
        self.surface = DrawingSurface(self.target)
        self.surface.clear((0, 0, 0))

    def test_fill_circle(self):
        self.surface.fill_circle((25.0, 25.0), 4.0, (200, 100, 50))
        self.assertEqual(tuple(self.target.get_at((25, 25)))[:3], (200, 100, 50))
        self.assertEqual(tuple(self.target.get_at((2, 2)))[:3], (0, 0, 0))

    def test_subpixel_circle_still_visible(self):
        self.surface.fill_circle((10.0, 10.0), 0.5, (255, 255, 255))
        self.assertEqual(tuple(self.target.get_at((10, 10)))[:3], (255, 255, 255))

    def test_line_blends_over_background(self):
        self.surface.draw_line((5.0, 10.0), (40.0, 10.0), (200, 100, 50), 0.5)
        r, g, b = tuple(self.target.get_at((20, 10)))[:3]
        self.assertAlmostEqual(r, 100, delta=3)
        self.assertAlmostEqual(g, 50, delta=3)
        self.assertAlmostEqual(b, 25, delta=3)

    def test_faint_line_does_not_erase_strong_line_it_crosses(self):
        self.surface.draw_line((0.0, 10.0), (49.0, 10.0), (255, 255, 255), 0.2)
        self.surface.draw_line((20.0, 0.0), (20.0, 49.0), (255, 255, 255), 0.004)
        crossing = self.target.get_at((20, 10))[0]
        elsewhere = self.target.get_at((30, 10))[0]
        self.assertGreaterEqual(elsewhere, 45)
        self.assertGreaterEqual(crossing, elsewhere)

    def test_crossing_lines_stack(self):
        self.surface.draw_line((0.0, 10.0), (49.0, 10.0), (255, 255, 255), 0.5)
        self.surface.draw_line((20.0, 0.0), (20.0, 49.0), (255, 255, 255), 0.5)
        single = self.target.get_at((30, 10))[0]
        crossing = self.target.get_at((20, 10))[0]
        self.assertGreater(crossing, single)

    def test_circle_drawn_over_lines(self):
        self.surface.draw_line((0.0, 25.0), (49.0, 25.0), (255, 0, 0), 1.0)
        self.surface.fill_circle((25.0, 25.0), 3.0, (0, 0, 255))
        self.assertEqual(tuple(self.target.get_at((25, 25)))[:3], (0, 0, 255))
        self.assertEqual(tuple(self.target.get_at((5, 25)))[:3], (255, 0, 0))

    def test_zero_length_and_transparent_lines_are_no_ops(self):
        self.surface.draw_line((10.0, 10.0), (10.0, 10.0), (255, 255, 255), 0.2)
        self.surface.draw_line((0.0, 0.0), (49.0, 0.0), (255, 255, 255), 0.0)
        self.assertEqual(tuple(self.target.get_at((10, 10)))[:3], (0, 0, 0))
        self.assertEqual(tuple(self.target.get_at((20, 0)))[:3], (0, 0, 0))

    def test_wide_line_covers_neighbouring_rows(self):
        self.surface.draw_line((0.0, 20.0), (49.0, 20.0), (255, 255, 255), 1.0, width=3)
        for y in (19, 20, 21):
            self.assertEqual(tuple(self.target.get_at((25, y)))[:3], (255, 255, 255))
        self.assertEqual(tuple(self.target.get_at((25, 23)))[:3], (0, 0, 0))

    def test_clear_wipes_lines(self):
        self.surface.draw_line((0.0, 5.0), (49.0, 5.0), (255, 255, 255), 1.0)
        self.surface.clear((10, 20, 30))
        self.assertEqual(tuple(self.target.get_at((20, 5)))[:3], (10, 20, 30))

    def test_retarget_follows_new_size(self):
        bigger = pygame.Surface((80, 60))
        self.surface.retarget(bigger)
        self.assertEqual(self.surface.size, (80, 60))
        self.surface.fill_circle((70.0, 50.0), 2.0, (255, 255, 255))
        self.assertEqual(tuple(bigger.get_at((70, 50)))[:3], (255, 255, 255))


class TestThemeToggleButton(unittest.TestCase):

    def test_sits_in_top_right_corner(self):
        button = ThemeToggleButton(800)
        self.assertTrue(button.contains((800 - 16 - 5, 16 + 5)))
        self.assertFalse(button.contains((10, 10)))

    def test_replaced_on_resize(self):
        button = ThemeToggleButton(800)
        button.place(400)
        self.assertTrue(button.contains((400 - 16 - 5, 16 + 5)))

    def test_draws_for_both_themes(self):
        screen = pygame.Surface((200, 100))
        button = ThemeToggleButton(200)
        for theme in (Theme.DARK, Theme.LIGHT):
            screen.fill((0, 0, 0))
            button.draw(screen, ThemeState(theme))
            self.assertNotEqual(tuple(screen.get_at(button.rect.center))[:3], (0, 0, 0))


class TestVisualizer(unittest.TestCase):

    def tearDown(self):
        pygame.quit()

    def test_opens_window_of_configured_size(self):
        vis = Visualizer({'window_width': 320, 'window_height': 200})
        self.assertEqual(vis.size, (320, 200))
        self.assertEqual(vis.surface.size, (320, 200))

    def test_resize_keeps_same_drawing_surface(self):
        vis = Visualizer({'window_width': 320, 'window_height': 200})
        surface = vis.surface
        vis.resize(400, 300)
        self.assertIs(vis.surface, surface)
        self.assertEqual(surface.size, vis.size)

    def test_missing_display_aborts_startup(self):
        with mock.patch('pygame.display.set_mode', side_effect=pygame.error("no display")):
            with self.assertRaises(RenderSurfaceError):
                Visualizer({'window_width': 320, 'window_height': 200})


if __name__ == '__main__':
    unittest.main()
