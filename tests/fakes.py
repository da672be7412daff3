"""
Test doubles for the drawing surface.
"""


class RecordingSurface:
    """Records every drawing call instead of rasterizing it."""

    def __init__(self):
        self.calls = []

    def clear(self, color):
        self.calls.append(('clear', color))

    def draw_line(self, start, end, color, alpha, width=1):
        self.calls.append(('line', start, end, color, alpha, width))

    def fill_circle(self, center, radius, color):
        self.calls.append(('circle', center, radius, color))

    def lines(self):
        return [c for c in self.calls if c[0] == 'line']

    def circles(self):
        return [c for c in self.calls if c[0] == 'circle']

    def reset(self):
        self.calls.clear()
