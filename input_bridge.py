# input_bridge.py
"""
Turns pointer and scroll input into simulation state.

Pointer moves overwrite the shared pointer position. Scroll events kick
every particle with a random impulse that the particles' own relaxation
then smooths out over the following frames.
"""
import logging
from typing import Optional, Tuple

from particle import ParticleField

Point = Tuple[float, float]


class PointerState:
    """
    Last known pointer position in window coordinates.

    `position` is None until the pointer first moves over the window, which
    the particles read as "no interaction".
    """
    __slots__ = ('position',)

    def __init__(self):
        self.position: Optional[Point] = None

    @property
    def present(self) -> bool:
        return self.position is not None

    def move_to(self, x: float, y: float) -> None:
        self.position = (float(x), float(y))


class InputBridge:
    """
    Input handlers. They only mutate state; the frame callback reads it.
    """
    def __init__(self, pointer: PointerState, field: ParticleField):
        self.pointer = pointer
        self.field = field
        self.scroll_events = 0

    def on_pointer_move(self, x: float, y: float) -> None:
        # Window coordinates are used as-is; the canvas fills the window.
        self.pointer.move_to(x, y)

    def on_scroll(self) -> None:
        self.scroll_events += 1
        self.field.scatter()
        if self.scroll_events % 50 == 1:
            logging.debug(f"Scroll perturbation #{self.scroll_events} applied.")
