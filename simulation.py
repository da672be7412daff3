# simulation.py
"""
Drives the particle network one animation frame at a time.

This module defines the SimulationContext, which owns all mutable
simulation state, the FrameScheduler abstraction that decides when a
frame runs, and the RenderLoop, which executes a frame and asks the
scheduler for the next one.
"""
import enum
import logging
from typing import Any, Callable, Dict, Optional

import numpy as np
import pygame

from constants import FPS
from input_bridge import PointerState
from particle import ParticleField
from theme import ThemeState

# --- Data Contracts ---
#
# class SimulationContext:
#   - Holds: field (ParticleField), pointer (PointerState), theme (ThemeState),
#     width and height of the canvas in pixels.
#   - resize(self, width, height) -> None:
#     - Side Effects: updates the canvas size. Repopulates the field when
#       reinitialize_on_resize is set, so particle density stays constant.
#
# class FrameScheduler:
#   - request_frame(self, callback) -> None: runs `callback` once on the next
#     frame. A later request replaces a pending one.
#   - cancel_frame(self) -> None: drops the pending callback, if any.
#
# class RenderLoop:
#   - initialize(self) -> None: populates the field from the canvas size.
#   - start(self) -> None: IDLE -> SCHEDULED.
#   - tick(self) -> None: one frame: clear, connect, update + draw each
#     particle in index order.
#   - stop(self) -> None: any state -> IDLE, pending frame cancelled.
#   - Invariants: while running, exactly one frame callback is pending
#     between frames.

FrameCallback = Callable[[], None]


class SimulationContext:
    """
    All state the frame callback reads and mutates.
    """
    def __init__(self, field: ParticleField, theme: ThemeState, width: int, height: int,
                 pointer: Optional[PointerState] = None, reinitialize_on_resize: bool = True):
        self.field = field
        self.theme = theme
        self.pointer = pointer if pointer is not None else PointerState()
        self.width = width
        self.height = height
        self.reinitialize_on_resize = reinitialize_on_resize

    def resize(self, width: int, height: int) -> None:
        if (width, height) == (self.width, self.height):
            return
        logging.info(f"Canvas resized from {self.width}x{self.height} to {width}x{height}.")
        self.width = width
        self.height = height
        if self.reinitialize_on_resize:
            self.field.initialize(width, height)


class FrameScheduler:
    """
    Decides when frame callbacks run. The simulation never waits itself.
    """
    def __init__(self):
        self.pending: Optional[FrameCallback] = None

    def request_frame(self, callback: FrameCallback) -> None:
        self.pending = callback

    def cancel_frame(self) -> None:
        self.pending = None

    def run_pending(self) -> bool:
        """Runs the pending callback, if any. Returns whether one ran."""
        callback = self.pending
        if callback is None:
            return False
        self.pending = None
        callback()
        return True


class PygameFrameScheduler(FrameScheduler):
    """
    Runs one frame per display refresh, capped at `fps`.

    Each iteration drains the pygame event queue through `event_handler`
    (returning False ends the run), runs the pending frame callback, then
    hands off to `present` and waits on the clock.
    """
    def __init__(self, event_handler: Callable[[pygame.event.Event], bool],
                 present: Callable[[], None], fps: int = FPS):
        super().__init__()
        self.event_handler = event_handler
        self.present = present
        self.fps = fps
        self.clock = pygame.time.Clock()

    def run(self, max_frames: int = 0) -> int:
        """
        Runs until the handler asks to quit, no frame is pending, or
        `max_frames` frames have run (0 means no limit). Returns the number
        of frames run.
        """
        frames = 0
        running = True
        while running:
            for event in pygame.event.get():
                if not self.event_handler(event):
                    running = False
            if not running:
                break

            if not self.run_pending():
                logging.info("No frame pending. Scheduler stopping.")
                break
            self.present()
            self.clock.tick(self.fps)
            frames += 1

            if max_frames and frames >= max_frames:
                logging.info(f"Reached max_frames ({max_frames}). Scheduler stopping.")
                break
        return frames


class LoopState(enum.Enum):
    IDLE = 'idle'
    SCHEDULED = 'scheduled'
    EXECUTING = 'executing'


class RenderLoop:
    """
    Clears the surface, draws the proximity lines, then updates and draws
    every particle, once per frame.
    """
    def __init__(self, context: SimulationContext, surface, scheduler: FrameScheduler,
                 run_params: Optional[Dict[str, Any]] = None):
        run_params = run_params or {}
        self.context = context
        self.surface = surface
        self.scheduler = scheduler
        self.log_throttle = int(run_params.get('log_throttle_frames', 300))
        self.state = LoopState.IDLE
        self.frame = 0

    def initialize(self) -> None:
        self.context.field.initialize(self.context.width, self.context.height)

    def start(self) -> None:
        if self.state is not LoopState.IDLE:
            logging.warning(f"RenderLoop.start() called while {self.state.value}. Ignored.")
            return
        self.state = LoopState.SCHEDULED
        self.scheduler.request_frame(self._on_frame)
        logging.info("Render loop started.")

    def stop(self) -> None:
        self.scheduler.cancel_frame()
        self.state = LoopState.IDLE
        logging.info(f"Render loop stopped after {self.frame} frames.")

    def _on_frame(self) -> None:
        if self.state is LoopState.IDLE:
            return
        # Reschedule first so the loop survives whatever the frame does
        self.scheduler.request_frame(self._on_frame)
        self.state = LoopState.EXECUTING
        try:
            self.tick()
        finally:
            if self.state is LoopState.EXECUTING:
                self.state = LoopState.SCHEDULED

    def tick(self) -> None:
        context = self.context
        field = context.field
        surface = self.surface

        surface.clear(context.theme.background)
        segments = field.connect(surface, context.theme.colors)

        pointer = context.pointer.position
        width, height = context.width, context.height
        for particle in field:
            particle.update(width, height, pointer, field.physics)
            particle.draw(surface, context.theme.colors)

        self.frame += 1
        # Hot loop: throttle logs
        if self.log_throttle and self.frame % self.log_throttle == 0:
            self._log_frame_stats(segments)

    def _log_frame_stats(self, segments: int) -> None:
        field = self.context.field
        if len(field) == 0:
            logging.debug(f"Frame {self.frame} | empty field")
            return
        velocities = np.array([p.velocity for p in field])
        avg_speed = np.mean(np.linalg.norm(velocities, axis=1))
        logging.debug(
            f"Frame {self.frame} | Particles: {len(field)} | "
            f"Segments: {segments} | Average Speed: {avg_speed:.4f}"
        )
