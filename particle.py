# particle.py
"""
Particle state and the particle field.

This module defines the Particle class, which owns a single point's
position, velocity and size and knows how to step and draw itself, and
the ParticleField class, which owns the ordered collection of particles,
sizes it to the canvas area, and draws the proximity lines between them.
"""
import logging
import math
from typing import Any, Dict, Iterator, List, NamedTuple, Optional, Tuple

import numpy as np
from numba import jit

from constants import (
    AREA_PER_PARTICLE, MAX_DISTANCE, MAX_LINE_ALPHA, INTERACTION_RADIUS,
    MAX_ZOOM_SIZE, MIN_INTERACTION_DISTANCE, REPEL_STRENGTH, SIZE_DECAY,
    VELOCITY_DECAY, SCROLL_IMPULSE, BASE_SIZE_RANGE, BASE_SPEED, LINE_WIDTH
)
from theme import ParticleColors

# --- Data Contracts ---
#
# class Particle:
#   - update(self, width, height, pointer, physics) -> None:
#     - Inputs:
#       - width, height: canvas dimensions in pixels.
#       - pointer: (x, y) of the pointer, or None before the first movement.
#       - physics: PhysicsParams with the interaction tuning.
#     - Side Effects: reflects velocity at the edges, integrates position,
#       then either grows and repels (pointer inside the interaction radius)
#       or relaxes size and velocity toward their base values.
#     - Invariants: self.size >= self.base_size after every call.
#
#   - draw(self, surface, colors: ParticleColors) -> None:
#     - Side Effects: one filled circle on the surface in the dot color.
#
# class ParticleField:
#   - initialize(self, width: int, height: int) -> None:
#     - Side Effects: replaces the collection with
#       floor(width * height / area_per_particle) new particles at uniformly
#       random positions.
#
#   - connect(self, surface, colors: ParticleColors) -> int:
#     - Outputs: the number of segments issued (self-pairs included).
#     - Side Effects: one line per pair (a <= b) closer than max_distance,
#       with alpha (1 - dist / max_distance) * max_line_alpha.
#
#   - scatter(self) -> None:
#     - Side Effects: adds an independent uniform [-impulse, impulse) kick to
#       every velocity component.

Point = Tuple[float, float]


class PhysicsParams(NamedTuple):
    """Tuning for the pointer interaction and the relaxation toward rest."""
    interaction_radius: float = INTERACTION_RADIUS
    max_zoom_size: float = MAX_ZOOM_SIZE
    min_interaction_distance: float = MIN_INTERACTION_DISTANCE
    repel_strength: float = REPEL_STRENGTH
    size_decay: float = SIZE_DECAY
    velocity_decay: float = VELOCITY_DECAY

    @classmethod
    def from_config(cls, params: Dict[str, Any]) -> "PhysicsParams":
        physics = cls(
            interaction_radius=float(params.get('interaction_radius', INTERACTION_RADIUS)),
            max_zoom_size=float(params.get('max_zoom_size', MAX_ZOOM_SIZE)),
            min_interaction_distance=float(params.get('min_interaction_distance', MIN_INTERACTION_DISTANCE)),
            repel_strength=float(params.get('repel_strength', REPEL_STRENGTH)),
            size_decay=float(params.get('size_decay', SIZE_DECAY)),
            velocity_decay=float(params.get('velocity_decay', VELOCITY_DECAY)),
        )
        _require_positive('interaction_radius', physics.interaction_radius)
        _require_positive('min_interaction_distance', physics.min_interaction_distance)
        return physics


def _require_positive(name: str, value: float) -> None:
    if value <= 0:
        msg = f"Configuration error: '{name}' must be positive, got {value}."
        logging.critical(msg)
        raise ValueError(msg)


class Particle:
    """
    A single point in the network.

    `base_size` and `base_velocity` are fixed at creation and act as the
    rest state that `size` and the velocity relax back to.
    """
    __slots__ = ('x', 'y', 'vx', 'vy', 'size', '_base_size', '_base_velocity')

    def __init__(self, x: float, y: float, base_size: float, base_velocity: Point):
        self.x = float(x)
        self.y = float(y)
        self._base_size = float(base_size)
        self._base_velocity = (float(base_velocity[0]), float(base_velocity[1]))
        self.size = self._base_size
        self.vx, self.vy = self._base_velocity

    @property
    def base_size(self) -> float:
        return self._base_size

    @property
    def base_velocity(self) -> Point:
        return self._base_velocity

    @property
    def position(self) -> Point:
        return (self.x, self.y)

    @property
    def velocity(self) -> Point:
        return (self.vx, self.vy)

    def update(self, width: float, height: float, pointer: Optional[Point],
               physics: PhysicsParams = PhysicsParams()) -> None:
        """
        Advances the particle by one frame.
        """
        # Reflect lazily: a particle past the edge turns around and drifts
        # back over the next frames instead of being clamped.
        if self.x > width or self.x < 0:
            self.vx = -self.vx
        if self.y > height or self.y < 0:
            self.vy = -self.vy

        self.x += self.vx
        self.y += self.vy

        if pointer is not None:
            dx = pointer[0] - self.x
            dy = pointer[1] - self.y
            distance = math.sqrt(dx * dx + dy * dy)
            if distance < physics.interaction_radius:
                self._react_to_pointer(dx, dy, distance, physics)
                return

        self._relax(physics)

    def _react_to_pointer(self, dx: float, dy: float, distance: float, physics: PhysicsParams) -> None:
        # Zoom: 0 at the edge of the radius, max_zoom_size under the pointer
        closeness = 1 - distance / physics.interaction_radius
        self.size = self._base_size + closeness * (physics.max_zoom_size - self._base_size)
        # A zoom target below the base size must not shrink the particle
        if self.size < self._base_size:
            self.size = self._base_size

        # Repel: (dx, dy) points at the pointer, so subtracting it pushes away.
        force = 1 / max(distance, physics.min_interaction_distance)
        self.vx -= force * dx * physics.repel_strength
        self.vy -= force * dy * physics.repel_strength

    def _relax(self, physics: PhysicsParams) -> None:
        keep = physics.size_decay
        self.size = self.size * keep + self._base_size * (1 - keep)
        if self.size < self._base_size:
            self.size = self._base_size

        keep = physics.velocity_decay
        base_vx, base_vy = self._base_velocity
        self.vx = self.vx * keep + base_vx * (1 - keep)
        self.vy = self.vy * keep + base_vy * (1 - keep)

    def draw(self, surface, colors: ParticleColors) -> None:
        surface.fill_circle((self.x, self.y), self.size, colors.dot)

    def __repr__(self) -> str:
        return (f"Particle(pos=({self.x:.1f}, {self.y:.1f}), "
                f"vel=({self.vx:.3f}, {self.vy:.3f}), size={self.size:.2f})")


@jit(nopython=True)
def _find_proximity_pairs_numba(positions, max_distance, max_alpha, pair_a, pair_b, alphas):
    """
    Numba-jitted pairwise distance pass.

    Visits every pair (a, b) with a <= b, self-pairs included, writes the
    index pairs closer than max_distance and their line alpha into the
    output buffers, and returns how many were written. The buffers must
    hold at least n * (n + 1) / 2 entries.
    """
    n = positions.shape[0]
    count = 0
    for a in range(n):
        ax = positions[a, 0]
        ay = positions[a, 1]
        for b in range(a, n):
            dx = ax - positions[b, 0]
            dy = ay - positions[b, 1]
            dist = np.sqrt(dx * dx + dy * dy)
            if dist < max_distance:
                pair_a[count] = a
                pair_b[count] = b
                alphas[count] = (1.0 - dist / max_distance) * max_alpha
                count += 1
    return count


class ParticleField:
    """
    The ordered collection of particles and the proximity-line pass.
    """
    def __init__(self, params: Dict[str, Any], rng: np.random.Generator):
        """
        Args:
            params (Dict[str, Any]): The "simulation" section of the config.
            rng (np.random.Generator): Source of all particle randomness.
        """
        self.rng = rng
        self.area_per_particle = float(params.get('area_per_particle', AREA_PER_PARTICLE))
        self.max_distance = float(params.get('max_distance', MAX_DISTANCE))
        self.max_line_alpha = float(params.get('max_line_alpha', MAX_LINE_ALPHA))
        self.scroll_impulse = float(params.get('scroll_impulse', SCROLL_IMPULSE))
        self.line_width = int(params.get('line_width', LINE_WIDTH))
        self.physics = PhysicsParams.from_config(params)

        _require_positive('area_per_particle', self.area_per_particle)
        _require_positive('max_distance', self.max_distance)

        self.particles: List[Particle] = []

        # Pair buffers reused across frames; regrown only when the
        # population outgrows them.
        self._pair_a = np.empty(0, dtype=np.int64)
        self._pair_b = np.empty(0, dtype=np.int64)
        self._alphas = np.empty(0, dtype=np.float64)

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def __getitem__(self, index: int) -> Particle:
        return self.particles[index]

    def particle_count_for(self, width: int, height: int) -> int:
        return int(math.floor(width * height / self.area_per_particle))

    def initialize(self, width: int, height: int) -> None:
        count = self.particle_count_for(width, height)
        positions = self.rng.uniform(low=[0, 0], high=[width, height], size=(count, 2))
        base_sizes = self.rng.uniform(BASE_SIZE_RANGE[0], BASE_SIZE_RANGE[1], size=count)
        base_velocities = self.rng.uniform(-BASE_SPEED, BASE_SPEED, size=(count, 2))

        self.particles = [
            Particle(positions[i, 0], positions[i, 1], base_sizes[i], base_velocities[i])
            for i in range(count)
        ]
        logging.info(f"ParticleField initialized with {count} particles for a {width}x{height} canvas.")

    def positions(self) -> np.ndarray:
        """Snapshot of all positions as an (N, 2) float64 array."""
        if not self.particles:
            return np.empty((0, 2), dtype=np.float64)
        return np.array([(p.x, p.y) for p in self.particles], dtype=np.float64)

    def _ensure_pair_capacity(self, n: int) -> None:
        capacity = n * (n + 1) // 2
        if capacity <= len(self._alphas):
            return
        self._pair_a = np.empty(capacity, dtype=np.int64)
        self._pair_b = np.empty(capacity, dtype=np.int64)
        self._alphas = np.empty(capacity, dtype=np.float64)
        logging.debug(f"Pair buffers grown to {capacity} entries for {n} particles.")

    def find_pairs(self) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
        """
        Index pairs closer than max_distance and their line alphas.

        The returned arrays are views into buffers that the next call
        overwrites.
        """
        positions = self.positions()
        self._ensure_pair_capacity(positions.shape[0])
        count = _find_proximity_pairs_numba(
            positions, self.max_distance, self.max_line_alpha,
            self._pair_a, self._pair_b, self._alphas
        )
        return self._pair_a[:count], self._pair_b[:count], self._alphas[:count]

    def connect(self, surface, colors: ParticleColors) -> int:
        pair_a, pair_b, alphas = self.find_pairs()
        particles = self.particles
        for a, b, alpha in zip(pair_a, pair_b, alphas):
            pa = particles[a]
            pb = particles[b]
            surface.draw_line((pa.x, pa.y), (pb.x, pb.y), colors.line, float(alpha), self.line_width)
        return len(alphas)

    def scatter(self) -> None:
        if not self.particles:
            return
        kicks = self.rng.uniform(-self.scroll_impulse, self.scroll_impulse, size=(len(self.particles), 2))
        for particle, (kx, ky) in zip(self.particles, kicks):
            particle.vx += kx
            particle.vy += ky
