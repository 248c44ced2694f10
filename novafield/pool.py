"""
Particle pool - flattened struct-of-arrays storage.

Particles live in pre-allocated numpy columns in insertion order, so index 0
is always the oldest particle. Removal is a stable retain/compact pass driven
by a boolean mask; nothing is deleted while a kernel is iterating.
"""

from typing import List, Optional

import numpy as np

from .types import Category, ParticleSnapshot, Payload, Shape, payload_matches


class ParticlePool:
    """Owns every live particle. Only the engine holds a reference to it."""

    def __init__(self, max_particles: int = 1000, capacity: int = 2048):
        self.max_particles = max_particles
        self.count = 0
        self._next_id = 0
        self._capacity = 0
        self._allocate(max(capacity, 1))

    # ------------------------------------------------------------------
    # Storage
    # ------------------------------------------------------------------

    def _allocate(self, capacity: int):
        """(Re)allocate every column, preserving live rows."""
        old = self._columns() if self._capacity else None

        self._ids = np.zeros(capacity, dtype=np.int64)
        self._positions = np.zeros((capacity, 2), dtype=np.float64)
        self._velocities = np.zeros((capacity, 2), dtype=np.float64)
        self._sizes = np.zeros(capacity, dtype=np.float64)
        self._colors = np.zeros((capacity, 3), dtype=np.float32)
        self._alphas = np.zeros(capacity, dtype=np.float64)
        self._ages = np.zeros(capacity, dtype=np.int64)
        self._max_lives = np.zeros(capacity, dtype=np.float64)
        self._masses = np.zeros(capacity, dtype=np.float64)
        self._rotations = np.zeros(capacity, dtype=np.float64)
        self._rotation_speeds = np.zeros(capacity, dtype=np.float64)
        self._has_rotation = np.zeros(capacity, dtype=np.bool_)
        self._categories = np.zeros(capacity, dtype=np.int8)
        self._shapes = np.zeros(capacity, dtype=np.int8)
        if old is None:
            self.payloads: List[Payload] = []

        if old is not None:
            for dst, src in zip(self._columns(), old):
                dst[:self.count] = src[:self.count]
        self._capacity = capacity

    def _columns(self):
        return (
            self._ids, self._positions, self._velocities, self._sizes,
            self._colors, self._alphas, self._ages, self._max_lives,
            self._masses, self._rotations, self._rotation_speeds,
            self._has_rotation, self._categories, self._shapes,
        )

    # Live views (length == count). Kernels mutate these in place.
    @property
    def ids(self) -> np.ndarray:
        return self._ids[:self.count]

    @property
    def positions(self) -> np.ndarray:
        return self._positions[:self.count]

    @property
    def velocities(self) -> np.ndarray:
        return self._velocities[:self.count]

    @property
    def sizes(self) -> np.ndarray:
        return self._sizes[:self.count]

    @property
    def colors(self) -> np.ndarray:
        return self._colors[:self.count]

    @property
    def alphas(self) -> np.ndarray:
        return self._alphas[:self.count]

    @property
    def ages(self) -> np.ndarray:
        return self._ages[:self.count]

    @property
    def max_lives(self) -> np.ndarray:
        return self._max_lives[:self.count]

    @property
    def masses(self) -> np.ndarray:
        return self._masses[:self.count]

    @property
    def rotations(self) -> np.ndarray:
        return self._rotations[:self.count]

    @property
    def rotation_speeds(self) -> np.ndarray:
        return self._rotation_speeds[:self.count]

    @property
    def categories(self) -> np.ndarray:
        return self._categories[:self.count]

    @property
    def shapes(self) -> np.ndarray:
        return self._shapes[:self.count]

    def __len__(self) -> int:
        return self.count

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def spawn(
        self,
        x: float,
        y: float,
        vx: float,
        vy: float,
        *,
        size: float,
        color,
        max_life: float,
        category: Category,
        shape: Shape,
        mass: float,
        rotation: Optional[float] = None,
        rotation_speed: Optional[float] = None,
        payload: Payload = None,
    ) -> int:
        """Append one particle (age 0, alpha 1) and return its id.

        Raises TypeError if the payload is not the variant ``shape`` carries.
        """
        if not payload_matches(shape, payload):
            raise TypeError(f"{Shape(shape).name} particle cannot carry {type(payload).__name__}")
        if self.count == self._capacity:
            self._allocate(self._capacity * 2)

        i = self.count
        pid = self._next_id
        self._next_id += 1

        self._ids[i] = pid
        self._positions[i] = (x, y)
        self._velocities[i] = (vx, vy)
        self._sizes[i] = size
        self._colors[i] = color
        self._alphas[i] = 1.0
        self._ages[i] = 0
        self._max_lives[i] = max_life
        self._masses[i] = mass
        rotating = rotation is not None and rotation_speed is not None
        self._rotations[i] = rotation if rotating else 0.0
        self._rotation_speeds[i] = rotation_speed if rotating else 0.0
        self._has_rotation[i] = rotating
        self._categories[i] = int(category)
        self._shapes[i] = int(shape)
        self.payloads.append(payload)

        self.count += 1
        return pid

    def retain(self, keep: np.ndarray) -> int:
        """
        Keep only rows where ``keep`` is True, preserving order.
        Returns the number of removed particles.
        """
        n = self.count
        keep = np.asarray(keep, dtype=np.bool_)
        kept = int(np.count_nonzero(keep))
        if kept == n:
            return 0

        for column in self._columns():
            column[:kept] = column[:n][keep]
        self.payloads = [p for p, k in zip(self.payloads, keep) if k]
        self.count = kept
        return n - kept

    def trim(self) -> int:
        """Drop the oldest particles above ``max_particles``."""
        excess = self.count - self.max_particles
        if excess <= 0:
            return 0
        keep = np.ones(self.count, dtype=np.bool_)
        keep[:excess] = False
        return self.retain(keep)

    def clear(self):
        self.count = 0
        self.payloads = []

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    def snapshot(self) -> ParticleSnapshot:
        """Detached, read-only copy of the live columns."""
        def frozen(column):
            copy = column[:self.count].copy()
            copy.setflags(write=False)
            return copy

        return ParticleSnapshot(
            ids=frozen(self._ids),
            positions=frozen(self._positions),
            velocities=frozen(self._velocities),
            sizes=frozen(self._sizes),
            colors=frozen(self._colors),
            alphas=frozen(self._alphas),
            ages=frozen(self._ages),
            max_lives=frozen(self._max_lives),
            masses=frozen(self._masses),
            rotations=frozen(self._rotations),
            rotation_speeds=frozen(self._rotation_speeds),
            has_rotation=frozen(self._has_rotation),
            categories=frozen(self._categories),
            shapes=frozen(self._shapes),
            payloads=tuple(self.payloads),
        )

    def total_mass(self) -> float:
        return float(self.masses.sum())
