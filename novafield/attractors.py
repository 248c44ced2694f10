"""Attractor records and the registry that owns them."""

import math
from dataclasses import dataclass
from typing import Iterator, List, Optional, Tuple

import numpy as np

from .types import AttractorView


@dataclass
class Attractor:
    """
    A point-mass gravity well.

    The capture radius is always ``k * mass``; use :meth:`set_mass` for every
    mass change so the two never drift apart.
    """
    id: int
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    mass: float = 0.0
    radius: float = 0.0
    absorbed: int = 0

    def set_mass(self, mass: float, k: float):
        self.mass = mass
        self.radius = k * mass

    def distance_to(self, x: float, y: float) -> float:
        return math.hypot(x - self.x, y - self.y)

    def view(self) -> AttractorView:
        return AttractorView(
            id=self.id, x=self.x, y=self.y, vx=self.vx, vy=self.vy,
            mass=self.mass, radius=self.radius, absorbed=self.absorbed,
        )


def merge(a: Attractor, b: Attractor, new_id: int, k: float) -> Attractor:
    """Combine two attractors conserving mass and momentum."""
    total = a.mass + b.mass
    merged = Attractor(
        id=new_id,
        x=(a.mass * a.x + b.mass * b.x) / total,
        y=(a.mass * a.y + b.mass * b.y) / total,
        vx=(a.mass * a.vx + b.mass * b.vx) / total,
        vy=(a.mass * a.vy + b.mass * b.vy) / total,
        absorbed=a.absorbed + b.absorbed,
    )
    merged.set_mass(total, k)
    return merged


class AttractorRegistry:
    """Ordered collection of live attractors with never-reused ids."""

    def __init__(self):
        self._attractors: List[Attractor] = []
        self._next_id = 0

    def __len__(self) -> int:
        return len(self._attractors)

    def __iter__(self) -> Iterator[Attractor]:
        return iter(self._attractors)

    def __getitem__(self, index: int) -> Attractor:
        return self._attractors[index]

    def _allocate_id(self) -> int:
        aid = self._next_id
        self._next_id += 1
        return aid

    def create(self, x: float, y: float, vx: float, vy: float,
               mass: float, k: float) -> Attractor:
        attractor = Attractor(id=self._allocate_id(), x=x, y=y, vx=vx, vy=vy)
        attractor.set_mass(mass, k)
        self._attractors.append(attractor)
        return attractor

    def get(self, attractor_id: int) -> Optional[Attractor]:
        for attractor in self._attractors:
            if attractor.id == attractor_id:
                return attractor
        return None

    def remove(self, attractor_id: int) -> bool:
        for i, attractor in enumerate(self._attractors):
            if attractor.id == attractor_id:
                del self._attractors[i]
                return True
        return False

    def retain(self, keep) -> List[Attractor]:
        """Keep attractors where ``keep(a)`` is true; return the removed ones."""
        removed = [a for a in self._attractors if not keep(a)]
        if removed:
            self._attractors = [a for a in self._attractors if keep(a)]
        return removed

    def clear(self):
        self._attractors = []

    def apply_growth(self, k: float):
        """Recompute every radius as k * M after the growth factor changes."""
        for attractor in self._attractors:
            attractor.set_mass(attractor.mass, k)

    def hit_test(self, x: float, y: float) -> Optional[int]:
        """Id of the most recently created attractor whose radius covers (x, y)."""
        for attractor in reversed(self._attractors):
            if attractor.distance_to(x, y) <= attractor.radius:
                return attractor.id
        return None

    # ------------------------------------------------------------------
    # Merging
    # ------------------------------------------------------------------

    def merge_overlapping(self, k: float) -> List[Tuple[int, int, Attractor]]:
        """
        Single merge pass over index pairs (i < j) in registry order.

        Pairs merge when their distance is at most the sum of their radii.
        Each attractor takes part in at most one merge per pass; merged
        products go after the survivors and are only rescanned next pass.
        Returns (id_a, id_b, merged) for every merge performed.
        """
        count = len(self._attractors)
        consumed = [False] * count
        products: List[Attractor] = []
        merges: List[Tuple[int, int, Attractor]] = []

        for i in range(count):
            if consumed[i]:
                continue
            a = self._attractors[i]
            for j in range(i + 1, count):
                if consumed[j]:
                    continue
                b = self._attractors[j]
                if a.distance_to(b.x, b.y) <= a.radius + b.radius:
                    consumed[i] = consumed[j] = True
                    merged = merge(a, b, self._allocate_id(), k)
                    products.append(merged)
                    merges.append((a.id, b.id, merged))
                    break

        if merges:
            survivors = [a for a, gone in zip(self._attractors, consumed) if not gone]
            self._attractors = survivors + products
        return merges

    # ------------------------------------------------------------------
    # Array exchange with the kernels
    # ------------------------------------------------------------------

    def gather(self):
        """Positions (m,2), velocities (m,2), masses (m,), radii (m,), absorbed (m,)."""
        m = len(self._attractors)
        positions = np.empty((m, 2), dtype=np.float64)
        velocities = np.empty((m, 2), dtype=np.float64)
        masses = np.empty(m, dtype=np.float64)
        radii = np.empty(m, dtype=np.float64)
        absorbed = np.empty(m, dtype=np.int64)
        for j, a in enumerate(self._attractors):
            positions[j] = (a.x, a.y)
            velocities[j] = (a.vx, a.vy)
            masses[j] = a.mass
            radii[j] = a.radius
            absorbed[j] = a.absorbed
        return positions, velocities, masses, radii, absorbed

    def views(self) -> Tuple[AttractorView, ...]:
        return tuple(a.view() for a in self._attractors)
