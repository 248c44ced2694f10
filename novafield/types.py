"""Particle / attractor record types and read-only snapshots."""

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Optional, Tuple, Union

import numpy as np


class Category(IntEnum):
    """Interaction that produced a particle."""
    TRAIL = 0
    PRIMARY = 1
    SECONDARY = 2

    @classmethod
    def parse(cls, value) -> "Category":
        if isinstance(value, str):
            return cls[value.upper()]
        return cls(value)


class Shape(IntEnum):
    CIRCLE = 0
    STAR = 1
    DIAMOND = 2
    LIGHTNING = 3
    HEART = 4
    CARD = 5

    @classmethod
    def parse(cls, value) -> "Shape":
        """Accept a Shape, its int code, or its lowercase name ("heart")."""
        if isinstance(value, str):
            return cls[value.upper()]
        return cls(value)


class Suit(Enum):
    SPADE = "spade"
    HEART = "heart"
    DIAMOND = "diamond"
    CLUB = "club"


# ----------------------------------------------------------------------------
# Shape payloads (one variant per shape that needs extra data)
# ----------------------------------------------------------------------------

@dataclass
class LightningBolt:
    """Polyline relative to the particle position, shape (segments + 1, 2)."""
    points: np.ndarray

    @property
    def segments(self) -> int:
        return len(self.points) - 1


@dataclass(frozen=True)
class PlayingCard:
    suit: Suit


Payload = Union[LightningBolt, PlayingCard, None]


def payload_matches(shape: Shape, payload: Payload) -> bool:
    """True if the payload variant is the one ``shape`` carries."""
    if shape == Shape.LIGHTNING:
        return isinstance(payload, LightningBolt)
    if shape == Shape.CARD:
        return isinstance(payload, PlayingCard)
    return payload is None


# ----------------------------------------------------------------------------
# Read-only views handed to renderers and tests
# ----------------------------------------------------------------------------

@dataclass(frozen=True)
class ParticleView:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    size: float
    color: Tuple[float, float, float]
    alpha: float
    age: int
    max_life: float
    category: Category
    shape: Shape
    mass: float
    rotation: Optional[float] = None
    rotation_speed: Optional[float] = None
    payload: Payload = None


@dataclass(frozen=True)
class AttractorView:
    id: int
    x: float
    y: float
    vx: float
    vy: float
    mass: float
    radius: float
    absorbed: int


@dataclass(frozen=True)
class ParticleSnapshot:
    """
    Column copies of the live particle pool.

    Arrays are detached from the pool and flagged read-only, so a renderer
    can upload them directly (e.g. into a VBO) without touching engine state.
    """
    ids: np.ndarray
    positions: np.ndarray
    velocities: np.ndarray
    sizes: np.ndarray
    colors: np.ndarray
    alphas: np.ndarray
    ages: np.ndarray
    max_lives: np.ndarray
    masses: np.ndarray
    rotations: np.ndarray
    rotation_speeds: np.ndarray
    has_rotation: np.ndarray
    categories: np.ndarray
    shapes: np.ndarray
    payloads: Tuple[Payload, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.ids)

    def __iter__(self):
        for i in range(len(self.ids)):
            yield self.view(i)

    def view(self, i: int) -> ParticleView:
        rotating = bool(self.has_rotation[i])
        return ParticleView(
            id=int(self.ids[i]),
            x=float(self.positions[i, 0]),
            y=float(self.positions[i, 1]),
            vx=float(self.velocities[i, 0]),
            vy=float(self.velocities[i, 1]),
            size=float(self.sizes[i]),
            color=tuple(float(c) for c in self.colors[i]),
            alpha=float(self.alphas[i]),
            age=int(self.ages[i]),
            max_life=float(self.max_lives[i]),
            category=Category(int(self.categories[i])),
            shape=Shape(int(self.shapes[i])),
            mass=float(self.masses[i]),
            rotation=float(self.rotations[i]) if rotating else None,
            rotation_speed=float(self.rotation_speeds[i]) if rotating else None,
            payload=self.payloads[i],
        )

    @property
    def total_mass(self) -> float:
        return float(self.masses.sum())


@dataclass(frozen=True)
class Snapshot:
    """Everything a renderer needs for one frame."""
    tick: int
    particles: ParticleSnapshot
    attractors: Tuple[AttractorView, ...]
    attractor_mode: bool
    paused: bool
    frozen: bool
