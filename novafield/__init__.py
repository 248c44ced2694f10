"""Real-time particle and attractor physics for an interactive visual toy."""

from .params import EmitterSettings, SimulationParams
from .simulation import ParticleSimulation, TickReport
from .types import (
    AttractorView,
    Category,
    LightningBolt,
    ParticleSnapshot,
    ParticleView,
    PlayingCard,
    Shape,
    Snapshot,
    Suit,
)

__all__ = [
    "ParticleSimulation",
    "TickReport",
    "SimulationParams",
    "EmitterSettings",
    "Category",
    "Shape",
    "Suit",
    "LightningBolt",
    "PlayingCard",
    "ParticleView",
    "AttractorView",
    "ParticleSnapshot",
    "Snapshot",
]
