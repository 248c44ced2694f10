"""
Mutable simulation parameters.

Defaults come from ``config.particles``. The engine reads every field on each
tick / emission, so reassigning a field takes effect immediately. Values are
not range-checked: a negative mass or lifetime is accepted and simply produces
odd motion.
"""

import copy
from dataclasses import dataclass, field, fields
from typing import Dict, List, Tuple

from config import particles as config

from .types import Category, Shape


@dataclass
class EmitterSettings:
    """Spawn rules for one interaction category."""
    enabled: bool = True
    shape: Shape = Shape.CIRCLE
    count: int = 1
    lifetime: float = 60.0
    lifetime_jitter: float = 40.0
    speed: Tuple[float, float] = (1.0, 0.0)       # (base, spread)
    size: Tuple[float, float] = (2.0, 4.0)
    spin: float = 0.0                              # 0 = particles do not rotate
    angle_jitter: float = 0.0
    palette: List[str] = field(default_factory=list)
    # Lightning overrides
    lightning_speed: Tuple[float, float] = (2.0, 3.0)
    lightning_size: Tuple[float, float] = (4.0, 6.0)
    lightning_lifetime_jitter: float = 60.0
    segments: int = 8
    # Wave emission (secondary only)
    waves: int = 1
    wave_delay_ms: float = 0.0
    wave_speed_step: float = 0.0
    lightning_wave_speed_step: float = 0.0

    def __post_init__(self):
        self.shape = Shape.parse(self.shape)

    @classmethod
    def from_config(cls, cfg: dict) -> "EmitterSettings":
        lightning = cfg.get("lightning", {})
        return cls(
            enabled=bool(cfg["enabled"]),
            shape=cfg["shape"],
            count=int(cfg["count"]),
            lifetime=float(cfg["lifetime"]),
            lifetime_jitter=float(cfg["lifetime_jitter"]),
            speed=tuple(cfg["speed"]),
            size=tuple(cfg["size"]),
            spin=float(cfg.get("spin", 0.0)),
            angle_jitter=float(cfg.get("angle_jitter", 0.0)),
            palette=list(cfg["palette"]),
            lightning_speed=tuple(lightning.get("speed", cfg["speed"])),
            lightning_size=tuple(lightning.get("size", cfg["size"])),
            lightning_lifetime_jitter=float(lightning.get("lifetime_jitter", cfg["lifetime_jitter"])),
            segments=int(lightning.get("segments", 8)),
            waves=int(cfg.get("waves", 1)),
            wave_delay_ms=float(cfg.get("wave_delay_ms", 0.0)),
            wave_speed_step=float(cfg.get("wave_speed_step", 0.0)),
            lightning_wave_speed_step=float(lightning.get("wave_speed_step", 0.0)),
        )


@dataclass
class SimulationParams:
    # Pool
    max_particles: int = 1000
    tick_rate: float = 60.0

    # Kinematics
    advanced: bool = False
    base_gravity: float = 0.08
    base_friction: float = 0.98
    lightning_friction: float = 0.99
    gravity: float = 0.08
    friction: float = 0.98
    speed_multiplier: float = 1.0
    trail_min_distance: float = 5.0
    trail_jitter: float = 5.0

    # Attractors
    G: float = 50.0
    growth: float = 0.01
    particle_mass: float = 0.01
    initial_attractor_mass: float = 1000.0
    critical_mass: float = 10000.0

    # Nova
    nova_count: int = 200
    nova_speed: float = 10.0
    nova_speed_range: Tuple[float, float] = (0.8, 1.2)
    nova_angle_jitter: float = 0.1
    nova_size: Tuple[float, float] = (3.0, 6.0)
    nova_lifetime: float = 120.0
    nova_lifetime_jitter: float = 60.0
    nova_spin: float = 0.3
    nova_colors: List[str] = field(default_factory=lambda: list(config.NOVA["colors"]))

    # Lightning
    crackle_interval: int = 3
    crackle_segments: int = 5
    segment_length: Tuple[float, float] = (15.0, 25.0)
    lightning_spread: float = 60.0
    lightning_wobble: float = 45.0

    heart_palette: List[str] = field(default_factory=lambda: list(config.HEART_PALETTE))
    emitters: Dict[Category, EmitterSettings] = field(default_factory=dict)

    @classmethod
    def from_config(cls) -> "SimulationParams":
        """Build parameters from the module-level config dictionaries."""
        sim, phys, attr = config.SIMULATION, config.PHYSICS, config.ATTRACTOR
        nova, bolt = config.NOVA, config.LIGHTNING
        return cls(
            max_particles=int(sim["max_particles"]),
            tick_rate=float(sim["tick_rate"]),
            advanced=bool(phys["advanced"]),
            base_gravity=float(phys["gravity"]),
            base_friction=float(phys["friction"]),
            lightning_friction=float(phys["lightning_friction"]),
            gravity=float(phys["gravity"]),
            friction=float(phys["friction"]),
            speed_multiplier=float(phys["speed_multiplier"]),
            trail_min_distance=float(phys["trail_min_distance"]),
            trail_jitter=float(phys["trail_jitter"]),
            G=float(attr["G"]),
            growth=float(attr["growth"]),
            particle_mass=float(attr["particle_mass"]),
            initial_attractor_mass=float(attr["initial_mass"]),
            critical_mass=float(attr["critical_mass"]),
            nova_count=int(nova["count"]),
            nova_speed=float(nova["speed"]),
            nova_speed_range=tuple(nova["speed_range"]),
            nova_angle_jitter=float(nova["angle_jitter"]),
            nova_size=tuple(nova["size"]),
            nova_lifetime=float(nova["lifetime"]),
            nova_lifetime_jitter=float(nova["lifetime_jitter"]),
            nova_spin=float(nova["spin"]),
            nova_colors=list(nova["colors"]),
            crackle_interval=int(bolt["crackle_interval"]),
            crackle_segments=int(bolt["crackle_segments"]),
            segment_length=tuple(bolt["segment_length"]),
            lightning_spread=float(bolt["spread"]),
            lightning_wobble=float(bolt["wobble"]),
            heart_palette=list(config.HEART_PALETTE),
            emitters={
                Category[name.upper()]: EmitterSettings.from_config(cfg)
                for name, cfg in config.EMITTERS.items()
            },
        )

    # -- effective values ----------------------------------------------------

    def effective_gravity(self) -> float:
        return self.gravity if self.advanced else self.base_gravity

    def effective_friction(self) -> Tuple[float, float]:
        """(normal, lightning) friction factors for this tick."""
        if self.advanced:
            return self.friction, self.friction
        return self.base_friction, self.lightning_friction

    def speed_scale(self) -> float:
        return self.speed_multiplier if self.advanced else 1.0

    # -- updates -------------------------------------------------------------

    def configure(self, **overrides) -> None:
        """Assign several fields at once. Unknown names raise KeyError."""
        known = {f.name for f in fields(self)}
        for name in overrides:
            if name not in known or name == "emitters":
                raise KeyError(f"Unknown simulation parameter: {name}")
        for name, value in overrides.items():
            setattr(self, name, value)

    def configure_emitter(self, category, **overrides) -> None:
        settings = self.emitters[Category.parse(category)]
        known = {f.name for f in fields(settings)}
        for name in overrides:
            if name not in known:
                raise KeyError(f"Unknown emitter parameter: {name}")
        for name, value in overrides.items():
            if name == "shape":
                value = Shape.parse(value)
            setattr(settings, name, value)

    def copy(self) -> "SimulationParams":
        return copy.deepcopy(self)
