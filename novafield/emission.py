"""Particle emission for the three interaction categories."""

import math
from typing import Optional

import numpy as np

from .colors import palette_to_array, pick
from .lightning import generate_bolt
from .params import EmitterSettings, SimulationParams
from .pool import ParticlePool
from .types import Category, PlayingCard, Shape, Suit

SUITS = list(Suit)


def sample(value_range, rng: np.random.Generator) -> float:
    """(base, spread) -> base + U(0, spread)."""
    base, spread = value_range
    return base + rng.uniform(0.0, spread)


class Emitter:
    """
    Creates particles in the pool. Gating on pause / teardown is done by the
    engine; the per-category ``enabled`` flag is checked here.
    """

    def __init__(self, pool: ParticlePool, params: SimulationParams, rng: np.random.Generator):
        self.pool = pool
        self.params = params
        self.rng = rng
        self.last_trail_point = (0.0, 0.0)

    def settings(self, category: Category) -> EmitterSettings:
        return self.params.emitters[category]

    # ------------------------------------------------------------------
    # Entry points
    # ------------------------------------------------------------------

    def emit_trail(self, x: float, y: float) -> int:
        """Pointer-motion burst, debounced by distance travelled since the last burst."""
        settings = self.settings(Category.TRAIL)
        if not settings.enabled:
            return 0

        last_x, last_y = self.last_trail_point
        if math.hypot(x - last_x, y - last_y) < self.params.trail_min_distance:
            return 0
        self.last_trail_point = (x, y)

        shape = Shape.parse(settings.shape)
        jitter = self.params.trail_jitter
        speed_range = settings.lightning_speed if shape == Shape.LIGHTNING else settings.speed
        palette = self._palette(settings, shape)
        rng = self.rng

        for _ in range(settings.count):
            angle = rng.uniform(0.0, 2.0 * math.pi)
            speed = sample(speed_range, rng) * self.params.speed_scale()
            self._spawn(
                settings, palette, Category.TRAIL, shape,
                x + rng.uniform(-jitter, jitter),
                y + rng.uniform(-jitter, jitter),
                angle, speed,
            )
        return settings.count

    def emit_primary(self, x: float, y: float) -> int:
        """Radial burst with evenly spaced angles (plus a little jitter)."""
        settings = self.settings(Category.PRIMARY)
        if not settings.enabled:
            return 0

        shape = Shape.parse(settings.shape)
        speed_range = settings.lightning_speed if shape == Shape.LIGHTNING else settings.speed
        count = settings.count
        palette = self._palette(settings, shape)
        rng = self.rng

        for i in range(count):
            angle = 2.0 * math.pi * i / count + rng.uniform(0.0, settings.angle_jitter)
            speed = sample(speed_range, rng) * self.params.speed_scale()
            self._spawn(settings, palette, Category.PRIMARY, shape, x, y, angle, speed)
        return count

    def emit_wave(self, x: float, y: float, wave: int) -> int:
        """One ring of a secondary burst; later waves are faster."""
        settings = self.settings(Category.SECONDARY)
        if not settings.enabled:
            return 0

        shape = Shape.parse(settings.shape)
        lightning = shape == Shape.LIGHTNING
        speed_range = settings.lightning_speed if lightning else settings.speed
        step = settings.lightning_wave_speed_step if lightning else settings.wave_speed_step
        wave_count = settings.count // max(settings.waves, 1)
        palette = self._palette(settings, shape)
        rng = self.rng

        for i in range(wave_count):
            angle = 2.0 * math.pi * i / wave_count
            speed = (sample(speed_range, rng) + wave * step) * self.params.speed_scale()
            self._spawn(settings, palette, Category.SECONDARY, shape, x, y, angle, speed,
                        rotation=angle)
        return wave_count

    # ------------------------------------------------------------------
    # Shared spawn rules
    # ------------------------------------------------------------------

    def _palette(self, settings: EmitterSettings, shape: Shape) -> np.ndarray:
        """Parsed colours for one burst; hearts always use the heart palette."""
        if shape == Shape.HEART:
            return palette_to_array(self.params.heart_palette)
        return palette_to_array(settings.palette)

    def _spawn(
        self,
        settings: EmitterSettings,
        palette: np.ndarray,
        category: Category,
        shape: Shape,
        x: float,
        y: float,
        angle: float,
        speed: float,
        rotation: Optional[float] = None,
    ) -> int:
        rng = self.rng
        lightning = shape == Shape.LIGHTNING

        if lightning:
            size = sample(settings.lightning_size, rng)
            max_life = settings.lifetime * 2 + rng.uniform(0.0, settings.lightning_lifetime_jitter)
        else:
            size = sample(settings.size, rng)
            max_life = settings.lifetime + rng.uniform(0.0, settings.lifetime_jitter)

        rotation_speed = None
        if settings.spin:
            if rotation is None:
                rotation = rng.uniform(0.0, 2.0 * math.pi)
            rotation_speed = (rng.random() - 0.5) * settings.spin
        else:
            rotation = None

        payload = None
        if lightning:
            payload = generate_bolt(
                settings.segments, rng,
                self.params.segment_length,
                self.params.lightning_spread,
                self.params.lightning_wobble,
            )
        elif shape == Shape.CARD:
            payload = PlayingCard(suit=SUITS[rng.integers(len(SUITS))])

        return self.pool.spawn(
            x, y,
            math.cos(angle) * speed,
            math.sin(angle) * speed,
            size=size,
            color=pick(palette, rng),
            max_life=max_life,
            category=category,
            shape=shape,
            mass=self.params.particle_mass,
            rotation=rotation,
            rotation_speed=rotation_speed,
            payload=payload,
        )
