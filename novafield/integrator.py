"""Per-tick particle kinematics: motion, gravity, friction, spin, ageing and expiry."""

import numpy as np

from .kernels import integrate_particles
from .lightning import bolt_color, generate_bolt
from .params import SimulationParams
from .pool import ParticlePool
from .types import LightningBolt, PlayingCard


class KinematicIntegrator:
    def __init__(self, pool: ParticlePool, params: SimulationParams, rng: np.random.Generator):
        self.pool = pool
        self.params = params
        self.rng = rng

    def step(self) -> int:
        """Advance every live particle one tick. Returns the number expired."""
        pool = self.pool
        n = pool.count
        if n == 0:
            return 0

        self._update_payloads()

        params = self.params
        friction, lightning_friction = params.effective_friction()
        integrate_particles(
            pool.positions, pool.velocities,
            pool.rotations, pool.rotation_speeds,
            pool.ages, pool.max_lives, pool.alphas,
            pool.categories, pool.shapes,
            params.effective_gravity(), friction, lightning_friction, n
        )

        alive = (pool.ages < pool.max_lives) & (pool.alphas > 0.0)
        return pool.retain(alive)

    def _update_payloads(self):
        """Shape-specific per-tick effects, using the pre-step age."""
        pool = self.pool
        params = self.params
        interval = max(params.crackle_interval, 1)

        for i, payload in enumerate(pool.payloads):
            if isinstance(payload, LightningBolt):
                age = int(pool.ages[i])
                if age % interval == 0:
                    pool.payloads[i] = generate_bolt(
                        params.crackle_segments, self.rng,
                        params.segment_length,
                        params.lightning_spread,
                        params.lightning_wobble,
                    )
                pool.colors[i] = bolt_color(age / pool.max_lives[i], self.rng)
            elif payload is not None and not isinstance(payload, PlayingCard):
                raise TypeError(f"Unknown particle payload: {payload!r}")
