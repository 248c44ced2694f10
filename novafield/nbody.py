"""
N-body attractor step.

Order per tick:
    a. mutual attractor gravity
    b. attractor motion
    c. merge pass
    d. particle accretion / force field
    e. critical-mass novas
"""

from dataclasses import dataclass

import numpy as np

from .attractors import AttractorRegistry
from .kernels import accrete_particles, apply_mutual_gravity
from .nova import trigger_nova
from .params import SimulationParams
from .pool import ParticlePool


@dataclass
class StepReport:
    merges: int = 0
    absorbed: int = 0
    novas: int = 0
    ejected: int = 0


class AttractorSubsystem:
    def __init__(self, registry: AttractorRegistry, pool: ParticlePool,
                 params: SimulationParams, rng: np.random.Generator):
        self.registry = registry
        self.pool = pool
        self.params = params
        self.rng = rng

    def step(self) -> StepReport:
        report = StepReport()
        if len(self.registry) == 0:
            return report

        params = self.params
        self._apply_mutual_gravity()

        for attractor in self.registry:
            attractor.x += attractor.vx
            attractor.y += attractor.vy

        for a_id, b_id, merged in self.registry.merge_overlapping(params.growth):
            print(f"[Engine] Merged attractors #{a_id} + #{b_id} -> #{merged.id} "
                  f"(M={merged.mass:.2f})")
            report.merges += 1

        report.absorbed = self._accrete()

        exploded = self.registry.retain(lambda a: a.mass < params.critical_mass)
        for attractor in exploded:
            report.ejected += trigger_nova(attractor, self.pool, params, self.rng)
            report.novas += 1
        return report

    def _apply_mutual_gravity(self):
        m = len(self.registry)
        if m < 2:
            return
        positions, velocities, masses, _, _ = self.registry.gather()
        apply_mutual_gravity(positions, velocities, masses, self.params.G, m)
        for j, attractor in enumerate(self.registry):
            attractor.vx = float(velocities[j, 0])
            attractor.vy = float(velocities[j, 1])

    def _accrete(self) -> int:
        pool = self.pool
        n = pool.count
        if n == 0:
            return 0

        m = len(self.registry)
        k = self.params.growth
        positions, _, masses, radii, absorbed = self.registry.gather()
        alive = np.ones(n, dtype=np.bool_)

        captured = accrete_particles(
            pool.positions, pool.velocities, pool.masses, alive,
            positions, masses, radii, absorbed,
            self.params.G, k, n, m
        )

        if captured:
            for j, attractor in enumerate(self.registry):
                if absorbed[j] != attractor.absorbed:
                    attractor.set_mass(float(masses[j]), k)
                    attractor.absorbed = int(absorbed[j])
            pool.retain(alive)
        return int(captured)
