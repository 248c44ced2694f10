"""Nova - converting an over-critical attractor back into particles."""

import math

import numpy as np

from .attractors import Attractor
from .colors import palette_to_array, pick
from .emission import sample
from .params import SimulationParams
from .pool import ParticlePool
from .types import Category, Shape


def trigger_nova(attractor: Attractor, pool: ParticlePool, params: SimulationParams,
                 rng: np.random.Generator) -> int:
    """
    Eject ``params.nova_count`` star particles sharing the attractor's mass.

    Each ejecta leaves at angle 2*pi*i/N (small jitter) from a point inside a
    disk of radius R/2, with radial speed nova_speed * U(lo, hi) plus the
    attractor's own velocity. Returns the number of particles created.
    """
    count = params.nova_count
    if count <= 0:
        return 0

    mass_each = attractor.mass / count
    palette = palette_to_array(params.nova_colors)
    lo, hi = params.nova_speed_range
    disk = 0.5 * attractor.radius

    for i in range(count):
        angle = 2.0 * math.pi * i / count + (rng.random() - 0.5) * params.nova_angle_jitter
        ux, uy = math.cos(angle), math.sin(angle)
        offset = disk * math.sqrt(rng.random())
        speed = params.nova_speed * rng.uniform(lo, hi)

        pool.spawn(
            attractor.x + ux * offset,
            attractor.y + uy * offset,
            ux * speed + attractor.vx,
            uy * speed + attractor.vy,
            size=sample(params.nova_size, rng),
            color=pick(palette, rng),
            max_life=params.nova_lifetime + rng.uniform(0.0, params.nova_lifetime_jitter),
            category=Category.PRIMARY,
            shape=Shape.STAR,
            mass=mass_each,
            rotation=rng.uniform(0.0, 2.0 * math.pi),
            rotation_speed=(rng.random() - 0.5) * params.nova_spin,
        )

    print(f"[Engine] Nova: attractor #{attractor.id} exploded "
          f"(M={attractor.mass:.2f}) into {count} particles")
    return count
