"""Lightning bolt polylines and their life-dependent colouring."""

import math

import numpy as np

from .colors import RGB, hsl_to_rgb
from .types import LightningBolt


def generate_bolt(
    segments: int,
    rng: np.random.Generator,
    segment_length=(15.0, 25.0),
    spread_deg: float = 60.0,
    wobble_deg: float = 45.0,
) -> LightningBolt:
    """
    Random polyline of ``segments + 1`` points starting at the origin.

    One base direction is chosen per bolt; each segment heads along
    base + U(-spread, spread) + U(-wobble, wobble) for a length of
    base_len + U(0, spread_len).
    """
    base_length, length_spread = segment_length
    spread = math.radians(spread_deg)
    wobble = math.radians(wobble_deg)

    points = np.zeros((segments + 1, 2), dtype=np.float64)
    base_angle = rng.uniform(0.0, 2.0 * math.pi)
    for i in range(1, segments + 1):
        angle = base_angle + rng.uniform(-spread, spread) + rng.uniform(-wobble, wobble)
        distance = base_length + rng.uniform(0.0, length_spread)
        points[i, 0] = points[i - 1, 0] + math.cos(angle) * distance
        points[i, 1] = points[i - 1, 1] + math.sin(angle) * distance

    points.setflags(write=False)
    return LightningBolt(points=points)


def bolt_color(life_ratio: float, rng: np.random.Generator) -> RGB:
    """Electric blue early, violet mid-life, red-orange near the end."""
    if life_ratio < 0.3:
        return hsl_to_rgb(200.0 + life_ratio * 100.0, 1.0, 0.70 + rng.uniform(0.0, 0.1))
    if life_ratio < 0.6:
        return hsl_to_rgb(260.0 + life_ratio * 80.0, 1.0, 0.60 + rng.uniform(0.0, 0.1))
    return hsl_to_rgb(10.0 + life_ratio * 40.0, 1.0, 0.50 + rng.uniform(0.0, 0.1))
