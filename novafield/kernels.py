"""
Numba JIT kernels for the per-tick hot loops.

All kernels work on flat numpy arrays owned by the particle pool and on
arrays gathered from the attractor registry; nothing here holds Python
objects. Loops are sequential on purpose: accretion mutates attractor mass
while scanning, so the visit order is part of the result.

Parameters are not range-checked, so the kernels use numpy's error model:
dividing by a zero lifetime or mass yields inf / NaN instead of raising.
"""

import math
import numpy as np
from numba import njit

# Mirrors of novafield.types codes (numba freezes module globals at compile time)
CATEGORY_TRAIL = 0
SHAPE_LIGHTNING = 3

FADE_START = 0.7


# ============================================================================
# ATTRACTOR - ATTRACTOR
# ============================================================================

@njit(cache=True, error_model="numpy")
def apply_mutual_gravity(
    positions: np.ndarray,   # (m, 2)
    velocities: np.ndarray,  # (m, 2), updated in place
    masses: np.ndarray,      # (m,)
    G: float,
    count: int
):
    """
    Symmetric pairwise gravity between attractors.
    F = G * Ma * Mb / r^2; A gains F/Ma toward B, B gains F/Mb toward A.
    Coincident pairs are skipped.
    """
    for i in range(count):
        for j in range(i + 1, count):
            dx = positions[j, 0] - positions[i, 0]
            dy = positions[j, 1] - positions[i, 1]
            r = math.sqrt(dx * dx + dy * dy)
            if r > 0.0:
                force = G * masses[i] * masses[j] / (r * r)
                a_i = force / masses[i]
                a_j = force / masses[j]
                ux = dx / r
                uy = dy / r
                velocities[i, 0] += ux * a_i
                velocities[i, 1] += uy * a_i
                velocities[j, 0] -= ux * a_j
                velocities[j, 1] -= uy * a_j


# ============================================================================
# ATTRACTOR - PARTICLE
# ============================================================================

@njit(cache=True, error_model="numpy")
def accrete_particles(
    p_positions: np.ndarray,   # (n, 2)
    p_velocities: np.ndarray,  # (n, 2), updated in place
    p_masses: np.ndarray,      # (n,)
    p_alive: np.ndarray,       # (n,) bool, cleared for absorbed particles
    a_positions: np.ndarray,   # (m, 2)
    a_masses: np.ndarray,      # (m,), grows on absorption
    a_radii: np.ndarray,       # (m,), recomputed as k * M on absorption
    a_absorbed: np.ndarray,    # (m,) int64 counters
    G: float,
    k: float,
    n: int,
    m: int
) -> int:
    """
    Capture or pull every particle.

    Particles are visited newest first and attractors in registry order;
    the first attractor whose capture radius contains the particle absorbs
    it and the scan for that particle stops. Otherwise the net force from
    all attractors is summed and a = F / m is added to the particle
    velocity (a massless particle ends up with NaN velocity and is left
    to expire).

    Returns the number of absorbed particles.
    """
    absorbed = 0
    for i in range(n - 1, -1, -1):
        px = p_positions[i, 0]
        py = p_positions[i, 1]
        pm = p_masses[i]
        fx = 0.0
        fy = 0.0
        captured = False

        for j in range(m):
            dx = a_positions[j, 0] - px
            dy = a_positions[j, 1] - py
            r = math.sqrt(dx * dx + dy * dy)

            if r <= a_radii[j]:
                a_masses[j] += pm
                a_radii[j] = k * a_masses[j]
                a_absorbed[j] += 1
                p_alive[i] = False
                captured = True
                absorbed += 1
                break

            if r > 0.0:
                force = G * a_masses[j] * pm / (r * r)
                fx += dx / r * force
                fy += dy / r * force

        if not captured:
            p_velocities[i, 0] += fx / pm
            p_velocities[i, 1] += fy / pm

    return absorbed


# ============================================================================
# KINEMATICS
# ============================================================================

@njit(cache=True, error_model="numpy")
def integrate_particles(
    positions: np.ndarray,       # (n, 2)
    velocities: np.ndarray,      # (n, 2)
    rotations: np.ndarray,       # (n,)
    rotation_speeds: np.ndarray, # (n,) zero for non-rotating particles
    ages: np.ndarray,            # (n,) int64
    max_lives: np.ndarray,       # (n,)
    alphas: np.ndarray,          # (n,)
    categories: np.ndarray,      # (n,) int8
    shapes: np.ndarray,          # (n,) int8
    gravity: float,
    friction: float,
    lightning_friction: float,
    n: int
):
    """Advance every particle by one fixed step: move, fall, drag, spin, age, fade."""
    for i in range(n):
        positions[i, 0] += velocities[i, 0]
        positions[i, 1] += velocities[i, 1]

        lightning = shapes[i] == SHAPE_LIGHTNING
        if not lightning and categories[i] != CATEGORY_TRAIL:
            velocities[i, 1] += gravity

        f = lightning_friction if lightning else friction
        velocities[i, 0] *= f
        velocities[i, 1] *= f

        rotations[i] += rotation_speeds[i]

        ages[i] += 1
        life_ratio = ages[i] / max_lives[i]
        alpha = 1.0 - life_ratio
        # Accelerated fade near the end of life
        if life_ratio > FADE_START:
            alpha *= (1.0 - life_ratio) / (1.0 - FADE_START)
        alphas[i] = alpha


def warmup_kernels():
    """Pre-compile the kernels with tiny arrays (first call otherwise stalls a frame)."""
    n, m = 4, 2
    pos = np.random.rand(n, 2) * 10.0
    vel = np.zeros((n, 2), dtype=np.float64)
    mass = np.full(n, 0.01, dtype=np.float64)
    alive = np.ones(n, dtype=np.bool_)

    a_pos = np.array([[0.0, 0.0], [50.0, 0.0]], dtype=np.float64)
    a_vel = np.zeros((m, 2), dtype=np.float64)
    a_mass = np.full(m, 1000.0, dtype=np.float64)
    a_radii = a_mass * 0.01
    a_absorbed = np.zeros(m, dtype=np.int64)

    apply_mutual_gravity(a_pos, a_vel, a_mass, 50.0, m)
    accrete_particles(pos, vel, mass, alive, a_pos, a_mass, a_radii, a_absorbed,
                      50.0, 0.01, n, m)
    integrate_particles(
        pos, vel,
        np.zeros(n, dtype=np.float64), np.zeros(n, dtype=np.float64),
        np.zeros(n, dtype=np.int64), np.full(n, 60.0, dtype=np.float64),
        np.ones(n, dtype=np.float64),
        np.zeros(n, dtype=np.int8), np.zeros(n, dtype=np.int8),
        0.08, 0.98, 0.99, n
    )
