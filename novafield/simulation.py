"""
Particle / attractor simulation engine.

The engine exclusively owns the particle pool, the attractor registry, the
parameters and the command queue. Hosts drive it by calling :meth:`tick` at a
fixed rate, issue commands through the methods below (or :meth:`post` from
another thread) and read :meth:`snapshot` for rendering.

Tick order:
    1. drain queued / due deferred commands
    2. attractor subsystem (if attractor mode is on)
    3. kinematic integration (unless particles are frozen)
    4. population cap
"""

import functools
from dataclasses import dataclass
from typing import Optional

import numpy as np

from config import particles as config

from .attractors import AttractorRegistry
from .emission import Emitter
from .integrator import KinematicIntegrator
from .nbody import AttractorSubsystem
from .params import SimulationParams
from .pool import ParticlePool
from .scheduler import CommandQueue
from .types import AttractorView, Category, Snapshot


@dataclass
class TickReport:
    tick: int
    merges: int = 0
    absorbed: int = 0
    novas: int = 0
    expired: int = 0
    trimmed: int = 0


class ParticleSimulation:
    """Real-time particle and attractor physics engine."""

    def __init__(self, params: Optional[SimulationParams] = None,
                 rng: Optional[np.random.Generator] = None):
        self.params = params if params is not None else SimulationParams.from_config()
        self.rng = rng if rng is not None else np.random.default_rng()

        self.pool = ParticlePool(
            max_particles=self.params.max_particles,
            capacity=int(config.SIMULATION["initial_capacity"]),
        )
        self.registry = AttractorRegistry()
        self.commands = CommandQueue()

        self.emitter = Emitter(self.pool, self.params, self.rng)
        self.attractors = AttractorSubsystem(self.registry, self.pool, self.params, self.rng)
        self.integrator = KinematicIntegrator(self.pool, self.params, self.rng)

        self.width = 0.0
        self.height = 0.0
        self.running = False
        self.paused = False
        self.frozen = False
        self.attractor_mode = False
        self.tick_count = 0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def initialize(self, width: float, height: float):
        """Bind the simulation surface and start accepting ticks and commands."""
        self.width = float(width)
        self.height = float(height)
        self.running = True
        print(f"[Engine] Initialized {int(width)}x{int(height)} surface")

    def resize(self, width: float, height: float):
        self.width = float(width)
        self.height = float(height)

    def destroy(self):
        """Stop ticking, drop pending waves and clear the pool."""
        self.running = False
        self.commands.clear()
        self.pool.clear()
        print("[Engine] Destroyed")

    @property
    def clock_ms(self) -> float:
        """Simulation time; advances only with ticks."""
        return self.tick_count * 1000.0 / self.params.tick_rate

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self) -> Optional[TickReport]:
        """Advance one fixed step. Returns None when paused or not running."""
        if not self.running or self.paused:
            return None

        self.commands.drain(self.clock_ms)
        report = TickReport(tick=self.tick_count)

        if self.attractor_mode:
            step = self.attractors.step()
            report.merges = step.merges
            report.absorbed = step.absorbed
            report.novas = step.novas

        if not self.frozen:
            report.expired = self.integrator.step()

        self.pool.max_particles = self.params.max_particles
        report.trimmed = self.pool.trim()

        self.tick_count += 1
        return report

    def run(self, ticks: int):
        for _ in range(ticks):
            self.tick()

    # ------------------------------------------------------------------
    # Emission
    # ------------------------------------------------------------------

    def _accepting_input(self) -> bool:
        return self.running and not self.paused

    def emit_trail(self, x: float, y: float) -> int:
        if not self._accepting_input():
            return 0
        return self.emitter.emit_trail(x, y)

    def emit_primary(self, x: float, y: float) -> int:
        if not self._accepting_input():
            return 0
        return self.emitter.emit_primary(x, y)

    def emit_secondary(self, x: float, y: float) -> int:
        """
        Expanding-ring burst. Wave 0 is emitted now; wave i is queued
        i * wave_delay_ms of simulation time later. Returns the particles
        emitted immediately.
        """
        if not self._accepting_input():
            return 0
        settings = self.params.emitters[Category.SECONDARY]
        if not settings.enabled:
            return 0

        emitted = 0
        now = self.clock_ms
        for wave in range(settings.waves):
            delay = wave * settings.wave_delay_ms
            if delay <= 0:
                emitted += self.emitter.emit_wave(x, y, wave)
            else:
                self.commands.schedule(
                    now + delay, functools.partial(self.emitter.emit_wave, x, y, wave)
                )
        return emitted

    # ------------------------------------------------------------------
    # Attractor commands (unknown ids and a stopped engine are no-ops)
    # ------------------------------------------------------------------

    def _live_attractor(self, attractor_id: int):
        return self.registry.get(attractor_id) if self.running else None

    def create_attractor(self, x: float, y: float, vx: float = 0.0, vy: float = 0.0) -> Optional[int]:
        """Add an attractor with the initial mass and switch attractor mode on."""
        if not self.running:
            return None
        attractor = self.registry.create(
            x, y, vx, vy, self.params.initial_attractor_mass, self.params.growth
        )
        self.attractor_mode = True
        print(f"[Engine] Created attractor #{attractor.id} at ({x:.0f}, {y:.0f})")
        return attractor.id

    def move_attractor(self, attractor_id: int, x: float, y: float) -> bool:
        attractor = self._live_attractor(attractor_id)
        if attractor is None:
            return False
        attractor.x = x
        attractor.y = y
        return True

    def set_attractor_velocity(self, attractor_id: int, vx: float, vy: float) -> bool:
        attractor = self._live_attractor(attractor_id)
        if attractor is None:
            return False
        attractor.vx = vx
        attractor.vy = vy
        return True

    def set_attractor_mass(self, attractor_id: int, mass: float) -> bool:
        attractor = self._live_attractor(attractor_id)
        if attractor is None:
            return False
        attractor.set_mass(mass, self.params.growth)
        return True

    def destroy_attractor(self, attractor_id: int) -> bool:
        if not self.running:
            return False
        removed = self.registry.remove(attractor_id)
        if removed:
            print(f"[Engine] Destroyed attractor #{attractor_id}")
        return removed

    def destroy_all_attractors(self):
        if not self.running:
            return
        self.registry.clear()
        self.attractor_mode = False

    def reset_all_attractors(self):
        """Back to initial mass / radius, at rest, keeping ids and positions."""
        if not self.running:
            return
        for attractor in self.registry:
            attractor.set_mass(self.params.initial_attractor_mass, self.params.growth)
            attractor.absorbed = 0
            attractor.vx = 0.0
            attractor.vy = 0.0

    def toggle_attractor_mode(self) -> bool:
        """Flip attractor mode; enabling it with none present adds one at the centre."""
        if not self.running:
            return self.attractor_mode
        self.attractor_mode = not self.attractor_mode
        if self.attractor_mode and len(self.registry) == 0:
            self.create_attractor(self.width / 2, self.height / 2)
        print(f"[Engine] Attractor mode {'on' if self.attractor_mode else 'off'}")
        return self.attractor_mode

    def hit_test_attractor(self, x: float, y: float) -> Optional[int]:
        return self.registry.hit_test(x, y)

    def get_attractor(self, attractor_id: int) -> Optional[AttractorView]:
        attractor = self.registry.get(attractor_id)
        return attractor.view() if attractor is not None else None

    def first_attractor(self) -> Optional[AttractorView]:
        return self.registry[0].view() if len(self.registry) else None

    # ------------------------------------------------------------------
    # Control surface
    # ------------------------------------------------------------------

    def pause(self):
        self.paused = True

    def resume(self):
        self.paused = False

    def toggle_pause(self) -> bool:
        self.paused = not self.paused
        return self.paused

    def freeze_particles(self):
        self.frozen = True

    def unfreeze_particles(self):
        """Unfreezing resets the scene: the whole pool is cleared."""
        self.frozen = False
        self.clear_particles()

    def toggle_freeze(self) -> bool:
        if self.frozen:
            self.unfreeze_particles()
        else:
            self.freeze_particles()
        return self.frozen

    def clear_particles(self):
        self.pool.clear()

    def configure(self, **overrides):
        """Set global parameters; they apply from the next tick / emission.

        A new growth factor also rescales the radius of every live attractor.
        """
        self.params.configure(**overrides)
        if "growth" in overrides:
            self.registry.apply_growth(self.params.growth)

    def configure_emitter(self, category, **overrides):
        self.params.configure_emitter(category, **overrides)

    def post(self, command, *args, **kwargs):
        """Thread-safe: queue ``command(*args, **kwargs)`` for the tick thread."""
        self.commands.post(functools.partial(command, *args, **kwargs))

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------

    @property
    def particle_count(self) -> int:
        return self.pool.count

    @property
    def attractor_count(self) -> int:
        return len(self.registry)

    def total_mass(self) -> float:
        """Mass held by particles plus attractors."""
        return self.pool.total_mass() + sum(a.mass for a in self.registry)

    def snapshot(self) -> Snapshot:
        return Snapshot(
            tick=self.tick_count,
            particles=self.pool.snapshot(),
            attractors=self.registry.views(),
            attractor_mode=self.attractor_mode,
            paused=self.paused,
            frozen=self.frozen,
        )
