"""Main application class that ties everything together."""

from typing import Optional

import numpy as np
import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import particles as config
from novafield import ParticleSimulation
from novafield.colors import hex_to_rgb
from novafield.kernels import warmup_kernels
from rendering import Grid, ParticleRenderer, TextRenderer
from tools.presets import build_params
from .input_handler import InputHandler

HELP_LINES = [
    "Move: trail | L-click: burst / drag attractor | R-click: rings",
    "SPACE pause | F freeze | A attractors | C create mode | R reset | X destroy",
    "G grid | V horizons | BKSP clear | 1-9 presets | H help | ESC quit",
]


class Application:
    """
    Main application managing the game loop and rendering.

    The simulation advances in fixed steps; rendered frames feed an
    accumulator so physics speed does not depend on the frame rate.
    """

    def __init__(self, preset: Optional[str] = None, seed: Optional[int] = None):
        pygame.init()
        self.width = config.WINDOW["width"]
        self.height = config.WINDOW["height"]
        pygame.display.set_mode((self.width, self.height), DOUBLEBUF | OPENGL | RESIZABLE)
        pygame.display.set_caption(config.WINDOW["title"])

        # Simulation
        params = build_params(preset) if preset else None
        self.simulation = ParticleSimulation(params=params, rng=np.random.default_rng(seed))
        self.simulation.initialize(self.width, self.height)
        self._warmup()

        # Input + rendering
        self.input_handler = InputHandler(self.simulation)
        self.renderer = ParticleRenderer()
        self.grid = Grid()
        self.text_renderer = TextRenderer()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self.step = 1.0 / self.simulation.params.tick_rate
        self.max_catchup = int(config.SIMULATION["max_catchup_ticks"])
        self.accumulator = 0.0

        self._setup_gl()
        print("[App] Ready!")

    def _warmup(self):
        """Compile the numba kernels before the first frame."""
        try:
            warmup_kernels()
        except Exception as e:
            # First tick will compile instead
            print(f"[App] Kernel warm-up failed: {e}")

    def _setup_gl(self):
        """Initialize a 2-D OpenGL projection in window pixels (y down)."""
        glClearColor(*hex_to_rgb(config.COLORS["background"]), 1.0)
        glDisable(GL_DEPTH_TEST)
        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)

        glViewport(0, 0, self.width, self.height)
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0, self.width, self.height, 0, -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == VIDEORESIZE:
                self.width, self.height = event.w, event.h
                self._setup_gl()
            if not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        """Run as many fixed steps as the elapsed time allows."""
        self.accumulator += min(dt, self.step * self.max_catchup)
        ticks = 0
        while self.accumulator >= self.step and ticks < self.max_catchup:
            self.simulation.tick()
            self.accumulator -= self.step
            ticks += 1
        if self.simulation.paused:
            self.accumulator = 0.0

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)
        glLoadIdentity()

        handler = self.input_handler
        if handler.show_grid:
            self.grid.draw(self.width, self.height)

        snapshot = self.simulation.snapshot()
        self.renderer.draw(snapshot, show_attractors=handler.show_attractors)

        # HUD
        screen_size = (self.width, self.height)
        status = "PAUSED" if snapshot.paused else ("FROZEN" if snapshot.frozen else "RUNNING")
        self.text_renderer.draw_text(
            f"Particles: {len(snapshot.particles)}  |  Attractors: {len(snapshot.attractors)}"
            f"  |  FPS: {self.fps:.0f}  |  {status}",
            10, 10, screen_size
        )
        if snapshot.attractors:
            first = snapshot.attractors[0]
            self.text_renderer.draw_text(
                f"M: {first.mass:.2f}  R: {first.radius:.2f}  Absorbed: {first.absorbed}",
                10, 35, screen_size
            )
        if handler.show_help:
            self.text_renderer.draw_lines(HELP_LINES, 10, self.height - 80, screen_size)

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        while self.running:
            dt = self.clock.tick(120) / 1000.0
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        self.simulation.destroy()
        pygame.quit()
        print("[App] Shutdown complete")
