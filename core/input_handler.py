"""Translates pygame input events into simulation commands."""

import pygame
from pygame.locals import *

from novafield import ParticleSimulation
from tools.presets import get_preset_by_index, apply_preset

PRESET_KEYS = [K_1, K_2, K_3, K_4, K_5, K_6, K_7, K_8, K_9]


class InputHandler:
    """
    Pointer and keyboard bindings.

    Mouse motion leaves a trail, left click bursts (or grabs / creates an
    attractor), right click fires the expanding rings.
    """

    def __init__(self, simulation: ParticleSimulation):
        self.simulation = simulation
        self.dragged_attractor = None
        self.creation_mode = False
        self.show_grid = False
        self.show_attractors = True
        self.show_help = True

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        sim = self.simulation

        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            return self._handle_key(event.key)
        elif event.type == VIDEORESIZE:
            sim.resize(event.w, event.h)
        elif event.type == MOUSEMOTION:
            x, y = event.pos
            if self.dragged_attractor is not None:
                if not sim.move_attractor(self.dragged_attractor, x, y):
                    # Merged or exploded while being dragged
                    self.dragged_attractor = None
            else:
                sim.emit_trail(x, y)
        elif event.type == MOUSEBUTTONDOWN:
            x, y = event.pos
            if event.button == 1:
                self._primary_press(x, y)
            elif event.button == 3:
                sim.emit_secondary(x, y)
        elif event.type == MOUSEBUTTONUP:
            if event.button == 1:
                self.dragged_attractor = None

        return True

    def _primary_press(self, x: float, y: float):
        sim = self.simulation
        if sim.attractor_mode:
            hit = sim.hit_test_attractor(x, y)
            if hit is not None:
                self.dragged_attractor = hit
                sim.set_attractor_velocity(hit, 0.0, 0.0)
                return
        if self.creation_mode:
            sim.create_attractor(x, y)
        else:
            sim.emit_primary(x, y)

    def _handle_key(self, key) -> bool:
        sim = self.simulation

        if key == K_ESCAPE:
            return False
        elif key == K_SPACE:
            paused = sim.toggle_pause()
            print(f"[App] {'Paused' if paused else 'Running'}")
        elif key == K_f:
            frozen = sim.toggle_freeze()
            print(f"[App] Particles {'frozen' if frozen else 'released (pool cleared)'}")
        elif key == K_a:
            sim.toggle_attractor_mode()
        elif key == K_c:
            self.creation_mode = not self.creation_mode
            print(f"[App] Attractor creation {'on' if self.creation_mode else 'off'}")
        elif key == K_r:
            sim.reset_all_attractors()
        elif key == K_x:
            sim.destroy_all_attractors()
            self.dragged_attractor = None
        elif key == K_BACKSPACE:
            sim.clear_particles()
        elif key == K_g:
            self.show_grid = not self.show_grid
        elif key == K_v:
            self.show_attractors = not self.show_attractors
        elif key == K_h:
            self.show_help = not self.show_help
        elif key in PRESET_KEYS:
            name, _ = get_preset_by_index(PRESET_KEYS.index(key))
            if name is not None:
                apply_preset(sim, name)

        return True
