"""Rendering components for the particle toy."""

from .grid import Grid
from .text import TextRenderer
from .particle_renderer import ParticleRenderer

__all__ = ["Grid", "TextRenderer", "ParticleRenderer"]
