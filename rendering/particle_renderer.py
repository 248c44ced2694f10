"""Draws particle and attractor snapshots with OpenGL vertex arrays."""

import math

import numpy as np
from OpenGL.GL import *

from config import particles as config
from novafield.types import PlayingCard, Shape, Snapshot, Suit

CIRCLE_SEGMENTS = 12
RING_SEGMENTS = 48


def _fan_to_triangles(outline: np.ndarray) -> np.ndarray:
    """Triangulate a convex-ish outline around the origin, (k, 2) -> (3k, 2)."""
    k = len(outline)
    tris = np.zeros((k * 3, 2), dtype=np.float32)
    for i in range(k):
        tris[i * 3 + 1] = outline[i]
        tris[i * 3 + 2] = outline[(i + 1) % k]
    return tris


def _circle_outline(segments: int = CIRCLE_SEGMENTS) -> np.ndarray:
    t = np.linspace(0.0, 2.0 * np.pi, segments, endpoint=False)
    return np.stack([np.cos(t), np.sin(t)], axis=1).astype(np.float32)


def _star_outline(points: int = 5, inner: float = 0.45) -> np.ndarray:
    t = np.arange(points * 2) * np.pi / points - np.pi / 2
    r = np.where(np.arange(points * 2) % 2 == 0, 1.0, inner)
    return np.stack([r * np.cos(t), r * np.sin(t)], axis=1).astype(np.float32)


def _diamond_outline() -> np.ndarray:
    return np.array([[0, -1], [0.7, 0], [0, 1], [-0.7, 0]], dtype=np.float32)


def _heart_outline(samples: int = 24) -> np.ndarray:
    # Parametric heart, y flipped for a y-down screen, scaled to ~unit size
    t = np.linspace(0.0, 2.0 * np.pi, samples, endpoint=False)
    x = 16 * np.sin(t) ** 3
    y = -(13 * np.cos(t) - 5 * np.cos(2 * t) - 2 * np.cos(3 * t) - np.cos(4 * t))
    return (np.stack([x, y + 2.5], axis=1) / 16.0).astype(np.float32)


def _card_outline() -> np.ndarray:
    return np.array([[-0.7, -1], [0.7, -1], [0.7, 1], [-0.7, 1]], dtype=np.float32)


# Unit-size triangle lists per filled shape
SHAPE_TRIANGLES = {
    Shape.CIRCLE: _fan_to_triangles(_circle_outline()),
    Shape.STAR: _fan_to_triangles(_star_outline()),
    Shape.DIAMOND: _fan_to_triangles(_diamond_outline()),
    Shape.HEART: _fan_to_triangles(_heart_outline()),
    Shape.CARD: _fan_to_triangles(_card_outline()),
}

SUIT_MARKS = {
    Suit.HEART: (Shape.HEART, (0.85, 0.1, 0.15)),
    Suit.DIAMOND: (Shape.DIAMOND, (0.85, 0.1, 0.15)),
    Suit.SPADE: (Shape.STAR, (0.05, 0.05, 0.05)),
    Suit.CLUB: (Shape.CIRCLE, (0.05, 0.05, 0.05)),
}


def build_shape_vertices(positions, sizes, rotations, unit_tris):
    """
    Place a unit triangle list at every particle.

    Returns a (n * len(unit_tris), 2) float32 array ready for glDrawArrays.
    """
    cos_r = np.cos(rotations)[:, None]
    sin_r = np.sin(rotations)[:, None]
    ux = unit_tris[None, :, 0]
    uy = unit_tris[None, :, 1]
    x = (ux * cos_r - uy * sin_r) * sizes[:, None] + positions[:, 0:1]
    y = (ux * sin_r + uy * cos_r) * sizes[:, None] + positions[:, 1:2]
    return np.stack([x, y], axis=2).reshape(-1, 2).astype(np.float32)


def build_vertex_colors(colors, alphas, verts_per_item):
    rgba = np.concatenate([colors, alphas[:, None]], axis=1).astype(np.float32)
    return np.repeat(rgba, verts_per_item, axis=0)


def _draw_arrays(mode, vertices, colors):
    if len(vertices) == 0:
        return
    glEnableClientState(GL_VERTEX_ARRAY)
    glEnableClientState(GL_COLOR_ARRAY)
    glVertexPointer(2, GL_FLOAT, 0, np.ascontiguousarray(vertices))
    glColorPointer(4, GL_FLOAT, 0, np.ascontiguousarray(colors))
    glDrawArrays(mode, 0, len(vertices))
    glDisableClientState(GL_VERTEX_ARRAY)
    glDisableClientState(GL_COLOR_ARRAY)


class ParticleRenderer:
    """Renders one engine snapshot per frame."""

    def __init__(self):
        self.horizon_color = config.COLORS["horizon"]
        self.core_color = config.COLORS["core"]
        self._ring = _circle_outline(RING_SEGMENTS)

    def draw(self, snapshot: Snapshot, show_attractors: bool = True):
        particles = snapshot.particles
        if len(particles) > 0:
            self._draw_filled(particles)
            self._draw_card_marks(particles)
            self._draw_lightning(particles)
        if show_attractors:
            for attractor in snapshot.attractors:
                self._draw_attractor(attractor)
        else:
            for attractor in snapshot.attractors:
                self._draw_core(attractor)

    def _draw_filled(self, particles):
        rotations = np.where(particles.has_rotation, particles.rotations, 0.0)
        for shape, unit_tris in SHAPE_TRIANGLES.items():
            mask = particles.shapes == int(shape)
            if not mask.any():
                continue
            verts = build_shape_vertices(
                particles.positions[mask], particles.sizes[mask], rotations[mask], unit_tris
            )
            cols = build_vertex_colors(particles.colors[mask], particles.alphas[mask], len(unit_tris))
            _draw_arrays(GL_TRIANGLES, verts, cols)

    def _draw_card_marks(self, particles):
        for i in np.flatnonzero(particles.shapes == int(Shape.CARD)):
            payload = particles.payloads[i]
            if not isinstance(payload, PlayingCard):
                continue
            mark_shape, mark_color = SUIT_MARKS[payload.suit]
            rotation = particles.rotations[i] if particles.has_rotation[i] else 0.0
            verts = build_shape_vertices(
                particles.positions[i:i + 1],
                particles.sizes[i:i + 1] * 0.4,
                np.array([rotation]),
                SHAPE_TRIANGLES[mark_shape],
            )
            cols = build_vertex_colors(
                np.array([mark_color], dtype=np.float32),
                particles.alphas[i:i + 1],
                len(verts),
            )
            _draw_arrays(GL_TRIANGLES, verts, cols)

    def _draw_lightning(self, particles):
        glLineWidth(2.0)
        for i in np.flatnonzero(particles.shapes == int(Shape.LIGHTNING)):
            bolt = particles.payloads[i]
            if bolt is None:
                continue
            verts = (bolt.points + particles.positions[i]).astype(np.float32)
            cols = build_vertex_colors(
                particles.colors[i:i + 1], particles.alphas[i:i + 1], len(verts)
            )
            _draw_arrays(GL_LINE_STRIP, verts, cols)
        glLineWidth(1.0)

    def _draw_attractor(self, attractor):
        radius = max(attractor.radius, 1.0)

        # Event horizon: faint disc plus outline
        ring = self._ring * radius + (attractor.x, attractor.y)
        r, g, b, a = self.horizon_color
        glColor4f(r, g, b, a * 0.15)
        glBegin(GL_TRIANGLE_FAN)
        glVertex2f(attractor.x, attractor.y)
        for vx, vy in ring:
            glVertex2f(vx, vy)
        glVertex2f(*ring[0])
        glEnd()

        glColor4f(r, g, b, a)
        glBegin(GL_LINE_LOOP)
        for vx, vy in ring:
            glVertex2f(vx, vy)
        glEnd()

        self._draw_core(attractor)

    def _draw_core(self, attractor):
        core = self._ring * max(3.0, math.sqrt(attractor.mass) * 0.08) + (attractor.x, attractor.y)
        glColor4f(*self.core_color)
        glBegin(GL_TRIANGLE_FAN)
        glVertex2f(attractor.x, attractor.y)
        for vx, vy in core:
            glVertex2f(vx, vy)
        glVertex2f(*core[0])
        glEnd()
