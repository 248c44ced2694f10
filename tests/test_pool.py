"""Tests for the struct-of-arrays particle pool."""

import numpy as np
import pytest

from novafield.pool import ParticlePool
from novafield.types import LightningBolt, PlayingCard, Shape, Suit


class TestSpawn:
    """Appending particles."""

    def test_ids_are_unique_and_increasing(self, spawn_dot):
        pool = ParticlePool()
        ids = [spawn_dot(pool) for _ in range(5)]
        assert ids == [0, 1, 2, 3, 4]
        assert len(pool) == 5

    def test_new_particle_starts_young_and_opaque(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool, 3.0, 4.0, 1.0, -1.0)
        assert pool.ages[0] == 0
        assert pool.alphas[0] == 1.0
        assert tuple(pool.positions[0]) == (3.0, 4.0)
        assert tuple(pool.velocities[0]) == (1.0, -1.0)

    def test_rotation_needs_both_angle_and_speed(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool, rotation=1.0, rotation_speed=0.1)
        spawn_dot(pool, rotation=1.0)
        snap = pool.snapshot()
        assert snap.view(0).rotation == 1.0
        assert snap.view(0).rotation_speed == pytest.approx(0.1)
        assert snap.view(1).rotation is None
        assert pool.rotation_speeds[1] == 0.0

    def test_grows_past_initial_capacity(self, spawn_dot):
        pool = ParticlePool(capacity=2)
        for i in range(7):
            spawn_dot(pool, x=float(i))
        assert len(pool) == 7
        assert list(pool.positions[:, 0]) == [0.0, 1.0, 2.0, 3.0, 4.0, 5.0, 6.0]
        assert list(pool.ids) == list(range(7))

    @pytest.mark.parametrize("shape, payload", [
        (Shape.CIRCLE, LightningBolt(points=np.zeros((3, 2)))),
        (Shape.LIGHTNING, None),
        (Shape.CARD, None),
        (Shape.CARD, LightningBolt(points=np.zeros((3, 2)))),
    ])
    def test_payload_must_match_shape(self, spawn_dot, shape, payload):
        pool = ParticlePool()
        with pytest.raises(TypeError):
            spawn_dot(pool, shape=shape, payload=payload)
        assert len(pool) == 0
        assert pool.payloads == []


class TestRemoval:
    """Retain / trim / clear."""

    def test_retain_preserves_order_and_payloads(self, spawn_dot):
        pool = ParticlePool()
        bolt = LightningBolt(points=np.zeros((3, 2)))
        card = PlayingCard(Suit.CLUB)
        spawn_dot(pool, x=0.0)
        spawn_dot(pool, x=1.0, shape=Shape.LIGHTNING, payload=bolt)
        spawn_dot(pool, x=2.0)
        spawn_dot(pool, x=3.0, shape=Shape.CARD, payload=card)

        removed = pool.retain(np.array([False, True, False, True]))

        assert removed == 2
        assert list(pool.ids) == [1, 3]
        assert list(pool.positions[:, 0]) == [1.0, 3.0]
        assert pool.payloads == [bolt, card]

    def test_retain_all_is_a_noop(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool)
        assert pool.retain(np.ones(1, dtype=bool)) == 0
        assert len(pool) == 1

    def test_trim_drops_oldest_first(self, spawn_dot):
        pool = ParticlePool(max_particles=3)
        for i in range(5):
            spawn_dot(pool, x=float(i))
        assert pool.trim() == 2
        assert list(pool.ids) == [2, 3, 4]

    def test_trim_under_cap(self, spawn_dot):
        pool = ParticlePool(max_particles=10)
        spawn_dot(pool)
        assert pool.trim() == 0

    def test_clear_keeps_id_sequence(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool)
        spawn_dot(pool)
        pool.clear()
        assert len(pool) == 0
        assert pool.payloads == []
        assert spawn_dot(pool) == 2


class TestSnapshot:
    """Read-only copies for renderers."""

    def test_snapshot_is_detached_and_read_only(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool, x=5.0)
        snap = pool.snapshot()

        pool.positions[0, 0] = 99.0
        assert snap.positions[0, 0] == 5.0
        with pytest.raises(ValueError):
            snap.positions[0, 0] = 1.0

    def test_views_and_total_mass(self, spawn_dot):
        pool = ParticlePool()
        spawn_dot(pool, mass=0.5)
        spawn_dot(pool, mass=1.5, shape=Shape.STAR)
        snap = pool.snapshot()

        views = list(snap)
        assert len(views) == 2
        assert views[1].shape == Shape.STAR
        assert snap.total_mass == pytest.approx(2.0)
        assert pool.total_mass() == pytest.approx(2.0)
