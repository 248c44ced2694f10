"""Tests for per-tick particle kinematics."""

import numpy as np
import pytest

from novafield.integrator import KinematicIntegrator
from novafield.lightning import generate_bolt
from novafield.pool import ParticlePool
from novafield.types import Category, PlayingCard, Shape, Suit


@pytest.fixture
def pool():
    return ParticlePool(max_particles=1000)


@pytest.fixture
def integrator(pool, params, rng):
    return KinematicIntegrator(pool, params, rng)


class TestMotion:

    def test_position_then_gravity_then_friction(self, pool, integrator, spawn_dot):
        spawn_dot(pool, 0.0, 0.0, 2.0, 1.0, category=Category.PRIMARY)
        integrator.step()

        assert tuple(pool.positions[0]) == pytest.approx((2.0, 1.0))
        assert pool.velocities[0, 0] == pytest.approx(2.0 * 0.98)
        assert pool.velocities[0, 1] == pytest.approx((1.0 + 0.08) * 0.98)

    def test_trail_particles_ignore_gravity(self, pool, integrator, spawn_dot):
        spawn_dot(pool, vy=0.0, category=Category.TRAIL)
        integrator.step()
        assert pool.velocities[0, 1] == 0.0

    def test_lightning_ignores_gravity_and_uses_its_friction(self, pool, integrator, spawn_dot, rng):
        bolt = generate_bolt(4, rng)
        spawn_dot(pool, vx=1.0, category=Category.SECONDARY,
                  shape=Shape.LIGHTNING, payload=bolt)
        integrator.step()
        assert pool.velocities[0, 1] == 0.0
        assert pool.velocities[0, 0] == pytest.approx(0.99)

    def test_advanced_mode_shares_one_friction(self, pool, integrator, params, spawn_dot, rng):
        params.configure(advanced=True, friction=0.5, gravity=0.0)
        spawn_dot(pool, vx=1.0)
        spawn_dot(pool, vx=1.0, shape=Shape.LIGHTNING, payload=generate_bolt(2, rng))
        integrator.step()
        assert pool.velocities[0, 0] == pytest.approx(0.5)
        assert pool.velocities[1, 0] == pytest.approx(0.5)
        assert pool.velocities[0, 1] == 0.0

    def test_advanced_values_ignored_when_off(self, pool, integrator, params, spawn_dot):
        params.configure(advanced=False, friction=0.5, gravity=3.0)
        spawn_dot(pool, vx=1.0)
        integrator.step()
        assert pool.velocities[0, 0] == pytest.approx(0.98)
        assert pool.velocities[0, 1] == pytest.approx(0.08 * 0.98)

    def test_rotation_advances_by_speed(self, pool, integrator, spawn_dot):
        spawn_dot(pool, rotation=1.0, rotation_speed=0.25)
        integrator.step()
        integrator.step()
        assert pool.rotations[0] == pytest.approx(1.5)


class TestLifetime:

    def test_alpha_fades_and_never_increases(self, pool, integrator, spawn_dot):
        spawn_dot(pool, max_life=20.0, category=Category.TRAIL)
        alphas = []
        while len(pool):
            integrator.step()
            if len(pool):
                alphas.append(float(pool.alphas[0]))
                assert 0 <= pool.ages[0] < pool.max_lives[0]
                assert 0.0 <= alphas[-1] <= 1.0

        assert alphas == sorted(alphas, reverse=True)
        assert len(alphas) == 19

    def test_fade_accelerates_late(self, pool, integrator, spawn_dot):
        spawn_dot(pool, max_life=10.0)
        for _ in range(8):
            integrator.step()
        # ratio 0.8: (1 - 0.8) * (0.2 / 0.3)
        assert pool.alphas[0] == pytest.approx(0.2 * 0.2 / 0.3)

    def test_expired_particles_are_removed(self, pool, integrator, spawn_dot):
        spawn_dot(pool, max_life=1.0)
        spawn_dot(pool, max_life=50.0)
        assert integrator.step() == 1
        assert list(pool.ids) == [1]

    def test_empty_pool(self, integrator):
        assert integrator.step() == 0

    def test_zero_lifetime_expires_without_raising(self, pool, integrator, spawn_dot):
        spawn_dot(pool, max_life=0.0)
        assert integrator.step() == 1
        assert len(pool) == 0


class TestPayloads:

    def test_bolt_regenerates_every_third_tick(self, pool, integrator, spawn_dot, rng, params):
        spawn_dot(pool, shape=Shape.LIGHTNING, payload=generate_bolt(8, rng), max_life=200.0)
        seen = []
        for _ in range(7):
            integrator.step()
            seen.append(pool.payloads[0])

        # Pre-step ages 0, 3, 6 regenerate
        assert seen[0] is seen[1] is seen[2]
        assert seen[3] is seen[4] is seen[5]
        assert seen[2] is not seen[3]
        assert seen[5] is not seen[6]
        assert seen[0].segments == params.crackle_segments

    def test_bolt_colour_tracks_life(self, pool, integrator, spawn_dot, rng):
        spawn_dot(pool, shape=Shape.LIGHTNING, payload=generate_bolt(8, rng), max_life=100.0)
        integrator.step()
        r, g, b = pool.colors[0]
        # Blue / cyan band early on
        assert b > r

        for _ in range(80):
            integrator.step()
        r, g, b = pool.colors[0]
        # Red / orange band near the end
        assert r > b

    def test_cards_pass_through_untouched(self, pool, integrator, spawn_dot):
        card = PlayingCard(Suit.SPADE)
        spawn_dot(pool, shape=Shape.CARD, payload=card)
        integrator.step()
        assert pool.payloads[0] is card

    def test_unknown_payload_raises(self, pool, integrator, spawn_dot):
        spawn_dot(pool)
        pool.payloads[0] = "not a payload"
        with pytest.raises(TypeError):
            integrator.step()


class TestEngineIntegration:

    def test_cap_applied_after_tick(self, engine, spawn_dot):
        engine.configure(max_particles=10)
        for i in range(15):
            spawn_dot(engine.pool, x=float(i), max_life=500.0)
        assert engine.particle_count == 15

        report = engine.tick()

        assert report.trimmed == 5
        assert engine.particle_count == 10
        assert list(engine.pool.ids) == list(range(5, 15))

    def test_zero_lifetime_emission_ticks_cleanly(self, engine):
        engine.configure_emitter("primary", shape="circle", lifetime=0.0, lifetime_jitter=0.0)
        assert engine.emit_primary(100.0, 100.0) > 0

        report = engine.tick()

        assert report is not None
        assert engine.particle_count == 0

    def test_frozen_particles_do_not_move(self, engine, spawn_dot):
        spawn_dot(engine.pool, 10.0, 10.0, 1.0, 1.0)
        engine.freeze_particles()
        engine.run(5)
        assert tuple(engine.pool.positions[0]) == (10.0, 10.0)
        assert engine.pool.ages[0] == 0
