"""Tests for trail / primary / secondary emission and lightning bolts."""

import math

import numpy as np
import pytest

from novafield.colors import palette_to_array
from novafield.emission import Emitter, sample
from novafield.lightning import bolt_color, generate_bolt
from novafield.pool import ParticlePool
from novafield.types import Category, LightningBolt, PlayingCard, Shape, Suit


@pytest.fixture
def pool():
    return ParticlePool(max_particles=100000)


@pytest.fixture
def emitter(pool, params, rng):
    return Emitter(pool, params, rng)


def in_palette(colors, palette):
    parsed = palette_to_array(palette)
    return all(any(np.allclose(c, p) for p in parsed) for c in colors)


class TestTrail:

    def test_debounced_by_distance(self, emitter, pool, params):
        count = params.emitters[Category.TRAIL].count
        assert emitter.emit_trail(100.0, 100.0) == count
        assert emitter.emit_trail(103.0, 103.0) == 0
        assert emitter.emit_trail(104.0, 104.0) == count
        assert len(pool) == 2 * count

    def test_short_moves_accumulate_from_last_burst(self, emitter):
        emitter.emit_trail(100.0, 100.0)
        assert emitter.emit_trail(102.0, 100.0) == 0
        assert emitter.emit_trail(104.0, 100.0) == 0
        assert emitter.emit_trail(105.0, 100.0) > 0

    def test_spawn_jitter_and_palette(self, emitter, pool, params):
        params.configure_emitter("trail", count=50)
        emitter.emit_trail(200.0, 200.0)

        assert np.all(np.abs(pool.positions - 200.0) <= params.trail_jitter)
        assert np.all(pool.categories == int(Category.TRAIL))
        assert in_palette(pool.colors, params.emitters[Category.TRAIL].palette)
        assert np.all(pool.masses == params.particle_mass)

    def test_hearts_use_the_heart_palette(self, emitter, pool, params):
        params.configure_emitter(Category.TRAIL, shape="heart", count=30)
        emitter.emit_trail(50.0, 50.0)
        assert np.all(pool.shapes == int(Shape.HEART))
        assert in_palette(pool.colors, params.heart_palette)

    def test_disabled_category_emits_nothing(self, emitter, pool, params):
        params.configure_emitter("trail", enabled=False)
        assert emitter.emit_trail(100.0, 100.0) == 0
        assert len(pool) == 0

    def test_speed_multiplier_only_in_advanced_mode(self, emitter, pool, params):
        settings = params.emitters[Category.TRAIL]
        params.configure_emitter("trail", count=40)
        params.configure(speed_multiplier=10.0)
        emitter.emit_trail(100.0, 100.0)
        base, spread = settings.speed
        speeds = np.hypot(pool.velocities[:, 0], pool.velocities[:, 1])
        assert np.all(speeds <= base + spread + 1e-9)

        params.configure(advanced=True)
        pool.clear()
        emitter.emit_trail(300.0, 300.0)
        speeds = np.hypot(pool.velocities[:, 0], pool.velocities[:, 1])
        assert np.all(speeds >= base * 10.0 - 1e-9)


class TestPrimary:

    def test_burst_angles_are_evenly_spaced(self, emitter, pool, params):
        settings = params.emitters[Category.PRIMARY]
        emitted = emitter.emit_primary(400.0, 300.0)

        assert emitted == settings.count
        assert np.all(pool.positions == (400.0, 300.0))
        angles = np.arctan2(pool.velocities[:, 1], pool.velocities[:, 0])
        expected = 2.0 * math.pi * np.arange(settings.count) / settings.count
        diff = np.mod(angles - expected, 2.0 * math.pi)
        assert np.all(diff <= settings.angle_jitter + 1e-9)

    def test_default_shape_is_star_with_spin(self, emitter, pool):
        emitter.emit_primary(0.0, 0.0)
        snap = pool.snapshot()
        assert np.all(snap.shapes == int(Shape.STAR))
        assert np.all(snap.has_rotation)
        assert np.all(np.abs(snap.rotation_speeds) <= 0.1)

    def test_lightning_burst_carries_bolts(self, emitter, pool, params):
        params.configure_emitter("primary", shape=Shape.LIGHTNING, count=8)
        emitter.emit_primary(0.0, 0.0)
        settings = params.emitters[Category.PRIMARY]

        for payload in pool.payloads:
            assert isinstance(payload, LightningBolt)
            assert payload.segments == settings.segments
        # Lightning lives twice as long as the category lifetime
        assert np.all(pool.max_lives >= settings.lifetime * 2)

    def test_cards_draw_a_suit(self, emitter, pool, params):
        params.configure_emitter("primary", shape="card", count=60)
        emitter.emit_primary(0.0, 0.0)
        suits = {p.suit for p in pool.payloads}
        assert all(isinstance(p, PlayingCard) for p in pool.payloads)
        assert suits <= set(Suit)
        assert len(suits) > 1

    def test_plain_shapes_have_no_payload(self, emitter, pool):
        emitter.emit_primary(0.0, 0.0)
        assert all(p is None for p in pool.payloads)

    def test_palette_parsed_once_per_burst(self, emitter, monkeypatch):
        calls = []

        def counting(palette):
            calls.append(palette)
            return palette_to_array(palette)

        monkeypatch.setattr("novafield.emission.palette_to_array", counting)

        assert emitter.emit_primary(0.0, 0.0) > 1
        assert len(calls) == 1
        emitter.emit_wave(0.0, 0.0, 0)
        emitter.emit_trail(100.0, 100.0)
        assert len(calls) == 3


class TestSecondaryWave:

    def test_waves_speed_up(self, emitter, pool, params):
        settings = params.emitters[Category.SECONDARY]
        per_wave = settings.count // settings.waves

        assert emitter.emit_wave(0.0, 0.0, 0) == per_wave
        assert emitter.emit_wave(0.0, 0.0, 2) == per_wave

        speeds = np.hypot(pool.velocities[:, 0], pool.velocities[:, 1])
        base, spread = settings.speed
        first, last = speeds[:per_wave], speeds[per_wave:]
        assert np.all(first <= base + spread + 1e-9)
        assert np.all(last >= base + 2 * settings.wave_speed_step - 1e-9)

    def test_rotation_matches_spawn_angle(self, emitter, pool, params):
        settings = params.emitters[Category.SECONDARY]
        per_wave = settings.count // settings.waves
        emitter.emit_wave(0.0, 0.0, 0)
        expected = 2.0 * math.pi * np.arange(per_wave) / per_wave
        assert np.allclose(pool.rotations, expected)


class TestHelpers:

    def test_sample_range(self, rng):
        values = [sample((2.0, 3.0), rng) for _ in range(200)]
        assert min(values) >= 2.0
        assert max(values) <= 5.0

    def test_bolt_geometry(self, rng):
        bolt = generate_bolt(10, rng)
        assert bolt.points.shape == (11, 2)
        assert tuple(bolt.points[0]) == (0.0, 0.0)
        steps = np.hypot(*np.diff(bolt.points, axis=0).T)
        assert np.all(steps >= 15.0 - 1e-9)
        assert np.all(steps <= 40.0 + 1e-9)
        with pytest.raises(ValueError):
            bolt.points[1, 0] = 0.0

    def test_bolt_segments_stay_near_base_direction(self, rng):
        for _ in range(20):
            bolt = generate_bolt(6, rng, spread_deg=10.0, wobble_deg=5.0)
            headings = np.arctan2(*np.diff(bolt.points, axis=0).T[::-1])
            spread = np.angle(np.exp(1j * (headings - headings[0])))
            # Any two segments differ by at most 2 * (10 + 5) degrees
            assert np.all(np.abs(spread) <= math.radians(30) + 1e-9)

    def test_bolt_without_deviation_is_straight(self, rng):
        bolt = generate_bolt(5, rng, spread_deg=0.0, wobble_deg=0.0)
        headings = np.arctan2(*np.diff(bolt.points, axis=0).T[::-1])
        assert np.allclose(headings, headings[0])

    @pytest.mark.parametrize("ratio", [0.1, 0.45, 0.9])
    def test_bolt_colour_is_valid_rgb(self, rng, ratio):
        color = bolt_color(ratio, rng)
        assert len(color) == 3
        assert all(0.0 <= c <= 1.0 for c in color)
