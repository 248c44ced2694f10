"""Tests for the preset library."""

import pytest

from novafield import Category, Shape
from tools.presets import (
    PRESETS,
    apply_preset,
    build_params,
    get_preset_by_index,
    get_preset_list,
)


class TestPresets:

    @pytest.mark.parametrize("key", sorted(PRESETS))
    def test_every_preset_builds(self, key):
        params = build_params(key)
        assert set(params.emitters) == set(Category)

    def test_unknown_preset_raises(self):
        with pytest.raises(KeyError):
            build_params("nope")

    def test_menu_order_starts_with_default(self):
        keys = [key for key, _ in get_preset_list()]
        assert keys[0] == "default"
        assert sorted(keys) == sorted(PRESETS)

    def test_index_out_of_range(self):
        assert get_preset_by_index(len(PRESETS)) == (None, None)
        assert get_preset_by_index(-1) == (None, None)

    def test_apply_updates_params_in_place(self, engine):
        shared = engine.params
        apply_preset(engine, "hearts")

        assert engine.params is shared
        assert engine.emitter.params is shared
        assert shared.emitters[Category.PRIMARY].shape == Shape.HEART

        engine.emit_primary(100.0, 100.0)
        assert all(s == int(Shape.HEART) for s in engine.pool.shapes)

    def test_presets_do_not_stack(self, engine):
        apply_preset(engine, "storm")
        apply_preset(engine, "default")
        assert engine.params.emitters[Category.TRAIL].shape == Shape.CIRCLE
        assert engine.params.advanced is False

    def test_supernova_lowers_critical_mass(self, engine):
        apply_preset(engine, "supernova")
        aid = engine.create_attractor(400.0, 300.0)
        engine.set_attractor_mass(aid, 3000.0)
        report = engine.tick()
        assert report.novas == 1
        assert engine.particle_count == engine.params.nova_count

    def test_preset_restores_attractor_radii(self, engine):
        aid = engine.create_attractor(100.0, 100.0)
        engine.configure(growth=0.02)
        assert engine.get_attractor(aid).radius == pytest.approx(20.0)

        apply_preset(engine, "default")

        assert engine.params.growth == 0.01
        assert engine.get_attractor(aid).radius == pytest.approx(10.0)
