"""
Parameter Presets Library
=========================

Named bundles of simulation parameters for the particle toy, organized by
category. Applying a preset starts from the config defaults, so presets never
stack on top of each other.

Categories:
- CLASSIC: The default look
- CALM: Slow, floaty particles
- CHAOS: Strong gravity wells and frequent novas
- ARTISTIC: Shape / colour themes
"""

from dataclasses import fields
from typing import Dict, List, Optional, Tuple

from novafield.params import SimulationParams

PRESETS: Dict[str, dict] = {}

# -----------------------------------------------------------------------------
# CLASSIC
# -----------------------------------------------------------------------------

PRESETS["default"] = {
    "name": "Default",
    "description": "Config defaults",
    "category": "CLASSIC",
    "params": {},
    "emitters": {},
}

# -----------------------------------------------------------------------------
# CALM
# -----------------------------------------------------------------------------

PRESETS["calm"] = {
    "name": "Calm Drift",
    "description": "Low gravity, little drag, slow bursts",
    "category": "CALM",
    "params": {
        "advanced": True,
        "gravity": 0.01,
        "friction": 0.995,
        "speed_multiplier": 0.5,
    },
    "emitters": {
        "trail": {"lifetime": 120},
        "primary": {"count": 30, "lifetime": 160},
    },
}

# -----------------------------------------------------------------------------
# CHAOS
# -----------------------------------------------------------------------------

PRESETS["storm"] = {
    "name": "Electric Storm",
    "description": "Lightning everywhere, fast and short-lived",
    "category": "CHAOS",
    "params": {
        "advanced": True,
        "gravity": 0.0,
        "friction": 0.97,
        "speed_multiplier": 1.8,
    },
    "emitters": {
        "trail": {"shape": "lightning", "count": 2},
        "primary": {"shape": "lightning", "count": 20},
        "secondary": {"shape": "lightning"},
    },
}

PRESETS["supernova"] = {
    "name": "Supernova Factory",
    "description": "Heavy particles and a low critical mass - attractors pop quickly",
    "category": "CHAOS",
    "params": {
        "particle_mass": 50.0,
        "critical_mass": 3000.0,
        "nova_count": 120,
        "nova_speed": 14.0,
    },
    "emitters": {
        "primary": {"count": 80},
    },
}

# -----------------------------------------------------------------------------
# ARTISTIC
# -----------------------------------------------------------------------------

PRESETS["hearts"] = {
    "name": "Valentine",
    "description": "Hearts on every interaction",
    "category": "ARTISTIC",
    "params": {},
    "emitters": {
        "trail": {"shape": "heart"},
        "primary": {"shape": "heart"},
        "secondary": {"shape": "heart"},
    },
}

PRESETS["casino"] = {
    "name": "Casino Night",
    "description": "Playing cards thrown around",
    "category": "ARTISTIC",
    "params": {"advanced": True, "gravity": 0.15, "friction": 0.99},
    "emitters": {
        "primary": {"shape": "card", "count": 25},
        "secondary": {"shape": "card"},
    },
}


# =============================================================================
# HELPERS
# =============================================================================

def get_preset_list() -> List[Tuple[str, dict]]:
    """Get list of all presets sorted by category."""
    category_order = ["CLASSIC", "CALM", "CHAOS", "ARTISTIC"]

    return sorted(
        PRESETS.items(),
        key=lambda x: (category_order.index(x[1]["category"]) if x[1]["category"] in category_order else 99, x[0])
    )


def print_preset_menu():
    """Print formatted preset list."""
    current_category = None

    print("\n" + "=" * 60)
    print("  PARTICLE PRESETS")
    print("=" * 60)

    for idx, (key, preset) in enumerate(get_preset_list()):
        if preset["category"] != current_category:
            current_category = preset["category"]
            print(f"\n{'─' * 60}")
            print(f"  {current_category}")
            print(f"{'─' * 60}")
        print(f"  [{idx:2d}] {preset['name']:<22} ({key})")
        print(f"       {preset['description']}")

    print(f"\n{'=' * 60}")


def get_preset_by_index(index: int) -> Tuple[Optional[str], Optional[dict]]:
    """Get preset by menu index."""
    presets = get_preset_list()
    if 0 <= index < len(presets):
        return presets[index]
    return None, None


def build_params(key: str) -> SimulationParams:
    """Config defaults with the preset's overrides applied."""
    if key not in PRESETS:
        raise KeyError(f"Unknown preset: {key}")
    preset = PRESETS[key]

    params = SimulationParams.from_config()
    params.configure(**preset["params"])
    for category, overrides in preset["emitters"].items():
        params.configure_emitter(category, **overrides)
    return params


def apply_preset(simulation, key: str):
    """
    Replace the simulation's parameters with a preset, in place.

    The engine's components share one params object, so fields are copied
    onto it rather than swapping the object. Live attractor radii follow
    the preset's growth factor.
    """
    fresh = build_params(key)
    for f in fields(fresh):
        setattr(simulation.params, f.name, getattr(fresh, f.name))
    simulation.registry.apply_growth(simulation.params.growth)
    print(f"[Presets] Applied '{PRESETS[key]['name']}'")
