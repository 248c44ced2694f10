"""Configuration for the interactive particle / attractor toy."""

WINDOW = {
    "width": 1280,
    "height": 720,
    "title": "Novafield"
}

SIMULATION = {
    "tick_rate": 60.0,            # Fixed steps per second
    "max_catchup_ticks": 5,       # Accumulator limit per rendered frame
    "max_particles": 1000,        # Pool cap, enforced after every tick
    "initial_capacity": 2048,     # Pre-allocated pool slots (grows on demand)
}

# Kinematics (the "advanced mechanics" values only apply when advanced=True)
PHYSICS = {
    "advanced": False,
    "gravity": 0.08,              # Downward pull on primary/secondary particles
    "friction": 0.98,             # Velocity multiplier per tick (1 = none)
    "lightning_friction": 0.99,   # Default for lightning when advanced is off
    "speed_multiplier": 1.0,      # Initial speed scale (advanced only)
    "trail_min_distance": 5.0,    # Pointer travel needed before a trail burst
    "trail_jitter": 5.0,          # +/- spawn offset per axis for trail particles
}

# Attractor (singularity) physics - tuned for visuals, not physical units
ATTRACTOR = {
    "G": 50.0,                    # Simulated gravitational constant
    "growth": 0.01,               # k in R = k * M
    "particle_mass": 0.01,        # Mass of every emitted particle
    "initial_mass": 1000.0,
    "critical_mass": 10000.0,     # Nova threshold
}

NOVA = {
    "count": 200,
    "speed": 10.0,
    "speed_range": (0.8, 1.2),
    "angle_jitter": 0.1,
    "size": (3.0, 6.0),
    "lifetime": 120,
    "lifetime_jitter": 60,
    "spin": 0.3,
    "colors": ["#FF0000", "#FF4500", "#FFA500", "#FFD700", "#FFFF00", "#FF1493"],
}

LIGHTNING = {
    "crackle_interval": 3,        # Regenerate the bolt every N ticks
    "crackle_segments": 5,
    "segment_length": (15.0, 25.0),
    "spread": 60.0,               # Half-width (degrees) of per-segment deviation
    "wobble": 45.0,               # Half-width (degrees) of extra jitter
}

# Per-category emitters. Ranges are (base, spread): value = base + U(0, spread).
EMITTERS = {
    "trail": {
        "enabled": True,
        "shape": "circle",
        "count": 3,
        "lifetime": 60,
        "lifetime_jitter": 40,
        "speed": (0.2, 0.5),
        "size": (2.0, 4.0),
        "spin": 0.0,
        "angle_jitter": 0.0,
        "lightning": {"speed": (2.0, 3.0), "size": (4.0, 6.0), "lifetime_jitter": 60, "segments": 8},
        "palette": ["#FF6B9D", "#C44569", "#FFA07A", "#FFB6C1",
                    "#DDA0DD", "#BA55D3", "#9370DB", "#8A2BE2"],
    },
    "primary": {
        "enabled": True,
        "shape": "star",
        "count": 50,
        "lifetime": 80,
        "lifetime_jitter": 40,
        "speed": (2.0, 4.0),
        "size": (3.0, 6.0),
        "spin": 0.2,
        "angle_jitter": 0.3,
        "lightning": {"speed": (3.0, 6.0), "size": (4.0, 8.0), "lifetime_jitter": 70, "segments": 10},
        "palette": ["#00F5FF", "#1E90FF", "#4169E1", "#0000FF",
                    "#8A2BE2", "#9400D3", "#FF00FF", "#FF1493"],
    },
    "secondary": {
        "enabled": True,
        "shape": "diamond",
        "count": 35,              # Split across the waves
        "lifetime": 90,
        "lifetime_jitter": 50,
        "speed": (3.0, 2.0),
        "size": (4.0, 8.0),
        "spin": 0.15,
        "angle_jitter": 0.0,
        "waves": 3,
        "wave_delay_ms": 50.0,
        "wave_speed_step": 1.5,
        "lightning": {"speed": (4.0, 3.0), "size": (5.0, 10.0), "lifetime_jitter": 80,
                      "segments": 12, "wave_speed_step": 2.0},
        "palette": ["#FFD700", "#FFA500", "#FF8C00", "#FF6347",
                    "#FF4500", "#DC143C", "#FF69B4", "#FF1493"],
    },
}

# Hearts ignore the category palette
HEART_PALETTE = ["#FF0000", "#DC143C", "#FF1493", "#C71585", "#FF69B4"]

GRID = {
    "spacing": 50,
    "color": (1.0, 1.0, 1.0, 0.1)
}

COLORS = {
    "background": "#0A0A14",
    "horizon": (0.59, 0.39, 1.0, 0.8),
    "core": (0.78, 0.59, 1.0, 1.0),
    "text": (0.9, 0.9, 0.9)
}
