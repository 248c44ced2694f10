"""Colour helpers. Colours are RGB float triples in the 0-1 range."""

import colorsys
from typing import Sequence, Tuple

import numpy as np

RGB = Tuple[float, float, float]


def hex_to_rgb(value: str) -> RGB:
    """Convert '#RRGGBB' (or 'RRGGBB') to an RGB float triple."""
    value = value.lstrip("#")
    if len(value) != 6:
        raise ValueError(f"Expected a #RRGGBB colour, got {value!r}")
    return (
        int(value[0:2], 16) / 255.0,
        int(value[2:4], 16) / 255.0,
        int(value[4:6], 16) / 255.0,
    )


def hsl_to_rgb(hue_deg: float, saturation: float, lightness: float) -> RGB:
    """HSL with hue in degrees and saturation/lightness in 0-1."""
    # colorsys uses HLS ordering
    return colorsys.hls_to_rgb((hue_deg % 360.0) / 360.0, lightness, saturation)


def palette_to_array(palette: Sequence[str]) -> np.ndarray:
    """Parse a list of hex strings into an (n, 3) float32 array."""
    return np.array([hex_to_rgb(c) for c in palette], dtype=np.float32).reshape(-1, 3)


def pick(palette: np.ndarray, rng: np.random.Generator) -> np.ndarray:
    """Uniformly choose one row of a parsed palette."""
    return palette[rng.integers(len(palette))]
