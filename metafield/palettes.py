"""
Colour schemes for the metaball fill.

Each scheme defines:
  - inner:      Gradient colour at the gradient centre (RGB)
  - outer:      Gradient colour at the gradient radius
  - background: Canvas backdrop behind the blobs

Includes utilities for deriving a contrasting outer colour from any
inner hue.
"""

from __future__ import annotations

import colorsys
from dataclasses import dataclass
from typing import Dict, List, Tuple

RGB = Tuple[int, int, int]


@dataclass(frozen=True)
class ColorScheme:
    """Immutable gradient colour pair."""
    name: str
    inner: RGB
    outer: RGB
    background: RGB = (12, 12, 16)

    @property
    def inner_hex(self) -> str:
        return rgb_to_hex(self.inner)

    @property
    def outer_hex(self) -> str:
        return rgb_to_hex(self.outer)


# ── Hex helpers ───────────────────────────────────────────────────────────

def hex_to_rgb(value: str) -> RGB:
    """Parse ``#rrggbb`` or ``#rgb`` into an RGB tuple."""
    v = value.strip().lstrip("#")
    if len(v) == 3:
        v = "".join(c * 2 for c in v)
    if len(v) != 6:
        raise ValueError(f"Not a hex colour: {value!r}")
    return int(v[0:2], 16), int(v[2:4], 16), int(v[4:6], 16)


def rgb_to_hex(rgb: RGB) -> str:
    return "#{:02x}{:02x}{:02x}".format(*rgb)


# ── Built-in schemes ─────────────────────────────────────────────────────

SCHEMES: Dict[str, ColorScheme] = {
    "original": ColorScheme(
        name="Teal & Pink",
        inner=hex_to_rgb("#25CED1"), outer=hex_to_rgb("#ec407a"),
    ),
    "lava": ColorScheme(
        name="Lava",
        inner=(255, 180, 40), outer=(180, 30, 10),
        background=(20, 8, 5),
    ),
    "ocean": ColorScheme(
        name="Ocean",
        inner=(80, 180, 255), outer=(20, 40, 180),
        background=(5, 8, 25),
    ),
    "acid": ColorScheme(
        name="Acid",
        inner=(180, 255, 60), outer=(30, 160, 20),
        background=(5, 20, 5),
    ),
    "nebula": ColorScheme(
        name="Nebula",
        inner=(220, 100, 255), outer=(120, 20, 160),
        background=(15, 5, 20),
    ),
    "ghost": ColorScheme(
        name="Ghost",
        inner=(240, 240, 255), outer=(120, 120, 140),
        background=(10, 10, 12),
    ),
}

DEFAULT_SCHEME = "original"

CONTRAST_MODES = ["complementary", "triadic", "analogous"]


# ── Contrast colour generation ────────────────────────────────────────────

def _clamp_rgb(r: float, g: float, b: float) -> RGB:
    return (
        max(0, min(255, int(r * 255))),
        max(0, min(255, int(g * 255))),
        max(0, min(255, int(b * 255))),
    )


def _rotate_hue(base: RGB, turn: float) -> RGB:
    h, s, v = colorsys.rgb_to_hsv(base[0]/255, base[1]/255, base[2]/255)
    r, g, b = colorsys.hsv_to_rgb((h + turn) % 1.0, s, v)
    return _clamp_rgb(r, g, b)


def complementary(base: RGB) -> RGB:
    """Return the complementary (opposite hue) colour."""
    return _rotate_hue(base, 0.5)


def triadic(base: RGB) -> RGB:
    """Return the colour a third of the way round the hue wheel."""
    return _rotate_hue(base, 1/3)


def analogous(base: RGB, offset: float = 0.08) -> RGB:
    """Return a nearby hue."""
    return _rotate_hue(base, offset)


def make_background_from(base: RGB) -> RGB:
    """Generate a very dark background tint from a colour."""
    return (max(1, base[0] // 12), max(1, base[1] // 12), max(1, base[2] // 12))


def create_custom_scheme(
    name: str,
    inner: RGB,
    contrast_mode: str = "complementary",
) -> ColorScheme:
    """Build a scheme from one inner colour.

    Args:
        name:           Display name.
        inner:          Gradient centre colour.
        contrast_mode:  One of CONTRAST_MODES; picks the outer colour.
    """
    if contrast_mode == "triadic":
        outer = triadic(inner)
    elif contrast_mode == "analogous":
        outer = analogous(inner)
    elif contrast_mode == "complementary":
        outer = complementary(inner)
    else:
        raise ValueError(
            f"Unknown contrast mode '{contrast_mode}'. "
            f"Available: {', '.join(CONTRAST_MODES)}"
        )
    return ColorScheme(
        name=name, inner=inner, outer=outer, background=make_background_from(inner),
    )


# ── Accessors ─────────────────────────────────────────────────────────────

def get_scheme(name: str) -> ColorScheme:
    if name not in SCHEMES:
        available = ", ".join(sorted(SCHEMES.keys()))
        raise KeyError(f"Unknown scheme '{name}'. Available: {available}")
    return SCHEMES[name]


def list_schemes() -> List[str]:
    return sorted(SCHEMES.keys())
