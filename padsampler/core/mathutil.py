# padsampler/core/mathutil.py
"""
Scalar helpers shared by the trim model and the renderers.
"""

from __future__ import annotations


def clamp(value: float, min_val: float, max_val: float) -> float:
    return max(min_val, min(max_val, value))


def lerp(a: float, b: float, t: float) -> float:
    return a + (b - a) * t


def inverse_lerp(a: float, b: float, value: float) -> float:
    if abs(b - a) < 1e-10:
        return 0.0
    return (value - a) / (b - a)


def remap(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map ``value`` from one range onto another (no clamping)."""
    return lerp(out_min, out_max, inverse_lerp(in_min, in_max, value))
