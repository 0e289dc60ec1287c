"""
Math helpers shared by the calculator, geometry builder and exporters.

Pure functions with no state. Inputs are assumed to be finite numbers;
callers validate user input before reaching this layer.
"""

import math
from typing import NamedTuple


class Point(NamedTuple):
    """A point in the drawing plane."""
    x: float
    y: float


class PolarPoint(NamedTuple):
    """A point in polar form (angle in radians)."""
    r: float
    theta: float


DEG_TO_RAD = math.pi / 180.0
RAD_TO_DEG = 180.0 / math.pi

# SI prefixes keyed by exponent. ASCII 'u' keeps DXF text 7-bit clean.
_ENGINEERING_PREFIXES = {
    -12: "p",
    -9: "n",
    -6: "u",
    -3: "m",
    0: "",
    3: "k",
    6: "M",
    9: "G",
    12: "T",
}


def deg_to_rad(degrees: float) -> float:
    return degrees * DEG_TO_RAD


def rad_to_deg(radians: float) -> float:
    return radians * RAD_TO_DEG


def polar_to_cartesian(r: float, theta: float) -> Point:
    """Convert polar to cartesian. theta = 0 points along +x."""
    return Point(r * math.cos(theta), r * math.sin(theta))


def cartesian_to_polar(x: float, y: float) -> PolarPoint:
    return PolarPoint(math.hypot(x, y), math.atan2(y, x))


def distance(p1: Point, p2: Point) -> float:
    """Euclidean distance between two points."""
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


def rotate(point: Point, angle: float) -> Point:
    """Rotate a point about the origin by angle (radians)."""
    c, s = math.cos(angle), math.sin(angle)
    return Point(point[0] * c - point[1] * s, point[0] * s + point[1] * c)


def lerp(start: float, end: float, t: float) -> float:
    return start + (end - start) * t


def map_range(value: float, in_min: float, in_max: float, out_min: float, out_max: float) -> float:
    """Map value from [in_min, in_max] onto [out_min, out_max]."""
    return out_min + (value - in_min) * (out_max - out_min) / (in_max - in_min)


def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def round_to(value: float, decimals: int) -> float:
    factor = 10 ** decimals
    return round(value * factor) / factor


def format_number(value: float, decimals: int = 2) -> str:
    """Fixed-point string; never scientific notation.

    Only used at display/export boundaries. Negative zero prints as zero so
    that mirrored geometry serializes identically.
    """
    text = f"{value:.{decimals}f}"
    if text.startswith("-") and float(text) == 0.0:
        return text[1:]
    return text


def format_engineering(value: float) -> str:
    """Format with an SI prefix, e.g. 1.5e9 -> '1.50G'.

    Exponents outside the prefix table fall back to 'e<exp>'.
    """
    if value == 0:
        return "0.00"
    exponent = int(math.floor(math.log10(abs(value)) / 3) * 3)
    mantissa = value / 10 ** exponent
    prefix = _ENGINEERING_PREFIXES.get(exponent, f"e{exponent}")
    return f"{mantissa:.2f}{prefix}"
