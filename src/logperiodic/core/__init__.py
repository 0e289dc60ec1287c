"""
Logperiodic Core - Pure 2D geometry engine.

Turns calculator results into antenna shapes (teeth, beta wedges, feed gap
marker) in millimetres. No serialization here; see logperiodic.io.

The build123d fused outline lives in logperiodic.core.outline and is imported
explicitly, so the geometry builder loads without the CAD kernel.

Example:
    >>> from logperiodic.calculator import calculate
    >>> from logperiodic.core import build_geometry
    >>>
    >>> result = calculate(params)
    >>> geometry = build_geometry(result, params)
    >>> len(geometry.teeth)
    6
"""

from .mathutil import (
    Point,
    PolarPoint,
    deg_to_rad,
    rad_to_deg,
    polar_to_cartesian,
    cartesian_to_polar,
    distance,
    rotate,
    lerp,
    map_range,
    clamp,
    round_to,
    format_number,
    format_engineering,
)

from .geometry import (
    # Shapes
    SectorShape,
    ToothGeometry,
    FeedGapShape,
    GeometryBounds,
    AntennaGeometry,

    # Construction
    sector_vertices,
    make_sector,
    generate_teeth,
    generate_beta_sections,
    generate_feed_gap,
    compute_bounds,
    build_geometry,

    # Analysis
    polygon_area,
    polygon_perimeter,
    total_area,
    sector_area,
)

__all__ = [
    # Math kernel
    "Point",
    "PolarPoint",
    "deg_to_rad",
    "rad_to_deg",
    "polar_to_cartesian",
    "cartesian_to_polar",
    "distance",
    "rotate",
    "lerp",
    "map_range",
    "clamp",
    "round_to",
    "format_number",
    "format_engineering",

    # Shapes
    "SectorShape",
    "ToothGeometry",
    "FeedGapShape",
    "GeometryBounds",
    "AntennaGeometry",

    # Construction
    "sector_vertices",
    "make_sector",
    "generate_teeth",
    "generate_beta_sections",
    "generate_feed_gap",
    "compute_bounds",
    "build_geometry",

    # Analysis
    "polygon_area",
    "polygon_perimeter",
    "total_area",
    "sector_area",
]
