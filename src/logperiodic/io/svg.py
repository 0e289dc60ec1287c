"""
SVG export for antenna geometry.

Produces a standalone, deterministic SVG document from an AntennaGeometry.
Coordinates are millimetres with the layout top (0 deg) pointing up, which
matches SVG's downward y axis because sector angles are placed at
-pi/2 + theta.
"""

import math
from typing import Dict, List, Optional, Sequence, Tuple

from ..constants import (
    COORDINATE_DECIMALS,
    MIRROR_OFFSET_DEG,
    RIGHT_ANGLE_DEG,
    SVG_LABEL_OFFSET_FRACTION,
    SVG_NAMESPACE,
    SVG_PADDING_FRACTION,
)
from ..core.geometry import AntennaGeometry, GeometryBounds, SectorShape, ToothGeometry
from ..core.mathutil import Point, deg_to_rad, format_number, polar_to_cartesian
from ..enums import Quadrant
from .models import DesignParameters, ExportSettings

_STYLE = [
    "  <style>",
    "    .antenna-tooth-filled { fill: #2563eb; fill-opacity: 0.85; stroke: #1e3a8a; stroke-width: 0.2; }",
    "    .beta-section { fill: #059669; fill-opacity: 0.6; stroke: #065f46; stroke-width: 0.2; }",
    "    .feed-gap-marker { fill: #f59e0b; stroke: #92400e; stroke-width: 0.1; }",
    "    .reference-line { fill: none; stroke-width: 0.3; stroke-dasharray: 2 2; }",
    "    .dimension-text { font: 6px sans-serif; text-anchor: middle; }",
    "  </style>",
]

_COLOR_NEUTRAL = "#666"
_COLOR_ALPHA = "#e11d48"
_COLOR_BETA = "#059669"


def _fmt(value: float) -> str:
    return format_number(value, COORDINATE_DECIMALS)


def _xy(point: Point) -> str:
    return f"{_fmt(point[0])} {_fmt(point[1])}"


def _escape_svg_text(value: str) -> str:
    return (
        value.replace("&", "&amp;")
        .replace("<", "&lt;")
        .replace(">", "&gt;")
        .replace('"', "&quot;")
    )


def tooth_path(shape: SectorShape) -> str:
    """
    SVG path data for an annular sector (tooth or beta wedge).

    Straight edge out, outer arc (sweep 1), straight edge in, inner arc back
    (sweep 0). The large-arc flag is set only for spans over 180 degrees.
    """
    inner_start, outer_start, outer_end, inner_end = shape.vertices
    large_arc = 1 if abs(shape.span_rad) > math.pi else 0
    ro = _fmt(shape.outer_radius)
    ri = _fmt(shape.inner_radius)
    return (
        f"M {_xy(inner_start)} "
        f"L {_xy(outer_start)} "
        f"A {ro} {ro} 0 {large_arc} 1 {_xy(outer_end)} "
        f"L {_xy(inner_end)} "
        f"A {ri} {ri} 0 {large_arc} 0 {_xy(inner_start)} "
        f"Z"
    )


def polygon_path(vertices: Sequence[Point]) -> str:
    """SVG path data for a closed straight-edged polygon."""
    first, *rest = vertices
    segments = [f"M {_xy(first)}"] + [f"L {_xy(v)}" for v in rest] + ["Z"]
    return " ".join(segments)


def view_box(geometry: AntennaGeometry) -> Tuple[float, float, float, float]:
    """
    (x, y, width, height) of the viewport.

    Tooth bounds plus SVG_PADDING_FRACTION (half per side). Falls back to the
    bounds of every shape when there are no teeth, then to a unit box.
    """
    bounds: GeometryBounds = geometry.bounds
    if bounds.is_degenerate:
        bounds = geometry.overall_bounds

    width, height = bounds.width, bounds.height
    if width <= 0 or height <= 0:
        width = height = 1.0
        min_x, min_y = bounds.center.x - 0.5, bounds.center.y - 0.5
    else:
        min_x, min_y = bounds.min.x, bounds.min.y

    pad_x = width * SVG_PADDING_FRACTION / 2
    pad_y = height * SVG_PADDING_FRACTION / 2
    return (min_x - pad_x, min_y - pad_y, width + 2 * pad_x, height + 2 * pad_y)


def radius_label_indices(count: int) -> List[int]:
    """Result indices that get a radius label: first, 1/3, 2/3 and last."""
    if count <= 0:
        return []
    last = count - 1
    return sorted({0, round(last / 3), round(2 * last / 3), last})


def _tooth_element(tooth: ToothGeometry, params: DesignParameters) -> str:
    unit = params.output_frequency_unit
    quadrant_class = "quadrant-1" if tooth.quadrant in (Quadrant.Q1, Quadrant.Q1_MIRROR) else "quadrant-3"
    f_low, f_high = (f / unit.multiplier for f in tooth.frequency_range_hz)
    r_low, r_high = tooth.radius_range_m
    n_low, n_high = tooth.pair_numbers
    return (
        f'    <path class="antenna-tooth-filled {quadrant_class}" d="{tooth_path(tooth)}" '
        f'data-tooth-index="{tooth.pair_index}" '
        f'data-tooth-side="{tooth.tooth_side}" '
        f'data-quadrant="{tooth.quadrant.value}" '
        f'data-tooth-pair="{n_low}-{n_high}" '
        f'data-frequency="{f_low:.3f}-{f_high:.3f}" '
        f'data-radius="{r_low:.6f}-{r_high:.6f}" />'
    )


def _line(end: Point, color: str) -> str:
    return (
        f'    <line class="reference-line" x1="0" y1="0" '
        f'x2="{_fmt(end.x)}" y2="{_fmt(end.y)}" stroke="{color}" />'
    )


def _text(position: Point, label: str, color: str) -> str:
    return (
        f'    <text class="dimension-text" x="{_fmt(position.x)}" y="{_fmt(position.y)}" '
        f'fill="{color}">{_escape_svg_text(label)}</text>'
    )


def _reference_elements(geometry: AntennaGeometry, params: DesignParameters) -> List[str]:
    """Reference lines at 0, alpha, 90, 180 (plus mirrors) with angle and radius labels."""
    if not geometry.sectors:
        return []

    radius = max(s.outer_radius for s in geometry.sectors)
    offset = radius * SVG_LABEL_OFFSET_FRACTION
    alpha = params.tooth_angle_deg

    def at(r: float, theta_deg: float) -> Point:
        return polar_to_cartesian(r, -math.pi / 2 + deg_to_rad(theta_deg))

    lines = [
        _line(at(radius, 0.0), _COLOR_NEUTRAL),
        _line(at(radius, alpha), _COLOR_ALPHA),
        _line(at(radius, RIGHT_ANGLE_DEG), _COLOR_BETA),
        _line(at(radius, MIRROR_OFFSET_DEG), _COLOR_NEUTRAL),
        _line(at(radius, MIRROR_OFFSET_DEG + alpha), _COLOR_ALPHA),
        _line(at(radius, MIRROR_OFFSET_DEG + RIGHT_ANGLE_DEG), _COLOR_BETA),
    ]

    lines.extend([
        _text(at(radius + offset, 0.0), "0°", _COLOR_NEUTRAL),
        _text(at(radius + offset, alpha), f"α={alpha:g}°", _COLOR_ALPHA),
        _text(at(radius + offset, RIGHT_ANGLE_DEG), f"β={params.beta_angle_deg:g}°", _COLOR_BETA),
        _text(at(radius + offset, MIRROR_OFFSET_DEG), "180°", _COLOR_NEUTRAL),
    ])

    # Radius labels follow the 0 deg line, numbered by tooth pair n in result
    # order (radii shrink when Gamma < 1)
    radii: Dict[int, float] = {}
    for tooth in geometry.teeth:
        n_low, n_high = tooth.pair_numbers
        radii.setdefault(n_low, tooth.inner_radius)
        radii.setdefault(n_high, tooth.outer_radius)
    if not radii:
        radii = {1: geometry.beta_sections[0].inner_radius}
    labelled = list(radii.items())
    for index in radius_label_indices(len(labelled)):
        n, r = labelled[index]
        position = Point(offset / 2, -r)
        lines.append(_text(position, f"r{n}={format_number(r, 2)} mm", _COLOR_NEUTRAL))

    return lines


def to_svg_document(
    geometry: AntennaGeometry,
    params: DesignParameters,
    settings: Optional[ExportSettings] = None
) -> str:
    """
    Serialize antenna geometry to a standalone SVG document.

    Args:
        geometry: AntennaGeometry from build_geometry()
        params: Parameters the geometry was built from (labels, units)
        settings: Export options (XML declaration, reference layer)

    Returns:
        SVG document text. Identical inputs give byte-identical output.
    """
    settings = settings or ExportSettings()
    x, y, width, height = view_box(geometry)

    lines: List[str] = []
    if settings.svg_xml_declaration:
        lines.append('<?xml version="1.0" encoding="UTF-8"?>')
    lines.append(
        f'<svg xmlns="{SVG_NAMESPACE}" class="antenna-svg" '
        f'width="{_fmt(width)}mm" height="{_fmt(height)}mm" '
        f'viewBox="{_fmt(x)} {_fmt(y)} {_fmt(width)} {_fmt(height)}" '
        f'preserveAspectRatio="xMidYMid meet">'
    )
    lines.extend(_STYLE)

    lines.append('  <g class="beta-group">')
    for section in geometry.beta_sections:
        lines.append(
            f'    <path class="beta-section" d="{tooth_path(section)}" '
            f'data-quadrant="{section.quadrant.value}" />'
        )
    lines.append('  </g>')

    lines.append('  <g class="antenna-group">')
    for tooth in geometry.teeth:
        lines.append(_tooth_element(tooth, params))
    lines.append('  </g>')

    if geometry.feed_gap_shape is not None:
        gap = geometry.feed_gap_shape
        lines.append('  <g class="feed-gap">')
        lines.append(
            f'    <path class="feed-gap-marker" d="{polygon_path(gap.vertices)}" '
            f'data-width-mm="{_fmt(gap.width)}" data-rotation-deg="{_fmt(gap.rotation_deg)}" />'
        )
        lines.append('  </g>')

    if settings.svg_show_reference:
        reference = _reference_elements(geometry, params)
        if reference:
            lines.append('  <g class="reference-group">')
            lines.extend(reference)
            lines.append('  </g>')

    lines.append('</svg>')
    return "\n".join(lines) + "\n"
