"""
Fused antenna outline using build123d.

Every tooth, beta wedge and the feed gap marker are drawn into one sketch.
Faces that touch (a Q1 tooth and the beta wedge share the alpha edge) fuse
into a single region, giving the manufacturing outline as true arcs rather
than the per-shape paths of io/svg.py and io/dxf.py.
"""

import logging
import math
import tempfile
from pathlib import Path
from typing import Tuple

from build123d import (
    BuildLine,
    BuildSketch,
    ExportDXF,
    ExportSVG,
    Line,
    Sketch,
    ThreePointArc,
    Unit,
    make_face,
)

from .geometry import AntennaGeometry, SectorShape
from .mathutil import deg_to_rad, polar_to_cartesian

logger = logging.getLogger(__name__)

OUTLINE_LAYER = "OUTLINE"


def _xy(point) -> Tuple[float, float]:
    return (float(point[0]), float(point[1]))


def _arc_midpoint(radius: float, shape: SectorShape) -> Tuple[float, float]:
    mid_deg = (shape.start_angle_deg + shape.end_angle_deg) / 2
    return _xy(polar_to_cartesian(radius, -math.pi / 2 + deg_to_rad(mid_deg)))


def _draw_sector(shape: SectorShape) -> None:
    """Add the closed boundary of one sector to the active BuildLine."""
    inner_start, outer_start, outer_end, inner_end = (_xy(v) for v in shape.vertices)
    Line(inner_start, outer_start)
    ThreePointArc(outer_start, _arc_midpoint(shape.outer_radius, shape), outer_end)
    Line(outer_end, inner_end)
    ThreePointArc(inner_end, _arc_midpoint(shape.inner_radius, shape), inner_start)


def build_fused_outline(geometry: AntennaGeometry) -> Sketch:
    """
    Fuse all antenna shapes into one build123d Sketch.

    Args:
        geometry: AntennaGeometry from build_geometry()

    Returns:
        Sketch on the XY plane, millimetres

    Raises:
        ValueError: If the geometry has no shapes
    """
    if not geometry.sectors:
        raise ValueError("Cannot build an outline from empty geometry")

    with BuildSketch() as sk:
        for shape in geometry.sectors:
            with BuildLine():
                _draw_sector(shape)
            make_face()

        gap = geometry.feed_gap_shape
        if gap is not None:
            corners = [_xy(v) for v in gap.vertices]
            with BuildLine():
                for start, end in zip(corners, corners[1:] + corners[:1]):
                    Line(start, end)
            make_face()

    sketch = sk.sketch
    logger.debug(
        f"Fused outline: {len(geometry.sectors)} sectors -> {len(sketch.faces())} faces, "
        f"area={sketch.area:.3f} mm^2"
    )
    return sketch


def outline_area(sketch: Sketch) -> float:
    """Exact area (mm^2) of the fused outline."""
    return sketch.area


def _export_to_bytes(exporter, suffix: str) -> bytes:
    with tempfile.NamedTemporaryFile(suffix=suffix, delete=False) as tmp:
        tmp_path = Path(tmp.name)

    try:
        exporter.write(str(tmp_path))
        return tmp_path.read_bytes()
    finally:
        tmp_path.unlink(missing_ok=True)


def export_outline_svg(sketch: Sketch) -> bytes:
    """Export the fused outline to SVG bytes."""
    exporter = ExportSVG(unit=Unit.MM)
    exporter.add_layer(OUTLINE_LAYER)
    exporter.add_shape(sketch, layer=OUTLINE_LAYER)
    return _export_to_bytes(exporter, ".svg")


def export_outline_dxf(sketch: Sketch) -> bytes:
    """Export the fused outline to DXF bytes."""
    exporter = ExportDXF(unit=Unit.MM)
    exporter.add_layer(OUTLINE_LAYER)
    exporter.add_shape(sketch, layer=OUTLINE_LAYER)
    return _export_to_bytes(exporter, ".dxf")
