"""
2D geometry of a planar log-periodic toothed antenna.

Converts calculator results into closed shapes in millimetres. Shapes are
pure data (vertices, radii, angles); rendering lives in io/svg.py,
io/dxf.py and core/outline.py.

Angle convention: a sector angle theta (degrees) is measured from the top of
the layout and placed at -pi/2 + theta in the drawing plane.

Layout per antenna half (mirrored by 180 degrees for the other half):
    Q1    [0, alpha]          teeth from even-indexed radius gaps
    beta  [alpha, 90]         solid wedge, innermost to outermost radius
    Q3    [90, 90 + alpha]    teeth from odd-indexed radius gaps
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Tuple, Union

from ..constants import (
    FEED_GAP_HEIGHT_FRACTION,
    FEED_GAP_ROTATION_OFFSET_DEG,
    METER_TO_MM,
    MIRROR_OFFSET_DEG,
    Q1_START_DEG,
    Q3_START_DEG,
    RIGHT_ANGLE_DEG,
)
from ..enums import Quadrant
from ..io.models import CalculationResult, DesignParameters, ToothResult
from ..calculator.core import feed_gap_for_frequency, tooth_outer_radius
from .mathutil import Point, deg_to_rad, distance, polar_to_cartesian, rotate

logger = logging.getLogger(__name__)

Vertices = Tuple[Point, Point, Point, Point]


@dataclass(frozen=True)
class SectorShape:
    """Annular sector bounded by two radial edges and two circular arcs.

    Vertex order: inner-start, outer-start, outer-end, inner-end.
    """
    quadrant: Quadrant
    inner_radius: float       # mm
    outer_radius: float       # mm
    start_angle_deg: float    # From the top of the layout
    end_angle_deg: float
    vertices: Vertices

    @property
    def span_rad(self) -> float:
        return deg_to_rad(self.end_angle_deg - self.start_angle_deg)

    @property
    def is_mirror(self) -> bool:
        return self.quadrant in (Quadrant.Q1_MIRROR, Quadrant.Q3_MIRROR, Quadrant.BETA_MIRROR)


@dataclass(frozen=True)
class ToothGeometry(SectorShape):
    """One tooth: the band between two consecutive radii inside a Q1/Q3 sector."""
    pair_index: int = 0                                    # 0-based radius gap index
    tooth_side: int = 0                                    # 0 = base sector, 1 = mirror
    pair_numbers: Tuple[int, int] = (0, 0)                 # (n, n+1)
    frequency_range_hz: Tuple[float, float] = (0.0, 0.0)   # (f_n, f_n+1)
    radius_range_m: Tuple[float, float] = (0.0, 0.0)       # (r_n, r_n+1)


@dataclass(frozen=True)
class FeedGapShape:
    """Feed gap marker: rectangle centred on the origin."""
    width: float          # mm, feed gap
    height: float         # mm
    rotation_deg: float
    vertices: Vertices


@dataclass(frozen=True)
class GeometryBounds:
    """Axis-aligned bounds of a set of vertices."""
    min: Point
    max: Point
    width: float
    height: float
    center: Point

    @property
    def is_degenerate(self) -> bool:
        return self.width <= 0 or self.height <= 0


@dataclass(frozen=True)
class AntennaGeometry:
    """Complete antenna geometry. Recomputed from scratch on every build."""
    teeth: Tuple[ToothGeometry, ...]
    beta_sections: Tuple[SectorShape, ...]
    feed_gap_shape: Optional[FeedGapShape]
    bounds: GeometryBounds                 # Teeth only
    sectors: Tuple[SectorShape, ...] = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "sectors", tuple(self.teeth) + tuple(self.beta_sections))

    def all_shapes(self) -> List[Union[SectorShape, FeedGapShape]]:
        shapes: List[Union[SectorShape, FeedGapShape]] = list(self.sectors)
        if self.feed_gap_shape is not None:
            shapes.append(self.feed_gap_shape)
        return shapes

    @property
    def overall_bounds(self) -> GeometryBounds:
        """Bounds over every shape, including beta wedges and the feed gap."""
        return compute_bounds(self.all_shapes())


# =============================================================================
# Construction
# =============================================================================

def sector_vertices(
    inner_radius: float,
    outer_radius: float,
    start_angle_deg: float,
    end_angle_deg: float
) -> Vertices:
    """Corner points of an annular sector (inner-start, outer-start, outer-end, inner-end)."""
    start = -math.pi / 2 + deg_to_rad(start_angle_deg)
    end = -math.pi / 2 + deg_to_rad(end_angle_deg)
    return (
        polar_to_cartesian(inner_radius, start),
        polar_to_cartesian(outer_radius, start),
        polar_to_cartesian(outer_radius, end),
        polar_to_cartesian(inner_radius, end),
    )


def make_sector(
    inner_radius: float,
    outer_radius: float,
    start_angle_deg: float,
    end_angle_deg: float,
    quadrant: Quadrant
) -> SectorShape:
    return SectorShape(
        quadrant=quadrant,
        inner_radius=inner_radius,
        outer_radius=outer_radius,
        start_angle_deg=start_angle_deg,
        end_angle_deg=end_angle_deg,
        vertices=sector_vertices(inner_radius, outer_radius, start_angle_deg, end_angle_deg),
    )


def generate_teeth(results: Sequence[ToothResult], params: DesignParameters) -> List[ToothGeometry]:
    """
    Teeth for every gap between consecutive radii.

    Even gaps give a Q1 tooth, odd gaps a Q3 tooth; each is also drawn
    mirrored by 180 degrees. Fewer than two results give no teeth.
    """
    alpha = params.tooth_angle_deg
    teeth: List[ToothGeometry] = []

    for index in range(len(results) - 1):
        current, following = results[index], results[index + 1]
        inner = current.inner_radius_m * METER_TO_MM
        outer = following.inner_radius_m * METER_TO_MM

        if index % 2 == 0:
            placements = ((Quadrant.Q1, Q1_START_DEG), (Quadrant.Q1_MIRROR, Q1_START_DEG + MIRROR_OFFSET_DEG))
        else:
            placements = ((Quadrant.Q3, Q3_START_DEG), (Quadrant.Q3_MIRROR, Q3_START_DEG + MIRROR_OFFSET_DEG))

        for side, (quadrant, start_deg) in enumerate(placements):
            end_deg = start_deg + alpha
            teeth.append(ToothGeometry(
                quadrant=quadrant,
                inner_radius=inner,
                outer_radius=outer,
                start_angle_deg=start_deg,
                end_angle_deg=end_deg,
                vertices=sector_vertices(inner, outer, start_deg, end_deg),
                pair_index=index,
                tooth_side=side,
                pair_numbers=(current.n, following.n),
                frequency_range_hz=(current.frequency_hz, following.frequency_hz),
                radius_range_m=(current.inner_radius_m, following.inner_radius_m),
            ))

    return teeth


def generate_beta_sections(results: Sequence[ToothResult], params: DesignParameters) -> List[SectorShape]:
    """Solid beta wedges, [alpha, 90] and its mirror, from r1 to r_last x sqrt(Gamma)."""
    if not results:
        return []

    inner = results[0].inner_radius_m * METER_TO_MM
    outer = tooth_outer_radius(results[-1].inner_radius_m, params.scaling_factor) * METER_TO_MM
    alpha = params.tooth_angle_deg

    return [
        make_sector(inner, outer, alpha, RIGHT_ANGLE_DEG, Quadrant.BETA),
        make_sector(
            inner, outer,
            alpha + MIRROR_OFFSET_DEG, RIGHT_ANGLE_DEG + MIRROR_OFFSET_DEG,
            Quadrant.BETA_MIRROR,
        ),
    ]


def generate_feed_gap(
    results: Sequence[ToothResult],
    params: DesignParameters,
    feed_gap_m: float
) -> Optional[FeedGapShape]:
    """Feed gap rectangle: feed gap wide, 2% of r1 tall, rotated by alpha - 75 deg."""
    if not results:
        return None

    width = feed_gap_m * METER_TO_MM
    height = results[0].inner_radius_m * METER_TO_MM * FEED_GAP_HEIGHT_FRACTION
    rotation_deg = params.tooth_angle_deg + FEED_GAP_ROTATION_OFFSET_DEG
    angle = deg_to_rad(rotation_deg)

    half_w, half_h = width / 2, height / 2
    corners = (
        Point(-half_w, -half_h),
        Point(half_w, -half_h),
        Point(half_w, half_h),
        Point(-half_w, half_h),
    )
    return FeedGapShape(
        width=width,
        height=height,
        rotation_deg=rotation_deg,
        vertices=tuple(rotate(c, angle) for c in corners),
    )


def compute_bounds(shapes: Iterable) -> GeometryBounds:
    """Bounds over the vertices of shapes. No vertices gives zero bounds at the origin."""
    xs: List[float] = []
    ys: List[float] = []
    for shape in shapes:
        for vertex in shape.vertices:
            xs.append(vertex[0])
            ys.append(vertex[1])

    if not xs:
        origin = Point(0.0, 0.0)
        return GeometryBounds(min=origin, max=origin, width=0.0, height=0.0, center=origin)

    min_x, max_x, min_y, max_y = min(xs), max(xs), min(ys), max(ys)
    return GeometryBounds(
        min=Point(min_x, min_y),
        max=Point(max_x, max_y),
        width=max_x - min_x,
        height=max_y - min_y,
        center=Point((min_x + max_x) / 2, (min_y + max_y) / 2),
    )


def build_geometry(
    results: Union[CalculationResult, Sequence[ToothResult]],
    params: DesignParameters,
    feed_gap_m: Optional[float] = None
) -> AntennaGeometry:
    """
    Build the complete antenna geometry.

    Args:
        results: CalculationResult, or the ordered tooth results alone
        params: Design parameters used for the calculation
        feed_gap_m: Feed gap override (m). Defaults to the calculation's feed
            gap, or is derived from the first tooth frequency.

    Returns:
        AntennaGeometry in millimetres. Bounds cover the teeth only.
    """
    if isinstance(results, CalculationResult):
        if feed_gap_m is None:
            feed_gap_m = results.feed_gap_m
        results = results.results

    if feed_gap_m is None and results:
        feed_gap_m = feed_gap_for_frequency(results[0].frequency_hz, params.effective_permittivity)

    teeth = generate_teeth(results, params)
    beta_sections = generate_beta_sections(results, params)
    feed_gap_shape = generate_feed_gap(results, params, feed_gap_m) if results else None

    logger.debug(
        f"Built geometry: {len(teeth)} teeth, {len(beta_sections)} beta sections, "
        f"feed gap={'yes' if feed_gap_shape else 'no'}"
    )

    return AntennaGeometry(
        teeth=tuple(teeth),
        beta_sections=tuple(beta_sections),
        feed_gap_shape=feed_gap_shape,
        bounds=compute_bounds(teeth),
    )


# =============================================================================
# Analysis utilities
# =============================================================================

def polygon_area(vertices: Sequence[Point]) -> float:
    """Area of a simple polygon by the shoelace formula (straight edges)."""
    area = 0.0
    count = len(vertices)
    for i in range(count):
        j = (i + 1) % count
        area += vertices[i][0] * vertices[j][1]
        area -= vertices[j][0] * vertices[i][1]
    return abs(area) / 2


def polygon_perimeter(vertices: Sequence[Point]) -> float:
    """Sum of the straight edges, closing back to the first vertex."""
    count = len(vertices)
    return sum(distance(vertices[i], vertices[(i + 1) % count]) for i in range(count))


def total_area(shapes: Iterable) -> float:
    """Sum of polygon areas (arcs approximated by chords)."""
    return sum(polygon_area(shape.vertices) for shape in shapes)


def sector_area(shape: SectorShape) -> float:
    """Exact area of an annular sector, arcs included."""
    return 0.5 * shape.span_rad * (shape.outer_radius ** 2 - shape.inner_radius ** 2)
