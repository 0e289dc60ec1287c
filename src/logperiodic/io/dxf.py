"""
DXF export for antenna geometry.

Writes an ASCII drawing-interchange document (AC1024 class) directly, one
group code/value pair per two lines:

- Group codes right-aligned to 3 columns, CRLF line endings, EOF marker
- Numbers in fixed point (4 decimals), never scientific notation
- Every handle drawn from one ascending hex counter per document
- Text transliterated to ASCII ("°" -> " deg", Greek letters -> names)

Strict R2000+ readers find model space through ownership links, so every
entity carries its block record as owner (330), each block record points at
its LAYOUT (340), the LAYOUT objects hang off ACAD_LAYOUT in the root
dictionary, and $HANDSEED holds the next free handle.

Arcs are encoded as LWPOLYLINE bulges: bulge = tan(span / 4), positive on
the outer edge (counter-clockwise) and negated on the inner edge.
"""

import logging
import math
from typing import Dict, List, Optional, Sequence, Tuple, Union

from ..constants import (
    COORDINATE_DECIMALS,
    DXF_CODEPAGE,
    DXF_EXTENTS_MARGIN,
    DXF_HANDLE_BASE,
    DXF_INSUNITS_MM,
    DXF_LABEL_HEIGHT_MM,
    DXF_LABEL_STEP_DEG,
    DXF_LAYERS,
    DXF_PARAM_HEIGHT_MM,
    DXF_TITLE_HEIGHT_MM,
    DXF_VERSION,
    METER_TO_MM,
    MIRROR_OFFSET_DEG,
    RIGHT_ANGLE_DEG,
)
from ..core.geometry import AntennaGeometry, FeedGapShape, SectorShape, build_geometry
from ..core.mathutil import Point, deg_to_rad, format_number, polar_to_cartesian
from .models import CalculationResult, DesignParameters, ExportSettings, ToothResult

logger = logging.getLogger(__name__)

TITLE_TEXT = "PLANAR TOOTHED LOG-PERIODIC ANTENNA"

LAYER_ANTENNA = "ANTENNA"
LAYER_BETA = "BETA"
LAYER_DIMENSIONS = "DIMENSIONS"
LAYER_REFERENCE = "REFERENCE"

MODEL_SPACE = "*MODEL_SPACE"
PAPER_SPACE = "*PAPER_SPACE"

# Block record -> (layout tab name, tab order)
_LAYOUTS = {
    MODEL_SPACE: ("Model", 0),
    PAPER_SPACE: ("Layout1", 1),
}

_TRANSLITERATIONS = {
    "°": " deg",
    "α": "Alpha",
    "β": "Beta",
    "Γ": "Gamma",
    "γ": "gamma",
    "ε": "epsilon",
    "λ": "lambda",
    "µ": "u",
    "μ": "u",
}

DxfValue = Union[str, int, float]


def to_ascii(text: str) -> str:
    """Transliterate text for strict DXF readers; anything left becomes '?'."""
    for char, replacement in _TRANSLITERATIONS.items():
        text = text.replace(char, replacement)
    return text.encode("ascii", errors="replace").decode("ascii")


def bulge_for_span(span_rad: float) -> float:
    """LWPOLYLINE bulge of a circular arc spanning span_rad."""
    return math.tan(span_rad / 4)


class DxfWriter:
    """Accumulates group code/value pairs for one DXF document."""

    def __init__(self, handle_base: int = DXF_HANDLE_BASE):
        self.lines: List[str] = []
        self._next_handle = handle_base
        # Owner (330) written on every entity
        self.owner = "0"

    @staticmethod
    def _format(value: DxfValue) -> str:
        if isinstance(value, float):
            return format_number(value, COORDINATE_DECIMALS)
        if isinstance(value, int):
            return str(value)
        return to_ascii(value)

    def write(self, code: int, value: DxfValue) -> None:
        self.lines.append(f"{code:>3}")
        self.lines.append(self._format(value))

    def slot(self, code: int) -> int:
        """Write a group code whose value is filled in later; returns its index."""
        self.lines.append(f"{code:>3}")
        self.lines.append("")
        return len(self.lines) - 1

    def fill(self, slot: int, value: DxfValue) -> None:
        self.lines[slot] = self._format(value)

    def handle(self) -> str:
        """Next unused handle (uppercase hex)."""
        value = self.next_handle
        self._next_handle += 1
        return value

    @property
    def next_handle(self) -> str:
        """Handle the next call to handle() returns, without allocating it."""
        return f"{self._next_handle:X}"

    def begin_entity(self, dxftype: str, layer: str) -> None:
        self.write(0, dxftype)
        self.write(5, self.handle())
        self.write(330, self.owner)
        self.write(100, "AcDbEntity")
        self.write(8, layer)

    def point(self, point: Point, base_code: int = 10, z: Optional[float] = 0.0) -> None:
        self.write(base_code, float(point[0]))
        self.write(base_code + 10, float(point[1]))
        if z is not None:
            self.write(base_code + 20, float(z))

    def getvalue(self) -> str:
        return "\r\n".join(self.lines) + "\r\n"


# =============================================================================
# Sections
# =============================================================================

def _write_header(writer: DxfWriter, extent: float) -> int:
    """Header variables. Returns the $HANDSEED slot, filled once all handles exist."""
    writer.write(0, "SECTION")
    writer.write(2, "HEADER")

    writer.write(9, "$ACADVER")
    writer.write(1, DXF_VERSION)
    writer.write(9, "$DWGCODEPAGE")
    writer.write(3, DXF_CODEPAGE)
    writer.write(9, "$HANDSEED")
    handseed = writer.slot(5)

    writer.write(9, "$INSBASE")
    writer.point(Point(0.0, 0.0))
    writer.write(9, "$EXTMIN")
    writer.point(Point(-extent, -extent))
    writer.write(9, "$EXTMAX")
    writer.point(Point(extent, extent))

    writer.write(9, "$INSUNITS")
    writer.write(70, DXF_INSUNITS_MM)
    writer.write(9, "$MEASUREMENT")
    writer.write(70, 1)

    writer.write(9, "$LIMMIN")
    writer.point(Point(-extent, -extent), z=None)
    writer.write(9, "$LIMMAX")
    writer.point(Point(extent, extent), z=None)

    writer.write(0, "ENDSEC")
    return handseed


def _begin_table(writer: DxfWriter, name: str, count: int) -> str:
    handle = writer.handle()
    writer.write(0, "TABLE")
    writer.write(2, name)
    writer.write(5, handle)
    writer.write(100, "AcDbSymbolTable")
    writer.write(70, count)
    return handle


def _write_tables(writer: DxfWriter) -> Tuple[Dict[str, str], Dict[str, int]]:
    """LTYPE, LAYER, STYLE and BLOCK_RECORD tables.

    Returns the BLOCK_RECORD handles keyed by block name, and the slots of
    their LAYOUT pointers (the LAYOUT objects are written last).
    """
    writer.write(0, "SECTION")
    writer.write(2, "TABLES")

    table = _begin_table(writer, "LTYPE", 1)
    writer.write(0, "LTYPE")
    writer.write(5, writer.handle())
    writer.write(330, table)
    writer.write(100, "AcDbSymbolTableRecord")
    writer.write(100, "AcDbLinetypeTableRecord")
    writer.write(2, "CONTINUOUS")
    writer.write(70, 0)
    writer.write(3, "Solid line")
    writer.write(72, 65)
    writer.write(73, 0)
    writer.write(40, 0.0)
    writer.write(0, "ENDTAB")

    table = _begin_table(writer, "LAYER", len(DXF_LAYERS))
    for name, color in DXF_LAYERS.items():
        writer.write(0, "LAYER")
        writer.write(5, writer.handle())
        writer.write(330, table)
        writer.write(100, "AcDbSymbolTableRecord")
        writer.write(100, "AcDbLayerTableRecord")
        writer.write(2, name)
        writer.write(70, 0)
        writer.write(62, color)
        writer.write(6, "CONTINUOUS")
        writer.write(290, 1)
        writer.write(370, -3)
    writer.write(0, "ENDTAB")

    table = _begin_table(writer, "STYLE", 1)
    writer.write(0, "STYLE")
    writer.write(5, writer.handle())
    writer.write(330, table)
    writer.write(100, "AcDbSymbolTableRecord")
    writer.write(100, "AcDbTextStyleTableRecord")
    writer.write(2, "STANDARD")
    writer.write(70, 0)
    writer.write(40, 0.0)
    writer.write(41, 1.0)
    writer.write(50, 0.0)
    writer.write(71, 0)
    writer.write(42, 2.5)
    writer.write(3, "txt")
    writer.write(4, "")
    writer.write(0, "ENDTAB")

    block_records = {}
    layout_slots = {}
    table = _begin_table(writer, "BLOCK_RECORD", len(_LAYOUTS))
    for name in _LAYOUTS:
        handle = writer.handle()
        block_records[name] = handle
        writer.write(0, "BLOCK_RECORD")
        writer.write(5, handle)
        writer.write(330, table)
        writer.write(100, "AcDbSymbolTableRecord")
        writer.write(100, "AcDbBlockTableRecord")
        writer.write(2, name)
        layout_slots[name] = writer.slot(340)
    writer.write(0, "ENDTAB")

    writer.write(0, "ENDSEC")
    return block_records, layout_slots


def _write_blocks(writer: DxfWriter, block_records: Dict[str, str]) -> None:
    writer.write(0, "SECTION")
    writer.write(2, "BLOCKS")

    for name, owner in block_records.items():
        writer.write(0, "BLOCK")
        writer.write(5, writer.handle())
        writer.write(330, owner)
        writer.write(100, "AcDbEntity")
        writer.write(8, "0")
        writer.write(100, "AcDbBlockBegin")
        writer.write(2, name)
        writer.write(70, 0)
        writer.point(Point(0.0, 0.0))
        writer.write(3, name)
        writer.write(1, "")
        writer.write(0, "ENDBLK")
        writer.write(5, writer.handle())
        writer.write(330, owner)
        writer.write(100, "AcDbEntity")
        writer.write(8, "0")
        writer.write(100, "AcDbBlockEnd")

    writer.write(0, "ENDSEC")


def _write_dictionary(writer: DxfWriter, handle: str, owner: str, entries: Dict[str, str]) -> None:
    writer.write(0, "DICTIONARY")
    writer.write(5, handle)
    writer.write(330, owner)
    writer.write(100, "AcDbDictionary")
    writer.write(281, 1)
    for key, value in entries.items():
        writer.write(3, key)
        writer.write(350, value)


def _write_objects(writer: DxfWriter, block_records: Dict[str, str], extent: float) -> Dict[str, str]:
    """Root dictionary, ACAD_LAYOUT and one LAYOUT per block record.

    Returns the LAYOUT handles keyed by block record name.
    """
    writer.write(0, "SECTION")
    writer.write(2, "OBJECTS")

    root = writer.handle()
    layout_dict = writer.handle()
    layouts = {name: writer.handle() for name in block_records}

    _write_dictionary(writer, root, "0", {"ACAD_LAYOUT": layout_dict})
    _write_dictionary(
        writer,
        layout_dict,
        root,
        {_LAYOUTS[name][0]: handle for name, handle in layouts.items()},
    )

    for name, handle in layouts.items():
        tab_name, tab_order = _LAYOUTS[name]
        writer.write(0, "LAYOUT")
        writer.write(5, handle)
        writer.write(330, layout_dict)
        writer.write(100, "AcDbPlotSettings")
        writer.write(1, "")
        writer.write(70, 688)
        writer.write(100, "AcDbLayout")
        writer.write(1, tab_name)
        writer.write(70, 1)
        writer.write(71, tab_order)
        writer.point(Point(-extent, -extent), z=None)
        writer.point(Point(extent, extent), base_code=11, z=None)
        writer.point(Point(0.0, 0.0), base_code=12)
        writer.point(Point(-extent, -extent), base_code=14)
        writer.point(Point(extent, extent), base_code=15)
        writer.write(146, 0.0)
        writer.write(330, block_records[name])

    writer.write(0, "ENDSEC")
    return layouts


# =============================================================================
# Entities
# =============================================================================

def write_sector_polyline(writer: DxfWriter, shape: SectorShape, layer: str) -> None:
    """Closed 4-vertex LWPOLYLINE with bulges [0, +b, 0, -b]."""
    bulge = bulge_for_span(shape.span_rad)
    bulges = (0.0, bulge, 0.0, -bulge)

    writer.begin_entity("LWPOLYLINE", layer)
    writer.write(100, "AcDbPolyline")
    writer.write(90, 4)
    writer.write(70, 1)
    writer.write(43, 0.0)
    for vertex, vertex_bulge in zip(shape.vertices, bulges):
        writer.point(vertex, z=None)
        writer.write(42, vertex_bulge)


def write_polygon(writer: DxfWriter, vertices: Sequence[Point], layer: str) -> None:
    """Closed straight-edged LWPOLYLINE."""
    writer.begin_entity("LWPOLYLINE", layer)
    writer.write(100, "AcDbPolyline")
    writer.write(90, len(vertices))
    writer.write(70, 1)
    writer.write(43, 0.0)
    for vertex in vertices:
        writer.point(vertex, z=None)


def write_line(writer: DxfWriter, start: Point, end: Point, layer: str) -> None:
    writer.begin_entity("LINE", layer)
    writer.write(100, "AcDbLine")
    writer.point(start)
    writer.point(end, base_code=11)


def write_text(writer: DxfWriter, text: str, position: Point, height: float, layer: str) -> None:
    """Single-line TEXT, horizontally centred on position."""
    writer.begin_entity("TEXT", layer)
    writer.write(100, "AcDbText")
    writer.point(position)
    writer.write(40, float(height))
    writer.write(1, text)
    writer.write(50, 0.0)
    writer.write(41, 1.0)
    writer.write(51, 0.0)
    writer.write(7, "STANDARD")
    writer.write(71, 0)
    writer.write(72, 1)
    writer.point(position, base_code=11)
    writer.write(100, "AcDbText")
    writer.write(73, 2)


def _write_geometry(writer: DxfWriter, geometry: AntennaGeometry) -> None:
    for tooth in geometry.teeth:
        write_sector_polyline(writer, tooth, LAYER_ANTENNA)
    for section in geometry.beta_sections:
        write_sector_polyline(writer, section, LAYER_BETA)

    gap: Optional[FeedGapShape] = geometry.feed_gap_shape
    if gap is not None:
        write_polygon(writer, gap.vertices, LAYER_REFERENCE)


def _write_reference_lines(writer: DxfWriter, geometry: AntennaGeometry, params: DesignParameters) -> None:
    """Radial lines from the origin at 0, alpha, 90 and their 180 deg mirrors."""
    if not geometry.sectors:
        return

    radius = max(s.outer_radius for s in geometry.sectors)
    alpha = params.tooth_angle_deg
    origin = Point(0.0, 0.0)
    for theta_deg in (0.0, alpha, RIGHT_ANGLE_DEG):
        for offset in (0.0, MIRROR_OFFSET_DEG):
            end = polar_to_cartesian(radius, -math.pi / 2 + deg_to_rad(theta_deg + offset))
            write_line(writer, origin, end, LAYER_REFERENCE)


def _write_annotations(
    writer: DxfWriter,
    results: Sequence[ToothResult],
    params: DesignParameters
) -> None:
    """Title, parameter line and one radius label per tooth pair."""
    last_radius = results[-1].inner_radius_m * METER_TO_MM
    title_y = -last_radius * 1.2

    write_text(writer, TITLE_TEXT, Point(0.0, title_y), DXF_TITLE_HEIGHT_MM, LAYER_DIMENSIONS)

    param_text = (
        f"Gamma={params.scaling_factor:g}  α={params.tooth_angle_deg:g}°  "
        f"Eeff={params.effective_permittivity:g}  Pairs={params.tooth_pair_count}"
    )
    write_text(writer, param_text, Point(0.0, title_y + 30), DXF_PARAM_HEIGHT_MM, LAYER_DIMENSIONS)

    for index, result in enumerate(results):
        radius = result.inner_radius_m * METER_TO_MM
        position = polar_to_cartesian(radius * 1.1, deg_to_rad(index * DXF_LABEL_STEP_DEG))
        write_text(
            writer,
            f"r{result.n}={result.inner_radius_m:.4f}m",
            position,
            DXF_LABEL_HEIGHT_MM,
            LAYER_DIMENSIONS,
        )


def to_dxf_document(
    results: Union[CalculationResult, Sequence[ToothResult]],
    params: DesignParameters,
    settings: Optional[ExportSettings] = None
) -> str:
    """
    Serialize an antenna to a DXF document.

    Args:
        results: CalculationResult, or the ordered tooth results alone
        params: Parameters the results were calculated from
        settings: Export options (annotation text on/off)

    Returns:
        DXF text with CRLF line endings, terminated by EOF
    """
    settings = settings or ExportSettings()
    geometry = build_geometry(results, params)
    tooth_results = results.results if isinstance(results, CalculationResult) else list(results)

    outer = max((s.outer_radius for s in geometry.sectors), default=1.0)
    extent = outer * DXF_EXTENTS_MARGIN

    writer = DxfWriter()
    handseed = _write_header(writer, extent)
    block_records, layout_slots = _write_tables(writer)
    _write_blocks(writer, block_records)

    writer.owner = block_records[MODEL_SPACE]
    writer.write(0, "SECTION")
    writer.write(2, "ENTITIES")
    _write_geometry(writer, geometry)
    _write_reference_lines(writer, geometry, params)
    if settings.dxf_annotations and tooth_results:
        _write_annotations(writer, tooth_results, params)
    writer.write(0, "ENDSEC")

    layouts = _write_objects(writer, block_records, extent)
    for name, slot in layout_slots.items():
        writer.fill(slot, layouts[name])
    writer.fill(handseed, writer.next_handle)

    writer.write(0, "EOF")

    logger.debug(
        f"DXF document: {len(geometry.teeth)} teeth, {len(geometry.beta_sections)} beta sections, "
        f"{len(writer.lines) // 2} group pairs"
    )
    return writer.getvalue()
