"""
Physical and engineering constants for log-periodic antenna calculations.

This module centralizes all numerical constants used by the calculator,
the geometry builder and the exporters. Each constant is documented with
its source (physical definition, empirical rule, or layout convention).

MODIFICATION GUIDELINES:
- Never change physical constants
- Empirical rules must keep their published value
- Layout conventions may be adjusted, but exported drawings will change
- Always include units in constant names (_M, _MM, _DEG, _HZ)

Constants are grouped by category:
- Physics: exact definitions
- Empirical rules: rule-of-thumb sizing
- Input limits: accepted parameter ranges
- Layout: geometry placement conventions
- Export: SVG/DXF formatting
"""

from typing import Dict

# =============================================================================
# Physics
# =============================================================================

# Speed of light in vacuum (exact, SI definition of the metre)
SPEED_OF_LIGHT_M_PER_S: float = 299792458.0

# Length conversion (display factor used by the results table)
METER_TO_INCH: float = 39.3701
INCH_TO_METER: float = 0.0254

# Metres to the millimetre drawing units used by geometry and exporters
METER_TO_MM: float = 1000.0

# =============================================================================
# Empirical Rules
# =============================================================================

# Feed gap = FEED_GAP_FACTOR x lambda0 / sqrt(eps_eff)
# Rule of thumb for the feed region of planar toothed log-periodic antennas.
# lambda0 is the free-space wavelength at the first tooth pair frequency.
FEED_GAP_FACTOR: float = 0.02066

# =============================================================================
# Input Limits
# =============================================================================

TOOTH_PAIRS_MIN: int = 1
TOOTH_PAIRS_MAX: int = 16

TOOTH_ANGLE_MIN_DEG: float = 0.0    # Exclusive
TOOTH_ANGLE_MAX_DEG: float = 90.0   # Exclusive

EFFECTIVE_PERMITTIVITY_MIN: float = 1.0   # Vacuum

# Alpha = beta = 45 deg gives a self-complementary structure
SELF_COMPLEMENTARY_ANGLE_DEG: float = 45.0

# =============================================================================
# Layout Conventions
# =============================================================================

# Sector start angles, measured from the top of the layout
Q1_START_DEG: float = 0.0
Q3_START_DEG: float = 90.0
MIRROR_OFFSET_DEG: float = 180.0
RIGHT_ANGLE_DEG: float = 90.0

# Feed gap marker height as a fraction of the seed radius
FEED_GAP_HEIGHT_FRACTION: float = 0.02

# Feed gap marker rotation = tooth angle + offset.
# Layout convention taken from the reference drawings; it has no
# physical derivation and is pending review by an antenna engineer.
FEED_GAP_ROTATION_OFFSET_DEG: float = -75.0

# =============================================================================
# Export
# =============================================================================

SVG_NAMESPACE: str = "http://www.w3.org/2000/svg"

# viewBox padding as a fraction of the geometry width/height (half per side)
SVG_PADDING_FRACTION: float = 0.10

# Fixed-point decimals for exported coordinates (avoids scientific notation)
COORDINATE_DECIMALS: int = 4

# DXF target version (AutoCAD 2010 class) and code page
DXF_VERSION: str = "AC1024"
DXF_CODEPAGE: str = "ANSI_1252"
DXF_INSUNITS_MM: int = 4

# First entity handle; handles only have to be unique within one document
DXF_HANDLE_BASE: int = 100

# Layer name -> ACI colour index
DXF_LAYERS: Dict[str, int] = {
    "0": 7,            # Default layer (white/black)
    "ANTENNA": 5,      # Blue
    "BETA": 3,         # Green
    "DIMENSIONS": 1,   # Red
    "REFERENCE": 8,    # Grey
}

# Text heights (mm) for the DXF annotation block
DXF_TITLE_HEIGHT_MM: float = 20.0
DXF_PARAM_HEIGHT_MM: float = 10.0
DXF_LABEL_HEIGHT_MM: float = 8.0

# Radius labels step around the layout by this angle per tooth pair
DXF_LABEL_STEP_DEG: float = 15.0

# Extents margin relative to the outermost radius (covers the title text)
DXF_EXTENTS_MARGIN: float = 1.3

# SVG reference labels sit this fraction of the outermost radius beyond it
SVG_LABEL_OFFSET_FRACTION: float = 0.08
