"""
Logperiodic - Planar log-periodic toothed antenna calculator and drawing exporter.

Complete design system from tooth pair radii and frequencies to SVG and DXF
drawings.

Example:
    >>> from logperiodic.calculator import calculate
    >>> from logperiodic.core import build_geometry
    >>> from logperiodic.io import DesignParameters
    >>> from logperiodic.io.svg import to_svg_document
    >>>
    >>> # Calculate tooth pairs
    >>> params = DesignParameters(scaling_factor=1.2, tooth_angle_deg=30,
    ...                           tooth_pair_count=4, start_radius_m=0.1)
    >>> result = calculate(params)
    >>>
    >>> # Build and export the drawing
    >>> geometry = build_geometry(result, params)
    >>> svg = to_svg_document(geometry, params)

Note: All imports are lazy-loaded for fast startup. The calculator can be
imported without triggering the build123d outline.
"""

__version__ = "1.0.0"

# Define which names come from which submodule
# All imports are lazy to minimize startup time

_ENUMS = {"FrequencyUnit", "InputMode", "Quadrant"}

_CALCULATOR = {
    "calculate",
    "frequency_for_radius",
    "radius_for_frequency",
    "feed_gap_for_frequency",
    "validate_parameters",
    "CalculationError",
    "ParameterValidationError",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",
}

_IO = {
    "DesignParameters",
    "ToothResult",
    "CalculationResult",
    "ExportSettings",
}

_CORE = {
    "build_geometry",
    "AntennaGeometry",
    "ToothGeometry",
    "SectorShape",
    "FeedGapShape",
    "GeometryBounds",
}

# Cache for lazy-loaded modules
_modules = {}


def __getattr__(name):
    """Lazy load submodules when their attributes are accessed."""
    global _modules

    if name in _ENUMS:
        if "enums" not in _modules:
            from . import enums
            _modules["enums"] = enums
        return getattr(_modules["enums"], name)

    if name in _CALCULATOR:
        if "calculator" not in _modules:
            from . import calculator
            _modules["calculator"] = calculator
        return getattr(_modules["calculator"], name)

    if name in _IO:
        if "io" not in _modules:
            from . import io
            _modules["io"] = io
        return getattr(_modules["io"], name)

    if name in _CORE:
        if "core" not in _modules:
            from . import core
            _modules["core"] = core
        return getattr(_modules["core"], name)

    raise AttributeError(f"module 'logperiodic' has no attribute {name!r}")


__all__ = [
    # Version
    "__version__",

    # Enums (lazy loaded from enums)
    "FrequencyUnit",
    "InputMode",
    "Quadrant",

    # Calculator (lazy loaded from calculator)
    "calculate",
    "frequency_for_radius",
    "radius_for_frequency",
    "feed_gap_for_frequency",
    "validate_parameters",
    "CalculationError",
    "ParameterValidationError",
    "Severity",
    "ValidationResult",
    "to_json",
    "to_markdown",
    "to_summary",

    # Models (lazy loaded from io)
    "DesignParameters",
    "ToothResult",
    "CalculationResult",
    "ExportSettings",

    # Geometry (lazy loaded from core)
    "build_geometry",
    "AntennaGeometry",
    "ToothGeometry",
    "SectorShape",
    "FeedGapShape",
    "GeometryBounds",
]
