"""
Logperiodic IO - Parameter models and document exporters.

This module holds the Pydantic models shared by every layer. Exporters live
in submodules and are imported explicitly:

    logperiodic.io.svg      SVG drawing
    logperiodic.io.dxf      DXF drawing
    logperiodic.io.package  SVG + DXF + JSON + Markdown bundle, ZIP

Example:
    >>> from logperiodic.io import DesignParameters
    >>> from logperiodic.io.package import generate_package, create_package_zip
    >>>
    >>> params = DesignParameters(scaling_factor=1.2, tooth_angle_deg=30,
    ...                           tooth_pair_count=4, start_frequency=500,
    ...                           start_frequency_unit="MHz")
    >>> files = generate_package(params)
    >>> data = create_package_zip(files)
"""

from .models import (
    DesignParameters,
    ToothResult,
    CalculationResult,
    ExportSettings,
)

__all__ = [
    # Models
    "DesignParameters",
    "ToothResult",
    "CalculationResult",
    "ExportSettings",
]
