"""
Antenna Calculator - Tooth pair radii, frequencies and feed gap.

This module provides the calculator functions for planar log-periodic
toothed antennas. calculate() returns a typed CalculationResult.

Example:
    >>> from logperiodic.calculator import calculate, to_summary
    >>> from logperiodic.io import DesignParameters
    >>>
    >>> params = DesignParameters(scaling_factor=1.2, tooth_angle_deg=30,
    ...                           effective_permittivity=2.0,
    ...                           tooth_pair_count=4, start_radius_m=0.1)
    >>> result = calculate(params)
    >>> print(to_summary(result, params))
"""

from .core import (
    # Errors
    CalculationError,

    # Unit conversion
    to_hz,
    from_hz,
    meters_to_inches,
    inches_to_meters,

    # Closed-form relations
    frequency_for_radius,
    radius_for_frequency,
    feed_gap_for_frequency,
    tooth_outer_radius,
    log_period,
    bandwidth_ratio,

    # High-level calculation
    resolve_start_radius,
    calculate,
)

from .validation import (
    # Validation
    validate_parameters,
    require_valid,
    ParameterValidationError,
    Severity,
    ValidationMessage,
    ValidationResult,
)

from ..enums import (
    # Type-safe enums
    FrequencyUnit,
    InputMode,
)

from .output import (
    # Output formatters
    results_table,
    to_json,
    to_markdown,
    to_summary,
)

# Convenience imports
from ..io import DesignParameters, ToothResult, CalculationResult


__all__ = [
    # Enums (type-safe)
    "FrequencyUnit",
    "InputMode",

    # Models
    "DesignParameters",
    "ToothResult",
    "CalculationResult",

    # Errors
    "CalculationError",
    "ParameterValidationError",

    # Unit conversion
    "to_hz",
    "from_hz",
    "meters_to_inches",
    "inches_to_meters",

    # Closed-form relations
    "frequency_for_radius",
    "radius_for_frequency",
    "feed_gap_for_frequency",
    "tooth_outer_radius",
    "log_period",
    "bandwidth_ratio",

    # High-level calculation
    "resolve_start_radius",
    "calculate",

    # Validation
    "validate_parameters",
    "require_valid",
    "Severity",
    "ValidationMessage",
    "ValidationResult",

    # Output formatters
    "results_table",
    "to_json",
    "to_markdown",
    "to_summary",
]
