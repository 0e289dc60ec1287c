"""
Antenna Calculator - Core Calculations

Pure mathematical functions for planar log-periodic toothed antennas.
Returns typed CalculationResult models.

Radius recurrence:   r(n+1) = r(n) x Gamma
Tooth pair frequency:
    f(n) = C / (2 (r(n)(1 + sqrt(Gamma)) alpha + r(n)(sqrt(Gamma) - 1)) sqrt(eps_eff))
Feed gap:            g = 0.02066 x lambda0 / sqrt(eps_eff),  lambda0 = C / f(1)
"""

import logging
import math
from math import log, radians, sqrt
from typing import List

from ..constants import (
    FEED_GAP_FACTOR,
    INCH_TO_METER,
    METER_TO_INCH,
    SPEED_OF_LIGHT_M_PER_S,
)
from ..enums import FrequencyUnit, InputMode
from ..io.models import CalculationResult, DesignParameters, ToothResult
from .validation import require_valid

logger = logging.getLogger(__name__)


class CalculationError(ArithmeticError):
    """A calculation produced a non-finite or non-positive value.

    Always fatal to the current calculation: no partial results are returned.
    """


def _require_finite_positive(value: float, what: str) -> float:
    if not math.isfinite(value) or value <= 0:
        raise CalculationError(f"{what} is not a finite positive number ({value!r})")
    return value


def _shape_factor(scaling_factor: float, tooth_angle_deg: float) -> float:
    """(1 + sqrt(Gamma)) alpha_rad + (sqrt(Gamma) - 1), shared by both directions."""
    sqrt_gamma = sqrt(scaling_factor)
    return (1 + sqrt_gamma) * radians(tooth_angle_deg) + (sqrt_gamma - 1)


# =============================================================================
# Unit conversion
# =============================================================================

def to_hz(value: float, unit: FrequencyUnit) -> float:
    """Convert a frequency in unit to Hz."""
    return value * unit.multiplier


def from_hz(frequency_hz: float, unit: FrequencyUnit) -> float:
    """Convert a frequency in Hz to unit."""
    return frequency_hz / unit.multiplier


def meters_to_inches(meters: float) -> float:
    return meters * METER_TO_INCH


def inches_to_meters(inches: float) -> float:
    return inches * INCH_TO_METER


# =============================================================================
# Closed-form relations
# =============================================================================

def frequency_for_radius(
    radius_m: float,
    scaling_factor: float,
    tooth_angle_deg: float,
    effective_permittivity: float
) -> float:
    """
    Resonant frequency of the tooth pair with inner radius radius_m.

    Args:
        radius_m: Inner radius r_n (m)
        scaling_factor: Gamma
        tooth_angle_deg: Alpha (degrees)
        effective_permittivity: eps_eff

    Returns:
        Frequency in Hz

    Raises:
        CalculationError: If the denominator collapses or the result is not finite
    """
    denominator = (
        2 * (radius_m * (1 + sqrt(scaling_factor)) * radians(tooth_angle_deg)
             + radius_m * (sqrt(scaling_factor) - 1))
        * sqrt(effective_permittivity)
    )
    if denominator == 0:
        raise CalculationError(
            f"Frequency denominator is zero (r={radius_m}, Gamma={scaling_factor}, "
            f"alpha={tooth_angle_deg})"
        )
    return _require_finite_positive(SPEED_OF_LIGHT_M_PER_S / denominator, "Frequency")


def radius_for_frequency(
    frequency_hz: float,
    scaling_factor: float,
    tooth_angle_deg: float,
    effective_permittivity: float
) -> float:
    """
    Inner radius whose tooth pair resonates at frequency_hz.

    Algebraic inverse of frequency_for_radius.

    Raises:
        CalculationError: If the denominator collapses or the result is not finite
    """
    denominator = (
        2 * frequency_hz * _shape_factor(scaling_factor, tooth_angle_deg)
        * sqrt(effective_permittivity)
    )
    if denominator == 0:
        raise CalculationError(
            f"Radius denominator is zero (f={frequency_hz}, Gamma={scaling_factor}, "
            f"alpha={tooth_angle_deg})"
        )
    return _require_finite_positive(SPEED_OF_LIGHT_M_PER_S / denominator, "Start radius")


def feed_gap_for_frequency(frequency_hz: float, effective_permittivity: float) -> float:
    """
    Feed gap width (m) by the 0.02066 lambda0 rule of thumb.

    Args:
        frequency_hz: Frequency of the first tooth pair (Hz)
        effective_permittivity: eps_eff

    Returns:
        Feed gap in metres
    """
    wavelength_m = SPEED_OF_LIGHT_M_PER_S / frequency_hz
    return _require_finite_positive(
        FEED_GAP_FACTOR * wavelength_m / sqrt(effective_permittivity),
        "Feed gap"
    )


def tooth_outer_radius(inner_radius: float, scaling_factor: float) -> float:
    """Outer radius of a tooth band (r_n x sqrt(Gamma)); any length unit."""
    return inner_radius * sqrt(scaling_factor)


def log_period(scaling_factor: float) -> float:
    """Logarithmic period ln(Gamma) of the structure."""
    return log(scaling_factor)


def bandwidth_ratio(first_frequency_hz: float, last_frequency_hz: float) -> float:
    """f_last / f_1. Below 1 when the frequencies fall along the structure (Gamma > 1)."""
    return last_frequency_hz / first_frequency_hz


# =============================================================================
# High-level calculation
# =============================================================================

def resolve_start_radius(params: DesignParameters) -> float:
    """Seed radius r1 (m) from whichever input the parameters carry."""
    if params.input_mode == InputMode.RADIUS:
        return _require_finite_positive(params.start_radius_m, "Start radius")

    r1 = radius_for_frequency(
        params.start_frequency_hz,
        params.scaling_factor,
        params.tooth_angle_deg,
        params.effective_permittivity,
    )
    logger.debug(f"Solved r1 = {r1:.6f} m from f1 = {params.start_frequency_hz:.6g} Hz")
    return r1


def calculate(params: DesignParameters) -> CalculationResult:
    """
    Calculate every tooth pair radius and frequency, plus the feed gap.

    Args:
        params: Design parameters

    Returns:
        CalculationResult with tooth_pair_count results and the feed gap

    Raises:
        ParameterValidationError: If any parameter breaks a hard limit
            (raised before any computation)
        CalculationError: If a radius, frequency or the feed gap is degenerate
    """
    require_valid(params)

    rn = resolve_start_radius(params)
    results: List[ToothResult] = []

    for n in range(1, params.tooth_pair_count + 1):
        _require_finite_positive(rn, f"Radius r{n}")
        fn = frequency_for_radius(
            rn,
            params.scaling_factor,
            params.tooth_angle_deg,
            params.effective_permittivity,
        )
        results.append(ToothResult(n=n, inner_radius_m=rn, frequency_hz=fn))
        rn = rn * params.scaling_factor

    feed_gap_m = feed_gap_for_frequency(results[0].frequency_hz, params.effective_permittivity)

    logger.debug(
        f"Calculated {len(results)} tooth pairs: "
        f"r1={results[0].inner_radius_m:.6f} m, f1={results[0].frequency_hz:.6g} Hz, "
        f"feed gap={feed_gap_m * 1000:.4f} mm"
    )

    return CalculationResult(results=results, feed_gap_m=feed_gap_m)
