"""
Antenna Calculator - Validation Rules

Input validation for planar log-periodic toothed antenna designs:
- Hard limits (errors) that make the recurrence meaningless
- Engineering notes (warnings/infos) that never block a calculation

Every message is keyed by the DesignParameters field it concerns, so a
presentation layer can show it next to the offending input.

This module accepts both dict and DesignParameters inputs, so raw form data
can be checked before a model is built.
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Union, TYPE_CHECKING

from ..constants import (
    EFFECTIVE_PERMITTIVITY_MIN,
    SELF_COMPLEMENTARY_ANGLE_DEG,
    TOOTH_ANGLE_MAX_DEG,
    TOOTH_ANGLE_MIN_DEG,
    TOOTH_PAIRS_MAX,
    TOOTH_PAIRS_MIN,
)

if TYPE_CHECKING:
    from ..io.models import DesignParameters

DesignInput = Union[Dict[str, Any], "DesignParameters"]


def _get(obj: DesignInput, key: str, default: Any = None) -> Any:
    """Read a field from a dict or a model."""
    if isinstance(obj, dict):
        return obj.get(key, default)
    return getattr(obj, key, default)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value)


class Severity(Enum):
    """Validation message severity"""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


@dataclass
class ValidationMessage:
    """A single validation finding"""
    severity: Severity
    code: str
    field: str
    message: str
    suggestion: Optional[str] = None


@dataclass
class ValidationResult:
    """Complete validation result"""
    valid: bool  # True if no errors
    messages: List[ValidationMessage] = field(default_factory=list)

    @property
    def errors(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.ERROR]

    @property
    def warnings(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.WARNING]

    @property
    def infos(self) -> List[ValidationMessage]:
        return [m for m in self.messages if m.severity == Severity.INFO]

    @property
    def errors_by_field(self) -> Dict[str, List[str]]:
        by_field: Dict[str, List[str]] = {}
        for msg in self.errors:
            by_field.setdefault(msg.field, []).append(msg.message)
        return by_field


class ParameterValidationError(ValueError):
    """Raised when design parameters break a hard limit.

    Carries the full ValidationResult; errors_by_field maps each offending
    field name to its messages.
    """

    def __init__(self, result: ValidationResult):
        self.result = result
        details = "; ".join(f"{m.field}: {m.message}" for m in result.errors)
        super().__init__(f"Invalid design parameters - {details}")

    @property
    def errors_by_field(self) -> Dict[str, List[str]]:
        return self.result.errors_by_field


def validate_parameters(params: DesignInput) -> ValidationResult:
    """
    Validate antenna design parameters.

    Args:
        params: DesignParameters model or dict with the same field names

    Returns:
        ValidationResult with all findings
    """
    messages: List[ValidationMessage] = []

    messages.extend(_validate_scaling_factor(params))
    messages.extend(_validate_tooth_angle(params))
    messages.extend(_validate_permittivity(params))
    messages.extend(_validate_tooth_pairs(params))
    messages.extend(_validate_seed(params))

    has_errors = any(m.severity == Severity.ERROR for m in messages)

    return ValidationResult(
        valid=not has_errors,
        messages=messages
    )


def require_valid(params: DesignInput) -> ValidationResult:
    """Validate and raise ParameterValidationError on any error.

    Returns the result (which may still hold warnings and infos).
    """
    result = validate_parameters(params)
    if not result.valid:
        raise ParameterValidationError(result)
    return result


def _validate_scaling_factor(params: DesignInput) -> List[ValidationMessage]:
    messages = []
    gamma = _get(params, 'scaling_factor')

    if not _is_number(gamma) or gamma <= 0:
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="SCALING_FACTOR_INVALID",
            field="scaling_factor",
            message="Scaling factor (Gamma) must be greater than zero",
            suggestion="Typical designs use Gamma between 1.1 and 2.0"
        ))
    elif gamma == 1.0:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="SCALING_FACTOR_UNITY",
            field="scaling_factor",
            message="Gamma = 1 gives identical radii for every tooth pair (no log-periodic growth)",
            suggestion="Use Gamma > 1 for a broadband structure"
        ))
    elif gamma < 1.0:
        messages.append(ValidationMessage(
            severity=Severity.WARNING,
            code="SCALING_FACTOR_BELOW_ONE",
            field="scaling_factor",
            message=f"Gamma = {gamma} makes radii shrink with each tooth pair",
            suggestion="Swap to 1/Gamma and seed from the smallest radius instead"
        ))

    return messages


def _validate_tooth_angle(params: DesignInput) -> List[ValidationMessage]:
    messages = []
    alpha = _get(params, 'tooth_angle_deg')

    if not _is_number(alpha) or not (TOOTH_ANGLE_MIN_DEG < alpha < TOOTH_ANGLE_MAX_DEG):
        messages.append(ValidationMessage(
            severity=Severity.ERROR,
            code="TOOTH_ANGLE_OUT_OF_RANGE",
            field="tooth_angle_deg",
            message=(
                f"Tooth angle (alpha) must be between {TOOTH_ANGLE_MIN_DEG:.0f} and "
                f"{TOOTH_ANGLE_MAX_DEG:.0f} degrees (exclusive)"
            ),
            suggestion="The beta wedge takes the remaining 90 - alpha degrees"
        ))
    elif alpha == SELF_COMPLEMENTARY_ANGLE_DEG:
        messages.append(ValidationMessage(
            severity=Severity.INFO,
            code="SELF_COMPLEMENTARY",
            field="tooth_angle_deg",
            message="alpha = beta = 45 deg: the structure is self-complementary",
        ))

    return messages


def _validate_permittivity(params: DesignInput) -> List[ValidationMessage]:
    eps = _get(params, 'effective_permittivity')

    if not _is_number(eps) or eps < EFFECTIVE_PERMITTIVITY_MIN:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="PERMITTIVITY_BELOW_ONE",
            field="effective_permittivity",
            message="Effective permittivity must be greater than or equal to 1",
            suggestion="Use 1.0 for an antenna in free space"
        )]
    return []


def _validate_tooth_pairs(params: DesignInput) -> List[ValidationMessage]:
    count = _get(params, 'tooth_pair_count')

    if (not isinstance(count, int) or isinstance(count, bool)
            or not (TOOTH_PAIRS_MIN <= count <= TOOTH_PAIRS_MAX)):
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="TOOTH_PAIRS_OUT_OF_RANGE",
            field="tooth_pair_count",
            message=f"Number of tooth pairs must be between {TOOTH_PAIRS_MIN} and {TOOTH_PAIRS_MAX}",
        )]
    if count == 1:
        return [ValidationMessage(
            severity=Severity.INFO,
            code="SINGLE_TOOTH_PAIR",
            field="tooth_pair_count",
            message="One tooth pair has no radius gap: only the beta wedges and feed gap are drawn",
            suggestion="Use at least 2 tooth pairs to generate teeth"
        )]
    return []


def _validate_seed(params: DesignInput) -> List[ValidationMessage]:
    """Exactly one of start_radius_m / start_frequency must be given and positive."""
    radius = _get(params, 'start_radius_m')
    frequency = _get(params, 'start_frequency')

    if radius is None and frequency is None:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="SEED_MISSING",
            field="start_radius_m",
            message="Enter either a start radius (r1) or a start frequency (f1)",
        )]

    if radius is not None and frequency is not None:
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="SEED_AMBIGUOUS",
            field="start_frequency",
            message="Enter a start radius or a start frequency, not both",
        )]

    if radius is not None and (not _is_number(radius) or radius <= 0):
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="START_RADIUS_INVALID",
            field="start_radius_m",
            message="Please enter a valid positive value for r1",
        )]

    if frequency is not None and (not _is_number(frequency) or frequency <= 0):
        return [ValidationMessage(
            severity=Severity.ERROR,
            code="START_FREQUENCY_INVALID",
            field="start_frequency",
            message="Please enter a valid positive value for f1",
        )]

    return []
