"""Output formatters for antenna calculations.

Converts typed CalculationResult models to JSON, Markdown and plain text.

Uses Pydantic's model_dump(mode='json') for serialization, so enums come out
as their string values.
"""

import json
from typing import Any, Dict, List, Optional, TYPE_CHECKING

from ..constants import METER_TO_MM
from ..io.models import CalculationResult, DesignParameters

if TYPE_CHECKING:
    from .validation import ValidationResult


def _model_to_dict(model) -> dict:
    """Convert Pydantic model to dict with JSON-compatible types."""
    return model.model_dump(mode='json')


def _messages_to_dicts(messages) -> List[Dict[str, Any]]:
    return [
        {
            'severity': msg.severity.value,
            'code': msg.code,
            'field': msg.field,
            'message': msg.message,
            'suggestion': msg.suggestion
        }
        for msg in messages
    ]


def results_table(result: CalculationResult, params: DesignParameters) -> List[Dict[str, Any]]:
    """Rows of the results table: n, r [m], r [in], f in the output unit.

    Values are rounded to 6 decimals for display.
    """
    unit = params.output_frequency_unit
    return [
        {
            'n': tooth.n,
            'radius_m': round(tooth.inner_radius_m, 6),
            'radius_in': round(tooth.inner_radius_in, 6),
            'frequency': round(tooth.frequency_in(unit), 6),
            'frequency_unit': unit.value,
        }
        for tooth in result.results
    ]


def to_json(
    result: CalculationResult,
    params: DesignParameters,
    validation: Optional["ValidationResult"] = None,
    indent: int = 2
) -> str:
    """Convert a calculation to a JSON string.

    Args:
        result: CalculationResult from calculate()
        params: Parameters the result was calculated from
        validation: Optional validation results to include in output
        indent: JSON indentation level (default: 2)

    Returns:
        JSON string with parameters, tooth results (SI units) and feed gap
    """
    data = {
        'parameters': _model_to_dict(params),
        'results': _model_to_dict(result)['results'],
        'feed_gap_m': result.feed_gap_m,
        'outer_radius_m': result.outer_radius_m(params.scaling_factor),
        'bandwidth_ratio': result.bandwidth_ratio,
    }

    if validation:
        data['validation'] = {
            'valid': validation.valid,
            'errors': _messages_to_dicts(validation.errors),
            'warnings': _messages_to_dicts(validation.warnings),
            'infos': _messages_to_dicts(validation.infos),
        }

    return json.dumps(data, indent=indent)


def to_markdown(
    result: CalculationResult,
    params: DesignParameters,
    validation: Optional["ValidationResult"] = None
) -> str:
    """Convert a calculation to a markdown design sheet.

    Args:
        result: CalculationResult from calculate()
        params: Parameters the result was calculated from
        validation: Optional validation results to include

    Returns:
        Markdown string with parameter and results tables
    """
    unit = params.output_frequency_unit.value

    md = "# Planar Log-Periodic Toothed Antenna\n\n"

    md += "## Design Parameters\n\n"
    md += "| Parameter | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Scaling Factor (Γ) | {params.scaling_factor:.4f} |\n"
    md += f"| Tooth Angle (α) | {params.tooth_angle_deg:.2f}° |\n"
    md += f"| Beta Angle (β) | {params.beta_angle_deg:.2f}° |\n"
    md += f"| Effective Permittivity (ε_eff) | {params.effective_permittivity:.3f} |\n"
    md += f"| Tooth Pairs | {params.tooth_pair_count} |\n"
    md += f"| Input Mode | {params.input_mode.value} |\n\n"

    md += "## Tooth Pairs\n\n"
    md += f"| n | rₙ (m) | rₙ (in) | fₙ ({unit}) |\n"
    md += "|---|--------|---------|------------|\n"
    for row in results_table(result, params):
        md += (
            f"| {row['n']} | {row['radius_m']:.6f} | {row['radius_in']:.6f} "
            f"| {row['frequency']:.6f} |\n"
        )
    md += "\n"

    md += "## Structure\n\n"
    md += "| Dimension | Value |\n"
    md += "|-----------|-------|\n"
    md += f"| Feed Gap | {result.feed_gap_m * METER_TO_MM:.4f} mm |\n"
    md += f"| Outer Radius | {result.outer_radius_m(params.scaling_factor) * METER_TO_MM:.2f} mm |\n"
    md += f"| Bandwidth Ratio (f_last/f₁) | {result.bandwidth_ratio:.3f} |\n\n"

    if validation and validation.messages:
        md += "## Validation\n\n"
        for msg in validation.messages:
            md += f"- **{msg.severity.value.upper()}** `{msg.code}`: {msg.message}\n"
            if msg.suggestion:
                md += f"  - {msg.suggestion}\n"
        md += "\n"

    return md


def to_summary(result: CalculationResult, params: DesignParameters) -> str:
    """Convert a calculation to a short text summary.

    Returns:
        Multi-line formatted summary string
    """
    unit = params.output_frequency_unit
    first, last = result.first, result.last

    lines = [
        "═══ Log-Periodic Toothed Antenna ═══",
        f"Γ = {params.scaling_factor:g} | α = {params.tooth_angle_deg:g}° | "
        f"β = {params.beta_angle_deg:g}° | ε_eff = {params.effective_permittivity:g}",
        "",
        f"Tooth pairs:    {len(result.results)}",
        f"r1:             {first.inner_radius_m:.6f} m",
        f"r{last.n}:{' ' * (14 - len(str(last.n)))}{last.inner_radius_m:.6f} m",
        f"Frequency span: {last.frequency_in(unit):.4f} - {first.frequency_in(unit):.4f} {unit.value}",
        f"Feed gap:       {result.feed_gap_m * METER_TO_MM:.4f} mm",
    ]

    return "\n".join(lines)
