"""
Host bridge for the antenna calculator.

Provides a single JSON-in / JSON-out entry point for a host page (browser
shell via Pyodide, or any other embedding). Inputs use the host form's field
names and are validated via Pydantic models before processing.

Usage from JavaScript:
    pyodide.globals.set('input_json', JSON.stringify(inputs));
    const result = await pyodide.runPythonAsync(`
        from logperiodic.calculator.bridge import calculate
        calculate(input_json)
    `);
    const output = JSON.parse(result);
"""

import json
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from typing_extensions import TypedDict

from ..core.geometry import build_geometry
from ..enums import InputMode
from ..io.dxf import to_dxf_document
from ..io.models import DesignParameters, ExportSettings
from ..io.svg import to_svg_document
from .core import CalculationError, calculate as calculate_design
from .output import results_table, to_markdown, to_summary
from .validation import ParameterValidationError, validate_parameters

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Calculation failed. Please check your inputs."

# DesignParameters field -> host form field
FORM_FIELDS = {
    'start_radius_m': 'r1',
    'start_frequency': 'f1',
    'start_frequency_unit': 'f1Unit',
    'scaling_factor': 'gamma',
    'tooth_angle_deg': 'alpha',
    'effective_permittivity': 'Eeff',
    'tooth_pair_count': 'toothPairs',
    'output_frequency_unit': 'outputUnit',
}


class ValidationMessageDict(TypedDict, total=False):
    """Type for validation message dictionaries sent to the host."""
    severity: str  # "error", "warning", "info"
    code: str      # e.g., "SCALING_FACTOR_BELOW_ONE"
    field: str     # Form field name, e.g. "gamma"
    message: str
    suggestion: Optional[str]


# ============================================================================
# Input Models
# ============================================================================

class BridgeInputs(BaseModel):
    """
    All inputs from the calculator form.

    Field names follow the form; populate_by_name lets Python callers use
    the long names too.
    """
    model_config = ConfigDict(extra='ignore', populate_by_name=True)

    input_mode: InputMode = Field(default=InputMode.RADIUS, alias='inputMode')
    r1: Optional[float] = None
    f1: Optional[float] = None
    f1_unit: str = Field(default="MHz", alias='f1Unit')
    gamma: Optional[float] = None
    alpha: Optional[float] = None
    eeff: Optional[float] = Field(default=1.0, alias='Eeff')
    tooth_pairs: Optional[int] = Field(default=None, alias='toothPairs')
    output_unit: str = Field(default="MHz", alias='outputUnit')

    # Optional documents
    include_svg: bool = Field(default=False, alias='includeSvg')
    include_dxf: bool = Field(default=False, alias='includeDxf')

    @field_validator('r1', 'f1', 'gamma', 'alpha', 'eeff', 'tooth_pairs', mode='before')
    @classmethod
    def blank_to_none(cls, v):
        """Empty form fields arrive as '' (or null)."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator('input_mode', mode='before')
    @classmethod
    def normalize_mode(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v

    def to_parameter_dict(self) -> Dict[str, Any]:
        """DesignParameters fields; only the seed of the selected mode is kept."""
        radius_mode = self.input_mode == InputMode.RADIUS
        return {
            'scaling_factor': self.gamma,
            'tooth_angle_deg': self.alpha,
            'effective_permittivity': self.eeff,
            'tooth_pair_count': self.tooth_pairs,
            'start_radius_m': self.r1 if radius_mode else None,
            'start_frequency': None if radius_mode else self.f1,
            'start_frequency_unit': self.f1_unit,
            'output_frequency_unit': self.output_unit,
        }


# ============================================================================
# Output Models
# ============================================================================

class ResultRow(BaseModel):
    """One row of the results table."""
    n: int
    radius_m: float
    radius_in: float
    frequency: float
    frequency_unit: str


class BridgeOutput(BaseModel):
    """Output from calculate() - matches what the host expects."""
    model_config = ConfigDict(extra='ignore')

    success: bool
    error: Optional[str] = None

    # Field-keyed errors, keyed by form field name
    field_errors: Dict[str, List[str]] = Field(default_factory=dict)

    # Results
    results: List[ResultRow] = Field(default_factory=list)
    feed_gap_m: Optional[float] = None
    feed_gap_mm: Optional[float] = None

    # Display formats
    summary: Optional[str] = None
    markdown: Optional[str] = None

    # Validation
    valid: bool = True
    messages: List[ValidationMessageDict] = Field(default_factory=list)

    # Documents
    svg: Optional[str] = None
    dxf: Optional[str] = None


def _form_field(field: str) -> str:
    return FORM_FIELDS.get(field, field)


def _host_field(msg, inputs: BridgeInputs) -> str:
    """Form field for a validation message; a missing seed points at the active input."""
    if msg.code == "SEED_MISSING":
        return "r1" if inputs.input_mode == InputMode.RADIUS else "f1"
    return _form_field(msg.field)


def _field_errors(validation, inputs: BridgeInputs) -> Dict[str, List[str]]:
    by_field: Dict[str, List[str]] = {}
    for msg in validation.errors:
        by_field.setdefault(_host_field(msg, inputs), []).append(msg.message)
    return by_field


def _messages_for_host(validation, inputs: BridgeInputs) -> List[ValidationMessageDict]:
    return [
        {
            'severity': m.severity.value,
            'code': m.code,
            'field': _host_field(m, inputs),
            'message': m.message,
            'suggestion': m.suggestion
        }
        for m in validation.messages
    ]


def _field_errors_from_pydantic(error: ValidationError) -> Dict[str, List[str]]:
    by_field: Dict[str, List[str]] = {}
    for item in error.errors():
        field = str(item['loc'][0]) if item['loc'] else 'form'
        by_field.setdefault(_form_field(field), []).append(item['msg'])
    return by_field


# ============================================================================
# Main Entry Point
# ============================================================================

def calculate(input_json: str) -> str:
    """
    Single entry point for all calculator operations from the host.

    Args:
        input_json: JSON string with BridgeInputs structure

    Returns:
        JSON string with BridgeOutput structure. Validation failures come back
        as field_errors; computation failures as the generic error notice.
    """
    try:
        data = json.loads(input_json)
        inputs = BridgeInputs.model_validate(data)
        raw = inputs.to_parameter_dict()

        validation = validate_parameters(raw)
        if not validation.valid:
            return BridgeOutput(
                success=False,
                valid=False,
                field_errors=_field_errors(validation, inputs),
                messages=_messages_for_host(validation, inputs),
            ).model_dump_json()

        params = DesignParameters.model_validate(raw)
        result = calculate_design(params)

        output = BridgeOutput(
            success=True,
            results=[ResultRow(**row) for row in results_table(result, params)],
            feed_gap_m=result.feed_gap_m,
            feed_gap_mm=result.feed_gap_mm,
            summary=to_summary(result, params),
            markdown=to_markdown(result, params, validation),
            valid=True,
            messages=_messages_for_host(validation, inputs),
        )

        if inputs.include_svg or inputs.include_dxf:
            settings = ExportSettings()
            if inputs.include_svg:
                output.svg = to_svg_document(build_geometry(result, params), params, settings)
            if inputs.include_dxf:
                output.dxf = to_dxf_document(result, params, settings)

        return output.model_dump_json()

    except json.JSONDecodeError as e:
        return BridgeOutput(
            success=False,
            error=f"Invalid JSON: {e}"
        ).model_dump_json()

    except ValidationError as e:
        return BridgeOutput(
            success=False,
            valid=False,
            error="Invalid input values",
            field_errors=_field_errors_from_pydantic(e),
        ).model_dump_json()

    except ParameterValidationError as e:
        return BridgeOutput(
            success=False,
            valid=False,
            field_errors=_field_errors(e.result, inputs),
        ).model_dump_json()

    except CalculationError as e:
        logger.error(f"Calculation error: {e}")
        return BridgeOutput(
            success=False,
            error=GENERIC_ERROR
        ).model_dump_json()

    except Exception as e:
        logger.exception(f"Unexpected bridge failure: {e}")
        return BridgeOutput(
            success=False,
            error=GENERIC_ERROR
        ).model_dump_json()
