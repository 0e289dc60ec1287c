"""
Parameter and result models for the antenna calculator.

Uses Pydantic for type coercion (unit strings to enums, numeric strings to
floats). Range rules are NOT enforced here: an out-of-range value must stay
representable so the validator can report it against its field.
See calculator/validation.py.
"""

from math import radians, sqrt
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, field_validator

from ..enums import FrequencyUnit, InputMode
from ..constants import METER_TO_INCH, METER_TO_MM, RIGHT_ANGLE_DEG


def _coerce_unit(value):
    """Accept FrequencyUnit members or unit names in any case ('mhz')."""
    if isinstance(value, str):
        wanted = value.strip().lower()
        for unit in FrequencyUnit:
            if unit.value.lower() == wanted:
                return unit
        raise ValueError(
            f"Unknown frequency unit '{value}'. "
            f"Must be one of: {', '.join(u.value for u in FrequencyUnit)}"
        )
    return value


class DesignParameters(BaseModel):
    """Design inputs for one calculation.

    Exactly one of start_radius_m / start_frequency seeds the recurrence.
    """
    model_config = ConfigDict(extra='ignore', frozen=True)

    scaling_factor: float                       # Gamma, ratio between successive radii
    tooth_angle_deg: float                      # Alpha
    effective_permittivity: float = 1.0         # eps_eff
    tooth_pair_count: int
    start_radius_m: Optional[float] = None      # r1
    start_frequency: Optional[float] = None     # f1, in start_frequency_unit
    start_frequency_unit: FrequencyUnit = FrequencyUnit.MHZ
    output_frequency_unit: FrequencyUnit = FrequencyUnit.MHZ

    @field_validator('start_frequency_unit', 'output_frequency_unit', mode='before')
    @classmethod
    def coerce_unit(cls, v):
        return _coerce_unit(v)

    @property
    def input_mode(self) -> InputMode:
        if self.start_radius_m is not None:
            return InputMode.RADIUS
        return InputMode.FREQUENCY

    @property
    def beta_angle_deg(self) -> float:
        """Width of the solid beta wedge (90 - alpha)."""
        return RIGHT_ANGLE_DEG - self.tooth_angle_deg

    @property
    def tooth_angle_rad(self) -> float:
        return radians(self.tooth_angle_deg)

    @property
    def start_frequency_hz(self) -> Optional[float]:
        if self.start_frequency is None:
            return None
        return self.start_frequency * self.start_frequency_unit.multiplier


class ToothResult(BaseModel):
    """Radius and resonant frequency of one tooth pair."""
    model_config = ConfigDict(frozen=True)

    n: int                   # 1-based pair index
    inner_radius_m: float    # r_n
    frequency_hz: float      # f_n

    @property
    def inner_radius_mm(self) -> float:
        return self.inner_radius_m * METER_TO_MM

    @property
    def inner_radius_in(self) -> float:
        return self.inner_radius_m * METER_TO_INCH

    def frequency_in(self, unit: FrequencyUnit) -> float:
        """Frequency expressed in unit (display only)."""
        return self.frequency_hz / unit.multiplier


class CalculationResult(BaseModel):
    """Complete output of one calculation: every tooth pair plus the feed gap."""
    model_config = ConfigDict(frozen=True)

    results: List[ToothResult]
    feed_gap_m: float

    @property
    def first(self) -> ToothResult:
        return self.results[0]

    @property
    def last(self) -> ToothResult:
        return self.results[-1]

    @property
    def feed_gap_mm(self) -> float:
        return self.feed_gap_m * METER_TO_MM

    @property
    def bandwidth_ratio(self) -> float:
        """f_last / f_1, the last designed frequency over the first."""
        return self.last.frequency_hz / self.first.frequency_hz

    def outer_radius_m(self, scaling_factor: float) -> float:
        """Outer radius of the structure (r_last x sqrt(Gamma))."""
        return self.last.inner_radius_m * sqrt(scaling_factor)


class ExportSettings(BaseModel):
    """Options for the SVG/DXF exporters and the export package."""
    model_config = ConfigDict(extra='ignore', frozen=True)

    svg_xml_declaration: bool = True     # Needed for file export, not inline display
    svg_show_reference: bool = True      # Reference lines and angle/radius labels
    dxf_annotations: bool = True         # Title, parameter and radius text
    fused_outline: bool = False          # Add build123d fused outline files to a package
