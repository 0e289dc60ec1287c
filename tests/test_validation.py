"""
Tests for parameter validation rules.
"""

import pytest

from logperiodic.calculator import (
    ParameterValidationError,
    Severity,
    require_valid,
    validate_parameters,
)
from logperiodic.io import DesignParameters


def _params(**overrides):
    values = dict(
        scaling_factor=1.2,
        tooth_angle_deg=30.0,
        effective_permittivity=1.0,
        tooth_pair_count=4,
        start_radius_m=0.1,
    )
    values.update(overrides)
    return values


def _codes(result):
    return {m.code for m in result.messages}


class TestValidDesigns:
    def test_reference_design_is_clean(self, reference_params):
        result = validate_parameters(reference_params)
        assert result.valid
        assert result.messages == []

    def test_dict_input(self):
        assert validate_parameters(_params()).valid

    def test_frequency_seed(self):
        result = validate_parameters(_params(start_radius_m=None, start_frequency=500.0))
        assert result.valid

    def test_require_valid_returns_result(self):
        result = require_valid(_params(tooth_angle_deg=45.0))
        assert result.valid
        assert "SELF_COMPLEMENTARY" in _codes(result)


class TestScalingFactor:
    @pytest.mark.parametrize("gamma", [0, -1.2, None, float("nan"), "1.2"])
    def test_invalid(self, gamma):
        result = validate_parameters(_params(scaling_factor=gamma))
        assert not result.valid
        assert "scaling_factor" in result.errors_by_field

    def test_unity_warns(self):
        result = validate_parameters(_params(scaling_factor=1.0))
        assert result.valid
        assert [m.code for m in result.warnings] == ["SCALING_FACTOR_UNITY"]

    def test_below_one_warns(self):
        result = validate_parameters(_params(scaling_factor=0.8))
        assert result.valid
        assert [m.code for m in result.warnings] == ["SCALING_FACTOR_BELOW_ONE"]


class TestToothAngle:
    @pytest.mark.parametrize("alpha", [0, 90, 95, -10, None])
    def test_out_of_range(self, alpha):
        result = validate_parameters(_params(tooth_angle_deg=alpha))
        assert not result.valid
        assert list(result.errors_by_field) == ["tooth_angle_deg"]
        assert result.errors[0].code == "TOOTH_ANGLE_OUT_OF_RANGE"

    @pytest.mark.parametrize("alpha", [0.5, 30, 89.5])
    def test_in_range(self, alpha):
        assert validate_parameters(_params(tooth_angle_deg=alpha)).valid

    def test_self_complementary_is_info(self):
        result = validate_parameters(_params(tooth_angle_deg=45))
        assert result.valid
        assert result.infos[0].code == "SELF_COMPLEMENTARY"
        assert result.infos[0].severity == Severity.INFO


class TestPermittivity:
    def test_below_one(self):
        result = validate_parameters(_params(effective_permittivity=0.5))
        assert "effective_permittivity" in result.errors_by_field

    def test_exactly_one(self):
        assert validate_parameters(_params(effective_permittivity=1.0)).valid


class TestToothPairs:
    @pytest.mark.parametrize("count", [0, 17, 2.5, True, None])
    def test_out_of_range(self, count):
        result = validate_parameters(_params(tooth_pair_count=count))
        assert "tooth_pair_count" in result.errors_by_field

    @pytest.mark.parametrize("count", [2, 16])
    def test_limits_inclusive(self, count):
        assert validate_parameters(_params(tooth_pair_count=count)).valid

    def test_single_pair_is_info(self):
        result = validate_parameters(_params(tooth_pair_count=1))
        assert result.valid
        assert "SINGLE_TOOTH_PAIR" in _codes(result)


class TestSeed:
    def test_missing(self):
        result = validate_parameters(_params(start_radius_m=None))
        assert result.errors[0].code == "SEED_MISSING"

    def test_ambiguous(self):
        result = validate_parameters(_params(start_frequency=100.0))
        assert result.errors[0].code == "SEED_AMBIGUOUS"

    @pytest.mark.parametrize("radius", [0, -0.1, float("inf")])
    def test_invalid_radius(self, radius):
        result = validate_parameters(_params(start_radius_m=radius))
        assert "start_radius_m" in result.errors_by_field

    def test_invalid_frequency(self):
        result = validate_parameters(_params(start_radius_m=None, start_frequency=-5.0))
        assert "start_frequency" in result.errors_by_field


class TestParameterValidationError:
    def test_collects_every_field(self):
        with pytest.raises(ParameterValidationError) as exc_info:
            require_valid(_params(scaling_factor=-1, tooth_angle_deg=95, tooth_pair_count=0))
        fields = exc_info.value.errors_by_field
        assert set(fields) == {"scaling_factor", "tooth_angle_deg", "tooth_pair_count"}

    def test_is_value_error(self):
        with pytest.raises(ValueError, match="tooth_angle_deg"):
            require_valid(DesignParameters(**_params(tooth_angle_deg=120)))
