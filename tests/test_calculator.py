"""
Tests for the tooth pair calculator (radius recurrence, frequencies, feed gap).
"""

import math

import pytest

from logperiodic.calculator import (
    CalculationError,
    FrequencyUnit,
    InputMode,
    ParameterValidationError,
    bandwidth_ratio,
    calculate,
    feed_gap_for_frequency,
    frequency_for_radius,
    from_hz,
    inches_to_meters,
    log_period,
    meters_to_inches,
    radius_for_frequency,
    resolve_start_radius,
    to_hz,
    tooth_outer_radius,
)
from logperiodic.constants import SPEED_OF_LIGHT_M_PER_S
from logperiodic.io import DesignParameters


class TestUnitConversion:
    def test_to_hz(self):
        assert to_hz(1.5, FrequencyUnit.GHZ) == pytest.approx(1.5e9)
        assert to_hz(250, FrequencyUnit.KHZ) == pytest.approx(250e3)
        assert to_hz(7, FrequencyUnit.HZ) == 7

    def test_from_hz(self):
        assert from_hz(888.74e6, FrequencyUnit.MHZ) == pytest.approx(888.74)

    def test_inches(self):
        assert meters_to_inches(1.0) == pytest.approx(39.3701)
        assert inches_to_meters(1.0) == pytest.approx(0.0254)


class TestClosedForm:
    def test_reference_frequency(self):
        """Gamma=1.2, alpha=30, eps=2, r1=0.1 m resonates near 888.74 MHz."""
        f1 = frequency_for_radius(0.1, 1.2, 30.0, 2.0)
        assert f1 == pytest.approx(888.74e6, rel=1e-5)

    def test_frequency_matches_formula(self):
        r, gamma, alpha, eps = 0.037, 1.35, 22.5, 3.4
        sg = math.sqrt(gamma)
        expected = SPEED_OF_LIGHT_M_PER_S / (
            2 * (r * (1 + sg) * math.radians(alpha) + r * (sg - 1)) * math.sqrt(eps)
        )
        assert frequency_for_radius(r, gamma, alpha, eps) == pytest.approx(expected)

    def test_radius_inverts_frequency(self):
        for r in (0.005, 0.1, 2.5):
            f = frequency_for_radius(r, 1.2, 30.0, 2.0)
            assert radius_for_frequency(f, 1.2, 30.0, 2.0) == pytest.approx(r)

    def test_frequency_inversely_proportional_to_radius(self):
        f_small = frequency_for_radius(0.1, 1.5, 45.0, 1.0)
        f_large = frequency_for_radius(0.2, 1.5, 45.0, 1.0)
        assert f_small / f_large == pytest.approx(2.0)

    def test_permittivity_lowers_frequency(self):
        f_air = frequency_for_radius(0.1, 1.2, 30.0, 1.0)
        f_sub = frequency_for_radius(0.1, 1.2, 30.0, 4.0)
        assert f_air / f_sub == pytest.approx(2.0)

    def test_feed_gap(self):
        """0.02066 x lambda0 / sqrt(eps)."""
        gap = feed_gap_for_frequency(SPEED_OF_LIGHT_M_PER_S, 4.0)
        assert gap == pytest.approx(0.02066 / 2)

    def test_tooth_outer_radius(self):
        assert tooth_outer_radius(100.0, 1.44) == pytest.approx(120.0)

    def test_log_period(self):
        assert log_period(math.e) == pytest.approx(1.0)

    def test_bandwidth_ratio_is_last_over_first(self):
        assert bandwidth_ratio(2e9, 500e6) == pytest.approx(0.25)
        assert bandwidth_ratio(500e6, 2e9) == pytest.approx(4.0)

    def test_negative_shape_factor_raises(self):
        # Gamma=0.25, alpha=10: (1.5)(0.1745) - 0.5 < 0
        with pytest.raises(CalculationError):
            frequency_for_radius(0.1, 0.25, 10.0, 1.0)
        with pytest.raises(CalculationError):
            radius_for_frequency(1e9, 0.25, 10.0, 1.0)


class TestCalculate:
    def test_result_count(self, reference_result):
        assert len(reference_result.results) == 4
        assert [r.n for r in reference_result.results] == [1, 2, 3, 4]

    def test_radius_recurrence(self, reference_result):
        radii = [r.inner_radius_m for r in reference_result.results]
        assert radii == pytest.approx([0.1, 0.12, 0.144, 0.1728], rel=1e-9)
        for current, following in zip(radii, radii[1:]):
            assert following == pytest.approx(current * 1.2, rel=1e-9)

    def test_frequencies_scale_by_gamma(self, reference_result):
        results = reference_result.results
        for current, following in zip(results, results[1:]):
            assert current.frequency_hz / following.frequency_hz == pytest.approx(1.2)

    def test_frequencies_decrease(self, reference_result):
        freqs = [r.frequency_hz for r in reference_result.results]
        assert freqs == sorted(freqs, reverse=True)

    def test_first_frequency(self, reference_result):
        sg = math.sqrt(1.2)
        expected = SPEED_OF_LIGHT_M_PER_S / (
            2 * (0.1 * (1 + sg) * math.radians(30) + 0.1 * (sg - 1)) * math.sqrt(2.0)
        )
        assert reference_result.first.frequency_hz == pytest.approx(expected, rel=1e-6)
        assert reference_result.first.frequency_hz == pytest.approx(888.74e6, rel=1e-5)

    def test_feed_gap(self, reference_result):
        assert reference_result.feed_gap_m == pytest.approx(4.928e-3, rel=1e-3)
        assert reference_result.feed_gap_mm == pytest.approx(4.928, rel=1e-3)

    def test_feed_gap_uses_first_frequency(self, reference_result):
        expected = feed_gap_for_frequency(reference_result.first.frequency_hz, 2.0)
        assert reference_result.feed_gap_m == pytest.approx(expected)

    def test_bandwidth_ratio(self, reference_result):
        assert reference_result.bandwidth_ratio == pytest.approx(1.2 ** -3)
        assert reference_result.bandwidth_ratio == pytest.approx(
            bandwidth_ratio(reference_result.first.frequency_hz, reference_result.last.frequency_hz)
        )

    def test_outer_radius(self, reference_result):
        assert reference_result.outer_radius_m(1.2) == pytest.approx(0.1728 * math.sqrt(1.2))

    def test_display_conversions(self, reference_result):
        first = reference_result.first
        assert first.inner_radius_mm == pytest.approx(100.0)
        assert first.inner_radius_in == pytest.approx(3.93701)
        assert first.frequency_in(FrequencyUnit.GHZ) == pytest.approx(0.88874, rel=1e-5)

    def test_frequency_seed(self, frequency_params):
        result = calculate(frequency_params)
        assert frequency_params.input_mode == InputMode.FREQUENCY
        assert result.first.frequency_hz == pytest.approx(1e9)
        assert len(result.results) == 8

    def test_frequency_seed_round_trip(self, reference_result):
        params = DesignParameters(
            scaling_factor=1.2,
            tooth_angle_deg=30.0,
            effective_permittivity=2.0,
            tooth_pair_count=4,
            start_frequency=reference_result.first.frequency_hz / 1e6,
            start_frequency_unit="MHz",
        )
        assert resolve_start_radius(params) == pytest.approx(0.1)

    def test_single_pair(self, single_pair_params):
        result = calculate(single_pair_params)
        assert len(result.results) == 1
        assert result.bandwidth_ratio == pytest.approx(1.0)

    def test_degenerate_design_raises_without_partial_results(self):
        params = DesignParameters(
            scaling_factor=0.25,
            tooth_angle_deg=10.0,
            tooth_pair_count=3,
            start_radius_m=0.1,
        )
        with pytest.raises(CalculationError):
            calculate(params)

    def test_invalid_parameters_raise_before_calculation(self):
        params = DesignParameters(
            scaling_factor=1.2,
            tooth_angle_deg=95.0,
            tooth_pair_count=4,
            start_radius_m=0.1,
        )
        with pytest.raises(ParameterValidationError) as exc_info:
            calculate(params)
        assert "tooth_angle_deg" in exc_info.value.errors_by_field

    def test_deterministic(self, reference_params):
        assert calculate(reference_params) == calculate(reference_params)
