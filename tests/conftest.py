"""
Pytest configuration and shared fixtures for logperiodic tests.
"""

import pytest

from logperiodic.calculator import calculate
from logperiodic.core import build_geometry
from logperiodic.io import DesignParameters


# ─── Reference design ─────────────────────────────────────────────────────
#
# Gamma = 1.2, alpha = 30 deg, eps_eff = 2, 4 tooth pairs, r1 = 0.1 m
# gives radii 0.1, 0.12, 0.144, 0.1728 m and f1 ~ 888.74 MHz.


@pytest.fixture(scope="module")
def reference_params():
    """Module-scoped reference design seeded by radius."""
    return DesignParameters(
        scaling_factor=1.2,
        tooth_angle_deg=30.0,
        effective_permittivity=2.0,
        tooth_pair_count=4,
        start_radius_m=0.1,
    )


@pytest.fixture(scope="module")
def reference_result(reference_params):
    """Module-scoped CalculationResult of the reference design."""
    return calculate(reference_params)


@pytest.fixture(scope="module")
def reference_geometry(reference_result, reference_params):
    """Module-scoped AntennaGeometry of the reference design."""
    return build_geometry(reference_result, reference_params)


@pytest.fixture
def single_pair_params():
    """One tooth pair: beta wedges and feed gap only, no teeth."""
    return DesignParameters(
        scaling_factor=1.5,
        tooth_angle_deg=45.0,
        tooth_pair_count=1,
        start_radius_m=0.05,
    )


@pytest.fixture
def frequency_params():
    """Design seeded by a 1 GHz start frequency."""
    return DesignParameters(
        scaling_factor=1.25,
        tooth_angle_deg=45.0,
        effective_permittivity=1.0,
        tooth_pair_count=8,
        start_frequency=1.0,
        start_frequency_unit="GHz",
        output_frequency_unit="MHz",
    )


@pytest.fixture
def reference_form():
    """Reference design as the host form sends it."""
    return {
        "inputMode": "r1",
        "r1": 0.1,
        "f1": None,
        "f1Unit": "MHz",
        "gamma": 1.2,
        "alpha": 30,
        "Eeff": 2,
        "toothPairs": 4,
        "outputUnit": "MHz",
    }
