"""
Tests for the math kernel (angle conversion, polar coordinates, formatting).
"""

import math

import pytest

from logperiodic.core.mathutil import (
    Point,
    cartesian_to_polar,
    clamp,
    deg_to_rad,
    distance,
    format_engineering,
    format_number,
    lerp,
    map_range,
    polar_to_cartesian,
    rad_to_deg,
    rotate,
    round_to,
)


class TestAngles:
    def test_deg_to_rad(self):
        assert deg_to_rad(180) == pytest.approx(math.pi)
        assert deg_to_rad(90) == pytest.approx(math.pi / 2)

    def test_rad_to_deg(self):
        assert rad_to_deg(math.pi) == pytest.approx(180)

    def test_degree_radian_round_trip(self):
        for degrees in (0, 12.5, 30, 45, 89.9, 270):
            assert rad_to_deg(deg_to_rad(degrees)) == pytest.approx(degrees)


class TestPolar:
    def test_zero_angle_points_along_x(self):
        p = polar_to_cartesian(10, 0)
        assert p.x == pytest.approx(10)
        assert p.y == pytest.approx(0)

    def test_minus_half_pi_points_up_the_layout(self):
        p = polar_to_cartesian(5, -math.pi / 2)
        assert p.x == pytest.approx(0, abs=1e-12)
        assert p.y == pytest.approx(-5)

    def test_cartesian_to_polar_inverts(self):
        p = polar_to_cartesian(3, 1.1)
        polar = cartesian_to_polar(p.x, p.y)
        assert polar.r == pytest.approx(3)
        assert polar.theta == pytest.approx(1.1)

    def test_rotate_quarter_turn(self):
        p = rotate(Point(1, 0), math.pi / 2)
        assert p.x == pytest.approx(0, abs=1e-12)
        assert p.y == pytest.approx(1)

    def test_distance(self):
        assert distance(Point(0, 0), Point(3, 4)) == pytest.approx(5)


class TestInterpolation:
    def test_lerp(self):
        assert lerp(10, 20, 0.25) == pytest.approx(12.5)

    def test_map_range(self):
        assert map_range(5, 0, 10, 100, 200) == pytest.approx(150)

    def test_clamp(self):
        assert clamp(-1, 0, 1) == 0
        assert clamp(2, 0, 1) == 1
        assert clamp(0.5, 0, 1) == 0.5

    def test_round_to(self):
        assert round_to(1.23456, 2) == pytest.approx(1.23)


class TestFormatting:
    def test_fixed_point_default_two_decimals(self):
        assert format_number(3.14159) == "3.14"

    def test_never_scientific(self):
        assert format_number(1e-9, 4) == "0.0000"
        assert "e" not in format_number(1.5e12, 4)

    def test_negative_zero_prints_as_zero(self):
        assert format_number(-0.00001, 4) == "0.0000"
        assert format_number(-1e-17, 4) == "0.0000"

    def test_negative_values_keep_sign(self):
        assert format_number(-2.5, 1) == "-2.5"

    def test_engineering_prefixes(self):
        assert format_engineering(1.5e9) == "1.50G"
        assert format_engineering(2.2e-6) == "2.20u"
        assert format_engineering(470) == "470.00"

    def test_engineering_zero(self):
        assert format_engineering(0) == "0.00"
