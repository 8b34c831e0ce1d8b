"""
Tests for unit helpers and formatters.
"""

import math

import pytest

from autopace.shared.formatters import format_pace, format_seconds_delta
from autopace.shared.units import (
    is_valid_number,
    is_valid_pace,
    meters_to_feet,
    round_half_up,
)


# =============================================================================
# Test Rounding
# =============================================================================

class TestRoundHalfUp:
    """Halves round towards +infinity, unlike builtin round()."""

    @pytest.mark.parametrize("value,expected", [
        (2.5, 3),
        (3.5, 4),
        (1.4, 1),
        (-2.5, -2),
        (-2.6, -3),
        (0.0, 0),
    ])
    def test_values(self, value, expected):
        assert round_half_up(value) == expected


# =============================================================================
# Test Validity Guards
# =============================================================================

class TestValidity:
    """Tests for finite / positive checks."""

    @pytest.mark.parametrize("value", [None, math.nan, math.inf, -math.inf, True, "10"])
    def test_invalid_numbers(self, value):
        assert is_valid_number(value) is False

    def test_valid_number(self):
        assert is_valid_number(-3.2) is True
        assert is_valid_number(0) is True

    @pytest.mark.parametrize("value", [0, -1.0, math.nan, math.inf])
    def test_invalid_paces(self, value):
        assert is_valid_pace(value) is False

    def test_valid_pace(self):
        assert is_valid_pace(9.5) is True


def test_meters_to_feet():
    assert meters_to_feet(100) == pytest.approx(328.084)


# =============================================================================
# Test Formatters
# =============================================================================

class TestFormatPace:
    """Tests for M:SS pace formatting."""

    def test_half_minute(self):
        assert format_pace(7.5) == "7:30"

    def test_whole_minutes(self):
        assert format_pace(10.0) == "10:00"

    def test_seconds_carry_into_minute(self):
        """59.94 seconds rounds to 60 and becomes the next minute."""
        assert format_pace(9.999) == "10:00"

    def test_single_digit_seconds_padded(self):
        assert format_pace(8.1) == "8:06"

    def test_missing(self):
        assert format_pace(None) == "—"


def test_format_seconds_delta():
    assert format_seconds_delta(42) == "+42s"
    assert format_seconds_delta(0) == "+0s"
    assert format_seconds_delta(-8) == "-8s"
