"""
Unit tests for utils.py
"""
import pytest

from enhance_sim.utils import (
    clamp_attempts,
    clamp_level,
    format_gold,
    format_percent,
    parse_int,
)


class TestClamping:
    @pytest.mark.parametrize("value,expected", [(-5, 1), (0, 1), (1, 1), (8, 8), (15, 15), (99, 15)])
    def test_clamp_level(self, value, expected):
        assert clamp_level(value) == expected

    @pytest.mark.parametrize("value,expected", [(-1, 1), (0, 1), (1, 1), (250, 250)])
    def test_clamp_attempts(self, value, expected):
        assert clamp_attempts(value) == expected


class TestParseInt:
    def test_valid(self):
        assert parse_int(" 12 ", 1) == 12

    def test_invalid_falls_back(self):
        assert parse_int("abc", 3) == 3
        assert parse_int("", 4) == 4


class TestFormatting:
    def test_format_gold(self):
        assert format_gold(750) == "750"
        assert format_gold(7_500) == "7.5K"
        assert format_gold(2_500_000) == "2.5M"
        assert format_gold(3_000_000_000) == "3.0B"

    def test_format_percent(self):
        assert format_percent(0.45) == "45.0%"
        assert format_percent(0.18, 6) == "18.000000%"
