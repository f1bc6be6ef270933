"""Tests for clock parsing and clutch window classification."""

import pytest

from highlight_reel.utils.clock import is_clutch, parse_clock_minutes


class TestParseClockMinutes:
    """Minutes remaining from live-data clock strings."""

    @pytest.mark.parametrize("clock,expected", [
        ("PT05M30.00S", 5),
        ("PT12M00.00S", 12),
        ("PT00M45.20S", 0),
        ("PT4M3.5S", 4),
        ("PT11M", 11),
    ])
    def test_minutes_component(self, clock, expected):
        assert parse_clock_minutes(clock) == expected

    @pytest.mark.parametrize("clock", [
        "",
        "5:30",
        "PT30.00S",
        "garbage",
        "PTM",
        None,
        330,
    ])
    def test_malformed_defaults_to_zero(self, clock):
        assert parse_clock_minutes(clock) == 0


class TestIsClutch:
    """Clutch window: any overtime, or the last five minutes of the fourth."""

    def test_overtime_is_always_clutch(self):
        for minutes in (0, 3, 5, 12):
            assert is_clutch(5, minutes) is True
        assert is_clutch(7, 4) is True

    def test_fourth_quarter_boundary_is_inclusive(self):
        assert is_clutch(4, 5) is True
        assert is_clutch(4, 0) is True
        assert is_clutch(4, 6) is False

    def test_earlier_periods_never_clutch(self):
        assert is_clutch(3, 0) is False
        assert is_clutch(1, 2) is False

    def test_custom_threshold(self):
        assert is_clutch(4, 2, threshold_minutes=2) is True
        assert is_clutch(4, 3, threshold_minutes=2) is False
