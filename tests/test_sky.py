"""Tests for sky darkness from sunrise/sunset."""

import sys
from datetime import datetime, time
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from utils.sky import darkness_for, parse_clock, sky_darkness

SUNRISE = time(7, 0)
SUNSET = time(19, 0)


def _at(hour, minute=0):
    return sky_darkness(datetime(2026, 3, 1, hour, minute), SUNRISE, SUNSET)


def test_night_is_dark():
    assert _at(2) == 1.0
    assert _at(23) == 1.0


def test_midday_is_light():
    assert _at(12) == 0.0


def test_dawn_window():
    assert _at(6, 20) == 1.0           # window start
    assert _at(6, 50) == pytest.approx(0.5)  # window midpoint
    assert _at(7, 20) == 0.0           # window end


def test_dusk_window():
    assert _at(18, 40) == 0.0
    assert _at(19, 10) == pytest.approx(0.5)
    assert _at(19, 40) == 1.0


def test_dusk_is_monotonic():
    values = [_at(18, 40 + m) if m < 20 else _at(19, m - 20) for m in range(0, 60, 5)]
    assert values == sorted(values)


def test_parse_clock():
    assert parse_clock("05:45", SUNRISE) == time(5, 45)
    assert parse_clock("", SUNRISE) == SUNRISE
    assert parse_clock("garbage", SUNSET) == SUNSET
    assert parse_clock(time(8, 0), SUNRISE) == time(8, 0)


def test_darkness_for_config():
    at = darkness_for({"sunrise": "07:00", "sunset": "19:00"})
    assert at(datetime(2026, 3, 1, 12, 0)) == 0.0
    assert at(datetime(2026, 3, 1, 22, 0)) == 1.0
