"""
Tests for geometry reduction and the text helpers used by the tabs.
"""

import math
import random

import pytest

from models import FiringSolution, Pair, Vector3
from utils import (
    compute_yaw,
    format_shot,
    parse_float_field,
    reduce_displacement,
    sanitize_signed_float,
)

ORIGIN = Vector3(0.0, 0.0, 0.0)


class TestYaw:
    """Bearing convention: 0 along +Z, turning toward -X."""

    def test_straight_ahead_is_zero(self):
        assert compute_yaw(ORIGIN, Vector3(0.0, 5.0, 100.0)) == 0.0

    def test_behind_is_half_turn(self):
        assert compute_yaw(ORIGIN, Vector3(0.0, 0.0, -100.0)) == pytest.approx(math.pi)

    def test_minus_x_is_quarter_turn(self):
        assert compute_yaw(ORIGIN, Vector3(-10.0, 0.0, 0.0)) == pytest.approx(math.pi / 2)

    def test_plus_x_is_three_quarters(self):
        assert compute_yaw(ORIGIN, Vector3(10.0, 0.0, 0.0)) == pytest.approx(3 * math.pi / 2)

    def test_always_in_range(self):
        rng = random.Random(7)
        for _ in range(500):
            a = Vector3(*(rng.uniform(-1e4, 1e4) for _ in range(3)))
            b = Vector3(*(rng.uniform(-1e4, 1e4) for _ in range(3)))
            yaw = compute_yaw(a, b)
            assert 0.0 <= yaw < 2 * math.pi

    def test_tiny_negative_offset_stays_below_full_turn(self):
        yaw = compute_yaw(ORIGIN, Vector3(1e-300, 0.0, 1.0))
        assert 0.0 <= yaw < 2 * math.pi

    def test_independent_of_height(self):
        assert compute_yaw(ORIGIN, Vector3(3.0, -50.0, 4.0)) == compute_yaw(ORIGIN, Vector3(3.0, 80.0, 4.0))


class TestReduceDisplacement:
    """Tests for reduce_displacement."""

    def test_range_and_drop(self):
        rel, yaw = reduce_displacement(Vector3(1.0, 60.0, 2.0), Vector3(4.0, 70.0, 6.0))
        assert rel.range_m == pytest.approx(5.0)
        assert rel.drop_m == pytest.approx(10.0)
        assert yaw == compute_yaw(Vector3(1.0, 60.0, 2.0), Vector3(4.0, 70.0, 6.0))

    def test_target_below_gives_negative_drop(self):
        rel, _ = reduce_displacement(Vector3(0.0, 100.0, 0.0), Vector3(0.0, 40.0, 30.0))
        assert rel.drop_m == pytest.approx(-60.0)
        assert rel.range_m == pytest.approx(30.0)


class TestSanitize:
    """Edit fields keep only their leading signed decimal."""

    @pytest.mark.parametrize("raw,clean", [
        ("12.5", "12.5"),
        ("-12.5m", "-12.5"),
        ("abc", ""),
        ("1.2.3", "1.2"),
        ("--5", "-"),
        ("", ""),
        (".5", ".5"),
    ])
    def test_sanitize(self, raw, clean):
        assert sanitize_signed_float(raw) == clean


class TestParseFloatField:
    """Tests for parse_float_field."""

    def test_number(self):
        assert parse_float_field(" -3.25 ", "X") == -3.25

    @pytest.mark.parametrize("text", ["", "-", ".", "-."])
    def test_blank_uses_default(self, text):
        assert parse_float_field(text, "X", default=0.0) == 0.0

    def test_blank_without_default_raises(self):
        with pytest.raises(ValueError, match="Drag is empty"):
            parse_float_field("", "Drag")

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_float_field("12a", "X")

    def test_non_finite_raises(self):
        with pytest.raises(ValueError):
            parse_float_field("inf", "X")


class TestFormatShot:
    """Result panel text."""

    def test_reachable_branch(self):
        sol = FiringSolution(yaw=math.pi, critical=0.5, pitch=Pair(math.radians(10.0), None))
        assert format_shot(sol, direct=True) == [
            "Yaw: 180.0000°",
            "Pitch: 10.0000°",
            "Flight time: —",
            "Impact angle: —",
        ]

    def test_unreachable_branch(self):
        sol = FiringSolution(yaw=0.0, critical=0.5, pitch=Pair(math.radians(10.0), None))
        assert format_shot(sol, direct=False) == ["Yaw: 0.0000°", "OUT OF RANGE"]

    def test_flight_time_shown_when_known(self):
        sol = FiringSolution(yaw=0.0, critical=0.5, pitch=Pair(0.1, 0.9),
                             flight_time=Pair(1.5, 4.25), impact_angle=Pair(-0.2, -1.0))
        lines = format_shot(sol, direct=False)
        assert lines[2] == "Flight time: 4.2500s"
        assert lines[3] == f"Impact angle: {math.degrees(-1.0):.4f}°"

    def test_missing_yaw(self):
        sol = FiringSolution(yaw=None, critical=0.5, pitch=Pair())
        assert format_shot(sol, direct=True) == ["Yaw: —", "OUT OF RANGE"]
