"""Tests for path data parsing and serialization."""

import logging

import pytest

from path_engine.path_parser import (
    get_path_points,
    parse_path,
    serialize_command,
    serialize_path,
    tokenize,
)
from path_engine.shapes import bounds_from_points
from path_engine.types import (
    ClosePath,
    CubicBezier,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticBezier,
)


class TestTokenize:
    def test_commands_and_numbers(self) -> None:
        assert tokenize("M 10 20 L 30 40") == ["M", 10.0, 20.0, "L", 30.0, 40.0]

    def test_compact_numbers(self) -> None:
        """Signs and second decimal points start new numbers."""
        assert tokenize("M10,-20L.5.5e1") == ["M", 10.0, -20.0, "L", 0.5, 5.0]

    def test_scientific_notation(self) -> None:
        assert tokenize("M 1e2 1.5E-1") == ["M", 100.0, 0.15]

    def test_unknown_letter_dropped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="path_engine.path_parser"):
            tokens = tokenize("M 0 0 X 5 5")
        assert "X" not in tokens
        assert "Unknown path command 'X'" in caplog.text


class TestParseAbsolute:
    def test_move_and_line(self) -> None:
        assert parse_path("M 10 10 L 20 20") == [MoveTo(x=10, y=10), LineTo(x=20, y=20)]

    def test_commas_and_whitespace(self) -> None:
        assert parse_path("M10,10\n\tL 20,20") == parse_path("M 10 10 L 20 20")

    def test_cubic(self) -> None:
        commands = parse_path("M 0 0 C 10 20 30 40 50 50")
        assert commands[1] == CubicBezier(cp1x=10, cp1y=20, cp2x=30, cp2y=40, x=50, y=50)

    def test_quadratic(self) -> None:
        commands = parse_path("M 0 0 Q 50 100 100 0")
        assert commands[1] == QuadraticBezier(cpx=50, cpy=100, x=100, y=0)

    def test_arc(self) -> None:
        commands = parse_path("M 0 0 A 50 25 30 1 0 100 0")
        assert commands[1] == EllipticalArc(
            rx=50, ry=25, x_axis_rotation=30, large_arc_flag=True, sweep_flag=False, x=100, y=0
        )

    def test_arc_negative_radii_use_absolute_value(self) -> None:
        arc = parse_path("M 0 0 A -50 -25 0 0 1 100 0")[1]
        assert isinstance(arc, EllipticalArc)
        assert arc.rx == 50
        assert arc.ry == 25

    def test_horizontal_and_vertical(self) -> None:
        commands = parse_path("M 10 10 H 50 V 40 h -10 v -5")
        assert commands[1:] == [
            LineTo(x=50, y=10),
            LineTo(x=50, y=40),
            LineTo(x=40, y=40),
            LineTo(x=40, y=35),
        ]

    def test_close_path(self) -> None:
        commands = parse_path("M 0 0 L 10 0 L 10 10 z")
        assert isinstance(commands[-1], ClosePath)

    def test_empty_input(self) -> None:
        assert parse_path("") == []
        assert parse_path("   ") == []


class TestParseRelative:
    def test_relative_line_matches_absolute(self) -> None:
        relative = parse_path("M 100 100 l 50 50")
        absolute = parse_path("M 100 100 L 150 150")
        assert relative == absolute

    def test_relative_path(self) -> None:
        assert parse_path("m 10 10 l 10 0 l 0 10 z") == parse_path("M 10 10 L 20 10 L 20 20 Z")

    def test_relative_curves(self) -> None:
        commands = parse_path("M 10 10 c 0 10 10 10 10 0 q 5 -5 10 0")
        assert commands[1] == CubicBezier(cp1x=10, cp1y=20, cp2x=20, cp2y=20, x=20, y=10)
        assert commands[2] == QuadraticBezier(cpx=25, cpy=5, x=30, y=10)

    def test_relative_arc_endpoint(self) -> None:
        arc = parse_path("M 10 10 a 5 5 0 0 1 10 0")[1]
        assert arc.end == Point(x=20, y=10)

    def test_close_resets_current_point(self) -> None:
        commands = parse_path("M 10 10 L 20 10 Z l 5 5")
        assert commands[-1] == LineTo(x=15, y=15)

    def test_close_resets_to_latest_subpath(self) -> None:
        commands = parse_path("M 0 0 L 1 1 Z M 5 5 l 1 0 z l 1 1")
        assert commands[-1] == LineTo(x=6, y=6)

    def test_leading_relative_move_is_from_origin(self) -> None:
        assert parse_path("m 5 5")[0] == MoveTo(x=5, y=5)


class TestImplicitRepetition:
    def test_extra_move_pairs_are_lines(self) -> None:
        assert parse_path("M 0 0 10 10 20 20") == [
            MoveTo(x=0, y=0),
            LineTo(x=10, y=10),
            LineTo(x=20, y=20),
        ]

    def test_extra_relative_move_pairs_are_relative_lines(self) -> None:
        assert parse_path("m 5 5 10 0 0 10")[1:] == [LineTo(x=15, y=5), LineTo(x=15, y=15)]

    def test_repeated_line(self) -> None:
        assert len(parse_path("M 0 0 L 1 1 2 2 3 3")) == 4

    def test_repeated_cubic(self) -> None:
        commands = parse_path("M 0 0 C 1 1 2 2 3 3 4 4 5 5 6 6")
        assert [type(c) for c in commands] == [MoveTo, CubicBezier, CubicBezier]
        assert commands[2].end == Point(x=6, y=6)


class TestSmoothCurves:
    def test_smooth_cubic_reflects_previous_control(self) -> None:
        commands = parse_path("M 0 0 C 10 20 30 40 50 50 S 90 80 100 100")
        second = commands[2]
        assert isinstance(second, CubicBezier)
        assert second.cp1 == Point(x=70, y=60)
        assert second.cp2 == Point(x=90, y=80)
        assert second.end == Point(x=100, y=100)

    def test_smooth_cubic_without_previous_cubic(self) -> None:
        commands = parse_path("M 10 10 S 30 30 40 10")
        assert commands[1].cp1 == Point(x=10, y=10)

    def test_smooth_cubic_after_quadratic_does_not_reflect(self) -> None:
        commands = parse_path("M 0 0 Q 10 20 20 0 S 30 30 40 0")
        assert commands[2].cp1 == Point(x=20, y=0)

    def test_smooth_cubic_chain(self) -> None:
        commands = parse_path("M 0 0 C 0 10 10 10 10 0 S 20 -10 20 0 S 30 10 30 0")
        # Each S reflects the second control point of the command before it
        assert commands[2].cp1 == Point(x=10, y=-10)
        assert commands[3].cp1 == Point(x=20, y=10)

    def test_smooth_quadratic_chain(self) -> None:
        commands = parse_path("M 0 0 Q 10 20 20 0 T 40 0 T 60 0")
        assert commands[2] == QuadraticBezier(cpx=30, cpy=-20, x=40, y=0)
        assert commands[3] == QuadraticBezier(cpx=50, cpy=20, x=60, y=0)

    def test_smooth_quadratic_without_previous_quadratic(self) -> None:
        commands = parse_path("M 0 0 L 10 10 T 20 0")
        assert commands[2] == QuadraticBezier(cpx=10, cpy=10, x=20, y=0)

    def test_relative_smooth_cubic(self) -> None:
        absolute = parse_path("M 0 0 C 10 20 30 40 50 50 S 90 80 100 100")
        relative = parse_path("M 0 0 C 10 20 30 40 50 50 s 40 30 50 50")
        assert relative == absolute


class TestDegenerateInput:
    def test_zero_radius_arc_becomes_line(self) -> None:
        commands = parse_path("M 0 0 A 0 0 0 0 1 100 100")
        assert commands[1] == LineTo(x=100, y=100)
        assert not any(isinstance(c, EllipticalArc) for c in commands)

    def test_one_zero_radius_arc_becomes_line(self) -> None:
        commands = parse_path("M 0 0 A 0 10 0 0 1 50 50")
        assert commands[1] == LineTo(x=50, y=50)

    def test_truncated_line_group_dropped(self) -> None:
        assert parse_path("M 0 0 L 10 10 20") == [MoveTo(x=0, y=0), LineTo(x=10, y=10)]

    def test_truncated_cubic_dropped(self) -> None:
        assert parse_path("M 0 0 C 1 2 3 4") == [MoveTo(x=0, y=0)]

    def test_numbers_before_first_command_ignored(self) -> None:
        assert parse_path("5 5 M 1 1") == [MoveTo(x=1, y=1)]

    def test_unknown_command_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="path_engine.path_parser"):
            commands = parse_path("M 0 0 X L 10 10")
        assert commands == [MoveTo(x=0, y=0), LineTo(x=10, y=10)]
        assert "Unknown path command" in caplog.text

    def test_overflowing_number_skipped(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="path_engine.path_parser"):
            commands = parse_path("M 0 0 L 1e400 0 L 10 10")
        assert commands == [MoveTo(x=0, y=0), LineTo(x=10, y=10)]
        assert "out of range" in caplog.text
        assert serialize_path(commands) == "M 0 0 L 10 10"

    def test_tokenize_never_yields_infinity(self) -> None:
        assert tokenize("M -1e999 5") == ["M", 5.0]

    def test_garbage_never_raises(self) -> None:
        assert parse_path("hello, world!") == []


class TestSerialize:
    def test_normalizes_relative_and_shorthand(self) -> None:
        assert serialize_path(parse_path("m 10 10 h 50 v 50 z")) == "M 10 10 L 60 10 L 60 60 Z"

    def test_cubic_and_quadratic(self) -> None:
        commands = parse_path("M 0 0 C 1 2 3 4 5 6 Q 7 8 9 10")
        assert serialize_path(commands) == "M 0 0 C 1 2 3 4 5 6 Q 7 8 9 10"

    def test_arc_flags_as_digits(self) -> None:
        arc = EllipticalArc(
            rx=50, ry=25, x_axis_rotation=30, large_arc_flag=True, sweep_flag=False, x=100, y=0
        )
        assert serialize_command(arc) == "A 50 25 30 1 0 100 0"

    def test_rounds_to_three_decimals(self) -> None:
        assert serialize_command(LineTo(x=1.23456, y=-0.0004)) == "L 1.235 0"

    def test_empty(self) -> None:
        assert serialize_path([]) == ""

    def test_round_trip_canonical_commands(self) -> None:
        commands: list[PathCommand] = [
            MoveTo(x=1.5, y=-2.25),
            LineTo(x=100.125, y=0),
            CubicBezier(cp1x=10.001, cp1y=20.5, cp2x=-30, cp2y=40.75, x=50, y=50.333),
            QuadraticBezier(cpx=5.5, cpy=6.5, x=7.125, y=8),
            ClosePath(),
            MoveTo(x=200, y=200),
            LineTo(x=210, y=220),
        ]
        assert parse_path(serialize_path(commands)) == commands

    def test_round_trip_is_stable(self) -> None:
        d = "m 0.1234 5 c 1 1 2 2 3 3 s 4 4 5 5 t 1 1 a 10 20 15 0 1 30 40 z"
        once = serialize_path(parse_path(d))
        assert serialize_path(parse_path(once)) == once


class TestGetPathPoints:
    def test_anchor_and_control_points(self) -> None:
        points = get_path_points(parse_path("M 0 0 C 10 20 30 40 50 50 Q 60 70 80 90"))
        assert points == [
            Point(x=0, y=0),
            Point(x=10, y=20),
            Point(x=30, y=40),
            Point(x=50, y=50),
            Point(x=60, y=70),
            Point(x=80, y=90),
        ]

    def test_close_path_adds_nothing(self) -> None:
        assert len(get_path_points(parse_path("M 0 0 L 10 0 Z"))) == 2

    def test_arc_contributes_samples(self) -> None:
        points = get_path_points(parse_path("M 0 0 A 50 50 0 0 1 100 0"))
        # MoveTo + 16 samples + endpoint
        assert len(points) == 18

    def test_arc_bounds_follow_curve(self) -> None:
        """A semicircle's bounds reach its apex, not just its endpoints."""
        box = bounds_from_points(get_path_points(parse_path("M 0 0 A 50 50 0 0 1 100 0")))
        assert box.x == pytest.approx(0, abs=1e-9)
        assert box.y == pytest.approx(-50, abs=1e-9)
        assert box.width == pytest.approx(100, abs=1e-9)
        assert box.height == pytest.approx(50, abs=1e-9)

    def test_arc_after_close_starts_at_subpath_start(self) -> None:
        points = get_path_points(parse_path("M 0 0 L 100 100 Z A 50 50 0 0 1 100 0"))
        box = bounds_from_points(points)
        assert box.y == pytest.approx(-50, abs=1e-9)
