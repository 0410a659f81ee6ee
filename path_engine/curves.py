"""Pure functions for curve evaluation and subdivision.

This module contains stateless mathematical functions for evaluating
bezier curves and splitting lines and curves at a parameter. No side
effects or I/O. Every split output is rounded to 3 decimals so path edits
stay decimal-stable.
"""

import math

from path_engine.config import settings
from path_engine.math_utils import round3, round_point
from path_engine.types import (
    ControlPair,
    CubicPiece,
    Point,
    QuadraticPiece,
    SmoothControlPoints,
    SplitCubicResult,
    SplitQuadraticResult,
)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values."""
    return a + (b - a) * t


def lerp_point(p1: Point, p2: Point, t: float) -> Point:
    """Linearly interpolate between two points."""
    return Point(x=lerp(p1.x, p2.x, t), y=lerp(p1.y, p2.y, t))


def distance(p1: Point, p2: Point) -> float:
    """Calculate Euclidean distance between two points."""
    dx = p2.x - p1.x
    dy = p2.y - p1.y
    return math.sqrt(dx * dx + dy * dy)


def quadratic_bezier_point(p0: Point, p1: Point, p2: Point, t: float) -> Point:
    """Evaluate quadratic bezier at t."""
    one_minus_t = 1 - t
    return Point(
        x=one_minus_t**2 * p0.x + 2 * one_minus_t * t * p1.x + t**2 * p2.x,
        y=one_minus_t**2 * p0.y + 2 * one_minus_t * t * p1.y + t**2 * p2.y,
    )


def cubic_bezier_point(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> Point:
    """Evaluate cubic bezier at t."""
    one_minus_t = 1 - t
    return Point(
        x=(
            one_minus_t**3 * p0.x
            + 3 * one_minus_t**2 * t * p1.x
            + 3 * one_minus_t * t**2 * p2.x
            + t**3 * p3.x
        ),
        y=(
            one_minus_t**3 * p0.y
            + 3 * one_minus_t**2 * t * p1.y
            + 3 * one_minus_t * t**2 * p2.y
            + t**3 * p3.y
        ),
    )


def split_cubic_bezier(p0: Point, p1: Point, p2: Point, p3: Point, t: float) -> SplitCubicResult:
    """Split a cubic bezier at t using De Casteljau's algorithm."""
    q0 = lerp_point(p0, p1, t)
    q1 = lerp_point(p1, p2, t)
    q2 = lerp_point(p2, p3, t)

    r0 = lerp_point(q0, q1, t)
    r1 = lerp_point(q1, q2, t)

    split = lerp_point(r0, r1, t)

    return SplitCubicResult(
        first=CubicPiece(cp1=round_point(q0), cp2=round_point(r0), end=round_point(split)),
        second=CubicPiece(cp1=round_point(r1), cp2=round_point(q2), end=round_point(p3)),
    )


def split_quadratic_bezier(p0: Point, p1: Point, p2: Point, t: float) -> SplitQuadraticResult:
    """Split a quadratic bezier at t."""
    q0 = lerp_point(p0, p1, t)
    q1 = lerp_point(p1, p2, t)

    split = lerp_point(q0, q1, t)

    return SplitQuadraticResult(
        first=QuadraticPiece(cp=round_point(q0), end=round_point(split)),
        second=QuadraticPiece(cp=round_point(q1), end=round_point(p2)),
    )


def split_line(start: Point, end: Point, t: float) -> Point:
    """Split a line segment at t, returning the rounded split point."""
    return Point(
        x=round3(start.x + t * (end.x - start.x)),
        y=round3(start.y + t * (end.y - start.y)),
    )


def generate_smooth_control_points(
    start: Point,
    mid: Point,
    end: Point,
    factor: float | None = None,
) -> SmoothControlPoints:
    """Control points for turning a line into two cubics meeting at mid.

    Each half gets control points a fixed fraction along its own chord, so
    the result starts out visually straight.
    """
    if factor is None:
        factor = settings.smooth_factor

    dx1 = mid.x - start.x
    dy1 = mid.y - start.y
    dx2 = end.x - mid.x
    dy2 = end.y - mid.y

    return SmoothControlPoints(
        first=ControlPair(
            cp1=Point(x=round3(start.x + dx1 * factor), y=round3(start.y + dy1 * factor)),
            cp2=Point(x=round3(mid.x - dx1 * factor), y=round3(mid.y - dy1 * factor)),
        ),
        second=ControlPair(
            cp1=Point(x=round3(mid.x + dx2 * factor), y=round3(mid.y + dy2 * factor)),
            cp2=Point(x=round3(end.x - dx2 * factor), y=round3(end.y - dy2 * factor)),
        ),
    )
