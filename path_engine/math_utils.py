"""Coordinate precision helpers.

All coordinates written back into command lists or emitted as text go
through round3 so that repeated edits stay decimal-stable.
"""

import math

from path_engine.types import Point

PRECISION = 3


def round3(value: float) -> float:
    """Round a number to 3 decimal places, ties toward positive infinity.

    Values too large to scale have no fractional digits and come back as-is.
    """
    scaled = value * 1000 + 0.5
    if not math.isfinite(scaled):
        return value
    return math.floor(scaled) / 1000 + 0.0  # + 0.0 drops -0.0


def round_point(point: Point) -> Point:
    """Return a new point with coordinates rounded to 3 decimal places."""
    return Point(x=round3(point.x), y=round3(point.y))


def format_number(value: float) -> str:
    """Format a coordinate for path text: 3 decimals, trailing zeros trimmed."""
    text = f"{round3(value):.{PRECISION}f}".rstrip("0").rstrip(".")
    return "0" if text in ("", "-0") else text
