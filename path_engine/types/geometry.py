"""Core geometry types."""

from enum import Enum

from pydantic import BaseModel


class Point(BaseModel):
    """A 2D point."""

    x: float
    y: float


class Bounds(BaseModel):
    """Axis-aligned bounding box."""

    x: float
    y: float
    width: float
    height: float


class SegmentType(str, Enum):
    """Kinds of segment reported by hit-testing."""

    LINE = "L"
    CUBIC = "C"
    QUADRATIC = "Q"


def clamp_value(value: float, low: float, high: float) -> float:
    """Clamp a value to a range [low, high]."""
    return max(low, min(high, value))
