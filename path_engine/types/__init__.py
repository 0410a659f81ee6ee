"""Type definitions for the path engine.

This package contains all type definitions organized into focused modules:
- geometry: Core geometry types (Point, Bounds, SegmentType)
- commands: Normalized path command models
- results: Models returned by hit-testing, splitting and arc conversion
"""

from path_engine.types.commands import (
    AnchoredCommand,
    ClosePath,
    CubicBezier,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathCommand,
    QuadraticBezier,
    TaggedPathCommand,
    has_endpoint,
)
from path_engine.types.geometry import Bounds, Point, SegmentType, clamp_value
from path_engine.types.results import (
    AnchorHitResult,
    ArcCenterParameterization,
    ControlPair,
    CubicPiece,
    QuadraticPiece,
    SegmentHitResult,
    SmoothControlPoints,
    SplitCubicResult,
    SplitQuadraticResult,
)

__all__ = [
    # Geometry
    "Bounds",
    "Point",
    "SegmentType",
    "clamp_value",
    # Commands
    "AnchoredCommand",
    "ClosePath",
    "CubicBezier",
    "EllipticalArc",
    "LineTo",
    "MoveTo",
    "PathCommand",
    "QuadraticBezier",
    "TaggedPathCommand",
    "has_endpoint",
    # Results
    "AnchorHitResult",
    "ArcCenterParameterization",
    "ControlPair",
    "CubicPiece",
    "QuadraticPiece",
    "SegmentHitResult",
    "SmoothControlPoints",
    "SplitCubicResult",
    "SplitQuadraticResult",
]
