"""Result models returned by geometry queries."""

from pydantic import BaseModel

from path_engine.types.geometry import Point, SegmentType


class SegmentHitResult(BaseModel):
    """Closest point on a path segment to a query point.

    command_index names the command whose incoming segment was hit (the
    segment from the previous point to that command's endpoint).
    """

    command_index: int
    t: float  # Parameter in [0, 1] along the segment
    point: Point  # Rounded to 3 decimals
    segment_type: SegmentType
    close_index: int | None = None  # Index of the ClosePath when the closing segment was hit


class AnchorHitResult(BaseModel):
    """Anchor point found near a query point."""

    anchor_index: int  # Counts only commands with an endpoint
    command_index: int


class ArcCenterParameterization(BaseModel):
    """Center parameterization of an elliptical arc.

    Radii are the effective radii after out-of-range correction, which may
    exceed the radii stored on the command. Angles are in radians.
    """

    center: Point
    rx: float
    ry: float
    theta1: float
    delta_theta: float
    rotation: float


class CubicPiece(BaseModel):
    """One half of a split cubic bezier."""

    cp1: Point
    cp2: Point
    end: Point


class SplitCubicResult(BaseModel):
    first: CubicPiece
    second: CubicPiece


class QuadraticPiece(BaseModel):
    """One half of a split quadratic bezier."""

    cp: Point
    end: Point


class SplitQuadraticResult(BaseModel):
    first: QuadraticPiece
    second: QuadraticPiece


class ControlPair(BaseModel):
    cp1: Point
    cp2: Point


class SmoothControlPoints(BaseModel):
    """Control points for replacing a line with two cubics through a midpoint."""

    first: ControlPair
    second: ControlPair
