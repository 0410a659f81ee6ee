"""Normalized path commands.

Every command holds absolute coordinates. Relative, shorthand and smooth
forms of the path mini-language are resolved by the parser before a
command is ever built.
"""

from typing import Annotated, Literal, TypeGuard

from pydantic import BaseModel, Field

from path_engine.types.geometry import Point


class MoveTo(BaseModel):
    """Start a new subpath."""

    type: Literal["M"] = "M"
    x: float
    y: float

    @property
    def end(self) -> Point:
        return Point(x=self.x, y=self.y)


class LineTo(BaseModel):
    """Straight line to (x, y)."""

    type: Literal["L"] = "L"
    x: float
    y: float

    @property
    def end(self) -> Point:
        return Point(x=self.x, y=self.y)


class CubicBezier(BaseModel):
    """Cubic bezier with two control points."""

    type: Literal["C"] = "C"
    cp1x: float
    cp1y: float
    cp2x: float
    cp2y: float
    x: float
    y: float

    @property
    def cp1(self) -> Point:
        return Point(x=self.cp1x, y=self.cp1y)

    @property
    def cp2(self) -> Point:
        return Point(x=self.cp2x, y=self.cp2y)

    @property
    def end(self) -> Point:
        return Point(x=self.x, y=self.y)


class QuadraticBezier(BaseModel):
    """Quadratic bezier with one control point."""

    type: Literal["Q"] = "Q"
    cpx: float
    cpy: float
    x: float
    y: float

    @property
    def cp(self) -> Point:
        return Point(x=self.cpx, y=self.cpy)

    @property
    def end(self) -> Point:
        return Point(x=self.x, y=self.y)


class EllipticalArc(BaseModel):
    """Elliptical arc in SVG endpoint parameterization.

    Radii are non-negative. The parser never builds an arc with a zero
    radius; those become LineTo commands.
    """

    type: Literal["A"] = "A"
    rx: float
    ry: float
    x_axis_rotation: float = 0.0  # Degrees
    large_arc_flag: bool = False
    sweep_flag: bool = False
    x: float
    y: float

    @property
    def end(self) -> Point:
        return Point(x=self.x, y=self.y)


class ClosePath(BaseModel):
    """Close the current subpath back to its MoveTo."""

    type: Literal["Z"] = "Z"


PathCommand = MoveTo | LineTo | CubicBezier | QuadraticBezier | EllipticalArc | ClosePath

# Validates dicts and JSON by their "type" letter
TaggedPathCommand = Annotated[PathCommand, Field(discriminator="type")]

# Commands that end at an anchor point
AnchoredCommand = MoveTo | LineTo | CubicBezier | QuadraticBezier | EllipticalArc


def has_endpoint(command: PathCommand) -> TypeGuard[AnchoredCommand]:
    """Return True if the command ends at an anchor point."""
    return not isinstance(command, ClosePath)
