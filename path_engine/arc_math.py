"""Elliptical arc conversion and sampling.

Implements the endpoint-to-center conversion from the SVG implementation
notes (https://www.w3.org/TR/SVG/implnote.html#ArcConversionEndpointToCenter).
Arcs are never hit-tested analytically; callers sample them instead.
"""

import math

from path_engine.config import settings
from path_engine.types import ArcCenterParameterization, EllipticalArc, Point


def vector_angle(ux: float, uy: float, vx: float, vy: float) -> float:
    """Signed angle in radians from vector u to vector v."""
    dot = ux * vx + uy * vy
    length = math.sqrt(ux * ux + uy * uy) * math.sqrt(vx * vx + vy * vy)
    if length == 0:
        return 0.0
    angle = math.acos(max(-1.0, min(1.0, dot / length)))
    if ux * vy - uy * vx < 0:
        angle = -angle
    return angle


def arc_endpoint_to_center(
    start: Point,
    rx: float,
    ry: float,
    x_axis_rotation: float,
    large_arc_flag: bool,
    sweep_flag: bool,
    end: Point,
) -> ArcCenterParameterization | None:
    """Convert an arc from endpoint to center parameterization.

    Args:
        start: Current point where the arc begins
        rx, ry: Nominal radii (absolute values are used)
        x_axis_rotation: Ellipse rotation in degrees
        large_arc_flag: Choose the arc spanning more than 180 degrees
        sweep_flag: Draw in the positive-angle direction
        end: Arc endpoint

    Returns:
        Center parameterization, or None when the arc has no geometry
        (coincident endpoints or a zero radius)
    """
    if start.x == end.x and start.y == end.y:
        return None

    rx = abs(rx)
    ry = abs(ry)
    if rx == 0 or ry == 0:
        return None

    phi = math.radians(x_axis_rotation)
    cos_phi = math.cos(phi)
    sin_phi = math.sin(phi)

    # Step 1: midpoint in the rotated frame
    dx = (start.x - end.x) / 2
    dy = (start.y - end.y) / 2
    x1p = cos_phi * dx + sin_phi * dy
    y1p = -sin_phi * dx + cos_phi * dy

    x1p_sq = x1p * x1p
    y1p_sq = y1p * y1p

    # Scale up radii that are too small to reach the endpoint
    lam = x1p_sq / (rx * rx) + y1p_sq / (ry * ry)
    if lam > 1:
        sqrt_lam = math.sqrt(lam)
        rx *= sqrt_lam
        ry *= sqrt_lam

    rx_sq = rx * rx
    ry_sq = ry * ry

    # Step 2: center in the rotated frame
    sign = -1.0 if large_arc_flag == sweep_flag else 1.0
    denom = rx_sq * y1p_sq + ry_sq * x1p_sq
    sq = (rx_sq * ry_sq - rx_sq * y1p_sq - ry_sq * x1p_sq) / denom
    coef = sign * math.sqrt(max(0.0, sq))
    cxp = coef * (rx * y1p / ry)
    cyp = coef * (-ry * x1p / rx)

    # Step 3: center in world space
    cx = cos_phi * cxp - sin_phi * cyp + (start.x + end.x) / 2
    cy = sin_phi * cxp + cos_phi * cyp + (start.y + end.y) / 2

    # Step 4: start angle and sweep
    ux = (x1p - cxp) / rx
    uy = (y1p - cyp) / ry
    vx = (-x1p - cxp) / rx
    vy = (-y1p - cyp) / ry

    theta1 = vector_angle(1.0, 0.0, ux, uy)
    delta_theta = vector_angle(ux, uy, vx, vy)

    if not sweep_flag and delta_theta > 0:
        delta_theta -= 2 * math.pi
    elif sweep_flag and delta_theta < 0:
        delta_theta += 2 * math.pi

    return ArcCenterParameterization(
        center=Point(x=cx, y=cy),
        rx=rx,
        ry=ry,
        theta1=theta1,
        delta_theta=delta_theta,
        rotation=phi,
    )


def arc_point(params: ArcCenterParameterization, theta: float) -> Point:
    """Point on the (rotated, translated) ellipse at angle theta."""
    cos_phi = math.cos(params.rotation)
    sin_phi = math.sin(params.rotation)
    px = params.rx * math.cos(theta)
    py = params.ry * math.sin(theta)
    return Point(
        x=cos_phi * px - sin_phi * py + params.center.x,
        y=sin_phi * px + cos_phi * py + params.center.y,
    )


def sample_arc(start: Point, arc: EllipticalArc, num_samples: int | None = None) -> list[Point]:
    """Sample evenly spaced points along an arc.

    The start point is excluded and the end point included. A degenerate
    arc yields just its endpoint.
    """
    if num_samples is None:
        num_samples = settings.arc_bounds_samples

    params = arc_endpoint_to_center(
        start,
        arc.rx,
        arc.ry,
        arc.x_axis_rotation,
        arc.large_arc_flag,
        arc.sweep_flag,
        arc.end,
    )
    if params is None:
        return [arc.end]

    return [
        arc_point(params, params.theta1 + params.delta_theta * i / num_samples)
        for i in range(1, num_samples + 1)
    ]
