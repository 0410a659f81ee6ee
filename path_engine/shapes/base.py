"""Shared helpers for shapes: rotation and bounds."""

import math
import uuid

from path_engine.types import Bounds, Point


def generate_id() -> str:
    """Generate a short unique shape id."""
    return f"path-{uuid.uuid4().hex[:12]}"


def normalize_rotation(angle: float) -> float:
    """Normalize an angle in degrees into [0, 360)."""
    normalized = angle % 360
    return 0.0 if normalized == 360 else normalized + 0.0


def rotate_point(point: Point, center: Point, angle: float) -> Point:
    """Rotate a point around a center by angle degrees."""
    radians = math.radians(angle)
    cos_a = math.cos(radians)
    sin_a = math.sin(radians)
    dx = point.x - center.x
    dy = point.y - center.y
    return Point(
        x=center.x + dx * cos_a - dy * sin_a,
        y=center.y + dx * sin_a + dy * cos_a,
    )


def bounds_from_points(points: list[Point]) -> Bounds:
    """Axis-aligned bounds of a point set; empty input gives a zero box at the origin."""
    if not points:
        return Bounds(x=0, y=0, width=0, height=0)

    min_x = min(p.x for p in points)
    min_y = min(p.y for p in points)
    max_x = max(p.x for p in points)
    max_y = max(p.y for p in points)
    return Bounds(x=min_x, y=min_y, width=max_x - min_x, height=max_y - min_y)


def get_rotated_bounds(bounds: Bounds, rotation: float) -> Bounds:
    """Bounds of a box after rotating it about its own center."""
    if rotation == 0:
        return bounds

    center = Point(x=bounds.x + bounds.width / 2, y=bounds.y + bounds.height / 2)
    corners = [
        Point(x=bounds.x, y=bounds.y),
        Point(x=bounds.x + bounds.width, y=bounds.y),
        Point(x=bounds.x + bounds.width, y=bounds.y + bounds.height),
        Point(x=bounds.x, y=bounds.y + bounds.height),
    ]
    return bounds_from_points([rotate_point(c, center, rotation) for c in corners])
