"""Segment and anchor hit-testing on command lists.

Given a path and a query point, find the closest point on the nearest
segment (for inserting points) or the anchor under the cursor (for
deleting points). Pure functions over the command list.
"""

from collections.abc import Callable
from typing import NamedTuple

from path_engine.config import settings
from path_engine.curves import cubic_bezier_point, distance, quadratic_bezier_point
from path_engine.math_utils import round_point
from path_engine.types import (
    AnchorHitResult,
    ClosePath,
    CubicBezier,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticBezier,
    SegmentHitResult,
    SegmentType,
    has_endpoint,
)


class ClosestPoint(NamedTuple):
    """Closest point on a segment to a query point."""

    t: float
    dist: float
    point: Point


def closest_point_on_line(point: Point, start: Point, end: Point) -> ClosestPoint:
    """Project a point onto a line segment, clamping t to [0, 1]."""
    dx = end.x - start.x
    dy = end.y - start.y
    length_sq = dx * dx + dy * dy

    if length_sq == 0:
        return ClosestPoint(t=0.0, dist=distance(point, start), point=start)

    t = ((point.x - start.x) * dx + (point.y - start.y) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    closest = Point(x=start.x + t * dx, y=start.y + t * dy)
    return ClosestPoint(t=t, dist=distance(point, closest), point=closest)


def _closest_point_on_curve(
    point: Point,
    evaluate: Callable[[float], Point],
    samples: int,
    iterations: int,
) -> ClosestPoint:
    """Coarse sampling to bracket the minimum, then ternary-search refinement."""
    best_t = 0.0
    best_point = evaluate(0.0)
    min_dist = distance(point, best_point)

    for i in range(1, samples + 1):
        t = i / samples
        pt = evaluate(t)
        dist = distance(point, pt)
        if dist < min_dist:
            min_dist = dist
            best_t = t
            best_point = pt

    low = max(0.0, best_t - 1 / samples)
    high = min(1.0, best_t + 1 / samples)

    for _ in range(iterations):
        mid1 = low + (high - low) / 3
        mid2 = low + 2 * (high - low) / 3
        pt1 = evaluate(mid1)
        pt2 = evaluate(mid2)
        dist1 = distance(point, pt1)
        dist2 = distance(point, pt2)

        if dist1 < dist2:
            high = mid2
            if dist1 < min_dist:
                min_dist, best_t, best_point = dist1, mid1, pt1
        else:
            low = mid1
            if dist2 < min_dist:
                min_dist, best_t, best_point = dist2, mid2, pt2

    return ClosestPoint(t=best_t, dist=min_dist, point=best_point)


def closest_point_on_cubic(
    point: Point,
    p0: Point,
    p1: Point,
    p2: Point,
    p3: Point,
    samples: int | None = None,
    iterations: int | None = None,
) -> ClosestPoint:
    """Approximate closest point on a cubic bezier."""
    return _closest_point_on_curve(
        point,
        lambda t: cubic_bezier_point(p0, p1, p2, p3, t),
        samples or settings.curve_samples,
        settings.refine_iterations if iterations is None else iterations,
    )


def closest_point_on_quadratic(
    point: Point,
    p0: Point,
    p1: Point,
    p2: Point,
    samples: int | None = None,
    iterations: int | None = None,
) -> ClosestPoint:
    """Approximate closest point on a quadratic bezier."""
    return _closest_point_on_curve(
        point,
        lambda t: quadratic_bezier_point(p0, p1, p2, t),
        samples or settings.curve_samples,
        settings.refine_iterations if iterations is None else iterations,
    )


def find_segment_at(
    commands: list[PathCommand],
    point: Point,
    tolerance: float,
) -> SegmentHitResult | None:
    """Find the closest segment of a path within tolerance of a point.

    Arcs are skipped: they cannot be split, so they never take part in
    point insertion. A closing segment is reported as a line under the
    index of the drawable command before the ClosePath.

    Returns:
        The globally closest hit strictly inside tolerance, or None
    """
    current = Point(x=0.0, y=0.0)
    start = current  # Subpath start, for Z
    last_drawable = 0
    best: SegmentHitResult | None = None
    best_dist = tolerance

    for i, cmd in enumerate(commands):
        hit: ClosestPoint | None = None
        index = i
        close_index: int | None = None
        segment_type = SegmentType.LINE

        match cmd:
            case MoveTo():
                start = cmd.end
            case LineTo():
                hit = closest_point_on_line(point, current, cmd.end)
            case CubicBezier():
                hit = closest_point_on_cubic(point, current, cmd.cp1, cmd.cp2, cmd.end)
                segment_type = SegmentType.CUBIC
            case QuadraticBezier():
                hit = closest_point_on_quadratic(point, current, cmd.cp, cmd.end)
                segment_type = SegmentType.QUADRATIC
            case EllipticalArc():
                pass
            case ClosePath():
                hit = closest_point_on_line(point, current, start)
                index = last_drawable
                close_index = i

        if hit is not None and hit.dist < best_dist:
            best_dist = hit.dist
            best = SegmentHitResult(
                command_index=index,
                t=hit.t,
                point=round_point(hit.point),
                segment_type=segment_type,
                close_index=close_index,
            )

        if isinstance(cmd, ClosePath):
            current = start
        else:
            current = cmd.end
            last_drawable = i

    return best


def find_anchor_at(
    commands: list[PathCommand],
    point: Point,
    tolerance: float,
) -> AnchorHitResult | None:
    """Find the first anchor point within tolerance, in document order."""
    anchors = [(i, cmd.end) for i, cmd in enumerate(commands) if has_endpoint(cmd)]

    for anchor_index, (command_index, anchor) in enumerate(anchors):
        if distance(point, anchor) <= tolerance:
            return AnchorHitResult(anchor_index=anchor_index, command_index=command_index)

    return None
