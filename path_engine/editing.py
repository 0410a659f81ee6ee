"""Adding and deleting anchor points on a path shape.

These functions drive the shape's edit hooks from hit-test results. They
only mutate the shape; recording the change for undo is the caller's job.
"""

import logging

from path_engine.config import settings
from path_engine.curves import (
    cubic_bezier_point,
    generate_smooth_control_points,
    quadratic_bezier_point,
    split_cubic_bezier,
    split_line,
    split_quadratic_bezier,
)
from path_engine.math_utils import round3, round_point
from path_engine.path_geometry import find_anchor_at, find_segment_at
from path_engine.shapes import PathShape
from path_engine.types import (
    ClosePath,
    CubicBezier,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticBezier,
    SegmentHitResult,
    SegmentType,
    clamp_value,
)

logger = logging.getLogger(__name__)


def _smooth_cubics(start: Point, mid: Point, end: Point) -> tuple[CubicBezier, CubicBezier]:
    """Two cubics through mid that together trace the straight line start-end."""
    controls = generate_smooth_control_points(start, mid, end)
    first = CubicBezier(
        cp1x=controls.first.cp1.x,
        cp1y=controls.first.cp1.y,
        cp2x=controls.first.cp2.x,
        cp2y=controls.first.cp2.y,
        x=round3(mid.x),
        y=round3(mid.y),
    )
    second = CubicBezier(
        cp1x=controls.second.cp1.x,
        cp1y=controls.second.cp1.y,
        cp2x=controls.second.cp2.x,
        cp2y=controls.second.cp2.y,
        x=round3(end.x),
        y=round3(end.y),
    )
    return first, second


def _subpath_start(commands: list[PathCommand], index: int) -> Point:
    """Start of the subpath containing the command at index."""
    for cmd in reversed(commands[:index]):
        if isinstance(cmd, MoveTo):
            return cmd.end
    return Point(x=0.0, y=0.0)


def _split_closing_segment(shape: PathShape, hit: SegmentHitResult, use_bezier: bool) -> int:
    """Insert a new anchor on the segment drawn by a ClosePath."""
    close_index = hit.close_index
    if close_index is None or not isinstance(shape.get_command(close_index), ClosePath):
        return 0

    start = shape.get_command_start(close_index)
    mid = hit.point
    new_cmd: PathCommand
    if use_bezier:
        new_cmd, _ = _smooth_cubics(start, mid, _subpath_start(shape.commands, close_index))
    else:
        new_cmd = LineTo(x=round3(mid.x), y=round3(mid.y))

    # The ClosePath still draws the remaining half back to the subpath start
    shape.insert_command(close_index, new_cmd)
    return 1


def insert_point_at(shape: PathShape, hit: SegmentHitResult, use_bezier: bool = False) -> int:
    """Split the segment named by a hit result, adding an anchor at the hit.

    Args:
        shape: Shape owning the command list
        hit: Result of find_segment_at on the shape's commands
        use_bezier: Turn a split line into two smooth cubics

    Returns:
        Number of commands inserted (0 if the segment could not be split)
    """
    if hit.close_index is not None:
        return _split_closing_segment(shape, hit, use_bezier)

    index = hit.command_index
    cmd = shape.get_command(index)
    start = shape.get_command_start(index)

    first: PathCommand
    second: PathCommand
    match cmd:
        case LineTo():
            if use_bezier:
                first, second = _smooth_cubics(start, hit.point, cmd.end)
            else:
                first = LineTo(x=round3(hit.point.x), y=round3(hit.point.y))
                second = LineTo(x=round3(cmd.x), y=round3(cmd.y))
        case CubicBezier():
            split = split_cubic_bezier(start, cmd.cp1, cmd.cp2, cmd.end, hit.t)
            first = CubicBezier(
                cp1x=split.first.cp1.x,
                cp1y=split.first.cp1.y,
                cp2x=split.first.cp2.x,
                cp2y=split.first.cp2.y,
                x=split.first.end.x,
                y=split.first.end.y,
            )
            second = CubicBezier(
                cp1x=split.second.cp1.x,
                cp1y=split.second.cp1.y,
                cp2x=split.second.cp2.x,
                cp2y=split.second.cp2.y,
                x=split.second.end.x,
                y=split.second.end.y,
            )
        case QuadraticBezier():
            split_q = split_quadratic_bezier(start, cmd.cp, cmd.end, hit.t)
            first = QuadraticBezier(
                cpx=split_q.first.cp.x,
                cpy=split_q.first.cp.y,
                x=split_q.first.end.x,
                y=split_q.first.end.y,
            )
            second = QuadraticBezier(
                cpx=split_q.second.cp.x,
                cpy=split_q.second.cp.y,
                x=split_q.second.end.x,
                y=split_q.second.end.y,
            )
        case _:
            logger.warning(f"Cannot split segment of command {cmd!r} at index {index}")
            return 0

    shape.replace_command(index, first)
    shape.insert_command(index + 1, second)
    return 1


def split_segment(shape: PathShape, index: int, t: float, use_bezier: bool = False) -> int:
    """Split the segment ending at the command at index, at parameter t.

    A ClosePath index splits the closing segment. Returns the number of
    inserted commands, 0 for commands that cannot be split.
    """
    cmd = shape.get_command(index)
    if cmd is None or index == 0:
        return 0

    t = clamp_value(t, 0.0, 1.0)
    start = shape.get_command_start(index)
    close_index: int | None = None
    segment_type = SegmentType.LINE

    match cmd:
        case LineTo():
            point = split_line(start, cmd.end, t)
        case CubicBezier():
            point = cubic_bezier_point(start, cmd.cp1, cmd.cp2, cmd.end, t)
            segment_type = SegmentType.CUBIC
        case QuadraticBezier():
            point = quadratic_bezier_point(start, cmd.cp, cmd.end, t)
            segment_type = SegmentType.QUADRATIC
        case ClosePath():
            point = split_line(start, _subpath_start(shape.commands, index), t)
            close_index = index
            index -= 1
        case _:
            logger.warning(f"Cannot split segment of command {cmd!r} at index {index}")
            return 0

    hit = SegmentHitResult(
        command_index=index,
        t=t,
        point=round_point(point),
        segment_type=segment_type,
        close_index=close_index,
    )
    return insert_point_at(shape, hit, use_bezier)


def add_point_at_location(
    shape: PathShape,
    point: Point,
    tolerance: float | None = None,
    use_bezier: bool = False,
) -> bool:
    """Add an anchor on the segment nearest a world point.

    Returns:
        True if a segment was hit and split
    """
    if tolerance is None:
        tolerance = settings.context_menu_tolerance

    hit = find_segment_at(shape.commands, shape.to_local(point), tolerance)
    if hit is None:
        return False
    return insert_point_at(shape, hit, use_bezier) > 0


def delete_point_at_location(
    shape: PathShape,
    point: Point,
    tolerance: float | None = None,
) -> PathCommand | None:
    """Remove the anchor under a world point, if the shape allows it.

    Returns:
        The removed command, or None when nothing was removed
    """
    if tolerance is None:
        tolerance = settings.context_menu_tolerance

    anchor = find_anchor_at(shape.commands, shape.to_local(point), tolerance)
    if anchor is None:
        return None
    if not shape.can_remove_command(anchor.command_index):
        logger.info(f"Anchor at command {anchor.command_index} cannot be removed")
        return None
    return shape.remove_command(anchor.command_index)
