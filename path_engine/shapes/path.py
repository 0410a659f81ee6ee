"""Editable path shape owning a command list."""

import math
from collections.abc import Callable
from functools import partial

from pydantic import BaseModel, Field, field_validator

from path_engine.arc_math import sample_arc
from path_engine.config import settings
from path_engine.curves import cubic_bezier_point, quadratic_bezier_point
from path_engine.errors import InvalidPathError
from path_engine.math_utils import round3
from path_engine.path_geometry import closest_point_on_line
from path_engine.path_parser import get_path_points, parse_path, serialize_path
from path_engine.shapes.base import (
    bounds_from_points,
    generate_id,
    get_rotated_bounds,
    normalize_rotation,
    rotate_point,
)
from path_engine.types import (
    Bounds,
    ClosePath,
    CubicBezier,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticBezier,
    TaggedPathCommand,
    has_endpoint,
)

PointMap = Callable[[Point], Point]


def _map_points(cmd: PathCommand, fn: PointMap) -> PathCommand:
    """Apply a point mapping to every coordinate of a command.

    Arcs only have their endpoint mapped; callers adjust radii and
    rotation themselves.
    """
    match cmd:
        case MoveTo() | LineTo() | EllipticalArc():
            end = fn(cmd.end)
            return cmd.model_copy(update={"x": end.x, "y": end.y})
        case CubicBezier():
            cp1, cp2, end = fn(cmd.cp1), fn(cmd.cp2), fn(cmd.end)
            return CubicBezier(cp1x=cp1.x, cp1y=cp1.y, cp2x=cp2.x, cp2y=cp2.y, x=end.x, y=end.y)
        case QuadraticBezier():
            cp, end = fn(cmd.cp), fn(cmd.end)
            return QuadraticBezier(cpx=cp.x, cpy=cp.y, x=end.x, y=end.y)
        case _:
            return cmd


class PathShape(BaseModel):
    """A path shape: the owner of a command list.

    The geometry functions never mutate command lists; this class is the
    single writer. Edit hooks (insert/replace/remove) mutate in place and
    are not safe to call concurrently on the same shape.
    """

    id: str = Field(default_factory=generate_id)
    commands: list[TaggedPathCommand] = []
    rotation: float = 0.0  # Degrees, about the bounds center

    @field_validator("rotation")
    @classmethod
    def _normalize_rotation(cls, value: float) -> float:
        return normalize_rotation(value)

    @classmethod
    def from_path_data(cls, d: str) -> "PathShape":
        """Create a path from a d attribute string."""
        return cls(commands=parse_path(d))

    @classmethod
    def from_points(cls, points: list[Point], closed: bool = False) -> "PathShape":
        """Create a path of straight lines through anchor points."""
        if len(points) < 2:
            raise InvalidPathError("Path requires at least 2 points")

        commands: list[PathCommand] = [MoveTo(x=points[0].x, y=points[0].y)]
        commands.extend(LineTo(x=p.x, y=p.y) for p in points[1:])
        if closed:
            commands.append(ClosePath())
        return cls(commands=commands)

    def build_path_data(self) -> str:
        """Build the d attribute string."""
        return serialize_path(self.commands)

    def clone(self) -> "PathShape":
        """Deep copy with a new id."""
        return PathShape(
            commands=[cmd.model_copy() for cmd in self.commands],
            rotation=self.rotation,
        )

    # -------------------------------------------------------------------------
    # Edit hooks
    # -------------------------------------------------------------------------

    def insert_command(self, index: int, command: PathCommand) -> None:
        self.commands.insert(index, command)

    def replace_command(self, index: int, command: PathCommand) -> None:
        """Replace the command at index; out-of-range indices are ignored."""
        if 0 <= index < len(self.commands):
            self.commands[index] = command

    def remove_command(self, index: int) -> PathCommand | None:
        """Remove and return the command at index, or None when out of range."""
        if 0 <= index < len(self.commands):
            return self.commands.pop(index)
        return None

    def can_remove_command(self, index: int) -> bool:
        """Whether removing the command at index leaves a valid path.

        The leading MoveTo and ClosePath commands are never removable, and
        a path keeps at least a MoveTo plus one segment.
        """
        if index <= 0 or index >= len(self.commands):
            return False
        if len(self.commands) <= 2:
            return False
        return not isinstance(self.commands[index], ClosePath)

    def get_command(self, index: int) -> PathCommand | None:
        if 0 <= index < len(self.commands):
            return self.commands[index]
        return None

    def get_command_count(self) -> int:
        return len(self.commands)

    def get_command_start(self, index: int) -> Point:
        """Start point of the segment ending at the command at index."""
        if index <= 0 or index > len(self.commands):
            return Point(x=0.0, y=0.0)

        prev = self.commands[index - 1]
        if has_endpoint(prev):
            return prev.end

        # After Z, the segment starts at the most recent subpath start
        for cmd in reversed(self.commands[: index - 1]):
            if isinstance(cmd, MoveTo):
                return cmd.end
        return Point(x=0.0, y=0.0)

    # -------------------------------------------------------------------------
    # Anchors and control points
    # -------------------------------------------------------------------------

    def get_anchor_points(self) -> list[Point]:
        """Endpoints of all commands, excluding control points."""
        return [cmd.end for cmd in self.commands if has_endpoint(cmd)]

    def set_anchor_point(self, index: int, point: Point) -> None:
        """Move the anchor with the given anchor index."""
        anchor_index = 0
        for i, cmd in enumerate(self.commands):
            if not has_endpoint(cmd):
                continue
            if anchor_index == index:
                self.commands[i] = cmd.model_copy(update={"x": point.x, "y": point.y})
                return
            anchor_index += 1

    def set_control_point(self, command_index: int, cp_index: int, point: Point) -> None:
        """Move control point 0 or 1 of a cubic, or control point 0 of a quadratic."""
        cmd = self.get_command(command_index)
        x, y = round3(point.x), round3(point.y)

        if isinstance(cmd, CubicBezier):
            update = {"cp1x": x, "cp1y": y} if cp_index == 0 else {"cp2x": x, "cp2y": y}
            self.commands[command_index] = cmd.model_copy(update=update)
        elif isinstance(cmd, QuadraticBezier) and cp_index == 0:
            self.commands[command_index] = cmd.model_copy(update={"cpx": x, "cpy": y})

    # -------------------------------------------------------------------------
    # Bounds and rotation
    # -------------------------------------------------------------------------

    def get_base_bounds(self) -> Bounds:
        """Unrotated bounds from anchors, control points and sampled arcs."""
        return bounds_from_points(get_path_points(self.commands))

    def get_bounds(self) -> Bounds:
        return get_rotated_bounds(self.get_base_bounds(), self.rotation)

    def get_rotation_center(self) -> Point:
        bounds = self.get_base_bounds()
        return Point(x=bounds.x + bounds.width / 2, y=bounds.y + bounds.height / 2)

    def set_rotation(self, angle: float) -> None:
        self.rotation = normalize_rotation(angle)

    def to_local(self, point: Point) -> Point:
        """Map a world point into the shape's unrotated frame."""
        if self.rotation == 0:
            return point
        return rotate_point(point, self.get_rotation_center(), -self.rotation)

    def to_world(self, point: Point) -> Point:
        """Map a point in the shape's unrotated frame to world space."""
        if self.rotation == 0:
            return point
        return rotate_point(point, self.get_rotation_center(), self.rotation)

    def is_closed(self) -> bool:
        return bool(self.commands) and isinstance(self.commands[-1], ClosePath)

    # -------------------------------------------------------------------------
    # Transforms
    # -------------------------------------------------------------------------

    def move(self, dx: float, dy: float) -> None:
        """Translate every point of the path."""

        def translate(p: Point) -> Point:
            return Point(x=p.x + dx, y=p.y + dy)

        self.commands = [_map_points(cmd, translate) for cmd in self.commands]

    def apply_transform(
        self, translate_x: float, translate_y: float, scale_x: float, scale_y: float
    ) -> None:
        """Scale then translate every point; arc radii scale by |scale|."""

        def transform(p: Point) -> Point:
            return Point(x=p.x * scale_x + translate_x, y=p.y * scale_y + translate_y)

        transformed: list[PathCommand] = []
        for cmd in self.commands:
            new_cmd = _map_points(cmd, transform)
            if isinstance(new_cmd, EllipticalArc):
                # Rotation is kept; exact for axis-aligned or uniformly scaled arcs
                new_cmd = new_cmd.model_copy(
                    update={"rx": new_cmd.rx * abs(scale_x), "ry": new_cmd.ry * abs(scale_y)}
                )
            transformed.append(new_cmd)
        self.commands = transformed

    def apply_skew(self, skew_x: float, skew_y: float) -> None:
        """Skew every point by angles in degrees.

        Arcs are approximated: the endpoint is skewed and skew_x is added
        to the ellipse rotation.
        """
        tan_x = math.tan(math.radians(skew_x))
        tan_y = math.tan(math.radians(skew_y))

        def skew(p: Point) -> Point:
            return Point(x=p.x + p.y * tan_x, y=p.y + p.x * tan_y)

        skewed: list[PathCommand] = []
        for cmd in self.commands:
            new_cmd = _map_points(cmd, skew)
            if isinstance(new_cmd, EllipticalArc) and skew_x != 0:
                new_cmd = new_cmd.model_copy(
                    update={"x_axis_rotation": new_cmd.x_axis_rotation + skew_x}
                )
            skewed.append(new_cmd)
        self.commands = skewed

    # -------------------------------------------------------------------------
    # Hit testing
    # -------------------------------------------------------------------------

    def hit_test(
        self, point: Point, tolerance: float | None = None, filled: bool = False
    ) -> bool:
        """Check whether a world point touches the path's stroke (or fill).

        Args:
            point: Query point in world space
            tolerance: Maximum stroke distance (inclusive)
            filled: Also accept points inside a closed path
        """
        if tolerance is None:
            tolerance = settings.shape_hit_tolerance

        local = self.to_local(point)
        if self._near_stroke(local, tolerance):
            return True
        return filled and self.is_closed() and self._contains(local)

    def _near_stroke(self, point: Point, tolerance: float) -> bool:
        current = Point(x=0.0, y=0.0)
        start = current

        for cmd in self.commands:
            match cmd:
                case MoveTo():
                    start = cmd.end
                case LineTo():
                    if closest_point_on_line(point, current, cmd.end).dist <= tolerance:
                        return True
                case CubicBezier():
                    curve = partial(cubic_bezier_point, current, cmd.cp1, cmd.cp2, cmd.end)
                    if self._near_samples(point, tolerance, curve):
                        return True
                case QuadraticBezier():
                    curve = partial(quadratic_bezier_point, current, cmd.cp, cmd.end)
                    if self._near_samples(point, tolerance, curve):
                        return True
                case EllipticalArc():
                    prev = current
                    for arc_pt in sample_arc(current, cmd, settings.arc_hit_samples):
                        if closest_point_on_line(point, prev, arc_pt).dist <= tolerance:
                            return True
                        prev = arc_pt
                case ClosePath():
                    if closest_point_on_line(point, current, start).dist <= tolerance:
                        return True
                    current = start
                    continue
            current = cmd.end

        return False

    @staticmethod
    def _near_samples(point: Point, tolerance: float, evaluate: Callable[[float], Point]) -> bool:
        samples = settings.curve_samples
        for i in range(samples + 1):
            pt = evaluate(i / samples)
            if math.hypot(point.x - pt.x, point.y - pt.y) <= tolerance:
                return True
        return False

    def _sample_rings(self) -> list[list[Point]]:
        """Polygon approximation of each subpath for containment tests."""
        samples = settings.fill_samples
        rings: list[list[Point]] = []
        ring: list[Point] = []
        current = Point(x=0.0, y=0.0)
        start = current

        for cmd in self.commands:
            match cmd:
                case MoveTo():
                    rings.append(ring)
                    ring = [cmd.end]
                    start = cmd.end
                case LineTo():
                    ring.append(cmd.end)
                case CubicBezier():
                    ring.extend(
                        cubic_bezier_point(current, cmd.cp1, cmd.cp2, cmd.end, i / samples)
                        for i in range(1, samples + 1)
                    )
                case QuadraticBezier():
                    ring.extend(
                        quadratic_bezier_point(current, cmd.cp, cmd.end, i / samples)
                        for i in range(1, samples + 1)
                    )
                case EllipticalArc():
                    ring.extend(sample_arc(current, cmd, samples))
                case ClosePath():
                    # Drawing after Z without a MoveTo starts a new ring at the same start
                    rings.append(ring)
                    ring = [start]
                    current = start
                    continue
            current = cmd.end

        rings.append(ring)
        return [r for r in rings if len(r) >= 3]

    @staticmethod
    def _ring_contains(ring: list[Point], point: Point) -> bool:
        inside = False
        j = len(ring) - 1
        for i, pi in enumerate(ring):
            pj = ring[j]
            if (pi.y > point.y) != (pj.y > point.y) and point.x < (pj.x - pi.x) * (
                point.y - pi.y
            ) / (pj.y - pi.y) + pi.x:
                inside = not inside
            j = i
        return inside

    def _contains(self, point: Point) -> bool:
        """Even-odd containment: a point is inside when an odd number of rings hold it."""
        inside = False
        for ring in self._sample_rings():
            if self._ring_contains(ring, point):
                inside = not inside
        return inside
