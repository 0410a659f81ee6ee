"""Parse and serialize SVG path data.

parse_path turns a d-string into normalized absolute commands; relative,
shorthand (H/V) and smooth (S/T) forms do not survive parsing.
serialize_path is its inverse for the normalized command set.
"""

import logging
import math
import re

from path_engine.arc_math import sample_arc
from path_engine.math_utils import format_number
from path_engine.types import (
    ClosePath,
    CubicBezier,
    EllipticalArc,
    LineTo,
    MoveTo,
    PathCommand,
    Point,
    QuadraticBezier,
)

logger = logging.getLogger(__name__)

# Command letters, numbers (signed, decimal, scientific), or any other letter
PATH_TOKEN_RE = re.compile(
    r"([MmLlHhVvCcSsQqTtAaZz])"
    r"|([-+]?(?:\d+\.?\d*|\.\d+)(?:[eE][-+]?\d+)?)"
    r"|([A-Za-z])"
)

# Number of arguments consumed by one repetition of each command
COMMAND_ARITY = {
    "M": 2,
    "L": 2,
    "H": 1,
    "V": 1,
    "C": 6,
    "S": 4,
    "Q": 4,
    "T": 2,
    "A": 7,
    "Z": 0,
}


def tokenize(d: str) -> list[str | float]:
    """Split path data into command letters and numbers.

    Unknown letters and numbers that overflow to infinity are dropped with
    a warning; any other character is skipped silently.
    """
    tokens: list[str | float] = []
    for match in PATH_TOKEN_RE.finditer(d):
        command, number, unknown = match.groups()
        if command:
            tokens.append(command)
        elif number:
            value = float(number)
            if not math.isfinite(value):
                logger.warning(f"Number {number!r} is out of range, skipping")
                continue
            tokens.append(value)
        elif unknown:
            logger.warning(f"Unknown path command {unknown!r}, skipping")
    return tokens


def _group_commands(tokens: list[str | float]) -> list[tuple[str, list[float]]]:
    """Group tokens into (command, [args]) pairs.

    Numbers before the first command letter are ignored.
    """
    groups: list[tuple[str, list[float]]] = []
    for token in tokens:
        if isinstance(token, str):
            groups.append((token, []))
        elif groups:
            groups[-1][1].append(token)
    return groups


def _chunks(args: list[float], size: int) -> list[list[float]]:
    """Whole argument groups of the given size; a trailing partial group is dropped."""
    count = len(args) // size
    return [args[i * size : (i + 1) * size] for i in range(count)]


def parse_path(d: str) -> list[PathCommand]:
    """Parse a path d-string into absolute PathCommands.

    Never raises: incomplete trailing argument groups and unknown commands
    are dropped and the rest of the path is kept.
    """
    commands: list[PathCommand] = []
    current_x, current_y = 0.0, 0.0
    start_x, start_y = 0.0, 0.0  # For Z command

    for cmd, args in _group_commands(tokenize(d)):
        is_relative = cmd.islower()
        cmd_upper = cmd.upper()

        if cmd_upper == "Z":
            commands.append(ClosePath())
            current_x, current_y = start_x, start_y
            continue

        for i, group in enumerate(_chunks(args, COMMAND_ARITY[cmd_upper])):
            dx, dy = (current_x, current_y) if is_relative else (0.0, 0.0)

            if cmd_upper == "M":
                x, y = group[0] + dx, group[1] + dy
                if i == 0:
                    commands.append(MoveTo(x=x, y=y))
                    start_x, start_y = x, y
                else:
                    # Extra pairs after a moveto are implicit linetos
                    commands.append(LineTo(x=x, y=y))

            elif cmd_upper == "L":
                x, y = group[0] + dx, group[1] + dy
                commands.append(LineTo(x=x, y=y))

            elif cmd_upper == "H":
                x, y = group[0] + dx, current_y
                commands.append(LineTo(x=x, y=y))

            elif cmd_upper == "V":
                x, y = current_x, group[0] + dy
                commands.append(LineTo(x=x, y=y))

            elif cmd_upper == "C":
                x, y = group[4] + dx, group[5] + dy
                commands.append(
                    CubicBezier(
                        cp1x=group[0] + dx,
                        cp1y=group[1] + dy,
                        cp2x=group[2] + dx,
                        cp2y=group[3] + dy,
                        x=x,
                        y=y,
                    )
                )

            elif cmd_upper == "S":
                # First control point reflects the previous cubic's second one
                cp1x, cp1y = current_x, current_y
                prev = commands[-1] if commands else None
                if isinstance(prev, CubicBezier):
                    cp1x = 2 * current_x - prev.cp2x
                    cp1y = 2 * current_y - prev.cp2y
                x, y = group[2] + dx, group[3] + dy
                commands.append(
                    CubicBezier(
                        cp1x=cp1x,
                        cp1y=cp1y,
                        cp2x=group[0] + dx,
                        cp2y=group[1] + dy,
                        x=x,
                        y=y,
                    )
                )

            elif cmd_upper == "Q":
                x, y = group[2] + dx, group[3] + dy
                commands.append(QuadraticBezier(cpx=group[0] + dx, cpy=group[1] + dy, x=x, y=y))

            elif cmd_upper == "T":
                cpx, cpy = current_x, current_y
                prev = commands[-1] if commands else None
                if isinstance(prev, QuadraticBezier):
                    cpx = 2 * current_x - prev.cpx
                    cpy = 2 * current_y - prev.cpy
                x, y = group[0] + dx, group[1] + dy
                commands.append(QuadraticBezier(cpx=cpx, cpy=cpy, x=x, y=y))

            else:  # A
                rx, ry = abs(group[0]), abs(group[1])
                x, y = group[5] + dx, group[6] + dy
                if rx == 0 or ry == 0:
                    # Zero radius arcs are straight lines
                    commands.append(LineTo(x=x, y=y))
                else:
                    commands.append(
                        EllipticalArc(
                            rx=rx,
                            ry=ry,
                            x_axis_rotation=group[2],
                            large_arc_flag=group[3] != 0,
                            sweep_flag=group[4] != 0,
                            x=x,
                            y=y,
                        )
                    )

            current_x, current_y = x, y

    return commands


def serialize_command(cmd: PathCommand) -> str:
    """Serialize a single command to path data text."""
    n = format_number
    match cmd:
        case MoveTo():
            return f"M {n(cmd.x)} {n(cmd.y)}"
        case LineTo():
            return f"L {n(cmd.x)} {n(cmd.y)}"
        case CubicBezier():
            return (
                f"C {n(cmd.cp1x)} {n(cmd.cp1y)} {n(cmd.cp2x)} {n(cmd.cp2y)} "
                f"{n(cmd.x)} {n(cmd.y)}"
            )
        case QuadraticBezier():
            return f"Q {n(cmd.cpx)} {n(cmd.cpy)} {n(cmd.x)} {n(cmd.y)}"
        case EllipticalArc():
            large = 1 if cmd.large_arc_flag else 0
            sweep = 1 if cmd.sweep_flag else 0
            return (
                f"A {n(cmd.rx)} {n(cmd.ry)} {n(cmd.x_axis_rotation)} {large} {sweep} "
                f"{n(cmd.x)} {n(cmd.y)}"
            )
        case ClosePath():
            return "Z"
        case _:
            raise TypeError(f"Unknown path command: {cmd!r}")


def serialize_path(commands: list[PathCommand]) -> str:
    """Serialize commands to a d-string with absolute uppercase commands."""
    return " ".join(serialize_command(cmd) for cmd in commands)


def get_path_points(commands: list[PathCommand]) -> list[Point]:
    """Anchor and control points of a path, for bounding-box computation.

    Arcs contribute sampled points so the box follows the curve rather
    than just its endpoints.
    """
    points: list[Point] = []
    current = Point(x=0.0, y=0.0)
    start = current  # Subpath start, restored by Z

    for cmd in commands:
        match cmd:
            case MoveTo():
                points.append(cmd.end)
                start = cmd.end
            case LineTo():
                points.append(cmd.end)
            case CubicBezier():
                points.extend([cmd.cp1, cmd.cp2, cmd.end])
            case QuadraticBezier():
                points.extend([cmd.cp, cmd.end])
            case EllipticalArc():
                points.extend(sample_arc(current, cmd))
                points.append(cmd.end)
            case ClosePath():
                current = start
                continue
        current = cmd.end

    return points
