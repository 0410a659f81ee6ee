"""CLI for the path engine - inspect and edit SVG path data.

Usage:
    path-engine normalize "m 10 10 h 50 v 50 z"
    path-engine points "M 0 0 Q 50 100 100 0"
    path-engine bounds "M 0 0 L 100 0 L 100 100 Z" --rotation 45
    path-engine hit "M 0 0 L 100 0" 50 5
    path-engine anchor "M 0 0 L 100 0" 98 1
    path-engine arc 0 0 50 50 0 0 1 100 0
    path-engine split "M 0 0 L 100 0" 1 0.5 --bezier
    path-engine extract drawing.svg
"""

import logging
import math
from pathlib import Path as FilePath

import typer
from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from path_engine.arc_math import arc_endpoint_to_center
from path_engine.config import settings
from path_engine.editing import split_segment
from path_engine.errors import InvalidPathError, PathEngineError
from path_engine.logging_config import configure_logging
from path_engine.math_utils import format_number
from path_engine.path_geometry import find_anchor_at, find_segment_at
from path_engine.path_parser import get_path_points, serialize_path
from path_engine.shapes import PathShape
from path_engine.svg_import import extract_path_data
from path_engine.types import Point

app = typer.Typer(
    name="path-engine",
    help="Parse, query and edit SVG path data",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log at DEBUG level"),
    log_file: FilePath | None = typer.Option(
        None, "--log-file", help="Also write logs to this file (default: log_file setting)"
    ),
) -> None:
    """Parse, query and edit SVG path data."""
    configure_logging(
        json_format=settings.log_json,
        level="DEBUG" if verbose else settings.log_level,
        log_file=log_file or settings.log_file,
        error_log_file=settings.error_log_file,
    )


def _load_shape(d: str) -> PathShape:
    """Parse path data, rejecting input with no usable commands."""
    shape = PathShape.from_path_data(d)
    if not shape.commands:
        raise InvalidPathError(f"No path commands in {d!r}")
    return shape


def _fmt(point: Point) -> str:
    return f"({format_number(point.x)}, {format_number(point.y)})"


# =============================================================================
# Parsing
# =============================================================================


@app.command()
def normalize(
    d: str = typer.Argument(..., help="SVG path data"),
) -> None:
    """Rewrite path data as absolute M/L/C/Q/A/Z commands.

    Examples:
        path-engine normalize "m 10 10 h 50 v 50 z"
    """
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    console.print(shape.build_path_data(), markup=False, highlight=False, soft_wrap=True)


@app.command()
def points(
    d: str = typer.Argument(..., help="SVG path data"),
) -> None:
    """List the anchor and control points used for bounds."""
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    table = Table(title="Path Points", box=box.ROUNDED)
    table.add_column("#", style="dim", justify="right")
    table.add_column("X", style="cyan", justify="right")
    table.add_column("Y", style="cyan", justify="right")

    for i, point in enumerate(get_path_points(shape.commands)):
        table.add_row(str(i), format_number(point.x), format_number(point.y))

    console.print(table)


@app.command()
def bounds(
    d: str = typer.Argument(..., help="SVG path data"),
    rotation: float = typer.Option(0.0, "--rotation", "-r", help="Rotation in degrees"),
) -> None:
    """Print the bounding box of a path."""
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    shape.set_rotation(rotation)
    extent = shape.get_bounds()
    console.print(
        f"x={format_number(extent.x)} y={format_number(extent.y)} "
        f"width={format_number(extent.width)} height={format_number(extent.height)}",
        highlight=False,
    )


# =============================================================================
# Hit testing
# =============================================================================


@app.command()
def hit(
    d: str = typer.Argument(..., help="SVG path data"),
    x: float = typer.Argument(..., help="Query X"),
    y: float = typer.Argument(..., help="Query Y"),
    tolerance: float | None = typer.Option(
        None, "--tolerance", "-t", help="Maximum distance (default: hit_tolerance setting)"
    ),
) -> None:
    """Find the closest segment to a point."""
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if tolerance is None:
        tolerance = settings.hit_tolerance

    result = find_segment_at(shape.commands, Point(x=x, y=y), tolerance)
    if result is None:
        console.print("[yellow]No segment within tolerance[/yellow]")
        return

    table = Table(title="Segment Hit", box=box.ROUNDED)
    table.add_column("Command", style="cyan", justify="right")
    table.add_column("Type", style="magenta")
    table.add_column("t", justify="right")
    table.add_column("Point", style="green")
    table.add_column("Closing", style="dim")
    table.add_row(
        str(result.command_index),
        result.segment_type.value,
        format_number(result.t),
        _fmt(result.point),
        "-" if result.close_index is None else str(result.close_index),
    )
    console.print(table)


@app.command()
def anchor(
    d: str = typer.Argument(..., help="SVG path data"),
    x: float = typer.Argument(..., help="Query X"),
    y: float = typer.Argument(..., help="Query Y"),
    tolerance: float | None = typer.Option(
        None, "--tolerance", "-t", help="Maximum distance (default: hit_tolerance setting)"
    ),
) -> None:
    """Find the first anchor point near a point."""
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if tolerance is None:
        tolerance = settings.hit_tolerance

    result = find_anchor_at(shape.commands, Point(x=x, y=y), tolerance)
    if result is None:
        console.print("[yellow]No anchor within tolerance[/yellow]")
        return

    console.print(
        f"anchor={result.anchor_index} command={result.command_index}", highlight=False
    )


# =============================================================================
# Geometry
# =============================================================================


@app.command()
def arc(
    x1: float = typer.Argument(..., help="Start X"),
    y1: float = typer.Argument(..., help="Start Y"),
    rx: float = typer.Argument(..., help="X radius"),
    ry: float = typer.Argument(..., help="Y radius"),
    rotation: float = typer.Argument(..., help="Ellipse rotation in degrees"),
    large_arc: int = typer.Argument(..., help="Large arc flag (0 or 1)"),
    sweep: int = typer.Argument(..., help="Sweep flag (0 or 1)"),
    x2: float = typer.Argument(..., help="End X"),
    y2: float = typer.Argument(..., help="End Y"),
) -> None:
    """Convert an arc from endpoint to center parameterization."""
    params = arc_endpoint_to_center(
        Point(x=x1, y=y1), rx, ry, rotation, large_arc != 0, sweep != 0, Point(x=x2, y=y2)
    )
    if params is None:
        console.print("[yellow]Degenerate arc (coincident endpoints or zero radius)[/yellow]")
        return

    table = Table(title="Arc Center Parameterization", box=box.ROUNDED)
    table.add_column("Field", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("center", _fmt(params.center))
    table.add_row("rx", format_number(params.rx))
    table.add_row("ry", format_number(params.ry))
    table.add_row("theta1", f"{format_number(math.degrees(params.theta1))}°")
    table.add_row("delta_theta", f"{format_number(math.degrees(params.delta_theta))}°")
    console.print(table)


# =============================================================================
# Editing
# =============================================================================


@app.command()
def split(
    d: str = typer.Argument(..., help="SVG path data"),
    index: int = typer.Argument(..., help="Index of the command ending the segment"),
    t: float = typer.Argument(..., help="Split parameter in [0, 1]"),
    bezier: bool = typer.Option(False, "--bezier", "-b", help="Split lines into smooth cubics"),
) -> None:
    """Insert an anchor point into a segment and print the new path data.

    Examples:
        path-engine split "M 0 0 L 100 0" 1 0.5
        path-engine split "M 0 0 L 100 0 L 100 100 Z" 3 0.5 --bezier
    """
    try:
        shape = _load_shape(d)
    except PathEngineError as e:
        console.print(f"[red]{escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    if split_segment(shape, index, t, use_bezier=bezier) == 0:
        console.print(f"[red]Command {index} cannot be split[/red]")
        raise typer.Exit(1)

    console.print(serialize_path(shape.commands), markup=False, highlight=False, soft_wrap=True)


# =============================================================================
# SVG documents
# =============================================================================


@app.command()
def extract(
    file: FilePath = typer.Argument(..., help="SVG file to read"),
) -> None:
    """Print the normalized data of every <path> in an SVG file."""
    try:
        svg_text = file.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Failed to read {escape(str(file))}: {escape(str(e))}[/red]")
        raise typer.Exit(1) from e

    data = extract_path_data(svg_text)
    if not data:
        console.print("[yellow]No paths found[/yellow]")
        return

    logger.debug(f"Found {len(data)} path(s) in {file}")
    for d in data:
        normalized = PathShape.from_path_data(d).build_path_data()
        console.print(normalized, markup=False, highlight=False, soft_wrap=True)


# Entry point
if __name__ == "__main__":
    app()
