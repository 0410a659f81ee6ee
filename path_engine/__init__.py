"""Path geometry engine for a vector drawing editor.

Parses SVG path data into normalized commands, serializes them back,
hit-tests segments and anchors, and splits curves for point insertion.
"""

from path_engine.arc_math import arc_endpoint_to_center, arc_point, sample_arc, vector_angle
from path_engine.curves import (
    cubic_bezier_point,
    generate_smooth_control_points,
    quadratic_bezier_point,
    split_cubic_bezier,
    split_line,
    split_quadratic_bezier,
)
from path_engine.editing import (
    add_point_at_location,
    delete_point_at_location,
    insert_point_at,
    split_segment,
)
from path_engine.errors import InvalidPathError, PathEngineError
from path_engine.math_utils import format_number, round3, round_point
from path_engine.path_geometry import (
    closest_point_on_cubic,
    closest_point_on_line,
    closest_point_on_quadratic,
    find_anchor_at,
    find_segment_at,
)
from path_engine.path_parser import get_path_points, parse_path, serialize_command, serialize_path
from path_engine.shapes import PathShape
from path_engine.svg_import import extract_path_data, parse_svg_paths

__version__ = "0.1.0"

__all__ = [
    # Parsing
    "get_path_points",
    "parse_path",
    "serialize_command",
    "serialize_path",
    "extract_path_data",
    "parse_svg_paths",
    # Precision
    "format_number",
    "round3",
    "round_point",
    # Arcs
    "arc_endpoint_to_center",
    "arc_point",
    "sample_arc",
    "vector_angle",
    # Curves
    "cubic_bezier_point",
    "generate_smooth_control_points",
    "quadratic_bezier_point",
    "split_cubic_bezier",
    "split_line",
    "split_quadratic_bezier",
    # Hit testing
    "closest_point_on_cubic",
    "closest_point_on_line",
    "closest_point_on_quadratic",
    "find_anchor_at",
    "find_segment_at",
    # Shapes and editing
    "PathShape",
    "add_point_at_location",
    "delete_point_at_location",
    "insert_point_at",
    "split_segment",
    # Errors
    "InvalidPathError",
    "PathEngineError",
]
