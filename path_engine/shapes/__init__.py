"""Shapes that own and edit path command lists."""

from path_engine.shapes.base import (
    bounds_from_points,
    generate_id,
    get_rotated_bounds,
    normalize_rotation,
    rotate_point,
)
from path_engine.shapes.path import PathShape

__all__ = [
    "PathShape",
    "bounds_from_points",
    "generate_id",
    "get_rotated_bounds",
    "normalize_rotation",
    "rotate_point",
]
