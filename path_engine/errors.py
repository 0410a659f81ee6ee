"""Exceptions raised by the path engine.

Geometry queries and the parser never raise for bad input; these cover
misuse of constructors and the CLI's file handling.
"""


class PathEngineError(Exception):
    """Base class for path engine errors."""


class InvalidPathError(PathEngineError):
    """A path could not be built from the given input."""
