"""Exceptions raised by the path model."""


class PathError(Exception):
    pass


class InvalidOperationError(PathError, ValueError):
    """A structural edit would break the path (e.g. removing its last waypoint)."""


class OutOfRangeError(PathError, IndexError):
    """An index or selector argument is outside its valid bounds."""
