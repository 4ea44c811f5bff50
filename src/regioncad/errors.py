"""Exception taxonomy for regionCAD.

All exceptions derive from ``ValueError`` so that callers written
against plain argument checking keep working.  Each exception carries
an optional ``details`` dictionary describing the offending input.
"""

from __future__ import annotations


class RegionCADError(ValueError):
    """Base class for regionCAD failures."""

    def __init__(self, message, details=None):
        super().__init__(message)
        self.details = details or {}


class InputShapeError(RegionCADError):
    """A path, region, grid or option argument is malformed."""


class DegenerateGeometryError(RegionCADError):
    """The input is well formed but geometrically degenerate."""


class DegenerateOffsetError(DegenerateGeometryError):
    """Every offset segment was rejected: the shape collapsed."""


class AntiparallelCornerError(DegenerateGeometryError):
    """Two consecutive offset segments turn back on each other (180 degrees)."""


__all__ = [
    'RegionCADError',
    'InputShapeError',
    'DegenerateGeometryError',
    'DegenerateOffsetError',
    'AntiparallelCornerError',
]
