"""Triangulation helpers for regionCAD meshes.

We delegate to ``mapbox-earcut`` (the fast ear clipping implementation
used by Mapbox GL) to keep the logic compact and reliable.  The helper
routines in this file normalise regionCAD loops into the format
expected by earcut and convert the resulting indices back into either
triangle vertex tuples or face index triangles.
"""

from __future__ import annotations

from typing import Iterable, List, Sequence, Tuple

import numpy as np

try:
    import mapbox_earcut as _earcut
except ImportError as exc:  # pragma: no cover - import guard
    raise ImportError(
        "mapbox-earcut must be installed to triangulate polygons with holes"
    ) from exc

from regioncad.errors import DegenerateGeometryError
from regioncad.geom import epsilon

Point2D = Tuple[float, float]


def triangulate_polygon(outer: Sequence[Sequence[float]],
                        holes: Iterable[Sequence[Sequence[float]]] | None = None
                        ) -> List[List[Point2D]]:
    """Return triangles covering ``outer`` minus any ``holes``.

    ``outer`` and each entry in ``holes`` is expected to be a sequence of
    XY-like points, with or without a closing point.  Degenerate loops
    (fewer than three distinct points) are ignored.  The returned
    triangles are lists of three ``(x, y)`` pairs, each wound
    counter-clockwise.
    """

    if holes is None:
        holes = []

    outer_loop = _prepare_loop(outer, want_ccw=True)
    if len(outer_loop) < 3:
        return []

    point_map: List[Point2D] = []

    ring_ends: List[int] = []

    def _append(loop: Sequence[Point2D]) -> None:
        for x, y in loop:
            point_map.append((x, y))
        ring_ends.append(len(point_map))

    _append(outer_loop)

    for hole in holes:
        loop = _prepare_loop(hole, want_ccw=False)
        if len(loop) < 3:
            continue
        _append(loop)

    triangles: List[List[Point2D]] = []
    for a, b, c in _earcut_indices(point_map, ring_ends):
        tri = [point_map[a], point_map[b], point_map[c]]
        if _signed_area(tri) < 0:
            tri.reverse()
        triangles.append(tri)
    return triangles


def triangulate_face(vertices: Sequence[Sequence[float]],
                     face: Sequence[int]) -> List[Tuple[int, int, int]]:
    """Split the planar polygon ``face`` (indices into ``vertices``) into
    index triangles with the same winding as the face.

    The face is projected onto the coordinate plane most nearly
    perpendicular to its Newell normal before ear clipping.  A face
    whose points are collinear raises ``DegenerateGeometryError``.
    """

    if len(face) == 3:
        return [(face[0], face[1], face[2])]

    normal = _newell_normal([vertices[i] for i in face])
    axis = max(range(3), key=lambda k: abs(normal[k]))
    if abs(normal[axis]) <= epsilon:
        raise DegenerateGeometryError('face has no defined plane',
                                      {'face': list(face)})

    ## drop the dominant axis, keeping a right-handed pair of the others
    u, v = ((1, 2), (2, 0), (0, 1))[axis]
    loop = [(float(vertices[i][u]), float(vertices[i][v])) for i in face]
    want_positive = normal[axis] > 0

    triangles = []
    for a, b, c in _earcut_indices(loop, [len(loop)]):
        area = _signed_area([loop[a], loop[b], loop[c]])
        if (area > 0) != want_positive:
            b, c = c, b
        triangles.append((face[a], face[b], face[c]))
    return triangles


def _earcut_indices(points: Sequence[Point2D],
                    ring_ends: Sequence[int]) -> List[Tuple[int, int, int]]:
    vertices = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    ring_array = np.asarray(ring_ends, dtype=np.uint32)
    indices = _earcut.triangulate_float64(vertices, ring_array)
    return [(int(indices[i]), int(indices[i + 1]), int(indices[i + 2]))
            for i in range(0, len(indices), 3)]


def _newell_normal(points: Sequence[Sequence[float]]) -> List[float]:
    nx = ny = nz = 0.0
    for i, p in enumerate(points):
        q = points[(i + 1) % len(points)]
        pz = p[2] if len(p) > 2 else 0.0
        qz = q[2] if len(q) > 2 else 0.0
        nx += (p[1] - q[1]) * (pz + qz)
        ny += (pz - qz) * (p[0] + q[0])
        nz += (p[0] - q[0]) * (p[1] + q[1])
    return [nx, ny, nz]


def _prepare_loop(points: Sequence[Sequence[float]], *, want_ccw: bool) -> List[Point2D]:
    loop: List[Point2D] = []
    for pt in points:
        x, y = float(pt[0]), float(pt[1])
        if loop and _near(loop[-1], (x, y)):
            continue
        loop.append((x, y))
    if loop and _near(loop[0], loop[-1]):
        loop.pop()
    if len(loop) < 3:
        return loop
    area = _signed_area(loop)
    if want_ccw and area < 0:
        loop.reverse()
    elif not want_ccw and area > 0:
        loop.reverse()
    return loop


def _near(p1: Point2D, p2: Point2D) -> bool:
    return abs(p1[0] - p2[0]) <= epsilon and abs(p1[1] - p2[1]) <= epsilon


def _signed_area(loop: Sequence[Point2D]) -> float:
    total = 0.0
    for i, (x0, y0) in enumerate(loop):
        x1, y1 = loop[(i + 1) % len(loop)]
        total += x0 * y1 - x1 * y0
    return total / 2.0


__all__ = ['triangulate_polygon', 'triangulate_face']
