"""Indexed vertices-and-faces ("VNF") meshes.

A :class:`VNF` holds a list of 3D ``vertices`` and a list of ``faces``,
each face a list of indices into ``vertices``.  Vertices added through
``vnf_get_vertex()`` or ``vnf_add_face()`` are snapped to the
tolerance's quantum grid and deduplicated, so faces built from the same
coordinates share vertices.  ``vnf_merge()`` only concatenates and
re-indexes; it never deduplicates across the stores it merges.

VNFs grow in place: the ``vnf_add_*`` functions mutate and return the
store they are given.  Faces are never removed.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence, Tuple

from regioncad.errors import InputShapeError
from regioncad.geom import isgoodnum, mean, point3
from regioncad.path import (check_region, close_region, orient_region,
                            region_parts)
from regioncad.tolerance import DEFAULT_TOLERANCE
from regioncad.triangulator import triangulate_face, triangulate_polygon

logger = logging.getLogger(__name__)

STYLES = ('quad', 'quad-alt', 'quincunx')

Key = Tuple[float, float, float]


class VNF:
    """Grow-only indexed mesh with quantized vertex lookup."""

    def __init__(self, vertices=None, faces=None, tol=DEFAULT_TOLERANCE):
        self.tol = tol
        self.vertices: List[List[float]] = []
        self.faces: List[List[int]] = []
        self._lookup: Dict[Key, int] = {}
        for v in vertices or []:
            self._append_vertex(point3(v))
        for f in faces or []:
            face = [int(i) for i in f]
            if any(i < 0 or i >= len(self.vertices) for i in face):
                raise InputShapeError('face index out of range',
                                      {'face': face,
                                       'vertices': len(self.vertices)})
            self.faces.append(face)

    def __repr__(self):
        return f"VNF({len(self.vertices)} vertices, {len(self.faces)} faces)"

    def key(self, p) -> Key:
        q = self.tol.quantize
        return (q(p[0]), q(p[1]), q(p[2]))

    def _append_vertex(self, p) -> int:
        idx = len(self.vertices)
        self.vertices.append(p)
        self._lookup.setdefault(self.key(p), idx)
        return idx


def vnf(vertices=None, faces=None, tol=DEFAULT_TOLERANCE) -> VNF:
    """ construct a new VNF"""
    return VNF(vertices, faces, tol)


def isvnf(x) -> bool:
    return isinstance(x, VNF)


def _check_vnf(x) -> VNF:
    if not isvnf(x):
        raise InputShapeError('expected a VNF', {'type': type(x).__name__})
    return x


def _check_point(p):
    if not (isinstance(p, (list, tuple)) and len(p) in (2, 3) and
            all(isgoodnum(c) for c in p)):
        raise InputShapeError('bad point', {'point': p})
    return point3(p)


def vnf_get_vertex(vnf: VNF, point) -> int:
    """Return the index of ``point`` in ``vnf``, adding it if no vertex
    with the same quantized coordinates exists."""

    _check_vnf(vnf)
    p = [vnf.tol.quantize(c) for c in _check_point(point)]
    idx = vnf._lookup.get(vnf.key(p))
    if idx is None:
        idx = vnf._append_vertex(p)
    return idx


def vnf_add_face(vnf: VNF, points: Sequence) -> VNF:
    """Add the face through ``points`` to ``vnf``.  A closing point equal
    to the first is dropped, and the face is skipped if it has fewer
    than three distinct vertices."""

    _check_vnf(vnf)
    face = [vnf_get_vertex(vnf, p) for p in points]
    if len(face) > 1 and face[-1] == face[0]:
        face.pop()
    if len(set(face)) >= 3:
        vnf.faces.append(face)
    else:
        logger.debug('skipped degenerate face %s', face)
    return vnf


def vnf_add_faces(vnf: VNF, faces: Sequence[Sequence]) -> VNF:
    for f in faces:
        vnf_add_face(vnf, f)
    return vnf


def vnf_merge(*vnfs: VNF, tol=None) -> VNF:
    """Concatenate ``vnfs`` into a new VNF, offsetting face indices by
    the running vertex count.  Vertices shared between inputs are not
    merged.  The result uses the tolerance of the first input unless
    ``tol`` is given."""

    for v in vnfs:
        _check_vnf(v)
    if tol is None:
        tol = vnfs[0].tol if vnfs else DEFAULT_TOLERANCE
    out = VNF(tol=tol)
    for v in vnfs:
        base = len(out.vertices)
        for p in v.vertices:
            out._append_vertex(list(p))
        out.faces.extend([i + base for i in f] for f in v.faces)
    return out


def vnf_reverse_faces(vnf: VNF) -> VNF:
    """ new VNF with every face wound the other way"""
    _check_vnf(vnf)
    return VNF(vnf.vertices, [list(reversed(f)) for f in vnf.faces], vnf.tol)


def vnf_triangulate(vnf: VNF) -> VNF:
    """New VNF with the same vertices and every face split into
    triangles of the same winding."""

    _check_vnf(vnf)
    faces = []
    for f in vnf.faces:
        faces.extend(list(t) for t in triangulate_face(vnf.vertices, f))
    return VNF(vnf.vertices, faces, vnf.tol)


def vnf_bounds(vnf: VNF) -> List[List[float]]:
    """ axis-aligned bounding box ``[[xmin,ymin,zmin],[xmax,ymax,zmax]]``"""
    _check_vnf(vnf)
    if not vnf.vertices:
        raise InputShapeError('empty VNF has no bounds')
    return [[min(p[k] for p in vnf.vertices) for k in range(3)],
            [max(p[k] for p in vnf.vertices) for k in range(3)]]


def _check_grid(points):
    if not isinstance(points, (list, tuple)) or len(points) < 2:
        raise InputShapeError('vertex array needs at least two rows')
    ncols = None
    rows = []
    for r, row in enumerate(points):
        if not isinstance(row, (list, tuple)):
            raise InputShapeError('vertex array row is not a list', {'row': r})
        if ncols is None:
            ncols = len(row)
        elif len(row) != ncols:
            raise InputShapeError('ragged vertex array',
                                  {'row': r, 'expected': ncols,
                                   'found': len(row)})
        rows.append([_check_point(p) for p in row])
    if ncols < 2:
        raise InputShapeError('vertex array needs at least two columns')
    return rows, ncols


def _cell_faces(i1, i2, i3, i4, i5, style):
    if style == 'quad':
        return [[i1, i3, i2], [i1, i4, i3]]
    if style == 'quad-alt':
        return [[i1, i4, i2], [i2, i4, i3]]
    return [[i1, i5, i2], [i2, i5, i3], [i3, i5, i4], [i4, i5, i1]]


def vnf_vertex_array(points: Sequence[Sequence], *, col_wrap: bool = False,
                     row_wrap: bool = False, cap1: bool = False,
                     cap2: bool = False, caps: Optional[bool] = None,
                     style: str = 'quad', reverse: bool = False,
                     vnf: Optional[VNF] = None,
                     tol=DEFAULT_TOLERANCE) -> VNF:
    """Mesh a rectangular grid of points.

    ``points`` is a list of rows of equal length.  Each grid cell
    ``(i1, i2, i3, i4)`` (row ``r`` columns ``c, c+1`` then row ``r+1``
    columns ``c+1, c``) becomes two triangles split along ``i1-i3``
    (``'quad'``) or ``i2-i4`` (``'quad-alt'``), or four triangles about
    the cell's centroid (``'quincunx'``).  ``col_wrap`` joins the last
    column to the first and ``row_wrap`` the last row to the first.

    ``cap1``/``cap2`` (or ``caps`` for both) close the first/last row
    with a single polygon face, which requires ``col_wrap``.  Grid
    vertices are appended as given, without deduplication.  If ``vnf``
    is given the faces are added to it, otherwise a new VNF is built.
    """

    if style not in STYLES:
        raise InputShapeError('unknown vertex array style', {'style': style})
    if caps is not None:
        cap1 = cap2 = caps
    if (cap1 or cap2) and not col_wrap:
        raise InputShapeError('caps require col_wrap')
    if (cap1 or cap2) and row_wrap:
        raise InputShapeError('caps cannot be used with row_wrap')
    rows, ncols = _check_grid(points)
    nrows = len(rows)
    out = VNF(tol=tol) if vnf is None else _check_vnf(vnf)

    base = len(out.vertices)
    for row in rows:
        for p in row:
            out._append_vertex(p)

    def idx(r, c):
        return base + (r % nrows) * ncols + (c % ncols)

    faces = []
    for r in range(nrows if row_wrap else nrows - 1):
        for c in range(ncols if col_wrap else ncols - 1):
            i1, i2, i3, i4 = idx(r, c), idx(r, c + 1), idx(r + 1, c + 1), idx(r + 1, c)
            i5 = None
            if style == 'quincunx':
                center = mean([out.vertices[i] for i in (i1, i2, i3, i4)])
                i5 = out._append_vertex(center)
            faces.extend(_cell_faces(i1, i2, i3, i4, i5, style))
    if cap1:
        faces.append([idx(0, c) for c in range(ncols)])
    if cap2:
        faces.append([idx(nrows - 1, c) for c in reversed(range(ncols))])
    if reverse:
        faces = [list(reversed(f)) for f in faces]
    out.faces.extend(faces)
    return out


def _add_region_faces(out, region, z, up, tol):
    for part in region_parts(region, tol):
        for tri in triangulate_polygon(part[0], part[1:]):
            # triangles come back counter-clockwise seen from +z
            pts = [[p[0], p[1], z] for p in tri]
            vnf_add_face(out, pts if up else list(reversed(pts)))


def vnf_from_region(region: Sequence, z: float = 0.0, reverse: bool = False,
                    tol=DEFAULT_TOLERANCE) -> VNF:
    """Triangulate a region into a flat VNF at height ``z``.  Faces are
    wound counter-clockwise seen from +z unless ``reverse`` is set."""

    rgn = close_region(check_region(region), tol)
    out = VNF(tol=tol)
    _add_region_faces(out, rgn, z, not reverse, tol)
    return out


def vnf_extrude_region(region: Sequence, height: float,
                       tol=DEFAULT_TOLERANCE) -> VNF:
    """Closed solid from ``region`` extruded from ``z=0`` to ``z=height``.

    The result has a bottom and top cap and a side wall for every path,
    with all faces wound counter-clockwise seen from outside.
    """

    if not isgoodnum(height) or height <= 0:
        raise InputShapeError('extrusion height must be positive',
                              {'height': height})
    rgn = orient_region(close_region(check_region(region), tol), tol)
    out = VNF(tol=tol)
    _add_region_faces(out, rgn, 0.0, False, tol)
    _add_region_faces(out, rgn, float(height), True, tol)
    ## material lies to the left of every oriented path, so walls face right
    for path in rgn:
        for a, b in zip(path, path[1:]):
            vnf_add_face(out, [[a[0], a[1], 0.0], [b[0], b[1], 0.0],
                               [b[0], b[1], height], [a[0], a[1], height]])
    return out


__all__ = [
    'STYLES',
    'VNF',
    'vnf',
    'isvnf',
    'vnf_get_vertex',
    'vnf_add_face',
    'vnf_add_faces',
    'vnf_merge',
    'vnf_reverse_faces',
    'vnf_triangulate',
    'vnf_bounds',
    'vnf_vertex_array',
    'vnf_from_region',
    'vnf_extrude_region',
]
