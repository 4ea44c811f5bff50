"""Parallel offsets of paths and regions.

``offset()`` moves every edge of a path sideways by a signed distance,
discards shifted edges that have folded back over the original path,
and rejoins the survivors at their line intersections.  Outside
corners can be kept sharp, rounded with an arc about the original
vertex, or cut with a chamfer.

Closed paths are treated as if they were clockwise, so a positive
distance always grows the enclosed area.  For open paths a positive
distance moves the path to the left of its direction of travel.
Regions are offset one constituent path at a time and recombined with
boolean union and difference so islands and holes interact correctly.

Optionally the side-wall faces joining the original vertices to the
offset vertices are returned as well, ready to be added to a VNF.
"""

from __future__ import annotations

import logging
from math import atan2, ceil, cos, sin
from typing import List, Optional, Sequence

from regioncad.combine import difference, union
from regioncad.errors import (AntiparallelCornerError, DegenerateGeometryError,
                              DegenerateOffsetError, InputShapeError)
from regioncad.geom import (add, dist, dot, isgoodnum, left_normal, lerp,
                            line_intersection, modang, point_left_of_line,
                            point_segment_distance, scale, sub, unit, vclose,
                            vector_angle)
from regioncad.path import (as_geometric_input, is_clockwise, is_closed,
                            nesting_depths, open_path, signed_area)
from regioncad.tolerance import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)


def _shift_segment(a, b, d, tol):
    n = left_normal(a, b, tol.eps)
    if n is None:
        raise DegenerateGeometryError('zero length edge in offset path',
                                      {'start': list(a), 'end': list(b)})
    shift = scale(n, d)
    return [add(a, shift), add(b, shift)]


def _path_distance(p, segs) -> float:
    return min(point_segment_distance(p, a, b) for a, b in segs)


def _good_segments(segs, shifted, d, quality, tol) -> List[bool]:
    """A shifted segment is good if at least one sample along it is no
    closer than ``|d|`` to the original path.  Interior samples are
    tried first, then the endpoints."""

    alphas = [i / (quality + 1) for i in range(1, quality + 1)] + [0.0, 1.0]
    limit = abs(d) - tol.eps
    good = []
    for s in shifted:
        good.append(any(_path_distance(lerp(s[0], s[1], u), segs) >= limit
                        for u in alphas))
    return good


def _segment_extension(s1, s2, tol):
    if vclose(s1[1], s2[0], tol.eps):
        return list(s1[1])
    hit = line_intersection(s1, s2, tol.eps)
    if hit is not None:
        return hit[0]
    ## parallel: only a straight continuation along one line is joinable
    if (dot(sub(s1[1], s1[0]), sub(s2[1], s2[0])) > 0 and
            point_left_of_line(s2[0], s1[0], s1[1], tol.eps) == 0):
        return list(s1[1])
    raise AntiparallelCornerError('consecutive offset segments are parallel',
                                  {'incoming': s1, 'outgoing': s2})


def _outside_corner(prev, cur, corner) -> bool:
    ## the corner lies past the end of the incoming segment and before
    ## the start of the outgoing one
    return (dot(sub(cur[1], cur[0]), sub(cur[0], corner)) > 0 and
            dot(sub(prev[1], prev[0]), sub(corner, prev[1])) > 0)


def _corner_arc(center, a, b, steps) -> list:
    a0 = atan2(a[1] - center[1], a[0] - center[0])
    a1 = atan2(b[1] - center[1], b[0] - center[0])
    sweep = modang(a1 - a0)
    rad = dist(center, a)
    arc = [list(a)]
    for i in range(1, steps):
        ang = a0 + sweep * i / steps
        arc.append([center[0] + rad * cos(ang), center[1] + rad * sin(ang)])
    arc.append(list(b))
    return arc


def _chamfer_corner(center, prev, cur, corner, d, tol) -> list:
    ## cut the corner with the tangent to the radius |d| circle that is
    ## perpendicular to the corner bisector
    u = unit(sub(corner, center), tol.eps)
    if u is None:
        return [corner]
    p0 = add(center, scale(u, abs(d)))
    cut = [p0, add(p0, [-u[1], u[0]])]
    h1 = line_intersection(cut, prev, tol.eps)
    h2 = line_intersection(cut, cur, tol.eps)
    if h1 is None or h2 is None:
        return [corner]
    return [h1[0], h2[0]]


def _offset_faces(lenlist, closed, base, flip) -> List[list]:
    """Side-wall faces from the original vertices (indexed from
    ``base``) to the offset vertices (indexed from ``base + n``).
    ``lenlist[k]`` is the number of offset vertices generated for
    original vertex ``k``."""

    n = len(lenlist)
    ns = sum(lenlist)
    obase = base + n
    faces = []
    s = 0
    for k in range(n if closed else n - 1):
        k1 = (k + 1) % n
        cnt = lenlist[k]
        if cnt == 0:
            # vertex dropped from the offset: fan to the next offset vertex
            faces.append([obase + s % ns, base + k, base + k1])
        else:
            for i in range(cnt - 1):
                faces.append([base + k, obase + s + i + 1, obase + s + i])
            faces.append([base + k, base + k1,
                          obase + (s + cnt) % ns, obase + s + cnt - 1])
        s += cnt
    if flip:
        faces = [list(reversed(f)) for f in faces]
    return faces


def _offset_path(path, d, mode, closed, check_valid, quality, maxstep, tol):
    """Offset the vertex list ``path`` (no closing point) by signed
    distance ``d`` along the left normal.  Returns the offset vertex
    list and the per-vertex counts used for face generation."""

    n = len(path)
    segs = [[path[i], path[(i + 1) % n]] for i in range(n if closed else n - 1)]
    shifted = [_shift_segment(a, b, d, tol) for a, b in segs]
    if check_valid:
        good = _good_segments(segs, shifted, d, quality, tol)
    else:
        good = [True] * len(shifted)
    keep = [i for i, g in enumerate(good) if g]
    if len(keep) < len(good):
        logger.debug('dropped %d of %d offset segments',
                     len(good) - len(keep), len(good))
    if not keep or (closed and len(keep) < 3):
        raise DegenerateOffsetError('offset of path is degenerate',
                                    {'delta': d, 'segments': len(segs),
                                     'surviving': len(keep)})

    goodsegs = [shifted[i] for i in keep]
    goodpath = [path[i] for i in keep]
    groups = []
    for i in range(len(goodsegs)):
        if i == 0 and not closed:
            groups.append([list(goodsegs[0][0])])
            continue
        prev, cur = goodsegs[i - 1], goodsegs[i]
        corner = _segment_extension(prev, cur, tol)
        group = [corner]
        if mode != 'sharp' and _outside_corner(prev, cur, corner):
            if mode == 'chamfer':
                group = _chamfer_corner(goodpath[i], prev, cur, corner, d, tol)
            else:
                angle = vector_angle(sub(prev[1], goodpath[i]),
                                     sub(cur[0], goodpath[i]))
                steps = int(ceil(abs(d) * angle / maxstep))
                if steps > 2:
                    group = _corner_arc(goodpath[i], prev[1], cur[0], steps)
        groups.append(group)
    if not closed:
        groups.append([list(goodsegs[-1][1])])

    lenlist = [0] * n
    for i, k in enumerate(keep):
        lenlist[k] = len(groups[i])
    if not closed:
        lenlist[n - 1] = 1
    points = [p for g in groups for p in g]
    if closed and abs(signed_area(points)) <= tol.eps:
        raise DegenerateOffsetError('closed offset encloses no area',
                                    {'delta': d, 'points': len(points)})
    return points, lenlist


def _signed_distance(path, amount, closed):
    ## closed paths offset as if clockwise
    if closed and not is_clockwise(path):
        return -amount
    return amount


def _offset_region(region, amount, mode, check_valid, quality, maxstep, tol):
    depths = nesting_depths(region, tol)
    order = sorted(range(len(region)), key=lambda i: depths[i])
    acc = []
    for i in order:
        path = open_path(region[i], tol)
        island = depths[i] % 2 == 0
        amt = amount if island else -amount
        try:
            points, _ = _offset_path(path, _signed_distance(path, amt, True),
                                     mode, True, check_valid, quality,
                                     maxstep, tol)
        except DegenerateOffsetError:
            logger.debug('offset of %s at depth %d collapsed',
                         'island' if island else 'hole', depths[i])
            continue
        piece = [points + [list(points[0])]]
        if island:
            acc = union(acc, piece, tol=tol)
        else:
            acc = difference(acc, piece, tol=tol)
    if region and not acc:
        raise DegenerateOffsetError('offset of region is empty',
                                    {'amount': amount, 'paths': len(region)})
    return acc


def offset(geom: Sequence, r: Optional[float] = None,
           delta: Optional[float] = None, *, chamfer: bool = False,
           closed: bool = False, check_valid: bool = True, quality: int = 1,
           maxstep: float = 0.1, return_faces: bool = False,
           firstface_index: int = 0, flip_faces: bool = False,
           tol=DEFAULT_TOLERANCE):
    """Offset a path or region.

    Give exactly one of ``r`` (rounded outside corners) or ``delta``
    (sharp outside corners, or chamfered ones with ``chamfer=True``).
    ``closed`` treats a path as closed even without a closing point.
    ``quality`` sets the number of interior samples per segment used by
    the validity check, and ``maxstep`` the longest arc step for
    rounded corners.

    A path input returns a path (closed paths carry their closing
    point).  A region input returns a region.  With ``return_faces``
    a path input returns ``(edges, faces)``: ``edges`` is the offset
    vertex list without a closing point, and ``faces`` index the
    original vertices from ``firstface_index`` and the offset vertices
    from ``firstface_index + n``, where ``n`` is the number of original
    vertices.

    ``DegenerateOffsetError`` is raised when the offset collapses: no
    segment survives, a closed offset encloses no area, or nothing is
    left of a non-empty region.
    """

    if (r is None) == (delta is None):
        raise InputShapeError('exactly one of r and delta is required',
                              {'r': r, 'delta': delta})
    amount = r if r is not None else delta
    if not isgoodnum(amount):
        raise InputShapeError('offset amount must be a number',
                              {'amount': amount})
    if r is not None and chamfer:
        raise InputShapeError('chamfer requires delta, not r', {'r': r})
    if not isinstance(quality, int) or isinstance(quality, bool) or quality < 0:
        raise InputShapeError('quality must be a non-negative integer',
                              {'quality': quality})
    if not isgoodnum(maxstep) or maxstep <= 0:
        raise InputShapeError('maxstep must be positive', {'maxstep': maxstep})
    if r is not None:
        mode = 'round'
    else:
        mode = 'chamfer' if chamfer else 'sharp'

    kind, val = as_geometric_input(geom)
    if kind == 'region':
        if return_faces:
            raise InputShapeError('return_faces requires a path, not a region')
        return _offset_region(val, amount, mode, check_valid, quality,
                              maxstep, tol)

    closed = closed or is_closed(val, tol)
    path = open_path(val, tol) if closed else val
    if closed and len(path) < 3:
        raise InputShapeError('closed path needs at least three vertices',
                              {'length': len(path)})
    points, lenlist = _offset_path(path, _signed_distance(path, amount, closed),
                                   mode, closed, check_valid, quality,
                                   maxstep, tol)
    if return_faces:
        return points, _offset_faces(lenlist, closed, firstface_index,
                                     flip_faces)
    if closed:
        return points + [list(points[0])]
    return points


__all__ = ['offset']
