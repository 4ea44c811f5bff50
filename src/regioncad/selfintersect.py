"""Self-intersection finding and path splitting.

``find_self_intersections()`` reports where a path crosses itself,
``split_at_self_crossings()`` cuts the path into open fragments at
those crossings, and ``decompose_path()`` reassembles the outside
fragments into simple loops, turning an arbitrary self-crossing path
into a region.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

from regioncad.assemble import assemble_path_fragments
from regioncad.geom import bbox2, dist, lerp, line_intersection
from regioncad.path import (check_path, deduplicate, point_in_path,
                            segment_path, side_samples, Tag)
from regioncad.tolerance import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Crossing:
    """Where segment ``seg1`` at parameter ``u1`` meets segment ``seg2``
    at parameter ``u2``."""

    point: Tuple[float, float]
    seg1: int
    u1: float
    seg2: int
    u2: float


def _bbox_apart(a1, a2, b1, b2, eps) -> bool:
    ba = bbox2([a1, a2])
    bb = bbox2([b1, b2])
    return (ba[1][0] + eps < bb[0][0] or bb[1][0] + eps < ba[0][0] or
            ba[1][1] + eps < bb[0][1] or bb[1][1] + eps < ba[0][1])


def _param_eps(a, b, eps) -> float:
    ## parameter tolerance equivalent to a distance of ``eps`` along [a, b]
    length = dist(a, b)
    return eps / length if length > eps else 1.0


def _self_intersections(pts, closed, tol) -> List[Crossing]:
    eps = tol.eps
    nseg = len(pts) - 1
    found = []
    for i in range(nseg):
        a1, a2 = pts[i], pts[i + 1]
        for j in range(i + 2, nseg):
            if closed and i == 0 and j == nseg - 1:
                continue
            b1, b2 = pts[j], pts[j + 1]
            if _bbox_apart(a1, a2, b1, b2, eps):
                continue
            hit = line_intersection([a1, a2], [b1, b2], eps)
            if hit is None:
                continue
            pt, t, u = hit
            teps = _param_eps(a1, a2, eps)
            ueps = _param_eps(b1, b2, eps)
            # a crossing exactly at a segment start belongs to the
            # previous segment
            if teps < t <= 1 + teps and ueps < u <= 1 + ueps:
                found.append(Crossing((pt[0], pt[1]), i, min(t, 1.0),
                                      j, min(u, 1.0)))
    found.sort(key=lambda c: (c.seg1, c.u1, c.seg2, c.u2))
    return found


def find_self_intersections(path: Sequence, closed: bool = True,
                            tol=DEFAULT_TOLERANCE) -> List[Crossing]:
    """Return every point where ``path`` crosses itself.

    Adjacent segments (including the last and first segments of a
    closed path) are never compared, and parallel segments are skipped.
    Segment indices refer to ``path`` with an explicit closing point
    when ``closed`` is true.
    """

    pts = segment_path(check_path(path), closed, tol)
    return _self_intersections(pts, closed, tol)


def cut_path(pts: Sequence, cuts: Sequence[Tuple[int, float]], tol) -> List[list]:
    """Cut ``pts`` into open fragments between consecutive cuts.

    ``cuts`` are ``(segment, u)`` positions along ``pts``; the caller
    supplies the start and end bookends.  Fragments are deduplicated
    and fragments of fewer than two points are dropped.
    """

    ordered = sorted(set((s, float(u)) for s, u in cuts))
    fragments = []
    for (s1, u1), (s2, u2) in zip(ordered, ordered[1:]):
        start = lerp(pts[s1], pts[s1 + 1], u1)
        end = lerp(pts[s2], pts[s2 + 1], u2)
        section = [start] + [list(p) for p in pts[s1 + 1:s2 + 1]] + [end]
        section = deduplicate(section, tol)
        if len(section) > 1:
            fragments.append(section)
    return fragments


def split_at_self_crossings(path: Sequence, closed: bool = True,
                            tol=DEFAULT_TOLERANCE) -> List[list]:
    """Split ``path`` into open fragments at each self crossing."""

    pts = segment_path(check_path(path), closed, tol)
    crossings = _self_intersections(pts, closed, tol)
    cuts = [(0, 0.0), (len(pts) - 2, 1.0)]
    for c in crossings:
        cuts.append((c.seg1, c.u1))
        cuts.append((c.seg2, c.u2))
    logger.debug('%d self crossings', len(crossings))
    return cut_path(pts, cuts, tol)


def _tag_self_crossing_subpaths(pts, closed, tol) -> List[Tuple[Tag, list]]:
    tagged = []
    for sub in split_at_self_crossings(pts, closed, tol):
        sides = side_samples(sub[0], sub[1], tol)
        if sides is None:
            continue
        left, right = sides
        lin = point_in_path(left, pts, tol) >= 0
        rin = point_in_path(right, pts, tol) >= 0
        tagged.append((Tag.INSIDE if lin and rin else Tag.OUTSIDE, sub))
    return tagged


def decompose_path(path: Sequence, closed: bool = True,
                   tol=DEFAULT_TOLERANCE) -> List[list]:
    """Decompose a possibly self-crossing path into simple closed loops.

    Fragments with the path's interior on both sides are discarded and
    the remaining boundary fragments are reassembled.  A simple closed
    path comes back as a single loop.
    """

    pts = segment_path(deduplicate(check_path(path), tol), closed, tol)
    kept = [sub for tag, sub in _tag_self_crossing_subpaths(pts, closed, tol)
            if tag == Tag.OUTSIDE]
    return assemble_path_fragments(kept, tol)


def is_path_simple(path: Sequence, closed: bool = True,
                   tol=DEFAULT_TOLERANCE) -> bool:
    """Return ``True`` if ``path`` never crosses itself."""

    return not find_self_intersections(path, closed, tol)


__all__ = [
    'Crossing',
    'find_self_intersections',
    'cut_path',
    'split_at_self_crossings',
    'decompose_path',
    'is_path_simple',
]
