"""Split paths where they meet a region and classify the pieces.

Every fragment of a path cut at its crossings with another region's
boundary lies entirely outside that region, entirely inside it, or
along its boundary.  Boundary fragments are further split into
*shared* (both regions have their material on the same side) and
*unmatched* (material on opposite sides).  The four boolean operators
differ only in which of these tags they keep.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import List, Sequence, Tuple

from regioncad.geom import (dist, is_point_on_segment, lerp,
                            line_intersection, segment_param)
from regioncad.path import (Tag, check_path, check_region, close_region,
                            path_length, point_in_path, point_in_region,
                            segment_path, side_samples, signed_area)
from regioncad.selfintersect import _bbox_apart, _param_eps, cut_path
from regioncad.tolerance import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)


def _region_crossings(pts, region, tol) -> List[Tuple[int, float]]:
    eps = tol.eps
    found = []
    for i in range(len(pts) - 1):
        a1, a2 = pts[i], pts[i + 1]
        teps = _param_eps(a1, a2, eps)
        for rpath in region:
            for j in range(len(rpath) - 1):
                b1, b2 = rpath[j], rpath[j + 1]
                if _bbox_apart(a1, a2, b1, b2, eps):
                    continue
                hit = line_intersection([a1, a2], [b1, b2], eps)
                if hit is None:
                    # collinear overlap: cut where the other edge ends
                    for q in (b1, b2):
                        if is_point_on_segment(q, a1, a2, eps):
                            u = segment_param(q, a1, a2)
                            found.append((i, min(max(u, 0.0), 1.0)))
                    continue
                _, t, u = hit
                ueps = _param_eps(b1, b2, eps)
                if -teps <= t <= 1 + teps and -ueps <= u <= 1 + ueps:
                    found.append((i, min(max(t, 0.0), 1.0)))
    return sorted(found)


def region_path_crossings(path: Sequence, region: Sequence, closed: bool = True,
                          tol=DEFAULT_TOLERANCE) -> List[Tuple[int, float]]:
    """Return sorted ``(segment, u)`` positions where ``path`` meets
    the boundary of ``region``."""

    pts = segment_path(check_path(path), closed, tol)
    rgn = close_region(check_region(region), tol)
    return _region_crossings(pts, rgn, tol)


def _split(pts, region, tol) -> List[list]:
    cuts = [(0, 0.0), (len(pts) - 2, 1.0)] + _region_crossings(pts, region, tol)
    return cut_path(pts, cuts, tol)


def split_path_at_region_crossings(path: Sequence, region: Sequence,
                                   closed: bool = True,
                                   tol=DEFAULT_TOLERANCE) -> List[list]:
    """Cut ``path`` into open fragments wherever it meets ``region``."""

    pts = segment_path(check_path(path), closed, tol)
    rgn = close_region(check_region(region), tol)
    return _split(pts, rgn, tol)


def _fragment_midpoint(sub):
    """ point halfway along ``sub`` by arc length"""
    half = 0.5 * path_length(sub)
    for a, b in zip(sub, sub[1:]):
        seg = dist(a, b)
        if seg > 0 and seg >= half:
            return lerp(a, b, half / seg)
        half -= seg
    return lerp(sub[-2], sub[-1], 0.5)


def _tag_subpaths(pts, region, tol) -> List[Tuple[Tag, list]]:
    own_ccw = signed_area(pts) > 0
    tagged = []
    for sub in _split(pts, region, tol):
        rel = point_in_region(_fragment_midpoint(sub), region, tol)
        if rel < 0:
            tagged.append((Tag.OUTSIDE, sub))
        elif rel > 0:
            tagged.append((Tag.INSIDE, sub))
        else:
            ## a boundary fragment runs along the boundary throughout, so
            ## its longest edge gives the clearest side samples
            a, b = max(zip(sub, sub[1:]), key=lambda e: dist(e[0], e[1]))
            sides = side_samples(a, b, tol)
            if sides is None:
                continue
            left = sides[0]
            # the material of a counter-clockwise path is inside it, of
            # a clockwise path outside it
            own = (point_in_path(left, pts, tol) > 0) == own_ccw
            other = point_in_region(left, region, tol) > 0
            tagged.append((Tag.SHARED if own == other else Tag.UNMATCHED, sub))
    return tagged


def tag_subpaths(path: Sequence, region: Sequence, closed: bool = True,
                 tol=DEFAULT_TOLERANCE) -> List[Tuple[Tag, list]]:
    """Split ``path`` at its crossings with ``region`` and tag each
    fragment ``O``, ``I``, ``S`` or ``U`` (see :class:`Tag`)."""

    pts = segment_path(check_path(path), closed, tol)
    rgn = close_region(check_region(region), tol)
    return _tag_subpaths(pts, rgn, tol)


def tag_region_subpaths(region1: Sequence, region2: Sequence,
                        tol) -> List[Tuple[Tag, list]]:
    """Tag the fragments of every path of ``region1`` against
    ``region2``.  Both regions must already be closed."""

    tagged = []
    for path in region1:
        tagged.extend(_tag_subpaths(path, region2, tol))
    if logger.isEnabledFor(logging.DEBUG):
        counts = Counter(tag.value for tag, _ in tagged)
        logger.debug('tagged fragments: %s', dict(counts))
    return tagged


__all__ = [
    'region_path_crossings',
    'split_path_at_region_crossings',
    'tag_subpaths',
    'tag_region_subpaths',
]
