## path and region representation for regionCAD
## Copyright (c) 2026 regionCAD contributors

# Permission is hereby granted, free of charge, to any person
# obtaining a copy of this software and associated documentation files
# (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge,
# publish, distribute, sublicense, and/or sell copies of the Software,
# and to permit persons to whom the Software is furnished to do so,
# subject to the following conditions:
#
# The above copyright notice and this permission notice shall be
# included in all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND,
# EXPRESS OR IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF
# MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS
# BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER LIABILITY, WHETHER IN AN
# ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT OF OR IN
# CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

"""paths and regions for **regionCAD**

paths
=====

A path is a list of two or more points.  A path is *closed* when its
first and last points coincide to within the tolerance ``eps``; there
is no separate flag or type for closed paths.  Closed paths stored in
regions always repeat their first point at the end, *e.g.* ::

   square = [[0,0],[10,0],[10,10],[0,10],[0,0]]

regions
=======

A region is a list of closed paths.  Which paths are islands and which
are holes is never declared: it is inferred from how deeply each path
is nested inside the others.  ``[]`` is the empty region.

Membership tests (``point_in_path()``, ``point_in_region()``) return
``1`` for inside, ``-1`` for outside and ``0`` for a point on the
boundary, to within ``eps``.  They assume simple, non-overlapping
constituent paths.

"""

from enum import Enum

from regioncad.errors import InputShapeError
from regioncad.geom import *


class Tag(str, Enum):
    """Classification of a path fragment relative to a reference region.

    Defined here rather than in ``regioncad.tagging`` because both the
    self-intersector and the region tagger label fragments with it, and
    the tagger itself imports the self-intersector.
    """

    OUTSIDE = 'O'
    INSIDE = 'I'
    SHARED = 'S'       # on the boundary, material on the same side
    UNMATCHED = 'U'    # on the boundary, material on opposite sides


## argument checking
## -----------------

def ispoint(p):
    """ is ``p`` a 2D or 3D point"""
    return isinstance(p,(list,tuple)) and len(p) in (2,3) and \
        all(isgoodnum(x) for x in p)

def ispath(x):
    """ is ``x`` a list of two or more uniformly dimensioned points"""
    if not isinstance(x,(list,tuple)) or len(x) < 2:
        return False
    if not all(ispoint(p) for p in x):
        return False
    return len(set(len(p) for p in x)) == 1

def isregion(x):
    """ is ``x`` a (possibly empty) list of paths"""
    return isinstance(x,(list,tuple)) and all(ispath(p) for p in x)

def check_path(path):
    """Validate ``path`` and return a fresh copy as a list of 2D points.
    Raises ``InputShapeError`` for anything that is not a path."""
    if not isinstance(path,(list,tuple)):
        raise InputShapeError('path must be a list of points',
                              {'type': type(path).__name__})
    if len(path) < 2:
        raise InputShapeError('path must have at least two points',
                              {'length': len(path)})
    for i,p in enumerate(path):
        if not ispoint(p):
            raise InputShapeError('bad point in path',{'index': i})
    dims = set(len(p) for p in path)
    if len(dims) != 1:
        raise InputShapeError('path points are not uniformly dimensioned',
                              {'dimensions': sorted(dims)})
    return [point2(p) for p in path]

def check_region(region):
    """Validate ``region`` and return a copy as a list of 2D paths."""
    if not isinstance(region,(list,tuple)):
        raise InputShapeError('region must be a list of paths',
                              {'type': type(region).__name__})
    dims = set()
    for p in region:
        if isinstance(p,(list,tuple)):
            dims.update(len(q) for q in p if isinstance(q,(list,tuple)))
    if len(dims) > 1:
        raise InputShapeError('region paths are not uniformly dimensioned',
                              {'dimensions': sorted(dims)})
    return [check_path(p) for p in region]

def as_geometric_input(obj):
    """Resolve a path-or-region argument once, at the API boundary.

    Returns ``('path', path)`` or ``('region', region)`` with validated
    2D copies of the input.  A list whose first entry is a point is a
    path, a list whose first entry is a list of points is a region, and
    an empty list is the empty region.
    """
    if not isinstance(obj,(list,tuple)):
        raise InputShapeError('expected a path or region',
                              {'type': type(obj).__name__})
    if len(obj) == 0:
        return 'region',[]
    first = obj[0]
    if isinstance(first,(list,tuple)) and len(first) > 0 and \
       isgoodnum(first[0]):
        return 'path',check_path(obj)
    return 'region',check_region(obj)

def as_region(obj,tol):
    """ resolve ``obj`` as a region of closed paths"""
    kind,val = as_geometric_input(obj)
    if kind == 'path':
        return [close_path(val,tol)]
    return close_region(val,tol)

## closure and cleanup
## -------------------

def is_closed(path,tol):
    """ does the path end where it started"""
    return len(path) > 2 and vclose(path[0],path[-1],tol.eps)

def close_path(path,tol):
    """ return ``path`` with an explicit closing point"""
    if is_closed(path,tol):
        return list(path)
    return list(path) + [list(path[0])]

def open_path(path,tol):
    """ return ``path`` without its closing point, if it has one"""
    if is_closed(path,tol):
        return list(path[:-1])
    return list(path)

def close_region(region,tol):
    return [close_path(p,tol) for p in region]

def deduplicate(path,tol,closed=False):
    """Remove consecutive points that coincide within ``eps``.  If
    ``closed`` is true, a final point equal to the first is removed as
    well."""
    out = []
    for p in path:
        if out and vclose(out[-1],p,tol.eps):
            continue
        out.append(p)
    if closed and len(out) > 1 and vclose(out[0],out[-1],tol.eps):
        out.pop()
    return out

def segment_path(path,closed,tol):
    """Return ``path`` as a list of points whose consecutive pairs are
    exactly the segments to process: a closed path gets an explicit
    closing point, an open path is returned unchanged."""
    if closed:
        return close_path(path,tol)
    return list(path)

def path_segments(path,closed,tol):
    pts = segment_path(path,closed,tol)
    return [[pts[i],pts[i+1]] for i in range(len(pts)-1)]

## orientation and measure
## -----------------------

def signed_area(path):
    """Signed area of a closed path, positive for counter-clockwise.  The
    closing segment is implied, so explicitly closed and implicitly
    closed paths give the same answer."""
    total = 0.0
    n = len(path)
    for i in range(n):
        x1,y1 = path[i][0],path[i][1]
        x2,y2 = path[(i+1) % n][0],path[(i+1) % n][1]
        total += (x1 * y2) - (x2 * y1)
    return 0.5 * total

def is_clockwise(path):
    return signed_area(path) < 0

def reverse_path(path):
    return list(reversed(path))

def clockwise_path(path):
    """ return ``path`` traversed clockwise"""
    return reverse_path(path) if signed_area(path) > 0 else list(path)

def ccw_path(path):
    """ return ``path`` traversed counter-clockwise"""
    return reverse_path(path) if signed_area(path) < 0 else list(path)

def path_length(path,closed=False):
    n = len(path)
    total = sum(dist(path[i],path[i+1]) for i in range(n-1))
    if closed:
        total += dist(path[-1],path[0])
    return total

## membership
## ----------

def point_in_path(p,path,tol):
    """Winding-number membership of ``p`` in the closed path ``path``.

    Returns 1 inside, -1 outside and 0 if ``p`` is within ``eps`` of the
    boundary.
    """
    n = len(path)
    for i in range(n):
        a = path[i]
        b = path[(i+1) % n]
        if point_segment_distance(p,a,b) <= tol.eps:
            return 0
    x,y = p[0],p[1]
    wn = 0
    for i in range(n):
        a = path[i]
        b = path[(i+1) % n]
        side = (b[0]-a[0])*(y-a[1]) - (x-a[0])*(b[1]-a[1])
        if a[1] <= y:
            if b[1] > y and side > 0:
                wn += 1
        elif b[1] <= y and side < 0:
            wn -= 1
    return 1 if wn != 0 else -1

def point_in_region(p,region,tol):
    """Membership of ``p`` in ``region`` by containment parity.

    Returns 1 if ``p`` lies inside an odd number of the region's paths,
    -1 if it lies inside an even number, and 0 if it is on any boundary.
    """
    count = 0
    for path in region:
        rel = point_in_path(p,path,tol)
        if rel == 0:
            return 0
        if rel > 0:
            count += 1
    return 1 if count % 2 == 1 else -1

def _path_inside(inner,outer,tol):
    ## first vertex of ``inner`` that is clear of the boundary of
    ## ``outer`` decides; coincident paths are not nested
    for p in inner:
        rel = point_in_path(p,outer,tol)
        if rel != 0:
            return rel > 0
    for i in range(len(inner)-1):
        rel = point_in_path(lerp(inner[i],inner[i+1],0.5),outer,tol)
        if rel != 0:
            return rel > 0
    return False

def side_samples(a,b,tol):
    """Return two points a small step to the left and to the right of
    the midpoint of segment ``[a, b]``, or ``None`` if it has no length.
    The step never exceeds a quarter of the segment length nor drops
    below a few ``eps``."""
    n = left_normal(a,b,tol.eps)
    if n is None:
        return None
    step = min(tol.side_step,0.25*dist(a,b))
    step = max(step,4.0*tol.eps)
    mp = lerp(a[:2],b[:2],0.5)
    return add(mp,scale(n,step)),sub(mp,scale(n,step))

def nesting_depths(region,tol):
    """ number of other paths of ``region`` that enclose each path"""
    depths = []
    for i,inner in enumerate(region):
        depth = 0
        for j,outer in enumerate(region):
            if i != j and _path_inside(inner,outer,tol):
                depth += 1
        depths.append(depth)
    return depths

def orient_region(region,tol):
    """Orient every path so the region's material lies to its left:
    islands (even depth) counter-clockwise, holes (odd depth)
    clockwise."""
    depths = nesting_depths(region,tol)
    return [ccw_path(p) if d % 2 == 0 else clockwise_path(p)
            for p,d in zip(region,depths)]

def region_parts(region,tol):
    """Group ``region`` into islands with their holes.  Returns a list
    of ``[outer, hole, ...]`` lists, one per island; islands nested
    inside holes form groups of their own."""
    depths = nesting_depths(region,tol)
    parts = []
    for i,p in enumerate(region):
        if depths[i] % 2:
            continue
        holes = [h for j,h in enumerate(region)
                 if depths[j] == depths[i]+1 and _path_inside(h,p,tol)]
        parts.append([p] + holes)
    return parts

def region_area(region,tol):
    """ area enclosed by a region, holes subtracted"""
    total = 0.0
    for p,d in zip(region,nesting_depths(region,tol)):
        a = abs(signed_area(p))
        total += a if d % 2 == 0 else -a
    return total


__all__ = [
    'Tag', 'ispoint', 'ispath', 'isregion', 'check_path', 'check_region',
    'as_geometric_input', 'as_region', 'is_closed', 'close_path',
    'open_path', 'close_region', 'deduplicate', 'segment_path',
    'path_segments', 'signed_area', 'is_clockwise', 'reverse_path',
    'clockwise_path', 'ccw_path', 'path_length', 'point_in_path',
    'point_in_region', 'side_samples', 'nesting_depths', 'orient_region',
    'region_parts', 'region_area',
]
