## foundational planar geometry primitives for regionCAD
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

"""foundational geometric primitives for **regionCAD**

====================
OVERVIEW
====================

The regioncad.geom module provides the small, closed-form operations
that the region algebra, offset and mesh modules are built from:
vector arithmetic, line intersection, point/segment distance and
side-of-line tests.

points
======

Points in **regionCAD** are ordinary Python lists of two or three
numbers, *e.g.* ``[x, y]`` or ``[x, y, z]``.  Planar operations read
only the ``x`` and ``y`` components.  There is no homogeneous ``w``
coordinate.

lines
=====

A line is a pair of points ``[p0, p1]``, parameterized over
``0 <= u <= 1`` where ``u=0`` is the first point and ``u=1`` the
second.  ``line_intersection()`` reports the parameters on both lines
so that callers can decide what counts as "inside" a segment.

tolerances
==========

None of these functions supply a default tolerance: comparisons take
an explicit ``eps`` so that one tolerance value is threaded through a
whole computation.  ``epsilon`` is the library-wide default used to
build ``regioncad.tolerance.DEFAULT_TOLERANCE``.

"""

from math import *
import mpmath as mpm

## constants
epsilon = 0.000005
pi2 = 2.0*pi

## extended precision used to re-solve nearly parallel intersections
_MP_DIGITS = 50

## operations on scalars
## ---------------------

def isgoodnum(n):
    """ determine if an argument is actually a scalar number, and not boolean
    """
    return (not isinstance(n,bool)) and isinstance(n,(int,float))

def close(a,b,eps):
    """ are two scalars the same within ``eps``
    """
    return abs(a-b) <= eps

## operations on vectors
## ---------------------

def point2(p):
    """ return a fresh 2D point ``[x, y]`` from any point-like sequence"""
    return [float(p[0]),float(p[1])]

def point3(p):
    """ return a fresh 3D point ``[x, y, z]``; 2D input is lifted to z=0"""
    z = float(p[2]) if len(p) > 2 else 0.0
    return [float(p[0]),float(p[1]),z]

def add(a,b):
    """ vector ``a + b``, component-wise over the length of ``a``"""
    return [a[i]+b[i] for i in range(len(a))]

def sub(a,b):
    """ vector ``a - b``, component-wise over the length of ``a``"""
    return [a[i]-b[i] for i in range(len(a))]

def scale(a,c):
    """ vector ``a`` times scalar ``c``"""
    return [x*c for x in a]

def dot(a,b):
    return sum(a[i]*b[i] for i in range(min(len(a),len(b))))

def mag(a):
    """ magnitude of vector ``a``"""
    return sqrt(dot(a,a))

def dist(a,b):
    """ euclidean distance between points ``a`` and ``b``"""
    n = min(len(a),len(b))
    return sqrt(sum((a[i]-b[i])**2 for i in range(n)))

def vclose(a,b,eps):
    """ are two points the same to within ``eps``"""
    return dist(a,b) <= eps

def cross2(a,b):
    """ 2D determinant (z component of the cross product) of ``a`` and ``b``"""
    return a[0]*b[1] - a[1]*b[0]

def cross(a,b):
    """ 3D cross product ``a x b``; missing z components are treated as zero"""
    az = a[2] if len(a) > 2 else 0.0
    bz = b[2] if len(b) > 2 else 0.0
    return [ a[1]*bz - az*b[1],
             az*b[0] - a[0]*bz,
             a[0]*b[1] - a[1]*b[0] ]

def unit(a,eps):
    """ return ``a`` scaled to unit length, or ``None`` if it is shorter than ``eps``"""
    m = mag(a)
    if m <= eps:
        return None
    return [x/m for x in a]

def left_normal(p1,p2,eps):
    """unit normal pointing to the left of travel from ``p1`` to ``p2``,
    or ``None`` for a zero-length segment"""
    return unit([p1[1]-p2[1],p2[0]-p1[0]],eps)

def lerp(a,b,u):
    """ point at parameter ``u`` along the line from ``a`` to ``b``"""
    return [a[i]+u*(b[i]-a[i]) for i in range(len(a))]

def mean(points):
    n = len(points)
    dim = len(points[0])
    return [sum(p[i] for p in points)/n for i in range(dim)]

def bbox2(points):
    """ 2D bounding box ``[[xmin, ymin], [xmax, ymax]]`` of ``points``"""
    xs = [p[0] for p in points]
    ys = [p[1] for p in points]
    return [[min(xs),min(ys)],[max(xs),max(ys)]]

## angles
## ------

def modang(a):
    """ wrap an angle in radians into the interval ``(-pi, pi]``"""
    a = fmod(a,pi2)
    if a <= -pi:
        a += pi2
    elif a > pi:
        a -= pi2
    return a

def vector_angle(v1,v2):
    """ unsigned angle in radians between 2D vectors ``v1`` and ``v2``"""
    return abs(atan2(cross2(v1,v2),dot(v1[:2],v2[:2])))

## lines and segments
## ------------------

def _mp_params(x1,y1,x2,y2,x3,y3,x4,y4):
    ## re-solve a nearly parallel intersection at extended precision
    with mpm.workdps(_MP_DIGITS):
        X1,Y1,X2,Y2 = mpm.mpf(x1),mpm.mpf(y1),mpm.mpf(x2),mpm.mpf(y2)
        X3,Y3,X4,Y4 = mpm.mpf(x3),mpm.mpf(y3),mpm.mpf(x4),mpm.mpf(y4)
        denom = (X1-X2)*(Y3-Y4)-(Y1-Y2)*(X3-X4)
        if denom == 0:
            return None
        t = ((X1-X3)*(Y3-Y4) - (Y1-Y3)*(X3-X4))/denom
        u = -1 * ((X1-X2)*(Y1-Y3) - (Y1-Y2)*(X1-X3))/denom
        return float(t),float(u)

def line_intersection(l1,l2,eps):
    """Compute the intersection of the infinite lines through ``l1`` and
    ``l2`` in the XY plane.

    Returns ``(point, t, u)`` where ``t`` and ``u`` are the parameters of
    the intersection on ``l1`` and ``l2`` respectively, or ``None`` if
    the lines are parallel (the sine of the angle between them is below
    ``eps``).  Nearly parallel pairs are re-solved with ``mpmath`` to
    keep the parameters stable.
    """

    x1,y1 = l1[0][0],l1[0][1]
    x2,y2 = l1[1][0],l1[1][1]
    x3,y3 = l2[0][0],l2[0][1]
    x4,y4 = l2[1][0],l2[1][1]

    len1 = hypot(x2-x1,y2-y1)
    len2 = hypot(x4-x3,y4-y3)
    if len1 <= eps or len2 <= eps:
        return None

    ## do lines intersect anywhere?
    denom=(x1-x2)*(y3-y4)-(y1-y2)*(x3-x4)
    scl = len1*len2
    if abs(denom) <= eps*scl:
        return None

    if abs(denom) < sqrt(eps)*scl:
        params = _mp_params(x1,y1,x2,y2,x3,y3,x4,y4)
        if params is None:
            return None
        t,u = params
    else:
        t = ((x1-x3)*(y3-y4) - (y1-y3)*(x3-x4))/denom
        u = -1 * ((x1-x2)*(y1-y3) - (y1-y2)*(x1-x3))/denom

    return [x1 + t*(x2-x1), y1 + t*(y2-y1)], t, u

def segment_param(p,a,b):
    """ parameter of the projection of ``p`` onto the line through ``a`` and ``b``"""
    d = sub(b[:2],a[:2])
    dd = dot(d,d)
    if dd == 0:
        return 0.0
    return dot(sub(p[:2],a[:2]),d)/dd

def point_segment_distance(p,a,b):
    """ distance from point ``p`` to the closed segment ``[a, b]``"""
    u = segment_param(p,a,b)
    if u <= 0.0:
        return dist(p[:2],a[:2])
    if u >= 1.0:
        return dist(p[:2],b[:2])
    return dist(p[:2],lerp(a[:2],b[:2],u))

def is_point_on_segment(p,a,b,eps):
    """ does ``p`` lie within ``eps`` of the segment ``[a, b]``"""
    return point_segment_distance(p,a,b) <= eps

def point_left_of_line(p,a,b,eps):
    """Return 1 if ``p`` lies to the left of the directed line ``a -> b``,
    -1 if to the right, and 0 if it is within ``eps`` of the line.
    """
    d = sub(b[:2],a[:2])
    m = mag(d)
    if m <= eps:
        return 0
    side = cross2(d,sub(p[:2],a[:2]))/m
    if side > eps:
        return 1
    if side < -eps:
        return -1
    return 0
