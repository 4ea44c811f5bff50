## regionCAD boolean operations on planar regions
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

"""boolean set operations on regions for **regionCAD**

Each pairwise operation splits the boundaries of both operands where
they cross, tags every fragment against the other operand, keeps the
fragments the operation calls for and reassembles them into closed
loops.  Operations on more than two operands fold left to right.

Operands may be regions or bare closed paths.
"""

import logging

from regioncad.assemble import assemble_path_fragments
from regioncad.errors import InputShapeError
from regioncad.path import (Tag, as_region, close_region, is_closed,
                            orient_region, signed_area)
from regioncad.tagging import tag_region_subpaths
from regioncad.tolerance import DEFAULT_TOLERANCE

logger = logging.getLogger(__name__)

## tags kept from the first and from the second operand
_KEEP = {
    'union': ((Tag.OUTSIDE, Tag.SHARED), (Tag.OUTSIDE,)),
    'difference': ((Tag.OUTSIDE, Tag.UNMATCHED), (Tag.INSIDE,)),
    'intersection': ((Tag.INSIDE, Tag.SHARED), (Tag.INSIDE,)),
}

OPERATIONS = ('union', 'difference', 'intersection', 'xor')


def _good_loop(path, tol):
    return (is_closed(path, tol) and len(path) >= 4 and
            abs(signed_area(path)) > tol.eps)


def _tagged_region(region1, region2, keep1, keep2, tol):
    r1 = orient_region(close_region(region1, tol), tol)
    r2 = orient_region(close_region(region2, tol), tol)
    kept = [sub for tag, sub in tag_region_subpaths(r1, r2, tol)
            if tag in keep1]
    kept += [sub for tag, sub in tag_region_subpaths(r2, r1, tol)
             if tag in keep2]
    loops = assemble_path_fragments(kept, tol)
    result = [p for p in loops if _good_loop(p, tol)]
    if len(result) != len(loops):
        logger.debug('dropped %d degenerate loops', len(loops) - len(result))
    return result


def _combine(a, b, operation, tol):
    if operation == 'xor':
        return _tagged_region(_combine(a, b, 'difference', tol),
                              _combine(b, a, 'difference', tol),
                              *_KEEP['union'], tol)
    keep1, keep2 = _KEEP[operation]
    return _tagged_region(a, b, keep1, keep2, tol)


def combine_regions(a, b, operation, tol=DEFAULT_TOLERANCE):
    """Apply one pairwise boolean ``operation`` to ``a`` and ``b``.

    ``operation`` is one of ``'union'``, ``'difference'``,
    ``'intersection'`` or ``'xor'``.
    """

    if operation not in OPERATIONS:
        raise InputShapeError('invalid boolean operation',
                              {'operation': operation})
    return _combine(as_region(a, tol), as_region(b, tol), operation, tol)


def _fold(operation, regions, tol):
    if not regions:
        return []
    acc = as_region(regions[0], tol)
    for other in regions[1:]:
        acc = _combine(acc, as_region(other, tol), operation, tol)
    return acc


def union(*regions, tol=DEFAULT_TOLERANCE):
    """ region covered by any of ``regions``"""
    return _fold('union', regions, tol)


def difference(*regions, tol=DEFAULT_TOLERANCE):
    """ the first region with every following region removed"""
    return _fold('difference', regions, tol)


def intersection(*regions, tol=DEFAULT_TOLERANCE):
    """ region covered by all of ``regions``"""
    return _fold('intersection', regions, tol)


def exclusive_or(*regions, tol=DEFAULT_TOLERANCE):
    """Symmetric difference, folded left to right: a point is in the
    result if it is covered by an odd number of ``regions``."""
    return _fold('xor', regions, tol)


xor = exclusive_or


__all__ = [
    'OPERATIONS',
    'combine_regions',
    'union',
    'difference',
    'intersection',
    'exclusive_or',
    'xor',
]
