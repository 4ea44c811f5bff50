"""Reassemble closed loops from a bag of open path fragments.

The fragments produced by splitting paths at their crossings form a
planar arrangement.  Loops are traced greedily: starting from a
fragment, the walk repeatedly continues with the fragment whose first
edge makes the most extreme turn (rightmost or leftmost) relative to
the current last edge, until the walk returns to a point it has
already visited.  Fragments may be traversed in either direction.

Everything here is iterative; no recursion depth grows with the
number of fragments or loops.
"""

from __future__ import annotations

import logging
from math import atan2, pi
from typing import List, Optional, Sequence, Tuple

from regioncad.errors import InputShapeError
from regioncad.geom import modang, sub, vclose
from regioncad.path import is_closed, signed_area

logger = logging.getLogger(__name__)

TURN_RULES = ('rightmost', 'leftmost')

Path = List[List[float]]


def _heading(a, b) -> float:
    d = sub(b, a)
    return atan2(d[1], d[0])


def _extreme_angle_fragment(seg: Sequence, fragments: List[Path],
                            rightmost: bool, tol) -> Tuple[Optional[Path], List[Path]]:
    """Pick the continuation of ``seg`` with the most extreme turn.

    Returns the chosen fragment, oriented to start at ``seg[1]``, and
    the remaining fragments, or ``(None, fragments)`` if nothing
    connects.
    """

    end = seg[1]
    segang = _heading(seg[0], seg[1])
    best = None
    best_ang = None
    for idx, frag in enumerate(fragments):
        if vclose(end, frag[0], tol.eps):
            cand = frag
        elif vclose(end, frag[-1], tol.eps):
            cand = list(reversed(frag))
        else:
            continue
        ang = modang(_heading(cand[0], cand[1]) - segang)
        # going straight back is the least preferred turn for both rules
        if abs(abs(ang) - pi) <= tol.eps:
            ang = pi if rightmost else -pi
        if best is None or (ang < best_ang if rightmost else ang > best_ang):
            best = (idx, cand)
            best_ang = ang
    if best is None:
        return None, fragments
    idx, cand = best
    return cand, fragments[:idx] + fragments[idx + 1:]


def assemble_a_path_from_fragments(fragments: Sequence[Path], rightmost: bool,
                                   tol) -> Tuple[Path, List[Path]]:
    """Trace one loop starting from the first fragment.

    Returns ``(path, remaining)``.  ``path`` is closed unless the
    fragments did not connect, in which case the partial path is
    returned as is.
    """

    path = list(fragments[0])
    remaining = list(fragments[1:])
    while True:
        if is_closed(path, tol):
            return path, remaining
        found, remaining = _extreme_angle_fragment(path[-2:], remaining,
                                                   rightmost, tol)
        if found is None:
            logger.debug('incomplete loop of %d points left open', len(path))
            return path, remaining
        if is_closed(found, tol):
            return found, [path] + remaining
        fragend = found[-1]
        hits = [i for i in range(len(path) - 1)
                if vclose(path[i], fragend, tol.eps)]
        if hits:
            # the walk came back to an earlier vertex: split off the loop
            hitidx = hits[-1]
            prefix = path[:hitidx + 1]
            loop = path[hitidx:-1] + found
            if len(prefix) > 1:
                remaining = [prefix] + remaining
            return loop, remaining
        path = path + found[1:]


def assemble_path_fragments(fragments: Sequence[Path], tol,
                            turn_rule: Optional[str] = None) -> List[Path]:
    """Rebuild closed loops from open ``fragments``.

    ``turn_rule`` is ``'rightmost'`` or ``'leftmost'``.  If it is
    ``None`` both rules are tried for every loop and the loop with the
    smaller enclosed area is kept, which extracts the faces of the
    arrangement rather than their unions.
    """

    if turn_rule is not None and turn_rule not in TURN_RULES:
        raise InputShapeError('bad turn rule', {'turn_rule': turn_rule})

    pool = [list(f) for f in fragments if len(f) > 1]
    finished: List[Path] = []
    while pool:
        if turn_rule is None:
            left = assemble_a_path_from_fragments(pool, False, tol)
            right = assemble_a_path_from_fragments(pool, True, tol)
            if abs(signed_area(left[0])) < abs(signed_area(right[0])):
                path, pool = left
            else:
                path, pool = right
        else:
            path, pool = assemble_a_path_from_fragments(
                pool, turn_rule == 'rightmost', tol)
        finished.append(path)
    logger.debug('assembled %d loops from %d fragments',
                 len(finished), len(fragments))
    return finished


__all__ = [
    'TURN_RULES',
    'assemble_a_path_from_fragments',
    'assemble_path_fragments',
]
