import pytest

from regioncad.assemble import (assemble_a_path_from_fragments,
                                assemble_path_fragments)
from regioncad.errors import InputShapeError
from regioncad.path import is_closed, signed_area
from regioncad.tolerance import DEFAULT_TOLERANCE

TOL = DEFAULT_TOLERANCE


def test_two_halves_of_a_square():
    frags = [[[0, 0], [10, 0], [10, 10]], [[10, 10], [0, 10], [0, 0]]]
    loops = assemble_path_fragments(frags, TOL)
    assert len(loops) == 1
    assert is_closed(loops[0], TOL)
    assert signed_area(loops[0]) == pytest.approx(100)


def test_fragment_used_in_reverse():
    frags = [[[0, 0], [10, 0], [10, 10]], [[0, 0], [0, 10], [10, 10]]]
    loops = assemble_path_fragments(frags, TOL)
    assert len(loops) == 1
    assert len(loops[0]) == 5
    assert abs(signed_area(loops[0])) == pytest.approx(100)


def test_closed_fragments_pass_through():
    sq1 = [[0, 0], [1, 0], [1, 1], [0, 1], [0, 0]]
    sq2 = [[5, 5], [6, 5], [6, 6], [5, 6], [5, 5]]
    loops = assemble_path_fragments([sq1, sq2], TOL)
    assert loops == [sq1, sq2]


def test_unconnected_fragment_is_left_open():
    frags = [[[0, 0], [10, 0], [10, 10]], [[20, 20], [30, 20]]]
    loops = assemble_path_fragments(frags, TOL)
    assert len(loops) == 2
    assert not any(is_closed(p, TOL) for p in loops)


def test_turn_rules_pick_different_faces():
    # a square split by a diagonal chord into two triangles
    frags = [
        [[0, 0], [10, 0], [10, 10]],
        [[10, 10], [0, 10], [0, 0]],
        [[0, 0], [10, 10]],
    ]
    left = assemble_a_path_from_fragments(frags, False, TOL)[0]
    right = assemble_a_path_from_fragments(frags, True, TOL)[0]
    assert is_closed(left, TOL)
    assert is_closed(right, TOL)
    assert abs(signed_area(left)) == pytest.approx(50)
    assert abs(signed_area(right)) == pytest.approx(100)


def test_smaller_face_is_kept():
    frags = [
        [[0, 0], [10, 0], [10, 10]],
        [[10, 10], [0, 10], [0, 0]],
        [[0, 0], [10, 10]],
    ]
    loops = assemble_path_fragments(frags, TOL)
    closed = [p for p in loops if is_closed(p, TOL)]
    assert abs(signed_area(closed[0])) == pytest.approx(50)


def test_returned_remaining_fragments():
    frags = [[[0, 0], [1, 0], [1, 1]], [[1, 1], [0, 1], [0, 0]], [[7, 7], [8, 8]]]
    path, remaining = assemble_a_path_from_fragments(frags, True, TOL)
    assert is_closed(path, TOL)
    assert remaining == [[[7, 7], [8, 8]]]


def test_explicit_turn_rule():
    frags = [[[0, 0], [10, 0], [10, 10]], [[10, 10], [0, 10], [0, 0]]]
    assert len(assemble_path_fragments(frags, TOL, turn_rule='leftmost')) == 1
    with pytest.raises(InputShapeError):
        assemble_path_fragments(frags, TOL, turn_rule='straight')


def test_empty_input():
    assert assemble_path_fragments([], TOL) == []
