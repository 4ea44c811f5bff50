import math

import pytest

from regioncad.errors import (AntiparallelCornerError, DegenerateGeometryError,
                              DegenerateOffsetError, InputShapeError)
from regioncad.geom import dist
from regioncad.offset import offset
from regioncad.path import (clockwise_path, is_closed, open_path,
                            point_in_region, region_area, signed_area)
from regioncad.tolerance import DEFAULT_TOLERANCE

TOL = DEFAULT_TOLERANCE

## side 10 square centred on the origin, counter-clockwise, no closing point
SQUARE = [[-5, -5], [5, -5], [5, 5], [-5, 5]]


def square(x0, y0, size):
    return [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size], [x0, y0]]


def corners(path):
    return sorted((round(p[0], 9), round(p[1], 9)) for p in open_path(path, TOL))


def approx_points(points):
    return [pytest.approx(p) for p in points]


class TestSharp:

    def test_outward_square(self):
        result = offset(SQUARE, delta=2, closed=True)
        assert is_closed(result, TOL)
        assert len(open_path(result, TOL)) == 4
        assert corners(result) == [(-7, -7), (-7, 7), (7, -7), (7, 7)]

    def test_clockwise_square_grows_too(self):
        result = offset(clockwise_path(SQUARE), delta=2, closed=True)
        assert abs(signed_area(result)) == pytest.approx(196)

    def test_explicitly_closed_input(self):
        result = offset(SQUARE + [SQUARE[0]], delta=2)
        assert corners(result) == [(-7, -7), (-7, 7), (7, -7), (7, 7)]

    def test_inward_square(self):
        result = offset(SQUARE, delta=-4, closed=True)
        assert corners(result) == [(-1, -1), (-1, 1), (1, -1), (1, 1)]

    def test_collapse_is_degenerate(self):
        with pytest.raises(DegenerateOffsetError):
            offset(SQUARE, delta=-6, closed=True)

    def test_collapse_to_a_point_is_degenerate(self):
        # every corner meets at the centre
        with pytest.raises(DegenerateOffsetError):
            offset(SQUARE, delta=-5, closed=True)

    def test_zero_offset(self):
        result = offset(SQUARE, delta=0, closed=True)
        assert corners(result) == corners(SQUARE)

    def test_narrow_spike_is_dropped(self):
        # a 1 unit wide spike on the top edge vanishes when the outline
        # shrinks by 1
        spiked = [[0, 0], [10, 0], [10, 10], [5.5, 10], [5.5, 15],
                  [4.5, 15], [4.5, 10], [0, 10]]
        result = offset(spiked, delta=-1, closed=True)
        assert abs(signed_area(result)) == pytest.approx(64)
        assert max(p[1] for p in result) == pytest.approx(9)
        unchecked = offset(spiked, delta=-1, closed=True, check_valid=False)
        assert len(unchecked) > len(result)

    def test_parallel_jog_is_an_error(self):
        with pytest.raises(AntiparallelCornerError):
            # the short riser is dropped, leaving two parallel segments
            offset([[0, 0], [10, 0], [10, 0.5], [20, 0.5]], delta=1)


class TestRound:

    def test_round_square(self):
        result = offset(SQUARE, r=2, closed=True)
        assert len(open_path(result, TOL)) > 8
        assert abs(signed_area(result)) == pytest.approx(100 + 80 + 4 * math.pi, abs=0.05)
        for p in result:
            assert max(abs(p[0]), abs(p[1])) == pytest.approx(7, abs=1e-9) or \
                min(dist(p, [sx * 5, sy * 5]) for sx in (-1, 1) for sy in (-1, 1)) == pytest.approx(2)

    def test_arc_step_count(self):
        result = offset(SQUARE, r=2, closed=True, maxstep=0.5)
        # ceil(2 * (pi/2) / 0.5) = 7 steps, 8 points per corner
        assert len(open_path(result, TOL)) == 32

    def test_small_radius_stays_sharp(self):
        # ceil(0.1 * (pi/2) / 0.1) = 2 steps: too few to round
        result = offset(SQUARE, r=0.1, closed=True)
        assert len(open_path(result, TOL)) == 4

    def test_inside_corners_stay_sharp(self):
        result = offset(SQUARE, r=-2, closed=True)
        assert corners(result) == [(-3, -3), (-3, 3), (3, -3), (3, 3)]


class TestChamfer:

    def test_chamfer_square(self):
        result = offset(SQUARE, delta=2, chamfer=True, closed=True)
        assert len(open_path(result, TOL)) == 8
        leg = 4 - 2 * math.sqrt(2)
        assert abs(signed_area(result)) == pytest.approx(196 - 2 * leg * leg)

    def test_chamfer_requires_delta(self):
        with pytest.raises(InputShapeError):
            offset(SQUARE, r=2, chamfer=True, closed=True)


class TestOpenPaths:

    PATH = [[0, 0], [10, 0], [10, 10]]

    def test_left_offset(self):
        result = offset(self.PATH, delta=1)
        assert result == approx_points([[0, 1], [9, 1], [9, 10]])

    def test_right_offset_rounds_outside_corner(self):
        result = offset(self.PATH, r=-1)
        assert result[0] == pytest.approx([0, -1])
        assert result[-1] == pytest.approx([11, 10])
        # 16 arc steps about (10, 0) plus the two sharp ends
        assert len(result) == 19
        for p in result[1:-1]:
            assert dist(p, [10, 0]) == pytest.approx(1)

    def test_ends_are_not_rounded(self):
        result = offset([[0, 0], [10, 0]], r=2)
        assert result == approx_points([[0, 2], [10, 2]])

    def test_antiparallel_turn(self):
        with pytest.raises(AntiparallelCornerError):
            offset([[0, 0], [10, 0], [5, 0]], delta=1, check_valid=False)


class TestFaces:

    def test_square_faces(self):
        edges, faces = offset(SQUARE, delta=2, closed=True, return_faces=True)
        assert len(edges) == 4
        assert not is_closed(edges, TOL)
        assert faces == [[0, 1, 5, 4], [1, 2, 6, 5], [2, 3, 7, 6], [3, 0, 4, 7]]

    def test_first_face_index_and_flip(self):
        edges, faces = offset(SQUARE, delta=2, closed=True, return_faces=True,
                              firstface_index=10, flip_faces=True)
        assert faces[0] == [14, 15, 11, 10]
        assert all(10 <= i < 18 for f in faces for i in f)

    def test_round_faces_in_range(self):
        edges, faces = offset(SQUARE, r=2, closed=True, return_faces=True)
        n = len(SQUARE) + len(edges)
        assert all(0 <= i < n for f in faces for i in f)
        assert sum(1 for f in faces if len(f) == 4) == 4
        assert all(len(f) in (3, 4) for f in faces)

    def test_open_path_faces(self):
        edges, faces = offset([[0, 0], [10, 0], [10, 10]], delta=1, return_faces=True)
        assert len(edges) == 3
        assert faces == [[0, 1, 4, 3], [1, 2, 5, 4]]

    def test_region_faces_rejected(self):
        with pytest.raises(InputShapeError):
            offset([square(0, 0, 10)], delta=1, return_faces=True)


class TestRegions:

    def test_small_hole_closes(self):
        region = [square(0, 0, 20), square(9, 9, 2)]
        result = offset(region, delta=2)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(576)

    def test_hole_shrinks(self):
        region = [square(0, 0, 20), square(5, 5, 10)]
        result = offset(region, delta=1)
        assert len(result) == 2
        assert region_area(result, TOL) == pytest.approx(420)
        assert point_in_region([10, 10], result, TOL) == -1
        assert point_in_region([5.5, 5.5], result, TOL) == 1

    def test_islands_merge(self):
        region = [square(0, 0, 10), square(11, 0, 10)]
        result = offset(region, delta=1)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(23 * 12)

    def test_region_collapse(self):
        with pytest.raises(DegenerateOffsetError):
            offset([square(0, 0, 2)], delta=-5)

    def test_region_collapse_to_a_point(self):
        with pytest.raises(DegenerateOffsetError):
            offset([square(0, 0, 10)], delta=-5)

    def test_island_collapses_while_hole_grows(self):
        with pytest.raises(DegenerateOffsetError):
            offset([square(0, 0, 20), square(5, 5, 10)], delta=-20)

    def test_empty_region(self):
        assert offset([], delta=1) == []


class TestArguments:

    def test_exactly_one_amount(self):
        with pytest.raises(InputShapeError):
            offset(SQUARE, closed=True)
        with pytest.raises(InputShapeError):
            offset(SQUARE, r=1, delta=1, closed=True)

    def test_bad_quality(self):
        with pytest.raises(InputShapeError):
            offset(SQUARE, delta=1, closed=True, quality=-1)

    def test_bad_maxstep(self):
        with pytest.raises(InputShapeError):
            offset(SQUARE, r=1, closed=True, maxstep=0)

    def test_zero_length_edge(self):
        with pytest.raises(DegenerateGeometryError):
            offset([[0, 0], [0, 0], [10, 0], [10, 10]], delta=1, closed=True)
