import pytest

from regioncad.combine import *
from regioncad.errors import InputShapeError
from regioncad.path import is_closed, point_in_region, region_area, signed_area
from regioncad.tolerance import DEFAULT_TOLERANCE

TOL = DEFAULT_TOLERANCE


def square(x0, y0, size, closed=True):
    pts = [[x0, y0], [x0 + size, y0], [x0 + size, y0 + size], [x0, y0 + size]]
    return pts + [[x0, y0]] if closed else pts


A = [square(0, 0, 10)]
B = [square(5, 5, 10)]


def all_closed(region):
    return all(is_closed(p, TOL) and len(p) >= 4 for p in region)


class TestOverlappingSquares:

    def test_union(self):
        result = union(A, B)
        assert len(result) == 1
        assert all_closed(result)
        assert region_area(result, TOL) == pytest.approx(175)
        assert point_in_region([12, 12], result, TOL) == 1
        assert point_in_region([2, 14], result, TOL) == -1

    def test_intersection(self):
        result = intersection(A, B)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(25)
        assert point_in_region([7, 7], result, TOL) == 1

    def test_difference(self):
        result = difference(A, B)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(75)
        assert point_in_region([7, 7], result, TOL) == -1
        assert point_in_region([2, 2], result, TOL) == 1

    def test_xor(self):
        result = exclusive_or(A, B)
        assert len(result) == 2
        assert all_closed(result)
        assert region_area(result, TOL) == pytest.approx(150)
        assert point_in_region([7, 7], result, TOL) == -1
        assert point_in_region([2, 2], result, TOL) == 1
        assert point_in_region([12, 12], result, TOL) == 1

    def test_xor_alias(self):
        assert xor is exclusive_or


class TestIdentities:

    def test_union_with_self(self):
        result = union(A, A)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(100)

    def test_intersection_with_self(self):
        result = intersection(A, A)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(100)

    def test_difference_with_self_is_empty(self):
        assert difference(A, A) == []

    def test_xor_with_self_is_empty(self):
        assert exclusive_or(A, A) == []

    def test_orientation_of_operands_is_irrelevant(self):
        reversed_b = [list(reversed(B[0]))]
        assert region_area(union(A, reversed_b), TOL) == pytest.approx(175)


class TestDisjointAndNested:

    def test_disjoint_union(self):
        result = union(A, [square(20, 0, 10)])
        assert len(result) == 2
        assert region_area(result, TOL) == pytest.approx(200)

    def test_disjoint_intersection_is_empty(self):
        assert intersection(A, [square(20, 0, 10)]) == []

    def test_adjacent_union_merges(self):
        result = union(A, [square(10, 0, 10)])
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(200)
        assert abs(signed_area(result[0])) == pytest.approx(200)

    def test_difference_makes_a_hole(self):
        result = difference([square(0, 0, 20)], [square(5, 5, 10)])
        assert len(result) == 2
        assert region_area(result, TOL) == pytest.approx(300)
        assert point_in_region([10, 10], result, TOL) == -1
        assert point_in_region([2, 2], result, TOL) == 1

    def test_union_with_vertex_just_past_a_crossing(self):
        rect = [[5, 2], [10.000008, 2], [15, 2], [15, 8], [5, 8], [5, 2]]
        result = union(A, [rect])
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(130)
        assert point_in_region([12, 5], result, TOL) == 1

    def test_contained_difference_is_empty(self):
        assert difference([square(0, 0, 10)], [square(-10, -10, 40)]) == []

    def test_contained_intersection_is_the_inner_region(self):
        result = intersection([square(0, 0, 10)], [square(-10, -10, 40)])
        assert result == [square(0, 0, 10)]

    def test_union_absorbs_contained(self):
        result = union([square(0, 0, 20)], [square(5, 5, 5)])
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(400)

    def test_union_fills_hole(self):
        holed = difference([square(0, 0, 20)], [square(5, 5, 10)])
        result = union(holed, [square(5, 5, 10)])
        assert region_area(result, TOL) == pytest.approx(400)
        assert point_in_region([10, 10], result, TOL) == 1


class TestOperands:

    def test_no_operands(self):
        assert union() == []
        assert difference() == []

    def test_single_operand_is_closed(self):
        result = union(square(0, 0, 10, closed=False))
        assert len(result) == 1
        assert len(result[0]) == 5
        assert is_closed(result[0], TOL)

    def test_bare_paths(self):
        result = union(square(0, 0, 10, closed=False), square(5, 5, 10, closed=False))
        assert region_area(result, TOL) == pytest.approx(175)

    def test_many_operands(self):
        squares = [[square(i * 5, 0, 10)] for i in range(6)]
        result = union(*squares)
        assert len(result) == 1
        assert region_area(result, TOL) == pytest.approx(350)

    def test_empty_operand(self):
        assert region_area(union([], A), TOL) == pytest.approx(100)
        assert difference(A, []) == [A[0]]
        assert intersection(A, []) == []

    def test_combine_regions(self):
        result = combine_regions(A, B, 'intersection')
        assert region_area(result, TOL) == pytest.approx(25)
        with pytest.raises(InputShapeError):
            combine_regions(A, B, 'subtract')

    def test_bad_operand(self):
        with pytest.raises(InputShapeError):
            union(A, [[0, 0]])

    def test_custom_tolerance(self):
        tol = TOL.with_eps(1e-4)
        result = union(A, B, tol=tol)
        assert region_area(result, tol) == pytest.approx(175)
