import pytest
from shapely.geometry import Polygon, box

from consmacof.utils import geometry_utils as gu


def satisfied(expr, points):
    """Evaluate a linear 'a xk b yk >= c' expression on 0-based points."""
    lhs, rhs = expr.split(">=")
    a, xv, b, yv = lhs.split()
    px, py = points[int(xv[1:]) - 1]
    return float(a) * px + float(b) * py >= float(rhs) - 1e-9


def test_box_bounds():
    assert gu.box_bounds(2, -1, -2, 3, 4) == [
        "Bounds",
        " -1 <= x1 <= 3",
        " -2 <= y1 <= 4",
        " -1 <= x2 <= 3",
        " -2 <= y2 <= 4",
    ]
    with pytest.raises(ValueError):
        gu.box_bounds(1, 1, 0, 0, 1)


def test_polygon_bounds_uses_bounding_box():
    tri = Polygon([(0, 0), (4, 0), (0, 3)])
    assert gu.polygon_bounds(1, tri) == ["Bounds", " 0 <= x1 <= 4", " 0 <= y1 <= 3"]


def test_containment_constraints_square():
    square = box(0, 0, 1, 1)
    exprs = gu.polygon_containment_constraints([0], square)

    assert len(exprs) == 4
    assert all(satisfied(e, [(0.5, 0.5)]) for e in exprs)
    assert all(satisfied(e, [(0.0, 1.0)]) for e in exprs)
    assert not all(satisfied(e, [(1.5, 0.5)]) for e in exprs)
    assert not all(satisfied(e, [(0.5, -0.1)]) for e in exprs)


def test_containment_constraints_clockwise_triangle():
    # clockwise input is reoriented
    tri = Polygon([(0, 0), (0, 3), (4, 0)])
    exprs = gu.polygon_containment_constraints([1, 2], tri)

    assert len(exprs) == 6
    assert {e.split()[1] for e in exprs} == {"x2", "x3"}
    inside = [(0, 0), (1, 1), (0.5, 0.5)]
    assert all(satisfied(e, inside) for e in exprs)
    assert not all(satisfied(e, [(0, 0), (3, 3), (0.5, 0.5)]) for e in exprs)


def test_containment_requires_convex_polygon():
    l_shape = Polygon([(0, 0), (2, 0), (2, 1), (1, 1), (1, 2), (0, 2)])
    with pytest.raises(ValueError):
        gu.polygon_containment_constraints([0], l_shape)


def test_triangle_orientation_constraint():
    expr = gu.triangle_orientation_constraint(2, 6, 5, 0.1)
    assert expr == ("-0.5 x6 y7 +0.5 x3 y7 +0.5 x7 y6 "
                    "-0.5 x3 y6 -0.5 x7 y3 +0.5 x6 y3 >= 0.1")


def test_subject_to_labels():
    assert gu.subject_to(["x1 >= 0", "y1 >= 0"]) == [
        "Subject to",
        " c1: x1 >= 0",
        " c2: y1 >= 0",
    ]
    with pytest.raises(ValueError):
        gu.subject_to([])
