"""
Builders for the PIP Bounds and constraint blocks passed to cons_smacof.

Provides:
- box_bounds(n, xmin, ymin, xmax, ymax)
- polygon_bounds(n, polygon)
- polygon_containment_constraints(indices, polygon)
- triangle_orientation_constraint(i, j, k, min_area)
- subject_to(expressions)

Point indices are 0-based, like the rows of the configuration; the PIP
variables they produce are 1-based (x1, y1 for row 0).
"""
from typing import Iterable, List, Sequence
import numpy as np
from shapely.geometry import Polygon
from shapely.geometry.polygon import orient

from ..solvers.impl.pip_writer import COEF_FORMAT, x_var, y_var


def box_bounds(n: int, xmin: float, ymin: float, xmax: float, ymax: float) -> List[str]:
    """Bounds block keeping all n points inside an axis-aligned box."""
    if xmin > xmax or ymin > ymax:
        raise ValueError("Box has min > max")
    lines = ["Bounds"]
    for k in range(n):
        lines.append(f" {xmin:.6g} <= {x_var(k)} <= {xmax:.6g}")
        lines.append(f" {ymin:.6g} <= {y_var(k)} <= {ymax:.6g}")
    return lines


def polygon_bounds(n: int, polygon: Polygon) -> List[str]:
    """Bounds block from the bounding box of a shapely polygon."""
    xmin, ymin, xmax, ymax = polygon.bounds
    return box_bounds(n, xmin, ymin, xmax, ymax)


def polygon_containment_constraints(indices: Iterable[int], polygon: Polygon) -> List[str]:
    """Linear constraints keeping the given points inside a convex polygon.

    Each edge (p, q) of the counter-clockwise boundary gives the half-plane
    -(qy - py) x + (qx - px) y >= (qx - px) py - (qy - py) px.
    """
    if not polygon.is_valid or polygon.is_empty:
        raise ValueError("Polygon must be a valid, non-empty polygon")
    if not np.isclose(polygon.convex_hull.area, polygon.area):
        raise ValueError("Containment constraints need a convex polygon")

    ring = list(orient(polygon, sign=1.0).exterior.coords)
    expressions = []
    for k in indices:
        for (px, py), (qx, qy) in zip(ring[:-1], ring[1:]):
            a = -(qy - py)
            b = qx - px
            rhs = b * py + a * px
            expressions.append(
                f"{COEF_FORMAT % a} {x_var(k)} {COEF_FORMAT % b} {y_var(k)} >= {rhs:.6g}")
    return expressions


def triangle_orientation_constraint(i: int, j: int, k: int, min_area: float) -> str:
    """Polynomial constraint: signed area of triangle (i, j, k) >= min_area.

    A positive min_area forces the triangle to keep its counter-clockwise
    orientation, e.g. to stop a mesh from folding over.
    """
    xi, yi, xj, yj, xk, yk = x_var(i), y_var(i), x_var(j), y_var(j), x_var(k), y_var(k)
    return (f"-0.5 {xk} {yj} +0.5 {xi} {yj} +0.5 {xj} {yk} "
            f"-0.5 {xi} {yk} -0.5 {xj} {yi} +0.5 {xk} {yi} >= {min_area:.6g}")


def subject_to(expressions: Sequence[str]) -> List[str]:
    """Constraint block with labels c1..cK."""
    if not expressions:
        raise ValueError("At least one constraint is needed")
    return ["Subject to"] + [f" c{n}: {expr}" for n, expr in enumerate(expressions, 1)]
