"""
Data containers shared by the QP serializer, the solver backends and the
majorization loop.
"""
from typing import Tuple
from dataclasses import dataclass
import numpy as np


@dataclass(frozen=True)
class QuadraticTerm:
    """One pair of quadratic objective terms: coef * (x_i x_j + y_i y_j).

    Indices are 0-based; i <= j.
    """
    coef: float
    i: int
    j: int

    @property
    def is_diagonal(self) -> bool:
        return self.i == self.j


@dataclass
class QPProblem:
    """Convex QP solved at each majorization step.

    min  sum(quadratic_terms) + f' * y
    s.t. bounds, constraints (PIP text, passed through verbatim)
    """
    quadratic_terms: Tuple[QuadraticTerm, ...]
    linear_terms: np.ndarray  # (N, 2)
    bounds: Tuple[str, ...]
    constraints: Tuple[str, ...]

    @property
    def n_points(self) -> int:
        return int(self.linear_terms.shape[0])

    @property
    def shape(self) -> Tuple[int, int]:
        return (self.n_points, 2)
