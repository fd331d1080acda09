"""
Weighted Laplacian of the SMACOF weight matrix and the constant quadratic
part of the per-iteration QP objective.
"""
from typing import Tuple
import logging
import numpy as np
from .problem import QuadraticTerm

logger = logging.getLogger(__name__)


def weighted_laplacian(w: np.ndarray) -> np.ndarray:
    """V = -W off the diagonal, row sums of W on it (every row sums to 0)."""
    w = np.asarray(w, dtype=float)
    V = -w.copy()
    np.fill_diagonal(V, w.sum(axis=1))
    return V


def quadratic_terms(V: np.ndarray) -> Tuple[QuadraticTerm, ...]:
    """Objective terms for the Laplacian V.

    Diagonal entries come first, in index order, followed by the upper
    triangle in row-major order. Off-diagonal coefficients are doubled since
    V is symmetric and only (i, j) with i < j is written. Zero entries are
    skipped so a sparse graph produces a sparse objective.
    """
    V = np.asarray(V, dtype=float)
    n = V.shape[0]
    terms = [QuadraticTerm(float(V[i, i]), i, i) for i in range(n) if V[i, i] != 0]

    rows, cols = np.nonzero(np.triu(V, k=1))
    for i, j in zip(rows, cols):
        terms.append(QuadraticTerm(float(2 * V[i, j]), int(i), int(j)))

    logger.debug(f"Quadratic objective has {len(terms)} terms for {n} points")
    return tuple(terms)
