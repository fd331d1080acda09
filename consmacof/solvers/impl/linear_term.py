"""
Linear part of the majorizing QP, recomputed around the current
configuration at every iteration.
"""
import numpy as np


def guttman_matrix(dx: np.ndarray, dy: np.ndarray, w: np.ndarray) -> np.ndarray:
    """Auxiliary majorization matrix B(Y).

    Off-diagonal entries are -w_ij * dx_ij / dy_ij. Coincident points
    (dy_ij == 0) get 0, i.e. no majorization force between them. The
    diagonal is minus the off-diagonal row sum, so rows sum to 0.
    """
    dx = np.asarray(dx, dtype=float)
    dy = np.asarray(dy, dtype=float)
    mwdx = -np.asarray(w, dtype=float) * dx

    B = np.zeros_like(mwdx)
    np.divide(mwdx, dy, out=B, where=dy != 0)
    np.fill_diagonal(B, 0.0)
    np.fill_diagonal(B, -B.sum(axis=1))
    return B


def linear_term(y: np.ndarray, dx: np.ndarray, dy: np.ndarray,
                w: np.ndarray) -> np.ndarray:
    """f = -2 * B(Y) * Y, one (x, y) coefficient pair per point."""
    return -2.0 * guttman_matrix(dx, dy, w) @ np.asarray(y, dtype=float)
