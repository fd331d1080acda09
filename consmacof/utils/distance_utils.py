"""
Distance helpers for sparse MDS problems.

Provides:
- dmatrix_con(dx, y): Euclidean distances of y, only between connected pairs
- stress(dx, dy, w): weighted raw stress
- default_weights(dx): 1 for connected pairs, 0 otherwise
"""
import numpy as np


def dmatrix_con(dx: np.ndarray, y: np.ndarray) -> np.ndarray:
    """Distances between the rows of y for every pair with dx[i, j] != 0.

    Pairs that are not connected in dx get 0, so the result has the same
    sparsity pattern as dx.
    """
    dx = np.asarray(dx, dtype=float)
    y = np.asarray(y, dtype=float)
    rows, cols = np.nonzero(dx)
    dy = np.zeros_like(dx)
    dy[rows, cols] = np.linalg.norm(y[rows] - y[cols], axis=1)
    return dy


def stress(dx: np.ndarray, dy: np.ndarray, w: np.ndarray) -> float:
    """sum(w .* (dx - dy).^2) over the full matrix."""
    diff = np.asarray(dx, dtype=float) - np.asarray(dy, dtype=float)
    return float(np.sum(np.asarray(w, dtype=float) * diff ** 2))


def default_weights(dx: np.ndarray) -> np.ndarray:
    return (np.asarray(dx) != 0).astype(float)
