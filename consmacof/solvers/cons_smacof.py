"""
SMACOF with polynomial constraints.

Scaling by MAjorizing a COnvex Function (SMACOF) solves the MDS problem
iteratively. Instead of the Guttman transform update, each iteration here
solves a convex QP (Dwyer, Koren and Marriott, 2006) subject to the caller's
bounds and polynomial constraints:

    min_y  1/2 y' * H * y + f' * y

H comes from the weighted Laplacian and is fixed for the run; f is
recomputed around the current configuration every iteration. The QP is
handed to a QPSolver backend, by default the SCIP binary via PIP files.
"""
from typing import Callable, Optional, Sequence, Set
from dataclasses import dataclass, field
from enum import Enum
import time
import logging
import numpy as np

from ..errors import (
    IncompleteSolutionError,
    InputValidationError,
    UnsupportedDimensionError,
)
from ..schemas.options import DisplayMode, SCIPOptions, SmacofOptions
from ..utils.distance_utils import default_weights, dmatrix_con, stress
from .impl.laplacian import quadratic_terms, weighted_laplacian
from .impl.linear_term import linear_term
from .impl.problem import QPProblem
from .impl.qp_solver import QPSolver, SCIPSolver

logger = logging.getLogger(__name__)

DistanceOracle = Callable[[np.ndarray, np.ndarray], np.ndarray]


class StopCondition(str, Enum):
    """Reasons the majorization loop stopped"""
    TOL_FUN = "TolFun"
    EPSILON = "Epsilon"
    MAX_ITER = "MaxIter"
    SOLVER_NO_UPDATE = "SolverNoUpdate"


@dataclass
class SmacofResult:
    y: np.ndarray
    stop_conditions: Set[StopCondition] = field(default_factory=set)
    stress: np.ndarray = field(default_factory=lambda: np.zeros(1))
    elapsed: np.ndarray = field(default_factory=lambda: np.zeros(1))

    @property
    def iterations(self) -> int:
        return len(self.stress) - 1

    @property
    def converged(self) -> bool:
        """True if the loop stopped on the stress criteria, not on a limit."""
        return bool(self.stop_conditions & {StopCondition.TOL_FUN, StopCondition.EPSILON})


def validate_inputs(dx, y, w=None):
    """Check shapes and the sparsity contract; return float arrays (dx, y, w).

    Weights default to 1 for connected pairs and 0 otherwise.
    """
    dx = np.asarray(dx, dtype=float)
    y = np.asarray(y, dtype=float)

    if dx.ndim != 2 or dx.shape[0] != dx.shape[1]:
        raise InputValidationError("D must be a square matrix")
    n = dx.shape[0]
    if y.ndim != 2:
        raise InputValidationError("Y0 must be a (N, 2) point configuration")
    if y.shape[1] != 2:
        raise UnsupportedDimensionError("Only implemented for 2D output")
    if y.shape[0] != n:
        raise InputValidationError("Y0 must have the same number of rows as D")
    if np.any(np.diag(dx) != 0):
        raise InputValidationError("D has diagonal elements that are non-zero")
    if not np.allclose(dx, dx.T):
        raise InputValidationError("D must be symmetric")

    if w is None:
        w = default_weights(dx)
    w = np.asarray(w, dtype=float)
    if w.shape != (n, n):
        raise InputValidationError("W must be a square matrix with the same size as D")
    if np.any(np.diag(w) != 0):
        raise InputValidationError("W matrix has diagonal elements that are non-zero")
    if np.any((w != 0) & (dx == 0)):
        raise InputValidationError("W has weights for pairs that are not connected in D")

    return dx, y, w


def _pip_block(lines: Sequence[str], name: str):
    if isinstance(lines, str):
        lines = lines.splitlines()
    lines = tuple(lines)
    if not any(line.strip() for line in lines):
        # SCIP does not return a solution for a model without them
        raise InputValidationError(f"{name} cannot be empty")
    return lines


class ConstrainedSmacof:
    """Majorization loop for constrained MDS.

    Args:
        dx: (N, N) distance matrix, 0 meaning "not connected"
        bounds: PIP Bounds block, e.g. ['Bounds', ' -1 <= x1 <= 4', ...]
        constraints: PIP constraints block, e.g. ['Subject to', ' c1: ...']
        w: Optional (N, N) weights, default 1 for connected pairs
        options: Loop parameters
        solver: QP backend, default SCIPSolver with default options
        distance_oracle: Computes the current distance matrix from (dx, y)
    """

    def __init__(self,
                 dx: np.ndarray,
                 bounds: Sequence[str],
                 constraints: Sequence[str],
                 w: Optional[np.ndarray] = None,
                 options: Optional[SmacofOptions] = None,
                 solver: Optional[QPSolver] = None,
                 distance_oracle: DistanceOracle = dmatrix_con):
        self.dx = np.asarray(dx, dtype=float)
        self.w = w
        self.bounds = _pip_block(bounds, "Bounds")
        self.constraints = _pip_block(constraints, "Constraints")
        self.options = options or SmacofOptions()
        self.solver = solver
        self.distance_oracle = distance_oracle

    def _report(self, iteration: int, sigma: float, elapsed: float):
        if self.options.display == DisplayMode.ITER:
            logger.info("%d\t\t%.4e\t\t%.4e", iteration, sigma, elapsed)
        else:
            logger.debug("%d\t\t%.4e\t\t%.4e", iteration, sigma, elapsed)

    def solve(self, y0: np.ndarray) -> SmacofResult:
        """Run the loop from the starting configuration y0 (N, 2)."""
        dx, y, w = validate_inputs(self.dx, y0, self.w)
        opts = self.options
        solver = self.solver if self.solver is not None else SCIPSolver()

        # constant quadratic part of the objective
        quad = quadratic_terms(weighted_laplacian(w))

        dy = self.distance_oracle(dx, y)
        sigma = np.zeros(opts.max_iter + 1)
        t = np.zeros(opts.max_iter + 1)
        sigma[0] = stress(dx, dy, w)
        stop_conditions: Set[StopCondition] = set()

        if opts.display == DisplayMode.ITER:
            logger.info("Iter\tSigma\t\t\tTime (sec)")
            logger.info("===================================================")
        self._report(0, sigma[0], 0.0)

        t0 = time.perf_counter()
        iteration = 0
        with solver:
            for iteration in range(1, opts.max_iter + 1):
                problem = QPProblem(
                    quadratic_terms=quad,
                    linear_terms=linear_term(y, dx, dy, w),
                    bounds=self.bounds,
                    constraints=self.constraints,
                )
                y_new = solver.solve(problem)
                if y_new is None:
                    # already at the optimum, or the solver gave up; keep the
                    # previous configuration
                    stop_conditions.add(StopCondition.SOLVER_NO_UPDATE)
                else:
                    missing = np.argwhere(np.isnan(y_new))
                    if missing.size:
                        raise IncompleteSolutionError(
                            f"Solver solution is missing {len(missing)} coordinates, "
                            f"first at point {missing[0][0] + 1}")
                    y = y_new

                dy = self.distance_oracle(dx, y)
                sigma[iteration] = stress(dx, dy, w)
                t[iteration] = time.perf_counter() - t0
                self._report(iteration, sigma[iteration], t[iteration])

                if sigma[iteration] < opts.tol_fun:
                    stop_conditions.add(StopCondition.TOL_FUN)

                # relative improvement; a stress increase never stops the loop
                if sigma[iteration - 1] > 0:
                    improvement = (sigma[iteration - 1] - sigma[iteration]) / sigma[iteration - 1]
                    if 0 <= improvement < opts.epsilon:
                        stop_conditions.add(StopCondition.EPSILON)

                if stop_conditions:
                    break

        if iteration == opts.max_iter:
            stop_conditions.add(StopCondition.MAX_ITER)

        logger.info(f"Constrained SMACOF finished after {iteration} iterations, "
                    f"stress {sigma[iteration]:.4e}, stop: "
                    f"{sorted(c.value for c in stop_conditions)}")

        return SmacofResult(
            y=y,
            stop_conditions=stop_conditions,
            stress=sigma[:iteration + 1],
            elapsed=t[:iteration + 1],
        )


def cons_smacof(dx: np.ndarray,
                y0: np.ndarray,
                bounds: Sequence[str],
                constraints: Sequence[str],
                w: Optional[np.ndarray] = None,
                smacof_options: Optional[SmacofOptions] = None,
                scip_options: Optional[SCIPOptions] = None,
                solver: Optional[QPSolver] = None) -> SmacofResult:
    """Constrained SMACOF solved with SCIP.

    Args:
        dx: (N, N) distance matrix; dx[i, j] = 0 means i and j are not connected
        y0: (N, 2) initial guess
        bounds: PIP Bounds block, cannot be empty
        constraints: PIP constraints block, cannot be empty
        w: Optional weights
        smacof_options: Loop parameters
        scip_options: SCIP settings, ignored if solver is given
        solver: Alternative QP backend

    Returns:
        SmacofResult with the final configuration, stop conditions, stress
        history and elapsed times
    """
    if solver is None:
        solver = SCIPSolver(scip_options)
    return ConstrainedSmacof(
        dx, bounds, constraints, w=w, options=smacof_options, solver=solver
    ).solve(y0)
