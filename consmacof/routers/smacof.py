from fastapi import APIRouter, Depends, HTTPException
from typing import Callable
import logging
import time
import numpy as np

from consmacof.errors import InputValidationError
from consmacof.schemas.options import SCIPOptions
from consmacof.schemas.requests import SmacofRequest, SmacofResponse
from consmacof.solvers.cons_smacof import ConstrainedSmacof
from consmacof.solvers.impl.qp_solver import QPSolver, SCIPSolver

router = APIRouter()
logger = logging.getLogger(__name__)

SolverFactory = Callable[[SCIPOptions], QPSolver]


def get_solver_factory() -> SolverFactory:
    """QP backend used for requests; overridden in tests."""
    return SCIPSolver


@router.post("/solve", response_model=SmacofResponse)
def solve(request: SmacofRequest, solver_factory: SolverFactory = Depends(get_solver_factory)):
    """Run constrained SMACOF on the submitted problem."""
    t0 = time.time()
    logger.info(
        "[solve] request received: points=%d, max_iter=%d, scipbin=%s",
        len(request.distances), request.options.max_iter, request.scip.scipbin
    )
    try:
        smacof = ConstrainedSmacof(
            np.array(request.distances, dtype=float),
            request.bounds,
            request.constraints,
            w=None if request.weights is None else np.array(request.weights, dtype=float),
            options=request.options,
            solver=solver_factory(request.scip),
        )
        result = smacof.solve(np.array(request.initial_configuration, dtype=float))
    except InputValidationError as e:
        logger.info("[solve] rejected: %s", str(e))
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("[solve] error: %s", str(e))
        raise HTTPException(status_code=500, detail=f"Solver error: {str(e)}")

    resp = SmacofResponse(
        configuration=result.y.tolist(),
        stop_conditions=sorted(c.value for c in result.stop_conditions),
        stress=result.stress.tolist(),
        elapsed=result.elapsed.tolist(),
        iterations=result.iterations,
        converged=result.converged,
    )
    logger.info(
        "[solve] success: iterations=%d, stress=%.4e, time=%.2fs, stop=%s",
        resp.iterations, resp.stress[-1], time.time() - t0, resp.stop_conditions
    )
    return resp
