"""
QP solver backends used by the majorization loop.

A backend turns a QPProblem into a new point configuration, or None when it
has nothing better than the current one. Backends are context managers; the
loop holds one open for the whole run so per-run resources are released on
every exit path.
"""
from abc import ABC, abstractmethod
from typing import Optional
from pathlib import Path
import tempfile
import uuid
import logging
import numpy as np
from .problem import QPProblem
from .pip_writer import write_problem
from .scip_runner import run_scip
from .solution_reader import read_solution
from ...schemas.options import SCIPOptions

logger = logging.getLogger(__name__)


class QPSolver(ABC):
    """solve(problem) -> configuration or None"""

    def __enter__(self) -> "QPSolver":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self.close()
        return False

    def close(self):
        """Release per-run resources."""

    @abstractmethod
    def solve(self, problem: QPProblem) -> Optional[np.ndarray]:
        ...


class SCIPSolver(QPSolver):
    """Solve each QP by writing a PIP model and running the SCIP binary.

    Model and solution files live in a temporary directory named after a
    run token, created on the first __enter__ and removed when the outermost
    `with` exits (or on close), so runs sharing a working directory never
    touch each other's files. A solver the caller already holds open can be
    handed to cons_smacof without losing its directory.
    """

    MODEL_NAME = "model.pip"
    SOLUTION_NAME = "model-sol.txt"

    def __init__(self, options: Optional[SCIPOptions] = None,
                 tmp_root: Optional[Path] = None):
        self.options = options or SCIPOptions()
        self.tmp_root = tmp_root
        self.run_token: Optional[str] = None
        self._tmpdir: Optional[tempfile.TemporaryDirectory] = None
        self._depth = 0

    @property
    def workdir(self) -> Optional[Path]:
        return Path(self._tmpdir.name) if self._tmpdir is not None else None

    def __enter__(self) -> "SCIPSolver":
        # nested entries share the outermost run directory
        if self._tmpdir is None:
            self.run_token = uuid.uuid4().hex[:12]
            self._tmpdir = tempfile.TemporaryDirectory(
                prefix=f"consmacof-{self.run_token}-", dir=self.tmp_root)
            logger.debug(f"SCIP run artifacts in {self._tmpdir.name}")
        self._depth += 1
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        self._depth -= 1
        if self._depth <= 0:
            self.close()
        return False

    def close(self):
        if self._tmpdir is not None:
            self._tmpdir.cleanup()
            self._tmpdir = None
            self.run_token = None
        self._depth = 0

    def solve(self, problem: QPProblem) -> Optional[np.ndarray]:
        if self._tmpdir is None:
            # one-off call: scope the artifacts to this call only
            with self:
                return self.solve(problem)

        model_path = self.workdir / self.MODEL_NAME
        solution_path = self.workdir / self.SOLUTION_NAME
        # never read a solution left over from the previous iteration
        solution_path.unlink(missing_ok=True)

        write_problem(problem, model_path)
        run_scip(model_path, solution_path, self.options)
        return read_solution(solution_path, problem.shape)
