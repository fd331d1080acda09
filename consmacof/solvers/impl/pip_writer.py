"""
PIP serialization of the per-iteration QP.

See http://polip.zib.de/pipformat.php. Point k (0-based) maps to the
variables x<k+1> and y<k+1>; solution_reader inverts the same mapping.
"""
from typing import List, Union
from pathlib import Path
import os
import logging
import numpy as np
from .problem import QPProblem, QuadraticTerm
from ...errors import ArtifactIOError

logger = logging.getLogger(__name__)

COEF_FORMAT = "%+.6g"
OBJECTIVE_LABEL = " obj: "


def x_var(index: int) -> str:
    return f"x{index + 1}"


def y_var(index: int) -> str:
    return f"y{index + 1}"


def format_quadratic_term(term: QuadraticTerm) -> str:
    c = COEF_FORMAT % term.coef
    return (f"{c} {x_var(term.i)} {x_var(term.j)} "
            f"{c} {y_var(term.i)} {y_var(term.j)}")


def format_linear_terms(f: np.ndarray) -> List[str]:
    """One line per point: '<fx> x<k> <fy> y<k>'."""
    return [
        f"{COEF_FORMAT % fx} {x_var(k)} {COEF_FORMAT % fy} {y_var(k)}"
        for k, (fx, fy) in enumerate(np.asarray(f, dtype=float))
    ]


def objective_lines(problem: QPProblem) -> List[str]:
    """Quadratic lines followed by linear lines, first one labelled."""
    lines = [format_quadratic_term(t) for t in problem.quadratic_terms]
    lines += format_linear_terms(problem.linear_terms)
    if lines:
        lines[0] = OBJECTIVE_LABEL + lines[0]
    return lines


def render_problem(problem: QPProblem) -> str:
    """Full PIP text: Minimize, objective, bounds, constraints, End."""
    lines = ["Minimize"]
    lines += objective_lines(problem)
    lines += list(problem.bounds)
    lines += list(problem.constraints)
    lines.append("End")
    return "\n".join(lines) + "\n"


def write_problem(problem: QPProblem, path: Union[str, Path]) -> Path:
    """Write the PIP model to path, replacing any previous file atomically."""
    path = Path(path)
    tmp_path = path.with_name(path.name + ".tmp")
    text = render_problem(problem)
    try:
        with open(tmp_path, "w", encoding="utf-8") as fh:
            fh.write(text)
        os.replace(tmp_path, path)
    except OSError as e:
        raise ArtifactIOError(f"Cannot write PIP model to {path}: {e}") from e

    logger.debug(f"Wrote PIP model with {problem.n_points} points to {path}")
    return path
