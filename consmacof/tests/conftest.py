import sys
import textwrap
from pathlib import Path

import numpy as np
import pytest

from consmacof.solvers.impl.qp_solver import QPSolver


class ScriptedSolver(QPSolver):
    """Returns the given configurations in turn, repeating the last one.

    None entries mean "no update". Every problem received is recorded.
    """

    def __init__(self, *solutions):
        self.solutions = list(solutions)
        self.problems = []
        self.entered = 0
        self.closed = 0

    def __enter__(self):
        self.entered += 1
        return self

    def close(self):
        self.closed += 1

    def solve(self, problem):
        self.problems.append(problem)
        idx = min(len(self.problems), len(self.solutions)) - 1
        sol = self.solutions[idx]
        return None if sol is None else np.array(sol, dtype=float)


class EchoSolver(QPSolver):
    """Always hands back a fixed configuration."""

    def __init__(self, y):
        self.y = np.array(y, dtype=float)
        self.calls = 0

    def solve(self, problem):
        self.calls += 1
        return self.y.copy()


@pytest.fixture
def path_graph():
    """Three points, 1-2 and 2-3 connected, 1-3 not; non-collinear start."""
    dx = np.array([[0.0, 1.0, 0.0],
                   [1.0, 0.0, 1.0],
                   [0.0, 1.0, 0.0]])
    y0 = np.array([[0.0, 0.0],
                   [2.0, 0.0],
                   [2.0, 1.5]])
    bounds = ["Bounds",
              " -10 <= x1 <= 10", " -10 <= y1 <= 10",
              " -10 <= x2 <= 10", " -10 <= y2 <= 10",
              " -10 <= x3 <= 10", " -10 <= y3 <= 10"]
    constraints = ["Subject to", " c1: x1 - x1 >= 0"]
    return dx, y0, bounds, constraints


@pytest.fixture
def fake_scip(tmp_path):
    """Executable standing in for SCIP.

    It copies the model it was asked to read to last_model.pip, its argv to
    last_args.txt, and writes a solution file made of two header lines plus
    the contents of solution_body.txt (write that file before solving).
    """
    if sys.platform.startswith("win"):
        pytest.skip("fake solver script needs a POSIX shebang")

    home = tmp_path / "fake_scip"
    home.mkdir()
    script = home / "scip"
    script.write_text(textwrap.dedent(f"""\
        #!{sys.executable}
        import shutil
        import sys
        from pathlib import Path

        home = Path({str(home)!r})
        args = sys.argv[1:]
        cmds = [args[i + 1] for i, a in enumerate(args[:-1]) if a == "-c"]
        model = [c[len("read "):] for c in cmds if c.startswith("read ")][0]
        solution = [c[len("write solution "):] for c in cmds if c.startswith("write solution ")][0]
        shutil.copy(model, home / "last_model.pip")
        (home / "last_args.txt").write_text("\\n".join(args))
        body = (home / "solution_body.txt").read_text()
        with open(solution, "w") as fh:
            fh.write("solution status: optimal solution found\\n")
            fh.write("objective value:                     1.5\\n")
            fh.write(body)
        """))
    script.chmod(0o755)
    return home
