import numpy as np
import pytest

from consmacof.errors import (
    ArtifactIOError,
    SolutionFormatError,
    UnsupportedDimensionError,
)
from consmacof.solvers.impl.laplacian import quadratic_terms, weighted_laplacian
from consmacof.solvers.impl.pip_writer import (
    format_linear_terms,
    render_problem,
    write_problem,
)
from consmacof.solvers.impl.problem import QPProblem
from consmacof.solvers.impl.solution_reader import read_solution

BOUNDS = ("Bounds", " -10 <= x1 <= 10", " -10 <= y1 <= 10",
          " -10 <= x2 <= 10", " -10 <= y2 <= 10",
          " -10 <= x3 <= 10", " -10 <= y3 <= 10")
CONSTRAINTS = ("Subject to", " c1: x1 - x1 >= 0")

HEADER = ("solution status: optimal solution found\n"
          "objective value:                     468.345678663118\n")


def triangle_problem(f=None):
    """3 points, fully connected, unit weights."""
    w = np.ones((3, 3)) - np.eye(3)
    if f is None:
        f = np.array([[1.5, -0.25], [0.0, 0.0], [-1.5, 0.25]])
    return QPProblem(
        quadratic_terms=quadratic_terms(weighted_laplacian(w)),
        linear_terms=f,
        bounds=BOUNDS,
        constraints=CONSTRAINTS,
    )


def test_render_problem_sections():
    text = render_problem(triangle_problem())

    assert text == (
        "Minimize\n"
        " obj: +2 x1 x1 +2 y1 y1\n"
        "+2 x2 x2 +2 y2 y2\n"
        "+2 x3 x3 +2 y3 y3\n"
        "-2 x1 x2 -2 y1 y2\n"
        "-2 x1 x3 -2 y1 y3\n"
        "-2 x2 x3 -2 y2 y3\n"
        "+1.5 x1 -0.25 y1\n"
        "+0 x2 +0 y2\n"
        "-1.5 x3 +0.25 y3\n"
        "Bounds\n"
        " -10 <= x1 <= 10\n"
        " -10 <= y1 <= 10\n"
        " -10 <= x2 <= 10\n"
        " -10 <= y2 <= 10\n"
        " -10 <= x3 <= 10\n"
        " -10 <= y3 <= 10\n"
        "Subject to\n"
        " c1: x1 - x1 >= 0\n"
        "End\n"
    )


def test_linear_terms_six_significant_digits():
    lines = format_linear_terms(np.array([[1.0 / 3.0, -123456789.0]]))
    assert lines == ["+0.333333 x1 -1.23457e+08 y1"]


def test_write_problem_is_deterministic(tmp_path):
    problem = triangle_problem(np.array([[0.1, 0.2], [0.3, 0.4], [0.5, 0.6]]))
    a = write_problem(problem, tmp_path / "a.pip")
    b = write_problem(problem, tmp_path / "b.pip")

    assert a.read_bytes() == b.read_bytes()
    assert a.read_text(encoding="utf-8") == render_problem(problem)
    # no temporary file left behind
    assert sorted(p.name for p in tmp_path.iterdir()) == ["a.pip", "b.pip"]


def test_write_problem_overwrites(tmp_path):
    path = tmp_path / "model.pip"
    path.write_text("stale")
    write_problem(triangle_problem(), path)
    assert path.read_text(encoding="utf-8").startswith("Minimize\n")


def test_write_problem_unwritable(tmp_path):
    with pytest.raises(ArtifactIOError):
        write_problem(triangle_problem(), tmp_path / "missing_dir" / "model.pip")


def test_read_solution(tmp_path):
    path = tmp_path / "sol.txt"
    path.write_text(HEADER +
                    "x1                                                 -4 \t(obj:0)\n"
                    "y1                                                  2 \t(obj:0)\n"
                    "x2                                  0.613516669331233 \t(obj:0)\n"
                    "y2                                                 -4 \t(obj:0)\n"
                    "quadobjvar                           468.345678663118 \t(obj:1)\n")
    y = read_solution(path, (2, 2))

    assert np.allclose(y, [[-4, 2], [0.613516669331233, -4]])


def test_read_solution_header_only_is_no_update(tmp_path):
    path = tmp_path / "sol.txt"
    path.write_text(HEADER)
    assert read_solution(path, (3, 2)) is None

    path.write_text(HEADER + "\n\n")
    assert read_solution(path, (3, 2)) is None


def test_read_solution_no_solution_available(tmp_path):
    path = tmp_path / "sol.txt"
    path.write_text("no solution available\n")
    assert read_solution(path, (3, 2)) is None


def test_read_solution_missing_variables_are_nan(tmp_path):
    path = tmp_path / "sol.txt"
    path.write_text(HEADER + "x1  1.5 \t(obj:0)\ny2  -2 \t(obj:0)\n")
    y = read_solution(path, (2, 2))

    assert y[0, 0] == 1.5 and y[1, 1] == -2.0
    assert np.isnan(y[0, 1]) and np.isnan(y[1, 0])


def test_read_solution_errors(tmp_path):
    with pytest.raises(ArtifactIOError):
        read_solution(tmp_path / "nope.txt", (2, 2))

    path = tmp_path / "sol.txt"
    path.write_text(HEADER + "x7  1.0 \t(obj:0)\n")
    with pytest.raises(SolutionFormatError):
        read_solution(path, (2, 2))

    path.write_text(HEADER + "x1  abc \t(obj:0)\n")
    with pytest.raises(SolutionFormatError):
        read_solution(path, (2, 2))

    with pytest.raises(UnsupportedDimensionError):
        read_solution(path, (2, 3))


def test_round_trip_three_points(tmp_path):
    """Solution written with the problem's own variable names parses back."""
    problem = triangle_problem()
    text = write_problem(problem, tmp_path / "model.pip").read_text(encoding="utf-8")
    y = np.array([[0.123456789, -1.0], [2.5, 3.14159265], [-7.0, 1e-3]])

    body = ""
    for k, (vx, vy) in enumerate(y):
        assert f" x{k + 1} " in text and f" y{k + 1}" in text
        body += f"x{k + 1}  {vx:.6g} \t(obj:0)\n"
        body += f"y{k + 1}  {vy:.6g} \t(obj:0)\n"
    body += "quadobjvar  12.5 \t(obj:1)\n"
    (tmp_path / "sol.txt").write_text(HEADER + body)

    parsed = read_solution(tmp_path / "sol.txt", problem.shape)
    assert not np.isnan(parsed).any()
    assert np.allclose(parsed, y, rtol=1e-5, atol=1e-9)
