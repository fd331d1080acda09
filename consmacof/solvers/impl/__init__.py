"""
Solver implementation package.
"""
from .problem import QPProblem, QuadraticTerm
from .qp_solver import QPSolver, SCIPSolver

__all__ = [
    'QPProblem',
    'QuadraticTerm',
    'QPSolver',
    'SCIPSolver'
]
