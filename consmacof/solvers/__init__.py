"""
Solvers package.
"""
from .cons_smacof import ConstrainedSmacof, SmacofResult, StopCondition, cons_smacof
from .impl import QPProblem, QPSolver, SCIPSolver

__all__ = [
    'ConstrainedSmacof',
    'SmacofResult',
    'StopCondition',
    'cons_smacof',
    'QPProblem',
    'QPSolver',
    'SCIPSolver'
]
