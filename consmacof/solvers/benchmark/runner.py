"""
Benchmark harness for evaluating constrained SMACOF solver configurations.
Collects stress, runtime and convergence information per run.
"""
from typing import Any, Callable, Dict, List, Optional
import time
import logging
from dataclasses import dataclass, field
import numpy as np

from ..cons_smacof import ConstrainedSmacof
from ..impl.qp_solver import QPSolver, SCIPSolver
from ...schemas.options import SCIPOptions, SmacofOptions
from .test_cases import BenchmarkCase, BENCHMARK_CASES

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single solver run."""
    case_name: str
    solver_name: str
    runtime_seconds: float
    initial_stress: float
    final_stress: float
    iterations: int
    stop_conditions: List[str]
    stress_history: List[float]
    target_rmsd: float
    metrics: Dict[str, Any] = field(default_factory=dict)


class BenchmarkRunner:
    def __init__(self, cases: List[BenchmarkCase] = None,
                 solver_factory: Optional[Callable[[SCIPOptions], QPSolver]] = None):
        """Initialize with optional specific test cases and QP backend."""
        self.cases = cases or BENCHMARK_CASES
        self.solver_factory = solver_factory or SCIPSolver

    def run_benchmark(self,
                      solver_configs: List[Dict] = None,
                      runs_per_case: int = 1) -> List[BenchmarkResult]:
        """Run full benchmark suite.

        Args:
            solver_configs: Dicts with 'name', 'smacof_options' and 'scip_options'
            runs_per_case: Number of runs per case

        Returns:
            List of BenchmarkResults for all runs that finished
        """
        results = []

        if not solver_configs:
            solver_configs = [
                {
                    'name': 'default',
                    'smacof_options': SmacofOptions(max_iter=50, epsilon=1e-6),
                    'scip_options': SCIPOptions(display_verblevel=0)
                },
                {
                    'name': 'time_limited',
                    'smacof_options': SmacofOptions(max_iter=50, epsilon=1e-6),
                    'scip_options': SCIPOptions(display_verblevel=0, limits_time=5.0, limits_gap=1e-4)
                }
            ]

        for case in self.cases:
            logger.info(f"Running benchmark case: {case.name}")

            for config in solver_configs:
                logger.info(f"Testing solver: {config['name']}")

                for run in range(runs_per_case):
                    try:
                        results.append(self._run_single_case(case, config))
                    except Exception:
                        logger.exception(f"Error in {case.name} with {config['name']}")
                        continue

        return results

    def _run_single_case(self, case: BenchmarkCase, solver_config: Dict) -> BenchmarkResult:
        """Run single benchmark case with given solver config."""
        req = case.get_solver_request()
        smacof = ConstrainedSmacof(
            req['dx'],
            req['bounds'],
            req['constraints'],
            options=solver_config.get('smacof_options'),
            solver=self.solver_factory(solver_config.get('scip_options') or SCIPOptions()),
        )

        start_time = time.time()
        result = smacof.solve(req['y0'])
        runtime = time.time() - start_time

        return BenchmarkResult(
            case_name=case.name,
            solver_name=solver_config['name'],
            runtime_seconds=runtime,
            initial_stress=float(result.stress[0]),
            final_stress=float(result.stress[-1]),
            iterations=result.iterations,
            stop_conditions=sorted(c.value for c in result.stop_conditions),
            stress_history=result.stress.tolist(),
            target_rmsd=self._compute_rmsd(result.y, case.target),
            metrics={'converged': result.converged},
        )

    def _compute_rmsd(self, y: np.ndarray, target: np.ndarray) -> float:
        """RMS distance to the reference layout after removing translation.

        Rotations are not removed; constraints usually pin them anyway.
        """
        a = y - y.mean(axis=0)
        b = target - target.mean(axis=0)
        return float(np.sqrt(np.mean(np.sum((a - b) ** 2, axis=1))))
