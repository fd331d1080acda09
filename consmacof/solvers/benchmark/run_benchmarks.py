"""
Script to run benchmarks and generate comparison reports.
"""
import argparse
import logging
from pathlib import Path
import matplotlib.pyplot as plt
import pandas as pd
import seaborn as sns
from typing import List
from .runner import BenchmarkRunner, BenchmarkResult
from ...schemas.options import SCIPOptions, SmacofOptions

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


def results_frame(results: List[BenchmarkResult]) -> pd.DataFrame:
    """One row per run."""
    return pd.DataFrame([
        {
            'case': r.case_name,
            'solver': r.solver_name,
            'runtime': r.runtime_seconds,
            'initial_stress': r.initial_stress,
            'final_stress': r.final_stress,
            'iterations': r.iterations,
            'stop_conditions': ','.join(r.stop_conditions),
            'target_rmsd': r.target_rmsd
        }
        for r in results
    ])


def history_frame(results: List[BenchmarkResult]) -> pd.DataFrame:
    """One row per (run, iteration) stress value."""
    return pd.DataFrame([
        {'case': r.case_name, 'solver': r.solver_name, 'run': run,
         'iteration': it, 'stress': s}
        for run, r in enumerate(results)
        for it, s in enumerate(r.stress_history)
    ])


def plot_results(results: List[BenchmarkResult], output_dir: Path):
    """Generate visualization plots of benchmark results."""
    if not results:
        logger.warning("No results to plot!")
        return

    df = results_frame(results)
    history = history_frame(results)

    plots_dir = output_dir / 'plots'
    plots_dir.mkdir(exist_ok=True)

    # Runtime comparison
    plt.figure(figsize=(10, 6))
    sns.boxplot(data=df, x='case', y='runtime', hue='solver')
    plt.title('Solver Runtime Comparison')
    plt.xticks(rotation=45)
    plt.tight_layout()
    plt.savefig(plots_dir / 'runtime_comparison.png')
    plt.close()

    # Stress convergence, one panel per case
    grid = sns.relplot(data=history, x='iteration', y='stress', hue='solver',
                       col='case', col_wrap=2, kind='line',
                       facet_kws={'sharey': False})
    grid.set(yscale='log')
    grid.savefig(plots_dir / 'stress_convergence.png')
    plt.close(grid.figure)

    df.to_csv(output_dir / 'benchmark_results.csv', index=False)
    history.to_csv(output_dir / 'stress_history.csv', index=False)

    summary = df.groupby(['case', 'solver']).agg({
        'runtime': ['mean', 'std'],
        'final_stress': ['mean', 'std'],
        'iterations': 'mean',
        'target_rmsd': 'mean'
    }).round(4)

    summary.to_csv(output_dir / 'summary_stats.csv')


def main():
    parser = argparse.ArgumentParser(description='Run constrained SMACOF benchmarks')
    parser.add_argument('--output', type=str, default='benchmark_results',
                        help='Output directory for results')
    parser.add_argument('--runs', type=int, default=3,
                        help='Number of runs per case')
    parser.add_argument('--scipbin', type=str, default=None,
                        help='SCIP executable (default: platform-specific name)')
    parser.add_argument('--max-iter', type=int, default=50,
                        help='Majorization iterations per run')
    args = parser.parse_args()

    output_dir = Path(args.output)
    output_dir.mkdir(exist_ok=True)

    scip_common = {'display_verblevel': 0}
    if args.scipbin:
        scip_common['scipbin'] = args.scipbin

    solver_configs = [
        {
            'name': 'exact',
            'smacof_options': SmacofOptions(max_iter=args.max_iter, epsilon=1e-6),
            'scip_options': SCIPOptions(**scip_common)
        },
        {
            'name': 'gap_1e-3',
            'smacof_options': SmacofOptions(max_iter=args.max_iter, epsilon=1e-6),
            'scip_options': SCIPOptions(limits_gap=1e-3, **scip_common)
        },
        {
            'name': 'time_1s',
            'smacof_options': SmacofOptions(max_iter=args.max_iter, epsilon=1e-6),
            'scip_options': SCIPOptions(limits_time=1.0, **scip_common)
        }
    ]

    runner = BenchmarkRunner()
    results = runner.run_benchmark(solver_configs=solver_configs, runs_per_case=args.runs)

    plot_results(results, output_dir)

    logger.info(f"Benchmark results saved to {output_dir}")


if __name__ == '__main__':
    main()
