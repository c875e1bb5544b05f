"""
Performance benchmarking script for the 3D CFD solver.

Times a fixed number of steps of a periodic density wave on a cubic block
for every reconstruction scheme, with and without viscosity.

Run from the repository root:
    python cfd3d/scripts/benchmark_performance.py --cells 16 --steps 5
"""

import sys
from pathlib import Path

# Add repository root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import argparse
import time

import numpy as np

from cfd3d.src import (Axis, DomainBoundary, FlowModel, FlowState, GasProperties, Partition,
                       Scheme, Solver3D, SolverConfig, configure_logging)


def run_benchmark(n_cells=16, n_steps=5, scheme=Scheme.WENO5, viscous=False, cfl=0.5):
    """Run a benchmark test case and return (elapsed seconds, steps)."""
    gas = GasProperties(gamma=1.4, R=1.0)
    model = FlowModel(gas=gas, ref_mu=1.0e2 if viscous else 0.0, ref_T=300.0, scheme=scheme)
    partition = Partition(domain=((0.0, 1.0),) * 3, cells=(n_cells,) * 3, ng=3)
    solver = Solver3D(partition, model, SolverConfig(cfl=cfl, max_iter=n_steps,
                                                     print_interval=10000))

    x = partition.coordinates(Axis.X)[None, None, :]
    y = partition.coordinates(Axis.Y)[None, :, None]
    rho = 1.0 + 0.1 * np.sin(2 * np.pi * x) * np.cos(2 * np.pi * y)
    solver.set_initial_condition(FlowState.from_primitives(rho, 0.5, 0.3, 0.1, 1.0, gas))
    solver.set_boundary_treatment(DomainBoundary.periodic())

    start_time = time.time()
    solver.solve()
    elapsed = time.time() - start_time
    return elapsed, solver.iteration


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Solver performance benchmark")
    parser.add_argument("--cells", type=int, default=16, help="cells per axis")
    parser.add_argument("--steps", type=int, default=5, help="time steps per run")
    parser.add_argument("-v", "--verbose", help="verbose output", action="store_true")
    parser.add_argument("-vv", "--very-verbose", help="very verbose output", action="store_true")
    args = parser.parse_args()

    configure_logging(args.verbose, args.very_verbose)

    print("=" * 80)
    print("PERFORMANCE BENCHMARK")
    print("=" * 80)
    print(f"\nTest case: {args.cells}³ cells, {args.steps} steps, periodic")

    results = {}
    for scheme in Scheme:
        for viscous in (False, True):
            label = f"{scheme.value}{' + viscous' if viscous else ''}"
            elapsed, steps = run_benchmark(args.cells, args.steps, scheme, viscous)
            results[label] = elapsed / steps
            print(f"\n✓ {label}: {elapsed:.3f} s, {elapsed / steps * 1000:.1f} ms per step")

    print("\n" + "=" * 80)
    print("PERFORMANCE SUMMARY")
    print("=" * 80)
    baseline = results[Scheme.WENO5.value]
    print(f"\n{'Configuration':<25} {'ms/step':<12} {'Relative'}")
    print("-" * 50)
    for label, per_step in results.items():
        print(f"{label:<25} {per_step * 1000:<12.1f} {per_step / baseline:.2f}x")
