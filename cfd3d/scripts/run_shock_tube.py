"""
Run Sod's shock tube test case with visualization and comparison to exact solution.

This script demonstrates:
1. Unsteady simulation on a quasi-1D block of the 3D solver
2. Shock capturing with characteristic-wise WENO reconstruction
3. Comparison to exact Riemann solution
4. Resolution study

Run from the repository root:
    python cfd3d/scripts/run_shock_tube.py -v --cells 200
"""

import sys
from pathlib import Path

# Add repository root to path
project_root = Path(__file__).parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

import argparse

import numpy as np
import matplotlib.pyplot as plt

from cfd3d.src import configure_logging
from cfd3d.tests.shock_tube import run_shock_tube_test


def plot_shock_tube_results(solver, x, state, exact, filename='shock_tube_results.png'):
    """Create comparison plots."""
    gamma = solver.model.gamma
    fig, axes = plt.subplots(2, 2, figsize=(14, 10))
    fig.suptitle(f'Sod Shock Tube: t = {solver.time:.3f}, {solver.model.scheme.value}, '
                 f'{solver.model.splitter.value}', fontsize=14, fontweight='bold')

    e_cfd = state.p / ((gamma - 1) * state.rho)
    e_exact = exact['p'] / ((gamma - 1) * exact['rho'])
    panels = [
        (state.rho, exact['rho'], 'Density'),
        (state.u, exact['u'], 'Velocity'),
        (state.p, exact['p'], 'Pressure'),
        (e_cfd, e_exact, 'Specific Internal Energy'),
    ]
    for ax, (cfd, ref, title) in zip(axes.flat, panels):
        ax.plot(x, cfd, 'bo-', markersize=3, linewidth=1, label='CFD')
        ax.plot(x, ref, 'r--', linewidth=2, label='Exact')
        ax.axvline(x=0.5, color='gray', linestyle=':', alpha=0.5)
        ax.set_xlabel('x')
        ax.set_ylabel(title)
        ax.set_title(title)
        ax.legend()
        ax.grid(True, alpha=0.3)
        ax.set_xlim([0, 1])

    plt.tight_layout()
    plt.savefig(filename, dpi=150, bbox_inches='tight')
    print(f"\nSaved plot to: {filename}")
    return fig


def resolution_study(resolutions, t_final, cfl, **model_options):
    """Run the shock tube at several resolutions and plot the L1 errors."""
    print("\n" + "=" * 80)
    print("RESOLUTION STUDY")
    print("=" * 80)

    errors = {'n_cells': [], 'rho_L1': [], 'u_L1': [], 'p_L1': []}
    for n_cells in resolutions:
        print(f"Running with {n_cells} cells...")
        _, _, state, exact = run_shock_tube_test(n_cells, t_final, cfl, **model_options)
        errors['n_cells'].append(n_cells)
        errors['rho_L1'].append(np.mean(np.abs(state.rho - exact['rho'])))
        errors['u_L1'].append(np.mean(np.abs(state.u - exact['u'])))
        errors['p_L1'].append(np.mean(np.abs(state.p - exact['p'])))

    dx = 1.0 / np.array(errors['n_cells'])
    fig, ax = plt.subplots(figsize=(7, 5))
    ax.loglog(dx, errors['rho_L1'], 'b-o', linewidth=2, label='Density')
    ax.loglog(dx, errors['u_L1'], 'r-s', linewidth=2, label='Velocity')
    ax.loglog(dx, errors['p_L1'], 'g-^', linewidth=2, label='Pressure')
    ax.loglog(dx, dx, 'k--', alpha=0.5, label='1st order')
    ax.set_xlabel('Grid spacing Δx')
    ax.set_ylabel('L1 error')
    ax.set_title('Error vs Grid Resolution')
    ax.legend()
    ax.grid(True, alpha=0.3)
    ax.invert_xaxis()
    plt.tight_layout()
    plt.savefig('shock_tube_convergence.png', dpi=150, bbox_inches='tight')
    print("\nSaved convergence plot to: shock_tube_convergence.png")

    print(f"\n{'N cells':<10} {'ρ L1':<12} {'u L1':<12} {'p L1':<12}")
    print("-" * 50)
    for i, n in enumerate(errors['n_cells']):
        print(f"{n:<10} {errors['rho_L1'][i]:<12.6f} {errors['u_L1'][i]:<12.6f} "
              f"{errors['p_L1'][i]:<12.6f}")
    return errors


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Sod shock tube validation run")
    parser.add_argument("--cells", type=int, default=200, help="cells along the tube")
    parser.add_argument("--t-final", type=float, default=0.2, help="final time")
    parser.add_argument("--cfl", type=float, default=0.5, help="CFL number")
    parser.add_argument("--scheme", default="weno5", help="weno5, weno3 or upwind1")
    parser.add_argument("--splitter", default="lax_friedrichs",
                        help="lax_friedrichs or steger_warming")
    parser.add_argument("--averager", default="roe", help="roe or arithmetic")
    parser.add_argument("--study", action="store_true", help="run a resolution study")
    parser.add_argument("-v", "--verbose", help="verbose output", action="store_true")
    parser.add_argument("-vv", "--very-verbose", help="very verbose output", action="store_true")
    args = parser.parse_args()

    configure_logging(args.verbose, args.very_verbose)
    options = dict(scheme=args.scheme, splitter=args.splitter, averager=args.averager)

    print("=" * 80)
    print(f"SOD SHOCK TUBE ({args.cells} cells, {args.scheme}, {args.splitter})")
    print("=" * 80)

    solver, x, state, exact = run_shock_tube_test(args.cells, args.t_final, args.cfl, **options)

    print(f"Time reached: {solver.time:.4f}")
    print(f"Iterations: {solver.iteration}")
    print(f"Density L1 error:  {np.mean(np.abs(state.rho - exact['rho'])):.6f}")
    print(f"Velocity L1 error: {np.mean(np.abs(state.u - exact['u'])):.6f}")
    print(f"Pressure L1 error: {np.mean(np.abs(state.p - exact['p'])):.6f}")

    plot_shock_tube_results(solver, x, state, exact)

    if args.study:
        resolution_study([50, 100, 200, 400], args.t_final, args.cfl, **options)

    plt.show()
