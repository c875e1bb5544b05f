"""
Sod's shock tube test case - classic validation for compressible flow solvers.

The shock tube problem (Sod, 1978) is a Riemann problem with:
- Left state: high pressure gas at rest
- Right state: low pressure gas at rest
- Initial discontinuity at x = 0.5

The exact solution consists of:
1. Left state (undisturbed)
2. Rarefaction fan
3. Contact discontinuity
4. Shock wave
5. Right state (undisturbed)

Everything is non-dimensional (R = 1), run on a quasi-1D block along x.
"""

import numpy as np

from cfd3d.src import (
    Axis, DomainBoundary, FlowModel, FlowState, GasProperties, Partition,
    Solver3D, SolverConfig, ZeroGradientBC
)

SOD_LEFT = (1.0, 0.0, 1.0)      # rho, u, p
SOD_RIGHT = (0.125, 0.0, 0.1)


def sod_shock_tube_exact(x: np.ndarray, t: float, gamma: float = 1.4,
                         left=SOD_LEFT, right=SOD_RIGHT, x0: float = 0.5) -> dict:
    """
    Exact solution of a shock tube with a left rarefaction and a right shock.

    Args:
        x: Positions
        t: Time
        gamma: Specific heat ratio
        left, right: Initial (rho, u, p) on each side
        x0: Position of the initial discontinuity

    Returns:
        Dictionary with exact solution (rho, u, p arrays) and the wave
        positions 'contact' and 'shock'
    """
    rho_L, u_L, p_L = left
    rho_R, u_R, p_R = right

    a_L = np.sqrt(gamma * p_L / rho_L)
    a_R = np.sqrt(gamma * p_R / rho_R)

    gm1 = gamma - 1
    gp1 = gamma + 1

    # Newton iteration for pressure in star region
    p_star = 0.5 * (p_L + p_R)
    for _ in range(50):
        f_L = 2 * a_L / gm1 * ((p_star / p_L)**(gm1 / (2 * gamma)) - 1)
        df_L = 1 / (rho_L * a_L) * (p_star / p_L)**(-gp1 / (2 * gamma))

        A_R = 2 / (gp1 * rho_R)
        B_R = gm1 / gp1 * p_R
        f_R = (p_star - p_R) * np.sqrt(A_R / (p_star + B_R))
        df_R = np.sqrt(A_R / (p_star + B_R)) * (1 - 0.5 * (p_star - p_R) / (p_star + B_R))

        p_new = p_star - (f_L + f_R + (u_R - u_L)) / (df_L + df_R)
        p_new = max(1e-3 * p_R, p_new)
        if abs(p_new - p_star) / p_star < 1e-12:
            p_star = p_new
            break
        p_star = p_new

    u_star = 0.5 * (u_L + u_R) + 0.5 * (f_R - f_L)

    p_ratio = p_star / p_R
    rho_star_R = rho_R * (p_ratio + gm1 / gp1) / (gm1 / gp1 * p_ratio + 1)
    rho_star_L = rho_L * (p_star / p_L)**(1 / gamma)

    # Wave speeds
    S = u_R + a_R * np.sqrt(gp1 / (2 * gamma) * p_ratio + gm1 / (2 * gamma))
    C = u_star
    H = u_L - a_L
    T = u_star - a_L * (p_star / p_L)**(gm1 / (2 * gamma))

    x = np.asarray(x, dtype=float)
    s = (x - x0) / t if t > 0 else np.where(x < x0, -np.inf, np.inf)

    rho = np.empty_like(x)
    u = np.empty_like(x)
    p = np.empty_like(x)

    left_state = s < H
    fan = (s >= H) & (s < T)
    star_L = (s >= T) & (s < C)
    star_R = (s >= C) & (s < S)
    right_state = s >= S

    rho[left_state], u[left_state], p[left_state] = rho_L, u_L, p_L
    u_fan = 2 / gp1 * (a_L + s[fan] + 0.5 * gm1 * u_L)
    a_fan = a_L - 0.5 * gm1 * (u_fan - u_L)
    u[fan] = u_fan
    rho[fan] = rho_L * (a_fan / a_L)**(2 / gm1)
    p[fan] = p_L * (a_fan / a_L)**(2 * gamma / gm1)
    rho[star_L], u[star_L], p[star_L] = rho_star_L, u_star, p_star
    rho[star_R], u[star_R], p[star_R] = rho_star_R, u_star, p_star
    rho[right_state], u[right_state], p[right_state] = rho_R, u_R, p_R

    return {
        'rho': rho,
        'u': u,
        'p': p,
        'contact': x0 + C * t,
        'shock': x0 + S * t,
    }


def create_shock_tube_solver(n_cells: int = 100, cfl: float = 0.5, gamma: float = 1.4,
                             **model_options) -> Solver3D:
    """Inviscid Sod shock tube on [0, 1] with zero-gradient ends."""
    gas = GasProperties(gamma=gamma, R=1.0)
    model = FlowModel(gas=gas, **model_options)
    partition = Partition.uniform(1.0, n_cells, ng=3)
    solver = Solver3D(partition, model, SolverConfig(cfl=cfl, max_iter=100000,
                                                     print_interval=1000))

    x = partition.coordinates(Axis.X)[None, None, :]
    rho = np.where(x < 0.5, SOD_LEFT[0], SOD_RIGHT[0])
    p = np.where(x < 0.5, SOD_LEFT[2], SOD_RIGHT[2])
    solver.set_initial_condition(FlowState.from_primitives(rho, 0.0, 0.0, 0.0, p, gas))
    solver.set_boundary_treatment(DomainBoundary.uniform(ZeroGradientBC()))
    return solver


def run_shock_tube_test(n_cells: int = 100, t_final: float = 0.2, cfl: float = 0.5,
                        **model_options):
    """
    Run Sod's shock tube test case.

    Returns:
        solver: Solver object with final solution
        x: Node coordinates along the tube
        state: Numerical solution along the tube
        exact: Exact solution at the final time
    """
    solver = create_shock_tube_solver(n_cells, cfl, **model_options)
    solver.solve(max_time=t_final)
    x, state = solver.line(Axis.X)
    exact = sod_shock_tube_exact(x, solver.time, solver.model.gamma)
    return solver, x, state, exact
