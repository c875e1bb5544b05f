"""
Main solver class for 3D compressible flow on a block-structured grid.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Tuple

import numpy as np
import matplotlib.pyplot as plt

from .boundary import BoundaryTreatment
from .field import Field, GeoTag, TimeLevel
from .flux import FluxReconstructor
from .grid import Axis
from .model import ConfigurationError, FlowModel
from .partition import Partition, Region
from .state import FlowState
from .timestepping import advance_one_time_step, check_ghost_depth, compute_timestep
from .transform import pressure

logger = logging.getLogger(__name__)


@dataclass
class SolverConfig:
    """Configuration for the 3D compressible flow solver."""
    cfl: float = 0.5
    max_iter: int = 10000
    print_interval: int = 100
    check_positivity: bool = True   # Raise FloatingPointError on rho <= 0 or p <= 0


class Solver3D:
    """
    3D Compressible Navier-Stokes Solver.

    Features:
    - Characteristic-wise WENO reconstruction with Lax-Friedrichs or
      Steger-Warming flux vector splitting
    - Central viscous fluxes with Sutherland viscosity
    - Symmetric dimension splitting with 3-stage SSP Runge-Kutta sweeps
    - CFL time step selection
    """

    def __init__(self, partition: Partition, model: FlowModel, config: SolverConfig = None):
        """
        Initialize the solver.

        Args:
            partition: Grid layout
            model: Flow model
            config: Solver configuration
        """
        self.partition = partition
        self.model = model
        self.config = config if config is not None else SolverConfig()
        if self.config.cfl <= 0:
            raise ConfigurationError(f"CFL number must be positive, got {self.config.cfl}")

        self.field = Field(partition)
        self.reconstructor = FluxReconstructor(model)
        check_ghost_depth(partition, self.reconstructor)

        # Boundary treatment (must be set before solving)
        self.boundary = None

        self.initialized = False
        self.time = 0.0
        self.iteration = 0
        self.dt_history = []

    def set_initial_condition(self, state):
        """
        Set the initial flow state on all nodes and time levels.

        Args:
            state: FlowState or conservative array broadcastable to (5, nz, ny, nx)
        """
        U = state.to_array() if isinstance(state, FlowState) else np.asarray(state, dtype=float)
        if U.ndim == 1:
            U = U.reshape(5, 1, 1, 1)
        U = np.broadcast_to(U, self.field[TimeLevel.OLD].shape)
        for level in TimeLevel:
            self.field.fill(level, U)
        self.initialized = True
        self.time = 0.0
        self.iteration = 0
        self.dt_history = []
        if self.boundary is not None:
            self.boundary.apply(TimeLevel.OLD, self.field, self.model)

    def set_geometry(self, solid: np.ndarray):
        """Tag nodes as SOLID (boolean mask of shape (nz, ny, nx)); the rest stay FLUID."""
        self.field.geo[...] = np.where(solid, GeoTag.SOLID, GeoTag.FLUID)

    def set_boundary_treatment(self, boundary: BoundaryTreatment):
        """Set the boundary treatment and apply it to the current state."""
        self.boundary = boundary
        if self.initialized:
            boundary.apply(TimeLevel.OLD, self.field, self.model)

    def get_state(self) -> FlowState:
        """Get current flow state on all nodes."""
        return FlowState.from_array(self.field[TimeLevel.OLD], self.model.gas)

    def line(self, axis: Axis = Axis.X, through=None) -> Tuple[np.ndarray, FlowState]:
        """
        Coordinates and state of the normal-region nodes on a grid line.

        Args:
            axis: Direction of the line
            through: Point (x, y, z) the line passes nearest to (domain centre if omitted)
        """
        partition = self.partition
        if through is None:
            through = [0.5 * (lo + hi) for lo, hi in partition.domain]
        index = list(partition.locate(through))
        normal = partition.normal_slices()
        index[Axis(axis).storage_axis] = normal[Axis(axis).storage_axis]
        x = partition.coordinates(axis)[normal[Axis(axis).storage_axis]]
        U = self.field[TimeLevel.OLD][(slice(None),) + tuple(index)]
        return x, FlowState.from_array(U, self.model.gas)

    def conserved_totals(self) -> np.ndarray:
        """Sum of the five conserved quantities over the interior fluid nodes."""
        fluid = self.field.fluid_mask(Region.INTERIOR)
        return self.field.interior(TimeLevel.OLD)[:, fluid].sum(axis=1)

    def check_positivity(self):
        """
        Raise FloatingPointError if density or pressure is not positive (or
        not finite) at any fluid node of the normal region.
        """
        index = self.partition.normal_slices()
        U = self.field[TimeLevel.OLD][(slice(None),) + index]
        fluid = self.field.geo[index] == GeoTag.FLUID
        rho = U[0]
        p = pressure(self.model.gamma, U)
        bad = fluid & ~((rho > 0) & (p > 0))
        if np.any(bad):
            loc = tuple(int(n[0]) for n in np.nonzero(bad))
            node = tuple(n + s.start for n, s in zip(loc, index))
            raise FloatingPointError(
                f"Non-physical state at iteration {self.iteration}, t = {self.time:.4e}: "
                f"rho = {rho[loc]:.4e}, p = {p[loc]:.4e} at node (k, j, i) = {node}; "
                f"{int(bad.sum())} bad nodes")

    def step(self, dt: float = None) -> float:
        """
        Perform one time step.

        Args:
            dt: Time step (CFL-limited if omitted)

        Returns:
            dt: Time step taken
        """
        if self.boundary is None:
            raise ConfigurationError("Boundary treatment must be set before stepping")

        if dt is None:
            dt = compute_timestep(self.field, self.partition, self.model, self.config.cfl)

        advance_one_time_step(dt, self.field, self.model, self.boundary, self.reconstructor)

        self.time += dt
        self.iteration += 1
        self.dt_history.append(dt)

        if self.config.check_positivity:
            self.check_positivity()
        return dt

    def solve(self, max_time: float = None) -> Dict:
        """
        Run the solver to a final time or the maximum number of iterations.

        Args:
            max_time: Final simulation time (optional); the last step is
                shortened to end on it exactly

        Returns:
            Dictionary with run info
        """
        if self.boundary is None:
            raise ConfigurationError("Boundary treatment must be set before solving")

        if not self.initialized:
            raise ConfigurationError("Initial condition must be set before solving")

        logger.info("Starting 3D Compressible Flow Solver")
        logger.info("Nodes: %s, ghost layers: %d", self.partition.n, self.partition.ng)
        logger.info("Scheme: %s, splitting: %s, average: %s, viscous: %s",
                    self.model.scheme.value, self.model.splitter.value,
                    self.model.averager.value, self.model.viscous)
        logger.info("CFL: %g, max iterations: %d", self.config.cfl, self.config.max_iter)

        reached = max_time is not None and self.time >= max_time
        while not reached and self.iteration < self.config.max_iter:
            dt = compute_timestep(self.field, self.partition, self.model, self.config.cfl)
            if max_time is not None and self.time + dt >= max_time:
                dt = max_time - self.time
                reached = True
            self.step(dt)

            if self.iteration % self.config.print_interval == 0:
                logger.info("Iter %6d, t = %.4e, dt = %.4e", self.iteration, self.time, dt)

        if reached:
            logger.info("Reached final time %.4e after %d iterations", max_time, self.iteration)
        elif max_time is None:
            logger.info("Completed %d iterations, t = %.4e", self.iteration, self.time)
        else:
            logger.warning("Stopped at maximum iterations %d, t = %.4e",
                           self.iteration, self.time)

        return {
            'completed': reached or max_time is None,
            'iterations': self.iteration,
            'time': self.time,
            'dt_min': min(self.dt_history) if self.dt_history else None,
        }

    def plot_solution(self, filename: str = None, axis: Axis = Axis.X, show: bool = True):
        """Plot the current solution along a grid line through the domain centre."""
        x, state = self.line(axis)
        label = Axis(axis).name.lower()

        fig, axes = plt.subplots(2, 2, figsize=(10, 8))
        fig.suptitle(f'3D Compressible Flow Solution (t = {self.time:.4e}, iter = {self.iteration})')

        panels = [
            (state.rho, 'b-', 'Density'),
            (getattr(state, 'uvw'[axis]), 'r-', 'Velocity'),
            (state.p, 'g-', 'Pressure'),
            (state.T, 'm-', 'Temperature'),
        ]
        for ax, (values, style, title) in zip(axes.flat, panels):
            ax.plot(x, values, style, linewidth=2)
            ax.set_xlabel(label)
            ax.set_ylabel(title)
            ax.set_title(title)
            ax.grid(True)

        plt.tight_layout()

        if filename:
            plt.savefig(filename, dpi=150, bbox_inches='tight')
            logger.info("Saved plot to %s", filename)

        if show:
            plt.show()
        return fig
