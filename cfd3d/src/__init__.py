"""
3D Compressible Flow Solver Package
===================================

A finite-volume core for the compressible Navier-Stokes equations on a
block-structured node grid with ghost layers.

Features:
- Characteristic-wise WENO5 / WENO3 / first order upwind reconstruction
- Local Lax-Friedrichs or Steger-Warming flux vector splitting
- Roe or arithmetic face averaging
- Central viscous fluxes with Sutherland viscosity
- Symmetric dimension splitting (Z, Y, X, X, Y, Z) with 3-stage SSP RK sweeps

State representation (conservative variables, leading array axis):
    rho               - density
    rhoU, rhoV, rhoW  - momentum per volume
    rhoE              - total energy per volume

Example:
    partition = Partition.uniform(length=1.0, cells=100)
    model = FlowModel(gas=GasProperties(gamma=1.4, R=1.0))
    solver = Solver3D(partition, model)
    solver.set_initial_condition(FlowState.from_primitives(rho, 0, 0, 0, p, model.gas))
    solver.set_boundary_treatment(DomainBoundary.uniform(ZeroGradientBC()))
    solver.solve(max_time=0.2)
"""

from .gas import GasProperties, sutherland_viscosity
from .model import (Averager, ConfigurationError, FlowModel, Scheme, Splitter,
                    dataclass_from_dict)
from .grid import Axis
from .partition import Face, Partition, Region
from .field import Field, GeoTag, TimeLevel
from .state import FlowState
from .reconstruction import FirstOrderUpwind, ReconstructionScheme, WENO3, WENO5
from .flux import FaceWindow, FluxReconstructor, convective_flux
from .boundary import (BoundaryCondition, BoundaryTreatment, DomainBoundary, PeriodicBC,
                       SlipWallBC, ZeroGradientBC)
from .timestepping import advance_one_time_step, compute_timestep
from .solver import Solver3D, SolverConfig
from .logs import configure_logging

__all__ = [
    # Configuration
    'GasProperties',
    'sutherland_viscosity',
    'FlowModel',
    'Scheme',
    'Splitter',
    'Averager',
    'ConfigurationError',
    'dataclass_from_dict',

    # Grid and storage
    'Axis',
    'Face',
    'Region',
    'Partition',
    'Field',
    'GeoTag',
    'TimeLevel',

    # Flow state
    'FlowState',

    # Reconstruction and fluxes
    'ReconstructionScheme',
    'WENO5',
    'WENO3',
    'FirstOrderUpwind',
    'FaceWindow',
    'FluxReconstructor',
    'convective_flux',

    # Boundary conditions
    'BoundaryCondition',
    'BoundaryTreatment',
    'DomainBoundary',
    'ZeroGradientBC',
    'SlipWallBC',
    'PeriodicBC',

    # Time integration and solver
    'advance_one_time_step',
    'compute_timestep',
    'Solver3D',
    'SolverConfig',

    'configure_logging',
]

__version__ = '0.1.0'
