"""
CFD3D Package - 3D Compressible Flow Solver
===========================================

Re-exports all public components from cfd3d.src
"""

from cfd3d.src import (
    # Configuration
    GasProperties,
    FlowModel,
    Scheme,
    Splitter,
    Averager,
    ConfigurationError,
    # Grid and storage
    Axis,
    Face,
    Region,
    Partition,
    Field,
    GeoTag,
    TimeLevel,
    # Flow state
    FlowState,
    # Fluxes
    FluxReconstructor,
    # Boundary conditions
    BoundaryCondition,
    BoundaryTreatment,
    DomainBoundary,
    ZeroGradientBC,
    SlipWallBC,
    PeriodicBC,
    # Solver
    advance_one_time_step,
    Solver3D,
    SolverConfig,
    __version__,
)

__all__ = [
    'GasProperties',
    'FlowModel',
    'Scheme',
    'Splitter',
    'Averager',
    'ConfigurationError',
    'Axis',
    'Face',
    'Region',
    'Partition',
    'Field',
    'GeoTag',
    'TimeLevel',
    'FlowState',
    'FluxReconstructor',
    'BoundaryCondition',
    'BoundaryTreatment',
    'DomainBoundary',
    'ZeroGradientBC',
    'SlipWallBC',
    'PeriodicBC',
    'advance_one_time_step',
    'Solver3D',
    'SolverConfig',
]
