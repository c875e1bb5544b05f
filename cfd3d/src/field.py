"""
Multi-time-level storage of the conservative field.

Every node keeps its conservative state in three named slots so a stage can
read one slot while writing another:

    OLD - state at the start of the sweep (and its result)
    NEW - first Runge-Kutta stage
    MID - second Runge-Kutta stage

plus a geometry tag; only FLUID nodes are advanced by the flow solver.
"""

from enum import IntEnum

import numpy as np

from .grid import Axis, linear_offset
from .partition import Partition, Region

N_VARS = 5  # rho, rhoU, rhoV, rhoW, rhoE


class TimeLevel(IntEnum):
    OLD = 0
    NEW = 1
    MID = 2


class GeoTag(IntEnum):
    FLUID = 0
    SOLID = 1
    OTHER = 2


class Field:
    """
    Conservative variables of all nodes at all time levels.

    Attributes:
        partition: Node layout
        U: Array of shape (3, 5, nz, ny, nx), indexed by TimeLevel first
        geo: Geometry tags of shape (nz, ny, nx)
    """

    def __init__(self, partition: Partition):
        self.partition = partition
        self.U = np.zeros((len(TimeLevel), N_VARS) + partition.shape)
        self.geo = np.full(partition.shape, GeoTag.FLUID, dtype=np.int8)

    def __getitem__(self, level: TimeLevel) -> np.ndarray:
        """View of one time level, shape (5, nz, ny, nx)."""
        return self.U[level]

    def node(self, level: TimeLevel, k: int, j: int, i: int) -> np.ndarray:
        """View of the 5 conservative variables of a single node."""
        n = self.partition.n
        flat = self.U[level].reshape(N_VARS, -1)
        return flat[:, linear_offset(k, j, i, n[Axis.Y], n[Axis.X])]

    def fill(self, level: TimeLevel, U) -> None:
        """Broadcast a state (5,) or field (5, nz, ny, nx) into a time level."""
        U = np.asarray(U, dtype=float)
        if U.ndim == 1:
            U = U.reshape(N_VARS, 1, 1, 1)
        self.U[level] = U

    def copy_level(self, source: TimeLevel, target: TimeLevel) -> None:
        if source != target:
            self.U[target] = self.U[source]

    def fluid_mask(self, region: Region = Region.INTERIOR) -> np.ndarray:
        return self.geo[self.partition.slices(region)] == GeoTag.FLUID

    def interior(self, level: TimeLevel = TimeLevel.OLD) -> np.ndarray:
        """View of the interior nodes of a time level."""
        return self.U[level][(slice(None),) + self.partition.slices(Region.INTERIOR)]
