"""
Boundary treatment of the domain faces.

The integrator only knows the BoundaryTreatment interface: after every
Runge-Kutta stage it asks for the boundary and ghost nodes of the level just
written to be made valid. DomainBoundary implements it with one
BoundaryCondition per face. Conditions are applied axis by axis (X, Y, Z) and
always over full planes perpendicular to the face normal, so edge and vertex
corners hold the value of the last axis applied.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict

import numpy as np

from .field import Field, GeoTag, TimeLevel
from .grid import Axis
from .model import ConfigurationError, FlowModel
from .partition import Face, Partition

logger = logging.getLogger(__name__)


def plane(axis: Axis, idx: int) -> tuple:
    """Index of the full node plane idx along an axis of a (5, nz, ny, nx) array."""
    index = [slice(None)] * 3
    index[Axis(axis).storage_axis] = idx
    return (slice(None),) + tuple(index)


def face_layers(partition: Partition, face: Face):
    """
    Node layers along the face normal.

    Returns:
        boundary: Index of the boundary layer
        ghosts: Indices of the exterior ghost layers, nearest first
        inward: +1 on a lower face, -1 on an upper face
    """
    ng = partition.ng
    m = partition.m[face.axis]
    if face.upper:
        boundary = m + ng - 1
        return boundary, [boundary + g for g in range(1, ng + 1)], -1
    return ng, [ng - g for g in range(1, ng + 1)], 1


class BoundaryCondition(ABC):
    """Abstract base class for the condition on one domain face."""

    @abstractmethod
    def apply(self, U: np.ndarray, partition: Partition, face: Face,
              model: FlowModel) -> None:
        """
        Set the boundary and ghost layers of one face in place.

        Args:
            U: Conservative variables of one time level (5, nz, ny, nx)
            partition: Node layout
            face: Face to treat
            model: Flow model
        """
        pass


class ZeroGradientBC(BoundaryCondition):
    """Outflow: boundary and ghost layers copy the first interior layer."""

    def apply(self, U, partition, face, model):
        boundary, ghosts, inward = face_layers(partition, face)
        source = U[plane(face.axis, boundary + inward)]
        for idx in [boundary] + ghosts:
            U[plane(face.axis, idx)] = source


class SlipWallBC(BoundaryCondition):
    """
    Inviscid wall: zero normal velocity at the boundary layer.

    The boundary layer takes the first interior layer with its normal
    momentum (and the matching kinetic energy) removed. Ghost layers mirror
    the interior about the boundary layer with the normal momentum reversed.
    """

    def apply(self, U, partition, face, model):
        axis = face.axis
        boundary, ghosts, inward = face_layers(partition, face)

        for distance, idx in enumerate(ghosts, start=1):
            mirror = U[plane(axis, boundary + inward * distance)]
            U[plane(axis, idx)] = mirror
            U[(1 + axis,) + plane(axis, idx)[1:]] = -mirror[1 + axis]

        wall = U[plane(axis, boundary + inward)].copy()
        wall[4] -= 0.5 * wall[1 + axis] ** 2 / wall[0]
        wall[1 + axis] = 0.0
        U[plane(axis, boundary)] = wall


class PeriodicBC(BoundaryCondition):
    """
    Periodic face: boundary and ghost layers copy the interior layers one
    period away on the opposite side.

    The period is the number of interior layers, m - 2, so the lower boundary
    layer equals the last interior layer and the upper boundary layer equals
    the first one. Set it on both faces of an axis.
    """

    def apply(self, U, partition, face, model):
        axis = face.axis
        ng = partition.ng
        m = partition.m[axis]
        period = m - 2
        if period < ng + 1:
            raise ConfigurationError(
                f"Periodic {face.name} face needs at least {ng + 1} interior layers "
                f"on {axis.name}, got {period}")
        if face.upper:
            for idx in range(m + ng - 1, m + 2 * ng):
                U[plane(axis, idx)] = U[plane(axis, idx - period)]
        else:
            for idx in range(ng + 1):
                U[plane(axis, idx)] = U[plane(axis, idx + period)]


class BoundaryTreatment(ABC):
    """Makes the boundary and ghost nodes of one time level valid."""

    @abstractmethod
    def apply(self, level: TimeLevel, field: Field, model: FlowModel) -> None:
        pass


class DomainBoundary(BoundaryTreatment):
    """
    One boundary condition per domain face.

    Nodes not tagged FLUID keep their values.
    """

    def __init__(self, conditions: Dict[Face, BoundaryCondition]):
        missing = [face.name for face in Face if face not in conditions]
        if missing:
            raise ConfigurationError(f"No boundary condition for faces: {', '.join(missing)}")
        self.conditions = {face: conditions[face] for face in Face}
        logger.debug("Boundary conditions: %s",
                     {face.name: type(bc).__name__ for face, bc in self.conditions.items()})

    @classmethod
    def uniform(cls, condition: BoundaryCondition) -> 'DomainBoundary':
        """The same condition on every face."""
        return cls({face: condition for face in Face})

    @classmethod
    def periodic(cls) -> 'DomainBoundary':
        return cls.uniform(PeriodicBC())

    def apply(self, level, field, model):
        U = field[level]
        solid = field.geo != GeoTag.FLUID
        kept = U[:, solid] if solid.any() else None
        for face in Face:
            self.conditions[face].apply(U, field.partition, face, model)
        if kept is not None:
            U[:, solid] = kept
