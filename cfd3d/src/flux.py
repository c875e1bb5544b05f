"""
Numerical fluxes at cell faces.

The face between node P and its neighbour P + e_s along axis s is labelled by
P. Convective fluxes are reconstructed in characteristic space: the two face
states are averaged, the split fluxes of every stencil node are projected on
the left eigenvectors of the average, interpolated upwind-biased and projected
back. Diffusive fluxes use central differences across the face.

Everything is vectorized over a FaceWindow, the block of faces whose left
nodes lie in given node ranges.
"""

import logging
from typing import Optional, Sequence, Tuple

import numpy as np

from .characteristics import (eigenvalues, left_eigenvectors, project,
                              right_eigenvectors, split_eigenvalues)
from .gas import sutherland_viscosity
from .grid import Axis
from .model import FlowModel
from .partition import Partition, Region
from .reconstruction import get_scheme
from .transform import pressure, symmetric_average, temperature

logger = logging.getLogger(__name__)


def convective_flux(axis: int, gamma: float, U: np.ndarray) -> np.ndarray:
    """
    Euler flux along an axis.

    F = [rho vn, rhoU vn, rhoV vn, rhoW vn, rhoE vn] + p [0, e_s, vn]

    Args:
        axis: Flux direction
        gamma: Ratio of specific heats
        U: Conservative variables (5, ...)

    Returns:
        F: Physical flux (5, ...)
    """
    vn = U[axis + 1] / U[0]
    p = pressure(gamma, U)
    F = U * vn
    F[axis + 1] += p
    F[4] += p * vn
    return F


class FaceWindow:
    """
    Block of faces normal to one axis.

    Attributes:
        axis: Face normal direction
        ranges: Half-open node ranges ((x0, x1), (y0, y1), (z0, z1)) of the
            faces' left nodes
    """

    def __init__(self, axis: int, ranges: Sequence[Tuple[int, int]]):
        self.axis = Axis(axis)
        self.ranges = tuple(tuple(r) for r in ranges)

    @classmethod
    def interior(cls, partition: Partition, axis: int) -> 'FaceWindow':
        """
        Faces bounding the interior nodes along an axis.

        Along the axis the window runs one node further down than the
        interior, so face f+1 is the right face and face f the left face of
        interior node f.
        """
        ranges = list(partition.ns[Region.INTERIOR])
        lo, hi = ranges[axis]
        ranges[axis] = (lo - 1, hi)
        return cls(axis, ranges)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Storage shape (nz, ny, nx) of the block."""
        return tuple(self.ranges[a][1] - self.ranges[a][0] for a in (Axis.Z, Axis.Y, Axis.X))

    def take(self, arr: np.ndarray, along: int = 0,
             across: Optional[Tuple[int, int]] = None) -> np.ndarray:
        """
        View of a (..., nz, ny, nx) array over the window's left nodes.

        Args:
            arr: Node array with the storage axes last
            along: Node offset along the face normal
            across: Optional (axis, offset) displacement on a transverse axis
        """
        offset = [0, 0, 0]
        offset[self.axis] += along
        if across is not None:
            offset[across[0]] += across[1]
        index = []
        for a in (Axis.Z, Axis.Y, Axis.X):
            lo, hi = self.ranges[a][0] + offset[a], self.ranges[a][1] + offset[a]
            if lo < 0 or hi > arr.shape[a.storage_axis - 3]:
                raise IndexError(
                    f"Stencil [{lo}, {hi}) on {a.name} exceeds {arr.shape[a.storage_axis - 3]} nodes")
            index.append(slice(lo, hi))
        return arr[(Ellipsis,) + tuple(index)]


class FluxReconstructor:
    """Convective and diffusive numerical fluxes for a fixed FlowModel."""

    def __init__(self, model: FlowModel):
        self.model = model
        self.scheme = get_scheme(model.scheme)
        logger.debug("Flux reconstruction: %s, %s splitting, %s average",
                     type(self.scheme).__name__, model.splitter.value, model.averager.value)

    @property
    def width(self) -> int:
        return self.scheme.width

    def numerical_convective_flux(self, axis: int, U: np.ndarray,
                                  window: FaceWindow) -> np.ndarray:
        """
        Reconstructed convective flux at every face of a window.

        Args:
            axis: Face normal direction
            U: Conservative variables of one time level (5, nz, ny, nx)
            window: Faces to evaluate

        Returns:
            Fhat: (5,) + window.shape
        """
        gamma = self.model.gamma
        width = self.scheme.width

        Uo = symmetric_average(self.model.averager, gamma, window.take(U, 0), window.take(U, 1))
        L = left_eigenvectors(axis, gamma, Uo)
        R = right_eigenvectors(axis, Uo)
        plus, minus = split_eigenvalues(self.model.splitter, eigenvalues(axis, Uo))
        spread = plus - minus

        g_plus = []
        g_minus = []
        for offset in range(1 - width, width + 1):
            Um = window.take(U, offset)
            LF = project(L, convective_flux(axis, gamma, Um))
            LU = spread * project(L, Um)
            g_plus.append(0.5 * (LF + LU))
            g_minus.append(0.5 * (LF - LU))

        ghat = self.scheme.positive(g_plus) + self.scheme.negative(g_minus)
        return project(R, ghat)

    def numerical_diffusive_flux(self, axis: int, U: np.ndarray, window: FaceWindow,
                                 dd: Sequence[float]) -> np.ndarray:
        """
        Viscous and heat conduction flux at every face of a window.

        Derivatives normal to the face come from the two face nodes, tangential
        ones from the average of the central differences at both face nodes.

        Args:
            axis: Face normal direction
            U: Conservative variables of one time level (5, nz, ny, nx)
            window: Faces to evaluate
            dd: Inverse grid spacing per axis

        Returns:
            Fvhat: (5,) + window.shape
        """
        model = self.model
        s = Axis(axis)

        def velocity(Un):
            return Un[1:4] / Un[0]

        P = window.take(U, 0)
        E = window.take(U, 1)
        vel, velE = velocity(P), velocity(E)
        T = temperature(model.cv, P)
        TE = temperature(model.cv, E)

        # grad[a, b] = d vel_a / d x_b
        grad = np.empty((3, 3) + window.shape)
        grad[:, s] = (velE - vel) * dd[s]
        for t in Axis:
            if t == s:
                continue
            grad[:, t] = 0.25 * dd[t] * (velocity(window.take(U, 0, (t, 1)))
                                         + velocity(window.take(U, 1, (t, 1)))
                                         - velocity(window.take(U, 0, (t, -1)))
                                         - velocity(window.take(U, 1, (t, -1))))
        dT_dn = (TE - T) * dd[s]
        divV = grad[0, 0] + grad[1, 1] + grad[2, 2]

        vhat = 0.5 * (vel + velE)
        That = 0.5 * (T + TE)
        mu = model.ref_mu * sutherland_viscosity(That * model.ref_T)
        heatK = model.gamma * model.cv * mu / model.gas.prandtl

        Fv = np.zeros((5,) + window.shape)
        for a in Axis:
            Fv[1 + a] = mu * (grad[a, s] + grad[s, a])
        Fv[1 + s] -= (2.0 / 3.0) * mu * divV
        Fv[4] = heatK * dT_dn + Fv[1] * vhat[0] + Fv[2] * vhat[1] + Fv[3] * vhat[2]
        return Fv
