"""
Flow state representation using conservative variables.

State is defined by:
    rho               - density
    rhoU, rhoV, rhoW  - momentum per volume
    rhoE              - total energy per volume

Arrays may have any shape (a line cut, a plane, a whole block); primitive
quantities are computed on demand.
"""

import numpy as np
from dataclasses import dataclass

from . import transform
from .gas import GasProperties


@dataclass
class FlowState:
    """
    Represents the flow state at a set of nodes using conservative variables.

    Conservative variables (stored directly):
        rho              : Density
        rhoU, rhoV, rhoW : Momentum per volume
        rhoE             : Total energy per volume

    Primitive variables (computed as properties):
        u, v, w, p, T, a, M, H, e
    """
    rho: np.ndarray
    rhoU: np.ndarray
    rhoV: np.ndarray
    rhoW: np.ndarray
    rhoE: np.ndarray
    gas: GasProperties

    # --- Primitive variables as properties ---

    @property
    def u(self) -> np.ndarray:
        return self.rhoU / self.rho

    @property
    def v(self) -> np.ndarray:
        return self.rhoV / self.rho

    @property
    def w(self) -> np.ndarray:
        return self.rhoW / self.rho

    @property
    def speed(self) -> np.ndarray:
        """Velocity magnitude."""
        return np.sqrt(self.u**2 + self.v**2 + self.w**2)

    @property
    def p(self) -> np.ndarray:
        """Pressure from total energy."""
        return transform.pressure(self.gas.gamma, self.to_array())

    @property
    def T(self) -> np.ndarray:
        """Temperature from ideal gas law."""
        return self.p / (self.rho * self.gas.R)

    @property
    def e(self) -> np.ndarray:
        """Specific internal energy."""
        return self.p / (self.rho * (self.gas.gamma - 1))

    @property
    def H(self) -> np.ndarray:
        """Total specific enthalpy."""
        return (self.rhoE + self.p) / self.rho

    @property
    def a(self) -> np.ndarray:
        """Speed of sound."""
        return np.sqrt(self.gas.gamma * self.p / self.rho)

    @property
    def M(self) -> np.ndarray:
        """Mach number."""
        return self.speed / self.a

    # --- Array conversion methods ---

    def to_array(self) -> np.ndarray:
        """
        Convert to conservative variable array.

        Returns:
            U: Array of shape (5,) + rho.shape [rho, rhoU, rhoV, rhoW, rhoE]
        """
        return np.stack([np.asarray(x, dtype=float) for x in
                         (self.rho, self.rhoU, self.rhoV, self.rhoW, self.rhoE)])

    @classmethod
    def from_array(cls, U: np.ndarray, gas: GasProperties) -> 'FlowState':
        """Create FlowState from a conservative variable array (5, ...)."""
        return cls(rho=U[0], rhoU=U[1], rhoV=U[2], rhoW=U[3], rhoE=U[4], gas=gas)

    @classmethod
    def from_primitives(cls, rho, u, v, w, p, gas: GasProperties) -> 'FlowState':
        """
        Create FlowState from primitive variables.

        Scalars and arrays broadcast against each other.
        """
        rho, u, v, w, p = np.broadcast_arrays(*(np.asarray(x, dtype=float)
                                                for x in (rho, u, v, w, p)))
        U = transform.to_conservative(gas.gamma, np.stack([rho, u, v, w, p]))
        return cls.from_array(U, gas)
