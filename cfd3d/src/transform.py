"""
Conversions between conservative and primitive variables.

Conservative vector (leading axis of every array):
    U = [rho, rhoU, rhoV, rhoW, rhoE]

Primitive vectors, both 6 components:
    thermodynamic   Uo = [rho, u, v, w, p, T]    (to_primitive)
    characteristic  Uo = [rho, u, v, w, hT, c]   (characteristic_state, symmetric_average)

All functions accept a single node (shape (5,)) or any block of nodes
(shape (5, ...)). Nothing here guards against rho <= 0.
"""

import numpy as np

from .model import Averager


def _kinetic(U: np.ndarray) -> np.ndarray:
    """Kinetic energy per volume 0.5 * |rho v|² / rho."""
    return 0.5 * (U[1] * U[1] + U[2] * U[2] + U[3] * U[3]) / U[0]


def pressure(gamma: float, U: np.ndarray) -> np.ndarray:
    """p = (gamma - 1) * (rhoE - 0.5 * rho * |v|²)"""
    return (U[4] - _kinetic(U)) * (gamma - 1.0)


def temperature(cv: float, U: np.ndarray) -> np.ndarray:
    """T = e / cv with e the specific internal energy."""
    return (U[4] - _kinetic(U)) / (U[0] * cv)


def to_primitive(gamma: float, gas_R: float, U: np.ndarray) -> np.ndarray:
    """Thermodynamic primitive state [rho, u, v, w, p, T]."""
    U = np.asarray(U, dtype=float)
    Uo = np.empty((6,) + U.shape[1:])
    Uo[0] = U[0]
    Uo[1] = U[1] / U[0]
    Uo[2] = U[2] / U[0]
    Uo[3] = U[3] / U[0]
    Uo[4] = pressure(gamma, U)
    Uo[5] = Uo[4] / (Uo[0] * gas_R)
    return Uo


def to_conservative(gamma: float, Uo: np.ndarray) -> np.ndarray:
    """
    Conservative state from [rho, u, v, w, p, ...].

    Only the first five entries are used, so the trailing temperature of a
    thermodynamic primitive vector is ignored.
    """
    Uo = np.asarray(Uo, dtype=float)
    U = np.empty((5,) + Uo.shape[1:])
    U[0] = Uo[0]
    U[1] = Uo[0] * Uo[1]
    U[2] = Uo[0] * Uo[2]
    U[3] = Uo[0] * Uo[3]
    U[4] = 0.5 * Uo[0] * (Uo[1] * Uo[1] + Uo[2] * Uo[2] + Uo[3] * Uo[3]) + Uo[4] / (gamma - 1.0)
    return U


def _velocity_enthalpy(gamma: float, U: np.ndarray):
    rho = U[0]
    u = U[1] / rho
    v = U[2] / rho
    w = U[3] / rho
    hT = (U[4] / rho) * gamma - 0.5 * (u * u + v * v + w * w) * (gamma - 1.0)
    return rho, u, v, w, hT


def _sound_speed(gamma, u, v, w, hT):
    return np.sqrt((gamma - 1.0) * (hT - 0.5 * (u * u + v * v + w * w)))


def characteristic_state(gamma: float, U: np.ndarray) -> np.ndarray:
    """[rho, u, v, w, hT, c] of a single conservative state."""
    U = np.asarray(U, dtype=float)
    Uo = np.empty((6,) + U.shape[1:])
    Uo[0], Uo[1], Uo[2], Uo[3], Uo[4] = _velocity_enthalpy(gamma, U)
    Uo[5] = _sound_speed(gamma, Uo[1], Uo[2], Uo[3], Uo[4])
    return Uo


def symmetric_average(averager: Averager, gamma: float, UL: np.ndarray,
                      UR: np.ndarray) -> np.ndarray:
    """
    Face state [rho, u, v, w, hT, c] from the two neighbouring conservative states.

    Velocity and total enthalpy are blended as (xL + D * xR) / (1 + D) with
    D = 1 for the arithmetic mean and D = sqrt(rhoR / rhoL) for the Roe
    average; the sound speed follows from the blended enthalpy.
    """
    UL = np.asarray(UL, dtype=float)
    UR = np.asarray(UR, dtype=float)
    rhoL, uL, vL, wL, hTL = _velocity_enthalpy(gamma, UL)
    rhoR, uR, vR, wR, hTR = _velocity_enthalpy(gamma, UR)

    Uo = np.empty((6,) + np.broadcast_shapes(UL.shape[1:], UR.shape[1:]))
    if averager is Averager.ROE:
        D = np.sqrt(rhoR / rhoL)
        Uo[0] = np.sqrt(rhoL * rhoR)
    else:
        D = 1.0
        Uo[0] = 0.5 * (rhoL + rhoR)
    Uo[1] = (uL + D * uR) / (1.0 + D)
    Uo[2] = (vL + D * vR) / (1.0 + D)
    Uo[3] = (wL + D * wR) / (1.0 + D)
    Uo[4] = (hTL + D * hTR) / (1.0 + D)
    Uo[5] = _sound_speed(gamma, Uo[1], Uo[2], Uo[3], Uo[4])
    return Uo
