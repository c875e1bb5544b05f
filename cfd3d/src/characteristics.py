"""
Characteristic decomposition of the Euler flux Jacobian along a grid axis.

For a face state Uo = [rho, u, v, w, hT, c] and axis s with normal velocity
vn = Uo[s + 1] the Jacobian has eigenvalues

    (vn - c, vn, vn, vn, vn + c)

ordered as: left acoustic wave, one wave per velocity component (entropy
wave for the normal component, shear waves for the tangential ones), right
acoustic wave. The eigenvector matrices for all three axes are generated
from one template so that the normal and tangential roles simply permute.
"""

import numpy as np

from .model import Splitter

STEGER_WARMING_EPSILON = 1.0e-3


def eigenvalues(axis: int, Uo: np.ndarray) -> np.ndarray:
    """Flux Jacobian eigenvalues along `axis`, shape (5, ...)."""
    vn = Uo[axis + 1]
    c = Uo[5]
    return np.stack([vn - c, vn, vn, vn, vn + c])


def local_lax_friedrichs(Lambda: np.ndarray):
    """Shift all eigenvalues by one local bound |vn| + c."""
    alpha = np.abs(Lambda[2]) + Lambda[4] - Lambda[2]
    return 0.5 * (Lambda + alpha), 0.5 * (Lambda - alpha)


def steger_warming(Lambda: np.ndarray, epsilon: float = STEGER_WARMING_EPSILON):
    """Per-eigenvalue split smoothed near zero with sqrt(Lambda² + eps²)."""
    magnitude = np.sqrt(Lambda * Lambda + epsilon * epsilon)
    return 0.5 * (Lambda + magnitude), 0.5 * (Lambda - magnitude)


_SPLITTERS = {
    Splitter.LAX_FRIEDRICHS: local_lax_friedrichs,
    Splitter.STEGER_WARMING: steger_warming,
}


def split_eigenvalues(splitter: Splitter, Lambda: np.ndarray):
    """
    Split eigenvalues into right-going (>= 0) and left-going (<= 0) parts.

    Returns:
        (LambdaP, LambdaN) with LambdaP + LambdaN == Lambda
    """
    return _SPLITTERS[splitter](Lambda)


def left_eigenvectors(axis: int, gamma: float, Uo: np.ndarray) -> np.ndarray:
    """Rows are the left eigenvectors, shape (5, 5, ...)."""
    vel = (Uo[1], Uo[2], Uo[3])
    c = Uo[5]
    q = 0.5 * (vel[0] * vel[0] + vel[1] * vel[1] + vel[2] * vel[2])
    b = (gamma - 1.0) / (2.0 * c * c)
    d = 1.0 / (2.0 * c)
    vn = vel[axis]

    L = np.zeros((5, 5) + np.shape(c))
    # acoustic waves
    L[0, 0] = b * q + d * vn
    L[4, 0] = b * q - d * vn
    for t in range(3):
        L[0, 1 + t] = -b * vel[t]
        L[4, 1 + t] = -b * vel[t]
    L[0, 1 + axis] -= d
    L[4, 1 + axis] += d
    L[0, 4] = b
    L[4, 4] = b
    # entropy (normal) and shear (tangential) waves
    for r in range(3):
        row = 1 + r
        if r == axis:
            L[row, 0] = -2.0 * b * q + 1.0
            for t in range(3):
                L[row, 1 + t] = 2.0 * b * vel[t]
            L[row, 4] = -2.0 * b
        else:
            L[row, 0] = -2.0 * b * q * vel[r]
            for t in range(3):
                L[row, 1 + t] = 2.0 * b * vel[r] * vel[t]
            L[row, row] += 1.0
            L[row, 4] = -2.0 * b * vel[r]
    return L


def right_eigenvectors(axis: int, Uo: np.ndarray) -> np.ndarray:
    """Columns are the right eigenvectors, shape (5, 5, ...)."""
    vel = (Uo[1], Uo[2], Uo[3])
    hT = Uo[4]
    c = Uo[5]
    q = 0.5 * (vel[0] * vel[0] + vel[1] * vel[1] + vel[2] * vel[2])
    vn = vel[axis]

    R = np.zeros((5, 5) + np.shape(c))
    R[0, 0] = 1.0
    R[0, 4] = 1.0
    for t in range(3):
        R[1 + t, 0] = vel[t]
        R[1 + t, 4] = vel[t]
    R[1 + axis, 0] -= c
    R[1 + axis, 4] += c
    R[4, 0] = hT - vn * c
    R[4, 4] = hT + vn * c
    for r in range(3):
        col = 1 + r
        if r == axis:
            R[0, col] = 1.0
            R[1 + axis, col] = vn
            R[4, col] = vn * vn - q
        else:
            R[col, col] = 1.0
            R[4, col] = vel[r]
    return R


def project(M: np.ndarray, V: np.ndarray) -> np.ndarray:
    """Batched matrix-vector product: M (5, 5, ...) times V (5, ...)."""
    return np.einsum('ij...,j...->i...', M, V)
