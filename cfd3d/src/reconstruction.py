"""
High-order interpolation of split characteristic fluxes to cell faces.

A scheme receives the stencil of a face as a sequence of arrays ordered by
node offset from the face's left node: for a scheme of width w the stencil
holds offsets -(w-1) .. w, i.e. 2*w entries with the left node at index w-1
and the right node at index w. All arithmetic is elementwise, so every entry
may be a whole block of faces.
"""

from abc import ABC, abstractmethod
from typing import Sequence

import numpy as np

from .model import Scheme


class ReconstructionScheme(ABC):
    """Abstract base class for face reconstruction schemes."""

    width: int = 1

    @abstractmethod
    def positive(self, g: Sequence[np.ndarray]) -> np.ndarray:
        """
        Left-biased face value of a right-going flux.

        Args:
            g: Stencil values at offsets -(width-1) .. width

        Returns:
            Face value
        """
        pass

    def negative(self, g: Sequence[np.ndarray]) -> np.ndarray:
        """Right-biased face value of a left-going flux (mirror of positive)."""
        return self.positive(g[::-1])


class FirstOrderUpwind(ReconstructionScheme):
    """Piecewise constant - the upwind node value."""

    width = 1

    def positive(self, g):
        return g[0]


class WENO3(ReconstructionScheme):
    """Third order weighted essentially non-oscillatory interpolation."""

    width = 2
    epsilon = 1.0e-6

    def positive(self, g):
        v1, v2, v3 = g[0], g[1], g[2]
        q0 = -0.5 * v1 + 1.5 * v2
        q1 = 0.5 * v2 + 0.5 * v3
        beta0 = (v2 - v1) ** 2
        beta1 = (v3 - v2) ** 2
        alpha0 = (1.0 / 3.0) / (self.epsilon + beta0) ** 2
        alpha1 = (2.0 / 3.0) / (self.epsilon + beta1) ** 2
        return (alpha0 * q0 + alpha1 * q1) / (alpha0 + alpha1)


class WENO5(ReconstructionScheme):
    """
    Fifth order WENO of Jiang and Shu.

    Three third-order candidate stencils are blended with nonlinear weights
    derived from their smoothness indicators; on smooth data the weights tend
    to the optimal (0.1, 0.6, 0.3).
    """

    width = 3
    epsilon = 1.0e-6

    def positive(self, g):
        v1, v2, v3, v4, v5 = g[0], g[1], g[2], g[3], g[4]
        q0 = (2.0 * v1 - 7.0 * v2 + 11.0 * v3) / 6.0
        q1 = (-v2 + 5.0 * v3 + 2.0 * v4) / 6.0
        q2 = (2.0 * v3 + 5.0 * v4 - v5) / 6.0

        beta0 = (13.0 / 12.0) * (v1 - 2.0 * v2 + v3) ** 2 + 0.25 * (v1 - 4.0 * v2 + 3.0 * v3) ** 2
        beta1 = (13.0 / 12.0) * (v2 - 2.0 * v3 + v4) ** 2 + 0.25 * (v2 - v4) ** 2
        beta2 = (13.0 / 12.0) * (v3 - 2.0 * v4 + v5) ** 2 + 0.25 * (3.0 * v3 - 4.0 * v4 + v5) ** 2

        alpha0 = 0.1 / (self.epsilon + beta0) ** 2
        alpha1 = 0.6 / (self.epsilon + beta1) ** 2
        alpha2 = 0.3 / (self.epsilon + beta2) ** 2
        return (alpha0 * q0 + alpha1 * q1 + alpha2 * q2) / (alpha0 + alpha1 + alpha2)


SCHEMES = {
    Scheme.WENO5: WENO5,
    Scheme.WENO3: WENO3,
    Scheme.UPWIND1: FirstOrderUpwind,
}


def get_scheme(scheme: Scheme) -> ReconstructionScheme:
    return SCHEMES[scheme]()
