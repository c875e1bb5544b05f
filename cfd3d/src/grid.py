"""
Index arithmetic for the block-structured node grid.

Nodes are stored row-major as (k, j, i) with i (x) varying fastest, so the
flat offset of a node is (k * nj + j) * ni + i. None of these helpers check
bounds: callers iterate over the ranges a Partition provides.
"""

from enum import IntEnum

import numpy as np


class Axis(IntEnum):
    """Spatial direction; the value is also the velocity index minus one."""
    X = 0
    Y = 1
    Z = 2

    @property
    def storage_axis(self) -> int:
        """Position of this direction in a (k, j, i) shaped array."""
        return 2 - self.value

    def shift(self, offset: int) -> tuple:
        """(dk, dj, di) displacement of `offset` nodes along this axis."""
        delta = [0, 0, 0]
        delta[self.storage_axis] = offset
        return tuple(delta)


def linear_offset(k: int, j: int, i: int, j_extent: int, i_extent: int) -> int:
    """Row-major flat index of node (k, j, i)."""
    return (k * j_extent + j) * i_extent + i


def node_from_physical(s, s_min: float, dds: float, ng: int):
    """
    Nearest node index of a physical coordinate.

    The half-spacing shift compensates for int() truncating toward zero, so
    the result is only correct for s >= s_min.

    Args:
        s: Physical coordinate (scalar or array)
        s_min: Domain lower bound on this axis
        dds: Inverse grid spacing 1/ds
        ng: Ghost layer depth
    """
    n = (s - s_min) * dds + 0.5
    if np.ndim(n):
        return np.asarray(n).astype(int) + ng
    return int(n) + ng


def clamp_node(n: int, n_min: int, n_max: int) -> int:
    """Clamp a node index into the half-open range [n_min, n_max)."""
    return min(n_max - 1, max(n_min, n))


def physical_from_node(n, s_min: float, ds: float, ng: int):
    """Physical coordinate of node index n (exact inverse of the grid mapping)."""
    return s_min + (n - ng) * ds
