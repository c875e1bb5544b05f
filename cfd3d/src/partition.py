"""
Domain partition of a block-structured node grid with ghost layers.

Along every axis the n = m + 2*ng node layers are classified as

    lower exterior ghost   [0, ng)
    lower boundary         [ng, ng + 1)
    interior               [ng + 1, m + ng - 1)
    upper boundary         [m + ng - 1, m + ng)
    upper exterior ghost   [m + ng, m + 2*ng)

Boundary and ghost regions only extend over the interior range of the two
transverse axes, so together they form a cross without edge or vertex
corners. Filling corners is left to the boundary treatment.
"""

import itertools
import logging
from dataclasses import dataclass
from enum import Enum, IntEnum
from types import MappingProxyType
from typing import Iterator, Tuple

import numpy as np

from .grid import Axis, clamp_node, node_from_physical, physical_from_node
from .model import ConfigurationError

logger = logging.getLogger(__name__)


class Face(IntEnum):
    """Domain faces, ordered lower/upper per axis."""
    WEST = 0
    EAST = 1
    SOUTH = 2
    NORTH = 3
    FRONT = 4
    BACK = 5

    @property
    def axis(self) -> Axis:
        return Axis(self.value // 2)

    @property
    def upper(self) -> bool:
        return bool(self.value % 2)

    @property
    def normal(self) -> Tuple[int, int, int]:
        """Outward unit normal (x, y, z)."""
        n = [0, 0, 0]
        n[self.axis] = 1 if self.upper else -1
        return tuple(n)


class Region(Enum):
    INTERIOR = 'interior'
    WEST_BOUNDARY = 'west_boundary'
    EAST_BOUNDARY = 'east_boundary'
    SOUTH_BOUNDARY = 'south_boundary'
    NORTH_BOUNDARY = 'north_boundary'
    FRONT_BOUNDARY = 'front_boundary'
    BACK_BOUNDARY = 'back_boundary'
    WEST_GHOST = 'west_ghost'
    EAST_GHOST = 'east_ghost'
    SOUTH_GHOST = 'south_ghost'
    NORTH_GHOST = 'north_ghost'
    FRONT_GHOST = 'front_ghost'
    BACK_GHOST = 'back_ghost'

    @classmethod
    def boundary(cls, face: Face) -> 'Region':
        return cls[f"{face.name}_BOUNDARY"]

    @classmethod
    def ghost(cls, face: Face) -> 'Region':
        return cls[f"{face.name}_GHOST"]


@dataclass
class Partition:
    """
    Node layout of one grid block.

    Constructed once from the domain extents, the number of cells per axis and
    the ghost layer depth; treat it as read-only afterwards.

    Attributes (derived):
        m: Nodes per axis in the normal region (cells + 1)
        n: Nodes per axis including ghost layers (m + 2*ng)
        d: Grid spacing per axis
        dd: Inverse grid spacing per axis
        ns: Region -> ((xmin, xmax), (ymin, ymax), (zmin, zmax)) half-open ranges
        normal: Face -> outward unit normal
    """
    domain: tuple       # ((x_min, x_max), (y_min, y_max), (z_min, z_max))
    cells: tuple        # (nx, ny, nz)
    ng: int = 3

    def __post_init__(self):
        self.domain = tuple(tuple(float(v) for v in bounds) for bounds in self.domain)
        self.cells = tuple(int(c) for c in self.cells)
        if len(self.domain) != 3 or len(self.cells) != 3:
            raise ConfigurationError("Partition needs extents and cell counts for x, y and z")
        for axis in Axis:
            s_min, s_max = self.domain[axis]
            if not s_max > s_min:
                raise ConfigurationError(
                    f"Degenerate domain extent on {axis.name}: [{s_min}, {s_max}]")
            if self.cells[axis] < 1:
                raise ConfigurationError(
                    f"Need at least one cell on {axis.name}, got {self.cells[axis]}")
        if self.ng < 1:
            raise ConfigurationError(f"Ghost layer depth must be at least 1, got {self.ng}")

        ng = self.ng
        self.m = tuple(c + 1 for c in self.cells)
        self.n = tuple(m + 2 * ng for m in self.m)
        self.d = tuple((s_max - s_min) / c for (s_min, s_max), c in zip(self.domain, self.cells))
        self.dd = tuple(1.0 / d for d in self.d)

        interior = tuple((ng + 1, m + ng - 1) for m in self.m)
        ns = {Region.INTERIOR: interior}
        for face in Face:
            m = self.m[face.axis]
            if face.upper:
                boundary = (m + ng - 1, m + ng)
                ghost = (m + ng, m + 2 * ng)
            else:
                boundary = (ng, ng + 1)
                ghost = (0, ng)
            for region, span in ((Region.boundary(face), boundary), (Region.ghost(face), ghost)):
                ranges = list(interior)
                ranges[face.axis] = span
                ns[region] = tuple(ranges)
        self.ns = MappingProxyType(ns)
        self.normal = MappingProxyType({face: face.normal for face in Face})

        logger.debug("Partition: cells=%s, ng=%d, nodes=%s, spacing=%s",
                     self.cells, ng, self.n, self.d)

    @classmethod
    def uniform(cls, length: float, cells: int, ng: int = 3,
                transverse_cells: int = 2) -> 'Partition':
        """
        Quasi-1D partition along x on [0, length].

        The y and z axes get a few cells of the same spacing, enough for one
        interior node layer.
        """
        dx = length / cells
        width = transverse_cells * dx
        return cls(domain=((0.0, length), (0.0, width), (0.0, width)),
                   cells=(cells, transverse_cells, transverse_cells), ng=ng)

    @property
    def shape(self) -> Tuple[int, int, int]:
        """Storage shape (nz, ny, nx)."""
        return self.n[Axis.Z], self.n[Axis.Y], self.n[Axis.X]

    def slices(self, region: Region) -> Tuple[slice, slice, slice]:
        """Storage (k, j, i) slices of a region."""
        ranges = self.ns[region]
        return tuple(slice(*ranges[axis]) for axis in (Axis.Z, Axis.Y, Axis.X))

    def normal_slices(self) -> Tuple[slice, slice, slice]:
        """Storage slices of every non-ghost node (boundary nodes and corners included)."""
        ng = self.ng
        return tuple(slice(ng, self.m[axis] + ng) for axis in (Axis.Z, Axis.Y, Axis.X))

    def count(self, region: Region) -> int:
        return int(np.prod([hi - lo for lo, hi in self.ns[region]]))

    def iter_nodes(self, region: Region) -> Iterator[Tuple[int, int, int]]:
        """Iterate (k, j, i) over a region in storage order."""
        (i0, i1), (j0, j1), (k0, k1) = self.ns[region]
        return itertools.product(range(k0, k1), range(j0, j1), range(i0, i1))

    def coordinates(self, axis: Axis) -> np.ndarray:
        """Physical coordinate of every node layer along an axis, ghosts included."""
        return physical_from_node(np.arange(self.n[axis]), self.domain[axis][0],
                                  self.d[axis], self.ng)

    def locate(self, point) -> Tuple[int, int, int]:
        """Storage index (k, j, i) of the normal-region node closest to a point (x, y, z)."""
        index = []
        for axis in (Axis.Z, Axis.Y, Axis.X):
            n = node_from_physical(point[axis], self.domain[axis][0], self.dd[axis], self.ng)
            index.append(clamp_node(n, self.ng, self.m[axis] + self.ng))
        return tuple(index)
