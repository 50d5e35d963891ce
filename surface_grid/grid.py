"""
grid.py — The Cube-Sphere Grid
================================

Six N×N faces stored in one (6, N, N) numpy array and stitched by the
topology tables into a closed surface.

    grid = CubeSphereGrid.from_fn(lambda p: rng.random() < 0.3, size=256)
    grid[CubeSpherePoint(FaceIndex.POS_Z, 10, 20)]
    grid.neighbors(point)                 # 8 points, N NE E SE S SW W NW
    dst.set_from_neighbours_diagonals_par(grid, conway)
"""

import numpy as np

from .config import DEFAULT_FACE_SIZE, DEFAULT_PROJECTION
from .engine import TransitionEngine
from .face import Face
from .geographic import from_geographic
from .neighbours import neighbour_points
from .topology import CubeSpherePoint, FaceIndex


class CubeSphereGrid:
    """
    Cell values on the six faces of a cube sphere.

    Args:
        size: Face side length N (>= 2), fixed for the grid's lifetime
        dtype: numpy dtype of the cell values; every cell starts at the
               dtype's zero (False for bool)
    """

    def __init__(self, size=DEFAULT_FACE_SIZE, dtype=bool):
        if size < 2:
            raise ValueError(f"size must be >= 2, got {size}")
        self._cells = np.zeros((6, size, size), dtype=dtype)
        self.faces = tuple(Face(self._cells[face]) for face in FaceIndex)

    # ------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------

    @classmethod
    def default(cls, size=DEFAULT_FACE_SIZE, dtype=bool):
        """Grid with every cell at the dtype's default value."""
        return cls(size, dtype)

    @classmethod
    def from_fn(cls, generator, size=DEFAULT_FACE_SIZE, dtype=bool):
        """Grid with every cell set to generator(point)."""
        grid = cls(size, dtype)
        cells = grid._cells
        for point in grid.points():
            cells[point.face, point.row, point.col] = generator(point)
        return grid

    @classmethod
    def from_array(cls, cells):
        """Grid holding a copy of a (6, N, N) array."""
        cells = np.asarray(cells)
        if cells.ndim != 3 or cells.shape[0] != 6 or cells.shape[1] != cells.shape[2]:
            raise ValueError(f"expected shape (6, N, N), got {cells.shape}")
        grid = cls(cells.shape[1], cells.dtype)
        grid._cells[...] = cells
        return grid

    # ------------------------------------------------------------
    # Shape
    # ------------------------------------------------------------

    @property
    def size(self):
        return self._cells.shape[1]

    @property
    def dtype(self):
        return self._cells.dtype

    def as_array(self):
        """The underlying (6, N, N) array (not a copy)."""
        return self._cells

    def __len__(self):
        return self._cells.size

    def points(self):
        """Every canonical cell address, face by face, row-major."""
        n = self.size
        for face in FaceIndex:
            for row in range(n):
                for col in range(n):
                    yield CubeSpherePoint(face, row, col)

    # ------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------

    def _face(self, point):
        face = point[0]
        if not 0 <= face < 6:
            raise IndexError(f"face must be 0-5, got {face}")
        return self.faces[face]

    def get(self, point):
        return self._face(point).get(point[1], point[2])

    def set(self, point, value):
        self._face(point).set(point[1], point[2], value)

    __getitem__ = get
    __setitem__ = set

    # ------------------------------------------------------------
    # Topology
    # ------------------------------------------------------------

    def neighbors(self, point):
        """
        The 8 neighbours of a point in N, NE, E, SE, S, SW, W, NW order.

        Directions are those of the point's own face; across an edge the
        neighbour face may be rotated relative to it.
        """
        self._face(point).check(point[1], point[2])
        return neighbour_points(point, self.size)

    def from_geographic(self, latitude, longitude, projection=DEFAULT_PROJECTION):
        """Cell of this grid containing the direction (latitude, longitude)."""
        return from_geographic(latitude, longitude, self.size, projection)

    # ------------------------------------------------------------
    # Generation step
    # ------------------------------------------------------------

    def set_from_neighbours_diagonals_par(self, source, transition, workers=None,
                                          vectorized=False, engine=None):
        """
        Overwrite every cell with transition(8 neighbours..., current) of `source`.

        `source` must be a different grid of the same size and dtype; it is
        not modified.  Pass a running TransitionEngine as `engine` to reuse
        its thread pool across generations (`workers` and `vectorized` are
        then ignored); otherwise a pool is started for this call only.
        """
        if engine is not None:
            engine.step(self, source, transition)
            return
        with TransitionEngine(workers, vectorized) as engine:
            engine.step(self, source, transition)

    # ------------------------------------------------------------

    def __eq__(self, other):
        if not isinstance(other, CubeSphereGrid):
            return NotImplemented
        return self._cells.shape == other._cells.shape and bool(np.all(self._cells == other._cells))

    __hash__ = None

    def __repr__(self):
        return f"CubeSphereGrid(size={self.size}, dtype={self.dtype})"
