"""
test_grid.py — CubeSphereGrid Construction and Access Tests
=============================================================

Verifies:
  - A grid of side N has exactly 6·N² canonical addresses
  - default/from_fn/from_array fill every cell
  - get/set and [] indexing, fail-fast on invalid points
  - Faces are views into the grid's single array
"""

import pytest
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from surface_grid.grid import CubeSphereGrid
from surface_grid.topology import CubeSpherePoint, FaceIndex


class TestConstruction:

    def test_cell_count(self, N):
        grid = CubeSphereGrid(N)
        points = list(grid.points())
        assert len(grid) == 6 * N * N
        assert len(points) == 6 * N * N
        assert len(set(points)) == 6 * N * N

    def test_default_bool(self):
        grid = CubeSphereGrid.default(4)
        assert grid.dtype == np.bool_
        assert not bool(np.any(grid.as_array()))

    def test_default_int(self):
        grid = CubeSphereGrid.default(3, dtype=np.int32)
        assert int(grid.as_array().sum()) == 0

    def test_from_fn_visits_every_point(self, N):
        seen = []

        def generator(p):
            seen.append(p)
            return (p.face * N + p.row) * N + p.col

        grid = CubeSphereGrid.from_fn(generator, size=N, dtype=np.int64)
        assert len(seen) == 6 * N * N
        assert np.array_equal(grid.as_array().reshape(-1), np.arange(6 * N * N))

    def test_from_array_copies(self):
        cells = np.zeros((6, 3, 3), dtype=bool)
        grid = CubeSphereGrid.from_array(cells)
        cells[0, 0, 0] = True
        assert not grid[CubeSpherePoint(FaceIndex.POS_X, 0, 0)]

    @pytest.mark.parametrize("shape", [(5, 3, 3), (6, 3, 4), (6, 3)])
    def test_from_array_shape(self, shape):
        with pytest.raises(ValueError):
            CubeSphereGrid.from_array(np.zeros(shape))

    @pytest.mark.parametrize("size", [0, 1])
    def test_size_too_small(self, size):
        with pytest.raises(ValueError):
            CubeSphereGrid(size)


class TestAccess:

    def test_get_set(self):
        grid = CubeSphereGrid(4, dtype=int)
        p = CubeSpherePoint(FaceIndex.NEG_Y, 2, 3)
        grid.set(p, 9)
        assert grid.get(p) == 9
        assert grid[p] == 9
        grid[p] = 4
        assert grid.as_array()[3, 2, 3] == 4

    def test_plain_tuple_address(self):
        grid = CubeSphereGrid(4, dtype=int)
        grid[(5, 1, 1)] = 3
        assert grid[CubeSpherePoint(FaceIndex.NEG_Z, 1, 1)] == 3

    @pytest.mark.parametrize("point", [
        (6, 0, 0), (-1, 0, 0), (0, 4, 0), (0, 0, 4), (0, -1, 0), (0, 0, -1),
    ])
    def test_invalid_point(self, point):
        grid = CubeSphereGrid(4)
        with pytest.raises(IndexError):
            grid.get(point)
        with pytest.raises(IndexError):
            grid[point] = True
        assert not bool(np.any(grid.as_array()))

    def test_faces_are_views(self):
        grid = CubeSphereGrid(3)
        grid[CubeSpherePoint(FaceIndex.POS_Z, 1, 2)] = True
        assert grid.faces[FaceIndex.POS_Z].get(1, 2)
        grid.faces[FaceIndex.NEG_X].set(0, 0, True)
        assert grid[CubeSpherePoint(FaceIndex.NEG_X, 0, 0)]
        assert len(grid.faces) == 6

    def test_equality(self):
        a = CubeSphereGrid(3)
        b = CubeSphereGrid(3)
        assert a == b
        b[(0, 0, 0)] = True
        assert a != b
        assert a != CubeSphereGrid(4)

    def test_from_geographic(self):
        grid = CubeSphereGrid(4)
        assert grid.from_geographic(np.pi / 2, 0.0).face == FaceIndex.POS_Z
