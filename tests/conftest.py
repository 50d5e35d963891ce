"""
conftest.py — Shared pytest fixtures for the surface_grid test suite
"""

import pytest
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from surface_grid.grid import CubeSphereGrid
from surface_grid.topology import CubeSpherePoint, FaceIndex


@pytest.fixture(params=[2, 3, 4, 7])
def N(request):
    """Face side length.  2 is all corners, 3 has a single interior cell."""
    return request.param


@pytest.fixture
def random_grid():
    """Factory for a randomly seeded boolean grid."""
    def _make(N, density=0.4, seed=0):
        rng = np.random.default_rng(seed)
        return CubeSphereGrid.from_array(rng.random((6, N, N)) < density)
    return _make


@pytest.fixture
def all_points():
    """Factory listing every CubeSpherePoint of an N-sided grid."""
    def _make(N):
        return [CubeSpherePoint(f, r, c) for f in FaceIndex
                for r in range(N) for c in range(N)]
    return _make
