"""
test_geographic.py — Geographic Mapping Tests
===============================================

Verifies:
  - Totality: 10,000 random directions map to valid cells
  - Axis directions land on the expected faces
  - Round trip through every cell centre
  - Scalar and vectorized mappings agree
  - Inputs outside the documented ranges are rejected
"""

import pytest
import numpy as np

import sys, os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from surface_grid.config import PROJECTIONS
from surface_grid.geographic import (
    from_geographic, geographic_to_cells, to_cartesian, to_geographic,
)
from surface_grid.topology import CubeSpherePoint, FaceIndex


def _samples(n=10_000, seed=7):
    rng = np.random.default_rng(seed)
    latitude = rng.uniform(-np.pi / 2, np.pi / 2, n)
    longitude = rng.uniform(0.0, 2 * np.pi, n)
    return latitude, longitude


class TestTotality:

    @pytest.mark.parametrize("projection", PROJECTIONS)
    @pytest.mark.parametrize("N", [2, 7, 256])
    def test_random_directions(self, N, projection):
        latitude, longitude = _samples()
        face, row, col = geographic_to_cells(latitude, longitude, N, projection)
        assert face.min() >= 0 and face.max() < 6
        assert row.min() >= 0 and row.max() < N
        assert col.min() >= 0 and col.max() < N

    @pytest.mark.parametrize("N", [3, 8])
    def test_range_limits(self, N):
        for lat in (-np.pi / 2, 0.0, np.pi / 2):
            for lon in (0.0, np.nextafter(2 * np.pi, 0.0)):
                p = from_geographic(lat, lon, N)
                assert 0 <= p.row < N and 0 <= p.col < N

    def test_uniform_sampling_hits_every_face(self):
        latitude, longitude = _samples()
        face, _, _ = geographic_to_cells(latitude, longitude, 8)
        assert set(face.tolist()) == set(range(6))


class TestAxes:

    @pytest.mark.parametrize("lat, lon, face", [
        (0.0, 0.0, FaceIndex.POS_X),
        (0.0, np.pi / 2, FaceIndex.POS_Y),
        (0.0, np.pi, FaceIndex.NEG_X),
        (0.0, 3 * np.pi / 2, FaceIndex.NEG_Y),
        (np.pi / 2, 0.0, FaceIndex.POS_Z),
        (-np.pi / 2, 0.0, FaceIndex.NEG_Z),
    ])
    def test_face_centres(self, lat, lon, face):
        p = from_geographic(lat, lon, 5)
        assert p == CubeSpherePoint(face, 2, 2)
        assert isinstance(p.face, FaceIndex)

    def test_north_is_up_on_equator(self):
        """Higher latitude on an equatorial face means a smaller row."""
        low = from_geographic(-0.3, 0.0, 16)
        high = from_geographic(0.3, 0.0, 16)
        assert low.face == high.face == FaceIndex.POS_X
        assert high.row < low.row

    def test_east_is_right_on_equator(self):
        west = from_geographic(0.0, 2 * np.pi - 0.3, 16)
        east = from_geographic(0.0, 0.3, 16)
        assert west.face == east.face == FaceIndex.POS_X
        assert west.col < east.col

    def test_vertex_direction(self):
        """The +++ cube vertex belongs to one of the three faces meeting there."""
        p = from_geographic(np.arctan(1 / np.sqrt(2)), np.pi / 4, 6)
        assert p.face in (FaceIndex.POS_X, FaceIndex.POS_Y, FaceIndex.POS_Z)

    def test_unit_vectors(self):
        latitude, longitude = _samples(100)
        d = to_cartesian(latitude, longitude)
        assert np.allclose(np.linalg.norm(d, axis=-1), 1.0)


class TestRoundTrip:

    @pytest.mark.parametrize("projection", PROJECTIONS)
    @pytest.mark.parametrize("N", [2, 5, 16])
    def test_cell_centres(self, N, projection, all_points):
        for p in all_points(N):
            g = to_geographic(p, N, projection)
            assert -np.pi / 2 <= g.latitude <= np.pi / 2
            assert 0.0 <= g.longitude < 2 * np.pi
            assert from_geographic(g.latitude, g.longitude, N, projection) == p

    @pytest.mark.parametrize("projection", PROJECTIONS)
    def test_scalar_matches_vectorized(self, projection):
        latitude, longitude = _samples(500)
        face, row, col = geographic_to_cells(latitude, longitude, 9, projection)
        for i in range(len(latitude)):
            p = from_geographic(latitude[i], longitude[i], 9, projection)
            assert p == (face[i], row[i], col[i])


class TestErrors:

    @pytest.mark.parametrize("lat, lon", [
        (np.pi / 2 + 1e-9, 0.0),
        (-np.pi / 2 - 1e-9, 0.0),
        (0.0, -1e-9),
        (0.0, 2 * np.pi),
        (0.0, 7.0),
        (np.nan, 0.0),
        (0.0, np.nan),
    ])
    def test_out_of_range(self, lat, lon):
        with pytest.raises(ValueError):
            from_geographic(lat, lon, 4)

    def test_out_of_range_in_array(self):
        latitude, longitude = _samples(10)
        longitude[3] = 2 * np.pi
        with pytest.raises(ValueError):
            geographic_to_cells(latitude, longitude, 4)

    def test_unknown_projection(self):
        with pytest.raises(ValueError):
            from_geographic(0.0, 0.0, 4, projection='mercator')
        with pytest.raises(ValueError):
            to_geographic((0, 0, 0), 4, projection='mercator')

    def test_scalar_only(self):
        with pytest.raises(ValueError):
            from_geographic(np.zeros(3), np.zeros(3), 4)
