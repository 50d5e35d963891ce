"""
geographic.py — Latitude/Longitude ↔ Cell Mapping
===================================================

Maps a direction on the unit sphere, given as (latitude, longitude) in
radians, to the cube-sphere cell that contains it, and back to the
direction of a cell centre.

    1. direction d = (cos φ cos λ, cos φ sin λ, sin φ)
    2. face = argmax_f  normal_f · d   (ties: lowest FaceIndex)
    3. in-face position (a, b) = (d·east, d·north) / (d·normal) ∈ [-1, 1]²
    4. quantize to the nearest cell centre, clamped to [0, N)

Projections:
    'gnomonic'     cells are evenly spaced on the cube face
    'equiangular'  cells are evenly spaced in angle, ξ = atan(a) ∈ [-π/4, π/4]
"""

from typing import NamedTuple

import numpy as np

from .config import DEFAULT_PROJECTION, PROJECTIONS
from .topology import FACE_FRAMES, CubeSpherePoint, FaceIndex


class GeographicPoint(NamedTuple):
    """A direction on the unit sphere in radians."""
    latitude: float
    longitude: float


NORMALS = np.array([frame[0] for frame in FACE_FRAMES], dtype=float)
EASTS = np.array([frame[1] for frame in FACE_FRAMES], dtype=float)
NORTHS = np.array([frame[2] for frame in FACE_FRAMES], dtype=float)

TWO_PI = 2.0 * np.pi


def _check_projection(projection):
    if projection not in PROJECTIONS:
        raise ValueError(f"projection must be one of {PROJECTIONS}, got {projection!r}")


def _check_ranges(latitude, longitude):
    lat_ok = (latitude >= -np.pi / 2) & (latitude <= np.pi / 2)
    lon_ok = (longitude >= 0.0) & (longitude < TWO_PI)
    if not np.all(lat_ok):
        bad = np.asarray(latitude)[~lat_ok] if np.ndim(latitude) else latitude
        raise ValueError(f"latitude must lie in [-pi/2, pi/2], got {bad}")
    if not np.all(lon_ok):
        bad = np.asarray(longitude)[~lon_ok] if np.ndim(longitude) else longitude
        raise ValueError(f"longitude must lie in [0, 2pi), got {bad}")


def to_cartesian(latitude, longitude):
    """
    Unit direction vector for (latitude, longitude).

    Returns:
        array of shape (..., 3)
    """
    latitude = np.asarray(latitude, dtype=float)
    longitude = np.asarray(longitude, dtype=float)
    c = np.cos(latitude)
    return np.stack([c * np.cos(longitude), c * np.sin(longitude), np.sin(latitude)], axis=-1)


def geographic_to_cells(latitude, longitude, size, projection=DEFAULT_PROJECTION):
    """
    Vectorized geographic mapping.

    Args:
        latitude:  array-like in [-π/2, π/2]
        longitude: array-like in [0, 2π), broadcastable against latitude
        size: Face side length N
        projection: 'gnomonic' or 'equiangular'

    Returns:
        face, row, col: int64 arrays of the broadcast shape
    """
    _check_projection(projection)
    latitude = np.asarray(latitude, dtype=float)
    longitude = np.asarray(longitude, dtype=float)
    _check_ranges(latitude, longitude)

    d = to_cartesian(latitude, longitude)
    dots = d @ NORMALS.T                                    # (..., 6)
    face = np.argmax(dots, axis=-1)
    depth = np.take_along_axis(dots, face[..., None], axis=-1)[..., 0]

    a = np.einsum('...i,...i->...', d, EASTS[face]) / depth
    b = np.einsum('...i,...i->...', d, NORTHS[face]) / depth
    if projection == 'equiangular':
        a = np.arctan(a) / (np.pi / 4)
        b = np.arctan(b) / (np.pi / 4)

    col = np.clip(np.floor((a + 1.0) * size / 2.0), 0, size - 1).astype(np.int64)
    row = np.clip(np.floor((1.0 - b) * size / 2.0), 0, size - 1).astype(np.int64)
    return face.astype(np.int64), row, col


def from_geographic(latitude, longitude, size, projection=DEFAULT_PROJECTION):
    """Cell containing the direction (latitude, longitude)."""
    if np.ndim(latitude) or np.ndim(longitude):
        raise ValueError("from_geographic takes scalars; use geographic_to_cells for arrays")
    face, row, col = geographic_to_cells(latitude, longitude, size, projection)
    return CubeSpherePoint(FaceIndex(int(face)), int(row), int(col))


def to_geographic(point, size, projection=DEFAULT_PROJECTION):
    """
    Direction of a cell centre.

    Inverse of from_geographic on cell centres:
        from_geographic(*to_geographic(p, N), N) == p
    """
    _check_projection(projection)
    face, row, col = point
    a = (2 * col + 1) / size - 1.0
    b = 1.0 - (2 * row + 1) / size
    if projection == 'equiangular':
        a = np.tan(a * np.pi / 4)
        b = np.tan(b * np.pi / 4)

    v = NORMALS[face] + a * EASTS[face] + b * NORTHS[face]
    x, y, z = v / np.linalg.norm(v)
    latitude = float(np.arcsin(np.clip(z, -1.0, 1.0)))
    longitude = float(np.arctan2(y, x) % TWO_PI)
    if longitude >= TWO_PI:
        longitude = 0.0
    return GeographicPoint(latitude, longitude)
