"""
render.py — Equirectangular Sampling
======================================

Samples a grid over an equirectangular image: pixel column x maps to
longitude, pixel row y maps to latitude, both linearly.

    latitude  = (y / height) · π − π/2
    longitude = (x / width) · 2π

Row 0 is the south pole; plot with origin='lower' to put north up.
"""

import numpy as np

from .config import DEFAULT_PROJECTION
from .geographic import geographic_to_cells


def equirectangular_coordinates(width, height):
    """
    Per-pixel (latitude, longitude).

    Returns:
        latitude, longitude: (height, width) float arrays
    """
    y, x = np.mgrid[0:height, 0:width]
    latitude = (y / height) * np.pi - np.pi / 2
    longitude = (x / width) * np.pi * 2
    return latitude, longitude


def sample_equirectangular(grid, width, height, projection=DEFAULT_PROJECTION):
    """(height, width) array of the grid's cell values under each pixel."""
    latitude, longitude = equirectangular_coordinates(width, height)
    face, row, col = geographic_to_cells(latitude, longitude, grid.size, projection)
    return grid.as_array()[face, row, col]
