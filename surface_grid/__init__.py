"""
surface_grid — Seamless Cube-Sphere Grids for Cellular Automata
=================================================================

Discretizes the sphere into six N×N faces stitched into a closed cube so
that local-neighbourhood automata (Conway's Game of Life) run without
seams at face edges and corners.

Modules:
    config      — Package defaults (face size, workers, projection)
    face        — N×N cell buffer with edge strips
    topology    — Face frames, 12-edge table, directed edge links, corners
    neighbours  — 8-connected neighbour resolution, flat neighbour table
    geographic  — (latitude, longitude) ↔ cell mapping
    engine      — Double-buffered, thread-partitioned generation step
    grid        — CubeSphereGrid: get/set, neighbours, parallel step
    rules       — Transition functions (Conway)
    render      — Equirectangular sampling
"""

from .engine import TransitionEngine, make_jit_step
from .face import Face
from .geographic import GeographicPoint, from_geographic, geographic_to_cells, to_geographic
from .grid import CubeSphereGrid
from .neighbours import DIRECTIONS, neighbour_table
from .render import sample_equirectangular
from .rules import conway
from .topology import CORNERS, EDGE_LINKS, EDGES, CubeSpherePoint, FaceIndex

__all__ = [
    'CORNERS', 'DIRECTIONS', 'EDGES', 'EDGE_LINKS',
    'CubeSphereGrid', 'CubeSpherePoint', 'Face', 'FaceIndex', 'GeographicPoint',
    'TransitionEngine', 'conway', 'from_geographic', 'geographic_to_cells',
    'make_jit_step', 'neighbour_table', 'sample_equirectangular', 'to_geographic',
]
