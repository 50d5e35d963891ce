"""
neighbours.py — 8-Connected Neighbour Resolution Across Faces
===============================================================

Resolves the Moore neighbourhood of a cell, crossing face edges through
EDGE_LINKS and cube vertices through CORNERS.

Slot order (clockwise, starting north):
    0 N   1 NE   2 E   3 SE   4 S   5 SW   6 W   7 NW

Vertex policy:
    Only three faces meet at a cube vertex, so a face-corner cell has
    seven geometric neighbours, not eight.  The diagonal slot pointing
    into the vertex asks the corner record for a cell that is not already
    an orthogonal neighbour.  On a cube there never is one, and the slot
    repeats the slot before it (NE→N, SE→E, SW→S, NW→W).
"""

import logging
from functools import lru_cache

import numpy as np

from .face import edge_cell
from .topology import CORNERS, EDGE_LINKS, CubeSpherePoint, FaceIndex, corner_cell

logger = logging.getLogger(__name__)


DIRECTIONS = (
    ('N',  -1,  0),
    ('NE', -1,  1),
    ('E',   0,  1),
    ('SE',  1,  1),
    ('S',   1,  0),
    ('SW',  1, -1),
    ('W',   0, -1),
    ('NW', -1, -1),
)

ORTHOGONAL_SLOTS = (0, 2, 4, 6)


def opposite_slot(slot):
    """Slot pointing the other way (N↔S, NE↔SW, ...)."""
    return (slot + 4) % 8


def flat_index(face, row, col, size):
    """Position of a cell in a (6, N, N) array flattened to (6·N²,)."""
    return (face * size + row) * size + col


def _step(face, row, col, size):
    """
    Resolve an address at most one cell off the face.

    Returns:
        (face, row, col) on the cube, or None when both axes left the
        face at once (a step into a cube vertex).
    """
    row_out = row < 0 or row >= size
    col_out = col < 0 or col >= size
    if not row_out and not col_out:
        return (face, row, col)
    if row_out and col_out:
        return None

    if row_out:
        edge = 'N' if row < 0 else 'S'
        k = col
    else:
        edge = 'W' if col < 0 else 'E'
        k = row

    link = EDGE_LINKS[(face, edge)]
    if link.reversed:
        k = size - 1 - k
    r, c = edge_cell(link.edge, k, size)
    return (link.face, r, c)


def _vertex_slot(face, slot, resolved, size):
    """Fill a diagonal slot that points straight into a cube vertex."""
    _, dr, dc = DIRECTIONS[slot]
    corner = ('N' if dr < 0 else 'S') + ('W' if dc < 0 else 'E')

    orthogonal = {resolved[s] for s in ORTHOGONAL_SLOTS}
    fresh = [(f,) + corner_cell(name, size) for f, name in CORNERS[(face, corner)]]
    fresh = [cell for cell in fresh if cell not in orthogonal]
    if len(fresh) == 1:
        return fresh[0]
    return resolved[slot - 1]


def neighbour_cells(face, row, col, size):
    """
    The 8 neighbours of a cell as plain (face, row, col) tuples.

    Args:
        face: Face index 0-5
        row, col: Cell address in [0, N)
        size: Face side length N

    Returns:
        list of 8 (face, row, col) tuples in DIRECTIONS order
    """
    resolved = [_step(face, row + dr, col + dc, size) for _, dr, dc in DIRECTIONS]
    for slot, cell in enumerate(resolved):
        if cell is None:
            resolved[slot] = _vertex_slot(face, slot, resolved, size)
    return resolved


def neighbour_points(point, size):
    """The 8 neighbours of a CubeSpherePoint, in DIRECTIONS order."""
    return tuple(CubeSpherePoint(FaceIndex(f), r, c)
                 for f, r, c in neighbour_cells(point[0], point[1], point[2], size))


def _boundary_ring(size):
    """(row, col) of every cell touching a face edge."""
    ring = set()
    for k in range(size):
        ring.update(((0, k), (size - 1, k), (k, 0), (k, size - 1)))
    return sorted(ring)


@lru_cache(maxsize=None)
def neighbour_table(size):
    """
    Flat neighbour indices for every cell of an N-sided grid.

    Interior cells are filled with a vectorized same-face offset; the
    boundary ring is then patched through neighbour_cells.  Built once
    per size and returned read-only.

    Returns:
        (6·N², 8) int64 array; row i lists the flat indices of cell i's
        neighbours in DIRECTIONS order
    """
    f, r, c = np.meshgrid(np.arange(6), np.arange(size), np.arange(size), indexing='ij')
    table = np.empty((6, size, size, 8), dtype=np.int64)
    for slot, (_, dr, dc) in enumerate(DIRECTIONS):
        rr = np.clip(r + dr, 0, size - 1)
        cc = np.clip(c + dc, 0, size - 1)
        table[..., slot] = flat_index(f, rr, cc, size)

    ring = _boundary_ring(size)
    for face in range(6):
        for row, col in ring:
            for slot, cell in enumerate(neighbour_cells(face, row, col, size)):
                table[face, row, col, slot] = flat_index(*cell, size)

    table = table.reshape(6 * size * size, 8)
    table.flags.writeable = False
    logger.debug("Built neighbour table for N=%d (%d boundary cells per face)",
                 size, len(ring))
    return table
