"""
topology.py — Cube-Sphere Face Frames, Edge and Corner Connectivity
=====================================================================

Static description of how the six faces are stitched into a closed cube.

Face numbering:
        4
    3  0  2  1          (equatorial belt seen from outside, east →)
        5

  Face 0: +X    Face 1: -X
  Face 2: +Y    Face 3: -Y
  Face 4: +Z (north pole)
  Face 5: -Z (south pole)

Each face has an outward normal, an east axis (column direction) and a
north axis (against the row direction), with east × north = normal.
On the four equatorial faces north is +Z and east follows increasing
longitude.  On +Z north points toward -X, on -Z north points toward +X.

Edge format: (face_a, edge_a, face_b, edge_b, op)
  op: 'N'=identity, 'R'=reverse, 'T'=axis swap, 'TR'=axis swap + reverse
  Strip index mapping: 'N','T' -> k<->k; 'R','TR' -> k<->(N-1-k)

Corner names: 'NW'=(0, 0), 'NE'=(0, N-1), 'SE'=(N-1, N-1), 'SW'=(N-1, 0)
"""

from enum import IntEnum
from types import MappingProxyType
from typing import NamedTuple


class FaceIndex(IntEnum):
    """The six cube faces.  Member order is the geographic tie-break order."""
    POS_X = 0
    NEG_X = 1
    POS_Y = 2
    NEG_Y = 3
    POS_Z = 4
    NEG_Z = 5


class CubeSpherePoint(NamedTuple):
    """Canonical discrete address of one cell."""
    face: FaceIndex
    row: int
    col: int


# ============================================================
# Face frames: (normal, east, north)
# ============================================================

FACE_FRAMES = (
    (( 1, 0, 0), ( 0, 1, 0), ( 0, 0, 1)),   # 0 +X
    ((-1, 0, 0), ( 0,-1, 0), ( 0, 0, 1)),   # 1 -X
    (( 0, 1, 0), (-1, 0, 0), ( 0, 0, 1)),   # 2 +Y
    (( 0,-1, 0), ( 1, 0, 0), ( 0, 0, 1)),   # 3 -Y
    (( 0, 0, 1), ( 0, 1, 0), (-1, 0, 0)),   # 4 +Z
    (( 0, 0,-1), ( 0, 1, 0), ( 1, 0, 0)),   # 5 -Z
)


# ============================================================
# 12 inter-face edges
# ============================================================

EDGES = [
    (0, 'N', 4, 'S', 'N'),
    (0, 'S', 5, 'N', 'N'),
    (0, 'E', 2, 'W', 'N'),
    (0, 'W', 3, 'E', 'N'),
    (1, 'N', 4, 'N', 'R'),
    (1, 'S', 5, 'S', 'R'),
    (1, 'E', 3, 'W', 'N'),
    (1, 'W', 2, 'E', 'N'),
    (2, 'N', 4, 'E', 'TR'),
    (2, 'S', 5, 'E', 'T'),
    (3, 'N', 4, 'W', 'T'),
    (3, 'S', 5, 'W', 'TR'),
]

# Corners at the (first, last) end of each edge strip.
EDGE_ENDS = {
    'N': ('NW', 'NE'),
    'S': ('SW', 'SE'),
    'W': ('NW', 'SW'),
    'E': ('NE', 'SE'),
}

CORNER_NAMES = ('NW', 'NE', 'SE', 'SW')


class EdgeLink(NamedTuple):
    """What lies across one edge of a face."""
    face: int
    edge: str
    reversed: bool   # strip index k maps to N-1-k
    swapped: bool    # strip runs along rows on one side, columns on the other


# ============================================================
# Edge helper functions
# ============================================================

def reverses(op):
    """Does this edge operation reverse the strip order?"""
    return op in ('R', 'TR')


def swaps(op):
    """Does this edge operation exchange the row and column axes?"""
    return op in ('T', 'TR')


def opposite_edge(edge):
    """The edge on the far side of the same face (N↔S, E↔W)."""
    if edge == 'N':   return 'S'
    elif edge == 'S': return 'N'
    elif edge == 'E': return 'W'
    elif edge == 'W': return 'E'
    raise ValueError(f"Unknown edge: {edge}")


def outward(face, edge):
    """Unit vector pointing out of a face across one of its edges."""
    _, east, north = FACE_FRAMES[face]
    if edge == 'N':   return north
    elif edge == 'E': return east
    elif edge in ('S', 'W'):
        return tuple(-x for x in outward(face, opposite_edge(edge)))
    raise ValueError(f"Unknown edge: {edge}")


def corner_cell(corner, size):
    """(row, col) of a named corner cell."""
    if corner == 'NW':   return (0, 0)
    elif corner == 'NE': return (0, size - 1)
    elif corner == 'SE': return (size - 1, size - 1)
    elif corner == 'SW': return (size - 1, 0)
    raise ValueError(f"Unknown corner: {corner}")


def cell_position(face, row, col, size):
    """
    Integer position of a cell centre on the surface of the cube.

    Coordinates are measured in half-cells, so the cube spans [-N, N] on
    every axis and every cell centre sits at N on its face's normal axis
    with odd offsets along the other two.

    Args:
        face: Face index 0-5
        row, col: Cell address in [0, N)
        size: Face side length N

    Returns:
        (x, y, z) tuple of ints
    """
    normal, east, north = FACE_FRAMES[face]
    a = 2 * col + 1 - size
    b = size - 2 * row - 1
    return tuple(size * n + a * e + b * v for n, e, v in zip(normal, east, north))


# ============================================================
# Directed tables
# ============================================================

def build_edge_links(edges=EDGES):
    """
    Expand the 12 undirected edges into 24 directed (face, edge) lookups.

    Returns:
        dict (face, edge) -> EdgeLink
    """
    links = {}
    for fa, ea, fb, eb, op in edges:
        for key, link in (((fa, ea), EdgeLink(fb, eb, reverses(op), swaps(op))),
                          ((fb, eb), EdgeLink(fa, ea, reverses(op), swaps(op)))):
            if key in links:
                raise ValueError(f"Edge {key} listed twice")
            links[key] = link
    if len(links) != 6 * 4:
        raise ValueError(f"Expected 24 directed edges, got {len(links)}")
    return links


def build_corner_table(edges=EDGES):
    """
    Group face corners that meet at the same cube vertex.

    Two corners are joined when they sit at matching ends of a shared
    edge; the transitive closure then collects the three corners of
    every vertex.

    Returns:
        dict (face, corner) -> ((face, corner), (face, corner))
    """
    corner_map = {}
    for fa, ea, fb, eb, op in edges:
        rev = reverses(op)
        for end in (0, 1):
            key_a = (fa, EDGE_ENDS[ea][end])
            key_b = (fb, EDGE_ENDS[eb][1 - end if rev else end])
            corner_map.setdefault(key_a, {key_a}).add(key_b)
            corner_map.setdefault(key_b, {key_b}).add(key_a)

    # Transitive closure
    changed = True
    while changed:
        changed = False
        for key in list(corner_map.keys()):
            group = set(corner_map[key])
            for member in list(group):
                new = corner_map[member]
                if not new.issubset(group):
                    group.update(new)
                    changed = True
            corner_map[key] = group

    table = {}
    for key, group in corner_map.items():
        if len(group) != 3:
            raise ValueError(f"Corner {key} joins {len(group)} faces, expected 3")
        table[key] = tuple(sorted(group - {key}))
    return table


EDGE_LINKS = MappingProxyType(build_edge_links())
CORNERS = MappingProxyType(build_corner_table())


def corner_groups():
    """The 8 cube vertices, each as a sorted tuple of 3 (face, corner) pairs."""
    seen = set()
    groups = []
    for key, others in CORNERS.items():
        group = tuple(sorted((key,) + others))
        if group not in seen:
            seen.add(group)
            groups.append(group)
    return groups
