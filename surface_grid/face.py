"""
face.py — A Single Square Face of the Cube Sphere
===================================================

A Face is an N×N buffer of cell values addressed by (row, col).  Row
increases southward, column increases eastward.  Faces know nothing about
their neighbours: crossing an edge is the grid's job.

Edge strips:
    'N', 'S'  →  run west to east, strip index k = col
    'E', 'W'  →  run north to south, strip index k = row
"""


EDGE_NAMES = ('N', 'E', 'S', 'W')


def edge_cell(edge, k, size):
    """Convert (edge, strip index k) to (row, col) on an N×N face."""
    if edge == 'N':   return (0, k)
    elif edge == 'S': return (size - 1, k)
    elif edge == 'E': return (k, size - 1)
    elif edge == 'W': return (k, 0)
    raise ValueError(f"Unknown edge: {edge}")


class Face:
    """N×N cell buffer with bounds-checked access."""

    def __init__(self, cells):
        if cells.ndim != 2 or cells.shape[0] != cells.shape[1]:
            raise ValueError(f"Face needs a square 2-D array, got shape {cells.shape}")
        self.cells = cells

    @property
    def size(self):
        return self.cells.shape[0]

    def check(self, row, col):
        n = self.size
        if not (0 <= row < n and 0 <= col < n):
            raise IndexError(f"({row}, {col}) outside face of size {n}")

    def get(self, row, col):
        self.check(row, col)
        return self.cells[row, col]

    def set(self, row, col, value):
        self.check(row, col)
        self.cells[row, col] = value

    def edge_strip(self, edge):
        """Ordered (row, col) addresses of the N cells along an edge."""
        return [edge_cell(edge, k, self.size) for k in range(self.size)]

    def __repr__(self):
        return f"Face(size={self.size}, dtype={self.cells.dtype})"
