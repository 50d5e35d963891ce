"""
rules.py — Transition Functions
=================================

Transition functions take the 8 neighbour values (N, NE, E, SE, S, SW,
W, NW) followed by the current value and return the next value.  They
are written with arithmetic and bitwise operators only, so the same
function runs per cell on Python bools, per chunk on numpy arrays and
inside make_jit_step on jax arrays.
"""


def conway(n, ne, e, se, s, sw, w, nw, current):
    """
    Conway's Game of Life (B3/S23).

    A live cell survives with 2 or 3 live neighbours, a dead cell is born
    with exactly 3, everything else is dead.
    """
    # 1 * x turns bools (and bool arrays) into integers before summing
    count = sum(1 * cell for cell in (n, ne, e, se, s, sw, w, nw))
    return (count == 3) | (current & (count == 2))
