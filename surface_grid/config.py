"""
config.py — Package Defaults
==============================

Defaults shared by the grid, the geographic mapping and the transition
engine.  Everything here can be overridden per call.
"""

import os


# Side length of each cube face.  A size of 256 gives 6·256² = 393216
# cells, roughly a 1100×1100 image.
DEFAULT_FACE_SIZE = 256

# Worker threads used by the generation step.
DEFAULT_WORKERS = os.cpu_count() or 1

# Chunks per worker in the generation step.  More chunks balance uneven
# transition cost at the price of more futures.
CHUNKS_PER_WORKER = 4

# In-face projection used by the geographic mapping.
PROJECTIONS = ('gnomonic', 'equiangular')
DEFAULT_PROJECTION = 'gnomonic'
