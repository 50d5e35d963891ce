#!/usr/bin/env python
"""
conway_sphere.py — Conway's Game of Life on the Cube Sphere
=============================================================

Seeds a random grid, advances it generation by generation with two
swapped buffers, and writes equirectangular frames as PNG.

Usage:
    python experiments/conway_sphere.py                       # N=256, 100 generations
    python experiments/conway_sphere.py --N 64 --generations 500 --every 50
    python experiments/conway_sphere.py --vectorized --workers 8
    python experiments/conway_sphere.py --jit
"""

import argparse
import logging
import os
import sys
import time

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import numpy as np

from surface_grid.config import DEFAULT_FACE_SIZE, DEFAULT_WORKERS
from surface_grid.engine import TransitionEngine, make_jit_step
from surface_grid.grid import CubeSphereGrid
from surface_grid.render import sample_equirectangular
from surface_grid.rules import conway


def save_frame(grid, path, width, height):
    """Equirectangular image of the grid, north up."""
    image = sample_equirectangular(grid, width, height)
    fig, ax = plt.subplots(figsize=(width / 100, height / 100), dpi=100)
    ax.imshow(image, cmap='gray', origin='lower', interpolation='nearest',
              extent=(0, 360, -90, 90), vmin=0, vmax=1)
    ax.set_xlabel('longitude [deg]')
    ax.set_ylabel('latitude [deg]')
    fig.tight_layout()
    fig.savefig(path)
    plt.close(fig)


def run(N, generations, workers, seed, density, outdir, every, width, height,
        vectorized=False, use_jit=False):
    """Play Conway's Game of Life and save every `every`-th frame."""
    if every < 1:
        raise ValueError(f"every must be >= 1, got {every}")

    print(f"\n{'='*65}")
    print(f"  Conway's Game of Life on a cube sphere")
    print(f"  N={N} ({6*N*N} cells), generations={generations}, "
          f"{'jit' if use_jit else f'workers={workers}, vectorized={vectorized}'}")
    print(f"{'='*65}")

    os.makedirs(outdir, exist_ok=True)

    # Two buffers swapped every generation.  The random source only seeds
    # the first one.
    rng = np.random.default_rng(seed)
    buffer1 = CubeSphereGrid.from_array(rng.random((6, N, N)) < density)
    buffer2 = CubeSphereGrid.default(N)

    def report(gen, elapsed):
        alive = int(buffer1.as_array().sum())
        print(f"  gen {gen:5d}  alive={alive:8d}  step={elapsed*1000:8.2f} ms")
        if gen % every == 0:
            path = os.path.join(outdir, f"conway_{gen:05d}.png")
            save_frame(buffer1, path, width, height)

    report(0, 0.0)

    if use_jit:
        # The device array is copied back into the same host buffer.
        step_fn = make_jit_step(conway, N)
        cells = buffer1.as_array()
        for gen in range(1, generations + 1):
            t0 = time.perf_counter()
            cells = step_fn(cells)
            cells.block_until_ready()
            elapsed = time.perf_counter() - t0
            buffer1.as_array()[...] = np.asarray(cells)
            report(gen, elapsed)
        return buffer1

    with TransitionEngine(workers, vectorized) as engine:
        for gen in range(1, generations + 1):
            t0 = time.perf_counter()
            buffer2.set_from_neighbours_diagonals_par(buffer1, conway, engine=engine)
            elapsed = time.perf_counter() - t0
            buffer1, buffer2 = buffer2, buffer1
            report(gen, elapsed)
    return buffer1


def positive_int(text):
    """argparse type for counts that must be at least 1."""
    value = int(text)
    if value < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {value}")
    return value


def build_parser():
    parser = argparse.ArgumentParser(description="Conway's Game of Life on a cube sphere")
    parser.add_argument('--N', type=int, default=DEFAULT_FACE_SIZE,
                        help=f'Face side length (default {DEFAULT_FACE_SIZE})')
    parser.add_argument('--generations', type=int, default=100,
                        help='Generations to run (default 100)')
    parser.add_argument('--workers', type=positive_int, default=DEFAULT_WORKERS,
                        help=f'Worker threads (default {DEFAULT_WORKERS})')
    parser.add_argument('--seed', type=int, default=0,
                        help='Seed of the random initial state')
    parser.add_argument('--density', type=float, default=0.5,
                        help='Initial fraction of live cells (default 0.5)')
    parser.add_argument('--outdir', default='frames',
                        help='Directory for PNG frames (default ./frames)')
    parser.add_argument('--every', type=positive_int, default=10,
                        help='Save a frame every this many generations')
    parser.add_argument('--width', type=int, default=720)
    parser.add_argument('--height', type=int, default=480)
    parser.add_argument('--vectorized', action='store_true',
                        help='Apply the rule to numpy chunks instead of single cells')
    parser.add_argument('--jit', action='store_true',
                        help='Use the jax-compiled step')
    parser.add_argument('--verbose', action='store_true',
                        help='Log surface_grid debug messages')
    return parser


if __name__ == '__main__':
    args = build_parser().parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s %(name)s %(levelname)s %(message)s')

    run(args.N, args.generations, args.workers, args.seed, args.density,
        args.outdir, args.every, args.width, args.height,
        vectorized=args.vectorized, use_jit=args.jit)
