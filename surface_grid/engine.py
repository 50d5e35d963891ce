"""
engine.py — Double-Buffered Parallel Generation Step
======================================================

Applies a transition function to every cell of a SOURCE grid and writes
the results into a DESTINATION grid:

    dst[p] = transition(n_N, n_NE, n_E, n_SE, n_S, n_SW, n_W, n_NW, src[p])

Every destination cell depends only on the untouched source, so the flat
cell range is cut into contiguous chunks that run on a thread pool with
no locking.  All chunks are joined before step() returns.  The caller
owns both buffers and swaps them between generations:

    with TransitionEngine(workers=8) as engine:
        for _ in range(generations):
            engine.step(buffer2, buffer1, conway)
            buffer1, buffer2 = buffer2, buffer1

Modes:
    scalar      transition called once per cell with Python values
    vectorized  transition called once per chunk with numpy arrays
    jit         make_jit_step: whole grid compiled with jax
"""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, wait

import jax
import jax.numpy as jnp
import numpy as np

from .config import CHUNKS_PER_WORKER, DEFAULT_WORKERS
from .neighbours import neighbour_table

logger = logging.getLogger(__name__)


def check_buffers(destination, source):
    """Reject buffer pairs that cannot hold two separate generations."""
    if destination is source or np.shares_memory(destination.as_array(), source.as_array()):
        raise ValueError("source and destination share memory; a step needs two distinct grids")
    if destination.size != source.size:
        raise ValueError(f"grid sizes differ: destination N={destination.size}, "
                         f"source N={source.size}")
    if destination.dtype != source.dtype:
        raise ValueError(f"grid dtypes differ: destination {destination.dtype}, "
                         f"source {source.dtype}")


def partition(total, chunks):
    """Split range(total) into at most `chunks` contiguous non-empty (lo, hi) pairs."""
    chunks = max(1, min(chunks, total))
    bounds = np.linspace(0, total, chunks + 1).astype(np.int64)
    return [(int(lo), int(hi)) for lo, hi in zip(bounds[:-1], bounds[1:]) if hi > lo]


def _apply_scalar(src, dst, table, transition, lo, hi):
    neighbours = src[table[lo:hi]].tolist()
    current = src[lo:hi].tolist()
    for i, (cells, value) in enumerate(zip(neighbours, current), start=lo):
        dst[i] = transition(*cells, value)


def _apply_vectorized(src, dst, table, transition, lo, hi):
    rows = table[lo:hi]
    dst[lo:hi] = transition(*(src[rows[:, k]] for k in range(8)), src[lo:hi])


class TransitionEngine:
    """
    Thread pool for generation steps.

    Args:
        workers: Number of threads (default: config.DEFAULT_WORKERS).
                 With 1 worker chunks run inline on the calling thread.
        vectorized: Call the transition with numpy arrays instead of
                    per-cell values.
        chunks_per_worker: Chunks submitted per worker and step.
    """

    def __init__(self, workers=None, vectorized=False, chunks_per_worker=CHUNKS_PER_WORKER):
        self.workers = DEFAULT_WORKERS if workers is None else int(workers)
        if self.workers < 1:
            raise ValueError(f"workers must be >= 1, got {self.workers}")
        self.vectorized = vectorized
        self.chunks_per_worker = chunks_per_worker
        self._pool = None
        if self.workers > 1:
            self._pool = ThreadPoolExecutor(max_workers=self.workers,
                                            thread_name_prefix='surface-grid')
        self._closed = False
        logger.debug("TransitionEngine started: workers=%d vectorized=%s",
                     self.workers, vectorized)

    def close(self):
        if self._pool is not None:
            self._pool.shutdown(wait=True)
            self._pool = None
        self._closed = True

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def step(self, destination, source, transition):
        """
        Write one generation derived from `source` into `destination`.

        Args:
            destination: CubeSphereGrid written in full
            source: CubeSphereGrid read only, never modified
            transition: pure function of 9 values (8 neighbours in
                        N, NE, E, SE, S, SW, W, NW order, then current)

        Raises:
            ValueError: buffers alias each other or differ in size or dtype
            RuntimeError: engine already closed
        """
        if self._closed:
            raise RuntimeError("TransitionEngine is closed")
        check_buffers(destination, source)

        table = neighbour_table(source.size)
        src = source.as_array().reshape(-1)
        dst = destination.as_array().reshape(-1)
        apply = _apply_vectorized if self.vectorized else _apply_scalar

        t0 = time.perf_counter()
        if self._pool is None:
            for lo, hi in partition(len(src), 1):
                apply(src, dst, table, transition, lo, hi)
        else:
            chunks = partition(len(src), self.workers * self.chunks_per_worker)
            futures = [self._pool.submit(apply, src, dst, table, transition, lo, hi)
                       for lo, hi in chunks]
            wait(futures)
            for future in futures:
                future.result()
        logger.debug("Step N=%d done in %.3f ms", source.size,
                     (time.perf_counter() - t0) * 1000)


def make_jit_step(transition, size):
    """
    Build a JIT-compiled whole-grid step.

    The transition must be written with array operators (as rules.conway
    is).  The step is functional: it returns a new array instead of
    writing into a destination grid.

    Args:
        transition: function of 9 arrays → array
        size: Face side length N

    Returns:
        step(cells) → next_cells, both of shape (6, N, N)
    """
    table = jnp.asarray(neighbour_table(size), dtype=jnp.int32)

    @jax.jit
    def step(cells):
        flat = cells.reshape(-1)
        neighbours = flat[table]
        nxt = transition(*(neighbours[:, k] for k in range(8)), flat)
        return jnp.asarray(nxt, dtype=cells.dtype).reshape(cells.shape)
    return step
