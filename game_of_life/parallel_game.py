# parallel_game.py
# Conway's Game of Life: the flat cell range split into one contiguous chunk
# per worker thread. Every worker writes only its own slice of the shared
# output buffer, so no lock is needed.

import threading

import numpy as np
from numba import njit

from . import config
from .errors import WorkerFailure
from .game_state import CpuGameState
from .sequential_game import next_cell_state

# Same per-cell rule as the sequential game, compiled; nogil lets the
# workers actually run side by side.
next_cell_state_jit = njit(nogil=True)(next_cell_state)


def partition(total, threads):
    """
    Split [0, total) into `threads` contiguous, disjoint ranges.

    chunk = ceil(total / threads); worker k gets [k*chunk, (k+1)*chunk)
    clipped to total, so trailing workers may get a short or empty range.
    """
    if threads < 1:
        raise ValueError(f"threads must be >= 1, got {threads}")
    chunk = -(-total // threads)
    return [range(min(k * chunk, total), min((k + 1) * chunk, total))
            for k in range(threads)]


def step_range(cells, size, out, start, stop):
    for i in range(start, stop):
        out[i - start] = next_cell_state(cells, size, i)


@njit(nogil=True)
def step_range_jit(cells, size, out, start, stop):
    for i in range(start, stop):
        out[i - start] = next_cell_state_jit(cells, size, i)


def step_cells(cells, size, threads, jit=True):
    grid_new = np.zeros(size * size, dtype=np.bool_)
    spans = partition(size * size, threads)
    failures = [None] * threads
    kernel = step_range_jit if jit else step_range

    def work(k, span):
        try:
            kernel(cells, size, grid_new[span.start:span.stop], span.start, span.stop)
        except Exception as e:
            failures[k] = e

    workers = [threading.Thread(target=work, args=(k, span), name=f"life-worker-{k}")
               for k, span in enumerate(spans)]
    for worker in workers:
        worker.start()
    for worker in workers:
        worker.join()

    for k, failure in enumerate(failures):
        if failure is not None:
            raise WorkerFailure(k, spans[k], failure) from failure
    return grid_new


class ParallelGame(CpuGameState):
    """
    Game stepped by `threads` fresh worker threads per generation.

    The threads are joined before step() returns. jit=False runs the same
    rule interpreted (still threaded, but serialised by the GIL).
    """

    def __init__(self, size, cells, threads=config.THREADS, jit=True):
        if threads < 1:
            raise ValueError(f"threads must be >= 1, got {threads}")
        super().__init__(size, cells)
        self.threads = threads
        self.jit = jit

    def options(self):
        return {"threads": self.threads, "jit": self.jit}

    def next_cells(self):
        return step_cells(self.cells, self.size, self.threads, self.jit)
