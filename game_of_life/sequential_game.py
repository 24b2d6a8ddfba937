# sequential_game.py
# Conway's Game of Life: plain sequential step, one cell at a time.
# This is the reference every other game is checked against.

import numpy as np

from .game_state import CpuGameState


def next_cell_state(cells, size, i):
    """
    Next state of cell i of a flat row-major size x size grid.

    Plain enough for numba to compile unchanged (see parallel_game).
    """
    x = i % size
    y = i // size

    # Count neighbours (8 possible directions)
    live_neighbors = 0
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            if dy == 0 and dx == 0:
                continue  # omit cell itself
            xx = (x + dx) % size  # column with modulo wrapping (torus topology)
            yy = (y + dy) % size  # row with modulo wrapping
            if cells[yy * size + xx]:
                live_neighbors += 1

    if cells[i]:
        # Living cell survives, if it has 2 or 3 neighbors
        return live_neighbors == 2 or live_neighbors == 3
    # Dead cell reborn, if it has exactly 3 neighbours
    return live_neighbors == 3


def step_cells(cells, size):
    grid_new = np.zeros(size * size, dtype=np.bool_)
    for i in range(size * size):
        grid_new[i] = next_cell_state(cells, size, i)
    return grid_new


class SequentialGame(CpuGameState):
    """Single-threaded game; one call of next_cell_state per cell."""

    def next_cells(self):
        return step_cells(self.cells, self.size)
