# vectorized_game.py
# Conway's Game of Life: neighbour coordinates as numpy batches.
# The 8 relative offsets are added to a cell's coordinates and wrapped with
# one elementwise np.mod instead of 8 separate lookups.

from functools import lru_cache

import numpy as np

from .game_state import CpuGameState

# (dx, dy) of the 8 Moore neighbours, self (0, 0) skipped
NEIGHBOR_OFFSETS = np.array([
    [-1, -1], [0, -1], [1, -1],
    [-1, 0],           [1, 0],
    [-1, 1],  [0, 1],  [1, 1],
], dtype=np.intp)
NEIGHBOR_OFFSETS.flags.writeable = False


def next_cell_state(grid, coords):
    """Next state of the cell at coords = (x, y) of a 2D (row, column) grid."""
    size = grid.shape[0]
    neighbors = np.mod(coords + NEIGHBOR_OFFSETS, size)
    total = np.count_nonzero(grid[neighbors[:, 1], neighbors[:, 0]])

    # rules differ if the current cell is live or not
    if grid[coords[1], coords[0]]:
        return total == 2 or total == 3
    return total == 3


def step_cells(cells, size):
    grid = cells.reshape(size, size)
    grid_new = np.zeros(size * size, dtype=np.bool_)
    for i in range(size * size):
        grid_new[i] = next_cell_state(grid, np.array((i % size, i // size), dtype=np.intp))
    return grid_new


@lru_cache(maxsize=8)
def neighbor_indices(size):
    """(size*size, 8) flat indices of every cell's wrapped neighbours."""
    xs, ys = np.meshgrid(np.arange(size, dtype=np.intp), np.arange(size, dtype=np.intp))
    coords = np.stack((xs.ravel(), ys.ravel()), axis=1)
    neighbors = np.mod(coords[:, None, :] + NEIGHBOR_OFFSETS[None, :, :], size)
    indices = neighbors[:, :, 1] * size + neighbors[:, :, 0]
    indices.flags.writeable = False
    return indices


def step_grid(cells, size):
    """Same rule with the offset table broadcast across all cells at once."""
    total = np.count_nonzero(cells[neighbor_indices(size)], axis=1)
    return (total == 3) | (cells & (total == 2))


class VectorizedGame(CpuGameState):
    """
    Game whose neighbour lookups are batched numpy operations.

    With batch_cells=False (default) it still loops once per cell; with
    batch_cells=True the whole grid is one gather over a cached index table.
    """

    def __init__(self, size, cells, batch_cells=False):
        super().__init__(size, cells)
        self.batch_cells = batch_cells

    def options(self):
        return {"batch_cells": self.batch_cells}

    def next_cells(self):
        if self.batch_cells:
            return step_grid(self.cells, self.size)
        return step_cells(self.cells, self.size)
