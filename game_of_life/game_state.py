# game_state.py
# Grid contract shared by every Game of Life implementation: flat row-major
# cells, toroidal addressing, construction, snapshot and text rendering.

import numpy as np

from . import config
from .errors import ShapeMismatch


def index_from_coords(x, y, size):
    """Flat row-major index of (x, y); both coordinates wrap around the torus."""
    return (y % size) * size + (x % size)


def coords_from_index(i, size):
    """Inverse of index_from_coords for i in [0, size * size)."""
    return i % size, i // size


def as_cells(size, cells):
    """Validate explicit cell data and return an owned flat bool array."""
    flat = np.asarray(cells).reshape(-1)
    if size < 1 or flat.size != size * size:
        raise ShapeMismatch(size, flat.size)
    return flat.astype(np.bool_)


def random_cells(size, density=0.5, seed=None):
    """size * size independent cells, each alive with probability `density`."""
    if size < 1:
        raise ShapeMismatch(size, 0)
    if not 0.0 <= density <= 1.0:
        raise ValueError(f"density must be in [0, 1], got {density}")
    rng = np.random.default_rng(seed)
    return rng.random(size * size) < density


class GameState:
    """
    One generation of a size x size Game of Life grid.

    Subclasses decide where the cells live and how the next generation is
    computed. A state is a value: step() returns a new state of the same
    class and never modifies the receiver.
    """

    def __init__(self, size):
        self.size = size

    @classmethod
    def from_cells(cls, size, cells, **options):
        """Grid with the given row-major cells; raises ShapeMismatch if len != size**2."""
        return cls._create(size, as_cells(size, cells), **options)

    @classmethod
    def from_random(cls, size, density=0.5, seed=None, **options):
        return cls._create(size, random_cells(size, density, seed), **options)

    @classmethod
    def _create(cls, size, cells, **options):
        raise NotImplementedError

    def snapshot(self):
        """Row-major list of bools for this generation."""
        raise NotImplementedError

    def step(self):
        """Next generation as a new state."""
        raise NotImplementedError

    def to_array(self):
        grid = np.array(self.snapshot(), dtype=np.bool_).reshape(self.size, self.size)
        grid.flags.writeable = False
        return grid

    def population(self):
        return sum(self.snapshot())

    def render(self, alive=config.ALIVE_CHAR, dead=config.DEAD_CHAR):
        cells = self.snapshot()
        n = self.size
        return "\n".join(
            "".join(alive if cell else dead for cell in cells[y * n:(y + 1) * n])
            for y in range(n)
        )

    def print(self, alive=config.ALIVE_CHAR, dead=config.DEAD_CHAR):
        print(self.render(alive, dead))

    def __eq__(self, other):
        if not isinstance(other, GameState):
            return NotImplemented
        return self.size == other.size and self.snapshot() == other.snapshot()

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}(size={self.size}, population={self.population()})"


class CpuGameState(GameState):
    """GameState backed by a read-only flat numpy bool array in host memory."""

    def __init__(self, size, cells):
        super().__init__(size)
        cells.flags.writeable = False
        self.cells = cells

    @classmethod
    def _create(cls, size, cells, **options):
        return cls(size, cells, **options)

    def options(self):
        """Constructor keyword arguments carried over to the next generation."""
        return {}

    def next_cells(self):
        raise NotImplementedError

    def step(self):
        return type(self)(self.size, self.next_cells(), **self.options())

    def snapshot(self):
        return self.cells.tolist()

    def to_array(self):
        return self.cells.reshape(self.size, self.size)

    def population(self):
        return int(np.count_nonzero(self.cells))
