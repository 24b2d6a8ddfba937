# errors.py
# Error types shared by every game implementation.


class GameOfLifeError(Exception):
    """Base class for all errors raised by the game implementations."""


class ShapeMismatch(GameOfLifeError, ValueError):
    """Explicit cell data does not describe a size x size grid."""

    def __init__(self, size, length):
        self.size = size
        self.length = length
        if size < 1:
            message = f"grid size must be >= 1, got {size}"
        else:
            message = f"expected {size}x{size} = {size * size} cells, got {length}"
        super().__init__(message)


class DeviceUnavailable(GameOfLifeError, RuntimeError):
    """No usable compute device; callers should fall back to a CPU game."""


class DispatchFailure(GameOfLifeError, RuntimeError):
    """Compiling, binding or submitting the compute kernel failed."""


class WorkerFailure(GameOfLifeError, RuntimeError):
    """A worker thread failed while computing its slice of the grid."""

    def __init__(self, worker, span, cause):
        self.worker = worker
        self.span = span
        super().__init__(
            f"worker {worker} failed on cells [{span.start}, {span.stop}): {cause!r}"
        )
