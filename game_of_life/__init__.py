"""Conway's Game of Life on a torus: sequential, vectorized, threaded and CUDA games."""

from .cuda_game import CudaGame
from .errors import (DeviceUnavailable, DispatchFailure, GameOfLifeError,
                     ShapeMismatch, WorkerFailure)
from .game_state import GameState
from .parallel_game import ParallelGame
from .sequential_game import SequentialGame
from .vectorized_game import VectorizedGame

__all__ = ['GameState', 'SequentialGame', 'VectorizedGame', 'ParallelGame', 'CudaGame',
           'GameOfLifeError', 'ShapeMismatch', 'DeviceUnavailable', 'DispatchFailure',
           'WorkerFailure']
