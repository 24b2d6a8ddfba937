import os

# Run the CUDA game on numba's CPU simulator unless a real device run is asked
# for explicitly. Must be set before numba is imported.
os.environ.setdefault("NUMBA_ENABLE_CUDASIM", "1")

from functools import partial  # noqa: E402

import pytest  # noqa: E402

from game_of_life.cuda_game import CudaGame  # noqa: E402
from game_of_life.parallel_game import ParallelGame  # noqa: E402
from game_of_life.sequential_game import SequentialGame  # noqa: E402
from game_of_life.vectorized_game import VectorizedGame  # noqa: E402

GAME_FACTORIES = {
    "sequential": SequentialGame.from_cells,
    "vectorized": VectorizedGame.from_cells,
    "vectorized-batched": partial(VectorizedGame.from_cells, batch_cells=True),
    "parallel": partial(ParallelGame.from_cells, threads=3),
    "parallel-interpreted": partial(ParallelGame.from_cells, threads=3, jit=False),
    "cuda": CudaGame.from_cells,
    "cuda-image": partial(CudaGame.from_cells, storage="image"),
}


@pytest.fixture(params=sorted(GAME_FACTORIES))
def make_game(request):
    """from_cells of every game type (and option variant) in turn."""
    return GAME_FACTORIES[request.param]
