# cuda_game.py
# Conway's Game of Life: GPU step (Numba CUDA), one thread per cell.
# State lives on the device as uint32 cells (0 = dead, nonzero = alive),
# either as a flat buffer or as a 2D image. Blocks are TILE x TILE threads
# and the launch grid is rounded up, so threads past the edge do nothing.

import numpy as np
from numba import cuda

from .compute_context import CELL_DTYPE, IMAGE, STORAGE, UNIFORM, CudaContext
from .game_state import GameState

BUFFER_STORAGE = "buffer"
IMAGE_STORAGE = "image"


# =========================
# CUDA kernels (Numba)
# =========================

def life_kernel(params, src, dst):
    """
    Next generation of a flat row-major grid.
    params = (width, height); src and dst are width * height uint32 cells.
    """
    x, y = cuda.grid(2)
    width = params[0]
    height = params[1]
    if x >= width or y >= height:
        return

    # Neighbour sum (8 neighbours), toroidal wrap on both axes
    total = 0
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            xx = (x + dx + width) % width
            yy = (y + dy + height) % height
            if src[yy * width + xx] != 0:
                total += 1

    alive = src[y * width + x] != 0
    if (alive and (total == 2 or total == 3)) or (not alive and total == 3):
        dst[y * width + x] = 1
    else:
        dst[y * width + x] = 0


def life_image_kernel(params, src, dst):
    """Same as life_kernel with src and dst as (height, width) images."""
    x, y = cuda.grid(2)
    width = params[0]
    height = params[1]
    if x >= width or y >= height:
        return

    total = 0
    for dy in range(-1, 2):
        for dx in range(-1, 2):
            if dx == 0 and dy == 0:
                continue
            xx = (x + dx + width) % width
            yy = (y + dy + height) % height
            if src[yy, xx] != 0:
                total += 1

    alive = src[y, x] != 0
    if (alive and (total == 2 or total == 3)) or (not alive and total == 3):
        dst[y, x] = 1
    else:
        dst[y, x] = 0


# storage -> (kernel, binding layout, signature)
KERNELS = {
    BUFFER_STORAGE: (life_kernel, (UNIFORM, STORAGE, STORAGE),
                     "void(int32[::1], uint32[::1], uint32[::1])"),
    IMAGE_STORAGE: (life_image_kernel, (UNIFORM, IMAGE, IMAGE),
                    "void(int32[::1], uint32[:, ::1], uint32[:, ::1])"),
}


def create_pipeline(context, storage=BUFFER_STORAGE):
    kernel, layout, signature = KERNELS[storage]
    return context.create_pipeline(kernel, layout, signature)


class CudaGame(GameState):
    """
    Game stepped by a CUDA kernel launch per generation.

    The context, the compiled pipeline and the (width, height) parameter
    buffer are created once by from_cells/from_random and shared by every
    later generation. Each step allocates a fresh output on the device; the
    previous generation is only read.
    """

    def __init__(self, size, context, pipeline, params, cells, storage=BUFFER_STORAGE):
        super().__init__(size)
        self.context = context
        self.pipeline = pipeline
        self.params = params
        self.cells = cells
        self.storage = storage

    @classmethod
    def _create(cls, size, cells, context=None, storage=BUFFER_STORAGE):
        if storage not in KERNELS:
            raise ValueError(f"storage must be one of {sorted(KERNELS)}, got {storage!r}")
        if context is None:
            context = CudaContext.try_create()

        pipeline = create_pipeline(context, storage)
        params = context.allocate_uniform((size, size))
        encoded = cells.astype(CELL_DTYPE)
        if storage == IMAGE_STORAGE:
            handle = context.allocate_image(size, size, encoded)
        else:
            handle = context.allocate_storage(encoded.nbytes, encoded)
        return cls(size, context, pipeline, params, handle, storage)

    def _allocate_next(self):
        if self.storage == IMAGE_STORAGE:
            return self.context.allocate_image(self.size, self.size)
        return self.context.allocate_storage(self.size * self.size * np.dtype(CELL_DTYPE).itemsize)

    def step(self):
        next_cells = self._allocate_next()
        workgroups_x, workgroups_y = self.pipeline.workgroups(self.size, self.size)
        self.context.dispatch(self.pipeline, (self.params, self.cells, next_cells),
                              workgroups_x, workgroups_y)
        return CudaGame(self.size, self.context, self.pipeline, self.params,
                        next_cells, self.storage)

    def snapshot(self):
        return (self.context.read_back(self.cells).reshape(-1) != 0).tolist()
