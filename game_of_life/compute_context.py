# compute_context.py
# Numba CUDA device wrapper used by the CUDA game: device selection, buffer
# and image allocation, kernel compilation, blocking dispatch and read-back.
# Setting NUMBA_ENABLE_CUDASIM=1 runs all of it on numba's CPU simulator.

from collections import namedtuple
from contextlib import contextmanager

import numpy as np
from numba import cuda

from . import config
from .errors import DeviceUnavailable, DispatchFailure

CELL_DTYPE = np.uint32   # 0 = dead, nonzero = alive
PARAM_DTYPE = np.int32

# Binding kinds a pipeline layout is made of
UNIFORM = "uniform"
STORAGE = "storage"
IMAGE = "image"

BufferHandle = namedtuple("BufferHandle", ["kind", "array"])


class Pipeline:
    """A compiled kernel and the ordered binding kinds it is launched with."""

    def __init__(self, kernel, layout, tile):
        self.kernel = kernel
        self.layout = tuple(layout)
        self.tile = tile

    def workgroups(self, width, height):
        """Blocks needed to cover width x height with tile x tile threads each."""
        return (width + self.tile - 1) // self.tile, (height + self.tile - 1) // self.tile


class CudaContext:
    """
    Owns one CUDA device and everything needed to launch work on it.

    Every call is synchronous from the caller's point of view: dispatch()
    returns only after the device has finished, read_back() returns host data.
    Driver, compiler and launch errors surface as DispatchFailure.
    """

    def __init__(self, device_index=config.DEVICE_INDEX, tile=config.TILE):
        self.device_index = device_index
        self.tile = tile

    @classmethod
    def try_create(cls, device_index=config.DEVICE_INDEX, tile=config.TILE):
        """Select a CUDA device or raise DeviceUnavailable."""
        if not cuda.is_available():
            raise DeviceUnavailable("no CUDA platform available on this machine")
        try:
            cuda.select_device(device_index)
        except Exception as e:
            raise DeviceUnavailable(f"cannot select CUDA device {device_index}: {e}") from e
        return cls(device_index, tile)

    @contextmanager
    def _driver_call(self, what):
        try:
            yield
        except DispatchFailure:
            raise
        except Exception as e:
            raise DispatchFailure(f"{what} failed: {e}") from e

    @contextmanager
    def submission(self):
        """
        Stream to record one launch on; leaving the block waits for it to finish.

        The wait has no timeout: a hung device hangs the caller.
        """
        stream = cuda.stream()
        yield stream
        stream.synchronize()

    def allocate_storage(self, size_bytes, initial=None):
        itemsize = np.dtype(CELL_DTYPE).itemsize
        if size_bytes < 0 or size_bytes % itemsize:
            raise ValueError(f"storage size must be a multiple of {itemsize} bytes, got {size_bytes}")
        count = size_bytes // itemsize
        host = None
        if initial is not None:
            host = np.ascontiguousarray(initial, dtype=CELL_DTYPE).reshape(-1)
            if host.size != count:
                raise ValueError(f"initial data has {host.size} elements, buffer holds {count}")

        with self._driver_call("storage allocation"):
            array = cuda.device_array(count, dtype=CELL_DTYPE) if host is None else cuda.to_device(host)
        return BufferHandle(STORAGE, array)

    def allocate_uniform(self, values):
        host = np.ascontiguousarray(values, dtype=PARAM_DTYPE).reshape(-1)
        with self._driver_call("uniform allocation"):
            array = cuda.to_device(host)
        return BufferHandle(UNIFORM, array)

    def allocate_image(self, width, height, initial=None):
        host = None
        if initial is not None:
            host = np.ascontiguousarray(initial, dtype=CELL_DTYPE)
            if host.size != width * height:
                raise ValueError(f"initial data has {host.size} elements, image holds {width * height}")
            host = host.reshape(height, width)

        with self._driver_call("image allocation"):
            if host is None:
                array = cuda.device_array((height, width), dtype=CELL_DTYPE)
            else:
                array = cuda.to_device(host)
        return BufferHandle(IMAGE, array)

    def create_pipeline(self, kernel, layout, signature):
        """Compile `kernel` eagerly for `signature`; done once, reused by every dispatch."""
        with self._driver_call("pipeline creation"):
            compiled = cuda.jit(signature)(kernel)
        return Pipeline(compiled, layout, self.tile)

    def dispatch(self, pipeline, bindings, workgroups_x, workgroups_y):
        """Launch pipeline over workgroups_x x workgroups_y blocks and wait for it."""
        if len(bindings) != len(pipeline.layout):
            raise DispatchFailure(
                f"pipeline expects {len(pipeline.layout)} bindings, got {len(bindings)}")
        for slot, (kind, handle) in enumerate(zip(pipeline.layout, bindings)):
            if handle.kind != kind:
                raise DispatchFailure(f"binding {slot}: expected {kind}, got {handle.kind}")
        if workgroups_x < 1 or workgroups_y < 1:
            raise DispatchFailure(f"empty dispatch {workgroups_x}x{workgroups_y}")

        blocks = (workgroups_x, workgroups_y)
        threads = (pipeline.tile, pipeline.tile)
        with self._driver_call("dispatch"), self.submission() as stream:
            pipeline.kernel[blocks, threads, stream](*(handle.array for handle in bindings))

    def read_back(self, handle):
        with self._driver_call("read back"):
            return handle.array.copy_to_host()
