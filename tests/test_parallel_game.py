import threading

import pytest

from game_of_life import parallel_game
from game_of_life.errors import WorkerFailure
from game_of_life.game_state import random_cells
from game_of_life.parallel_game import ParallelGame, partition
from game_of_life.sequential_game import SequentialGame


@pytest.mark.parametrize("total,threads", [(25, 1), (25, 2), (25, 4), (25, 7), (16, 4),
                                           (4, 9), (1, 3), (100, 3)])
def test_partition_covers_every_index_once(total: int, threads: int) -> None:
    spans = partition(total, threads)
    assert len(spans) == threads
    covered = [i for span in spans for i in span]
    assert covered == list(range(total))


def test_partition_chunk_is_ceiling() -> None:
    spans = partition(10, 4)
    assert [(s.start, s.stop) for s in spans] == [(0, 3), (3, 6), (6, 9), (9, 10)]


def test_partition_trailing_workers_may_be_empty() -> None:
    spans = partition(4, 6)
    assert [len(s) for s in spans] == [1, 1, 1, 1, 0, 0]


@pytest.mark.parametrize("threads", [0, -2])
def test_partition_needs_a_worker(threads: int) -> None:
    with pytest.raises(ValueError):
        partition(9, threads)


def test_game_needs_a_worker() -> None:
    with pytest.raises(ValueError):
        ParallelGame.from_cells(3, [False] * 9, threads=0)


@pytest.mark.parametrize("jit", [True, False])
@pytest.mark.parametrize("threads", [1, 2, 4, 5, 7, 64, 200])
def test_result_does_not_depend_on_thread_count(threads: int, jit: bool) -> None:
    cells = random_cells(12, density=0.3, seed=threads)
    expected = SequentialGame.from_cells(12, cells).step().step()
    state = ParallelGame.from_cells(12, cells, threads=threads, jit=jit).step().step()
    assert state.snapshot() == expected.snapshot()


def test_options_carry_over_to_next_generation() -> None:
    state = ParallelGame.from_random(6, seed=1, threads=3, jit=False).step()
    assert state.threads == 3
    assert state.jit is False


def test_one_worker_per_span_and_all_joined(monkeypatch) -> None:
    seen = []

    def recording(cells, size, out, start, stop):
        seen.append((threading.current_thread().name, start, stop, len(out)))
        out[:] = False

    monkeypatch.setattr(parallel_game, "step_range", recording)
    ParallelGame.from_cells(5, [True] * 25, threads=4, jit=False).step()

    assert sorted((start, stop, n) for _, start, stop, n in seen) == \
        [(0, 7, 7), (7, 14, 7), (14, 21, 7), (21, 25, 4)]
    assert len({name for name, *_ in seen}) == 4
    assert not [t for t in threading.enumerate() if t.name.startswith("life-worker")]


def test_worker_failure_aborts_the_step(monkeypatch) -> None:
    real_step_range = parallel_game.step_range

    def flaky(cells, size, out, start, stop):
        if start > 0:
            raise IndexError("cell out of range")
        real_step_range(cells, size, out, start, stop)

    monkeypatch.setattr(parallel_game, "step_range", flaky)
    state = ParallelGame.from_cells(4, [False] * 16, threads=2, jit=False)

    with pytest.raises(WorkerFailure) as info:
        state.step()
    assert info.value.worker == 1
    assert (info.value.span.start, info.value.span.stop) == (8, 16)
    assert isinstance(info.value.__cause__, IndexError)
    assert not [t for t in threading.enumerate() if t.name.startswith("life-worker")]
