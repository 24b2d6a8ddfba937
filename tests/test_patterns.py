import pytest

from tests.patterns import (BEACON, BEACON_MID, BLINKER_ACROSS_EDGE, BLINKER_ACROSS_EDGE_MID,
                            BLINKER_HORIZONTAL, BLINKER_VERTICAL, BLOCK, CORNER_BLOCK, GLIDER,
                            TUB, grid, placed)


@pytest.mark.parametrize("size", [1, 2, 3, 8, 9])
def test_empty_grid_stays_empty(make_game, size: int) -> None:
    state = make_game(size, [False] * (size * size)).step()
    assert state.snapshot() == [False] * (size * size)


@pytest.mark.parametrize("rows", [TUB, BLOCK, CORNER_BLOCK], ids=["tub", "block", "corner-block"])
def test_still_lifes_are_unchanged(make_game, rows) -> None:
    start = grid(rows)
    state = make_game(len(rows), start)
    assert state.step().snapshot() == start


def test_blinker_has_period_two(make_game) -> None:
    start = grid(BLINKER_VERTICAL)
    state1 = make_game(5, start)
    state2 = state1.step()
    state3 = state2.step()

    assert state2.snapshot() == grid(BLINKER_HORIZONTAL)
    # verify that it repeats in 2 cycles
    assert state3.snapshot() == start


def test_beacon_has_period_two(make_game) -> None:
    start = grid(BEACON)
    state2 = make_game(6, start).step()
    state3 = state2.step()

    # the middle two blink
    assert state2.snapshot() == grid(BEACON_MID)
    assert state3.snapshot() == start


def test_blinker_wraps_across_the_edge(make_game) -> None:
    state2 = make_game(5, grid(BLINKER_ACROSS_EDGE)).step()
    assert state2.snapshot() == grid(BLINKER_ACROSS_EDGE_MID)
    assert state2.step().snapshot() == grid(BLINKER_ACROSS_EDGE)


def test_glider_crosses_the_corner(make_game) -> None:
    state = make_game(8, placed(GLIDER, 8, 6, 6))
    for _ in range(4):
        state = state.step()
    assert state.snapshot() == placed(GLIDER, 8, 7, 7)


def test_single_cell_grid_sees_itself_eight_times(make_game) -> None:
    # 8 live neighbours: overcrowded
    assert make_game(1, [True]).step().snapshot() == [False]


def test_step_does_not_modify_previous_generation(make_game) -> None:
    start = grid(BLINKER_VERTICAL)
    state1 = make_game(5, start)
    state1.step()
    assert state1.snapshot() == start


def test_snapshot_is_repeatable(make_game) -> None:
    state = make_game(6, grid(BEACON))
    first = state.snapshot()
    second = state.snapshot()
    assert first == second == grid(BEACON)
    first[0] = True
    assert state.snapshot() == grid(BEACON)


def test_step_keeps_the_game_type(make_game) -> None:
    state = make_game(4, grid(BLOCK))
    assert type(state.step()) is type(state)
