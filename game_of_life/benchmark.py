# benchmark.py
# Step timing for the games. Only game.step() is timed, as in the original
# per-game loops; printing and sleeping between frames are not.

import os
from time import perf_counter, sleep

from . import config


class RunResult:
    def __init__(self, name, steps, total_time, final):
        self.name = name
        self.steps = steps
        self.total_time = total_time
        self.final = final

    @property
    def average_time(self):
        return self.total_time / self.steps if self.steps else 0.0


def print_grid(game):
    os.system('cls' if os.name == 'nt' else 'clear')
    game.print()
    print('-' * game.size)


def run_game(game, steps, show=False, delay=config.FRAME_DELAY, name=None):
    """Advance `game` by `steps` generations and time every step."""
    name = name or type(game).__name__
    num_of_iterations = 0
    total_time = 0.0  # Time only counts execution of: game = game.step()

    try:
        while num_of_iterations < steps:
            if show:
                print_grid(game)
            st = perf_counter()
            game = game.step()
            end = perf_counter()
            total_time += (end - st)
            if show and delay:
                sleep(delay)
            num_of_iterations += 1
    except KeyboardInterrupt:
        print(f"\n{name} finished by KeyboardInterrupt.")

    return RunResult(name, num_of_iterations, total_time, game)


def report(result):
    print(f"\n[{result.name}] Average execution time of the step: "
          f"{result.average_time:.8f} seconds")
    print(f"[{result.name}] Total time for {result.steps} steps: "
          f"{result.total_time:.8f} seconds")


def compare(games, steps):
    """
    Run every game in `games` (name -> starting state, all with the same
    cells) for `steps` generations.

    Returns (results, mismatched) where mismatched lists the games whose
    final grid differs from the first one's.
    """
    results = [run_game(game, steps, name=name) for name, game in games.items()]
    reference = results[0]
    mismatched = [result.name for result in results[1:]
                  if result.steps != reference.steps or result.final != reference.final]

    for result in results:
        report(result)
        if result is not reference and result.average_time > 0:
            print(f"[{result.name}] Speedup vs {reference.name}: "
                  f"{reference.average_time / result.average_time:.2f}")
    return results, mismatched
