import argparse

from . import config
from .benchmark import compare, report, run_game
from .compute_context import CudaContext
from .cuda_game import CudaGame
from .errors import DeviceUnavailable
from .parallel_game import ParallelGame
from .sequential_game import SequentialGame
from .vectorized_game import VectorizedGame

GAME_TYPES = {
    "sequential": SequentialGame,
    "vectorized": VectorizedGame,
    "parallel": ParallelGame,
    "cuda": CudaGame,
}

MENU = ("Choose game type:\n[1] - sequential\n[2] - vectorized\n"
        "[3] - parallel\n[4] - CUDA game")


def create_game(kind, size, cells=None, density=config.DENSITY, seed=config.SEED,
                threads=config.THREADS, device_index=config.DEVICE_INDEX):
    """
    Build the first generation for game `kind`.

    A CUDA game on a machine without a usable device falls back to
    config.FALLBACK_GAME with the same cells.
    """
    if kind not in GAME_TYPES:
        raise ValueError(f"unknown game {kind!r}, choose from {sorted(GAME_TYPES)}")

    options = {}
    if kind == "cuda":
        try:
            options["context"] = CudaContext.try_create(device_index)
        except DeviceUnavailable as e:
            print(f"[CUDA] {e}; falling back to the {config.FALLBACK_GAME} game")
            kind = config.FALLBACK_GAME
    if kind == "parallel":
        options["threads"] = threads

    game_type = GAME_TYPES[kind]
    if cells is None:
        return game_type.from_random(size, density, seed, **options)
    return game_type.from_cells(size, cells, **options)


def choose_game():
    print(MENU)
    names = list(GAME_TYPES)
    try:
        game_num = int(input("Provide game number:"))
    except ValueError as e:
        print(f"Choosing number failed. Reason: {e}")
        return None
    if not 1 <= game_num <= len(names):
        print(f"{game_num} is not a valid number, choose between [1-{len(names)}]")
        return None
    return names[game_num - 1]


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="Conway's Game of Life on a torus, four ways")
    p.add_argument("--game", "-g", choices=sorted(GAME_TYPES), default=None,
                   help="game type (asks interactively when omitted)")
    p.add_argument("--size", "-n", type=int, default=config.GRID_SIZE, help="grid side length")
    p.add_argument("--steps", "-s", type=int, default=config.STEPS, help="generations to run")
    p.add_argument("--density", "-p", type=float, default=config.DENSITY,
                   help="probability of a living cell at the start")
    p.add_argument("--seed", type=int, default=config.SEED)
    p.add_argument("--threads", "-t", type=int, default=config.THREADS,
                   help="worker threads for the parallel game")
    p.add_argument("--device", "-d", type=int, default=config.DEVICE_INDEX, help="CUDA device index")
    p.add_argument("--show", action="store_true", help="print every generation")
    p.add_argument("--compare", action="store_true",
                   help="run every game from the same start and compare results")
    return p.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    common = dict(density=args.density, seed=args.seed, threads=args.threads,
                  device_index=args.device)

    try:
        if args.compare:
            games = {name: create_game(name, args.size, **common) for name in GAME_TYPES}
            _, mismatched = compare(games, args.steps)
            if mismatched:
                print(f"[compare] Final grids differ for: {', '.join(mismatched)}")
                return 1
            print("[compare] All games agree.")
            return 0

        kind = args.game or choose_game()
        if kind is None:
            return 2
        game = create_game(kind, args.size, **common)
    except ValueError as e:
        print(f"Creating game failed. Reason: {e}")
        return 2

    report(run_game(game, args.steps, show=args.show, name=kind))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
