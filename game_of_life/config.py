"""
Default settings for the Game of Life runners.

The CLI in main.py reads its defaults from here; the engines themselves only
take explicit arguments.
"""

import os

# ==============================================================================
# GRID
# ==============================================================================

GRID_SIZE = 128                # Side length of the square grid (128x128)
DENSITY = 0.2                  # Probability of a living cell at the start
SEED = 1234                    # Seed for the random start (None = random)

# ==============================================================================
# RUN
# ==============================================================================

STEPS = 100                    # Generations per run
FRAME_DELAY = 1.0              # Seconds between frames when printing the grid

# ==============================================================================
# ENGINES
# ==============================================================================

THREADS = os.cpu_count() or 4  # Worker threads for the parallel game
TILE = 8                       # CUDA block is TILE x TILE threads
DEVICE_INDEX = 0               # CUDA device to select
FALLBACK_GAME = "parallel"     # CPU game used when no CUDA device is found

# ==============================================================================
# RENDERING
# ==============================================================================

ALIVE_CHAR = "█"
DEAD_CHAR = " "
