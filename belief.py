# belief.py

import numpy as np

from config import ACID_START_TURN, ACID_TICK_RATE
from terrain import Tile


def merge_observation(tiles, incoming):
    """
    Fuse a fresh snapshot into the believed tiles (both flat arrays of equal
    length), in place:
      - incoming FOG  ⇒ keep what we believed before (not a re-observation)
      - anything else ⇒ take the observation, even over painted acid
    Returns the number of cells whose tile changed.
    """
    incoming = np.asarray(incoming, dtype=tiles.dtype)
    observed = incoming != Tile.FOG
    changed = observed & (tiles != incoming)
    tiles[observed] = incoming[observed]
    return int(np.count_nonzero(changed))


def paint_acid(tiles_2d, level):
    """
    Overwrite the outermost `level`-thick ring of a (height, width) tile view
    with ACID. A level at least half the smaller side paints everything.
    """
    if level < 0:
        raise ValueError(f"acid level must be non-negative, got {level}")
    if level == 0:
        return
    height, width = tiles_2d.shape
    tiles_2d[:level, :] = Tile.ACID
    tiles_2d[max(height - level, 0):, :] = Tile.ACID
    tiles_2d[:, :level] = Tile.ACID
    tiles_2d[:, max(width - level, 0):] = Tile.ACID


def acid_level(turn):
    """Ring thickness for a given turn: one ring at ACID_START_TURN, one more every ACID_TICK_RATE."""
    if turn < ACID_START_TURN:
        return 0
    return (turn - ACID_START_TURN) // ACID_TICK_RATE + 1
