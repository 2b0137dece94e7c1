# terrain.py

from enum import IntEnum

import numpy as np

from config import (
    AIR_WEIGHT, BASE_WEIGHT, FOG_WEIGHT, OSMIUM_WEIGHT, IRON_WEIGHT,
    STONE_WEIGHT, COBBLESTONE_WEIGHT, PLAYER_WEIGHT, ACID_WEIGHT,
    PLAYER_TILE_OFFSET,
)


class Tile(IntEnum):
    """Non-player tile codes. FOG (0) is the default: no observation."""
    FOG = 0
    AIR = 1
    BASE = 2
    COBBLESTONE = 3
    STONE = 4
    IRON = 5
    OSMIUM = 6
    BEDROCK = 7
    ACID = 8


def player_tile(player_id):
    return PLAYER_TILE_OFFSET + int(player_id)


def is_player(code):
    return int(code) >= PLAYER_TILE_OFFSET


def player_id(code):
    if not is_player(code):
        raise ValueError(f"tile code {code} is not a player tile")
    return int(code) - PLAYER_TILE_OFFSET


def non_player_tile(code):
    """
    The Tile a cell really holds, or None for a player-occupied cell and for fog
    (neither is a terrain observation).
    """
    code = int(code)
    if is_player(code) or code == Tile.FOG:
        return None
    return Tile(code)


class ViableTile(IntEnum):
    """Tile classes the flood fill may enter. Bedrock has no class."""
    AIR = 0
    BASE = 1
    COBBLESTONE = 2
    STONE = 3
    IRON = 4
    OSMIUM = 5
    ACID = 6
    PLAYER = 7
    FOG = 8

    @property
    def weight(self):
        return _WEIGHTS[self]

    @property
    def requires_mining(self):
        return self in _MINEABLE


_WEIGHTS = {
    ViableTile.AIR: AIR_WEIGHT,
    ViableTile.BASE: BASE_WEIGHT,
    ViableTile.COBBLESTONE: COBBLESTONE_WEIGHT,
    ViableTile.STONE: STONE_WEIGHT,
    ViableTile.IRON: IRON_WEIGHT,
    ViableTile.OSMIUM: OSMIUM_WEIGHT,
    ViableTile.ACID: ACID_WEIGHT,
    ViableTile.PLAYER: PLAYER_WEIGHT,
    ViableTile.FOG: FOG_WEIGHT,
}

_MINEABLE = frozenset({
    ViableTile.COBBLESTONE, ViableTile.STONE, ViableTile.IRON, ViableTile.OSMIUM,
})

_VIABLE = {
    Tile.AIR: ViableTile.AIR,
    Tile.BASE: ViableTile.BASE,
    Tile.COBBLESTONE: ViableTile.COBBLESTONE,
    Tile.STONE: ViableTile.STONE,
    Tile.IRON: ViableTile.IRON,
    Tile.OSMIUM: ViableTile.OSMIUM,
    Tile.ACID: ViableTile.ACID,
    Tile.FOG: ViableTile.FOG,
}


def viable_tile(code):
    code = int(code)
    if is_player(code):
        return ViableTile.PLAYER
    return _VIABLE.get(code)


def tile_cost(code):
    """(weight, requires_mining) for a tile code, or None if it cannot be entered."""
    viable = viable_tile(code)
    if viable is None:
        return None
    return viable.weight, viable.requires_mining


# Text rendering, one character per tile
TILE_CHARS = {
    Tile.FOG: '?',
    Tile.AIR: '.',
    Tile.BASE: 'B',
    Tile.COBBLESTONE: 'c',
    Tile.STONE: 's',
    Tile.IRON: 'i',
    Tile.OSMIUM: 'o',
    Tile.BEDROCK: '#',
    Tile.ACID: '~',
}


def render(tiles_2d):
    """
    Render a (height, width) code array with y growing upwards, so the top
    printed row is the highest y.
    """
    rows = []
    for row in np.asarray(tiles_2d)[::-1]:
        rows.append(''.join(
            'P' if is_player(code) else TILE_CHARS[Tile(int(code))]
            for code in row
        ))
    return '\n'.join(rows)
