import pytest

from grid_map import GridMap
from terrain import Tile, player_tile

CHARS = {
    '?': Tile.FOG,
    '.': Tile.AIR,
    'B': Tile.BASE,
    'c': Tile.COBBLESTONE,
    's': Tile.STONE,
    'i': Tile.IRON,
    'o': Tile.OSMIUM,
    '#': Tile.BEDROCK,
    '~': Tile.ACID,
}


def parse_rows(rows):
    """
    Flat tile codes from a picture whose first row is y=0. Digits are players.
    """
    codes = []
    for row in rows:
        for ch in row:
            codes.append(player_tile(int(ch)) if ch.isdigit() else int(CHARS[ch]))
    return codes


@pytest.fixture
def make_map():
    """Factory: a GridMap that has already merged `rows` and flood-filled from `agent`."""
    def _make(rows, agent=(0, 0), wheel_level=1):
        dimensions = (len(rows[0]), len(rows))
        grid_map = GridMap(dimensions)
        grid_map.update_with(dimensions, parse_rows(rows), agent, wheel_level)
        return grid_map
    return _make
