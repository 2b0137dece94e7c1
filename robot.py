# robot.py

import logging
from collections import Counter

from belief import acid_level
from config import WHEEL_LEVEL, SIGHT_RANGE
from grid import Position
from grid_map import GridMap
from opponents import OpponentTracker
from planner import Path
from terrain import Tile, tile_cost

logger = logging.getLogger(__name__)

# Goal preference when nothing is mineable next to us
TARGET_ORDER = (Tile.OSMIUM, Tile.IRON, Tile.FOG, Tile.BASE)
# Ores worth mining in place, best first
ORE_ORDER = (Tile.OSMIUM, Tile.IRON)


class Robot:
    """
    Minimal per-turn driver around a GridMap:
      acid paint → snapshot merge + flood fill → opponent update →
      mine an adjacent ore, or walk towards the best known target.
    """

    def __init__(self, id, pos, dimensions, wheel_level=WHEEL_LEVEL, sight_range=SIGHT_RANGE):
        self.id = id
        self.pos = Position(*pos)
        self.wheel_level = wheel_level
        self.sight_range = sight_range

        self.map = GridMap(dimensions)
        self.opponents = OpponentTracker(own_id=id)

        self.target = None
        self.inventory = Counter()
        self.track = [self.pos]

    def sense(self, env, turn):
        snapshot = env.snapshot(self.pos, self.sight_range, own_id=self.id)
        self.map.update_acid(acid_level(turn))
        self.map.update_with(env.dimensions, snapshot, self.pos, self.wheel_level)
        self.opponents.update_with(snapshot, env.dimensions.width)

    def select_target(self):
        for kind in TARGET_ORDER:
            target = self.map.nearest_tile(kind)
            if target is not None:
                return target
        return None

    def plan(self):
        """This turn's Path, or None when nothing is worth doing."""
        ore = self.map.find_neighbour(self.pos, ORE_ORDER)
        if ore is not None:
            self.target = ore.position
            return Path(moves=(None, None, None), end_position=self.pos, mine_direction=ore.direction)

        self.target = self.select_target()
        if self.target is None:
            return None
        path = self.map.find_path(self.target)
        if path is None:
            logger.debug("robot %s: target %s unreachable", self.id, self.target)
            return None

        # a route that starts in rock is walled in: dig the first cell this turn
        first = path.moves[0]
        if first is not None:
            cost = tile_cost(self.map.tile_at(self.pos + first))
            if cost is not None and cost[1]:
                return Path(moves=(None, None, None), end_position=self.pos, mine_direction=first)
        return path

    def turn(self, env, turn):
        self.sense(env, turn)
        path = self.plan()
        if path is None:
            self.track.append(self.pos)
            return None

        self.pos, mined = env.apply(self.pos, path)
        if mined is not None:
            self.inventory[mined.name.lower()] += 1
            logger.debug("robot %s mined %s on turn %d", self.id, mined.name, turn)
        self.track.append(self.pos)
        return path
