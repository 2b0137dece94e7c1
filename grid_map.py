# grid_map.py

import logging
from typing import NamedTuple

import numpy as np

from belief import merge_observation, paint_acid
from config import UNREACHED
from grid import DIRECTIONS, Dimensions, Direction, Position
from planner import NO_PARENT, Entry, ParentData, find_path, flood_fill
from terrain import Tile, non_player_tile

logger = logging.getLogger(__name__)


class GridMismatchError(ValueError):
    """An incoming snapshot does not have the shape of the map it is merged into."""


class Neighbour(NamedTuple):
    direction: Direction
    position: Position


class GridMap:
    """
    The agent's persistent picture of the world, stored as flat row-major
    arrays of length width*height (index = y*width + x):
      - tiles:            believed tile code per cell (FOG until observed)
      - distance:         flood-fill cost from the agent, UNREACHED if none
      - parent_direction: direction of the last step into the cell, -1 if none
      - requires_mining:  whether that step mines the cell
      - turn_move_index:  position of the cell inside the per-turn move cycle
    """

    def __init__(self, dimensions):
        self.dimensions = Dimensions(*dimensions)
        if self.dimensions.width <= 0 or self.dimensions.height <= 0:
            raise ValueError(f"grid dimensions must be positive, got {self.dimensions}")
        area = self.dimensions.area

        self.tiles = np.full(area, Tile.FOG, dtype=np.int16)
        self.distance = np.full(area, UNREACHED, dtype=np.int64)
        self.parent_direction = np.full(area, NO_PARENT, dtype=np.int8)
        self.requires_mining = np.zeros(area, dtype=bool)
        self.turn_move_index = np.zeros(area, dtype=np.int16)

        self.agent_position = None
        self.wheel_level = 1

    # ---- storage ----

    def _index(self, position):
        position = Position(*position)
        if not position.is_within_bounds(self.dimensions):
            return None
        return position.to_linear(self.dimensions.width)

    def tiles_2d(self):
        """(height, width) view of the tile array; row y holds cells (0..width-1, y)."""
        return self.tiles.reshape(self.dimensions.height, self.dimensions.width)

    def tile_at(self, position):
        index = self._index(position)
        return None if index is None else int(self.tiles[index])

    def distance_to(self, position):
        index = self._index(position)
        return None if index is None else int(self.distance[index])

    def parent_at(self, position):
        index = self._index(position)
        if index is None or self.parent_direction[index] == NO_PARENT:
            return None
        direction = Direction(int(self.parent_direction[index]))
        return ParentData(
            direction_from_parent=direction,
            parent_location=Position(*position) + direction.opposite(),
            requires_mining=bool(self.requires_mining[index]),
            turn_move_index=int(self.turn_move_index[index]),
        )

    def entry_at(self, position):
        index = self._index(position)
        if index is None:
            return None
        return Entry(
            tile=int(self.tiles[index]),
            distance=int(self.distance[index]),
            parent=self.parent_at(position),
        )

    def center(self):
        return Position(self.dimensions.width // 2, self.dimensions.height // 2)

    # ---- per-turn updates ----

    def update_acid(self, level):
        """Paint the outermost `level` rings as ACID. Run before update_with."""
        paint_acid(self.tiles_2d(), level)

    def update_with(self, dimensions, tiles, agent_position, wheel_level):
        """
        Merge a fog-of-war snapshot (flat, row-major tile codes), mark the agent's
        own cell as AIR and re-run the flood fill from it.
        """
        dimensions = Dimensions(*dimensions)
        if dimensions != self.dimensions:
            raise GridMismatchError(
                f"new dimensions {dimensions} don't coincide with the current dimensions {self.dimensions}"
            )
        if len(tiles) != len(self.tiles):
            raise GridMismatchError(
                f"new map length {len(tiles)} doesn't coincide with the current map length {len(self.tiles)}"
            )
        agent_position = Position(*agent_position)
        if not agent_position.is_within_bounds(self.dimensions):
            raise ValueError(f"agent position {agent_position} is outside the grid")
        if int(wheel_level) < 1:
            raise ValueError(f"wheel level must be positive, got {wheel_level}")

        changed = merge_observation(self.tiles, tiles)
        self.tiles[agent_position.to_linear(self.dimensions.width)] = Tile.AIR
        logger.debug("merged snapshot: %d cells changed", changed)

        self.agent_position = agent_position
        self.wheel_level = int(wheel_level)
        self.flood_fill()

    def flood_fill(self, source=None, wheel_level=None):
        flood_fill(
            self,
            self.agent_position if source is None else source,
            self.wheel_level if wheel_level is None else wheel_level,
        )

    def find_path(self, to, from_=None, wheel_level=None):
        return find_path(
            self,
            self.agent_position if from_ is None else from_,
            to,
            self.wheel_level if wheel_level is None else wheel_level,
        )

    # ---- queries ----

    def _matches(self, code, pattern):
        if callable(pattern):
            tile = non_player_tile(code)
            return tile is not None and bool(pattern(tile))
        return code == pattern

    def find_tiles(self, pattern):
        """Positions of every cell matching a Tile (by equality) or a predicate, in linear order."""
        width = self.dimensions.width
        if callable(pattern):
            indices = [i for i, code in enumerate(self.tiles.tolist()) if self._matches(code, pattern)]
        else:
            indices = np.flatnonzero(self.tiles == int(pattern)).tolist()
        return [Position.from_linear(i, width) for i in indices]

    def nearest_tile(self, pattern):
        """The reachable matching cell with the smallest fill distance, or None."""
        best, best_distance = None, UNREACHED
        for position in self.find_tiles(pattern):
            distance = self.distance_to(position)
            if distance < best_distance:
                best, best_distance = position, distance
        return best

    def neighbours(self, of):
        of = Position(*of)
        return [Neighbour(direction, of + direction) for direction in DIRECTIONS]

    def find_neighbour(self, of, kinds):
        """
        First neighbour of `of` holding one of `kinds`. Kinds are tried in the
        given order, each against the neighbours in DIRECTIONS order.
        """
        for kind in kinds:
            for neighbour in self.neighbours(of):
                code = self.tile_at(neighbour.position)
                if code is not None and self._matches(code, kind):
                    return neighbour
        return None

    def tile_at_is(self, position, pattern):
        code = self.tile_at(position)
        if code is None:
            return False
        tile = non_player_tile(code)
        if tile is None:
            return False
        return bool(pattern(tile)) if callable(pattern) else tile == pattern
