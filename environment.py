# environment.py

import logging

import numpy as np
from noise import pnoise2

from belief import paint_acid
from config import (
    GRID_WIDTH, GRID_HEIGHT, NOISE_SCALE, STONE_THRESHOLD, COBBLESTONE_THRESHOLD,
    BEDROCK_THRESHOLD, IRON_DENSITY, OSMIUM_DENSITY,
)
from grid import DIRECTIONS, Dimensions, Position
from terrain import Tile, player_tile, tile_cost

logger = logging.getLogger(__name__)

# Tiles a body can stand on
PASSABLE = (Tile.AIR, Tile.BASE, Tile.ACID)


class Environment:
    """
    Ground truth for a single game: Perlin-noise rock layers with iron and osmium
    veins, one base cell, and a few randomly wandering opponents. Produces the
    fog-of-war snapshots the agent sees and applies the agent's moves and mining.

    `terrain` is indexed [y, x].
    """

    def __init__(self, width=GRID_WIDTH, height=GRID_HEIGHT, num_opponents=0, seed=None):
        self.dimensions = Dimensions(width, height)
        self.rng = np.random.default_rng(seed)
        self.noise_base = int(self.rng.integers(0, 256))
        self.terrain = self._generate_terrain()
        self._place_ores()
        self.base = self._place_base()
        self.players = {}
        for pid in range(1, num_opponents + 1):
            self.players[pid] = self._random_free_cell()

    def _generate_terrain(self):
        """
        Normalised Perlin noise in [0,1], bucketed by threshold into
        air < stone < cobblestone < bedrock.
        """
        width, height = self.dimensions
        world = np.zeros((height, width))
        for y in range(height):
            for x in range(width):
                world[y, x] = pnoise2(
                    x / NOISE_SCALE, y / NOISE_SCALE,
                    octaves=4,
                    persistence=0.5,
                    lacunarity=2.0,
                    base=self.noise_base,
                )
        span = world.max() - world.min()
        world = (world - world.min()) / span if span > 0 else np.zeros_like(world)

        terrain = np.full((height, width), Tile.AIR, dtype=np.int16)
        terrain[world > STONE_THRESHOLD] = Tile.STONE
        terrain[world > COBBLESTONE_THRESHOLD] = Tile.COBBLESTONE
        terrain[world > BEDROCK_THRESHOLD] = Tile.BEDROCK
        return terrain

    def _place_ores(self):
        """Turn a random share of the stone cells into iron and osmium."""
        stone = np.argwhere(self.terrain == Tile.STONE)
        if len(stone) == 0:
            return
        rolls = self.rng.random(len(stone))
        osmium = stone[rolls < OSMIUM_DENSITY]
        iron = stone[(rolls >= OSMIUM_DENSITY) & (rolls < OSMIUM_DENSITY + IRON_DENSITY)]
        self.terrain[osmium[:, 0], osmium[:, 1]] = Tile.OSMIUM
        self.terrain[iron[:, 0], iron[:, 1]] = Tile.IRON

    def _random_free_cell(self):
        free = np.argwhere(self.terrain == Tile.AIR)
        if len(free) == 0:
            # Degenerate noise: clear a spot in the middle
            y, x = self.dimensions.height // 2, self.dimensions.width // 2
            self.terrain[y, x] = Tile.AIR
            return Position(x, y)
        y, x = free[self.rng.integers(len(free))]
        return Position(int(x), int(y))

    def _place_base(self):
        base = self._random_free_cell()
        self.terrain[base.y, base.x] = Tile.BASE
        return base

    def tile_at(self, position):
        return int(self.terrain[position.y, position.x])

    def is_passable(self, position):
        return position.is_within_bounds(self.dimensions) and self.tile_at(position) in PASSABLE

    def update_acid(self, level):
        paint_acid(self.terrain, level)

    def snapshot(self, position, sight, own_id=None):
        """
        Flat row-major tile codes as seen from `position`: cells farther than
        `sight` (Manhattan) are FOG, visible opponents show as player tiles.
        """
        width, height = self.dimensions
        ys, xs = np.mgrid[0:height, 0:width]
        visible = (np.abs(xs - position.x) + np.abs(ys - position.y)) <= sight

        view = np.where(visible, self.terrain, Tile.FOG).astype(np.int16)
        for pid, player in self.players.items():
            if pid != own_id and visible[player.y, player.x]:
                view[player.y, player.x] = player_tile(pid)
        return view.ravel()

    def step_players(self, occupied=()):
        """
        Every opponent takes one random step onto a free neighbouring cell, if
        any. Cells in `occupied` and cells held by other players are not free.
        """
        blocked = set(occupied)
        for pid, position in self.players.items():
            taken = blocked | {p for other, p in self.players.items() if other != pid}
            options = [position + d for d in DIRECTIONS
                       if self.is_passable(position + d) and position + d not in taken]
            if options:
                self.players[pid] = options[self.rng.integers(len(options))]

    def apply(self, position, path):
        """
        Execute a turn: walk the path's moves, stopping at the first blocked
        cell, then mine in `mine_direction` if that cell holds a mineable tile.
        Returns (new position, mined tile or None).
        """
        for direction in path.directions:
            target = position + direction
            if not self.is_passable(target):
                logger.debug("move %s from %s blocked by %s", direction.name, position,
                             self.tile_at(target) if target.is_within_bounds(self.dimensions) else "edge")
                break
            position = target

        mined = None
        if path.mine_direction is not None:
            mined = self.mine(position + path.mine_direction)
        return position, mined

    def mine(self, target):
        if not target.is_within_bounds(self.dimensions):
            return None
        cost = tile_cost(self.tile_at(target))
        if cost is None or not cost[1]:
            return None
        mined = Tile(self.tile_at(target))
        self.terrain[target.y, target.x] = Tile.AIR
        return mined
