# planner.py

import heapq
import logging
from collections import deque
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple

from config import (
    FIRST_MOVE_MINING_COST, TURN_BOUNDARY_MINING_COST, UNREACHED, MOVE_SLOTS,
)
from grid import DIRECTIONS, Direction, Position
from terrain import tile_cost

logger = logging.getLogger(__name__)

NO_PARENT = -1


@dataclass(frozen=True)
class ParentData:
    direction_from_parent: Direction
    parent_location: Position
    requires_mining: bool
    turn_move_index: int


@dataclass(frozen=True)
class Entry:
    tile: int
    distance: int = UNREACHED
    parent: Optional[ParentData] = None

    @property
    def reached(self) -> bool:
        return self.distance < UNREACHED


@dataclass(frozen=True)
class Path:
    moves: Tuple[Optional[Direction], ...]
    end_position: Position
    mine_direction: Optional[Direction] = None

    @property
    def directions(self):
        return [move for move in self.moves if move is not None]


class _Step(NamedTuple):
    direction: Direction
    location: Position
    requires_mining: bool
    turn_move_index: int


def _check_wheel_level(wheel_level):
    if int(wheel_level) < 1:
        raise ValueError(f"wheel level must be positive, got {wheel_level}")
    return int(wheel_level)


def flood_fill(grid_map, source, wheel_level):
    """
    Dijkstra from `source` over the 4-connected grid, writing distance and
    parent arrays of `grid_map` in place.

    Entering a tile that needs mining costs FIRST_MOVE_MINING_COST straight out
    of the source, TURN_BOUNDARY_MINING_COST when the step lands on turn move
    index 0, and the tile weight otherwise. Mining ends the turn, so a mined
    cell always restarts the move cycle at index 0.
    """
    wheel_level = _check_wheel_level(wheel_level)
    dimensions = grid_map.dimensions
    width = dimensions.width
    source = Position(*source)
    if not source.is_within_bounds(dimensions):
        raise ValueError(f"source {source} is outside a {width}x{dimensions.height} grid")

    distance = grid_map.distance
    parent_direction = grid_map.parent_direction
    requires_mining = grid_map.requires_mining
    turn_move_index = grid_map.turn_move_index

    distance.fill(UNREACHED)
    parent_direction.fill(NO_PARENT)
    requires_mining.fill(False)
    turn_move_index.fill(0)

    costs = [tile_cost(code) for code in grid_map.tiles.tolist()]
    visited = [False] * dimensions.area

    start = source.to_linear(width)
    distance[start] = 0
    # (distance, linear index): equal distances pop lowest index first
    frontier = [(0, start)]
    finalised = 0

    while frontier:
        current, index = heapq.heappop(frontier)
        if visited[index] or current != distance[index]:
            continue
        visited[index] = True
        finalised += 1

        first_move = parent_direction[index] == NO_PARENT
        move_index = 0 if first_move else (int(turn_move_index[index]) + 1) % wheel_level
        here = Position.from_linear(index, width)

        for direction in DIRECTIONS:
            neighbour = here + direction
            if not neighbour.is_within_bounds(dimensions):
                continue
            n = neighbour.to_linear(width)
            if visited[n] or costs[n] is None:
                continue

            weight, needs_mining = costs[n]
            if needs_mining and first_move:
                step = FIRST_MOVE_MINING_COST
            elif needs_mining and move_index == 0:
                step = TURN_BOUNDARY_MINING_COST
            else:
                step = weight

            alternative = current + step
            if alternative < distance[n]:
                distance[n] = alternative
                parent_direction[n] = direction
                requires_mining[n] = needs_mining
                turn_move_index[n] = 0 if needs_mining else move_index
                heapq.heappush(frontier, (alternative, n))

    logger.debug("flood fill from %s reached %d/%d cells", source, finalised, dimensions.area)


def find_path(grid_map, start, goal, wheel_level):
    """
    Walk the parent chain back from `goal` to `start` and keep only the moves of
    the turn closest to `start`: at most `wheel_level` steps, cut at the last
    turn boundary (turn move index 0) seen on the way back. A mining step found
    at that boundary becomes the turn's `mine_direction`. Only MOVE_SLOTS moves fit in
    a turn; when the window is longer the rest, and its mining, are dropped.

    Returns None if `goal` is outside the grid or not reachable from `start`.
    """
    wheel_level = _check_wheel_level(wheel_level)
    start, goal = Position(*start), Position(*goal)
    if not goal.is_within_bounds(grid_map.dimensions):
        return None

    window = deque()
    mine_direction = None
    location = goal

    while location != start:
        parent = grid_map.parent_at(location)
        if parent is None:
            logger.debug("no path from %s to %s: chain broken at %s", start, goal, location)
            return None

        if window and window[0].turn_move_index == 0:
            boundary = window[0]
            window.clear()
            mine_direction = boundary.direction if boundary.requires_mining else None

        window.appendleft(_Step(
            parent.direction_from_parent, location,
            parent.requires_mining, parent.turn_move_index,
        ))
        location = parent.parent_location

        while len(window) > wheel_level:
            window.pop()

    steps = list(window)
    if len(steps) > MOVE_SLOTS:
        # moves past the last slot, and any mining after them, wait for a later turn
        steps = steps[:MOVE_SLOTS]
        mine_direction = None

    end_position = steps[-1].location if steps else goal
    directions = [step.direction for step in steps]
    moves = tuple(directions + [None] * (MOVE_SLOTS - len(directions)))

    return Path(moves=moves, end_position=end_position, mine_direction=mine_direction)
