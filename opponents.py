# opponents.py

import logging
from dataclasses import dataclass

import numpy as np
from scipy.spatial import cKDTree

from grid import Position
from terrain import is_player, player_id

logger = logging.getLogger(__name__)


@dataclass
class Opponent:
    id: int
    position: Position
    wheel_level: int = 1
    up_to_date: bool = True

    def update(self, position, consecutive):
        """
        Two consecutive sightings bound the opponent's speed by the Manhattan
        distance between them; after a gap we only know it can move at all.
        """
        self.wheel_level = self.position.manhattan_distance(position) if consecutive else 1
        self.position = position
        self.up_to_date = True


class OpponentTracker:
    """
    Keeps the last sighting of every other player seen in the snapshots. Fed
    the same flat tile list as GridMap.update_with, but holds no grid state.
    """

    def __init__(self, own_id=None):
        self.own_id = own_id
        self.opponents = {}
        self.kdtree = None
        self._tree_ids = []

    def outdate(self):
        for opponent in self.opponents.values():
            opponent.up_to_date = False

    def update_with(self, tiles, width):
        seen_last_turn = {o.id for o in self.visible()}
        self.outdate()

        for index, code in enumerate(np.asarray(tiles).tolist()):
            if not is_player(code):
                continue
            pid = player_id(code)
            if pid == self.own_id:
                continue
            position = Position.from_linear(index, width)
            if pid in self.opponents:
                self.opponents[pid].update(position, pid in seen_last_turn)
            else:
                self.opponents[pid] = Opponent(pid, position)
                logger.debug("first sighting of opponent %d at %s", pid, position)

        self.update_kdtree()

    def visible(self):
        return [o for o in self.opponents.values() if o.up_to_date]

    def update_kdtree(self):
        """
        Build a k-d tree over the currently visible opponents for Manhattan
        nearest-neighbour queries.
        """
        visible = self.visible()
        self._tree_ids = [o.id for o in visible]
        self.kdtree = cKDTree(np.array([o.position for o in visible])) if visible else None

    def nearest_opponent(self, position, max_distance=None):
        if self.kdtree is None:
            return None
        bound = np.inf if max_distance is None else max_distance + 0.5
        distance, idx = self.kdtree.query(list(position), k=1, p=1, distance_upper_bound=bound)
        if not np.isfinite(distance):
            return None
        return self.opponents[self._tree_ids[idx]]
