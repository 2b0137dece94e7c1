import numpy as np
import pytest

from environment import Environment
from grid import Direction, Position
from planner import Path
from terrain import Tile, is_player, player_tile


@pytest.fixture
def env():
    """A 5x5 seeded environment with hand-made terrain."""
    env = Environment(5, 5, seed=1)
    env.terrain[:, :] = Tile.AIR
    env.terrain[2, 3] = Tile.STONE     # (3, 2)
    env.terrain[0, 2] = Tile.BEDROCK   # (2, 0)
    env.terrain[4, 4] = Tile.OSMIUM    # (4, 4)
    env.players = {}
    return env


def test_generated_terrain_shape_and_base():
    env = Environment(20, 15, num_opponents=2, seed=11)
    assert env.terrain.shape == (15, 20)
    assert env.tile_at(env.base) == Tile.BASE
    assert set(env.players) == {1, 2}
    for position in env.players.values():
        assert env.tile_at(position) == Tile.AIR


def test_same_seed_same_world():
    a = Environment(12, 12, seed=5)
    b = Environment(12, 12, seed=5)
    assert np.array_equal(a.terrain, b.terrain)
    assert a.base == b.base


def test_snapshot_hides_cells_beyond_sight(env):
    view = env.snapshot(Position(0, 0), 2).reshape(5, 5)
    assert view[0, 0] == Tile.AIR
    assert view[0, 2] == Tile.BEDROCK
    assert view[1, 1] == Tile.AIR
    assert view[2, 3] == Tile.FOG
    assert view[4, 4] == Tile.FOG


def test_snapshot_shows_visible_opponents_only(env):
    env.players = {1: Position(1, 0), 2: Position(4, 4), 3: Position(0, 1)}
    view = env.snapshot(Position(0, 0), 2, own_id=3)
    assert view[1] == player_tile(1)
    assert not is_player(view[24])
    assert not is_player(view[5])


def test_apply_stops_at_blocked_cell(env):
    path = Path(moves=(Direction.RIGHT, Direction.RIGHT, None), end_position=Position(2, 0))
    position, mined = env.apply(Position(0, 0), path)
    assert position == Position(1, 0)
    assert mined is None


def test_apply_mines_after_moving(env):
    path = Path(moves=(Direction.UP, Direction.UP, None), end_position=Position(3, 2),
                mine_direction=Direction.RIGHT)
    position, mined = env.apply(Position(2, 0), path)
    assert position == Position(2, 2)
    assert mined == Tile.STONE
    assert env.tile_at(Position(3, 2)) == Tile.AIR


def test_mining_bedrock_does_nothing(env):
    assert env.mine(Position(2, 0)) is None
    assert env.tile_at(Position(2, 0)) == Tile.BEDROCK
    assert env.mine(Position(-1, 0)) is None


def test_acid_is_part_of_the_ground_truth(env):
    env.update_acid(1)
    assert env.tile_at(Position(0, 0)) == Tile.ACID
    assert env.tile_at(Position(2, 2)) == Tile.AIR
    assert env.is_passable(Position(0, 0))


def test_players_never_step_onto_occupied_cells():
    env = Environment(3, 1, seed=3)
    env.terrain[:, :] = Tile.AIR
    env.players = {1: Position(1, 0)}
    for _ in range(10):
        env.players[1] = Position(1, 0)
        env.step_players(occupied=[Position(0, 0)])
        assert env.players[1] == Position(2, 0)


def test_players_do_not_share_cells():
    env = Environment(3, 1, seed=3)
    env.terrain[:, :] = Tile.AIR
    env.players = {1: Position(0, 0), 2: Position(1, 0)}
    env.step_players(occupied=[Position(2, 0)])
    assert env.players == {1: Position(0, 0), 2: Position(1, 0)}
