import pytest

from environment import Environment
from grid import Direction, Position
from robot import Robot
from terrain import Tile


@pytest.fixture
def env():
    env = Environment(6, 6, seed=2)
    env.terrain[:, :] = Tile.AIR
    env.players = {}
    return env


def test_mines_adjacent_ore_in_place(env):
    env.terrain[3, 2] = Tile.OSMIUM   # (2, 3)
    robot = Robot(0, (2, 2), env.dimensions, wheel_level=2, sight_range=3)

    path = robot.turn(env, 0)
    assert path.directions == []
    assert path.mine_direction == Direction.UP
    assert robot.inventory["osmium"] == 1
    assert env.tile_at(Position(2, 3)) == Tile.AIR
    assert robot.pos == Position(2, 2)


def test_prefers_osmium_over_iron(env):
    env.terrain[0, 5] = Tile.IRON     # (5, 0)
    env.terrain[5, 0] = Tile.OSMIUM   # (0, 5)
    robot = Robot(0, (0, 0), env.dimensions, wheel_level=2, sight_range=10)

    robot.turn(env, 0)
    assert robot.target == Position(0, 5)
    assert robot.pos == Position(0, 2)


def test_explores_fog_when_nothing_is_known(env):
    robot = Robot(0, (0, 0), env.dimensions, wheel_level=1, sight_range=1)
    path = robot.turn(env, 0)
    assert path is not None
    assert robot.map.tile_at(robot.target) == Tile.FOG
    assert robot.pos.manhattan_distance(Position(0, 0)) == 1
    assert robot.track == [Position(0, 0), robot.pos]


def test_tracks_opponents(env):
    env.players = {4: Position(1, 1)}
    robot = Robot(0, (0, 0), env.dimensions, sight_range=3)
    robot.turn(env, 0)
    assert robot.opponents.opponents[4].position == Position(1, 1)


def test_digs_out_when_walled_in_by_stone(env):
    env.terrain[:, :] = Tile.STONE
    env.terrain[2, 2] = Tile.AIR      # (2, 2)
    robot = Robot(0, (2, 2), env.dimensions, wheel_level=2, sight_range=2)

    path = robot.turn(env, 0)
    assert path.directions == []
    assert path.mine_direction is not None
    assert robot.pos == Position(2, 2)
    assert env.tile_at(robot.pos + path.mine_direction) == Tile.AIR
    assert robot.inventory["stone"] == 1

    # the dug cell is open now, so the next turn walks into it
    dug = robot.pos + path.mine_direction
    robot.turn(env, 1)
    assert robot.pos == dug
