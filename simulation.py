# simulation.py

import logging
import time

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.colors import ListedColormap

from belief import acid_level
from config import GRID_WIDTH, GRID_HEIGHT, MAX_TURNS, WHEEL_LEVEL, SIGHT_RANGE, PLAYER_TILE_OFFSET
from environment import Environment
from robot import Robot
from terrain import Tile, render

logger = logging.getLogger(__name__)

# One colour per Tile value, plus one for players
TILE_COLOURS = ListedColormap([
    '#808080',  # fog
    '#ffffff',  # air
    '#3070ff',  # base
    '#a0a0a0',  # cobblestone
    '#606060',  # stone
    '#c87533',  # iron
    '#a040d0',  # osmium
    '#000000',  # bedrock
    '#40ff40',  # acid
    '#ff2020',  # player
])


def _displayable(tiles_2d):
    shown = np.array(tiles_2d, dtype=np.int16)
    shown[shown >= PLAYER_TILE_OFFSET] = len(Tile)
    return shown


def plot_run(env, robot, filename='simulation_results.png', show=True):
    fig, axes = plt.subplots(1, 2, figsize=(16, 8))
    track = np.array(robot.track)

    axes[0].imshow(_displayable(env.terrain), cmap=TILE_COLOURS, vmin=0, vmax=len(Tile), origin='lower')
    axes[0].plot(track[:, 0], track[:, 1], 'r-', linewidth=1)
    axes[0].set_title("Ground Truth + Robot Track")

    axes[1].imshow(_displayable(robot.map.tiles_2d()), cmap=TILE_COLOURS, vmin=0, vmax=len(Tile), origin='lower')
    axes[1].plot(robot.pos.x, robot.pos.y, 'ro', label='Robot')
    axes[1].legend()
    axes[1].set_title("Believed Map (grey = fog)")

    plt.tight_layout()
    plt.savefig(filename)
    if show:
        plt.show()
    plt.close(fig)


def run_simulation(width=GRID_WIDTH, height=GRID_HEIGHT, turns=MAX_TURNS, num_opponents=2,
                   seed=None, plot=True):
    start_time = time.time()

    env = Environment(width, height, num_opponents=num_opponents, seed=seed)
    robot = Robot(0, env.base, env.dimensions, wheel_level=WHEEL_LEVEL, sight_range=SIGHT_RANGE)
    logger.info("Starting simulation: %dx%d grid, %d turns, base at %s",
                width, height, turns, tuple(env.base))

    idle_turns = 0
    plan_t = 0.0
    for turn in range(turns):
        env.update_acid(acid_level(turn))
        env.step_players(occupied=[robot.pos])

        t0 = time.time()
        path = robot.turn(env, turn)
        plan_t += time.time() - t0
        if path is None:
            idle_turns += 1

        if turn > 0 and turn % 50 == 0:
            logger.info("--- Turn %d/%d --- position %s, inventory %s",
                        turn, turns, tuple(robot.pos), dict(robot.inventory))

    explored = int(np.count_nonzero(robot.map.tiles != Tile.FOG))

    print("\n=== Simulation Summary ===")
    print("\nBelieved map:")
    print(render(robot.map.tiles_2d()))
    print(f"\n  Final Position: ({robot.pos.x}, {robot.pos.y})")
    print(f"  Area Explored: {explored}/{env.dimensions.area} cells")
    print(f"  Inventory: {dict(robot.inventory) if robot.inventory else 'None'}")
    print(f"  Idle Turns: {idle_turns}")
    print(f"  Opponents Seen: {sorted(robot.opponents.opponents)}")
    print("\nPerformance Breakdown:")
    print(f"  Planning Time: {plan_t:.2f}s")
    print(f"Total Simulation Time: {time.time() - start_time:.2f}s")

    if plot:
        plot_run(env, robot)

    return env, robot


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    run_simulation()
