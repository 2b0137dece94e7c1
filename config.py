# config.py

import numpy as np

# Traversal weights per tile class (see terrain.ViableTile)
AIR_WEIGHT = 5
BASE_WEIGHT = 5
FOG_WEIGHT = 6                # Unknown cells are provisionally walkable
OSMIUM_WEIGHT = 2
IRON_WEIGHT = 4
STONE_WEIGHT = 8
COBBLESTONE_WEIGHT = 8
PLAYER_WEIGHT = 30            # Occupied cells are provisionally walkable
ACID_WEIGHT = 100

# Mining edge costs
FIRST_MOVE_MINING_COST = 1000   # Mining straight out of the source cell
TURN_BOUNDARY_MINING_COST = 1   # Mining that lands exactly on a turn boundary

# Distance of a cell the fill never reached (halved so cost sums cannot overflow)
UNREACHED = int(np.iinfo(np.int64).max // 2)

# Move slots per turn in the command protocol
MOVE_SLOTS = 3

# Player tiles are stored as PLAYER_TILE_OFFSET + player id
PLAYER_TILE_OFFSET = 16

# Acid border schedule
ACID_START_TURN = 150         # First turn the border ring appears
ACID_TICK_RATE = 2            # Turns per extra ring of acid

# Simulation parameters
GRID_WIDTH = 30
GRID_HEIGHT = 30
WHEEL_LEVEL = 2               # Cells moved per turn
SIGHT_RANGE = 4               # Manhattan radius of the fog-of-war window
MAX_TURNS = 200

# Environment generation
NOISE_SCALE = 8.0
STONE_THRESHOLD = 0.55        # Normalised noise above this becomes stone
COBBLESTONE_THRESHOLD = 0.70
BEDROCK_THRESHOLD = 0.85
IRON_DENSITY = 0.04           # Fraction of stone cells holding iron
OSMIUM_DENSITY = 0.015        # Fraction of stone cells holding osmium
