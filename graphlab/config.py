"""
Configuration constants for the graphlab project.

All layout bounds, generator defaults and tunable parameters are defined here.
Environment overrides are loaded from a .env file when present.
"""

import os

from dotenv import load_dotenv

load_dotenv()

# =============================================================================
# Snapshot Configuration
# =============================================================================

# Supported snapshot file suffixes
JSON_SUFFIX = ".json"
MSGPACK_SUFFIX = ".msgpack"
SNAPSHOT_SUFFIXES = (JSON_SUFFIX, MSGPACK_SUFFIX)

# =============================================================================
# Graph Configuration
# =============================================================================

# Prefixes for auto-generated ids (node_1, edge_1, ...)
NODE_ID_PREFIX = "node_"
EDGE_ID_PREFIX = "edge_"

# Counters start here and after clear()
ID_COUNTER_START = 1

# Default weight for new edges (forced on unweighted graphs)
DEFAULT_EDGE_WEIGHT = 1

# =============================================================================
# Random Graph Configuration
# =============================================================================

# Defaults for generate_random()
DEFAULT_RANDOM_NODES = 5
DEFAULT_EDGE_PROBABILITY = 0.3

# Weight range for random weighted edges (inclusive)
RANDOM_WEIGHT_MIN = 1
RANDOM_WEIGHT_MAX = 10

# Layout canvas for randomly placed nodes: x in [X_MIN, X_MIN + WIDTH)
CANVAS_X_MIN = 50
CANVAS_Y_MIN = 50
CANVAS_WIDTH = 400
CANVAS_HEIGHT = 300

# Seed for reproducible random graphs (None = fresh entropy)
_seed = os.environ.get("GRAPHLAB_RANDOM_SEED")
RANDOM_SEED = int(_seed) if _seed else None

# =============================================================================
# Algorithm Configuration
# =============================================================================

# Two MST totals are considered equal when they differ by less than this
MST_WEIGHT_TOLERANCE = 0.001

# Graphs with this many nodes or fewer never report cycles in statistics
CYCLE_MIN_NODES = 3

# =============================================================================
# Logging Configuration
# =============================================================================

# Log level (DEBUG, INFO, WARNING, ERROR)
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")
