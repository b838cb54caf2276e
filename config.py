import math
import os

TAU = 2.0 * math.pi
QUARTER_TURN = TAU / 4.0

# critical point (auxiliary equation)
CRITICAL_TOLERANCE = 1e-5

# dual root search
ROOT_TOLERANCE = 1e-12
REACH_TOLERANCE = 1e-12
WALK_STEP_RAD = math.radians(0.1)
PROBE_BIAS_RAD = 0.011111111 / TAU
ANGLE_RESOLUTION = 1e-15

MAX_FALSE_POSITION_ITERATIONS = 500
MAX_EDGE_BISECTIONS = 200
MAX_COLLAPSE_SCAN = 64

# shell defaults
DEFAULT_AMMO = "Shot"
DEFAULT_VELOCITY = "40"
WINDOW_TITLE = "Cannon Ballistics Calculator"

LOG_LEVEL = os.environ.get("CANNON_CALC_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
CRASH_LOG_FILE = "crash_log.txt"
