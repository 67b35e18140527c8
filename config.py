"""Central configuration for the tournament bubble explorer."""

import math

# Dataset columns
TEAM_COL = "TEAM"
YEAR_COL = "YEAR"
SEED_COL = "SEED"
CONF_COL = "CONF"
WIN_PCT_COL = "W %"
POSTSEASON_COL = "POSTSEASON"
GAMES_COL = "G"
WINS_COL = "W"

# Numeric columns kept on each record (whichever are present in the file)
METRIC_COLUMNS = [
    "ADJOE", "ADJDE", "BARTHAG",
    "EFG_O", "EFG_D",
    "2P_O", "2P_D",
    "3P_O", "3P_D",
    "ADJ_T", "WAB",
]

# Win percentage is filtered like any other metric, under this name
WIN_PCT_METRIC = "win_pct"

# Seed sentinels meaning "did not make the tournament"
SEED_SENTINELS = {"N/A", "NA", ""}
MIN_SEED = 1
MAX_SEED = 16

# Seasons with no tournament (2020 was cancelled). Shown on the year scale, never selectable.
UNAVAILABLE_YEARS = {2020}

# Filter dimensions
YEAR_DIMENSION = "year"
SEED_DIMENSION = "seed"
RANGE_DIMENSION_PREFIX = "range:"

# Range selectors
WIN_PCT_TICK_COUNT = 15        # nice thresholds for the win % distribution
WIN_PCT_MAX = 100.0
METRIC_HISTOGRAM_BINS = 20
DEGENERATE_DOMAIN_EPSILON = 1e-6
DEFAULT_SELECTOR_WIDTH = 300.0

# Court geometry (feet) and the pixel scale used by the court drawing
COURT_WIDTH_FT = 50
COURT_LENGTH_FT = 94
COURT_PIXELS_PER_FOOT = 10
HOOP_BASELINE_DIST_FT = 4
THREE_POINT_RADIUS_FT = 22.15
ARC_TOLERANCE_PX = 15.0
ANGLE_MIN = -90.0
ANGLE_MAX = 90.0

# Metrics laid along the three-point arcs: near basket = offense, far basket = defense
ANGULAR_METRICS = {"3P_O": 1, "3P_D": -1}
LINEAR_METRICS = ["EFG_O", "EFG_D", "2P_O", "2P_D"]

# Bubble layout
LAYOUT_MARGIN = 20.0
MIN_RADIUS = 15.0
MAX_RADIUS = 100.0
PACKING_EFFICIENCY = 0.75
COLLIDE_PADDING = 1.0
COLLIDE_ITERATIONS = 4
COLLIDE_STRENGTH = 1.0
CENTER_STRENGTH = 0.05
DEFAULT_LAYOUT_WIDTH = 960.0
DEFAULT_LAYOUT_HEIGHT = 600.0

# Simulation cooling (same schedule as d3-force)
ALPHA_START = 1.0
ALPHA_MIN = 0.001
ALPHA_DECAY = 1 - math.pow(ALPHA_MIN, 1 / 300)
VELOCITY_DECAY = 0.4
DRAG_ALPHA_TARGET = 0.3
REHEAT_ALPHA = 0.3
DEFAULT_MAX_TICKS = 1000

# Seeding of new bubbles (phyllotaxis spiral)
INITIAL_RADIUS = 10.0
INITIAL_ANGLE = math.pi * (3 - math.sqrt(5))

# Bubble labels
FULL_LABEL_MIN_RADIUS = 35
LABEL_FONT_MIN = 9
LABEL_FONT_MAX = 22
