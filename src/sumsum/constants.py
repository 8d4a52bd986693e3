NUM_COLUMNS = 4
MAX_COLUMN_HEIGHT = 8

# Column heights at which the board starts warning the player.
WARNING_HEIGHT = 5
DANGER_HEIGHT = 6

MIN_CUBES_FOR_SUM = 2
MAX_CUBES_FOR_SUM = 5

MIN_TARGET = 5
MAX_TARGET = 50

# Upcoming cube values shown above each column.
QUEUE_SIZE = 2
# Targets shown after the current one.
TARGETS_AHEAD = 2

POINTS_PER_LEVEL = 500
COMBO_TIMEOUT_MS = 5000.0

# Animation timings (milliseconds).
FALL_DURATION_MS = 350.0
REMOVE_DURATION_MS = 300.0
# Spawned cubes drop in from above the visible column.
SPAWN_DROP_ROW = MAX_COLUMN_HEIGHT + 2

# Time before a spawn during which the chosen column is announced.
SPAWN_WARNING_LEAD_MS = 500.0

INITIAL_CUBES_MIN = 6
INITIAL_CUBES_MAX = 10

# Rescue generation hands out the exact missing value this often.
RESCUE_EXACT_PROBABILITY = 0.6
# Rescue generation looks for single values completing a sum of at most this many cubes.
RESCUE_MAX_CUBES = 4

# Difficulty rolls for target selection: below the first -> 2-cube sums,
# below the second -> 3-cube sums, otherwise 4+ cube sums.
TARGET_TWO_CUBE_ROLL = 0.4
TARGET_THREE_CUBE_ROLL = 0.8

# Upper bound on the number of values fed to the combination search.
SEARCH_POOL_LIMIT = 20

# Score multipliers.
COMBO_STEP_BONUS = 0.5
BIG_SUM_THRESHOLD = 25
BIG_SUM_MULTIPLIER = 3
LARGE_SUM_THRESHOLD = 20
LARGE_SUM_MULTIPLIER = 2
COLUMN_CLEAR_MULTIPLIER = 2

# Milestone thresholds reported to persistence adapters.
SCORE_MILESTONES = (1000, 5000, 10000)
LEVEL_MILESTONES = (5, 10)
COMBO_MILESTONES = (3, 5)
