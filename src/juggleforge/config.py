"""
Shared configuration for the juggleforge siteswap engine.
"""

# ------------------------------------------------------------------ #
#  Alphabet                                                            #
# ------------------------------------------------------------------ #

THROW_CHARS = "0123456789abcdefghijklmnopqrstuvwxyz"
MAX_THROW = len(THROW_CHARS) - 1     # 'z' == 35

ALLOWED_CHARS = set(THROW_CHARS) | set("()[],")

HAND_COUNT = 2

# ------------------------------------------------------------------ #
#  Difficulty heuristic                                                #
# ------------------------------------------------------------------ #

WEIGHT_HEIGHT   = 0.4
WEIGHT_VARIANCE = 0.3
WEIGHT_LENGTH   = 0.2
WEIGHT_SPECIAL  = 0.1

BONUS_SYNC      = 0.5
BONUS_MULTIPLEX = 0.7
BONUS_HIGH      = 0.3    # any throw >= HIGH_THROW
BONUS_GAP       = 0.2    # any zero throw
HIGH_THROW      = 7

DIFFICULTY_MIN = 1.0
DIFFICULTY_MAX = 10.0

# Catalog bands, [low, high)
DIFFICULTY_BANDS = {
    "easy":   (0.0, 3.0),
    "medium": (3.0, 6.0),
    "hard":   (6.0, 10.0),
}

# ------------------------------------------------------------------ #
#  Generator                                                           #
# ------------------------------------------------------------------ #

DEFAULT_MAX_ATTEMPTS    = 1000
MAX_SEARCH_STEPS        = 20000   # node expansions per attempt
MAX_ENUMERATION_LENGTH  = 3
MAX_COMBINATIONS        = 1000
MAX_PATTERNS_PER_LENGTH = 20

# ------------------------------------------------------------------ #
#  Timing / caching                                                    #
# ------------------------------------------------------------------ #

SLOW_CALL_MS         = 10.0
CACHE_MAX_ENTRIES    = 100
CACHE_MAX_AGE_SECS   = 30 * 60

MAX_REPETITION_LENGTH = 6   # progress tracker related-pattern span
