"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

SESSION_COUNT = 4
SESSION_NUMBERS = tuple(range(1, SESSION_COUNT + 1))

NEW_LEARNER_SENTINEL = "NEW"

SEARCH_MIN_LENGTH = 2
SEARCH_LIMIT = 10

DEFAULT_POOL_SIZE = 10
DEFAULT_POOL_NAME = "signature_attendance"
