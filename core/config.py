"""Configuration constants for arvo application."""

import os

# Mastery levels
MIN_LEVEL = 0  # Unseen
MAX_LEVEL = 5  # Mastered
LEARNED_LEVEL = 1

# Self-rated recall quality
MIN_RATING = 1       # Forgot entirely
MAX_RATING = 5       # Perfect recall
PASSING_RATING = 3   # Ratings at or above this promote the card

# Days until the next review, by level reached after a review
REVIEW_INTERVAL_DAYS = {
    0: 0,   # Due immediately
    1: 1,
    2: 3,
    3: 7,
    4: 14,
    5: 30,
}

# Pronunciation feedback
PERFECT_SCORE = 100
ALTERNATIVE_MATCH_SCORE = 95   # Recognizer heard the target as an alternative
CONTAINS_TARGET_MIN_SCORE = 85  # Spoken phrase contains the target
PARTIAL_MATCH_MIN_SCORE = 70    # Spoken phrase is a piece of the target
PARTIAL_MATCH_MIN_LENGTH = 2    # Spoken fragments this short never count as partial

GOOD_THRESHOLD = 80
CLOSE_THRESHOLD = 60
TRY_AGAIN_THRESHOLD = 40

# Storage
DEFAULT_STORAGE = 'file'
USER_ID_PATTERN = r'^[\w-]{1,64}$'  # Also used in progress file names
CONFIG_FILE = os.path.expanduser('~/.config/arvo/config.json')
