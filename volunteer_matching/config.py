# volunteer_matching/config.py

# Matches produced per soldier (rank 1 = primary, rank 2 = alternate)
MATCHES_PER_SOLDIER = 2

# Student capacity: scholarship holders host fewer soldiers
MAX_SOLDIERS_SCHOLARSHIP = 2
MAX_SOLDIERS_DEFAULT = 4

# Distance step function: (max km, score), checked in order
DISTANCE_BANDS = (
    (10, 100),
    (30, 90),
    (50, 80),
    (75, 60),
    (100, 40),
    (150, 20),
)
DISTANCE_SCORE_FAR = 0
DISTANCE_SCORE_UNKNOWN = 50  # either city unresolved

EARTH_RADIUS_KM = 6371.0

# Final score = base - (100 - distance_score), keyed by (gender_match, language_match)
SCORE_TABLE = {
    (True, True): 100,
    (False, True): 70,
    (True, False): 60,
    (False, False): 30,
}
MIN_SCORE = 1
MAX_SCORE = 100

# Related languages count as a language match
LANGUAGE_FAMILIES = {
    "slavic": frozenset({"RU", "UK", "BG", "HR", "PL"}),
    "romance": frozenset({"FR", "ES", "IT", "PT", "RO"}),
    "semitic": frozenset({"HE", "AR"}),
    "germanic": frozenset({"DE", "NL", "DA"}),
}

# Summary score bands
HIGH_SCORE_THRESHOLD = 70
MEDIUM_SCORE_THRESHOLD = 30

# "balanced" ignores capacity and rebalances; "capacity" enforces it first
ALLOCATION_POLICY_BALANCED = "balanced"
ALLOCATION_POLICY_CAPACITY = "capacity"
ALLOCATION_POLICY_DEFAULT = ALLOCATION_POLICY_BALANCED

# Toy data knobs
NUM_STUDENTS_DEFAULT = 30
NUM_SOLDIERS_DEFAULT = 40
SCHOLARSHIP_RATE_DEFAULT = 0.3
UNKNOWN_CITY_RATE_DEFAULT = 0.05

# Random seed for reproducible toy sets
DEFAULT_SEED = 42
