"""
Constants shared by the cycle services.
"""

# Persisted key names
STORAGE_KEYS = {
    "theme": "theme",
    "profile": "userProfile",
    "periods": "periods",
    "daily_logs": "dailyLogs",
    "onboarding_complete": "onboardingComplete",
}

# Ovulation is assumed to happen this many days before the next period
LUTEAL_PHASE_DAYS = 14

# Fertile window around the ovulation date
FERTILE_DAYS_BEFORE_OVULATION = 5
FERTILE_DAYS_AFTER_OVULATION = 1

# Cycle lengths outside the open range (0, 60) are treated as entry errors
MIN_VALID_CYCLE_DAYS = 0
MAX_VALID_CYCLE_DAYS = 60

# Spread in days above which cycles are considered irregular
REGULARITY_THRESHOLD_DAYS = 7

TOP_SYMPTOM_COUNT = 3

# "Period expected in N days" is shown from this many days out
UPCOMING_PERIOD_NOTICE_DAYS = 3

BACKUP_FILENAME_TEMPLATE = "herflow-backup-{date}.json"

# Year of birth must be strictly after this year
MIN_BIRTH_YEAR = 1940
