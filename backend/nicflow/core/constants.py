"""
Central location for constant values and tables used across the application.
"""

NICOTINE_TYPES = ("cigarette", "vape", "zyn", "pouch", "gum", "patch", "other")

GOAL_TYPES = ("daily_limit", "reduction", "quit_date")
GOAL_STATUSES = ("active", "completed", "abandoned")

# Nicotine half-life is approximately 2 hours
NICOTINE_HALF_LIFE_HOURS = 2.0

# Default nicotine content (mg) per product type
DEFAULT_NICOTINE_MG = {
    "cigarette": 1.2,
    "vape": 1.5,
    "zyn": 6.0,
    "pouch": 4.0,
    "gum": 2.0,
    "patch": 21.0,
    "other": 1.0,
}

# Rise-then-decay shape per device
# Format: {device: (peak_time_hours, peak_factor, nominal_mg)}
DEVICE_ABSORPTION_TABLE = {
    "vape": (0.1, 0.9, 1.5),
    "zyn": (0.5, 0.7, 4.0),
    "cigarette": (0.15, 0.85, 1.2),
    "iqos": (0.12, 0.8, 1.0),
}

# Level (mg) treated as "effectively zero" for time-to-baseline
BASELINE_LEVEL_MG = 0.05
BASELINE_CAP_HOURS = 48
