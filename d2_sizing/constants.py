"""Default T-shirt sizing configuration and sizing constants."""

WORKING_DAYS_PER_WEEK = 5
DEFAULT_OVERHEAD_MULTIPLIER = 1.35
COST_PRECISION = 2

DEFAULT_SIZES = [
    {
        "name": "XS",
        "min_weeks": 1,
        "max_weeks": 3,
        "min_team": 1,
        "max_team": 2,
        "color": "#10B981",
        "description": "Quick fixes and small enhancements",
    },
    {
        "name": "S",
        "min_weeks": 2,
        "max_weeks": 6,
        "min_team": 2,
        "max_team": 3,
        "color": "#3B82F6",
        "description": "Small projects and proof of concepts",
    },
    {
        "name": "M",
        "min_weeks": 4,
        "max_weeks": 12,
        "min_team": 3,
        "max_team": 5,
        "color": "#F59E0B",
        "description": "Medium-sized initiatives",
    },
    {
        "name": "L",
        "min_weeks": 8,
        "max_weeks": 24,
        "min_team": 5,
        "max_team": 8,
        "color": "#EF4444",
        "description": "Large strategic projects",
    },
    {
        "name": "XL",
        "min_weeks": 16,
        "max_weeks": 52,
        "min_team": 8,
        "max_team": 12,
        "color": "#8B5CF6",
        "description": "Major transformation initiatives",
    },
]

# Daily rates in GBP
DEFAULT_ROLES = [
    {"type": "Developer", "daily_rate": 400},
    {"type": "Analyst", "daily_rate": 350},
    {"type": "PM", "daily_rate": 500},
]

DEFAULT_MAPPING_RULES = [
    {
        "name": "Quick Win - High Impact, Low Effort",
        "condition": {"impact_min": 3.5, "effort_max": 2.5},
        "target_size": "S",
        "priority": 100,
    },
    {
        "name": "Strategic Bet - High Impact, Medium Effort",
        "condition": {"impact_min": 3.0, "effort_min": 2.5, "effort_max": 3.5},
        "target_size": "M",
        "priority": 90,
    },
    {
        "name": "Complex Strategic - High Impact, High Effort",
        "condition": {"impact_min": 2.5, "effort_min": 3.5},
        "target_size": "L",
        "priority": 80,
    },
    {
        "name": "Small Experiment - Low to Medium Impact",
        "condition": {"impact_max": 3.0, "effort_max": 3.0},
        "target_size": "XS",
        "priority": 70,
    },
]
