"""Constants for lever scoring, weight validation and quadrant classification."""

# Lever rating scale
MIN_LEVER_SCORE = 1
MAX_LEVER_SCORE = 5

# Default per-lever weight in percent (five levers per group)
DEFAULT_LEVER_WEIGHT = 20.0

# Weight sum validation thresholds, in percentage points away from 100
WEIGHT_SUM_WARNING_THRESHOLD = 0.5  # Warning if |Σ-100| > 0.5 AND ≤ 5
WEIGHT_SUM_ERROR_THRESHOLD = 5.0  # Error if |Σ-100| > 5

# Composite scores are rounded to this many decimals before comparison
COMPOSITE_PRECISION = 6

# Display precision (one decimal place, as shown on the matrix)
SCORE_DISPLAY_PRECISION = 1
