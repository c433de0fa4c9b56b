"""
D2 Sizing Module

T-shirt size, timeline and cost estimation from impact/effort scores.
"""

from .estimator import SizeEstimate, TShirtSizeEstimator, UnsizedReason, estimate_size
from .schema import TShirtSizingConfig, default_sizing_config, load_sizing_config

__all__ = [
    "SizeEstimate",
    "TShirtSizeEstimator",
    "UnsizedReason",
    "estimate_size",
    "TShirtSizingConfig",
    "default_sizing_config",
    "load_sizing_config",
]
