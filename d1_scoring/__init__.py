"""
D1 Scoring Module

Impact/effort scoring of AI use cases and quadrant classification.
"""

from .classifier import ScoreClassifier, classify, quadrant_for
from .types import ClassificationResult, EffortLever, ImpactLever, Quadrant, UseCase
from .weights_schema import ScoringWeights, default_weights, load_weights

__all__ = [
    # Classifier
    "ScoreClassifier",
    "classify",
    "quadrant_for",
    # Weights
    "ScoringWeights",
    "default_weights",
    "load_weights",
    # Types
    "ClassificationResult",
    "EffortLever",
    "ImpactLever",
    "Quadrant",
    "UseCase",
]
