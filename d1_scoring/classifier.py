"""
Impact/effort score classifier

Combines the ten 1-5 lever ratings of a use case into Impact and Effort
composites using admin configured percentage weights, then places the pair
on the 2x2 prioritisation matrix:

    impact >= threshold and effort <  threshold -> Quick Win
    impact >= threshold and effort >= threshold -> Strategic Bet
    impact <  threshold and effort <  threshold -> Experimental
    impact <  threshold and effort >= threshold -> Watchlist

Weights are passed in explicitly; the classifier never reads global state
and never assumes default weights.
"""

import math
from numbers import Real
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from core.exceptions import ConfigurationError, ValidationError
from core.logging import get_logger
from core.metrics import metrics

from .constants import COMPOSITE_PRECISION, MAX_LEVER_SCORE, MIN_LEVER_SCORE
from .overrides import validate_overrides
from .types import EFFORT_LEVERS, IMPACT_LEVERS, ClassificationResult, Quadrant, UseCase
from .weights_schema import ScoringWeights, parse_weights

logger = get_logger(__name__, domain="scoring")

UseCaseInput = Union[UseCase, Mapping[str, Any]]


def _validate_lever(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"Lever '{name}' must be a number, got {value!r}", field=name, value=repr(value))
    if not MIN_LEVER_SCORE <= value <= MAX_LEVER_SCORE:
        raise ValidationError(
            f"Lever '{name}' must be between {MIN_LEVER_SCORE} and {MAX_LEVER_SCORE}, got {value}",
            field=name,
            value=value,
        )
    return float(value)


def weighted_score(group: str, levers: Mapping[str, Any], weights: Mapping[str, float]) -> Optional[float]:
    """
    Weighted composite of one lever group

    Returns None when every lever in the group is missing. A partially
    rated group is rejected rather than scored on the levers present.

    Raises:
        ValidationError: On missing or out-of-range lever values.
    """
    missing = [name for name, value in levers.items() if value is None]
    if len(missing) == len(levers):
        return None
    if missing:
        raise ValidationError(
            f"{group} levers partially rated; missing: {', '.join(missing)}",
            field=missing[0],
            missing=missing,
        )

    values = {name: _validate_lever(name, value) for name, value in levers.items()}
    total_weight = math.fsum(weights[name] for name in values)
    if total_weight <= 0:
        raise ConfigurationError(f"{group} weights sum to zero", setting="scoring_weights")

    # Σ(value × weight / 100), rescaled by the real total so drift stays inside [1, 5]
    score = math.fsum(values[name] * weights[name] for name in values) / total_weight
    return round(score, COMPOSITE_PRECISION)


def calculate_impact_score(use_case: UseCase, weights: ScoringWeights) -> Optional[float]:
    """Impact composite from the five business value levers"""
    return weighted_score("Impact", use_case.levers(IMPACT_LEVERS), weights.impact_weights())


def calculate_effort_score(use_case: UseCase, weights: ScoringWeights) -> Optional[float]:
    """Effort composite from the five feasibility levers"""
    return weighted_score("Effort", use_case.levers(EFFORT_LEVERS), weights.effort_weights())


def quadrant_for(impact: Optional[float], effort: Optional[float], threshold: float) -> Quadrant:
    """
    Place an impact/effort pair on the matrix

    Inclusive on the >= side: a score equal to the threshold counts as high.
    """
    if impact is None or effort is None:
        return Quadrant.UNASSIGNED

    if impact >= threshold:
        return Quadrant.QUICK_WIN if effort < threshold else Quadrant.STRATEGIC_BET
    return Quadrant.EXPERIMENTAL if effort < threshold else Quadrant.WATCHLIST


def _coerce_weights(weights: Union[ScoringWeights, Mapping[str, Any], None]) -> ScoringWeights:
    if weights is None:
        raise ConfigurationError("Scoring weights configuration missing", setting="scoring_weights")
    if isinstance(weights, ScoringWeights):
        return weights
    return parse_weights(dict(weights))


def _coerce_threshold(threshold: Optional[float], weights: ScoringWeights) -> float:
    if threshold is None:
        return weights.quadrant_threshold
    if isinstance(threshold, bool) or not isinstance(threshold, Real):
        raise ValidationError(f"Threshold must be a number, got {threshold!r}", field="threshold")
    if not MIN_LEVER_SCORE <= threshold <= MAX_LEVER_SCORE:
        raise ValidationError(
            f"Threshold must be between {MIN_LEVER_SCORE} and {MAX_LEVER_SCORE}, got {threshold}",
            field="threshold",
        )
    return float(threshold)


class ScoreClassifier:
    """
    Classifier bound to one weights configuration

    Example:
        classifier = ScoreClassifier(load_weights("config/scoring_weights.yaml"))
        result = classifier.classify(use_case)
    """

    def __init__(self, weights: Union[ScoringWeights, Mapping[str, Any], None], threshold: Optional[float] = None):
        self.weights = _coerce_weights(weights)
        self.threshold = _coerce_threshold(threshold, self.weights)

    def classify(self, use_case: UseCaseInput) -> ClassificationResult:
        """Score and classify a single use case, applying manual overrides"""
        if not isinstance(use_case, UseCase):
            use_case = UseCase.from_dict(use_case)

        manual_impact, manual_effort, manual_quadrant = validate_overrides(use_case)

        derived_impact = calculate_impact_score(use_case, self.weights)
        derived_effort = calculate_effort_score(use_case, self.weights)
        derived_quadrant = quadrant_for(derived_impact, derived_effort, self.threshold)

        impact = manual_impact if manual_impact is not None else derived_impact
        effort = manual_effort if manual_effort is not None else derived_effort
        if manual_quadrant is not None:
            quadrant = manual_quadrant
        else:
            quadrant = quadrant_for(impact, effort, self.threshold)

        has_overrides = manual_impact is not None or manual_effort is not None or manual_quadrant is not None

        result = ClassificationResult(
            impact_score=impact,
            effort_score=effort,
            quadrant=quadrant,
            derived_impact_score=derived_impact,
            derived_effort_score=derived_effort,
            derived_quadrant=derived_quadrant,
            threshold=self.threshold,
            has_overrides=has_overrides,
            override_reason=use_case.override_reason if has_overrides else None,
        )

        metrics.track_classification(quadrant.value, overridden=has_overrides)
        logger.debug(
            "Use case classified",
            extra={
                "use_case_id": use_case.id,
                "quadrant": quadrant.value,
                "derived_quadrant": derived_quadrant.value,
                "has_overrides": has_overrides,
            },
        )
        return result

    def classify_many(self, use_cases: Iterable[UseCaseInput]) -> List[ClassificationResult]:
        return [self.classify(use_case) for use_case in use_cases]


def classify(
    use_case: UseCaseInput,
    weights: Union[ScoringWeights, Mapping[str, Any], None],
    threshold: Optional[float] = None,
) -> ClassificationResult:
    """
    Classify a use case against explicit weights

    Args:
        use_case: UseCase or mapping of its fields
        weights: Scoring weights; None raises ConfigurationError
        threshold: Quadrant threshold, defaults to the weights' configured one

    Returns:
        ClassificationResult with effective and derived values
    """
    return ScoreClassifier(weights, threshold).classify(use_case)


def quadrant_distribution(results: Iterable[ClassificationResult]) -> Dict[str, int]:
    """Count results per quadrant; every quadrant key is always present"""
    counts = {quadrant.value: 0 for quadrant in Quadrant}
    for result in results:
        counts[result.quadrant.value] += 1
    return counts
