"""
Executive portfolio analytics

Scores every use case in a portfolio (classification, T-shirt size, TOM
phase) and rolls the results up into the figures shown on the executive
dashboard: quadrant distribution, averages, override count, size
distribution, cost range totals, phase counts and matrix points.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from core.logging import get_logger
from d1_scoring.classifier import ScoreClassifier, quadrant_distribution
from d1_scoring.formatting import round_score
from d1_scoring.types import ClassificationResult, UseCase
from d1_scoring.weights_schema import ScoringWeights
from d2_sizing.estimator import SizeEstimate, TShirtSizeEstimator
from d2_sizing.schema import TShirtSizingConfig
from d3_operating_model.phases import DerivedPhase, TomConfig, derive_phase, merge_preset_profile, phase_summary

logger = get_logger(__name__, domain="portfolio")

UNSIZED_KEY = "unsized"


@dataclass
class ScoredUseCase:
    use_case: UseCase
    classification: ClassificationResult
    size_estimate: Optional[SizeEstimate] = None
    phase: Optional[DerivedPhase] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.use_case.id,
            "title": self.use_case.title,
            "classification": self.classification.to_dict(),
            "size_estimate": self.size_estimate.to_dict() if self.size_estimate else None,
            "phase": self.phase.to_dict() if self.phase else None,
        }


@dataclass
class PortfolioSummary:
    total_use_cases: int
    scored_use_cases: int
    quadrant_distribution: Dict[str, int]
    average_impact: Optional[float]
    average_effort: Optional[float]
    override_count: int
    size_distribution: Dict[str, int] = field(default_factory=dict)
    total_cost_min: Optional[float] = None
    total_cost_max: Optional[float] = None
    phase_summary: Dict[str, int] = field(default_factory=dict)
    matrix_points: List[Dict[str, Any]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_use_cases": self.total_use_cases,
            "scored_use_cases": self.scored_use_cases,
            "quadrant_distribution": self.quadrant_distribution,
            "average_impact": self.average_impact,
            "average_effort": self.average_effort,
            "override_count": self.override_count,
            "size_distribution": self.size_distribution,
            "total_cost_min": self.total_cost_min,
            "total_cost_max": self.total_cost_max,
            "phase_summary": self.phase_summary,
            "matrix_points": self.matrix_points,
        }


def _as_use_case(item: Union[UseCase, Mapping[str, Any]]) -> UseCase:
    return item if isinstance(item, UseCase) else UseCase.from_dict(item)


def score_portfolio(
    use_cases: Iterable[Union[UseCase, Mapping[str, Any]]],
    weights: ScoringWeights,
    sizing_config: Optional[TShirtSizingConfig] = None,
    tom_config: Optional[TomConfig] = None,
    threshold: Optional[float] = None,
) -> List[ScoredUseCase]:
    """
    Classify, size and phase every use case

    Sizing uses the effective (override-aware) scores. Sizing and phase
    derivation are skipped when their configuration is not given.
    """
    classifier = ScoreClassifier(weights, threshold)
    estimator = TShirtSizeEstimator(sizing_config) if sizing_config is not None else None
    merged_tom = merge_preset_profile(tom_config) if tom_config is not None else None

    scored = []
    for item in use_cases:
        use_case = _as_use_case(item)
        classification = classifier.classify(use_case)
        size_estimate = (
            estimator.estimate(classification.impact_score, classification.effort_score) if estimator else None
        )
        phase = (
            derive_phase(use_case.use_case_status, use_case.deployment_status, use_case.tom_phase_override, merged_tom)
            if merged_tom is not None
            else None
        )
        scored.append(ScoredUseCase(use_case, classification, size_estimate, phase))

    logger.info("Portfolio scored", extra={"use_cases": len(scored)})
    return scored


def _average(values: List[float]) -> Optional[float]:
    if not values:
        return None
    return round(sum(values) / len(values), 2)


def _size_distribution(scored: List[ScoredUseCase], sizing_config: TShirtSizingConfig) -> Dict[str, int]:
    distribution = {size.name: 0 for size in sizing_config.sizes}
    distribution[UNSIZED_KEY] = 0
    for item in scored:
        key = item.size_estimate.size if item.size_estimate and item.size_estimate.is_sized else UNSIZED_KEY
        distribution[key] = distribution.get(key, 0) + 1
    return distribution


def _cost_total(estimates: List[SizeEstimate], attr: str) -> Optional[float]:
    costs = [getattr(e, attr) for e in estimates if getattr(e, attr) is not None]
    if not costs:
        return None
    return round(sum(costs), 2)


def matrix_points(scored: Iterable[ScoredUseCase]) -> List[Dict[str, Any]]:
    """Plottable points for use cases with both effective scores"""
    points = []
    for item in scored:
        result = item.classification
        if result.impact_score is None or result.effort_score is None:
            continue
        points.append(
            {
                "id": item.use_case.id,
                "title": item.use_case.title,
                "impact": round_score(result.impact_score),
                "effort": round_score(result.effort_score),
                "quadrant": result.quadrant.value,
                "color": result.quadrant.color,
                "has_overrides": result.has_overrides,
            }
        )
    return points


def summarize_portfolio(
    use_cases: Iterable[Union[UseCase, Mapping[str, Any]]],
    weights: ScoringWeights,
    sizing_config: Optional[TShirtSizingConfig] = None,
    tom_config: Optional[TomConfig] = None,
    threshold: Optional[float] = None,
) -> PortfolioSummary:
    """Executive roll-up of a portfolio of use cases"""
    use_cases = [_as_use_case(item) for item in use_cases]
    scored = score_portfolio(use_cases, weights, sizing_config, tom_config, threshold)
    results = [item.classification for item in scored]

    impacts = [r.impact_score for r in results if r.impact_score is not None]
    efforts = [r.effort_score for r in results if r.effort_score is not None]
    estimates = [item.size_estimate for item in scored if item.size_estimate is not None]

    summary = PortfolioSummary(
        total_use_cases=len(scored),
        scored_use_cases=sum(1 for r in results if r.impact_score is not None and r.effort_score is not None),
        quadrant_distribution=quadrant_distribution(results),
        average_impact=_average(impacts),
        average_effort=_average(efforts),
        override_count=sum(1 for r in results if r.has_overrides),
        matrix_points=matrix_points(scored),
    )

    if sizing_config is not None:
        summary.size_distribution = _size_distribution(scored, sizing_config)
        summary.total_cost_min = _cost_total(estimates, "estimated_cost_min")
        summary.total_cost_max = _cost_total(estimates, "estimated_cost_max")

    if tom_config is not None:
        counts = phase_summary([], merge_preset_profile(tom_config))
        for item in scored:
            counts[item.phase.id] = counts.get(item.phase.id, 0) + 1
        summary.phase_summary = counts

    return summary
