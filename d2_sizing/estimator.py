"""
T-shirt size estimator

Maps an (impact, effort) score pair onto a configured size bucket and derives
the cost and timeline ranges. A pair that matches no rule is reported as
unsized, a legitimate "TBD" state rather than an error, and never falls back
to the first or last bucket.
"""

import math
from dataclasses import asdict, dataclass
from enum import Enum
from numbers import Real
from typing import Any, Dict, Optional

from core.exceptions import ValidationError
from core.logging import get_logger
from core.metrics import metrics

from .constants import COST_PRECISION, WORKING_DAYS_PER_WEEK
from .schema import MappingRule, TShirtSize, TShirtSizingConfig

logger = get_logger(__name__, domain="sizing")


class UnsizedReason(str, Enum):
    NO_MATCHING_RULE = "no_matching_rule"
    SIZING_DISABLED = "sizing_disabled"
    SCORES_MISSING = "scores_missing"


@dataclass(frozen=True)
class SizeEstimate:
    """Size bucket with cost/timeline ranges, or an unsized result"""

    size: Optional[str] = None
    matched_rule: Optional[str] = None
    estimated_cost_min: Optional[float] = None
    estimated_cost_max: Optional[float] = None
    estimated_weeks_min: Optional[float] = None
    estimated_weeks_max: Optional[float] = None
    team_size_estimate: Optional[str] = None
    color: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_sized(self) -> bool:
        return self.size is not None

    @classmethod
    def unsized(cls, reason: UnsizedReason) -> "SizeEstimate":
        return cls(reason=reason.value)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _check_score(name: str, value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"{name} must be a number, got {value!r}", field=name)
    if not 1 <= value <= 5:
        raise ValidationError(f"{name} must be between 1 and 5, got {value}", field=name, value=value)
    return float(value)


def calculate_cost(weeks: float, team_size: int, daily_rate: Optional[float], overhead_multiplier: float) -> Optional[float]:
    """weeks × working days × team × day rate × overhead; None when no rate is known"""
    if daily_rate is None:
        return None
    cost = weeks * WORKING_DAYS_PER_WEEK * team_size * daily_rate * overhead_multiplier
    return round(cost, COST_PRECISION)


class TShirtSizeEstimator:
    """Estimator bound to one sizing configuration"""

    def __init__(self, config: TShirtSizingConfig):
        self.config = config

    def match_rule(self, impact: float, effort: float) -> Optional[MappingRule]:
        for rule in self.config.ordered_rules():
            if rule.condition.matches(impact, effort):
                return rule
        return None

    def _build_estimate(self, size: TShirtSize, rule: MappingRule) -> SizeEstimate:
        rate = self.config.average_daily_rate()
        overhead = self.config.overhead_multiplier
        return SizeEstimate(
            size=size.name,
            matched_rule=rule.name,
            estimated_cost_min=calculate_cost(size.min_weeks, size.min_team, rate, overhead),
            estimated_cost_max=calculate_cost(size.max_weeks, size.max_team, rate, overhead),
            estimated_weeks_min=size.min_weeks,
            estimated_weeks_max=size.max_weeks,
            team_size_estimate=size.team_size_estimate,
            color=size.color,
        )

    def estimate(self, impact: Optional[float], effort: Optional[float]) -> SizeEstimate:
        """
        Estimate the size for a score pair

        Raises:
            ValidationError: If a supplied score is not a number in [1, 5]
        """
        if not self.config.enabled:
            result = SizeEstimate.unsized(UnsizedReason.SIZING_DISABLED)
        elif impact is None or effort is None:
            result = SizeEstimate.unsized(UnsizedReason.SCORES_MISSING)
        else:
            impact = _check_score("impact_score", impact)
            effort = _check_score("effort_score", effort)
            rule = self.match_rule(impact, effort)
            if rule is None:
                logger.info("No sizing rule matched", extra={"impact": impact, "effort": effort})
                result = SizeEstimate.unsized(UnsizedReason.NO_MATCHING_RULE)
            else:
                # target sizes are checked when the config is validated
                result = self._build_estimate(self.config.size_by_name(rule.target_size), rule)

        metrics.track_size_estimate(result.size)
        return result


def estimate_size(impact: Optional[float], effort: Optional[float], config: TShirtSizingConfig) -> SizeEstimate:
    """Module-level shortcut for ``TShirtSizeEstimator(config).estimate(...)``"""
    return TShirtSizeEstimator(config).estimate(impact, effort)
