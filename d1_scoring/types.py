"""
Scoring Types and Enumerations

Type definitions for the impact/effort scoring system: the ten business
levers, the four strategic quadrants and the use case scoring record.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class ImpactLever(str, Enum):
    """Business value levers feeding the Impact score"""

    REVENUE_IMPACT = "revenue_impact"
    COST_SAVINGS = "cost_savings"
    RISK_REDUCTION = "risk_reduction"
    BROKER_PARTNER_EXPERIENCE = "broker_partner_experience"
    STRATEGIC_FIT = "strategic_fit"

    @property
    def label(self) -> str:
        return _LEVER_LABELS[self.value]


class EffortLever(str, Enum):
    """Feasibility levers feeding the Effort score"""

    DATA_READINESS = "data_readiness"
    TECHNICAL_COMPLEXITY = "technical_complexity"
    CHANGE_IMPACT = "change_impact"
    MODEL_RISK = "model_risk"
    ADOPTION_READINESS = "adoption_readiness"

    @property
    def label(self) -> str:
        return _LEVER_LABELS[self.value]


_LEVER_LABELS = {
    "revenue_impact": "Revenue Impact",
    "cost_savings": "Cost Savings",
    "risk_reduction": "Risk Reduction",
    "broker_partner_experience": "Broker/Partner Experience",
    "strategic_fit": "Strategic Fit",
    "data_readiness": "Data Readiness",
    "technical_complexity": "Technical Complexity",
    "change_impact": "Change Impact",
    "model_risk": "Model Risk",
    "adoption_readiness": "Adoption Readiness",
}

IMPACT_LEVERS = tuple(lever.value for lever in ImpactLever)
EFFORT_LEVERS = tuple(lever.value for lever in EffortLever)
ALL_LEVERS = IMPACT_LEVERS + EFFORT_LEVERS


class Quadrant(str, Enum):
    """
    Strategic quadrant on the impact/effort matrix

    Y-axis is Impact (higher is better), X-axis is Effort (lower is easier).
    """

    QUICK_WIN = "Quick Win"  # High impact, low effort
    STRATEGIC_BET = "Strategic Bet"  # High impact, high effort
    EXPERIMENTAL = "Experimental"  # Low impact, low effort
    WATCHLIST = "Watchlist"  # Low impact, high effort
    UNASSIGNED = "Unassigned"  # Scores absent

    @classmethod
    def assignable(cls) -> list["Quadrant"]:
        """Quadrants an administrator may pick as a manual override"""
        return [cls.QUICK_WIN, cls.STRATEGIC_BET, cls.EXPERIMENTAL, cls.WATCHLIST]

    @property
    def priority_order(self) -> int:
        """Return numeric priority for sorting (lower = act on first)"""
        order = {
            Quadrant.QUICK_WIN: 1,
            Quadrant.STRATEGIC_BET: 2,
            Quadrant.EXPERIMENTAL: 3,
            Quadrant.WATCHLIST: 4,
            Quadrant.UNASSIGNED: 5,
        }
        return order[self]

    @property
    def color(self) -> str:
        """Matrix colour used by the executive dashboard"""
        colors = {
            Quadrant.QUICK_WIN: "#10B981",
            Quadrant.STRATEGIC_BET: "#3B82F6",
            Quadrant.EXPERIMENTAL: "#F59E0B",
            Quadrant.WATCHLIST: "#EF4444",
            Quadrant.UNASSIGNED: "#6B7280",
        }
        return colors[self]

    @property
    def description(self) -> str:
        descriptions = {
            Quadrant.QUICK_WIN: "High value, low complexity: deliver first",
            Quadrant.STRATEGIC_BET: "High value, high complexity: plan and invest",
            Quadrant.EXPERIMENTAL: "Lower value, low complexity: try cheaply",
            Quadrant.WATCHLIST: "Lower value, high complexity: revisit later",
            Quadrant.UNASSIGNED: "Not yet scored",
        }
        return descriptions[self]


@dataclass
class UseCase:
    """
    Scoring view of a use case record.

    Lever ratings are left as supplied; range checks happen in the
    classifier so that bad data is reported rather than coerced.
    """

    id: Optional[str] = None
    title: Optional[str] = None

    # Impact levers
    revenue_impact: Any = None
    cost_savings: Any = None
    risk_reduction: Any = None
    broker_partner_experience: Any = None
    strategic_fit: Any = None

    # Effort levers
    data_readiness: Any = None
    technical_complexity: Any = None
    change_impact: Any = None
    model_risk: Any = None
    adoption_readiness: Any = None

    # Manual overrides
    manual_impact_score: Optional[float] = None
    manual_effort_score: Optional[float] = None
    manual_quadrant: Optional[str] = None
    override_reason: Optional[str] = None

    # Delivery status (TOM phase derivation)
    use_case_status: Optional[str] = None
    deployment_status: Optional[str] = None
    tom_phase_override: Optional[str] = None

    extra: dict[str, Any] = field(default_factory=dict)

    def levers(self, names: tuple[str, ...]) -> dict[str, Any]:
        return {name: getattr(self, name) for name in names}

    @property
    def has_manual_overrides(self) -> bool:
        return (
            self.manual_impact_score is not None
            or self.manual_effort_score is not None
            or bool(self.manual_quadrant)
        )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UseCase":
        """Build from a mapping, keeping unknown keys in ``extra``"""
        known = {f for f in cls.__dataclass_fields__ if f != "extra"}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs, extra=extra)


@dataclass(frozen=True)
class ClassificationResult:
    """Effective and derived scores for a single use case"""

    impact_score: Optional[float]
    effort_score: Optional[float]
    quadrant: Quadrant
    derived_impact_score: Optional[float]
    derived_effort_score: Optional[float]
    derived_quadrant: Quadrant
    threshold: float
    has_overrides: bool = False
    override_reason: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "impact_score": self.impact_score,
            "effort_score": self.effort_score,
            "quadrant": self.quadrant.value,
            "derived_impact_score": self.derived_impact_score,
            "derived_effort_score": self.derived_effort_score,
            "derived_quadrant": self.derived_quadrant.value,
            "threshold": self.threshold,
            "has_overrides": self.has_overrides,
            "override_reason": self.override_reason,
        }
