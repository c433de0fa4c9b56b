"""
Pydantic schemas for the scoring API.

Lever values are strict numbers: booleans and numeric strings are refused
instead of being coerced, and range checks are left to the classifier so an
out-of-range rating is reported rather than clamped.
"""

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictFloat, StrictInt

from .types import ClassificationResult, UseCase
from .weights_schema import ScoringWeights

LeverValue = Optional[Union[StrictInt, StrictFloat]]


class UseCaseSchema(BaseModel):
    """Use case fields relevant to scoring"""

    model_config = ConfigDict(extra="ignore")

    id: Optional[str] = None
    title: Optional[str] = Field(None, max_length=500)

    revenue_impact: LeverValue = None
    cost_savings: LeverValue = None
    risk_reduction: LeverValue = None
    broker_partner_experience: LeverValue = None
    strategic_fit: LeverValue = None

    data_readiness: LeverValue = None
    technical_complexity: LeverValue = None
    change_impact: LeverValue = None
    model_risk: LeverValue = None
    adoption_readiness: LeverValue = None

    manual_impact_score: LeverValue = None
    manual_effort_score: LeverValue = None
    manual_quadrant: Optional[str] = None
    override_reason: Optional[str] = Field(None, max_length=2000)

    use_case_status: Optional[str] = None
    deployment_status: Optional[str] = None
    tom_phase_override: Optional[str] = None

    def to_use_case(self) -> UseCase:
        return UseCase(**self.model_dump())


class ClassifyRequest(BaseModel):
    """Classify one use case; weights default to the stored configuration"""

    use_case: UseCaseSchema
    weights: Optional[ScoringWeights] = None
    threshold: Optional[Union[StrictInt, StrictFloat]] = None


class ClassificationResponse(BaseModel):
    impact_score: Optional[float]
    effort_score: Optional[float]
    quadrant: str
    quadrant_color: str
    derived_impact_score: Optional[float]
    derived_effort_score: Optional[float]
    derived_quadrant: str
    threshold: float
    has_overrides: bool
    override_reason: Optional[str] = None

    @classmethod
    def from_result(cls, result: ClassificationResult) -> "ClassificationResponse":
        return cls(**result.to_dict(), quadrant_color=result.quadrant.color)
