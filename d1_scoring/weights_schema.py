"""Schema and validator for scoring weight YAML files

This module defines the Pydantic models representing the administrator
configured ``scoring_weights.yaml``: percentage weights for the business
value (impact) and feasibility (effort) lever groups, an optional governance
group, and the quadrant threshold.

It also exposes a reusable `load_weights(path)` helper that loads the YAML
file, validates it against the schema, and enforces the weight-sum rule
(each group must sum to **100%** within tolerance).
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from core.config import settings
from core.exceptions import ConfigurationError
from core.logging import get_logger

from .constants import (
    DEFAULT_LEVER_WEIGHT,
    MAX_LEVER_SCORE,
    MIN_LEVER_SCORE,
    WEIGHT_SUM_ERROR_THRESHOLD,
    WEIGHT_SUM_WARNING_THRESHOLD,
)
from .types import EFFORT_LEVERS, IMPACT_LEVERS

# ---------------------------------------------------------------------------
# Constants & logging
# ---------------------------------------------------------------------------

_TOLERANCE_SOFT = WEIGHT_SUM_WARNING_THRESHOLD  # Warn if deviation > 0.5
_TOLERANCE_HARD = WEIGHT_SUM_ERROR_THRESHOLD  # Error if deviation > 5
_logger = get_logger("scoring.weights_schema")


def check_group_total(group: str, weights: dict[str, float]) -> float:
    """Ensure a lever group's weights add up to ~100 within tolerance.

    * Hard error if total deviation > ``_TOLERANCE_HARD`` (5 points).
    * Warning if deviation > ``_TOLERANCE_SOFT`` (0.5 points).
    """
    total = sum(weights.values())
    deviation = abs(total - 100.0)

    if deviation > _TOLERANCE_HARD:
        raise ValueError(
            f"{group} weights must sum to 100 ± {_TOLERANCE_HARD}. "
            f"Current total={total:.2f} (deviation={deviation:.2f})."
        )

    if deviation > _TOLERANCE_SOFT:
        _logger.warning(
            "weights_outside_soft_tolerance",
            extra={"group": group, "total_weight": total, "deviation": deviation},
        )
    return total


# ---------------------------------------------------------------------------
# Pydantic models
# ---------------------------------------------------------------------------


class BusinessValueWeights(BaseModel):
    """Percentage weights of the five impact levers."""

    revenue_impact: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    cost_savings: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    risk_reduction: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    broker_partner_experience: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    strategic_fit: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)

    @model_validator(mode="after")
    def _validate_total(self) -> BusinessValueWeights:
        check_group_total("Business value", self.as_dict())
        return self

    def as_dict(self) -> dict[str, float]:
        return {lever: getattr(self, lever) for lever in IMPACT_LEVERS}


class FeasibilityWeights(BaseModel):
    """Percentage weights of the five effort levers."""

    data_readiness: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    technical_complexity: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    change_impact: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    model_risk: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)
    adoption_readiness: float = Field(DEFAULT_LEVER_WEIGHT, ge=0, le=100)

    @model_validator(mode="after")
    def _validate_total(self) -> FeasibilityWeights:
        check_group_total("Feasibility", self.as_dict())
        return self

    def as_dict(self) -> dict[str, float]:
        return {lever: getattr(self, lever) for lever in EFFORT_LEVERS}


class ScoringWeights(BaseModel):
    """Root schema for the scoring weights document."""

    version: str = Field("1.0", pattern=r"^\d+\.\d+$", description="Configuration version")
    business_value: BusinessValueWeights = Field(default_factory=BusinessValueWeights)
    feasibility: FeasibilityWeights = Field(default_factory=FeasibilityWeights)
    governance: dict[str, float] | None = Field(
        default=None, description="Governance lever weights (validated, not used for quadrants)"
    )
    quadrant_threshold: float = Field(
        default_factory=lambda: settings.default_quadrant_threshold, ge=MIN_LEVER_SCORE, le=MAX_LEVER_SCORE
    )

    @field_validator("governance")
    @classmethod
    def validate_governance(cls, v):
        if v is None:
            return v
        if not v:
            raise ValueError("Governance group must have at least one weight")
        for name, weight in v.items():
            if not 0 <= weight <= 100:
                raise ValueError(f"Governance weight '{name}' must be between 0 and 100, got {weight}")
        check_group_total("Governance", v)
        return v

    def impact_weights(self) -> dict[str, float]:
        return self.business_value.as_dict()

    def effort_weights(self) -> dict[str, float]:
        return self.feasibility.as_dict()


def default_weights() -> ScoringWeights:
    """Equal 20% weighting per lever with the configured default threshold."""
    return ScoringWeights()


# ---------------------------------------------------------------------------
# Helper utilities
# ---------------------------------------------------------------------------


def parse_weights(data: dict | None, source: str = "<inline>") -> ScoringWeights:
    """Validate an already-loaded weights document."""
    if not data:
        raise ConfigurationError(f"Scoring weights configuration missing in {source}", setting="scoring_weights")
    try:
        return ScoringWeights.model_validate(data)
    except ValidationError as exc:
        raise ConfigurationError(
            f"Invalid scoring weights in {source}: {exc}", setting="scoring_weights"
        ) from exc


def load_weights(path: os.PathLike | str) -> ScoringWeights:
    """Load a YAML file and return a validated ``ScoringWeights`` instance.

    Args:
        path: Path to a YAML file on disk.

    Raises:
        ConfigurationError: If the file is missing, empty or fails validation.
    """
    path_obj = Path(path)
    if not path_obj.exists():
        raise ConfigurationError(f"Scoring weights configuration missing: {path_obj}", setting="scoring_weights")

    with path_obj.open("r", encoding="utf-8") as fh:
        try:
            data = yaml.safe_load(fh)
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Malformed YAML in {path_obj}: {exc}", setting="scoring_weights") from exc

    return parse_weights(data, source=str(path_obj))


# ---------------------------------------------------------------------------
# CLI interface
# ---------------------------------------------------------------------------


def __main__():
    """CLI interface for validating scoring weights."""
    usage = "Usage: python -m d1_scoring.weights_schema validate <path>"
    if len(sys.argv) < 3 or sys.argv[1] != "validate":
        print(usage)
        sys.exit(1)

    path = sys.argv[2]

    try:
        weights = load_weights(path)
    except ConfigurationError as e:
        print(f"✗ Validation failed: {e.message}")
        sys.exit(1)

    print(f"✓ Validation successful for {path}")
    print(f"  Version: {weights.version}")
    print(f"  Business value total: {sum(weights.impact_weights().values()):.1f}")
    print(f"  Feasibility total: {sum(weights.effort_weights().values()):.1f}")
    print(f"  Quadrant threshold: {weights.quadrant_threshold:.1f}")


if __name__ == "__main__":
    __main__()
