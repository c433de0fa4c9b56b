"""
Manual override handling

An administrator may replace the derived impact score, effort score or
quadrant of a use case. Each override must carry a justification, and the
derived values stay available so the dashboard can show both side by side.
"""

import math
from numbers import Real
from typing import Any, Optional

from core.exceptions import ValidationError

from .constants import MAX_LEVER_SCORE, MIN_LEVER_SCORE
from .types import ClassificationResult, Quadrant, UseCase


def parse_manual_quadrant(value: Any) -> Optional[Quadrant]:
    """Map a stored quadrant label to a Quadrant, rejecting unknown labels"""
    if value is None or value == "":
        return None
    if isinstance(value, Quadrant):
        quadrant = value
    else:
        try:
            quadrant = Quadrant(str(value).strip())
        except ValueError:
            quadrant = None
    if quadrant is None or quadrant not in Quadrant.assignable():
        allowed = ", ".join(q.value for q in Quadrant.assignable())
        raise ValidationError(
            f"Invalid manual quadrant '{value}'. Must be one of: {allowed}",
            field="manual_quadrant",
            value=str(value),
        )
    return quadrant


def _check_manual_score(name: str, value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, Real) or not math.isfinite(value):
        raise ValidationError(f"{name} must be a number", field=name, value=repr(value))
    if not MIN_LEVER_SCORE <= value <= MAX_LEVER_SCORE:
        raise ValidationError(
            f"{name} must be between {MIN_LEVER_SCORE} and {MAX_LEVER_SCORE}, got {value}",
            field=name,
            value=value,
        )
    return float(value)


def validate_overrides(use_case: UseCase) -> tuple[Optional[float], Optional[float], Optional[Quadrant]]:
    """
    Validate the manual override fields of a use case

    Returns:
        (manual_impact_score, manual_effort_score, manual_quadrant)

    Raises:
        ValidationError: On out-of-range scores, unknown quadrants or a
            missing override reason.
    """
    manual_impact = _check_manual_score("manual_impact_score", use_case.manual_impact_score)
    manual_effort = _check_manual_score("manual_effort_score", use_case.manual_effort_score)
    manual_quadrant = parse_manual_quadrant(use_case.manual_quadrant)

    reason = use_case.override_reason
    if reason is not None and not isinstance(reason, str):
        raise ValidationError("Override reason must be text", field="override_reason", value=repr(reason))

    has_override = manual_impact is not None or manual_effort is not None or manual_quadrant is not None
    if has_override and not (reason and reason.strip()):
        raise ValidationError("Manual overrides require an override reason", field="override_reason")

    return manual_impact, manual_effort, manual_quadrant


def override_count(use_case: UseCase) -> int:
    """Number of populated override fields (scores and quadrant)"""
    return sum(
        1
        for value in (use_case.manual_impact_score, use_case.manual_effort_score, use_case.manual_quadrant)
        if value is not None and value != ""
    )


def override_status(use_case: UseCase, result: ClassificationResult) -> dict[str, Any]:
    """Summary of applied overrides for comparison display"""
    return {
        "has_overrides": result.has_overrides,
        "override_count": override_count(use_case),
        "reason": use_case.override_reason if result.has_overrides else None,
        "effective_impact": result.impact_score,
        "effective_effort": result.effort_score,
        "effective_quadrant": result.quadrant.value,
        "derived_impact": result.derived_impact_score,
        "derived_effort": result.derived_effort_score,
        "derived_quadrant": result.derived_quadrant.value,
    }
