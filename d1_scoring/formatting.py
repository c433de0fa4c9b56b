"""Display helpers for scores and weights shown on the matrix and tooltips."""

from typing import Mapping, Optional

from .constants import SCORE_DISPLAY_PRECISION
from .types import EFFORT_LEVERS, IMPACT_LEVERS, _LEVER_LABELS
from .weights_schema import ScoringWeights


def round_score(score: Optional[float]) -> Optional[float]:
    """Round to one decimal place; None passes through"""
    if score is None:
        return None
    return round(score, SCORE_DISPLAY_PRECISION)


def format_score(score: Optional[float], placeholder: str = "-") -> str:
    """Fixed one-decimal string, e.g. ``3.0``"""
    if score is None:
        return placeholder
    return f"{score:.{SCORE_DISPLAY_PRECISION}f}"


def _format_group(weights: Mapping[str, float]) -> list[str]:
    lines = []
    for lever, weight in weights.items():
        label = _LEVER_LABELS.get(lever, lever.replace("_", " ").title())
        lines.append(f"• {label} ({weight:g}%)")
    return lines


def weight_breakdown(weights: ScoringWeights, group: str) -> str:
    """
    Multi-line tooltip text for one lever group

    Args:
        weights: Scoring weights configuration
        group: ``impact`` or ``effort``
    """
    if group == "impact":
        lines = _format_group({lever: weights.impact_weights()[lever] for lever in IMPACT_LEVERS})
    elif group == "effort":
        lines = _format_group({lever: weights.effort_weights()[lever] for lever in EFFORT_LEVERS})
    else:
        raise ValueError(f"Unknown lever group: {group}")
    return "\n".join(lines)
