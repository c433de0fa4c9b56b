"""
Test helpers shared across domains
"""
from d1_scoring.types import EFFORT_LEVERS, IMPACT_LEVERS


def make_use_case(impact=None, effort=None, **fields):
    """Use case dict with every impact lever set to ``impact`` and every effort lever to ``effort``"""
    data = {}
    if impact is not None:
        data.update({lever: impact for lever in IMPACT_LEVERS})
    if effort is not None:
        data.update({lever: effort for lever in EFFORT_LEVERS})
    data.update(fields)
    return data
