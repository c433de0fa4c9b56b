"""
FastAPI endpoints for T-shirt sizing
"""

from typing import Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, StrictFloat, StrictInt

from api.dependencies import get_config_store, handle_api_errors
from d0_metadata.store import ConfigStore

from .estimator import estimate_size
from .schema import TShirtSizingConfig

router = APIRouter()

Score = Optional[Union[StrictInt, StrictFloat]]


class EstimateRequest(BaseModel):
    impact_score: Score = None
    effort_score: Score = None
    config: Optional[TShirtSizingConfig] = None


class EstimateResponse(BaseModel):
    size: Optional[str] = None
    matched_rule: Optional[str] = None
    estimated_cost_min: Optional[float] = None
    estimated_cost_max: Optional[float] = None
    estimated_weeks_min: Optional[float] = None
    estimated_weeks_max: Optional[float] = None
    team_size_estimate: Optional[str] = None
    color: Optional[str] = None
    reason: Optional[str] = None


@router.post("/estimate", response_model=EstimateResponse)
@handle_api_errors("sizing")
async def estimate(request: EstimateRequest, store: ConfigStore = Depends(get_config_store)):
    """Size a score pair; an unmatched pair comes back with ``size: null``"""
    config = request.config if request.config is not None else store.load_sizing_config()
    return EstimateResponse(**estimate_size(request.impact_score, request.effort_score, config).to_dict())
