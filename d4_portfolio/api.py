"""
FastAPI endpoints for executive portfolio analytics
"""

from typing import List, Optional, Union

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field, StrictFloat, StrictInt

from api.dependencies import get_config_store, handle_api_errors
from core.logging import get_logger
from d0_metadata.store import ConfigStore
from d1_scoring.schemas import UseCaseSchema
from d1_scoring.weights_schema import ScoringWeights

from .analytics import score_portfolio, summarize_portfolio

logger = get_logger("portfolio_api", domain="portfolio")

router = APIRouter()


class PortfolioRequest(BaseModel):
    use_cases: List[UseCaseSchema] = Field(default_factory=list, max_length=5000)
    weights: Optional[ScoringWeights] = None
    threshold: Optional[Union[StrictInt, StrictFloat]] = None
    include_sizing: bool = True
    include_phases: bool = True


def _inputs(request: PortfolioRequest, store: ConfigStore):
    weights = request.weights if request.weights is not None else store.load_scoring_weights()
    sizing = store.load_sizing_config() if request.include_sizing else None
    tom = store.load_tom_config() if request.include_phases else None
    use_cases = [item.to_use_case() for item in request.use_cases]
    return use_cases, weights, sizing, tom


@router.post("/summary")
@handle_api_errors("portfolio")
async def portfolio_summary(request: PortfolioRequest, store: ConfigStore = Depends(get_config_store)):
    """Executive roll-up: quadrants, sizes, costs, phases and matrix points"""
    use_cases, weights, sizing, tom = _inputs(request, store)
    summary = summarize_portfolio(use_cases, weights, sizing, tom, request.threshold)
    logger.info("Portfolio summary generated", extra={"use_cases": summary.total_use_cases})
    return summary.to_dict()


@router.post("/score")
@handle_api_errors("portfolio")
async def portfolio_score(request: PortfolioRequest, store: ConfigStore = Depends(get_config_store)):
    """Recalculate scores, sizes and phases for every use case"""
    use_cases, weights, sizing, tom = _inputs(request, store)
    return {"results": [item.to_dict() for item in score_portfolio(use_cases, weights, sizing, tom, request.threshold)]}
