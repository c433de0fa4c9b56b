"""
FastAPI endpoints for the scoring domain

Stateless: the use case travels in the request and nothing is persisted.
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_config_store, handle_api_errors
from core.logging import get_logger
from d0_metadata.store import ConfigStore

from .classifier import classify
from .schemas import ClassificationResponse, ClassifyRequest

logger = get_logger("scoring_api", domain="scoring")

router = APIRouter()


@router.post("/classify", response_model=ClassificationResponse)
@handle_api_errors("scoring")
async def classify_use_case(request: ClassifyRequest, store: ConfigStore = Depends(get_config_store)):
    """Score a use case and place it on the impact/effort matrix"""
    weights = request.weights if request.weights is not None else store.load_scoring_weights()
    result = classify(request.use_case.to_use_case(), weights, request.threshold)
    return ClassificationResponse.from_result(result)
