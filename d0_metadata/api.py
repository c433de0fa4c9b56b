"""
FastAPI endpoints for the admin configuration documents

GET returns the validated document with its SHA; PUT must quote the SHA
it was based on and answers 409 when someone saved in between.
"""

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from api.dependencies import get_config_store, handle_api_errors
from core.logging import get_logger

from .store import ConfigStore

logger = get_logger("metadata_api", domain="metadata")

router = APIRouter()


class ConfigDocumentResponse(BaseModel):
    name: str
    data: Dict[str, Any]
    sha: str


class UpdateConfigRequest(BaseModel):
    data: Dict[str, Any]
    original_sha: Optional[str] = Field(None, description="SHA of the document the edit started from")


@router.get("/{name}", response_model=ConfigDocumentResponse)
@handle_api_errors("metadata")
async def get_config(name: str, store: ConfigStore = Depends(get_config_store)):
    """Fetch ``scoring-weights``, ``tshirt-sizing`` or ``tom``"""
    return ConfigDocumentResponse(**store.get_document(name).to_dict())


@router.put("/{name}", response_model=ConfigDocumentResponse)
@handle_api_errors("metadata")
async def update_config(name: str, request: UpdateConfigRequest, store: ConfigStore = Depends(get_config_store)):
    """Validate and save a document with optimistic locking"""
    document = store.save_document(name, request.data, original_sha=request.original_sha)
    logger.info(f"Configuration {name} updated", extra={"sha": document.sha})
    return ConfigDocumentResponse(**document.to_dict())
