"""
Health check endpoint with configuration store monitoring
"""

import time
from datetime import datetime, timezone
from typing import Any

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from api.dependencies import get_config_store
from core.config import settings
from core.logging import get_logger
from d0_metadata.store import ConfigStore

logger = get_logger(__name__)
router = APIRouter()


def check_config_health(store: ConfigStore) -> dict[str, Any]:
    """
    Check that every admin configuration document loads and validates.

    Args:
        store: Configuration store dependency

    Returns:
        Dict containing per-document status
    """
    start_time = time.time()
    documents = store.check()
    latency_ms = (time.time() - start_time) * 1000
    status = "ok" if all(result == "ok" for result in documents.values()) else "error"
    if status != "ok":
        logger.error(f"Configuration health check failed: {documents}")
    return {"status": status, "documents": documents, "latency_ms": round(latency_ms, 2)}


@router.get("/health")
async def health_check(store: ConfigStore = Depends(get_config_store)) -> JSONResponse:
    """
    Health check endpoint for external monitoring systems.

    Returns:
        JSONResponse: Health status with 200 (healthy) or 503 (unhealthy)
    """
    start_time = time.time()

    health_data = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.app_version,
        "environment": settings.environment,
        "checks": {"configuration": check_config_health(store)},
    }

    is_healthy = health_data["checks"]["configuration"]["status"] == "ok"

    health_data["response_time_ms"] = round((time.time() - start_time) * 1000, 2)

    if not is_healthy:
        health_data["status"] = "unhealthy"

    return JSONResponse(status_code=200 if is_healthy else 503, content=health_data)
