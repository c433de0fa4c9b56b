"""
Main FastAPI application entry point
"""
import time

import uvicorn
from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.health import router as health_router
from core.config import settings
from core.exceptions import FrameworkError
from core.logging import get_logger
from core.metrics import get_metrics_response, metrics
from d0_metadata.api import router as metadata_router
from d1_scoring.api import router as scoring_router
from d2_sizing.api import router as sizing_router
from d3_operating_model.api import router as operating_model_router
from d4_portfolio.api import router as portfolio_router

logger = get_logger(__name__)

# Create FastAPI app
app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if settings.is_development else [settings.base_url],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Request tracking middleware
@app.middleware("http")
async def track_requests(request: Request, call_next):
    """Track all HTTP requests for metrics"""
    start_time = time.time()

    # Skip metrics endpoint to avoid recursion
    if request.url.path == "/metrics":
        return await call_next(request)

    response = await call_next(request)

    metrics.track_request(
        method=request.method,
        endpoint=request.url.path,
        status=response.status_code,
        duration=time.time() - start_time,
    )

    return response


# Exception handlers
@app.exception_handler(FrameworkError)
async def framework_error_handler(request: Request, exc: FrameworkError):
    """Handle framework errors raised outside the domain routers"""
    logger.error(f"Framework error - error_code: {exc.error_code}, details: {exc.details}, path: {request.url.path}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(Exception)
async def general_exception_handler(request: Request, exc: Exception):
    """Handle unexpected errors"""
    logger.exception(f"Unexpected error - path: {request.url.path}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"error": "INTERNAL_ERROR", "message": "An unexpected error occurred"},
    )


@app.get("/metrics", include_in_schema=False)
async def prometheus_metrics():
    """Expose metrics for Prometheus scraping"""
    if not settings.prometheus_enabled:
        return JSONResponse(status_code=404, content={"error": "Metrics not enabled"})

    metrics_data, content_type = get_metrics_response()
    return Response(content=metrics_data, media_type=content_type)


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup"""
    logger.info(
        f"Starting {settings.app_name} version={settings.app_version} "
        f"environment={settings.environment} config_dir={settings.config_dir}"
    )


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"Shutting down {settings.app_name}")


# Register health router (no prefix needed as it defines its own paths)
app.include_router(health_router, tags=["health"])

# Register domain routers
app.include_router(metadata_router, prefix="/api/v1/metadata", tags=["metadata"])
app.include_router(scoring_router, prefix="/api/v1/scoring", tags=["scoring"])
app.include_router(sizing_router, prefix="/api/v1/sizing", tags=["sizing"])
app.include_router(operating_model_router, prefix="/api/v1/operating-model", tags=["operating_model"])
app.include_router(portfolio_router, prefix="/api/v1/portfolio", tags=["portfolio"])


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host="0.0.0.0",
        port=8000,
        reload=settings.is_development,
        log_level=settings.log_level.lower(),
    )
