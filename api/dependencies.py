"""
API dependencies
"""

from functools import wraps

from fastapi import HTTPException

from core.exceptions import FrameworkError
from core.logging import get_logger
from core.metrics import metrics
from d0_metadata.store import ConfigStore
from d0_metadata.store import get_config_store as _get_config_store

logger = get_logger(__name__)


def get_config_store() -> ConfigStore:
    """Admin configuration store dependency"""
    return _get_config_store()


def handle_api_errors(domain: str):
    """Decorator mapping framework errors onto HTTP responses for a domain router"""

    def decorator(func):
        @wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                return await func(*args, **kwargs)
            except HTTPException:
                raise
            except FrameworkError as e:
                if e.status_code >= 500:
                    logger.error(f"{e.error_code} in {func.__name__}: {e.message}")
                else:
                    logger.warning(f"{e.error_code} in {func.__name__}: {e.message}")
                metrics.track_error(e.error_code, domain)
                raise HTTPException(status_code=e.status_code, detail=e.to_dict())

        return wrapper

    return decorator
