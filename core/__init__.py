"""Core utilities and configuration for the RSA AI Framework"""
from core.config import settings
from core.exceptions import ConfigurationError, FrameworkError, ValidationError
from core.logging import get_logger

__all__ = [
    "settings",
    "get_logger",
    "FrameworkError",
    "ValidationError",
    "ConfigurationError",
]
