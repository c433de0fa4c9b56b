"""
D0 Metadata Module

YAML-backed store for the administrator configuration documents.
"""

from .store import ConfigDocument, ConfigStore, content_sha, get_config_store

__all__ = ["ConfigDocument", "ConfigStore", "content_sha", "get_config_store"]
