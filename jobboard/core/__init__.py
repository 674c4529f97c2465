"""Core functionality for the jobboard package."""

from .logging import setup_logging
from .monitoring import setup_monitoring
from .config import ClientConfig, ServerSettings
from .api_client import ApiClient
from .state import AsyncResource, ResourceSnapshot, ResourceStatus, ResourceStore, create_store

__all__ = [
    'setup_logging',
    'setup_monitoring',
    'ClientConfig',
    'ServerSettings',
    'ApiClient',
    'AsyncResource',
    'ResourceSnapshot',
    'ResourceStatus',
    'ResourceStore',
    'create_store',
]
