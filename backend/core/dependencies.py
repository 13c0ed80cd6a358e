"""
Ship maintenance: Core request dependencies.

Services are constructed per request around the Storage client the app
factory placed on app.state. Module route files build their own service
dependencies on top of get_storage.
"""

from fastapi import Request

from core.config import Settings
from core.db import Storage


def get_storage(request: Request) -> Storage:
    """Dependency for the shared storage client."""
    return request.app.state.storage


def get_settings(request: Request) -> Settings:
    return request.app.state.settings
