"""
FastAPI dependency injection providers for Whisperwire compliance service.

Exposes the rule library and call session manager stored on
``app.state`` during startup.
"""

from __future__ import annotations

from fastapi import HTTPException, Request

from compliance.rule_library import RuleLibrary
from compliance.session_manager import CallSessionManager


def get_library(request: Request) -> RuleLibrary:
    """Return the loaded rule library from app state."""
    library = getattr(request.app.state, "library", None)
    if library is None:
        raise HTTPException(status_code=503, detail="Rule library not loaded")
    return library


def get_session_manager(request: Request) -> CallSessionManager:
    """Return the call session manager from app state."""
    manager = getattr(request.app.state, "sessions", None)
    if manager is None:
        raise HTTPException(status_code=503, detail="Service not ready")
    return manager
