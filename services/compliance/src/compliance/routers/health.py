"""
Health check API router for Whisperwire.

Reports service status together with the loaded rule-set version, rule
counts, rejected regex patterns, and the number of active calls.
"""

from __future__ import annotations

from fastapi import APIRouter, Request
from pydantic import BaseModel

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    service: str
    rule_set_version: str | None = None
    rules: int = 0
    enabled_rules: int = 0
    pattern_errors: int = 0
    active_calls: int = 0


@router.get("/health", response_model=HealthResponse)
def health_check(request: Request) -> HealthResponse:
    library = getattr(request.app.state, "library", None)
    sessions = getattr(request.app.state, "sessions", None)
    if library is None or sessions is None:
        return HealthResponse(status="starting", service="compliance")

    return HealthResponse(
        status="healthy" if not library.pattern_errors else "degraded",
        service="compliance",
        rule_set_version=library.rule_set.version,
        rules=len(library),
        enabled_rules=len(library.enabled_rules),
        pattern_errors=len(library.pattern_errors),
        active_calls=sessions.active_count,
    )
