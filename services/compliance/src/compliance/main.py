"""
Compliance service entry point for Whisperwire.

Loads the rule library, creates the call session manager, registers the
call, rule, and health routers, and exposes Prometheus metrics.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

import structlog
import uvicorn
from fastapi import FastAPI
from prometheus_client import make_asgi_app

from ww_common.config import Settings, get_settings
from ww_common.logging import configure_logging

from compliance.routers import calls, health, rules
from compliance.rule_library import RuleLibrary
from compliance.session_manager import CallSessionManager

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Startup / shutdown lifecycle."""
    settings: Settings = app.state.settings
    configure_logging("compliance", level=settings.log_level, json=settings.log_json)
    logger.info("compliance_service_starting")

    if app.state.library is None:
        app.state.library = RuleLibrary.from_settings(settings)
    app.state.sessions = CallSessionManager(app.state.library, settings)

    logger.info("compliance_service_ready", rules=len(app.state.library))
    yield

    logger.info("compliance_service_stopping", active_calls=app.state.sessions.active_count)
    app.state.sessions.end_all()
    logger.info("compliance_service_stopped")


def create_app(
    library: RuleLibrary | None = None,
    settings: Settings | None = None,
) -> FastAPI:
    """Build and return the fully-configured FastAPI application.

    Args:
        library: Pre-loaded rule library; loaded from *settings* at startup
            when omitted.
        settings: Service settings; the cached environment settings when
            omitted.
    """
    app = FastAPI(
        title="Whisperwire Compliance Service",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings or get_settings()
    app.state.library = library
    app.state.sessions = None

    api_prefix = "/api/v1"
    app.include_router(calls.router, prefix=api_prefix)
    app.include_router(rules.router, prefix=api_prefix)
    app.include_router(health.router)

    app.mount("/metrics", make_asgi_app())
    return app


app = create_app()


if __name__ == "__main__":
    _settings = get_settings()
    uvicorn.run(
        "compliance.main:app",
        host=_settings.api_host,
        port=_settings.api_port,
        log_level=_settings.log_level.lower(),
    )
