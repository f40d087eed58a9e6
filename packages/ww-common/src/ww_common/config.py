"""
Environment-based configuration management for Whisperwire.

Uses pydantic-settings to load configuration values from environment
variables and .env files. The compliance service and its scripts import
their settings from this module to ensure consistent configuration
handling.

All environment variables are prefixed with ``WW_`` to avoid collisions.
"""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Central configuration loaded from ``WW_``-prefixed environment variables.

    Attributes:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_json: Render logs as JSON (``False`` = human-readable console).
        rule_library_path: JSON rule-set file (empty = built-in TCPA library).
        include_optional_rules: Evaluate jurisdiction-dependent rules.
        disabled_rules: Rule ids force-disabled at load time.
        suggestion_limit: Maximum suggested lines per evaluation.
        evidence_context_chars: Trailing context characters kept in evidence quotes.
        max_active_calls: Maximum concurrently active call sessions.
        api_host: Bind address for the compliance service.
        api_port: Bind port for the compliance service.
    """

    model_config = SettingsConfigDict(
        env_prefix="WW_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──
    log_level: str = Field(default="INFO", description="Logging level.")
    log_json: bool = Field(default=True, description="Render logs as JSON.")

    # ── Rule library ──
    rule_library_path: str = Field(
        default="",
        description="JSON rule-set file (empty = built-in library).",
    )
    include_optional_rules: bool = Field(
        default=True,
        description="Evaluate jurisdiction-dependent rules.",
    )
    disabled_rules: list[str] = Field(
        default_factory=list,
        description="Rule ids force-disabled at load time.",
    )

    # ── Evaluation ──
    suggestion_limit: int = Field(
        default=3,
        ge=1,
        le=10,
        description="Maximum suggested lines per evaluation.",
    )
    evidence_context_chars: int = Field(
        default=30,
        ge=0,
        le=500,
        description="Trailing context characters in evidence quotes.",
    )
    max_active_calls: int = Field(
        default=1000,
        ge=1,
        description="Maximum concurrently active call sessions.",
    )

    # ── API ──
    api_host: str = Field(default="0.0.0.0", description="Service bind address.")
    api_port: int = Field(default=8010, ge=1, le=65535, description="Service bind port.")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the cached application settings singleton.

    Returns:
        The global ``Settings`` instance.
    """
    return Settings()
