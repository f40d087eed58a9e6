"""
Call metadata model for Whisperwire.

Carries the identifiers and compliance-relevant flags supplied by the
dialer for one call. The engine treats it as immutable for the lifetime
of a call session.
"""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field

OUTBOUND_SALES = "outbound_sales"


def _utc_now() -> datetime:
    """Return the current UTC datetime."""
    return datetime.now(timezone.utc)


class CallMetadata(BaseModel):
    """Per-call metadata.

    Attributes:
        call_id: Unique call identifier.
        agent_id: Identifier of the agent handling the call.
        agent_name: Display name of the agent.
        call_start_time: When the call started (UTC).
        call_type: Call type (e.g. ``outbound_sales``).
        is_dnc_listed: Number is on a do-not-call registry.
        has_prior_consent: Prior express consent is on file.
        is_prerecorded: Call uses a prerecorded or artificial voice.
        caller_timezone: IANA time zone of the called party (unused by rules).
        customer_phone: Called number.
    """

    model_config = {"frozen": True, "from_attributes": True}

    call_id: str = Field(..., min_length=1, max_length=128, description="Unique call identifier.")
    agent_id: str = Field(default="", max_length=128, description="Agent identifier.")
    agent_name: str = Field(default="", max_length=255, description="Agent display name.")
    call_start_time: datetime = Field(default_factory=_utc_now, description="Call start (UTC).")
    call_type: str = Field(default=OUTBOUND_SALES, max_length=64, description="Call type.")
    is_dnc_listed: bool = Field(default=False, description="Number is DNC-listed.")
    has_prior_consent: bool = Field(default=False, description="Prior consent on file.")
    is_prerecorded: bool = Field(default=False, description="Prerecorded voice in use.")
    caller_timezone: str | None = Field(default=None, max_length=64, description="Caller time zone.")
    customer_phone: str | None = Field(default=None, max_length=32, description="Called number.")
