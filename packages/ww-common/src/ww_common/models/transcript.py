"""
Transcript data models for Whisperwire.

Defines the Pydantic model for a single utterance of a live call together
with its character-offset range inside the concatenated transcript.
"""

from __future__ import annotations

import enum
from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator


class Speaker(str, enum.Enum):
    """Who said an utterance."""

    AGENT = "agent"
    CUSTOMER = "customer"


class TranscriptSegment(BaseModel):
    """One utterance in a call transcript.

    Attributes:
        id: Unique identifier.
        speaker: Speaker role.
        text: Literal utterance text.
        timestamp_ms: Offset in ms from call start.
        start_char: Offset of the first character of ``text`` in the full transcript.
        end_char: Offset one past the last character of ``text``.
    """

    model_config = {"frozen": True, "from_attributes": True}

    id: UUID = Field(default_factory=uuid4, description="Unique identifier.")
    speaker: Speaker = Field(..., description="Speaker role.")
    text: str = Field(..., description="Literal utterance text.")
    timestamp_ms: int = Field(default=0, ge=0, description="Offset in ms from call start.")
    start_char: int = Field(default=0, ge=0, description="Start offset in the full transcript.")
    end_char: int = Field(default=0, ge=0, description="End offset in the full transcript.")

    @model_validator(mode="after")
    def _check_span(self) -> TranscriptSegment:
        if self.end_char < self.start_char:
            raise ValueError("end_char must be >= start_char")
        return self
