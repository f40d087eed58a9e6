"""
Call session API schemas for Whisperwire.

Pydantic request/response models for starting a call, streaming its
utterances, inspecting it, and ending it.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ww_common.models import Alert, CallMetadata, EvaluationResult, Speaker, TranscriptSegment


class CallStartResponse(BaseModel):
    call_id: str
    result: EvaluationResult


class SegmentCreateRequest(BaseModel):
    speaker: Speaker
    text: str = Field(..., min_length=1)
    timestamp_ms: int = Field(default=0, ge=0)


class SegmentCreateResponse(BaseModel):
    segment: TranscriptSegment
    result: EvaluationResult


class CallDetailResponse(BaseModel):
    metadata: CallMetadata
    transcript: str
    segments: list[TranscriptSegment]
    alerts: list[Alert]


class CallEndResponse(BaseModel):
    call_id: str
    segment_count: int
    alert_count: int
    alert_rule_ids: list[str]
