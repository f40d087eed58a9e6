"""
Call session API router for Whisperwire.

Endpoints for starting a monitored call, appending utterances (each
append triggers an evaluation of the transcript so far), inspecting the
call, and ending it.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from ww_common.models import CallMetadata

from compliance.dependencies import get_session_manager
from compliance.schemas.call_schemas import (
    CallDetailResponse,
    CallEndResponse,
    CallStartResponse,
    SegmentCreateRequest,
    SegmentCreateResponse,
)
from compliance.session_manager import (
    CallAlreadyActiveError,
    CallSession,
    CallSessionManager,
    SessionCapacityError,
    UnknownCallError,
)

router = APIRouter(prefix="/calls", tags=["calls"])


def _get_session(manager: CallSessionManager, call_id: str) -> CallSession:
    try:
        return manager.get(call_id)
    except UnknownCallError:
        raise HTTPException(status_code=404, detail="Call not found") from None


@router.post("", status_code=201, response_model=CallStartResponse)
def start_call(
    body: CallMetadata,
    manager: CallSessionManager = Depends(get_session_manager),
) -> CallStartResponse:
    try:
        session, result = manager.start_call(body)
    except CallAlreadyActiveError:
        raise HTTPException(status_code=409, detail="Call already active") from None
    except SessionCapacityError as exc:
        raise HTTPException(status_code=503, detail=str(exc)) from None
    return CallStartResponse(call_id=session.call_id, result=result)


@router.post("/{call_id}/segments", response_model=SegmentCreateResponse)
def add_segment(
    call_id: str,
    body: SegmentCreateRequest,
    manager: CallSessionManager = Depends(get_session_manager),
) -> SegmentCreateResponse:
    session = _get_session(manager, call_id)
    try:
        result = session.add_segment(body.speaker, body.text, body.timestamp_ms)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from None
    return SegmentCreateResponse(segment=session.segments[-1], result=result)


@router.get("/{call_id}", response_model=CallDetailResponse)
def get_call(
    call_id: str,
    manager: CallSessionManager = Depends(get_session_manager),
) -> CallDetailResponse:
    session = _get_session(manager, call_id)
    return CallDetailResponse(
        metadata=session.metadata,
        transcript=session.buffer.get_text(),
        segments=list(session.segments),
        alerts=list(session.alerts),
    )


@router.delete("/{call_id}", response_model=CallEndResponse)
def end_call(
    call_id: str,
    manager: CallSessionManager = Depends(get_session_manager),
) -> CallEndResponse:
    try:
        session = manager.end_call(call_id)
    except UnknownCallError:
        raise HTTPException(status_code=404, detail="Call not found") from None
    return CallEndResponse(
        call_id=call_id,
        segment_count=session.buffer.segment_count,
        alert_count=len(session.alerts),
        alert_rule_ids=[a.rule_id for a in session.alerts],
    )
