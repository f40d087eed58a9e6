"""
Call session manager for Whisperwire compliance service.

Owns one :class:`CallSession` per active call: its metadata, transcript
buffer, dedicated evaluator (and therefore session state), and the alerts
raised so far. Evaluations of the same call are serialised by a
per-session lock; different calls run independently.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field

import structlog

from ww_common import metrics
from ww_common.config import Settings
from ww_common.models import Alert, CallMetadata, EvaluationResult, Speaker, TranscriptSegment

from compliance.evaluator import ComplianceEvaluator
from compliance.rule_library import RuleLibrary
from compliance.transcript_buffer import TranscriptBuffer

logger = structlog.get_logger()


class UnknownCallError(KeyError):
    """Raised when a call id has no active session."""


class CallAlreadyActiveError(ValueError):
    """Raised when starting a call whose id is already active."""


class SessionCapacityError(RuntimeError):
    """Raised when the active-call limit has been reached."""


@dataclass
class CallSession:
    """State of one active call.

    Attributes:
        metadata: Call metadata supplied at start.
        evaluator: Evaluator owning this call's session state.
        buffer: Append-only transcript.
        alerts: Every alert raised on this call, in order.
    """

    metadata: CallMetadata
    evaluator: ComplianceEvaluator
    buffer: TranscriptBuffer = field(default_factory=TranscriptBuffer)
    alerts: list[Alert] = field(default_factory=list)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False)

    @property
    def call_id(self) -> str:
        return self.metadata.call_id

    def evaluate(self) -> EvaluationResult:
        """Re-evaluate the transcript as it stands."""
        with self._lock:
            return self._evaluate_locked()

    def add_segment(self, speaker: Speaker, text: str, timestamp_ms: int = 0) -> EvaluationResult:
        """Append one utterance and evaluate the transcript so far.

        Raises:
            ValueError: If *text* is blank.
        """
        with self._lock:
            self.buffer.append(speaker, text, timestamp_ms)
            return self._evaluate_locked()

    @property
    def segments(self) -> tuple[TranscriptSegment, ...]:
        return self.buffer.segments

    def _evaluate_locked(self) -> EvaluationResult:
        result = self.evaluator.evaluate(
            self.metadata,
            self.buffer.segments,
            self.buffer.get_text(),
        )
        self.alerts.extend(result.alerts)
        return result


class CallSessionManager:
    """Registry of active call sessions.

    Args:
        library: Shared rule library.
        settings: Service settings (suggestion limit, evidence context,
            active-call limit).
    """

    def __init__(self, library: RuleLibrary, settings: Settings) -> None:
        self._library = library
        self._settings = settings
        self._sessions: dict[str, CallSession] = {}
        self._lock = threading.Lock()

    # ── public API ──

    def start_call(self, metadata: CallMetadata) -> tuple[CallSession, EvaluationResult]:
        """Open a session for *metadata* and run the call-start evaluation.

        The initial evaluation sees an empty transcript, so only
        metadata-driven rules can fire.

        Raises:
            CallAlreadyActiveError: If the call id is already active.
            SessionCapacityError: If ``max_active_calls`` sessions are open.
        """
        call_id = metadata.call_id
        with self._lock:
            if call_id in self._sessions:
                raise CallAlreadyActiveError(call_id)
            if len(self._sessions) >= self._settings.max_active_calls:
                raise SessionCapacityError(
                    f"active call limit of {self._settings.max_active_calls} reached"
                )
            evaluator = ComplianceEvaluator(
                self._library,
                suggestion_limit=self._settings.suggestion_limit,
                evidence_context_chars=self._settings.evidence_context_chars,
            )
            evaluator.reset_session(call_id)
            session = CallSession(metadata=metadata, evaluator=evaluator)
            self._sessions[call_id] = session
            metrics.active_calls.set(len(self._sessions))

        logger.info(
            "call_started",
            call_id=call_id,
            agent_id=metadata.agent_id,
            call_type=metadata.call_type,
        )
        return session, session.evaluate()

    def get(self, call_id: str) -> CallSession:
        """Return the session for *call_id*.

        Raises:
            UnknownCallError: If no such call is active.
        """
        session = self._sessions.get(call_id)
        if session is None:
            raise UnknownCallError(call_id)
        return session

    def end_call(self, call_id: str) -> CallSession:
        """Close and discard the session for *call_id*.

        Raises:
            UnknownCallError: If no such call is active.
        """
        with self._lock:
            session = self._sessions.pop(call_id, None)
            metrics.active_calls.set(len(self._sessions))
        if session is None:
            raise UnknownCallError(call_id)
        logger.info(
            "call_ended",
            call_id=call_id,
            segments=session.buffer.segment_count,
            alerts=len(session.alerts),
        )
        return session

    def end_all(self) -> None:
        """Discard every active session."""
        with self._lock:
            self._sessions.clear()
            metrics.active_calls.set(0)

    @property
    def active_count(self) -> int:
        return len(self._sessions)

    @property
    def active_calls(self) -> list[str]:
        """Ids of the currently active calls."""
        return list(self._sessions)
