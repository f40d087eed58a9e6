"""
Compliance evaluator for Whisperwire.

Runs every enabled rule of the library against the call metadata and the
transcript so far, routing each rule to its detector chain, suppressing
rules that already alerted on this call, and collecting the suggested
next lines. Designed to be re-invoked on every new utterance.
"""

from __future__ import annotations

import time
from collections.abc import Sequence

import structlog

from ww_common import metrics
from ww_common.models import (
    Alert,
    CallMetadata,
    DetectionMode,
    EvaluationResult,
    Rule,
    TranscriptSegment,
)

from compliance.detectors import (
    DetectionContext,
    Detector,
    MetadataDetector,
    RegexDetector,
    TriggerPhraseDetector,
)
from compliance.detectors.base import DEFAULT_CONTEXT_CHARS
from compliance.rule_library import RuleLibrary
from compliance.session_state import SessionState
from compliance.suggestion_ranker import (
    DEFAULT_SUGGESTION_LIMIT,
    RULE_SUGGESTION_CONFIDENCE,
    SuggestionRanker,
)
from compliance.transcript_buffer import render_transcript

logger = structlog.get_logger()


class ComplianceEvaluator:
    """Evaluates one call against a rule library.

    An evaluator owns the :class:`SessionState` of exactly one call.
    :meth:`reset_session` must be called before the first evaluation of
    every call; evaluating without it carries state over from the previous
    call.

    Args:
        library: Loaded rule library (shared, read-only).
        state: Session state to own; a fresh one is created if omitted.
        suggestion_limit: Maximum suggestions per result.
        evidence_context_chars: Trailing characters kept in evidence quotes.
        metadata_detector: Detector for metadata-driven rules.
        text_detectors: Detector chain for text-driven rules, tried in order.
    """

    def __init__(
        self,
        library: RuleLibrary,
        *,
        state: SessionState | None = None,
        suggestion_limit: int = DEFAULT_SUGGESTION_LIMIT,
        evidence_context_chars: int = DEFAULT_CONTEXT_CHARS,
        metadata_detector: Detector | None = None,
        text_detectors: Sequence[Detector] | None = None,
    ) -> None:
        self._library = library
        self._state = state if state is not None else SessionState()
        self._suggestion_limit = suggestion_limit
        self._context_chars = evidence_context_chars
        self._metadata_detector = metadata_detector or MetadataDetector()
        self._text_detectors: tuple[Detector, ...] = tuple(
            text_detectors
            if text_detectors is not None
            else (TriggerPhraseDetector(), RegexDetector())
        )

    # ── session ──

    def reset_session(self, call_id: str | None = None) -> None:
        """Clear all session state and bind it to *call_id*."""
        self._state.reset(call_id)
        logger.info("session_reset", call_id=call_id)

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def library(self) -> RuleLibrary:
        return self._library

    # ── evaluation ──

    def evaluate(
        self,
        metadata: CallMetadata,
        segments: Sequence[TranscriptSegment],
        full_transcript: str | None = None,
    ) -> EvaluationResult:
        """Evaluate the call so far and return the newly raised alerts.

        Args:
            metadata: Call metadata.
            segments: Transcript segments so far.
            full_transcript: Concatenated transcript; rendered from
                *segments* when omitted.

        Returns:
            Alerts not raised earlier in this session, plus ranked suggestions.
        """
        started = time.perf_counter()
        transcript = render_transcript(segments) if full_transcript is None else full_transcript
        ctx = DetectionContext(
            metadata=metadata,
            transcript=transcript,
            state=self._state,
            library=self._library,
            context_chars=self._context_chars,
        )
        ranker = SuggestionRanker(self._suggestion_limit)
        alerts: list[Alert] = []

        with structlog.contextvars.bound_contextvars(call_id=metadata.call_id):
            for rule in self._library.enabled_rules:
                if self._state.has_alerted(rule.id):
                    continue
                try:
                    alert = self._evaluate_rule(rule, ctx)
                except Exception:
                    metrics.rule_errors_total.labels(rule_id=rule.id).inc()
                    logger.exception("rule_evaluation_error", rule_id=rule.id)
                    continue
                if alert is None:
                    continue

                alerts.append(alert)
                self._state.record_alert(rule.id)
                metrics.alerts_total.labels(
                    rule_id=alert.rule_id,
                    severity=alert.severity.value,
                ).inc()
                logger.info(
                    "alert_raised",
                    rule_id=alert.rule_id,
                    severity=alert.severity.value,
                    confidence=alert.confidence,
                )
                if rule.recommended_fix:
                    ranker.add(rule.recommended_fix, RULE_SUGGESTION_CONFIDENCE)

            ranker.add_contextual(metadata, len(transcript), self._state)

        elapsed = time.perf_counter() - started
        metrics.evaluations_total.inc()
        metrics.evaluation_duration_seconds.observe(elapsed)

        return EvaluationResult(
            call_id=metadata.call_id,
            alerts=alerts,
            suggested_next_lines=ranker.ranked(),
            evaluation_time_ms=elapsed * 1000.0,
        )

    def _evaluate_rule(self, rule: Rule, ctx: DetectionContext) -> Alert | None:
        if rule.detection_mode == DetectionMode.METADATA:
            return self._metadata_detector.detect(rule, ctx)
        for detector in self._text_detectors:
            alert = detector.detect(rule, ctx)
            if alert is not None:
                return alert
        return None
