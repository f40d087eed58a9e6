"""
Tests for ww-common shared data models.

Validates Pydantic model construction, validation constraints, and
serialization for rules, call metadata, transcript segments, and alerts.
"""

from __future__ import annotations

import uuid
from datetime import datetime

import pytest
from pydantic import ValidationError

from ww_common.models import (
    OUTBOUND_SALES,
    Alert,
    CallMetadata,
    DetectionMode,
    EvaluationResult,
    Evidence,
    Rule,
    RuleCategory,
    RuleSet,
    Severity,
    Speaker,
    SuggestedLine,
    TranscriptSegment,
)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _rule(**overrides) -> Rule:
    data = {
        "id": "TEST-001",
        "title": "Test rule",
        "category": RuleCategory.CONSENT,
        "severity": Severity.HIGH,
        "triggers": ("opt me out",),
    }
    data.update(overrides)
    return Rule(**data)


# ===========================================================================
# Rule model tests
# ===========================================================================


class TestSeverity:
    """Tests for Severity ordering."""

    def test_rank_order(self) -> None:
        assert Severity.HIGH.rank > Severity.MEDIUM.rank > Severity.LOW.rank

    def test_from_value(self) -> None:
        assert Severity("medium") is Severity.MEDIUM


class TestRule:
    """Tests for Rule validation."""

    def test_text_rule_detection_mode(self) -> None:
        assert _rule().detection_mode == DetectionMode.TEXT

    def test_metadata_rule_detection_mode(self) -> None:
        rule = _rule(requires_metadata=True, triggers=(), metadata_field="is_dnc_listed")
        assert rule.detection_mode == DetectionMode.METADATA

    def test_defaults(self) -> None:
        rule = Rule(id="X-1", title="x", category=RuleCategory.DISCLOSURE)
        assert rule.severity == Severity.MEDIUM
        assert rule.triggers == ()
        assert rule.regex_patterns == ()
        assert rule.enabled is True
        assert rule.optional is False

    def test_blank_triggers_dropped(self) -> None:
        rule = _rule(triggers=("stop calling", "", "   "))
        assert rule.triggers == ("stop calling",)

    def test_list_input_coerced_to_tuple(self) -> None:
        rule = _rule(triggers=["a", "b"])
        assert rule.triggers == ("a", "b")

    def test_frozen(self) -> None:
        rule = _rule()
        with pytest.raises(ValidationError):
            rule.title = "changed"

    def test_empty_id_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _rule(id="")

    def test_invalid_category_rejected(self) -> None:
        with pytest.raises(ValidationError):
            _rule(category="weather")


class TestRuleSet:
    """Tests for RuleSet validation."""

    def test_preserves_order(self) -> None:
        rs = RuleSet(rules=(_rule(id="B"), _rule(id="A")))
        assert [r.id for r in rs.rules] == ["B", "A"]

    def test_duplicate_ids_rejected(self) -> None:
        with pytest.raises(ValidationError, match="duplicate rule id"):
            RuleSet(rules=(_rule(id="A"), _rule(id="A")))

    def test_json_round_trip(self) -> None:
        rs = RuleSet(version="2.0.0", disclaimer="Not legal advice.", rules=(_rule(),))
        restored = RuleSet.model_validate_json(rs.model_dump_json())
        assert restored == rs


# ===========================================================================
# Call and transcript model tests
# ===========================================================================


class TestCallMetadata:
    """Tests for CallMetadata defaults and validation."""

    def test_minimal_creation(self) -> None:
        meta = CallMetadata(call_id="call-1")
        assert meta.call_type == OUTBOUND_SALES
        assert meta.is_dnc_listed is False
        assert meta.has_prior_consent is False
        assert meta.is_prerecorded is False
        assert meta.caller_timezone is None
        assert isinstance(meta.call_start_time, datetime)
        assert meta.call_start_time.tzinfo is not None

    def test_call_id_required(self) -> None:
        with pytest.raises(ValidationError):
            CallMetadata()

    def test_frozen(self) -> None:
        meta = CallMetadata(call_id="call-1")
        with pytest.raises(ValidationError):
            meta.is_dnc_listed = True


class TestTranscriptSegment:
    """Tests for TranscriptSegment offsets."""

    def test_creation(self) -> None:
        seg = TranscriptSegment(speaker="customer", text="hello", start_char=10, end_char=15)
        assert seg.speaker == Speaker.CUSTOMER
        assert isinstance(seg.id, uuid.UUID)

    def test_span_order_enforced(self) -> None:
        with pytest.raises(ValidationError):
            TranscriptSegment(speaker=Speaker.AGENT, text="x", start_char=5, end_char=2)

    def test_invalid_speaker(self) -> None:
        with pytest.raises(ValidationError):
            TranscriptSegment(speaker="supervisor", text="x")


# ===========================================================================
# Alert model tests
# ===========================================================================


class TestAlert:
    """Tests for Alert and Evidence."""

    def _alert(self, **overrides) -> Alert:
        data = {
            "rule_id": "CONS-001",
            "title": "Consent Revocation Detected",
            "severity": Severity.HIGH,
            "confidence": 90,
            "evidence": Evidence(quote="I want to opt out", start_char=10, end_char=27),
        }
        data.update(overrides)
        return Alert(**data)

    def test_generates_unique_ids(self) -> None:
        assert self._alert().id != self._alert().id

    def test_confidence_bounds(self) -> None:
        with pytest.raises(ValidationError):
            self._alert(confidence=101)
        with pytest.raises(ValidationError):
            self._alert(confidence=-1)

    def test_evidence_span_order_enforced(self) -> None:
        with pytest.raises(ValidationError):
            Evidence(quote="x", start_char=9, end_char=3)

    def test_metadata_evidence_default_span(self) -> None:
        ev = Evidence(quote="Number flagged as DNC-listed in system metadata")
        assert (ev.start_char, ev.end_char) == (0, 0)

    def test_serialises_severity_value(self) -> None:
        data = self._alert().model_dump(mode="json")
        assert data["severity"] == "high"
        assert data["evidence"]["quote"] == "I want to opt out"


class TestSuggestedLine:
    """Tests for SuggestedLine."""

    def test_empty_text_rejected(self) -> None:
        with pytest.raises(ValidationError):
            SuggestedLine(text="", confidence=80)


class TestEvaluationResult:
    """Tests for EvaluationResult."""

    def test_defaults(self) -> None:
        result = EvaluationResult()
        assert result.alerts == []
        assert result.suggested_next_lines == []
        assert result.call_id is None
        assert result.evaluation_time_ms == 0.0
