"""Shared fixtures for compliance service tests."""

from __future__ import annotations

from collections.abc import Callable

import pytest
import structlog

from ww_common.config import Settings
from ww_common.models import CallMetadata, Rule, RuleCategory, RuleSet, Severity, Speaker

from compliance.evaluator import ComplianceEvaluator
from compliance.rule_library import RuleLibrary
from compliance.transcript_buffer import TranscriptBuffer

CALL_ID = "call-0001"


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo logging configuration applied by the app lifespan."""
    yield
    structlog.reset_defaults()


@pytest.fixture(scope="session")
def library() -> RuleLibrary:
    """The built-in TCPA rule library."""
    return RuleLibrary.default()


@pytest.fixture()
def evaluator(library: RuleLibrary) -> ComplianceEvaluator:
    ev = ComplianceEvaluator(library)
    ev.reset_session(CALL_ID)
    return ev


@pytest.fixture()
def make_metadata() -> Callable[..., CallMetadata]:
    """Factory for call metadata with consent on file unless overridden."""

    def _make(**overrides) -> CallMetadata:
        data = {
            "call_id": CALL_ID,
            "agent_id": "agent-007",
            "agent_name": "Test Agent",
            "has_prior_consent": True,
        }
        data.update(overrides)
        return CallMetadata(**data)

    return _make


@pytest.fixture()
def metadata(make_metadata) -> CallMetadata:
    return make_metadata()


@pytest.fixture()
def buffer() -> TranscriptBuffer:
    return TranscriptBuffer()


@pytest.fixture()
def say(buffer: TranscriptBuffer) -> Callable[[str, str], TranscriptBuffer]:
    """Append an utterance, e.g. ``say("customer", "stop calling me")``."""

    def _say(speaker: str, text: str) -> TranscriptBuffer:
        buffer.append(Speaker(speaker), text)
        return buffer

    return _say


@pytest.fixture()
def settings() -> Settings:
    return Settings(_env_file=None, log_json=False, max_active_calls=3)


@pytest.fixture()
def make_rule() -> Callable[..., Rule]:
    """Factory for a text rule with sensible defaults."""

    def _make(**overrides) -> Rule:
        data = {
            "id": "TEST-001",
            "title": "Test rule",
            "category": RuleCategory.CONSENT,
            "severity": Severity.MEDIUM,
        }
        data.update(overrides)
        return Rule(**data)

    return _make


@pytest.fixture()
def make_library() -> Callable[..., RuleLibrary]:
    """Factory for a library over an ad-hoc rule set."""

    def _make(*rules: Rule, **kwargs) -> RuleLibrary:
        return RuleLibrary(RuleSet(version="test", rules=rules), **kwargs)

    return _make
