"""
Canned call scenarios for Whisperwire demos.

Each scenario is a call's metadata plus its utterances with their offset
from call start. :func:`replay` feeds a scenario through an evaluator
utterance by utterance, exactly as a live call session would.
"""

from __future__ import annotations

from dataclasses import dataclass

from ww_common.models import CallMetadata, EvaluationResult, Speaker, TranscriptSegment

from compliance.evaluator import ComplianceEvaluator
from compliance.rule_library import RuleLibrary
from compliance.transcript_buffer import TranscriptBuffer


@dataclass(frozen=True)
class ScenarioLine:
    """One scripted utterance."""

    speaker: Speaker
    text: str
    delay_ms: int


@dataclass(frozen=True)
class Scenario:
    """A scripted call."""

    key: str
    name: str
    description: str
    metadata: CallMetadata
    lines: tuple[ScenarioLine, ...]


@dataclass(frozen=True)
class ReplayStep:
    """Evaluation after one utterance (``segment`` is ``None`` at call start)."""

    segment: TranscriptSegment | None
    result: EvaluationResult


def _agent(text: str, delay_ms: int) -> ScenarioLine:
    return ScenarioLine(Speaker.AGENT, text, delay_ms)


def _customer(text: str, delay_ms: int) -> ScenarioLine:
    return ScenarioLine(Speaker.CUSTOMER, text, delay_ms)


SCENARIOS: dict[str, Scenario] = {
    s.key: s
    for s in (
        Scenario(
            key="dnc-request",
            name="DNC Request Scenario",
            description="Customer requests DNC, agent improperly continues selling",
            metadata=CallMetadata(
                call_id="demo-001",
                agent_id="agent-001",
                agent_name="Sarah Johnson",
                has_prior_consent=True,
            ),
            lines=(
                _agent(
                    "Hi, this is Sarah calling from TeleSolutions with an exciting offer for you today.",
                    0,
                ),
                _customer("Who is this?", 4500),
                _agent(
                    "This is Sarah from TeleSolutions. We have a limited time offer on our premium "
                    "internet package that could save you up to 40% on your monthly bill.",
                    6000,
                ),
                _customer("Look, I'm not interested. Don't call me again, please.", 14000),
                _agent(
                    "I understand, but before you go, let me just tell you about our special "
                    "promotion that ends today.",
                    18000,
                ),
                _customer("I said stop calling me! Put me on your do not call list right now.", 25000),
                _agent(
                    "Understood. I'll add you to our Do Not Call list effective immediately. You "
                    "won't receive any more marketing calls from us. Have a great day.",
                    30000,
                ),
            ),
        ),
        Scenario(
            key="dnc-listed",
            name="DNC Listed Number",
            description="Marketing call to National DNC Registry number",
            metadata=CallMetadata(
                call_id="demo-002",
                agent_id="agent-002",
                agent_name="Mike Thompson",
                is_dnc_listed=True,
            ),
            lines=(
                _agent(
                    "Good morning! This is Mike from Premium Services calling about an exclusive offer.",
                    0,
                ),
                _customer("Hello? What company is this?", 5500),
                _agent(
                    "This is Mike from Premium Services. I'm calling because you've been selected "
                    "for our VIP discount program.",
                    7500,
                ),
                _customer("I never signed up for anything. How did you get my number?", 14000),
            ),
        ),
        Scenario(
            key="consent-revocation",
            name="Consent Revocation",
            description="Customer revokes consent using non-standard phrasing",
            metadata=CallMetadata(
                call_id="demo-003",
                agent_id="agent-003",
                agent_name="Jennifer Davis",
                has_prior_consent=True,
            ),
            lines=(
                _agent(
                    "Hi, this is Jennifer from DataCloud. I'm calling about your subscription renewal.",
                    0,
                ),
                _customer("Oh, right. What about it?", 5500),
                _agent(
                    "We have some great upgrade options that I'd love to tell you about. Our new "
                    "premium tier includes unlimited storage.",
                    7500,
                ),
                _customer(
                    "Actually, I want to opt out of these marketing calls. I withdraw my consent "
                    "for you to contact me.",
                    15000,
                ),
                _agent(
                    "I understand you'd like to revoke your consent. I'll process that right away "
                    "and you'll be removed from our calling list. Is there anything else I can "
                    "help with regarding your existing account?",
                    22000,
                ),
            ),
        ),
        Scenario(
            key="missing-disclosures",
            name="Missing Required Disclosures",
            description="Agent fails to provide required TSR disclosures",
            metadata=CallMetadata(
                call_id="demo-004",
                agent_id="agent-004",
                agent_name="Chris Martinez",
                has_prior_consent=True,
            ),
            lines=(
                _agent(
                    "Hello! So you're definitely going to want to hear about this amazing deal "
                    "we've got going on.",
                    0,
                ),
                _customer("Wait, who is this?", 5500),
                _agent(
                    "Oh, right! I'm Chris calling from SuperSavers. We're reaching out because you "
                    "qualify for 50% off our annual membership!",
                    7500,
                ),
                _customer("What is this membership for exactly?", 15000),
                _agent(
                    "It's our premium discount club that gives you access to exclusive deals at "
                    "over 10,000 retailers. I'm calling to offer you our special promotional rate.",
                    17500,
                ),
            ),
        ),
        Scenario(
            key="prerecorded",
            name="Prerecorded Voice Without Consent",
            description="Robocall without prior express written consent",
            metadata=CallMetadata(
                call_id="demo-005",
                agent_id="system",
                agent_name="Automated System",
                is_prerecorded=True,
            ),
            lines=(
                _agent(
                    "Hello! This is an important message from ValuePlus about a special "
                    "limited-time offer available exclusively to you.",
                    0,
                ),
                _agent(
                    "Press 1 now to speak with a representative and claim your free gift valued "
                    "at over $200.",
                    6500,
                ),
                _agent(
                    "This offer expires at midnight tonight, so don't delay! Press 1 now or call "
                    "us back at 1-800-555-0123.",
                    13000,
                ),
            ),
        ),
    )
}

DEFAULT_SCENARIO = "dnc-request"


def get_scenario(key: str) -> Scenario:
    """Return the scenario named *key*.

    Raises:
        KeyError: If no such scenario exists.
    """
    try:
        return SCENARIOS[key]
    except KeyError:
        raise KeyError(f"unknown scenario '{key}'") from None


def replay(scenario: Scenario, evaluator: ComplianceEvaluator) -> list[ReplayStep]:
    """Run *scenario* through *evaluator* one utterance at a time.

    The evaluator's session is reset first; the returned steps start with
    the call-start evaluation on an empty transcript.
    """
    evaluator.reset_session(scenario.metadata.call_id)
    buffer = TranscriptBuffer()
    steps = [ReplayStep(segment=None, result=evaluator.evaluate(scenario.metadata, ()))]
    for line in scenario.lines:
        segment = buffer.append(line.speaker, line.text, line.delay_ms)
        result = evaluator.evaluate(scenario.metadata, buffer.segments, buffer.get_text())
        steps.append(ReplayStep(segment=segment, result=result))
    return steps


def replay_with_library(scenario: Scenario, library: RuleLibrary | None = None) -> list[ReplayStep]:
    """Replay *scenario* with a fresh evaluator over *library* (built-in by default)."""
    return replay(scenario, ComplianceEvaluator(library or RuleLibrary.default()))
