"""
Alert and evaluation-result models for Whisperwire.

Defines the alert record produced once per (rule, call), the evidence
that justifies it, the suggested next lines for the agent, and the
envelope returned by one evaluation call. This is the contract the
presentation and persistence layers depend on.
"""

from __future__ import annotations

from uuid import UUID, uuid4

from pydantic import BaseModel, Field, model_validator

from ww_common.models.rule import Severity


class Evidence(BaseModel):
    """Literal excerpt and character span justifying an alert.

    Metadata-only alerts carry a fixed description and the span ``(0, 0)``.

    Attributes:
        quote: Excerpt from the transcript (or a synthetic description).
        start_char: Start offset of the match in the transcript.
        end_char: End offset of the match in the transcript.
    """

    model_config = {"frozen": True}

    quote: str = Field(..., description="Excerpt or synthetic description.")
    start_char: int = Field(default=0, ge=0, description="Match start offset.")
    end_char: int = Field(default=0, ge=0, description="Match end offset.")

    @model_validator(mode="after")
    def _check_span(self) -> Evidence:
        if self.end_char < self.start_char:
            raise ValueError("end_char must be >= start_char")
        return self


class Alert(BaseModel):
    """A compliance alert.

    Attributes:
        id: Unique alert identifier.
        rule_id: Identifier of the rule that fired.
        title: Rule title.
        severity: Rule severity.
        confidence: Detection confidence (0–100).
        evidence: Excerpt and span justifying the alert.
        why_it_matters: Rule explanatory text.
        agent_fix_suggestion: Rule recommended corrective utterance.
    """

    model_config = {"frozen": True}

    id: UUID = Field(default_factory=uuid4, description="Unique alert identifier.")
    rule_id: str = Field(..., description="Rule that fired.")
    title: str = Field(..., description="Rule title.")
    severity: Severity = Field(..., description="Rule severity.")
    confidence: int = Field(..., ge=0, le=100, description="Detection confidence.")
    evidence: Evidence = Field(..., description="Justifying evidence.")
    why_it_matters: str = Field(default="", description="Explanatory text.")
    agent_fix_suggestion: str = Field(default="", description="Recommended fix.")


class SuggestedLine(BaseModel):
    """A line the agent could say next.

    Attributes:
        text: Suggested utterance.
        confidence: Suggestion confidence (0–100).
    """

    model_config = {"frozen": True}

    text: str = Field(..., min_length=1, description="Suggested utterance.")
    confidence: int = Field(..., ge=0, le=100, description="Suggestion confidence.")


class EvaluationResult(BaseModel):
    """Output of one evaluation call.

    Attributes:
        call_id: Call the evaluation belongs to (if known).
        alerts: Alerts newly raised by this evaluation.
        suggested_next_lines: Ranked suggestions (at most the configured limit).
        evaluation_time_ms: Wall time spent evaluating, in milliseconds.
    """

    call_id: str | None = Field(default=None, description="Call identifier.")
    alerts: list[Alert] = Field(default_factory=list, description="New alerts.")
    suggested_next_lines: list[SuggestedLine] = Field(
        default_factory=list,
        description="Ranked suggestions.",
    )
    evaluation_time_ms: float = Field(default=0.0, ge=0.0, description="Evaluation wall time.")
