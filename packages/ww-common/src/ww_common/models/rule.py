"""
Compliance rule models for Whisperwire.

Defines the Pydantic models for a single compliance rule (metadata-driven
or text-driven), the ordered rule set that ships with a version and legal
disclaimer, and the category/severity taxonomies they use.
"""

from __future__ import annotations

import enum

from pydantic import BaseModel, Field, field_validator


class Severity(str, enum.Enum):
    """Alert severity, ordered ``high > medium > low``."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        """Numeric rank for ordering (higher is more severe)."""
        return _SEVERITY_RANK[self]


_SEVERITY_RANK: dict[Severity, int] = {
    Severity.LOW: 1,
    Severity.MEDIUM: 2,
    Severity.HIGH: 3,
}


class RuleCategory(str, enum.Enum):
    """Rule category for grouping and filtering."""

    CALLING_TIME = "calling_time"
    DO_NOT_CALL = "do_not_call"
    DISCLOSURE = "disclosure"
    CONSENT = "consent"
    IDENTIFICATION = "identification"
    RECORDING_DISCLOSURE = "recording_disclosure"
    PRERECORDED = "prerecorded"


class DetectionMode(str, enum.Enum):
    """Which family of detectors a rule is routed to."""

    METADATA = "metadata"
    TEXT = "text"


class Rule(BaseModel):
    """A single compliance rule.

    A rule is either metadata-driven (``requires_metadata``) or text-driven.
    Metadata-driven rules never consult ``triggers`` or ``regex_patterns``.

    Attributes:
        id: Stable unique key (e.g. ``DNC-001``).
        title: Short human-readable title.
        category: Rule category.
        description: What the rule looks for.
        severity: Alert severity when the rule fires.
        triggers: Exact, case-insensitive trigger phrases in priority order.
        regex_patterns: Case-insensitive regex patterns in priority order.
        requires_metadata: Whether the rule is evaluated against call metadata.
        metadata_field: Metadata field the rule inspects (informational).
        why_it_matters: Explanatory text shown with the alert.
        recommended_fix: Corrective utterance suggested to the agent.
        legal_reference: Legal citation.
        enabled: Whether the rule participates in evaluation.
        optional: Whether the rule is jurisdiction-dependent.
    """

    model_config = {"frozen": True, "from_attributes": True}

    id: str = Field(..., min_length=1, max_length=64, description="Stable unique key.")
    title: str = Field(..., description="Short human-readable title.")
    category: RuleCategory = Field(..., description="Rule category.")
    description: str = Field(default="", description="What the rule looks for.")
    severity: Severity = Field(default=Severity.MEDIUM, description="Alert severity.")
    triggers: tuple[str, ...] = Field(default=(), description="Exact trigger phrases.")
    regex_patterns: tuple[str, ...] = Field(default=(), description="Regex patterns.")
    requires_metadata: bool = Field(default=False, description="Metadata-driven rule.")
    metadata_field: str | None = Field(default=None, description="Inspected metadata field.")
    why_it_matters: str = Field(default="", description="Explanatory text.")
    recommended_fix: str = Field(default="", description="Suggested corrective utterance.")
    legal_reference: str = Field(default="", description="Legal citation.")
    enabled: bool = Field(default=True, description="Whether this rule is active.")
    optional: bool = Field(default=False, description="Jurisdiction-dependent rule.")

    @field_validator("triggers")
    @classmethod
    def _drop_blank_triggers(cls, value: tuple[str, ...]) -> tuple[str, ...]:
        return tuple(t for t in value if t.strip())

    @property
    def detection_mode(self) -> DetectionMode:
        """Detector family this rule is routed to."""
        return DetectionMode.METADATA if self.requires_metadata else DetectionMode.TEXT


class RuleSet(BaseModel):
    """An ordered, versioned collection of rules.

    Attributes:
        version: Rule-set version string.
        last_updated: Date the rule set was last revised.
        disclaimer: Legal disclaimer shown alongside alerts.
        rules: Rules in evaluation order.
    """

    model_config = {"frozen": True}

    version: str = Field(default="1.0.0", description="Rule-set version.")
    last_updated: str = Field(default="", description="Date of last revision.")
    disclaimer: str = Field(default="", description="Legal disclaimer.")
    rules: tuple[Rule, ...] = Field(default=(), description="Rules in evaluation order.")

    @field_validator("rules")
    @classmethod
    def _unique_ids(cls, value: tuple[Rule, ...]) -> tuple[Rule, ...]:
        seen: set[str] = set()
        for rule in value:
            if rule.id in seen:
                raise ValueError(f"duplicate rule id '{rule.id}'")
            seen.add(rule.id)
        return value
