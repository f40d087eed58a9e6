"""
Rule library API schemas for Whisperwire.

Pydantic response models for browsing the loaded compliance rule
library, including the effective enabled status of each rule.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from ww_common.models import DetectionMode, Rule, RuleCategory, Severity


class RuleSummary(BaseModel):
    id: str
    title: str
    category: RuleCategory
    severity: Severity
    description: str
    detection_mode: DetectionMode
    triggers: list[str] = Field(default_factory=list)
    regex_patterns: list[str] = Field(default_factory=list)
    why_it_matters: str = ""
    recommended_fix: str = ""
    legal_reference: str = ""
    optional: bool = False
    enabled: bool = Field(..., description="Whether the rule takes part in evaluation.")

    @classmethod
    def from_rule(cls, rule: Rule, *, enabled: bool) -> RuleSummary:
        return cls(
            id=rule.id,
            title=rule.title,
            category=rule.category,
            severity=rule.severity,
            description=rule.description,
            detection_mode=rule.detection_mode,
            triggers=list(rule.triggers),
            regex_patterns=list(rule.regex_patterns),
            why_it_matters=rule.why_it_matters,
            recommended_fix=rule.recommended_fix,
            legal_reference=rule.legal_reference,
            optional=rule.optional,
            enabled=enabled,
        )


class RuleListResponse(BaseModel):
    version: str
    last_updated: str
    disclaimer: str
    rules: list[RuleSummary]
    total: int
