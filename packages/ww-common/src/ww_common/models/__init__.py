"""
Shared Pydantic data models for Whisperwire.

This package contains the cross-component data models: compliance rules
and rule sets, call metadata, transcript segments, alerts, and
evaluation results.
"""

from ww_common.models.alert import Alert, EvaluationResult, Evidence, SuggestedLine
from ww_common.models.call import OUTBOUND_SALES, CallMetadata
from ww_common.models.rule import DetectionMode, Rule, RuleCategory, RuleSet, Severity
from ww_common.models.transcript import Speaker, TranscriptSegment

__all__ = [
    "OUTBOUND_SALES",
    "Alert",
    "CallMetadata",
    "DetectionMode",
    "EvaluationResult",
    "Evidence",
    "Rule",
    "RuleCategory",
    "RuleSet",
    "Severity",
    "Speaker",
    "SuggestedLine",
    "TranscriptSegment",
]
