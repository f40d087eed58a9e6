"""
Trigger-phrase detector for Whisperwire.

Matches a rule's exact trigger phrases (case-insensitive) against the
transcript. Phrases are tried in the rule's declared order and the first
phrase present wins, at its first occurrence.
"""

from __future__ import annotations

from ww_common.models import Rule

from compliance.detectors.base import DetectionContext, TextDetector

TRIGGER_CONFIDENCE = 90


class TriggerPhraseDetector(TextDetector):
    """Exact-phrase strategy backed by the library's Aho-Corasick index."""

    @property
    def name(self) -> str:
        return "trigger"

    @property
    def confidence(self) -> int:
        return TRIGGER_CONFIDENCE

    def _find(self, rule: Rule, ctx: DetectionContext) -> tuple[int, int] | None:
        if not rule.triggers:
            return None
        hit = ctx.phrase_hits.get(rule.id)
        if hit is None:
            return None
        return hit.start, hit.end
