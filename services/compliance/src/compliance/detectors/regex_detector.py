"""
Regex detector for Whisperwire.

Matches a rule's pre-compiled regex patterns against the lower-cased
transcript; the first pattern that matches wins. Patterns rejected at
load time are simply absent here.
"""

from __future__ import annotations

from ww_common.models import Rule

from compliance.detectors.base import DetectionContext, TextDetector

REGEX_CONFIDENCE = 85


class RegexDetector(TextDetector):
    """Regex strategy backed by the library's :class:`RegexMatcher`."""

    @property
    def name(self) -> str:
        return "regex"

    @property
    def confidence(self) -> int:
        return REGEX_CONFIDENCE

    def _find(self, rule: Rule, ctx: DetectionContext) -> tuple[int, int] | None:
        if not rule.regex_patterns:
            return None
        match = ctx.library.regex_matcher.first_match(rule.id, ctx.transcript_lower)
        if match is None:
            return None
        return match.start, match.end
