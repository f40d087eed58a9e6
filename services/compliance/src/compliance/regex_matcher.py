"""
Compiled regex pattern manager for Whisperwire.

Compiles every rule's regex patterns once at rule-library load time,
records the patterns that fail to compile without aborting the load, and
returns the first matching pattern of a rule at evaluation time.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

import structlog

from ww_common import metrics
from ww_common.models import Rule

logger = structlog.get_logger()


@dataclass(frozen=True)
class RegexMatch:
    """Result of a regex rule match.

    Attributes:
        rule_id: Rule owning the pattern.
        pattern: The original pattern string.
        matched_text: Text captured by the pattern.
        start: Start character index in the haystack.
        end: End character index in the haystack.
    """

    rule_id: str
    pattern: str
    matched_text: str
    start: int
    end: int


@dataclass(frozen=True)
class PatternError:
    """A pattern rejected at load time.

    Attributes:
        rule_id: Rule owning the pattern.
        pattern: The pattern string.
        message: Compiler error message.
    """

    rule_id: str
    pattern: str
    message: str

    def __str__(self) -> str:
        return f"Invalid regex '{self.pattern}' (rule {self.rule_id}): {self.message}"


class RegexMatcher:
    """Compiles and caches regex patterns per rule.

    Patterns are compiled with ``re.IGNORECASE`` and searched unanchored.
    Invalid patterns are skipped for good; they are never recompiled.
    """

    def __init__(self) -> None:
        self._patterns: dict[str, list[tuple[re.Pattern[str], str]]] = {}
        self._errors: list[PatternError] = []

    def load_rules(self, rules: list[Rule]) -> list[PatternError]:
        """Compile the patterns of *rules* and return the ones that failed.

        Args:
            rules: Text-driven rules whose ``regex_patterns`` should be compiled.

        Returns:
            One :class:`PatternError` per pattern that failed to compile.
        """
        self._patterns.clear()
        self._errors = []
        for rule in rules:
            compiled_patterns: list[tuple[re.Pattern[str], str]] = []
            for pattern_str in rule.regex_patterns:
                try:
                    compiled_patterns.append((re.compile(pattern_str, re.IGNORECASE), pattern_str))
                except re.error as exc:
                    self._errors.append(
                        PatternError(rule_id=rule.id, pattern=pattern_str, message=str(exc))
                    )
                    metrics.pattern_errors_total.inc()
                    logger.warning(
                        "regex_compile_error",
                        pattern=pattern_str,
                        rule_id=rule.id,
                        error=str(exc),
                    )
            if compiled_patterns:
                self._patterns[rule.id] = compiled_patterns
        logger.info("regex_matcher_loaded", valid=self.pattern_count, invalid=len(self._errors))
        return list(self._errors)

    def first_match(self, rule_id: str, text: str) -> RegexMatch | None:
        """Return the match of the first pattern of *rule_id* that matches *text*.

        A pattern that raises while matching is logged and skipped.
        """
        for compiled, pattern_str in self._patterns.get(rule_id, ()):
            try:
                m = compiled.search(text)
            except Exception:
                logger.exception("regex_match_error", pattern=pattern_str, rule_id=rule_id)
                continue
            if m is not None:
                return RegexMatch(
                    rule_id=rule_id,
                    pattern=pattern_str,
                    matched_text=m.group(),
                    start=m.start(),
                    end=m.end(),
                )
        return None

    @property
    def errors(self) -> list[PatternError]:
        """Patterns rejected by the last :meth:`load_rules`."""
        return list(self._errors)

    @property
    def pattern_count(self) -> int:
        """Number of valid compiled patterns loaded."""
        return sum(len(p) for p in self._patterns.values())
