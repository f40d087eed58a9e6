"""
Rule library loader for Whisperwire.

Wraps a validated :class:`RuleSet` with the derived, load-once state the
detectors need: the enabled-rule list in evaluation order, the trigger
phrase automaton, and the pre-compiled regex patterns. A malformed
pattern is recorded and skipped; it never fails the load.
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

import structlog
from pydantic import ValidationError

from ww_common.config import Settings
from ww_common.models import DetectionMode, Rule, RuleCategory, RuleSet, Severity

from compliance.aho_corasick_index import AhoCorasickIndex
from compliance.default_rules import default_rule_set
from compliance.regex_matcher import PatternError, RegexMatcher

logger = structlog.get_logger()


class RuleLibraryError(ValueError):
    """Raised when a rule set cannot be read or fails validation."""


class RuleLibrary:
    """Immutable, pre-indexed rule library.

    Args:
        rule_set: The validated rule set.
        include_optional: Keep jurisdiction-dependent rules in the enabled set.
        disabled_rules: Rule ids to exclude from the enabled set.
    """

    def __init__(
        self,
        rule_set: RuleSet,
        *,
        include_optional: bool = True,
        disabled_rules: Iterable[str] = (),
    ) -> None:
        self._rule_set = rule_set
        self._rule_map: dict[str, Rule] = {r.id: r for r in rule_set.rules}

        disabled = set(disabled_rules)
        for rule_id in sorted(disabled - self._rule_map.keys()):
            logger.warning("unknown_disabled_rule", rule_id=rule_id)

        self._enabled: tuple[Rule, ...] = tuple(
            r
            for r in rule_set.rules
            if r.enabled and r.id not in disabled and (include_optional or not r.optional)
        )
        text_rules = [r for r in self._enabled if r.detection_mode == DetectionMode.TEXT]

        self._phrase_index = AhoCorasickIndex()
        self._phrase_index.build(
            [
                (phrase, rule.id, order)
                for rule in text_rules
                for order, phrase in enumerate(rule.triggers)
            ]
        )
        self._regex_matcher = RegexMatcher()
        self._pattern_errors = self._regex_matcher.load_rules(text_rules)

        logger.info(
            "rule_library_loaded",
            version=rule_set.version,
            rules=len(rule_set.rules),
            enabled=len(self._enabled),
            phrases=self._phrase_index.pattern_count,
            patterns=self._regex_matcher.pattern_count,
            pattern_errors=len(self._pattern_errors),
        )

    # ── construction ──

    @classmethod
    def default(
        cls,
        *,
        include_optional: bool = True,
        disabled_rules: Iterable[str] = (),
    ) -> RuleLibrary:
        """Build the library from the built-in TCPA rule set."""
        return cls(
            default_rule_set(),
            include_optional=include_optional,
            disabled_rules=disabled_rules,
        )

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        *,
        include_optional: bool = True,
        disabled_rules: Iterable[str] = (),
    ) -> RuleLibrary:
        """Build the library from a JSON rule-set file.

        Raises:
            RuleLibraryError: If the file cannot be read or does not validate.
        """
        try:
            raw = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise RuleLibraryError(f"cannot read rule set '{path}': {exc}") from exc
        try:
            rule_set = RuleSet.model_validate_json(raw)
        except ValidationError as exc:
            raise RuleLibraryError(f"invalid rule set '{path}': {exc}") from exc
        return cls(rule_set, include_optional=include_optional, disabled_rules=disabled_rules)

    @classmethod
    def from_settings(cls, settings: Settings) -> RuleLibrary:
        """Build the library described by *settings*."""
        if settings.rule_library_path:
            return cls.from_file(
                settings.rule_library_path,
                include_optional=settings.include_optional_rules,
                disabled_rules=settings.disabled_rules,
            )
        return cls.default(
            include_optional=settings.include_optional_rules,
            disabled_rules=settings.disabled_rules,
        )

    # ── queries ──

    @property
    def rule_set(self) -> RuleSet:
        return self._rule_set

    @property
    def rules(self) -> tuple[Rule, ...]:
        """All rules in library order, enabled or not."""
        return self._rule_set.rules

    @property
    def enabled_rules(self) -> tuple[Rule, ...]:
        """Rules that take part in evaluation, in library order."""
        return self._enabled

    def is_enabled(self, rule_id: str) -> bool:
        return any(r.id == rule_id for r in self._enabled)

    def get_rule(self, rule_id: str) -> Rule | None:
        return self._rule_map.get(rule_id)

    def rules_by_category(self, category: RuleCategory) -> list[Rule]:
        return [r for r in self._rule_set.rules if r.category == category]

    def rules_at_least(self, severity: Severity) -> list[Rule]:
        """Rules whose severity ranks at or above *severity*."""
        return [r for r in self._rule_set.rules if r.severity.rank >= severity.rank]

    @property
    def phrase_index(self) -> AhoCorasickIndex:
        return self._phrase_index

    @property
    def regex_matcher(self) -> RegexMatcher:
        return self._regex_matcher

    @property
    def phrase_count(self) -> int:
        """Distinct trigger phrases in the automaton."""
        return self._phrase_index.pattern_count

    @property
    def pattern_count(self) -> int:
        """Regex patterns that compiled successfully."""
        return self._regex_matcher.pattern_count

    @property
    def pattern_errors(self) -> list[PatternError]:
        """Patterns rejected at load time."""
        return list(self._pattern_errors)

    def __len__(self) -> int:
        return len(self._rule_set.rules)
