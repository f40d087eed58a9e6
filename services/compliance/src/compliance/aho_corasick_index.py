"""
Aho-Corasick trigger-phrase index for Whisperwire.

Builds one automaton over the trigger phrases of every enabled text rule
so a transcript is scanned once per evaluation, then resolves, for each
rule, the phrase that wins under the rule's declared phrase order.
"""

from __future__ import annotations

from dataclasses import dataclass

import ahocorasick
import structlog

from ww_common.utils import lower_preserving_offsets

logger = structlog.get_logger()


@dataclass(frozen=True)
class PhraseHit:
    """The winning trigger-phrase occurrence for one rule.

    Attributes:
        rule_id: Rule owning the phrase.
        phrase: The lower-cased phrase that matched.
        order: Position of the phrase in the rule's trigger list.
        start: Start character index in the haystack.
        end: End character index (exclusive) in the haystack.
    """

    rule_id: str
    phrase: str
    order: int
    start: int
    end: int


class AhoCorasickIndex:
    """Manages a pyahocorasick ``Automaton`` over rule trigger phrases.

    Phrases are stored lower-cased; the haystack passed to :meth:`search`
    must already be lower-cased with offsets preserved. A phrase shared by
    several rules is stored once and attributed to each owner.
    """

    def __init__(self) -> None:
        self._automaton: ahocorasick.Automaton | None = None
        self._pattern_count: int = 0

    # ── public API ──

    def build(self, phrases: list[tuple[str, str, int]]) -> None:
        """Build (or rebuild) the automaton from *(phrase, rule_id, order)* triples.

        Args:
            phrases: Trigger phrases with their owning rule and declared position.
        """
        owners: dict[str, list[tuple[str, int]]] = {}
        for phrase, rule_id, order in phrases:
            key = lower_preserving_offsets(phrase)
            if not key:
                continue
            owners.setdefault(key, []).append((rule_id, order))

        if owners:
            automaton = ahocorasick.Automaton()
            for key, rules in owners.items():
                automaton.add_word(key, (key, tuple(rules)))
            automaton.make_automaton()
            self._automaton = automaton
        else:
            self._automaton = None
        self._pattern_count = len(owners)
        logger.info("phrase_index_built", pattern_count=self._pattern_count)

    def search(self, text: str) -> dict[str, PhraseHit]:
        """Return the winning phrase hit per rule for *text*.

        For each rule the hit with the lowest declared phrase order wins;
        ties on order go to the earliest occurrence.

        Args:
            text: Lower-cased haystack.

        Returns:
            Mapping of rule id to its winning :class:`PhraseHit`.
        """
        if self._automaton is None or not text:
            return {}
        best: dict[str, PhraseHit] = {}
        for end_index, (key, rules) in self._automaton.iter(text):
            start = end_index - len(key) + 1
            for rule_id, order in rules:
                current = best.get(rule_id)
                if current is None or (order, start) < (current.order, current.start):
                    best[rule_id] = PhraseHit(
                        rule_id=rule_id,
                        phrase=key,
                        order=order,
                        start=start,
                        end=start + len(key),
                    )
        return best

    @property
    def pattern_count(self) -> int:
        """Number of distinct phrases currently loaded."""
        return self._pattern_count
