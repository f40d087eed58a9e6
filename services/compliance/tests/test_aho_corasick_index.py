"""
Tests for the Aho-Corasick trigger-phrase index.

Covers declared-order resolution, shared phrases, overlapping patterns,
empty input, and automaton rebuild.
"""

from __future__ import annotations

from compliance.aho_corasick_index import AhoCorasickIndex


class TestBuild:
    """Tests for automaton construction."""

    def test_build_with_phrases(self) -> None:
        index = AhoCorasickIndex()
        index.build([("stop calling me", "R1", 0), ("opt me out", "R2", 0)])
        assert index.pattern_count == 2

    def test_build_with_empty_phrases(self) -> None:
        index = AhoCorasickIndex()
        index.build([])
        assert index.pattern_count == 0

    def test_shared_phrase_stored_once(self) -> None:
        index = AhoCorasickIndex()
        index.build([("but wait", "R1", 0), ("But Wait", "R2", 3)])
        assert index.pattern_count == 1

    def test_rebuild_replaces_old_automaton(self) -> None:
        index = AhoCorasickIndex()
        index.build([("gun", "R1", 0)])
        index.build([("fire", "R2", 0), ("help", "R2", 1)])
        assert index.pattern_count == 2
        assert index.search("gun") == {}

    def test_search_before_build(self) -> None:
        index = AhoCorasickIndex()
        assert index.search("anything") == {}


class TestSearch:
    """Tests for per-rule hit resolution."""

    def test_finds_phrase_with_offsets(self) -> None:
        index = AhoCorasickIndex()
        index.build([("opt me out", "CONS", 0)])
        text = "customer: please opt me out now"
        hit = index.search(text)["CONS"]
        assert hit.start == text.index("opt me out")
        assert hit.end == hit.start + len("opt me out")
        assert hit.phrase == "opt me out"

    def test_phrases_stored_lowercase(self) -> None:
        index = AhoCorasickIndex()
        index.build([("Opt Me Out", "CONS", 0)])
        assert "CONS" in index.search("please opt me out")

    def test_declared_order_beats_position(self) -> None:
        index = AhoCorasickIndex()
        index.build([("stop calling", "DNC", 0), ("no more calls", "DNC", 1)])
        hit = index.search("no more calls. stop calling")["DNC"]
        assert hit.phrase == "stop calling"
        assert hit.order == 0

    def test_first_occurrence_of_winning_phrase(self) -> None:
        index = AhoCorasickIndex()
        index.build([("but wait", "R", 0)])
        text = "but wait... but wait"
        assert index.search(text)["R"].start == 0

    def test_shared_phrase_attributed_to_each_rule(self) -> None:
        index = AhoCorasickIndex()
        index.build([("are you sure", "A", 0), ("are you sure", "B", 2)])
        hits = index.search("are you sure?")
        assert set(hits) == {"A", "B"}
        assert hits["B"].order == 2

    def test_overlapping_phrases(self) -> None:
        index = AhoCorasickIndex()
        index.build([("call me", "A", 0), ("don't call me", "B", 0)])
        hits = index.search("don't call me")
        assert hits["B"].start == 0
        assert hits["A"].start == 6

    def test_no_match(self) -> None:
        index = AhoCorasickIndex()
        index.build([("opt me out", "CONS", 0)])
        assert index.search("hello there") == {}

    def test_empty_text(self) -> None:
        index = AhoCorasickIndex()
        index.build([("opt me out", "CONS", 0)])
        assert index.search("") == {}
