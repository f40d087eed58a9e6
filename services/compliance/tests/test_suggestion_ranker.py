"""
Tests for the suggested-next-line ranker.
"""

from __future__ import annotations

import pytest

from ww_common.models import CallMetadata

from compliance.session_state import Disclosure, SessionState
from compliance.suggestion_ranker import (
    NUDGE_CONFIDENCE,
    SALES_PURPOSE_LINE,
    SELLER_ID_LINE,
    SuggestionRanker,
)

SALES = CallMetadata(call_id="c1", call_type="outbound_sales")
SERVICE = CallMetadata(call_id="c1", call_type="inbound_service")


class TestRanked:
    """Tests for SuggestionRanker.ranked()."""

    def test_insertion_order(self) -> None:
        ranker = SuggestionRanker()
        ranker.add("first")
        ranker.add("second", 50)
        assert [s.text for s in ranker.ranked()] == ["first", "second"]
        assert ranker.ranked()[0].confidence == 85

    def test_dedup_by_text(self) -> None:
        ranker = SuggestionRanker()
        ranker.add("same")
        ranker.add("same", 10)
        ranker.add("other")
        ranked = ranker.ranked()
        assert [s.text for s in ranked] == ["same", "other"]
        assert ranked[0].confidence == 85

    def test_truncated_to_limit(self) -> None:
        ranker = SuggestionRanker()
        for i in range(6):
            ranker.add(f"line {i}")
        assert [s.text for s in ranker.ranked()] == ["line 0", "line 1", "line 2"]

    def test_duplicates_do_not_consume_limit(self) -> None:
        ranker = SuggestionRanker(limit=2)
        ranker.add("a")
        ranker.add("a")
        ranker.add("b")
        assert [s.text for s in ranker.ranked()] == ["a", "b"]

    def test_blank_ignored(self) -> None:
        ranker = SuggestionRanker()
        ranker.add("   ")
        assert ranker.ranked() == []

    def test_invalid_limit(self) -> None:
        with pytest.raises(ValueError):
            SuggestionRanker(limit=0)


class TestContextual:
    """Tests for SuggestionRanker.add_contextual()."""

    def test_short_transcript_no_nudges(self) -> None:
        ranker = SuggestionRanker()
        ranker.add_contextual(SALES, 50, SessionState())
        assert ranker.ranked() == []

    def test_seller_nudge_after_50_chars(self) -> None:
        ranker = SuggestionRanker()
        ranker.add_contextual(SALES, 51, SessionState())
        ranked = ranker.ranked()
        assert [s.text for s in ranked] == [SELLER_ID_LINE]
        assert ranked[0].confidence == NUDGE_CONFIDENCE

    def test_both_nudges_after_100_chars(self) -> None:
        ranker = SuggestionRanker()
        ranker.add_contextual(SALES, 101, SessionState())
        assert [s.text for s in ranker.ranked()] == [SELLER_ID_LINE, SALES_PURPOSE_LINE]

    def test_disclosed_flags_suppress_nudges(self) -> None:
        state = SessionState()
        state.mark_disclosed(Disclosure.SELLER_IDENTIFIED)
        state.mark_disclosed(Disclosure.SALES_PURPOSE_STATED)
        ranker = SuggestionRanker()
        ranker.add_contextual(SALES, 500, state)
        assert ranker.ranked() == []

    def test_non_sales_call_no_nudges(self) -> None:
        ranker = SuggestionRanker()
        ranker.add_contextual(SERVICE, 500, SessionState())
        assert ranker.ranked() == []

    def test_equivalent_line_already_present(self) -> None:
        ranker = SuggestionRanker()
        ranker.add("Please IDENTIFY YOURSELF before continuing.")
        ranker.add_contextual(SALES, 60, SessionState())
        assert len(ranker.ranked()) == 1

    def test_nudges_follow_rule_suggestions(self) -> None:
        ranker = SuggestionRanker()
        ranker.add("rule fix one")
        ranker.add("rule fix two")
        ranker.add_contextual(SALES, 200, SessionState())
        assert [s.text for s in ranker.ranked()] == ["rule fix one", "rule fix two", SELLER_ID_LINE]
