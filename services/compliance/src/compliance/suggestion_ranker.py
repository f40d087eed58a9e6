"""
Suggested-next-line ranking for Whisperwire.

Collects the corrective lines produced by fired rules, adds the
outbound-sales disclosure nudges, and returns a capped, deduplicated list
in insertion order.
"""

from __future__ import annotations

from ww_common.models import OUTBOUND_SALES, CallMetadata, SuggestedLine

from compliance.session_state import Disclosure, SessionState

DEFAULT_SUGGESTION_LIMIT = 3
RULE_SUGGESTION_CONFIDENCE = 85
NUDGE_CONFIDENCE = 80

SELLER_ID_MIN_TRANSCRIPT = 50
SALES_PURPOSE_MIN_TRANSCRIPT = 100

SELLER_ID_LINE = (
    'Identify yourself and your company: "Hi, my name is [Name] calling from [Company Name]."'
)
SALES_PURPOSE_LINE = (
    "Disclose the sales purpose: \"I'm calling today with a special offer for you...\""
)

# Case-insensitive markers: a candidate containing one counts as an existing nudge.
_SELLER_ID_MARKER = "identify yourself"
_SALES_PURPOSE_MARKER = "disclose the sales purpose"


class SuggestionRanker:
    """Builds the suggestion list for one evaluation.

    Args:
        limit: Maximum number of suggestions returned by :meth:`ranked`.
    """

    def __init__(self, limit: int = DEFAULT_SUGGESTION_LIMIT) -> None:
        if limit < 1:
            raise ValueError("suggestion limit must be at least 1")
        self._limit = limit
        self._candidates: list[SuggestedLine] = []

    def add(self, text: str, confidence: int = RULE_SUGGESTION_CONFIDENCE) -> None:
        """Queue a candidate line. Blank text is ignored."""
        if text.strip():
            self._candidates.append(SuggestedLine(text=text, confidence=confidence))

    def add_contextual(
        self,
        metadata: CallMetadata,
        transcript_length: int,
        state: SessionState,
    ) -> None:
        """Append the outbound-sales disclosure nudges that apply.

        Args:
            metadata: Call metadata (only ``outbound_sales`` calls get nudges).
            transcript_length: Length of the transcript evaluated.
            state: Session state carrying the disclosure flags.
        """
        if metadata.call_type != OUTBOUND_SALES:
            return
        if (
            transcript_length > SELLER_ID_MIN_TRANSCRIPT
            and not state.is_disclosed(Disclosure.SELLER_IDENTIFIED)
            and not self._contains(_SELLER_ID_MARKER)
        ):
            self.add(SELLER_ID_LINE, NUDGE_CONFIDENCE)
        if (
            transcript_length > SALES_PURPOSE_MIN_TRANSCRIPT
            and not state.is_disclosed(Disclosure.SALES_PURPOSE_STATED)
            and not self._contains(_SALES_PURPOSE_MARKER)
        ):
            self.add(SALES_PURPOSE_LINE, NUDGE_CONFIDENCE)

    def ranked(self) -> list[SuggestedLine]:
        """Return the candidates deduplicated by text and capped at the limit."""
        seen: set[str] = set()
        result: list[SuggestedLine] = []
        for line in self._candidates:
            if line.text in seen:
                continue
            seen.add(line.text)
            result.append(line)
            if len(result) == self._limit:
                break
        return result

    def _contains(self, marker: str) -> bool:
        return any(marker in line.text.lower() for line in self._candidates)

    @property
    def limit(self) -> int:
        return self._limit
