"""
Detector interface for Whisperwire.

Defines the :class:`Detector` contract shared by the closed set of
detection strategies (metadata, trigger phrase, regex), the per-evaluation
:class:`DetectionContext` they read, and :class:`TextDetector`, which
applies the session side effects common to both text strategies.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from functools import cached_property
from typing import TYPE_CHECKING

import structlog

from ww_common.models import Alert, CallMetadata, DetectionMode, Evidence, Rule
from ww_common.utils import clip_excerpt, lower_preserving_offsets

from compliance.default_rules import (
    CALLBACK_NUMBER,
    CONSENT_REVOCATION,
    DNC_CONTINUED,
    DNC_REQUEST,
    PRODUCT_DESCRIPTION,
    RECORDING_DISCLOSURE,
    SALES_PURPOSE,
    SELLER_IDENTITY,
)
from compliance.session_state import Disclosure, SessionState

if TYPE_CHECKING:
    from compliance.aho_corasick_index import PhraseHit
    from compliance.rule_library import RuleLibrary

logger = structlog.get_logger()

DEFAULT_CONTEXT_CHARS = 30

# Rules whose match records a disclosure instead of raising an alert.
POSITIVE_DISCLOSURES: dict[str, Disclosure] = {
    SELLER_IDENTITY: Disclosure.SELLER_IDENTIFIED,
    SALES_PURPOSE: Disclosure.SALES_PURPOSE_STATED,
    PRODUCT_DESCRIPTION: Disclosure.PRODUCT_DESCRIBED,
    CALLBACK_NUMBER: Disclosure.CALLBACK_PROVIDED,
    RECORDING_DISCLOSURE: Disclosure.RECORDING_DISCLOSED,
}


@dataclass
class DetectionContext:
    """Everything a detector may read during one evaluation call.

    Attributes:
        metadata: Call metadata.
        transcript: Full transcript so far, original case.
        state: Session state of the call (detectors may mutate it).
        library: Rule library providing the phrase index and compiled patterns.
        context_chars: Trailing characters kept in evidence quotes.
        transcript_lower: Lower-cased transcript with offsets preserved.
    """

    metadata: CallMetadata
    transcript: str
    state: SessionState
    library: RuleLibrary
    context_chars: int = DEFAULT_CONTEXT_CHARS
    transcript_lower: str = field(init=False)

    def __post_init__(self) -> None:
        self.transcript_lower = lower_preserving_offsets(self.transcript)

    @cached_property
    def phrase_hits(self) -> dict[str, PhraseHit]:
        """Winning trigger-phrase hit per rule, computed once per evaluation."""
        return self.library.phrase_index.search(self.transcript_lower)


class Detector(ABC):
    """Abstract base class for one detection strategy.

    Each detector returns at most one alert per rule and only accepts rules
    of its :attr:`mode`.
    """

    mode: DetectionMode

    @property
    @abstractmethod
    def name(self) -> str:
        """Return the detector identifier (e.g. ``'regex'``)."""
        ...  # pragma: no cover

    @property
    @abstractmethod
    def confidence(self) -> int:
        """Confidence attached to alerts produced by this detector."""
        ...  # pragma: no cover

    @abstractmethod
    def detect(self, rule: Rule, ctx: DetectionContext) -> Alert | None:
        """Return an alert for *rule* or ``None``.

        Raises:
            ValueError: If *rule* is not of this detector's mode.
        """
        ...  # pragma: no cover

    def _check_mode(self, rule: Rule) -> None:
        if rule.detection_mode != self.mode:
            raise ValueError(
                f"{self.name} detector cannot evaluate {rule.detection_mode.value} rule '{rule.id}'"
            )

    def _build_alert(self, rule: Rule, evidence: Evidence) -> Alert:
        return Alert(
            rule_id=rule.id,
            title=rule.title,
            severity=rule.severity,
            confidence=self.confidence,
            evidence=evidence,
            why_it_matters=rule.why_it_matters,
            agent_fix_suggestion=rule.recommended_fix,
        )


class TextDetector(Detector):
    """Base for detectors that search the transcript text.

    Subclasses only locate a match; this class applies the session
    bookkeeping shared by every text strategy:

    * the "agent continued after DNC request" rule is not evaluated until a
      DNC request has been recorded on this call;
    * a DNC request or consent revocation sets its session flag;
    * positive-disclosure rules set their disclosure flag and never alert.
    """

    mode = DetectionMode.TEXT

    @abstractmethod
    def _find(self, rule: Rule, ctx: DetectionContext) -> tuple[int, int] | None:
        """Return the ``(start, end)`` span of the winning match, if any."""
        ...  # pragma: no cover

    def detect(self, rule: Rule, ctx: DetectionContext) -> Alert | None:
        self._check_mode(rule)
        state = ctx.state
        if rule.id == DNC_CONTINUED and not state.dnc_requested:
            return None

        span = self._find(rule, ctx)
        if span is None:
            return None
        start, end = span

        if rule.id == DNC_REQUEST:
            state.dnc_requested = True
        elif rule.id == CONSENT_REVOCATION:
            state.consent_revoked = True

        disclosure = POSITIVE_DISCLOSURES.get(rule.id)
        if disclosure is not None:
            if not state.is_disclosed(disclosure):
                logger.debug("disclosure_observed", rule_id=rule.id, disclosure=disclosure.value)
            state.mark_disclosed(disclosure)
            return None

        evidence = Evidence(
            quote=clip_excerpt(ctx.transcript, start, end, ctx.context_chars),
            start_char=start,
            end_char=end,
        )
        return self._build_alert(rule, evidence)
