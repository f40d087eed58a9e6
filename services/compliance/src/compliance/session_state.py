"""
Per-call session state for Whisperwire.

Holds the cross-turn flags the order-dependent rules need, the positive
disclosures observed so far, and the set of rules that already produced an
alert on this call. One instance belongs to exactly one evaluator; it is
reset when a call starts and discarded when it ends.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class Disclosure(str, enum.Enum):
    """Positive disclosures tracked to suppress redundant suggestions."""

    SELLER_IDENTIFIED = "seller_identified"
    SALES_PURPOSE_STATED = "sales_purpose_stated"
    PRODUCT_DESCRIBED = "product_described"
    CALLBACK_PROVIDED = "callback_provided"
    RECORDING_DISCLOSED = "recording_disclosed"


def _no_disclosures() -> dict[Disclosure, bool]:
    return {d: False for d in Disclosure}


@dataclass
class SessionState:
    """Mutable detection state scoped to one active call.

    Attributes:
        call_id: Call the state is bound to (``None`` before the first reset).
        dnc_requested: The customer asked not to be called again.
        consent_revoked: The customer revoked consent.
        disclosures: Disclosure flags, all ``False`` at call start.
        seen_rule_ids: Rules that already produced an alert on this call.
    """

    call_id: str | None = None
    dnc_requested: bool = False
    consent_revoked: bool = False
    disclosures: dict[Disclosure, bool] = field(default_factory=_no_disclosures)
    seen_rule_ids: set[str] = field(default_factory=set)

    def reset(self, call_id: str | None = None) -> None:
        """Clear every field and bind the state to *call_id*."""
        self.call_id = call_id
        self.dnc_requested = False
        self.consent_revoked = False
        self.disclosures = _no_disclosures()
        self.seen_rule_ids = set()

    def mark_disclosed(self, disclosure: Disclosure) -> None:
        self.disclosures[disclosure] = True

    def is_disclosed(self, disclosure: Disclosure) -> bool:
        return self.disclosures.get(disclosure, False)

    def has_alerted(self, rule_id: str) -> bool:
        return rule_id in self.seen_rule_ids

    def record_alert(self, rule_id: str) -> None:
        self.seen_rule_ids.add(rule_id)
