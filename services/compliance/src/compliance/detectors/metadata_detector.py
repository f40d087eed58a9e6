"""
Metadata detector for Whisperwire.

Evaluates metadata-driven rules purely from call metadata; transcript
text is never consulted. Rules without a predicate here never fire.
"""

from __future__ import annotations

from collections.abc import Callable

from ww_common.models import Alert, CallMetadata, DetectionMode, Evidence, Rule

from compliance.default_rules import CALLING_TIME, DNC_LISTED, PRERECORDED_VOICE
from compliance.detectors.base import DetectionContext, Detector

METADATA_CONFIDENCE = 95


def _dnc_listed_without_consent(metadata: CallMetadata) -> bool:
    return metadata.is_dnc_listed and not metadata.has_prior_consent


def _prerecorded_without_consent(metadata: CallMetadata) -> bool:
    return metadata.is_prerecorded and not metadata.has_prior_consent


# rule id -> (predicate, evidence description)
_PREDICATES: dict[str, tuple[Callable[[CallMetadata], bool], str]] = {
    DNC_LISTED: (
        _dnc_listed_without_consent,
        "Number flagged as DNC-listed in system metadata",
    ),
    PRERECORDED_VOICE: (
        _prerecorded_without_consent,
        "Call flagged as using prerecorded voice without consent",
    ),
}


class MetadataDetector(Detector):
    """Fires metadata-driven rules from :class:`CallMetadata` alone.

    ``TIME-001`` (calling hours) is a known stub: no time-zone arithmetic is
    implemented, so it never fires.
    """

    mode = DetectionMode.METADATA

    @property
    def name(self) -> str:
        return "metadata"

    @property
    def confidence(self) -> int:
        return METADATA_CONFIDENCE

    def detect(self, rule: Rule, ctx: DetectionContext) -> Alert | None:
        self._check_mode(rule)
        if rule.id == CALLING_TIME:
            return None
        entry = _PREDICATES.get(rule.id)
        if entry is None:
            return None
        predicate, description = entry
        if not predicate(ctx.metadata):
            return None
        return self._build_alert(rule, Evidence(quote=description, start_char=0, end_char=0))
