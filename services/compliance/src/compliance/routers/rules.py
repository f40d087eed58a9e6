"""
Rule library API router for Whisperwire.

Read-only endpoints for listing the loaded compliance rules (filterable
by category, minimum severity, and effective enabled status) and for
fetching one rule by id.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query

from ww_common.models import RuleCategory, Severity

from compliance.dependencies import get_library
from compliance.rule_library import RuleLibrary
from compliance.schemas.rule_schemas import RuleListResponse, RuleSummary

router = APIRouter(prefix="/rules", tags=["rules"])


@router.get("", response_model=RuleListResponse)
def list_rules(
    category: RuleCategory | None = Query(default=None),
    min_severity: Severity | None = Query(default=None),
    enabled: bool | None = Query(default=None),
    library: RuleLibrary = Depends(get_library),
) -> RuleListResponse:
    rules = list(library.rules) if category is None else library.rules_by_category(category)
    if min_severity is not None:
        at_least = {r.id for r in library.rules_at_least(min_severity)}
        rules = [r for r in rules if r.id in at_least]

    summaries = [RuleSummary.from_rule(r, enabled=library.is_enabled(r.id)) for r in rules]
    if enabled is not None:
        summaries = [s for s in summaries if s.enabled == enabled]

    rule_set = library.rule_set
    return RuleListResponse(
        version=rule_set.version,
        last_updated=rule_set.last_updated,
        disclaimer=rule_set.disclaimer,
        rules=summaries,
        total=len(summaries),
    )


@router.get("/{rule_id}", response_model=RuleSummary)
def get_rule(rule_id: str, library: RuleLibrary = Depends(get_library)) -> RuleSummary:
    rule = library.get_rule(rule_id)
    if rule is None:
        raise HTTPException(status_code=404, detail="Rule not found")
    return RuleSummary.from_rule(rule, enabled=library.is_enabled(rule.id))
