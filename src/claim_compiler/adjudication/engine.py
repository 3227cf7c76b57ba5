"""Acceptance gate: evaluates a compiled claim against a payer profile.

Blockers make the claim ineligible outright.  The confidence score only
drops for required narrative modules that produced no trace; evidence and
completion failures populate blockers without touching the score.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from types import MappingProxyType

from claim_compiler.adjudication.models import (
    ClaimAcceptanceDecision,
    CompletionIssue,
    EvidenceIssue,
    NecessityIssue,
    NpiIssue,
    PayerTier,
)
from claim_compiler.adjudication.profiles import coerce_payer_tier, get_payer_profile
from claim_compiler.coding.categories import FeeCategory, category_from_code
from claim_compiler.coding.roles import primary_procedure_id, resolve_roles
from claim_compiler.models import ClaimCompilerInput
from claim_compiler.narrative.models import NarrativeTrace

log = logging.getLogger(__name__)

MISSING_MODULE_PENALTY = 5

# Categories for which payer evidence requirements are enforced.
EVIDENCE_ENFORCED_CATEGORIES = frozenset(
    {
        FeeCategory.RESTORATIVE,
        FeeCategory.PROSTHETIC,
        FeeCategory.SURGICAL,
        FeeCategory.IMPLANT,
        FeeCategory.ENDODONTIC,
    }
)

# Evidence type -> DocumentationFlags attribute; anything else is a perio chart.
EVIDENCE_FLAG_FIELDS = MappingProxyType(
    {
        "pre_op_xray": "has_xray",
        "intraoral_photo": "has_photo",
    }
)
_DEFAULT_EVIDENCE_FLAG = "has_perio_chart"


def evidence_flag_field(evidence_type: str) -> str:
    """The documentation flag that satisfies a payer evidence type."""
    return EVIDENCE_FLAG_FIELDS.get(evidence_type, _DEFAULT_EVIDENCE_FLAG)


def evaluate_acceptance(
    snapshot: ClaimCompilerInput,
    payer_tier: PayerTier | str,
    traces: Sequence[NarrativeTrace],
) -> ClaimAcceptanceDecision:
    """Gate claim transmission on the payer profile for ``payer_tier``."""
    tier = coerce_payer_tier(payer_tier)
    profile = get_payer_profile(tier)
    blockers: list = []
    score = 100

    if snapshot.provider_npi is None:
        blockers.append(NpiIssue(message="Provider NPI required"))

    if not any("NECESSITY" in t.source_module_id for t in traces):
        blockers.append(NecessityIssue(message="Primary Clinical Findings missing"))

    for proc in snapshot.procedures:
        category = category_from_code(proc.cdt_code)

        if category in EVIDENCE_ENFORCED_CATEGORIES:
            for evidence_type in profile.required_evidence_types:
                flag = evidence_flag_field(evidence_type)
                if not getattr(proc.documentation, flag):
                    blockers.append(
                        EvidenceIssue(
                            code=f"EVIDENCE_{evidence_type.upper()}",
                            message=f"Missing {evidence_type.replace('_', ' ')} for {proc.cdt_code}",
                            procedure_id=proc.id,
                            field=flag,
                        )
                    )

        if profile.enforce_completion_status and not proc.is_completed:
            blockers.append(
                CompletionIssue(
                    message=f"{proc.cdt_code} not marked completed",
                    procedure_id=proc.id,
                )
            )

    traced_modules = {t.source_module_id for t in traces}
    for module_id in profile.required_module_ids:
        if module_id not in traced_modules:
            score -= MISSING_MODULE_PENALTY

    roles = resolve_roles([(p.id, category_from_code(p.cdt_code)) for p in snapshot.procedures])
    decision = ClaimAcceptanceDecision(
        payer_tier=tier,
        allowed=not blockers and score >= profile.min_confidence_for_submission,
        confidence_score=0 if blockers else max(0, score),
        primary_procedure_id=primary_procedure_id(roles),
        blockers=tuple(blockers),
        warnings=(),
    )

    log.debug(
        "acceptance | tier=%s allowed=%s confidence=%s blockers=%s",
        tier.value,
        decision.allowed,
        decision.confidence_score,
        ",".join(b.code for b in decision.blockers),
    )
    return decision
