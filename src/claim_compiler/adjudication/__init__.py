"""Payer-tier acceptance gate and blocker resolution."""

from __future__ import annotations

from claim_compiler.adjudication.engine import evaluate_acceptance, evidence_flag_field
from claim_compiler.adjudication.models import (
    AcceptanceIssue,
    ClaimAcceptanceDecision,
    CompletionIssue,
    EvidenceIssue,
    NecessityIssue,
    NpiIssue,
    PayerProfile,
    PayerTier,
)
from claim_compiler.adjudication.profiles import PAYER_PROFILES, coerce_payer_tier, get_payer_profile
from claim_compiler.adjudication.resolution import (
    ISSUE_TO_SECTION,
    BlockerResolver,
    ClinicalSectionId,
    ResolverKind,
    resolve_blocker,
    section_for_issue,
)

__all__ = [
    "AcceptanceIssue",
    "BlockerResolver",
    "ClaimAcceptanceDecision",
    "ClinicalSectionId",
    "CompletionIssue",
    "EvidenceIssue",
    "ISSUE_TO_SECTION",
    "NecessityIssue",
    "NpiIssue",
    "PAYER_PROFILES",
    "PayerProfile",
    "PayerTier",
    "ResolverKind",
    "coerce_payer_tier",
    "evaluate_acceptance",
    "evidence_flag_field",
    "get_payer_profile",
    "resolve_blocker",
    "section_for_issue",
]
