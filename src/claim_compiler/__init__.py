"""claim-compiler: documentation readiness, claim narratives and payer acceptance for dental visits.

Usage::

    from claim_compiler import compile_claim, load_snapshot

    compilation = compile_claim(load_snapshot("visit.json"), "STRICT")
    if not compilation.acceptance.allowed:
        for issue in compilation.acceptance.blockers:
            print(issue.code, issue.message)
"""

from __future__ import annotations

from claim_compiler.adjudication import (
    ClaimAcceptanceDecision,
    PayerTier,
    evaluate_acceptance,
    get_payer_profile,
    resolve_blocker,
    section_for_issue,
)
from claim_compiler.coding import FeeCategory, category_from_code, resolve_roles
from claim_compiler.core.config import AppSettings
from claim_compiler.exceptions import ClaimCompilerError, SnapshotError, UnknownPayerTierError
from claim_compiler.models import ClaimCompilerInput, ReadinessInput
from claim_compiler.narrative import NarrativeResult, generate_narrative
from claim_compiler.readiness import DocumentationReadinessResult, evaluate_readiness
from claim_compiler.services import ClaimCompilation, ClaimCompiler, compile_claim, load_snapshot

__all__ = [
    "AppSettings",
    "ClaimAcceptanceDecision",
    "ClaimCompilation",
    "ClaimCompiler",
    "ClaimCompilerError",
    "ClaimCompilerInput",
    "DocumentationReadinessResult",
    "FeeCategory",
    "NarrativeResult",
    "PayerTier",
    "ReadinessInput",
    "SnapshotError",
    "UnknownPayerTierError",
    "category_from_code",
    "compile_claim",
    "evaluate_acceptance",
    "evaluate_readiness",
    "generate_narrative",
    "get_payer_profile",
    "load_snapshot",
    "resolve_blocker",
    "resolve_roles",
]
