"""Maps acceptance blockers to the chart section and action that clears them."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Optional

from pydantic import BaseModel

from claim_compiler.adjudication.models import AcceptanceIssue


class ClinicalSectionId(str, Enum):
    PROVIDER_ID = "PROVIDER_ID"
    CHIEF_COMPLAINT = "CHIEF_COMPLAINT"
    FINDINGS = "FINDINGS"
    PROCEDURES = "PROCEDURES"
    EVIDENCE = "EVIDENCE"


ISSUE_TO_SECTION = MappingProxyType(
    {
        "ADMIN_NPI": ClinicalSectionId.PROVIDER_ID,
        "NPI_VALID": ClinicalSectionId.PROVIDER_ID,
        "VISIT_CC": ClinicalSectionId.CHIEF_COMPLAINT,
        "DATE_PRESENT": ClinicalSectionId.CHIEF_COMPLAINT,
        "NAV_NECESSITY": ClinicalSectionId.FINDINGS,
        "NECESSITY_VERIFIED": ClinicalSectionId.FINDINGS,
        "COMPLETION_REQUIRED": ClinicalSectionId.PROCEDURES,
        "PROC_STATUS": ClinicalSectionId.PROCEDURES,
        "PAYER_EVIDENCE": ClinicalSectionId.EVIDENCE,
        "EVIDENCE_PRE_OP_XRAY": ClinicalSectionId.EVIDENCE,
        "EVIDENCE_INTRAORAL_PHOTO": ClinicalSectionId.EVIDENCE,
    }
)


def section_for_issue(issue: AcceptanceIssue) -> Optional[ClinicalSectionId]:
    """Section to jump to for ``issue``: by code first, then by rule id."""
    return ISSUE_TO_SECTION.get(issue.code) or ISSUE_TO_SECTION.get(issue.rule_id)


class ResolverKind(str, Enum):
    PROVIDER_NPI = "PROVIDER_NPI"
    VISIT_FACT = "VISIT_FACT"
    EVIDENCE_FLAG = "EVIDENCE_FLAG"
    PROCEDURE_COMPLETION = "PROCEDURE_COMPLETION"


class BlockerResolver(BaseModel):
    """The action a user takes to clear a blocker."""

    model_config = {"frozen": True}

    kind: ResolverKind
    target_field: Optional[str] = None
    label: str


_RESOLVERS = (
    (
        frozenset({"ADMIN_NPI"}),
        BlockerResolver(kind=ResolverKind.PROVIDER_NPI, label="Update Provider NPI"),
    ),
    (
        frozenset({"VISIT_HPI_MISSING", "NAV_NECESSITY"}),
        BlockerResolver(kind=ResolverKind.VISIT_FACT, target_field="hpi", label="Complete HPI / Findings"),
    ),
    (
        frozenset({"VISIT_CC_MISSING", "VISIT_CC"}),
        BlockerResolver(kind=ResolverKind.VISIT_FACT, target_field="chiefComplaint", label="Set Chief Complaint"),
    ),
    (
        frozenset({"EVIDENCE_PREOP_XRAY", "EVIDENCE_PRE_OP_XRAY"}),
        BlockerResolver(kind=ResolverKind.EVIDENCE_FLAG, target_field="has_xray", label="Verify Pre-Op X-Ray"),
    ),
    (
        frozenset({"PROC_INCOMPLETE", "PROC_STATUS"}),
        BlockerResolver(kind=ResolverKind.PROCEDURE_COMPLETION, label="Confirm Procedure Completion"),
    ),
)


def resolve_blocker(issue: AcceptanceIssue | str) -> Optional[BlockerResolver]:
    """Return the resolver for an issue (or bare issue code), or None."""
    code = issue if isinstance(issue, str) else issue.code
    code = code.upper()
    for codes, resolver in _RESOLVERS:
        if code in codes:
            return resolver
    return None
