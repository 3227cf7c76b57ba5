"""Adjudication data models: payer profiles, acceptance issues, decisions."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

from claim_compiler.readiness.models import Severity


class PayerTier(str, Enum):
    """How demanding a payer's claim-acceptance rules are."""

    GENERIC = "GENERIC"
    CONSERVATIVE = "CONSERVATIVE"
    STRICT = "STRICT"


@dataclass(frozen=True)
class PayerProfile:
    """Policy a claim must satisfy for one payer tier."""

    id: PayerTier
    label: str
    required_module_ids: tuple[str, ...]
    required_evidence_types: tuple[str, ...]
    enforce_completion_status: bool
    min_confidence_for_submission: int


class _AcceptanceIssueBase(BaseModel):
    model_config = {"frozen": True}

    severity: Severity = Severity.BLOCKER
    message: str


class NpiIssue(_AcceptanceIssueBase):
    rule_id: Literal["NPI_VALID"] = "NPI_VALID"
    code: Literal["ADMIN_NPI"] = "ADMIN_NPI"


class NecessityIssue(_AcceptanceIssueBase):
    rule_id: Literal["NECESSITY_VERIFIED"] = "NECESSITY_VERIFIED"
    code: Literal["NAV_NECESSITY"] = "NAV_NECESSITY"


class EvidenceIssue(_AcceptanceIssueBase):
    """Payer-required evidence missing for one procedure; ``field`` is the flag to set."""

    rule_id: Literal["PAYER_EVIDENCE"] = "PAYER_EVIDENCE"
    code: str
    procedure_id: str
    field: str


class CompletionIssue(_AcceptanceIssueBase):
    rule_id: Literal["COMPLETION_REQUIRED"] = "COMPLETION_REQUIRED"
    code: Literal["PROC_STATUS"] = "PROC_STATUS"
    procedure_id: str


AcceptanceIssue = Annotated[
    Union[NpiIssue, NecessityIssue, EvidenceIssue, CompletionIssue],
    Field(discriminator="rule_id"),
]


class ClaimAcceptanceDecision(BaseModel):
    """Whether a compiled claim may be transmitted under a payer tier."""

    model_config = {"frozen": True}

    payer_tier: PayerTier
    allowed: bool
    confidence_score: int = Field(ge=0, le=100)
    primary_procedure_id: Optional[str] = None
    blockers: tuple[AcceptanceIssue, ...] = ()
    warnings: tuple[AcceptanceIssue, ...] = ()
