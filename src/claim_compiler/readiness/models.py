"""Readiness data models: missing-item variants and the readiness result."""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator

from claim_compiler.models import AssertionSection, AssertionSlot


class Severity(str, Enum):
    """Severity of a missing item or acceptance issue."""

    BLOCKER = "blocker"
    WARNING = "warning"


class ReadinessStatus(str, Enum):
    READY_FOR_REVIEW = "READY_FOR_REVIEW"
    INCOMPLETE = "INCOMPLETE"


class _MissingItemBase(BaseModel):
    model_config = {"frozen": True}

    severity: Severity = Severity.BLOCKER
    label: str


class AdminMissingItem(_MissingItemBase):
    kind: Literal["admin"] = "admin"
    admin_key: str


class ProcedureDetailMissingItem(_MissingItemBase):
    kind: Literal["procedure_detail"] = "procedure_detail"
    procedure_id: str
    detail: Literal["tooth", "surfaces", "quadrant"]


class ProcedureStatusMissingItem(_MissingItemBase):
    kind: Literal["procedure_status"] = "procedure_status"
    procedure_id: str


class Icd10MissingItem(_MissingItemBase):
    kind: Literal["icd10"] = "icd10"
    procedure_id: str


class EvidenceMissingItem(_MissingItemBase):
    kind: Literal["evidence"] = "evidence"
    evidence_type: str
    procedure_id: Optional[str] = None


class SlotMissingItem(_MissingItemBase):
    kind: Literal["slot"] = "slot"
    section: AssertionSection
    slot: AssertionSlot


class ConsentMissingItem(_MissingItemBase):
    kind: Literal["consent"] = "consent"


class CoherenceMissingItem(_MissingItemBase):
    """Narrative/code mismatch hint. Always advisory."""

    kind: Literal["coherence"] = "coherence"
    severity: Severity = Severity.WARNING
    procedure_id: str
    expected_keywords: tuple[str, ...] = ()

    @field_validator("severity")
    @classmethod
    def _always_warning(cls, value: Severity) -> Severity:
        if value != Severity.WARNING:
            raise ValueError("coherence items are always warnings")
        return value


MissingItem = Annotated[
    Union[
        AdminMissingItem,
        ProcedureDetailMissingItem,
        ProcedureStatusMissingItem,
        Icd10MissingItem,
        EvidenceMissingItem,
        SlotMissingItem,
        ConsentMissingItem,
        CoherenceMissingItem,
    ],
    Field(discriminator="kind"),
]

MissingItemKind = Literal[
    "admin",
    "procedure_detail",
    "procedure_status",
    "icd10",
    "evidence",
    "slot",
    "consent",
    "coherence",
]


class DocumentationReadinessResult(BaseModel):
    """Aggregated result of running the readiness checklist against a snapshot."""

    model_config = {"frozen": True}

    percent: int
    items: tuple[MissingItem, ...] = ()
    status: ReadinessStatus
    fix_next: Optional[MissingItem] = None
    total_requirements: int = 0
    completed_requirements: int = 0

    @property
    def blockers(self) -> list[MissingItem]:
        """Items that block readiness."""
        return [i for i in self.items if i.severity == Severity.BLOCKER]

    @property
    def warnings(self) -> list[MissingItem]:
        """Advisory items."""
        return [i for i in self.items if i.severity == Severity.WARNING]

    def items_by_kind(self) -> dict[str, list[MissingItem]]:
        """Group items by their kind."""
        grouped: dict[str, list[MissingItem]] = {}
        for item in self.items:
            grouped.setdefault(item.kind, []).append(item)
        return grouped
