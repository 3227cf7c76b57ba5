"""Pydantic models for the visit snapshot the engine evaluates.

The snapshot is assembled by the caller from visit, plan, provider and
patient records and is never mutated by the engine.  All models are frozen;
sequence fields are tuples (lists are accepted and coerced on input).
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

# Placeholder the narrative prints when no NPI is on file; treated as absent
# everywhere an NPI is checked.
NPI_PLACEHOLDER = "0000000000"


class SedationReason(str, Enum):
    """Documented clinical reasons for moderate sedation."""

    MANAGEMENT_OF_SEVERE_ANXIETY = "MANAGEMENT_OF_SEVERE_ANXIETY"
    PROCEDURE_COMPLEXITY_AND_DURATION = "PROCEDURE_COMPLEXITY_AND_DURATION"
    MEDICAL_CONTRAINDICATION_TO_LOCAL_ONLY = "MEDICAL_CONTRAINDICATION_TO_LOCAL_ONLY"
    HYPER_SENSITIVE_GAG_REFLEX = "HYPER_SENSITIVE_GAG_REFLEX"


class AssertionSection(str, Enum):
    """SOAP sections a truth assertion belongs to, in note order."""

    SUBJECTIVE = "SUBJECTIVE"
    OBJECTIVE = "OBJECTIVE"
    ASSESSMENT = "ASSESSMENT"
    TREATMENT_PERFORMED = "TREATMENT_PERFORMED"
    PLAN = "PLAN"


class AssertionSlot(str, Enum):
    """Granular documentation slots within a SOAP section, in display order."""

    CC = "CC"
    HPI = "HPI"
    CLINICAL_FINDING = "CLINICAL_FINDING"
    RADIOGRAPHIC = "RADIOGRAPHIC"
    DIAGNOSIS = "DIAGNOSIS"
    INTERVENTION = "INTERVENTION"
    RISK = "RISK"
    PLAN = "PLAN"
    MISC = "MISC"


# ── Procedure facts ──────────────────────────────────────────────────


class DocumentationFlags(BaseModel):
    """Per-procedure documentation checkboxes read by the acceptance gate."""

    model_config = {"frozen": True}

    has_xray: bool = False
    has_photo: bool = False
    has_perio_chart: bool = False
    has_fmx_within_36_months: bool = False


class ProcedureFact(BaseModel):
    """One procedure performed (or planned) in the visit."""

    model_config = {"frozen": True}

    id: str
    cdt_code: str
    label: str = ""
    tooth: Optional[str] = None
    surfaces: tuple[str, ...] = ()
    quadrant: Optional[str] = None
    is_completed: bool = False
    sedation_reason: Optional[SedationReason] = None
    documentation: DocumentationFlags = Field(default_factory=DocumentationFlags)

    @field_validator("surfaces", mode="before")
    @classmethod
    def _null_surfaces_as_empty(cls, v: object) -> object:
        return () if v is None else v


class DiagnosisFact(BaseModel):
    """An ICD-10 code linked to a procedure."""

    model_config = {"frozen": True}

    procedure_id: str
    icd10: str


class EvidenceFact(BaseModel):
    """A piece of supporting evidence (radiograph, photo, chart).

    ``procedure_id=None`` marks visit-level evidence that supports every
    procedure in the visit.
    """

    model_config = {"frozen": True}

    evidence_type: str
    attached: bool = True
    procedure_id: Optional[str] = None


# ── Identity ─────────────────────────────────────────────────────────


class ProviderIdentity(BaseModel):
    """Rendering provider."""

    model_config = {"frozen": True}

    npi: Optional[str] = None


class PatientIdentity(BaseModel):
    """Patient / subscriber identity."""

    model_config = {"frozen": True}

    dob: Optional[str] = None
    member_id: Optional[str] = None


# ── Truth assertions (SOAP facts confirmed by the clinician) ─────────


class TruthAssertion(BaseModel):
    """An atomic clinical fact the clinician confirmed (or not) for this visit."""

    model_config = {"frozen": True}

    id: str = ""
    section: AssertionSection
    slot: AssertionSlot = AssertionSlot.MISC
    label: str
    description: Optional[str] = None
    sentence: Optional[str] = None
    source: str = "manual"
    procedure_id: Optional[str] = None
    code: Optional[str] = None
    checked: bool = True
    sort_order: int = 0


class TruthAssertionsBundle(BaseModel):
    """All truth assertions generated for one visit."""

    model_config = {"frozen": True}

    visit_id: str = ""
    assertions: tuple[TruthAssertion, ...] = ()
    last_generated_at: str = ""


# ── Snapshot ─────────────────────────────────────────────────────────


class ReadinessInput(BaseModel):
    """Immutable snapshot of one visit's claim-relevant facts.

    The acceptance gate reads the same shape (see ``ClaimCompilerInput``),
    using each procedure's ``documentation`` flags for payer evidence.
    """

    model_config = {"frozen": True}

    procedures: tuple[ProcedureFact, ...] = ()
    diagnoses: tuple[DiagnosisFact, ...] = ()
    evidence: tuple[EvidenceFact, ...] = ()
    risks_and_consent_complete: bool = False
    provider: Optional[ProviderIdentity] = None
    service_date: Optional[str] = None
    patient: Optional[PatientIdentity] = None
    truth: Optional[TruthAssertionsBundle] = None

    @property
    def provider_npi(self) -> str | None:
        """The provider NPI, or None when absent or the placeholder."""
        npi = self.provider.npi if self.provider else None
        if not npi or npi == NPI_PLACEHOLDER:
            return None
        return npi


ClaimCompilerInput = ReadinessInput
