"""The readiness checklist: an ordered tuple of independent rules.

Each rule adds requirements to a ``RequirementTally``.  ``require`` counts
toward the readiness percent; ``advise`` records an advisory item without
touching the counts, so warnings can never lower readiness.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import cached_property

from claim_compiler.models import ProcedureFact, ReadinessInput
from claim_compiler.readiness.models import (
    AdminMissingItem,
    CoherenceMissingItem,
    ConsentMissingItem,
    EvidenceMissingItem,
    Icd10MissingItem,
    MissingItem,
    MissingItemKind,
    ProcedureDetailMissingItem,
    ProcedureStatusMissingItem,
    Severity,
    SlotMissingItem,
)
from claim_compiler.readiness.slots import (
    SECTION_ORDER,
    SLOT_LABELS,
    SLOT_ORDER,
    SlotCompletenessEvaluator,
    SlotStatus,
)

_AMALGAM = re.compile(r"^D21(?:40|50|60|61)")
_COMPOSITE = re.compile(r"^D239[1-4]")
_DIAGNOSIS_REQUIRED = re.compile(r"^(?:D33|D60|D7|D4|D27)")
_CONSENT_REQUIRED = re.compile(r"^(?:D33|D60|D7)")

COHERENCE_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("D27", ("crown prep", "impression", "temporary", "seat")),
    ("D33", ("rubber dam", "working length", "irrigation", "obturation")),
    ("D7", ("anesthesia", "elevator", "forceps", "hemostasis", "post-op")),
)


@dataclass
class RequirementTally:
    """Running requirement counts plus the items found so far."""

    total: int = 0
    completed: int = 0
    items: list[MissingItem] = field(default_factory=list)

    def require(self, satisfied: bool, missing: MissingItem) -> None:
        self.total += 1
        if satisfied:
            self.completed += 1
        else:
            self.items.append(missing)

    def advise(self, item: MissingItem) -> None:
        self.items.append(item)


@dataclass(frozen=True)
class ReadinessContext:
    """The snapshot under evaluation plus the injected slot evaluator."""

    snapshot: ReadinessInput
    slot_evaluator: SlotCompletenessEvaluator

    @cached_property
    def diagnosed_procedure_ids(self) -> frozenset[str]:
        return frozenset(d.procedure_id for d in self.snapshot.diagnoses)

    @cached_property
    def assertion_corpus(self) -> str:
        """Lowercased text of every checked truth assertion."""
        truth = self.snapshot.truth
        if truth is None:
            return ""
        parts = [
            f"{a.label} {a.sentence or ''} {a.description or ''}"
            for a in truth.assertions
            if a.checked
        ]
        return " ".join(parts).lower()

    def has_attached(self, proc: ProcedureFact, *evidence_types: str) -> bool:
        """True if evidence of any given type is attached to ``proc`` or the visit."""
        return any(
            e.attached
            and e.evidence_type in evidence_types
            and (e.procedure_id is None or e.procedure_id == proc.id)
            for e in self.snapshot.evidence
        )


@dataclass(frozen=True)
class ReadinessRule:
    """A single checklist rule."""

    rule_id: str
    name: str
    kind: MissingItemKind
    check: Callable[[ReadinessContext, RequirementTally], None]


def _code(proc: ProcedureFact) -> str:
    return proc.cdt_code.strip().upper()


def _present(value: str | None) -> bool:
    return bool(value and value.strip())


# ── Checks ───────────────────────────────────────────────────────────


def _check_admin(ctx: ReadinessContext, tally: RequirementTally) -> None:
    """Provider NPI, patient DOB, service date and member ID."""
    snap = ctx.snapshot
    patient = snap.patient

    tally.require(
        snap.provider_npi is not None,
        AdminMissingItem(label="Missing Provider NPI", admin_key="missing_npi"),
    )
    tally.require(
        _present(patient.dob if patient else None),
        AdminMissingItem(label="Missing Patient Date of Birth", admin_key="missing_dob"),
    )
    tally.require(
        _present(snap.service_date),
        AdminMissingItem(label="Missing Service Date", admin_key="missing_service_date"),
    )
    tally.require(
        _present(patient.member_id if patient else None),
        AdminMissingItem(label="Missing Member / Subscriber ID", admin_key="missing_member_id"),
    )


def _check_procedure_detail(ctx: ReadinessContext, tally: RequirementTally) -> None:
    """Tooth/surface for fillings, tooth for surgery, quadrant for perio."""
    for proc in ctx.snapshot.procedures:
        code = _code(proc)
        has_tooth = _present(proc.tooth)

        if _AMALGAM.match(code) or _COMPOSITE.match(code):
            tally.require(
                has_tooth,
                ProcedureDetailMissingItem(
                    label=f"Tooth number required for {proc.cdt_code}",
                    procedure_id=proc.id,
                    detail="tooth",
                ),
            )
            tally.require(
                any(_present(s) for s in proc.surfaces),
                ProcedureDetailMissingItem(
                    label=f"Surface(s) required for {proc.cdt_code}",
                    procedure_id=proc.id,
                    detail="surfaces",
                ),
            )
        if code.startswith("D7"):
            tally.require(
                has_tooth,
                ProcedureDetailMissingItem(
                    label=f"Tooth number required for {proc.cdt_code}",
                    procedure_id=proc.id,
                    detail="tooth",
                ),
            )
        if code.startswith("D4"):
            tally.require(
                _present(proc.quadrant),
                ProcedureDetailMissingItem(
                    label=f"Quadrant required for {proc.cdt_code}",
                    procedure_id=proc.id,
                    detail="quadrant",
                ),
            )


def _check_completion(ctx: ReadinessContext, tally: RequirementTally) -> None:
    for proc in ctx.snapshot.procedures:
        tally.require(
            proc.is_completed,
            ProcedureStatusMissingItem(
                label=f"Procedure {proc.cdt_code} not marked completed",
                procedure_id=proc.id,
            ),
        )


def _check_diagnoses(ctx: ReadinessContext, tally: RequirementTally) -> None:
    for proc in ctx.snapshot.procedures:
        if not _DIAGNOSIS_REQUIRED.match(_code(proc)):
            continue
        tally.require(
            proc.id in ctx.diagnosed_procedure_ids,
            Icd10MissingItem(label=f"Missing Diagnosis for {proc.cdt_code}", procedure_id=proc.id),
        )


def _check_evidence(ctx: ReadinessContext, tally: RequirementTally) -> None:
    """Radiographs for endo and implants; intraoral photo recommended for implants."""
    for proc in ctx.snapshot.procedures:
        code = _code(proc)
        if code.startswith("D33"):
            tally.require(
                ctx.has_attached(proc, "pre_op_xray"),
                EvidenceMissingItem(
                    label=f"Pre-op X-ray required for {proc.cdt_code}",
                    evidence_type="pre_op_xray",
                    procedure_id=proc.id,
                ),
            )
        elif code.startswith("D60"):
            tally.require(
                ctx.has_attached(proc, "fmX_pano_recent", "pre_op_xray"),
                EvidenceMissingItem(
                    label=f"Recent FMX/Pano or pre-op X-ray required for {proc.cdt_code}",
                    evidence_type="fmX_pano_recent",
                    procedure_id=proc.id,
                ),
            )
            if not ctx.has_attached(proc, "intraoral_photo"):
                tally.advise(
                    EvidenceMissingItem(
                        severity=Severity.WARNING,
                        label=f"Intraoral photo recommended for {proc.cdt_code}",
                        evidence_type="intraoral_photo",
                        procedure_id=proc.id,
                    )
                )


def _check_slots(ctx: ReadinessContext, tally: RequirementTally) -> None:
    """Delegate SOAP slot completeness; skipped when no truth bundle is attached."""
    truth = ctx.snapshot.truth
    if truth is None:
        return

    for section in SECTION_ORDER:
        statuses = ctx.slot_evaluator(truth, section)
        section_title = section.value.replace("_", " ").title()
        for slot in SLOT_ORDER:
            status = statuses.get(slot, SlotStatus.NOT_REQUIRED)
            if status == SlotStatus.NOT_REQUIRED:
                continue
            tally.require(
                status == SlotStatus.COMPLETE,
                SlotMissingItem(
                    label=f"Missing {SLOT_LABELS[slot]} ({section_title})",
                    section=section,
                    slot=slot,
                ),
            )


def _check_consent(ctx: ReadinessContext, tally: RequirementTally) -> None:
    snap = ctx.snapshot
    if not any(_CONSENT_REQUIRED.match(_code(p)) for p in snap.procedures):
        return
    tally.require(
        snap.risks_and_consent_complete,
        ConsentMissingItem(label="Informed consent not documented for surgical/endodontic/implant care"),
    )


def _check_coherence(ctx: ReadinessContext, tally: RequirementTally) -> None:
    """Flag procedures whose note never mentions the expected clinical steps."""
    corpus = ctx.assertion_corpus
    for proc in ctx.snapshot.procedures:
        code = _code(proc)
        for prefix, keywords in COHERENCE_KEYWORDS:
            if not code.startswith(prefix):
                continue
            if not any(k in corpus for k in keywords):
                tally.advise(
                    CoherenceMissingItem(
                        label=f"Note for {proc.cdt_code} does not mention: {', '.join(keywords)}",
                        procedure_id=proc.id,
                        expected_keywords=keywords,
                    )
                )


READINESS_RULES: tuple[ReadinessRule, ...] = (
    ReadinessRule("RD-001", "Admin preflight", "admin", _check_admin),
    ReadinessRule("RD-002", "Procedure detail", "procedure_detail", _check_procedure_detail),
    ReadinessRule("RD-003", "Completion status", "procedure_status", _check_completion),
    ReadinessRule("RD-004", "Diagnosis presence", "icd10", _check_diagnoses),
    ReadinessRule("RD-005", "Evidence presence", "evidence", _check_evidence),
    ReadinessRule("RD-006", "SOAP slot completeness", "slot", _check_slots),
    ReadinessRule("RD-007", "Informed consent", "consent", _check_consent),
    ReadinessRule("RD-008", "Narrative coherence", "coherence", _check_coherence),
)
