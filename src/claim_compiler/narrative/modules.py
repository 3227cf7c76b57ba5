"""The narrative modules, in the fixed order their sentences appear."""

from __future__ import annotations

from types import MappingProxyType
from typing import Optional

from claim_compiler.coding.categories import FeeCategory
from claim_compiler.coding.roles import primary_procedure_id, resolve_roles
from claim_compiler.models import NPI_PLACEHOLDER, ReadinessInput, SedationReason
from claim_compiler.narrative.models import NarrativeModule, ResolvedVars

SEDATION_FRAGMENTS = MappingProxyType(
    {
        SedationReason.MANAGEMENT_OF_SEVERE_ANXIETY: (
            "to manage the patient's documented severe dental anxiety, ensuring safe delivery of care"
        ),
        SedationReason.PROCEDURE_COMPLEXITY_AND_DURATION: (
            "due to the clinical complexity and anticipated extended duration of the procedure"
        ),
        SedationReason.MEDICAL_CONTRAINDICATION_TO_LOCAL_ONLY: (
            "as local anesthesia alone was contraindicated by the patient's medical history"
        ),
        SedationReason.HYPER_SENSITIVE_GAG_REFLEX: (
            "to manage a hypersensitive gag reflex that compromised clinical access"
        ),
    }
)


def _codes(snapshot: ReadinessInput) -> list[str]:
    return [p.cdt_code.strip().upper() for p in snapshot.procedures]


def _dedupe(values: list[str]) -> list[str]:
    return list(dict.fromkeys(values))


# ── Resolvers ────────────────────────────────────────────────────────


def _resolve_visit_context(snapshot: ReadinessInput) -> ResolvedVars:
    npi = snapshot.provider.npi if snapshot.provider else None
    return ResolvedVars(
        vars={
            "serviceDate": snapshot.service_date or "N/A",
            "providerNpi": npi or NPI_PLACEHOLDER,
        },
        refs=("visit.date", "provider.npi"),
    )


def _resolve_restorative_necessity(snapshot: ReadinessInput) -> ResolvedVars:
    # Every procedure is weighed as RESTORATIVE here, so the first listed
    # procedure is always primary. Kept pending product review.
    roles = resolve_roles([(p.id, FeeCategory.RESTORATIVE) for p in snapshot.procedures])
    primary_id = primary_procedure_id(roles)
    primary = next((p for p in snapshot.procedures if p.id == primary_id), None)
    teeth = [f"#{p.tooth}" if p.tooth else "unspecified area" for p in snapshot.procedures]

    return ResolvedVars(
        vars={
            "primaryProcedure": (primary.label if primary and primary.label else "planned treatment"),
            "toothList": ", ".join(_dedupe(teeth)),
        },
        refs=("procedures.primary", "procedures.necessity"),
    )


def _resolve_sedation(snapshot: ReadinessInput) -> Optional[ResolvedVars]:
    reason = next((p.sedation_reason for p in snapshot.procedures if p.sedation_reason), None)
    if reason is None:
        return None
    return ResolvedVars(
        vars={"reasonText": SEDATION_FRAGMENTS[reason]},
        refs=("procedure.documentation.sedationReason",),
    )


def _resolve_evidence(snapshot: ReadinessInput) -> Optional[ResolvedVars]:
    labels = [e.evidence_type.replace("_", " ") for e in snapshot.evidence if e.attached]
    if not labels:
        return None
    return ResolvedVars(
        vars={"evidenceList": ", ".join(_dedupe(labels))},
        refs=("visit.evidence",),
    )


# ── Module table ─────────────────────────────────────────────────────

NARRATIVE_MODULES: tuple[NarrativeModule, ...] = (
    NarrativeModule(
        id="VISIT_CONTEXT",
        applies_when=lambda snapshot: True,
        required_slots=("serviceDate", "providerNpi"),
        resolve=_resolve_visit_context,
        template="Clinical services were provided on {serviceDate} by a licensed clinician (NPI: {providerNpi}).",
    ),
    NarrativeModule(
        id="RESTORATIVE_NECESSITY",
        applies_when=lambda snapshot: any(c.startswith(("D2", "D3", "D7")) for c in _codes(snapshot)),
        required_slots=(),
        resolve=_resolve_restorative_necessity,
        template=(
            "The primary clinical objective was the successful completion of {primaryProcedure}. "
            "Medical necessity is established via documented findings on {toothList}."
        ),
    ),
    NarrativeModule(
        id="SEDATION_JUSTIFICATION",
        applies_when=lambda snapshot: any(c.startswith("D92") for c in _codes(snapshot)),
        required_slots=("sedationReason",),
        resolve=_resolve_sedation,
        template="Moderate sedation was administered {reasonText}.",
    ),
    NarrativeModule(
        id="EVIDENCE_REFERENCE",
        applies_when=lambda snapshot: len(snapshot.evidence) > 0,
        required_slots=(),
        resolve=_resolve_evidence,
        template="Clinical necessity is supported by diagnostic {evidenceList} captured during this encounter.",
    ),
    NarrativeModule(
        id="CONSENT_RISK",
        applies_when=lambda snapshot: snapshot.risks_and_consent_complete,
        required_slots=(),
        resolve=lambda snapshot: ResolvedVars(refs=("visit.consent",)),
        template="Patient was informed of all clinical risks; informed consent was obtained prior to treatment.",
    ),
    NarrativeModule(
        id="PROCEDURE_COMPLETION",
        applies_when=lambda snapshot: all(p.is_completed for p in snapshot.procedures),
        required_slots=(),
        resolve=lambda snapshot: ResolvedVars(refs=("procedures.status",)),
        template="Procedures were completed without complication. Patient tolerated treatment well.",
    ),
)

NARRATIVE_MODULE_IDS: tuple[str, ...] = tuple(m.id for m in NARRATIVE_MODULES)
