"""Shared fixtures for claim-compiler tests."""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from claim_compiler.models import (
    AssertionSection,
    AssertionSlot,
    ClaimCompilerInput,
    DiagnosisFact,
    DocumentationFlags,
    EvidenceFact,
    PatientIdentity,
    ProcedureFact,
    ProviderIdentity,
    TruthAssertion,
    TruthAssertionsBundle,
)


def _assertion(section: AssertionSection, slot: AssertionSlot, label: str) -> TruthAssertion:
    return TruthAssertion(id=f"{section.value}-{slot.value}", section=section, slot=slot, label=label)


@pytest.fixture
def complete_truth() -> TruthAssertionsBundle:
    """A SOAP note with every required slot filled."""
    return TruthAssertionsBundle(
        visit_id="visit-1",
        assertions=(
            _assertion(AssertionSection.SUBJECTIVE, AssertionSlot.CC, "Pain upper right when chewing"),
            _assertion(AssertionSection.SUBJECTIVE, AssertionSlot.HPI, "Lingering cold sensitivity for two weeks"),
            _assertion(AssertionSection.OBJECTIVE, AssertionSlot.CLINICAL_FINDING, "Deep distal caries #3"),
            _assertion(AssertionSection.ASSESSMENT, AssertionSlot.DIAGNOSIS, "Irreversible pulpitis #3"),
            _assertion(
                AssertionSection.TREATMENT_PERFORMED,
                AssertionSlot.INTERVENTION,
                "Root canal under rubber dam isolation",
            ),
            _assertion(AssertionSection.PLAN, AssertionSlot.PLAN, "Crown in two weeks"),
        ),
    )


@pytest.fixture
def complete_snapshot(complete_truth: TruthAssertionsBundle) -> ClaimCompilerInput:
    """A fully documented composite + root canal visit that passes every tier."""
    flags = DocumentationFlags(has_xray=True, has_photo=True)
    return ClaimCompilerInput(
        procedures=(
            ProcedureFact(
                id="p1",
                cdt_code="D2391",
                label="Resin composite, one surface, posterior",
                tooth="14",
                surfaces=("O",),
                is_completed=True,
                documentation=flags,
            ),
            ProcedureFact(
                id="p2",
                cdt_code="D3330",
                label="Endodontic therapy, molar",
                tooth="3",
                is_completed=True,
                documentation=flags,
            ),
        ),
        diagnoses=(DiagnosisFact(procedure_id="p2", icd10="K04.01"),),
        evidence=(
            EvidenceFact(evidence_type="pre_op_xray", procedure_id="p2"),
            EvidenceFact(evidence_type="intraoral_photo"),
        ),
        risks_and_consent_complete=True,
        provider=ProviderIdentity(npi="1234567893"),
        service_date="2024-05-01",
        patient=PatientIdentity(dob="1980-02-14", member_id="M-100200"),
        truth=complete_truth,
    )


@pytest.fixture
def root_canal_snapshot() -> ClaimCompilerInput:
    """A single D3330, not completed, with no diagnosis and no evidence."""
    return ClaimCompilerInput(
        procedures=(ProcedureFact(id="rc", cdt_code="D3330", tooth="3"),),
    )


@pytest.fixture
def sedation_snapshot(complete_snapshot: ClaimCompilerInput) -> ClaimCompilerInput:
    """The complete visit plus moderate sedation with no documented reason."""
    sedation = ProcedureFact(id="sed", cdt_code="D9239", label="Moderate sedation", is_completed=True)
    return complete_snapshot.model_copy(update={"procedures": (*complete_snapshot.procedures, sedation)})


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[ClaimCompilerInput], Path]:
    """Write a snapshot to a JSON file and return its path."""

    def _write(snapshot: ClaimCompilerInput, name: str = "visit.json") -> Path:
        path = tmp_path / name
        path.write_text(snapshot.model_dump_json(indent=2), encoding="utf-8")
        return path

    return _write
