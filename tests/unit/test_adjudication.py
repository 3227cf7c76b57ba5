"""Tests for the payer acceptance gate and payer profiles."""

from __future__ import annotations

import pytest

from claim_compiler.adjudication import (
    PAYER_PROFILES,
    PayerTier,
    evaluate_acceptance,
    get_payer_profile,
)
from claim_compiler.exceptions import UnknownPayerTierError
from claim_compiler.models import ClaimCompilerInput, ProcedureFact, ProviderIdentity
from claim_compiler.narrative import NarrativeTrace, generate_narrative


def _traces(*module_ids: str) -> tuple[NarrativeTrace, ...]:
    return tuple(NarrativeTrace(sentence=f"{m}.", source_module_id=m) for m in module_ids)


def _blocker_codes(decision) -> list[str]:
    return [b.code for b in decision.blockers]


class TestStrictTier:
    def test_complete_visit_is_allowed(self, complete_snapshot: ClaimCompilerInput) -> None:
        traces = generate_narrative(complete_snapshot).traces
        decision = evaluate_acceptance(complete_snapshot, PayerTier.STRICT, traces)
        assert decision.allowed is True
        assert decision.confidence_score == 100
        assert decision.blockers == ()
        assert decision.warnings == ()
        assert decision.payer_tier == PayerTier.STRICT

    def test_primary_uses_true_category(self, complete_snapshot: ClaimCompilerInput) -> None:
        traces = generate_narrative(complete_snapshot).traces
        decision = evaluate_acceptance(complete_snapshot, "STRICT", traces)
        assert decision.primary_procedure_id == "p2"

    def test_missing_photo_blocks(self, complete_snapshot: ClaimCompilerInput) -> None:
        procedures = tuple(
            p.model_copy(update={"documentation": p.documentation.model_copy(update={"has_photo": False})})
            for p in complete_snapshot.procedures
        )
        snap = complete_snapshot.model_copy(update={"procedures": procedures})
        decision = evaluate_acceptance(snap, PayerTier.STRICT, generate_narrative(snap).traces)
        assert decision.allowed is False
        assert decision.confidence_score == 0
        assert _blocker_codes(decision) == ["EVIDENCE_INTRAORAL_PHOTO", "EVIDENCE_INTRAORAL_PHOTO"]
        first = decision.blockers[0]
        assert first.rule_id == "PAYER_EVIDENCE"
        assert first.field == "has_photo"
        assert first.procedure_id == "p1"
        assert first.message == "Missing intraoral photo for D2391"

    def test_missing_modules_lower_score(self, complete_snapshot: ClaimCompilerInput) -> None:
        decision = evaluate_acceptance(
            complete_snapshot, PayerTier.STRICT, _traces("VISIT_CONTEXT", "RESTORATIVE_NECESSITY")
        )
        assert decision.blockers == ()
        assert decision.confidence_score == 85
        assert decision.allowed is False


class TestBlockers:
    @pytest.mark.parametrize("tier", list(PayerTier))
    def test_placeholder_npi_always_blocks(self, complete_snapshot: ClaimCompilerInput, tier: PayerTier) -> None:
        snap = complete_snapshot.model_copy(update={"provider": ProviderIdentity(npi="0000000000")})
        decision = evaluate_acceptance(snap, tier, generate_narrative(snap).traces)
        assert "ADMIN_NPI" in _blocker_codes(decision)
        assert decision.allowed is False
        assert decision.confidence_score == 0

    def test_missing_provider_blocks(self, complete_snapshot: ClaimCompilerInput) -> None:
        snap = complete_snapshot.model_copy(update={"provider": None})
        decision = evaluate_acceptance(snap, PayerTier.GENERIC, generate_narrative(snap).traces)
        assert _blocker_codes(decision) == ["ADMIN_NPI"]
        assert decision.blockers[0].message == "Provider NPI required"

    def test_no_necessity_trace_blocks(self, complete_snapshot: ClaimCompilerInput) -> None:
        decision = evaluate_acceptance(complete_snapshot, PayerTier.GENERIC, ())
        assert _blocker_codes(decision) == ["NAV_NECESSITY"]
        assert decision.blockers[0].rule_id == "NECESSITY_VERIFIED"
        assert decision.blockers[0].message == "Primary Clinical Findings missing"

    def test_incomplete_procedure_blocks(self, complete_snapshot: ClaimCompilerInput) -> None:
        procedures = (complete_snapshot.procedures[0].model_copy(update={"is_completed": False}),)
        snap = complete_snapshot.model_copy(update={"procedures": procedures})
        decision = evaluate_acceptance(snap, PayerTier.GENERIC, _traces("VISIT_CONTEXT", "RESTORATIVE_NECESSITY"))
        assert _blocker_codes(decision) == ["PROC_STATUS"]
        assert decision.blockers[0].procedure_id == "p1"
        assert decision.blockers[0].message == "D2391 not marked completed"

    def test_generic_ignores_evidence(self) -> None:
        snap = ClaimCompilerInput(
            procedures=(ProcedureFact(id="c", cdt_code="D2740", is_completed=True),),
            provider=ProviderIdentity(npi="1234567893"),
        )
        decision = evaluate_acceptance(snap, PayerTier.GENERIC, _traces("VISIT_CONTEXT", "RESTORATIVE_NECESSITY"))
        assert decision.allowed is True
        assert decision.confidence_score == 100

    def test_conservative_requires_xray(self) -> None:
        snap = ClaimCompilerInput(
            procedures=(ProcedureFact(id="c", cdt_code="D2740", is_completed=True),),
            provider=ProviderIdentity(npi="1234567893"),
        )
        decision = evaluate_acceptance(snap, PayerTier.CONSERVATIVE, _traces("VISIT_CONTEXT", "RESTORATIVE_NECESSITY"))
        assert _blocker_codes(decision) == ["EVIDENCE_PRE_OP_XRAY"]
        assert decision.blockers[0].field == "has_xray"
        assert decision.blockers[0].message == "Missing pre op xray for D2740"

    def test_evidence_not_enforced_for_minor_categories(self) -> None:
        snap = ClaimCompilerInput(
            procedures=(
                ProcedureFact(id="pro", cdt_code="D1110", is_completed=True),
                ProcedureFact(id="srp", cdt_code="D4341", is_completed=True),
            ),
            provider=ProviderIdentity(npi="1234567893"),
            risks_and_consent_complete=True,
        )
        strict_modules = PAYER_PROFILES[PayerTier.STRICT].required_module_ids
        decision = evaluate_acceptance(snap, PayerTier.STRICT, _traces(*strict_modules))
        assert decision.blockers == ()
        assert decision.allowed is True


class TestTiers:
    def test_string_tier_accepted(self, complete_snapshot: ClaimCompilerInput) -> None:
        decision = evaluate_acceptance(complete_snapshot, "conservative", generate_narrative(complete_snapshot).traces)
        assert decision.payer_tier == PayerTier.CONSERVATIVE

    def test_unknown_tier_raises(self, complete_snapshot: ClaimCompilerInput) -> None:
        with pytest.raises(UnknownPayerTierError, match="GOLD"):
            evaluate_acceptance(complete_snapshot, "GOLD", ())

    def test_unknown_tier_is_key_error(self) -> None:
        with pytest.raises(KeyError):
            get_payer_profile("PLATINUM")

    def test_profiles_grow_stricter(self) -> None:
        generic, conservative, strict = (get_payer_profile(t) for t in PayerTier)
        assert set(generic.required_module_ids) < set(conservative.required_module_ids)
        assert set(conservative.required_module_ids) < set(strict.required_module_ids)
        assert set(conservative.required_evidence_types) < set(strict.required_evidence_types)
        assert (
            generic.min_confidence_for_submission
            < conservative.min_confidence_for_submission
            < strict.min_confidence_for_submission
        )

    def test_profile_labels(self) -> None:
        assert [p.label for p in PAYER_PROFILES.values()] == [
            "Commercial (Standard)",
            "Conservative (High Audit)",
            "Strict (Government/HHS)",
        ]
        assert all(p.enforce_completion_status for p in PAYER_PROFILES.values())

    def test_profiles_are_read_only(self) -> None:
        with pytest.raises(TypeError):
            PAYER_PROFILES[PayerTier.GENERIC] = PAYER_PROFILES[PayerTier.STRICT]
