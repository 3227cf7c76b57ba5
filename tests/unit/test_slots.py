"""Tests for the default SOAP slot completeness evaluator."""

from __future__ import annotations

from claim_compiler.models import AssertionSection, AssertionSlot, TruthAssertion, TruthAssertionsBundle
from claim_compiler.readiness import SlotStatus, evaluate_slot_completeness


class TestEvaluateSlotCompleteness:
    def test_filled_required_slots_are_complete(self, complete_truth: TruthAssertionsBundle) -> None:
        statuses = evaluate_slot_completeness(complete_truth, AssertionSection.SUBJECTIVE)
        assert statuses[AssertionSlot.CC] == SlotStatus.COMPLETE
        assert statuses[AssertionSlot.HPI] == SlotStatus.COMPLETE

    def test_unfilled_required_slot_is_empty(self) -> None:
        truth = TruthAssertionsBundle(
            assertions=(TruthAssertion(section=AssertionSection.SUBJECTIVE, slot=AssertionSlot.CC, label="Pain"),)
        )
        statuses = evaluate_slot_completeness(truth, AssertionSection.SUBJECTIVE)
        assert statuses[AssertionSlot.HPI] == SlotStatus.EMPTY

    def test_unchecked_assertion_does_not_fill(self) -> None:
        truth = TruthAssertionsBundle(
            assertions=(
                TruthAssertion(
                    section=AssertionSection.PLAN,
                    slot=AssertionSlot.PLAN,
                    label="Recall in six months",
                    checked=False,
                ),
            )
        )
        statuses = evaluate_slot_completeness(truth, AssertionSection.PLAN)
        assert statuses[AssertionSlot.PLAN] == SlotStatus.EMPTY

    def test_assertion_in_other_section_does_not_fill(self) -> None:
        truth = TruthAssertionsBundle(
            assertions=(TruthAssertion(section=AssertionSection.OBJECTIVE, slot=AssertionSlot.DIAGNOSIS, label="x"),)
        )
        statuses = evaluate_slot_completeness(truth, AssertionSection.ASSESSMENT)
        assert statuses[AssertionSlot.DIAGNOSIS] == SlotStatus.EMPTY

    def test_other_slots_not_required(self, complete_truth: TruthAssertionsBundle) -> None:
        statuses = evaluate_slot_completeness(complete_truth, AssertionSection.OBJECTIVE)
        assert statuses[AssertionSlot.RADIOGRAPHIC] == SlotStatus.NOT_REQUIRED
        assert statuses[AssertionSlot.MISC] == SlotStatus.NOT_REQUIRED
        assert set(statuses) == set(AssertionSlot)
