"""Slot completeness: which SOAP documentation slots a visit still needs.

The readiness checklist only depends on the ``SlotCompletenessEvaluator``
call signature.  ``evaluate_slot_completeness`` is the default
implementation, driven by a static table of required slots per section;
callers with their own documentation rules inject a different evaluator.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from types import MappingProxyType
from typing import Protocol

from claim_compiler.models import AssertionSection, AssertionSlot, TruthAssertionsBundle


class SlotStatus(str, Enum):
    COMPLETE = "complete"
    EMPTY = "empty"
    NOT_REQUIRED = "not_required"


SECTION_ORDER: tuple[AssertionSection, ...] = (
    AssertionSection.SUBJECTIVE,
    AssertionSection.OBJECTIVE,
    AssertionSection.ASSESSMENT,
    AssertionSection.TREATMENT_PERFORMED,
    AssertionSection.PLAN,
)

SLOT_ORDER: tuple[AssertionSlot, ...] = tuple(AssertionSlot)

SLOT_LABELS = MappingProxyType(
    {
        AssertionSlot.CC: "Chief Complaint",
        AssertionSlot.HPI: "History of Present Illness",
        AssertionSlot.CLINICAL_FINDING: "Clinical Findings",
        AssertionSlot.RADIOGRAPHIC: "Radiographic Findings",
        AssertionSlot.DIAGNOSIS: "Diagnosis",
        AssertionSlot.INTERVENTION: "Treatment Performed",
        AssertionSlot.RISK: "Risks Discussed",
        AssertionSlot.PLAN: "Plan / Next Visit",
        AssertionSlot.MISC: "Other",
    }
)

REQUIRED_SLOTS = MappingProxyType(
    {
        AssertionSection.SUBJECTIVE: frozenset({AssertionSlot.CC, AssertionSlot.HPI}),
        AssertionSection.OBJECTIVE: frozenset({AssertionSlot.CLINICAL_FINDING}),
        AssertionSection.ASSESSMENT: frozenset({AssertionSlot.DIAGNOSIS}),
        AssertionSection.TREATMENT_PERFORMED: frozenset({AssertionSlot.INTERVENTION}),
        AssertionSection.PLAN: frozenset({AssertionSlot.PLAN}),
    }
)


class SlotCompletenessEvaluator(Protocol):
    """Reports a status for every slot of one SOAP section."""

    def __call__(
        self,
        truth: TruthAssertionsBundle,
        section: AssertionSection,
    ) -> Mapping[AssertionSlot, SlotStatus]: ...


def evaluate_slot_completeness(
    truth: TruthAssertionsBundle,
    section: AssertionSection,
) -> dict[AssertionSlot, SlotStatus]:
    """Required slots are complete iff a checked assertion fills them."""
    required = REQUIRED_SLOTS.get(section, frozenset())
    filled = {a.slot for a in truth.assertions if a.section == section and a.checked}

    statuses: dict[AssertionSlot, SlotStatus] = {}
    for slot in SLOT_ORDER:
        if slot not in required:
            statuses[slot] = SlotStatus.NOT_REQUIRED
        elif slot in filled:
            statuses[slot] = SlotStatus.COMPLETE
        else:
            statuses[slot] = SlotStatus.EMPTY
    return statuses
