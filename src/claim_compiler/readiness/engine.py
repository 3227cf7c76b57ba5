"""Readiness engine: runs the ordered checklist and scores the snapshot."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from claim_compiler.models import ReadinessInput
from claim_compiler.readiness.models import (
    DocumentationReadinessResult,
    MissingItem,
    MissingItemKind,
    ReadinessStatus,
    Severity,
)
from claim_compiler.readiness.rules import (
    READINESS_RULES,
    ReadinessContext,
    ReadinessRule,
    RequirementTally,
)
from claim_compiler.readiness.slots import SlotCompletenessEvaluator, evaluate_slot_completeness

log = logging.getLogger(__name__)

DISCLAIMER_TEXT = (
    "This readiness check is for guidance only. It checks for common documentation "
    "requirements but does not guarantee claim payment. Please verify specific payer rules."
)

# Order in which blockers are offered as the next thing to fix.
FIX_NEXT_PRIORITY: tuple[MissingItemKind, ...] = (
    "procedure_status",
    "admin",
    "procedure_detail",
    "icd10",
    "evidence",
    "slot",
    "consent",
)


class ReadinessEvaluator:
    """Evaluates a visit snapshot against the documentation checklist.

    Evaluation is pure computation over the snapshot.  Rules run in their
    declared order and never see each other's results.
    """

    def __init__(
        self,
        rules: Sequence[ReadinessRule] = READINESS_RULES,
        *,
        slot_evaluator: SlotCompletenessEvaluator = evaluate_slot_completeness,
    ) -> None:
        self._rules = tuple(rules)
        self._slot_evaluator = slot_evaluator

    @property
    def rules(self) -> tuple[ReadinessRule, ...]:
        return self._rules

    def evaluate(self, snapshot: ReadinessInput) -> DocumentationReadinessResult:
        """Run every rule against the snapshot and return the scored result."""
        ctx = ReadinessContext(snapshot=snapshot, slot_evaluator=self._slot_evaluator)
        tally = RequirementTally()

        for rule in self._rules:
            rule.check(ctx, tally)

        percent = readiness_percent(tally.completed, tally.total)
        items = tuple(tally.items)
        result = DocumentationReadinessResult(
            percent=percent,
            items=items,
            status=ReadinessStatus.READY_FOR_REVIEW if percent == 100 else ReadinessStatus.INCOMPLETE,
            fix_next=select_fix_next(items),
            total_requirements=tally.total,
            completed_requirements=tally.completed,
        )

        log.debug(
            "readiness | percent=%s completed=%s total=%s blockers=%s warnings=%s",
            result.percent,
            tally.completed,
            tally.total,
            len(result.blockers),
            len(result.warnings),
        )
        return result


def readiness_percent(completed: int, total: int) -> int:
    """Floor percentage of satisfied requirements; vacuously 100 with none."""
    if total == 0:
        return 100
    return min(100, (100 * completed) // total)


def select_fix_next(items: Sequence[MissingItem]) -> MissingItem | None:
    """First blocker of the highest-priority kind that has one."""
    blockers = [i for i in items if i.severity == Severity.BLOCKER]
    for kind in FIX_NEXT_PRIORITY:
        for item in blockers:
            if item.kind == kind:
                return item
    return None


def evaluate_readiness(
    snapshot: ReadinessInput,
    *,
    slot_evaluator: SlotCompletenessEvaluator = evaluate_slot_completeness,
) -> DocumentationReadinessResult:
    """Evaluate documentation readiness with the standard checklist."""
    return ReadinessEvaluator(slot_evaluator=slot_evaluator).evaluate(snapshot)


def can_advance_to_claim_ready(
    snapshot: ReadinessInput,
    *,
    slot_evaluator: SlotCompletenessEvaluator = evaluate_slot_completeness,
) -> tuple[bool, list[MissingItem]]:
    """Whether the visit may move to claim-ready, with the blockers preventing it."""
    result = evaluate_readiness(snapshot, slot_evaluator=slot_evaluator)
    blockers = result.blockers
    return not blockers, blockers
