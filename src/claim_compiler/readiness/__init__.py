"""Documentation readiness: checklist rules, slot completeness, and the engine.

Usage::

    from claim_compiler.readiness import evaluate_readiness
    result = evaluate_readiness(snapshot)
    if result.fix_next:
        print(result.fix_next.label)
"""

from __future__ import annotations

from claim_compiler.readiness.engine import (
    DISCLAIMER_TEXT,
    FIX_NEXT_PRIORITY,
    ReadinessEvaluator,
    can_advance_to_claim_ready,
    evaluate_readiness,
    readiness_percent,
    select_fix_next,
)
from claim_compiler.readiness.models import (
    AdminMissingItem,
    CoherenceMissingItem,
    ConsentMissingItem,
    DocumentationReadinessResult,
    EvidenceMissingItem,
    Icd10MissingItem,
    MissingItem,
    ProcedureDetailMissingItem,
    ProcedureStatusMissingItem,
    ReadinessStatus,
    Severity,
    SlotMissingItem,
)
from claim_compiler.readiness.rules import READINESS_RULES, ReadinessRule
from claim_compiler.readiness.slots import (
    SlotCompletenessEvaluator,
    SlotStatus,
    evaluate_slot_completeness,
)

__all__ = [
    "AdminMissingItem",
    "CoherenceMissingItem",
    "ConsentMissingItem",
    "DISCLAIMER_TEXT",
    "DocumentationReadinessResult",
    "EvidenceMissingItem",
    "FIX_NEXT_PRIORITY",
    "Icd10MissingItem",
    "MissingItem",
    "ProcedureDetailMissingItem",
    "ProcedureStatusMissingItem",
    "READINESS_RULES",
    "ReadinessEvaluator",
    "ReadinessRule",
    "ReadinessStatus",
    "Severity",
    "SlotCompletenessEvaluator",
    "SlotMissingItem",
    "SlotStatus",
    "can_advance_to_claim_ready",
    "evaluate_readiness",
    "evaluate_slot_completeness",
    "readiness_percent",
    "select_fix_next",
]
