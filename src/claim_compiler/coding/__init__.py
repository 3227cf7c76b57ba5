"""Procedure coding helpers: fee categories and visit procedure roles."""

from __future__ import annotations

from claim_compiler.coding.categories import CATEGORY_PREFIX_RULES, FeeCategory, category_from_code
from claim_compiler.coding.roles import (
    CATEGORY_WEIGHTS,
    AdjudicationRole,
    RoleCandidate,
    VisitProcedureRole,
    primary_procedure_id,
    resolve_roles,
)

__all__ = [
    "AdjudicationRole",
    "CATEGORY_PREFIX_RULES",
    "CATEGORY_WEIGHTS",
    "FeeCategory",
    "RoleCandidate",
    "VisitProcedureRole",
    "category_from_code",
    "primary_procedure_id",
    "resolve_roles",
]
