"""Procedure dominance: which procedure in a visit is PRIMARY."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from enum import Enum
from types import MappingProxyType
from typing import NamedTuple, Optional

from pydantic import BaseModel

from claim_compiler.coding.categories import FeeCategory

CATEGORY_WEIGHTS = MappingProxyType(
    {
        FeeCategory.SURGICAL: 100,
        FeeCategory.ENDODONTIC: 90,
        FeeCategory.IMPLANT: 80,
        FeeCategory.RESTORATIVE: 70,
        FeeCategory.PROSTHETIC: 60,
        FeeCategory.PERIO: 50,
        FeeCategory.ORTHO: 40,
        FeeCategory.COSMETIC: 30,
        FeeCategory.PREVENTIVE: 20,
        FeeCategory.DIAGNOSTIC: 10,
        FeeCategory.OTHER: 0,
    }
)


class AdjudicationRole(str, Enum):
    PRIMARY = "PRIMARY"
    SUPPORTING = "SUPPORTING"


class RoleCandidate(NamedTuple):
    """A procedure id paired with the category used to weigh it."""

    id: str
    category: FeeCategory


class VisitProcedureRole(BaseModel):
    """The role a procedure plays in the visit's claim."""

    model_config = {"frozen": True}

    procedure_id: str
    role: AdjudicationRole


def resolve_roles(procedures: Sequence[tuple[str, FeeCategory]]) -> list[VisitProcedureRole]:
    """Assign PRIMARY to the highest-weight procedure, SUPPORTING to the rest.

    ``sorted`` is stable, so among equal weights the first-listed procedure
    wins. Output keeps the input order.
    """
    if not procedures:
        return []

    candidates = [RoleCandidate(*p) for p in procedures]
    ranked = sorted(
        range(len(candidates)),
        key=lambda i: CATEGORY_WEIGHTS.get(candidates[i].category, 0),
        reverse=True,
    )
    primary_index = ranked[0]

    return [
        VisitProcedureRole(
            procedure_id=candidate.id,
            role=AdjudicationRole.PRIMARY if i == primary_index else AdjudicationRole.SUPPORTING,
        )
        for i, candidate in enumerate(candidates)
    ]


def primary_procedure_id(roles: Iterable[VisitProcedureRole]) -> Optional[str]:
    """Return the PRIMARY procedure id, or None if there are no roles."""
    for role in roles:
        if role.role == AdjudicationRole.PRIMARY:
            return role.procedure_id
    return None
