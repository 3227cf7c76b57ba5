"""Claim narrative: ordered template modules with per-sentence audit traces."""

from __future__ import annotations

from claim_compiler.narrative.engine import generate_narrative
from claim_compiler.narrative.models import (
    MissingSlot,
    NarrativeModule,
    NarrativeResult,
    NarrativeTrace,
    ResolvedVars,
)
from claim_compiler.narrative.modules import NARRATIVE_MODULE_IDS, NARRATIVE_MODULES, SEDATION_FRAGMENTS

__all__ = [
    "MissingSlot",
    "NARRATIVE_MODULES",
    "NARRATIVE_MODULE_IDS",
    "NarrativeModule",
    "NarrativeResult",
    "NarrativeTrace",
    "ResolvedVars",
    "SEDATION_FRAGMENTS",
    "generate_narrative",
]
