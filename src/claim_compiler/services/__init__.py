"""Services composing the engine stages over visit snapshots."""

from __future__ import annotations

from claim_compiler.services.compiler import ClaimCompilation, ClaimCompiler, compile_claim
from claim_compiler.services.snapshot import (
    FLAG_EVIDENCE_TYPES,
    evidence_from_documentation,
    load_snapshot,
    with_documentation_evidence,
)

__all__ = [
    "ClaimCompilation",
    "ClaimCompiler",
    "FLAG_EVIDENCE_TYPES",
    "compile_claim",
    "evidence_from_documentation",
    "load_snapshot",
    "with_documentation_evidence",
]
