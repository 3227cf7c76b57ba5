"""Snapshot loading and evidence derived from documentation flags."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from types import MappingProxyType

from pydantic import ValidationError

from claim_compiler.exceptions import SnapshotError
from claim_compiler.models import ClaimCompilerInput, EvidenceFact, ProcedureFact

log = logging.getLogger(__name__)

# DocumentationFlags attribute -> evidence type it attests to.
FLAG_EVIDENCE_TYPES = MappingProxyType(
    {
        "has_xray": "pre_op_xray",
        "has_perio_chart": "perio_charting",
        "has_photo": "intraoral_photo",
        "has_fmx_within_36_months": "fmX_pano_recent",
    }
)


def load_snapshot(path: Path) -> ClaimCompilerInput:
    """Read and validate a visit snapshot JSON file."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except OSError as exc:
        raise SnapshotError(f"Cannot read snapshot {path}: {exc}", source=str(path)) from exc
    except json.JSONDecodeError as exc:
        raise SnapshotError(f"Snapshot {path} is not valid JSON: {exc}", source=str(path)) from exc

    if not isinstance(raw, dict):
        raise SnapshotError(f"Expected a JSON object in {path}", source=str(path))

    try:
        snapshot = ClaimCompilerInput.model_validate(raw)
    except ValidationError as exc:
        raise SnapshotError(
            f"Snapshot {path} failed validation: {exc.error_count()} error(s)",
            source=str(path),
        ) from exc

    log.debug("snapshot_loaded | path=%s procedures=%s", path, len(snapshot.procedures))
    return snapshot


def evidence_from_documentation(procedures: Iterable[ProcedureFact]) -> list[EvidenceFact]:
    """Attached evidence implied by each procedure's documentation flags."""
    evidence: list[EvidenceFact] = []
    for proc in procedures:
        for flag, evidence_type in FLAG_EVIDENCE_TYPES.items():
            if getattr(proc.documentation, flag):
                evidence.append(EvidenceFact(evidence_type=evidence_type, attached=True, procedure_id=proc.id))
    return evidence


def with_documentation_evidence(snapshot: ClaimCompilerInput) -> ClaimCompilerInput:
    """Copy of ``snapshot`` with flag-derived evidence appended after existing entries."""
    derived = evidence_from_documentation(snapshot.procedures)
    if not derived:
        return snapshot
    return snapshot.model_copy(update={"evidence": (*snapshot.evidence, *derived)})
