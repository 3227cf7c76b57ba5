"""Claim compiler service: readiness, narrative and acceptance in one pass."""

from __future__ import annotations

import logging
from typing import Optional

from pydantic import BaseModel

from claim_compiler.adjudication import ClaimAcceptanceDecision, PayerTier, evaluate_acceptance
from claim_compiler.adjudication.profiles import coerce_payer_tier
from claim_compiler.core.config import AppSettings
from claim_compiler.models import ClaimCompilerInput
from claim_compiler.narrative import NarrativeResult, generate_narrative
from claim_compiler.readiness import DocumentationReadinessResult, ReadinessEvaluator
from claim_compiler.services.snapshot import with_documentation_evidence

log = logging.getLogger(__name__)


class ClaimCompilation(BaseModel):
    """Everything the engine knows about one visit's claim."""

    model_config = {"frozen": True}

    payer_tier: PayerTier
    readiness: DocumentationReadinessResult
    narrative: NarrativeResult
    acceptance: ClaimAcceptanceDecision


class ClaimCompiler:
    """Runs the three engine stages against a snapshot.

    The gate receives the narrative's traces, or none when the narrative is
    blocked, so a blocked narrative always fails the necessity check.
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        readiness: ReadinessEvaluator | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._readiness = readiness or ReadinessEvaluator()

    @property
    def settings(self) -> AppSettings:
        return self._settings

    @property
    def readiness(self) -> ReadinessEvaluator:
        """The evaluator used for readiness scoring."""
        return self._readiness

    def prepare(self, snapshot: ClaimCompilerInput) -> ClaimCompilerInput:
        """Apply configured snapshot enrichment."""
        if self._settings.engine.derive_evidence_from_documentation:
            return with_documentation_evidence(snapshot)
        return snapshot

    def compile(
        self,
        snapshot: ClaimCompilerInput,
        payer_tier: PayerTier | str | None = None,
    ) -> ClaimCompilation:
        tier = coerce_payer_tier(payer_tier or self._settings.engine.default_payer_tier)
        snapshot = self.prepare(snapshot)

        readiness = self._readiness.evaluate(snapshot)
        narrative = generate_narrative(snapshot)
        acceptance = evaluate_acceptance(snapshot, tier, narrative.traces or ())

        log.info(
            "claim_compiled | tier=%s readiness=%s narrative_ok=%s allowed=%s confidence=%s",
            tier.value,
            readiness.percent,
            narrative.ok,
            acceptance.allowed,
            acceptance.confidence_score,
        )
        return ClaimCompilation(
            payer_tier=tier,
            readiness=readiness,
            narrative=narrative,
            acceptance=acceptance,
        )


def compile_claim(
    snapshot: ClaimCompilerInput,
    payer_tier: PayerTier | str | None = None,
    *,
    settings: Optional[AppSettings] = None,
) -> ClaimCompilation:
    """Compile a claim with a one-off ``ClaimCompiler``."""
    return ClaimCompiler(settings).compile(snapshot, payer_tier)
