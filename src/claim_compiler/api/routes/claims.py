"""Claim endpoints: readiness, narrative, acceptance and full compilation."""

from __future__ import annotations

import dataclasses
from typing import Optional

from fastapi import APIRouter, Depends, Request

from claim_compiler.adjudication import PAYER_PROFILES, ClaimAcceptanceDecision, evaluate_acceptance
from claim_compiler.adjudication.profiles import coerce_payer_tier
from claim_compiler.models import ClaimCompilerInput
from claim_compiler.narrative import NarrativeResult, generate_narrative
from claim_compiler.readiness import DocumentationReadinessResult
from claim_compiler.services import ClaimCompilation, ClaimCompiler

router = APIRouter(prefix="/claims", tags=["claims"])


def get_compiler(req: Request) -> ClaimCompiler:
    """The compiler built at startup, or a default one outside the lifespan."""
    compiler = getattr(req.app.state, "compiler", None)
    if compiler is None:
        compiler = ClaimCompiler()
        req.app.state.compiler = compiler
    return compiler


@router.post("/readiness", response_model=DocumentationReadinessResult)
async def readiness(
    snapshot: ClaimCompilerInput,
    compiler: ClaimCompiler = Depends(get_compiler),
) -> DocumentationReadinessResult:
    """Score documentation readiness for a visit snapshot."""
    return compiler.readiness.evaluate(compiler.prepare(snapshot))


@router.post("/narrative", response_model=NarrativeResult)
async def narrative(
    snapshot: ClaimCompilerInput,
    compiler: ClaimCompiler = Depends(get_compiler),
) -> NarrativeResult:
    return generate_narrative(compiler.prepare(snapshot))


@router.post("/acceptance", response_model=ClaimAcceptanceDecision)
async def acceptance(
    snapshot: ClaimCompilerInput,
    tier: Optional[str] = None,
    compiler: ClaimCompiler = Depends(get_compiler),
) -> ClaimAcceptanceDecision:
    """Evaluate payer acceptance; the narrative is generated server-side."""
    payer_tier = coerce_payer_tier(tier or compiler.settings.engine.default_payer_tier)
    snapshot = compiler.prepare(snapshot)
    story = generate_narrative(snapshot)
    return evaluate_acceptance(snapshot, payer_tier, story.traces or ())


@router.post("/compile", response_model=ClaimCompilation)
async def compile_claim(
    snapshot: ClaimCompilerInput,
    tier: Optional[str] = None,
    compiler: ClaimCompiler = Depends(get_compiler),
) -> ClaimCompilation:
    return compiler.compile(snapshot, tier)


@router.get("/profiles")
async def profiles() -> list[dict[str, object]]:
    """The payer-tier policy profiles, least to most strict."""
    return [dataclasses.asdict(p) for p in PAYER_PROFILES.values()]
