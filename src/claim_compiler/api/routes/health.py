"""Health check endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from claim_compiler.adjudication import PAYER_PROFILES

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(req: Request) -> dict[str, str]:
    """Liveness: 200 whenever the process is up."""
    settings = getattr(req.app.state, "settings", None)
    service = settings.observability.service_name if settings is not None else "claim-compiler"
    return {"status": "ok", "service": service}


@router.get("/ready")
async def ready(req: Request) -> JSONResponse:
    """Readiness: 503 until startup has built the claim compiler.

    Once ready, reports the payer tiers alongside the readiness rule count.
    """
    compiler = getattr(req.app.state, "compiler", None)
    if compiler is None:
        return JSONResponse(status_code=503, content={"status": "starting"})
    return JSONResponse(
        content={
            "status": "ready",
            "default_payer_tier": compiler.settings.engine.default_payer_tier,
            "payer_tiers": [tier.value for tier in PAYER_PROFILES],
            "readiness_rules": len(compiler.readiness.rules),
        }
    )
