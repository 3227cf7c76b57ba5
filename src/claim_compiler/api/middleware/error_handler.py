"""Global exception handlers mapping domain exceptions to HTTP responses."""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from claim_compiler.exceptions import ClaimCompilerError, SnapshotError, UnknownPayerTierError


def register_error_handlers(app: FastAPI) -> None:
    """Register exception-to-HTTP-status mappings."""

    @app.exception_handler(UnknownPayerTierError)
    async def handle_unknown_tier(request: Request, exc: UnknownPayerTierError) -> JSONResponse:
        return JSONResponse(status_code=400, content={"error": str(exc), "type": "unknown_payer_tier"})

    @app.exception_handler(SnapshotError)
    async def handle_snapshot_error(request: Request, exc: SnapshotError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"error": str(exc), "type": "snapshot_error"})

    @app.exception_handler(ClaimCompilerError)
    async def handle_generic_error(request: Request, exc: ClaimCompilerError) -> JSONResponse:
        return JSONResponse(status_code=500, content={"error": str(exc), "type": "claim_compiler_error"})
