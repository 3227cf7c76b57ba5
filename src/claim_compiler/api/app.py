"""FastAPI application with lifespan management."""

from __future__ import annotations

import importlib.metadata
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI

from claim_compiler.api.middleware.error_handler import register_error_handlers
from claim_compiler.api.routes import claims, health
from claim_compiler.core.config import APIConfig, AppSettings
from claim_compiler.core.logging_config import setup_logging
from claim_compiler.core.startup_checks import validate_settings
from claim_compiler.services import ClaimCompiler


def _get_version() -> str:
    """Read package version from installed metadata, with dev fallback."""
    try:
        return importlib.metadata.version("claim-compiler")
    except importlib.metadata.PackageNotFoundError:
        return "0.0.0-dev"


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application startup/shutdown lifecycle."""
    settings = AppSettings()
    validate_settings(settings)
    setup_logging(settings.observability)

    app.state.settings = settings
    app.state.compiler = ClaimCompiler(settings)
    yield


_api_config = APIConfig()

app = FastAPI(
    title=_api_config.title,
    description=_api_config.description,
    version=_get_version(),
    lifespan=lifespan,
)

register_error_handlers(app)

app.include_router(health.router)
app.include_router(claims.router, prefix="/api")
