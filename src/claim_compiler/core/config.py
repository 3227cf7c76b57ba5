"""Nested pydantic-settings configuration for the application.

Each group reads its own ``CLAIMS_<GROUP>_*`` env vars::

    export CLAIMS_ENGINE_DEFAULT_PAYER_TIER=STRICT
    export CLAIMS_OBSERVABILITY_LOG_LEVEL=DEBUG
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class EngineConfig(BaseSettings):
    """Claim engine defaults.

    Env vars use ``CLAIMS_ENGINE_`` prefix.
    """

    model_config = {"env_prefix": "CLAIMS_ENGINE_"}

    default_payer_tier: Literal["GENERIC", "CONSERVATIVE", "STRICT"] = "GENERIC"
    derive_evidence_from_documentation: bool = False


class ObservabilityConfig(BaseSettings):
    """Logging configuration.

    Env vars use ``CLAIMS_OBSERVABILITY_`` prefix.
    """

    model_config = {"env_prefix": "CLAIMS_OBSERVABILITY_"}

    service_name: str = "claim-compiler"
    log_level: str = "INFO"
    json_logs: Literal["auto", "always", "never"] = "auto"


class APIConfig(BaseSettings):
    """HTTP API configuration.

    Env vars use ``CLAIMS_API_`` prefix.
    """

    model_config = {"env_prefix": "CLAIMS_API_"}

    title: str = "Claim Compiler API"
    description: str = "Documentation readiness, claim narrative and payer acceptance gate"
    host: str = "0.0.0.0"
    port: int = Field(default=8080, ge=1, le=65535)


class AppSettings(BaseSettings):
    """Top-level application settings aggregating all sub-configs."""

    engine: EngineConfig = Field(default_factory=EngineConfig)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)
    api: APIConfig = Field(default_factory=APIConfig)
