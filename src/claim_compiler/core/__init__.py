"""Settings, startup checks and logging setup."""

from __future__ import annotations

from claim_compiler.core.config import APIConfig, AppSettings, EngineConfig, ObservabilityConfig
from claim_compiler.core.logging_config import setup_logging
from claim_compiler.core.startup_checks import validate_settings

__all__ = [
    "APIConfig",
    "AppSettings",
    "EngineConfig",
    "ObservabilityConfig",
    "setup_logging",
    "validate_settings",
]
