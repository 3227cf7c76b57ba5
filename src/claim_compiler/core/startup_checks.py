"""Startup validation: fail-fast on critical misconfigurations."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from claim_compiler.core.config import AppSettings

log = logging.getLogger(__name__)

_LOG_LEVELS = frozenset({"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"})


def validate_settings(settings: AppSettings) -> None:
    """Validate application settings at startup. Raises ValueError on fatal misconfig."""
    _check_log_level(settings)
    _check_evidence_derivation(settings)


def _check_log_level(settings: AppSettings) -> None:
    """Reject log levels the logging module does not know."""
    level = settings.observability.log_level.upper()
    if level not in _LOG_LEVELS:
        raise ValueError(
            f"CLAIMS_OBSERVABILITY_LOG_LEVEL={settings.observability.log_level!r} is not a valid level. "
            f"Use one of: {', '.join(sorted(_LOG_LEVELS))}."
        )


def _check_evidence_derivation(settings: AppSettings) -> None:
    """Warn when evidence is derived from documentation flags for a strict default tier."""
    if settings.engine.derive_evidence_from_documentation and settings.engine.default_payer_tier == "STRICT":
        log.warning(
            "CLAIMS_ENGINE_DERIVE_EVIDENCE_FROM_DOCUMENTATION=true with a STRICT default tier. "
            "Derived evidence is not independently attached; verify payer audit requirements."
        )
