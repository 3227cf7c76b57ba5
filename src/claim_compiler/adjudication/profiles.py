"""The three payer-tier policy profiles, each stricter than the last."""

from __future__ import annotations

from types import MappingProxyType

from claim_compiler.adjudication.models import PayerProfile, PayerTier
from claim_compiler.exceptions import UnknownPayerTierError

PAYER_PROFILES = MappingProxyType(
    {
        PayerTier.GENERIC: PayerProfile(
            id=PayerTier.GENERIC,
            label="Commercial (Standard)",
            required_module_ids=("VISIT_CONTEXT", "RESTORATIVE_NECESSITY"),
            required_evidence_types=(),
            enforce_completion_status=True,
            min_confidence_for_submission=85,
        ),
        PayerTier.CONSERVATIVE: PayerProfile(
            id=PayerTier.CONSERVATIVE,
            label="Conservative (High Audit)",
            required_module_ids=("VISIT_CONTEXT", "RESTORATIVE_NECESSITY", "EVIDENCE_REFERENCE"),
            required_evidence_types=("pre_op_xray",),
            enforce_completion_status=True,
            min_confidence_for_submission=90,
        ),
        PayerTier.STRICT: PayerProfile(
            id=PayerTier.STRICT,
            label="Strict (Government/HHS)",
            required_module_ids=(
                "VISIT_CONTEXT",
                "RESTORATIVE_NECESSITY",
                "EVIDENCE_REFERENCE",
                "CONSENT_RISK",
                "PROCEDURE_COMPLETION",
            ),
            required_evidence_types=("pre_op_xray", "intraoral_photo"),
            enforce_completion_status=True,
            min_confidence_for_submission=95,
        ),
    }
)


def coerce_payer_tier(tier: PayerTier | str) -> PayerTier:
    """Accept a tier enum or its (case-insensitive) name."""
    if isinstance(tier, PayerTier):
        return tier
    try:
        return PayerTier(str(tier).strip().upper())
    except ValueError:
        raise UnknownPayerTierError(tier) from None


def get_payer_profile(tier: PayerTier | str) -> PayerProfile:
    """Look up the policy profile for a tier."""
    return PAYER_PROFILES[coerce_payer_tier(tier)]
