"""CDT code → fee category mapping by ordered prefix rules."""

from __future__ import annotations

from enum import Enum


class FeeCategory(str, Enum):
    """Coarse clinical category of a procedure."""

    DIAGNOSTIC = "DIAGNOSTIC"
    PREVENTIVE = "PREVENTIVE"
    RESTORATIVE = "RESTORATIVE"
    ENDODONTIC = "ENDODONTIC"
    PERIO = "PERIO"
    PROSTHETIC = "PROSTHETIC"
    IMPLANT = "IMPLANT"
    SURGICAL = "SURGICAL"
    ORTHO = "ORTHO"
    COSMETIC = "COSMETIC"
    OTHER = "OTHER"


# First match wins. D27/D29 must precede D2, D60/D61 must precede D62/D67.
CATEGORY_PREFIX_RULES: tuple[tuple[tuple[str, ...], FeeCategory], ...] = (
    (("D0",), FeeCategory.DIAGNOSTIC),
    (("D1",), FeeCategory.PREVENTIVE),
    (("D27", "D29"), FeeCategory.PROSTHETIC),
    (("D2",), FeeCategory.RESTORATIVE),
    (("D3",), FeeCategory.ENDODONTIC),
    (("D4",), FeeCategory.PERIO),
    (("D60", "D61"), FeeCategory.IMPLANT),
    (("D5", "D62", "D67"), FeeCategory.PROSTHETIC),
    (("D7",), FeeCategory.SURGICAL),
    (("D8",), FeeCategory.ORTHO),
    (("D92",), FeeCategory.OTHER),  # anesthesia / sedation
    (("D9",), FeeCategory.OTHER),
)


def category_from_code(code: str) -> FeeCategory:
    """Map a CDT code to its fee category. Unknown codes degrade to OTHER."""
    normalized = code.strip().upper()
    for prefixes, category in CATEGORY_PREFIX_RULES:
        if normalized.startswith(prefixes):
            return category
    return FeeCategory.OTHER
