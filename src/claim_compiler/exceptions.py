"""Exception hierarchy for claim-compiler.

The engine itself reports every documentation gap as data; these exceptions
only surface at the boundary (snapshot loading, payer-tier lookup).
"""


class ClaimCompilerError(Exception):
    """Base exception for all claim-compiler errors."""


class SnapshotError(ClaimCompilerError):
    """Raised when a visit snapshot cannot be read or fails validation."""

    def __init__(self, message: str, source: str = "") -> None:
        super().__init__(message)
        self.source = source


class UnknownPayerTierError(ClaimCompilerError, KeyError):
    """Raised when a payer tier has no policy profile."""

    def __init__(self, tier: object) -> None:
        super().__init__(f"Unknown payer tier: {tier!r}")
        self.tier = tier

    def __str__(self) -> str:
        return self.args[0]
