from .eightk import (
    FilingReference,
    ExtractedItem,
    FilingSummary,
    FilingDigest,
    SkippedFiling,
    SymbolError,
    SymbolDigest,
    SymbolResult,
    DigestResponse,
    DigestError
)

__all__ = [
    # Filing schemas
    "FilingReference",
    "ExtractedItem",
    "FilingSummary",
    "FilingDigest",
    "SkippedFiling",
    # Response schemas
    "SymbolError",
    "SymbolDigest",
    "SymbolResult",
    "DigestResponse",
    "DigestError"
]
