"""
8-K digest schemas for API responses
Field names are snake_case in Python and camelCase on the wire
"""
from typing import List, Union
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class FilingReference(BaseModel):
    """One 8-K document discovered in a company's submission history"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    form: str
    filing_date: str = Field(..., alias="filingDate")
    report_date: str = Field("", alias="reportDate")
    doc_url: str = Field(..., alias="docUrl")


class ExtractedItem(BaseModel):
    """An "Item N.NN" section found in a filing's text"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    code: str
    title_guess: str = Field("", alias="titleGuess")
    label: str
    snippet: str


class FilingSummary(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str
    body: str


class FilingDigest(FilingReference):
    """A filing enriched with its extracted items and rendered summary"""
    items: List[ExtractedItem] = Field(default_factory=list)
    summary: FilingSummary


class SkippedFiling(BaseModel):
    """A filing dropped from the digest (document unavailable or unreadable)"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    doc_url: str = Field(..., alias="docUrl")
    reason: str


class SymbolError(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool = False
    symbol: str
    error: str


class SymbolDigest(BaseModel):
    model_config = ConfigDict(frozen=True)

    ok: bool = True
    symbol: str
    cik: str
    days: int
    count: int
    filings: List[FilingDigest] = Field(default_factory=list)
    # Not part of the response payload
    skipped: List[SkippedFiling] = Field(default_factory=list, exclude=True)


SymbolResult = Union[SymbolDigest, SymbolError]


class DigestResponse(BaseModel):
    """Top-level payload of GET /eightk"""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ok: bool = True
    updated_at: datetime = Field(..., alias="updatedAt")
    results: List[SymbolResult] = Field(default_factory=list)

    def to_payload(self) -> dict:
        """Serialize with camelCase keys and a JavaScript-style ISO timestamp"""
        payload = self.model_dump(by_alias=True)
        payload["updatedAt"] = (
            self.updated_at.isoformat(timespec="milliseconds").replace("+00:00", "Z")
        )
        return payload


class DigestError(BaseModel):
    ok: bool = False
    error: str
