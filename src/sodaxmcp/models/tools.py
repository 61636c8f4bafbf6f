from __future__ import annotations

import re
from datetime import datetime
from enum import StrEnum

from pydantic import BaseModel, Field, field_validator

from sodaxmcp.models.api import (
    ChainConfig,
    IntentDetails,
    IntentHistory,
    MoneyMarketAsset,
    Partner,
    TokenConfig,
    TokenSupply,
    UserPosition,
    VolumeData,
)
from sodaxmcp.models.document import SearchResult, Subsection

# ---------------------------------------------------------------------------
# Output format
# ---------------------------------------------------------------------------


class ResponseFormat(StrEnum):
    MARKDOWN = "markdown"
    JSON = "json"


class ResponseFormatInput(BaseModel):
    response_format: ResponseFormat = ResponseFormat.MARKDOWN


# ---------------------------------------------------------------------------
# Brand Bible tools
# ---------------------------------------------------------------------------


class GetSectionInput(BaseModel):
    section_id: str

    @field_validator("section_id")
    @classmethod
    def validate_section_id(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^\d+$", v):
            raise ValueError(f"section_id must be a section number such as '3', got {v!r}")
        return v


class GetSubsectionInput(BaseModel):
    subsection_id: str

    @field_validator("subsection_id")
    @classmethod
    def validate_subsection_id(cls, v: str) -> str:
        v = v.strip()
        if not re.match(r"^\d+\.\d+$", v):
            raise ValueError(f"subsection_id must be in format X.Y (e.g. '3.1'), got {v!r}")
        return v


class SearchBrandBibleInput(BaseModel):
    query: str = Field(min_length=2, max_length=200)
    limit: int = Field(default=5, ge=1, le=20)


class SectionSummary(BaseModel):
    id: str
    title: str
    subsection_count: int


class BrandOverviewOutput(BaseModel):
    version: str
    last_updated: str
    source: str
    sections: list[SectionSummary]
    summary: str
    fetched_at: datetime


class SectionOutput(BaseModel):
    section_id: str
    title: str
    content: str
    subsections: list[Subsection]
    source: str
    last_updated: str


class SubsectionOutput(BaseModel):
    id: str
    title: str
    content: str
    source: str


class SearchBrandBibleOutput(BaseModel):
    query: str
    results: list[SearchResult]
    total_results: int  # Matches before the limit was applied
    source: str
    last_updated: str


class RefreshOutput(BaseModel):
    status: str = "success"
    message: str = "Brand bible cache refreshed successfully"
    version: str
    last_updated: str
    fetched_at: datetime
    source: str


class SubsectionListing(BaseModel):
    id: str
    title: str


class SectionListing(BaseModel):
    id: str
    title: str
    subsections: list[SubsectionListing]


class ListSubsectionsOutput(BaseModel):
    sections: list[SectionListing]


# ---------------------------------------------------------------------------
# SODAX API tools
# ---------------------------------------------------------------------------


class SwapTokensInput(BaseModel):
    chain_id: int | None = None


class TransactionInput(BaseModel):
    tx_hash: str = Field(min_length=10)


class UserAddressInput(BaseModel):
    user_address: str = Field(min_length=10)


class VolumeInput(BaseModel):
    limit: int = Field(default=20, ge=1, le=100)


class ChainsOutput(BaseModel):
    chains: list[ChainConfig]
    total: int
    source: str


class SwapTokensOutput(BaseModel):
    chain_id: int | None
    tokens: list[TokenConfig]
    total: int
    source: str


class TransactionOutput(BaseModel):
    transaction: IntentDetails
    source: str


class UserTransactionsOutput(BaseModel):
    user_address: str
    history: IntentHistory
    source: str


class VolumeOutput(BaseModel):
    volume: VolumeData
    source: str


class OrderbookOutput(BaseModel):
    entries: list[dict]
    total: int
    source: str


class MoneyMarketAssetsOutput(BaseModel):
    assets: list[MoneyMarketAsset]
    total: int
    source: str


class UserPositionOutput(BaseModel):
    user_address: str
    position: UserPosition
    source: str


class PartnersOutput(BaseModel):
    partners: list[Partner]
    total: int
    source: str


class TokenSupplyOutput(BaseModel):
    supply: TokenSupply
    source: str
