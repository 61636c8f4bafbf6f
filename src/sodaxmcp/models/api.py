"""Response shapes for the SODAX backend API.

The API is passed through, not parsed: every model keeps unknown fields
(``extra="allow"``) and only names the fields the tools read.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _ApiModel(BaseModel):
    model_config = ConfigDict(extra="allow")


class ChainConfig(_ApiModel):
    chainId: int | str | None = None
    name: str | None = None


class TokenConfig(_ApiModel):
    symbol: str | None = None
    address: str | None = None
    decimals: int | None = None
    chainId: int | str | None = None


class IntentDetails(_ApiModel):
    intentHash: str | None = None
    status: str | None = None
    sourceChainId: int | str | None = None
    destinationChainId: int | str | None = None


class IntentHistory(_ApiModel):
    intents: list[IntentDetails] = []
    total: int | None = None


class VolumeData(_ApiModel):
    items: list[dict] = []
    total: int | None = None


class UserPosition(_ApiModel):
    userAddress: str | None = None
    positions: list[dict] = []


class MoneyMarketAsset(_ApiModel):
    reserveAddress: str | None = None
    symbol: str | None = None


class Partner(_ApiModel):
    name: str | None = None
    receiver: str | None = None


class PartnerSummary(_ApiModel):
    receiver: str | None = None
    totalVolume: float | None = None


class TokenSupply(_ApiModel):
    totalSupply: str | int | float | None = None
    circulatingSupply: str | int | float | None = None
