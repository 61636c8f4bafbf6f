"""Read-only pass-through client for the SODAX backend API.

Private helpers give uniform error translation: ``_request`` for transport
and HTTP status failures, ``_validated`` for bodies of the wrong shape. Each
public method maps one endpoint onto one response model. No caching, no retries.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

import httpx
import structlog
from pydantic import TypeAdapter, ValidationError

from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.api import (
    ChainConfig,
    IntentDetails,
    IntentHistory,
    MoneyMarketAsset,
    Partner,
    PartnerSummary,
    TokenConfig,
    TokenSupply,
    UserPosition,
    VolumeData,
)

if TYPE_CHECKING:
    from sodaxmcp.config import ApiSettings

log = structlog.get_logger()

T = TypeVar("T")

_CHAINS = TypeAdapter(list[ChainConfig])
_TOKENS = TypeAdapter(list[TokenConfig])
_ASSETS = TypeAdapter(list[MoneyMarketAsset])
_ASSET = TypeAdapter(MoneyMarketAsset)
_PARTNERS = TypeAdapter(list[Partner])
_PARTNER_SUMMARY = TypeAdapter(PartnerSummary)
_INTENT = TypeAdapter(IntentDetails)
_INTENT_HISTORY = TypeAdapter(IntentHistory)
_VOLUME = TypeAdapter(VolumeData)
_ORDERS = TypeAdapter(list[dict])
_POSITION = TypeAdapter(UserPosition)
_SUPPLY = TypeAdapter(TokenSupply)


class SodaxApiClient:
    def __init__(self, client: httpx.AsyncClient, settings: ApiSettings) -> None:
        self._client = client
        self._base_url = settings.base_url.rstrip("/")
        self._timeout = settings.timeout_seconds

    async def _request(self, endpoint: str, params: dict[str, Any] | None = None) -> Any:
        """GET ``endpoint`` and return the decoded JSON body.

        Raises SodaxError: API_NOT_FOUND on 404, API_RATE_LIMITED on 429,
        API_TIMEOUT when the request times out, API_REQUEST_FAILED otherwise.
        """
        url = f"{self._base_url}{endpoint}"
        try:
            response = await self._client.get(
                url,
                params=params,
                headers={"Accept": "application/json"},
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            raise SodaxError(
                code=ErrorCode.API_TIMEOUT,
                message="Request timed out.",
                suggestion="Please try again.",
                recoverable=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise SodaxError(
                code=ErrorCode.API_REQUEST_FAILED,
                message=f"API request failed: {exc}",
                suggestion="The SODAX API may be temporarily unavailable.",
                recoverable=True,
            ) from exc

        if response.status_code == 404:
            raise SodaxError(
                code=ErrorCode.API_NOT_FOUND,
                message=f"Resource not found: {endpoint}",
                suggestion="Check the identifier (hash, address or chain ID) and try again.",
                recoverable=False,
            )
        if response.status_code == 429:
            raise SodaxError(
                code=ErrorCode.API_RATE_LIMITED,
                message="Rate limit exceeded. Please wait before making more requests.",
                suggestion="Wait a moment before calling SODAX API tools again.",
                recoverable=True,
            )
        if not response.is_success:
            raise SodaxError(
                code=ErrorCode.API_REQUEST_FAILED,
                message=f"API request failed: HTTP {response.status_code} for {endpoint}",
                suggestion="The SODAX API may be temporarily unavailable.",
                recoverable=True,
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise SodaxError(
                code=ErrorCode.API_REQUEST_FAILED,
                message=f"API returned a non-JSON body for {endpoint}",
                suggestion="The SODAX API may be temporarily unavailable.",
                recoverable=True,
            ) from exc

        log.info("api_request_complete", endpoint=endpoint, status_code=response.status_code)
        return payload

    async def _validated(
        self,
        adapter: TypeAdapter[T],
        endpoint: str,
        params: dict[str, Any] | None = None,
    ) -> T:
        """GET ``endpoint`` and validate the body against ``adapter``.

        A body of the wrong shape is an upstream failure, reported as
        API_REQUEST_FAILED like any other.
        """
        return self._parse(adapter, endpoint, await self._request(endpoint, params))

    @staticmethod
    def _parse(adapter: TypeAdapter[T], endpoint: str, payload: Any) -> T:
        try:
            return adapter.validate_python(payload)
        except ValidationError as exc:
            log.warning(
                "api_response_invalid", endpoint=endpoint, error_count=exc.error_count()
            )
            raise SodaxError(
                code=ErrorCode.API_REQUEST_FAILED,
                message=f"API returned an unexpected response shape for {endpoint}",
                suggestion="The SODAX API may have changed; try again later.",
                recoverable=True,
            ) from exc

    # ------------------------------------------------------------------
    # Config
    # ------------------------------------------------------------------

    async def get_supported_chains(self) -> list[ChainConfig]:
        return await self._validated(_CHAINS, "/config/spoke/chains")

    async def get_all_chains_configs(self) -> Any:
        return await self._request("/config/spoke/all-chains-configs")

    async def get_swap_tokens(self, chain_id: int | None = None) -> list[TokenConfig]:
        endpoint = (
            "/config/swap/tokens" if chain_id is None else f"/config/swap/{chain_id}/tokens"
        )
        return await self._validated(_TOKENS, endpoint)

    async def get_hub_assets(self, chain_id: int | None = None) -> Any:
        endpoint = "/config/hub/assets" if chain_id is None else f"/config/hub/{chain_id}/assets"
        return await self._request(endpoint)

    async def get_money_market_tokens(self, chain_id: int | None = None) -> Any:
        if chain_id is None:
            return await self._request("/config/money-market/tokens")
        return await self._request(f"/config/money-market/{chain_id}/tokens")

    async def get_money_market_reserve_assets(self) -> Any:
        return await self._request("/config/money-market/reserve-assets")

    # ------------------------------------------------------------------
    # Intents
    # ------------------------------------------------------------------

    async def get_intent_by_tx_hash(self, tx_hash: str) -> IntentDetails:
        return await self._validated(_INTENT, f"/intent/tx/{tx_hash}")

    async def get_intent_by_hash(self, intent_hash: str) -> IntentDetails:
        return await self._validated(_INTENT, f"/intent/{intent_hash}")

    async def get_user_intents(self, user_address: str) -> IntentHistory:
        return await self._validated(_INTENT_HISTORY, f"/intent/user/{user_address}")

    # ------------------------------------------------------------------
    # Solver
    # ------------------------------------------------------------------

    async def get_orderbook(self) -> list[dict]:
        payload = await self._request("/solver/orderbook")
        # Either {"items": [...]} or a bare list
        if isinstance(payload, dict):
            payload = payload.get("items")
        return self._parse(_ORDERS, "/solver/orderbook", payload or [])

    async def get_volume(self, page: int | None = None, limit: int | None = None) -> VolumeData:
        params: dict[str, int] = {}
        if page is not None:
            params["page"] = page
        if limit is not None:
            params["limit"] = limit
        return await self._validated(_VOLUME, "/solver/volume", params)

    # ------------------------------------------------------------------
    # Money market
    # ------------------------------------------------------------------

    async def get_user_money_market_position(self, user_address: str) -> UserPosition:
        return await self._validated(_POSITION, f"/moneymarket/position/{user_address}")

    async def get_all_money_market_assets(self) -> list[MoneyMarketAsset]:
        return await self._validated(_ASSETS, "/moneymarket/asset/all")

    async def get_asset_by_reserve(self, reserve_address: str) -> MoneyMarketAsset:
        return await self._validated(_ASSET, f"/moneymarket/asset/{reserve_address}")

    # ------------------------------------------------------------------
    # Partners
    # ------------------------------------------------------------------

    async def get_partners(self) -> list[Partner]:
        return await self._validated(_PARTNERS, "/partners")

    async def get_partner_summary(self, receiver: str) -> PartnerSummary:
        return await self._validated(_PARTNER_SUMMARY, f"/partners/{receiver}/summary")

    # ------------------------------------------------------------------
    # SODA token
    # ------------------------------------------------------------------

    async def get_total_supply(self) -> str:
        return str(await self._request("/sodax/total_supply"))

    async def get_circulating_supply(self) -> str:
        return str(await self._request("/sodax/circulating_supply"))

    async def get_all_supply_data(self) -> TokenSupply:
        return await self._validated(_SUPPLY, "/sodax/supply")
