"""Tool handlers for the SODAX backend API pass-through tools.

Each handler validates its input, makes exactly one API call through the
shared SodaxApiClient, and returns a structured dict. API failures surface
as SodaxError from the client. No MCP or FastMCP imports — server.py
handles the MCP wiring.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import structlog

from sodaxmcp.errors import ErrorCode, SodaxError
from sodaxmcp.models.tools import (
    ChainsOutput,
    MoneyMarketAssetsOutput,
    OrderbookOutput,
    PartnersOutput,
    SwapTokensInput,
    SwapTokensOutput,
    TokenSupplyOutput,
    TransactionInput,
    TransactionOutput,
    UserAddressInput,
    UserPositionOutput,
    UserTransactionsOutput,
    VolumeInput,
    VolumeOutput,
)

if TYPE_CHECKING:
    from sodaxmcp.api_client import SodaxApiClient
    from sodaxmcp.state import AppState


def _client(state: AppState) -> SodaxApiClient:
    if state.api_client is None:
        raise RuntimeError("SODAX API client not initialized")
    return state.api_client


def _invalid_input(exc: ValueError, suggestion: str) -> SodaxError:
    return SodaxError(
        code=ErrorCode.INVALID_INPUT,
        message=str(exc),
        suggestion=suggestion,
        recoverable=False,
    )


async def handle_supported_chains(state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_supported_chains")
    chains = await _client(state).get_supported_chains()
    output = ChainsOutput(chains=chains, total=len(chains), source=state.settings.api.docs_url)
    return output.model_dump(mode="json")


async def handle_swap_tokens(chain_id: int | None, state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_swap_tokens", chain_id=chain_id)
    try:
        validated = SwapTokensInput(chain_id=chain_id)
    except ValueError as exc:
        raise _invalid_input(exc, "Provide an integer chain ID or omit it.") from exc

    tokens = await _client(state).get_swap_tokens(validated.chain_id)
    output = SwapTokensOutput(
        chain_id=validated.chain_id,
        tokens=tokens,
        total=len(tokens),
        source=state.settings.api.docs_url,
    )
    return output.model_dump(mode="json")


async def handle_transaction(tx_hash: str, state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_transaction", tx_hash=tx_hash)
    try:
        validated = TransactionInput(tx_hash=tx_hash)
    except ValueError as exc:
        raise _invalid_input(exc, "Provide a full transaction hash (at least 10 chars).") from exc

    intent = await _client(state).get_intent_by_tx_hash(validated.tx_hash)
    output = TransactionOutput(transaction=intent, source=state.settings.api.docs_url)
    return output.model_dump(mode="json")


async def handle_user_transactions(user_address: str, state: AppState) -> dict:
    structlog.get_logger().info(
        "handler_called", tool="sodax_get_user_transactions", user_address=user_address
    )
    try:
        validated = UserAddressInput(user_address=user_address)
    except ValueError as exc:
        raise _invalid_input(exc, "Provide a full wallet address (at least 10 chars).") from exc

    history = await _client(state).get_user_intents(validated.user_address)
    output = UserTransactionsOutput(
        user_address=validated.user_address,
        history=history,
        source=state.settings.api.docs_url,
    )
    return output.model_dump(mode="json")


async def handle_volume(limit: int, state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_volume", limit=limit)
    try:
        validated = VolumeInput(limit=limit)
    except ValueError as exc:
        raise _invalid_input(exc, "Provide a limit between 1 and 100.") from exc

    volume = await _client(state).get_volume(page=1, limit=validated.limit)
    output = VolumeOutput(volume=volume, source=state.settings.api.docs_url)
    return output.model_dump(mode="json")


async def handle_orderbook(state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_orderbook")
    entries = await _client(state).get_orderbook()
    output = OrderbookOutput(
        entries=entries, total=len(entries), source=state.settings.api.docs_url
    )
    return output.model_dump(mode="json")


async def handle_money_market_assets(state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_money_market_assets")
    assets = await _client(state).get_all_money_market_assets()
    output = MoneyMarketAssetsOutput(
        assets=assets, total=len(assets), source=state.settings.api.docs_url
    )
    return output.model_dump(mode="json")


async def handle_user_position(user_address: str, state: AppState) -> dict:
    structlog.get_logger().info(
        "handler_called", tool="sodax_get_user_position", user_address=user_address
    )
    try:
        validated = UserAddressInput(user_address=user_address)
    except ValueError as exc:
        raise _invalid_input(exc, "Provide a full wallet address (at least 10 chars).") from exc

    position = await _client(state).get_user_money_market_position(validated.user_address)
    output = UserPositionOutput(
        user_address=validated.user_address,
        position=position,
        source=state.settings.api.docs_url,
    )
    return output.model_dump(mode="json")


async def handle_partners(state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_partners")
    partners = await _client(state).get_partners()
    output = PartnersOutput(
        partners=partners, total=len(partners), source=state.settings.api.docs_url
    )
    return output.model_dump(mode="json")


async def handle_token_supply(state: AppState) -> dict:
    structlog.get_logger().info("handler_called", tool="sodax_get_token_supply")
    supply = await _client(state).get_all_supply_data()
    output = TokenSupplyOutput(supply=supply, source=state.settings.api.docs_url)
    return output.model_dump(mode="json")
