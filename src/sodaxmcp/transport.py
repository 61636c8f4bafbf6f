"""Streamable HTTP transport and request gatekeeping for the MCP server.

The server is meant to run publicly (bound to 0.0.0.0 by default), so which
browser origins may call it is configuration, not a hardcoded localhost rule.
Rejections are answered with a small JSON body before the request reaches the
MCP app.
"""

from __future__ import annotations

import asyncio
import re
import secrets
from fnmatch import fnmatchcase
from typing import TYPE_CHECKING

import structlog
import uvicorn
from starlette.datastructures import Headers
from starlette.responses import JSONResponse

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Iterable

    from mcp.server.fastmcp import FastMCP
    from starlette.types import ASGIApp, Receive, Scope, Send

    from sodaxmcp.config import Settings

log = structlog.get_logger()

SUPPORTED_PROTOCOL_VERSIONS: frozenset[str] = frozenset(
    {"2025-11-25", "2025-06-18", "2025-03-26"}
)
# Served without a bearer key for load balancers and uptime checks
PUBLIC_PATHS: frozenset[str] = frozenset({"/health", "/api"})
_LOOPBACK_ORIGIN = re.compile(r"^https?://(localhost|127\.0\.0\.1|\[::1\])(:\d+)?$")


class OriginPolicy:
    """Decides which browser ``Origin`` headers may reach the server.

    Requests without an Origin (CLI tools, server-side MCP clients) and
    loopback origins are always accepted. Any other origin must match one of
    the ``allowed`` shell-style patterns, e.g. ``https://app.sodax.com`` or
    ``https://*.sodax.com``; the pattern ``*`` accepts every origin.
    """

    def __init__(self, allowed: Iterable[str]) -> None:
        self.allowed = tuple(pattern.rstrip("/") for pattern in allowed)

    @property
    def allows_any(self) -> bool:
        return "*" in self.allowed

    def allows(self, origin: str) -> bool:
        if not origin or _LOOPBACK_ORIGIN.match(origin):
            return True
        return any(fnmatchcase(origin, pattern) for pattern in self.allowed)


class MCPSecurityMiddleware:
    """Pure ASGI middleware that gatekeeps HTTP requests.

    Checks, in order:
    1. Bearer key, when ``auth_key`` is set. Skipped for PUBLIC_PATHS.
    2. Origin against the configured OriginPolicy (DNS rebinding and
       unwanted browser callers).
    3. MCP-Protocol-Version, when the client sends one.

    Implemented as pure ASGI (not BaseHTTPMiddleware) so that SSE streaming
    responses are never buffered by the middleware layer.
    """

    def __init__(
        self,
        app: ASGIApp,
        *,
        auth_key: str | None = None,
        origins: OriginPolicy | None = None,
    ) -> None:
        self.app = app
        self.auth_key = auth_key
        self.origins = origins or OriginPolicy(())

    def _rejection(self, scope: Scope) -> JSONResponse | None:
        headers = Headers(scope=scope)
        path = scope.get("path", "")

        if self.auth_key is not None and path not in PUBLIC_PATHS:
            authorization = headers.get("authorization", "")
            scheme, _, key = authorization.partition(" ")
            valid = secrets.compare_digest(key.encode(), self.auth_key.encode())
            if scheme != "Bearer" or not valid:
                return _error(
                    401,
                    "unauthorized",
                    "Missing or invalid bearer key.",
                    headers={"WWW-Authenticate": "Bearer"},
                )

        origin = headers.get("origin", "")
        if not self.origins.allows(origin):
            log.warning("http_origin_rejected", origin=origin, path=path)
            return _error(403, "forbidden_origin", f"Origin not allowed: {origin}")

        proto_version = headers.get("mcp-protocol-version", "")
        if proto_version and proto_version not in SUPPORTED_PROTOCOL_VERSIONS:
            return _error(
                400,
                "unsupported_protocol_version",
                f"Unsupported protocol version: {proto_version}",
            )
        return None

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] == "http":
            rejection = self._rejection(scope)
            if rejection is not None:
                await rejection(scope, receive, send)
                return
        await self.app(scope, receive, send)


def _error(
    status_code: int, error: str, message: str, headers: dict[str, str] | None = None
) -> JSONResponse:
    return JSONResponse(
        {"error": error, "message": message}, status_code=status_code, headers=headers
    )


def build_http_app(mcp: FastMCP, settings: Settings) -> ASGIApp:
    """Wrap the FastMCP streamable HTTP app in MCPSecurityMiddleware."""
    http_log = log.bind(transport="http")
    server = settings.server

    auth_key: str | None = None
    if server.auth_enabled:
        auth_key = server.auth_key or secrets.token_urlsafe(32)
        if not server.auth_key:
            http_log.warning("http_auth_key_auto_generated", auth_key=auth_key)
    else:
        http_log.warning("http_auth_disabled")

    origins = OriginPolicy(server.allowed_origins)
    if origins.allows_any:
        http_log.warning("http_any_origin_allowed")

    return MCPSecurityMiddleware(mcp.streamable_http_app(), auth_key=auth_key, origins=origins)


async def _serve(server: uvicorn.Server, on_shutdown: Callable[[], Awaitable[None]] | None) -> None:
    try:
        await server.serve()
    finally:
        if on_shutdown is not None:
            await on_shutdown()


def run_http_server(
    mcp: FastMCP,
    settings: Settings,
    on_shutdown: Callable[[], Awaitable[None]] | None = None,
) -> None:
    """Serve MCP over Streamable HTTP until interrupted.

    ``on_shutdown`` runs on the server's event loop after uvicorn stops, so
    async resources shared across sessions can be closed where they were used.
    """
    host, port = settings.server.host, settings.server.port
    config = uvicorn.Config(
        build_http_app(mcp, settings),
        host=host,
        port=port,
        log_config=None,  # Disable uvicorn's default logging; structlog handles it
    )

    log.info(
        "http_server_listening",
        transport="http",
        mcp_endpoint=f"http://{host}:{port}/mcp",
        health_endpoint=f"http://{host}:{port}/health",
        allowed_origins=list(settings.server.allowed_origins),
    )
    asyncio.run(_serve(uvicorn.Server(config), on_shutdown))
