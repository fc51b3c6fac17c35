"""
Endpoint Discovery

Resolves a remote Chrome's debugging WebSocket URL from its HTTP address.

Chrome only answers /json/version when the Host header is an IP or
localhost, and it then reports a WebSocket URL on localhost. That URL is
useless to a caller on another machine, so the loopback host is rewritten
to the address we actually reached the browser on.
"""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import urlsplit, urlunsplit

import httpx

from ..errors import EndpointConnectionError, EndpointDecodeError, MissingFieldError

logger = logging.getLogger("websnap.discovery")

VERSION_PATH = "/json/version"
LOOPBACK_HOSTS = frozenset({"localhost", "127.0.0.1", "::1"})


@dataclass(frozen=True)
class BrowserVersion:
    """Parsed /json/version descriptor."""

    web_socket_debugger_url: str
    endpoint: str
    browser: str = ""
    protocol_version: str = ""
    user_agent: str = ""
    v8_version: str = ""
    webkit_version: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "browser": self.browser,
            "protocol_version": self.protocol_version,
            "user_agent": self.user_agent,
            "v8_version": self.v8_version,
            "webkit_version": self.webkit_version,
            "web_socket_debugger_url": self.web_socket_debugger_url,
            "endpoint": self.endpoint,
        }


def rewrite_loopback(ws_url: str, addr: str) -> str:
    """
    Replace a loopback host segment in ws_url with addr.

    Scheme, path, query and fragment are kept as they are. URLs that do
    not point at a loopback host are returned unchanged.
    """
    parts = urlsplit(ws_url)
    if parts.hostname not in LOOPBACK_HOSTS:
        return ws_url
    return urlunsplit(parts._replace(netloc=addr))


async def fetch_version(
    addr: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0
) -> dict[str, Any]:
    """
    GET http://<addr>/json/version and decode the JSON body.

    Raises:
        EndpointConnectionError: The request failed or returned a non-2xx status
        EndpointDecodeError: The body is not valid JSON
    """
    url = f"http://{addr}{VERSION_PATH}"

    if client is None:
        # Proxy env vars must never hijack traffic to the debugging port.
        async with httpx.AsyncClient(trust_env=False) as own_client:
            return await fetch_version(addr, own_client, timeout)

    try:
        response = await client.get(url, headers={"Host": "localhost"}, timeout=timeout)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        raise EndpointConnectionError(
            f"{url} returned HTTP {e.response.status_code}"
        ) from e
    except httpx.HTTPError as e:
        raise EndpointConnectionError(f"Request to {url} failed: {e}") from e

    try:
        return response.json()
    except ValueError as e:
        raise EndpointDecodeError(f"{url} did not return JSON: {e}") from e


async def resolve_endpoint(
    addr: str, client: httpx.AsyncClient | None = None, timeout: float = 10.0
) -> BrowserVersion:
    """
    Discover the debugging WebSocket URL of the browser listening at addr.

    Args:
        addr: host:port of the browser's remote debugging port
        client: Optional caller-owned httpx client
        timeout: Request timeout in seconds

    Returns:
        BrowserVersion whose endpoint is reachable from this host

    Raises:
        EndpointConnectionError, EndpointDecodeError, MissingFieldError
    """
    payload = await fetch_version(addr, client, timeout)

    if not isinstance(payload, dict):
        raise MissingFieldError(f"Expected a JSON object from {addr}, got {type(payload).__name__}")

    ws_url = payload.get("webSocketDebuggerUrl")
    if not isinstance(ws_url, str):
        raise MissingFieldError(f"webSocketDebuggerUrl missing or not a string in {addr} response")

    parts = urlsplit(ws_url)
    if parts.scheme not in ("ws", "wss") or not parts.netloc:
        raise MissingFieldError(f"webSocketDebuggerUrl is not a WebSocket URL: {ws_url!r}")

    endpoint = rewrite_loopback(ws_url, addr)
    logger.info(f"Resolved debugger endpoint for {addr}: {endpoint}")

    return BrowserVersion(
        web_socket_debugger_url=ws_url,
        endpoint=endpoint,
        browser=str(payload.get("Browser", "")),
        protocol_version=str(payload.get("Protocol-Version", "")),
        user_agent=str(payload.get("User-Agent", "")),
        v8_version=str(payload.get("V8-Version", "")),
        webkit_version=str(payload.get("WebKit-Version", "")),
    )
