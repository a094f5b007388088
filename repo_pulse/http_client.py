"""Pooled async HTTP client shared by the VCS providers."""

import httpx

from repo_pulse.config import get_verify_ssl

_client: httpx.AsyncClient | None = None
_client_verify_ssl: bool | None = None


async def _get_async_http_client() -> httpx.AsyncClient:
    """Return the shared client, rebuilding it after a close or an SSL change."""
    global _client, _client_verify_ssl
    verify_ssl = get_verify_ssl()

    if _client is not None and not _client.is_closed:
        if _client_verify_ssl == verify_ssl:
            return _client
        await _client.aclose()

    _client = httpx.AsyncClient(
        verify=verify_ssl,
        timeout=10,
        follow_redirects=True,
        limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
    )
    _client_verify_ssl = verify_ssl
    return _client


async def close_async_http_client() -> None:
    global _client, _client_verify_ssl
    if _client is not None and not _client.is_closed:
        await _client.aclose()
    _client = None
    _client_verify_ssl = None
