"""Shared HTTP client with connection pooling."""

import logging
from typing import Optional

import httpx

from ..config import get_settings

logger = logging.getLogger(__name__)

_client: Optional[httpx.AsyncClient] = None


def get_http_client() -> httpx.AsyncClient:
    """Return the process-wide AsyncClient, creating it on first use.

    Per-request timeouts are always passed explicitly by callers; the client
    default only applies to requests that forget to.
    """
    global _client
    if _client is None or _client.is_closed:
        settings = get_settings()
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.http_timeout),
            follow_redirects=True,
            headers={
                "Accept": "application/json",
                "User-Agent": settings.get_user_agent(),
            },
        )
        logger.debug("Created shared HTTP client")
    return _client


async def close_http_client():
    """Close the shared client if one was created."""
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        logger.debug("Closed shared HTTP client")
    _client = None
