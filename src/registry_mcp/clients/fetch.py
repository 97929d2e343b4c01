"""Single-attempt JSON fetch for upstream registry APIs.

Every call carries an explicit timeout and is tried exactly once. httpx
failures are translated into the registry exception hierarchy so callers
deal with one set of error types.
"""

import logging
from typing import Any, Mapping, Optional

import httpx

from .exceptions import (
    RegistryAPIError,
    RegistryError,
    RegistryNotFoundError,
    RegistryTimeoutError,
)
from .http_client import get_http_client

logger = logging.getLogger(__name__)


def _status_text(response: httpx.Response) -> str:
    """Reason phrase for a response, falling back to the numeric status."""
    return (
        response.reason_phrase
        or httpx.codes.get_reason_phrase(response.status_code)
        or f"HTTP {response.status_code}"
    )


async def fetch_json(
    url: str,
    *,
    timeout: float,
    params: Optional[Mapping[str, Any]] = None,
    label: str = "Request",
) -> Any:
    """GET ``url`` and return the decoded JSON body.

    Args:
        url: Absolute URL.
        timeout: Seconds before the request is abandoned.
        params: Query parameters, URL-encoded by httpx.
        label: Prefix used in error messages, e.g. "npm search".

    Raises:
        RegistryNotFoundError: On HTTP 404.
        RegistryAPIError: On any other non-2xx status.
        RegistryTimeoutError: When the timeout expires.
        RegistryError: On other transport failures or an undecodable body.
    """
    client = get_http_client()
    logger.debug(f"GET {url} params={dict(params or {})}")

    try:
        response = await client.get(url, params=params, timeout=timeout)
    except httpx.TimeoutException as exc:
        raise RegistryTimeoutError(
            f"{label} timed out after {timeout:g} seconds"
        ) from exc
    except httpx.HTTPError as exc:
        raise RegistryError(
            f"{label} failed: {type(exc).__name__}: {exc}"
        ) from exc

    if response.status_code == 404:
        raise RegistryNotFoundError(
            f"{label} failed: {_status_text(response)}",
            response_body=response.text[:500],
        )
    if not response.is_success:
        raise RegistryAPIError(
            f"{label} failed: {_status_text(response)}",
            status_code=response.status_code,
            response_body=response.text[:500],
        )

    try:
        return response.json()
    except ValueError as exc:
        raise RegistryError(f"{label} returned invalid JSON") from exc
