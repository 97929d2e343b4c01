"""HTTP plumbing shared by every upstream client."""

from .exceptions import (
    RegistryAPIError,
    RegistryError,
    RegistryNotFoundError,
    RegistryTimeoutError,
    ToolError,
)
from .fetch import fetch_json
from .http_client import close_http_client, get_http_client

__all__ = [
    "RegistryAPIError",
    "RegistryError",
    "RegistryNotFoundError",
    "RegistryTimeoutError",
    "ToolError",
    "fetch_json",
    "close_http_client",
    "get_http_client",
]
