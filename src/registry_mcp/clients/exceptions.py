"""Registry client exception types.

Raised by fetch_json() and caught by each component, which turns them into
a result carrying an ``error`` string. Only ToolError is allowed to reach
the protocol boundary.
"""


class RegistryError(Exception):
    """Base exception for all upstream registry errors."""

    pass


class RegistryAPIError(RegistryError):
    """Upstream returned a non-success response (4xx/5xx)."""

    def __init__(self, message: str, status_code: int = 0, response_body: str = ""):
        self.status_code = status_code
        self.response_body = response_body
        super().__init__(message)


class RegistryNotFoundError(RegistryAPIError):
    """Package or resource not found (404)."""

    def __init__(self, message: str, response_body: str = ""):
        super().__init__(message, status_code=404, response_body=response_body)


class RegistryTimeoutError(RegistryError):
    """Request timed out."""

    pass


class ToolError(Exception):
    """Failure surfaced to the caller as an error envelope."""

    pass
