"""
Error taxonomy and provider error normalization.

Provider failures arrive in many shapes (exceptions from the transport,
error payloads from a remote server, plain mappings). ``parse_error``
reduces all of them to a single ``ProviderError(code, message)``.
"""

from collections.abc import Mapping
from typing import Any, NamedTuple

import httpx

UNKNOWN_ERROR = "unknown error"


class FederatedSearchError(Exception):
    """Base class for all federated search errors."""


class ConfigurationError(FederatedSearchError):
    """Raised when the provider set is invalid or empty."""


class ProviderCallError(FederatedSearchError):
    """Raised when a single provider lookup fails."""

    def __init__(self, code: int, message: str):
        super().__init__(message)
        self.code = code
        self.message = message

    def __repr__(self) -> str:
        return f"ProviderCallError(code={self.code!r}, message={self.message!r})"


class ProviderError(NamedTuple):
    """Normalized provider error."""

    code: int
    message: str


def _message_from_response(response: httpx.Response) -> str:
    """Extract a message from an error response body, falling back to the reason phrase."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, Mapping):
        message = body.get("message") or body.get("error")
        if message:
            return str(message)

    return response.reason_phrase or UNKNOWN_ERROR


def parse_error(err: Any) -> ProviderError:
    """
    Normalize an error of any shape into a ProviderError.

    Args:
        err: An exception, an error payload mapping, or None

    Returns:
        ProviderError with an integer code (0 when unknown) and a non-empty message
    """
    if err is None:
        return ProviderError(0, UNKNOWN_ERROR)

    if isinstance(err, ProviderCallError):
        return ProviderError(err.code or 0, err.message or UNKNOWN_ERROR)

    if isinstance(err, httpx.HTTPStatusError):
        return ProviderError(
            err.response.status_code, _message_from_response(err.response)
        )

    if isinstance(err, httpx.TimeoutException):
        return ProviderError(504, "timeout")

    if isinstance(err, Mapping):
        code = err.get("status") or err.get("code") or 0
        try:
            code = int(code)
        except (TypeError, ValueError):
            code = 0
        message = err.get("message") or err.get("error") or err.get("statusText")
        return ProviderError(code, str(message) if message else UNKNOWN_ERROR)

    return ProviderError(0, str(err) or UNKNOWN_ERROR)
