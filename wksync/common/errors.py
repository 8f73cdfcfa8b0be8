"""Exception types raised by the WaniKani client and the config loader."""

from typing import Optional


class ConfigError(ValueError):
    """Invalid configuration file or value."""


class WaniKaniError(Exception):
    """Base exception for all failures talking to WaniKani.

    Carries a stable ``category`` string, the HTTP status if there was a
    response, and whatever detail text the remote side sent back.
    """

    category = "wanikani"

    def __init__(self, detail: str = "", status: Optional[int] = None) -> None:
        self.detail = detail
        self.status = status
        message = f"[{self.category}] {detail}" if detail else f"[{self.category}]"
        if status is not None:
            message += f" (HTTP {status})"
        super().__init__(message)


class InvalidTokenError(WaniKaniError):
    """The API token was rejected (HTTP 401)."""

    category = "invalid_token"


class MissingScopeError(WaniKaniError):
    """The API token lacks a required permission, e.g. study_materials:update (HTTP 403)."""

    category = "missing_scope"


class PayloadRejectedError(WaniKaniError):
    """WaniKani refused the payload during validation (HTTP 422)."""

    category = "payload_rejected"


class RateLimitedError(WaniKaniError):
    """WaniKani answered with HTTP 429 despite the client-side limiter."""

    category = "rate_limited"


class RemoteRequestError(WaniKaniError):
    """Network failure or any other unexpected HTTP status."""

    category = "request_failed"


class ResponseValidationError(WaniKaniError):
    """A response body did not have the expected shape."""

    category = "invalid_response"


# HTTP status -> exception class for the categorized failures
STATUS_ERRORS = {
    401: InvalidTokenError,
    403: MissingScopeError,
    422: PayloadRejectedError,
    429: RateLimitedError,
}


def error_for_status(status: int, detail: str = "") -> WaniKaniError:
    """Build the categorized exception for a failed HTTP status."""
    error_cls = STATUS_ERRORS.get(status, RemoteRequestError)
    return error_cls(detail, status=status)
