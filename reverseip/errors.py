"""Exception hierarchy for Reverse IP/DNS API calls.

Every error raised by the client derives from :class:`ReverseIPError` and
carries the :class:`~reverseip.models.Response` captured before the
failure, when there is one, so the received bytes stay inspectable.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .models import Response


class ReverseIPError(Exception):
    """Base class for all client errors."""

    def __init__(self, message: str, response: Response | None = None):
        super().__init__(message)
        self.response = response


class ArgumentError(ReverseIPError):
    """A call argument was rejected before any request was made."""

    def __init__(self, name: str, reason: str):
        super().__init__(f'invalid argument: "{name}" {reason}')
        self.name = name
        self.reason = reason


class TransportError(ReverseIPError):
    """The HTTP exchange itself failed (connection, timeout, broken body)."""


class CancelledError(TransportError):
    """The call's context was cancelled."""

    def __init__(self, message: str = "context canceled", response: Response | None = None):
        super().__init__(message, response)


class DeadlineExceededError(CancelledError):
    """The call's context deadline passed."""

    def __init__(
        self, message: str = "context deadline exceeded", response: Response | None = None
    ):
        super().__init__(message, response)


class ReadError(TransportError):
    """The response body could not be read to completion."""

    def __init__(self, reason: str, response: Response | None = None):
        super().__init__(f"cannot read response: {reason}", response)
        self.reason = reason


class StatusError(ReverseIPError):
    """The service answered with a status code outside 2xx."""

    def __init__(self, status_code: int, response: Response | None = None):
        super().__init__(f"API failed with status code: {status_code}", response)
        self.status_code = status_code


class ParseError(ReverseIPError):
    """The response body is not a decodable API envelope."""

    def __init__(self, reason: str, response: Response | None = None):
        super().__init__(f"cannot parse response: {reason}", response)
        self.reason = reason


class APIError(ReverseIPError):
    """The service reported an error in the response payload."""

    def __init__(self, code: int, message: str, response: Response | None = None):
        super().__init__(f"API error: [{code}] {message}", response)
        self.code = code
        self.message = message
