"""Typed failures raised by the API client and the flows.

Every error carries a short message suitable for showing to the user as-is;
`str(err)` returns it. Parser diagnostics and raw payloads never end up here,
they go to the debug log.
"""
from __future__ import annotations


class ApiError(Exception):
    """Base class for every failure the client layer reports."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class ValidationError(ApiError):
    """Caller input is insufficient; nothing was sent."""


class NetworkError(ApiError):
    """No connectivity, or the transport failed (DNS, refused, timeout)."""

    def __init__(self, message: str, cause: BaseException | None = None) -> None:
        super().__init__(message)
        self.cause = cause


class ServerError(ApiError):
    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code

    def __repr__(self) -> str:
        return f"ServerError(status_code={self.status_code}, message={self.message!r})"


class EmptyResponseError(ApiError):
    """A body was required but the server sent none."""


class DecodeError(ApiError):
    """The body did not parse into the expected shape."""


class MalformedResponseError(DecodeError):
    """Valid JSON, but a required field is missing or has the wrong type."""


class EncodingError(ApiError):
    """The request body could not be built, e.g. the source file is unreadable."""


class FlowTimeoutError(ApiError):
    """The client-side watchdog expired before the flow finished."""


class EmptyResultError(ApiError):
    """The server answered correctly but with nothing usable."""
