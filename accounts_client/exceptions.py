"""Exception hierarchy for the accounts client."""

from __future__ import annotations

from typing import TYPE_CHECKING

import httpx

if TYPE_CHECKING:
    from accounts_client.formats import ValidationCode


class AccountsClientError(Exception):
    """Base exception for all accounts client errors."""


class AttributeValidationError(AccountsClientError, ValueError):
    """Raised before any I/O when account attributes are rejected locally."""

    def __init__(self, code: ValidationCode, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class TransportError(AccountsClientError):
    """Raised when the HTTP layer fails to deliver a request.

    The originating ``httpx`` exception is kept as ``__cause__``.
    """

    def __init__(self, operation: str, reason: str) -> None:
        super().__init__(f"{operation}: {reason}")
        self.operation = operation
        self.reason = reason

    @classmethod
    def from_httpx(cls, operation: str, exc: httpx.TransportError) -> TransportError:
        if isinstance(exc, httpx.UnsupportedProtocol):
            scheme = exc.request.url.scheme if _has_request(exc) else ""
            return cls(operation, f'unsupported protocol scheme "{scheme}"')
        return cls(operation, str(exc) or type(exc).__name__)


def _has_request(exc: httpx.TransportError) -> bool:
    try:
        exc.request
    except RuntimeError:
        return False
    return True


class ContextError(AccountsClientError):
    """Raised when an operation's cancellation token is done."""

    reason = "context done"

    def __init__(self, operation: str = "") -> None:
        message = f"{operation}: {self.reason}" if operation else self.reason
        super().__init__(message)
        self.operation = operation


class ContextCanceledError(ContextError):
    """The token was canceled before the operation finished."""

    reason = "context canceled"


class DeadlineExceededError(ContextError, TimeoutError):
    """The token's deadline passed before the operation finished."""

    reason = "context deadline exceeded"


class ApiError(AccountsClientError):
    """Raised when the API answers with an unexpected status code.

    ``str(exc)`` is the server's ``error_message`` verbatim when it sent one.
    """

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
