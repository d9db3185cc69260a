"""Async client library for the organisation accounts REST API."""

from accounts_client.context import Context
from accounts_client.exceptions import (
    AccountsClientError,
    ApiError,
    AttributeValidationError,
    ContextCanceledError,
    ContextError,
    DeadlineExceededError,
    TransportError,
)
from accounts_client.formats import ValidationCode
from accounts_client.models import AccountClassification, AccountStatus, Country, Currency
from accounts_client.rest import AccountsApiClient, new_client
from accounts_client.schemas import AccountAttributes, AccountData
from accounts_client.validation import is_valid, validate_attributes

__all__ = [
    "AccountAttributes",
    "AccountClassification",
    "AccountData",
    "AccountStatus",
    "AccountsApiClient",
    "AccountsClientError",
    "ApiError",
    "AttributeValidationError",
    "Context",
    "ContextCanceledError",
    "ContextError",
    "Country",
    "Currency",
    "DeadlineExceededError",
    "TransportError",
    "ValidationCode",
    "is_valid",
    "new_client",
    "validate_attributes",
]
