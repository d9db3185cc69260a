"""Typed enumerations used by account schemas."""

from accounts_client.models.account import (
    ACCOUNT_RESOURCE_TYPE,
    AccountClassification,
    AccountStatus,
)
from accounts_client.models.iso import Country, Currency

__all__ = [
    "ACCOUNT_RESOURCE_TYPE",
    "AccountClassification",
    "AccountStatus",
    "Country",
    "Currency",
]
