"""HTTP client for the organisation accounts resource."""

from accounts_client.rest.client import (
    ACCOUNTS_PATH,
    DEFAULT_TIMEOUT,
    MAX_VERSION,
    MEDIA_TYPE,
    AccountsApiClient,
    new_client,
)
from accounts_client.rest.response import decode_response, expect_status

__all__ = [
    "ACCOUNTS_PATH",
    "DEFAULT_TIMEOUT",
    "MAX_VERSION",
    "MEDIA_TYPE",
    "AccountsApiClient",
    "decode_response",
    "expect_status",
    "new_client",
]
