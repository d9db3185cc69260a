"""Wire schemas for the accounts API."""

from accounts_client.schemas.account import AccountAttributes, AccountData
from accounts_client.schemas.envelope import (
    DataEnvelope,
    ErrorResponse,
    decode_envelope,
    encode_envelope,
)

__all__ = [
    "AccountAttributes",
    "AccountData",
    "DataEnvelope",
    "ErrorResponse",
    "decode_envelope",
    "encode_envelope",
]
