"""Decoding of accounts API responses."""

from pydantic import ValidationError

from accounts_client.exceptions import ApiError
from accounts_client.schemas.envelope import DataT, ErrorResponse, decode_envelope


def _error_message(status_code: int, body: bytes) -> str:
    try:
        return ErrorResponse.model_validate_json(body).error_message
    except ValidationError:
        return f"unknown error, status code: {status_code}"


def expect_status(status_code: int, body: bytes, expected_status: int) -> None:
    """Raise :class:`ApiError` unless the response has ``expected_status``.

    The error carries the server's ``error_message`` verbatim when the body is
    an error envelope, and a generic message otherwise.
    """
    if status_code != expected_status:
        raise ApiError(status_code, _error_message(status_code, body))


def decode_response(
    status_code: int,
    body: bytes,
    expected_status: int,
    result_type: type[DataT],
) -> DataT:
    """Check the status code, then decode the ``data`` envelope into ``result_type``."""
    expect_status(status_code, body, expected_status)
    return decode_envelope(body, result_type)
