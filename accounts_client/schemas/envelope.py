"""The ``{"data": ...}`` envelope used by request and response bodies."""

from typing import Generic, TypeVar

from pydantic import BaseModel

DataT = TypeVar("DataT", bound=BaseModel)


class DataEnvelope(BaseModel, Generic[DataT]):
    """Success envelope wrapping a single resource."""

    data: DataT


class ErrorResponse(BaseModel):
    """Error envelope returned alongside unexpected status codes."""

    error_message: str


def encode_envelope(resource: BaseModel) -> bytes:
    """Serialize ``resource`` inside a data envelope, as JSON bytes."""
    return DataEnvelope[type(resource)](data=resource).model_dump_json().encode("utf-8")


def decode_envelope(body: bytes | str, resource_type: type[DataT]) -> DataT:
    """Parse a data envelope and return the resource it carries.

    Raises ``pydantic.ValidationError`` for malformed JSON or a body that does
    not match ``resource_type``.
    """
    return DataEnvelope[resource_type].model_validate_json(body).data
