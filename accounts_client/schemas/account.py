"""Pydantic schemas for account resources."""

from typing import Any
from uuid import UUID

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    SerializerFunctionWrapHandler,
    field_validator,
    model_serializer,
)

from accounts_client.models.account import (
    ACCOUNT_RESOURCE_TYPE,
    AccountClassification,
    AccountStatus,
)
from accounts_client.models.iso import Country, Currency

# Strings and lists whose empty value means "absent" on the wire.
_EMPTY_MEANS_ABSENT = frozenset(
    {
        "account_number",
        "alternative_names",
        "bank_id",
        "bank_id_code",
        "bic",
        "iban",
        "name",
        "secondary_identification",
    }
)


class AccountAttributes(BaseModel):
    """Attributes of an account resource.

    Every field is optional on the wire. Booleans and enums use ``None`` for
    "absent", so a present ``False`` survives encoding; strings and lists use
    their empty value for "absent". Run :func:`validate_attributes` to apply
    the API's constraints locally.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    account_classification: AccountClassification | None = None
    account_matching_opt_out: bool | None = None
    account_number: str = ""
    alternative_names: tuple[str, ...] = ()
    bank_id: str = ""
    bank_id_code: str = ""
    base_currency: Currency | None = None  # type: ignore[valid-type]
    bic: str = ""
    country: Country | None = None  # type: ignore[valid-type]
    iban: str = ""
    joint_account: bool | None = None
    name: tuple[str, ...] = ()
    secondary_identification: str = ""
    status: AccountStatus | None = None
    switched: bool | None = None

    @field_validator("country", mode="before")
    @classmethod
    def lookup_country(cls, v: Any) -> Any:
        """Resolve ISO alpha-2 codes; unrecognised codes become ``Country.UNKNOWN``."""
        if isinstance(v, str):
            return Country(v)
        return v

    @field_validator("base_currency", mode="before")
    @classmethod
    def lookup_currency(cls, v: Any) -> Any:
        """Resolve ISO alpha-3 codes; unrecognised codes become ``Currency.UNKNOWN``."""
        if isinstance(v, str):
            return Currency(v)
        return v

    @field_validator("name", "alternative_names", mode="before")
    @classmethod
    def null_list_is_empty(cls, v: Any) -> Any:
        return () if v is None else v

    @model_serializer(mode="wrap")
    def omit_absent(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        payload = handler(self)
        return {
            key: value
            for key, value in payload.items()
            if value is not None and not (key in _EMPTY_MEANS_ABSENT and not value)
        }


class AccountData(BaseModel):
    """An account resource as carried inside the ``data`` envelope."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: UUID
    organisation_id: UUID
    type: str = ACCOUNT_RESOURCE_TYPE
    version: int | None = Field(default=None, ge=0)
    attributes: AccountAttributes = Field(default_factory=AccountAttributes)

    @model_serializer(mode="wrap")
    def omit_missing_version(self, handler: SerializerFunctionWrapHandler) -> dict[str, Any]:
        payload = handler(self)
        if payload.get("version") is None:
            payload.pop("version", None)
        return payload
