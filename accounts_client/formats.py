"""Field formats and validation messages for account attributes.

Messages follow the wording the accounts API uses for the same failures, so a
locally rejected submission reads like the server's own response.
"""

import enum
import re

FORMAT_BIC = r"^([A-Z]{6}[A-Z0-9]{2}|[A-Z]{6}[A-Z0-9]{5})$"
FORMAT_BANK_ID = r"^[A-Z0-9]{0,16}$"
FORMAT_BANK_ID_CODE = r"^[A-Z]{0,16}$"
FORMAT_ACCOUNT_NUMBER = r"^[A-Z0-9]{0,64}$"
FORMAT_IBAN = r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{0,64}$"

# Compiled once; always applied with fullmatch.
BIC_PATTERN = re.compile(FORMAT_BIC)
BANK_ID_PATTERN = re.compile(FORMAT_BANK_ID)
BANK_ID_CODE_PATTERN = re.compile(FORMAT_BANK_ID_CODE)
ACCOUNT_NUMBER_PATTERN = re.compile(FORMAT_ACCOUNT_NUMBER)
IBAN_PATTERN = re.compile(FORMAT_IBAN)

NAME_MIN_ITEMS = 1
NAME_MAX_ITEMS = 4
ALTERNATIVE_NAMES_MAX_ITEMS = 3


class ValidationCode(enum.StrEnum):
    name_length = "NameLength"
    name_empty = "NameEmpty"
    country_missing = "CountryMissing"
    bic_format = "BicFormat"
    bank_id_format = "BankIdFormat"
    bank_id_code_format = "BankIdCodeFormat"
    account_number_format = "AccountNumberFormat"
    iban_format = "IbanFormat"
    alternative_names_length = "AlternativeNamesLength"
    alternative_names_empty = "AlternativeNamesEmpty"


def _should_match(field: str, pattern: str) -> str:
    return f"{field} in body should match '{pattern}'"


VALIDATION_MESSAGES: dict[ValidationCode, str] = {
    ValidationCode.name_length: (
        f"name in body should have at least {NAME_MIN_ITEMS} "
        f"and at most {NAME_MAX_ITEMS} items"
    ),
    ValidationCode.name_empty: "name items in body should be at least 1 chars long",
    ValidationCode.country_missing: "country in body is required",
    ValidationCode.bic_format: _should_match("bic", FORMAT_BIC),
    ValidationCode.bank_id_format: _should_match("bank_id", FORMAT_BANK_ID),
    ValidationCode.bank_id_code_format: _should_match("bank_id_code", FORMAT_BANK_ID_CODE),
    ValidationCode.account_number_format: _should_match("account_number", FORMAT_ACCOUNT_NUMBER),
    ValidationCode.iban_format: _should_match("iban", FORMAT_IBAN),
    ValidationCode.alternative_names_length: (
        f"alternative_names in body should have at most {ALTERNATIVE_NAMES_MAX_ITEMS} items"
    ),
    ValidationCode.alternative_names_empty: (
        "alternative_names items in body should be at least 1 chars long"
    ),
}
