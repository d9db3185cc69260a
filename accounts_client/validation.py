"""Local validation of account attributes."""

import re

from accounts_client.exceptions import AttributeValidationError
from accounts_client.formats import (
    ACCOUNT_NUMBER_PATTERN,
    ALTERNATIVE_NAMES_MAX_ITEMS,
    BANK_ID_CODE_PATTERN,
    BANK_ID_PATTERN,
    BIC_PATTERN,
    IBAN_PATTERN,
    NAME_MAX_ITEMS,
    NAME_MIN_ITEMS,
    VALIDATION_MESSAGES,
    ValidationCode,
)
from accounts_client.schemas.account import AccountAttributes

# Checked in this order after the name and country rules.
_FORMAT_RULES: tuple[tuple[str, re.Pattern[str], ValidationCode], ...] = (
    ("bic", BIC_PATTERN, ValidationCode.bic_format),
    ("bank_id", BANK_ID_PATTERN, ValidationCode.bank_id_format),
    ("bank_id_code", BANK_ID_CODE_PATTERN, ValidationCode.bank_id_code_format),
    ("account_number", ACCOUNT_NUMBER_PATTERN, ValidationCode.account_number_format),
    ("iban", IBAN_PATTERN, ValidationCode.iban_format),
)


def _fail(code: ValidationCode) -> AttributeValidationError:
    return AttributeValidationError(code, VALIDATION_MESSAGES[code])


def validate_attributes(attributes: AccountAttributes) -> None:
    """Check ``attributes`` against the constraints the accounts API enforces.

    Rules are evaluated in a fixed order and the first failure is raised as
    :class:`AttributeValidationError`:

    1. ``name`` has between 1 and 4 items.
    2. No ``name`` item is empty.
    3. ``country`` is set.
    4. ``bic``, ``bank_id``, ``bank_id_code``, ``account_number`` and ``iban``
       match their formats, when non-empty.
    5. ``alternative_names`` has at most 3 items.
    6. No ``alternative_names`` item is empty.
    """
    if not NAME_MIN_ITEMS <= len(attributes.name) <= NAME_MAX_ITEMS:
        raise _fail(ValidationCode.name_length)

    if any(not item for item in attributes.name):
        raise _fail(ValidationCode.name_empty)

    if attributes.country is None:
        raise _fail(ValidationCode.country_missing)

    for field, pattern, code in _FORMAT_RULES:
        value: str = getattr(attributes, field)
        if value and pattern.fullmatch(value) is None:
            raise _fail(code)

    if len(attributes.alternative_names) > ALTERNATIVE_NAMES_MAX_ITEMS:
        raise _fail(ValidationCode.alternative_names_length)

    if any(not item for item in attributes.alternative_names):
        raise _fail(ValidationCode.alternative_names_empty)


def is_valid(attributes: AccountAttributes) -> bool:
    """Return whether ``attributes`` passes :func:`validate_attributes`."""
    try:
        validate_attributes(attributes)
    except AttributeValidationError:
        return False
    return True
