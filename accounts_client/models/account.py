"""Account enumerations."""

import enum

ACCOUNT_RESOURCE_TYPE = "accounts"


class AccountStatus(enum.StrEnum):
    pending = "pending"
    confirmed = "confirmed"
    failed = "failed"


class AccountClassification(enum.StrEnum):
    # Capitalised on the wire, unlike status
    personal = "Personal"
    business = "Business"
