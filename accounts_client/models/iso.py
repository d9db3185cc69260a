"""ISO 3166 country and ISO 4217 currency enumerations.

Both enumerations are generated from the ``pycountry`` tables and carry an
``UNKNOWN`` member (value ``""``). Lookups accept a code in any case or an
English name, so ``Country("pl")`` and ``Country("Poland")`` both give
``Country.PL``; anything unrecognised resolves to ``UNKNOWN``.
"""

import enum

import pycountry

UNKNOWN_CODE = ""


class _IsoCodeEnum(enum.StrEnum):
    """Base for the generated ISO code enumerations."""

    @classmethod
    def _lookup_code(cls, value: str) -> str | None:
        raise NotImplementedError

    @classmethod
    def _missing_(cls, value: object):
        if isinstance(value, str) and value:
            code = cls._lookup_code(value.strip())
            member = cls._value2member_map_.get(code) if code else None
            if member is not None:
                return member
        return cls._value2member_map_[UNKNOWN_CODE]

    @property
    def is_known(self) -> bool:
        return self.value != UNKNOWN_CODE


class _CountryCodeEnum(_IsoCodeEnum):
    @classmethod
    def _lookup_code(cls, value: str) -> str | None:
        try:
            return pycountry.countries.lookup(value).alpha_2
        except LookupError:
            return None

    @property
    def alpha_2(self) -> str:
        return self.value


class _CurrencyCodeEnum(_IsoCodeEnum):
    @classmethod
    def _lookup_code(cls, value: str) -> str | None:
        try:
            return pycountry.currencies.lookup(value).alpha_3
        except LookupError:
            return None

    @property
    def alpha_3(self) -> str:
        return self.value


Country = _CountryCodeEnum(
    "Country",
    [("UNKNOWN", UNKNOWN_CODE)]
    + sorted((country.alpha_2, country.alpha_2) for country in pycountry.countries),
    module=__name__,
)

Currency = _CurrencyCodeEnum(
    "Currency",
    [("UNKNOWN", UNKNOWN_CODE)]
    + sorted((currency.alpha_3, currency.alpha_3) for currency in pycountry.currencies),
    module=__name__,
)
