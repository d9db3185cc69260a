"""Shared test fixtures for the accounts client."""

import os

# Force test settings before any imports
os.environ.setdefault("ACCOUNTS_API_URL", "http://test/v1")
os.environ.setdefault("ACCOUNTS_LOG_LEVEL", "DEBUG")

import asyncio
import uuid
from collections.abc import AsyncGenerator, Callable

import httpx
import pytest
import pytest_asyncio
from fastapi import FastAPI

from accounts_client import AccountAttributes, AccountData, Country, Currency
from accounts_client.config import get_settings
from accounts_client.models import AccountClassification, AccountStatus
from accounts_client.rest import AccountsApiClient
from tests.fake_api import create_fake_accounts_app

TEST_API_URL = "http://test/v1"


@pytest.fixture(autouse=True)
def _clear_settings_cache():
    """Clear the lru_cache on settings between tests."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


# ---------------------------------------------------------------------------
# Fake accounts API (FastAPI app mounted through ASGITransport)
# ---------------------------------------------------------------------------


@pytest.fixture()
def fake_api() -> FastAPI:
    return create_fake_accounts_app()


@pytest_asyncio.fixture()
async def client(fake_api) -> AsyncGenerator[AccountsApiClient, None]:
    """Accounts client wired to the in-process fake API."""
    transport = httpx.ASGITransport(app=fake_api)
    async with AccountsApiClient(TEST_API_URL, transport=transport) as c:
        yield c


# ---------------------------------------------------------------------------
# Transports for request capture and cancellation
# ---------------------------------------------------------------------------


class RecordingTransport(httpx.MockTransport):
    """MockTransport that keeps every request it receives."""

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response]):
        self.requests: list[httpx.Request] = []

        def _handle(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return handler(request)

        super().__init__(_handle)


class HangingTransport(httpx.AsyncBaseTransport):
    """Transport that never answers; requests end only when cancelled."""

    def __init__(self) -> None:
        self.calls = 0

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        self.calls += 1
        await asyncio.sleep(3600)
        raise AssertionError("request was never cancelled")


class TrackingStream(httpx.AsyncByteStream):
    """Response body that records whether it was closed."""

    def __init__(self, body: bytes) -> None:
        self.body = body
        self.closed = False

    async def __aiter__(self):
        yield self.body

    async def aclose(self) -> None:
        self.closed = True


def json_response(status_code: int, payload: dict) -> httpx.Response:
    return httpx.Response(
        status_code,
        json=payload,
        headers={"Content-Type": "application/vnd.api+json"},
    )


# ---------------------------------------------------------------------------
# Attribute and resource factories
# ---------------------------------------------------------------------------


def make_attributes(**overrides) -> AccountAttributes:
    """Build minimal valid account attributes."""
    data = {"name": ["a"], "country": Country.PL}
    data.update(overrides)
    return AccountAttributes(**data)


def make_full_attributes(**overrides) -> AccountAttributes:
    """Build attributes with every field set."""
    data = {
        "name": ["a"],
        "country": Country.PL,
        "base_currency": Currency.AED,
        "bic": "NWBKGB22",
        "account_number": "GB11NWBK40030041426819",
        "iban": "GB11NWBK40030041426819",
        "bank_id": "400300",
        "bank_id_code": "GBDSC",
        "alternative_names": ["a", "a", "a"],
        "secondary_identification": "A1B2C3D4",
        "joint_account": False,
        "account_matching_opt_out": False,
        "switched": False,
        "account_classification": AccountClassification.business,
        "status": AccountStatus.pending,
    }
    data.update(overrides)
    return AccountAttributes(**data)


def make_account_data(**overrides) -> AccountData:
    """Build an account resource as the API would return it."""
    data = {
        "id": uuid.uuid1(),
        "organisation_id": uuid.uuid1(),
        "version": 0,
        "attributes": make_attributes(),
    }
    data.update(overrides)
    return AccountData(**data)
