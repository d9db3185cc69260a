"""Async HTTP client for the organisation accounts API."""

import uuid
from http import HTTPStatus
from types import TracebackType
from typing import Self
from urllib.parse import quote

import httpx

from accounts_client.config import get_settings
from accounts_client.context import Context
from accounts_client.exceptions import DeadlineExceededError, TransportError
from accounts_client.rest.response import decode_response, expect_status
from accounts_client.schemas.account import AccountAttributes, AccountData
from accounts_client.schemas.envelope import encode_envelope
from accounts_client.utils.logging import get_logger
from accounts_client.validation import validate_attributes

logger = get_logger(__name__)

ACCOUNTS_PATH = "/organisation/accounts"
MEDIA_TYPE = "application/vnd.api+json"
DEFAULT_TIMEOUT = 60.0
MAX_VERSION = 2**64 - 1


class AccountsApiClient:
    """Async wrapper around the ``/organisation/accounts`` REST resource.

    The client keeps no per-call state; one instance can serve concurrent
    tasks on the event loop that owns its connection pool.
    """

    def __init__(
        self,
        api_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = f"{api_url}{ACCOUNTS_PATH}"
        self._timeout = timeout
        self._http = httpx.AsyncClient(timeout=timeout, transport=transport)

    @property
    def base_url(self) -> str:
        return self._base_url

    async def create_account(
        self,
        ctx: Context,
        organisation_id: uuid.UUID,
        attributes: AccountAttributes,
    ) -> AccountData:
        """Create an account and return it as stored by the API.

        Attributes are validated first; an invalid submission raises
        ``AttributeValidationError`` without any request being sent.
        """
        validate_attributes(attributes)

        account = AccountData(
            id=uuid.uuid1(),
            organisation_id=organisation_id,
            attributes=attributes,
        )
        request = self._http.build_request(
            "POST", self._base_url, content=encode_envelope(account)
        )
        status_code, body = await self._send_request(ctx, request)
        created = decode_response(status_code, body, HTTPStatus.CREATED, AccountData)
        logger.info("Created account %s for organisation %s", created.id, organisation_id)
        return created

    async def get_account(self, ctx: Context, account_id: uuid.UUID) -> AccountData:
        """Fetch the account with ``account_id``."""
        request = self._http.build_request("GET", self._account_url(account_id))
        status_code, body = await self._send_request(ctx, request)
        return decode_response(status_code, body, HTTPStatus.OK, AccountData)

    async def delete_account(self, ctx: Context, account_id: uuid.UUID, version: int) -> None:
        """Delete ``version`` of the account with ``account_id``.

        Raises ``ValueError`` without sending anything when ``version`` is not
        an unsigned 64-bit integer.
        """
        if not 0 <= version <= MAX_VERSION:
            raise ValueError(f"version must be between 0 and {MAX_VERSION}, got {version}")

        request = self._http.build_request(
            "DELETE", self._account_url(account_id), params={"version": version}
        )
        status_code, body = await self._send_request(ctx, request)
        expect_status(status_code, body, HTTPStatus.NO_CONTENT)
        logger.info("Deleted account %s (version %s)", account_id, version)

    def _account_url(self, account_id: uuid.UUID) -> str:
        return f"{self._base_url}/{quote(str(account_id), safe='')}"

    async def _send_request(self, ctx: Context, request: httpx.Request) -> tuple[int, bytes]:
        """Send ``request`` under ``ctx`` and return its status code and body."""
        request.headers["Content-Type"] = MEDIA_TYPE
        request.headers["Accept"] = MEDIA_TYPE
        operation = f'{request.method} "{request.url}"'
        logger.debug("Sending %s", operation)

        # The timeout bounds the whole exchange, body included.
        async with ctx.with_timeout(self._timeout).guard(operation):
            try:
                response = await self._http.send(request, stream=True)
                try:
                    body = await response.aread()
                finally:
                    await response.aclose()
            except httpx.TimeoutException as exc:
                raise DeadlineExceededError(operation) from exc
            except httpx.TransportError as exc:
                raise TransportError.from_httpx(operation, exc) from exc

        if response.status_code >= 400:
            logger.warning("%s returned status %s", operation, response.status_code)
        return response.status_code, body

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()


def new_client(
    api_url: str | None = None,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> AccountsApiClient:
    """Build a client for ``api_url`` (default: the configured ``ACCOUNTS_API_URL``)."""
    settings = get_settings()
    return AccountsApiClient(
        api_url if api_url is not None else settings.api_url,
        timeout=settings.request_timeout,
        transport=transport,
    )
