"""Command line access to the accounts API.

Run: accounts-client get <account-id>
     accounts-client create --organisation-id <uuid> --name "Jan Kowalski" --country PL
     accounts-client delete <account-id> --version 0
"""

import argparse
import asyncio
import sys
import uuid

from pydantic import ValidationError

from accounts_client.config import get_settings
from accounts_client.context import Context
from accounts_client.exceptions import AccountsClientError
from accounts_client.models.account import AccountClassification, AccountStatus
from accounts_client.rest.client import MAX_VERSION, AccountsApiClient, new_client
from accounts_client.schemas.account import AccountAttributes, AccountData
from accounts_client.utils.logging import get_logger, setup_logging

logger = get_logger(__name__)


def _parse_bool(value: str) -> bool:
    lowered = value.lower()
    if lowered in ("true", "yes", "1"):
        return True
    if lowered in ("false", "no", "0"):
        return False
    raise argparse.ArgumentTypeError(f"expected true or false, got {value!r}")


def _parse_version(value: str) -> int:
    try:
        version = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if not 0 <= version <= MAX_VERSION:
        raise argparse.ArgumentTypeError(f"version must be between 0 and {MAX_VERSION}")
    return version


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="accounts-client", description=__doc__.splitlines()[0])
    parser.add_argument("--api-url", help="base API URL (default: ACCOUNTS_API_URL)")
    parser.add_argument("--timeout", type=float, help="give up after this many seconds")
    commands = parser.add_subparsers(dest="command", required=True)

    get = commands.add_parser("get", help="fetch an account")
    get.add_argument("account_id", type=uuid.UUID)

    delete = commands.add_parser("delete", help="delete a version of an account")
    delete.add_argument("account_id", type=uuid.UUID)
    delete.add_argument("--version", type=_parse_version, required=True)

    create = commands.add_parser("create", help="create an account")
    create.add_argument("--organisation-id", type=uuid.UUID, required=True)
    create.add_argument("--name", action="append", default=[], help="repeat for each name line")
    create.add_argument("--country", help="ISO 3166 alpha-2 code or country name")
    create.add_argument("--base-currency", help="ISO 4217 alpha-3 code")
    create.add_argument("--bic", default="")
    create.add_argument("--iban", default="")
    create.add_argument("--account-number", default="")
    create.add_argument("--bank-id", default="")
    create.add_argument("--bank-id-code", default="")
    create.add_argument("--alternative-name", action="append", default=[])
    create.add_argument("--secondary-identification", default="")
    create.add_argument(
        "--classification", choices=[c.value for c in AccountClassification]
    )
    create.add_argument("--status", choices=[s.value for s in AccountStatus])
    create.add_argument("--joint-account", type=_parse_bool)
    create.add_argument("--account-matching-opt-out", type=_parse_bool)
    create.add_argument("--switched", type=_parse_bool)
    return parser


def attributes_from_args(args: argparse.Namespace) -> AccountAttributes:
    """Build account attributes from ``create`` arguments, leaving unset flags absent."""
    return AccountAttributes(
        name=args.name,
        country=args.country,
        base_currency=args.base_currency,
        bic=args.bic,
        iban=args.iban,
        account_number=args.account_number,
        bank_id=args.bank_id,
        bank_id_code=args.bank_id_code,
        alternative_names=args.alternative_name,
        secondary_identification=args.secondary_identification,
        account_classification=args.classification,
        status=args.status,
        joint_account=args.joint_account,
        account_matching_opt_out=args.account_matching_opt_out,
        switched=args.switched,
    )


async def run_command(args: argparse.Namespace, client: AccountsApiClient) -> AccountData | None:
    """Execute the parsed command against ``client``."""
    ctx = Context.background()
    if args.timeout is not None:
        ctx = ctx.with_timeout(args.timeout)

    if args.command == "get":
        return await client.get_account(ctx, args.account_id)
    if args.command == "delete":
        await client.delete_account(ctx, args.account_id, args.version)
        return None
    return await client.create_account(ctx, args.organisation_id, attributes_from_args(args))


async def _main(args: argparse.Namespace) -> AccountData | None:
    async with new_client(args.api_url) as client:
        return await run_command(args, client)


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(get_settings().log_level)

    try:
        account = asyncio.run(_main(args))
    except (AccountsClientError, ValidationError) as exc:
        logger.error("%s failed: %s", args.command, exc)
        return 1

    if account is not None:
        print(account.model_dump_json(indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main())
