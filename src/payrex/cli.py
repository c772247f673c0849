"""
Command-line interface for exercising the PayRex API.
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from typing import Any, Iterable, Optional, Sequence, Tuple

from .api import ConfigError, create_client, load_config
from .core.client import Client
from .core.errors import PayrexError
from .core.outcome import Outcome
from .core.transport import Transport
from .resources.payment_intents import CreatePaymentIntent
from .types.currency import Currency
from .types.pagination import ListParams, Page
from .types.payment_methods import PaymentMethod

RETRIEVABLE = (
    "billing_statements",
    "checkout_sessions",
    "customers",
    "events",
    "payment_intents",
    "payments",
    "webhooks",
)
LISTABLE = ("billing_statements", "customers", "events", "webhooks")


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )


def _env_override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _collect_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    overrides: dict[str, str] = {}
    for key, value in pairs:
        overrides[key] = value
    return overrides


def _resource_name(value: str) -> str:
    return value.strip().replace("-", "_")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="payrex",
        description="Call the PayRex API from the command line",
    )
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYREX_* settings (default: .env)",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_env_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    commands = parser.add_subparsers(dest="command", required=True)

    create = commands.add_parser(
        "create-payment-intent", help="Create a payment intent"
    )
    create.add_argument(
        "--amount", type=int, required=True, help="Amount in minor units (e.g. 10000 for PHP 100)"
    )
    create.add_argument("--currency", default=Currency.PHP.value, help="Currency code (default: PHP)")
    create.add_argument(
        "--method",
        dest="methods",
        action="append",
        choices=[method.value for method in PaymentMethod],
        required=True,
        help="Allowed payment method; repeat for several",
    )
    create.add_argument("--description", help="Description shown on the payment")
    create.add_argument("--idempotency-key", help="Key that makes the create safe to repeat")

    retrieve = commands.add_parser("retrieve", help="Fetch a single resource by id")
    retrieve.add_argument("resource", type=_resource_name, choices=RETRIEVABLE)
    retrieve.add_argument("id")

    listing = commands.add_parser("list", help="List one page of a resource")
    listing.add_argument("resource", type=_resource_name, choices=LISTABLE)
    listing.add_argument("--limit", type=int, help="Page size between 1 and 100")
    listing.add_argument("--starting-after", help="Cursor: id of the last item already seen")

    cancel = commands.add_parser("cancel-payment-intent", help="Cancel a payment intent")
    cancel.add_argument("id")
    return parser


def _to_json(value: Any) -> Any:
    if isinstance(value, Page):
        return {
            "data": [_to_json(item) for item in value.data],
            "has_more": value.has_more,
        }
    return getattr(value, "raw", value)


async def _dispatch(client: Client, args: argparse.Namespace) -> Outcome[Any]:
    if args.command == "create-payment-intent":
        params = CreatePaymentIntent(args.amount, Currency(args.currency.upper()), args.methods)
        if args.description:
            params = params.with_description(args.description)
        return await client.payment_intents.create(params, idempotency_key=args.idempotency_key)

    if args.command == "cancel-payment-intent":
        return await client.payment_intents.cancel(args.id)

    resource = getattr(client, args.resource)
    if args.command == "retrieve":
        return await resource.retrieve(args.id)

    params = ListParams(limit=args.limit)
    if args.starting_after:
        params = params.starting_after(args.starting_after)
    return await resource.list(params)


async def _run(client: Client, args: argparse.Namespace) -> Outcome[Any]:
    async with client:
        return await _dispatch(client, args)


def run_cli(argv: Sequence[str] | None = None, *, transport: Optional[Transport] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.log_level)
    overrides = _collect_overrides(args.set or ())

    try:
        config = load_config(env_file=args.env_file, overrides=overrides)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    client = create_client(config=config, transport=transport)

    try:
        outcome = asyncio.run(_run(client, args))
    except ValueError as exc:
        logging.error("Invalid request: %s", exc)
        return 1

    if not outcome.ok:
        error: PayrexError = outcome.error
        logging.error("PayRex request failed: %s", error)
        return 1

    print(json.dumps(_to_json(outcome.value), indent=2, sort_keys=True))
    return 0


def main() -> None:
    sys.exit(run_cli())


if __name__ == "__main__":
    main()
