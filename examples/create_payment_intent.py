"""
Minimal script that uses the public API to create and then cancel a payment intent.
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Iterable, Tuple

from payrex import (
    ConfigError,
    CreatePaymentIntent,
    Currency,
    PaymentMethod,
    create_client,
    load_config,
)


def _override(value: str) -> Tuple[str, str]:
    if "=" not in value:
        raise argparse.ArgumentTypeError("Overrides must look like KEY=VALUE")
    key, val = value.split("=", 1)
    key = key.strip()
    if not key:
        raise argparse.ArgumentTypeError("Override key must not be empty")
    return key, val


def _build_overrides(pairs: Iterable[Tuple[str, str]]) -> dict[str, str]:
    return dict(pairs)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Create a PayRex payment intent using the SDK API")
    parser.add_argument(
        "--env-file",
        default=".env",
        help="Path to the .env file containing PAYREX_* settings",
    )
    parser.add_argument(
        "--set",
        action="append",
        type=_override,
        metavar="KEY=VALUE",
        default=None,
        help="Override an environment variable without editing the .env file",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        help="Python logging level (default: INFO)",
    )
    parser.add_argument(
        "--api-key",
        help="Provide the secret key without relying on environment data",
    )
    parser.add_argument(
        "--amount",
        type=int,
        default=10000,
        help="Amount in centavos (default: 10000, i.e. PHP 100.00)",
    )
    parser.add_argument(
        "--keep",
        action="store_true",
        help="Leave the payment intent open instead of cancelling it",
    )
    return parser.parse_args()


async def _create(args: argparse.Namespace, config) -> int:
    params = CreatePaymentIntent(
        args.amount, Currency.PHP, [PaymentMethod.CARD, PaymentMethod.GCASH]
    ).with_description("Example order")

    async with create_client(config=config) as client:
        created = await client.payment_intents.create(params)
        if not created.ok:
            logging.error("Create failed: %s", created.error)
            return 1

        intent = created.value
        logging.info(
            "Created %s for %s (status %s)",
            intent.id,
            Currency.PHP.format_amount(intent.amount),
            intent.status.value,
        )
        if args.keep:
            return 0

        cancelled = await client.payment_intents.cancel(intent.id)
        if not cancelled.ok:
            logging.error("Cancel failed: %s", cancelled.error)
            return 1
        logging.info("Cancelled %s", cancelled.value.id)
    return 0


def main() -> int:
    args = parse_args()
    logging.basicConfig(
        level=getattr(logging, args.log_level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(message)s",
    )

    overrides = _build_overrides(args.set or ())
    try:
        config = load_config(env_file=args.env_file, overrides=overrides, api_key=args.api_key)
    except ConfigError as exc:
        logging.error("Invalid configuration: %s", exc)
        return 1

    return asyncio.run(_create(args, config))


if __name__ == "__main__":
    sys.exit(main())
