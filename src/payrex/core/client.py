"""
The client object: one configuration, one transport, many resource views.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

import requests

from .config import Config
from .dispatcher import Dispatcher
from .transport import HttpxTransport, RequestsTransport, Transport
from ..resources.billing_statement_line_items import BillingStatementLineItems
from ..resources.billing_statements import BillingStatements
from ..resources.checkout_sessions import CheckoutSessions
from ..resources.customers import Customers
from ..resources.events import Events
from ..resources.payment_intents import PaymentIntents
from ..resources.payments import Payments
from ..resources.payouts import Payouts
from ..resources.refunds import Refunds
from ..resources.webhooks import Webhooks

__all__ = ["Client"]

logger = logging.getLogger(__name__)


class Client:
    """
    Entry point for talking to the PayRex API.

    The client owns its transport; use it as an async context manager (or
    call :meth:`aclose`) to release connections. Resource properties return
    fresh, stateless views, so concurrent calls may share one client.

    Pass ``session`` to route requests through an existing
    ``requests.Session`` instead of the default ``httpx`` transport.
    """

    def __init__(
        self,
        config: Config,
        *,
        transport: Optional[Transport] = None,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if transport is not None and session is not None:
            raise ValueError("Provide either a transport or a requests session, not both.")
        if transport is None:
            transport = RequestsTransport(session) if session is not None else HttpxTransport()
        self.config = config
        self.transport = transport
        self._dispatcher = Dispatcher(config, transport, sleep=sleep)
        logger.debug(
            "PayRex client ready for %s (%s mode)",
            config.api_base_url,
            config.environment.value,
        )

    @classmethod
    def new(cls, api_key: str) -> "Client":
        """Client with default settings for ``api_key``."""
        return cls(Config.new(api_key))

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    @property
    def payment_intents(self) -> PaymentIntents:
        return PaymentIntents(self._dispatcher)

    @property
    def customers(self) -> Customers:
        return Customers(self._dispatcher)

    @property
    def payments(self) -> Payments:
        return Payments(self._dispatcher)

    @property
    def refunds(self) -> Refunds:
        return Refunds(self._dispatcher)

    @property
    def checkout_sessions(self) -> CheckoutSessions:
        return CheckoutSessions(self._dispatcher)

    @property
    def billing_statements(self) -> BillingStatements:
        return BillingStatements(self._dispatcher)

    @property
    def billing_statement_line_items(self) -> BillingStatementLineItems:
        return BillingStatementLineItems(self._dispatcher)

    @property
    def payouts(self) -> Payouts:
        return Payouts(self._dispatcher)

    @property
    def webhooks(self) -> Webhooks:
        return Webhooks(self._dispatcher)

    @property
    def events(self) -> Events:
        return Events(self._dispatcher)

    async def aclose(self) -> None:
        await self.transport.aclose()

    async def __aenter__(self) -> "Client":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    def __repr__(self) -> str:
        return f"Client({self.config!r})"
