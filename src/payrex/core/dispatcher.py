"""
Request dispatch: one authenticated, retried HTTP exchange per logical call.

The dispatcher turns a :class:`RequestDescriptor` into HTTP attempts against
the configured base URL, classifies each attempt, and decides with
:func:`payrex.core.retry.decide_retry` whether to try again. It never raises
for API or network failures: the caller always receives an outcome.
Cancellation (``asyncio.CancelledError``) is the only thing that escapes, and
it stops the loop before any further attempt.
"""

from __future__ import annotations

import asyncio
import base64
import logging
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Mapping, Optional, Protocol, Type, TypeVar
from urllib.parse import urlencode

from .config import VERSION, Config
from .encoding import decode_json, encode_form, flatten_params
from .errors import DecodingError, NetworkError, PayrexError, error_from_response
from .outcome import Failure, Outcome, Success
from .retry import decide_retry, parse_retry_after
from .transport import RawResponse, Transport

__all__ = ["Decodable", "Dispatcher", "RequestDescriptor"]

logger = logging.getLogger(__name__)

T = TypeVar("T")

ALLOWED_METHODS = frozenset({"GET", "POST", "PUT", "PATCH", "DELETE"})
SDK_IDENTIFIER = f"payrex-python/{VERSION}"


class Decodable(Protocol):
    @classmethod
    def from_response(cls, payload: Dict[str, Any]) -> Any:
        ...


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to issue one logical request. Built per call."""

    method: str
    path: str
    body: Optional[Mapping[str, Any]] = None
    query: Optional[Mapping[str, Any]] = None
    idempotency_key: Optional[str] = None

    def __post_init__(self) -> None:
        method = (self.method or "").strip().upper()
        if method not in ALLOWED_METHODS:
            raise ValueError(f"Unsupported HTTP method '{self.method}'")
        object.__setattr__(self, "method", method)
        if not self.path or not self.path.strip("/ "):
            raise ValueError("Request path must not be empty")
        if self.idempotency_key is not None and not self.idempotency_key.strip():
            raise ValueError("Idempotency key must not be blank")


def _basic_auth(api_key: str) -> str:
    token = base64.b64encode(f"{api_key}:".encode("utf-8")).decode("ascii")
    return f"Basic {token}"


class Dispatcher:
    """
    Executes request descriptors with the configured timeout and retry policy.

    The dispatcher is stateless between calls; any number of ``execute``
    coroutines may run concurrently on the same instance.
    """

    def __init__(
        self,
        config: Config,
        transport: Transport,
        *,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        self.config = config
        self.transport = transport
        self._sleep = sleep

    def build_headers(self, descriptor: RequestDescriptor) -> Dict[str, str]:
        headers = {
            "Authorization": _basic_auth(self.config.api_key),
            "Accept": "application/json",
            "User-Agent": self.config.user_agent,
            "X-Payrex-Client": SDK_IDENTIFIER,
        }
        if descriptor.body is not None:
            headers["Content-Type"] = "application/x-www-form-urlencoded"
        if descriptor.idempotency_key:
            headers["Idempotency-Key"] = descriptor.idempotency_key
        return headers

    def build_url(self, descriptor: RequestDescriptor) -> str:
        url = self.config.url_for(descriptor.path)
        query = flatten_params(descriptor.query)
        if query:
            url = f"{url}?{urlencode(query)}"
        return url

    async def execute(
        self,
        descriptor: RequestDescriptor,
        response_type: Type[Decodable],
    ) -> Outcome[Any]:
        """
        Run ``descriptor`` to completion and decode the body into ``response_type``.

        Issues at most ``config.max_retries + 1`` physical requests. The
        headers (including any idempotency key) are computed once and reused
        for every attempt.
        """
        url = self.build_url(descriptor)
        headers = self.build_headers(descriptor)
        body = encode_form(descriptor.body) if descriptor.body is not None else None

        attempt = 0
        while True:
            logger.debug(
                "PayRex %s %s (attempt %d)", descriptor.method, descriptor.path, attempt + 1
            )
            outcome = await self._attempt(descriptor, url, headers, body, response_type)
            if isinstance(outcome, Success):
                return outcome

            decision = decide_retry(attempt, outcome.error, self.config)
            if not decision.retry:
                if attempt > 0 and outcome.error.retryable:
                    logger.warning(
                        "PayRex %s %s failed after %d attempts: %s",
                        descriptor.method,
                        descriptor.path,
                        attempt + 1,
                        type(outcome.error).__name__,
                    )
                return outcome

            logger.warning(
                "PayRex %s %s attempt %d failed with %s; retrying in %.2fs",
                descriptor.method,
                descriptor.path,
                attempt + 1,
                type(outcome.error).__name__,
                decision.delay,
            )
            await self._sleep(decision.delay)
            attempt += 1

    async def _attempt(
        self,
        descriptor: RequestDescriptor,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        response_type: Type[Decodable],
    ) -> Outcome[Any]:
        try:
            response = await self.transport.send(
                descriptor.method, url, headers, body, self.config.timeout
            )
        except NetworkError as exc:
            return Failure(exc)
        return self._classify(response, response_type)

    def _classify(self, response: RawResponse, response_type: Type[Decodable]) -> Outcome[Any]:
        request_id = response.header("x-request-id") or response.header("request-id")

        if not response.is_success:
            return Failure(
                error_from_response(
                    response.status_code,
                    response.text,
                    request_id=request_id,
                    retry_after=parse_retry_after(response.header("retry-after")),
                )
            )

        try:
            payload = decode_json(response.body)
            value = response_type.from_response(payload)
        except (
            KeyError,
            TypeError,
            ValueError,
            AttributeError,
            OverflowError,
            OSError,
        ) as exc:
            error: PayrexError = DecodingError(
                f"Could not decode {getattr(response_type, '__name__', response_type)}: {exc!r}",
                status_code=response.status_code,
                request_id=request_id,
                body=response.text,
            )
            return Failure(error)
        return Success(value)
