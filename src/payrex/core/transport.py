"""
HTTP transports used by the dispatcher.

A transport only moves bytes: it sends one request and returns the raw
response, or raises :class:`~payrex.core.errors.NetworkError` when no response
arrived. Retries, authentication and classification live in the dispatcher.
"""

from __future__ import annotations

import asyncio
import ssl
from dataclasses import dataclass, field
from typing import Mapping, Optional, Protocol

import httpx
import requests

from .errors import NetworkError, NetworkErrorKind

__all__ = [
    "HttpxTransport",
    "RawResponse",
    "RequestsTransport",
    "Transport",
]


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""

    @property
    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code <= 299

    def header(self, name: str) -> Optional[str]:
        wanted = name.lower()
        for key, value in self.headers.items():
            if key.lower() == wanted:
                return value
        return None


class Transport(Protocol):
    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        ...

    async def aclose(self) -> None:
        ...


def _caused_by_tls(exc: BaseException) -> bool:
    seen = set()
    current: Optional[BaseException] = exc
    while current is not None and id(current) not in seen:
        if isinstance(current, ssl.SSLError):
            return True
        seen.add(id(current))
        current = current.__cause__ or current.__context__
    return "ssl" in str(exc).lower() or "certificate" in str(exc).lower()


class HttpxTransport:
    """
    Default transport backed by one shared ``httpx.AsyncClient``.

    ``transport`` lets tests plug in ``httpx.MockTransport``.
    """

    def __init__(
        self,
        *,
        client: Optional[httpx.AsyncClient] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(transport=transport)

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        try:
            response = await self._client.request(
                method,
                url,
                headers=dict(headers),
                content=body,
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            raise NetworkError(
                NetworkErrorKind.TIMEOUT, f"{method} {url} timed out after {timeout}s"
            ) from exc
        except httpx.ConnectError as exc:
            kind = (
                NetworkErrorKind.TLS_FAILED
                if _caused_by_tls(exc)
                else NetworkErrorKind.CONNECTION_FAILED
            )
            raise NetworkError(kind, f"{method} {url} failed: {exc}") from exc
        except httpx.TransportError as exc:
            raise NetworkError(
                NetworkErrorKind.CONNECTION_FAILED, f"{method} {url} failed: {exc}"
            ) from exc
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()


class RequestsTransport:
    """
    Adapter for callers that already manage a ``requests.Session``.

    Each call runs in a worker thread so the event loop keeps serving other
    operations while the session blocks.
    """

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        self._owns_session = session is None
        self.session = session or requests.Session()

    def _send_blocking(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        try:
            response = self.session.request(
                method, url, headers=dict(headers), data=body, timeout=timeout
            )
        except requests.Timeout as exc:
            raise NetworkError(
                NetworkErrorKind.TIMEOUT, f"{method} {url} timed out after {timeout}s"
            ) from exc
        except requests.exceptions.SSLError as exc:
            raise NetworkError(
                NetworkErrorKind.TLS_FAILED, f"{method} {url} failed: {exc}"
            ) from exc
        except requests.RequestException as exc:
            raise NetworkError(
                NetworkErrorKind.CONNECTION_FAILED, f"{method} {url} failed: {exc}"
            ) from exc
        return RawResponse(
            status_code=response.status_code,
            headers=dict(response.headers),
            body=response.content,
        )

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        return await asyncio.to_thread(
            self._send_blocking, method, url, headers, body, timeout
        )

    async def aclose(self) -> None:
        if self._owns_session:
            self.session.close()
