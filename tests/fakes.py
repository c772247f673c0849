"""In-memory stand-ins for the transport and the backoff sleep."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Union

from payrex.core.transport import RawResponse


def respond(
    status: int,
    payload: Any = None,
    *,
    headers: Optional[Mapping[str, str]] = None,
    text: Optional[str] = None,
) -> RawResponse:
    if text is not None:
        body = text.encode("utf-8")
    elif payload is None:
        body = b""
    else:
        body = json.dumps(payload).encode("utf-8")
    return RawResponse(status_code=status, headers=dict(headers or {}), body=body)


def payment_intent(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "id": "pi_1",
        "resource": "payment_intent",
        "amount": 10000,
        "currency": "PHP",
        "status": "awaiting_payment_method",
        "payment_methods": ["card", "gcash"],
        "livemode": False,
        "created_at": 1700000000,
        "updated_at": 1700000000,
    }
    payload.update(overrides)
    return payload


@dataclass
class SentRequest:
    method: str
    url: str
    headers: Dict[str, str]
    body: Optional[bytes]
    timeout: float


Reply = Union[RawResponse, BaseException]


class RecordingTransport:
    """Replays scripted replies in order; the last one repeats forever."""

    def __init__(self, *replies: Reply) -> None:
        if not replies:
            raise ValueError("RecordingTransport needs at least one reply")
        self.replies: List[Reply] = list(replies)
        self.calls: List[SentRequest] = []
        self.closed = False

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        self.calls.append(SentRequest(method, url, dict(headers), body, timeout))
        reply = self.replies.pop(0) if len(self.replies) > 1 else self.replies[0]
        if isinstance(reply, BaseException):
            raise reply
        return reply

    async def aclose(self) -> None:
        self.closed = True


class SleepRecorder:
    """Drop-in for ``asyncio.sleep`` that returns immediately."""

    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


class HangingTransport(RecordingTransport):
    """Records the request, then never answers."""

    def __init__(self) -> None:
        super().__init__(RawResponse(status_code=200))
        self.released = asyncio.Event()

    async def send(
        self,
        method: str,
        url: str,
        headers: Mapping[str, str],
        body: Optional[bytes],
        timeout: float,
    ) -> RawResponse:
        self.calls.append(SentRequest(method, url, dict(headers), body, timeout))
        await self.released.wait()
        raise AssertionError("hanging transport was released")
