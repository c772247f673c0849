"""
Retry policy shared by every dispatched request.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional

from .config import Config
from .errors import PayrexError, RateLimitError

__all__ = ["RetryDecision", "backoff_delay", "decide_retry", "parse_retry_after"]


@dataclass(frozen=True)
class RetryDecision:
    retry: bool
    delay: float = 0.0


_GIVE_UP = RetryDecision(retry=False)


def backoff_delay(attempt: int, config: Config) -> float:
    """Delay before the retry that follows attempt ``attempt`` (0-based)."""
    return min(config.retry_delay * (2 ** attempt), config.max_retry_delay)


def decide_retry(attempt: int, error: PayrexError, config: Config) -> RetryDecision:
    """
    Decide whether the attempt at index ``attempt`` should be followed by another.

    Only retryable kinds are retried, never past ``config.max_retries``. A
    rate-limit hint from the provider replaces the computed backoff.
    """
    if not error.retryable or attempt >= config.max_retries:
        return _GIVE_UP
    if isinstance(error, RateLimitError) and error.retry_after is not None:
        return RetryDecision(retry=True, delay=error.retry_after)
    return RetryDecision(retry=True, delay=backoff_delay(attempt, config))


def parse_retry_after(value: Optional[str], *, now: Optional[datetime] = None) -> Optional[float]:
    """Read a ``Retry-After`` header given as seconds or as an HTTP date."""
    if value is None:
        return None
    value = value.strip()
    if not value:
        return None
    try:
        seconds = float(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return None
        if when is None:
            return None
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = (when - (now or datetime.now(timezone.utc))).total_seconds()
    if not math.isfinite(seconds):
        return None
    return max(seconds, 0.0)
