from datetime import datetime, timezone

import pytest

from payrex.core.config import ConfigBuilder
from payrex.core.errors import NetworkError, NetworkErrorKind, error_from_response
from payrex.core.retry import backoff_delay, decide_retry, parse_retry_after


@pytest.fixture
def policy():
    return (
        ConfigBuilder()
        .api_key("sk_test_abcdef123456")
        .max_retries(3)
        .retry_delay(0.5)
        .max_retry_delay(3.0)
        .build()
    )


def test_backoff_doubles_until_capped(policy):
    assert [backoff_delay(attempt, policy) for attempt in range(5)] == [0.5, 1.0, 2.0, 3.0, 3.0]


def test_retryable_error_is_retried_until_budget_is_spent(policy):
    error = NetworkError(NetworkErrorKind.TIMEOUT, "timed out")

    decisions = [decide_retry(attempt, error, policy) for attempt in range(4)]

    assert [decision.retry for decision in decisions] == [True, True, True, False]
    assert [decision.delay for decision in decisions[:3]] == [0.5, 1.0, 2.0]


def test_non_retryable_error_is_never_retried(policy):
    assert not decide_retry(0, error_from_response(400, ""), policy).retry
    assert not decide_retry(0, error_from_response(401, ""), policy).retry


def test_rate_limit_hint_replaces_backoff(policy):
    error = error_from_response(429, "", retry_after=7.0)

    decision = decide_retry(0, error, policy)

    assert decision.retry
    assert decision.delay == 7.0


def test_rate_limit_without_hint_uses_backoff(policy):
    decision = decide_retry(1, error_from_response(429, ""), policy)

    assert decision.delay == 1.0


@pytest.mark.parametrize(
    "header, expected",
    [
        ("2", 2.0),
        (" 1.5 ", 1.5),
        ("-4", 0.0),
        ("", None),
        (None, None),
        ("soon", None),
        ("inf", None),
        ("nan", None),
    ],
)
def test_parse_retry_after_seconds(header, expected):
    assert parse_retry_after(header) == expected


def test_parse_retry_after_http_date():
    now = datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

    assert parse_retry_after("Mon, 01 Jan 2024 12:00:30 GMT", now=now) == 30.0
    assert parse_retry_after("Mon, 01 Jan 2024 11:59:00 GMT", now=now) == 0.0
