"""Shared fixtures for the client tests."""

import os

import pytest

from payrex.core.config import Config
from payrex.core.dispatcher import Dispatcher

from tests.fakes import RecordingTransport, SleepRecorder


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch):
    """Keep the developer's PAYREX_* variables out of the tests."""
    for key in list(os.environ):
        if key.startswith("PAYREX_"):
            monkeypatch.delenv(key, raising=False)


@pytest.fixture
def config() -> Config:
    return (
        Config.builder()
        .api_key("sk_test_1234567890")
        .api_base_url("https://api.payrex.test")
        .retry_delay(0.5)
        .max_retry_delay(30.0)
        .build()
    )


@pytest.fixture
def sleeps() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_dispatcher(config, sleeps):
    def _make(*replies, cfg: Config = None):
        transport = RecordingTransport(*replies)
        return Dispatcher(cfg or config, transport, sleep=sleeps), transport

    return _make
