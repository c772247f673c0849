import json

import httpx
import pytest

from payrex.cli import build_parser, run_cli
from payrex.core.transport import HttpxTransport

from tests.fakes import RecordingTransport, payment_intent, respond

BASE_ARGS = [
    "--env-file",
    "missing.env",
    "--set",
    "PAYREX_API_KEY=sk_test_cli",
    "--set",
    "PAYREX_API_BASE_URL=https://api.payrex.test",
    "--set",
    "PAYREX_MAX_RETRIES=0",
]


def test_parser_rejects_malformed_override():
    with pytest.raises(SystemExit):
        build_parser().parse_args(["--set", "NOVALUE", "list", "customers"])


def test_parser_normalizes_resource_names():
    args = build_parser().parse_args(["retrieve", "payment-intents", "pi_1"])

    assert args.resource == "payment_intents"


def test_create_payment_intent_prints_json(capsys):
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(201, json=payment_intent(description="Tee"))

    transport = HttpxTransport(transport=httpx.MockTransport(handler))

    code = run_cli(
        BASE_ARGS
        + [
            "create-payment-intent",
            "--amount",
            "10000",
            "--method",
            "card",
            "--method",
            "gcash",
            "--description",
            "Tee",
        ],
        transport=transport,
    )

    assert code == 0
    assert json.loads(capsys.readouterr().out)["id"] == "pi_1"
    assert seen[0].url.path == "/payment_intents"
    assert b"description=Tee" in seen[0].content


def test_list_prints_page(capsys):
    transport = RecordingTransport(
        respond(200, {"data": [{"id": "cus_1", "name": "Juan"}], "has_more": True})
    )

    code = run_cli(BASE_ARGS + ["list", "customers", "--limit", "1"], transport=transport)

    printed = json.loads(capsys.readouterr().out)
    assert code == 0
    assert printed == {"data": [{"id": "cus_1", "name": "Juan"}], "has_more": True}
    assert transport.calls[0].url.endswith("/customers?limit=1")
    assert transport.closed


def test_api_failure_returns_non_zero(capsys):
    transport = RecordingTransport(respond(401, {"message": "Invalid API key"}))

    code = run_cli(BASE_ARGS + ["cancel-payment-intent", "pi_1"], transport=transport)

    assert code == 1
    assert capsys.readouterr().out == ""
    assert len(transport.calls) == 1


def test_invalid_configuration_returns_non_zero():
    transport = RecordingTransport(respond(200))

    code = run_cli(
        ["--env-file", "missing.env", "--set", "PAYREX_API_KEY=", "retrieve", "customers", "cus_1"],
        transport=transport,
    )

    assert code == 1
    assert transport.calls == []
