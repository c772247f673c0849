from datetime import datetime, timezone
from urllib.parse import parse_qsl, urlsplit

import pytest

from payrex import (
    CapturePaymentIntent,
    CheckoutLineItem,
    Client,
    CreateBillingStatement,
    CreateBillingStatementLineItem,
    CreateCheckoutSession,
    CreateCustomer,
    CreateRefund,
    CreateWebhook,
    ListParams,
    NotFoundError,
    PaymentMethod,
    RefundReason,
    UpdateBillingStatement,
    UpdateBillingStatementLineItem,
    UpdateCustomer,
    UpdatePayment,
    UpdateRefund,
    UpdateWebhook,
    WebhookListParams,
)
from payrex.resources.billing_statements import BillingStatementStatus
from payrex.resources.events import EventType
from payrex.resources.payouts import PayoutTransactionType
from payrex.resources.refunds import RefundStatus
from payrex.resources.webhooks import WebhookStatus

from tests.fakes import RecordingTransport, SleepRecorder, payment_intent, respond


@pytest.fixture
def client_with(config):
    def _make(*replies):
        transport = RecordingTransport(*replies)
        return Client(config, transport=transport, sleep=SleepRecorder()), transport

    return _make


def _form(call):
    return parse_qsl(call.body.decode("ascii")) if call.body else []


def _route(call):
    parts = urlsplit(call.url)
    return call.method, parts.path, dict(parse_qsl(parts.query))


CUSTOMER = {
    "id": "cus_1",
    "name": "Juan Dela Cruz",
    "email": "juan@example.com",
    "currency": "PHP",
    "billing_statement_prefix": "JDC",
    "next_billing_statement_sequence_number": 3,
    "livemode": False,
    "metadata": {"tier": "gold"},
    "created_at": 1700000000,
    "updated_at": 1700000100,
}


@pytest.mark.asyncio
async def test_payment_intent_capture_and_cancel_paths(client_with):
    client, transport = client_with(respond(200, payment_intent(status="succeeded")))

    await client.payment_intents.capture("pi_1", CapturePaymentIntent(5000), idempotency_key="cap-1")
    await client.payment_intents.cancel("pi_1")
    await client.payment_intents.retrieve("pi_1")

    assert [_route(call)[:2] for call in transport.calls] == [
        ("POST", "/payment_intents/pi_1/capture"),
        ("POST", "/payment_intents/pi_1/cancel"),
        ("GET", "/payment_intents/pi_1"),
    ]
    assert _form(transport.calls[0]) == [("amount", "5000")]
    assert transport.calls[0].headers["Idempotency-Key"] == "cap-1"


@pytest.mark.asyncio
async def test_customer_crud(client_with):
    client, transport = client_with(
        respond(200, CUSTOMER),
        respond(200, CUSTOMER),
        respond(200, dict(CUSTOMER, name="Juana")),
        respond(200, {"id": "cus_1", "resource": "customer", "deleted": True}),
    )

    created = (await client.customers.create(CreateCustomer("Juan Dela Cruz", "juan@example.com"))).unwrap()
    fetched = (await client.customers.retrieve("cus_1")).unwrap()
    updated = (await client.customers.update("cus_1", UpdateCustomer().with_name("Juana"))).unwrap()
    deleted = (await client.customers.delete("cus_1")).unwrap()

    assert created == fetched
    assert created.created_at == datetime.fromtimestamp(1700000000, tz=timezone.utc)
    assert created.metadata == {"tier": "gold"}
    assert updated.name == "Juana"
    assert deleted.id == "cus_1" and deleted.deleted

    routes = [_route(call)[:2] for call in transport.calls]
    assert routes == [
        ("POST", "/customers"),
        ("GET", "/customers/cus_1"),
        ("PUT", "/customers/cus_1"),
        ("DELETE", "/customers/cus_1"),
    ]
    assert _form(transport.calls[0]) == [
        ("name", "Juan Dela Cruz"),
        ("email", "juan@example.com"),
        ("currency", "PHP"),
    ]
    assert _form(transport.calls[2]) == [("name", "Juana")]


@pytest.mark.asyncio
async def test_list_returns_page_with_cursor(client_with):
    page_body = {
        "data": [CUSTOMER, dict(CUSTOMER, id="cus_2")],
        "has_more": True,
    }
    client, transport = client_with(respond(200, page_body))

    page = (await client.customers.list(ListParams().with_limit(500).starting_after("cus_0"))).unwrap()

    assert [customer.id for customer in page] == ["cus_1", "cus_2"]
    assert len(page) == 2
    assert page.next_cursor == "cus_2"
    assert _route(transport.calls[0]) == ("GET", "/customers", {"limit": "100", "after": "cus_0"})


@pytest.mark.asyncio
async def test_last_page_has_no_cursor(client_with):
    client, _ = client_with(respond(200, {"data": [CUSTOMER], "has_more": False}))

    page = (await client.customers.list()).unwrap()

    assert page.next_cursor is None


@pytest.mark.asyncio
async def test_missing_resource_is_not_found(client_with):
    client, transport = client_with(respond(404, {"errors": [{"code": "resource_not_found", "detail": "No such payment"}]}))

    outcome = await client.payments.retrieve("pay_missing")

    assert isinstance(outcome.error, NotFoundError)
    assert outcome.error.code == "resource_not_found"
    assert len(transport.calls) == 1


@pytest.mark.asyncio
async def test_payment_update_and_decode(client_with):
    body = {
        "id": "pay_1",
        "status": "paid",
        "amount": 10000,
        "amount_refunded": 0,
        "currency": "PHP",
        "fee": 250,
        "net_amount": 9750,
        "payment_intent_id": "pi_1",
        "billing": {"name": "Juan", "address": {"city": "Makati", "country": "PH"}},
        "payment_method": {"type": "card", "card": {"last4": "4242", "brand": "visa"}},
        "customer": CUSTOMER,
    }
    client, transport = client_with(respond(200, body))

    payment = (await client.payments.update("pay_1", UpdatePayment(description="Order 1"))).unwrap()

    assert payment.net_amount == 9750
    assert payment.billing.address.city == "Makati"
    assert payment.payment_method.type is PaymentMethod.CARD
    assert payment.payment_method.card.last4 == "4242"
    assert payment.customer.id == "cus_1"
    assert _route(transport.calls[0])[:2] == ("PUT", "/payments/pay_1")


@pytest.mark.asyncio
async def test_refund_create_and_update(client_with):
    refund = {
        "id": "re_1",
        "status": "pending",
        "amount": 500,
        "currency": "PHP",
        "payment_id": "pay_1",
        "reason": "requested_by_customer",
    }
    client, transport = client_with(respond(200, refund))

    created = (
        await client.refunds.create(
            CreateRefund("pay_1", 500, "PHP", RefundReason.REQUESTED_BY_CUSTOMER).with_remarks("late")
        )
    ).unwrap()
    await client.refunds.update("re_1", UpdateRefund(metadata={"ticket": "T-1"}))

    assert created.status is RefundStatus.PENDING
    assert created.reason is RefundReason.REQUESTED_BY_CUSTOMER
    assert ("reason", "requested_by_customer") in _form(transport.calls[0])
    assert _route(transport.calls[1])[:2] == ("PUT", "/refunds/re_1")
    assert _form(transport.calls[1]) == [("metadata[ticket]", "T-1")]


@pytest.mark.asyncio
async def test_checkout_session_create_and_expire(client_with):
    session = {
        "id": "cs_1",
        "status": "active",
        "currency": "PHP",
        "url": "https://checkout.payrex.test/cs_1",
        "line_items": [{"id": "li_1", "name": "Tee", "amount": 50000, "quantity": 2}],
        "payment_intent": payment_intent(),
        "expires_at": 1700003600,
    }
    client, transport = client_with(respond(200, session), respond(200, dict(session, status="expired")))
    params = CreateCheckoutSession(
        "PHP",
        [CheckoutLineItem("Tee", 50000, 2)],
        ["card"],
        "https://shop.test/ok",
        "https://shop.test/cancel",
    ).with_expires_at(datetime.fromtimestamp(1700003600, tz=timezone.utc))

    created = (await client.checkout_sessions.create(params)).unwrap()
    expired = (await client.checkout_sessions.expire("cs_1")).unwrap()

    assert params.total_amount == 100000
    assert created.line_items[0].name == "Tee"
    assert created.payment_intent.id == "pi_1"
    assert expired.status.value == "expired"
    form = _form(transport.calls[0])
    assert ("line_items[0][name]", "Tee") in form
    assert ("line_items[0][quantity]", "2") in form
    assert ("expires_at", "1700003600") in form
    assert _route(transport.calls[1])[:2] == ("POST", "/checkout_sessions/cs_1/expire")


@pytest.mark.asyncio
async def test_billing_statement_lifecycle_paths(client_with):
    statement = {
        "id": "bstm_1",
        "status": "draft",
        "amount": 0,
        "currency": "PHP",
        "customer_id": "cus_1",
        "payment_settings": {"payment_methods": ["card", "gcash"]},
        "line_items": [{"id": "bstm_li_1", "unit_price": 1000, "quantity": 3}],
    }
    client, transport = client_with(respond(200, statement))
    statements = client.billing_statements

    created = (
        await statements.create(CreateBillingStatement.for_methods("cus_1", "PHP", ["card", "gcash"]))
    ).unwrap()
    await statements.update("bstm_1", UpdateBillingStatement().with_description("March"))
    await statements.finalize("bstm_1")
    await statements.send("bstm_1")
    await statements.void("bstm_1")
    await statements.mark_uncollectible("bstm_1")

    assert created.status is BillingStatementStatus.DRAFT
    assert created.line_items[0].total == 3000
    assert created.payment_settings.payment_methods == (PaymentMethod.CARD, PaymentMethod.GCASH)
    assert _form(transport.calls[0]) == [
        ("customer_id", "cus_1"),
        ("currency", "PHP"),
        ("payment_settings[payment_methods][]", "card"),
        ("payment_settings[payment_methods][]", "gcash"),
    ]
    assert [_route(call)[:2] for call in transport.calls[1:]] == [
        ("PUT", "/billing_statements/bstm_1"),
        ("POST", "/billing_statements/bstm_1/finalize"),
        ("POST", "/billing_statements/bstm_1/send"),
        ("POST", "/billing_statements/bstm_1/void"),
        ("POST", "/billing_statements/bstm_1/mark_uncollectible"),
    ]


@pytest.mark.asyncio
async def test_billing_statement_line_items(client_with):
    item = {"id": "bstm_li_1", "unit_price": 1500, "quantity": 2, "billing_statement_id": "bstm_1"}
    client, transport = client_with(
        respond(200, item), respond(200, item), respond(200, {"id": "bstm_li_1", "deleted": True})
    )

    await client.billing_statement_line_items.create(
        CreateBillingStatementLineItem("bstm_1", "Consulting", 1500, 2)
    )
    await client.billing_statement_line_items.update(
        "bstm_li_1", UpdateBillingStatementLineItem().with_quantity(4)
    )
    deleted = (await client.billing_statement_line_items.delete("bstm_li_1")).unwrap()

    assert deleted.deleted
    assert _form(transport.calls[1]) == [("quantity", "4")]
    assert [_route(call)[:2] for call in transport.calls] == [
        ("POST", "/billing_statement_line_items"),
        ("PUT", "/billing_statement_line_items/bstm_li_1"),
        ("DELETE", "/billing_statement_line_items/bstm_li_1"),
    ]


@pytest.mark.asyncio
async def test_payout_transactions(client_with):
    body = {
        "data": [
            {"id": "po_txn_1", "amount": 10000, "net_amount": 9750, "transaction_type": "payment", "transaction_id": "pay_1"},
            {"id": "po_txn_2", "amount": -500, "net_amount": -500, "transaction_type": "refund", "transaction_id": "re_1"},
        ],
        "has_more": False,
    }
    client, transport = client_with(respond(200, body))

    page = (await client.payouts.list_transactions("po_1", ListParams(limit=10))).unwrap()

    assert [txn.transaction_type for txn in page] == [PayoutTransactionType.PAYMENT, PayoutTransactionType.REFUND]
    assert page.data[1].amount == -500
    assert _route(transport.calls[0]) == ("GET", "/payouts/po_1/transactions", {"limit": "10"})


@pytest.mark.asyncio
async def test_webhook_management(client_with):
    hook = {
        "id": "wh_1",
        "status": "enabled",
        "url": "https://shop.test/hooks",
        "events": ["payment_intent.succeeded"],
        "secret_key": "whsk_secret",
    }
    client, transport = client_with(
        respond(200, hook),
        respond(200, dict(hook, status="disabled")),
        respond(200, hook),
        respond(200, dict(hook, events=["refund.created"])),
        respond(200, {"data": [hook], "has_more": False}),
    )

    created = (
        await client.webhooks.create(CreateWebhook("https://shop.test/hooks", ["payment_intent.succeeded"]))
    ).unwrap()
    disabled = (await client.webhooks.disable("wh_1")).unwrap()
    await client.webhooks.enable("wh_1")
    await client.webhooks.update("wh_1", UpdateWebhook().with_events(["refund.created"]))
    listed = await client.webhooks.list(WebhookListParams(limit=5).with_url("https://shop.test/hooks"))

    assert created.is_enabled
    assert [webhook.id for webhook in listed.unwrap()] == ["wh_1"]
    assert "whsk_secret" not in repr(created)
    assert disabled.status is WebhookStatus.DISABLED
    assert _form(transport.calls[0]) == [
        ("url", "https://shop.test/hooks"),
        ("events[]", "payment_intent.succeeded"),
    ]
    assert _route(transport.calls[1])[:2] == ("POST", "/webhooks/wh_1/disable")
    assert _route(transport.calls[2])[:2] == ("POST", "/webhooks/wh_1/enable")
    assert _form(transport.calls[3]) == [("events[]", "refund.created")]
    assert _route(transport.calls[4]) == (
        "GET",
        "/webhooks",
        {"limit": "5", "url": "https://shop.test/hooks"},
    )


@pytest.mark.asyncio
async def test_events_keep_unknown_types(client_with):
    body = {
        "data": [
            {"id": "evt_1", "type": "payment_intent.succeeded", "data": {"id": "pi_1"}, "pending_webhooks": 1},
            {"id": "evt_2", "type": "payout.created", "data": {"id": "po_1"}},
        ],
        "has_more": False,
    }
    client, _ = client_with(respond(200, body))

    page = (await client.events.list()).unwrap()

    assert page.data[0].type is EventType.PAYMENT_INTENT_SUCCEEDED
    assert page.data[0].resource_type == "payment_intent"
    assert page.data[1].type == "payout.created"
    assert page.data[1].resource_type == "payout"


@pytest.mark.asyncio
async def test_blank_id_is_rejected_before_sending(client_with):
    client, transport = client_with(respond(200, CUSTOMER))

    with pytest.raises(ValueError):
        await client.customers.retrieve("  ")

    assert transport.calls == []


@pytest.mark.asyncio
async def test_ids_are_path_escaped(client_with):
    client, transport = client_with(respond(200, CUSTOMER))

    await client.customers.retrieve("cus/../1")

    assert transport.calls[0].url.endswith("/customers/cus%2F..%2F1")
