"""
Resource facades and the value types they return.
"""

from .billing_statement_line_items import (
    BillingStatementLineItem,
    BillingStatementLineItems,
    CreateBillingStatementLineItem,
    UpdateBillingStatementLineItem,
)
from .billing_statements import (
    BillingStatement,
    BillingStatements,
    BillingStatementStatus,
    CreateBillingStatement,
    PaymentSettings,
    UpdateBillingStatement,
)
from .checkout_sessions import (
    CheckoutLineItem,
    CheckoutSession,
    CheckoutSessions,
    CheckoutSessionStatus,
    CreateCheckoutSession,
)
from .customers import CreateCustomer, Customer, Customers, UpdateCustomer
from .events import Event, Events, EventType
from .payment_intents import (
    CapturePaymentIntent,
    CreatePaymentIntent,
    NextAction,
    PaymentError,
    PaymentIntent,
    PaymentIntents,
    PaymentIntentStatus,
)
from .payments import (
    Address,
    Billing,
    CardDetails,
    Payment,
    PaymentMethodDetails,
    Payments,
    PaymentStatus,
    UpdatePayment,
)
from .payouts import (
    Payout,
    PayoutDestination,
    Payouts,
    PayoutStatus,
    PayoutTransaction,
    PayoutTransactionType,
)
from .refunds import CreateRefund, Refund, RefundReason, Refunds, RefundStatus, UpdateRefund
from .webhooks import (
    CreateWebhook,
    UpdateWebhook,
    Webhook,
    WebhookListParams,
    Webhooks,
    WebhookStatus,
)

__all__ = [
    "Address",
    "Billing",
    "BillingStatement",
    "BillingStatementLineItem",
    "BillingStatementLineItems",
    "BillingStatementStatus",
    "BillingStatements",
    "CapturePaymentIntent",
    "CardDetails",
    "CheckoutLineItem",
    "CheckoutSession",
    "CheckoutSessionStatus",
    "CheckoutSessions",
    "CreateBillingStatement",
    "CreateBillingStatementLineItem",
    "CreateCheckoutSession",
    "CreateCustomer",
    "CreatePaymentIntent",
    "CreateRefund",
    "CreateWebhook",
    "Customer",
    "Customers",
    "Event",
    "EventType",
    "Events",
    "NextAction",
    "Payment",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentStatus",
    "PaymentIntents",
    "PaymentMethodDetails",
    "PaymentSettings",
    "PaymentStatus",
    "Payments",
    "Payout",
    "PayoutDestination",
    "PayoutStatus",
    "PayoutTransaction",
    "PayoutTransactionType",
    "Payouts",
    "Refund",
    "RefundReason",
    "RefundStatus",
    "Refunds",
    "UpdateBillingStatement",
    "UpdateBillingStatementLineItem",
    "UpdateCustomer",
    "UpdatePayment",
    "UpdateRefund",
    "UpdateWebhook",
    "Webhook",
    "WebhookListParams",
    "WebhookStatus",
    "Webhooks",
]
