"""
Public facade for the PayRex client package.

The most useful pieces are re-exported here so integrators can
``from payrex import ...`` without navigating the package.
"""

from .api import create_client
from .core import (
    VERSION,
    ApiError,
    AuthenticationError,
    Client,
    ClientParameters,
    Config,
    ConfigBuilder,
    ConfigError,
    ConfigurationError,
    DecodingError,
    Environment,
    Failure,
    HttpxTransport,
    NetworkError,
    NetworkErrorKind,
    NotFoundError,
    Outcome,
    PayrexError,
    RateLimitError,
    RequestsTransport,
    ServerError,
    Success,
    UnknownApiError,
    ValidationError,
    build_environment,
    load_config,
    load_env_file,
)
from .resources import (
    CapturePaymentIntent,
    CheckoutLineItem,
    CreateBillingStatement,
    CreateBillingStatementLineItem,
    CreateCheckoutSession,
    CreateCustomer,
    CreatePaymentIntent,
    CreateRefund,
    CreateWebhook,
    PaymentSettings,
    RefundReason,
    UpdateBillingStatement,
    UpdateBillingStatementLineItem,
    UpdateCustomer,
    UpdatePayment,
    UpdateRefund,
    UpdateWebhook,
    WebhookListParams,
)
from .types import (
    CaptureMethod,
    CardOptions,
    Currency,
    ListParams,
    Page,
    PaymentMethod,
    PaymentMethodOptions,
)

__version__ = VERSION

__all__ = (
    "ApiError",
    "AuthenticationError",
    "CaptureMethod",
    "CapturePaymentIntent",
    "CardOptions",
    "CheckoutLineItem",
    "Client",
    "ClientParameters",
    "Config",
    "ConfigBuilder",
    "ConfigError",
    "ConfigurationError",
    "CreateBillingStatement",
    "CreateBillingStatementLineItem",
    "CreateCheckoutSession",
    "CreateCustomer",
    "CreatePaymentIntent",
    "CreateRefund",
    "CreateWebhook",
    "Currency",
    "DecodingError",
    "Environment",
    "Failure",
    "HttpxTransport",
    "ListParams",
    "NetworkError",
    "NetworkErrorKind",
    "NotFoundError",
    "Outcome",
    "Page",
    "PaymentMethod",
    "PaymentMethodOptions",
    "PaymentSettings",
    "PayrexError",
    "RateLimitError",
    "RefundReason",
    "RequestsTransport",
    "ServerError",
    "Success",
    "UnknownApiError",
    "UpdateBillingStatement",
    "UpdateBillingStatementLineItem",
    "UpdateCustomer",
    "UpdatePayment",
    "UpdateRefund",
    "UpdateWebhook",
    "ValidationError",
    "WebhookListParams",
    "__version__",
    "build_environment",
    "create_client",
    "load_config",
    "load_env_file",
)
